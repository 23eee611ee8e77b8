"""Dashboard models"""

import uuid

from django.db import models

from chartdesk.models.org import Org
from chartdesk.models.org_user import OrgUser
from chartdesk.models.space import Space


class Dashboard(models.Model):
    """A dashboard groups saved charts; charts may optionally belong to one"""

    id = models.BigAutoField(primary_key=True)
    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    space = models.ForeignKey(Space, on_delete=models.CASCADE, related_name="dashboards")
    org = models.ForeignKey(Org, on_delete=models.CASCADE)
    created_by = models.ForeignKey(
        OrgUser, on_delete=models.SET_NULL, null=True, related_name="created_dashboards"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "dashboards"
        ordering = ["-updated_at"]

    def __str__(self):
        return f"{self.name} ({self.space.name})"
