import uuid

from django.db import models

from chartdesk.models.org import Org
from chartdesk.models.org_user import OrgUser


class Space(models.Model):
    """a folder of charts and dashboards inside an org"""

    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    name = models.CharField(max_length=255)
    org = models.ForeignKey(Org, on_delete=models.CASCADE, related_name="spaces")
    is_private = models.BooleanField(default=False)
    created_by = models.ForeignKey(
        OrgUser, on_delete=models.SET_NULL, null=True, related_name="created_spaces"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "spaces"
        ordering = ["name"]

    def __str__(self):
        return f"Space[{self.name}|{self.org.slug}]"
