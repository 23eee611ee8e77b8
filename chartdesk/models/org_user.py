from django.db import models
from django.contrib.auth.models import User

from chartdesk.models.org import Org
from chartdesk.models.role_based_access import Role


class OrgUser(models.Model):
    """a user within an org"""

    user = models.ForeignKey(User, on_delete=models.CASCADE)
    org = models.ForeignKey(Org, on_delete=models.CASCADE, null=True)
    new_role = models.ForeignKey(Role, on_delete=models.SET_NULL, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    @property
    def display_name(self) -> str:
        """first + last name, falling back to the email"""
        full_name = f"{self.user.first_name} {self.user.last_name}".strip()
        return full_name or self.user.email

    def __str__(self):
        return self.user.email  # pylint: disable=no-member
