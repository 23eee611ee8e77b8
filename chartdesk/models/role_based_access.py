"""Roles and permissions. Rows are seeded from chartdesk/fixtures; nothing in the app writes them."""

from django.db import models


class Role(models.Model):
    """an orguser's role in their org: account-manager, analyst or guest"""

    uuid = models.UUIDField(editable=False, unique=True)
    slug = models.CharField(max_length=255, unique=True)
    name = models.CharField(max_length=255)

    def __str__(self):
        return f"Role[{self.slug}]"

    def permission_slugs(self) -> list:
        """slugs of every permission granted to this role"""
        return list(self.role_permissions.values_list("permission__slug", flat=True))


class Permission(models.Model):
    """one capability checked by has_permission, e.g. can_edit_charts"""

    uuid = models.UUIDField(editable=False, unique=True)
    slug = models.CharField(max_length=255, unique=True)
    name = models.CharField(max_length=255)

    def __str__(self):
        return f"Permission[{self.slug}]"


class RolePermission(models.Model):
    """grants a permission to a role"""

    role = models.ForeignKey(Role, on_delete=models.CASCADE, related_name="role_permissions")
    permission = models.ForeignKey(Permission, on_delete=models.CASCADE)

    class Meta:
        unique_together = ("role", "permission")

    def __str__(self):
        return f"{self.role.slug} -> {self.permission.slug}"
