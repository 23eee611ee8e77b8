from django.db import models


class Org(models.Model):
    """an organization; everything a user creates belongs to exactly one"""

    name = models.CharField(max_length=50)
    slug = models.CharField(max_length=20, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"Org[{self.slug}|{self.name}]"
