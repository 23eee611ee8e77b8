"""Saved chart models

A SavedChart holds the metadata that can be edited in place (name, space, ...).
Its configuration lives in ChartVersion rows: every save appends a version and
the chart's current configuration is the version with the latest created_at.
"""

import uuid

from django.db import models
from django.utils import timezone

from chartdesk.models.append_only import AppendOnlyModel
from chartdesk.models.dashboard import Dashboard
from chartdesk.models.org import Org
from chartdesk.models.org_user import OrgUser
from chartdesk.models.space import Space

# keys of the configuration snapshot stored on every version
CONFIG_SNAPSHOT_FIELDS = ["table_name", "metric_query", "chart_config", "table_config", "pivot_config"]


class SavedChart(models.Model):
    """A named, saved query + visualization"""

    id = models.BigAutoField(primary_key=True)
    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)

    space = models.ForeignKey(Space, on_delete=models.CASCADE, related_name="saved_charts")
    dashboard = models.ForeignKey(
        Dashboard, on_delete=models.SET_NULL, null=True, blank=True, related_name="saved_charts"
    )
    org = models.ForeignKey(Org, on_delete=models.CASCADE)
    created_by = models.ForeignKey(
        OrgUser, on_delete=models.SET_NULL, null=True, related_name="created_charts"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "saved_charts"
        ordering = ["-updated_at"]

    def __str__(self):
        return f"{self.name} ({self.uuid})"

    def latest_version(self):
        """the current version: the one created last. None only while the chart is being created"""
        return self.versions.order_by("-created_at", "-id").first()


class ChartVersion(AppendOnlyModel):
    """An immutable snapshot of a chart's configuration"""

    id = models.BigAutoField(primary_key=True)
    uuid = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    chart = models.ForeignKey(SavedChart, on_delete=models.CASCADE, related_name="versions")

    # configuration snapshot
    table_name = models.CharField(max_length=255)
    metric_query = models.JSONField(help_text="dimensions, metrics, filters, sorts, limit")
    chart_config = models.JSONField(help_text="visualization type and its settings")
    table_config = models.JSONField(default=dict, help_text="column order for the results table")
    pivot_config = models.JSONField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    created_by = models.ForeignKey(
        OrgUser, on_delete=models.SET_NULL, null=True, related_name="created_chart_versions"
    )

    class Meta:
        db_table = "saved_chart_versions"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["chart", "created_at"], name="chart_version_chart_created"),
        ]

    def __str__(self):
        return f"ChartVersion[{self.uuid}|{self.chart_id}|{self.created_at.isoformat()}]"

    def config_snapshot(self) -> dict:
        """the stored configuration as a plain dict"""
        return {field: getattr(self, field) for field in CONFIG_SNAPSHOT_FIELDS}
