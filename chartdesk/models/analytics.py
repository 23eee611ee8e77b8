"""View events for charts and dashboards. Append-only."""

from django.db import models
from django.utils import timezone

from chartdesk.models.append_only import AppendOnlyModel
from chartdesk.models.chart import SavedChart
from chartdesk.models.dashboard import Dashboard
from chartdesk.models.org_user import OrgUser


class AnalyticsChartView(AppendOnlyModel):
    """one row per time a user opened a saved chart"""

    chart = models.ForeignKey(SavedChart, on_delete=models.CASCADE, related_name="views")
    user = models.ForeignKey(OrgUser, on_delete=models.SET_NULL, null=True)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "analytics_chart_views"
        indexes = [
            models.Index(fields=["chart", "timestamp"], name="chart_view_chart_ts"),
        ]


class AnalyticsDashboardView(AppendOnlyModel):
    """one row per time a user opened a dashboard"""

    dashboard = models.ForeignKey(Dashboard, on_delete=models.CASCADE, related_name="views")
    user = models.ForeignKey(OrgUser, on_delete=models.SET_NULL, null=True)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "analytics_dashboard_views"
        indexes = [
            models.Index(fields=["dashboard", "timestamp"], name="dashboard_view_dash_ts"),
        ]
