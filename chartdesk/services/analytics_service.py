"""View tracking and usage statistics for charts and dashboards"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from django.db.models import Count, Min

from chartdesk.models.analytics import AnalyticsChartView, AnalyticsDashboardView
from chartdesk.models.org import Org
from chartdesk.models.org_user import OrgUser
from chartdesk.services.chart_service import ChartService
from chartdesk.services.errors import translate_store_errors
from chartdesk.utils.custom_logger import CustomLogger

logger = CustomLogger("chartdesk.analytics_service")

TOP_N = 10


@dataclass
class ViewStatistics:
    """views is the number of recorded events, first_viewed_at the earliest; None before any view"""

    views: int
    first_viewed_at: Optional[datetime]


@dataclass
class UserWithCount:
    user_id: int
    first_name: str
    last_name: str
    email: str
    count: int


@dataclass
class ContentViews:
    uuid: str
    name: str
    count: int


@dataclass
class UserActivity:
    """Usage overview for an org"""

    number_users: int
    users_by_role: Dict[str, int]
    chart_views: List[ContentViews] = field(default_factory=list)
    dashboard_views: List[ContentViews] = field(default_factory=list)
    users_most_created_charts: List[UserWithCount] = field(default_factory=list)
    users_no_charts: List[UserWithCount] = field(default_factory=list)


class AnalyticsService:
    """Append-only view events and the aggregations derived from them"""

    @staticmethod
    @translate_store_errors
    def add_chart_view_event(chart_uuid, orguser: OrgUser) -> AnalyticsChartView:
        """Record that orguser opened a chart.

        Raises:
            ChartNotFoundError: If the chart doesn't exist in the user's org
        """
        chart = ChartService.get_chart(chart_uuid, orguser.org)
        event = AnalyticsChartView.objects.create(chart=chart, user=orguser)
        logger.info(f"Recorded view of chart {chart.uuid}")
        return event

    @staticmethod
    @translate_store_errors
    def get_chart_view_stats(chart_uuid, org: Org) -> ViewStatistics:
        """Number of views and the time of the first one"""
        chart = ChartService.get_chart(chart_uuid, org)
        stats = AnalyticsChartView.objects.filter(chart=chart).aggregate(
            views=Count("id"), first_viewed_at=Min("timestamp")
        )
        return ViewStatistics(views=stats["views"] or 0, first_viewed_at=stats["first_viewed_at"])

    @staticmethod
    @translate_store_errors
    def add_dashboard_view_event(dashboard_uuid, orguser: OrgUser) -> AnalyticsDashboardView:
        """Record that orguser opened a dashboard.

        Raises:
            DashboardNotFoundError: If the dashboard doesn't exist in the user's org
        """
        dashboard = ChartService.get_dashboard(dashboard_uuid, orguser.org)
        event = AnalyticsDashboardView.objects.create(dashboard=dashboard, user=orguser)
        logger.info(f"Recorded view of dashboard {dashboard.uuid}")
        return event

    @staticmethod
    @translate_store_errors
    def count_dashboard_views(dashboard_uuid, org: Org) -> int:
        """Number of recorded views of a dashboard"""
        dashboard = ChartService.get_dashboard(dashboard_uuid, org)
        return AnalyticsDashboardView.objects.filter(dashboard=dashboard).count()

    @staticmethod
    def _user_with_count(orguser: OrgUser) -> UserWithCount:
        return UserWithCount(
            user_id=orguser.user.id,
            first_name=orguser.user.first_name,
            last_name=orguser.user.last_name,
            email=orguser.user.email,
            count=orguser.version_count,
        )

    @staticmethod
    @translate_store_errors
    def get_user_activity(org: Org) -> UserActivity:
        """Who uses the org's charts and dashboards, and which are viewed most"""
        orgusers = OrgUser.objects.filter(org=org).select_related("user", "new_role")

        users_by_role: Dict[str, int] = {}
        for orguser in orgusers:
            role_slug = orguser.new_role.slug if orguser.new_role else "none"
            users_by_role[role_slug] = users_by_role.get(role_slug, 0) + 1

        chart_views = (
            AnalyticsChartView.objects.filter(chart__org=org)
            .values("chart__uuid", "chart__name")
            .annotate(count=Count("id"))
            .order_by("-count", "chart__name")[:TOP_N]
        )
        dashboard_views = (
            AnalyticsDashboardView.objects.filter(dashboard__org=org)
            .values("dashboard__uuid", "dashboard__name")
            .annotate(count=Count("id"))
            .order_by("-count", "dashboard__name")[:TOP_N]
        )

        with_counts = orgusers.annotate(version_count=Count("created_chart_versions"))
        most_created = with_counts.filter(version_count__gt=0).order_by(
            "-version_count", "user__email"
        )[:TOP_N]
        no_charts = with_counts.filter(version_count=0).order_by("user__email")

        return UserActivity(
            number_users=len(orgusers),
            users_by_role=users_by_role,
            chart_views=[
                ContentViews(uuid=str(row["chart__uuid"]), name=row["chart__name"], count=row["count"])
                for row in chart_views
            ],
            dashboard_views=[
                ContentViews(
                    uuid=str(row["dashboard__uuid"]), name=row["dashboard__name"], count=row["count"]
                )
                for row in dashboard_views
            ],
            users_most_created_charts=[AnalyticsService._user_with_count(u) for u in most_created],
            users_no_charts=[AnalyticsService._user_with_count(u) for u in no_charts],
        )
