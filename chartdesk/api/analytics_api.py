"""Chart and dashboard view tracking endpoints"""

from dataclasses import asdict
from uuid import UUID

from ninja import Router

from chartdesk.api.charts_error_handling import handle_chart_errors
from chartdesk.auth import has_permission
from chartdesk.models.org_user import OrgUser
from chartdesk.schemas.analytics_schema import (
    DashboardViewsResponse,
    UserActivityResponse,
    ViewStatisticsResponse,
)
from chartdesk.services.analytics_service import AnalyticsService

analytics_router = Router()


@analytics_router.post("/charts/{chart_uuid}/views/", response=ViewStatisticsResponse)
@has_permission(["can_view_charts"])
@handle_chart_errors
def add_chart_view(request, chart_uuid: UUID):
    """Record a view of a chart and return the updated statistics"""
    orguser: OrgUser = request.orguser

    AnalyticsService.add_chart_view_event(chart_uuid, orguser)
    stats = AnalyticsService.get_chart_view_stats(chart_uuid, orguser.org)
    return ViewStatisticsResponse(views=stats.views, first_viewed_at=stats.first_viewed_at)


@analytics_router.get("/charts/{chart_uuid}/views/", response=ViewStatisticsResponse)
@has_permission(["can_view_charts"])
@handle_chart_errors
def get_chart_views(request, chart_uuid: UUID):
    """View count and first view of a chart"""
    orguser: OrgUser = request.orguser

    stats = AnalyticsService.get_chart_view_stats(chart_uuid, orguser.org)
    return ViewStatisticsResponse(views=stats.views, first_viewed_at=stats.first_viewed_at)


@analytics_router.post("/dashboards/{dashboard_uuid}/views/", response=DashboardViewsResponse)
@has_permission(["can_view_dashboards"])
@handle_chart_errors
def add_dashboard_view(request, dashboard_uuid: UUID):
    """Record a view of a dashboard and return the updated count"""
    orguser: OrgUser = request.orguser

    AnalyticsService.add_dashboard_view_event(dashboard_uuid, orguser)
    return DashboardViewsResponse(
        views=AnalyticsService.count_dashboard_views(dashboard_uuid, orguser.org)
    )


@analytics_router.get("/dashboards/{dashboard_uuid}/views/", response=DashboardViewsResponse)
@has_permission(["can_view_dashboards"])
@handle_chart_errors
def get_dashboard_views(request, dashboard_uuid: UUID):
    """View count of a dashboard"""
    orguser: OrgUser = request.orguser

    return DashboardViewsResponse(
        views=AnalyticsService.count_dashboard_views(dashboard_uuid, orguser.org)
    )


@analytics_router.get("/user-activity/", response=UserActivityResponse)
@has_permission(["can_view_analytics"])
@handle_chart_errors
def get_user_activity(request):
    """Usage overview for the org"""
    orguser: OrgUser = request.orguser

    return UserActivityResponse(**asdict(AnalyticsService.get_user_activity(orguser.org)))
