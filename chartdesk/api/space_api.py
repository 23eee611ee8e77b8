"""Space and dashboard endpoints; the containers saved charts live in"""

from typing import List
from uuid import UUID

from ninja import Router

from chartdesk.api.charts_error_handling import handle_chart_errors
from chartdesk.auth import has_permission
from chartdesk.models.dashboard import Dashboard
from chartdesk.models.org_user import OrgUser
from chartdesk.models.space import Space
from chartdesk.schemas.space_schema import (
    DashboardCreate,
    DashboardResponse,
    SpaceCreate,
    SpaceResponse,
)
from chartdesk.services.chart_service import ChartService
from chartdesk.utils.custom_logger import CustomLogger

logger = CustomLogger("chartdesk")

space_router = Router()
dashboard_router = Router()


def dashboard_response(dashboard: Dashboard) -> DashboardResponse:
    return DashboardResponse(
        uuid=dashboard.uuid,
        name=dashboard.name,
        description=dashboard.description,
        space_uuid=dashboard.space.uuid,
        created_at=dashboard.created_at,
        updated_at=dashboard.updated_at,
    )


@space_router.get("/", response=List[SpaceResponse])
@has_permission(["can_view_spaces"])
def list_spaces(request):
    """Spaces of the org"""
    orguser: OrgUser = request.orguser
    return list(Space.objects.filter(org=orguser.org).order_by("name"))


@space_router.post("/", response=SpaceResponse)
@has_permission(["can_create_spaces"])
def create_space(request, payload: SpaceCreate):
    """Create a space"""
    orguser: OrgUser = request.orguser

    space = Space.objects.create(
        name=payload.name, is_private=payload.is_private, org=orguser.org, created_by=orguser
    )
    logger.info(f"Created space {space.uuid} for org {orguser.org.slug}")
    return space


@dashboard_router.get("/", response=List[DashboardResponse])
@has_permission(["can_view_dashboards"])
def list_dashboards(request):
    """Dashboards of the org"""
    orguser: OrgUser = request.orguser
    dashboards = Dashboard.objects.filter(org=orguser.org).select_related("space")
    return [dashboard_response(d) for d in dashboards]


@dashboard_router.get("/{dashboard_uuid}/", response=DashboardResponse)
@has_permission(["can_view_dashboards"])
@handle_chart_errors
def get_dashboard(request, dashboard_uuid: UUID):
    """Get a specific dashboard"""
    orguser: OrgUser = request.orguser
    return dashboard_response(ChartService.get_dashboard(dashboard_uuid, orguser.org))


@dashboard_router.post("/", response=DashboardResponse)
@has_permission(["can_create_dashboards"])
@handle_chart_errors
def create_dashboard(request, payload: DashboardCreate):
    """Create a new dashboard in a space"""
    orguser: OrgUser = request.orguser

    space = ChartService.get_space(payload.space_uuid, orguser.org)
    dashboard = Dashboard.objects.create(
        name=payload.name,
        description=payload.description,
        space=space,
        org=orguser.org,
        created_by=orguser,
    )
    logger.info(f"Created dashboard {dashboard.uuid} for org {orguser.org.slug}")
    return dashboard_response(dashboard)
