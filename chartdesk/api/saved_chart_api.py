"""Saved chart API endpoints: chart CRUD, version history and rollback"""

from dataclasses import asdict
from typing import List, Optional
from uuid import UUID

from ninja import Router

from chartdesk.api.charts_error_handling import handle_chart_errors
from chartdesk.auth import has_permission
from chartdesk.models.chart import ChartVersion, SavedChart
from chartdesk.models.org_user import OrgUser
from chartdesk.schemas.chart_schema import (
    ChartAuthor,
    ChartCreate,
    ChartHistoryResponse,
    ChartListResponse,
    ChartMultipleUpdateItem,
    ChartUpdate,
    ChartVersionPayload,
    ChartVersionResponse,
    ChartVersionSummaryResponse,
    SavedChartResponse,
    SavedChartSummary,
)
from chartdesk.services.chart_service import (
    UNSET,
    ChartData,
    ChartMetadataUpdate,
    ChartService,
)
from chartdesk.services.chart_version_service import ChartVersionData, ChartVersionService
from chartdesk.utils.custom_logger import CustomLogger

logger = CustomLogger("chartdesk")

saved_chart_router = Router()


def author_response(orguser: Optional[OrgUser]) -> Optional[ChartAuthor]:
    """the public fields of a version's author"""
    if orguser is None:
        return None
    return ChartAuthor(
        user_id=orguser.user.id,
        first_name=orguser.user.first_name,
        last_name=orguser.user.last_name,
        email=orguser.user.email,
        display_name=orguser.display_name,
    )


def version_data_from_payload(payload: ChartVersionPayload) -> ChartVersionData:
    return ChartVersionData(
        table_name=payload.table_name,
        metric_query=payload.metric_query,
        chart_config=payload.chart_config,
        table_config=payload.table_config,
        pivot_config=payload.pivot_config,
    )


def version_response(version: ChartVersion) -> ChartVersionResponse:
    return ChartVersionResponse(
        version_uuid=version.uuid,
        chart_uuid=version.chart.uuid,
        created_at=version.created_at,
        created_by=author_response(version.created_by),
        **version.config_snapshot(),
    )


def saved_chart_response(chart: SavedChart, version: ChartVersion) -> SavedChartResponse:
    """a chart's metadata merged with the configuration of its current version"""
    return SavedChartResponse(
        **ChartService.chart_summary(chart),
        created_at=chart.created_at,
        updated_by=author_response(version.created_by),
        version_uuid=version.uuid,
        **version.config_snapshot(),
    )


@saved_chart_router.get("/", response=ChartListResponse)
@has_permission(["can_view_charts"])
@handle_chart_errors
def list_saved_charts(
    request, page: int = 1, page_size: int = 10, search: str = None, space_uuid: UUID = None
):
    """List charts for the organization with pagination and filtering"""
    orguser: OrgUser = request.orguser

    # Validate pagination parameters
    if page < 1:
        page = 1
    if page_size < 1 or page_size > 100:
        page_size = 10

    charts, total = ChartService.list_charts(
        orguser.org, page=page, page_size=page_size, search=search, space_uuid=space_uuid
    )
    total_pages = (total + page_size - 1) // page_size  # Ceiling division

    return ChartListResponse(
        data=[SavedChartSummary(**ChartService.chart_summary(chart)) for chart in charts],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
    )


@saved_chart_router.post("/", response=SavedChartResponse)
@has_permission(["can_create_charts"])
@handle_chart_errors
def create_saved_chart(request, payload: ChartCreate):
    """Create a new chart; its configuration is stored as the first version"""
    orguser: OrgUser = request.orguser

    chart, version = ChartService.create_chart(
        ChartData(
            name=payload.name,
            description=payload.description,
            space_uuid=payload.space_uuid,
            dashboard_uuid=payload.dashboard_uuid,
            version=version_data_from_payload(payload),
        ),
        orguser,
    )
    return saved_chart_response(chart, version)


@saved_chart_router.patch("/", response=List[SavedChartSummary])
@has_permission(["can_edit_charts"])
@handle_chart_errors
def update_multiple_saved_charts(request, payload: List[ChartMultipleUpdateItem]):
    """Update the metadata of several charts at once"""
    orguser: OrgUser = request.orguser

    charts = ChartService.update_multiple_charts(
        orguser.org,
        [
            ChartMetadataUpdate(
                chart_uuid=item.uuid,
                name=item.name,
                description=item.description,
                space_uuid=item.space_uuid,
            )
            for item in payload
        ],
    )
    return [SavedChartSummary(**ChartService.chart_summary(chart)) for chart in charts]


@saved_chart_router.get("/{chart_uuid}/", response=SavedChartResponse)
@has_permission(["can_view_charts"])
@handle_chart_errors
def get_saved_chart(request, chart_uuid: UUID):
    """Get a chart with its current configuration"""
    orguser: OrgUser = request.orguser

    chart, version = ChartService.get_chart_with_current_version(chart_uuid, orguser.org)
    return saved_chart_response(chart, version)


@saved_chart_router.patch("/{chart_uuid}/", response=SavedChartResponse)
@has_permission(["can_edit_charts"])
@handle_chart_errors
def update_saved_chart(request, chart_uuid: UUID, payload: ChartUpdate):
    """Update chart metadata; does not create a version"""
    orguser: OrgUser = request.orguser

    dashboard_uuid = payload.dashboard_uuid if "dashboard_uuid" in payload.model_fields_set else UNSET
    ChartService.update_chart(
        chart_uuid,
        orguser.org,
        name=payload.name,
        description=payload.description,
        space_uuid=payload.space_uuid,
        dashboard_uuid=dashboard_uuid,
    )
    chart, version = ChartService.get_chart_with_current_version(chart_uuid, orguser.org)
    return saved_chart_response(chart, version)


@saved_chart_router.delete("/{chart_uuid}/")
@has_permission(["can_delete_charts"])
@handle_chart_errors
def delete_saved_chart(request, chart_uuid: UUID):
    """Delete a chart and its history"""
    orguser: OrgUser = request.orguser

    ChartService.delete_chart(chart_uuid, orguser.org, orguser)
    return {"success": True}


@saved_chart_router.post("/{chart_uuid}/duplicate/", response=SavedChartResponse)
@has_permission(["can_create_charts"])
@handle_chart_errors
def duplicate_saved_chart(request, chart_uuid: UUID):
    """Copy a chart's current configuration into a new chart"""
    orguser: OrgUser = request.orguser

    chart, version = ChartService.duplicate_chart(chart_uuid, orguser.org, orguser)
    return saved_chart_response(chart, version)


@saved_chart_router.post("/{chart_uuid}/version/", response=SavedChartResponse)
@has_permission(["can_edit_charts"])
@handle_chart_errors
def add_saved_chart_version(request, chart_uuid: UUID, payload: ChartVersionPayload):
    """Save a new configuration; it becomes the current version"""
    orguser: OrgUser = request.orguser

    chart, version = ChartService.add_version(
        chart_uuid, orguser.org, version_data_from_payload(payload), orguser
    )
    return saved_chart_response(chart, version)


@saved_chart_router.get("/{chart_uuid}/history/", response=ChartHistoryResponse)
@has_permission(["can_view_charts"])
@handle_chart_errors
def get_saved_chart_history(request, chart_uuid: UUID):
    """All versions of a chart, newest first"""
    orguser: OrgUser = request.orguser

    # 404 for charts outside the org rather than an empty list
    ChartService.get_chart(chart_uuid, orguser.org)
    history = ChartVersionService.list_history(chart_uuid, orguser.org)

    return ChartHistoryResponse(
        chart_uuid=chart_uuid,
        history=[
            ChartVersionSummaryResponse(
                version_uuid=summary.version_uuid,
                created_at=summary.created_at,
                created_by=ChartAuthor(**asdict(summary.created_by)) if summary.created_by else None,
            )
            for summary in history
        ],
    )


@saved_chart_router.get("/{chart_uuid}/version/{version_uuid}/", response=ChartVersionResponse)
@has_permission(["can_view_charts"])
@handle_chart_errors
def get_saved_chart_version(request, chart_uuid: UUID, version_uuid: UUID):
    """One version with its full configuration"""
    orguser: OrgUser = request.orguser

    version = ChartVersionService.get_version(chart_uuid, version_uuid, orguser.org)
    return version_response(version)


@saved_chart_router.post("/{chart_uuid}/rollback/{version_uuid}/", response=ChartVersionResponse)
@has_permission(["can_edit_charts"])
@handle_chart_errors
def rollback_saved_chart(request, chart_uuid: UUID, version_uuid: UUID):
    """Restore a historical version by appending a copy of it"""
    orguser: OrgUser = request.orguser

    version = ChartVersionService.rollback(chart_uuid, version_uuid, orguser.org, orguser)
    logger.info(f"{orguser.user.email} reverted chart {chart_uuid} to {version_uuid}")
    return version_response(version)
