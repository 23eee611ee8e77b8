"""Chart service for business logic

This module encapsulates saved-chart operations, separating them from the API
layer for better testability. Configuration changes are delegated to the
version store in chart_version_service; this module only edits chart metadata
in place.
"""

from typing import Dict, List, Optional, Tuple, Any
from dataclasses import dataclass

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Q

from chartdesk.models.chart import ChartVersion, SavedChart
from chartdesk.models.dashboard import Dashboard
from chartdesk.models.org import Org
from chartdesk.models.org_user import OrgUser
from chartdesk.models.space import Space
from chartdesk.services.chart_version_service import ChartVersionData, ChartVersionService
from chartdesk.services.errors import (
    ChartNotFoundError,
    ChartPermissionError,
    ChartValidationError,
    DashboardNotFoundError,
    SpaceNotFoundError,
    translate_store_errors,
)
from chartdesk.utils.custom_logger import CustomLogger

logger = CustomLogger("chartdesk.chart_service")

# sentinel for "leave unchanged" where None is itself a meaningful value
UNSET = object()


@dataclass
class ChartData:
    """Data class for chart creation payloads"""

    name: str
    space_uuid: Any
    version: ChartVersionData
    description: Optional[str] = None
    dashboard_uuid: Any = None


@dataclass
class ChartMetadataUpdate:
    """One entry of a bulk metadata update"""

    chart_uuid: Any
    name: Optional[str] = None
    description: Optional[str] = None
    space_uuid: Any = None


class ChartService:
    """Service class for saved-chart operations"""

    @staticmethod
    @translate_store_errors
    def get_chart(chart_uuid, org: Org) -> SavedChart:
        """Get a chart by uuid for an organization.

        Raises:
            ChartNotFoundError: If chart doesn't exist or doesn't belong to org
        """
        try:
            return SavedChart.objects.select_related("space", "dashboard", "created_by__user").get(
                uuid=chart_uuid, org=org
            )
        except (SavedChart.DoesNotExist, DjangoValidationError, ValueError):
            raise ChartNotFoundError(chart_uuid)

    @staticmethod
    @translate_store_errors
    def get_space(space_uuid, org: Org) -> Space:
        """Get a space by uuid for an organization.

        Raises:
            SpaceNotFoundError: If the space doesn't exist in the org
        """
        try:
            return Space.objects.get(uuid=space_uuid, org=org)
        except (Space.DoesNotExist, DjangoValidationError, ValueError):
            raise SpaceNotFoundError(space_uuid)

    @staticmethod
    @translate_store_errors
    def get_dashboard(dashboard_uuid, org: Org) -> Dashboard:
        """Get a dashboard by uuid for an organization.

        Raises:
            DashboardNotFoundError: If the dashboard doesn't exist in the org
        """
        try:
            return Dashboard.objects.get(uuid=dashboard_uuid, org=org)
        except (Dashboard.DoesNotExist, DjangoValidationError, ValueError):
            raise DashboardNotFoundError(dashboard_uuid)

    @staticmethod
    @translate_store_errors
    def get_chart_with_current_version(chart_uuid, org: Org) -> Tuple[SavedChart, ChartVersion]:
        """A chart together with the version that is current right now"""
        chart = ChartService.get_chart(chart_uuid, org)
        version = chart.latest_version()
        if version is None:
            raise ChartNotFoundError(chart_uuid)
        return chart, version

    @staticmethod
    @translate_store_errors
    def list_charts(
        org: Org,
        page: int = 1,
        page_size: int = 10,
        search: Optional[str] = None,
        space_uuid: Optional[str] = None,
    ) -> Tuple[List[SavedChart], int]:
        """List charts for an organization with pagination and filtering.

        Args:
            org: The organization
            page: Page number (1-indexed)
            page_size: Number of items per page
            search: Optional search term (searches name and description)
            space_uuid: Optional filter by space

        Returns:
            Tuple of (charts list, total count)
        """
        query = Q(org=org)

        if search:
            query &= Q(name__icontains=search) | Q(description__icontains=search)

        if space_uuid:
            query &= Q(space=ChartService.get_space(space_uuid, org))

        queryset = (
            SavedChart.objects.filter(query)
            .select_related("space", "dashboard", "created_by__user")
            .order_by("-updated_at")
        )
        total = queryset.count()

        # Apply pagination
        offset = (page - 1) * page_size
        charts = list(queryset[offset : offset + page_size])

        return charts, total

    @staticmethod
    @translate_store_errors
    def create_chart(data: ChartData, orguser: OrgUser) -> Tuple[SavedChart, ChartVersion]:
        """Create a new chart and its first version.

        Raises:
            SpaceNotFoundError: If the target space doesn't exist
            ChartValidationError: If the name is empty or the configuration is invalid
        """
        name = (data.name or "").strip()
        if not name:
            raise ChartValidationError("Chart name is required")

        space = ChartService.get_space(data.space_uuid, orguser.org)
        dashboard = None
        if data.dashboard_uuid:
            dashboard = ChartService.get_dashboard(data.dashboard_uuid, orguser.org)

        with transaction.atomic():
            chart = SavedChart.objects.create(
                name=name,
                description=data.description,
                space=space,
                dashboard=dashboard,
                org=orguser.org,
                created_by=orguser,
            )
            # a validation error here rolls back the chart row too
            version = ChartVersionService.append_version(chart, data.version, orguser)

        logger.info(f"Created chart {chart.uuid} for org {orguser.org.slug}")
        return chart, version

    @staticmethod
    @translate_store_errors
    def add_version(
        chart_uuid, org: Org, data: ChartVersionData, orguser: OrgUser
    ) -> Tuple[SavedChart, ChartVersion]:
        """Save a new configuration for an existing chart"""
        version = ChartVersionService.create_version(chart_uuid, org, data, orguser)
        return ChartService.get_chart(chart_uuid, org), version

    @staticmethod
    @translate_store_errors
    def update_chart(
        chart_uuid,
        org: Org,
        name: Optional[str] = None,
        description: Optional[str] = None,
        space_uuid: Optional[str] = None,
        dashboard_uuid=UNSET,
    ) -> SavedChart:
        """Update chart metadata. The configuration and its history are not touched.

        Pass dashboard_uuid=None to detach a chart from its dashboard.

        Raises:
            ChartNotFoundError: If chart doesn't exist
            SpaceNotFoundError: If the new space doesn't exist
            ChartValidationError: If the new name is empty
        """
        chart = ChartService.get_chart(chart_uuid, org)

        if name is not None:
            if not name.strip():
                raise ChartValidationError("Chart name is required")
            chart.name = name.strip()
        if description is not None:
            chart.description = description
        if space_uuid is not None:
            chart.space = ChartService.get_space(space_uuid, org)
        if dashboard_uuid is not UNSET:
            chart.dashboard = (
                ChartService.get_dashboard(dashboard_uuid, org) if dashboard_uuid else None
            )

        chart.save()

        logger.info(f"Updated chart {chart.uuid}")
        return chart

    @staticmethod
    def move_chart(chart_uuid, org: Org, space_uuid) -> SavedChart:
        """Move a chart into another space"""
        return ChartService.update_chart(chart_uuid, org, space_uuid=space_uuid)

    @staticmethod
    @translate_store_errors
    def update_multiple_charts(org: Org, updates: List[ChartMetadataUpdate]) -> List[SavedChart]:
        """Apply several metadata updates; either all of them land or none do"""
        with transaction.atomic():
            charts = [
                ChartService.update_chart(
                    update.chart_uuid,
                    org,
                    name=update.name,
                    description=update.description,
                    space_uuid=update.space_uuid,
                )
                for update in updates
            ]

        logger.info(f"Updated {len(charts)} charts in org {org.slug}")
        return charts

    @staticmethod
    @translate_store_errors
    def duplicate_chart(chart_uuid, org: Org, orguser: OrgUser) -> Tuple[SavedChart, ChartVersion]:
        """Create a new chart whose first version copies the source's current configuration"""
        source, source_version = ChartService.get_chart_with_current_version(chart_uuid, org)

        with transaction.atomic():
            chart = SavedChart.objects.create(
                name=f"Copy of {source.name}",
                description=source.description,
                space=source.space,
                dashboard=source.dashboard,
                org=org,
                created_by=orguser,
            )
            version = ChartVersionService.append_version(
                chart, ChartVersionData.from_version(source_version), orguser, validate=False
            )

        logger.info(f"Duplicated chart {source.uuid} as {chart.uuid}")
        return chart, version

    @staticmethod
    @translate_store_errors
    def delete_chart(chart_uuid, org: Org, orguser: OrgUser) -> bool:
        """Delete a chart together with its whole history.

        Raises:
            ChartNotFoundError: If chart doesn't exist
            ChartPermissionError: If user didn't create the chart
        """
        chart = ChartService.get_chart(chart_uuid, org)

        # Only allow deletion if the current user is the creator
        if chart.created_by_id != orguser.id:
            raise ChartPermissionError("You can only delete charts you created.")

        chart_name = chart.name
        chart.delete()

        logger.info(f"Deleted chart '{chart_name}' ({chart_uuid}) by {orguser.user.email}")
        return True

    @staticmethod
    def chart_summary(chart: SavedChart) -> Dict[str, Any]:
        """metadata used in list responses"""
        return {
            "uuid": chart.uuid,
            "name": chart.name,
            "description": chart.description,
            "space_uuid": chart.space.uuid,
            "space_name": chart.space.name,
            "dashboard_uuid": chart.dashboard.uuid if chart.dashboard else None,
            "updated_at": chart.updated_at,
        }
