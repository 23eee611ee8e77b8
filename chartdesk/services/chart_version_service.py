"""Chart version store

Versions are append-only. Saving a chart, updating it and rolling it back all
end in ChartVersionService.append_version; nothing here updates or deletes an
existing version. A chart's current configuration is not stored anywhere: it
is whichever version has the latest created_at.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone

from chartdesk.core.charts.chart_validator import ChartValidator
from chartdesk.models.chart import ChartVersion, SavedChart
from chartdesk.models.org import Org
from chartdesk.models.org_user import OrgUser
from chartdesk.services.errors import (
    ChartNotFoundError,
    ChartValidationError,
    ChartVersionNotFoundError,
    translate_store_errors,
)
from chartdesk.utils.custom_logger import CustomLogger

logger = CustomLogger("chartdesk.chart_version_service")

# payload columns left out of history listings
SNAPSHOT_COLUMNS = ["metric_query", "chart_config", "table_config", "pivot_config"]


@dataclass
class ChartVersionData:
    """A configuration snapshot to be stored as a new version"""

    table_name: str
    metric_query: dict
    chart_config: dict
    table_config: dict = field(default_factory=dict)
    pivot_config: Optional[dict] = None

    @classmethod
    def from_version(cls, version: ChartVersion) -> "ChartVersionData":
        """snapshot of an existing version"""
        return cls(**version.config_snapshot())

    def as_dict(self) -> dict:
        """deep copy, so the stored version never aliases the caller's dicts"""
        return copy.deepcopy(
            {
                "table_name": self.table_name,
                "metric_query": self.metric_query,
                "chart_config": self.chart_config,
                "table_config": self.table_config if self.table_config is not None else {},
                "pivot_config": self.pivot_config,
            }
        )


@dataclass
class ChartVersionAuthor:
    """Who created a version"""

    user_id: int
    first_name: str
    last_name: str
    email: str
    display_name: str


@dataclass
class ChartVersionSummary:
    """One row of a chart's history, without the configuration payload"""

    version_uuid: UUID
    chart_uuid: UUID
    created_at: datetime
    created_by: Optional[ChartVersionAuthor]

    @classmethod
    def from_version(cls, version: ChartVersion, chart_uuid: UUID) -> "ChartVersionSummary":
        author = None
        if version.created_by is not None:
            user = version.created_by.user
            author = ChartVersionAuthor(
                user_id=user.id,
                first_name=user.first_name,
                last_name=user.last_name,
                email=user.email,
                display_name=version.created_by.display_name,
            )
        return cls(
            version_uuid=version.uuid,
            chart_uuid=chart_uuid,
            created_at=version.created_at,
            created_by=author,
        )


class ChartVersionService:
    """Create, read and roll back chart versions"""

    @staticmethod
    def _get_chart(chart_uuid, org: Org) -> SavedChart:
        try:
            return SavedChart.objects.get(uuid=chart_uuid, org=org)
        except (SavedChart.DoesNotExist, DjangoValidationError, ValueError):
            raise ChartNotFoundError(chart_uuid)

    @staticmethod
    def _next_created_at(chart: SavedChart) -> datetime:
        """now, or one microsecond after the chart's latest version if the clock hasn't moved past it"""
        now = timezone.now()
        latest = (
            ChartVersion.objects.filter(chart=chart)
            .order_by("-created_at")
            .values_list("created_at", flat=True)
            .first()
        )
        if latest is not None and now <= latest:
            return latest + timedelta(microseconds=1)
        return now

    @staticmethod
    def append_version(
        chart: SavedChart, data: ChartVersionData, orguser: Optional[OrgUser], validate: bool = True
    ) -> ChartVersion:
        """Append a version to a chart that has already been looked up.

        Args:
            chart: The chart the version belongs to
            data: The configuration snapshot
            orguser: The author, supplied by the caller
            validate: Run the config validator before writing

        Returns:
            The new ChartVersion

        Raises:
            ChartValidationError: If validate is set and the snapshot is malformed
        """
        snapshot = data.as_dict()
        if validate:
            is_valid, error_message = ChartValidator.validate_chart_version(**snapshot)
            if not is_valid:
                raise ChartValidationError(error_message)

        with transaction.atomic():
            created_at = ChartVersionService._next_created_at(chart)
            version = ChartVersion.objects.create(
                chart=chart, created_by=orguser, created_at=created_at, **snapshot
            )
            SavedChart.objects.filter(pk=chart.pk).update(updated_at=created_at)

        logger.info(f"Appended version {version.uuid} to chart {chart.uuid}")
        return version

    @staticmethod
    @translate_store_errors
    def create_version(
        chart_uuid, org: Org, data: ChartVersionData, orguser: Optional[OrgUser]
    ) -> ChartVersion:
        """Store a new immutable version for a chart.

        Raises:
            ChartNotFoundError: If the chart doesn't exist in the org
            ChartValidationError: If the snapshot is malformed; nothing is written
        """
        chart = ChartVersionService._get_chart(chart_uuid, org)
        return ChartVersionService.append_version(chart, data, orguser)

    @staticmethod
    @translate_store_errors
    def get_version(chart_uuid, version_uuid, org: Org) -> ChartVersion:
        """Get one version with its full configuration.

        Raises:
            ChartVersionNotFoundError: If the version doesn't exist or belongs to another chart
        """
        try:
            return ChartVersion.objects.select_related("chart", "created_by__user").get(
                uuid=version_uuid, chart__uuid=chart_uuid, chart__org=org
            )
        except (ChartVersion.DoesNotExist, DjangoValidationError, ValueError):
            raise ChartVersionNotFoundError(chart_uuid, version_uuid)

    @staticmethod
    @translate_store_errors
    def list_history(chart_uuid, org: Org, limit: Optional[int] = None) -> List[ChartVersionSummary]:
        """Versions of a chart, newest first. The first entry is the current version.

        A chart that doesn't exist in the org has an empty history. The full
        history is returned unless the caller passes a limit.
        """
        try:
            versions = (
                ChartVersion.objects.filter(chart__uuid=chart_uuid, chart__org=org)
                .select_related("created_by__user")
                .defer(*SNAPSHOT_COLUMNS)
                .order_by("-created_at", "-id")
            )
            if limit is not None:
                versions = versions[:limit]
            return [ChartVersionSummary.from_version(v, chart_uuid) for v in versions]
        except (DjangoValidationError, ValueError):
            return []

    @staticmethod
    @translate_store_errors
    def get_current_version(chart_uuid, org: Org) -> ChartVersion:
        """The version with the latest created_at.

        Raises:
            ChartNotFoundError: If the chart doesn't exist in the org
        """
        chart = ChartVersionService._get_chart(chart_uuid, org)
        version = chart.latest_version()
        if version is None:
            # a chart is created together with its first version
            raise ChartNotFoundError(chart_uuid)
        return version

    @staticmethod
    @translate_store_errors
    def rollback(chart_uuid, version_uuid, org: Org, orguser: Optional[OrgUser]) -> ChartVersion:
        """Restore a historical version by appending a copy of it.

        The target version is only read. The copy gets a new uuid and timestamp
        and becomes the current version.

        Raises:
            ChartVersionNotFoundError: If the target doesn't belong to the chart
        """
        target = ChartVersionService.get_version(chart_uuid, version_uuid, org)
        # the snapshot was validated when it was first stored
        version = ChartVersionService.append_version(
            target.chart, ChartVersionData.from_version(target), orguser, validate=False
        )
        logger.info(f"Rolled back chart {chart_uuid} to version {version_uuid} as {version.uuid}")
        return version
