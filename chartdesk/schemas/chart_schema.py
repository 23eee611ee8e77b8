from datetime import datetime
from typing import Optional, List
from uuid import UUID

from ninja import Schema


class ChartVersionPayload(Schema):
    """Schema for a chart configuration snapshot"""

    table_name: str
    metric_query: dict  # dimensions, metrics, filters, sorts, limit, tableCalculations
    chart_config: dict  # {"type": ..., "config": {...}}
    table_config: dict = {}
    pivot_config: Optional[dict] = None


class ChartCreate(ChartVersionPayload):
    """Schema for creating a saved chart; the snapshot becomes its first version"""

    name: str
    description: Optional[str] = None
    space_uuid: UUID
    dashboard_uuid: Optional[UUID] = None


class ChartUpdate(Schema):
    """Schema for updating chart metadata"""

    name: Optional[str] = None
    description: Optional[str] = None
    space_uuid: Optional[UUID] = None
    # send null to detach the chart from its dashboard
    dashboard_uuid: Optional[UUID] = None


class ChartMultipleUpdateItem(Schema):
    """One entry of a bulk update"""

    uuid: UUID
    name: Optional[str] = None
    description: Optional[str] = None
    space_uuid: Optional[UUID] = None


class ChartAuthor(Schema):
    """Schema for the user who created a version"""

    user_id: int
    first_name: str
    last_name: str
    email: str
    display_name: str


class ChartVersionResponse(Schema):
    """Schema for one version, with its full configuration"""

    version_uuid: UUID
    chart_uuid: UUID
    created_at: datetime
    created_by: Optional[ChartAuthor] = None
    table_name: str
    metric_query: dict
    chart_config: dict
    table_config: dict
    pivot_config: Optional[dict] = None


class ChartVersionSummaryResponse(Schema):
    """Schema for one row of the history list"""

    version_uuid: UUID
    created_at: datetime
    created_by: Optional[ChartAuthor] = None


class ChartHistoryResponse(Schema):
    """Schema for a chart's history; the first entry is the current version"""

    chart_uuid: UUID
    history: List[ChartVersionSummaryResponse]


class SavedChartResponse(Schema):
    """Schema for a saved chart merged with its current version"""

    uuid: UUID
    name: str
    description: Optional[str] = None
    space_uuid: UUID
    space_name: str
    dashboard_uuid: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime
    updated_by: Optional[ChartAuthor] = None
    version_uuid: UUID
    table_name: str
    metric_query: dict
    chart_config: dict
    table_config: dict
    pivot_config: Optional[dict] = None


class SavedChartSummary(Schema):
    """Schema for a chart in list responses"""

    uuid: UUID
    name: str
    description: Optional[str] = None
    space_uuid: UUID
    space_name: str
    dashboard_uuid: Optional[UUID] = None
    updated_at: datetime


class ChartListResponse(Schema):
    """Schema for a page of charts"""

    data: List[SavedChartSummary]
    total: int
    page: int
    page_size: int
    total_pages: int
