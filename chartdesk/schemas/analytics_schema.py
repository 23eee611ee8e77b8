from datetime import datetime
from typing import Dict, List, Optional

from ninja import Schema


class ViewStatisticsResponse(Schema):
    """Schema for chart view statistics"""

    views: int
    first_viewed_at: Optional[datetime] = None


class DashboardViewsResponse(Schema):
    """Schema for dashboard view count"""

    views: int


class UserWithCountResponse(Schema):
    user_id: int
    first_name: str
    last_name: str
    email: str
    count: int


class ContentViewsResponse(Schema):
    uuid: str
    name: str
    count: int


class UserActivityResponse(Schema):
    """Schema for the org usage overview"""

    number_users: int
    users_by_role: Dict[str, int]
    chart_views: List[ContentViewsResponse]
    dashboard_views: List[ContentViewsResponse]
    users_most_created_charts: List[UserWithCountResponse]
    users_no_charts: List[UserWithCountResponse]
