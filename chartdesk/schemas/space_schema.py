from datetime import datetime
from typing import Optional
from uuid import UUID

from ninja import Schema


class SpaceCreate(Schema):
    """Schema for creating a space"""

    name: str
    is_private: bool = False


class SpaceResponse(Schema):
    """Schema for space response"""

    uuid: UUID
    name: str
    is_private: bool
    created_at: datetime


class DashboardCreate(Schema):
    """Schema for creating a dashboard"""

    name: str
    description: Optional[str] = None
    space_uuid: UUID


class DashboardResponse(Schema):
    """Schema for dashboard response"""

    uuid: UUID
    name: str
    description: Optional[str] = None
    space_uuid: UUID
    created_at: datetime
    updated_at: datetime
