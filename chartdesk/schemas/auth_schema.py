from typing import List

from ninja import Schema


class LoginPayload(Schema):
    """Schema for obtaining tokens"""

    username: str
    password: str


class OrgSummary(Schema):
    slug: str
    name: str


class TokenResponse(Schema):
    """Schema for issued tokens"""

    access: str
    refresh: str
    orgs: List[OrgSummary]
