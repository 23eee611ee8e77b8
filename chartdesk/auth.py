"""Bearer-token authentication and role-based permission checks for the api"""

from functools import wraps

from django.contrib.auth.models import User
from ninja.errors import HttpError
from ninja.security import HttpBearer
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from chartdesk.models.org_user import OrgUser
from chartdesk.utils.custom_logger import CustomLogger

logger = CustomLogger("chartdesk")

UNAUTHORIZED = "unauthorized"
INVALID_TOKEN = "Invalid or expired token"

# role slugs, as seeded by fixtures/001_roles.json
ACCOUNT_MANAGER_ROLE = "account-manager"
ANALYST_ROLE = "analyst"
GUEST_ROLE = "guest"

# picks the org for users who belong to several
ORG_HEADER = "x-chartdesk-org"


def has_permission(permission_slugs: list):
    """
    endpoint decorator; runs the endpoint only if request.permissions, set by
    CustomJwtAuthMiddleware, contains every one of permission_slugs.
    a missing permission looks the same as a missing route
    """
    required = set(permission_slugs)

    def decorator(api_endpoint):
        @wraps(api_endpoint)
        def wrapper(request, *args, **kwargs):
            granted = set(getattr(request, "permissions", None) or [])
            if not required.issubset(granted):
                raise HttpError(404, UNAUTHORIZED)
            return api_endpoint(request, *args, **kwargs)

        return wrapper

    return decorator


def get_permissions_for_orguser(orguser: OrgUser) -> list:
    """permission slugs granted by the orguser's role; none without a role"""
    if orguser.new_role is None:
        return []
    return orguser.new_role.permission_slugs()


class CustomJwtAuthMiddleware(HttpBearer):
    """resolves the bearer token to an OrgUser and attaches it to the request"""

    def authenticate(self, request, token=None):
        if not token:
            raise HttpError(401, "No authentication token provided")

        try:
            user_id = AccessToken(token).payload.get("user_id")
        except TokenError as err:
            logger.warning(f"rejected token: {err}")
            raise HttpError(401, INVALID_TOKEN) from err

        user = User.objects.filter(id=user_id, is_active=True).first() if user_id else None
        if user is None:
            raise HttpError(401, INVALID_TOKEN)

        orgusers = OrgUser.objects.filter(user=user).select_related("org", "user", "new_role")
        org_slug = request.headers.get(ORG_HEADER)
        if org_slug:
            orgusers = orgusers.filter(org__slug=org_slug)
        orguser = orgusers.first()
        if orguser is None:
            raise HttpError(401, UNAUTHORIZED)
        if orguser.org is None:
            raise HttpError(400, "register an organization first")

        request.user = user
        request.orguser = orguser
        request.permissions = get_permissions_for_orguser(orguser)
        request.token = token
        return request
