"""Login endpoint; issues the bearer tokens the other routers authenticate with"""

from django.contrib.auth import authenticate
from ninja import Router
from ninja.errors import HttpError
from rest_framework_simplejwt.tokens import RefreshToken

from chartdesk.models.org_user import OrgUser
from chartdesk.schemas.auth_schema import LoginPayload, OrgSummary, TokenResponse
from chartdesk.utils.custom_logger import CustomLogger

logger = CustomLogger("chartdesk")

user_org_router = Router()


@user_org_router.post("/login/", response=TokenResponse, auth=None)
def post_login(request, payload: LoginPayload):
    """exchange username + password for an access and a refresh token"""
    user = authenticate(username=payload.username, password=payload.password)
    if user is None:
        logger.warning(f"failed login for {payload.username}")
        raise HttpError(401, "invalid credentials")

    orgusers = OrgUser.objects.filter(user=user, org__isnull=False).select_related("org")
    refresh = RefreshToken.for_user(user)

    logger.info(f"login for {user.email}")
    return TokenResponse(
        access=str(refresh.access_token),
        refresh=str(refresh),
        orgs=[OrgSummary(slug=ou.org.slug, name=ou.org.name) for ou in orgusers],
    )
