import os
from unittest.mock import Mock

import django
import pytest
from ninja.errors import HttpError

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "chartdesk.settings")
os.environ["DJANGO_ALLOW_ASYNC_UNSAFE"] = "true"
django.setup()

from django.contrib.auth.models import User
from rest_framework_simplejwt.tokens import AccessToken

from chartdesk.auth import (
    ACCOUNT_MANAGER_ROLE,
    GUEST_ROLE,
    ORG_HEADER,
    CustomJwtAuthMiddleware,
    get_permissions_for_orguser,
    has_permission,
)
from chartdesk.models.org import Org
from chartdesk.models.org_user import OrgUser
from chartdesk.models.role_based_access import Role
from chartdesk.tests.api_tests.test_user_org_api import seed_db

pytestmark = pytest.mark.django_db


@pytest.fixture
def mock_request():
    request = Mock()
    request.headers = {}
    return request


@pytest.fixture
def mock_user():
    user = User.objects.create_user(username="testuser", password="testpassword")
    yield user
    user.delete()


@pytest.fixture
def mock_org():
    org = Org.objects.create(name="Test Org", slug="test-org")
    yield org
    org.delete()


@pytest.fixture
def mock_org_user(mock_user, mock_org, seed_db):
    org_user = OrgUser.objects.create(
        user=mock_user,
        org=mock_org,
        new_role=Role.objects.filter(slug=ACCOUNT_MANAGER_ROLE).first(),
    )
    yield org_user
    org_user.delete()


def test_authenticate_success(mock_request, mock_user, mock_org_user):
    """valid token, no org header: the user's first org is used"""
    token = str(AccessToken.for_user(mock_user))

    middleware = CustomJwtAuthMiddleware()
    result = middleware.authenticate(mock_request, token)

    assert result == mock_request
    assert result.user == mock_user
    assert result.orguser == mock_org_user
    assert "can_view_analytics" in result.permissions
    assert result.token == token


def test_authenticate_with_org_header(mock_request, mock_user, mock_org_user, seed_db):
    other_org = Org.objects.create(name="Second Org", slug="second-org")
    second = OrgUser.objects.create(
        user=mock_user, org=other_org, new_role=Role.objects.filter(slug=GUEST_ROLE).first()
    )
    mock_request.headers[ORG_HEADER] = "second-org"

    result = CustomJwtAuthMiddleware().authenticate(mock_request, str(AccessToken.for_user(mock_user)))

    assert result.orguser == second
    assert "can_edit_charts" not in result.permissions


def test_authenticate_org_header_not_a_member(mock_request, mock_user, mock_org_user):
    mock_request.headers[ORG_HEADER] = "someone-elses-org"
    with pytest.raises(HttpError) as excinfo:
        CustomJwtAuthMiddleware().authenticate(mock_request, str(AccessToken.for_user(mock_user)))
    assert excinfo.value.status_code == 401


def test_authenticate_invalid_token(mock_request):
    middleware = CustomJwtAuthMiddleware()
    with pytest.raises(HttpError) as excinfo:
        middleware.authenticate(mock_request, "invalid-token")
    assert excinfo.value.status_code == 401
    assert str(excinfo.value) == "Invalid or expired token"


def test_authenticate_no_token(mock_request):
    with pytest.raises(HttpError) as excinfo:
        CustomJwtAuthMiddleware().authenticate(mock_request, None)
    assert excinfo.value.status_code == 401


def test_authenticate_no_org(mock_request, mock_user):
    OrgUser.objects.create(user=mock_user, org=None)
    with pytest.raises(HttpError) as excinfo:
        CustomJwtAuthMiddleware().authenticate(mock_request, str(AccessToken.for_user(mock_user)))
    assert excinfo.value.status_code == 400
    assert str(excinfo.value) == "register an organization first"


def test_authenticate_inactive_user(mock_request, mock_user, mock_org_user):
    token = str(AccessToken.for_user(mock_user))
    mock_user.is_active = False
    mock_user.save()
    with pytest.raises(HttpError) as excinfo:
        CustomJwtAuthMiddleware().authenticate(mock_request, token)
    assert excinfo.value.status_code == 401


def test_get_permissions_without_role(mock_user, mock_org):
    orguser = OrgUser.objects.create(user=mock_user, org=mock_org)
    assert get_permissions_for_orguser(orguser) == []


def test_has_permission():
    @has_permission(["can_view_charts", "can_edit_charts"])
    def endpoint(request):
        return "ok"

    allowed = Mock(permissions=["can_view_charts", "can_edit_charts", "can_delete_charts"])
    assert endpoint(allowed) == "ok"

    denied = Mock(permissions=["can_view_charts"])
    with pytest.raises(HttpError) as excinfo:
        endpoint(denied)
    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "unauthorized"
