"""Test cases for chart and dashboard view endpoints"""

import os
from uuid import uuid4

import django
import pytest
from ninja.errors import HttpError

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "chartdesk.settings")
os.environ["DJANGO_ALLOW_ASYNC_UNSAFE"] = "true"
django.setup()

from django.contrib.auth.models import User

from chartdesk.api.analytics_api import (
    add_chart_view,
    add_dashboard_view,
    get_chart_views,
    get_dashboard_views,
    get_user_activity,
)
from chartdesk.api.saved_chart_api import create_saved_chart
from chartdesk.auth import ACCOUNT_MANAGER_ROLE, GUEST_ROLE
from chartdesk.models.dashboard import Dashboard
from chartdesk.models.org import Org
from chartdesk.models.org_user import OrgUser
from chartdesk.models.role_based_access import Role
from chartdesk.models.space import Space
from chartdesk.schemas.chart_schema import ChartCreate
from chartdesk.tests.api_tests.test_user_org_api import seed_db, mock_request

pytestmark = pytest.mark.django_db


@pytest.fixture
def org():
    org = Org.objects.create(name="Views Org", slug="views-org")
    yield org
    org.delete()


@pytest.fixture
def manager(org, seed_db):
    user = User.objects.create(username="viewsmanager", email="viewsmanager@example.com")
    orguser = OrgUser.objects.create(
        user=user, org=org, new_role=Role.objects.filter(slug=ACCOUNT_MANAGER_ROLE).first()
    )
    yield orguser
    user.delete()


@pytest.fixture
def guest(org, seed_db):
    user = User.objects.create(username="viewsguest", email="viewsguest@example.com")
    orguser = OrgUser.objects.create(
        user=user, org=org, new_role=Role.objects.filter(slug=GUEST_ROLE).first()
    )
    yield orguser
    user.delete()


@pytest.fixture
def space(manager):
    return Space.objects.create(name="Shared", org=manager.org, created_by=manager)


@pytest.fixture
def dashboard(manager, space):
    return Dashboard.objects.create(name="Sales", space=space, org=manager.org, created_by=manager)


@pytest.fixture
def saved_chart(manager, space):
    return create_saved_chart(
        mock_request(manager),
        ChartCreate(
            name="Orders",
            space_uuid=space.uuid,
            table_name="orders",
            metric_query={"dimensions": ["orders_status"], "metrics": [], "limit": 10},
            chart_config={"type": "big_number"},
        ),
    )


def test_chart_views(guest, saved_chart):
    request = mock_request(guest)

    response = get_chart_views(request, saved_chart.uuid)
    assert response.views == 0
    assert response.first_viewed_at is None

    first = add_chart_view(request, saved_chart.uuid)
    second = add_chart_view(request, saved_chart.uuid)

    assert first.views == 1
    assert second.views == 2
    assert second.first_viewed_at == first.first_viewed_at
    assert get_chart_views(request, saved_chart.uuid).views == 2


def test_chart_views_unknown_chart(guest):
    with pytest.raises(HttpError) as excinfo:
        add_chart_view(mock_request(guest), uuid4())
    assert excinfo.value.status_code == 404


def test_dashboard_views(guest, dashboard):
    request = mock_request(guest)
    assert get_dashboard_views(request, dashboard.uuid).views == 0
    assert add_dashboard_view(request, dashboard.uuid).views == 1
    assert get_dashboard_views(request, dashboard.uuid).views == 1


def test_dashboard_views_unknown_dashboard(guest):
    with pytest.raises(HttpError) as excinfo:
        get_dashboard_views(mock_request(guest), uuid4())
    assert excinfo.value.status_code == 404


def test_user_activity(manager, guest, saved_chart):
    add_chart_view(mock_request(guest), saved_chart.uuid)

    response = get_user_activity(mock_request(manager))

    assert response.number_users == 2
    assert response.chart_views[0].name == "Orders"
    assert response.chart_views[0].count == 1
    assert [u.email for u in response.users_most_created_charts] == ["viewsmanager@example.com"]
    assert [u.email for u in response.users_no_charts] == ["viewsguest@example.com"]


def test_user_activity_requires_permission(guest):
    with pytest.raises(HttpError) as excinfo:
        get_user_activity(mock_request(guest))
    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "unauthorized"
