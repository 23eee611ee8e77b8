"""The chartdesk NinjaAPI: every router mounted under /api/ behind bearer-token auth"""

from ninja import NinjaAPI
from ninja.errors import ValidationError
from ninja.responses import Response
from pydantic import ValidationError as PydanticValidationError

from chartdesk.api.analytics_api import analytics_router
from chartdesk.api.saved_chart_api import saved_chart_router
from chartdesk.api.space_api import dashboard_router, space_router
from chartdesk.api.user_org_api import user_org_router
from chartdesk.auth import CustomJwtAuthMiddleware
from chartdesk.utils.custom_logger import CustomLogger

logger = CustomLogger("chartdesk")

src_api = NinjaAPI(
    urls_namespace="api",
    title="chartdesk",
    description="Saved charts, chart history and view analytics",
    docs_url="/api/docs",
    auth=CustomJwtAuthMiddleware(),
)


@src_api.exception_handler(ValidationError)
def request_validation_error_handler(request, exc):  # pylint: disable=unused-argument
    """a request body, path or query param failed schema validation"""
    return Response({"detail": exc.errors}, status=422)


@src_api.exception_handler(PydanticValidationError)
def response_validation_error_handler(
    request, exc: PydanticValidationError
):  # pylint: disable=unused-argument
    """a response schema could not be built from what an endpoint returned; this is our bug"""
    logger.error(f"response validation failed on {request.path}: {exc}")
    return Response({"detail": exc.errors()}, status=500)


@src_api.exception_handler(Exception)
def unhandled_error_handler(request, exc: Exception):
    logger.exception(f"unhandled error on {request.path}: {exc}")
    return Response({"detail": "something went wrong"}, status=500)


# sections in the generated docs
analytics_router.tags = ["Analytics"]
dashboard_router.tags = ["Dashboards"]
saved_chart_router.tags = ["Saved charts"]
space_router.tags = ["Spaces"]
user_org_router.tags = ["Login"]

src_api.add_router("/api/analytics/", analytics_router)
src_api.add_router("/api/dashboards/", dashboard_router)
src_api.add_router("/api/saved/", saved_chart_router)
src_api.add_router("/api/spaces/", space_router)
src_api.add_router("/api/", user_org_router)
