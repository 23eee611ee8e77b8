"""Exceptions raised by the chart services

The API layer maps these onto http status codes; the services themselves never
recover from them.
"""

from functools import wraps

from django.db import InterfaceError, OperationalError

from chartdesk.utils.custom_logger import CustomLogger

logger = CustomLogger("chartdesk.services")


class ChartServiceError(Exception):
    """Base exception for chart service errors"""

    def __init__(self, message: str, error_code: str = "CHART_ERROR"):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class ChartNotFoundError(ChartServiceError):
    """Raised when chart is not found"""

    def __init__(self, chart_uuid):
        super().__init__(f"Chart with uuid {chart_uuid} not found", "CHART_NOT_FOUND")
        self.chart_uuid = chart_uuid


class ChartVersionNotFoundError(ChartServiceError):
    """Raised when a version does not exist or belongs to another chart"""

    def __init__(self, chart_uuid, version_uuid):
        super().__init__(
            f"Version {version_uuid} not found for chart {chart_uuid}", "CHART_VERSION_NOT_FOUND"
        )
        self.chart_uuid = chart_uuid
        self.version_uuid = version_uuid


class SpaceNotFoundError(ChartServiceError):
    """Raised when the space a chart should live in does not exist"""

    def __init__(self, space_uuid):
        super().__init__(f"Space with uuid {space_uuid} not found", "SPACE_NOT_FOUND")
        self.space_uuid = space_uuid


class DashboardNotFoundError(ChartServiceError):
    """Raised when a dashboard does not exist"""

    def __init__(self, dashboard_uuid):
        super().__init__(f"Dashboard with uuid {dashboard_uuid} not found", "DASHBOARD_NOT_FOUND")
        self.dashboard_uuid = dashboard_uuid


class ChartValidationError(ChartServiceError):
    """Raised when chart validation fails"""

    def __init__(self, message: str):
        super().__init__(message, "VALIDATION_ERROR")


class ChartPermissionError(ChartServiceError):
    """Raised when user doesn't have permission"""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message, "PERMISSION_DENIED")


class ChartStoreUnavailableError(ChartServiceError):
    """Raised when the database cannot be reached; safe for the caller to retry"""

    def __init__(self, message: str = "Chart store is unavailable, please try again"):
        super().__init__(message, "STORE_UNAVAILABLE")


def translate_store_errors(func):
    """Turn connection-level database failures into ChartStoreUnavailableError"""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as err:
            logger.error(f"Chart store unavailable in {func.__name__}: {str(err)}", exc_info=True)
            raise ChartStoreUnavailableError() from err

    return wrapper
