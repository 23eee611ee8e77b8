"""Maps service and database exceptions raised under an endpoint onto http errors"""

from functools import wraps

from django.db import DatabaseError, IntegrityError
from ninja.errors import HttpError

from chartdesk.models.append_only import ImmutableRecordError
from chartdesk.services.errors import (
    ChartNotFoundError,
    ChartPermissionError,
    ChartServiceError,
    ChartStoreUnavailableError,
    ChartValidationError,
    ChartVersionNotFoundError,
    DashboardNotFoundError,
    SpaceNotFoundError,
)
from chartdesk.utils.custom_logger import CustomLogger

logger = CustomLogger("chartdesk.api")

NOT_FOUND_ERRORS = (
    ChartNotFoundError,
    ChartVersionNotFoundError,
    SpaceNotFoundError,
    DashboardNotFoundError,
)


def handle_chart_errors(func):
    """
    404 for anything not found, 400 for bad configs, 403 for ownership checks,
    503 when the store is down and 409 for writes the store refuses
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except HttpError:
            raise
        except NOT_FOUND_ERRORS as err:
            logger.warning(f"{func.__name__}: {err.message}")
            raise HttpError(404, err.message) from err
        except ChartValidationError as err:
            logger.warning(f"{func.__name__} rejected config: {err.message}")
            raise HttpError(400, err.message) from err
        except ChartPermissionError as err:
            logger.warning(f"{func.__name__} denied: {err.message}")
            raise HttpError(403, err.message) from err
        except ChartStoreUnavailableError as err:
            raise HttpError(503, err.message) from err
        except ChartServiceError as err:
            logger.error(f"{func.__name__} failed [{err.error_code}]: {err.message}")
            raise HttpError(400, err.message) from err
        except ImmutableRecordError as err:
            logger.error(f"{func.__name__} tried to rewrite history: {err}")
            raise HttpError(409, str(err)) from err
        except IntegrityError as err:
            logger.error(f"{func.__name__} hit an integrity error: {err}", exc_info=True)
            raise HttpError(409, "A conflicting record already exists") from err
        except DatabaseError as err:
            logger.error(f"{func.__name__} hit a database error: {err}", exc_info=True)
            raise HttpError(500, "Database error occurred") from err

    return wrapper
