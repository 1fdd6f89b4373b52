"""
Turn exceptions and validation results into API error responses.

Every response body is ``{"message": ..., "code": ...}``; ``details`` is
only added in debug mode. Framework glue decides how to send the
``(status_code, body)`` pair.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from .exceptions import PortfolioQueryError, ValidationError

logger = logging.getLogger(__name__)

ErrorResponse = tuple[int, dict[str, Any]]
DatabaseErrorMapper = Callable[[BaseException], "ErrorResponse | None"]


def validation_response(result: Any) -> ErrorResponse | None:
    """``(400, {"message": ...})`` for a failed validation, else ``None``."""
    if result.is_valid:
        return None
    return 400, {"message": result.message}


def handle_api_error(
    exc: BaseException,
    *,
    debug: bool = False,
    database_mapper: DatabaseErrorMapper | None = None,
) -> ErrorResponse:
    """
    Map *exc* to a status code and body.

    Order: database errors (via *database_mapper*), the package's own
    HTTP-facing errors, then a generic 500.
    """
    if database_mapper is not None:
        mapped = database_mapper(exc)
        if mapped is not None:
            status, body = mapped
            logger.warning("Database error mapped to %s: %s", status, exc)
            if not debug:
                body = {k: v for k, v in body.items() if k != "details"}
            return status, body

    if isinstance(exc, PortfolioQueryError) and exc.status_code < 500:
        body = exc.to_dict()
        if debug and isinstance(exc, ValidationError) and exc.details is not None:
            body["details"] = exc.details
        elif debug and not isinstance(exc, ValidationError):
            body["details"] = repr(exc)
        logger.warning("API error %s: %s", exc.status_code, exc)
        return exc.status_code, body

    logger.error("Unhandled API error: %s", exc, exc_info=exc)
    body = {"message": "Internal Server Error", "code": "INTERNAL_ERROR"}
    if debug:
        body["details"] = {"message": str(exc), "type": type(exc).__name__}
    return 500, body
