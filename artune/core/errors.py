"""
Error types and handlers shared by all modules.

Endpoints stand in for the pages of the web client, so an error can carry
where the client should go next: ``redirect_to`` for guards (e.g. back to
``/login``) and ``back_link`` for not-found views.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PageError(HTTPException):
    def __init__(
        self,
        status_code: int,
        detail: str,
        redirect_to: Optional[str] = None,
        back_link: Optional[str] = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.redirect_to = redirect_to
        self.back_link = back_link


def error_message(exc: Exception, fallback: str) -> str:
    """Human readable message from a Supabase/PostgREST error, or ``fallback``."""
    message = getattr(exc, "message", None) or str(exc)
    return message or fallback


def _validation_message(error: Dict[str, Any]) -> str:
    msg = error.get("msg", "Invalid value")
    # pydantic prefixes messages raised from validators
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return msg


async def page_error_handler(request: Request, exc: PageError) -> JSONResponse:
    content: Dict[str, Any] = {"detail": exc.detail}
    if exc.redirect_to:
        content["redirect_to"] = exc.redirect_to
    if exc.back_link:
        content["back_link"] = exc.back_link
    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Flatten pydantic errors into a single inline message plus per-field messages."""
    errors = exc.errors()
    logger.warning("Validation error at %s: %s", request.url.path, [e.get("msg") for e in errors])
    field_errors: Dict[str, str] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field_errors[".".join(loc) or "__root__"] = _validation_message(err)
    detail = _validation_message(errors[0]) if errors else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": detail, "field_errors": field_errors},
    )
