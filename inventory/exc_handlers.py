import logging

from fastapi import Request, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory.templating import templates

logger = logging.getLogger(__name__)

ERROR_TEMPLATES = {
    status.HTTP_403_FORBIDDEN: "403.html",
    status.HTTP_404_NOT_FOUND: "404.html",
}


def setup_exception_handlers(app):
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        template = ERROR_TEMPLATES.get(exc.status_code)
        if template is not None:
            # unset when no route matched, so the page shows the signed-out menu
            ctx = getattr(request.state, "ctx", None)
            return templates.TemplateResponse(
                request,
                template,
                {"detail": exc.detail, "username": ctx.username if ctx else None},
                status_code=exc.status_code,
            )
        return PlainTextResponse(
            str(exc.detail), status_code=exc.status_code, headers=exc.headers
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Unhandled database error: {type(exc).__name__}: {exc}")
        return PlainTextResponse(
            "A database error occurred.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
