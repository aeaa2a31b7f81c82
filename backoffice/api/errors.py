# backoffice/api/errors.py
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backoffice.core.logging import logger


class APIError(HTTPException):
    """HTTPException com campos extras no corpo de erro (ex: ``orderId: null``)."""

    def __init__(self, status_code: int, detail: str, **extra):
        super().__init__(status_code=status_code, detail=detail)
        self.extra = extra


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    content = {"error": exc.detail}
    content.update(getattr(exc, "extra", {}))
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        content["error"] = "Method not allowed"
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Corpo que não é JSON válido ou parâmetros de rota malformados
    logger.warning(f"Requisição inválida em {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request body"})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Erro não tratado em {request.url.path}: {exc}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc) or "Unknown error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
