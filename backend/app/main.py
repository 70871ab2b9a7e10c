import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from app.core.settings import settings
from app.core.errors import FinanceError

from app.api.user import router as user_router
from app.api.profile import router as profile_router
from app.api.account import router as account_router
from app.api.category import router as category_router
from app.api.transaction import router as transaction_router
from app.api.audit import router as audit_router


logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
)

app.include_router(user_router)
app.include_router(profile_router)
app.include_router(account_router)
app.include_router(category_router)
app.include_router(transaction_router)
app.include_router(audit_router)


# Todo erro sai como {"error": "..."}; detalhe interno so no log.

@app.exception_handler(FinanceError)
def _finance_error(request: Request, exc: FinanceError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(HTTPException)
def _http_error(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
def _validation_error(request: Request, exc: RequestValidationError):
    details = [
        {"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Dados incompletos ou invalidos", "details": details},
    )


@app.exception_handler(SQLAlchemyError)
def _db_error(request: Request, exc: SQLAlchemyError):
    logger.exception("DB error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Erro interno"})


@app.exception_handler(Exception)
def _unexpected_error(request: Request, exc: Exception):
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Erro interno"})


@app.get("/health")
def health():
    return {
        "ok": True,
        "service": "financas-api",
        "env": settings.ENV,
        "version": app.version,
    }
