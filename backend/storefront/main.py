# storefront/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Configuration and DB
from storefront.config import settings
from storefront.core.db import init_db, close_db
from storefront.core.errors import ServiceError
from storefront.core.bootstrap import purge_expired_sessions

from storefront.api.v1.routers import auth, orders

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# CORS (with Cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("[http] rejected body on %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "invalid request body"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # Never leak internals to the client
    logger.exception("[http] unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content={"error": "internal server error"})


@app.on_event("startup")
async def on_startup():
    await init_db()
    # Drop sessions that outlived the cookie max age while we were down
    await purge_expired_sessions()


@app.on_event("shutdown")
async def on_shutdown():
    await close_db()


# REST
app.include_router(auth.router)
app.include_router(orders.router)


@app.get("/health")
def health():
    return {"ok": True}


def run() -> None:
    import uvicorn

    uvicorn.run("storefront.main:app", host=settings.host, port=settings.port)
