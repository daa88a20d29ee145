# keygate/main.py
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from keygate.config import settings
from keygate.core.db import init_db, close_db
from keygate.core.bootstrap import ensure_default_application
from keygate.core.errors import InvalidRequest, KeyGateError, StoreError
from keygate.services.store_factory import get_record_store

from keygate.api.v1.routers import keys

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# CORS (desktop loaders and web panels call from any origin by default)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def on_startup():
    await init_db()
    # Make sure keys without an application scope have something to resolve to
    await ensure_default_application(get_record_store())
    logger.info("[startup] %s ready (env=%s)", settings.APP_NAME, settings.env)

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

@app.exception_handler(KeyGateError)
async def keygate_error_handler(request: Request, exc: KeyGateError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies are reported like missing fields, not as 422
    logger.info("[%s] malformed request body: %s", request.url.path.strip("/"), exc.errors())
    err = InvalidRequest()
    return JSONResponse(status_code=err.status_code, content=err.to_response())

@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("[%s] unexpected error", request.url.path.strip("/"))
    err = StoreError()
    return JSONResponse(status_code=err.status_code, content=err.to_response())

# REST (paths are part of the client protocol, no version prefix)
app.include_router(keys.router)

@app.get("/", response_class=PlainTextResponse)
def index():
    return "Authentication server is running"

@app.get("/healthz")
def healthz():
    return {"ok": True}

def run() -> None:
    """Serve the gateway with uvicorn on the configured host/port."""
    uvicorn.run("keygate.main:app", host=settings.host, port=settings.port)

if __name__ == "__main__":
    run()
