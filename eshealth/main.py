import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.requests import Request

from eshealth.core.config import settings
from eshealth.core.logging_config import configure_logging
from eshealth.api.routers import health
from eshealth.services.probe import ElasticsearchHealthCheck
from eshealth.services.registry import ClientRegistry

API_VERSION = "0.1.0"

tags_metadata = [
    {"name": "health", "description": "Elasticsearch health check endpoint."},
]

log = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    registry = ClientRegistry()
    app.state.registry = registry
    app.state.registration = settings.registration()
    app.state.health_check = ElasticsearchHealthCheck(settings.elasticsearch_options(), registry)
    log.info("Health check %s targets %s", app.state.registration.name, settings.ES_URI)
    try:
        yield
    finally:
        await registry.close()


# Public base path the API is exposed under (e.g. /api behind the load balancer).
public_api_base = settings.API_BASE_PATH.rstrip("/") or "/"

app = FastAPI(
    title="Elasticsearch health check",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=tags_metadata,
    servers=[{"url": public_api_base}],
    lifespan=lifespan,
)


@app.middleware("http")
async def add_api_marker(request: Request, call_next):
    resp = await call_next(request)
    resp.headers["x-es-healthcheck"] = "Python FastAPI"
    resp.headers["x-es-healthcheck-version"] = API_VERSION
    return resp


app.include_router(health.router)


@app.get("/")
def root():
    return {"ok": True}


# return a generic JSON error instead of internal messages/logs and capture the trace in the log
@app.exception_handler(Exception)
async def json_errors(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "internal_server_error"})
