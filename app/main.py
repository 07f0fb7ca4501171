import logging
import time

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from tablebrowser.prom import REGISTRY
from app.dependencies import get_browser_service
from app.routers import browser
from app.services.browser_service import BrowserService
from app.settings import get_settings
from app.exception_handlers import register_exception_handlers

# Load .env before Settings are first built.
load_dotenv()

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

# ----------------------------------------------------------------------------
#  App definition
# ----------------------------------------------------------------------------
application = FastAPI(
    title="Table Browser",
    version=settings.app_version,
    description="Generic CRUD views over any table of a SQLite database",
)
register_exception_handlers(application)


# ----------------------------------------------------------------------------
#  Prometheus Metrics Middleware
# ----------------------------------------------------------------------------
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["path", "method", "status_code"],
    registry=REGISTRY,
)
REQUEST_LATENCY = Histogram(
    "http_request_latency_seconds",
    "Request latency (seconds)",
    ["path", "method"],
    registry=REGISTRY,
)


@application.middleware("http")
async def metrics_middleware(request: Request, call_next):
    start = time.perf_counter()
    response: Response = await call_next(request)
    elapsed = time.perf_counter() - start
    route = request.scope.get("route")
    # Route name keeps label cardinality independent of table names.
    name = getattr(route, "name", None) or "unmatched"

    REQUEST_COUNT.labels(
        path=name,
        method=request.method,
        status_code=str(getattr(response, "status_code", 500)),
    ).inc()
    REQUEST_LATENCY.labels(path=name, method=request.method).observe(elapsed)
    return response


# ----------------------------------------------------------------------------
#  System Endpoints (registered before the catch-all /{action} routes)
# ----------------------------------------------------------------------------
@application.get("/healthz", response_class=PlainTextResponse, tags=["system"])
def healthz() -> str:
    return "ok"


@application.get("/readyz", response_class=PlainTextResponse, tags=["system"])
def readyz(svc: BrowserService = Depends(get_browser_service)):
    """Readiness probe: the shared connection must answer SELECT 1."""
    try:
        svc.db.ping()
        return "ready"
    except Exception as exc:
        log.warning("Readiness check failed: %s", exc)
        return PlainTextResponse("not ready", status_code=503)


@application.get("/metrics", tags=["system"])
def metrics():
    data = generate_latest(REGISTRY)
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


application.include_router(browser.router)

app = application
