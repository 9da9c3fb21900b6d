import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from tubetutor.api.artifacts import router as artifacts_router
from tubetutor.api.deps import get_transcript_cache
from tubetutor.api.transcripts import router as transcripts_router
from tubetutor.core.errors import TubeTutorError
from tubetutor.core.logging import configure_logging, get_logger, log_api_request

configure_logging()
logger = get_logger(__name__)

app = FastAPI(title="TubeTutor API", version="0.1.0")
app.include_router(artifacts_router)
app.include_router(transcripts_router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    log_api_request(request)
    response = await call_next(request)
    duration = time.time() - start
    response.headers["X-Process-Time"] = str(duration)
    log_api_request(request, response, duration)
    return response


@app.exception_handler(TubeTutorError)
async def tubetutor_error_handler(request: Request, exc: TubeTutorError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "request_failed",
        path=request.url.path,
        status_code=exc.status_code,
        error_type=type(exc).__name__,
        message=str(exc),
    )
    return JSONResponse(status_code=exc.status_code, content=exc.envelope())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request_crashed", path=request.url.path, error_type=type(exc).__name__)
    return JSONResponse(status_code=500, content=TubeTutorError(str(exc)).envelope())


class HealthResponse(BaseModel):
    ok: bool
    service: str
    version: str
    cache: dict


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    try:
        cache = get_transcript_cache().stats()
    except Exception as e:
        logger.warning("health_cache_unreachable", error=str(e))
        cache = {"backend": "unknown", "error": str(e)}
    return HealthResponse(ok=True, service="api", version=app.version, cache=cache)
