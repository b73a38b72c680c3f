import logging
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import links
from .config import settings
from .core.errors import ErrorKind, LinkError
from .database import init_db
from .schemas.link import HealthResponse

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create database tables
init_db()

STARTED_AT = time.monotonic()

# Initialize FastAPI app
app = FastAPI(
    title="Short Links",
    description="Short-code link directory with click counting",
    version=settings.APP_VERSION
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_STATUS = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.CODE_TAKEN: 409,
    ErrorKind.GENERATION_EXHAUSTED: 500,
    ErrorKind.STORAGE_FAILURE: 500,
}


async def link_error_handler(request: Request, exc: LinkError):
    """Translate directory errors into JSON error responses"""
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.kind, 500),
        content={"error": exc.message}
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 with the first problem found"""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"{field}: {first['msg']}" if field else first["msg"]
    return JSONResponse(status_code=400, content={"error": message})


app.add_exception_handler(LinkError, link_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

# Include routers
app.include_router(links.router, tags=["links"])


# Health check endpoint
@app.get("/healthz", response_model=HealthResponse)
@app.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return HealthResponse(
        ok=True,
        version=settings.APP_VERSION,
        uptime=time.monotonic() - STARTED_AT,
        timestamp=datetime.now(timezone.utc)
    )


# Redirect endpoint (must be last to not conflict with other routes)
app.get("/{short_code}", tags=["redirect"])(links.redirect_to_url)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
