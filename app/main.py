import logging

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from contextlib import asynccontextmanager  # noqa: E402

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402

from app.api.base import api_router  # noqa: E402
from app.db.session import init_db  # noqa: E402
from app.features.timer.schemas import ValidationErrorResponse, to_field_errors  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Database tables ready")
    yield


app = FastAPI(
    title="Work/Play Timer API",
    description="Session store for the work/play balance timer",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Specify your frontend URL in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 with per-field messages"""
    body = ValidationErrorResponse(errors=to_field_errors(exc.errors()))
    logger.info(f"Rejected {request.method} {request.url.path}: {len(body.errors)} invalid field(s)")
    return JSONResponse(status_code=400, content=body.model_dump())


# Include all API routes
app.include_router(api_router)


@app.get("/")
def read_root():
    return {
        "message": "Work/Play Timer API",
        "docs": "/docs",
        "version": "1.0.0"
    }
