import logging
import traceback
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from starlette.middleware.cors import CORSMiddleware

from src.routers import template_import
from src.database import Base, engine
from src.middleware.error_logging import ErrorLoggingMiddleware
from src.core.settings import get_import_settings
from src.core.exceptions import (
    BaseApplicationException,
    ValidationException
)

settings = get_import_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
    yield


app = FastAPI(
    title="Clinic Task Template Import API",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add error logging middleware
app.add_middleware(ErrorLoggingMiddleware, log_requests=True, log_responses=False)

# ============================================================================
# GLOBAL EXCEPTION HANDLERS
# ============================================================================

def _import_request_context(request: Request) -> dict:
    """Clinica, utente e request id della richiesta di import"""
    return {
        "path": request.url.path,
        "method": request.method,
        "clinic_id": request.query_params.get("clinic_id"),
        "user_id": request.headers.get("x-user-id"),
        "request_id": request.headers.get("x-request-id"),
    }


@app.exception_handler(BaseApplicationException)
async def import_exception_handler(request: Request, exc: BaseApplicationException):
    """Errori applicativi sollevati fuori dalla pipeline (es. database non raggiungibile)"""
    logger.error(f"Import request failed: {exc.error_code} - {exc.message}", extra={
        **_import_request_context(request),
        "error_code": exc.error_code,
        "details": exc.details
    })

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )

@app.exception_handler(ValidationException)
async def upload_rejected_handler(request: Request, exc: ValidationException):
    """Upload rifiutato prima dell'import: formato non supportato o file troppo grande"""
    logger.warning(f"Upload rejected: {exc.message}", extra={
        **_import_request_context(request),
        "error_code": exc.error_code,
        "upload_filename": exc.details.get("filename")
    })

    return JSONResponse(
        status_code=400,
        content=exc.to_dict()
    )

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Parametri mancanti o non validi (clinic_id, file)"""
    logger.warning(f"Invalid import request: {exc.errors()}", extra=_import_request_context(request))

    return JSONResponse(
        status_code=422,
        content={
            "error_code": "VALIDATION_ERROR",
            "message": "Invalid import request: check clinic_id and the uploaded file",
            "details": jsonable_encoder(exc.errors()),
            "status_code": 422
        }
    )

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handler generico per errori non gestiti"""
    logger.error(f"Unhandled error in import request: {str(exc)}", extra={
        **_import_request_context(request),
        "traceback": traceback.format_exc()
    })

    return JSONResponse(
        status_code=500,
        content={
            "error_code": "INTERNAL_SERVER_ERROR",
            "message": "Unexpected error while handling the import request",
            "details": {},
            "status_code": 500
        }
    )


app.include_router(template_import.router)


@app.get("/health")
async def health():
    return {"status": "healthy"}
