import logging
import logging.config
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from passport.config import get_settings
from passport.exceptions import AuthenticationError, PassportError
from passport.repositories import create_store
from passport.routers import (
    appointments, clinician, education, immunisation, messages, patients, pregnancy, scans, test_results, user,
    vital_stats,
)
from passport.seed import seed_store

settings = get_settings()
logging.config.dictConfig(settings.logging_config)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tests install their own store before start-up
    if getattr(app.state, "store", None) is None:
        app.state.store = create_store(settings)
    store = app.state.store
    await store.create_all()
    if settings.seed_on_startup:
        async with store.repository() as repo:
            await seed_store(repo, demo=settings.seed_demo_data)
    logger.info("Store ready: %s", type(store).__name__)
    yield
    await store.dispose()


app = FastAPI(
    title="Digital Pregnancy Passport",
    description="Role-scoped access to pregnancy records for patients and clinicians",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Patient data must never sit in a browser or proxy cache."""
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, proxy-revalidate, max-age=0"
        response.headers["Expires"] = "0"
        response.headers["Pragma"] = "no-cache"
        return response


app.add_middleware(NoCacheMiddleware)


@app.exception_handler(PassportError)
async def passport_error_handler(request: Request, exc: PassportError):
    content = {"detail": exc.message}
    if exc.details:
        content["details"] = exc.details
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"detail": "Invalid request", "details": {"errors": errors}})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and methods are reported as unimplemented
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=501,
            content={"detail": f"Not implemented: {request.method} {request.url.path}"},
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(user.router, prefix="/api/user", tags=["User"])
app.include_router(pregnancy.router, prefix="/api/pregnancy", tags=["Pregnancy"])
app.include_router(appointments.router, prefix="/api/appointments", tags=["Appointments"])
app.include_router(vital_stats.router, prefix="/api/vital-stats", tags=["Vital Stats"])
app.include_router(test_results.router, prefix="/api/test-results", tags=["Test Results"])
app.include_router(scans.router, prefix="/api/scans", tags=["Scans"])
app.include_router(messages.router, prefix="/api/messages", tags=["Messages"])
app.include_router(education.router, prefix="/api/education-modules", tags=["Education"])
app.include_router(immunisation.router, prefix="/api/immunisation-history", tags=["Immunisation"])
app.include_router(patients.router, prefix="/api/patients", tags=["Patients"])
app.include_router(clinician.router, prefix="/api/clinician", tags=["Clinician"])


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "pregnancy-passport"}
