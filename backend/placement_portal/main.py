import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from placement_portal.config import settings
from placement_portal.database import SessionLocal, init_db, integrity_check
from placement_portal.errors import PortalError
from placement_portal.logging_config import setup_logging
from placement_portal.routers import applications, auth, jobs, notifications, resumes, saved_jobs, users
from placement_portal.services.search_service import job_search_index
from placement_portal.services.seed_service import seed_sample_data
from placement_portal.utils.filesystem import ensure_data_dirs

logger = logging.getLogger("placement_portal")

VERSION = "0.2.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    ensure_data_dirs()
    init_db()
    result = integrity_check()
    if result == "ok":
        logger.info("Database integrity check passed (%s).", settings.db_path)
    else:
        logger.error("DATABASE INTEGRITY CHECK FAILED: %s", result)

    db = SessionLocal()
    try:
        job_search_index.rebuild(db)
        if settings.seed_sample_data:
            try:
                seed_sample_data(db)
            except (PortalError, SQLAlchemyError) as exc:
                db.rollback()
                logger.warning("Could not seed sample data: %s", exc)
    finally:
        db.close()
    yield


app = FastAPI(
    title="Placement Portal",
    description="Campus job placement portal for students and faculty",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(jobs.router, prefix=settings.api_prefix)
app.include_router(applications.router, prefix=settings.api_prefix)
app.include_router(applications.job_applications_router, prefix=settings.api_prefix)
app.include_router(resumes.router, prefix=settings.api_prefix)
app.include_router(saved_jobs.router, prefix=settings.api_prefix)
app.include_router(users.router, prefix=settings.api_prefix)
app.include_router(notifications.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": VERSION}


def run():
    import uvicorn

    uvicorn.run("placement_portal.main:app", host=settings.host, port=settings.port)
