from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from jobboard.api import admin, applications, auth, companies, jobs, resumes, saved
from jobboard.bootstrap import run_startup_tasks
from jobboard.config import Settings, settings as default_settings
from jobboard.database import build_engine, build_session_factory
from jobboard.errors import register_error_handlers
from jobboard.logging_setup import configure_logging
from jobboard import models  # noqa: F401


def create_app(settings: Settings | None = None, engine: Engine | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    if engine is None:
        settings.ensure_directories()
        engine = build_engine(settings.database_url)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.on_event("startup")
    def on_startup() -> None:
        run_startup_tasks(engine, settings)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "environment": settings.environment}

    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(companies.router, prefix="/api/companies", tags=["companies"])
    app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])
    app.include_router(resumes.router, prefix="/api/resumes", tags=["resumes"])
    app.include_router(applications.router, prefix="/api/applications", tags=["applications"])
    app.include_router(saved.saved_jobs_router, prefix="/api/saved-jobs", tags=["saved_jobs"])
    app.include_router(saved.saved_searches_router, prefix="/api/saved-searches", tags=["saved_searches"])
    app.include_router(saved.saved_candidates_router, prefix="/api/saved-candidates", tags=["saved_candidates"])
    app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
    return app
