# CourtDesk backend entrypoint: FastAPI app for tennis instructors.

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from courtdesk.app.api import classes
from courtdesk.app.api import dashboard
from courtdesk.app.api import invoices
from courtdesk.app.api import login
from courtdesk.app.api import materials
from courtdesk.app.api import notes
from courtdesk.app.api import preferences
from courtdesk.app.api import private_lessons
from courtdesk.app.api import profile
from courtdesk.app.api import register
from courtdesk.app.api import students
from courtdesk.app.core.errors import register_exception_handlers
from courtdesk.app.core.logging import configure_logging
from courtdesk.app.core.settings import get_settings
from courtdesk.app.db.base import Base
from courtdesk.app.db.schema_check import verify_schema
from courtdesk.app.db.session import engine

configure_logging()
logger = logging.getLogger(__name__)

settings = get_settings()
app = FastAPI(title=settings.app_name, version=settings.api_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(register.router)
app.include_router(login.router)
app.include_router(profile.router)
app.include_router(preferences.router)
app.include_router(students.router)
app.include_router(invoices.router)
app.include_router(classes.router)
app.include_router(private_lessons.router)
app.include_router(materials.router)
app.include_router(notes.router)
app.include_router(dashboard.router)

app.mount(settings.upload_url_prefix, StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")


@app.get("/")
def read_root():
    return {"app": "CourtDesk backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def prepare_database():
    os.makedirs(settings.upload_dir, exist_ok=True)
    Base.metadata.create_all(bind=engine)
    verify_schema(engine, Base.metadata)
    logger.info("%s %s started (%s)", settings.app_name, settings.api_version, settings.environment)
