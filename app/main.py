import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import CORS_ORIGINS, LOG_LEVEL, SEED_ON_STARTUP
from app.database import Base, SessionLocal, engine
import app.models  # noqa: F401  registers User, Timesheet, recruiter_contractors on Base

from app.api import auth, users, timesheets, reports
from app.api.error_handlers import register_error_handlers
from app.seed import seed_if_needed

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger("timesheets")

app = FastAPI(
    title="Contractor Timesheet System API",
    description="Timesheet submission and approval with role-based access control",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.on_event("startup")
def startup_event():
    # Create tables after models are imported
    Base.metadata.create_all(bind=engine)
    logger.info(f"[startup] tables ready on {engine.url.render_as_string(hide_password=True)}")

    if SEED_ON_STARTUP:
        with SessionLocal() as db:
            seed_if_needed(db)


@app.get("/", tags=["Health"])
def root():
    return {"message": "Contractor Timesheet System API is running!"}

# Routers
app.include_router(auth.router)        # /auth
app.include_router(users.router)       # /users
app.include_router(timesheets.router)  # /timesheets
app.include_router(reports.router)     # /reports
