# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from app.core.config import get_settings
from app.core.data_accessor import DataAccessor
from app.core.database import SessionLocal, init_db
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.core.seed import seed_database
from app.feedback.routes import router as feedback_router
from app.label.routes import router as label_router
from app.profile.routes import router as profile_router
from app.ticket.models import Ticket
from app.ticket.routes import router as ticket_router
from app.user.models import User
from app.user.routes import router as user_router

settings = get_settings()
setup_logging(settings.LOG_LEVEL)

init_db()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_ADMIN or settings.SEED_SAMPLE_DATA:
        with DataAccessor(SessionLocal(), allowed_entities=[User, Ticket]) as accessor:
            seed_database(accessor, admin=settings.SEED_ADMIN, sample_data=settings.SEED_SAMPLE_DATA)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(user_router)
app.include_router(ticket_router)
app.include_router(profile_router)
app.include_router(label_router)
app.include_router(feedback_router)


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url=settings.LOGIN_PATH, status_code=status.HTTP_302_FOUND)


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
