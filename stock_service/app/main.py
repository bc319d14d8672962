import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import SessionLocal, init_db
from shared.data.admin_seed import ensure_admin_user
from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.response_wrapper import JsonResponseMiddleware

from .router.auth import auth_router
from .router.inventory import inventory_items_router
from .router.suppliers import suppliers_router
from .router.users import user_management_router
from .router.alerts import alerts_router
from .router.overview import analytics_router
from .router.reports import reports_router
from .router.common import export_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create all tables, then make sure an admin can log in
    init_db()
    db = SessionLocal()
    try:
        ensure_admin_user(db)
    finally:
        db.close()
    logger.info("%s started", settings.APP_NAME)
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.add_middleware(JsonResponseMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Include routers
app.include_router(auth_router.router)
app.include_router(inventory_items_router.router)
app.include_router(suppliers_router.router)
app.include_router(user_management_router.router)
app.include_router(alerts_router.router)
app.include_router(analytics_router.router)
app.include_router(reports_router.router)
app.include_router(export_router.router)


@app.get("/health")
def health():
    return {"status": "ok", "service": settings.APP_NAME}
