from fastapi import FastAPI
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware

from inspection_api.core.config import settings
from inspection_api.core.database import close_client, ping_db
from inspection_api.core.errors import register_exception_handlers
from inspection_api.core.logger import get_logger
from inspection_api.core.middleware import log_requests
from inspection_api.routes.auth_router import auth_router
from inspection_api.routes.cash_router import cash_router
from inspection_api.routes.chat_router import chat_router
from inspection_api.routes.database_router import database_router
from inspection_api.routes.label_router import label_router
from inspection_api.routes.live_router import live_router
from inspection_api.routes.quick_check_router import quick_check_router
from inspection_api.routes.state_inspection_router import state_inspection_router
from inspection_api.routes.upload_router import upload_router
from inspection_api.routes.user_router import user_router
from inspection_api.routes.vin_router import vin_router
from inspection_api.services.live_updates import live_updates

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    if not await ping_db():
        logger.warning("Could not reach MongoDB at startup; data routes will fail until it is up")
    live_updates.start()
    logger.info("Application startup complete")

    yield

    logger.info("Application shutdown initiated")
    await live_updates.stop()
    close_client()

app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)
register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(vin_router)
app.include_router(quick_check_router)
app.include_router(user_router)
app.include_router(state_inspection_router)
app.include_router(cash_router)
app.include_router(label_router)
app.include_router(chat_router)
app.include_router(upload_router)
app.include_router(database_router)
app.include_router(live_router)


@app.get("/health")
async def health():
    return {"status": "ok", "database": await ping_db(), "live_updates": live_updates.status}
