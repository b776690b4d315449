from fastapi import APIRouter

from .health import router as health_router
from .repos import router as repos_router
from .events import router as events_router
from .ui import router as ui_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(repos_router)
api_router.include_router(events_router)
api_router.include_router(ui_router)
