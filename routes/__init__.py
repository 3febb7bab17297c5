# Routes package __init__.py - re-exports routers for main.py convenience
from .videos import router as videos_router
from .overlays import router as overlays_router
from .analytics import router as analytics_router
from .notes import router as notes_router
from .reports import router as reports_router
from .settings import router as settings_router

__all__ = ['videos_router', 'overlays_router', 'analytics_router', 'notes_router', 'reports_router', 'settings_router']
