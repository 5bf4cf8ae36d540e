"""
Routers Package
"""

from smartflora.routers.pots import router as pots_router
from smartflora.routers.sessions import router as sessions_router

__all__ = [
    "pots_router",
    "sessions_router",
]
