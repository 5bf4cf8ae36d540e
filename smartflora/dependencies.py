"""
FastAPI dependencies for the session store and device registry
"""

from fastapi import Depends, HTTPException, Request, status

from smartflora.device_registry import DeviceRegistry
from smartflora.models import UserSession
from smartflora.session_store import SessionStore


def get_session_store(request: Request) -> SessionStore:
    """Session store created during application startup."""
    return request.app.state.session_store


def get_device_registry(request: Request) -> DeviceRegistry:
    """Device registry created during application startup."""
    return request.app.state.device_registry


async def get_current_session(
    sessions: SessionStore = Depends(get_session_store),
) -> UserSession:
    """
    Return the current session.

    Pot routes require someone to be logged in, as the dashboard is only
    reachable after a successful scan.
    """
    session = sessions.get_current_session()

    if not session:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not logged in",
        )

    return session
