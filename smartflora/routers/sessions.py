"""
Session routes - Anonymous identities on this device
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from smartflora.dependencies import get_session_store
from smartflora.errors import TransientFailure
from smartflora.models import LoginRequest, SessionRename, UserSession
from smartflora.session_store import SessionStore

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("", response_model=List[UserSession])
async def list_sessions(
    sessions: SessionStore = Depends(get_session_store),
) -> List[UserSession]:
    """List every session created on this device, oldest first."""
    return sessions.get_all_sessions()


@router.get("/current", response_model=Optional[UserSession])
async def get_current_session(
    sessions: SessionStore = Depends(get_session_store),
) -> Optional[UserSession]:
    """Return the current session, or null when logged out."""
    return sessions.get_current_session()


@router.post("/login", response_model=UserSession, status_code=201)
async def login(
    request: LoginRequest,
    sessions: SessionStore = Depends(get_session_store),
) -> UserSession:
    """
    Log in with a scanned device QR code.

    Always creates a new anonymous identity and makes it current.
    """
    try:
        return await sessions.login(request.scan_payload)
    except TransientFailure as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        )


@router.post("/logout", status_code=204)
async def logout(
    sessions: SessionStore = Depends(get_session_store),
) -> Response:
    """Clear the current session. The identity can still be switched back to."""
    sessions.logout()
    return Response(status_code=204)


@router.post("/{anonymous_id}/switch", response_model=UserSession)
async def switch_session(
    anonymous_id: str,
    sessions: SessionStore = Depends(get_session_store),
) -> UserSession:
    """Make a previously created session current."""
    session = sessions.switch_session(anonymous_id)

    if session is None:
        raise HTTPException(
            status_code=404,
            detail=f"Session '{anonymous_id}' not found",
        )

    return session


@router.patch("/{anonymous_id}", status_code=204)
async def rename_session(
    anonymous_id: str,
    rename: SessionRename,
    sessions: SessionStore = Depends(get_session_store),
) -> Response:
    """
    Rename a session.

    Unknown ids are ignored, matching the store's behaviour.
    """
    sessions.rename_session(anonymous_id, rename.user_name)
    return Response(status_code=204)
