"""
Identity & session store.

Manages the current anonymous session and the registry of every session
created on this device. Logging in always mints a new identity; logging
out only clears the current pointer, so earlier identities remain
available to switch back to.
"""

import logging
import random
import string
from typing import List, Optional

from smartflora.auth import create_session_token
from smartflora.models import UserSession
from smartflora.network import NetworkSimulator
from smartflora.store import ALL_SESSIONS_KEY, SESSION_KEY, KeyValueStore

logger = logging.getLogger(__name__)

ANONYMOUS_ID_PREFIX = "anon_"
ANONYMOUS_ID_LENGTH = 9
_ID_ALPHABET = string.digits + string.ascii_lowercase


class SessionStore:
    def __init__(
        self,
        store: KeyValueStore,
        network: Optional[NetworkSimulator] = None,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.network = network or NetworkSimulator()
        self.rng = rng or random.SystemRandom()

    def get_current_session(self) -> Optional[UserSession]:
        """Return the current session, or None when logged out."""
        data = self.store.get(SESSION_KEY)
        return UserSession.model_validate(data) if data else None

    def get_all_sessions(self) -> List[UserSession]:
        """Return every session created on this device, oldest first."""
        stored = self.store.get(ALL_SESSIONS_KEY) or []
        return [UserSession.model_validate(s) for s in stored]

    def save_session(self, session: UserSession) -> None:
        """
        Make session current and insert or update it in the registry.

        Both documents are written together, so a failed write leaves
        neither of them changed.
        """
        sessions = self.get_all_sessions()
        for index, existing in enumerate(sessions):
            if existing.anonymous_id == session.anonymous_id:
                sessions[index] = session
                break
        else:
            sessions.append(session)

        self.store.set_many(
            {
                ALL_SESSIONS_KEY: self._dump_all(sessions),
                SESSION_KEY: session.model_dump(mode="json"),
            }
        )

    async def login(self, scan_payload: str) -> UserSession:
        """
        Log in by scanning a device QR code.

        The payload is not used to look up an existing identity: every
        login mints a brand-new anonymous session.

        Raises:
            TransientFailure: if the simulated network request fails
        """
        await self.network.roundtrip("login")

        anonymous_id = self._new_anonymous_id()
        session = UserSession(
            anonymous_id=anonymous_id,
            token=create_session_token(anonymous_id),
            user_name=f"User {anonymous_id[len(ANONYMOUS_ID_PREFIX):]}",
        )
        self.save_session(session)

        logger.info(
            f"Logged in as new session {anonymous_id} (scan payload: {scan_payload!r})"
        )
        return session

    def switch_session(self, anonymous_id: str) -> Optional[UserSession]:
        """Make a previously known session current. Returns None if unknown."""
        session = self._find(anonymous_id)
        if session is None:
            logger.debug(f"Cannot switch to unknown session {anonymous_id}")
            return None

        self.store.set(SESSION_KEY, session.model_dump(mode="json"))
        logger.info(f"Switched to session {anonymous_id}")
        return session

    def rename_session(self, anonymous_id: str, user_name: str) -> None:
        """Rename a session in the registry and, if it matches, the current one."""
        sessions = self.get_all_sessions()
        for session in sessions:
            if session.anonymous_id == anonymous_id:
                session.user_name = user_name
                break
        else:
            logger.debug(f"Ignoring rename of unknown session {anonymous_id}")
            return

        documents = {ALL_SESSIONS_KEY: self._dump_all(sessions)}

        current = self.get_current_session()
        if current and current.anonymous_id == anonymous_id:
            current.user_name = user_name
            documents[SESSION_KEY] = current.model_dump(mode="json")

        self.store.set_many(documents)
        logger.info(f"Renamed session {anonymous_id}")

    def logout(self) -> None:
        """Clear the current session. The registry entry is kept."""
        current = self.get_current_session()
        self.store.remove(SESSION_KEY)
        if current:
            logger.info(f"Logged out session {current.anonymous_id}")

    def _find(self, anonymous_id: str) -> Optional[UserSession]:
        for session in self.get_all_sessions():
            if session.anonymous_id == anonymous_id:
                return session
        return None

    @staticmethod
    def _dump_all(sessions: List[UserSession]) -> List[dict]:
        return [s.model_dump(mode="json") for s in sessions]

    def _new_anonymous_id(self) -> str:
        """Generate an anonymous id not used by any known session."""
        known = {s.anonymous_id for s in self.get_all_sessions()}
        while True:
            suffix = "".join(
                self.rng.choice(_ID_ALPHABET) for _ in range(ANONYMOUS_ID_LENGTH)
            )
            candidate = f"{ANONYMOUS_ID_PREFIX}{suffix}"
            if candidate not in known:
                return candidate
