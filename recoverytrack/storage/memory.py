import logging

from pydantic import ValidationError

from recoverytrack.models.session import Session
from recoverytrack.storage.base import SessionStore

logger = logging.getLogger(__name__)


class InMemorySessionStore(SessionStore):
    """Process-local store holding each session as serialized JSON."""

    def __init__(self) -> None:
        self._payloads: dict[str, str] = {}

    def load(self, key: str) -> Session | None:
        payload = self._payloads.get(key)
        if payload is None:
            return None
        try:
            return Session.model_validate_json(payload)
        except ValidationError as e:
            logger.warning("Discarding corrupt session %r: %s", key, e)
            self._payloads.pop(key, None)
            return None

    def save(self, key: str, session: Session) -> None:
        self._payloads[key] = session.model_dump_json()

    def delete(self, key: str) -> None:
        self._payloads.pop(key, None)

    def put_raw(self, key: str, payload: str) -> None:
        """Store an arbitrary payload, bypassing serialization."""
        self._payloads[key] = payload
