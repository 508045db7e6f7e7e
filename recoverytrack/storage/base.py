from abc import ABC, abstractmethod

from recoverytrack.models.session import Session


class SessionStore(ABC):
    """Key-value persistence for whole sessions. Saves succeed or fail as a unit."""

    @abstractmethod
    def load(self, key: str) -> Session | None: ...

    @abstractmethod
    def save(self, key: str, session: Session) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...
