import logging

from recoverytrack.config import Settings, get_settings
from recoverytrack.storage.base import SessionStore
from recoverytrack.storage.dynamo_local import DynamoLocalSessionStore
from recoverytrack.storage.memory import InMemorySessionStore

logger = logging.getLogger(__name__)


def get_session_store(settings: Settings | None = None) -> SessionStore:
    """Build the configured session store."""
    settings = settings or get_settings()
    if settings.session_backend == "dynamo":
        logger.info(
            "Using DynamoDB session table %r at %s",
            settings.session_table,
            settings.dynamo_endpoint,
        )
        return DynamoLocalSessionStore(
            endpoint_url=settings.dynamo_endpoint,
            region=settings.dynamo_region,
            table_name=settings.session_table,
        )
    return InMemorySessionStore()
