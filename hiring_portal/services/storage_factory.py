"""
Storage service factory
Returns the in-memory or SQL repository based on configuration
"""

import structlog

from hiring_portal.config import settings
from hiring_portal.services.repository import InMemoryRepository, Repository

logger = structlog.get_logger(__name__)


def get_repository(storage_type: str = None) -> Repository:
    """
    Get the repository backend selected by STORAGE_TYPE.

    Returns:
        SQLRepository for "sql" (DATABASE_URL)
        InMemoryRepository for "memory" and anything unrecognised
    """
    storage_type = (storage_type or settings.STORAGE_TYPE).lower()

    if storage_type == "sql":
        from hiring_portal.services.sql_repository import SQLRepository

        logger.info("storage_selected", storage="sql", url=settings.DATABASE_URL)
        return SQLRepository(settings.DATABASE_URL)

    if storage_type != "memory":
        logger.warning("unknown_storage_type", storage=storage_type, fallback="memory")

    logger.info("storage_selected", storage="memory")
    return InMemoryRepository()
