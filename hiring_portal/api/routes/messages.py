"""Chat history endpoint."""

from typing import List

import structlog
from fastapi import APIRouter, Depends

from hiring_portal.api.deps import get_repository, require_permission
from hiring_portal.core.security import Identity, Permission
from hiring_portal.schemas.message import MessageView
from hiring_portal.services.hydration import hydrate_message
from hiring_portal.services.repository import Repository

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/messages/{project_id}", response_model=List[MessageView])
async def list_messages(
    project_id: str,
    identity: Identity = Depends(require_permission(Permission.MESSAGES_READ)),
    repository: Repository = Depends(get_repository),
):
    """
    Messages of a project room, oldest first, with senders hydrated

    **Auth**: any authenticated user
    """
    messages = [hydrate_message(repository, m) for m in repository.list_messages_for_project(project_id)]
    logger.info("messages_listed", project_id=project_id, count=len(messages), user=identity.email)
    return messages
