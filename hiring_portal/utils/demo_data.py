"""Demo data: one manager, one candidate and one submitted project."""

import structlog

from hiring_portal.config import settings
from hiring_portal.core.security import Role, get_password_hash
from hiring_portal.services.repository import Repository

logger = structlog.get_logger(__name__)

DEMO_MANAGER_ID = "manager1"
DEMO_CANDIDATE_ID = "candidate1"
DEMO_CANDIDATE_EMAIL = "john@example.com"
DEMO_PROJECT_ID = "project1"


def seed_demo_data(repository: Repository) -> None:
    """Insert the demo records unless they already exist."""
    if repository.find_user(id=DEMO_MANAGER_ID) is None:
        repository.create_user(
            email=settings.DEMO_MANAGER_EMAIL,
            password_hash=get_password_hash(settings.DEMO_MANAGER_PASSWORD),
            role=Role.MANAGER.value,
            user_id=DEMO_MANAGER_ID,
        )

    if repository.find_user(id=DEMO_CANDIDATE_ID) is None:
        repository.create_user(
            email=DEMO_CANDIDATE_EMAIL,
            password_hash=get_password_hash(settings.DEFAULT_CANDIDATE_PASSWORD),
            role=Role.CANDIDATE.value,
            user_id=DEMO_CANDIDATE_ID,
        )

    if repository.find_project_by_id(DEMO_PROJECT_ID) is None:
        repository.create_project(
            project_id=DEMO_PROJECT_ID,
            full_name="John Doe",
            email=DEMO_CANDIDATE_EMAIL,
            industry_role="Software Development",
            title="E-commerce Platform",
            description=(
                "A full-stack e-commerce platform built with React and Node.js, featuring user "
                "authentication, payment processing, and inventory management."
            ),
            project_link="https://github.com/johndoe/ecommerce-platform",
            repository_link="https://github.com/johndoe",
            submitted_by=DEMO_CANDIDATE_ID,
        )

    logger.info("demo_data_ready", manager=settings.DEMO_MANAGER_EMAIL)
