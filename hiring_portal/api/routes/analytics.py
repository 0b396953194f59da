"""
Candidate Analytics API
Scores and rankings derived from submitted projects (managers only)
"""

from typing import List

import structlog
from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from hiring_portal.api.deps import get_repository, require_permission
from hiring_portal.core.security import Identity, Permission
from hiring_portal.schemas.analytics import CandidateDetailResponse, RankedCandidateResponse
from hiring_portal.services import analytics_service
from hiring_portal.services.analytics_service import CandidateAnalytics
from hiring_portal.services.hydration import project_response, scored_project_response
from hiring_portal.services.repository import Repository

logger = structlog.get_logger(__name__)
router = APIRouter()


def _analytics_fields(analytics: CandidateAnalytics) -> dict:
    latest = analytics.latest_submission
    return dict(
        email=analytics.email,
        total_projects=analytics.total_projects,
        average_score=analytics.average_score,
        projects_by_industry=analytics.projects_by_industry,
        latest_submission=project_response(latest) if latest else None,
    )


@router.get("/analytics", response_model=List[RankedCandidateResponse])
async def get_candidate_rankings(
    manager: Identity = Depends(require_permission(Permission.ANALYTICS_READ)),
    repository: Repository = Depends(get_repository),
):
    """
    Analytics for every candidate, ranked by average project score

    **Auth**: Manager (JWT required)
    """
    # Snapshot on the loop, score in a worker thread
    snapshot = repository.list_projects()
    ranked = await run_in_threadpool(analytics_service.rank_candidates, snapshot)

    logger.info("analytics_fetched", manager=manager.email, candidates=len(ranked))
    return [RankedCandidateResponse(rank=c.rank, **_analytics_fields(c)) for c in ranked]


@router.get("/analytics/{email}", response_model=CandidateDetailResponse)
async def get_candidate_analytics(
    email: str,
    manager: Identity = Depends(require_permission(Permission.ANALYTICS_READ)),
    repository: Repository = Depends(get_repository),
):
    """
    Analytics for one candidate, with every project and its score

    **Auth**: Manager (JWT required)
    """
    snapshot = repository.list_projects_by_email(email)
    detail = await run_in_threadpool(analytics_service.candidate_detail, email, snapshot)

    logger.info("candidate_analytics_fetched", manager=manager.email, candidate=email)
    return CandidateDetailResponse(
        projects=[scored_project_response(p, score) for p, score in detail.scored_projects],
        **_analytics_fields(detail.analytics),
    )
