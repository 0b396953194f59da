"""Candidate analytics schemas."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from hiring_portal.schemas.project import ProjectResponse


class CandidateAnalyticsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    total_projects: int = Field(..., alias="totalProjects")
    average_score: float = Field(..., alias="averageScore")
    projects_by_industry: Dict[str, int] = Field(..., alias="projectsByIndustry")
    latest_submission: Optional[ProjectResponse] = Field(None, alias="latestSubmission")


class RankedCandidateResponse(CandidateAnalyticsResponse):
    rank: int


class ScoredProjectResponse(ProjectResponse):
    score: float


class CandidateDetailResponse(CandidateAnalyticsResponse):
    projects: List[ScoredProjectResponse]
