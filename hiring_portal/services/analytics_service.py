"""
Candidate Analytics Service

Scores individual project submissions and aggregates them per candidate
(grouped by submitter email) into analytics and a global ranking.

Everything here is a pure function of the projects passed in: callers hand
over a repository snapshot, so the computation can run off the event loop.

Scoring:
- Description length: 1 point per 100 UTF-16 code units, capped at 10
- Project link present: 5 points
- Repository link present: 5 points
- Total clamped to 100
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from hiring_portal.core.exceptions import NotFound
from hiring_portal.models import Project

DESCRIPTION_POINTS_CAP = 10.0
DESCRIPTION_CHARS_PER_POINT = 100
LINK_POINTS = 5.0
MAX_SCORE = 100.0

Scorer = Callable[[Project], float]


@dataclass
class CandidateAnalytics:
    """Aggregate analytics for one candidate email."""
    email: str
    total_projects: int
    average_score: float
    projects_by_industry: Dict[str, int]
    latest_submission: Optional[Project]
    rank: Optional[int] = None


@dataclass
class CandidateDetail:
    """Candidate analytics plus every project paired with its score."""
    analytics: CandidateAnalytics
    scored_projects: List[Tuple[Project, float]] = field(default_factory=list)


def description_length(text: Optional[str]) -> int:
    """Length in UTF-16 code units; characters outside the BMP count twice."""
    return len((text or "").encode("utf-16-le")) // 2


def score_project(project: Project) -> float:
    """
    Score a single submission.

    The formula is intentionally simplistic and kept as-is for compatibility
    with existing rankings: longer descriptions (up to the cap) and complete
    links score higher.
    """
    score = min(DESCRIPTION_POINTS_CAP, description_length(project.description) / DESCRIPTION_CHARS_PER_POINT)

    if project.project_link:
        score += LINK_POINTS
    if project.repository_link:
        score += LINK_POINTS

    return min(MAX_SCORE, score)


def _latest(projects: Sequence[Project]) -> Optional[Project]:
    # max() keeps the first of equal timestamps, i.e. the earliest inserted
    if not projects:
        return None
    return max(projects, key=lambda p: p.submission_date)


def candidate_analytics(
    email: str,
    projects: Sequence[Project],
    scorer: Scorer = score_project,
) -> CandidateAnalytics:
    """
    Aggregate one candidate's projects.

    Args:
        email: Candidate (submitter) email
        projects: That candidate's projects, in submission order
        scorer: Per-project scoring function

    Returns:
        CandidateAnalytics; average_score is 0.0 when there are no projects
    """
    total = len(projects)
    average = sum(scorer(p) for p in projects) / total if total else 0.0

    by_industry: Dict[str, int] = {}
    for project in projects:
        by_industry[project.industry_role] = by_industry.get(project.industry_role, 0) + 1

    return CandidateAnalytics(
        email=email,
        total_projects=total,
        average_score=average,
        projects_by_industry=by_industry,
        latest_submission=_latest(projects),
    )


def group_by_candidate(projects: Sequence[Project]) -> Dict[str, List[Project]]:
    """Group projects by submitter email, preserving first-appearance order."""
    grouped: Dict[str, List[Project]] = {}
    for project in projects:
        grouped.setdefault(project.email, []).append(project)
    return grouped


def rank_candidates(projects: Sequence[Project], scorer: Scorer = score_project) -> List[CandidateAnalytics]:
    """
    Rank every candidate with at least one project by average score.

    The sort is stable: candidates with equal averages keep the order in which
    their first project appears in `projects`. Ranks are 1-based positions.
    """
    analytics = [
        candidate_analytics(email, candidate_projects, scorer)
        for email, candidate_projects in group_by_candidate(projects).items()
    ]
    ranked = sorted(analytics, key=lambda a: a.average_score, reverse=True)

    for position, candidate in enumerate(ranked, start=1):
        candidate.rank = position

    return ranked


def candidate_detail(email: str, projects: Sequence[Project], scorer: Scorer = score_project) -> CandidateDetail:
    """
    Detailed analytics for one candidate.

    Raises:
        NotFound: the email has no projects
    """
    candidate_projects = [p for p in projects if p.email == email]
    if not candidate_projects:
        raise NotFound("Candidate not found")

    # Latest first; equal timestamps keep insertion order
    newest_first = sorted(candidate_projects, key=lambda p: p.submission_date, reverse=True)

    return CandidateDetail(
        analytics=candidate_analytics(email, candidate_projects, scorer),
        scored_projects=[(p, scorer(p)) for p in newest_first],
    )
