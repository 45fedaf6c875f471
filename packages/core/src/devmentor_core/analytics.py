"""Dashboard aggregation over one submitter's stored reviews.

All functions take reviews oldest first (as BaseStore.all_reviews returns
them) and are pure: no store access, no clock reads.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from devmentor_store.models import StoredReview

RECENT_ACTIVITY_LIMIT = 10
SCORE_HISTORY_WEEKS = 8
MAX_INSIGHTS = 5

LANGUAGE_COLORS = {
    "javascript": "#F7DF1E",
    "typescript": "#3178C6",
    "python": "#3776AB",
    "java": "#ED8B00",
    "cpp": "#00599C",
    "csharp": "#239120",
    "go": "#00ADD8",
    "rust": "#000000",
    "php": "#777BB4",
    "ruby": "#CC342D",
    "unknown": "#6B7280",
}


@dataclass
class ActivityItem:
    id: str
    title: str
    score: int
    language: str
    created_at: str


@dataclass
class WeeklyScore:
    label: str  # "Week 1" is the oldest week shown
    week_start: str
    score: float
    reviews: int


@dataclass
class LanguageShare:
    name: str
    value: int
    color: str


@dataclass
class DashboardStats:
    total_reviews: int = 0
    average_score: float = 0.0
    improvement_rate: float = 0.0
    total_issues: int = 0
    recent_activity: list[ActivityItem] = field(default_factory=list)
    score_history: list[WeeklyScore] = field(default_factory=list)
    language_distribution: list[LanguageShare] = field(default_factory=list)
    maintainability: int = 0
    performance: int = 0
    security: int = 0


@dataclass
class ProgressPoint:
    review: int  # 1-based chronological position
    overall_score: float
    maintainability: int
    performance: int
    security: int
    date: str


@dataclass
class Insight:
    type: str
    title: str
    message: str
    priority: str  # "high" | "medium" | "low"


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def dashboard_stats(reviews: list[StoredReview]) -> DashboardStats:
    if not reviews:
        return DashboardStats()

    newest_first = list(reversed(reviews))
    scores = [r.overall_score for r in newest_first]

    return DashboardStats(
        total_reviews=len(reviews),
        average_score=round(_mean(scores), 2),
        improvement_rate=improvement_rate(newest_first),
        total_issues=sum(r.issues_count for r in reviews),
        recent_activity=[
            ActivityItem(
                id=r.id,
                title=r.title,
                score=round(r.overall_score),
                language=r.language,
                created_at=r.created_at,
            )
            for r in newest_first[:RECENT_ACTIVITY_LIMIT]
        ],
        score_history=score_history(reviews),
        language_distribution=language_distribution(reviews),
        maintainability=round(_mean([r.maintainability for r in reviews])),
        performance=round(_mean([r.performance for r in reviews])),
        security=round(_mean([r.security for r in reviews])),
    )


def improvement_rate(newest_first: list[StoredReview]) -> float:
    """Percent change of the newer half's average score over the older half's.

    Needs at least four reviews; returns 0.0 otherwise.
    """
    if len(newest_first) < 4:
        return 0.0
    mid = len(newest_first) // 2
    recent_avg = _mean([r.overall_score for r in newest_first[:mid]])
    older_avg = _mean([r.overall_score for r in newest_first[mid:]])
    if older_avg <= 0:
        return 0.0
    return round((recent_avg - older_avg) / older_avg * 100, 2)


def score_history(reviews: list[StoredReview]) -> list[WeeklyScore]:
    """Average score per calendar week (weeks start on Sunday), last 8 weeks with data."""
    weeks: dict[str, list[float]] = {}
    for review in reviews:
        created = _parse_timestamp(review.created_at)
        days_since_sunday = (created.weekday() + 1) % 7
        week_start = (created - timedelta(days=days_since_sunday)).date().isoformat()
        weeks.setdefault(week_start, []).append(review.overall_score)

    recent_weeks = sorted(weeks.items())[-SCORE_HISTORY_WEEKS:]
    return [
        WeeklyScore(
            label=f"Week {index}",
            week_start=week_start,
            score=round(_mean(week_scores), 2),
            reviews=len(week_scores),
        )
        for index, (week_start, week_scores) in enumerate(recent_weeks, start=1)
    ]


def language_distribution(reviews: list[StoredReview]) -> list[LanguageShare]:
    counts: dict[str, int] = {}
    for review in reviews:
        lang = review.language or "unknown"
        counts[lang] = counts.get(lang, 0) + 1

    shares = [
        LanguageShare(
            name=lang[:1].upper() + lang[1:],
            value=count,
            color=LANGUAGE_COLORS.get(lang, LANGUAGE_COLORS["unknown"]),
        )
        for lang, count in counts.items()
    ]
    # Stable sort keeps first-seen order among equal counts.
    return sorted(shares, key=lambda s: s.value, reverse=True)


def progress_trends(reviews: list[StoredReview]) -> tuple[list[ProgressPoint], dict[str, list[ProgressPoint]]]:
    """Chronological score points, overall and grouped by language."""
    points: list[ProgressPoint] = []
    by_language: dict[str, list[ProgressPoint]] = OrderedDict()
    for index, review in enumerate(reviews, start=1):
        point = ProgressPoint(
            review=index,
            overall_score=review.overall_score,
            maintainability=review.maintainability,
            performance=review.performance,
            security=review.security,
            date=review.created_at[:10],
        )
        points.append(point)
        by_language.setdefault(review.language or "unknown", []).append(point)
    return points, by_language


def insights(reviews: list[StoredReview]) -> list[Insight]:
    """Short, prioritised observations about a submitter's review history."""
    if not reviews:
        return [
            Insight(
                type="welcome",
                title="Welcome to DevMentor AI!",
                message="Submit your first code review to start getting personalized insights.",
                priority="high",
            )
        ]

    found: list[Insight] = []
    avg_overall = _mean([r.overall_score for r in reviews])
    avg_performance = _mean([r.performance for r in reviews])
    avg_security = _mean([r.security for r in reviews])

    if avg_overall >= 8:
        found.append(
            Insight(
                type="achievement",
                title="Excellent Code Quality!",
                message=f"Your average score of {avg_overall:.1f}/10 shows consistently high-quality code.",
                priority="high",
            )
        )
    elif avg_overall < 6:
        found.append(
            Insight(
                type="improvement",
                title="Focus on Code Quality",
                message="Your code quality has room for improvement. Focus on the suggestions from recent reviews.",
                priority="high",
            )
        )

    if avg_security < 70:
        found.append(
            Insight(
                type="security",
                title="Security Enhancement Needed",
                message="Consider implementing better security practices like input validation and error handling.",
                priority="high",
            )
        )

    if avg_performance < 70:
        found.append(
            Insight(
                type="performance",
                title="Performance Optimization",
                message="Look into optimizing your code for better performance - consider async patterns "
                "and efficient algorithms.",
                priority="medium",
            )
        )

    if len(reviews) >= 3:
        newest_first = list(reversed(reviews))
        cut = -(-len(newest_first) // 3)  # ceil
        recent_avg = _mean([r.overall_score for r in newest_first[:cut]])
        older_avg = _mean([r.overall_score for r in newest_first[cut:]])
        if older_avg > 0 and recent_avg > older_avg + 0.5:
            found.append(
                Insight(
                    type="trend",
                    title="Great Progress!",
                    message=f"Your recent code quality has improved by "
                    f"{(recent_avg - older_avg) / older_avg * 100:.1f}%",
                    priority="medium",
                )
            )

    return found[:MAX_INSIGHTS]
