"""Heuristic extraction of a structured Analysis from free-text reviews.

The provider returns prose, not data. extract() scans it for a handful of
keyword and number patterns and fills in a fixed-shape Analysis, keeping the
documented default for anything it cannot find. It never raises: a review
that matches nothing must still be persisted.
"""

from __future__ import annotations

import logging
import re

from devmentor_core.models import Analysis, Issue, Suggestion

logger = logging.getLogger(__name__)

# "8/10", "8.5 / 10", "rate ... 8", "score ... 8". First match wins.
_SCORE_RE = re.compile(
    r"(\d+(?:\.\d+)?)\s*/\s*10|rate.*?(\d+(?:\.\d+)?)|score.*?(\d+(?:\.\d+)?)",
    re.IGNORECASE,
)

# A negator up to two words before the keyword, inside the same clause:
# "no security concerns", "not a performance problem", "without any security issue".
_NEGATED_RE = re.compile(r"\b(?:no|not|without|never|free of)\b(?:\W+\w+){0,2}\W*$")
_CLAUSE_BREAK_RE = re.compile(r"[.!?;:\n]")

_SECURITY_KEYWORDS = ("security", "vulnerability")
_PERFORMANCE_KEYWORDS = ("performance", "optimization")

SECURITY_SCORE_ON_SIGNAL = 60
PERFORMANCE_SCORE_ON_SIGNAL = 70

SECURITY_ISSUE_MESSAGE = "Security concerns identified in the analysis"
SECURITY_ISSUE_SUGGESTION = "Review the detailed feedback for security recommendations"
PERFORMANCE_ISSUE_MESSAGE = "Performance optimization opportunities identified"
PERFORMANCE_ISSUE_SUGGESTION = "See detailed analysis for performance improvements"
ERROR_HANDLING_MESSAGE = "Improve error handling for better robustness"
ERROR_HANDLING_EXAMPLE = "try { /* your code */ } catch (error) { /* handle error */ }"
STATIC_TYPING_MESSAGE = "Consider using TypeScript for better type safety"


def extract(raw_text: str) -> Analysis:
    """Derive an Analysis from the provider's review text."""
    analysis = Analysis()
    if not raw_text:
        return analysis

    text = raw_text.lower()
    matched = False

    score = _extract_score(raw_text)
    if score is not None:
        analysis.overall_score = score
        matched = True

    complexity = _extract_complexity(text)
    if complexity is not None:
        analysis.complexity = complexity
        matched = True

    if _mentions(text, _SECURITY_KEYWORDS):
        analysis.issues.append(
            Issue(
                type="security",
                severity="medium",
                line=1,
                message=SECURITY_ISSUE_MESSAGE,
                suggestion=SECURITY_ISSUE_SUGGESTION,
            )
        )
        analysis.security = SECURITY_SCORE_ON_SIGNAL
        matched = True

    if _mentions(text, _PERFORMANCE_KEYWORDS):
        analysis.issues.append(
            Issue(
                type="performance",
                severity="low",
                line=1,
                message=PERFORMANCE_ISSUE_MESSAGE,
                suggestion=PERFORMANCE_ISSUE_SUGGESTION,
            )
        )
        analysis.performance = PERFORMANCE_SCORE_ON_SIGNAL
        matched = True

    if "error handling" in text:
        analysis.suggestions.append(
            Suggestion(type="best-practice", message=ERROR_HANDLING_MESSAGE, code_example=ERROR_HANDLING_EXAMPLE)
        )
        matched = True

    if "type" in text and "script" in text:
        analysis.suggestions.append(Suggestion(type="improvement", message=STATIC_TYPING_MESSAGE))
        matched = True

    analysis.low_confidence = not matched
    if not matched:
        logger.info("No recognizable signals in review text; using default analysis")
    return analysis


def _extract_score(raw_text: str) -> float | None:
    match = _SCORE_RE.search(raw_text)
    if not match:
        return None
    value = next(g for g in match.groups() if g is not None)
    score = float(value)
    if 1 <= score <= 10:
        return score
    logger.debug("Ignoring out-of-range score %s", value)
    return None


def _extract_complexity(text: str) -> str | None:
    # "high" is checked first so that text mentioning both levels resolves to high.
    if "high complexity" in text or "complex" in text:
        return "high"
    if "low complexity" in text or "simple" in text:
        return "low"
    return None


def _mentions(text: str, keywords: tuple[str, ...]) -> bool:
    """True if any keyword occurs at least once outside a negated clause."""
    for keyword in keywords:
        for match in re.finditer(re.escape(keyword), text):
            clause = _CLAUSE_BREAK_RE.split(text[: match.start()])[-1]
            if not _NEGATED_RE.search(clause):
                return True
    return False
