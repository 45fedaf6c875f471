from __future__ import annotations

from devmentor_core.errors import ValidationError
from devmentor_core.models import ReviewRequest
from devmentor_core.utils.languages import SUPPORTED_LANGUAGES, is_supported_language

MAX_CODE_CHARS = 50_000
DEFAULT_TITLE = "Untitled Review"


def build_request(
    code: str | None,
    language: str | None,
    submitter_id: str | None,
    title: str | None = None,
    description: str | None = None,
    max_code_chars: int = MAX_CODE_CHARS,
) -> ReviewRequest:
    """Validate raw submission fields and return an immutable ReviewRequest.

    Raises ValidationError before any provider call is made.
    """
    if not submitter_id:
        raise ValidationError("Not authenticated: a submitter id is required.")
    if not code or not code.strip() or not language:
        raise ValidationError("Code and language are required.")

    code = code.strip()
    if len(code) > max_code_chars:
        raise ValidationError(f"Code is too long. Maximum {max_code_chars:,} characters allowed.")

    language = language.strip().lower()
    if not is_supported_language(language):
        raise ValidationError(
            f"Unsupported language: {language!r}. Choose one of: {', '.join(SUPPORTED_LANGUAGES)}."
        )

    return ReviewRequest(
        title=(title or "").strip() or DEFAULT_TITLE,
        description=(description or "").strip() or None,
        code=code,
        language=language,
        submitter_id=submitter_id,
    )
