"""Submitter identity resolution with a git config fallback.

Every stored review is owned by a submitter id. Resolution order (stops at
first success):
  1. DEVMENTOR_USER environment variable (CI / explicit override)
  2. `git config user.email` (the identity the developer already commits with)
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)


def resolve_submitter_id() -> str | None:
    """Return the current submitter id or None if no source is available.

    Does not raise. session.require_submitter turns None into a UsageError.
    """
    user = os.environ.get("DEVMENTOR_USER")
    if user and user.strip():
        return user.strip()

    try:
        result = subprocess.run(
            ["git", "config", "user.email"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            email = result.stdout.strip()
            if email:
                logger.debug("Resolved submitter id via git config.")
                return email
    except (FileNotFoundError, subprocess.TimeoutExpired):
        # no git binary, or it hung
        pass

    return None
