"""Branch classification and branch-name sanitization.

Pure functions; no I/O.
"""

import re

from constants import Constants
from .models import BranchType

# Anything outside the semver pre-release identifier alphabet (plus the dot separator).
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9.-]")


def is_mainline_branch(branch: str) -> bool:
    """Return True if ``branch`` is a release line (no path separator).

    Examples: ``main`` and ``v1.8`` are mainline, ``feature/auth`` is not.
    """
    return Constants.BRANCH_SEPARATOR not in branch


def get_branch_type(branch: str) -> BranchType:
    """Classify ``branch`` as mainline or development."""
    return BranchType.MAINLINE if is_mainline_branch(branch) else BranchType.DEVELOPMENT


def _dots_for(match) -> str:
    # One dot per UTF-16 code unit: characters outside the BMP (emoji) take two.
    return "." * (len(match.group(0).encode("utf-16-le")) // 2)


def sanitize_branch_name(branch: str) -> str:
    """Turn a branch name into a token usable inside a pre-release identifier.

    Slashes become dots, then every remaining unsafe character becomes a dot:
    ``team/feature/new-thing`` -> ``team.feature.new-thing``.
    """
    return _UNSAFE_CHARS.sub(_dots_for, branch.replace(Constants.BRANCH_SEPARATOR, "."))
