"""Semantic version decomposition and recomposition using semantic_version."""

from typing import List, Optional, Sequence

import semantic_version

from .errors import InvalidSemverError
from .models import VersionParts


def _parse(version: str) -> Optional[semantic_version.Version]:
    """Parse ``version`` strictly; None when it is not valid semver."""
    try:
        return semantic_version.Version(version)
    except (ValueError, TypeError):
        return None


def is_valid_semver(version: str) -> bool:
    """Return True if ``version`` is a syntactically valid semantic version."""
    return _parse(version) is not None


def is_pre_release(version: str) -> bool:
    """Return True if ``version`` carries pre-release identifiers.

    Unparseable input yields False rather than an error.
    """
    parsed = _parse(version)
    return bool(parsed.prerelease) if parsed is not None else False


def extract_version_parts(version: str) -> VersionParts:
    """Split ``version`` into base triplet and pre-release identifiers.

    Args:
        version: Semantic version string, e.g. "2.0.0-beta.0"

    Returns:
        VersionParts(base="2.0.0", prerelease=["beta", "0"])

    Raises:
        InvalidSemverError: if ``version`` does not parse.
    """
    parsed = _parse(version)
    if parsed is None:
        raise InvalidSemverError(version)
    return VersionParts(
        base=f"{parsed.major}.{parsed.minor}.{parsed.patch}",
        prerelease=[str(p) for p in parsed.prerelease],
    )


def build_version(base: str, prerelease: Sequence[str]) -> str:
    """Join a base triplet and pre-release identifiers into a version string."""
    identifiers: List[str] = list(prerelease)
    if not identifiers:
        return base
    return f"{base}-{'.'.join(identifiers)}"
