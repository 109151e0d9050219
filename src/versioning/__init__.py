"""Placeholder version resolution package.

Resolves manifest version placeholders (e.g. ``0.0.0-DEFAULT``) into the
concrete semantic version a build should publish, based on the branch being
built, the CI run number and whether the candidate version is already tagged.
"""

from .branch import get_branch_type, is_mainline_branch, sanitize_branch_name
from .errors import InvalidSemverError, MissingPlaceholderError, VersionResolutionError
from .models import BranchType, ResolutionInput, ResolvedVersion, VersionParts
from .resolve import resolve_version, resolve_versions
from .semver import build_version, extract_version_parts, is_pre_release, is_valid_semver
from .tags import GuardedTagChecker, StaticTagChecker, StubTagChecker, TagChecker, format_tag

__all__ = [
    "BranchType",
    "ResolutionInput",
    "ResolvedVersion",
    "VersionParts",
    "VersionResolutionError",
    "MissingPlaceholderError",
    "InvalidSemverError",
    "is_mainline_branch",
    "get_branch_type",
    "sanitize_branch_name",
    "extract_version_parts",
    "build_version",
    "is_pre_release",
    "is_valid_semver",
    "TagChecker",
    "StubTagChecker",
    "StaticTagChecker",
    "GuardedTagChecker",
    "format_tag",
    "resolve_version",
    "resolve_versions",
]
