"""Data models for placeholder version resolution."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class BranchType(Enum):
    """Enum for branch classifications."""
    MAINLINE = "mainline"
    DEVELOPMENT = "development"


@dataclass
class VersionParts:
    """Semantic version split into its base triplet and pre-release identifiers."""
    base: str  # "major.minor.patch"
    prerelease: List[str] = field(default_factory=list)


@dataclass
class ResolutionInput:
    """Resolution input supplied by the build pipeline."""
    placeholder: str  # manifest marker, e.g. "0.0.0-DEFAULT"
    branch: str
    versions_by_placeholder: Mapping[str, str]
    run_number: Optional[int] = None  # CI build counter

    def __post_init__(self):
        if self.run_number is not None and self.run_number < 0:
            raise ValueError(f"run_number must be non-negative, got {self.run_number}")


@dataclass
class ResolvedVersion:
    """Resolution outcome consumed by downstream tagging/publishing steps."""
    placeholder: str
    resolved_version: str
    version: str
    is_pre_release: bool
    branch_type: BranchType
    build_number: Optional[int] = None  # set only when a build suffix was appended

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the external record field names; omits an absent build number."""
        out: Dict[str, Any] = {
            "placeholder": self.placeholder,
            "resolvedVersion": self.resolved_version,
            "version": self.version,
            "isPreRelease": self.is_pre_release,
            "branchType": self.branch_type.value,
        }
        if self.build_number is not None:
            out["buildNumber"] = self.build_number
        return out
