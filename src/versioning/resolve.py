"""Placeholder version resolution.

Turns a manifest placeholder such as ``0.0.0-DEFAULT`` into the version a
build should publish, based on the branch being built and on whether the
candidate version has already been tagged.

Mainline branches (no ``/``) publish the mapped version as-is until it has
been tagged; after that a ``.build.N`` suffix keeps every build unique.
Development branches always publish a pre-release carrying the sanitized
branch name, inserted ahead of any existing pre-release identifiers.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Mapping, Optional, Sequence

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, Timer
from .branch import get_branch_type, sanitize_branch_name
from .errors import MissingPlaceholderError
from .models import BranchType, ResolutionInput, ResolvedVersion, VersionParts
from .semver import build_version, extract_version_parts, is_pre_release
from .tags import StubTagChecker, TagChecker, format_tag

logger = logging.getLogger(__name__)


def _build_suffix(run_number: Optional[int]) -> str:
    return f"{Constants.BUILD_IDENTIFIER}.{_build_number(run_number)}"


def _build_number(run_number: Optional[int]) -> int:
    # An absent counter renders the same as an explicit 0.
    return run_number if run_number is not None else 0


async def _check_tag(tag_checker: TagChecker, tag: str) -> bool:
    """Query the checker once, tracing the call at DEBUG."""
    with Timer() as t:
        exists = await tag_checker.tag_exists(tag)
    if is_debug_enabled(logger):
        logger.debug(
            "Tag lookup",
            extra=extra_context(
                event="tag_lookup",
                component="resolve",
                tag=tag,
                exists=exists,
                duration_ms=t.duration_ms(),
            ),
        )
    return exists


async def resolve_version(
    request: ResolutionInput, tag_checker: Optional[TagChecker] = None
) -> ResolvedVersion:
    """Resolve the final version for ``request``.

    Args:
        request: Placeholder, branch, placeholder map and optional run number
        tag_checker: Tag existence collaborator (defaults to StubTagChecker)

    Returns:
        ResolvedVersion describing the version to publish

    Raises:
        MissingPlaceholderError: placeholder is not mapped to a version
        InvalidSemverError: the mapped version is not valid semver
    """
    checker = tag_checker if tag_checker is not None else StubTagChecker()

    resolved_version = request.versions_by_placeholder.get(request.placeholder)
    if not resolved_version:
        raise MissingPlaceholderError(request.placeholder)

    parts = extract_version_parts(resolved_version)

    branch_type = get_branch_type(request.branch)
    if branch_type is BranchType.MAINLINE:
        result = await _resolve_mainline(request, resolved_version, parts, checker)
    else:
        result = await _resolve_development(request, resolved_version, parts, checker)

    logger.info(
        "Resolved %s -> %s on %s branch %s",
        request.placeholder,
        result.version,
        branch_type.value,
        request.branch,
        extra=extra_context(
            event="resolve",
            component="resolve",
            placeholder=request.placeholder,
            branch_type=branch_type.value,
            build_number=result.build_number,
        ),
    )
    return result


async def _resolve_mainline(
    request: ResolutionInput, resolved_version: str, parts: VersionParts, checker: TagChecker
) -> ResolvedVersion:
    """Release lines keep the mapped version until it has been tagged."""
    if not await _check_tag(checker, format_tag(resolved_version)):
        return ResolvedVersion(
            placeholder=request.placeholder,
            resolved_version=resolved_version,
            version=resolved_version,
            is_pre_release=is_pre_release(resolved_version),
            branch_type=BranchType.MAINLINE,
        )

    suffix = _build_suffix(request.run_number)
    if parts.prerelease:
        version = f"{resolved_version}.{suffix}"
    else:
        version = f"{resolved_version}-{sanitize_branch_name(request.branch)}.{suffix}"

    return ResolvedVersion(
        placeholder=request.placeholder,
        resolved_version=resolved_version,
        version=version,
        is_pre_release=True,
        branch_type=BranchType.MAINLINE,
        build_number=_build_number(request.run_number),
    )


async def _resolve_development(
    request: ResolutionInput, resolved_version: str, parts: VersionParts, checker: TagChecker
) -> ResolvedVersion:
    """Development branches always publish a branch-qualified pre-release."""
    sanitized_branch = sanitize_branch_name(request.branch)

    if parts.prerelease:
        # Branch goes ahead of the existing identifiers: 2.0.0-feature.auth.beta.0
        version_with_branch = build_version(parts.base, [sanitized_branch, *parts.prerelease])
    else:
        version_with_branch = f"{resolved_version}-{sanitized_branch}"

    build_number = None
    version = version_with_branch
    if await _check_tag(checker, format_tag(version_with_branch)):
        version = f"{version_with_branch}.{_build_suffix(request.run_number)}"
        build_number = _build_number(request.run_number)

    return ResolvedVersion(
        placeholder=request.placeholder,
        resolved_version=resolved_version,
        version=version,
        is_pre_release=True,
        branch_type=BranchType.DEVELOPMENT,
        build_number=build_number,
    )


async def resolve_versions(
    placeholders: Sequence[str],
    branch: str,
    versions_by_placeholder: Mapping[str, str],
    run_number: Optional[int] = None,
    tag_checker: Optional[TagChecker] = None,
) -> List[ResolvedVersion]:
    """Resolve several placeholders for one branch concurrently.

    Results are returned in the order of ``placeholders``. The first failure
    propagates, the resolutions still in flight are cancelled and no partial
    results are returned.
    """
    inputs = [
        ResolutionInput(
            placeholder=placeholder,
            branch=branch,
            versions_by_placeholder=versions_by_placeholder,
            run_number=run_number,
        )
        for placeholder in placeholders
    ]
    tasks = [asyncio.ensure_future(resolve_version(req, tag_checker)) for req in inputs]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        # Let cancelled tasks unwind before the failure reaches the caller.
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
