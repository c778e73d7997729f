"""
Release models for setup-bosun.

This package provides Pydantic data models describing what the release
host tells us about the latest release and which archive to fetch for
the current platform.
"""

from .release_artifact import (
    LatestReleaseRedirect,
    ReleaseArtifact,
    is_safe_tag,
)

__all__ = [
    "LatestReleaseRedirect",
    "ReleaseArtifact",
    "is_safe_tag",
]
