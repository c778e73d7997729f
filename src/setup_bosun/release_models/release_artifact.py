"""
Pydantic data models for the latest-release redirect and release archives.
"""

from typing import Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator

REDIRECT_STATUS_CODES = (301, 302, 303, 307, 308)


def is_safe_tag(tag: str) -> bool:
    """
    A tag is used as a directory name in the tool cache, so it must be a
    single path segment.
    """
    return bool(tag) and tag not in (".", "..") and "/" not in tag and "\\" not in tag


class LatestReleaseRedirect(BaseModel):
    """
    The answer of the release host to a request for its latest release.

    The host answers with a redirect whose Location header names the release
    page, e.g. ``.../releases/tag/v1.2.3``.
    """

    url: str = Field(..., description="URL that was requested")
    status_code: int = Field(..., alias="statusCode")
    location: Optional[str] = Field(None, alias="Location")

    class Config:
        extra = "allow"
        populate_by_name = True

    def is_redirect(self) -> bool:
        """Check if this is a redirect that carries a location."""
        return self.status_code in REDIRECT_STATUS_CODES and bool(self.location)

    @property
    def tag(self) -> str:
        """
        The final path segment of the location.

        Query strings, fragments and a trailing slash are ignored. The segment
        is not URL-decoded. Returns an empty string when there is nothing left.
        """
        if not self.location:
            return ""
        path = urlsplit(self.location).path.rstrip("/")
        return path.split("/")[-1]


class ReleaseArtifact(BaseModel):
    """
    A downloadable release archive for one platform.
    """

    tool_name: str = Field(..., alias="toolName")
    tag: str = Field(..., description="Release identifier, e.g. v1.2.3")
    os_name: str = Field(..., alias="os")
    arch: str = Field(...)
    archive_type: str = Field("tar.gz", alias="archiveType")
    base_url: str = Field(..., alias="baseUrl", description="Latest-release URL the download path is appended to")

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("tag")
    @classmethod
    def tag_is_path_segment(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("release tag must not be empty")
        if not is_safe_tag(value):
            raise ValueError(f"release tag is not a single path segment: {value}")
        return value

    @property
    def file_name(self) -> str:
        return f"{self.tool_name}_{self.tag}_{self.os_name}_{self.arch}.{self.archive_type}"

    @property
    def download_path(self) -> str:
        return f"/download/{self.file_name}"

    @property
    def url(self) -> str:
        return self.base_url.rstrip("/") + self.download_path
