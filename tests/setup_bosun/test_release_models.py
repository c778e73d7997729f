"""
Tests for release models.
"""

import pytest
from pydantic import ValidationError

from setup_bosun.release_models import LatestReleaseRedirect, ReleaseArtifact, is_safe_tag

LATEST_URL = "https://github.com/naveego/bosun/releases/latest"


class TestLatestReleaseRedirect:
    """Tests for LatestReleaseRedirect model."""

    def _redirect(self, location, status_code=302):
        return LatestReleaseRedirect(
            url=LATEST_URL, status_code=status_code, location=location
        )

    def test_tag_is_final_path_segment(self):
        redirect = self._redirect("https://github.com/naveego/bosun/releases/tag/v9.9.9")
        assert redirect.is_redirect()
        assert redirect.tag == "v9.9.9"

    def test_tag_ignores_query_string_and_fragment(self):
        redirect = self._redirect(
            "https://github.com/naveego/bosun/releases/tag/v1.2.3?from=latest#assets"
        )
        assert redirect.tag == "v1.2.3"

    def test_tag_ignores_trailing_slash(self):
        redirect = self._redirect("https://github.com/naveego/bosun/releases/tag/v1.2.3/")
        assert redirect.tag == "v1.2.3"

    def test_relative_location(self):
        redirect = self._redirect("/naveego/bosun/releases/tag/2.0.0-rc.1")
        assert redirect.tag == "2.0.0-rc.1"

    def test_empty_tag_when_location_has_no_path(self):
        assert self._redirect("https://github.com").tag == ""
        assert self._redirect(None).tag == ""

    def test_success_status_is_not_a_redirect(self):
        redirect = self._redirect(None, status_code=200)
        assert not redirect.is_redirect()

    def test_redirect_without_location_is_not_a_redirect(self):
        assert not self._redirect("", status_code=302).is_redirect()

    def test_parse_from_aliases(self):
        redirect = LatestReleaseRedirect(
            **{"url": LATEST_URL, "statusCode": 301, "Location": "/releases/tag/v3.0.0"}
        )
        assert redirect.status_code == 301
        assert redirect.tag == "v3.0.0"


class TestReleaseArtifact:
    """Tests for ReleaseArtifact model."""

    def test_windows_amd64_artifact(self):
        artifact = ReleaseArtifact(
            tool_name="bosun",
            tag="v1.0.0",
            os_name="windows",
            arch="amd64",
            base_url=LATEST_URL,
        )
        assert artifact.file_name == "bosun_v1.0.0_windows_amd64.tar.gz"
        assert artifact.download_path == "/download/bosun_v1.0.0_windows_amd64.tar.gz"
        assert artifact.url == LATEST_URL + "/download/bosun_v1.0.0_windows_amd64.tar.gz"

    def test_trailing_slash_on_base_url(self):
        artifact = ReleaseArtifact(
            tool_name="bosun", tag="v1.0.0", os_name="linux", arch="386", base_url=LATEST_URL + "/"
        )
        assert artifact.url == LATEST_URL + "/download/bosun_v1.0.0_linux_386.tar.gz"

    def test_from_aliases(self):
        artifact = ReleaseArtifact(
            **{
                "toolName": "bosun",
                "tag": "v2.1.0",
                "os": "darwin",
                "arch": "amd64",
                "archiveType": "zip",
                "baseUrl": LATEST_URL,
            }
        )
        assert artifact.file_name == "bosun_v2.1.0_darwin_amd64.zip"

    @pytest.mark.parametrize("tag", ["", "   "])
    def test_empty_tag_is_rejected(self, tag):
        with pytest.raises(ValidationError):
            ReleaseArtifact(
                tool_name="bosun", tag=tag, os_name="linux", arch="amd64", base_url=LATEST_URL
            )


class TestTagSafety:
    """Tags end up as cache directory names and must stay a single path segment."""

    def test_encoded_separators_are_not_decoded(self):
        redirect = LatestReleaseRedirect(
            url=LATEST_URL,
            status_code=302,
            location="https://github.com/naveego/bosun/releases/tag/..%2F..%2Fvictim",
        )
        assert redirect.tag == "..%2F..%2Fvictim"
        assert "/" not in redirect.tag

    @pytest.mark.parametrize("tag", ["v1.2.3", "1.0.0-rc.1", "nightly", "..%2Fvictim"])
    def test_single_segments_are_safe(self, tag):
        assert is_safe_tag(tag)

    @pytest.mark.parametrize("tag", ["", ".", "..", "../victim", "a/b", "..\\victim"])
    def test_path_like_tags_are_unsafe(self, tag):
        assert not is_safe_tag(tag)

    @pytest.mark.parametrize("tag", ["..", "../../victim", "v1\\..\\x"])
    def test_artifact_rejects_path_like_tag(self, tag):
        with pytest.raises(ValidationError):
            ReleaseArtifact(
                tool_name="bosun", tag=tag, os_name="linux", arch="amd64", base_url=LATEST_URL
            )
