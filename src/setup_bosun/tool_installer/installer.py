"""
Tool installer implementation.

Resolves, downloads, caches and exposes the latest release of a tool.
"""

import logging
import os
import tempfile
from typing import Optional

import requests

from setup_bosun.ci_environment import CIEnvironment
from setup_bosun.release_models import LatestReleaseRedirect, ReleaseArtifact, is_safe_tag
from setup_bosun.setup_bosun_config import InstallerConfig
from setup_bosun.setup_bosun_exceptions import DownloadFailed, UnexpectedResponse
from setup_bosun.setup_bosun_logger import SetupBosunLogger
from setup_bosun.setup_bosun_utils import FileUtils
from setup_bosun.tool_cache import ToolCache


class ToolInstaller:
    """
    Installs the latest release of a tool into the tool cache.

    Each install is a straight line: cache lookup, then download, extract and
    cache insert on a miss, then PATH export.
    """

    def __init__(
        self,
        config: InstallerConfig,
        logger: SetupBosunLogger,
        environment: CIEnvironment,
        tool_cache: Optional[ToolCache] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the tool installer.

        Args:
            config: Installer configuration, including the host platform
            logger: Logger for progress and error messages
            environment: CI runner glue used to export the installed path
            tool_cache: Cache of installed tools, built from config when omitted
            session: HTTP session used for every request
        """
        self.config = config
        self.logger = logger
        self.environment = environment
        self.tool_cache = tool_cache or ToolCache(
            config.tool_cache_directory, config.platform.arch, logger
        )
        self.session = session or requests.Session()

    def resolve_latest_tag(self) -> str:
        """
        Ask the release host which release is the latest.

        Returns:
            The release tag, e.g. v1.2.3

        Raises:
            UnexpectedResponse: If the host does not answer with a usable redirect
        """
        latest_url = self.config.latest_release_url
        try:
            response = self.session.get(
                latest_url, allow_redirects=False, timeout=self.config.request_timeout
            )
        except requests.RequestException as e:
            self.logger.log(f"Request to {latest_url} failed: {e}", logging.ERROR)
            raise UnexpectedResponse(latest_url, reason=str(e)) from e

        redirect = LatestReleaseRedirect(
            url=latest_url,
            status_code=response.status_code,
            location=response.headers.get("Location"),
        )
        response.close()

        if not redirect.is_redirect():
            raise UnexpectedResponse(latest_url, status_code=redirect.status_code)

        self.logger.log(f"Latest release redirects to {redirect.location}", logging.INFO)

        tag = redirect.tag
        if not tag:
            raise UnexpectedResponse(
                latest_url,
                status_code=redirect.status_code,
                reason=f"No release tag in redirect location {redirect.location}",
            )
        if not is_safe_tag(tag):
            raise UnexpectedResponse(
                latest_url,
                status_code=redirect.status_code,
                reason=f"Release tag {tag} in redirect location {redirect.location} is not a single path segment",
            )
        return tag

    def get_release_artifact(self, tag: str) -> ReleaseArtifact:
        platform = self.config.platform
        return ReleaseArtifact(
            tool_name=self.config.tool_name,
            tag=tag,
            os_name=platform.artifact_os,
            arch=platform.artifact_arch,
            archive_type=self.config.archive_type,
            base_url=self.config.latest_release_url,
        )

    def resolve_platform_filename(self, tag: str) -> str:
        """
        The download path of the archive for this platform, relative to the latest-release URL.

        e.g. /download/bosun_v1.0.0_windows_amd64.tar.gz
        """
        return self.get_release_artifact(tag).download_path

    def install(self, tag: str) -> str:
        """
        Install a release of the tool, reusing the cached copy when present.

        Args:
            tag: The release tag to install

        Returns:
            Absolute path of the installed tool directory
        """
        if not tag:
            raise ValueError("tag parameter is required")

        tool_name = self.config.tool_name
        tool_path = self.tool_cache.find(tool_name, tag)
        if tool_path:
            self.logger.log(f"Using cached version {tag}", logging.INFO)
        else:
            tool_path = self._download_and_cache(tag)

        self.environment.add_path(tool_path)
        return tool_path

    def download_latest(self) -> str:
        """
        Install whatever release the host currently marks as latest.
        """
        return self.install(self.resolve_latest_tag())

    def _download_and_cache(self, tag: str) -> str:
        artifact = self.get_release_artifact(tag)
        self.logger.log(
            f"Downloading {self.config.tool_name} version {tag} from {artifact.url}",
            logging.INFO,
        )

        os.makedirs(self.config.temp_directory, exist_ok=True)
        download_path = None
        extract_path = None
        try:
            try:
                download_path = FileUtils.download_file(
                    self.logger,
                    artifact.url,
                    self.config.temp_directory,
                    session=self.session,
                    timeout=self.config.request_timeout,
                )
            except DownloadFailed as e:
                self.environment.debug(str(e.cause))
                raise
            extract_path = tempfile.mkdtemp(
                prefix=f"{self.config.tool_name}-", dir=self.config.temp_directory
            )
            FileUtils.extract_tar(self.logger, download_path, extract_path)

            tool_path = self.tool_cache.cache_dir(
                extract_path, self.config.tool_name, tag
            )
        finally:
            FileUtils.remove_path(self.logger, download_path)
            FileUtils.remove_path(self.logger, extract_path)

        self.logger.log(
            f"Successfully installed {self.config.tool_name} {tag} to {tool_path}",
            logging.INFO,
        )
        return tool_path
