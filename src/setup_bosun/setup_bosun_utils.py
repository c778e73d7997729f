"""
This file contains various utility functions like I/O operations, handling paths, etc.
"""

import logging
import os
import pathlib
import platform
import shutil
import sys
import tarfile
import tempfile
import uuid
from typing import Optional

import requests

from setup_bosun.setup_bosun_exceptions import DownloadFailed, ExtractFailed
from setup_bosun.setup_bosun_logger import SetupBosunLogger

_MACHINE_TO_ARCH = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "armv6l": "arm",
}


class PlatformUtils:
    """
    This class provides utilities for detecting the host platform.

    Names follow the convention used by the bosun release pipeline, which
    reports ``x64``/``ia32``/``arm64`` for architectures and
    ``win32``/``darwin``/``linux`` for operating systems.
    """

    @staticmethod
    def get_arch() -> str:
        machine = platform.machine().lower()
        return _MACHINE_TO_ARCH.get(machine, machine)

    @staticmethod
    def get_os_name() -> str:
        if sys.platform.startswith("win"):
            return "win32"
        if sys.platform == "darwin":
            return "darwin"
        if sys.platform.startswith("linux"):
            return "linux"
        return sys.platform


class FileUtils:
    """
    Utility functions for downloading and unpacking release archives
    """

    CHUNK_SIZE = 64 * 1024

    @staticmethod
    def download_file(
        logger: SetupBosunLogger,
        url: str,
        target_dir: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """
        Downloads the file from the given URL into a uniquely named file in target_dir.

        Raises DownloadFailed on transport errors and non-2xx responses.
        """
        os.makedirs(target_dir, exist_ok=True)
        target_path = os.path.join(target_dir, uuid.uuid4().hex)
        http = session or requests.Session()

        logger.log(f"Downloading file from {url} to {target_path}", logging.INFO)
        try:
            response = http.get(url, stream=True, timeout=timeout)
            try:
                response.raise_for_status()
                with open(target_path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=FileUtils.CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
            finally:
                response.close()
        except (requests.RequestException, OSError) as e:
            logger.log(f"Error downloading file from {url}: {e}", logging.ERROR)
            if os.path.exists(target_path):
                os.remove(target_path)
            raise DownloadFailed(url, e) from e

        return target_path

    @staticmethod
    def extract_tar(
        logger: SetupBosunLogger,
        archive_path: str,
        target_dir: Optional[str] = None,
    ) -> str:
        """
        Unpacks a gzip compressed tarball into target_dir, or into a fresh temporary
        directory when target_dir is not given. Returns the extraction directory.

        Raises ExtractFailed for malformed archives and for members that would land
        outside the extraction directory.
        """
        if target_dir is None:
            target_dir = tempfile.mkdtemp(prefix="setup-bosun-extract-")
        else:
            os.makedirs(target_dir, exist_ok=True)

        logger.log(f"Extracting {archive_path} to {target_dir}", logging.INFO)
        try:
            with tarfile.open(archive_path, "r:gz") as archive:
                members = archive.getmembers()
                FileUtils._check_members(target_dir, members)
                archive.extractall(target_dir, members=members)
        except (tarfile.TarError, OSError, EOFError) as e:
            logger.log(f"Error extracting {archive_path}: {e}", logging.ERROR)
            raise ExtractFailed(archive_path, e) from e

        logger.log(
            f"Extracted {len(members)} entries from {archive_path}", logging.DEBUG
        )
        return target_dir

    @staticmethod
    def _check_members(target_dir: str, members) -> None:
        root = pathlib.Path(target_dir).resolve()
        for member in members:
            destination = (root / member.name).resolve()
            try:
                destination.relative_to(root)
            except ValueError:
                raise tarfile.TarError(f"Archive member escapes target directory: {member.name}")
            if member.issym() or member.islnk():
                link_target = (destination.parent / member.linkname).resolve()
                if member.islnk():
                    link_target = (root / member.linkname).resolve()
                try:
                    link_target.relative_to(root)
                except ValueError:
                    raise tarfile.TarError(f"Archive link escapes target directory: {member.name}")

    @staticmethod
    def remove_path(logger: SetupBosunLogger, path: Optional[str]) -> None:
        """
        Removes a temporary file or directory if it still exists
        """
        if not path or not os.path.exists(path):
            return
        if os.path.isdir(path):
            shutil.rmtree(path, ignore_errors=True)
        else:
            try:
                os.remove(path)
            except OSError as e:
                logger.log(f"Could not remove temporary file {path}: {e}", logging.WARNING)
                return
        logger.log(f"Removed temporary path {path}", logging.DEBUG)
