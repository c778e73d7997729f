"""
Tool cache manager.

Maps (tool name, version, architecture) to an installed directory so that a
release is downloaded at most once per cache lifetime.
"""

import logging
import os
import re
import shutil
from typing import List, Optional

from setup_bosun.setup_bosun_logger import SetupBosunLogger

_SEMVER_PATTERN = re.compile(
    r"^[v=]?\s*(\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?)$"
)


def normalize_version(version: str) -> str:
    """
    Derive the cache key segment for a release identifier.

    Semver-looking tags lose their leading ``v`` or ``=`` so that ``v1.2.3``
    and ``1.2.3`` share an entry. Anything else is used verbatim.
    """
    version = version.strip()
    match = _SEMVER_PATTERN.match(version)
    if match:
        return match.group(1)
    return version


class ToolCache:
    """
    Directory backed cache of installed tools.

    Entries live at ``<root>/<tool>/<version>/<arch>`` and are only considered
    present once the sibling ``<arch>.complete`` marker exists. The
    check-then-insert sequence is not atomic, so concurrent installs of the
    same key may both download.
    """

    def __init__(self, root: str, default_arch: str, logger: SetupBosunLogger):
        """
        Initialize the tool cache.

        Args:
            root: Directory holding all cached tools
            default_arch: Architecture used when a lookup does not name one
            logger: Logger for cache hits and inserts
        """
        self.root = root
        self.default_arch = default_arch
        self.logger = logger

    def _entry_path(self, tool_name: str, version: str, arch: Optional[str]) -> str:
        if not tool_name:
            raise ValueError("tool_name parameter is required")
        if not version:
            raise ValueError("version parameter is required")
        entry_path = os.path.join(
            self.root, tool_name, normalize_version(version), arch or self.default_arch
        )
        tool_root = os.path.realpath(os.path.join(self.root, tool_name))
        resolved = os.path.realpath(entry_path)
        if (
            os.path.dirname(os.path.dirname(resolved)) != tool_root
            or os.path.commonpath([os.path.realpath(self.root), resolved])
            != os.path.realpath(self.root)
        ):
            raise ValueError(
                f"Cache entry for {tool_name} {version} would fall outside {self.root}"
            )
        return entry_path

    @staticmethod
    def _marker_path(entry_path: str) -> str:
        return f"{entry_path}.complete"

    def find(
        self, tool_name: str, version: str, arch: Optional[str] = None
    ) -> Optional[str]:
        """
        Find the cached directory of a tool version.

        Returns:
            Absolute path of the entry, or None on a cache miss
        """
        entry_path = self._entry_path(tool_name, version, arch)
        if os.path.isdir(entry_path) and os.path.isfile(self._marker_path(entry_path)):
            self.logger.log(f"Found tool in cache {tool_name} {version}", logging.DEBUG)
            return os.path.abspath(entry_path)

        self.logger.log(f"Tool not found in cache {tool_name} {version}", logging.DEBUG)
        return None

    def cache_dir(
        self,
        source_dir: str,
        tool_name: str,
        version: str,
        arch: Optional[str] = None,
    ) -> str:
        """
        Copy a directory into the cache and mark it complete.

        Args:
            source_dir: Directory holding the extracted tool
            tool_name: Name of the tool
            version: Release identifier
            arch: Architecture, defaults to the cache's default architecture

        Returns:
            Absolute path of the new cache entry
        """
        if not os.path.isdir(source_dir):
            raise FileNotFoundError(f"sourceDir is not a directory: {source_dir}")

        entry_path = self._entry_path(tool_name, version, arch)
        marker_path = self._marker_path(entry_path)
        self.logger.log(
            f"Caching tool {tool_name} {version} from {source_dir} to {entry_path}",
            logging.INFO,
        )

        if os.path.exists(marker_path):
            os.remove(marker_path)
        if os.path.isdir(entry_path):
            shutil.rmtree(entry_path)
        os.makedirs(os.path.dirname(entry_path), exist_ok=True)

        shutil.copytree(source_dir, entry_path, symlinks=True)

        # The marker is written last; an entry without it is treated as a miss
        with open(marker_path, "w"):
            pass

        return os.path.abspath(entry_path)

    def find_all_versions(self, tool_name: str, arch: Optional[str] = None) -> List[str]:
        """
        List the versions of a tool that are completely cached.
        """
        tool_path = os.path.join(self.root, tool_name)
        if not os.path.isdir(tool_path):
            return []

        arch = arch or self.default_arch
        versions = []
        for version in sorted(os.listdir(tool_path)):
            entry_path = os.path.join(tool_path, version, arch)
            if os.path.isdir(entry_path) and os.path.isfile(self._marker_path(entry_path)):
                versions.append(version)
        return versions
