"""
Configuration parameters for setup-bosun.
"""

import ntpath
import os
import posixpath
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional

from setup_bosun.setup_bosun_utils import PlatformUtils


@dataclass(frozen=True)
class HostPlatform:
    """
    The (architecture, operating system) pair of the machine running the installer.
    """

    arch: str
    os_name: str

    @classmethod
    def from_host(cls) -> "HostPlatform":
        return cls(arch=PlatformUtils.get_arch(), os_name=PlatformUtils.get_os_name())

    @property
    def artifact_arch(self) -> str:
        # Release archives are only published for amd64 and 386
        return "amd64" if self.arch == "x64" else "386"

    @property
    def artifact_os(self) -> str:
        return "windows" if self.os_name == "win32" else self.os_name

    @property
    def path(self):
        """The os.path flavour matching this platform"""
        return ntpath if self.os_name == "win32" else posixpath


def default_temp_directory(
    platform: HostPlatform, environ: Optional[Mapping[str, str]] = None
) -> str:
    """
    Location used for downloads when the runner does not provide a temp directory.
    """
    environ = os.environ if environ is None else environ
    if platform.os_name == "win32":
        base_location = environ.get("USERPROFILE") or "C:\\"
    elif platform.os_name == "darwin":
        base_location = "/Users"
    else:
        base_location = "/home"
    return platform.path.join(base_location, "actions", "temp")


def default_tool_cache_directory(platform: HostPlatform, temp_directory: str) -> str:
    return platform.path.join(platform.path.dirname(temp_directory), "tool-cache")


@dataclass
class InstallerConfig:
    """
    Configuration parameters
    """

    tool_name: str = "bosun"
    repository: str = "naveego/bosun"
    release_host: str = "https://github.com"
    archive_type: str = "tar.gz"
    temp_directory: Optional[str] = None
    tool_cache_directory: Optional[str] = None
    request_timeout: Optional[float] = None
    config_variable_name: str = "BOSUN_CONFIG"
    config_file: str = os.path.join("bosun", "bosun.yaml")
    action_directory: str = field(default_factory=os.getcwd)
    platform: HostPlatform = field(default_factory=HostPlatform.from_host)

    def __post_init__(self):
        if not self.temp_directory:
            self.temp_directory = default_temp_directory(self.platform)
        if not self.tool_cache_directory:
            self.tool_cache_directory = default_tool_cache_directory(
                self.platform, self.temp_directory
            )

    @property
    def latest_release_url(self) -> str:
        return f"{self.release_host.rstrip('/')}/{self.repository}/releases/latest"

    @property
    def config_file_path(self) -> str:
        return os.path.join(self.action_directory, self.config_file)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "InstallerConfig":
        """
        Create an InstallerConfig instance from a dictionary, ignoring unknown keys
        """
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in d.items() if k in known}
        if isinstance(values.get("platform"), dict):
            values["platform"] = HostPlatform(**values["platform"])
        return cls(**values)

    @classmethod
    def from_environment(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any
    ) -> "InstallerConfig":
        """
        Create an InstallerConfig from the runner's environment variables.

        RUNNER_TEMPDIRECTORY is read first, then RUNNER_TEMP.
        Keyword overrides take precedence over the environment.
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {
            "temp_directory": environ.get("RUNNER_TEMPDIRECTORY")
            or environ.get("RUNNER_TEMP"),
            "tool_cache_directory": environ.get("RUNNER_TOOL_CACHE"),
            "action_directory": environ.get("GITHUB_ACTION_PATH"),
        }
        values.update(overrides)
        values = {k: v for k, v in values.items() if v is not None}

        if not values.get("temp_directory"):
            platform = values.get("platform") or HostPlatform.from_host()
            if isinstance(platform, dict):
                platform = HostPlatform(**platform)
            values["platform"] = platform
            values["temp_directory"] = default_temp_directory(platform, environ)

        return cls.from_dict(values)
