"""
setup-bosun installs the latest bosun release on a CI runner.
"""

from setup_bosun.ci_environment import CIEnvironment
from setup_bosun.setup_bosun_config import HostPlatform, InstallerConfig
from setup_bosun.setup_bosun_exceptions import (
    DownloadFailed,
    ExtractFailed,
    SetupBosunException,
    UnexpectedResponse,
)
from setup_bosun.setup_bosun_logger import SetupBosunLogger
from setup_bosun.tool_cache import ToolCache
from setup_bosun.tool_installer import ToolInstaller

__all__ = [
    "CIEnvironment",
    "HostPlatform",
    "InstallerConfig",
    "DownloadFailed",
    "ExtractFailed",
    "SetupBosunException",
    "UnexpectedResponse",
    "SetupBosunLogger",
    "ToolCache",
    "ToolInstaller",
]
