"""
Tool installer for setup-bosun.

This package handles:
1. Resolving the latest release tag
2. Picking the archive for the host platform
3. Downloading and extracting the archive
4. Registering it in the tool cache and on PATH
"""

from .installer import ToolInstaller

__all__ = ["ToolInstaller"]
