"""
This file contains the exceptions raised while installing bosun.
"""

from typing import Optional


class SetupBosunException(Exception):
    """
    Base class for all exceptions raised by setup-bosun
    """

    def __init__(self, message: str):
        super().__init__(message)


class UnexpectedResponse(SetupBosunException):
    """
    The latest-release endpoint did not answer with a usable redirect.
    """

    def __init__(
        self,
        url: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        self.url = url
        self.status_code = status_code
        self.reason = reason or "Expected a redirect."
        message = f"Unexpected response from {url}: {self.reason}"
        if status_code is not None:
            message += f" (status {status_code})"
        super().__init__(message)


class DownloadFailed(SetupBosunException):
    """
    Fetching the release archive failed.
    """

    def __init__(self, url: str, cause: BaseException):
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to download {url}: {cause}")


class ExtractFailed(SetupBosunException):
    """
    The downloaded archive could not be unpacked.
    """

    def __init__(self, archive_path: str, cause: BaseException):
        self.archive_path = archive_path
        self.cause = cause
        super().__init__(f"Failed to extract {archive_path}: {cause}")
