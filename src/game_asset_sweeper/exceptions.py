"""Custom exceptions for game-asset-sweeper."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .core.types import QuarantineReport


class SweeperError(Exception):
    """Base exception for all sweeper errors."""


class OperationInProgressError(SweeperError):
    """Raised when an operation starts while another one is still running."""


class NoScanResultError(SweeperError):
    """Raised when an operation needs a scan result and none exists."""


class FolderNotFoundError(SweeperError):
    """Raised when a folder reference cannot be resolved to a directory."""


class UuidMapError(SweeperError):
    """Raised when a UUID replace map is missing or malformed."""


class QuarantineError(SweeperError):
    """Raised when a quarantine operation cannot continue at all.

    The report accumulated before the failure is kept on ``report``.
    """

    def __init__(self, message: str, report: "QuarantineReport"):
        self.report = report
        super().__init__(message)
