"""
Korje Hasana (কর্জে হাসানা) - client for a charity's spreadsheet-backed row-store.

This package collects three kinds of submissions and publishes aggregate
statistics for the charity's site:

- Loan/aid applications
- Donations
- Volunteer registrations

Rows live in an external spreadsheet reached through either SheetDB or a
Google Apps Script web app; both sit behind the same service interface.
"""

from __future__ import annotations

__version__ = "1.0.0"
__license__ = "MIT"

# Public API exports
from korje_hasana.aggregator import StatisticsAggregator, SuccessRatePolicy
from korje_hasana.backends.abstract import (
    AbstractRowStoreBackend,
    OperationResult,
    RowStoreBackend,
)
from korje_hasana.config import Settings, get_settings
from korje_hasana.domain.models import RecordKind, Statistics
from korje_hasana.errors import (
    BackendRejection,
    MalformedResponse,
    NetworkFailure,
    RowStoreError,
    ValidationFailure,
)
from korje_hasana.gateway import SubmissionGateway
from korje_hasana.service import KorjeHasanaService, available_backends
from korje_hasana.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Service
    "KorjeHasanaService",
    "available_backends",
    "SubmissionGateway",
    "StatisticsAggregator",
    "SuccessRatePolicy",
    # Backend abstractions
    "RowStoreBackend",
    "AbstractRowStoreBackend",
    "OperationResult",
    # Domain
    "RecordKind",
    "Statistics",
    # Errors
    "RowStoreError",
    "NetworkFailure",
    "BackendRejection",
    "MalformedResponse",
    "ValidationFailure",
    # Logging
    "configure_logging",
    "get_logger",
]
