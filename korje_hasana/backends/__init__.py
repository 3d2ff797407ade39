"""
Backends package for the Korje Hasana client.

This module re-exports the backend interfaces and the concrete backend classes
so downstream code can import from `korje_hasana.backends` directly.
"""

from korje_hasana.backends.abstract import (
    AbstractRowStoreBackend,
    OperationResult,
    RowStoreBackend,
)
from korje_hasana.backends.apps_script import AppsScriptBackend
from korje_hasana.backends.sheetdb import SheetDBBackend

__all__ = [
    # Abstracts
    "AbstractRowStoreBackend",
    "OperationResult",
    "RowStoreBackend",
    # Concrete backends
    "AppsScriptBackend",
    "SheetDBBackend",
]
