"""
Exceptions raised by the reconciliation core.

Ambiguous matches are not errors: they end as a ``flagged`` outcome.
"""

from typing import Optional


class ReconciliationError(Exception):
    """Base class for everything raised by the reconciliation core"""


# =============================================================================
# PER-RECORD RESOLUTION
# =============================================================================

class ResolutionError(ReconciliationError):
    """A single source record could not be resolved"""


class InvalidSourceRecordError(ResolutionError):
    def __init__(self, source_system: str, source_record_id: str, reason: str):
        self.source_system = source_system
        self.source_record_id = source_record_id
        super().__init__(f"Invalid record {source_system}:{source_record_id}: {reason}")


class UnknownSourceSystemError(ResolutionError):
    def __init__(self, source_system: str):
        self.source_system = source_system
        super().__init__(f"Unknown source system: {source_system}")


class ReviewStateError(ResolutionError):
    """Merge candidate is missing or no longer pending"""


# =============================================================================
# STORE
# =============================================================================

class StoreError(ReconciliationError):
    """Write or read against the canonical store failed"""


class SlugConflictError(StoreError):
    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Canonical artist slug already taken: {slug}")


class TransientStoreError(StoreError):
    """Connection-level failure worth retrying for the same record"""


# =============================================================================
# SOURCES
# =============================================================================

class SourceFetchError(ReconciliationError):
    def __init__(self, source_system: str, offset: int, cause: Optional[Exception] = None):
        self.source_system = source_system
        self.offset = offset
        message = f"Failed to fetch {source_system} records at offset {offset}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
