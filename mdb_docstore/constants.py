"""
Constants for MDB_DOCSTORE.

This module contains all shared constants used across the codebase to avoid
magic numbers and improve maintainability.
"""

from typing import Final

# ============================================================================
# CONNECTION CONSTANTS
# ============================================================================

DEFAULT_MONGO_URI: Final[str] = "mongodb://localhost:27017"
"""Local endpoint used when no connection string is configured."""

DEFAULT_APP_NAME: Final[str] = "mdb_docstore"
"""Application name reported to the server in the connection handshake."""

SUPPORTED_URI_SCHEMES: Final[tuple[str, ...]] = ("mongodb://", "mongodb+srv://")
"""Connection string schemes accepted by the driver."""

# ============================================================================
# DOCUMENT CONSTANTS
# ============================================================================

ID_FIELD: Final[str] = "_id"
"""Primary key field of every stored document."""

# ============================================================================
# METRICS CONSTANTS
# ============================================================================

MAX_TRACKED_OPERATIONS: Final[int] = 10000
"""Maximum number of distinct operation keys kept by the metrics collector."""
