"""
Configuration management for MDB_DOCSTORE.

Values passed directly always win; otherwise they are read from the
environment, and finally fall back to the package constants.
"""

import os

from .constants import DEFAULT_APP_NAME, DEFAULT_MONGO_URI, SUPPORTED_URI_SCHEMES
from .exceptions import ConfigurationError


class StoreConfig:
    """
    Document store client configuration.

    Example:
        # Using environment variables (MONGO_URI, MONGO_APP_NAME)
        config = StoreConfig()
        client = create_mongo_client(config=config)

        # Or using direct parameters
        config = StoreConfig(mongo_uri="mongodb://mongo:27017", app_name="billing")
    """

    def __init__(
        self,
        mongo_uri: str | None = None,
        app_name: str | None = None,
    ):
        """
        Initialize configuration.

        Args:
            mongo_uri: MongoDB connection URI (defaults to MONGO_URI env var,
                       then to the local endpoint)
            app_name: Application name sent to the server (defaults to
                      MONGO_APP_NAME env var, then to "mdb_docstore")
        """
        self.mongo_uri = mongo_uri or os.getenv("MONGO_URI", DEFAULT_MONGO_URI)
        self.app_name = app_name or os.getenv("MONGO_APP_NAME", DEFAULT_APP_NAME)

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: If required configuration is missing or invalid
        """
        if not self.mongo_uri:
            raise ConfigurationError(
                "mongo_uri is required (set MONGO_URI environment variable or pass directly)",
                config_key="mongo_uri",
            )

        if not self.mongo_uri.startswith(SUPPORTED_URI_SCHEMES):
            raise ConfigurationError(
                f"mongo_uri must start with one of {', '.join(SUPPORTED_URI_SCHEMES)}",
                config_key="mongo_uri",
                config_value=self.mongo_uri,
            )

        if not self.app_name:
            raise ConfigurationError("app_name must not be empty", config_key="app_name")
