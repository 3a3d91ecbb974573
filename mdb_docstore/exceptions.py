"""
Custom exceptions for MDB_DOCSTORE.

Driver errors are never wrapped; these types only cover problems detected
by this package before a driver call is made.
"""

from typing import Any, Dict, Optional


class DocumentStoreError(RuntimeError):
    """
    Base exception for document store errors.

    Attributes:
        message: Error message
        context: Optional dictionary with additional context (collection_name,
                 operation, etc.)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class ConfigurationError(DocumentStoreError):
    """
    Raised when configuration is invalid or missing.

    Attributes:
        message: Error message
        config_key: Configuration key that caused the error (if available)
        config_value: Configuration value that caused the error (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if config_key:
            context["config_key"] = config_key
        if config_value is not None:
            context["config_value"] = config_value
        super().__init__(message, context=context)
        self.config_key = config_key
        self.config_value = config_value


class DocumentShapeError(DocumentStoreError):
    """
    Raised when a document, or a requested document type, cannot be stored.

    This covers unsupported document shapes and documents that lack the
    identifier an operation needs (e.g. a replace-by-id update).

    Attributes:
        message: Error message
        document_type: Name of the offending type (if available)
        operation: Facade operation that rejected the document (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        document_type: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if document_type:
            context["document_type"] = document_type
        if operation:
            context["operation"] = operation
        super().__init__(message, context=context)
        self.document_type = document_type
        self.operation = operation
