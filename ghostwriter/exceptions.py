"""
Custom Exception Types for Ghostwriter

Provides specific exception classes for the turn loop and its collaborators.
"""


class GhostwriterError(Exception):
    """Base exception for all Ghostwriter-specific errors."""

    def __init__(self, message: str, error_code: str = "GHOSTWRITER_ERROR"):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class ProviderError(GhostwriterError):
    """Raised when the AI completion provider fails (network, quota, model)."""

    def __init__(self, message: str, suggestion: str = None, model: str = None):
        super().__init__(message, error_code="PROVIDER_ERROR")
        self.suggestion = suggestion
        self.model = model


class ConcurrentStreamError(GhostwriterError):
    """Raised when a stream is requested while another one is still emitting."""

    def __init__(self, message: str = "A stream is already in progress"):
        super().__init__(message, error_code="CONCURRENT_STREAM")


class StaleResponseError(GhostwriterError):
    """Raised when a response belongs to a superseded session generation."""

    def __init__(self, epoch: int, current_epoch: int):
        message = f"Response from generation {epoch} arrived after reset to {current_epoch}"
        super().__init__(message, error_code="STALE_RESPONSE")
        self.epoch = epoch
        self.current_epoch = current_epoch


class InvalidTransitionError(GhostwriterError):
    """Raised when the turn state machine is asked for an illegal transition."""

    def __init__(self, current: str, target: str):
        message = f"Cannot move from {current} to {target}"
        super().__init__(message, error_code="INVALID_TRANSITION")
        self.current = current
        self.target = target


class DocumentLockedError(GhostwriterError):
    """Raised when the human edits the document outside of their turn."""

    def __init__(self, message: str = "The document is read-only while the AI has the turn"):
        super().__init__(message, error_code="DOCUMENT_LOCKED")


class ExportError(GhostwriterError):
    """Raised when saving the document fails."""

    def __init__(self, message: str, path: str = None):
        super().__init__(message, error_code="EXPORT_ERROR")
        self.path = path


class ValidationError(GhostwriterError):
    """Raised when session settings fail validation."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message, error_code="VALIDATION_ERROR")
        self.field = field


class ConfigurationError(GhostwriterError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_key: str = None):
        super().__init__(message, error_code="CONFIGURATION_ERROR")
        self.config_key = config_key

