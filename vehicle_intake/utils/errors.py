"""Error handling utilities for the vehicle intake inspection core."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any


class ErrorType(Enum):
    """Enumeration of error types raised or recovered inside the inspection core."""
    
    # Photo pipeline errors
    PHOTO_CAPACITY_REACHED = "PHOTO_CAPACITY_REACHED"
    PHOTO_UNSUPPORTED_TYPE = "PHOTO_UNSUPPORTED_TYPE"
    PHOTO_COMPRESSION_FAILED = "PHOTO_COMPRESSION_FAILED"
    PHOTO_UPLOAD_FAILED = "PHOTO_UPLOAD_FAILED"
    PHOTO_DELETE_FAILED = "PHOTO_DELETE_FAILED"
    
    # Storage backend errors
    STORAGE_BACKEND_UNAVAILABLE = "STORAGE_BACKEND_UNAVAILABLE"
    
    # Configuration errors
    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"
    
    # General errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


@dataclass
class ErrorContext:
    """
    Context information for errors in the inspection core.
    
    Attributes:
        error_type: Type of error from ErrorType enum
        message: Human-readable error message
        recoverable: Whether the error can be recovered from
        fallback_action: Optional description of fallback action taken
        details: Optional additional error details
        original_exception: Optional original exception that caused this error
    """
    
    error_type: ErrorType
    message: str
    recoverable: bool
    fallback_action: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    original_exception: Optional[Exception] = None
    
    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error context to dictionary for logging/serialization.
        
        Returns:
            Dictionary representation of error context
        """
        return {
            "error_type": self.error_type.value,
            "message": self.message,
            "recoverable": self.recoverable,
            "fallback_action": self.fallback_action,
            "details": self.details or {},
            "original_exception": str(self.original_exception) if self.original_exception else None
        }


class InspectionError(Exception):
    """
    Base exception for all inspection core errors.
    
    Wraps errors with an ErrorContext so that component boundaries can turn
    them into user-facing notices instead of letting them propagate.
    
    Attributes:
        context: ErrorContext with detailed error information
    """
    
    def __init__(self, context: ErrorContext):
        """
        Initialize inspection error.
        
        Args:
            context: ErrorContext with error details
        """
        self.context = context
        super().__init__(context.message)
    
    def __str__(self) -> str:
        """String representation of the error."""
        base = f"{self.context.error_type.value}: {self.context.message}"
        if self.context.fallback_action:
            base += f" (Fallback: {self.context.fallback_action})"
        return base
    
    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for logging/serialization.
        
        Returns:
            Dictionary representation of error
        """
        return self.context.to_dict()


class PhotoProcessingError(InspectionError):
    """Exception for per-file photo pipeline errors (capacity, compression, upload)."""
    
    @classmethod
    def capacity_reached(
        cls,
        max_photos: int,
        dropped: int = 0
    ) -> "PhotoProcessingError":
        """
        Create error for a selection that exceeds the per-marker photo limit.
        
        Args:
            max_photos: Maximum number of photos allowed per marker
            dropped: Number of selected files that were not processed
            
        Returns:
            PhotoProcessingError instance
        """
        context = ErrorContext(
            error_type=ErrorType.PHOTO_CAPACITY_REACHED,
            message=f"Máximo {max_photos} fotos por daño",
            recoverable=True,
            fallback_action="Extra files were not uploaded",
            details={"max_photos": max_photos, "dropped": dropped}
        )
        return cls(context)
    
    @classmethod
    def unsupported_type(cls, filename: str, content_type: str) -> "PhotoProcessingError":
        """
        Create error for a file whose content type is not an accepted image type.
        
        Args:
            filename: Name of the rejected file
            content_type: Declared content type of the file
            
        Returns:
            PhotoProcessingError instance
        """
        context = ErrorContext(
            error_type=ErrorType.PHOTO_UNSUPPORTED_TYPE,
            message=f"Formato de imagen no soportado: {filename}",
            recoverable=True,
            fallback_action="Skip file and continue with remaining files",
            details={"filename": filename, "content_type": content_type}
        )
        return cls(context)
    
    @classmethod
    def compression_failed(
        cls,
        filename: str,
        error: Exception,
        fallback_action: Optional[str] = None
    ) -> "PhotoProcessingError":
        """
        Create error for image compression failure.
        
        Args:
            filename: Name of image file
            error: Original exception
            fallback_action: Optional fallback action
            
        Returns:
            PhotoProcessingError instance
        """
        context = ErrorContext(
            error_type=ErrorType.PHOTO_COMPRESSION_FAILED,
            message="Error al procesar la imagen",
            recoverable=True,
            fallback_action=fallback_action or "Skip file and continue with remaining files",
            details={"filename": filename, "reason": str(error)},
            original_exception=error
        )
        return cls(context)
    
    @classmethod
    def upload_failed(
        cls,
        filename: str,
        reason: str,
        error: Optional[Exception] = None
    ) -> "PhotoProcessingError":
        """
        Create error for a storage upload failure.
        
        Args:
            filename: Name of image file
            reason: Error message reported by the storage backend
            error: Optional original exception
            
        Returns:
            PhotoProcessingError instance
        """
        context = ErrorContext(
            error_type=ErrorType.PHOTO_UPLOAD_FAILED,
            message=f"Error al subir foto: {reason}",
            recoverable=True,
            fallback_action="Skip file and continue with remaining files",
            details={"filename": filename, "reason": reason},
            original_exception=error
        )
        return cls(context)


class ConfigurationError(InspectionError):
    """Exception for missing or malformed configuration."""
    
    @classmethod
    def missing(cls, config_path: str) -> "ConfigurationError":
        context = ErrorContext(
            error_type=ErrorType.CONFIG_MISSING,
            message=f"Configuration file not found at '{config_path}'",
            recoverable=False,
            details={"config_path": config_path}
        )
        return cls(context)
    
    @classmethod
    def invalid(cls, config_path: str, reason: str) -> "ConfigurationError":
        context = ErrorContext(
            error_type=ErrorType.CONFIG_INVALID,
            message=f"Invalid configuration in '{config_path}': {reason}",
            recoverable=False,
            details={"config_path": config_path, "reason": reason}
        )
        return cls(context)


@dataclass
class Notice:
    """
    Transient user-facing notice (a "toast").
    
    Attributes:
        level: "error" | "warning" | "info"
        message: Text shown to the user
        context: Optional error context the notice was derived from
        created_at: When the notice was raised
    """
    level: str
    message: str
    context: Optional[ErrorContext] = None
    created_at: datetime = field(default_factory=datetime.utcnow)


def handle_photo_error(
    error: Exception,
    filename: str,
    logger: logging.Logger,
    stage: str = "upload"
) -> Notice:
    """
    Log a recoverable photo pipeline error and convert it into a notice.
    
    Errors are terminal at the photo manager boundary: callers keep processing
    the remaining files and surface the returned notice to the user.
    
    Args:
        error: Exception raised while handling the file
        filename: Name of the file being processed
        logger: Logger instance for error logging
        stage: Pipeline stage that failed ('compress' or 'upload')
        
    Returns:
        Notice describing the failure
    """
    if isinstance(error, InspectionError):
        photo_error = error
    elif stage == "compress":
        photo_error = PhotoProcessingError.compression_failed(filename=filename, error=error)
    else:
        photo_error = PhotoProcessingError.upload_failed(
            filename=filename,
            reason=str(error),
            error=error
        )
    
    logger.warning(f"Photo processing error: {photo_error}")
    return Notice(level="error", message=photo_error.context.message, context=photo_error.context)
