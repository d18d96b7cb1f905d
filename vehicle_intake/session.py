"""
Entry point for embedding the inspection core in a form.

Configuration, logging and the photo collaborators are created lazily on the
first session and shared by every later one.
"""

import logging
import uuid
from pathlib import Path
from typing import Callable, Optional

from .models.inspection import VehicleBodyType, VehicleInspection
from .orchestration.orchestrator import InspectionCallback, InspectionOrchestrator
from .photos.compression import ImageCompressor
from .photos.manager import NoticeCallback
from .photos.storage import PhotoStorage, create_photo_storage
from .utils.config import Config
from .utils.errors import ConfigurationError, ErrorContext, ErrorType, InspectionError
from .utils.logging import set_context, setup_logging

logger = logging.getLogger(__name__)

# Shared components, initialized once
_config: Optional[Config] = None
_storage: Optional[PhotoStorage] = None
_compressor: Optional[ImageCompressor] = None


def _initialize_system(config_path: str = "config.yaml") -> None:
    """
    Load configuration, set up logging and build the photo collaborators.
    
    A missing configuration file falls back to built-in defaults; a malformed
    one is an error.
    
    Raises:
        ConfigurationError: If the configuration file is invalid
        InspectionError: If the storage backend cannot be created
    """
    global _config, _storage, _compressor
    
    if _config is not None:
        return
    
    if Path(config_path).exists():
        config = Config.load(config_path)
    else:
        config = Config.default()
    
    setup_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file,
    )
    logger.info(
        f"Configuration loaded: storage={config.storage.backend}, "
        f"max_photos={config.photos.max_per_marker}"
    )
    
    try:
        storage = create_photo_storage(config)
    except ConfigurationError:
        raise
    except Exception as e:
        logger.error(f"Photo storage initialization failed: {str(e)}", exc_info=True)
        raise InspectionError(
            ErrorContext(
                error_type=ErrorType.STORAGE_BACKEND_UNAVAILABLE,
                message=f"Failed to initialize photo storage: {str(e)}",
                recoverable=False,
                details={"backend": config.storage.backend},
                original_exception=e
            )
        ) from e
    
    _storage = storage
    _compressor = ImageCompressor.from_config(config.compression)
    _config = config
    logger.info("Inspection system initialization complete")


def reset_system() -> None:
    """Drop the shared components so the next session re-initializes."""
    global _config, _storage, _compressor
    _config = None
    _storage = None
    _compressor = None


def create_inspection_session(
    value: Optional[VehicleInspection],
    on_change: InspectionCallback,
    fuel_level: float,
    on_fuel_level_change: Callable[[int], None],
    entry_mileage: str,
    on_entry_mileage_change: Callable[[str], None],
    body_type: Optional[VehicleBodyType],
    on_body_type_change: Callable[[VehicleBodyType], None],
    read_only: bool = False,
    notify: Optional[NoticeCallback] = None,
    config_path: str = "config.yaml"
) -> InspectionOrchestrator:
    """
    Create an orchestrator wired to the shared configuration and collaborators.
    
    Args:
        value: Current inspection record, None for a new one
        on_change: Receives every complete replacement of the record
        fuel_level: Current fuel level, 0-100
        on_fuel_level_change: Receives the selected fuel level
        entry_mileage: Current mileage text
        on_entry_mileage_change: Receives the new mileage text
        body_type: Selected body type, None until chosen
        on_body_type_change: Receives a newly selected body type
        read_only: Display the inspection without allowing changes
        notify: Optional callback for user-facing notices
        config_path: Configuration file used on first initialization
        
    Returns:
        InspectionOrchestrator for one form
    """
    _initialize_system(config_path)
    
    session_id = uuid.uuid4().hex[:8]
    set_context(inspection_session=session_id)
    logger.info(f"Starting inspection session {session_id} (read_only={read_only})")
    
    return InspectionOrchestrator(
        value=value,
        on_change=on_change,
        fuel_level=fuel_level,
        on_fuel_level_change=on_fuel_level_change,
        entry_mileage=entry_mileage,
        on_entry_mileage_change=on_entry_mileage_change,
        body_type=body_type,
        on_body_type_change=on_body_type_change,
        storage=_storage,
        compressor=_compressor,
        read_only=read_only,
        config=_config,
        notify=notify,
    )
