"""Configuration management for the vehicle intake inspection core."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from .errors import ConfigurationError
from .logging import DEFAULT_LOG_FORMAT


DEFAULT_CHECKLIST_LABELS: List[str] = [
    "Radio / Estéreo",
    "Llanta de Repuesto",
    "Extintor",
    "Mica (espejos)",
    "Conos / Triángulos",
    "Alfombras",
    "Emblemas",
    "Gato Hidráulico",
    "Llave de Ruedas",
    "Plumillas (limpiabrisas)",
    "Tapones de Rueda",
    "Antena",
]

DEFAULT_ACCEPTED_CONTENT_TYPES: List[str] = [
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/heic",
    "image/heif",
]


def _load_env_file() -> None:
    # Resolved from the working directory, like relative config paths
    load_dotenv(find_dotenv(usecwd=True))


@dataclass
class PhotoConfig:
    """Per-marker photo policy."""
    max_per_marker: int = 3
    accepted_content_types: List[str] = field(
        default_factory=lambda: list(DEFAULT_ACCEPTED_CONTENT_TYPES)
    )


@dataclass
class CompressionConfig:
    """Image compression settings applied before upload."""
    max_size_mb: float = 1.0
    max_dimension: int = 1920
    jpeg_quality: int = 80


@dataclass
class LocalStorageConfig:
    """Filesystem photo storage settings."""
    root_dir: str = "data/damage-photos"
    public_base_url: str = "/damage-photos"


@dataclass
class S3StorageConfig:
    """S3 photo storage settings."""
    bucket: str = "damage-photos"
    region: str = "us-east-1"
    public_base_url: str = ""


@dataclass
class StorageConfig:
    """Photo storage backend selection."""
    backend: str = "local"  # "local" | "s3"
    key_prefix: str = "markers"
    local: LocalStorageConfig = field(default_factory=LocalStorageConfig)
    s3: S3StorageConfig = field(default_factory=S3StorageConfig)


@dataclass
class ChecklistConfig:
    """Inventory checklist template."""
    items: List[str] = field(default_factory=lambda: list(DEFAULT_CHECKLIST_LABELS))


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class."""
    photos: PhotoConfig
    compression: CompressionConfig
    storage: StorageConfig
    checklist: ChecklistConfig
    logging: LoggingConfig
    
    @classmethod
    def default(cls) -> "Config":
        """
        Build a configuration from built-in defaults and environment overrides.
        
        Variables from a `.env` file are loaded first, as in :meth:`load`.
        
        Returns:
            Config instance
        """
        _load_env_file()
        return cls._from_mapping({}, source="<defaults>")
    
    @classmethod
    def load(cls, config_path: str = "config.yaml") -> "Config":
        """
        Load configuration from file and environment variables.
        
        Environment variables override config file values:
        - PHOTO_STORAGE_BACKEND
        - PHOTO_STORAGE_DIR
        - PHOTO_BUCKET
        - AWS_REGION
        - LOG_LEVEL
        
        Args:
            config_path: Path to YAML configuration file
            
        Returns:
            Config instance with loaded settings
            
        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        _load_env_file()
        
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError.missing(config_path)
        
        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError.invalid(config_path, str(e)) from e
        
        if not isinstance(config_data, dict):
            raise ConfigurationError.invalid(config_path, "top-level value must be a mapping")
        
        return cls._from_mapping(config_data, source=config_path)
    
    @classmethod
    def _from_mapping(cls, config_data: Dict[str, Any], source: str) -> "Config":
        try:
            photos_data = config_data.get("photos", {}) or {}
            photo_config = PhotoConfig(
                max_per_marker=int(photos_data.get("max_per_marker", 3)),
                accepted_content_types=list(
                    photos_data.get("accepted_content_types", DEFAULT_ACCEPTED_CONTENT_TYPES)
                ),
            )
            
            compression_data = config_data.get("compression", {}) or {}
            compression_config = CompressionConfig(
                max_size_mb=float(compression_data.get("max_size_mb", 1.0)),
                max_dimension=int(compression_data.get("max_dimension", 1920)),
                jpeg_quality=int(compression_data.get("jpeg_quality", 80)),
            )
            
            # Storage configuration with environment overrides
            storage_data = config_data.get("storage", {}) or {}
            local_data = storage_data.get("local", {}) or {}
            s3_data = storage_data.get("s3", {}) or {}
            storage_config = StorageConfig(
                backend=os.getenv("PHOTO_STORAGE_BACKEND", storage_data.get("backend", "local")),
                key_prefix=storage_data.get("key_prefix", "markers"),
                local=LocalStorageConfig(
                    root_dir=os.getenv(
                        "PHOTO_STORAGE_DIR",
                        local_data.get("root_dir", "data/damage-photos")
                    ),
                    public_base_url=local_data.get("public_base_url", "/damage-photos"),
                ),
                s3=S3StorageConfig(
                    bucket=os.getenv("PHOTO_BUCKET", s3_data.get("bucket", "damage-photos")),
                    region=os.getenv("AWS_REGION", s3_data.get("region", "us-east-1")),
                    public_base_url=s3_data.get("public_base_url", "") or "",
                ),
            )
            
            checklist_data = config_data.get("checklist", {}) or {}
            checklist_config = ChecklistConfig(
                items=[str(label) for label in checklist_data.get("items", DEFAULT_CHECKLIST_LABELS)]
            )
            
            logging_data = config_data.get("logging", {}) or {}
            logging_config = LoggingConfig(
                level=os.getenv("LOG_LEVEL", logging_data.get("level", "INFO")),
                format=logging_data.get("format", LoggingConfig.format),
                file=logging_data.get("file"),
            )
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigurationError.invalid(source, str(e)) from e
        
        if storage_config.backend not in ("local", "s3"):
            raise ConfigurationError.invalid(
                source, f"unknown storage backend '{storage_config.backend}'"
            )
        if photo_config.max_per_marker < 1:
            raise ConfigurationError.invalid(source, "photos.max_per_marker must be at least 1")
        if not checklist_config.items:
            raise ConfigurationError.invalid(source, "checklist.items must not be empty")
        
        return cls(
            photos=photo_config,
            compression=compression_config,
            storage=storage_config,
            checklist=checklist_config,
            logging=logging_config,
        )
