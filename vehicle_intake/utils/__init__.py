"""Utility modules for configuration, logging, and error handling."""

from .config import Config
from .errors import InspectionError, Notice
from .logging import setup_logging

__all__ = [
    'Config',
    'InspectionError',
    'Notice',
    'setup_logging'
]
