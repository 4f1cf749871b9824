"""
Image ingestion: reading and validating user-selected images.
"""

from .file_validator import FileValidator
from .image_ingestor import ImageIngestor

__all__ = ["FileValidator", "ImageIngestor"]
