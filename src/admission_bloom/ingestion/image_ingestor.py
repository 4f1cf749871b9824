"""
Image ingestion: user file -> EncodedImage.

The read happens off the event loop; the payload and the preview are
built from that single read.
"""
import asyncio
import logging
import os
from pathlib import Path
from typing import Any, Optional, Sequence

from ..exceptions import ImageReadError
from ..schemas import EncodedImage
from .file_validator import FileValidator

logger = logging.getLogger(__name__)


class ImageIngestor:
    """
    Reads a user-selected image into memory.
    
    Accepts a filesystem path, raw bytes, or a binary file-like object
    (anything with read(), such as an upload stream).
    """

    def __init__(self, validator: Optional[FileValidator] = None):
        """
        :param validator: Optional validator (defaults to FileValidator)
        """
        self._validator = validator or FileValidator()

    async def ingest(self, raw_file: Any) -> EncodedImage:
        """
        Read and validate one image.
        
        :param raw_file: Path, bytes, or binary file-like object
        :return: EncodedImage with payload and preview from the same bytes
        :raises ImageReadError: if the file cannot be read or is not an image
        """
        source_name = self._source_name(raw_file)
        data = await self._read(raw_file, source_name)
        media_type = self._validator.detect_media_type(data, source_name=source_name)

        image = EncodedImage.from_bytes(data, media_type, source_name=source_name)
        logger.info(
            f"Ingested image {source_name or '<memory>'}: "
            f"{media_type}, {image.size_bytes} bytes"
        )
        return image

    async def ingest_first(self, files: Sequence[Any]) -> EncodedImage:
        """Ingest the first file of a selection; the rest are ignored."""
        return await self.ingest(self.select_first(files))

    @staticmethod
    def select_first(files: Sequence[Any]) -> Any:
        """
        Pick the first file of a user selection.
        
        :raises ImageReadError: if nothing was selected
        """
        if not files:
            raise ImageReadError("No file selected")
        if len(files) > 1:
            logger.debug(f"{len(files)} files selected, using only the first")
        return files[0]

    async def _read(self, raw_file: Any, source_name: Optional[str]) -> bytes:
        if isinstance(raw_file, (bytes, bytearray)):
            return bytes(raw_file)

        try:
            if isinstance(raw_file, (str, os.PathLike)):
                return await asyncio.to_thread(Path(raw_file).read_bytes)
            if hasattr(raw_file, "read"):
                data = await asyncio.to_thread(raw_file.read)
                if not isinstance(data, (bytes, bytearray)):
                    raise ImageReadError(
                        "File stream must be opened in binary mode",
                        source_name=source_name,
                    )
                return bytes(data)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read image {source_name}: {e}")
            raise ImageReadError(f"Could not read file: {str(e)}", source_name=source_name) from e

        raise ImageReadError(
            f"Unsupported file input: {type(raw_file).__name__}",
            source_name=source_name,
        )

    @staticmethod
    def _source_name(raw_file: Any) -> Optional[str]:
        if isinstance(raw_file, (str, os.PathLike)):
            return Path(raw_file).name
        name = getattr(raw_file, "filename", None) or getattr(raw_file, "name", None)
        if isinstance(name, str):
            return Path(name).name
        return None
