"""
Image content validation.

OOP: Single Responsibility - only decides whether bytes are an image and of which type.
"""
from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError

from ..exceptions import ImageReadError


class FileValidator:
    """
    Validates raw bytes as image content using Pillow.
    
    No size or dimension limit is enforced here; that is left to the platform.
    """

    @staticmethod
    def detect_media_type(data: bytes, source_name: Optional[str] = None) -> str:
        """
        Verify the bytes decode as an image and return their MIME type.
        
        :param data: Raw file content
        :param source_name: Original file name, for error messages
        :return: MIME type such as "image/jpeg"
        :raises ImageReadError: if the content is empty or not a readable image
        """
        if not data:
            raise ImageReadError("File is empty", source_name=source_name)

        try:
            with Image.open(BytesIO(data)) as img:
                image_format = img.format
                img.verify()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
            raise ImageReadError(
                f"File is not a valid image: {str(e)}", source_name=source_name
            ) from e

        media_type = Image.MIME.get(image_format or "")
        if not media_type:
            raise ImageReadError(
                f"Image type '{image_format}' has no known media type",
                source_name=source_name,
            )

        return media_type
