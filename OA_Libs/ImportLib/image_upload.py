"""
Image upload handling for Overlay Align.

This module turns a user-selected or dropped file into an ImageResource and
hands it to a completion callback (normally ComparisonSession.load_resource).
Only files whose media type is an image and whose extension is supported are
accepted; everything else is ignored and the callback is never invoked.

Classes:
    ImageUploader: Validates, decodes and delivers uploaded images

Functions:
    get_supported_image_formats: Sorted list of accepted extensions
    is_image_media_type: Check a file's guessed media type
    is_supported_image: Check both media type and extension
    decode_image: Load a file with Pillow as an RGBA image
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union
import logging
import mimetypes

from PIL import Image

from OA_Libs.CompositingLib.image_models import ImageResource, ImageRole
from OA_Libs.constants import IMAGE_MEDIA_TYPE_PREFIX, SUPPORTED_STANDARD_IMAGES

logger = logging.getLogger(__name__)

UploadCallback = Callable[[ImageRole, ImageResource], None]
PathLike = Union[str, Path]


def get_supported_image_formats() -> List[str]:
    """
    Get list of supported standard image formats.

    Returns:
        List of file extensions (e.g., ['.bmp', '.gif', ...])
    """
    return sorted(SUPPORTED_STANDARD_IMAGES)


def is_image_media_type(file_path: Path) -> bool:
    media_type, _ = mimetypes.guess_type(str(file_path))
    return media_type is not None and media_type.startswith(IMAGE_MEDIA_TYPE_PREFIX)


def is_supported_image(file_path: Path) -> bool:
    """
    Check if a file path names an image this tool can load.

    Args:
        file_path: Path to the file

    Returns:
        True if the media type is image/* and the extension is supported
    """
    file_path = Path(file_path)
    return file_path.suffix.lower() in SUPPORTED_STANDARD_IMAGES and is_image_media_type(file_path)


def decode_image(file_path: Path):
    """
    Load an image file and convert it to RGBA.

    Raises:
        FileNotFoundError: If the file does not exist
        IOError: If Pillow cannot decode the file
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise FileNotFoundError(f"Image file not found: {file_path}")

    try:
        with Image.open(file_path) as img:
            # Animated formats contribute their first frame
            img.seek(0)
            return img.convert("RGBA")
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise IOError(f"Failed to load image from {file_path}: {str(e)}")


class ImageUploader:
    """
    Upload collaborator for the comparison session.

    Example:
        >>> session = ComparisonSession()
        >>> uploader = ImageUploader(session.load_resource)
        >>> uploader.load_path(ImageRole.BASE, "design.png")
    """

    def __init__(self, on_loaded: UploadCallback):
        if not callable(on_loaded):
            raise ValueError(f"on_loaded must be callable, got {type(on_loaded)}")
        self._on_loaded = on_loaded

    def load_path(self, role: ImageRole, file_path: PathLike) -> Optional[ImageResource]:
        """
        Validate and decode a file, then deliver it for ``role``.

        Args:
            role: Slot the image is meant for
            file_path: File chosen in the dialog or dropped on a panel

        Returns:
            The delivered ImageResource, or None if the file was ignored
        """
        file_path = Path(file_path)

        if not is_supported_image(file_path):
            logger.warning(f"Ignoring non-image file for {role.value}: {file_path}")
            return None

        try:
            image = decode_image(file_path)
        except (FileNotFoundError, IOError) as e:
            logger.warning(f"Ignoring unreadable image for {role.value}: {e}")
            return None

        resource = ImageResource(role=role, image=image, source_path=file_path)
        self._on_loaded(role, resource)
        return resource

    def load_first(self, role: ImageRole, file_paths: Iterable[PathLike]) -> Optional[ImageResource]:
        """Deliver the first path of a drop, as a single slot takes one image."""
        for file_path in file_paths:
            return self.load_path(role, file_path)
        return None
