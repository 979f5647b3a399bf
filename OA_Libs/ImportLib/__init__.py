"""
ImportLib - Image upload handling

This module validates user-supplied files and delivers decoded images to the
comparison session.
"""

from OA_Libs.ImportLib.image_upload import (
    ImageUploader,
    decode_image,
    get_supported_image_formats,
    is_image_media_type,
    is_supported_image,
)

__all__ = [
    "ImageUploader",
    "decode_image",
    "get_supported_image_formats",
    "is_image_media_type",
    "is_supported_image",
]
