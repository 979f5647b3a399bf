"""
Image data models for Overlay Align.

Classes:
    ImageRole: Which slot an image occupies (fixed base or movable overlay)
    ImageResource: A decoded image together with its role and source path
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from OA_Libs.constants import ROLE_BASE, ROLE_LABELS, ROLE_OVERLAY


class ImageRole(Enum):
    BASE = ROLE_BASE
    OVERLAY = ROLE_OVERLAY

    @property
    def label(self) -> str:
        return ROLE_LABELS[self.value]


@dataclass(frozen=True)
class ImageResource:
    """A decoded image handed to the core by the upload collaborator.

    Attributes:
        role: Slot this image fills
        image: PIL Image (RGBA after import)
        source_path: File the image was read from, if any
    """
    role: ImageRole
    image: Any
    source_path: Optional[Path] = None

    def __post_init__(self):
        if not isinstance(self.role, ImageRole):
            raise TypeError(f"role must be an ImageRole, got {type(self.role)}")
        if not hasattr(self.image, "mode"):
            raise TypeError(f"Expected PIL Image, got {type(self.image)}")

    @property
    def size(self):
        return self.image.size

    @property
    def display_name(self) -> str:
        if self.source_path is not None:
            return self.source_path.name
        return self.role.label
