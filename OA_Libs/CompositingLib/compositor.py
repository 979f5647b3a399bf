"""
Overlay Compositor.

Renders the base image and the offset, alpha-blended overlay image into a
single viewport-sized frame. Both images are fitted into the viewport with an
aspect-preserving "contain" fit and centred. The overlay layer is then faded
by the opacity, translated by the position and composited above the base.

Rendering is pure: the same base, overlay, position and opacity always give a
pixel-identical frame.

Example:
    >>> base = ImageResource(ImageRole.BASE, Image.new("RGBA", (160, 90), "red"))
    >>> overlay = ImageResource(ImageRole.OVERLAY, Image.new("RGBA", (160, 90), "blue"))
    >>> compositor = Compositor(viewport_size=(320, 180))
    >>> frame = compositor.render(base, overlay, Position(10, 0), 0.5)
    >>> frame.blended
    True
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np
from PIL import Image

from OA_Libs.AlignmentLib.position_model import Position
from OA_Libs.CompositingLib.image_models import ImageResource, ImageRole
from OA_Libs.constants import (
    COMPOSITE_MODE,
    DEFAULT_VIEWPORT_HEIGHT,
    DEFAULT_VIEWPORT_WIDTH,
    FIT_CACHE_SIZE,
    VIEWPORT_BACKGROUND_COLOR,
)

Size = Tuple[int, int]


@dataclass(frozen=True)
class RenderedFrame:
    """Result of a render call.

    Attributes:
        image: Viewport-sized RGBA PIL Image
        blended: True only when both images were present and composited
        missing_roles: Roles that had no image at render time
    """
    image: Any
    blended: bool
    missing_roles: Tuple[ImageRole, ...] = ()


def contain_fit(source_size: Size, box_size: Size) -> Tuple[Size, Tuple[int, int]]:
    """
    Fit a source rectangle inside a box, preserving aspect ratio.

    Args:
        source_size: (width, height) of the image
        box_size: (width, height) of the area to fit into

    Returns:
        ((fitted_width, fitted_height), (left, top)) where (left, top)
        centres the fitted image in the box

    Raises:
        ValueError: If any dimension is not positive
    """
    src_w, src_h = source_size
    box_w, box_h = box_size
    if src_w <= 0 or src_h <= 0:
        raise ValueError(f"Source size must be positive, got {source_size}")
    if box_w <= 0 or box_h <= 0:
        raise ValueError(f"Box size must be positive, got {box_size}")

    scale = min(box_w / src_w, box_h / src_h)
    fit_w = min(box_w, max(1, int(round(src_w * scale))))
    fit_h = min(box_h, max(1, int(round(src_h * scale))))
    return (fit_w, fit_h), ((box_w - fit_w) // 2, (box_h - fit_h) // 2)


class Compositor:
    """Composites the base and overlay images into the comparison viewport."""

    def __init__(
        self,
        viewport_size: Size = (DEFAULT_VIEWPORT_WIDTH, DEFAULT_VIEWPORT_HEIGHT),
        background_color: Tuple[int, int, int, int] = VIEWPORT_BACKGROUND_COLOR,
    ):
        width, height = viewport_size
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport_size must be positive, got {viewport_size}")
        self.viewport_size: Size = (int(width), int(height))
        self.background_color = tuple(background_color)
        # (id(image), box) -> (image, fitted layer); the image is kept so its id stays unique
        self._fit_cache: "OrderedDict[Tuple[int, Size], Tuple[Any, Any]]" = OrderedDict()

    def render(
        self,
        base: Optional[ImageResource],
        overlay: Optional[ImageResource],
        position: Position,
        opacity: float,
    ) -> RenderedFrame:
        """
        Render one comparison frame.

        Args:
            base: Fixed reference image, or None
            overlay: Movable comparison image, or None
            position: Overlay offset in viewport pixels
            opacity: Overlay blend factor (0.0-1.0)

        Returns:
            RenderedFrame. If either image is missing the frame is a
            placeholder surface and ``blended`` is False.
        """
        missing = tuple(
            role for role, resource in ((ImageRole.BASE, base), (ImageRole.OVERLAY, overlay))
            if resource is None
        )
        if missing:
            return RenderedFrame(image=self._blank(), blended=False, missing_roles=missing)

        frame = self._blank()
        frame = Image.alpha_composite(frame, self._fitted_layer(base.image))

        overlay_layer = self._apply_opacity(self._fitted_layer(overlay.image), opacity)
        overlay_layer = self._translate(overlay_layer, position)
        frame = Image.alpha_composite(frame, overlay_layer)

        return RenderedFrame(image=frame, blended=True)

    def render_slot_preview(self, resource: Optional[ImageResource], size: Optional[Size] = None) -> Any:
        """
        Render a single image fitted into ``size``, or a blank placeholder.

        Used by the upload panels, which show each image on its own.
        """
        box = size or self.viewport_size
        if resource is None:
            return Image.new(COMPOSITE_MODE, box, self.background_color)
        return Image.alpha_composite(
            Image.new(COMPOSITE_MODE, box, self.background_color),
            self._fitted_layer(resource.image, box),
        )

    def overlay_layer_contains(self, point: Position, position: Position) -> bool:
        """True if ``point`` lies on the overlay layer translated by ``position``."""
        width, height = self.viewport_size
        local_x = point.x - position.x
        local_y = point.y - position.y
        return 0 <= local_x < width and 0 <= local_y < height

    def _blank(self) -> Any:
        return Image.new(COMPOSITE_MODE, self.viewport_size, self.background_color)

    def _fitted_layer(self, image: Any, box: Optional[Size] = None) -> Any:
        """
        Cached _fit_layer.

        Dragging only changes the position, so the expensive resize of each
        source image happens once per image and box. Source images are treated
        as immutable; a new upload is a new image object and misses the cache.
        The returned layer is shared and must not be modified in place.
        """
        box = box or self.viewport_size
        key = (id(image), box)
        cached = self._fit_cache.get(key)
        if cached is not None and cached[0] is image:
            self._fit_cache.move_to_end(key)
            return cached[1]

        layer = self._fit_layer(image, box)
        self._fit_cache[key] = (image, layer)
        self._fit_cache.move_to_end(key)
        while len(self._fit_cache) > FIT_CACHE_SIZE:
            self._fit_cache.popitem(last=False)
        return layer

    def _fit_layer(self, image: Any, box: Optional[Size] = None) -> Any:
        """Contain-fit ``image`` centred on a transparent box-sized layer."""
        if not hasattr(image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        box = box or self.viewport_size
        image = image.convert(COMPOSITE_MODE)
        fitted_size, offset = contain_fit(image.size, box)
        if image.size != fitted_size:
            image = image.resize(fitted_size, Image.Resampling.LANCZOS)

        layer = Image.new(COMPOSITE_MODE, box, (0, 0, 0, 0))
        layer.paste(image, offset)
        return layer

    @staticmethod
    def _apply_opacity(layer: Any, opacity: float) -> Any:
        """Scale the layer's alpha channel by ``opacity``."""
        opacity = max(0.0, min(1.0, float(opacity)))
        if opacity >= 1.0:
            return layer

        pixels = np.array(layer, dtype=np.uint8)
        alpha = pixels[..., 3].astype(np.float64) * opacity
        pixels[..., 3] = np.rint(alpha).astype(np.uint8)
        return Image.fromarray(pixels)

    def _translate(self, layer: Any, position: Position) -> Any:
        """Shift the layer by ``position``, clipping to the viewport."""
        if position.x == 0 and position.y == 0:
            return layer

        width, height = self.viewport_size
        shifted = Image.new(COMPOSITE_MODE, self.viewport_size, (0, 0, 0, 0))
        if abs(position.x) >= width or abs(position.y) >= height:
            return shifted

        shifted.paste(layer, position.as_tuple())
        return shifted
