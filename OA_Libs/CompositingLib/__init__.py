"""
CompositingLib - Image resources and overlay compositing

This module provides the image resource models and the compositor that
renders the base and overlay images into the comparison viewport.
"""

from OA_Libs.CompositingLib.image_models import ImageResource, ImageRole
from OA_Libs.CompositingLib.compositor import Compositor, RenderedFrame, contain_fit

__all__ = [
    "ImageResource",
    "ImageRole",
    "Compositor",
    "RenderedFrame",
    "contain_fit",
]
