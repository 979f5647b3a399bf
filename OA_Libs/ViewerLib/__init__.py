"""
ViewerLib - PyQt5 user interface

This module provides the comparison window, the upload panels and the
overlay viewport.
"""

from OA_Libs.ViewerLib.overlay_viewport import OverlayViewport, is_outside_surface, pil_to_qpixmap, widget_to_viewport
from OA_Libs.ViewerLib.comparison_window import ComparisonWindow, UploadPanel

__all__ = [
    "OverlayViewport",
    "is_outside_surface",
    "pil_to_qpixmap",
    "widget_to_viewport",
    "ComparisonWindow",
    "UploadPanel",
]
