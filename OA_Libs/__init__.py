"""
OA_Libs - Overlay Align Library Modules

This package contains core functionality for the Overlay Align project,
organized into specialized sub-packages:

- AlignmentLib: Position, drag, nudge and opacity models plus the session wiring
- CompositingLib: Image resource models and the overlay compositor
- ImportLib: Image upload handling (file dialog and drag-and-drop)
- ViewerLib: PyQt5 comparison window and viewport
"""

__version__ = "0.1.0"
