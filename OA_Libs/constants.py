"""
Constants and configuration values for Overlay Align.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Logging
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVEL_ENV_VAR = "OVERLAY_ALIGN_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# UI constants
APP_TITLE = "Design Comparison Tool"
APP_SUBTITLE = "Compare a design against a screenshot, pixel for pixel"
COMPARISON_HEADING = "Overlay Comparison"
DEFAULT_WINDOW_WIDTH = 1400
DEFAULT_WINDOW_HEIGHT = 900
UPLOAD_PREVIEW_WIDTH = 480
UPLOAD_PREVIEW_HEIGHT = 270

# Comparison viewport (16:9)
DEFAULT_VIEWPORT_WIDTH = 1280
DEFAULT_VIEWPORT_HEIGHT = 720

# Colors
VIEWPORT_BACKGROUND_COLOR = (17, 17, 17, 255)
DROP_ZONE_BORDER_COLOR = "#4a4a4a"
DROP_ZONE_HIGHLIGHT_COLOR = "#3b82f6"
PLACEHOLDER_TEXT_COLOR = "#9ca3af"

# Alignment defaults
DEFAULT_OPACITY = 0.5
OPACITY_MIN = 0.0
OPACITY_MAX = 1.0
OPACITY_PERCENT_MAX = 100
DEFAULT_NUDGE_STEP = 1
LARGE_NUDGE_STEP = 10

# Image roles
ROLE_BASE = "base"
ROLE_OVERLAY = "overlay"
ROLE_LABELS = {
    ROLE_BASE: "Design",
    ROLE_OVERLAY: "Screenshot",
}

# Compositing
COMPOSITE_MODE = "RGBA"
# Fitted layers kept per compositor: two viewport layers plus two slot previews
FIT_CACHE_SIZE = 4

# Supported file formats
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}
IMAGE_MEDIA_TYPE_PREFIX = "image/"
IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp)"
