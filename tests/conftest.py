"""
Pytest configuration and shared fixtures for Overlay Align tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest
from PIL import Image

from OA_Libs.CompositingLib.compositor import Compositor
from OA_Libs.CompositingLib.image_models import ImageResource, ImageRole
from OA_Libs.comparison_session import ComparisonSession

# Small 16:9 viewport keeps pixel tests fast
TEST_VIEWPORT_SIZE = (320, 180)


@pytest.fixture
def make_resource():
    """
    Provide a factory for solid-colour image resources.

    Returns:
        Callable (role, color, size) -> ImageResource
    """
    def _make(role=ImageRole.BASE, color="red", size=(320, 180)):
        return ImageResource(role=role, image=Image.new("RGBA", size, color))

    return _make


@pytest.fixture
def compositor():
    return Compositor(viewport_size=TEST_VIEWPORT_SIZE)


@pytest.fixture
def session(compositor):
    """Provide an empty comparison session on the small test viewport."""
    return ComparisonSession(compositor=compositor)


@pytest.fixture
def loaded_session(session, make_resource):
    """Provide a session with a red base and a blue overlay loaded."""
    session.load_resource(ImageRole.BASE, make_resource(ImageRole.BASE, "red"))
    session.load_resource(ImageRole.OVERLAY, make_resource(ImageRole.OVERLAY, "blue"))
    return session
