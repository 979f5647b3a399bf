"""
Unit tests for image_upload module.

Tests file validation, decoding and delivery of uploaded images.
"""

from pathlib import Path
from unittest.mock import Mock

import pytest
from PIL import Image

from OA_Libs.CompositingLib.image_models import ImageResource, ImageRole
from OA_Libs.ImportLib.image_upload import (
    ImageUploader,
    decode_image,
    get_supported_image_formats,
    is_image_media_type,
    is_supported_image,
)


@pytest.fixture
def png_path(tmp_path):
    path = tmp_path / "design.png"
    Image.new("RGB", (40, 30), "white").save(path, format="PNG")
    return path


class TestFormatChecks:
    """Tests for media type and extension checks."""

    def test_supported_formats_sorted(self):
        formats = get_supported_image_formats()
        assert formats == sorted(formats)
        assert ".png" in formats

    def test_png_is_image_media_type(self):
        assert is_image_media_type(Path("shot.png"))
        assert is_image_media_type(Path("shot.JPG"))

    def test_text_is_not_image(self):
        assert not is_image_media_type(Path("notes.txt"))
        assert not is_supported_image(Path("notes.txt"))

    def test_unsupported_image_extension(self):
        # image/svg+xml is an image media type, but not a raster we decode
        assert not is_supported_image(Path("icon.svg"))

    def test_no_extension(self):
        assert not is_supported_image(Path("README"))


class TestDecodeImage:
    """Tests for decode_image function."""

    def test_decodes_to_rgba(self, png_path):
        image = decode_image(png_path)
        assert image.mode == "RGBA"
        assert image.size == (40, 30)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            decode_image(tmp_path / "missing.png")

    def test_corrupt_file(self, tmp_path):
        bogus = tmp_path / "bogus.png"
        bogus.write_bytes(b"not really a png")
        with pytest.raises(IOError):
            decode_image(bogus)


class TestImageUploader:
    """Tests for ImageUploader delivery."""

    def test_delivers_valid_image(self, png_path):
        callback = Mock()
        uploader = ImageUploader(callback)

        resource = uploader.load_path(ImageRole.BASE, png_path)

        assert isinstance(resource, ImageResource)
        assert resource.role is ImageRole.BASE
        assert resource.source_path == png_path
        assert resource.display_name == "design.png"
        callback.assert_called_once_with(ImageRole.BASE, resource)

    def test_accepts_string_paths(self, png_path):
        callback = Mock()
        resource = ImageUploader(callback).load_path(ImageRole.OVERLAY, str(png_path))

        assert resource is not None
        callback.assert_called_once()

    def test_ignores_non_image_file(self, tmp_path):
        notes = tmp_path / "notes.txt"
        notes.write_text("hello")
        callback = Mock()

        assert ImageUploader(callback).load_path(ImageRole.BASE, notes) is None
        callback.assert_not_called()

    def test_ignores_undecodable_image(self, tmp_path):
        bogus = tmp_path / "bogus.png"
        bogus.write_bytes(b"\x00\x01\x02")
        callback = Mock()

        assert ImageUploader(callback).load_path(ImageRole.BASE, bogus) is None
        callback.assert_not_called()

    def test_ignores_missing_file(self, tmp_path):
        callback = Mock()

        assert ImageUploader(callback).load_path(ImageRole.BASE, tmp_path / "gone.png") is None
        callback.assert_not_called()

    def test_load_first_uses_first_path(self, tmp_path, png_path):
        other = tmp_path / "second.png"
        Image.new("RGB", (5, 5), "black").save(other, format="PNG")
        callback = Mock()

        resource = ImageUploader(callback).load_first(ImageRole.OVERLAY, [png_path, other])

        assert resource.source_path == png_path
        callback.assert_called_once()

    def test_load_first_with_no_paths(self):
        callback = Mock()
        assert ImageUploader(callback).load_first(ImageRole.OVERLAY, []) is None
        callback.assert_not_called()

    def test_requires_callable(self):
        with pytest.raises(ValueError):
            ImageUploader(None)

    def test_feeds_comparison_session(self, session, png_path, tmp_path):
        shot = tmp_path / "shot.png"
        Image.new("RGB", (40, 30), "gray").save(shot, format="PNG")
        uploader = ImageUploader(session.load_resource)

        uploader.load_path(ImageRole.BASE, png_path)
        uploader.load_path(ImageRole.OVERLAY, shot)

        assert session.is_comparison_active
        assert session.render().blended
