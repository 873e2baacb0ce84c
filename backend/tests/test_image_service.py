"""
StudySphere Backend: Image Service Tests
==========================================

What:  ImageService path resolution for /images/{filename}.

Test Strategy:
    ✅ Allowed extensions, case-insensitive
    ✅ Rejected extensions (.txt, .html, none)
    ✅ Files inside IMAGES_DIR, including subdirectories
    ✅ Traversal outside IMAGES_DIR rejected
    ✅ Missing files raise "Image not found"
"""

import pytest

from app.exceptions import NotFoundError, ValidationError
from app.services.image_service import ImageService


class TestExtensionValidation:

    def setup_method(self):
        self.service = ImageService(images_dir="/nonexistent")

    @pytest.mark.parametrize("filename", ["math.png", "art.JPG", "music.jpeg", "logo.svg", "a.webp", "b.gif"])
    def test_image_extensions_allowed(self, filename):
        self.service.validate_extension(filename)

    @pytest.mark.parametrize("filename", ["notes.txt", "index.html", "server.js", "noextension"])
    def test_other_extensions_rejected(self, filename):
        with pytest.raises(ValidationError, match="not served"):
            self.service.validate_extension(filename)


class TestResolve:

    def test_resolves_existing_image(self, images_dir):
        service = ImageService(images_dir=str(images_dir))
        path = service.resolve("math.png")
        assert path == (images_dir / "math.png").resolve()

    def test_resolves_nested_image(self, images_dir):
        service = ImageService(images_dir=str(images_dir))
        assert service.resolve("icons/star.png").name == "star.png"

    def test_missing_image(self, images_dir):
        service = ImageService(images_dir=str(images_dir))
        with pytest.raises(NotFoundError) as exc_info:
            service.resolve("english.png")
        assert exc_info.value.message == "Image not found"

    def test_traversal_rejected(self, images_dir):
        """secret.png exists one level above IMAGES_DIR and must not be reachable."""
        service = ImageService(images_dir=str(images_dir))
        with pytest.raises(ValidationError, match="Invalid image path"):
            service.resolve("../secret.png")

    def test_null_byte_rejected(self, images_dir):
        service = ImageService(images_dir=str(images_dir))
        with pytest.raises(ValidationError, match="Invalid image path"):
            service.resolve("a\x00.png")

    def test_absolute_path_rejected(self, images_dir):
        service = ImageService(images_dir=str(images_dir))
        with pytest.raises(ValidationError, match="Invalid image path"):
            service.resolve(str(images_dir.parent / "secret.png"))

    def test_directory_is_not_an_image(self, images_dir):
        (images_dir / "folder.png").mkdir()
        service = ImageService(images_dir=str(images_dir))
        with pytest.raises(NotFoundError):
            service.resolve("folder.png")

    def test_media_type(self, images_dir):
        service = ImageService(images_dir=str(images_dir))
        assert service.media_type(images_dir / "math.png") == "image/png"
        assert service.media_type(images_dir / "photo.jpeg") == "image/jpeg"
