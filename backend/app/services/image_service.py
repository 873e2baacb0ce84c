"""
StudySphere Backend: Lesson Image Service
===========================================

What:  Resolves requested image names to files under IMAGES_DIR.
Who:   Called by GET /images/{filename}.

Checks, cheapest first:
    1. Extension: only image types are served from this directory
    2. Containment: the resolved path must stay inside IMAGES_DIR
       (rejects ../ traversal and absolute paths)
    3. Existence: missing files become NotFoundError ("Image not found")
"""

import logging
import mimetypes
from pathlib import Path
from typing import Optional

from app.config import settings
from app.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg"}


class ImageService:
    """Maps image names to files inside the images directory."""

    def __init__(self, images_dir: Optional[str] = None):
        """
        Args:
            images_dir: Override the configured directory (used in tests).
        """
        self._images_dir = images_dir

    @property
    def images_root(self) -> Path:
        # Resolved per call so a changed IMAGES_DIR setting is picked up
        return Path(self._images_dir or settings.images_dir).resolve()

    def validate_extension(self, filename: str) -> str:
        """
        Returns the normalized (lowercase) extension.

        Raises:
            ValidationError: The extension is not an image type
        """
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"File type '{ext}' is not served. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
                field="filename",
                context={"extension": ext},
            )
        return ext

    def resolve(self, filename: str) -> Path:
        """
        Resolve an image name to an existing file.

        Raises:
            ValidationError: Disallowed extension, malformed path, or the path
                             leaves IMAGES_DIR
            NotFoundError: The file does not exist
        """
        self.validate_extension(filename)

        root = self.images_root
        try:
            full_path = (root / filename).resolve()
        except (ValueError, OSError):
            # e.g. an embedded NUL byte from a %00 in the URL
            raise ValidationError(message="Invalid image path", field="filename")
        if not full_path.is_relative_to(root):
            logger.warning("Rejected image path outside images dir: %s", filename)
            raise ValidationError(message="Invalid image path", field="filename")

        try:
            exists = full_path.is_file()
        except OSError:
            raise ValidationError(message="Invalid image path", field="filename")
        if not exists:
            raise NotFoundError(resource="image", resource_id=filename)

        return full_path

    @staticmethod
    def media_type(path: Path) -> str:
        """Content type guessed from the file name."""
        guessed, _ = mimetypes.guess_type(path.name)
        return guessed or "application/octet-stream"


image_service = ImageService()
