"""
Adapter: Cloudinary image hosting.

Implements ImageUploadService port with the Cloudinary SDK.
Files are sent as base64 data URIs into a single folder; deletion
works from the public URL by extracting the Cloudinary public id.
"""

import base64
import logging
import re
from typing import Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from app.domain.products.ports import ImageUploadService
from app.shared.domain import Result

logger = logging.getLogger(__name__)

UPLOAD_ERROR = "Erreur lors de l'upload de l'image"
DELETE_ERROR = "Erreur lors de la suppression de l'image"
INVALID_URL_ERROR = "URL invalide pour la suppression"

_MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
}
_PUBLIC_ID_PATTERN = re.compile(r"/upload/(?:v\d+/)?(.+?)(\.[a-z0-9]+)?$", re.IGNORECASE)


def mime_type_for(filename: str) -> str:
    """Guess the image MIME type from the extension, defaulting to JPEG."""
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return _MIME_TYPES.get(extension, "image/jpeg")


def extract_public_id(url: str) -> Optional[str]:
    match = _PUBLIC_ID_PATTERN.search(url)
    return match.group(1) if match else None


class CloudinaryImageUploadService(ImageUploadService):
    """Cloudinary-backed image host.

    Args:
        cloud_name: Cloudinary cloud name.
        api_key: API key of the account.
        api_secret: API secret of the account.
        folder: Destination folder of every upload.
    """

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        folder: str = "kpsull/products",
    ) -> None:
        if cloud_name:
            cloudinary.config(
                cloud_name=cloud_name,
                api_key=api_key,
                api_secret=api_secret,
                secure=True,
            )
        self._folder = folder

    def upload(self, data: bytes, filename: str) -> Result[str]:
        encoded = base64.b64encode(data).decode("ascii")
        data_uri = f"data:{mime_type_for(filename)};base64,{encoded}"
        try:
            response = cloudinary.uploader.upload(
                data_uri, folder=self._folder, resource_type="image"
            )
        except (CloudinaryError, OSError) as exc:
            logger.error("Cloudinary upload failed for %s: %s", filename, exc)
            return Result.fail(UPLOAD_ERROR)

        url = response.get("secure_url")
        if not url:
            logger.error("Cloudinary upload of %s returned no secure_url", filename)
            return Result.fail(UPLOAD_ERROR)
        logger.debug("Uploaded %s to %s", filename, url)
        return Result.ok(url)

    def delete(self, url: str) -> Result[None]:
        public_id = extract_public_id(url)
        if not public_id:
            return Result.fail(INVALID_URL_ERROR)
        try:
            cloudinary.uploader.destroy(public_id)
        except (CloudinaryError, OSError) as exc:
            logger.error("Cloudinary delete failed for %s: %s", public_id, exc)
            return Result.fail(DELETE_ERROR)
        logger.debug("Deleted Cloudinary image %s", public_id)
        return Result.ok()
