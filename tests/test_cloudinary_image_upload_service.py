"""
Tests for the Cloudinary image hosting adapter.

cloudinary.uploader is patched; no network calls are made.
"""

from unittest.mock import MagicMock, patch

from cloudinary.exceptions import Error as CloudinaryError

from app.infrastructure.products.cloudinary_image_upload_service import (
    DELETE_ERROR,
    INVALID_URL_ERROR,
    UPLOAD_ERROR,
    CloudinaryImageUploadService,
    extract_public_id,
    mime_type_for,
)


# ── Helpers ──────────────────────────────────────────────────────────


def _service() -> CloudinaryImageUploadService:
    return CloudinaryImageUploadService(
        cloud_name=None, api_key=None, api_secret=None, folder="kpsull/tests"
    )


# ═════════════════════════════════════════════════════════════════════
# Helpers of the adapter module
# ═════════════════════════════════════════════════════════════════════


class TestUrlHelpers:
    def test_mime_type_for(self) -> None:
        assert mime_type_for("photo.PNG") == "image/png"
        assert mime_type_for("photo.webp") == "image/webp"
        assert mime_type_for("photo") == "image/jpeg"

    def test_extract_public_id_with_version(self) -> None:
        url = "https://res.cloudinary.com/demo/image/upload/v1712345678/kpsull/products/abc.jpg"
        assert extract_public_id(url) == "kpsull/products/abc"

    def test_extract_public_id_without_version(self) -> None:
        url = "https://res.cloudinary.com/demo/image/upload/kpsull/abc.webp"
        assert extract_public_id(url) == "kpsull/abc"

    def test_extract_public_id_from_foreign_url(self) -> None:
        assert extract_public_id("https://example.com/abc.jpg") is None


# ═════════════════════════════════════════════════════════════════════
# Upload / delete
# ═════════════════════════════════════════════════════════════════════


class TestCloudinaryUpload:
    @patch("cloudinary.uploader.upload")
    def test_upload_returns_secure_url(self, mock_upload: MagicMock) -> None:
        mock_upload.return_value = {"secure_url": "https://res.cloudinary.com/demo/a.png"}

        result = _service().upload(b"\x89PNG", "a.png")

        assert result.value == "https://res.cloudinary.com/demo/a.png"
        data_uri = mock_upload.call_args.args[0]
        assert data_uri.startswith("data:image/png;base64,")
        assert mock_upload.call_args.kwargs["folder"] == "kpsull/tests"

    @patch("cloudinary.uploader.upload")
    def test_upload_error(self, mock_upload: MagicMock) -> None:
        mock_upload.side_effect = CloudinaryError("quota exceeded")
        assert _service().upload(b"data", "a.jpg").error == UPLOAD_ERROR

    @patch("cloudinary.uploader.upload")
    def test_upload_without_url(self, mock_upload: MagicMock) -> None:
        mock_upload.return_value = {}
        assert _service().upload(b"data", "a.jpg").error == UPLOAD_ERROR


class TestCloudinaryDelete:
    @patch("cloudinary.uploader.destroy")
    def test_delete_by_public_id(self, mock_destroy: MagicMock) -> None:
        url = "https://res.cloudinary.com/demo/image/upload/v1/kpsull/abc.jpg"
        assert _service().delete(url).is_success
        mock_destroy.assert_called_once_with("kpsull/abc")

    @patch("cloudinary.uploader.destroy")
    def test_delete_invalid_url(self, mock_destroy: MagicMock) -> None:
        assert _service().delete("/uploads/abc.jpg").error == INVALID_URL_ERROR
        mock_destroy.assert_not_called()

    @patch("cloudinary.uploader.destroy")
    def test_delete_error(self, mock_destroy: MagicMock) -> None:
        mock_destroy.side_effect = CloudinaryError("not found")
        url = "https://res.cloudinary.com/demo/image/upload/kpsull/abc.jpg"
        assert _service().delete(url).error == DELETE_ERROR
