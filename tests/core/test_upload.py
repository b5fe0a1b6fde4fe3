"""
tests/core/test_upload.py

S3 object removal used when photos are deleted.
"""

from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError

from app.core.config import settings
from app.core.upload import build_object_url, delete_file_from_s3


def test_build_object_url() -> None:
    assert build_object_url("photos/a.jpg") == (
        f"https://{settings.AWS_S3_BUCKET}.s3.{settings.AWS_REGION}.amazonaws.com/photos/a.jpg"
    )


@patch("app.core.upload.s3_client")
def test_delete_file_from_s3(mock_client: MagicMock) -> None:
    assert delete_file_from_s3("photos/a.jpg") is True
    mock_client.delete_object.assert_called_once_with(Bucket=settings.AWS_S3_BUCKET, Key="photos/a.jpg")


@patch("app.core.upload.s3_client")
def test_delete_file_from_s3_client_error(mock_client: MagicMock) -> None:
    mock_client.delete_object.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "DeleteObject"
    )
    assert delete_file_from_s3("photos/a.jpg") is False


@patch("app.core.upload.s3_client")
def test_delete_file_from_s3_without_key(mock_client: MagicMock) -> None:
    assert delete_file_from_s3("") is False
    mock_client.delete_object.assert_not_called()
