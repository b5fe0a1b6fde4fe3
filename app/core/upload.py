"""
core/upload.py

Profile photo storage on S3:
- Validates size and sniffed image type before upload
- Streams the file to the bucket under a unique key
- Deletes stored objects when photos are removed
"""

import logging
import os
import uuid

import boto3
import filetype
from botocore.exceptions import ClientError, NoCredentialsError, PartialCredentialsError
from fastapi import HTTPException, UploadFile, status

from app.core.config import settings

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES: set[str] = {"image/jpeg", "image/png", "image/webp"}
MAX_FILE_SIZE = settings.PHOTO_MAX_SIZE_MB * 1024 * 1024
CHUNK_SIZE = 8192

try:
    s3_client = boto3.client(
        "s3",
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        region_name=settings.AWS_REGION,
    )
    logger.info("Boto3 S3 client initialized successfully.")
except (NoCredentialsError, PartialCredentialsError):
    logger.error("AWS credentials not found or incomplete in environment settings.")
    s3_client = None
except Exception as e:
    logger.error(f"Failed to initialize Boto3 S3 client: {e}")
    s3_client = None


def _raise_for_client_error(e: ClientError, s3_key: str) -> None:
    error_code = e.response.get("Error", {}).get("Code")
    logger.error(f"S3 ClientError for '{s3_key}': {error_code} - {e}")
    if error_code == "AccessDenied":
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Storage access denied.")
    if error_code == "NoSuchBucket":
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Storage bucket not found.")
    raise HTTPException(
        status.HTTP_500_INTERNAL_SERVER_ERROR, f"Storage request failed: {error_code}"
    )


def build_object_url(s3_key: str) -> str:
    return f"https://{settings.AWS_S3_BUCKET}.s3.{settings.AWS_REGION}.amazonaws.com/{s3_key}"


async def upload_file_to_s3(file: UploadFile, subfolder: str = "photos") -> tuple[str, str]:
    """
    Validates size and type, then uploads the file to S3.

    Args:
        file (UploadFile): Uploaded file from the request.
        subfolder (str): Key prefix inside the bucket.

    Returns:
        tuple[str, str]: (public URL, object key)

    Raises:
        HTTPException: 503 without storage, 400 empty, 413 too large, 415 bad type.
    """
    if not s3_client:
        logger.error("S3 client is not available. Check AWS configuration and credentials.")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="File storage is not configured.",
        )

    size = 0
    while chunk := await file.read(CHUNK_SIZE):
        size += len(chunk)
        if size > MAX_FILE_SIZE:
            logger.warning(f"Upload rejected: '{file.filename}' exceeds {MAX_FILE_SIZE} bytes")
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File size exceeds the limit of {settings.PHOTO_MAX_SIZE_MB} MB.",
            )
    if size == 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Received an empty file.")

    await file.seek(0)
    header_bytes = await file.read(261)
    await file.seek(0)

    kind = filetype.guess(header_bytes)
    detected_mime = kind.mime if kind else "unknown"
    if detected_mime not in ALLOWED_MIME_TYPES:
        logger.warning(f"Upload rejected: type '{detected_mime}' for '{file.filename}'")
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Unsupported file type. Allowed types: JPEG, PNG, WEBP.",
        )

    safe_filename = os.path.basename(file.filename or "photo").replace(" ", "_")
    safe_filename = "".join(c for c in safe_filename if c.isalnum() or c in ("_", "-", ".")) or "photo"
    s3_key = f"{subfolder}/{uuid.uuid4()}_{safe_filename}".lstrip("/")

    try:
        s3_client.upload_fileobj(
            Fileobj=file.file,
            Bucket=settings.AWS_S3_BUCKET,
            Key=s3_key,
            ExtraArgs={"ContentType": detected_mime},
        )
    except ClientError as e:
        _raise_for_client_error(e, s3_key)
    finally:
        await file.close()

    logger.info(f"[PHOTO] Uploaded {size} bytes ({detected_mime}) to key {s3_key}")
    return build_object_url(s3_key), s3_key


def delete_file_from_s3(s3_key: str) -> bool:
    """
    Removes an object; failures are logged and reported as False.
    """
    if not s3_client or not s3_key:
        return False
    try:
        s3_client.delete_object(Bucket=settings.AWS_S3_BUCKET, Key=s3_key)
        logger.info(f"[PHOTO] Deleted S3 object {s3_key}")
        return True
    except ClientError as e:
        logger.error(f"Failed to delete S3 object '{s3_key}': {e}")
        return False
