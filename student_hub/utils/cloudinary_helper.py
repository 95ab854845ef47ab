import logging
import os
from urllib.parse import urlparse

import cloudinary
import cloudinary.uploader
import cloudinary.utils

logger = logging.getLogger(__name__)

CLOUDINARY_HOST = "res.cloudinary.com"
CERTIFICATE_EXTENSIONS = {"jpeg", "jpg", "png", "pdf", "doc", "docx"}
IMAGE_EXTENSIONS = {"jpeg", "jpg", "png", "gif"}

CONTENT_TYPES = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
}


class FileValidationError(ValueError):
    pass


class StorageNotConfigured(RuntimeError):
    pass


def file_extension(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lstrip(".").lower()


def file_size(file) -> int:
    stream = file.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def validate_upload(file, allowed_extensions, max_size: int):
    """
    Check extension and size of a werkzeug FileStorage before it is uploaded.
    """
    if file_extension(file.filename) not in allowed_extensions:
        allowed = ", ".join(sorted(ext.upper() for ext in allowed_extensions))
        raise FileValidationError(f"Only {allowed} files are allowed")

    if file_size(file) > max_size:
        raise FileValidationError(f"File size must be less than {max_size // (1024 * 1024)}MB")


def upload_file_to_cloudinary(file, folder="student-hub"):
    """
    Upload a werkzeug FileStorage to Cloudinary and return the secure URL
    """
    if not getattr(cloudinary.config(), "api_key", None):
        raise StorageNotConfigured("File storage is not configured")

    file.stream.seek(0)
    result = cloudinary.uploader.upload(
        file.stream,
        folder=folder,
        resource_type="auto",
        use_filename=True,
        unique_filename=True
    )
    logger.info("Uploaded %s to Cloudinary folder %s", file.filename, folder)
    return result.get("secure_url")


def is_account_url(url: str, cloud_name: str) -> bool:
    parsed = urlparse(url or "")
    if parsed.scheme not in ("http", "https") or parsed.netloc != CLOUDINARY_HOST:
        return False
    segments = [part for part in parsed.path.split("/") if part]
    return bool(cloud_name) and bool(segments) and segments[0] == cloud_name


def filename_from_url(url: str) -> str:
    return urlparse(url).path.rstrip("/").split("/")[-1] or "file"


def guess_content_type(url: str) -> str:
    return CONTENT_TYPES.get(file_extension(filename_from_url(url)), "application/octet-stream")


def parse_cloudinary_url(url: str):
    """
    Split a delivery URL into (resource_type, delivery_type, public_id, format).

    https://res.cloudinary.com/<cloud>/<resource_type>/<type>/[transformations/][v<version>/]<public_id>.<format>
    """
    segments = [part for part in urlparse(url).path.split("/") if part]
    if len(segments) < 4:
        raise FileValidationError("Invalid file URL")

    resource_type, delivery_type = segments[1], segments[2]
    rest = segments[3:]

    # drop everything up to and including the version segment
    for index, part in enumerate(rest):
        if part.startswith("v") and part[1:].isdigit():
            rest = rest[index + 1:]
            break

    path = "/".join(rest)
    if not path:
        raise FileValidationError("Invalid file URL")

    # raw resources keep the extension as part of the public id
    if resource_type == "raw":
        return resource_type, delivery_type, path, None

    public_id, _, fmt = path.rpartition(".")
    if not public_id:
        return resource_type, delivery_type, path, None
    return resource_type, delivery_type, public_id, fmt


def signed_download_url(url: str) -> str:
    resource_type, delivery_type, public_id, fmt = parse_cloudinary_url(url)
    options = {
        "resource_type": resource_type,
        "type": delivery_type,
        "flags": "attachment",
        "sign_url": True,
        "secure": True,
    }
    if fmt:
        options["format"] = fmt
    download_url, _ = cloudinary.utils.cloudinary_url(public_id, **options)
    return download_url
