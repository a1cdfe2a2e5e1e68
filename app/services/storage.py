import logging
import cloudinary
import cloudinary.api
import cloudinary.exceptions
import cloudinary.uploader
import cloudinary.utils
from flask import current_app
from app.errors import APIError, NotFoundError

logger = logging.getLogger(__name__)


class StorageError(APIError):
    status_code = 502


def init_cloudinary(app):
    """Configure the Cloudinary SDK from app config."""
    cloud_name = app.config.get("CLOUDINARY_CLOUD_NAME")
    if not cloud_name:
        logger.warning("Cloudinary credentials missing; uploads will fail until configured")
        return
    cloudinary.config(
        cloud_name=cloud_name,
        api_key=app.config.get("CLOUDINARY_API_KEY"),
        api_secret=app.config.get("CLOUDINARY_API_SECRET"),
        secure=True,
    )


def upload_file(file_storage, folder=None) -> dict:
    """Upload a werkzeug FileStorage as a raw resource."""
    folder = folder or current_app.config.get("UPLOAD_FOLDER", "ficago/files")
    try:
        result = cloudinary.uploader.upload(
            file_storage.stream,
            folder=folder,
            resource_type="raw",
            use_filename=True,
            filename_override=file_storage.filename,
            unique_filename=True,
            type="upload",
        )
    except Exception as e:
        logger.error("Failed to upload file %s: %s", file_storage.filename, e)
        raise StorageError(f"Failed to upload file: {e}")
    return {
        "url": result.get("secure_url"),
        "publicId": result.get("public_id"),
        "originalName": file_storage.filename,
        "size": result.get("bytes"),
    }


def upload_files(files, folder=None) -> list:
    return [upload_file(f, folder=folder) for f in files]


def find_resource(public_id, resource_type="raw") -> dict:
    try:
        return cloudinary.api.resource(public_id, resource_type=resource_type)
    except cloudinary.exceptions.NotFound:
        logger.error("Resource not found in Cloudinary: %s", public_id)
        raise NotFoundError("Resource not found in Cloudinary", payload={"publicId": public_id})
    except cloudinary.exceptions.Error as e:
        logger.error("Cloudinary lookup failed for %s: %s", public_id, e)
        raise StorageError("Failed to look up resource")


def signed_url(public_id, resource_type="raw") -> str:
    """Verify the resource exists, then build a private download URL."""
    find_resource(public_id, resource_type=resource_type)
    return cloudinary.utils.private_download_url(
        str(public_id), "", resource_type=str(resource_type)
    )
