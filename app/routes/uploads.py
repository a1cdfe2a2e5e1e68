from flask import Blueprint, request, current_app
from app.version import API_PREFIX
from app.utils import ok, error, auth_required, role_required
from app.utils.validation import validate_schema
from app.schemas.payments import SignedUrlRequest
from app.services import storage

upload_bp = Blueprint("upload", __name__, url_prefix=f"{API_PREFIX}/upload-file")


@upload_bp.route("/file", methods=["POST"])
def upload_file():
    """
    Upload a single file
    ---
    tags: [Uploads]
    consumes: [multipart/form-data]
    parameters:
      - in: formData
        name: file
        type: file
        required: true
    responses:
      200: {description: Uploaded}
      400: {description: No file uploaded}
    """
    file = request.files.get("file")
    if file is None or not file.filename:
        return error("No file uploaded", status=400)
    result = storage.upload_file(file)
    return ok({"url": result["url"], "file": result}, message="Uploaded successfully")


@upload_bp.route("/files", methods=["POST"])
@auth_required
@role_required(["VENDOR:upload_files", "USER:upload_files"])
def upload_files():
    files = [f for f in request.files.getlist("files") if f and f.filename]
    if not files:
        return error("No files uploaded", status=400)
    limit = current_app.config.get("UPLOAD_MAX_FILES", 10)
    if len(files) > limit:
        return error(f"At most {limit} files can be uploaded at once", status=400)
    return ok({"files": storage.upload_files(files)}, message="Files uploaded successfully")


@upload_bp.route("/get-signed-url", methods=["POST"])
@validate_schema(SignedUrlRequest)
def get_signed_url():
    data: SignedUrlRequest = request.validated_data
    url = storage.signed_url(data.public_id, resource_type=data.resource_type)
    return ok({"signedUrl": url, "publicId": data.public_id})


@upload_bp.route("/download", methods=["GET"])
def download_file():
    public_id = request.args.get("publicId")
    if not public_id:
        return error("publicId is required", status=400)
    resource_type = request.args.get("resourceType", "raw")
    url = storage.signed_url(public_id, resource_type=resource_type)
    return ok({"url": url, "publicId": public_id})
