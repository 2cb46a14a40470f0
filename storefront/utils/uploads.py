import logging
import os
import uuid

from flask import current_app, request

from storefront.utils.helpers import allowed_file

logger = logging.getLogger(__name__)


def collect_images(field="images"):
    """Non-empty uploaded files from the current request"""
    return [f for f in request.files.getlist(field) if f and f.filename]


def validate_images(files):
    allowed = current_app.config["ALLOWED_IMAGE_EXTENSIONS"]
    for file in files:
        if not allowed_file(file.filename, allowed):
            raise ValueError(f"File type not allowed: {file.filename}")


def save_file(file) -> str:
    """Store an uploaded file under a random name and return its public URL"""
    upload_folder = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(upload_folder, exist_ok=True)

    # only the extension of the client's name is kept
    ext = os.path.splitext(file.filename)[1].lower()
    filename = f"{uuid.uuid4()}{ext}"
    file.save(os.path.join(upload_folder, filename))

    logger.info("Stored upload %s as %s", file.filename, filename)
    return f"/uploads/{filename}"
