from flask import Blueprint, current_app, send_from_directory

uploads_bp = Blueprint("uploads", __name__)


@uploads_bp.route("/<path:filename>", methods=["GET"])
def serve_upload(filename):
    """Serve stored product images"""
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)
