"""
Upload routes.
Stores restaurant photos, logos and menu PDFs under random names.
"""

import os

from flask import Blueprint, current_app, request, send_from_directory

from extensions import limiter, UPLOAD_RATE_LIMIT
from utils.api_response import api_success, api_error
from utils.helpers import allowed_file, random_filename
from utils.messages import MESSAGES

upload_bp = Blueprint('upload', __name__)


def get_upload_folder() -> str:
    folder = current_app.config['UPLOAD_FOLDER']
    if not os.path.isabs(folder):
        folder = os.path.join(current_app.root_path, folder)
    os.makedirs(folder, exist_ok=True)
    return folder


@upload_bp.route('', methods=['POST'])
@limiter.limit(UPLOAD_RATE_LIMIT)
def upload_file():
    """
    Upload one file (multipart field 'file').

    Returns:
        {"url": "/uploads/<name>"}
    """
    file = request.files.get('file')
    if not file or not file.filename:
        return api_error(MESSAGES['no_file'])

    if (not allowed_file(file.filename, current_app.config['ALLOWED_EXTENSIONS'])
            or file.mimetype not in current_app.config['ALLOWED_MIME_TYPES']):
        current_app.logger.warning(f'Upload rejected: {file.filename} ({file.mimetype})')
        return api_error(MESSAGES['invalid_file_type'])

    filename = random_filename(file.filename)
    file.save(os.path.join(get_upload_folder(), filename))

    current_app.logger.info(f'File uploaded: {filename}')
    return api_success(data={'url': f'/uploads/{filename}'}, status=201)


def serve_upload(filename):
    """Serve a stored upload (registered at /uploads/<filename>)."""
    return send_from_directory(get_upload_folder(), filename)
