"""
Tests for file uploads.
"""

import io
import os


def _upload(client, filename, content=b'\x89PNG\r\n\x1a\n', mimetype='image/png'):
    return client.post(
        '/api/upload',
        data={'file': (io.BytesIO(content), filename, mimetype)},
        content_type='multipart/form-data'
    )


class TestUpload:
    """POST /api/upload and GET /uploads/<name>"""

    def test_upload_and_serve(self, app, client):
        response = _upload(client, 'facade-restaurant.png')

        assert response.status_code == 201
        url = response.json['data']['url']
        assert url.startswith('/uploads/')
        assert url.endswith('.png')

        stored = os.path.join(app.config['UPLOAD_FOLDER'], url.rsplit('/', 1)[1])
        assert os.path.isfile(stored)

        served = client.get(url)
        assert served.status_code == 200
        assert served.data == b'\x89PNG\r\n\x1a\n'

    def test_pdf_menu(self, client):
        response = _upload(client, 'menu.pdf', b'%PDF-1.4', 'application/pdf')
        assert response.status_code == 201

    def test_no_file(self, client):
        response = client.post('/api/upload', data={}, content_type='multipart/form-data')
        assert response.status_code == 400
        assert response.json['error'] == 'Aucun fichier fourni'

    def test_rejected_extension(self, client):
        response = _upload(client, 'script.exe', b'MZ', 'application/octet-stream')
        assert response.status_code == 400
        assert response.json['error'] == 'Type de fichier non autorisé'

    def test_rejected_mimetype(self, client):
        response = _upload(client, 'photo.jpg', b'<html>', 'text/html')
        assert response.status_code == 400

    def test_unique_names(self, client):
        first = _upload(client, 'logo.png').json['data']['url']
        second = _upload(client, 'logo.png').json['data']['url']
        assert first != second

    def test_missing_upload(self, client):
        assert client.get('/uploads/absent.png').status_code == 404
