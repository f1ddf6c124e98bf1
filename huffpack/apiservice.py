from __future__ import annotations
from typing import Optional
import logging
import os

from flask import Flask, Response, jsonify, request

from huffpack.config import Config
from huffpack.container import decode, encode
from huffpack.errors import HuffmanError

logger = logging.getLogger(__name__)


def create_app(config: Optional[Config] = None) -> Flask:
    if config is None:
        config = Config.from_env()
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_upload_bytes

    def read_upload():
        received_file = request.files.get("upload_file")
        if received_file is None:
            return None, None
        return received_file.filename or "upload", received_file.read()

    def missing_upload() -> Response:
        response = jsonify(error="MissingUpload", message="expected an upload_file field")
        response.status_code = 400
        return response

    @app.errorhandler(HuffmanError)
    def handle_codec_error(error: HuffmanError):
        logger.warning("Rejected upload: %s", error)
        response = jsonify(error=type(error).__name__, message=str(error))
        response.status_code = 400
        return response

    @app.get("/health")
    def health():
        return jsonify(status="ok")

    @app.post("/compress")
    def compress_upload():
        filename, data = read_upload()
        if data is None:
            return missing_upload()
        container = encode(data)
        logger.info("Compressed %s: %d -> %d bytes", filename, len(data), len(container))
        response = Response(container, content_type="application/octet-stream")
        # Add headers to suggest a download to the client
        response.headers["Content-Disposition"] = (
            f"attachment; filename={os.path.basename(filename)}.huf"
        )
        return response

    @app.post("/decompress")
    def decompress_upload():
        filename, container = read_upload()
        if container is None:
            return missing_upload()
        data = decode(container)
        logger.info("Decompressed %s: %d -> %d bytes", filename, len(container), len(data))
        stem = os.path.basename(filename)
        if stem.endswith(".huf"):
            stem = stem[: -len(".huf")]
        response = Response(data, content_type="application/octet-stream")
        response.headers["Content-Disposition"] = f"attachment; filename={stem}"
        return response

    return app
