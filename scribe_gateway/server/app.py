"""
Flask API gateway for transcription and summarization.

This server provides endpoints for:
- Serving the browser front end (index page and static assets)
- Forwarding WAV uploads to a speech-to-text inference server
- Forwarding transcripts to an LLM chat-completion server for summarization

Backend responses are relayed to the caller with their original status and
body; only the content type is normalized to JSON.
"""

import json
import logging
import os
import posixpath
import sys
from typing import Optional

from flask import Flask, Request, Response, jsonify, request, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

from ..config import ConfigError, ConfigManager, GatewayConfig
from .backends import InferenceBackend, LLMBackend
from .errors import BadRequestError, GatewayError
from .models import BackendResponse, SummarizationRequest, TranscriptionRequest

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 100 * 1024 * 1024  # 100MiB max multipart body

STATIC_CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
}


class GatewayRequest(Request):
    """Request whose form parser raises on malformed bodies instead of dropping them."""

    def make_form_data_parser(self):
        parser = super().make_form_data_parser()
        parser.silent = False
        return parser


def _relay(backend_response: BackendResponse) -> Response:
    """Copy a backend reply to the caller, forcing a JSON content type."""
    return Response(
        backend_response.body,
        status=backend_response.status_code,
        content_type="application/json",
    )


def create_app(
    config: GatewayConfig,
    inference: Optional[InferenceBackend] = None,
    llm: Optional[LLMBackend] = None,
) -> Flask:
    """
    Build the gateway application.

    Args:
        config: Frozen gateway configuration, shared read-only by all handlers
        inference: Speech-to-text backend (built from config when omitted)
        llm: Chat-completion backend (built from config when omitted)

    Returns:
        Configured Flask app
    """
    # The built-in static route is replaced by serve_static below
    app = Flask(__name__, static_folder=None)
    app.request_class = GatewayRequest
    app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_BYTES
    CORS(app)

    inference = inference or InferenceBackend(config)
    llm = llm or LLMBackend(config)
    static_dir = config.static_dir

    @app.errorhandler(GatewayError)
    def handle_gateway_error(error: GatewayError):
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(error: RequestEntityTooLarge):
        limit_mib = MAX_UPLOAD_BYTES // (1024 * 1024)
        return jsonify({"error": f"Failed to parse form: request body exceeds {limit_mib}MiB"}), 413

    @app.route("/", methods=["GET"])
    def serve_index():
        """Serve the front end's index page."""
        return send_from_directory(static_dir, "index.html")

    @app.route("/static/<path:filename>", methods=["GET"])
    def serve_static(filename: str):
        """
        Serve a file from the static root.

        Any path containing ".." is rejected before touching the filesystem.
        """
        if ".." in filename:
            logger.warning(f"Rejected static path: {filename}")
            raise BadRequestError("Invalid path")

        response = send_from_directory(static_dir, filename)
        content_type = STATIC_CONTENT_TYPES.get(os.path.splitext(filename)[1])
        if content_type:
            response.headers["Content-Type"] = content_type
        return response

    @app.route("/transcribe", methods=["POST"])
    def transcribe():
        """
        Forward an uploaded WAV file to the inference backend.

        Expected form data:
        - file: WAV audio file (filename must end in .wav)
        - language: Optional language hint, forwarded only when non-empty

        Returns:
        - The backend's status and body, as application/json
        """
        try:
            files = request.files
        except ValueError as e:
            raise BadRequestError(f"Failed to parse form: {e}")

        if "file" not in files:
            raise BadRequestError("Failed to get file: no file provided")

        file = files["file"]
        if not file.filename:
            raise BadRequestError("Failed to get file: no file selected")

        # Body field wins over the query string
        language = request.form.get("language")
        if language is None:
            language = request.args.get("language", "")

        try:
            upload = TranscriptionRequest(
                # Directory parts of the client-supplied name are dropped
                filename=posixpath.basename(file.filename),
                content=file.read(),
                language=language,
            )
        except BadRequestError:
            logger.warning(f"Rejected upload with filename {file.filename!r}")
            raise

        logger.info(f"Transcribing {upload.filename} ({len(upload.content)} bytes)")
        return _relay(inference.transcribe(upload))

    @app.route("/summarize", methods=["POST"])
    def summarize():
        """
        Forward a transcript to the LLM backend for summarization.

        Expected JSON body:
        - text: Non-empty transcript text

        Returns:
        - The backend's chat-completion status and body, as application/json
        """
        try:
            payload = json.loads(request.get_data())
        except (ValueError, RecursionError) as e:
            raise BadRequestError(f"Invalid JSON: {e}")

        summary_request = SummarizationRequest.from_payload(payload)

        logger.info(f"Summarizing {len(summary_request.text)} characters of text")
        return _relay(llm.summarize(summary_request))

    return app


def configure_logging(log_level: str) -> None:
    """Configure root logging and align werkzeug's request log with it."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("werkzeug").setLevel(level)


def main() -> None:
    """Load configuration from the environment and run the gateway."""
    try:
        config = GatewayConfig.from_env()
    except ConfigError as e:
        configure_logging("INFO")
        logger.critical(str(e))
        sys.exit(1)

    configure_logging(config.log_level)

    logger.info(f"Server starting on port {config.port}")
    logger.info(f"Inference URL: {config.inference_url}")
    for key, label in (("MODEL_NAME", "Model name"), ("LLM_MODEL", "LLM model")):
        value, source = ConfigManager.resolve(key)
        logger.info(f"{label}: {value} ({source})")
    logger.info(f"LLM URL: {config.llm_url}")
    logger.info(f"Static files: {config.static_dir}")

    app = create_app(config)
    try:
        app.run(host="0.0.0.0", port=config.port, threaded=True)
    except OSError as e:
        logger.critical(f"Server failed to start: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
