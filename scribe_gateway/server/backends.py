"""
Outbound calls to the speech-to-text and LLM backends.

Each backend makes exactly one blocking POST per gateway request and hands
back the raw status and body. No retries, no timeout beyond the transport
default.
"""

import logging

import requests
from requests.exceptions import ChunkedEncodingError, ContentDecodingError, RequestException

from ..config import GatewayConfig
from .errors import BackendReadError, BackendUnavailableError
from .models import BackendResponse, SummarizationRequest, TranscriptionRequest

logger = logging.getLogger(__name__)


def _post(url: str, label: str, **kwargs) -> BackendResponse:
    """
    POST to a backend and capture the reply untouched.

    Args:
        url: Full backend endpoint URL
        label: Name used in error messages ("API", "LLM API")
        **kwargs: Passed through to requests.post

    Raises:
        BackendReadError: If the response body could not be read
        BackendUnavailableError: On any other transport failure
    """
    logger.info(f"Forwarding request to {url}")
    try:
        response = requests.post(url, **kwargs)
    except (ChunkedEncodingError, ContentDecodingError) as e:
        logger.error(f"Failed to read response from {url}: {e}")
        raise BackendReadError(f"Failed to read {label} response: {e}")
    except RequestException as e:
        logger.error(f"Failed to call {url}: {e}")
        raise BackendUnavailableError(f"Failed to call {label}: {e}")

    logger.debug(f"Backend {url} answered with status {response.status_code}")
    return BackendResponse(status_code=response.status_code, body=response.content)


class InferenceBackend:
    """Speech-to-text server exposing an OpenAI-style transcription endpoint."""

    def __init__(self, config: GatewayConfig):
        self.url = config.transcription_endpoint
        self.model_name = config.model_name

    def transcribe(self, upload: TranscriptionRequest) -> BackendResponse:
        """Re-encode the upload as a fresh multipart body and forward it."""
        files = {"file": (upload.filename, upload.content)}
        return _post(self.url, "API", data=upload.form_fields(self.model_name), files=files)


class LLMBackend:
    """Chat-completion server exposing an OpenAI-style chat endpoint."""

    def __init__(self, config: GatewayConfig):
        self.url = config.chat_endpoint
        self.model = config.llm_model

    def summarize(self, summary_request: SummarizationRequest) -> BackendResponse:
        """Wrap the text in a chat-completion request and forward it as JSON."""
        return _post(self.url, "LLM API", json=summary_request.chat_payload(self.model))
