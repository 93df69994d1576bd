"""
Gateway server package.

This package provides the Flask application that serves the browser front end
and forwards transcription and summarization requests to their backends.
"""

from .app import create_app, main
from .backends import InferenceBackend, LLMBackend
from .errors import BackendReadError, BackendUnavailableError, BadRequestError, GatewayError
from .models import BackendResponse, SummarizationRequest, TranscriptionRequest

__all__ = [
    "create_app",
    "main",
    "InferenceBackend",
    "LLMBackend",
    "GatewayError",
    "BadRequestError",
    "BackendUnavailableError",
    "BackendReadError",
    "BackendResponse",
    "SummarizationRequest",
    "TranscriptionRequest",
]
