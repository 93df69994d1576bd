"""
Data models for the gateway server.

All of these are transient, per-request values; nothing here is persisted.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .errors import BadRequestError

SUMMARY_SYSTEM_PROMPT = (
    "You are a helpful assistant that summarizes transcribed audio. "
    "Provide a clear, concise summary of the main points."
)
SUMMARY_USER_TEMPLATE = "Please summarize the following transcription:\n\n{text}"
SUMMARY_TEMPERATURE = 0.7


@dataclass
class TranscriptionRequest:
    """An uploaded audio file plus an optional language hint."""

    filename: str
    content: bytes
    language: str = ""

    def __post_init__(self):
        if not self.filename.lower().endswith(".wav"):
            raise BadRequestError("Only WAV files are supported")

    def form_fields(self, model_name: str) -> Dict[str, str]:
        """Non-file multipart fields for the inference backend."""
        fields = {"model": model_name}
        if self.language:
            fields["language"] = self.language
        return fields


@dataclass
class SummarizationRequest:
    """Text to be summarized by the LLM backend."""

    text: str

    @classmethod
    def from_payload(cls, payload: Any) -> "SummarizationRequest":
        """
        Strictly decode a parsed JSON payload.

        Only the ``text`` key is read; every other field is ignored.

        Raises:
            BadRequestError: If the payload is not an object, or ``text`` is
                missing, not a string, or empty
        """
        if not isinstance(payload, dict):
            raise BadRequestError("Invalid JSON: expected a JSON object")

        text = payload.get("text")
        if not isinstance(text, str) or text == "":
            raise BadRequestError("Text field is required")

        return cls(text=text)

    def chat_payload(self, model: str) -> Dict[str, Any]:
        """Build the chat-completion request body for this text."""
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
                {"role": "user", "content": SUMMARY_USER_TEMPLATE.format(text=self.text)},
            ],
            "temperature": SUMMARY_TEMPERATURE,
        }


@dataclass(frozen=True)
class BackendResponse:
    """Status and raw body of a backend reply, forwarded without interpretation."""

    status_code: int
    body: bytes
