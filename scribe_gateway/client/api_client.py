"""
Client module for communicating with the gateway server.

This module provides a simple interface to:
- Upload WAV files for transcription
- Request summaries of transcribed text
- Pull the summary text out of a chat-completion response
"""

from pathlib import Path
from typing import Any, Dict, Optional

import requests
from requests.exceptions import RequestException


def extract_summary(response: Dict[str, Any]) -> str:
    """
    Extract the summary text from a /summarize response.

    Understands the OpenAI chat-completion envelope
    (``choices[0].message.content``) and falls back to plain ``response`` or
    ``text`` keys used by some local LLM servers.

    Args:
        response: Decoded JSON body returned by the gateway

    Returns:
        Stripped summary text, or an empty string if none was found
    """
    choices = response.get("choices") or []
    if choices and isinstance(choices[0], dict) and choices[0].get("message"):
        summary = choices[0]["message"].get("content") or ""
    elif response.get("response"):
        summary = response["response"]
    elif response.get("text"):
        summary = response["text"]
    else:
        summary = ""
    return summary.strip()


class GatewayClient:
    """Client for the transcription/summarization gateway."""

    def __init__(self, base_url: str = "http://localhost:8080"):
        """
        Initialize the gateway client.

        Args:
            base_url: Base URL of the gateway server
        """
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()

    def _check(self, response: requests.Response, action: str) -> Dict[str, Any]:
        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = body.get("error", response.text) if isinstance(body, dict) else response.text
            raise RequestException(f"{action} failed ({response.status_code}): {detail}")
        return response.json()

    def transcribe(self, file_path: str, language: Optional[str] = None) -> Dict[str, Any]:
        """
        Upload a WAV file for transcription.

        Args:
            file_path: Path to the WAV file to upload
            language: Optional language hint (e.g. "en")

        Returns:
            Decoded JSON from the inference backend, typically ``{"text": ...}``

        Raises:
            FileNotFoundError: If the file doesn't exist
            RequestException: If the upload or transcription fails
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Audio file not found: {file_path}")

        data = {"language": language} if language else {}

        with open(file_path, "rb") as audio_file:
            files = {"file": (file_path.name, audio_file, "audio/wav")}
            response = self.session.post(f"{self.base_url}/transcribe", files=files, data=data)
        return self._check(response, "Transcription")

    def summarize(self, text: str) -> Dict[str, Any]:
        """
        Request a summary of transcribed text.

        Args:
            text: Transcript text to summarize

        Returns:
            Decoded chat-completion JSON from the LLM backend

        Raises:
            RequestException: If the summarization fails
        """
        response = self.session.post(f"{self.base_url}/summarize", json={"text": text})
        return self._check(response, "Summarization")

    def transcribe_and_summarize(self, file_path: str, language: Optional[str] = None) -> Dict[str, str]:
        """
        Transcribe a WAV file and summarize the result in one go.

        Returns:
            Dictionary with ``transcript`` and ``summary`` keys
        """
        transcript = self.transcribe(file_path, language=language).get("text", "")
        if not transcript:
            return {"transcript": "", "summary": ""}
        summary = extract_summary(self.summarize(transcript))
        return {"transcript": transcript, "summary": summary}
