"""
HTTP gateway that forwards audio transcription and text summarization
requests to OpenAI-compatible speech-to-text and chat-completion backends.
"""

__version__ = "0.1.0"
