"""
Configuration management for the gateway.

Values are resolved with two-tier precedence:
1. Default values from codebase
2. Environment variables (a local .env file is loaded without overriding
   variables already present in the process environment)

The resolved values are frozen into a GatewayConfig once at startup and
handed to the Flask application factory.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PACKAGE_STATIC_DIR = Path(__file__).resolve().parent / "static"


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""


class ConfigManager:
    """Looks up gateway settings in the environment, falling back to DEFAULTS."""

    DEFAULTS = {
        "MODEL_NAME": "whisper-1",
        "LLM_MODEL": "gpt-3.5-turbo",
        "PORT": "8080",
        "STATIC_DIR": str(PACKAGE_STATIC_DIR),
        "LOG_LEVEL": "INFO",
    }

    @classmethod
    def resolve(cls, key: str) -> tuple[str, str]:
        """
        Resolve a key to ``(value, source)``.

        An empty environment variable counts as unset. ``source`` is "env" or
        "default"; keys without a default resolve to ``("", "default")``.
        """
        if os.getenv(key):
            return os.environ[key], "env"
        return cls.DEFAULTS.get(key, ""), "default"

    @classmethod
    def get(cls, key: str) -> str:
        return cls.resolve(key)[0]

    @classmethod
    def require(cls, key: str) -> str:
        """Get a required configuration value, raising ConfigError if unset."""
        value = cls.get(key)
        if not value:
            raise ConfigError(f"{key} environment variable is required")
        return value


@dataclass(frozen=True)
class GatewayConfig:
    """Process-wide gateway settings, immutable after startup."""

    inference_url: str
    llm_url: str
    model_name: str = "whisper-1"
    llm_model: str = "gpt-3.5-turbo"
    port: int = 8080
    static_dir: Path = PACKAGE_STATIC_DIR
    log_level: str = "INFO"

    def __post_init__(self):
        # Base URLs are stored without a trailing slash
        object.__setattr__(self, "inference_url", self.inference_url.rstrip("/"))
        object.__setattr__(self, "llm_url", self.llm_url.rstrip("/"))
        object.__setattr__(self, "static_dir", Path(self.static_dir))

    @property
    def transcription_endpoint(self) -> str:
        return f"{self.inference_url}/v1/audio/transcriptions"

    @property
    def chat_endpoint(self) -> str:
        return f"{self.llm_url}/v1/chat/completions"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "GatewayConfig":
        """
        Build the configuration from the environment.

        Args:
            dotenv_path: Optional explicit .env file; by default python-dotenv
                searches for one starting from the working directory

        Returns:
            A frozen GatewayConfig

        Raises:
            ConfigError: If INFERENCE_URL or LLM_URL is missing, or PORT is
                not a valid TCP port
        """
        load_dotenv(dotenv_path=dotenv_path, override=False)

        inference_url = ConfigManager.require("INFERENCE_URL")
        llm_url = ConfigManager.require("LLM_URL")

        raw_port = ConfigManager.get("PORT")
        try:
            port = int(raw_port)
        except ValueError:
            raise ConfigError(f"PORT must be an integer, got {raw_port!r}")
        if not 0 < port < 65536:
            raise ConfigError(f"PORT out of range: {port}")

        return cls(
            inference_url=inference_url,
            llm_url=llm_url,
            model_name=ConfigManager.get("MODEL_NAME"),
            llm_model=ConfigManager.get("LLM_MODEL"),
            port=port,
            static_dir=Path(ConfigManager.get("STATIC_DIR")),
            log_level=ConfigManager.get("LOG_LEVEL").upper(),
        )
