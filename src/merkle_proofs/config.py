"""
Configuration

Settings are read from environment variables, optionally loaded from a
``.env`` file in the working directory:

- MERKLE_HASH_ALGORITHM: default hash algorithm (sha256)
- MERKLE_API_HOST: REST API bind host (127.0.0.1)
- MERKLE_API_PORT: REST API bind port (8000)
- MERKLE_LOG_LEVEL: log level for the REST API server (INFO)
"""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from .constants import (
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_LOG_LEVEL,
)


def load_environment() -> bool:
    """
    Load a ``.env`` file found from the working directory upward.

    Variables already set in the environment take precedence.
    """
    return load_dotenv(find_dotenv(usecwd=True))


# Load environment variables
load_environment()


@dataclass
class Settings:
    """Runtime settings for the CLI and REST API."""
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT
    log_level: str = DEFAULT_LOG_LEVEL


def get_settings() -> Settings:
    """
    Build settings from the environment.

    Raises:
        ValueError: If MERKLE_API_PORT is not a valid port number
    """
    port = os.getenv('MERKLE_API_PORT', str(DEFAULT_API_PORT))
    try:
        api_port = int(port)
    except ValueError:
        raise ValueError(f"MERKLE_API_PORT must be an integer, got {port!r}")
    if not 0 < api_port < 65536:
        raise ValueError(f"MERKLE_API_PORT out of range: {api_port}")

    return Settings(
        hash_algorithm=os.getenv('MERKLE_HASH_ALGORITHM', DEFAULT_HASH_ALGORITHM),
        api_host=os.getenv('MERKLE_API_HOST', DEFAULT_API_HOST),
        api_port=api_port,
        log_level=os.getenv('MERKLE_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper(),
    )
