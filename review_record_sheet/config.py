"""
Configuration loading for the review record sheet tool.

Reads the Backlog credentials and report preferences from the process
environment, after loading a ``.env`` file if one exists.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from .exceptions import ConfigurationError

SUPPORTED_LANGUAGES = ('english', 'japanese')
DEFAULT_LANGUAGE = 'english'


@dataclass(frozen=True)
class Config:
    """Settings consumed by the pipeline."""
    api_key: str
    space: str
    language: str = DEFAULT_LANGUAGE

    @property
    def base_url(self) -> str:
        """Base URL of the Backlog REST API for this space."""
        return f"https://{self.space}/api/v2"


def normalize_space(space: str) -> str:
    """Strip the scheme and trailing slashes so only the domain remains.

    Args:
        space: Value of BACKLOG_SPACE, e.g. 'https://example.backlog.com/'

    Returns:
        The bare domain, e.g. 'example.backlog.com'
    """
    space = space.strip()
    for scheme in ('https://', 'http://'):
        if space.startswith(scheme):
            space = space[len(scheme):]
            break
    return space.rstrip('/')


def _get_required(name: str) -> str:
    value = os.environ.get(name, '').strip()
    if not value:
        raise ConfigurationError(f"{name} environment variable is not set")
    return value


def load_config(dotenv_path: str = None) -> Config:
    """
    Load configuration from environment variables.

    Args:
        dotenv_path: Optional explicit path to a .env file. By default the
            file is searched for starting at the current directory.

    Returns:
        A populated Config

    Raises:
        ConfigurationError: If BACKLOG_API_KEY or BACKLOG_SPACE is missing
    """
    if load_dotenv(dotenv_path or find_dotenv(usecwd=True)):
        logging.debug("Loaded environment variables from .env file")
    else:
        logging.debug("No .env file found, using process environment only")

    api_key = _get_required('BACKLOG_API_KEY')
    space = normalize_space(_get_required('BACKLOG_SPACE'))
    if not space:
        raise ConfigurationError("BACKLOG_SPACE environment variable does not contain a domain")

    language = os.environ.get('REPORT_LANGUAGE', DEFAULT_LANGUAGE).strip().lower()
    if language not in SUPPORTED_LANGUAGES:
        logging.warning(f"Invalid REPORT_LANGUAGE '{language}', using '{DEFAULT_LANGUAGE}'")
        logging.warning(f"Valid options: {', '.join(SUPPORTED_LANGUAGES)}")
        language = DEFAULT_LANGUAGE

    logging.info(f"Using Backlog space: {space}")
    return Config(api_key=api_key, space=space, language=language)
