"""Configuration management for the gist sync."""

import json
import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from ..exceptions import ConfigurationError
from ..models.config import AppConfig

DEFAULT_CONFIG_PATH = "config.json"

# Environment variables that override tokens in the config file
TOKEN_ENV_OVERRIDES = {
    "githubToken": "GITHUB_TOKEN",
    "pipedriveToken": "PIPEDRIVE_TOKEN",
}


def setup_logging(level: str = "INFO") -> None:
    """Set up logging configuration.
    
    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def load_environment(env_file: Optional[str] = None) -> None:
    """Load environment variables from .env file.
    
    Args:
        env_file: Path to .env file. If None, looks for .env in current directory.
    """
    env_path = Path(env_file) if env_file else Path('.env')
    
    if env_path.exists():
        load_dotenv(env_path)
        logging.info(f"Loaded environment from {env_path}")
    else:
        logging.debug(f"No .env file found at {env_path}")


def get_optional_env(key: str, default: str = "") -> str:
    """Get an optional environment variable.
    
    Args:
        key: Environment variable name
        default: Default value if not set
        
    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_config_path(path: Optional[str] = None) -> str:
    """Resolve the config file path from an explicit value or GISTSYNC_CONFIG."""
    return path or get_optional_env("GISTSYNC_CONFIG", DEFAULT_CONFIG_PATH)


def load_config(path: Optional[str] = None) -> AppConfig:
    """Load the sync configuration from a JSON file.
    
    Tokens set in GITHUB_TOKEN / PIPEDRIVE_TOKEN take precedence over the file.
    
    Args:
        path: Path to the config file. Defaults to GISTSYNC_CONFIG or config.json.
        
    Returns:
        Validated AppConfig
        
    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    config_path = Path(get_config_path(path))
    if not config_path.exists():
        raise ConfigurationError(f"Config file does not exist: {config_path}")
    
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Could not read config file {config_path}: {e}") from e
    
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a JSON object")
    
    for key, env_var in TOKEN_ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            data.pop(_snake_case(key), None)
            data[key] = value
    
    try:
        config = AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e
    
    logging.getLogger(__name__).info(
        f"Loaded config from {config_path}: {len(config.users)} tracked users, "
        f"Pipedrive company domain: {config.pipedrive_base_url}"
    )
    return config


def _snake_case(key: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in key)
