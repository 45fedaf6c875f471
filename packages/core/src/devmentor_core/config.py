import os
from pathlib import Path
from typing import Optional

import yaml

from devmentor_core.errors import ConfigurationError

DEFAULT_CONFIG: dict = {
    "model": "openrouter",  # "openrouter" | "openai" | "anthropic"
    "model_id": None,  # None = the provider's default model
    "temperature": 0.3,
    "max_tokens": 2500,
    "request_timeout": None,  # None = SDK transport default
    "max_code_chars": 50000,
    "retry_after_seconds": 60,  # suggested delay shown on rate limiting
    "site_url": "http://localhost:3000",
    "store": "sqlite",  # "sqlite" | "memory"
    "store_path": ".devmentor.db",
    "page_size": 10,
}

PROVIDERS = ("openrouter", "openai", "anthropic")

_API_KEY_FIELDS = {
    "openrouter": ("openrouter_api_key", "OPENROUTER_API_KEY"),
    "openai": ("openai_api_key", "OPENAI_API_KEY"),
    "anthropic": ("anthropic_api_key", "ANTHROPIC_API_KEY"),
}


def load_config(config_path: str = ".devmentor.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .devmentor.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ConfigurationError(f"{config_path} must contain a mapping, got {type(file_config).__name__}")
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables. OpenRouter keys were
    # historically stored under OPENAI_API_KEY, so that is the fallback.
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")
    config["openrouter_api_key"] = os.environ.get("OPENROUTER_API_KEY") or config["openai_api_key"]
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")

    return config


def api_key_for(config: dict) -> str:
    """Return the API key for the configured provider.

    Raises ConfigurationError when the provider is unknown or its key is unset.
    """
    model = config.get("model")
    if model not in _API_KEY_FIELDS:
        raise ConfigurationError(f"Unknown model provider: {model!r}. Choose one of: {', '.join(PROVIDERS)}.")
    field, env_var = _API_KEY_FIELDS[model]
    key = config.get(field)
    if not key:
        raise ConfigurationError(f"{env_var} environment variable is not set.")
    return key
