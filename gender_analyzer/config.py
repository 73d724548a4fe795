"""Configuration settings for the gender analyzer package."""
import os
from pathlib import Path
import yaml
from typing import Dict, Any, Optional

# Package directory
PACKAGE_DIR = Path(__file__).parent

# Settings file (override with GENDER_ANALYZER_SETTINGS)
SETTINGS_PATH = Path(os.environ.get("GENDER_ANALYZER_SETTINGS", PACKAGE_DIR / "settings.yaml"))

# Pipeline defaults
DEFAULT_DELAY_SECONDS = 0.5
DEFAULT_REANALYSIS_DELAY_SECONDS = 0.3
LOW_CONFIDENCE_THRESHOLD = 70

# HTTP defaults
DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_REFERER = "https://github.com/gender-analyzer/gender-analyzer"
DEFAULT_TITLE = "Gender Analyzer"

# Provider endpoints and models
GENDERIZE_ENDPOINT = "https://api.genderize.io"
OPENROUTER_ENDPOINT = "https://openrouter.ai/api/v1/chat/completions"
OPENROUTER_DEFAULT_MODEL = "anthropic/claude-3.5-sonnet"
PERPLEXITY_ENDPOINT = "https://api.perplexity.ai/chat/completions"
PERPLEXITY_DEFAULT_MODEL = "llama-3.1-sonar-large-128k-online"

# Environment variables holding provider credentials
API_KEY_ENV_VARS = {
    "genderize": "GENDERIZE_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "perplexity": "PERPLEXITY_API_KEY",
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load runtime settings from YAML file.

    Args:
        path: Optional custom settings file. Defaults to SETTINGS_PATH.

    Returns:
        Dictionary containing settings.

    Raises:
        FileNotFoundError: If settings file doesn't exist.
        ValueError: If settings file is empty or not a mapping.
    """
    settings_path = Path(path) if path is not None else SETTINGS_PATH
    if not settings_path.exists():
        raise FileNotFoundError(
            f"Settings file not found at {settings_path}. "
            f"Please ensure the settings file exists."
        )

    with open(settings_path, 'r') as f:
        settings = yaml.safe_load(f)

    if not isinstance(settings, dict):
        raise ValueError(f"Settings file {settings_path} is empty or invalid")

    return settings


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """Save runtime settings to YAML file.

    Args:
        settings: Dictionary containing settings to save.
        path: Optional custom settings file. Defaults to SETTINGS_PATH.
    """
    settings_path = Path(path) if path is not None else SETTINGS_PATH
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    with open(settings_path, 'w') as f:
        yaml.safe_dump(settings, f, default_flow_style=False, sort_keys=False)


def get_setting(settings: Dict[str, Any], section: str, key: str, default: Any = None) -> Any:
    """Look up ``settings[section][key]``, falling back to ``default``."""
    value = (settings.get(section) or {}).get(key)
    return default if value is None else value


def get_api_key(provider: str) -> Optional[str]:
    """Return the API key for a provider from the environment, if set."""
    env_var = API_KEY_ENV_VARS.get(provider)
    if env_var is None:
        return None
    value = os.environ.get(env_var, "").strip()
    return value or None
