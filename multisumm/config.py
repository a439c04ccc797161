"""
Multisumm Configuration Module
Centralized configuration for the summarization dispatcher.
"""

import os
from pathlib import Path

import yaml

# Debug Mode Configuration
DEBUG_MODE = os.environ.get('DEBUG', 'false').lower() == 'true'

APP_NAME = "Multisumm"

# Network Configuration
# Every provider call is bounded individually; there is no overall cycle deadline.
REQUEST_TIMEOUT_SECONDS = int(os.environ.get('MULTISUMM_REQUEST_TIMEOUT', 120))

# Progress Watcher
PROGRESS_POLL_INTERVAL_SECONDS = 1.0

# Providers queried when a request does not name its own
DEFAULT_PROVIDERS = ("distilbart", "gemini", "cohere")

# Summary shape hints sent to providers that accept them
SUMMARY_MIN_LENGTH = 30
SUMMARY_MAX_LENGTH = 150
SUMMARY_SENTENCES = 3
SUMMARY_LANGUAGE = "English"

# Credentials (environment variable names per provider id)
# Values are opaque to the core; acquisition and storage happen elsewhere.
PROVIDER_CREDENTIAL_ENV = {
    'huggingface': 'HUGGINGFACE_API_TOKEN',
    'gemini': 'GEMINI_API_KEY',
    'cohere': 'COHERE_API_KEY',
    'apy': 'APYHUB_API_TOKEN',
}

# Logging Configuration
LOG_FORMAT = "[%(levelname)s %(asctime)s] %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
LOG_FILE = os.environ.get('MULTISUMM_LOG_FILE') or None

# --- Provider Configuration System ---
PROVIDER_CONFIG_FILE = Path(
    os.environ.get(
        'MULTISUMM_PROVIDER_CONFIG',
        Path(__file__).parent.parent / "config" / "providers.yaml",
    )
)
PROVIDER_CONFIGS = {}
_PROVIDER_CONFIGS_LOADED = False

# Used when config/providers.yaml is missing or lacks an entry
_FALLBACK_PROVIDER_CONFIGS = {
    'huggingface': {
        'api_url': "https://api-inference.huggingface.co/models/sshleifer/distilbart-cnn-12-6",
        'min_length': SUMMARY_MIN_LENGTH,
        'max_length': SUMMARY_MAX_LENGTH,
    },
    'gemini': {
        'api_url': "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.5-flash:generateContent",
        'prompt_prefix': "Summarize this text: ",
    },
    'cohere': {
        'api_url': "https://api.cohere.ai/v2/chat",
        'model': "command-a-03-2025",
        'sentences': SUMMARY_SENTENCES,
    },
    'apy': {
        'api_url': "https://api.apyhub.com/sharpapi/api/v1/content/summarize",
        'min_length': SUMMARY_MIN_LENGTH,
        'max_length': SUMMARY_MAX_LENGTH,
        'language': SUMMARY_LANGUAGE,
    },
}


def load_provider_configs():
    """Loads provider configurations from config/providers.yaml."""
    global PROVIDER_CONFIGS, _PROVIDER_CONFIGS_LOADED
    _PROVIDER_CONFIGS_LOADED = True
    try:
        with open(PROVIDER_CONFIG_FILE, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
            PROVIDER_CONFIGS = data.get('providers', {}) or {}
        if DEBUG_MODE and PROVIDER_CONFIGS:
            from multisumm.logging_config import debug_log
            debug_log(f"[Config] Loaded {len(PROVIDER_CONFIGS)} provider configurations from {PROVIDER_CONFIG_FILE}")
    except FileNotFoundError:
        if DEBUG_MODE:
            from multisumm.logging_config import debug_log
            debug_log(f"[Config] WARNING: Provider config file not found at {PROVIDER_CONFIG_FILE}. Using fallback values.")
        PROVIDER_CONFIGS = {}
    except yaml.YAMLError as e:
        from multisumm.logging_config import debug_log
        debug_log(f"[Config] ERROR: Failed to parse provider config file: {e}")
        PROVIDER_CONFIGS = {}


def get_provider_config(provider_id: str) -> dict:
    """
    Returns the configuration for a provider, merged over built-in fallbacks.

    Args:
        provider_id: Canonical provider id (e.g., 'gemini').

    Returns:
        A dictionary with at least 'api_url' for known providers, or an
        empty dict for ids with no configuration at all.
    """
    # A missing or invalid file leaves PROVIDER_CONFIGS empty; do not retry per adapter
    if not _PROVIDER_CONFIGS_LOADED:
        load_provider_configs()

    merged = dict(_FALLBACK_PROVIDER_CONFIGS.get(provider_id, {}))
    merged.update(PROVIDER_CONFIGS.get(provider_id) or {})
    return merged


def get_credential(provider_id: str) -> str | None:
    """Read a provider credential from its environment variable, if set."""
    env_name = PROVIDER_CREDENTIAL_ENV.get(provider_id)
    if env_name is None:
        return None
    return os.environ.get(env_name) or None


# Load configs on module import
load_provider_configs()
# --- End Provider Configuration System ---

# Parallel Processing Configuration
# One thread per default provider plus one for the progress watcher.
# The dispatcher sizes its per-cycle pool from the request instead.
PARALLEL_MAX_WORKERS = len(DEFAULT_PROVIDERS) + 1
