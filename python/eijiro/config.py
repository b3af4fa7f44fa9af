"""Configuration loader for eijiro.

Loads defaults from config.json at project root, with hardcoded fallbacks.
"""

import json
from pathlib import Path
from typing import Any

# Hardcoded fallback defaults
FALLBACK_DEFAULTS = {
    "corpus": "EIJIRO.txt",
    "snapshot": "dict_dump.bin",
    "encoding": "utf-8",
    "max_edits": 0,
    "state_limit": 10_000,
    "entry_order": "structural",
    "log_level": "WARNING",
}

_config: dict[str, Any] | None = None


def _find_config() -> Path | None:
    """Find config.json by walking up from current file."""
    paths = [
        Path(__file__).parent.parent.parent / "config.json",  # python/eijiro -> root
        Path(__file__).parent.parent / "config.json",
        Path.cwd() / "config.json",
        Path.cwd().parent / "config.json",
    ]
    for path in paths:
        if path.exists():
            return path
    return None


def load() -> dict[str, Any]:
    """Load configuration from config.json or use fallbacks."""
    global _config
    if _config is not None:
        return _config

    config_path = _find_config()
    if config_path:
        try:
            with open(config_path, encoding="utf-8") as f:
                _config = json.load(f)
                return _config
        except (json.JSONDecodeError, OSError):
            pass

    # Fallback
    _config = {"defaults": dict(FALLBACK_DEFAULTS)}
    return _config


def reset() -> None:
    """Forget the cached configuration so the next load() re-reads it."""
    global _config
    _config = None


def get_default(key: str, fallback: Any = None) -> Any:
    """Get a default value from config."""
    cfg = load()
    return cfg.get("defaults", {}).get(key, fallback)


# Convenience accessors
def default_corpus() -> str:
    return get_default("corpus", FALLBACK_DEFAULTS["corpus"])


def default_snapshot() -> str:
    return get_default("snapshot", FALLBACK_DEFAULTS["snapshot"])


def default_encoding() -> str:
    return get_default("encoding", FALLBACK_DEFAULTS["encoding"])


def default_max_edits() -> int:
    return get_default("max_edits", FALLBACK_DEFAULTS["max_edits"])


def default_state_limit() -> int:
    return get_default("state_limit", FALLBACK_DEFAULTS["state_limit"])


def default_entry_order() -> str:
    return get_default("entry_order", FALLBACK_DEFAULTS["entry_order"])


def default_log_level() -> str:
    return get_default("log_level", FALLBACK_DEFAULTS["log_level"])
