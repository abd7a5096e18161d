"""Constants and environment lookup shared by the panel modules."""

from __future__ import annotations

import os
from pathlib import Path

PROGRAM_NAME = "mdpanel"
ENGINE_ENV_VAR = "MDPANEL_SHOWDOWN_JS"
ENGINE_FILE_NAME = "showdown.min.js"
ENGINE_URL = "https://cdn.jsdelivr.net/npm/showdown@2.1.0/dist/showdown.min.js"
ENGINE_DOWNLOAD_TIMEOUT_SECONDS = 30
STYLESHEET_FETCH_TIMEOUT_SECONDS = 20
REMOTE_SCHEMES = ("http://", "https://", "file://")
RENDER_FILE_NAME = ".mp.html"
LOADING_PLACEHOLDER = "Loading..."
DEFAULT_OPTIONS = {"tables": True}
DEMO_STYLESHEET = "https://maxcdn.bootstrapcdn.com/bootstrap/3.3.6/css/bootstrap.min.css"


def vendored_engine_path() -> Path:
    """Engine bundle location inside the installed package."""
    return Path(__file__).resolve().parent / "vendor" / ENGINE_FILE_NAME


def user_cache_engine_path() -> Path:
    """Per-user fallback location for a downloaded engine bundle."""
    return Path.home() / ".cache" / PROGRAM_NAME / ENGINE_FILE_NAME


def resolve_engine_path() -> Path:
    """Locate the converter bundle from env, the vendor directory, or the user cache.

    When no candidate exists yet, the vendor location is returned so the
    one-time download lands next to the package.
    """
    env_value = os.environ.get(ENGINE_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value).expanduser()

    candidates = [vendored_engine_path(), user_cache_engine_path()]
    for candidate in candidates:
        try:
            if candidate.is_file():
                return candidate.resolve()
        except OSError:
            continue
    return candidates[0]
