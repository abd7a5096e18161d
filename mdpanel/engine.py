"""Loader for the showdown converter bundle embedded in every document."""

from __future__ import annotations

import json
import sys
import warnings
from pathlib import Path

import requests

from mdpanel.config import (
    ENGINE_DOWNLOAD_TIMEOUT_SECONDS,
    ENGINE_URL,
    PROGRAM_NAME,
    resolve_engine_path,
    user_cache_engine_path,
)


class EngineDownloadWarning(UserWarning):
    """The converter bundle was missing and could not be downloaded."""


class ConverterEngine:
    """Raw converter source, read once and reused for every document.

    A missing bundle is repaired by a single download. If that fails too, the
    source becomes a script that throws, so the document reports the problem
    in its error region instead of the panel raising.
    """

    def __init__(self, path: Path | None = None, url: str = ENGINE_URL) -> None:
        self.path = Path(path) if path is not None else resolve_engine_path()
        self.url = url
        self._source: str | None = None

    @property
    def source(self) -> str:
        """Engine script text, loaded on first use."""
        if self._source is None:
            self._source = self._load()
        return self._source

    def _load(self) -> str:
        try:
            if self.path.is_file():
                return self.path.read_text(encoding="utf-8")
        except OSError as exc:
            return self._failure_script(f"Unable to read {self.path}: {exc}")

        try:
            response = requests.get(self.url, timeout=ENGINE_DOWNLOAD_TIMEOUT_SECONDS)
            response.raise_for_status()
            source = response.text
        except requests.RequestException as exc:
            warnings.warn(f"Unable to download {self.url}: {exc}", EngineDownloadWarning, stacklevel=3)
            return self._failure_script(f"Converter engine unavailable: {exc}")

        self._store(source)
        return source

    def _store(self, source: str) -> None:
        # Keep the downloaded copy for later runs; a read-only install falls
        # back to the per-user cache.
        for target in (self.path, user_cache_engine_path()):
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(source, encoding="utf-8")
            except OSError:
                continue
            print(f"{PROGRAM_NAME}: downloaded converter engine to {target}", file=sys.stderr)
            return

    @staticmethod
    def _failure_script(message: str) -> str:
        """Script that throws `message` inside the document's error boundary."""
        return f"throw new Error({json.dumps(message)});"


_default_engine: ConverterEngine | None = None


def default_engine() -> ConverterEngine:
    """Process-wide engine shared by panels that do not bring their own."""
    global _default_engine
    if _default_engine is None:
        _default_engine = ConverterEngine()
    return _default_engine
