"""Fetch-once cache for remote stylesheets that get inlined into the document."""

from __future__ import annotations

import warnings
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from mdpanel.config import REMOTE_SCHEMES, STYLESHEET_FETCH_TIMEOUT_SECONDS


class StylesheetDownloadWarning(UserWarning):
    """A remote stylesheet could not be fetched and will be linked instead."""


def normalize_references(value: str | Sequence[str] | None) -> tuple[str, ...]:
    """Accept a single reference or a sequence of them."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value)


def is_remote_reference(reference: str) -> bool:
    """True for http, https and file references, the ones worth fetching."""
    return reference.startswith(REMOTE_SCHEMES)


def fetch_stylesheet(reference: str) -> str:
    """Blocking read of a stylesheet body; raises on any failure."""
    if reference.startswith("file://"):
        path = Path(url2pathname(urlparse(reference).path))
        return path.read_text(encoding="utf-8")

    response = requests.get(reference, timeout=STYLESHEET_FETCH_TIMEOUT_SECONDS)
    response.raise_for_status()
    return response.text


class StylesheetCache:
    """Per-panel map of stylesheet reference -> body.

    Entries are only ever added. A cached reference is never fetched again,
    even if the remote copy changes later.
    """

    def __init__(self, fetcher: Callable[[str], str] | None = None) -> None:
        self._fetch = fetcher or fetch_stylesheet
        self._bodies: dict[str, str] = {}

    def __contains__(self, reference: object) -> bool:
        return reference in self._bodies

    def __len__(self) -> int:
        return len(self._bodies)

    def get(self, reference: str) -> str | None:
        """Cached body, or None when the reference was never fetched."""
        return self._bodies.get(reference)

    def resolve(self, references: Iterable[str]) -> None:
        """Fetch every remote-looking reference that is not cached yet."""
        for reference in references:
            if reference in self._bodies or not is_remote_reference(reference):
                continue
            try:
                self._bodies[reference] = self._fetch(reference)
            except (requests.RequestException, OSError, UnicodeDecodeError) as exc:
                warnings.warn(
                    f"Unable to download {reference}: {exc}",
                    StylesheetDownloadWarning,
                    stacklevel=2,
                )

    def inline_bodies(self, references: Iterable[str]) -> list[str]:
        """Bodies of the cached references, in list order."""
        return [self._bodies[ref] for ref in references if ref in self._bodies]

    def linked_references(self, references: Iterable[str]) -> list[str]:
        """References that must be rendered as link elements."""
        return [ref for ref in references if ref not in self._bodies]
