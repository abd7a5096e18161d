"""Contract between the panel and the display widget it wraps."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path


class DisplayHost:
    """Display surface the panel renders into.

    A document source is either raw document text (`str`) or a `Path` to a
    document file on disk. Subclasses adapt a concrete widget.
    """

    def property_names(self) -> list[str]:
        """Names of the widget properties the panel mirrors."""
        raise NotImplementedError

    def get_property(self, name: str):
        """Current value of a widget property."""
        raise NotImplementedError

    def set_property(self, name: str, value) -> None:
        """Write a widget property; read-only properties raise AttributeError."""
        raise NotImplementedError

    def set_document_source(self, source: str | Path) -> None:
        """Show document text, or load the document file at a Path."""
        raise NotImplementedError

    def flush(self) -> None:
        """Run pending layout/paint work before the next source assignment."""
        raise NotImplementedError

    def on_destroyed(self, callback: Callable[[], None]) -> None:
        """Call `callback` once the widget is gone; liveness is already false by then."""
        raise NotImplementedError

    def is_alive(self) -> bool:
        """False once the widget is destroyed or scheduled for destruction."""
        raise NotImplementedError

    def destroy(self) -> None:
        """Destroy the widget; the destroyed callbacks fire as a result."""
        raise NotImplementedError
