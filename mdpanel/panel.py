"""MarkdownPanel: markdown rendered to HTML inside a web view widget."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterator, Mapping, MutableMapping, Sequence
from pathlib import Path

from mdpanel.config import DEFAULT_OPTIONS
from mdpanel.delivery import deliver
from mdpanel.document import build_document
from mdpanel.engine import ConverterEngine, default_engine
from mdpanel.host import DisplayHost
from mdpanel.proxy import ForwardedProperty, build_forwarding_table
from mdpanel.stylesheets import StylesheetCache, normalize_references

DECLARED_PROPERTIES = (
    "content",
    "stylesheets",
    "classes",
    "options",
    "enable_images",
    "working_directory",
    "host",
)


class PanelState(enum.Enum):
    CONSTRUCTING = "constructing"
    READY = "ready"
    DESTROYED = "destroyed"


class OptionMap(MutableMapping):
    """Converter options; every effective change notifies the owning panel."""

    def __init__(self, values: Mapping[str, object] | None = None, on_change: Callable[[], None] | None = None):
        self._values: dict[str, object] = dict(values or {})
        self._on_change = on_change

    def __getitem__(self, key: str):
        return self._values[key]

    def __setitem__(self, key: str, value) -> None:
        if key in self._values and self._values[key] == value:
            return
        self._values[key] = value
        self._notify()

    def __delitem__(self, key: str) -> None:
        del self._values[key]
        self._notify()

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"OptionMap({self._values!r})"

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()


class MarkdownPanel:
    """Control which displays markdown as HTML inside a web view.

    The markdown is converted in the page by the
    [showdown](https://github.com/showdownjs/showdown) library and the result
    is shown by a `QWebEngineView`.

    Properties can be set on construction

        panel = MarkdownPanel(parent=window, content="# Hello World!")

    or afterwards, either directly or through `set`

        panel.content = ["# Hello World", "This is a test..."]
        panel.set(stylesheets="https://example.com/style.css", classes="container")

    A list of strings is joined into separate paragraphs.

    `options` is a live mapping of showdown option names to values. Tables
    are enabled by default.

        panel.options["tasklists"] = True

    Remote stylesheets (`http://`, `https://`, `file://`) are downloaded once
    and inlined; anything else, or anything that fails to download, is linked.

    Set `enable_images` to render through a file in `working_directory` so
    relative image references resolve. The view resets on every refresh in
    that mode.

    Any other property of the underlying widget (`geometry`, `visible`,
    `zoomFactor`, ...) can be read and written on the panel directly.
    """

    def __init__(
        self,
        host: DisplayHost | None = None,
        parent=None,
        *,
        engine: ConverterEngine | None = None,
        **props,
    ) -> None:
        self._state = PanelState.CONSTRUCTING
        self._engine = engine or default_engine()
        self._stylesheet_cache = StylesheetCache()
        self._content: str | tuple[str, ...] = ""
        self._stylesheets: tuple[str, ...] = ()
        self._classes: tuple[str, ...] = ()
        self._options = OptionMap(on_change=self._changed)
        self._enable_images = False
        self._document = ""
        self.working_directory: str | Path = ""

        owns_host = host is None
        self._host = self._create_host(parent) if owns_host else host
        self._host.on_destroyed(self.delete)

        reserved = set(DECLARED_PROPERTIES) | set(dir(type(self)))
        self._forwarded: dict[str, ForwardedProperty] = build_forwarding_table(self._host, reserved)

        try:
            self.options = DEFAULT_OPTIONS
            self.set(**props)
        except Exception:
            # A caller-supplied host is left alone; one created here is torn down.
            self._state = PanelState.DESTROYED
            if owns_host and self._host.is_alive():
                self._host.destroy()
            raise

        self._state = PanelState.READY
        self.refresh()

    @staticmethod
    def _create_host(parent) -> DisplayHost:
        """Create a web view filling `parent`, or a new window."""
        from mdpanel.qt_host import QtDisplayHost

        return QtDisplayHost.create(parent)

    # Forwarded widget properties

    def __getattr__(self, name: str):
        forwarded = self.__dict__.get("_forwarded", {})
        if name in forwarded:
            return forwarded[name].get()
        raise AttributeError(f"{type(self).__name__} has no property '{name}'")

    def __setattr__(self, name: str, value) -> None:
        # Methods cannot be replaced by assignment.
        declared = isinstance(getattr(type(self), name, None), property)
        if name.startswith("_") or name == "working_directory" or declared:
            object.__setattr__(self, name, value)
            return
        forwarded = self.__dict__.get("_forwarded", {})
        if name in forwarded:
            forwarded[name].set(value)
            return
        raise AttributeError(f"{type(self).__name__} has no property '{name}'")

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self.__dict__.get("_forwarded", {})))

    @property
    def forwarded_properties(self) -> list[str]:
        """Widget property names reachable on the panel."""
        return list(self._forwarded)

    def set(self, **props) -> None:
        """Assign several properties; each assignment refreshes on its own."""
        for name, value in props.items():
            setattr(self, name, value)

    def get(self, name: str):
        """Read a declared or forwarded property by name."""
        return getattr(self, name)

    # Declared properties

    @property
    def host(self) -> DisplayHost:
        return self._host

    @property
    def state(self) -> PanelState:
        return self._state

    @property
    def document(self) -> str:
        """The most recently assembled document."""
        return self._document

    @property
    def content(self) -> str | tuple[str, ...]:
        return self._content

    @content.setter
    def content(self, value: str | Sequence[str] | None) -> None:
        if value is None:
            value = ""
        self._content = value if isinstance(value, str) else tuple(value)
        self._changed()

    @property
    def stylesheets(self) -> tuple[str, ...]:
        return self._stylesheets

    @stylesheets.setter
    def stylesheets(self, value: str | Sequence[str] | None) -> None:
        references = normalize_references(value)
        self._stylesheet_cache.resolve(references)
        self._stylesheets = references
        self._changed()

    @property
    def stylesheet_cache(self) -> StylesheetCache:
        return self._stylesheet_cache

    @property
    def classes(self) -> tuple[str, ...]:
        return self._classes

    @classes.setter
    def classes(self, value: str | Sequence[str] | None) -> None:
        self._classes = normalize_references(value)
        self._changed()

    @property
    def options(self) -> OptionMap:
        return self._options

    @options.setter
    def options(self, value: Mapping[str, object] | None) -> None:
        value = dict(value or {})
        if value == dict(self._options):
            return
        # Detach the old map so stale references stop triggering rebuilds.
        self._options._on_change = None
        self._options = OptionMap(value, on_change=self._changed)
        self._changed()

    @property
    def enable_images(self) -> bool:
        return self._enable_images

    @enable_images.setter
    def enable_images(self, value: bool) -> None:
        self._enable_images = bool(value)
        self._changed()

    # Rendering and lifecycle

    def _changed(self) -> None:
        if self._state is PanelState.CONSTRUCTING:
            return
        self.refresh()

    def refresh(self) -> None:
        """Rebuild the document from the current state and hand it to the host."""
        if self._state is PanelState.DESTROYED:
            raise RuntimeError("MarkdownPanel has been deleted")

        self._document = build_document(
            self._content,
            self._options,
            self._stylesheets,
            self._stylesheet_cache,
            self._classes,
            self._engine.source,
        )
        deliver(self._host, self._document, self._enable_images, self.working_directory)

    def delete(self) -> None:
        """Destroy the panel and its widget; later calls do nothing."""
        if self._state is PanelState.DESTROYED:
            return
        self._state = PanelState.DESTROYED
        if self._host.is_alive():
            self._host.destroy()

    @property
    def is_deleted(self) -> bool:
        return self._state is PanelState.DESTROYED
