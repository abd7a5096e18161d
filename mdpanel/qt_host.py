"""QWebEngineView adapter implementing the DisplayHost contract."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import shiboken6
from PySide6.QtCore import Qt, QUrl
from PySide6.QtWebEngineCore import QWebEngineSettings
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QApplication, QVBoxLayout, QWidget

from mdpanel.host import DisplayHost


class QtDisplayHost(DisplayHost):
    """Wrap a QWebEngineView; widget properties come from its QMetaObject."""

    def __init__(self, view: QWebEngineView, owned_window: QWidget | None = None) -> None:
        self.view = view
        self._owned_window = owned_window
        self._deleted = False
        self._callbacks: list[Callable[[], None]] = []
        # Connected before any panel callback so liveness is already false
        # while the panel reacts to the destruction.
        view.destroyed.connect(self._on_view_destroyed)

        settings = view.settings()
        settings.setAttribute(QWebEngineSettings.WebAttribute.LocalContentCanAccessRemoteUrls, True)
        settings.setAttribute(QWebEngineSettings.WebAttribute.LocalContentCanAccessFileUrls, True)

    @classmethod
    def create(cls, parent: QWidget | None = None) -> QtDisplayHost:
        """Create a view that fills `parent`, or a new top-level window when none is given."""
        owned_window = None
        if parent is None:
            owned_window = QWidget()
            owned_window.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
            owned_window.resize(1000, 700)
            parent = owned_window

        view = QWebEngineView(parent)
        layout = parent.layout()
        if layout is None:
            layout = QVBoxLayout(parent)
            layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(view)

        if owned_window is not None:
            owned_window.show()
        return cls(view, owned_window)

    def _on_view_destroyed(self, *_args) -> None:
        """Mark the view dead, then notify the panel."""
        self._deleted = True
        for callback in list(self._callbacks):
            callback()

    def property_names(self) -> list[str]:
        """Readable properties declared on the view's QMetaObject."""
        meta = self.view.metaObject()
        names = []
        for index in range(meta.propertyCount()):
            prop = meta.property(index)
            if prop.isReadable():
                names.append(str(prop.name()))
        return names

    def get_property(self, name: str):
        return self.view.property(name)

    def set_property(self, name: str, value) -> None:
        if not self.view.setProperty(name, value):
            raise AttributeError(f"Widget property '{name}' is read-only")

    def set_document_source(self, source: str | Path) -> None:
        if isinstance(source, Path):
            self.view.load(QUrl.fromLocalFile(str(source.resolve())))
        else:
            self.view.setHtml(source)

    def flush(self) -> None:
        QApplication.processEvents()

    def on_destroyed(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def is_alive(self) -> bool:
        return not self._deleted and shiboken6.isValid(self.view)

    def destroy(self) -> None:
        if not self.is_alive():
            return
        self._deleted = True
        target = self._owned_window if self._owned_window is not None else self.view
        target.deleteLater()
