"""Shared fixtures: a display host that records what the panel does to it."""

from pathlib import Path

import pytest

from mdpanel.engine import ConverterEngine
from mdpanel.host import DisplayHost

FAKE_ENGINE_SOURCE = "var showdown = { Converter: function () {} };"


class FakeHost(DisplayHost):
    """In-memory host with a couple of appearance properties."""

    def __init__(self, **properties):
        self.properties = {"visible": True, "geometry": (0, 0, 100, 100), "zoomFactor": 1.0}
        self.properties.update(properties)
        self.sources = []
        self.events = []
        self.destroy_calls = 0
        self._alive = True
        self._callbacks = []

    def property_names(self):
        return list(self.properties)

    def get_property(self, name):
        return self.properties[name]

    def set_property(self, name, value):
        self.properties[name] = value

    def set_document_source(self, source):
        self.sources.append(source)
        self.events.append(("source", source))

    def flush(self):
        self.events.append(("flush", None))

    def on_destroyed(self, callback):
        self._callbacks.append(callback)

    def is_alive(self):
        return self._alive

    def destroy(self):
        self.destroy_calls += 1
        self._alive = False
        for callback in list(self._callbacks):
            callback()


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def engine(tmp_path: Path):
    path = tmp_path / "showdown.min.js"
    path.write_text(FAKE_ENGINE_SOURCE, encoding="utf-8")
    return ConverterEngine(path=path)
