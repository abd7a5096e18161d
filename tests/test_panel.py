"""Tests for MarkdownPanel state, refresh behavior and lifecycle."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from mdpanel.config import RENDER_FILE_NAME
from mdpanel.panel import MarkdownPanel, OptionMap, PanelState
from mdpanel.stylesheets import StylesheetDownloadWarning

from conftest import FakeHost

CSS_URL = "https://example.com/style.css"


def _panel(host, engine, **props):
    return MarkdownPanel(host=host, engine=engine, **props)


def _css_response(text="body { margin: 0; }"):
    response = MagicMock()
    response.text = text
    return response


class TestConstruction:
    def test_initial_render_once(self, host, engine):
        panel = _panel(host, engine)
        assert panel.state is PanelState.READY
        assert len(host.sources) == 1
        assert host.sources[0] == panel.document

    def test_default_options(self, host, engine):
        panel = _panel(host, engine)
        assert dict(panel.options) == {"tables": True}
        assert 'conv.setOption("tables", true);' in panel.document

    def test_constructor_properties_single_render(self, host, engine):
        panel = _panel(host, engine, content="# Hi", classes="container", visible=False)
        assert len(host.sources) == 1
        assert panel.classes == ("container",)
        assert host.properties["visible"] is False
        assert 'conv.makeHtml("# Hi");' in panel.document

    def test_demo_style_constructor_single_render(self, host, engine, tmp_path):
        panel = _panel(
            host,
            engine,
            content="# Demo",
            options={"tables": True, "smoothLivePreview": True},
            working_directory=tmp_path,
            enable_images=True,
        )

        assert panel.enable_images is True
        target = tmp_path / RENDER_FILE_NAME
        assert host.sources == ["", target]
        assert 'conv.setOption("smoothLivePreview", true);' in target.read_text(encoding="utf-8")

    def test_unknown_constructor_property(self, host, engine):
        with pytest.raises(AttributeError):
            _panel(host, engine, bogus=1)


class TestRefresh:
    def test_each_mutation_rebuilds_once(self, host, engine):
        panel = _panel(host, engine)
        panel.content = "a"
        panel.classes = ["x", "y"]
        panel.enable_images = False
        panel.options = {"tables": True, "tasklists": True}
        assert len(host.sources) == 5

    def test_idempotent_refresh(self, host, engine):
        panel = _panel(host, engine, content=["a", "b"])
        first = panel.document
        panel.refresh()
        assert panel.document == first
        assert host.sources[-1] == host.sources[-2]

    def test_list_and_string_content_equivalent(self, engine):
        first = _panel(FakeHost(), engine, content=["a", "b"])
        second = _panel(FakeHost(), engine, content="a\n\nb")
        assert first.document == second.document

    def test_equal_options_skip_rebuild(self, host, engine):
        panel = _panel(host, engine)
        panel.options = {"tables": True}
        assert len(host.sources) == 1

    def test_option_item_assignment_rebuilds(self, host, engine):
        panel = _panel(host, engine)
        panel.options["smoothLivePreview"] = True
        assert len(host.sources) == 2
        assert 'conv.setOption("smoothLivePreview", true);' in panel.document

        panel.options["smoothLivePreview"] = True
        assert len(host.sources) == 2

        del panel.options["smoothLivePreview"]
        assert len(host.sources) == 3
        assert "smoothLivePreview" not in panel.document

    def test_replaced_option_map_detached(self, host, engine):
        panel = _panel(host, engine)
        stale = panel.options
        panel.options = {"tables": False}
        stale["other"] = 1
        assert len(host.sources) == 2
        assert "other" not in panel.options

    def test_set_and_get(self, host, engine):
        panel = _panel(host, engine)
        panel.set(content="x", classes="c")
        assert len(host.sources) == 3
        assert panel.get("content") == "x"
        assert panel.get("zoomFactor") == 1.0

    def test_working_directory_does_not_rebuild(self, host, engine, tmp_path):
        panel = _panel(host, engine)
        panel.working_directory = tmp_path
        assert len(host.sources) == 1


class TestStylesheets:
    @patch("mdpanel.stylesheets.requests.get")
    def test_remote_stylesheet_fetched_once(self, mock_get, host, engine):
        mock_get.return_value = _css_response()
        panel = _panel(host, engine)

        panel.stylesheets = CSS_URL
        panel.stylesheets = [CSS_URL, "theme.css"]

        assert mock_get.call_count == 1
        assert panel.stylesheets == (CSS_URL, "theme.css")
        assert "body { margin: 0; }" in panel.document
        assert '<link rel="stylesheet" href="theme.css">' in panel.document

    @patch("mdpanel.stylesheets.requests.get")
    def test_failed_stylesheet_still_renders(self, mock_get, host, engine):
        mock_get.side_effect = requests.ConnectionError("down")
        panel = _panel(host, engine)

        with pytest.warns(StylesheetDownloadWarning):
            panel.stylesheets = CSS_URL

        assert f'<link rel="stylesheet" href="{CSS_URL}">' in panel.document
        assert "conv.makeHtml(" in panel.document
        assert len(host.sources) == 2

    @patch("mdpanel.stylesheets.requests.get")
    def test_cache_per_panel(self, mock_get, engine):
        mock_get.return_value = _css_response()
        first = _panel(FakeHost(), engine, stylesheets=CSS_URL)
        second = _panel(FakeHost(), engine, stylesheets=CSS_URL)

        assert mock_get.call_count == 2
        assert first.stylesheet_cache is not second.stylesheet_cache


class TestRenderModes:
    def test_inline_mode_no_file(self, host, engine, tmp_path):
        workdir = tmp_path / "work"
        workdir.mkdir()
        panel = _panel(host, engine)
        panel.working_directory = workdir
        panel.content = "x"
        assert list(workdir.iterdir()) == []
        assert all(isinstance(source, str) for source in host.sources)

    def test_file_backed_mode(self, host, engine, tmp_path):
        panel = _panel(host, engine)
        panel.working_directory = tmp_path
        panel.enable_images = True

        target = tmp_path / RENDER_FILE_NAME
        assert target.read_text(encoding="utf-8") == panel.document
        assert host.sources[-2:] == ["", target]

        panel.content = "next"
        assert host.sources[-2:] == ["", target]
        assert len(host.sources) == 5

    def test_file_write_error_propagates(self, host, engine, tmp_path):
        panel = _panel(host, engine)
        panel.working_directory = tmp_path / "missing"
        with pytest.raises(OSError):
            panel.enable_images = True


class TestPropertyProxy:
    def test_forwarded_read_write_no_rebuild(self, host, engine):
        panel = _panel(host, engine)
        panel.visible = False
        panel.geometry = (1, 2, 3, 4)

        assert host.properties["visible"] is False
        assert panel.geometry == (1, 2, 3, 4)
        assert len(host.sources) == 1

    def test_declared_names_not_shadowed(self, engine):
        host = FakeHost(content="host", options="host", refresh="host")
        panel = _panel(host, engine)

        assert "content" not in panel.forwarded_properties
        assert "options" not in panel.forwarded_properties
        assert "refresh" not in panel.forwarded_properties
        assert panel.content == ""
        assert host.properties["content"] == "host"

    def test_forwarded_names_listed(self, host, engine):
        panel = _panel(host, engine)
        assert {"visible", "geometry", "zoomFactor"} <= set(dir(panel))

    def test_unknown_attribute(self, host, engine):
        panel = _panel(host, engine)
        with pytest.raises(AttributeError):
            panel.nothing
        with pytest.raises(AttributeError):
            panel.nothing = 1


class TestLifecycle:
    def test_host_destruction_deletes_panel_once(self, host, engine):
        panel = _panel(host, engine)
        host.destroy()

        assert panel.state is PanelState.DESTROYED
        assert host.destroy_calls == 1

        panel.delete()
        assert host.destroy_calls == 1

    def test_panel_delete_destroys_host_once(self, host, engine):
        panel = _panel(host, engine)
        panel.delete()
        panel.delete()

        assert panel.is_deleted
        assert not host.is_alive()
        assert host.destroy_calls == 1

    def test_mutation_after_delete_raises(self, host, engine):
        panel = _panel(host, engine)
        panel.delete()
        with pytest.raises(RuntimeError):
            panel.content = "x"
        assert len(host.sources) == 1


def test_option_map_notifies_only_on_change():
    calls = []
    options = OptionMap({"a": 1}, on_change=lambda: calls.append(1))
    options["a"] = 1
    options["b"] = 2
    options.update({"b": 2, "c": 3})
    assert calls == [1, 1]
    assert list(options) == ["a", "b", "c"]


class TestPropertyAssignment:
    def test_set_rejects_method_names(self, host, engine):
        panel = _panel(host, engine)
        with pytest.raises(AttributeError):
            panel.set(refresh=True)
        with pytest.raises(AttributeError):
            panel.delete = 1

        panel.refresh()
        assert callable(panel.refresh)
        assert len(host.sources) == 2

    def test_read_only_properties(self, host, engine):
        panel = _panel(host, engine)
        with pytest.raises(AttributeError):
            panel.document = "<html></html>"
        with pytest.raises(AttributeError):
            panel.set(host=FakeHost())
        assert panel.host is host


class TestFailedConstruction:
    def test_owned_host_destroyed(self, engine):
        created = FakeHost()
        with patch.object(MarkdownPanel, "_create_host", return_value=created):
            with pytest.raises(AttributeError):
                MarkdownPanel(engine=engine, bogus=1)

        assert not created.is_alive()
        assert created.destroy_calls == 1
        assert created.sources == []

    def test_supplied_host_left_alive(self, host, engine):
        with pytest.raises(AttributeError):
            MarkdownPanel(host=host, engine=engine, bogus=1)

        assert host.is_alive()
        assert host.destroy_calls == 0
