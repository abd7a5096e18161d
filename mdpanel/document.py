"""Assemble the self-contained HTML document shown by the host widget."""

from __future__ import annotations

import html
from collections.abc import Sequence
from dataclasses import dataclass

from mdpanel.config import LOADING_PLACEHOLDER
from mdpanel.serialize import serialize_content, serialize_options
from mdpanel.stylesheets import StylesheetCache

PREAMBLE = (
    "<!DOCTYPE html>",
    "<html>",
    "<head>",
    '<meta charset="utf-8">',
    '<meta http-equiv="X-UA-Compatible" content="IE=edge">',
)

CONSOLE_SHIM = "<script>if (window.console) { var console = window.console; }</script>"

# Anchors pointing at http(s) targets open in a new browsing context.
EXTERNAL_LINKS_JS = (
    'var links = document.querySelectorAll("a");'
    "for (var k = 0; k < links.length; k++) {"
    'if (links[k].href && links[k].href.substring(0, 4) === "http") links[k].target = "_blank";'
    "}"
)


@dataclass(frozen=True)
class DocumentParts:
    """Everything a document is built from, already serialized.

    `content_literal` and `option_script` are produced by the serialize
    module; `render()` only places them, it never escapes them again.
    """

    content_literal: str
    option_script: str
    engine_source: str
    inline_styles: tuple[str, ...] = ()
    stylesheet_links: tuple[str, ...] = ()
    classes: tuple[str, ...] = ()

    def style_block(self) -> str:
        """Cached stylesheet bodies, each on its own line."""
        body = "".join(f"\n{style}" for style in self.inline_styles)
        return f"<style>{body}</style>"

    def link_elements(self) -> list[str]:
        """One link element per stylesheet that is not inlined."""
        return [f'<link rel="stylesheet" href="{html.escape(ref)}">' for ref in self.stylesheet_links]

    def container_open(self) -> str:
        return f'<div class="{html.escape(" ".join(self.classes))}">'

    def script_block(self) -> str:
        return (
            "<script>\n"
            'var display = document.getElementById("display");\n'
            'var error = document.getElementById("error");\n'
            "try {\n"
            f"{self.engine_source}\n"
            "var conv = new showdown.Converter();\n"
            f"{self.option_script}\n"
            "} catch (err) {\n"
            "error.textContent = err.message;\n"
            'display.innerHTML = "";\n'
            "}\n"
            # A failed engine load leaves conv undefined; keep its message in #error.
            'if (typeof conv !== "undefined") {\n'
            "try {\n"
            f'var html = conv.makeHtml("{self.content_literal}");\n'
            "display.innerHTML = html;\n"
            f"{EXTERNAL_LINKS_JS}\n"
            "} catch (err) {\n"
            "error.textContent = err.message;\n"
            "}\n"
            "}\n"
            "</script>"
        )

    def render(self) -> str:
        lines = [
            *PREAMBLE,
            self.style_block(),
            *self.link_elements(),
            CONSOLE_SHIM,
            "</head>",
            "<body>",
            self.container_open(),
            '<div id="error" class="error" style="color:#F00"></div>',
            f'<div id="display">{LOADING_PLACEHOLDER}</div>',
            "</div>",
            self.script_block(),
            "</body>",
            "</html>",
        ]
        return "".join(f"{line}\n" for line in lines)


def build_document(
    content,
    options,
    stylesheets: Sequence[str],
    cache: StylesheetCache,
    classes: Sequence[str],
    engine_source: str,
) -> str:
    """Build the full document; a pure function of its arguments and the cache contents."""
    parts = DocumentParts(
        content_literal=serialize_content(content),
        option_script=serialize_options(options),
        engine_source=engine_source,
        inline_styles=tuple(cache.inline_bodies(stylesheets)),
        stylesheet_links=tuple(cache.linked_references(stylesheets)),
        classes=tuple(classes),
    )
    return parts.render()
