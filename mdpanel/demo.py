#!/usr/bin/env python3
"""mdpanel-demo: side-by-side markdown editor and live MarkdownPanel preview."""

from __future__ import annotations

import argparse
import inspect
import sys
from pathlib import Path

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QApplication, QMainWindow, QPlainTextEdit, QSplitter, QWidget

from mdpanel.config import DEFAULT_OPTIONS, DEMO_STYLESHEET, PROGRAM_NAME
from mdpanel.panel import MarkdownPanel


class DemoWindow(QMainWindow):
    """Editor on the left, MarkdownPanel preview on the right."""

    def __init__(self, text: str, enable_images: bool, working_directory: Path):
        super().__init__()
        self.setWindowTitle("MarkdownPanel Demo")
        self.resize(1200, 700)

        splitter = QSplitter()
        self.editor = QPlainTextEdit()
        self.editor.setPlainText(text)
        self.editor.setFont(QFont("Monospace", 11))
        splitter.addWidget(self.editor)

        preview_container = QWidget()
        splitter.addWidget(preview_container)
        splitter.setSizes([600, 600])
        self.setCentralWidget(splitter)

        self.panel = MarkdownPanel(
            parent=preview_container,
            content=text,
            stylesheets=DEMO_STYLESHEET,
            classes="container",
            options={**DEFAULT_OPTIONS, "smoothLivePreview": True},
            working_directory=working_directory,
            enable_images=enable_images,
        )

        self.editor.textChanged.connect(self._on_text_changed)

    def _on_text_changed(self) -> None:
        if self.panel.is_deleted:
            return
        self.panel.content = self.editor.toPlainText()


def _default_text() -> str:
    return inspect.cleandoc(MarkdownPanel.__doc__ or "")


def main() -> int:
    """Launch the demo window; returns the process exit code."""
    parser = argparse.ArgumentParser(
        prog=f"{PROGRAM_NAME}-demo",
        description="Edit markdown on the left and preview it with MarkdownPanel on the right.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Markdown file to load (default: the MarkdownPanel documentation).",
    )
    parser.add_argument(
        "--images",
        action="store_true",
        help="Render through a file next to the markdown so relative images resolve.",
    )
    args = parser.parse_args()

    if args.path is None:
        text = _default_text()
        working_directory = Path.cwd()
    else:
        path = Path(args.path).expanduser()
        if not path.is_file():
            print(f"File does not exist: {path}", file=sys.stderr)
            return 2
        text = path.read_text(encoding="utf-8", errors="replace")
        working_directory = path.resolve().parent

    app = QApplication(sys.argv)
    app.setApplicationName(PROGRAM_NAME)

    window = DemoWindow(text, args.images, working_directory)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
