"""
mdpanel: markdown rendered as HTML inside a Qt web view.
"""

__version__ = "0.1.0"

from mdpanel.delivery import RenderMode
from mdpanel.engine import ConverterEngine, EngineDownloadWarning
from mdpanel.host import DisplayHost
from mdpanel.panel import MarkdownPanel, OptionMap, PanelState
from mdpanel.stylesheets import StylesheetCache, StylesheetDownloadWarning

__all__ = [
    "MarkdownPanel",
    "OptionMap",
    "PanelState",
    "DisplayHost",
    "ConverterEngine",
    "EngineDownloadWarning",
    "RenderMode",
    "StylesheetCache",
    "StylesheetDownloadWarning",
    "__version__",
]
