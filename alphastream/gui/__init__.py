"""GUI platform for message scheduler adapters."""

from alphastream.gui.config import GuiConfig, load_gui_config
from alphastream.gui.host import GuiHost

__all__ = [
    "GuiConfig",
    "GuiHost",
    "load_gui_config",
]
