"""Editor modes and key dispatch."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .visual_mode import VisualLineMode, VisualMode

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "NormalMode",
    "InsertMode",
    "VisualMode",
    "VisualLineMode",
]
