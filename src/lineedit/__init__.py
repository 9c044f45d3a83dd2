"""lineedit: Emacs-style interactive line editor for terminals."""

# Configuration
from lineedit.config import EditorConfig, history_path, load_config, save_config

# Editor
from lineedit.editor import AutocompleteHandler, Completion, LineEditor

# History
from lineedit.history import FileLineStore, History, LineStore

# Keybindings
from lineedit.keybindings import (
    DEFAULT_KEYBINDINGS,
    DEFAULT_KEYMAP,
    Binding,
    EditorCommand,
    KeybindingTable,
)

# Keyboard input handling
from lineedit.keys import END_OF_INPUT, INTERRUPT, KeyEvent, KeyId, parse_key

# Kill/yank
from lineedit.kill_buffer import KillBuffer

# Rendering
from lineedit.render import LineRenderer, compute_rendered, text_to_render_pos

# Terminal
from lineedit.terminal import ProcessTerminal, Terminal

# Buffer
from lineedit.text_buffer import TextBuffer

__all__ = [
    "AutocompleteHandler",
    "Binding",
    "Completion",
    "DEFAULT_KEYBINDINGS",
    "DEFAULT_KEYMAP",
    "EditorCommand",
    "EditorConfig",
    "FileLineStore",
    "History",
    "END_OF_INPUT",
    "INTERRUPT",
    "KeyEvent",
    "KeyId",
    "KeybindingTable",
    "KillBuffer",
    "LineEditor",
    "LineRenderer",
    "LineStore",
    "ProcessTerminal",
    "Terminal",
    "TextBuffer",
    "compute_rendered",
    "history_path",
    "load_config",
    "parse_key",
    "save_config",
    "text_to_render_pos",
]
