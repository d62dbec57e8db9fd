# receipt_dispatch/ui/dialogs/__init__.py
"""
Dialog builders.

Re-exports only; implementations live in sibling modules.
This module must NOT import main_window to avoid circular imports.
"""
from .dispatch_config import show_dispatch_config_dialog, shell_args_text

__all__ = [
    "show_dispatch_config_dialog",
    "shell_args_text",
]
