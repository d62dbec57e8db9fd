from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import json
import logging
from PySide6.QtCore import QSettings

from .strategies import (
    DEFAULT_ACTION,
    DEFAULT_COMMAND_TEMPLATE,
    DEFAULT_INTERPRETER,
    DEFAULT_SCRIPT_PATH,
    DEFAULT_SHELL,
    DEFAULT_SHELL_ARGS,
    DEFAULT_TIMEOUT,
)

log = logging.getLogger(__name__)

SETTINGS_KEY = "dispatch/profiles_json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "strategy": "shell",
    "timeout": DEFAULT_TIMEOUT,
    "encoding": "utf-8",
    # shell pipeline
    "shell": DEFAULT_SHELL,
    "shell_args": list(DEFAULT_SHELL_ARGS),
    "command_template": DEFAULT_COMMAND_TEMPLATE,
    # delegate script
    "interpreter": DEFAULT_INTERPRETER,
    "script_path": DEFAULT_SCRIPT_PATH,
    "action": DEFAULT_ACTION,
    "base_dir": "",
}


@dataclass
class DispatchProfile:
    """
    A named dispatch configuration.

    - name: what shows up in the UI ("Front Counter", "Kitchen script")
    - config: strategy + its settings, missing keys fall back to DEFAULT_CONFIG
    """
    name: str = "Default"
    config: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_CONFIG))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DispatchProfile":
        name = data.get("name") or "Unnamed"
        cfg = dict(DEFAULT_CONFIG)
        cfg.update(data.get("config") or {})
        return cls(name=name, config=cfg)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "config": self.config or {},
        }


def _settings() -> QSettings:
    return QSettings("ReceiptDispatch", "ReceiptDispatch")


def load_profiles(settings: Optional[QSettings] = None) -> List[DispatchProfile]:
    """
    Load dispatch profiles from QSettings.

    If nothing is stored yet, or the stored JSON is unreadable, a single
    'Default' profile with DEFAULT_CONFIG is returned.
    """
    s = settings if settings is not None else _settings()
    raw = s.value(SETTINGS_KEY, "", type=str)

    if raw:
        try:
            arr = json.loads(raw)
            profiles = [DispatchProfile.from_dict(d) for d in arr]
            if profiles:
                return profiles
        except (ValueError, TypeError, AttributeError) as exc:
            log.warning("ignoring unreadable dispatch profiles: %s", exc)

    return [DispatchProfile()]


def save_profiles(profiles: List[DispatchProfile], settings: Optional[QSettings] = None) -> None:
    """
    Persist dispatch profiles to QSettings as JSON.
    """
    s = settings if settings is not None else _settings()
    raw = json.dumps([p.to_dict() for p in profiles], indent=2)
    s.setValue(SETTINGS_KEY, raw)
    s.sync()
