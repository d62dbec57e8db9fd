"""Outcome of a single dispatch: either ``Success`` or ``Failure``."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .exceptions import PrintError


@dataclass(frozen=True)
class Success:
    text: str = ""          # decoded stdout, may be empty

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    text: str
    error: Optional[PrintError] = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> str:
        return type(self.error).__name__ if self.error is not None else "PrintError"

    @classmethod
    def from_error(cls, error: PrintError) -> "Failure":
        return cls(text=str(error), error=error)


DispatchResult = Union[Success, Failure]
