from __future__ import annotations

import logging
from typing import Optional

from .exceptions import map_exception
from .result import DispatchResult, Failure
from .strategies import BaseStrategy, make_strategy

log = logging.getLogger(__name__)


class PrintDispatcher:
    """
    Hands serialized receipt text to an external program via a strategy.

    The text is opaque here: it is never parsed or validated. Each call is
    independent and always returns a ``DispatchResult``; nothing is raised
    across this boundary and nothing is retried.
    """

    def __init__(self, strategy: BaseStrategy):
        self.strategy = strategy

    @classmethod
    def from_config(cls, cfg: Optional[dict] = None) -> "PrintDispatcher":
        return cls(make_strategy(dict(cfg or {})))

    def dispatch(self, receipt_text: str) -> DispatchResult:
        log.debug("dispatching %d chars via %s", len(receipt_text), self.strategy.name)
        try:
            result = self.strategy.execute(receipt_text)
        except Exception as exc:
            result = Failure.from_error(map_exception(exc))

        if result.ok:
            log.debug("dispatch succeeded (%d chars of output)", len(result.text))
        else:
            log.warning("dispatch failed [%s]: %s", result.kind, result.text.strip())
        return result


def dispatch(receipt_text: str, cfg: Optional[dict] = None) -> DispatchResult:
    """
    One-shot helper: build a dispatcher from *cfg* and send *receipt_text*.

    Configuration errors come back as ``Failure`` too.
    """
    try:
        dispatcher = PrintDispatcher.from_config(cfg)
    except Exception as exc:
        result = Failure.from_error(map_exception(exc))
        log.warning("dispatch not attempted [%s]: %s", result.kind, result.text)
        return result
    return dispatcher.dispatch(receipt_text)
