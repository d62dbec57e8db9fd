from __future__ import annotations

import logging

from PySide6 import QtCore

from .dispatcher import PrintDispatcher
from .exceptions import friendly_message
from .result import DispatchResult, Failure

log = logging.getLogger(__name__)


class WorkerSignals(QtCore.QObject):
    succeeded = QtCore.Signal(str)   # program stdout
    error = QtCore.Signal(str)       # relayed error text
    finished = QtCore.Signal()       # no-arg; emitted once either way


class DispatchWorker(QtCore.QThread):
    """
    Thread that runs one dispatch so the UI stays responsive.

    receipt_text: serialized receipt, passed through untouched
    config: dispatch config dict (see printing.profiles.DEFAULT_CONFIG)

    The worker holds no state beyond its own call; concurrent workers spawn
    unrelated processes.
    """
    def __init__(self, receipt_text: str, config: dict | None = None, parent=None):
        super().__init__(parent)
        self.receipt_text = receipt_text or ""
        self.config = dict(config or {})
        self.signals = WorkerSignals()
        self.result: DispatchResult | None = None

    def run(self):
        try:
            dispatcher = PrintDispatcher.from_config(self.config)
            self.result = dispatcher.dispatch(self.receipt_text)
        except Exception as e:
            # config errors surface here, before any process is spawned
            msg = friendly_message(e)
            self.result = Failure(text=msg)
            log.warning("dispatch worker error: %s", msg)

        try:
            if self.result.ok:
                self.signals.succeeded.emit(self.result.text)
            else:
                self.signals.error.emit(self.result.text)
        finally:
            self.signals.finished.emit()
