from __future__ import annotations

import codecs
import logging
import math
from typing import List, Optional, Sequence

from .exceptions import DispatchConfigError
from .process import run_command
from .result import DispatchResult, Success

log = logging.getLogger(__name__)

RECEIPT_PLACEHOLDER = "{receipt}"

DEFAULT_TIMEOUT = 60.0
DEFAULT_SHELL = "bash"
DEFAULT_SHELL_ARGS = ("-l", "-i")
DEFAULT_COMMAND_TEMPLATE = "print print '{receipt}'"
DEFAULT_INTERPRETER = "python3"
DEFAULT_SCRIPT_PATH = "scripts/print_receipt.py"
DEFAULT_ACTION = "print"

_shell_warned = False


def escape_single_quotes(text: str) -> str:
    """
    Make *text* safe to place between single quotes in a POSIX shell.

    Each ``'`` closes the quote, adds an escaped quote and reopens it:
    ``O'Brien`` -> ``O'\\''Brien``.
    """
    return text.replace("'", "'\\''")


class BaseStrategy:
    """One way of handing receipt text to an external program."""

    name = "base"

    def __init__(self, timeout: Optional[float] = DEFAULT_TIMEOUT, encoding: str = "utf-8"):
        self.timeout = normalize_timeout(timeout)
        self.encoding = encoding

    def build_command(self, receipt_text: str) -> List[str]:
        raise NotImplementedError

    @property
    def cwd(self) -> Optional[str]:
        return None

    def execute(self, receipt_text: str) -> DispatchResult:
        argv = self.build_command(receipt_text)
        return run_command(argv, timeout=self.timeout, encoding=self.encoding, cwd=self.cwd)


class ShellPipelineStrategy(BaseStrategy):
    """
    Embed the escaped receipt in a command line run by an interactive login
    shell, so PATH, aliases and shell functions from the user's startup files
    are available.

    Shell-string construction from untrusted input is injection-prone even
    with escaping; prefer ``DelegateScriptStrategy`` when the tool allows it.
    """

    name = "shell"

    def __init__(
        self,
        shell: str = DEFAULT_SHELL,
        shell_args: Sequence[str] = DEFAULT_SHELL_ARGS,
        command_template: str = DEFAULT_COMMAND_TEMPLATE,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        encoding: str = "utf-8",
    ):
        super().__init__(timeout, encoding)
        if RECEIPT_PLACEHOLDER not in command_template:
            raise DispatchConfigError(
                f"Command template must contain {RECEIPT_PLACEHOLDER}: {command_template!r}"
            )
        self.shell = shell
        self.shell_args = list(shell_args)
        self.command_template = command_template

        global _shell_warned
        if not _shell_warned:
            _shell_warned = True
            log.warning(
                "Shell pipeline dispatch sources the user's shell startup files "
                "and builds a shell string from receipt data."
            )

    def render_command(self, receipt_text: str) -> str:
        # str.replace, not str.format: templates and JSON both carry braces
        return self.command_template.replace(
            RECEIPT_PLACEHOLDER, escape_single_quotes(receipt_text)
        )

    def build_command(self, receipt_text: str) -> List[str]:
        return [self.shell, *self.shell_args, "-c", self.render_command(receipt_text)]


class DelegateScriptStrategy(BaseStrategy):
    """Run ``<interpreter> <script> <action> <receipt>`` as an argument vector."""

    name = "script"

    def __init__(
        self,
        interpreter: str = DEFAULT_INTERPRETER,
        script_path: str = DEFAULT_SCRIPT_PATH,
        action: str = DEFAULT_ACTION,
        base_dir: Optional[str] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        encoding: str = "utf-8",
    ):
        super().__init__(timeout, encoding)
        if not interpreter:
            raise DispatchConfigError("Script dispatch requires an interpreter.")
        if not script_path:
            raise DispatchConfigError("Script dispatch requires a script_path.")
        self.interpreter = interpreter
        self.script_path = script_path
        self.action = action
        self.base_dir = base_dir

    @property
    def cwd(self) -> Optional[str]:
        return self.base_dir

    def build_command(self, receipt_text: str) -> List[str]:
        argv = [self.interpreter, self.script_path]
        if self.action:
            argv.append(self.action)
        argv.append(receipt_text)
        return argv


class DryRunStrategy(BaseStrategy):
    """Records receipts instead of spawning anything."""

    name = "dry_run"

    def __init__(self, timeout: Optional[float] = None, encoding: str = "utf-8"):
        super().__init__(timeout, encoding)
        self.sent: List[str] = []

    def build_command(self, receipt_text: str) -> List[str]:
        return [DEFAULT_ACTION, receipt_text]

    def execute(self, receipt_text: str) -> DispatchResult:
        self.sent.append(receipt_text)
        return Success("")

    @property
    def total_chars(self) -> int:
        return sum(len(s) for s in self.sent)


def normalize_timeout(raw) -> Optional[float]:
    """
    Turn a configured timeout into seconds, or ``None`` for no deadline.

    Blank, ``None`` and ``0`` mean wait forever. Negative and non-finite
    values are rejected before anything is spawned.
    """
    if raw in (None, ""):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise DispatchConfigError(f"Invalid timeout: {raw!r}")
    if not math.isfinite(value):
        raise DispatchConfigError(f"Invalid timeout: {raw!r}")
    if value < 0:
        raise DispatchConfigError(f"Timeout cannot be negative: {raw!r}")
    return value or None


def shell_args_from(cfg: dict) -> List[str]:
    """``shell_args`` may be stored as a list or a single space-separated string."""
    raw = cfg.get("shell_args", DEFAULT_SHELL_ARGS)
    if raw is None:
        return list(DEFAULT_SHELL_ARGS)
    if isinstance(raw, str):
        return raw.split()
    return [str(a) for a in raw]


def make_strategy(cfg: dict) -> BaseStrategy:
    """Factory to build a strategy from a dispatch config dict."""
    kind = (cfg.get("strategy") or "shell").lower()
    timeout = normalize_timeout(cfg.get("timeout", DEFAULT_TIMEOUT))
    encoding = cfg.get("encoding") or "utf-8"
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise DispatchConfigError(f"Unknown encoding: {encoding}")

    if kind == "shell":
        return ShellPipelineStrategy(
            shell=cfg.get("shell") or DEFAULT_SHELL,
            shell_args=shell_args_from(cfg),
            command_template=cfg.get("command_template") or DEFAULT_COMMAND_TEMPLATE,
            timeout=timeout,
            encoding=encoding,
        )
    if kind == "script":
        return DelegateScriptStrategy(
            interpreter=cfg.get("interpreter") or DEFAULT_INTERPRETER,
            script_path=cfg.get("script_path") or DEFAULT_SCRIPT_PATH,
            action=cfg.get("action", DEFAULT_ACTION),
            base_dir=cfg.get("base_dir") or None,
            timeout=timeout,
            encoding=encoding,
        )
    if kind == "dry_run":
        return DryRunStrategy(timeout=timeout, encoding=encoding)
    raise DispatchConfigError(f"Unknown strategy: {kind}")
