# receipt_dispatch/printing/exceptions.py
"""
Consistent error types for the dispatch subsystem.

No Qt dependencies: this module is pure Python so it can be used
in non-GUI contexts (tests, CLI tools, dry-run pipelines).
"""
from __future__ import annotations

import subprocess
from typing import Optional


class PrintError(Exception):
    """Base exception for all dispatch errors."""


class DispatchConfigError(PrintError):
    """Invalid or incomplete dispatch configuration."""


class SpawnError(PrintError):
    """The external print program could not be started."""


class EncodingError(PrintError):
    """Captured output of the external program is not valid text."""


class ExternalProcessError(PrintError):
    """
    The external program ran but exited with a failure status.

    ``str(err)`` is the program's stderr text, relayed verbatim.
    """

    def __init__(self, stderr: str, returncode: Optional[int] = None):
        super().__init__(stderr)
        self.stderr = stderr
        self.returncode = returncode


class DispatchTimeoutError(PrintError):
    """The external program did not finish before the deadline and was killed."""


# ---------------------------------------------------------------------------
# Error-mapping helpers
# ---------------------------------------------------------------------------

def _chain(new: PrintError, cause: BaseException) -> PrintError:
    """Attach *cause* as ``__cause__`` (mimics ``raise new from cause``)."""
    new.__cause__ = cause
    return new


def _decode_lossy(data) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return str(data)


def map_exception(exc: BaseException) -> PrintError:
    """
    Wrap a low-level exception into the appropriate ``PrintError`` subclass
    with a user-friendly message while preserving the original as ``__cause__``.

    If *exc* is already a ``PrintError`` it is returned unchanged.
    """
    if isinstance(exc, PrintError):
        return exc

    # UnicodeDecodeError is a ValueError, so it must be checked first
    if isinstance(exc, UnicodeDecodeError):
        return _chain(EncodingError(f"Invalid {exc.encoding} in command output: {exc}"), exc)

    if isinstance(exc, subprocess.TimeoutExpired):
        return _chain(
            DispatchTimeoutError(f"Print command timed out after {exc.timeout:g} seconds."),
            exc,
        )

    if isinstance(exc, subprocess.CalledProcessError):
        return _chain(
            ExternalProcessError(_decode_lossy(exc.stderr), returncode=exc.returncode),
            exc,
        )

    if isinstance(exc, OSError):
        return _chain(SpawnError(f"Failed to execute command: {exc}"), exc)

    if isinstance(exc, (ValueError, KeyError, TypeError)):
        return _chain(DispatchConfigError(str(exc)), exc)

    return _chain(PrintError(str(exc) or exc.__class__.__name__), exc)


def friendly_message(exc: BaseException) -> str:
    """Return a short, UI-safe description for *exc*."""
    mapped = map_exception(exc)
    return str(mapped)
