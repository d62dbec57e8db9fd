"""Run one external program and turn its exit status into a DispatchResult."""
from __future__ import annotations

import logging
import subprocess
from typing import Optional, Sequence

from .exceptions import EncodingError, ExternalProcessError, map_exception
from .result import DispatchResult, Failure, Success

log = logging.getLogger(__name__)


def _decode(data: bytes, encoding: str, stream: str) -> str:
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        err = EncodingError(f"Invalid {encoding} in {stream} output: {exc}")
        err.__cause__ = exc
        raise err


def run_command(
    argv: Sequence[str],
    *,
    timeout: Optional[float] = None,
    encoding: str = "utf-8",
    cwd: Optional[str] = None,
) -> DispatchResult:
    """
    Spawn *argv*, wait for it, and relay the outcome.

    - exit 0: ``Success`` with decoded stdout (``""`` when silent)
    - non-zero: ``Failure`` carrying decoded stderr verbatim
    - cannot spawn: ``Failure`` (SpawnError), nothing is decoded
    - deadline hit: child is killed, ``Failure`` (DispatchTimeoutError)

    A *timeout* of ``None`` or ``0`` waits forever.
    """
    timeout = float(timeout) if timeout else None
    log.debug("spawning %s (%d args, timeout=%s)", argv[0] if argv else "?", len(argv), timeout)

    try:
        completed = subprocess.run(
            list(argv),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
            cwd=cwd or None,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        return Failure.from_error(map_exception(exc))

    try:
        if completed.returncode == 0:
            return Success(_decode(completed.stdout, encoding, "command"))
        stderr = _decode(completed.stderr, encoding, "error")
    except EncodingError as err:
        return Failure.from_error(err)

    return Failure.from_error(ExternalProcessError(stderr, returncode=completed.returncode))
