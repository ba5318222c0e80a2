"""Process execution for cargo invocations.

Commands run synchronously with an explicit environment snapshot; the
outcome is translated into the error taxonomy instead of aborting.
"""

from __future__ import annotations

import logging
import os
import subprocess
import types
from typing import List, Mapping, Optional, Sequence

from common.errors import BuildFailedError, ProcessSpawnError, ProcessTerminatedError
from common.logging_utils import Timer, extra_context, is_debug_enabled

logger = logging.getLogger(__name__)

Environment = Mapping[str, str]


def snapshot_environment(environ: Optional[Mapping[str, str]] = None) -> Environment:
    """Return an immutable copy of ``environ`` (defaults to ``os.environ``)."""
    return types.MappingProxyType(dict(os.environ if environ is None else environ))


def _check_returncode(command: str, returncode: int) -> None:
    if returncode == 0:
        return
    if returncode < 0:
        raise ProcessTerminatedError(command, -returncode)
    raise BuildFailedError(command, returncode)


def _run(cmd: Sequence[str], env: Environment, capture: bool) -> subprocess.CompletedProcess:
    argv: List[str] = list(cmd)
    command = " ".join(argv)
    with Timer() as t:
        try:
            if capture:
                result = subprocess.run(  # noqa: S603
                    argv, env=dict(env), stdout=subprocess.PIPE, text=True, encoding="utf-8",
                    check=False,
                )
            else:
                result = subprocess.run(argv, env=dict(env), check=False)  # noqa: S603
        except OSError as e:
            raise ProcessSpawnError(command, e.strerror or str(e)) from e

    if is_debug_enabled(logger):
        logger.debug(
            "Process finished",
            extra=extra_context(
                event="process_exit",
                component="executor",
                action="capture" if capture else "run",
                target=command,
                outcome="success" if result.returncode == 0 else "failure",
                status_code=result.returncode,
                duration_ms=t.duration_ms(),
            ),
        )
    _check_returncode(command, result.returncode)
    return result


def execute_command(cmd: Sequence[str], env: Environment) -> None:
    """Run ``cmd`` inheriting ``env`` and wait for it.

    Raises:
        ProcessSpawnError: the executable couldn't be started.
        BuildFailedError: non-zero exit status.
        ProcessTerminatedError: killed by a signal.
    """
    _run(cmd, env, capture=False)


def capture_command_output(cmd: Sequence[str], env: Environment) -> str:
    """Run ``cmd`` like :func:`execute_command` and return its stdout.

    Output is decoded as UTF-8; undecodable bytes raise ``UnicodeDecodeError``.
    """
    return _run(cmd, env, capture=True).stdout or ""
