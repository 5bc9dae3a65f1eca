"""Run an external collaborator binary without blocking the event loop."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

from structlog import get_logger

logger = get_logger(__name__)

STDERR_TAIL_LINES = 20


@dataclass(frozen=True)
class ProcessOutcome:
    """Exit code and decoded output of a finished process."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def stderr_tail(self) -> str:
        return "\n".join(self.stderr.strip().splitlines()[-STDERR_TAIL_LINES:])


async def run_process(
    args: Sequence[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> ProcessOutcome:
    """Run ``args`` to completion and collect its output.

    The child is killed if the awaiting task is cancelled (for example by
    asyncio.wait_for on timeout), so no orphaned process is left behind.

    Raises:
        OSError: If the executable cannot be started.
    """
    process = await asyncio.create_subprocess_exec(
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd is not None else None,
        env=dict(env) if env is not None else None,
    )
    logger.debug("collaborator_started", executable=args[0], pid=process.pid)
    try:
        stdout, stderr = await process.communicate()
    except asyncio.CancelledError:
        try:
            process.kill()
        except ProcessLookupError:
            pass
        await process.wait()
        logger.warning("collaborator_killed", executable=args[0], pid=process.pid)
        raise

    return ProcessOutcome(
        returncode=process.returncode if process.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
