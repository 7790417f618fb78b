"""Subprocess helpers."""

import asyncio
import logging
import subprocess
from typing import Optional, List
from dataclasses import dataclass


logger = logging.getLogger(__name__)

# podman inspect of a large pod can take a while on a busy host
DEFAULT_TIMEOUT = 60


@dataclass
class CommandResult:
    """Captured result of a finished command."""
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


async def run_command(
    cmd: List[str],
    check: bool = True,
    timeout: Optional[int] = DEFAULT_TIMEOUT,
) -> CommandResult:
    """Run a command and capture its output.

    Raises FileNotFoundError when the executable is missing,
    subprocess.TimeoutExpired after timeout seconds and, when check is set,
    subprocess.CalledProcessError on a non-zero exit.
    """
    logger.debug(f"Running command: {' '.join(cmd)}")

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise subprocess.TimeoutExpired(cmd, timeout)

    result = CommandResult(
        returncode=process.returncode,
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace"),
    )
    logger.debug(f"{cmd[0]} exited with {result.returncode}")

    if check and not result.ok:
        raise subprocess.CalledProcessError(
            result.returncode, cmd, output=result.stdout, stderr=result.stderr
        )

    return result
