from __future__ import annotations

import asyncio
import logging
import shlex
from collections.abc import Awaitable, Callable, Sequence

logger = logging.getLogger(__name__)

ListingRunner = Callable[..., Awaitable[str]]


class ListingCommandError(RuntimeError):
    """A device-listing command could not produce its output."""

    def __init__(self, argv: Sequence[str], reason: str) -> None:
        self.argv = list(argv)
        self.reason = reason
        super().__init__(f"'{shlex.join(self.argv)}' failed: {reason}")


async def run_listing_command(
    argv: Sequence[str], timeout: float, merge_stderr: bool = False
) -> str:
    """Run one listing command and return its complete captured output.

    Every failure mode (missing binary, non-zero exit, timeout) is raised as
    ListingCommandError.
    """
    logger.debug("Running %s (timeout=%.1fs)", shlex.join(argv), timeout)
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT
            if merge_stderr
            else asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise ListingCommandError(argv, str(exc)) from exc

    try:
        out, err = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except (asyncio.TimeoutError, TimeoutError) as exc:
        proc.kill()
        await proc.wait()
        raise ListingCommandError(argv, f"timed out after {timeout:.1f}s") from exc
    except asyncio.CancelledError:
        if proc.returncode is None:
            proc.kill()
        raise

    output = out.decode(errors="replace")
    if proc.returncode != 0:
        detail = (err or out or b"").decode(errors="replace").strip()
        first_line = detail.splitlines()[0] if detail else ""
        reason = f"exit status {proc.returncode}"
        if first_line:
            reason = f"{reason}: {first_line}"
        raise ListingCommandError(argv, reason)

    logger.debug("%s returned %d line(s)", argv[0], len(output.splitlines()))
    return output
