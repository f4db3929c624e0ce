"""Run an external linter against an in-memory document."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from pathlib import Path

from lintbridge.linters.errors import LinterOutputError, LinterSpawnError
from lintbridge.linters.types import LinterCommand

__all__ = ["run_linter_process"]

_BANNER = "#" * 10


async def run_linter_process(
    command: LinterCommand,
    text: str,
    *,
    cwd: str | Path | None,
    logger: logging.Logger,
) -> str:
    """
    Feed ``text`` to the linter on stdin and collect its stdout.

    stdin is written and stdout/stderr are drained concurrently, so documents
    larger than the pipe buffer cannot deadlock. The process never outlives
    this call, whichever way it exits.

    Args:
        command: Executable plus its fully assembled argument list.
        text: Current document content (may differ from the file on disk).
        cwd: Working directory for the tool.
        logger: Sink for the invocation and its raw output.

    Returns:
        stdout decoded as UTF-8 and stripped of surrounding whitespace.

    Raises:
        LinterSpawnError: The executable is missing or not runnable.
        LinterOutputError: Non-zero exit with no output, or undecodable output.
    """
    command_line = command.display()
    logger.info("%s Run linter:\n%s", _BANNER, command_line)

    try:
        process = await asyncio.create_subprocess_exec(
            command.executable,
            *command.args,
            cwd=cwd,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise LinterSpawnError(
            f"Cannot start {command.executable!r}: {e}", command=command_line
        ) from e

    try:
        stdout_bytes, stderr_bytes = await process.communicate(text.encode("utf-8"))
    finally:
        if process.returncode is None:
            with suppress(ProcessLookupError):
                process.kill()
            await process.wait()

    try:
        output = stdout_bytes.decode("utf-8").strip()
    except UnicodeDecodeError as e:
        raise LinterOutputError(
            f"Linter output is not valid UTF-8: {e}", command=command_line
        ) from e

    logger.info(
        "%s Linting output (exit code %s) %s\n%s",
        _BANNER,
        process.returncode,
        _BANNER,
        output,
    )

    if process.returncode != 0 and not output:
        stderr = stderr_bytes.decode("utf-8", errors="replace").strip()
        raise LinterOutputError(
            f"Linter exited with code {process.returncode} and no output: {stderr}",
            command=command_line,
            output=stderr,
        )

    return output
