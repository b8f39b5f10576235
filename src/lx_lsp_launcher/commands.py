"""Process execution."""

import asyncio

from lx_lsp_launcher.logging import get_logger
from lx_lsp_launcher.types import CommandResult

logger = get_logger(__name__)


async def run_command(*args: str) -> CommandResult:
    """
    Run a command and wait for it to exit.

    :param args: Command and arguments to run
    :return: Exit code with decoded stdout and stderr
    :raises OSError: If the command could not be spawned
    """
    logger.debug({"event": "command_started", "args": list(args)})

    proc = await asyncio.create_subprocess_exec(
        *args, stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.PIPE
    )
    stdout, stderr = await proc.communicate()

    logger.debug({"event": "command_finished", "args": list(args), "returncode": proc.returncode})

    return CommandResult(
        proc.returncode,
        stdout.decode(errors="replace"),
        stderr.decode(errors="replace"),
    )
