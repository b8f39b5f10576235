"""Launch command for the language server."""

import os
from typing import Mapping, Optional

from lx_lsp_launcher.logging import get_logger
from lx_lsp_launcher.resolver import BinaryResolver
from lx_lsp_launcher.types import LaunchCommand

logger = get_logger(__name__)


async def launch_command(
    resolver: BinaryResolver, project_env: Optional[Mapping[str, str]] = None
) -> LaunchCommand:
    """Build the command the host runs to start the language server.

    The server inherits the project's environment (``project_env``, or this
    process's environment when omitted) so PATH and GOPATH overrides reach it.
    Configs with ``inherit_env`` off get an empty environment instead.
    """
    path = await resolver.resolve()

    env: dict[str, str] = {}
    if resolver.config.inherit_env:
        env = dict(os.environ if project_env is None else project_env)

    logger.debug({"event": "launch_command", "command": path, "env_vars": len(env)})
    return LaunchCommand(command=path, args=[], env=env)
