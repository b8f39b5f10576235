"""Language server binary resolution and provisioning."""

import asyncio
import os
from typing import Awaitable, Callable, Mapping, Optional

from lx_lsp_launcher.commands import run_command
from lx_lsp_launcher.config import CONFIG, ServerConfig
from lx_lsp_launcher.errors import (
    InstallFailedError,
    NotLocatableError,
    ResolverError,
    ToolchainMissingError,
)
from lx_lsp_launcher.logging import get_logger
from lx_lsp_launcher.platforms import get_fallback_dir, get_fallback_path, get_platform_info
from lx_lsp_launcher.status import StatusSink
from lx_lsp_launcher.types import (
    CHECKING_FOR_UPDATE,
    DOWNLOADING,
    NO_STATUS,
    CommandResult,
    InstallationStatus,
)

logger = get_logger(__name__)

CommandRunner = Callable[..., Awaitable[CommandResult]]


class BinaryResolver:
    """Finds the language server binary, installing it with the toolchain if needed.

    The first successful result is cached for the lifetime of the resolver and
    returned without re-probing. Failures are not cached, so the next call
    starts over. Concurrent callers share the attempt in progress, so
    there is at most one install at a time.
    """

    def __init__(
        self,
        server_id: str,
        status_sink: StatusSink,
        config: ServerConfig = CONFIG,
        run: CommandRunner = run_command,
        environ: Optional[Mapping[str, str]] = None,
        system: Optional[str] = None,
    ) -> None:
        self.server_id = server_id
        self.status_sink = status_sink
        self.config = config
        self.platform = get_platform_info(config, system)
        self._run = run
        self._environ = os.environ if environ is None else environ
        self._cached_path: Optional[str] = None
        self._in_flight: Optional["asyncio.Future[str]"] = None

    @property
    def cached_path(self) -> Optional[str]:
        return self._cached_path

    async def resolve(self) -> str:
        """Return the binary path, probing and installing on first use.

        Raises:
            ToolchainMissingError: toolchain absent or its version check failed
            InstallFailedError: install exited non-zero or could not start
            NotLocatableError: binary still missing after a successful install
        """
        if self._cached_path is not None:
            return self._cached_path

        # callers arriving mid-attempt share its result or its error
        if self._in_flight is None:
            self._in_flight = asyncio.ensure_future(self._resolve_uncached())
            self._in_flight.add_done_callback(self._clear_in_flight)
        return await asyncio.shield(self._in_flight)

    def _clear_in_flight(self, task: "asyncio.Future[str]") -> None:
        if self._in_flight is task:
            self._in_flight = None

    async def _resolve_uncached(self) -> str:
        self._report(CHECKING_FOR_UPDATE)

        path = await self.find_binary()
        if path is not None:
            return self._found(path)

        if not await self.toolchain_available():
            raise self._fail(ToolchainMissingError(
                self.config.toolchain,
                self.config.toolchain_display_name,
                self.config.install_docs_url,
            ))

        await self.install()

        path = await self.find_binary()
        if path is not None:
            return self._found(path)

        raise self._fail(NotLocatableError(
            self.platform.binary_name,
            str(get_fallback_dir(self.config, f"${self.config.home_env_var}")),
        ))

    async def find_binary(self) -> Optional[str]:
        """Probe PATH, then the toolchain's default bin directory."""
        lookup = self.platform.lookup_command
        try:
            result = await self._run(lookup, self.platform.binary_name)
        except OSError as e:
            logger.debug({"event": "lookup_failed", "command": lookup, "error": str(e)})
        else:
            if result.ok:
                lines = result.stdout.strip().splitlines()
                path = lines[0].strip() if lines else ""
                if path:
                    logger.info({"event": "binary_found", "source": lookup, "path": path})
                    return path

        home = self._environ.get(self.config.home_env_var)
        if home:
            fallback = get_fallback_path(self.config, self.platform, home)
            try:
                os.stat(fallback)
            except OSError:
                pass
            else:
                logger.info({"event": "binary_found", "source": "fallback", "path": str(fallback)})
                return str(fallback)

        logger.debug({"event": "binary_not_found", "binary": self.platform.binary_name})
        return None

    async def toolchain_available(self) -> bool:
        toolchain = self.config.toolchain
        try:
            result = await self._run(toolchain, "version")
        except OSError as e:
            logger.warning({"event": "toolchain_missing", "toolchain": toolchain, "error": str(e)})
            return False

        if not result.ok:
            logger.warning({
                "event": "toolchain_check_failed",
                "toolchain": toolchain,
                "returncode": result.returncode,
                "stderr": result.stderr,
            })
            return False

        logger.debug({"event": "toolchain_available", "version": result.stdout.strip()})
        return True

    async def install(self) -> None:
        """Run the toolchain install command for the server package."""
        package = self.config.package
        logger.info({"event": "install_started", "package": package})
        self._report(DOWNLOADING)

        try:
            result = await self._run(self.config.toolchain, "install", package)
        except OSError as e:
            raise self._fail(InstallFailedError(package, repr(e)))

        if not result.ok:
            raise self._fail(InstallFailedError(package, result.stderr.strip(), result.returncode))

        logger.info({"event": "install_succeeded", "package": package})

    def _found(self, path: str) -> str:
        self._cached_path = path
        self._report(NO_STATUS)
        return path

    def _fail(self, error: ResolverError) -> ResolverError:
        self._report(InstallationStatus.failed(error.message))
        return error

    def _report(self, status: InstallationStatus) -> None:
        self.status_sink.report(self.server_id, status)
