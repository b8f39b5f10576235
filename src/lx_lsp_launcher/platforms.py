"""Platform detection and mapping."""
import platform
from pathlib import Path
from typing import Optional

from lx_lsp_launcher.config import ServerConfig
from lx_lsp_launcher.types import PlatformInfo

WINDOWS = "Windows"

LOOKUP_COMMANDS = {
    WINDOWS: "where",
}
DEFAULT_LOOKUP_COMMAND = "which"

BINARY_SUFFIXES = {
    WINDOWS: ".exe",
}


def get_platform_info(config: ServerConfig, system: Optional[str] = None) -> PlatformInfo:
    """Get binary name and PATH lookup command for a platform."""
    if system is None:
        system = platform.system()

    suffix = BINARY_SUFFIXES.get(system, "")
    return PlatformInfo(
        system=system,
        binary_name=f"{config.binary_name}{suffix}",
        lookup_command=LOOKUP_COMMANDS.get(system, DEFAULT_LOOKUP_COMMAND),
    )


def get_fallback_dir(config: ServerConfig, home: str) -> Path:
    """Default install directory of the toolchain, e.g. $HOME/go/bin."""
    return Path(home).joinpath(*config.fallback_subdir)


def get_fallback_path(config: ServerConfig, platform_info: PlatformInfo, home: str) -> Path:
    return get_fallback_dir(config, home) / platform_info.binary_name
