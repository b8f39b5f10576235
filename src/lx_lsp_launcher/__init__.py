"""Locate or install the LX language server and build its launch command."""
from lx_lsp_launcher.config import CONFIG, ServerConfig
from lx_lsp_launcher.errors import (
    InstallFailedError,
    NotLocatableError,
    ResolverError,
    ToolchainMissingError,
)
from lx_lsp_launcher.launcher import launch_command
from lx_lsp_launcher.resolver import BinaryResolver
from lx_lsp_launcher.status import LoggingStatusSink, StatusBoard, StatusSink
from lx_lsp_launcher.types import InstallationStatus, LaunchCommand, StatusKind

__all__ = [
    "CONFIG",
    "ServerConfig",
    "BinaryResolver",
    "launch_command",
    "ResolverError",
    "ToolchainMissingError",
    "InstallFailedError",
    "NotLocatableError",
    "StatusSink",
    "StatusBoard",
    "LoggingStatusSink",
    "InstallationStatus",
    "LaunchCommand",
    "StatusKind",
]
