"""Error handling for language server resolution."""
import logging
from typing import Any, Dict, Optional
from mcp.types import ErrorData, INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None
) -> None:
    """Log an error with context."""
    logger = logger or logging.getLogger(__name__)

    error_info = {
        "error_type": error.__class__.__name__,
        "error_message": str(error)
    }
    if context:
        error_info["context"] = context
    if isinstance(error, ResolverError):
        error_info["code"] = error.code
        error_info["details"] = error.details

    logger.error("Resolution error occurred", extra={"data": error_info})


class ResolverError(Exception):
    """Base error class for binary resolution."""
    def __init__(
        self,
        message: str,
        code: int = INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    @property
    def message(self) -> str:
        return str(self)

    def to_error_data(self) -> ErrorData:
        """Convert to ErrorData format."""
        return ErrorData(
            code=self.code,
            message=str(self),
            data=self.details
        )


class ToolchainMissingError(ResolverError):
    """Toolchain needed to install the server is not usable."""
    def __init__(self, toolchain: str, display_name: str, docs_url: str):
        super().__init__(
            f"{display_name} toolchain not found. Please install {display_name} "
            f"({docs_url}) to use the LX language server.",
            code=INVALID_REQUEST,
            details={"toolchain": toolchain, "docs_url": docs_url}
        )


class InstallFailedError(ResolverError):
    """Install command failed or could not be started."""
    def __init__(self, package: str, reason: str, returncode: Optional[int] = None):
        if returncode is None:
            message = f"Failed to run install for {package}: {reason}"
        else:
            message = f"Failed to install {package}. Error: {reason or f'exit status {returncode}'}"
        super().__init__(
            message,
            code=INTERNAL_ERROR,
            details={"package": package, "returncode": returncode, "stderr": reason}
        )


class NotLocatableError(ResolverError):
    """Install reported success but the binary cannot be found."""
    def __init__(self, binary_name: str, fallback_dir: str):
        super().__init__(
            f"Could not find {binary_name} binary. Ensure {fallback_dir} is in "
            f"your PATH or the install succeeded.",
            code=INTERNAL_ERROR,
            details={"binary_name": binary_name, "fallback_dir": fallback_dir}
        )


class InvalidServerIdError(ResolverError):
    """Request named a language server id that is not valid."""
    def __init__(self, server_id: Any):
        super().__init__(
            f"Invalid language server id: {server_id!r}",
            code=INVALID_PARAMS,
            details={"server_id": server_id}
        )
