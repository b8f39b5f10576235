"""Language server configuration."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ServerConfig:
    """Where the language server comes from and how to find it"""
    name: str
    binary_name: str
    toolchain: str
    toolchain_display_name: str
    package: str
    install_docs_url: str
    home_env_var: str = "HOME"
    fallback_subdir: tuple[str, ...] = ("go", "bin")
    inherit_env: bool = True


CONFIG = ServerConfig(
    name="lx",
    binary_name="lx-lsp",
    toolchain="go",
    toolchain_display_name="Go",
    package="github.com/kamal-hamza/lx-lsp@latest",
    install_docs_url="https://go.dev/doc/install",
)
