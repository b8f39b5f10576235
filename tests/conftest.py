import pytest

from lx_lsp_launcher import server
from lx_lsp_launcher.config import CONFIG
from lx_lsp_launcher.resolver import BinaryResolver
from lx_lsp_launcher.status import StatusBoard
from lx_lsp_launcher.types import CommandResult

WHICH = ("which", "lx-lsp")
WHERE = ("where", "lx-lsp.exe")
GO_VERSION = ("go", "version")
GO_INSTALL = ("go", "install", CONFIG.package)


class FakeRunner:
    """Scripted process runner that records every invocation.

    Each script entry is a CommandResult, an exception to raise, or a list
    consumed one item per call. Unscripted commands fail to spawn.
    """

    def __init__(self, script=None):
        self.script = dict(script or {})
        self.calls = []

    async def __call__(self, *args):
        self.calls.append(args)
        outcome = self.script.get(args)
        if isinstance(outcome, list):
            outcome = outcome.pop(0) if len(outcome) > 1 else outcome[0]
        if outcome is None:
            raise FileNotFoundError(2, "No such file or directory", args[0])
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def called(self, args) -> int:
        return self.calls.count(args)


def ok(stdout="", stderr=""):
    return CommandResult(0, stdout, stderr)


def failed(stderr="", returncode=1):
    return CommandResult(returncode, "", stderr)


@pytest.fixture
def board():
    return StatusBoard()


@pytest.fixture
def home(tmp_path):
    return tmp_path / "home"


@pytest.fixture
def make_resolver(board, home):
    """Build a resolver around a scripted runner."""
    def factory(script=None, system="Linux", environ=None):
        runner = FakeRunner(script)
        env = {"HOME": str(home)} if environ is None else environ
        resolver = BinaryResolver(
            "lx-1", board, run=runner, environ=env, system=system
        )
        return resolver, runner
    return factory


@pytest.fixture
def go_bin(home):
    """Create $HOME/go/bin and return it."""
    path = home / "go" / "bin"
    path.mkdir(parents=True)
    return path


@pytest.fixture(autouse=True)
def clean_server_state(monkeypatch):
    monkeypatch.setattr(server, "STATUS_BOARD", StatusBoard())
    monkeypatch.setattr(server, "RESOLVERS", {})
