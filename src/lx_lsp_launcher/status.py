"""Installation status reporting."""

import logging
from collections import defaultdict, deque
from typing import Deque, Dict, List, Optional, Protocol

from lx_lsp_launcher.logging import get_logger, log_with_data
from lx_lsp_launcher.types import NO_STATUS, InstallationStatus, StatusKind

logger = get_logger(__name__)

# transitions kept per server id
HISTORY_LIMIT = 32


class StatusSink(Protocol):
    """Receives status transitions. Fire-and-forget."""

    def report(self, server_id: str, status: InstallationStatus) -> None: ...


class StatusBoard:
    """Current installation status per language server, last write wins."""

    def __init__(self) -> None:
        self._current: Dict[str, InstallationStatus] = {}
        self._history: Dict[str, Deque[InstallationStatus]] = defaultdict(
            lambda: deque(maxlen=HISTORY_LIMIT)
        )

    def report(self, server_id: str, status: InstallationStatus) -> None:
        self._current[server_id] = status
        self._history[server_id].append(status)

    def current(self, server_id: str) -> InstallationStatus:
        return self._current.get(server_id, NO_STATUS)

    def history(self, server_id: str) -> List[InstallationStatus]:
        return list(self._history.get(server_id, []))


class LoggingStatusSink:
    """Logs each transition, then forwards it."""

    def __init__(self, downstream: Optional[StatusSink] = None) -> None:
        self.downstream = downstream

    def report(self, server_id: str, status: InstallationStatus) -> None:
        level = logging.ERROR if status.kind == StatusKind.FAILED else logging.INFO
        log_with_data(logger, level, "Installation status changed", {
            "server_id": server_id,
            **status.to_dict(),
        })
        if self.downstream is not None:
            self.downstream.report(server_id, status)
