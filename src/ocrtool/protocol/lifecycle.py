"""Session lifecycle — handshake gating for the MCP server.

The session starts in :attr:`SessionState.AWAITING_HANDSHAKE`. The
``initialize`` request negotiates a protocol version but does not change
state; only the ``notifications/initialized`` notification moves the
session to :attr:`SessionState.RUNNING`, and it never moves back.
"""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)

SUPPORTED_PROTOCOL_VERSIONS: tuple[str, ...] = ("2025-11-25", "2024-11-05")


class SessionState(str, Enum):
    """Lifecycle phase of the server session."""

    AWAITING_HANDSHAKE = "awaiting_handshake"
    RUNNING = "running"


class Session:
    """Owns the single mutable lifecycle cell for one server process."""

    def __init__(self) -> None:
        self._state = SessionState.AWAITING_HANDSHAKE

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is SessionState.RUNNING

    def mark_initialized(self) -> bool:
        """Enter the operation phase.

        Returns ``False`` without changing anything if the session is
        already running.
        """
        if self.is_running:
            logger.info("Received initialized notification in unexpected state")
            return False
        self._state = SessionState.RUNNING
        logger.info("Session initialized, entering operation phase")
        return True


def negotiate_protocol_version(proposed: str | None) -> str:
    """Return *proposed* if supported, otherwise the server's preferred version."""
    if proposed is not None and proposed in SUPPORTED_PROTOCOL_VERSIONS:
        return proposed
    return SUPPORTED_PROTOCOL_VERSIONS[0]
