"""RequestDispatcher — classifies envelopes and routes requests by method name.

Routing order for every decoded message:

1. A version tag other than ``"2.0"`` is an Invalid Request.
2. A message without a method is an Invalid Request.
3. Notifications are handled from a fixed table and never answered, even
   when the method is unknown.
4. ``initialize`` and ``ping`` are served in any lifecycle state; every
   other request needs a running session, then ``tools/list`` /
   ``tools/call`` or Method Not Found.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ocrtool.config import ServerSettings
from ocrtool.protocol.errors import (
    InternalError,
    InvalidRequestError,
    JsonRpcException,
    MethodNotFoundError,
)
from ocrtool.protocol.lifecycle import Session, negotiate_protocol_version
from ocrtool.protocol.models import IncomingMessage, JsonRpcResponse
from ocrtool.utils.telemetry import (
    ATTR_RPC_ERROR_CODE,
    ATTR_RPC_ID,
    ATTR_RPC_METHOD,
    get_tracer,
)

if TYPE_CHECKING:
    from ocrtool.protocol.values import JsonValue, RequestId
    from ocrtool.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

_Handler = Callable[["JsonValue | None"], Any]

# Requests that may arrive before the initialized notification.
_LIFECYCLE_METHODS = frozenset({"initialize", "ping"})


class RequestDispatcher:
    """Routes one decoded message at a time to its handler.

    Usage::

        dispatcher = RequestDispatcher(Session(), registry)
        response = dispatcher.dispatch(decode_message(line))
        if response is not None:
            transport.send(encode_message(response))
    """

    def __init__(
        self,
        session: Session,
        registry: ToolRegistry,
        settings: ServerSettings | None = None,
    ) -> None:
        self._session = session
        self._registry = registry
        self._settings = settings or ServerSettings()
        self._requests: dict[str, _Handler] = {
            "initialize": self._handle_initialize,
            "ping": self._handle_ping,
            "tools/list": self._handle_tools_list,
            "tools/call": self._handle_tools_call,
        }
        self._notifications: dict[str, Callable[[], None]] = {
            "notifications/initialized": self._on_initialized,
            "notifications/cancelled": self._on_cancelled,
            "notifications/progress": _ignore,
            "notifications/roots/list_changed": _ignore,
        }

    @property
    def session(self) -> Session:
        return self._session

    def dispatch(self, message: IncomingMessage) -> JsonRpcResponse | None:
        """Handle *message*; return the response to send, or ``None`` for notifications."""
        if not message.is_valid:
            return _error(
                message.id, InvalidRequestError('Invalid JSON-RPC version (must be "2.0")')
            )

        if message.method is None:
            return _error(message.id, InvalidRequestError("Missing method"))

        request_id = message.id
        if request_id is None:
            self._dispatch_notification(message.method)
            return None

        return self._dispatch_request(request_id, message.method, message.params)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def _dispatch_notification(self, method: str) -> None:
        handler = self._notifications.get(method)
        if handler is None:
            logger.info("Ignoring unknown notification: %s", method)
            return
        handler()

    def _on_initialized(self) -> None:
        self._session.mark_initialized()

    def _on_cancelled(self) -> None:
        logger.info("Request cancelled by client")

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def _dispatch_request(
        self, request_id: RequestId, method: str, params: JsonValue | None
    ) -> JsonRpcResponse:
        with _tracer.start_as_current_span("ocrtool.dispatch") as span:
            span.set_attribute(ATTR_RPC_METHOD, method)
            span.set_attribute(ATTR_RPC_ID, str(request_id))
            try:
                if method not in _LIFECYCLE_METHODS and not self._session.is_running:
                    raise InvalidRequestError(
                        "Server not yet initialized. Send 'initialize' request first."
                    )
                handler = self._requests.get(method)
                if handler is None:
                    raise MethodNotFoundError(method)
                result = handler(params)
            except JsonRpcException as exc:
                span.set_attribute(ATTR_RPC_ERROR_CODE, int(exc.code))
                return _error(request_id, exc)
            except Exception as exc:
                logger.exception("Unhandled error in %s", method)
                span.record_exception(exc)
                span.set_attribute(ATTR_RPC_ERROR_CODE, int(InternalError.code))
                return _error(request_id, InternalError(str(exc)))
            return JsonRpcResponse.success(request_id, result)

    def _handle_initialize(self, params: JsonValue | None) -> dict[str, Any]:
        if self._session.is_running:
            raise InvalidRequestError("Server already initialized")

        proposed_value = params.get("protocolVersion") if params is not None else None
        proposed = proposed_value.as_str() if proposed_value is not None else None
        version = negotiate_protocol_version(proposed)
        if proposed is not None and proposed != version:
            logger.info("Client proposed protocol %s; answering with %s", proposed, version)

        return {
            "protocolVersion": version,
            "capabilities": {"tools": {}},
            "serverInfo": {
                "name": self._settings.server_name,
                "version": self._settings.server_version,
            },
        }

    def _handle_ping(self, params: JsonValue | None) -> dict[str, Any]:
        return {}

    def _handle_tools_list(self, params: JsonValue | None) -> dict[str, Any]:
        return self._registry.list_tools()

    def _handle_tools_call(self, params: JsonValue | None) -> dict[str, Any]:
        return self._registry.call(params).to_wire()


def _ignore() -> None:
    return None


def _error(request_id: RequestId | None, exc: JsonRpcException) -> JsonRpcResponse:
    return JsonRpcResponse.failure(request_id, exc.to_error())
