"""JSON-RPC 2.0 envelopes exchanged over the stdio transport."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from ocrtool.protocol.values import RequestId, is_request_id, json_value

JSONRPC_VERSION = "2.0"

# ---------------------------------------------------------------------------
# Incoming
# ---------------------------------------------------------------------------


class IncomingMessage(BaseModel):
    """A decoded inbound envelope — request, notification, or neither.

    ``jsonrpc`` is kept as whatever the client sent (or ``None``) so that a
    bad version tag is rejected by the dispatcher with the request's id
    rather than at decode time.
    """

    model_config = ConfigDict(frozen=True)

    jsonrpc: Any = None
    id: RequestId | None = None
    method: str | None = None
    params: Any = None  # JsonValue | None after _wrap_params

    @field_validator("id", mode="before")
    @classmethod
    def _strict_id(cls, value: Any) -> Any:
        if value is None or is_request_id(value):
            return value
        msg = "id must be a string or an integer"
        raise ValueError(msg)

    @field_validator("method", mode="before")
    @classmethod
    def _strict_method(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        msg = "method must be a string"
        raise ValueError(msg)

    @field_validator("params", mode="before")
    @classmethod
    def _wrap_params(cls, value: Any) -> Any:
        if value is None:
            return None
        return json_value(value)

    @property
    def is_valid(self) -> bool:
        return self.jsonrpc == JSONRPC_VERSION

    @property
    def is_notification(self) -> bool:
        return self.id is None and self.method is not None

    @property
    def is_request(self) -> bool:
        return self.id is not None and self.method is not None


# ---------------------------------------------------------------------------
# Outgoing
# ---------------------------------------------------------------------------


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            wire["data"] = self.data
        return wire


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    Exactly one of ``result`` / ``error`` is meaningful; ``id`` is ``None``
    only for errors raised before an identifier could be recovered.
    """

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId | None = None
    result: Any = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, request_id: RequestId, result: Any) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: RequestId | None, error: JsonRpcError) -> JsonRpcResponse:
        return cls(id=request_id, error=error)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_wire(self) -> dict[str, Any]:
        """Return the on-the-wire mapping; ``id`` is always present, possibly null."""
        if self.error is not None:
            return {"jsonrpc": self.jsonrpc, "id": self.id, "error": self.error.to_wire()}
        return {"jsonrpc": self.jsonrpc, "id": self.id, "result": self.result}
