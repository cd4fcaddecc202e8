"""Shared error types for the protocol layer."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from ocrtool.protocol.models import JsonRpcError


class ErrorCode(IntEnum):
    """Standard JSON-RPC 2.0 error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""


class JsonRpcException(ProtocolError):
    """A failure that is reported to the client as a JSON-RPC error object."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, data: Any = None) -> None:
        self.message = message
        self.data = data
        super().__init__(message)

    def to_error(self) -> JsonRpcError:
        return JsonRpcError(code=int(self.code), message=self.message, data=self.data)


class DecodeError(JsonRpcException):
    """The input line is not a decodable JSON-RPC envelope."""

    code = ErrorCode.PARSE_ERROR

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Parse error: {detail}")


class InvalidRequestError(JsonRpcException):
    """The envelope is well-formed JSON but not an acceptable request."""

    code = ErrorCode.INVALID_REQUEST


class MethodNotFoundError(JsonRpcException):
    """No handler exists for the requested method."""

    code = ErrorCode.METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class InvalidParamsError(JsonRpcException):
    """The request's params are structurally unusable."""

    code = ErrorCode.INVALID_PARAMS


class InternalError(JsonRpcException):
    """An unexpected fault while handling a request."""

    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Internal error" + (f": {detail}" if detail else ""))
