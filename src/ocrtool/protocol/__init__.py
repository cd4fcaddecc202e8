"""Protocol engine — JSON-RPC 2.0 codec, lifecycle, and dispatch for MCP."""

from ocrtool.protocol.codec import decode_message, encode_message
from ocrtool.protocol.dispatcher import RequestDispatcher
from ocrtool.protocol.errors import (
    DecodeError,
    ErrorCode,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    JsonRpcException,
    MethodNotFoundError,
    ProtocolError,
)
from ocrtool.protocol.lifecycle import (
    SUPPORTED_PROTOCOL_VERSIONS,
    Session,
    SessionState,
    negotiate_protocol_version,
)
from ocrtool.protocol.models import IncomingMessage, JsonRpcError, JsonRpcResponse

__all__ = [
    "SUPPORTED_PROTOCOL_VERSIONS",
    "DecodeError",
    "ErrorCode",
    "IncomingMessage",
    "InternalError",
    "InvalidParamsError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcException",
    "JsonRpcResponse",
    "MethodNotFoundError",
    "ProtocolError",
    "RequestDispatcher",
    "Session",
    "SessionState",
    "decode_message",
    "encode_message",
    "negotiate_protocol_version",
]
