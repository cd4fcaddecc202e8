"""Wire codec — one JSON-RPC envelope per line of text.

Messages on the stdio transport are newline-delimited and must not contain
embedded newlines. Encoding is compact with sorted keys so output is
deterministic.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from ocrtool.protocol.errors import DecodeError
from ocrtool.protocol.models import IncomingMessage, JsonRpcResponse


def decode_message(line: bytes | str) -> IncomingMessage:
    """Decode a single trimmed, non-empty line into an :class:`IncomingMessage`.

    Raises:
        DecodeError: On invalid UTF-8, malformed JSON, nesting too deep to
            parse, a non-object document, or an ``id``/``method`` of the
            wrong type.
    """
    if isinstance(line, bytes):
        try:
            text = line.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"invalid UTF-8 ({exc.reason})") from exc
    else:
        text = line

    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(exc.msg) from exc
    except RecursionError as exc:
        raise DecodeError("document is nested too deeply") from exc

    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object, got {type(data).__name__}")

    try:
        return IncomingMessage.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "message"
        raise DecodeError(f"{field}: {first['msg']}") from exc
    except RecursionError as exc:
        raise DecodeError("document is nested too deeply") from exc


def encode_message(response: JsonRpcResponse) -> str:
    """Encode *response* as a single line of compact JSON (no trailing newline)."""
    return json.dumps(
        response.to_wire(),
        sort_keys=True,
        separators=(",", ":"),
        allow_nan=False,
    )
