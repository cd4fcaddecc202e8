"""JSON value model — a closed union over the seven JSON shapes.

Incoming parameters are converted into :data:`JsonValue` once, right after
parsing, so handlers read them through typed accessors that return ``None``
on a shape mismatch instead of raising::

    params = json_value({"name": "ocr_text", "arguments": {"lang": "en-US"}})
    params.get("name").as_str()            # "ocr_text"
    params.get("arguments").get("lang")    # JsonString("en-US")
    params.get("missing")                  # None

Numbers keep the subtype the stdlib JSON parser gives them: ``1`` becomes
:class:`JsonInt`, ``1.0`` becomes :class:`JsonFloat`, and both survive a
round trip through :meth:`to_python` unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

RequestId = Union[int, str]


class _JsonBase:
    """Accessor defaults shared by every variant."""

    __slots__ = ()

    def as_bool(self) -> bool | None:
        return None

    def as_int(self) -> int | None:
        return None

    def as_float(self) -> float | None:
        return None

    def as_str(self) -> str | None:
        return None

    def as_list(self) -> tuple[JsonValue, ...] | None:
        return None

    def as_object(self) -> Mapping[str, JsonValue] | None:
        return None

    def get(self, key: str) -> JsonValue | None:
        """Look up *key* on an object; ``None`` for other shapes or absent keys."""
        return None

    def to_python(self) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class JsonNull(_JsonBase):
    def to_python(self) -> None:
        return None


@dataclass(frozen=True)
class JsonBool(_JsonBase):
    value: bool

    def as_bool(self) -> bool:
        return self.value

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class JsonInt(_JsonBase):
    value: int

    def as_int(self) -> int:
        return self.value

    def as_float(self) -> float:
        return float(self.value)

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True)
class JsonFloat(_JsonBase):
    value: float

    def as_float(self) -> float:
        return self.value

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True)
class JsonString(_JsonBase):
    value: str

    def as_str(self) -> str:
        return self.value

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class JsonArray(_JsonBase):
    items: tuple[JsonValue, ...] = ()

    def as_list(self) -> tuple[JsonValue, ...]:
        return self.items

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class JsonObject(_JsonBase):
    members: Mapping[str, JsonValue] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.members.items(), key=lambda kv: kv[0])))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonObject):
            return NotImplemented
        return dict(self.members) == dict(other.members)

    def as_object(self) -> Mapping[str, JsonValue]:
        return self.members

    def get(self, key: str) -> JsonValue | None:
        return self.members.get(key)

    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self.members.items()}


JsonValue = Union[JsonNull, JsonBool, JsonInt, JsonFloat, JsonString, JsonArray, JsonObject]

JSON_NULL = JsonNull()


def json_value(obj: Any) -> JsonValue:
    """Convert a parsed Python object into a :data:`JsonValue`.

    ``bool`` is checked before ``int`` because it subclasses ``int`` in
    Python; a boolean is never read as an integer.

    Raises:
        TypeError: If *obj* (or anything nested in it) is not JSON-shaped.
    """
    if isinstance(obj, _JsonBase):
        return obj  # type: ignore[return-value]
    if obj is None:
        return JSON_NULL
    if isinstance(obj, bool):
        return JsonBool(obj)
    if isinstance(obj, int):
        return JsonInt(obj)
    if isinstance(obj, float):
        return JsonFloat(obj)
    if isinstance(obj, str):
        return JsonString(obj)
    if isinstance(obj, (list, tuple)):
        return JsonArray(tuple(json_value(item) for item in obj))
    if isinstance(obj, Mapping):
        members: dict[str, JsonValue] = {}
        for key, value in obj.items():
            if not isinstance(key, str):
                msg = f"JSON object keys must be strings, got {type(key).__name__}"
                raise TypeError(msg)
            members[key] = json_value(value)
        return JsonObject(members)
    msg = f"Value of type {type(obj).__name__} is not JSON-representable"
    raise TypeError(msg)


def is_request_id(obj: Any) -> bool:
    """Return ``True`` if *obj* can identify a request (string or non-bool int)."""
    return isinstance(obj, str) or (isinstance(obj, int) and not isinstance(obj, bool))
