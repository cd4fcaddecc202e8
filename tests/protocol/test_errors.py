"""Tests for the protocol error hierarchy."""

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


class TestErrorHierarchy:
    def test_all_are_protocol_errors(self) -> None:
        for cls in (
            DecodeError,
            InvalidRequestError,
            MethodNotFoundError,
            InvalidParamsError,
            InternalError,
        ):
            assert issubclass(cls, JsonRpcException)
            assert issubclass(cls, ProtocolError)

    def test_codes(self) -> None:
        assert DecodeError.code == ErrorCode.PARSE_ERROR == -32700
        assert InvalidRequestError.code == ErrorCode.INVALID_REQUEST == -32600
        assert MethodNotFoundError.code == ErrorCode.METHOD_NOT_FOUND == -32601
        assert InvalidParamsError.code == ErrorCode.INVALID_PARAMS == -32602
        assert InternalError.code == ErrorCode.INTERNAL_ERROR == -32603


class TestToError:
    def test_method_not_found_names_method(self) -> None:
        err = MethodNotFoundError("resources/list")
        assert err.method == "resources/list"
        payload = err.to_error()
        assert payload.code == -32601
        assert payload.message == "Method not found: resources/list"
        assert payload.data is None

    def test_data_is_carried(self) -> None:
        payload = InvalidParamsError("bad", data={"field": "name"}).to_error()
        assert payload.data == {"field": "name"}

    def test_decode_error_detail(self) -> None:
        err = DecodeError("Expecting value")
        assert err.detail == "Expecting value"
        assert str(err) == "Parse error: Expecting value"

    def test_internal_error_without_detail(self) -> None:
        assert InternalError().message == "Internal error"
        assert InternalError("boom").message == "Internal error: boom"

    def test_code_is_plain_int_on_wire(self) -> None:
        wire = InvalidRequestError("x").to_error().to_wire()
        assert wire == {"code": -32600, "message": "x"}
        assert type(wire["code"]) is int
