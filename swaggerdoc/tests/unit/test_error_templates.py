from swaggerdoc.utils.errors import (
    CommentParseError,
    ConfigurationError,
    ErrorCode,
    FragmentError,
    SourceReadError,
    SwaggerDocError,
    UnsupportedSourceError,
    envelope_error,
    make_error,
)


def test_not_found_template() -> None:
    payload = make_error(ErrorCode.NOT_FOUND)
    assert payload["status"] == 404
    assert payload["code"] == "NOT_FOUND"
    assert payload["message"] == "Swagger descriptor is not available."
    assert payload["recovery"] == ["Restart the server so the descriptor is generated again."]


def test_every_code_has_a_template() -> None:
    for code in ErrorCode:
        payload = make_error(code, "boom", status=418)
        assert payload == {
            "status": 418,
            "code": code.value,
            "message": "boom",
            "recovery": payload["recovery"],
        }
        assert payload["recovery"]


def test_envelope_shape() -> None:
    envelope = envelope_error(ErrorCode.NOT_FOUND)
    assert envelope["ok"] is False
    assert envelope["data"] is None
    assert envelope["errors"][0]["code"] == "NOT_FOUND"


def test_exceptions_carry_codes() -> None:
    cases = {
        ConfigurationError: ErrorCode.CONFIG_INVALID,
        SourceReadError: ErrorCode.SOURCE_UNREADABLE,
        CommentParseError: ErrorCode.COMMENT_INVALID,
        FragmentError: ErrorCode.FRAGMENT_INVALID,
    }
    for exc_type, code in cases.items():
        exc = exc_type()
        assert isinstance(exc, SwaggerDocError)
        assert exc.code is code
        assert exc.to_dict()["code"] == code.value
        assert str(exc) == make_error(code)["message"]

    unsupported = UnsupportedSourceError(".rb")
    assert isinstance(unsupported, ValueError)
    assert unsupported.to_dict()["message"] == "Unsupported extension '.rb'"
