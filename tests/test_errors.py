import pytest
from fedcanon.errors import (
    FedcanonError, IdentifierError, IdentifierErrorKind,
    CanonicalJsonError, CanonicalJsonErrorKind,
)

def test_fedcanon_error_base():
    err = FedcanonError("CODE", "message", "ctx")
    assert err.code == "CODE"
    assert err.message == "message"
    assert err.context == "ctx"
    assert str(err) == "[CODE] message Context: ctx"

def test_fedcanon_error_without_context():
    assert str(FedcanonError("CODE", "message")) == "[CODE] message"

def test_identifier_kind_messages():
    expected = {
        IdentifierErrorKind.INVALID_CHARACTERS: "localpart contains invalid characters",
        IdentifierErrorKind.INVALID_KEY_VERSION: "key id version contains invalid characters",
        IdentifierErrorKind.INVALID_LOCAL_PART: "localpart is empty",
        IdentifierErrorKind.INVALID_SERVER_NAME: "server name is not a valid IP address or domain name",
        IdentifierErrorKind.MAXIMUM_LENGTH_EXCEEDED: "ID exceeds 255 bytes",
        IdentifierErrorKind.MINIMUM_LENGTH_NOT_SATISFIED: "ID must be at least 4 characters",
        IdentifierErrorKind.MISSING_DELIMITER: "colon is required between localpart and server name",
        IdentifierErrorKind.MISSING_KEY_DELIMITER: "colon is required between algorithm and key identifier",
        IdentifierErrorKind.MISSING_SIGIL: "leading sigil is missing",
        IdentifierErrorKind.UNKNOWN_KEY_ALGORITHM: "unknown key algorithm specified",
    }
    assert set(expected) == set(IdentifierErrorKind)
    for kind, message in expected.items():
        assert str(kind) == message
        assert kind.message == message

def test_codes_are_unique():
    codes = [k.code for k in IdentifierErrorKind] + [k.code for k in CanonicalJsonErrorKind]
    assert len(codes) == len(set(codes))
    assert all(code.startswith("FEDCANON_E") for code in codes)

def test_errors_compare_and_hash_by_kind():
    a = IdentifierError(IdentifierErrorKind.UNKNOWN_KEY_ALGORITHM, "foo")
    b = IdentifierError(IdentifierErrorKind.UNKNOWN_KEY_ALGORITHM)
    c = IdentifierError(IdentifierErrorKind.MISSING_KEY_DELIMITER)
    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2

def test_error_families_do_not_compare_equal():
    ident = IdentifierError(IdentifierErrorKind.MISSING_SIGIL)
    canon = CanonicalJsonError(CanonicalJsonErrorKind.SERDE)
    assert ident != canon

def test_kind_error_is_value_error():
    err = CanonicalJsonError(CanonicalJsonErrorKind.INT_CONVERT, "1.5")
    assert isinstance(err, ValueError)
    assert isinstance(err, FedcanonError)
    assert err.kind is CanonicalJsonErrorKind.INT_CONVERT
    assert err.code == "FEDCANON_E100"
    assert "1.5" in str(err)
    with pytest.raises(ValueError):
        raise err

def test_repr_names_kind():
    assert repr(IdentifierError(IdentifierErrorKind.MISSING_SIGIL)) == "IdentifierError(MISSING_SIGIL)"
