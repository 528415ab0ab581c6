import io
import pytest
import unittest.mock as mock
import sys

from fedcanon.cli import main, _fail_with_error
from fedcanon.errors import FedcanonError


def test_cli_main_help(capsys):
    with pytest.raises(SystemExit) as e:
        main(["--help"])
    assert e.value.code == 0
    assert "Canonical JSON and key id tools" in capsys.readouterr().out

def test_fail_with_error(capsys):
    err = FedcanonError(code="TEST_ERR", message="Test message", context="test context")
    with pytest.raises(SystemExit) as e:
        _fail_with_error(err)
    assert e.value.code == 1
    assert "ERROR: TEST_ERR. Test message. Context: test context." in capsys.readouterr().err

def test_canonicalize_file(tmp_path, capsys):
    doc = tmp_path / "doc.json"
    doc.write_text('{ "street": "10 Downing Street", "city": "London" }', encoding="utf-8")
    main(["canonicalize", str(doc)])
    assert capsys.readouterr().out == '{"city":"London","street":"10 Downing Street"}\n'

def test_canonicalize_stdin(capsys):
    with mock.patch.object(sys, "stdin", io.StringIO('[1, {"b": 2, "a": 3}]')):
        main(["canonicalize"])
    assert capsys.readouterr().out == '[1,{"a":3,"b":2}]\n'

def test_canonicalize_rejects_float(capsys):
    with mock.patch.object(sys, "stdin", io.StringIO('{"a": 1.5}')):
        with pytest.raises(SystemExit) as e:
            main(["canonicalize", "-"])
    assert e.value.code == 1
    assert "FEDCANON_E100" in capsys.readouterr().err

def test_canonicalize_max_depth(capsys):
    with mock.patch.object(sys, "stdin", io.StringIO("[[[]]]")):
        with pytest.raises(SystemExit):
            main(["canonicalize", "--max-depth", "2"])
    assert "FEDCANON_E102" in capsys.readouterr().err

def test_canonicalize_deep_input_with_raised_max_depth(capsys):
    with mock.patch.object(sys, "stdin", io.StringIO("[" * 5000 + "]" * 5000)):
        with pytest.raises(SystemExit) as e:
            main(["canonicalize", "--max-depth", "100000"])
    assert e.value.code == 1
    assert "ERROR: FEDCANON_E10" in capsys.readouterr().err

def test_hash(capsys):
    with mock.patch.object(sys, "stdin", io.StringIO('{"b":1,"a":2}')):
        main(["hash"])
    from fedcanon.canonical_json import canonical_hash
    assert capsys.readouterr().out.strip() == canonical_hash({"a": 2, "b": 1})

def test_check_device_key_id(capsys):
    main(["check-device-key-id", "ed25519:ABCDEF"])
    assert capsys.readouterr().out.strip() == "OK algorithm=ed25519 key_id=ABCDEF"

def test_check_device_key_id_failure(capsys):
    with pytest.raises(SystemExit) as e:
        main(["check-device-key-id", "garbage"])
    assert e.value.code == 1
    assert "colon is required between algorithm and key identifier" in capsys.readouterr().err

def test_check_server_key_id(capsys):
    main(["check-server-key-id", "ed25519:key_1"])
    assert capsys.readouterr().out.strip() == "OK algorithm=ed25519 version=key_1"
    with pytest.raises(SystemExit):
        main(["check-server-key-id", "ed25519:key-1"])
    assert "FEDCANON_E002" in capsys.readouterr().err

def test_algorithms(capsys):
    main(["algorithms"])
    out = capsys.readouterr().out
    assert "device: curve25519 ed25519 signed_curve25519" in out
    assert "signing: ed25519" in out
