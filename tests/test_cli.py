import pytest

from k7tui.cli import DEFAULT_GRPC_ADDR, grpc_address, main


def test_grpc_address_defaults_when_unset():
    assert grpc_address({}) == "localhost:50051"


def test_grpc_address_defaults_when_empty():
    assert grpc_address({"GRPC_ADDR": ""}) == DEFAULT_GRPC_ADDR


def test_grpc_address_uses_environment():
    assert grpc_address({"GRPC_ADDR": "repo.example.com:6000"}) == "repo.example.com:6000"


def test_grpc_address_ignores_other_variables():
    assert grpc_address({"OTHER": "x"}) == DEFAULT_GRPC_ADDR


def test_main_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0
    assert "--grpc-addr" in capsys.readouterr().out


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit) as info:
        main(["--no-such-option"])
    assert info.value.code == 2