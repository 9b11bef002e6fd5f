import pytest

from k7tui.auth import AuthService
from k7tui.models import UserResponse


class RecordingClient:
    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def create_user(self, username, email="", password=""):
        self.calls.append(("create_user", username, email, password))
        if self.fail:
            raise RuntimeError("already exists")
        return UserResponse(id="id-1", username=username)

    def get_user(self, username, password=""):
        self.calls.append(("get_user", username, password))
        if self.fail:
            raise LookupError("no such user")
        return UserResponse(id="id-1", username=username)


def test_register_sends_username_only():
    client = RecordingClient()
    result = AuthService(client).register("alice")
    assert result is None
    assert client.calls == [("create_user", "alice", "", "")]


def test_register_propagates_errors():
    with pytest.raises(RuntimeError):
        AuthService(RecordingClient(fail=True)).register("alice")


def test_get_user_returns_client_response():
    client = RecordingClient()
    user = AuthService(client).get_user("bob")
    assert user == UserResponse(id="id-1", username="bob")
    assert client.calls == [("get_user", "bob", "")]


def test_get_user_propagates_errors():
    with pytest.raises(LookupError):
        AuthService(RecordingClient(fail=True)).get_user("bob")