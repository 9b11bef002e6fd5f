import pytest

from k7tui.menu import MENU_ITEMS, MainMenuModel, initial_model


def test_initial_model():
    model = initial_model()
    assert model.selected == 0
    assert model.items[0] == "📡 Repo Service"
    assert model.items[-1] == "❌ Exit"
    assert len(model.items) == 6


@pytest.mark.parametrize("key", ["q", "ctrl+c"])
def test_quit_keys(key):
    model, quit_ = initial_model().update(key)
    assert quit_ is True
    assert model.selected == 0


def test_down_then_up():
    model, quit_ = initial_model().update("down")
    assert (model.selected, quit_) == (1, False)
    model, quit_ = model.update("up")
    assert (model.selected, quit_) == (0, False)


def test_up_at_top_stays():
    model, _ = initial_model().update("up")
    assert model.selected == 0


def test_down_at_bottom_stays():
    last = len(MENU_ITEMS) - 1
    model, _ = MainMenuModel(selected=last).update("down")
    assert model.selected == last


def test_update_does_not_mutate_original():
    original = initial_model()
    original.update("down")
    assert original.selected == 0


def test_enter_on_exit_quits():
    _, quit_ = MainMenuModel(selected=len(MENU_ITEMS) - 1).update("enter")
    assert quit_ is True


def test_enter_elsewhere_does_not_quit():
    model, quit_ = MainMenuModel(selected=2).update("enter")
    assert quit_ is False
    assert model.selected == 2


def test_unknown_key_ignored():
    model, quit_ = MainMenuModel(selected=3).update("x")
    assert (model.selected, quit_) == (3, False)