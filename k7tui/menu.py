"""Keyboard-driven service menu."""

from __future__ import annotations

from dataclasses import dataclass, replace

MENU_ITEMS = (
    "📡 Repo Service",
    "📦 Gateway",
    "📣 Notifier",
    "💽 Redis",
    "🔧 Restart Service",
    "❌ Exit",
)
EXIT_ITEM = "❌ Exit"
QUIT_KEYS = frozenset({"ctrl+c", "q"})


@dataclass(frozen=True)
class MainMenuModel:
    """Selection state of the service menu."""

    selected: int = 0
    items: tuple[str, ...] = MENU_ITEMS

    def update(self, key: str) -> tuple[MainMenuModel, bool]:
        """Handle a key press; return the new model and whether to quit."""
        if key in QUIT_KEYS:
            return self, True
        if key == "up" and self.selected > 0:
            return replace(self, selected=self.selected - 1), False
        if key == "down" and self.selected < len(self.items) - 1:
            return replace(self, selected=self.selected + 1), False
        if key == "enter" and self.items[self.selected] == EXIT_ITEM:
            return self, True
        return self, False


def initial_model() -> MainMenuModel:
    """Return the menu with the first item selected."""
    return MainMenuModel()