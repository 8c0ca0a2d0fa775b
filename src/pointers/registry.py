"""
Live cursor of every connected viewer, keyed by connection id.

Entries are created on connect, updated in place by that same connection, and dropped on disconnect.
"""

import random
from dataclasses import dataclass
from typing import Optional

POINTER_COLORS: tuple[str, ...] = (
    "#F87171",
    "#60A5FA",
    "#34D399",
    "#FB923C",
    "#A78BFA",
    "#F472B6",
)
NAME_PREFIX = "User_"


def display_name(user_id: str) -> str:
    """Derived from the identity only, so every peer shows the same name."""
    return f"{NAME_PREFIX}{user_id[:5]}"


@dataclass
class UserPointer:
    id: str
    name: str
    color: str
    current_page: str
    x: float = 0.0
    y: float = 0.0
    scroll_x: float = 0.0
    scroll_y: float = 0.0
    page_x: float = 0.0
    page_y: float = 0.0


class PointerRegistry:
    """Explicit mapping from connection id to its UserPointer."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._users: dict[str, UserPointer] = {}
        self._rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def create(self, user_id: str, current_page: str) -> UserPointer:
        """Register a new pointer. Re-creating an existing id starts it over."""
        user = UserPointer(
            id=user_id,
            name=display_name(user_id),
            color=self._rng.choice(POINTER_COLORS),
            current_page=current_page,
        )
        self._users[user_id] = user
        return user

    def get(self, user_id: str) -> UserPointer | None:
        return self._users.get(user_id)

    def update_position(
        self,
        user_id: str,
        x: float,
        y: float,
        scroll_x: float,
        scroll_y: float,
        page_x: float,
        page_y: float,
        current_page: str,
    ) -> UserPointer | None:
        """Overwrite everything the client reports about its cursor. None if the id is unknown."""
        user = self._users.get(user_id)
        if user is None:
            return None
        user.x = x
        user.y = y
        user.scroll_x = scroll_x
        user.scroll_y = scroll_y
        user.page_x = page_x
        user.page_y = page_y
        user.current_page = current_page
        return user

    def update_scroll(
        self, user_id: str, scroll_x: float, scroll_y: float
    ) -> UserPointer | None:
        """
        Scrolling moves the pointer over the page without moving it on screen.
        The page coordinates are recomputed from the last known cursor position.
        """
        user = self._users.get(user_id)
        if user is None:
            return None
        user.scroll_x = scroll_x
        user.scroll_y = scroll_y
        user.page_x = scroll_x + user.x
        user.page_y = scroll_y + user.y
        return user

    def remove(self, user_id: str) -> bool:
        return self._users.pop(user_id, None) is not None

    def list_all(self) -> list[UserPointer]:
        """Snapshot of all pointers (order carries no meaning)."""
        return list(self._users.values())
