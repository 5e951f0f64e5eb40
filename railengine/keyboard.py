"""Keyboard state tracking with press and trigger queries."""

from __future__ import annotations

from collections.abc import Iterable

KEY_COUNT = 256


class Keyboard:
    """Holds the current and previous state of all 256 keys.

    A key counts as down when its state byte is non-zero.
    """

    def __init__(self) -> None:
        self._current = bytes(KEY_COUNT)
        self._previous = bytes(KEY_COUNT)

    def update(self, state: Iterable[int]) -> None:
        """Store a new frame of key states, keeping the last one for triggers."""
        snapshot = bytes(state)
        if len(snapshot) != KEY_COUNT:
            raise ValueError(f"expected {KEY_COUNT} key states, got {len(snapshot)}")
        self._previous = self._current
        self._current = snapshot

    def push_key(self, key: int) -> bool:
        """True while the key is held down."""
        return bool(self._current[self._check(key)])

    def trigger_key(self, key: int) -> bool:
        """True only on the frame the key went down."""
        index = self._check(key)
        return bool(self._current[index]) and not self._previous[index]

    @staticmethod
    def _check(key: int) -> int:
        if not 0 <= key < KEY_COUNT:
            raise IndexError(f"key code {key} is out of range")
        return key