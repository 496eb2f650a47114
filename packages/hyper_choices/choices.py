"""Ordered choice lists with token and value lookup.

A ChoiceList is an immutable snapshot: rebuilding means constructing a new
instance from the source collection. Tokens are only meaningful within the
snapshot they were issued from.
"""

from collections.abc import Callable, Hashable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from hyper_choices.codec import SENTINEL_TOKEN
from hyper_choices.errors import DuplicateTokenError, InvalidTokenError

__all__ = ["Choice", "ChoiceList"]


@dataclass(frozen=True)
class Choice:
    """One bindable option."""

    token: str
    value: Any
    label: str


class ChoiceList:
    """Ordered sequence of choices, indexed by token.

    Value equality is ``==`` unless a ``key`` function is given, in which case
    two values are equal when their keys are equal and value lookup goes
    through a key index instead of a scan. Either way the first match in
    insertion order wins.

    Example:
        >>> choices = ChoiceList.from_values(["red", "green"])
        >>> choices.choice_for_token("1")
        Choice(token='1', value='green', label='green')
        >>> list(choices)
        ['red', 'green']
    """

    __slots__ = ("_choices", "_by_token", "_by_key", "_key")

    def __init__(
        self,
        choices: Iterable[Choice] = (),
        key: Callable[[Any], Hashable] | None = None,
    ):
        self._choices = tuple(choices)
        self._key = key
        self._by_token: dict[str, Choice] = {}
        self._by_key: dict[Hashable, Choice] | None = {} if key else None

        positions: dict[str, int] = {}
        for position, choice in enumerate(self._choices):
            self._check(choice, position)
            if choice.token in positions:
                raise DuplicateTokenError(choice.token, (positions[choice.token], position))
            positions[choice.token] = position
            self._by_token[choice.token] = choice
            if self._by_key is not None:
                self._by_key.setdefault(key(choice.value), choice)

    @classmethod
    def from_values(
        cls,
        values: Iterable[Any],
        label: Callable[[Any], str] = str,
        key: Callable[[Any], Hashable] | None = None,
    ) -> "ChoiceList":
        """Build a list from domain values, assigning tokens by position."""
        return cls(
            (Choice(str(index), value, label(value)) for index, value in enumerate(values)),
            key=key,
        )

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[Choice | tuple[str, Any, str]],
        key: Callable[[Any], Hashable] | None = None,
    ) -> "ChoiceList":
        """Build a list from caller-assigned ``(token, value, label)`` entries.

        Use this when tokens must survive a rebuild, e.g. database keys.
        """
        return cls(
            (entry if isinstance(entry, Choice) else Choice(*entry) for entry in entries),
            key=key,
        )

    @staticmethod
    def _check(choice: Choice, position: int) -> None:
        if not isinstance(choice.token, str) or not choice.token.strip():
            raise InvalidTokenError(f"Choice at position {position} has an empty token")
        if choice.token == SENTINEL_TOKEN:
            raise InvalidTokenError(
                f"Choice at position {position} uses the reserved token {SENTINEL_TOKEN!r}"
            )
        if choice.value is None:
            raise InvalidTokenError(
                f"Choice {choice.token!r} has value None, which means no selection"
            )

    @property
    def choices(self) -> tuple[Choice, ...]:
        return self._choices

    def tokens(self) -> list[str]:
        return [choice.token for choice in self._choices]

    def same_value(self, a: Any, b: Any) -> bool:
        """Compare two domain values with this list's equality."""
        if a is None or b is None:
            return a is b
        if self._key is not None:
            return self._key(a) == self._key(b)
        return a == b

    def choice_for_value(self, value: Any) -> Choice | None:
        if value is None:
            return None
        if self._by_key is not None:
            return self._by_key.get(self._key(value))
        for choice in self._choices:
            if choice.value == value:
                return choice
        return None

    def choice_for_token(self, token: str | None) -> Choice | None:
        if token is None:
            return None
        return self._by_token.get(token)

    def __iter__(self) -> Iterator[Any]:
        return (choice.value for choice in self._choices)

    def __len__(self) -> int:
        return len(self._choices)

    def __repr__(self) -> str:
        return f"ChoiceList({list(self._choices)!r})"
