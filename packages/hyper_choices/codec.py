"""Token encoding and decoding against a choice list snapshot.

The wire contract follows HTML form semantics:
- "-1" means nothing is selected
- an empty or absent field means the same thing
- any other token must name a choice in the list the page was rendered from

Encoding is lenient (a value missing from the list renders as no selection),
decoding is strict (an unknown token comes back as NOT_FOUND).
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hyper_choices.choices import ChoiceList

__all__ = ["SENTINEL_TOKEN", "NOT_FOUND", "ChoiceCodec", "is_empty_token"]

SENTINEL_TOKEN = "-1"


class _Lookup(enum.Enum):
    NOT_FOUND = "NOT_FOUND"

    def __repr__(self):
        return self.value

    def __bool__(self):
        return False


NOT_FOUND = _Lookup.NOT_FOUND


def is_empty_token(token: str | None) -> bool:
    """Return True if the token denotes "no selection".

    Example:
        >>> is_empty_token("-1"), is_empty_token(""), is_empty_token(None)
        (True, True, True)
        >>> is_empty_token("0")
        False
    """
    return token is None or not token.strip() or token == SENTINEL_TOKEN


class ChoiceCodec:
    """Maps domain values to tokens and back for one ChoiceList."""

    __slots__ = ("choices",)

    def __init__(self, choices: ChoiceList):
        self.choices = choices

    def encode(self, value: Any) -> str:
        """Token of the first choice equal to value, or the sentinel."""
        choice = self.choices.choice_for_value(value)
        if choice is None:
            return SENTINEL_TOKEN
        return choice.token

    def decode(self, token: str | None) -> Any:
        """Domain value for token.

        Returns None for the sentinel and for empty tokens, and NOT_FOUND for
        any other token the list does not know.
        """
        if is_empty_token(token):
            return None
        choice = self.choices.choice_for_token(token)
        if choice is None:
            return NOT_FOUND
        return choice.value
