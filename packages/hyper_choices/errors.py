"""Choice binding exceptions with contextual error messages."""


class ChoiceError(Exception):
    """Base exception for all choice binding errors."""

    def __init__(self, message: str, name: str | None = None):
        self.name = name
        super().__init__(f"{message}\n\n  Field: {name}" if name else message)


class StaleSelectionError(ChoiceError):
    """A submitted token does not resolve against the current choice list."""

    def __init__(
        self,
        message: str,
        name: str | None = None,
        token: str | None = None,
        tokens: list[str] | None = None,
    ):
        self.token = token
        self.tokens = tokens or []

        full_message = message
        if name:
            full_message += f"\n\n  Field: {name}"

        if token is not None:
            full_message += f"\n\n  Submitted token: {token!r}"
            if self.tokens:
                full_message += "\n  Valid tokens: " + ", ".join(repr(t) for t in self.tokens)
            else:
                full_message += "\n  The choice list is empty."

        Exception.__init__(self, full_message)
        self.name = name


class DuplicateTokenError(ChoiceError):
    """Two choices in one list share a token."""

    def __init__(self, token: str, positions: tuple[int, int]):
        self.token = token
        self.positions = positions
        first, second = positions
        super().__init__(
            f"Duplicate choice token {token!r} at positions {first} and {second}"
        )


class InvalidTokenError(ChoiceError):
    pass


class BindingStateError(ChoiceError):
    pass


class ListenerNotFoundError(ChoiceError):
    pass
