"""Selection binding between a choice list and a domain model.

A SelectionBinding runs one render/submit cycle at a time:

    IDLE -> RENDERING -> AWAITING_SUBMISSION -> UPDATING -> IDLE

Rendering rebuilds the choice list from its source and marks the token of
the model's current value. Submission decodes the posted token against the
list the page was rendered from and writes the result to the model:

    binding = SelectionBinding("country", Model(), countries)
    binding.render(renderer)           # renderer.mark_selected("-1")
    binding.submit(FormRequest({"country": "2"}))

The binding owns no model state. It reads and writes through a ModelAccessor
and, when change notifications are enabled, calls the injected notifier
after the model has changed.
"""

import enum
import logging
from collections.abc import Callable, Hashable, Iterable
from typing import Any, Protocol, Union

from hyper_choices.choices import ChoiceList
from hyper_choices.codec import NOT_FOUND, ChoiceCodec
from hyper_choices.errors import BindingStateError, StaleSelectionError
from hyper_choices.models import ModelAccessor
from hyper_choices.options import BindingOptions

__all__ = [
    "BindingState",
    "ChangeNotifier",
    "ChoiceSource",
    "Renderer",
    "RequestContext",
    "SelectionBinding",
]

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def mark_selected(self, token: str) -> None:
        ...


class RequestContext(Protocol):
    def submitted_token(self, name: str) -> str | None:
        ...


class ChangeNotifier(Protocol):
    def notify(self, new_value: Any) -> None:
        ...


ChoiceSource = Union[ChoiceList, Iterable[Any], Callable[[], Union[ChoiceList, Iterable[Any]]]]


class BindingState(enum.Enum):
    IDLE = "idle"
    RENDERING = "rendering"
    AWAITING_SUBMISSION = "awaiting_submission"
    UPDATING = "updating"


class SelectionBinding:
    """Binds a single-selection field to a model through a choice list.

    Args:
        options: Field name, or a BindingOptions instance.
        model: Accessor for the bound domain value.
        choices: A ChoiceList, an iterable of domain values, or a
            zero-argument callable returning either. Read again on every
            rebuild.
        notifier: Object with a ``notify(new_value)`` method, or a plain
            callable. Only used when change notifications are enabled.
        label: Label function for sources given as plain values.
        key: Identity function for sources given as plain values; see
            ChoiceList.
        **overrides: BindingOptions fields, e.g.
            ``want_change_notifications=True``.
    """

    def __init__(
        self,
        options: str | BindingOptions,
        model: ModelAccessor,
        choices: ChoiceSource,
        *,
        notifier: ChangeNotifier | Callable[[Any], None] | None = None,
        label: Callable[[Any], str] = str,
        key: Callable[[Any], Hashable] | None = None,
        **overrides: Any,
    ):
        if isinstance(options, str):
            options = BindingOptions(name=options, **overrides)
        elif overrides:
            options = BindingOptions(**{**options.model_dump(), **overrides})

        notify = getattr(notifier, "notify", notifier)
        if notify is not None and not callable(notify):
            raise TypeError(f"Notifier must be callable or define notify(), got {notifier!r}")

        # One-shot iterators would be empty from the second rebuild on
        if not callable(choices) and iter(choices) is choices:
            choices = tuple(choices)

        self.options = options
        self.model = model
        self.state = BindingState.IDLE
        self._source = choices
        self._label = label
        self._key = key
        self._notify = notify
        self._choices: ChoiceList | None = None

    @property
    def name(self) -> str:
        return self.options.name

    @property
    def wants_notifications(self) -> bool:
        return self.options.want_change_notifications

    @property
    def choices(self) -> ChoiceList:
        """The current choice list snapshot, built on first access."""
        if self._choices is None:
            self.rebuild()
        return self._choices

    def rebuild(self) -> ChoiceList:
        """Replace the choice list with a fresh snapshot of the source."""
        source = self._source
        if callable(source) and not isinstance(source, type):
            source = source()
        if not isinstance(source, ChoiceList):
            source = ChoiceList.from_values(source, label=self._label, key=self._key)
        self._choices = source
        logger.debug("Rebuilt choices for %r: %d option(s)", self.name, len(source))
        return source

    def current_token(self) -> str:
        """Token for the model's current value in the current snapshot."""
        return ChoiceCodec(self.choices).encode(self.model.get())

    def render(self, renderer: Renderer) -> str:
        """Rebuild the choices and mark the selected token on the renderer.

        Returns:
            The marked token, or the sentinel when nothing is selected.
        """
        self._check_state("render")
        self.state = BindingState.RENDERING
        try:
            self.rebuild()
            token = self.current_token()
            renderer.mark_selected(token)
        except Exception:
            self.state = BindingState.IDLE
            raise
        self.state = BindingState.AWAITING_SUBMISSION
        logger.debug("Rendered %r with selected token %r", self.name, token)
        return token

    def submit(self, request: RequestContext) -> Any:
        """Apply the submitted token to the model.

        An empty, absent or sentinel token clears the model. A token that
        does not name a current choice raises StaleSelectionError and leaves
        the model untouched.

        Returns:
            The value written to the model.
        """
        self._check_state("submit")
        if self.state is not BindingState.AWAITING_SUBMISSION or self._choices is None:
            self.rebuild()

        token = request.submitted_token(self.name)
        self.state = BindingState.UPDATING
        try:
            choices = self._choices
            value = ChoiceCodec(choices).decode(token)
            if value is NOT_FOUND:
                logger.warning("Stale selection %r submitted for %r", token, self.name)
                raise StaleSelectionError(
                    "Submitted selection is not among the current choices",
                    name=self.name,
                    token=token,
                    tokens=choices.tokens(),
                )

            previous = self.model.get()
            self.model.set(value)
            logger.debug("Updated %r from token %r", self.name, token)

            if (
                self.wants_notifications
                and self._notify is not None
                and not choices.same_value(previous, value)
            ):
                self._notify(value)
            return value
        finally:
            self.state = BindingState.IDLE

    def _check_state(self, action: str) -> None:
        if self.state in (BindingState.RENDERING, BindingState.UPDATING):
            raise BindingStateError(
                f"Cannot {action} while the binding is {self.state.value}",
                name=self.name,
            )

    def __repr__(self):
        return f"SelectionBinding({self.name!r}, state={self.state.value})"
