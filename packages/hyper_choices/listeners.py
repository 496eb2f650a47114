"""Change listener registration for selection round-trips.

A host creates one ChangeListenerRegistry for the page (or session) it
serves, registers the bindings that want change notifications, renders them
with the registry's listener URL and routes the resulting requests back
through dispatch().
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from urllib.parse import urlencode

from markupsafe import Markup

from hyper_choices.binding import RequestContext, SelectionBinding
from hyper_choices.errors import ListenerNotFoundError
from hyper_choices.html import render_select

__all__ = ["ChangeListenerRegistry", "LISTENER_PARAM", "FIELD_PARAM"]

logger = logging.getLogger(__name__)

LISTENER_PARAM = "listener"
FIELD_PARAM = "field"
CHANGE_LISTENER = "change"


class ChangeListenerRegistry:
    """Routes selection-change requests to registered bindings."""

    def __init__(self, base_url: str):
        self.base_url = base_url
        self._bindings: dict[str, SelectionBinding] = {}

    def register(self, binding: SelectionBinding) -> SelectionBinding:
        if binding.name in (LISTENER_PARAM, FIELD_PARAM):
            raise ValueError(f"Field name {binding.name!r} is reserved for listener routing")
        if binding.name in self._bindings:
            raise ValueError(f"A change listener is already registered for {binding.name!r}")
        self._bindings[binding.name] = binding
        logger.debug("Registered change listener for %r", binding.name)
        return binding

    def unregister(self, name: str) -> None:
        self._bindings.pop(name, None)

    @contextmanager
    def registered(self, binding: SelectionBinding) -> Iterator[SelectionBinding]:
        """Register binding for the duration of the block."""
        self.register(binding)
        try:
            yield binding
        finally:
            self.unregister(binding.name)

    def __contains__(self, name: str) -> bool:
        return name in self._bindings

    def url_for(self, name: str) -> str:
        """Listener URL for the field; the onchange script appends the token."""
        query = urlencode({LISTENER_PARAM: CHANGE_LISTENER, FIELD_PARAM: name})
        separator = "&" if "?" in self.base_url else "?"
        return f"{self.base_url}{separator}{query}"

    def render(self, binding: SelectionBinding, attrs: dict[str, Any] | None = None) -> Markup:
        listener_url = self.url_for(binding.name) if binding.name in self else None
        return render_select(binding, listener_url=listener_url, attrs=attrs)

    def dispatch(self, request: RequestContext) -> Any:
        """Apply a selection-change request to its binding.

        Returns:
            The value written to the binding's model.

        Raises:
            ListenerNotFoundError: The request names no registered field.
            StaleSelectionError: The submitted token is not a current choice.
        """
        name = request.submitted_token(FIELD_PARAM)
        binding = self._bindings.get(name) if name else None
        if binding is None:
            logger.warning("Selection change for unregistered field %r", name)
            raise ListenerNotFoundError("No change listener registered", name=name)
        return binding.submit(request)
