"""Form submission for groups of selection bindings."""

import logging
from collections.abc import Mapping, Sequence

from hyper_choices.binding import SelectionBinding
from hyper_choices.errors import StaleSelectionError

__all__ = ["FormRequest", "ChoiceForm"]

logger = logging.getLogger(__name__)


class FormRequest:
    """Request context over parsed form data.

    Accepts a mapping of field names to a string or a list of strings, as
    returned by ``urllib.parse.parse_qs``. For repeated fields the first value
    is used.
    """

    __slots__ = ("data",)

    def __init__(self, data: Mapping[str, str | Sequence[str]] | None = None):
        self.data = data or {}

    def submitted_token(self, name: str) -> str | None:
        value = self.data.get(name)
        if value is None or isinstance(value, str):
            return value
        return value[0] if value else None


class ChoiceForm:
    """Submits several bindings and collects stale selections as field errors.

    Example:
        form = ChoiceForm(country_binding, size_binding)
        errors = form.process(FormRequest(parse_qs(body)))
        if errors:
            ...  # re-render with errors["country"] next to the field
    """

    def __init__(self, *bindings: SelectionBinding):
        self.bindings: dict[str, SelectionBinding] = {}
        for binding in bindings:
            if binding.name in self.bindings:
                raise ValueError(f"Duplicate field name in form: {binding.name!r}")
            self.bindings[binding.name] = binding

    def process(self, request) -> dict[str, str]:
        """Submit every binding.

        Returns:
            Error message per field whose submitted selection was stale.
            Fields without errors have been written to their models.
        """
        errors: dict[str, str] = {}
        for name, binding in self.bindings.items():
            try:
                binding.submit(request)
            except StaleSelectionError:
                errors[name] = "The selected option is no longer available"
        if errors:
            logger.info("Form rejected stale selections for %s", ", ".join(errors))
        return errors
