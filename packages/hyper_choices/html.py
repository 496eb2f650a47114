"""HTML rendering for selection bindings.

Produces the ``<select>`` element for a SelectionBinding. Tokens are written
into ``value`` attributes HTML-escaped but never URL-encoded.
"""

from typing import Any

from markupsafe import Markup, escape

from hyper_choices.binding import SelectionBinding
from hyper_choices.choices import ChoiceList
from hyper_choices.codec import SENTINEL_TOKEN, is_empty_token

__all__ = [
    'SelectRenderer',
    'onchange_script',
    'render_attr',
    'render_select',
    'spread_attrs',
]


def render_attr(name: str, value) -> str:
    """Render one attribute of a ``<select>`` or ``<option>`` tag.

    Flags such as ``selected`` and ``disabled`` are written bare when True
    and dropped when False. None drops the attribute too.
    """
    if value is True:
        return f' {name}'
    if value is False or value is None:
        return ''
    return f' {name}="{escape(value)}"'


def spread_attrs(attrs: dict | None) -> str:
    """Render a dictionary as HTML attributes, in insertion order."""
    if not attrs:
        return ''
    return ''.join(render_attr(k, v) for k, v in attrs.items())


def onchange_script(url: str, name: str) -> str:
    """Script that reloads the page with the newly selected token.

    The URL is not encoded, since that would give invalid JavaScript.

    Example:
        >>> onchange_script("/page?listener=change&field=size", "size")
        "location.href='/page?listener=change&field=size&size=' + this.options[this.selectedIndex].value;"
    """
    return f"location.href='{url}&{name}=' + this.options[this.selectedIndex].value;"


class SelectRenderer:
    """Renderer collaborator that writes a ``<select>`` element.

    Call SelectionBinding.render() with this renderer to mark the selection,
    then render() with the binding's choices to get the markup.
    """

    def __init__(
        self,
        name: str,
        *,
        attrs: dict[str, Any] | None = None,
        null_label: str = "Choose One",
        null_valid: bool = False,
        onchange: str | None = None,
    ):
        self.name = name
        self.attrs = attrs or {}
        self.null_label = null_label
        self.null_valid = null_valid
        self.onchange = onchange
        self.selected = SENTINEL_TOKEN

    def mark_selected(self, token: str) -> None:
        self.selected = token

    def _chunks(self, choices: ChoiceList):
        attrs = {'name': self.name, **self.attrs}
        if self.onchange:
            attrs['onchange'] = self.onchange
        yield f'<select{spread_attrs(attrs)}>'

        nothing_selected = is_empty_token(self.selected)
        if nothing_selected or self.null_valid:
            yield (
                f'<option{render_attr("selected", nothing_selected)}'
                f' value="{SENTINEL_TOKEN}">{escape(self.null_label)}</option>'
            )

        for choice in choices.choices:
            selected = choice.token == self.selected
            yield (
                f'<option{render_attr("selected", selected)}'
                f'{render_attr("value", choice.token)}>{escape(choice.label)}</option>'
            )

        yield '</select>'

    def render(self, choices: ChoiceList) -> Markup:
        return Markup(''.join(self._chunks(choices)))


def render_select(
    binding: SelectionBinding,
    *,
    listener_url: str | None = None,
    attrs: dict[str, Any] | None = None,
) -> Markup:
    """Render a binding as a ``<select>`` element.

    The onchange round-trip is only added when the binding wants change
    notifications and a listener URL is given.

    Example:
        binding = SelectionBinding("size", Model("M"), ["S", "M", "L"])
        render_select(binding)
        # <select name="size"><option value="0">S</option>
        # <option selected value="1">M</option><option value="2">L</option></select>
    """
    onchange = None
    if binding.wants_notifications and listener_url:
        onchange = onchange_script(listener_url, binding.name)

    renderer = SelectRenderer(
        binding.name,
        attrs=attrs,
        null_label=binding.options.null_label,
        null_valid=binding.options.null_valid,
        onchange=onchange,
    )
    binding.render(renderer)
    return renderer.render(binding.choices)
