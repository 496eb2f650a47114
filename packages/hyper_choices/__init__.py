"""Choice-list binding for dropdown selections.

Maps domain objects to wire-safe tokens and back across one render/submit
cycle. "-1" (or an empty field) means nothing is selected; any other token
must name a choice in the list the page was rendered from.
"""

from hyper_choices.binding import (
    BindingState,
    ChangeNotifier,
    ChoiceSource,
    Renderer,
    RequestContext,
    SelectionBinding,
)
from hyper_choices.choices import Choice, ChoiceList
from hyper_choices.codec import NOT_FOUND, SENTINEL_TOKEN, ChoiceCodec, is_empty_token
from hyper_choices.errors import (
    BindingStateError,
    ChoiceError,
    DuplicateTokenError,
    InvalidTokenError,
    ListenerNotFoundError,
    StaleSelectionError,
)
from hyper_choices.form import ChoiceForm, FormRequest
from hyper_choices.html import SelectRenderer, onchange_script, render_select
from hyper_choices.listeners import ChangeListenerRegistry
from hyper_choices.models import Model, ModelAccessor, PropertyModel
from hyper_choices.options import BindingOptions

__all__ = [
    # Core
    "Choice",
    "ChoiceList",
    "ChoiceCodec",
    "SENTINEL_TOKEN",
    "NOT_FOUND",
    "is_empty_token",
    "SelectionBinding",
    "BindingState",
    "BindingOptions",
    # Collaborators
    "ChangeNotifier",
    "ChoiceSource",
    "Renderer",
    "RequestContext",
    "ModelAccessor",
    "Model",
    "PropertyModel",
    "FormRequest",
    "ChoiceForm",
    "SelectRenderer",
    "render_select",
    "onchange_script",
    "ChangeListenerRegistry",
    # Errors
    "ChoiceError",
    "StaleSelectionError",
    "DuplicateTokenError",
    "InvalidTokenError",
    "BindingStateError",
    "ListenerNotFoundError",
]
