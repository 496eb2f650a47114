"""Per-binding configuration."""

from pydantic import BaseModel, ConfigDict, field_validator

__all__ = ["BindingOptions"]


class BindingOptions(BaseModel):
    """Options for one SelectionBinding.

    Attributes:
        name: Form field name; also the key the submitted token is read from.
        want_change_notifications: Run the change notifier (and render the
            onchange round-trip) when the selection changes.
        null_valid: Always offer the "no selection" option, even when a
            value is selected.
        null_label: Label of the "no selection" option.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    name: str
    want_change_notifications: bool = False
    null_valid: bool = False
    null_label: str = "Choose One"

    @field_validator('name')
    @classmethod
    def name_valid(cls, v: str) -> str:
        if not v:
            raise ValueError('Field name must not be empty')
        if any(c.isspace() for c in v):
            raise ValueError('Field name must not contain whitespace')
        return v
