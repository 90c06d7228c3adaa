from typing import Any, Dict, Optional
from bs4 import Tag
from ..core import ElementBase, ElementDefinition

# Inputs that never carry user data of their own
BUTTON_INPUT_TYPES = {"submit", "button", "reset", "image"}


class FormControlElement(ElementBase):
    """
    Data model for <input>, <select> and <textarea>.
    Records how the control is labelled so the forms rule does not need the soup.
    """
    wrapped_in_label: bool = False
    fieldset_legend_ok: Optional[bool] = None  # None: not inside a fieldset

    @property
    def name(self) -> str:
        return (self.attrs.get('name') or '').strip()

    @property
    def input_type(self) -> str:
        return (self.attrs.get('type') or '').strip().lower()

    @property
    def control_id(self) -> str:
        return (self.attrs.get('id') or '').strip()

    @property
    def is_hidden(self) -> bool:
        return self.tag == 'input' and self.input_type == 'hidden'

    @property
    def is_button_like(self) -> bool:
        return self.tag == 'input' and self.input_type in BUTTON_INPUT_TYPES

    @property
    def is_choice(self) -> bool:
        return self.tag == 'input' and self.input_type in ('radio', 'checkbox')


def _fieldset_state(tag: Tag) -> Optional[bool]:
    fieldset = tag.find_parent('fieldset')
    if fieldset is None:
        return None
    first_child = fieldset.find(True, recursive=False)
    return first_child is not None and first_child.name == 'legend'


def parse_form_control(tag: Tag, base: Dict[str, Any]) -> FormControlElement:
    return FormControlElement(
        **base,
        wrapped_in_label=tag.find_parent('label') is not None,
        fieldset_legend_ok=_fieldset_state(tag),
    )


DEFINITION = ElementDefinition(
    tag_names=["input", "select", "textarea"],
    parser=parse_form_control,
)
