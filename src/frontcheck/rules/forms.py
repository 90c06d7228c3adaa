# src/frontcheck/rules/forms.py
from collections import OrderedDict
from typing import Dict, List, Set

from ..dom.elements.form_control import FormControlElement
from ..dom.models import HTMLDocument
from ..model import Finding
from ..snapshot import ProjectSnapshot
from .base import Findings, rule_spec

CONTROL_TAGS = ("input", "select", "textarea")


def _label_targets(doc: HTMLDocument) -> Set[str]:
    return {
        (label.get('for') or '').strip()
        for label in doc.find_all('label')
        if (label.get('for') or '').strip()
    }


def _controls(nodes) -> List[FormControlElement]:
    return [n for n in nodes if isinstance(n, FormControlElement)]


def _check_groups(doc: HTMLDocument, controls: List[FormControlElement], out: Findings) -> None:
    groups: Dict[str, List[FormControlElement]] = OrderedDict()
    for control in controls:
        if control.is_choice and control.name:
            groups.setdefault(control.name, []).append(control)

    for name, members in groups.items():
        if len(members) < 2:
            continue
        first = members[0]
        states = {m.fieldset_legend_ok for m in members}
        if None in states:
            out.add(
                "GROUP_WITHOUT_FIELDSET", doc.path,
                f"Related controls \"{name}\" must be grouped in a <fieldset>",
                line=first.line, context=first.snippet,
            )
        elif False in states:
            out.add(
                "FIELDSET_WITHOUT_LEGEND", doc.path,
                f"Fieldset around \"{name}\" must start with a <legend>",
                line=first.line, context=first.snippet,
            )


def _check_label(doc: HTMLDocument, control: FormControlElement, targets: Set[str], out: Findings) -> None:
    if control.is_hidden or control.is_button_like:
        return
    if control.wrapped_in_label or (control.control_id and control.control_id in targets):
        return

    if (control.get('aria-label') or '').strip() or (control.get('aria-labelledby') or '').strip():
        out.add(
            "ARIA_ONLY_LABEL", doc.path,
            f"Form control <{control.tag}> is labelled only through ARIA",
            line=control.line, context=control.snippet,
            suggestion="Prefer a visible <label> element",
            severity="WARNING",
        )
        return

    out.add(
        "MISSING_LABEL", doc.path,
        f"Form control <{control.tag}> has no associated <label>",
        line=control.line, context=control.snippet,
        suggestion="Wrap the control in <label> or use <label for=\"id\">",
    )


@rule_spec(
    name="forms",
    category="ACCESSIBILITY",
    codes=[
        "FORM_MISSING_ACTION", "CONTROL_MISSING_NAME", "INPUT_MISSING_TYPE", "GROUP_WITHOUT_FIELDSET",
        "FIELDSET_WITHOUT_LEGEND", "MISSING_LABEL", "ARIA_ONLY_LABEL",
    ],
)
def check_forms(snapshot: ProjectSnapshot) -> List[Finding]:
    """Forms: action, control names and types, grouped choices, labels."""
    out = Findings("forms", "ACCESSIBILITY")

    for doc in snapshot.documents:
        if doc.root is None:
            continue

        for form in doc.find_all('form'):
            if not form.has_attr('action'):
                out.add("FORM_MISSING_ACTION", doc.path, "Form missing action attribute",
                        line=form.line, context=form.snippet)

            controls = _controls(form.find_all(*CONTROL_TAGS))
            for control in controls:
                if not control.name and not control.is_button_like:
                    out.add("CONTROL_MISSING_NAME", doc.path, "Form control missing name attribute",
                            line=control.line, context=control.snippet)
                if control.tag == 'input' and not control.has_attr('type'):
                    out.add("INPUT_MISSING_TYPE", doc.path, "Input missing type attribute",
                            line=control.line, context=control.snippet)

            _check_groups(doc, controls, out)

        targets = _label_targets(doc)
        for control in _controls(doc.find_all(*CONTROL_TAGS)):
            _check_label(doc, control, targets, out)

    return out.as_list()


RULES = [check_forms]
