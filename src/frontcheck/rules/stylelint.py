# src/frontcheck/rules/stylelint.py
import logging
from pathlib import Path
from typing import List

from ..errors import ExternalValidatorError
from ..model import Finding
from ..services.stylelint_service import StylelintService
from ..snapshot import ProjectSnapshot
from .base import Findings, rule_spec

logger = logging.getLogger(__name__)


def _relative_source(source: str, snapshot: ProjectSnapshot) -> str:
    path = Path(source)
    root = snapshot.settings.working_dir
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


@rule_spec(
    name="stylelint",
    category="STYLES",
    codes=["STYLELINT", "STYLELINT_FAILED"],
)
def check_stylelint(snapshot: ProjectSnapshot) -> List[Finding]:
    """Warnings of an external stylelint run (opt-in)."""
    settings = snapshot.settings
    sheets = snapshot.authored_stylesheets()
    if not settings.stylelint_enabled or not sheets:
        return []

    out = Findings("stylelint", "STYLES")
    service = StylelintService(
        settings.working_dir,
        config=settings.stylelint_config,
        timeout=settings.stylelint_timeout,
    )

    try:
        results = service.lint([sheet.path for sheet in sheets])
    except ExternalValidatorError as e:
        logger.warning("Stylelint run failed: %s", e)
        out.add("STYLELINT_FAILED", settings.styles_dir, f"Stylelint failed: {e}")
        return out.as_list()

    by_path = {sheet.path: sheet for sheet in sheets}
    for result in results:
        path = _relative_source(result.get('source') or '', snapshot)
        sheet = by_path.get(path)
        for warning in result.get('warnings', []):
            line = warning.get('line')
            out.add(
                "STYLELINT", path,
                warning.get('text') or warning.get('rule') or "stylelint warning",
                line=line,
                context=sheet.source_line(line) if sheet else None,
                severity="WARNING" if warning.get('severity') == 'warning' else "CRITICAL",
            )

    return out.as_list()


RULES = [check_stylelint]
