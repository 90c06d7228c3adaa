# src/frontcheck/rules/w3c.py
import logging
from typing import List

from ..errors import ExternalValidatorError
from ..model import Finding
from ..services.w3c_service import W3CService, locate_message
from ..snapshot import ProjectSnapshot
from .base import Findings, rule_spec

logger = logging.getLogger(__name__)


@rule_spec(
    name="w3c",
    category="W3C",
    codes=["W3C_ERROR", "W3C_FAILED"],
)
def check_w3c(snapshot: ProjectSnapshot) -> List[Finding]:
    """Markup conformance through the Nu HTML Checker."""
    settings = snapshot.settings
    if not settings.w3c_enabled:
        return []

    out = Findings("w3c", "W3C")
    service = W3CService(settings.w3c_url, timeout=settings.w3c_timeout)

    for doc in snapshot.documents:
        if not doc.text.strip():
            continue
        try:
            messages = service.validate(doc.text)
        except ExternalValidatorError as e:
            logger.warning("W3C validation of %s failed: %s", doc.path, e)
            out.add("W3C_FAILED", doc.path, f"W3C validation failed: {e}")
            continue

        for message in messages:
            line = locate_message(doc, message)
            out.add(
                "W3C_ERROR", doc.path,
                message.get('message') or "Unspecified markup error",
                line=line,
                context=message.get('extract') or doc.source_line(line),
            )

    return out.as_list()


RULES = [check_w3c]
