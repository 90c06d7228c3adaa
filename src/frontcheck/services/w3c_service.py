import logging
import re
from typing import Any, Dict, List, Optional

import requests

from ..dom.models import HTMLDocument
from ..errors import ExternalValidatorError

logger = logging.getLogger(__name__)

QUOTED_RE = re.compile(r'[“"]([^”"]+)[”"]')


class W3CService:
    """
    Thin client for the Nu HTML Checker JSON API.
    Posts the raw page and returns the reported error messages.
    """

    def __init__(self, url: str, timeout: float = 15.0, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self._session = session

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({'User-Agent': 'frontcheck/1.0'})
        return self._session

    def validate(self, html: str) -> List[Dict[str, Any]]:
        """Returns the 'error' messages for `html`; raises ExternalValidatorError when the call fails."""
        try:
            response = self._get_session().post(
                self.url,
                data=html.encode('utf-8'),
                headers={'Content-Type': 'text/html; charset=utf-8'},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.HTTPError as e:
            raise ExternalValidatorError(f"HTTP status {e.response.status_code}") from e
        except requests.exceptions.RequestException as e:
            raise ExternalValidatorError(str(e)) from e
        except ValueError as e:
            raise ExternalValidatorError(f"Invalid JSON response: {e}") from e

        messages = payload.get('messages', []) if isinstance(payload, dict) else []
        for message in messages:
            if message.get('type') == 'non-document-error':
                raise ExternalValidatorError(message.get('message') or "Validator could not check the document")

        errors = [m for m in messages if m.get('type') == 'error']
        logger.debug("W3C returned %d messages (%d errors)", len(messages), len(errors))
        return errors


def locate_message(doc: HTMLDocument, message: Dict[str, Any]) -> Optional[int]:
    """
    Source line of a validator message. Uses the reported line when present,
    otherwise guesses from the message shape.
    """
    for key in ('lastLine', 'firstLine'):
        line = message.get(key)
        if isinstance(line, int) and line > 0:
            return line

    text = message.get('message') or ''
    quoted = QUOTED_RE.findall(text)

    if 'Duplicate ID' in text and quoted:
        needle = f'id="{quoted[0]}"'
        first = doc.line_of(needle)
        return doc.line_of(needle, (first or 0) + 1) or first

    if '“form”' in text or '"form"' in text or 'action' in text:
        line = doc.line_of('<form')
        if line:
            return line

    # "Element “div” not allowed as child of element “span”..."
    if text.startswith(('Element', 'Start tag', 'End tag', 'Stray')) and quoted:
        return doc.line_of(f"<{quoted[0]}") or doc.line_of(f"</{quoted[0]}")

    return None
