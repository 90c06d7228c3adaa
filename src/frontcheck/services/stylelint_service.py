import json
import logging
import shutil
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..errors import ExternalValidatorError

logger = logging.getLogger(__name__)


class StylelintService:
    """
    Runs stylelint through npx and returns its JSON results.
    Needs Node.js; the project's own stylelint config is used unless one is given.
    """

    def __init__(self, cwd: Path, config: Optional[str] = None, timeout: float = 60.0):
        self.cwd = cwd
        self.config = config
        self.timeout = timeout

    def lint(self, files: Sequence[str]) -> List[Dict[str, Any]]:
        npx_path = shutil.which("npx")
        if not npx_path:
            raise ExternalValidatorError("npx not found. Install Node.js to enable stylelint")

        cmd = [npx_path, "--no-install", "stylelint", "--formatter", "json"]
        if self.config:
            cmd += ["--config", self.config]
        cmd += list(files)

        logger.debug("Running %s in %s", " ".join(cmd), self.cwd)
        try:
            result = subprocess.run(
                cmd,
                cwd=self.cwd,
                check=False,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise ExternalValidatorError(f"stylelint timed out after {self.timeout:g}s") from None
        except OSError as e:
            raise ExternalValidatorError(f"Could not start stylelint: {e}") from e

        # Newer stylelint releases write the report to stderr
        for stream in (result.stdout, result.stderr):
            text = (stream or "").strip()
            if text.startswith('['):
                try:
                    return json.loads(text)
                except json.JSONDecodeError as e:
                    raise ExternalValidatorError(f"Unreadable stylelint output: {e}") from e

        detail = (result.stderr or result.stdout or "").strip().splitlines()
        raise ExternalValidatorError(
            f"stylelint exited with code {result.returncode}" + (f": {detail[0]}" if detail else "")
        )
