import logging
from typing import Iterable, Optional

from frontcheck.engine import ProgressCallback, RuleRunner
from frontcheck.loader import ProjectLoader
from frontcheck.model import ValidationReport
from frontcheck.registry import RuleRegistry, default_registry
from frontcheck.settings import CheckerSettings
from frontcheck.snapshot import ProjectSnapshot

logger = logging.getLogger(__name__)


class ValidateController:
    """
    Orchestrates one validation run: load the snapshot, pick the rules,
    run them and hand back the report. Raises ProjectLoadError when the
    working directory cannot be used.
    """

    def __init__(
            self,
            settings: CheckerSettings,
            registry: Optional[RuleRegistry] = None,
            workers: int = 1
    ):
        self.settings = settings
        self.registry = registry if registry is not None else default_registry()
        self.workers = workers

    def select_rules(self, names: Optional[Iterable[str]] = None) -> RuleRegistry:
        """Subset by name (registry order kept); unknown names raise KeyError."""
        selected = self.registry.select(names) if names else self.registry
        if not self.settings.w3c_enabled and "w3c" in selected:
            selected = selected.without("w3c")
        if not self.settings.stylelint_enabled and "stylelint" in selected:
            selected = selected.without("stylelint")
        return selected

    def load(self) -> ProjectSnapshot:
        return ProjectLoader(self.settings).load()

    def run(
            self,
            rule_names: Optional[Iterable[str]] = None,
            progress_callback: Optional[ProgressCallback] = None
    ) -> ValidationReport:
        rules = self.select_rules(rule_names)
        snapshot = self.load()
        logger.info("Validating %s with rules: %s", self.settings.working_dir, ", ".join(rules.names()))

        runner = RuleRunner(workers=self.workers, progress_callback=progress_callback)
        return runner.run(snapshot, rules)
