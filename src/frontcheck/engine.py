# src/frontcheck/engine.py
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional

from .errors import RuleExecutionError
from .model import Finding, ValidationReport
from .rules.base import Rule
from .snapshot import ProjectSnapshot

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


def _failure_finding(error: RuleExecutionError) -> Finding:
    return Finding(
        file_path=".",
        message=str(error),
        rule=error.rule_name,
        code="RULE_FAILED",
        severity="CRITICAL",
        category="ENGINE",
    )


def _worker_run_rule(rule: Rule, snapshot: ProjectSnapshot) -> List[Finding]:
    """
    Runs one rule in isolation. Any exception escaping the rule is logged and
    turned into a single finding so the remaining rules still run.
    """
    try:
        findings = rule(snapshot)
        if findings is None:
            return []
        findings = list(findings)
        for item in findings:
            if not isinstance(item, Finding):
                raise TypeError(f"rule returned {type(item).__name__} instead of Finding")
        return findings
    except Exception as e:
        error = RuleExecutionError(rule.name, e)
        logger.error("%s", error, exc_info=True)
        return [_failure_finding(error)]


class RuleRunner:
    """
    Executes rules over one ProjectSnapshot and merges their findings.

    Rules are independent: with workers > 1 they run on a thread pool over the
    shared read-only snapshot. Results are always merged in registry order.
    """

    def __init__(self, workers: int = 1, progress_callback: Optional[ProgressCallback] = None):
        self.workers = max(1, int(workers or 1))
        self.progress_callback = progress_callback

    def run(self, snapshot: ProjectSnapshot, rules: Iterable[Rule]) -> ValidationReport:
        rules = list(rules)
        total = len(rules)
        logger.info("Running %d rules with %d worker(s)", total, self.workers)

        if self.workers == 1 or total <= 1:
            results = []
            for i, rule in enumerate(rules):
                results.append(_worker_run_rule(rule, snapshot))
                self._progress(i + 1, total, rule.name)
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                futures = [executor.submit(_worker_run_rule, rule, snapshot) for rule in rules]
                results = []
                for i, (rule, future) in enumerate(zip(rules, futures)):
                    results.append(future.result())
                    self._progress(i + 1, total, rule.name)

        findings: List[Finding] = []
        for rule, rule_findings in zip(rules, results):
            logger.debug("Rule %s produced %d findings", rule.name, len(rule_findings))
            findings.extend(rule_findings)

        return ValidationReport(
            findings=findings,
            rules_run=[rule.name for rule in rules],
            files_checked=snapshot.files_checked,
        )

    def _progress(self, done: int, total: int, name: str) -> None:
        if self.progress_callback:
            self.progress_callback(done, total, name)
