from collections import Counter
from typing import Optional, Dict, Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

SEVERITIES = ("CRITICAL", "WARNING", "INFO")


class Finding(BaseModel):
    """
    A single rule violation produced by one of the checker rules.

    `file_path` is relative to the working directory ('.' for findings
    about the project as a whole). Instances are immutable and compare by value.
    """
    model_config = ConfigDict(frozen=True)

    file_path: str
    line: Optional[int] = None
    message: str
    context: Optional[str] = None
    suggestion: Optional[str] = None

    # Classification
    rule: str = ""  # e.g. 'bem', 'document', 'styles'
    code: str = ""  # e.g. 'INVALID_BEM_CLASS', 'DUPLICATE_TITLE'
    severity: str = "CRITICAL"  # 'CRITICAL', 'WARNING', 'INFO'
    category: str = ""  # e.g. 'BEM', 'HTML', 'STYLES', 'STRUCTURE'

    @field_validator('severity', mode='before')
    @classmethod
    def normalize_severity(cls, v: Any) -> str:
        """Accepts lowercase severities and rejects unknown ones."""
        value = str(v).upper()
        if value not in SEVERITIES:
            raise ValueError(f"Unknown severity: {v}")
        return value

    @field_validator('line', mode='before')
    @classmethod
    def drop_zero_line(cls, v: Any) -> Optional[int]:
        """Line numbers are 1-based; anything below 1 means 'unknown'."""
        if v is None:
            return None
        v = int(v)
        return v if v > 0 else None

    @field_validator('context', mode='before')
    @classmethod
    def trim_context(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @property
    def location(self) -> str:
        """'file:line' or just 'file' when the line is unknown."""
        return f"{self.file_path}:{self.line}" if self.line else self.file_path


class ValidationReport(BaseModel):
    """
    Aggregated result of one validation run.
    Holds the findings in run order and derives the grouped views from them.
    """
    findings: List[Finding] = Field(default_factory=list)
    rules_run: List[str] = Field(default_factory=list)
    files_checked: int = 0

    @property
    def passed(self) -> bool:
        return not self.findings

    @property
    def total(self) -> int:
        return len(self.findings)

    def by_file(self) -> Dict[str, List[Finding]]:
        """Groups findings per file, files in order of first appearance."""
        grouped: Dict[str, List[Finding]] = {}
        for finding in self.findings:
            grouped.setdefault(finding.file_path, []).append(finding)
        return grouped

    def by_category(self) -> Dict[str, List[Finding]]:
        grouped: Dict[str, List[Finding]] = {}
        for finding in self.findings:
            grouped.setdefault(finding.category or finding.rule, []).append(finding)
        return grouped

    def severity_counts(self) -> Dict[str, int]:
        counts = Counter(f.severity for f in self.findings)
        return {sev: counts.get(sev, 0) for sev in SEVERITIES}

    def summary(self) -> Dict[str, Any]:
        """Compact dict used by the text renderer and the exports."""
        return {
            "files_checked": self.files_checked,
            "rules_run": len(self.rules_run),
            "total_findings": self.total,
            "files_with_findings": len(self.by_file()),
            "severity": self.severity_counts(),
            "categories": {cat: len(items) for cat, items in self.by_category().items()},
            "passed": self.passed,
        }
