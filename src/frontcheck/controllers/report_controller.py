import logging
from pathlib import Path
from typing import List

import pandas as pd

from frontcheck.model import Finding, ValidationReport

logger = logging.getLogger(__name__)

SEPARATOR = "─" * 50
EXPORT_COLUMNS = ["File", "Line", "Rule", "Category", "Code", "Severity", "Message", "Context", "Suggestion"]


class ReportController:
    """
    Turns a ValidationReport into the per-file text report and flat exports.
    """

    def __init__(self, report: ValidationReport):
        self.report = report

    # --- TEXT ---

    def _render_finding(self, index: int, finding: Finding) -> List[str]:
        marker = "🔴" if finding.severity == "CRITICAL" else "🟡" if finding.severity == "WARNING" else "🔵"
        lines = [f"   #{index} {marker} {finding.location}", f"      • {finding.message}"]
        if finding.context:
            context = "\n        ".join(finding.context.splitlines())
            lines.append(f"      • Context: {context}")
        if finding.suggestion:
            lines.append(f"      • Suggestion: {finding.suggestion}")
        return lines

    def render_text(self) -> str:
        """Per-file blocks followed by the summary line."""
        out: List[str] = []
        for file_path, findings in self.report.by_file().items():
            out.append(f"\n📁 {file_path}")
            out.append(SEPARATOR)
            for i, finding in enumerate(findings, start=1):
                out.extend(self._render_finding(i, finding))
            out.append(SEPARATOR)
        out.append(self.render_summary())
        return "\n".join(out)

    def render_summary(self) -> str:
        summary = self.report.summary()
        severity = summary["severity"]
        if self.report.passed:
            return (f"\n✅ All checks passed ({summary['rules_run']} rules, "
                    f"{summary['files_checked']} files checked).")
        return (
            f"\n❌ {summary['total_findings']} issue(s) in {summary['files_with_findings']} file(s): "
            f"{severity['CRITICAL']} critical, {severity['WARNING']} warning, {severity['INFO']} info "
            f"({summary['rules_run']} rules, {summary['files_checked']} files checked)."
        )

    # --- EXPORT ---

    def to_dataframe(self) -> pd.DataFrame:
        rows = [
            {
                "File": f.file_path,
                "Line": f.line,
                "Rule": f.rule,
                "Category": f.category,
                "Code": f.code,
                "Severity": f.severity,
                "Message": f.message,
                "Context": f.context or "",
                "Suggestion": f.suggestion or "",
            }
            for f in self.report.findings
        ]
        df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
        return df.astype({"Line": "Int64"})

    def summary_dataframe(self) -> pd.DataFrame:
        df = self.to_dataframe()
        if df.empty:
            return pd.DataFrame(columns=["Category", "Code", "Severity", "Count"])
        return (
            df.groupby(["Category", "Code", "Severity"], sort=True)
            .size()
            .reset_index(name="Count")
            .sort_values(["Category", "Count"], ascending=[True, False])
        )

    def export(self, filename: str) -> Path:
        """Writes the flat findings table to .csv or .xlsx (with a summary sheet)."""
        out_path = Path(filename).expanduser()
        suffix = out_path.suffix.lower()
        if suffix not in (".csv", ".xlsx"):
            raise ValueError(f"Unsupported export format '{suffix or filename}'. Use .csv or .xlsx")

        out_path.parent.mkdir(parents=True, exist_ok=True)
        df = self.to_dataframe()
        if suffix == ".csv":
            df.to_csv(out_path, index=False)
        else:
            with pd.ExcelWriter(out_path, engine='openpyxl') as writer:
                self.summary_dataframe().to_excel(writer, sheet_name="Summary", index=False)
                df.to_excel(writer, sheet_name="Findings", index=False)

        logger.info("Exported %d findings to %s", len(df), out_path)
        return out_path
