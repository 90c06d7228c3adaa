# src/frontcheck/rules/base.py
from typing import Callable, List, Optional, Sequence

from ..model import Finding
from ..snapshot import ProjectSnapshot

RuleFunc = Callable[[ProjectSnapshot], List[Finding]]


def rule_spec(name: str, category: str, codes: Sequence[str], description: str = ""):
    """
    Decorator declaring a rule function: its registry name, its report
    category and the issue codes it can return.
    """
    def decorator(func):
        func.rule_name = name
        func.category = category
        func.defined_codes = sorted(codes)
        func.description = description or (func.__doc__ or "").strip().splitlines()[0]
        return func
    return decorator


class Rule:
    """A named, stateless check: (ProjectSnapshot) -> list of findings."""

    def __init__(
            self,
            name: str,
            func: RuleFunc,
            category: str,
            codes: Optional[Sequence[str]] = None,
            description: str = ""
    ):
        self.name = name
        self.func = func
        self.category = category
        self.codes = sorted(codes or [])
        self.description = description

    @classmethod
    def from_function(cls, func: RuleFunc) -> "Rule":
        if not hasattr(func, "rule_name"):
            raise ValueError(f"{func.__name__} is not decorated with @rule_spec")
        return cls(
            name=func.rule_name,
            func=func,
            category=func.category,
            codes=func.defined_codes,
            description=func.description,
        )

    def __call__(self, snapshot: ProjectSnapshot) -> List[Finding]:
        return self.func(snapshot)

    def __repr__(self) -> str:
        return f"Rule({self.name!r})"


class Findings:
    """
    Per-invocation accumulator used inside a rule.
    Fills in the rule name and category so rule code only states the facts.
    """

    def __init__(self, rule: str, category: str):
        self.rule = rule
        self.category = category
        self.items: List[Finding] = []

    def add(
            self,
            code: str,
            file_path: str,
            message: str,
            line: Optional[int] = None,
            context: Optional[str] = None,
            suggestion: Optional[str] = None,
            severity: str = "CRITICAL"
    ) -> Finding:
        finding = Finding(
            file_path=file_path,
            line=line,
            message=message,
            context=context,
            suggestion=suggestion,
            rule=self.rule,
            code=code,
            severity=severity,
            category=self.category,
        )
        self.items.append(finding)
        return finding

    def __len__(self) -> int:
        return len(self.items)

    def as_list(self) -> List[Finding]:
        return list(self.items)
