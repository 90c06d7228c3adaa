# src/frontcheck/registry.py
import importlib
import logging
from typing import Dict, Iterable, Iterator, List, Optional

from .rules.base import Rule

logger = logging.getLogger(__name__)

# The default rule set, in run order. Fixed here rather than discovered.
DEFAULT_RULE_MODULES = (
    "frontcheck.rules.structure",
    "frontcheck.rules.document",
    "frontcheck.rules.bem",
    "frontcheck.rules.interactive",
    "frontcheck.rules.forms",
    "frontcheck.rules.images",
    "frontcheck.rules.layout",
    "frontcheck.rules.styles",
    "frontcheck.rules.stylelint",
    "frontcheck.rules.w3c",
)


class RuleRegistry:
    """
    Ordered collection of rules with unique names.
    """

    def __init__(self, rules: Optional[Iterable[Rule]] = None):
        self._rules: Dict[str, Rule] = {}
        for rule in rules or []:
            self.register(rule)

    def register(self, rule: Rule) -> None:
        if rule.name in self._rules:
            raise ValueError(f"Rule '{rule.name}' is already registered")
        self._rules[rule.name] = rule
        logger.debug("Rule registered: %s", rule.name)

    def get(self, name: str) -> Rule:
        try:
            return self._rules[name]
        except KeyError:
            raise KeyError(f"Unknown rule '{name}'. Available: {', '.join(self.names())}") from None

    def names(self) -> List[str]:
        return list(self._rules)

    def select(self, names: Iterable[str]) -> "RuleRegistry":
        """New registry holding only `names`, kept in registry order."""
        wanted = set(names)
        for name in wanted:
            self.get(name)
        return RuleRegistry(rule for rule in self if rule.name in wanted)

    def without(self, *names: str) -> "RuleRegistry":
        return RuleRegistry(rule for rule in self if rule.name not in names)

    def all_codes(self) -> List[str]:
        return sorted({code for rule in self for code in rule.codes})

    def __iter__(self) -> Iterator[Rule]:
        return iter(list(self._rules.values()))

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: str) -> bool:
        return name in self._rules


def load_rules_from_modules(module_names: Iterable[str]) -> List[Rule]:
    """Imports each module and collects the functions listed in its `RULES`."""
    rules = []
    for module_name in module_names:
        module = importlib.import_module(module_name)
        for func in getattr(module, "RULES", []):
            rules.append(Rule.from_function(func))
    return rules


def default_registry() -> RuleRegistry:
    return RuleRegistry(load_rules_from_modules(DEFAULT_RULE_MODULES))
