from __future__ import annotations

from typing import Any, Iterable, List, Optional

from .base import Rule, TradeContext


class RuleRegistry:
    def __init__(self, rules: Iterable[Rule]) -> None:
        self._rules: List[Rule] = list(rules)

    @property
    def rules(self) -> List[Rule]:
        """Enabled rules, lowest priority first (ties keep registration order)."""
        return sorted((r for r in self._rules if r.enabled), key=lambda r: r.priority)

    def register(self, rule: Rule) -> None:
        if any(r.rule_id == rule.rule_id for r in self._rules):
            raise ValueError(f"duplicate rule_id: {rule.rule_id}")
        self._rules.append(rule)

    def validate(self, proposal: Any, ctx: TradeContext) -> None:
        for rule in self.rules:
            rule.validate(proposal, ctx)


_DEFAULT_REGISTRY: Optional[RuleRegistry] = None


def get_default_registry() -> RuleRegistry:
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        from .builtin import BUILTIN_RULES

        _DEFAULT_REGISTRY = RuleRegistry(BUILTIN_RULES)
    return _DEFAULT_REGISTRY


def validate_all(proposal: Any, ctx: TradeContext, registry: Optional[RuleRegistry] = None) -> None:
    (registry or get_default_registry()).validate(proposal, ctx)
