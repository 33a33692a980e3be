"""Rule engine attaching markers to declarations from configuration."""

from dataclasses import dataclass, field, replace
from typing import List, Dict, Any, Optional, Pattern
import re
import yaml
from pathlib import Path

from ffisymbols.ir import Declaration, DeclarationKind, Marker, BlockingMarker, marker_from_dict


@dataclass
class MarkerRule:
    """A single marker rule.

    ``pattern`` is matched in full against the declaration's default name.
    """

    rule_id: str
    pattern: str
    marker: Marker
    applies_to: List[str] = field(default_factory=lambda: [k.value for k in DeclarationKind])
    description: str = ""
    case_sensitive: bool = True

    _compiled_pattern: Optional[Pattern] = None

    def __post_init__(self) -> None:
        """Compile the regex pattern."""
        flags = 0 if self.case_sensitive else re.IGNORECASE
        self._compiled_pattern = re.compile(self.pattern, flags)

    def matches(self, declaration: Declaration) -> bool:
        """Check whether the rule applies to a declaration."""
        if declaration.kind.value not in self.applies_to:
            return False
        return self._compiled_pattern.fullmatch(declaration.name) is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarkerRule":
        """Create rule from dictionary."""
        data = data.copy()
        data["marker"] = marker_from_dict(data["marker"])
        if "applies_to" in data:
            data["applies_to"] = [kind.upper() for kind in data["applies_to"]]
        return cls(**data)


class MarkerRuleEngine:
    """Engine for managing and applying marker rules."""

    def __init__(self) -> None:
        self.rules: List[MarkerRule] = []

    def add_rule(self, rule: MarkerRule) -> None:
        """Add a rule to the engine."""
        self.rules.append(rule)

    def add_blocking_names(self, names: List[str]) -> None:
        """Mark the named functions as blocking."""
        for name in names:
            self.add_rule(MarkerRule(
                rule_id=f"blocking:{name}",
                pattern=re.escape(name),
                marker=BlockingMarker(),
                applies_to=[DeclarationKind.FUNCTION.value]
            ))

    def load_rules_from_yaml(self, yaml_path: Path) -> None:
        """Load rules from a YAML file."""
        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}

        rules_data = data.get("rules", [])
        for rule_dict in rules_data:
            rule = MarkerRule.from_dict(rule_dict)
            self.add_rule(rule)

    def apply(self, declaration: Declaration) -> Declaration:
        """Get the declaration with rule markers appended.

        Rule markers follow the source markers, so a marker written in the
        source is seen first. The input declaration is left untouched.
        """
        extra = [rule.marker for rule in self.rules if rule.matches(declaration)]
        if not extra:
            return declaration
        return replace(declaration, markers=declaration.markers + tuple(extra))

    def apply_all(self, declarations: List[Declaration]) -> List[Declaration]:
        """Apply rules to each declaration, keeping order."""
        return [self.apply(declaration) for declaration in declarations]

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about loaded rules."""
        by_kind: Dict[str, int] = {}
        for rule in self.rules:
            by_kind[rule.marker.kind.value] = by_kind.get(rule.marker.kind.value, 0) + 1
        return {
            "total_rules": len(self.rules),
            "by_marker": by_kind
        }


def create_default_engine(
    rule_files: Optional[List[str]] = None,
    blocking: Optional[List[str]] = None
) -> MarkerRuleEngine:
    """Create a rule engine from rule files and blocking function names."""
    engine = MarkerRuleEngine()
    for rule_file in rule_files or []:
        engine.load_rules_from_yaml(Path(rule_file))
    engine.add_blocking_names(blocking or [])
    return engine
