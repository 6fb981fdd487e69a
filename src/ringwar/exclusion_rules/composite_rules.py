"""Composite exclusion rules for combining multiple rule types."""

from typing import List, Sequence

from .base_rules import BaseExclusionRules


class CompositeExclusionRules(BaseExclusionRules):
    """Composite exclusion rules that combine multiple rule types.

    A path is excluded if ANY of the constituent rules excludes it, so the
    order of the rules never changes the outcome.

    Attributes:
        rules (List[BaseExclusionRules]): List of constituent exclusion rules.

    Example:
        >>> from ringwar.exclusion_rules.editor_rules import EditorArtifactExclusionRules
        >>> from ringwar.exclusion_rules.regex_rules import RegexExclusionRules
        >>> composite = CompositeExclusionRules(
        ...     [EditorArtifactExclusionRules(), RegexExclusionRules([r"\\.log$"])]
        ... )
        >>> composite.exclude("index.html~")
        True
        >>> composite.exclude("logs/app.log")
        True
        >>> composite.exclude("index.html")
        False
    """

    def __init__(self, rules: Sequence[BaseExclusionRules]):
        """Initialize composite exclusion rules.

        Args:
            rules: Sequence of exclusion rules to combine.

        Raises:
            ValueError: If rules list is empty.
            TypeError: If any rule doesn't implement BaseExclusionRules.
        """
        if not rules:
            raise ValueError("At least one exclusion rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseExclusionRules):
                raise TypeError(f"Rule at index {i} must implement BaseExclusionRules, " f"got {type(rule)}")

        self.rules: List[BaseExclusionRules] = list(rules)

    def exclude(self, path: str) -> bool:
        """Check if a path should be excluded by any constituent rule.

        Note:
            Uses short-circuit evaluation: stops checking as soon as any rule
            returns True for exclusion.
        """
        return any(rule.exclude(path) for rule in self.rules)

    def has_rules(self) -> bool:
        return any(rule.has_rules() for rule in self.rules)
