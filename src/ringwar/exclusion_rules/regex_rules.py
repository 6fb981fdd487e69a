"""Exclusion rules built from regular expressions."""

import re
from typing import List, Pattern, Sequence, Union

from .base_rules import BaseExclusionRules


class RegexExclusionRules(BaseExclusionRules):
    """Exclusion rules matching archive paths against regular expressions.

    These back the ``war-exclusions`` project setting. A path is excluded when
    any expression is found anywhere in it (``re.search``), so anchors must be
    written explicitly: ``r"\\.scss$"`` excludes Sass sources wherever they
    live, ``r"^WEB-INF/classes/dev/"`` only a single subtree.

    Attributes:
        patterns (List[Pattern[str]]): Compiled expressions, in the order added.

    Example:
        >>> rules = RegexExclusionRules([r"\\.scss$", re.compile(r"^tmp/")])
        >>> rules.exclude("css/site.scss")
        True
        >>> rules.exclude("tmp/scratch.txt")
        True
        >>> rules.exclude("WEB-INF/classes/tmp/a.txt")
        False
    """

    def __init__(self, patterns: Sequence[Union[str, Pattern[str]]] = ()) -> None:
        """Initialize the rules.

        Args:
            patterns: Regular expressions, either as strings or precompiled.

        Raises:
            re.error: If a string pattern is not a valid regular expression.
        """
        self.patterns: List[Pattern[str]] = []
        for pattern in patterns:
            self._add(pattern)

    def _add(self, pattern: Union[str, Pattern[str]]) -> None:
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        self.patterns.append(pattern)

    def exclude(self, path: str) -> bool:
        return any(pattern.search(path) for pattern in self.patterns)

    def add_rule(self, rule: str) -> None:
        self._add(rule)

    def has_rules(self) -> bool:
        return bool(self.patterns)
