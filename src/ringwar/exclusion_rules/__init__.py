"""Exclusion rules for filtering files out of the archive."""

from .base_rules import BaseExclusionRules
from .composite_rules import CompositeExclusionRules
from .editor_rules import EditorArtifactExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .regex_rules import RegexExclusionRules
from .war_rules import build_exclusion_rules, should_skip

__all__ = [
    "BaseExclusionRules",
    "CompositeExclusionRules",
    "EditorArtifactExclusionRules",
    "GitIgnoreExclusionRules",
    "RegexExclusionRules",
    "build_exclusion_rules",
    "should_skip",
]
