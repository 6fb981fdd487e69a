"""Exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import PathSpec

from ringwar.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules using .gitignore pattern syntax.

    Used for patterns given on the command line (``-i``) and for ignore files
    (``-e``). Patterns are matched with the pathspec library against the
    archive path, so a pattern such as ``WEB-INF/classes/**/*.orig`` only
    applies to the classes tree while ``*.orig`` applies everywhere.

    Later patterns may override earlier ones, in particular negations (``!``).

    Attributes:
        spec (PathSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.orig")
        >>> rules.exclude("WEB-INF/classes/app/core.py.orig")
        True
        >>> rules.add_rule("!keep.orig")
        >>> rules.exclude("keep.orig")
        False
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize GitIgnoreExclusionRules with patterns from specified files.

        Args:
            rules_files: Path(s) to the file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._lines: List[str] = []
        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)

        if rules_files is not None:
            self.load_rules(rules_files)

    def _extend(self, lines: Sequence[str]) -> None:
        # PathSpec compiles on construction; appending to its patterns is not seen by match_file
        self._lines.extend(lines)
        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)

    def exclude(self, path: str) -> bool:
        return self.spec.match_file(path)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load and combine .gitignore patterns from one or more files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r") as f:
                self._extend(f.read().splitlines())

    def add_rule(self, rule: str) -> None:
        """Add a single .gitignore pattern.

        Args:
            rule: A single .gitignore pattern (e.g. "*.orig", "tmp/", "!keep.orig").
        """
        self._extend([rule])

    def has_rules(self) -> bool:
        # Comments and blank lines compile to patterns that match nothing
        return any(pattern.include is not None for pattern in self.spec.patterns)
