from abc import ABC, abstractmethod
from typing import Sequence, Union

from ringwar.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for archive exclusion rules.

    Rules decide whether a file is left out of the archive. They are evaluated
    against the file's archive-relative path (for example
    ``WEB-INF/classes/app/core.py``), never against its content. Loading rules
    from files and adding individual rules are optional capabilities that
    depend on the rule type.

    Example:
        >>> from ringwar.exclusion_rules.regex_rules import RegexExclusionRules
        >>> rules = RegexExclusionRules([r"\\.scss$"])
        >>> rules.exclude("css/site.scss")
        True
        >>> rules.exclude("css/site.css")
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given archive path should be excluded.

        Args:
            path (str): The archive-relative path to check, using forward slashes.

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load and parse exclusion rules from one or more files.

        Args:
            rules_files: Path to a file or sequence of paths containing exclusion rules.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
            FileNotFoundError: If any rules file does not exist (for file-supporting rule types).
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Args:
            rule (str): The exclusion rule to add. The format depends on the specific
                implementation (a regular expression, a gitignore pattern, ...).

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")

    def has_rules(self) -> bool:
        """Return True if this rule set can exclude anything at all."""
        return True
