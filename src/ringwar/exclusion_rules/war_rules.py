"""Exclusion decisions for files about to enter the archive."""

from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from ringwar.types import PathType

from .base_rules import BaseExclusionRules
from .composite_rules import CompositeExclusionRules
from .editor_rules import EditorArtifactExclusionRules
from .regex_rules import RegexExclusionRules

if TYPE_CHECKING:
    from ringwar.config import BuildConfig

_EDITOR_RULES = EditorArtifactExclusionRules()


def should_skip(source_file: PathType, archive_path: str, rules: Optional[BaseExclusionRules] = None) -> bool:
    """Decide whether a file is left out of the archive.

    The file is skipped when its base name marks it as an editor lock or
    backup file, or when its archive path is excluded by ``rules``.

    Args:
        source_file: The file on disk.
        archive_path: The path the file would have inside the archive.
        rules: User-supplied exclusion rules, if any.

    Returns:
        True if the file must not be written.

    Example:
        >>> should_skip("src/.#core.py", "WEB-INF/classes/.#core.py")
        True
        >>> should_skip("src/core.py", "WEB-INF/classes/core.py")
        False
        >>> should_skip("src/core.py", "WEB-INF/classes/core.py", RegexExclusionRules([r"core"]))
        True
    """
    if _EDITOR_RULES.exclude(Path(source_file).name):
        return True
    return rules is not None and rules.exclude(archive_path)


def build_exclusion_rules(
    config: "BuildConfig", extra: Optional[BaseExclusionRules] = None
) -> Optional[BaseExclusionRules]:
    """Assemble the user-supplied exclusion rules for a build.

    Args:
        config: The resolved build configuration; its ``war_exclusions``
            become regular expression rules.
        extra: Additional rules, typically gitignore-style patterns from the
            command line.

    Returns:
        The combined rules, or None when nothing was configured.
    """
    rules: List[BaseExclusionRules] = []
    if config.war_exclusions:
        rules.append(RegexExclusionRules(config.war_exclusions))
    if extra is not None and extra.has_rules():
        rules.append(extra)
    if not rules:
        return None
    return CompositeExclusionRules(rules)
