"""Built-in exclusion of editor lock and backup files."""

import posixpath
import re

from .base_rules import BaseExclusionRules

# Emacs lock files (".#name") and auto-save files ("#name#")
LOCK_FILE_PATTERN = re.compile(r"^\.?#")

# Backup files written by Emacs, Vim and friends ("name~")
BACKUP_FILE_PATTERN = re.compile(r"~$")


class EditorArtifactExclusionRules(BaseExclusionRules):
    """Exclude editor lock, auto-save and backup files.

    Only the base name of the path is examined. These rules are always active
    and cannot be extended.

    Example:
        >>> rules = EditorArtifactExclusionRules()
        >>> rules.exclude("WEB-INF/classes/app/.#core.py")
        True
        >>> rules.exclude("#notes.txt#")
        True
        >>> rules.exclude("index.html~")
        True
        >>> rules.exclude("css/a#b.css")
        False
    """

    def exclude(self, path: str) -> bool:
        name = posixpath.basename(path)
        return bool(LOCK_FILE_PATTERN.search(name) or BACKUP_FILE_PATTERN.search(name))
