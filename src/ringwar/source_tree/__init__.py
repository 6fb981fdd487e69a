"""Source tree traversal.

This module provides classes for enumerating the regular files below the
directories that are packed into an archive.
"""

from .file_identifier import FileIdentifier
from .source_node import SourceNode
from .source_tree import SourceTree

__all__ = ["FileIdentifier", "SourceNode", "SourceTree"]
