"""Enumeration of the regular files below a source root.

This module provides the SourceTree class, which builds a tree of the files
and directories below one of the project's source roots and yields its regular
files in a deterministic order.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, Optional, Set, Tuple

from ringwar.source_tree.file_identifier import FileIdentifier
from ringwar.source_tree.source_node import SourceNode
from ringwar.types import PathType

logger = logging.getLogger(__name__)


class SourceTree:
    """A tree representation of one source root.

    The tree is rebuilt from disk on every iteration. Children of every
    directory are sorted by name, so iterating twice over an unchanged
    directory yields the same files in the same order.

    A root that does not exist is treated as an empty tree: it contributes no
    files and is not an error. Any other filesystem error while listing a
    directory propagates.

    Symbolic Link Behavior:
        Symbolic links are followed by default, so a linked directory
        contributes its files as if they were copied in place. A link that
        leads back to one of its own ancestors is skipped. With
        follow_symlinks=False, symlinks are left out entirely.

    Attributes:
        root_path (Path): The root directory.
        follow_symlinks (bool): Whether to follow symbolic links during traversal.

    Example:
        >>> tree = SourceTree("resources")  # doctest: +SKIP
        >>> for abs_path, rel_path in tree.iterate_files():  # doctest: +SKIP
        ...     print(rel_path)
        config.edn
        public/css/site.css
    """

    def __init__(self, root_path: PathType, follow_symlinks: bool = True) -> None:
        self.root_path = Path(root_path)
        self.follow_symlinks = follow_symlinks

    def _build_tree(self) -> Optional[SourceNode]:
        if not self.root_path.exists():
            logger.debug("Source root %s does not exist, skipping", self.root_path)
            return None
        if not self.root_path.is_dir():
            raise NotADirectoryError(f"Source root is not a directory: {self.root_path}")

        visited: Set[FileIdentifier] = set()
        return self._create_node(self.root_path, visited)

    def _create_node(
        self, path: Path, visited: Set[FileIdentifier], parent: Optional[SourceNode] = None
    ) -> Optional[SourceNode]:
        """Recursively create tree nodes for a path and its children."""
        is_symlink = path.is_symlink()
        if is_symlink and not self.follow_symlinks:
            return None

        if not path.is_dir():
            if not path.is_file():
                # Dangling links, sockets, fifos
                return None
            return SourceNode(path.name, parent=parent)

        file_id = FileIdentifier.from_stat(path.stat())
        if file_id in visited:
            logger.debug("Symlink loop detected at %s, skipping", path)
            return None

        node = SourceNode(path.name, parent=parent, is_dir=True)
        visited.add(file_id)
        for child in sorted(os.listdir(path)):
            self._create_node(path / child, visited, parent=node)
        # Allow the same directory to be reached again through an unrelated branch
        visited.remove(file_id)

        return node

    def iterate_files(self) -> Iterator[Tuple[Path, str]]:
        """Iterate over all regular files in the tree.

        Files are yielded depth first with each directory's entries sorted by
        name. Directories themselves are never yielded.

        Yields:
            Pairs of (path on disk, path relative to the root with forward slashes).
        """
        root = self._build_tree()
        if root is not None:
            yield from self._iterate(root, "")

    def _iterate(self, node: SourceNode, current_path: str) -> Iterator[Tuple[Path, str]]:
        if not node.is_dir:
            yield (self.root_path / current_path, current_path)
            return
        for child in node.children:
            child_path = f"{current_path}/{child.name}" if current_path else child.name
            yield from self._iterate(child, child_path)

