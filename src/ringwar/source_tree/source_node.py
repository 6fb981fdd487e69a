"""Node representation for entries of a source tree."""

from typing import Any, Optional

from anytree import Node


class SourceNode(Node):  # type: ignore
    """Node class representing a file or directory in a source tree.

    Extends anytree.Node with a flag telling directories from regular files.

    Attributes:
        name (str): The base name of the file or directory.
        parent (Optional[SourceNode]): The parent node in the tree.
        is_dir (bool): True if this node represents a directory.

    Example:
        >>> root = SourceNode("classes", is_dir=True)
        >>> child = SourceNode("core.class", parent=root)
        >>> child.is_dir
        False
        >>> [node.name for node in root.children]
        ['core.class']
    """

    def __init__(
        self,
        name: str,
        parent: Optional["SourceNode"] = None,
        is_dir: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir
