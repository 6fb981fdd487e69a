"""Node representation for deployment descriptor documents."""

from typing import Any, Optional

from anytree import Node


class DescriptorNode(Node):  # type: ignore
    """Node of a deployment descriptor tree.

    Extends anytree.Node, whose ``name`` holds the element tag. A node is
    either an element, whose content is its ordered children, or a leaf
    holding a scalar ``value``. A leaf whose value is None is absent: it is
    dropped from the tree by :func:`ringwar.descriptor.pruning.prune` before
    serialization.

    Attributes:
        name (str): The element tag.
        is_element (bool): True for elements, False for value leaves.
        value (Any): Scalar text content of a leaf; None means absent.

    Example:
        >>> servlet = element("servlet", leaf("servlet-name", "app"), leaf("load-on-startup", None))
        >>> [child.name for child in servlet.children]
        ['servlet-name', 'load-on-startup']
        >>> servlet.children[1].is_absent
        True
    """

    def __init__(
        self,
        name: str,
        parent: Optional["DescriptorNode"] = None,
        is_element: bool = True,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.is_element = is_element
        self.value = value

    @property
    def is_absent(self) -> bool:
        return not self.is_element and self.value is None


def element(tag: str, *children: DescriptorNode) -> DescriptorNode:
    """Create an element node and attach ``children`` to it in order."""
    node = DescriptorNode(tag, is_element=True)
    for child in children:
        child.parent = node
    return node


def leaf(tag: str, value: Any) -> DescriptorNode:
    """Create a value leaf; a None value makes the leaf absent."""
    return DescriptorNode(tag, is_element=False, value=value)
