"""Removal of absent branches from a descriptor tree."""

from typing import Optional

from ringwar.descriptor.descriptor_node import DescriptorNode


def prune(node: DescriptorNode) -> Optional[DescriptorNode]:
    """Remove absent nodes from a descriptor tree, in place.

    The walk is post-order: every child of an element is pruned first, and
    the children that turn out to be absent are detached. Surviving siblings
    keep their relative order; nothing is ever reordered. An element stays
    present even if all of its children were removed.

    Args:
        node: Root of the tree (or subtree) to prune.

    Returns:
        The same node, or None if the node itself is absent.

    Example:
        >>> from ringwar.descriptor.descriptor_node import element, leaf
        >>> servlet = element("servlet", leaf("servlet-name", "app"), leaf("load-on-startup", None))
        >>> [child.name for child in prune(servlet).children]
        ['servlet-name']
        >>> prune(leaf("res-type", None)) is None
        True
    """
    if not node.is_element:
        return None if node.value is None else node

    for child in list(node.children):
        if prune(child) is None:
            child.parent = None
    return node
