"""XML serialization of descriptor trees.

The output is fully determined by the tree: no timestamps, no attribute
reordering, no platform-dependent line endings. Identical configuration
therefore always renders to identical text.
"""

from typing import Any, Iterator, List, Optional
from xml.sax.saxutils import escape as xml_escape

from ringwar.descriptor.descriptor_node import DescriptorNode
from ringwar.exceptions import DescriptorError


def format_value(value: Any) -> str:
    """Convert a leaf value to escaped element text.

    Raises:
        DescriptorError: If the value is not a scalar.

    Example:
        >>> format_value("a < b & c")
        'a &lt; b &amp; c'
        >>> format_value(1)
        '1'
        >>> format_value(True)
        'true'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return xml_escape(str(value))
    raise DescriptorError(f"Descriptor values must be scalars, got {type(value).__name__}: {value!r}")


def _check(node: DescriptorNode) -> None:
    if not node.name or not isinstance(node.name, str):
        raise DescriptorError(f"Descriptor element has an invalid tag: {node.name!r}")
    if node.is_element and node.value is not None:
        raise DescriptorError(f"Element '{node.name}' cannot hold a text value")
    if not node.is_element and node.children:
        raise DescriptorError(f"Value '{node.name}' cannot hold child elements")
    if node.is_absent:
        raise DescriptorError(f"Absent value '{node.name}' must be pruned before serialization")


def _lines(node: DescriptorNode, indent: Optional[int], depth: int) -> Iterator[str]:
    _check(node)
    pad = " " * (indent * depth) if indent else ""
    tag = node.name

    if not node.is_element:
        yield f"{pad}<{tag}>{format_value(node.value)}</{tag}>"
    elif not node.children:
        yield f"{pad}<{tag}/>"
    else:
        yield f"{pad}<{tag}>"
        for child in node.children:
            yield from _lines(child, indent, depth + 1)
        yield f"{pad}</{tag}>"


def serialize(node: DescriptorNode, indent: Optional[int] = None) -> str:
    """Serialize a pruned descriptor tree to XML text.

    Args:
        node: Root of the tree.
        indent: Number of spaces per nesting level. When None (default) the
            document is written on a single line.

    Returns:
        The XML document. Indented output ends with a newline.

    Raises:
        DescriptorError: If the tree is malformed or still holds absent values.

    Example:
        >>> from ringwar.descriptor.descriptor_node import element, leaf
        >>> tree = element("web-app", element("listener", leaf("listener-class", "a.B")))
        >>> serialize(tree)
        '<web-app><listener><listener-class>a.B</listener-class></listener></web-app>'
        >>> print(serialize(tree, indent=2), end="")
        <web-app>
          <listener>
            <listener-class>a.B</listener-class>
          </listener>
        </web-app>
    """
    lines: List[str] = list(_lines(node, indent, 0))
    if indent is None:
        return "".join(lines)
    return "\n".join(lines) + "\n"
