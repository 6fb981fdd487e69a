"""Deployment descriptor (web.xml) generation."""

from typing import Optional

from ringwar.config import BuildConfig
from ringwar.exceptions import DescriptorError

from .builder import CATEGORY_ORDER, ROOT_TAG, build_descriptor
from .descriptor_node import DescriptorNode, element, leaf
from .pruning import prune
from .xml_writer import serialize


def make_web_xml(config: BuildConfig, indent: Optional[int] = None) -> str:
    """Render the deployment descriptor for a build.

    Args:
        config: The resolved build configuration.
        indent: Optional pretty-printing indentation, see :func:`serialize`.

    Returns:
        The web.xml document text.

    Raises:
        DescriptorError: If the configuration yields a malformed document.
    """
    root = prune(build_descriptor(config))
    if root is None:
        raise DescriptorError("Deployment descriptor is empty")
    return serialize(root, indent=indent)


__all__ = [
    "CATEGORY_ORDER",
    "ROOT_TAG",
    "DescriptorNode",
    "build_descriptor",
    "element",
    "leaf",
    "make_web_xml",
    "prune",
    "serialize",
]
