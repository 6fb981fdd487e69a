"""Construction of the web.xml document tree from the build configuration."""

from typing import Iterator, List

from ringwar.config import (
    DEFAULT_RES_AUTH,
    DEFAULT_RES_SHARING_SCOPE,
    BuildConfig,
    FilterMapping,
    FilterSpec,
    ResourceRef,
    ServletMapping,
    ServletSpec,
)
from ringwar.descriptor.descriptor_node import DescriptorNode, element, leaf

ROOT_TAG = "web-app"

# Top-level element order of web-app; never changed after construction
CATEGORY_ORDER = ("filter", "filter-mapping", "listener", "servlet", "servlet-mapping", "resource-ref")


def make_filter(spec: FilterSpec) -> DescriptorNode:
    return element("filter", leaf("filter-name", spec.name), leaf("filter-class", spec.class_name))


def make_filter_mapping(mapping: FilterMapping) -> DescriptorNode:
    return element("filter-mapping", leaf("filter-name", mapping.name), leaf("url-pattern", mapping.url_pattern))


def make_listener(class_name: str) -> DescriptorNode:
    return element("listener", leaf("listener-class", class_name))


def make_servlet(spec: ServletSpec) -> DescriptorNode:
    return element(
        "servlet",
        leaf("servlet-name", spec.name),
        leaf("servlet-class", spec.class_name),
        # false, like null, leaves the element out
        leaf("load-on-startup", None if spec.load_on_startup is False else spec.load_on_startup),
    )


def make_servlet_mapping(mapping: ServletMapping) -> DescriptorNode:
    return element(
        "servlet-mapping", leaf("servlet-name", mapping.name), leaf("url-pattern", mapping.url_pattern)
    )


def make_resource_ref(ref: ResourceRef) -> DescriptorNode:
    return element(
        "resource-ref",
        leaf("res-ref-name", ref.name),
        leaf("res-type", ref.type),
        leaf("res-auth", ref.auth if ref.auth is not None else DEFAULT_RES_AUTH),
        leaf("res-sharing-scope", ref.scope if ref.scope is not None else DEFAULT_RES_SHARING_SCOPE),
    )


def _category_nodes(config: BuildConfig) -> Iterator[DescriptorNode]:
    webxml = config.webxml

    yield from (make_filter(f) for f in webxml.filters)
    yield from (make_filter_mapping(m) for m in webxml.filter_mappings)
    yield from (make_listener(listener) for listener in webxml.listeners)

    servlets: List[ServletSpec] = list(webxml.servlets)
    servlets.append(ServletSpec(config.servlet_name, config.servlet_class))
    yield from (make_servlet(s) for s in servlets)

    mappings: List[ServletMapping] = list(webxml.servlet_mappings)
    mappings.append(ServletMapping(config.servlet_name, config.url_pattern))
    yield from (make_servlet_mapping(m) for m in mappings)

    yield from (make_resource_ref(r) for r in webxml.resource_refs)


def build_descriptor(config: BuildConfig) -> DescriptorNode:
    """Build the unpruned web.xml tree for a build.

    Top-level elements are grouped by category in the order of
    ``CATEGORY_ORDER``; categories without records produce nothing. The
    synthesized servlet and its mapping are appended after any configured
    ones. Optional values left unset in the configuration stay in the tree
    as absent leaves until :func:`ringwar.descriptor.pruning.prune` runs.

    Args:
        config: The resolved build configuration.

    Returns:
        The ``web-app`` root node.

    Example:
        >>> from ringwar.config import BuildConfig
        >>> config = BuildConfig.from_mapping(
        ...     {"name": "myapp", "version": "1.0", "ring": {"handler": "myapp.core/handler"}}
        ... )
        >>> [node.name for node in build_descriptor(config).children]
        ['servlet', 'servlet-mapping']
    """
    return element(ROOT_TAG, *_category_nodes(config))
