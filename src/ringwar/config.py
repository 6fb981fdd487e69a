"""Project configuration for WAR builds.

The project file is read once and resolved into an immutable BuildConfig in
which every default (archive name, servlet name and class, URL pattern,
filesystem roots) has already been applied. Nothing downstream re-derives a
default on its own.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Pattern, Sequence, Tuple

import yaml

from ringwar.exceptions import ConfigError
from ringwar.types import PathType

DEFAULT_CONFIG_FILE = "ringwar.yaml"
DEFAULT_URL_PATTERN = "/*"
DEFAULT_RES_AUTH = "Container"
DEFAULT_RES_SHARING_SCOPE = "Shareable"

# Directory defaults, relative to the project root
DEFAULT_TARGET_DIR = "target"
DEFAULT_COMPILE_PATH = "target/classes"
DEFAULT_SOURCE_PATH = "src"
DEFAULT_RESOURCES_PATH = "resources"
DEFAULT_WAR_RESOURCES_PATH = "war-resources"


@dataclass(frozen=True)
class FilterSpec:
    name: Optional[str]
    class_name: Optional[str]


@dataclass(frozen=True)
class FilterMapping:
    name: Optional[str]
    url_pattern: Optional[str]


@dataclass(frozen=True)
class ServletSpec:
    name: Optional[str]
    class_name: Optional[str]
    load_on_startup: Optional[Any] = None


@dataclass(frozen=True)
class ServletMapping:
    name: Optional[str]
    url_pattern: Optional[str]


@dataclass(frozen=True)
class ResourceRef:
    """A resource-ref record; auth and scope stay None when not configured."""

    name: Optional[str]
    type: Optional[str]
    auth: Optional[str] = None
    scope: Optional[str] = None


@dataclass(frozen=True)
class WebXmlConfig:
    """User customization of the deployment descriptor, one tuple per category."""

    filters: Tuple[FilterSpec, ...] = ()
    filter_mappings: Tuple[FilterMapping, ...] = ()
    listeners: Tuple[str, ...] = ()
    servlets: Tuple[ServletSpec, ...] = ()
    servlet_mappings: Tuple[ServletMapping, ...] = ()
    resource_refs: Tuple[ResourceRef, ...] = ()

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "WebXmlConfig":
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError("'webxml' must be a mapping")
        return cls(
            filters=tuple(FilterSpec(r.get("name"), r.get("class")) for r in _records(data, "filters")),
            filter_mappings=tuple(
                FilterMapping(r.get("name"), r.get("url-pattern")) for r in _records(data, "filter-mappings")
            ),
            listeners=tuple(_class_names(data, "listeners")),
            servlets=tuple(
                ServletSpec(r.get("name"), r.get("class"), r.get("load-on-startup"))
                for r in _records(data, "servlets")
            ),
            servlet_mappings=tuple(
                ServletMapping(r.get("name"), r.get("url-pattern")) for r in _records(data, "servlet-mappings")
            ),
            resource_refs=tuple(
                ResourceRef(r.get("name"), r.get("type"), r.get("auth"), r.get("scope"))
                for r in _records(data, "resource-refs")
            ),
        )


def _list(data: Mapping[str, Any], key: str) -> Sequence[Any]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _records(data: Mapping[str, Any], key: str) -> Sequence[Mapping[str, Any]]:
    records = _list(data, key)
    for i, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise ConfigError(f"Entry {i} of '{key}' must be a mapping")
    return records


def _class_names(data: Mapping[str, Any], key: str) -> Sequence[str]:
    names = _list(data, key)
    for i, name in enumerate(names):
        if not isinstance(name, str) or not name:
            raise ConfigError(f"Entry {i} of '{key}' must be a class name, got {name!r}")
    return names


def default_war_name(name: str, version: str) -> str:
    """Return the archive name used when none is configured.

    Example:
        >>> default_war_name("myapp", "0.1.0")
        'myapp-0.1.0.war'
    """
    return f"{name}-{version}.war"


def handler_namespace(handler: str) -> str:
    """Return the namespace part of a ``namespace/function`` handler reference.

    Raises:
        ConfigError: If the reference has no namespace.

    Example:
        >>> handler_namespace("myapp.core/handler")
        'myapp.core'
    """
    namespace, sep, function = handler.rpartition("/")
    if not sep or not namespace or not function:
        raise ConfigError(f"Handler must be given as 'namespace/function', got {handler!r}")
    return namespace


def default_servlet_class(handler: str) -> str:
    """Derive the adapter servlet class from a handler reference.

    The last segment of the handler's namespace is replaced with ``servlet``;
    dashes become underscores so the result is a valid class name.

    Example:
        >>> default_servlet_class("myapp.core/handler")
        'myapp.servlet'
        >>> default_servlet_class("my-app.web.routes/app")
        'my_app.web.servlet'
    """
    parts = handler_namespace(handler).replace("-", "_").split(".")
    return ".".join(parts[:-1] + ["servlet"])


def default_servlet_name(handler: str) -> str:
    """
    Example:
        >>> default_servlet_name("myapp.core/handler")
        'myapp.core/handler servlet'
    """
    return f"{handler} servlet"


@dataclass(frozen=True)
class BuildConfig:
    """Fully resolved, immutable configuration of one WAR build.

    Build it with :meth:`from_mapping` or :func:`load_config`; both apply every
    default once, up front.

    Attributes:
        name: Project name.
        version: Project version.
        handler: Request handler reference (``namespace/function``), if any.
        war_name: Archive file name.
        war_exclusions: Regular expressions; matching archive paths are omitted.
        webxml: User customization of the deployment descriptor.
        servlet_name: Name of the synthesized servlet and its mapping.
        servlet_class: Class of the synthesized servlet.
        url_pattern: URL pattern of the synthesized servlet mapping.
        servlet_path_info: Whether the adapter passes path-info and context to the handler.
        project_root: Directory relative paths are resolved against.
        target_dir: Directory the archive is written to.
        compile_path: Compiled output root.
        source_path: Source root.
        resources_path: Resource root.
        war_resources_path: Static resources root, mounted at the archive root.
        compile_command: Command producing the compiled output, if any.
    """

    name: str
    version: str
    handler: Optional[str]
    war_name: str
    servlet_name: str
    servlet_class: str
    url_pattern: str = DEFAULT_URL_PATTERN
    war_exclusions: Tuple[Pattern[str], ...] = ()
    webxml: WebXmlConfig = field(default_factory=WebXmlConfig)
    servlet_path_info: bool = True
    project_root: Path = field(default_factory=Path)
    target_dir: Path = Path(DEFAULT_TARGET_DIR)
    compile_path: Path = Path(DEFAULT_COMPILE_PATH)
    source_path: Optional[Path] = Path(DEFAULT_SOURCE_PATH)
    resources_path: Optional[Path] = Path(DEFAULT_RESOURCES_PATH)
    war_resources_path: Optional[Path] = Path(DEFAULT_WAR_RESOURCES_PATH)
    compile_command: Optional[Tuple[str, ...]] = None

    @property
    def servlet_namespace(self) -> str:
        """Namespace the adapter servlet is generated in.

        Example:
            >>> config = BuildConfig.from_mapping(
            ...     {"name": "a", "version": "1", "ring": {"handler": "my-app.core/handler"}}
            ... )
            >>> config.servlet_namespace
            'my-app.servlet'
        """
        return self.servlet_class.replace("_", "-")

    @classmethod
    def from_mapping(cls, project: Mapping[str, Any], base_dir: Optional[PathType] = None) -> "BuildConfig":
        """Resolve a raw project mapping into a BuildConfig.

        Args:
            project: The parsed project file.
            base_dir: Directory relative paths are resolved against. Defaults to
                the current directory.

        Returns:
            The resolved configuration.

        Raises:
            ConfigError: If required values are missing or malformed.
        """
        if not isinstance(project, Mapping):
            raise ConfigError("Project configuration must be a mapping")

        name = project.get("name")
        version = project.get("version")
        if not name:
            raise ConfigError("Project 'name' is required")
        if version is None or version == "":
            raise ConfigError("Project 'version' is required")
        name, version = str(name), str(version)

        ring = project.get("ring") or {}
        if not isinstance(ring, Mapping):
            raise ConfigError("'ring' must be a mapping")

        handler = ring.get("handler")
        handler = str(handler) if handler is not None else None
        servlet_name = ring.get("servlet-name")
        servlet_class = ring.get("servlet-class")
        if handler is None and (servlet_name is None or servlet_class is None):
            raise ConfigError("'ring.handler' is required unless both 'servlet-name' and 'servlet-class' are set")
        if servlet_name is None:
            servlet_name = default_servlet_name(handler)  # type: ignore[arg-type]
        if servlet_class is None:
            servlet_class = default_servlet_class(handler)  # type: ignore[arg-type]

        servlet_path_info = ring.get("servlet-path-info?", True)
        if not isinstance(servlet_path_info, bool):
            raise ConfigError(f"'ring.servlet-path-info?' must be true or false, got {servlet_path_info!r}")

        try:
            exclusions = tuple(re.compile(str(p)) for p in _list(ring, "war-exclusions"))
        except re.error as e:
            raise ConfigError(f"Invalid 'war-exclusions' pattern: {e}") from e

        root = Path(base_dir) if base_dir is not None else Path()

        def resolve(key: str, default: Optional[str]) -> Optional[Path]:
            value = project.get(key, default)
            if value is None:
                return None
            return root / str(value)

        target_dir = resolve("target-dir", DEFAULT_TARGET_DIR)
        compile_path = resolve("compile-path", DEFAULT_COMPILE_PATH)
        if target_dir is None or compile_path is None:
            raise ConfigError("'target-dir' and 'compile-path' cannot be null")

        compile_command = project.get("compile-command")
        if isinstance(compile_command, str):
            compile_command = (compile_command,)
        elif compile_command is not None:
            compile_command = tuple(str(arg) for arg in compile_command)

        return cls(
            name=name,
            version=version,
            handler=handler,
            war_name=str(ring.get("war-name") or default_war_name(name, version)),
            servlet_name=str(servlet_name),
            servlet_class=str(servlet_class),
            url_pattern=str(ring.get("url-pattern") or DEFAULT_URL_PATTERN),
            war_exclusions=exclusions,
            webxml=WebXmlConfig.from_mapping(ring.get("webxml")),
            servlet_path_info=servlet_path_info,
            project_root=root,
            target_dir=target_dir,
            compile_path=compile_path,
            source_path=resolve("source-path", DEFAULT_SOURCE_PATH),
            resources_path=resolve("resources-path", DEFAULT_RESOURCES_PATH),
            war_resources_path=resolve("war-resources-path", DEFAULT_WAR_RESOURCES_PATH),
            compile_command=compile_command,
        )


def load_config(path: PathType = DEFAULT_CONFIG_FILE) -> BuildConfig:
    """Load and resolve a YAML project file.

    Relative paths in the file are resolved against the file's directory.

    Raises:
        ConfigError: If the file cannot be read or parsed, or is invalid.
    """
    config_path = Path(path)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read project file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse project file {config_path}: {e}") from e

    return BuildConfig.from_mapping(data or {}, config_path.parent)
