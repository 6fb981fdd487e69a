"""Mapping of files on disk to paths inside the archive."""

from pathlib import Path

from ringwar.types import PathType

# Mount prefix of the compiled, source and resource trees
CLASSES_PREFIX = "WEB-INF/classes/"

# Mount prefix of the static war-resources tree
ROOT_PREFIX = ""

WEB_XML_PATH = "WEB-INF/web.xml"


def map_path(source_root: PathType, mount_prefix: str, file: PathType) -> str:
    """Compute the archive path of a file.

    The path of ``file`` relative to ``source_root`` is expressed with forward
    slashes, whatever the host separator, and appended to ``mount_prefix``.

    Args:
        source_root: Root directory of the tree the file belongs to.
        mount_prefix: Directory inside the archive the tree is mounted at,
            either empty or ending with a slash.
        file: The file, located under ``source_root``.

    Returns:
        The archive-relative path.

    Raises:
        ValueError: If ``file`` is not located under ``source_root``.

    Example:
        >>> map_path("build/classes", CLASSES_PREFIX, "build/classes/app/core.class")
        'WEB-INF/classes/app/core.class'
        >>> map_path("war-resources", ROOT_PREFIX, "war-resources/css/site.css")
        'css/site.css'
    """
    relative = Path(file).relative_to(Path(source_root))
    return mount_prefix + relative.as_posix()
