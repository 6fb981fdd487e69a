"""JAR manifest for WAR archives."""

import getpass
import platform
from typing import Optional

from ringwar import __version__

MANIFEST_PATH = "META-INF/MANIFEST.MF"
MANIFEST_VERSION = "1.0"
CREATED_BY = f"ringwar {__version__}"


def current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        # No login name in the environment or password database
        return "unknown"


def make_manifest(built_by: Optional[str] = None, build_python: Optional[str] = None) -> str:
    """Render the manifest written as the first entry of every archive.

    Header lines end with CRLF and the main section is terminated by an empty
    line, as the JAR file specification requires.

    Args:
        built_by: Value of ``Built-By``. Defaults to the current user name.
        build_python: Value of ``Build-Python``. Defaults to the running
            interpreter's version.

    Example:
        >>> print(make_manifest("alice", "3.12.1").replace("\\r\\n", "\\n"), end="")  # doctest: +ELLIPSIS
        Manifest-Version: 1.0
        Created-By: ringwar ...
        Built-By: alice
        Build-Python: 3.12.1
        <BLANKLINE>
    """
    headers = [
        ("Manifest-Version", MANIFEST_VERSION),
        ("Created-By", CREATED_BY),
        ("Built-By", built_by if built_by is not None else current_user()),
        ("Build-Python", build_python if build_python is not None else platform.python_version()),
    ]
    return "".join(f"{key}: {value}\r\n" for key, value in headers) + "\r\n"
