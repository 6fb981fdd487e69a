"""Web application archive assembly.

This package builds servlet-container WAR files from a project's compiled
output, source and resource trees, together with a generated web.xml
deployment descriptor.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("ringwar")
except PackageNotFoundError:
    __version__ = "unknown"
