"""WAR archive assembly.

This module writes the archive itself: the manifest, the deployment
descriptor, and the files of every configured source tree, in that order.

Write sequence:
    1. Open - create the target directory and the ZIP file
    2. Manifest - META-INF/MANIFEST.MF, always the first entry
    3. Descriptor - WEB-INF/web.xml
    4. Trees - compiled output, sources and resources under WEB-INF/classes/,
       then the static war-resources at the archive root
    5. Close - finalize the ZIP central directory

Any failure aborts the sequence. The ZIP file is always closed, but it is not
removed: an aborted build leaves an incomplete archive on disk.
"""

import logging
import shutil
import time
import types
import zipfile
from pathlib import Path
from typing import List, Optional, Set, Tuple, Type

from ringwar.config import BuildConfig
from ringwar.descriptor import make_web_xml
from ringwar.exceptions import ArchiveWriteError, OutputDirectoryError
from ringwar.exclusion_rules.base_rules import BaseExclusionRules
from ringwar.exclusion_rules.war_rules import should_skip
from ringwar.manifest import MANIFEST_PATH, make_manifest
from ringwar.path_mapper import CLASSES_PREFIX, ROOT_PREFIX, WEB_XML_PATH, map_path
from ringwar.source_tree import SourceTree
from ringwar.types import PathType

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 64 * 1024


class WarWriter:
    """Streaming writer for a single WAR archive.

    Opening the writer creates the archive's directory if needed, opens the
    ZIP file, and writes the manifest as its first entry. Entries are then
    appended in call order; file contents are streamed from disk without
    being loaded into memory.

    Duplicate archive paths are written as-is. Most readers, including
    zipfile, resolve a duplicated name to the last entry written; servlet
    containers are not consistent about it. A warning is logged for each
    duplicate.

    Attributes:
        war_path (Path): Path of the archive being written.
        entry_count (int): Number of entries written so far, manifest included.

    Example:
        >>> with WarWriter("target/app.war") as war:  # doctest: +SKIP
        ...     war.write_str("WEB-INF/web.xml", "<web-app/>")
        ...     war.write_tree("target/classes", "WEB-INF/classes/")
    """

    def __init__(self, war_path: PathType, manifest: Optional[str] = None) -> None:
        """Open the archive and write its manifest.

        Args:
            war_path: Where to write the archive. Its parent directories are created.
            manifest: Manifest text. Defaults to :func:`ringwar.manifest.make_manifest`.

        Raises:
            OutputDirectoryError: If the parent directory cannot be created.
            ArchiveWriteError: If the archive cannot be opened or the manifest written.
        """
        self.war_path = Path(war_path)
        self.entry_count = 0
        self._names: Set[str] = set()
        self._closed = False

        try:
            self.war_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(str(self.war_path.parent)) from e

        try:
            self._zip = zipfile.ZipFile(self.war_path, "w", compression=zipfile.ZIP_DEFLATED)
        except OSError as e:
            raise ArchiveWriteError(str(self.war_path)) from e

        try:
            self.write_str(MANIFEST_PATH, manifest if manifest is not None else make_manifest())
        except ArchiveWriteError:
            self.close()
            raise

    def _register(self, archive_path: str) -> None:
        if self._closed:
            raise ValueError("Cannot write to closed WarWriter")
        if archive_path in self._names:
            logger.warning("Duplicate archive entry %s", archive_path)
        self._names.add(archive_path)

    def write_str(self, archive_path: str, content: str) -> None:
        """Write a text entry, encoded as UTF-8.

        Raises:
            ArchiveWriteError: If the entry cannot be written.
            ValueError: If the writer is closed.
        """
        self._register(archive_path)
        info = zipfile.ZipInfo(archive_path, date_time=time.localtime(time.time())[:6])
        info.compress_type = zipfile.ZIP_DEFLATED
        try:
            self._zip.writestr(info, content.encode("utf-8"))
        except OSError as e:
            raise ArchiveWriteError(archive_path) from e
        self.entry_count += 1
        logger.debug("Added %s", archive_path)

    def write_file(self, archive_path: str, source: PathType) -> None:
        """Stream a file from disk into a new entry.

        Raises:
            ArchiveWriteError: If the file cannot be read or the entry written.
            ValueError: If the writer is closed.
        """
        self._register(archive_path)
        try:
            info = zipfile.ZipInfo.from_file(source, archive_path, strict_timestamps=False)
            info.compress_type = zipfile.ZIP_DEFLATED
            with open(source, "rb") as src, self._zip.open(
                info, "w", force_zip64=info.file_size > zipfile.ZIP64_LIMIT
            ) as dst:
                shutil.copyfileobj(src, dst, COPY_BUFFER_SIZE)
        except OSError as e:
            raise ArchiveWriteError(str(source)) from e
        self.entry_count += 1
        logger.debug("Added %s from %s", archive_path, source)

    def write_tree(
        self, root: PathType, mount_prefix: str, rules: Optional[BaseExclusionRules] = None
    ) -> int:
        """Write every accepted regular file below ``root``.

        Each file is mapped to ``mount_prefix`` plus its path relative to
        ``root``. Editor artifacts and files excluded by ``rules`` are
        skipped silently. A missing root contributes nothing.

        Args:
            root: Root directory of the tree.
            mount_prefix: Directory inside the archive the tree is mounted at.
            rules: User-supplied exclusion rules.

        Returns:
            The number of entries written.

        Raises:
            ArchiveWriteError: If a file cannot be copied or a directory cannot be listed.
        """
        tree = SourceTree(root)
        written = 0
        try:
            files = list(tree.iterate_files())
        except OSError as e:
            raise ArchiveWriteError(str(root)) from e

        for source, _ in files:
            archive_path = map_path(tree.root_path, mount_prefix, source)
            if should_skip(source, archive_path, rules):
                logger.debug("Skipped %s", archive_path)
                continue
            self.write_file(archive_path, source)
            written += 1
        return written

    def close(self) -> None:
        """Finalize the archive. Calling close more than once has no effect."""
        if self._closed:
            return
        self._closed = True
        self._zip.close()

    def __enter__(self) -> "WarWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Close the archive.

        If closing fails while an exception is already propagating, the
        original exception is kept.
        """
        try:
            self.close()
        except OSError:
            if exc_type is None:
                raise


def war_trees(config: BuildConfig) -> List[Tuple[Path, str]]:
    """Return the configured source roots with their mount prefixes, in write order."""
    trees = [
        (config.compile_path, CLASSES_PREFIX),
        (config.source_path, CLASSES_PREFIX),
        (config.resources_path, CLASSES_PREFIX),
        (config.war_resources_path, ROOT_PREFIX),
    ]
    return [(root, prefix) for root, prefix in trees if root is not None]


def write_war(config: BuildConfig, war_path: PathType, rules: Optional[BaseExclusionRules] = None) -> Path:
    """Assemble a complete WAR archive.

    The descriptor is rendered before the archive is opened, so a
    configuration that yields a malformed descriptor never creates a file.

    Args:
        config: The resolved build configuration.
        war_path: Where to write the archive.
        rules: User-supplied exclusion rules, see
            :func:`ringwar.exclusion_rules.build_exclusion_rules`.

    Returns:
        The path of the written archive.

    Raises:
        DescriptorError: If the deployment descriptor cannot be rendered.
        OutputDirectoryError: If the target directory cannot be created.
        ArchiveWriteError: If any entry cannot be written.
    """
    web_xml = make_web_xml(config)

    with WarWriter(war_path) as war:
        war.write_str(WEB_XML_PATH, web_xml)
        for root, prefix in war_trees(config):
            count = war.write_tree(root, prefix, rules)
            logger.debug("Wrote %d files from %s", count, root)

    logger.info("Wrote %d entries to %s", war.entry_count, war.war_path)
    return war.war_path
