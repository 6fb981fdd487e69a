"""WAR build orchestration.

This module ties the pieces of a build together: compilation, target path
resolution, and archive assembly.
"""

import logging
from pathlib import Path
from typing import Optional

from ringwar.archive_writer import write_war
from ringwar.compiler import CompilerService, compiler_for
from ringwar.config import BuildConfig
from ringwar.exceptions import OutputDirectoryError
from ringwar.exclusion_rules.base_rules import BaseExclusionRules
from ringwar.exclusion_rules.war_rules import build_exclusion_rules

logger = logging.getLogger(__name__)


def war_file_path(config: BuildConfig, war_name: Optional[str] = None) -> Path:
    """Return the archive path inside the target directory, creating the directory.

    Args:
        config: The resolved build configuration.
        war_name: Archive file name. Defaults to ``config.war_name``.

    Raises:
        OutputDirectoryError: If the target directory cannot be created.
    """
    try:
        config.target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(str(config.target_dir)) from e
    return config.target_dir / (war_name or config.war_name)


def war(
    config: BuildConfig,
    war_name: Optional[str] = None,
    *,
    compiler: Optional[CompilerService] = None,
    extra_rules: Optional[BaseExclusionRules] = None,
) -> Path:
    """Build a WAR archive suitable for servlet containers.

    The compiler service runs first; if it fails, nothing is written. The
    archive is then assembled in the target directory.

    Args:
        config: The resolved build configuration.
        war_name: Archive file name overriding ``config.war_name``.
        compiler: Compiler service to run. Defaults to the one configured for
            the project, see :func:`ringwar.compiler.compiler_for`.
        extra_rules: Exclusion rules added to the configured ``war-exclusions``.

    Returns:
        The path of the created archive.

    Raises:
        CompileError: If compilation fails.
        DescriptorError: If the deployment descriptor cannot be rendered.
        OutputDirectoryError: If the target directory cannot be created.
        ArchiveWriteError: If any entry cannot be written.

    Example:
        >>> from ringwar.config import load_config
        >>> war(load_config("ringwar.yaml"))  # doctest: +SKIP
        PosixPath('target/myapp-0.1.0.war')
    """
    if compiler is None:
        compiler = compiler_for(config)
    compiler.compile(config)

    war_path = war_file_path(config, war_name)
    rules = build_exclusion_rules(config, extra_rules)
    write_war(config, war_path, rules)
    logger.info("Created %s", war_path)
    return war_path
