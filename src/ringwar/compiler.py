"""Compilation step that runs before archive assembly.

Archive assembly only needs the compiled output directory to be populated,
including the adapter servlet that bridges the handler to the servlet API.
How that happens is up to a CompilerService implementation.
"""

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

from ringwar.config import BuildConfig
from ringwar.exceptions import CompileError

logger = logging.getLogger(__name__)


class CompilerService(ABC):
    """Abstract base class for the step that produces compiled output.

    Example:
        >>> class Touch(CompilerService):
        ...     def compile(self, config):
        ...         config.compile_path.mkdir(parents=True, exist_ok=True)
        ...         return config.compile_path
    """

    @abstractmethod
    def compile(self, config: BuildConfig) -> Path:
        """Produce the compiled output for a build.

        Args:
            config: The resolved build configuration.

        Returns:
            The compiled output directory.

        Raises:
            CompileError: If compilation fails. Assembly must not proceed.
        """
        pass


class PrecompiledOutput(CompilerService):
    """Use whatever the compiled output directory already holds.

    For builds where compilation and adapter generation happen outside of
    ringwar. A missing directory is not an error; it simply contributes no
    files to the archive.
    """

    def compile(self, config: BuildConfig) -> Path:
        logger.debug("Using precompiled output in %s", config.compile_path)
        return config.compile_path


def compile_environment(config: BuildConfig, base: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Build the environment passed to an external compile command.

    The RINGWAR_* variables describe the adapter servlet to generate.

    Example:
        >>> config = BuildConfig.from_mapping(
        ...     {"name": "a", "version": "1", "ring": {"handler": "myapp.core/handler"}}
        ... )
        >>> env = compile_environment(config, base={})
        >>> env["RINGWAR_SERVLET_CLASS"], env["RINGWAR_SERVLET_PATH_INFO"]
        ('myapp.servlet', 'true')
    """
    env = dict(os.environ if base is None else base)
    env.update(
        {
            "RINGWAR_HANDLER": config.handler or "",
            "RINGWAR_SERVLET_CLASS": config.servlet_class,
            "RINGWAR_SERVLET_NAMESPACE": config.servlet_namespace,
            "RINGWAR_SERVLET_PATH_INFO": "true" if config.servlet_path_info else "false",
            "RINGWAR_COMPILE_PATH": str(config.compile_path),
        }
    )
    return env


class CommandCompilerService(CompilerService):
    """Run an external command to compile the project.

    The command runs in the project root with its output passed through.
    Information about the adapter servlet is provided through environment
    variables, see :func:`compile_environment`.

    Attributes:
        command (Sequence[str]): Program and arguments to run.
    """

    def __init__(self, command: Sequence[str]) -> None:
        if not command:
            raise ValueError("Compile command must not be empty")
        self.command = list(command)

    def compile(self, config: BuildConfig) -> Path:
        logger.info("Compiling: %s", " ".join(self.command))
        try:
            result = subprocess.run(
                self.command,
                cwd=config.project_root,
                env=compile_environment(config),
                check=False,
            )
        except OSError as e:
            raise CompileError(f"Cannot run compile command {self.command[0]!r}: {e}") from e

        if result.returncode != 0:
            raise CompileError(
                f"Compile command exited with status {result.returncode}", returncode=result.returncode
            )
        return config.compile_path


def compiler_for(config: BuildConfig) -> CompilerService:
    """Pick the compiler service configured for a project."""
    if config.compile_command:
        return CommandCompilerService(config.compile_command)
    return PrecompiledOutput()
