from typing import Optional


class WarBuildError(Exception):
    """
    Base class for every error that aborts a WAR build.

    A build either succeeds and returns the archive path, or raises one of the
    subclasses below. None of them is retried.

    Example:
        >>> issubclass(CompileError, WarBuildError)
        True
    """

    pass


class ConfigError(WarBuildError):
    """
    Exception raised when the project configuration is missing, unreadable or invalid.

    Example:
        >>> error = ConfigError("Project name is required")
        >>> str(error)
        'Project name is required'
    """

    pass


class CompileError(WarBuildError):
    """
    Exception raised when the compiler service fails to produce compiled output.

    Archive assembly never starts after this error.

    Attributes:
        returncode (Optional[int]): Exit status of the compile command, if one was run.

    Example:
        >>> error = CompileError("Compilation failed", returncode=2)
        >>> error.returncode
        2
    """

    def __init__(self, message: str, returncode: Optional[int] = None) -> None:
        self.returncode = returncode
        super().__init__(message)


class DescriptorError(WarBuildError):
    """
    Exception raised when a deployment descriptor tree cannot be serialized.

    Example:
        >>> error = DescriptorError("Element 'servlet' cannot hold a text value")
        >>> str(error)
        "Element 'servlet' cannot hold a text value"
    """

    pass


class OutputDirectoryError(WarBuildError):
    """
    Exception raised when the directory that should hold the archive cannot be created.

    Attributes:
        directory (str): The directory that could not be created.

    Example:
        >>> error = OutputDirectoryError("/read-only/target")
        >>> str(error)
        'Cannot create output directory: /read-only/target'
    """

    def __init__(self, directory: str) -> None:
        self.directory = directory
        super().__init__(f"Cannot create output directory: {directory}")


class ArchiveWriteError(WarBuildError):
    """
    Exception raised when a file cannot be copied into the archive.

    The archive is closed when this error propagates but is left incomplete on disk.

    Attributes:
        file_path (str): Path of the file that was being read or written.

    Example:
        >>> error = ArchiveWriteError("/project/src/app.py")
        >>> str(error)
        'Failed to write archive entry from: /project/src/app.py'
    """

    def __init__(self, file_path: str) -> None:
        self.file_path = file_path
        super().__init__(f"Failed to write archive entry from: {file_path}")
