#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdchangemarks library.

This module defines specialized exception classes for the error conditions
that can occur while resolving content, computing diffs and annotating
documents. Expected variations in input shape (empty documents, documents
without changes, documents that are already marked) are never reported
through exceptions; they produce well-defined output instead.

Exception Hierarchy
-------------------
- MdChangeMarksError (base exception)

  - ValidationError (option values, argument combinations)

  - FileError (reading or writing documents)
    - FileNotFoundError (missing document or no pattern match)
    - FileAccessError (permissions, encoding, write failures)

  - RepositoryError (repository discovery, commit resolution, blob reads)

  - DiffProviderError (external line-diff failures and timeouts)

  - AnnotationError (invalid internal state during annotation)

"""

from typing import Any


class MdChangeMarksError(Exception):
    """Base exception class for all mdchangemarks-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Store the message and the wrapped exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MdChangeMarksError):
    """Raised for invalid option values or argument combinations.

    Parameters
    ----------
    message : str
        What is wrong with the value
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The rejected value
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Record the offending parameter alongside the message."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class FileError(MdChangeMarksError):
    """Base class for problems reading or writing a document on disk.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Record the path alongside the message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when a file cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Build the default message from the path when none is given."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when a file cannot be read or written."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Build the default message from the path when none is given."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class RepositoryError(MdChangeMarksError):
    """Exception raised for repository discovery and commit resolution failures.

    Parameters
    ----------
    message : str
        Description of the repository error
    commitish : str, optional
        The commit expression that failed to resolve, if applicable
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, commitish: str | None = None, original_error: Exception | None = None):
        """Initialize the repository error."""
        super().__init__(message, original_error=original_error)
        self.commitish = commitish


class DiffProviderError(MdChangeMarksError):
    """Exception raised when the external line-diff program fails.

    An unavailable provider is not an error (the diff is treated as empty);
    this exception covers a provider that started but crashed, reported an
    unexpected exit status, or exceeded its timeout.

    Parameters
    ----------
    message : str
        Description of the failure
    provider : str, optional
        Name of the provider that failed
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, provider: str | None = None, original_error: Exception | None = None):
        """Initialize the diff provider error."""
        super().__init__(message, original_error=original_error)
        self.provider = provider


class AnnotationError(MdChangeMarksError):
    """Exception raised when the annotation pass reaches an invalid internal state."""
