#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the diffexport library.

This module defines the exception classes raised by the export layer. Each
failure mode of an export call maps to its own class so callers can tell a
bad format request apart from a failed delivery.

Exception Hierarchy
-------------------
- DiffExportError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a renderer)

  - FormatError (unknown formats)
    - UnsupportedFormatError (format key absent from the registry)

  - RenderingError (output generation failures)
    - InvalidContentTypeError (renderer returned the wrong kind of content)

  - DeliveryError (file save and preview failures)
    - DeliveryFailedError (the save or display capability raised)
    - PreviewUnavailableError (no display surface could be obtained)

  - InputError (diff-line input could not be read)

"""

from typing import Any


class DiffExportError(Exception):
    """Base exception class for all diffexport-specific errors.

    Catching this will catch every error raised by the library.

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
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(DiffExportError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
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
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when a renderer receives another format's options class.

    Passing ``MarkdownExportOptions`` to the HTML renderer raises this error.
    Plain ``BaseExportOptions`` are always accepted.

    Parameters
    ----------
    renderer_name : str
        Name of the renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        renderer_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{renderer_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'. "
                f"Please provide the correct options type for the renderer."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.renderer_name = renderer_name
        self.expected_type = expected_type
        self.received_type = received_type


class FormatError(DiffExportError):
    """Base exception for format resolution errors.

    Parameters
    ----------
    message : str, optional
        Custom error message
    format_type : str, optional
        The format that could not be handled
    supported_formats : list[str], optional
        List of supported formats for reference
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str | None = None,
        format_type: str | None = None,
        supported_formats: list[str] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the format error."""
        if message is None:
            if format_type is not None:
                message = f"Unsupported export format: '{format_type}'"
                if supported_formats:
                    message += f". Supported formats include: {', '.join(supported_formats)}"
            else:
                message = "Export format is not supported"

        super().__init__(message, original_error=original_error)
        self.format_type = format_type
        self.supported_formats = supported_formats


class UnsupportedFormatError(FormatError):
    """Exception raised when a requested format key is absent from the registry.

    Raised before any rendering work starts. Lookups never retry and never
    normalise the key, so ``"HTML"`` is unsupported even when ``"html"`` is
    registered.

    """


class RenderingError(DiffExportError):
    """Exception raised when output rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class InvalidContentTypeError(RenderingError):
    """Exception raised when a renderer returns the wrong kind of content.

    The HTML preview needs writable markup; a renderer that hands back a
    binary artifact for the ``html`` format violates the renderer contract.

    Parameters
    ----------
    message : str, optional
        Custom error message
    content_type : type, optional
        The type of content that was produced

    """

    def __init__(
        self,
        message: str | None = None,
        content_type: type | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid content type error."""
        if message is None:
            message = "HTML export should return string content"
        super().__init__(message, rendering_stage="preview", original_error=original_error)
        self.content_type = content_type


class DeliveryError(DiffExportError):
    """Base exception for delivery (save and preview) failures."""


class DeliveryFailedError(DeliveryError):
    """Exception raised when the host save or display capability fails.

    Parameters
    ----------
    message : str
        Description of the failure
    filename : str, optional
        Name of the file that was being delivered
    original_error : Exception, optional
        The exception raised by the delivery sink

    """

    def __init__(self, message: str, filename: str | None = None, original_error: Exception | None = None):
        """Initialize the delivery failure."""
        super().__init__(message, original_error=original_error)
        self.filename = filename


class PreviewUnavailableError(DeliveryError):
    """Exception raised when no display surface can be opened for a preview."""

    def __init__(self, message: str | None = None, original_error: Exception | None = None):
        """Initialize the preview error."""
        if message is None:
            message = "Could not open preview window. Please check popup blocker settings."
        super().__init__(message, original_error=original_error)


class InputError(DiffExportError):
    """Exception raised when diff-line input cannot be read or decoded.

    Parameters
    ----------
    message : str
        Description of the input problem
    input_path : str, optional
        Path (or ``-`` for stdin) that was being read

    """

    def __init__(self, message: str, input_path: str | None = None, original_error: Exception | None = None):
        """Initialize the input error."""
        super().__init__(message, original_error=original_error)
        self.input_path = input_path


__all__ = [
    "DiffExportError",
    "ValidationError",
    "InvalidOptionsError",
    "FormatError",
    "UnsupportedFormatError",
    "RenderingError",
    "InvalidContentTypeError",
    "DeliveryError",
    "DeliveryFailedError",
    "PreviewUnavailableError",
    "InputError",
]
