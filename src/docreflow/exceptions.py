#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Exceptions raised by docreflow.

Reconstruction, classification and layout are total over their inputs and
never raise on content. Everything here comes from the edges: reading a
source document, checking options, and writing the finished PDF.

::

    DocReflowError
    ├── ValidationError
    │   ├── InvalidOptionsError
    │   └── PageRangeError
    ├── FileError
    │   ├── FileNotFoundError
    │   └── MalformedFileError
    ├── FormatError
    ├── ParsingError
    │   └── PasswordProtectedError
    ├── RenderingError
    │   └── OutputWriteError
    └── DependencyError

"""

from typing import Any


class DocReflowError(Exception):
    """Root of the docreflow exception tree.

    Parameters
    ----------
    message : str
        Description shown to the user
    original_error : Exception, optional
        Lower-level exception this error wraps

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(DocReflowError):
    """An argument or option value was rejected.

    ``parameter_name`` and ``parameter_value`` identify the offending input
    when known.
    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """A component received an options object of the wrong class."""

    def __init__(self, component_name: str, expected_type: type, received_type: type, message: str | None = None):
        super().__init__(
            message
            or f"The {component_name} takes {expected_type.__name__}, not {received_type.__name__}.",
            parameter_name="options",
            parameter_value=received_type,
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class PageRangeError(ValidationError):
    """A page selection could not be parsed or lies outside the document."""

    def __init__(self, message: str, parameter_value: Any = None, original_error: Exception | None = None):
        super().__init__(message, parameter_name="pages", parameter_value=parameter_value, original_error=original_error)


class FileError(DocReflowError):
    """A source file could not be used; ``file_path`` names it when known."""

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """The source path does not exist."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        super().__init__(message or f"No such source file: {file_path}", file_path=file_path, original_error=original_error)


class MalformedFileError(FileError):
    """The decoding library could not open the document at all."""


class FormatError(DocReflowError):
    """No decoder is registered for the requested source format."""

    def __init__(
        self,
        message: str | None = None,
        format_type: str | None = None,
        supported_formats: list[str] | None = None,
    ):
        if message is None:
            message = f"Cannot read format {format_type!r}" if format_type else "Cannot read this format"
            if supported_formats:
                message += f" (choose from: {', '.join(supported_formats)})"
        super().__init__(message)
        self.format_type = format_type
        self.supported_formats = supported_formats


class ParsingError(DocReflowError):
    """Decoding failed after the document was opened.

    ``parsing_stage`` records where, for example ``"extraction"`` or
    ``"authentication"``.
    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class PasswordProtectedError(ParsingError):
    """The document is encrypted and no valid password was supplied."""

    def __init__(
        self, message: str | None = None, filename: str | None = None, original_error: Exception | None = None
    ):
        if message is None:
            subject = f"'{filename}'" if filename else "The document"
            message = f"{subject} is password-protected; pass the password option to open it"
        super().__init__(message, parsing_stage="authentication", original_error=original_error)
        self.filename = filename


class RenderingError(DocReflowError):
    """Drawing the instructions or saving the PDF failed."""

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """The output PDF could not be written to ``file_path``."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        super().__init__(
            message or f"Could not write PDF to {file_path}", rendering_stage="file_write", original_error=original_error
        )
        self.file_path = file_path


class DependencyError(DocReflowError):
    """A library needed for a source format or for PDF output is unusable.

    Parameters
    ----------
    converter_name : str
        Component that needs the packages ("pdf", "docx", "pdf_render")
    missing_packages : list of (name, version_spec)
        Packages that failed to import
    version_mismatches : list of (name, required, installed), optional
        Packages that import but are too old or too new
    message : str, optional
        Replaces the generated message
    original_import_error : ImportError, optional
        First import failure seen

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        version_mismatches = version_mismatches or []
        if message is None:
            message = self._describe(converter_name, missing_packages, version_mismatches)
        super().__init__(message)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.original_import_error = original_import_error

    @staticmethod
    def _describe(
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]],
    ) -> str:
        lines = []
        if missing_packages:
            names = ", ".join(f"{name}{spec}" for name, spec in missing_packages)
            lines.append(f"'{converter_name}' needs packages that are not installed: {names}")
        for name, required, installed in version_mismatches:
            lines.append(f"'{converter_name}' needs {name}{required}, found {installed}")

        requirements = missing_packages + [(name, required) for name, required, _ in version_mismatches]
        if requirements:
            install = " ".join(f'"{name}{spec}"' if spec else name for name, spec in requirements)
            lines.append(f"Install with: pip install --upgrade {install}")
        return "\n".join(lines)
