"""
Error taxonomy shared by the builders, the HTTP surface and the CLI.

Each error knows the HTTP status it maps to and the CLI exit code.
"""

from __future__ import annotations


class EpigraphError(RuntimeError):
    status_code: int = 500
    exit_code: int = 1


class MissingParameterError(EpigraphError):
    status_code = 400
    exit_code = 2

    def __init__(self, message: str = "Message parameter is required", parameter: str = "message") -> None:
        super().__init__(message)
        self.parameter = parameter


class MetadataValidationError(EpigraphError):
    exit_code = 3

    def __init__(self, field: str, message: str, errors: list[str] | None = None) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.errors = errors or [f"{field}: {message}"]


class SerializationError(EpigraphError):
    exit_code = 4
