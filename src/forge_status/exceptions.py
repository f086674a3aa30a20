"""Error hierarchy for the Forge status tool."""

from typing import Any


class ForgeError(Exception):
    """Base class for every error the CLI reports to the user."""

    pass


class ConfigError(ForgeError):
    """Raised when the global CLI config cannot be loaded."""

    pass


class TransportError(ForgeError):
    """Raised when a request to the Forge API fails."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DecodeError(ForgeError):
    """Raised when a Forge API document fails validation.

    Attributes:
        stage: Decoding stage that failed ("parse", "shape" or "consistency").
        field: Offending field name, if any.
        instance: Position of the offending instance in a health document.
        service: Service sub-object ("cardinal" or "nakama") the field belongs to.
        value: Unexpected value, kept for diagnostics.
    """

    stage = "decode"

    def __init__(
        self,
        detail: str,
        field: str | None = None,
        instance: int | None = None,
        service: str | None = None,
        value: Any = None,
    ):
        self.detail = detail
        self.field = field
        self.instance = instance
        self.service = service
        self.value = value
        super().__init__(self._format())

    @property
    def location(self) -> str | None:
        """Dotted path to the offending field, e.g. ``instance[2].nakama.url``."""
        parts = []
        if self.instance is not None:
            parts.append(f"instance[{self.instance}]")
        if self.service:
            parts.append(self.service)
        if self.field and self.field not in parts:
            parts.append(self.field)
        return ".".join(parts) or None

    def _format(self) -> str:
        location = self.location
        if location:
            return f"{self.stage} error at {location}: {self.detail}"
        return f"{self.stage} error: {self.detail}"


class ParseError(DecodeError):
    """Input bytes are not a well-formed JSON object."""

    stage = "parse"


class ShapeError(DecodeError):
    """A field is missing or has the wrong type."""

    stage = "shape"


class ConsistencyError(DecodeError):
    """Values are well-typed but semantically wrong."""

    stage = "consistency"
