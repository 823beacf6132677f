"""Exception hierarchy for easy-cfhighlander.

Every failure the core raises on purpose derives from
``EasyCfhighlanderError`` so the CLI can map it to exit code 1 with a single
``except`` clause.  Filesystem failures are left as the builtin ``OSError``.
"""

from __future__ import annotations


class EasyCfhighlanderError(Exception):
    """Base class for all easy-cfhighlander errors."""


class ValidationError(EasyCfhighlanderError):
    """Raised when a validator rejects an answer.

    During interactive resolution the resolver catches it and asks again.  It
    escapes when the invocation is non-interactive or when the configured
    number of attempts runs out.
    """

    def __init__(self, message: str, param: str | None = None) -> None:
        self.param = param
        self.message = message
        if param:
            super().__init__(f"Invalid value for '{param}': {message}")
        else:
            super().__init__(message)

    def for_param(self, param: str) -> "ValidationError":
        """Return a copy of this error attributed to *param*."""
        return ValidationError(self.message, param=param)


class RequiredValueMissing(EasyCfhighlanderError):
    """Raised when a parameter has no answer and cannot be prompted for."""

    def __init__(self, param: str) -> None:
        self.param = param
        super().__init__(
            f"A value is required for '{param}' but none was supplied "
            "and prompting is disabled"
        )


class ModifierError(EasyCfhighlanderError):
    """Raised when a modifier targets a parameter no resolver declared."""

    def __init__(self, param: str) -> None:
        self.param = param
        super().__init__(f"Modifier for '{param}' has no matching resolver")


class CacheFormatError(EasyCfhighlanderError):
    """Raised when the cached parameters file is not a YAML mapping."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid parameters cache {path}: {reason}")


class TemplateRenderError(EasyCfhighlanderError):
    """Raised when a template cannot be loaded or rendered."""

    def __init__(self, template_id: str, reason: str) -> None:
        self.template_id = template_id
        super().__init__(f"Failed to render template '{template_id}': {reason}")
