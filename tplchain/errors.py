"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from TplUserError.

Programming errors and bugs should NOT inherit from TplUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class TplUserError(Exception):
    """
    Base class for all user-facing errors in tplchain.

    These errors indicate problems that the user can fix:
    broken templates, missing files, configuration issues, etc.
    """
    pass


class ConfigError(TplUserError):
    """Raised when tplchain.yaml cannot be loaded or is invalid."""
    pass


class TemplateError(TplUserError):
    """
    Base class for failures of a single render call.

    Carries the name of the template being processed when it is known.
    """

    def __init__(self, message: str, template: Optional[str] = None):
        self.message = message
        self.template = template
        super().__init__(message)

    def __str__(self) -> str:
        if self.template:
            return f"{self.message} (template '{self.template}')"
        return self.message


class TemplateNotFound(TemplateError):
    """The source provider cannot resolve a template name."""

    def __init__(self, name: str, searched: Optional[list[str]] = None):
        self.name = name
        self.searched = list(searched or [])
        message = f"Template not found: {name}"
        if self.searched:
            message += f". Searched: {', '.join(self.searched)}"
        super().__init__(message)


class DuplicateBlockName(TemplateError):
    """A block name is declared twice in one template."""

    def __init__(self, block: str, template: Optional[str] = None):
        self.block = block
        super().__init__(f"Duplicate block '{block}' detected", template)


class UnclosedBlock(TemplateError):
    """A template ended while a block was still open."""

    def __init__(self, block: str, template: Optional[str] = None):
        self.block = block
        super().__init__(f"Block '{block}' not closed", template)


class EndBlockOutsideBlock(UnclosedBlock):
    """end_block() without a matching begin_block()."""

    def __init__(self, template: Optional[str] = None):
        self.block = None
        TemplateError.__init__(self, "endblock outside of block", template)


class SuperOutsideBlock(TemplateError):
    """emit_super() at the template root."""

    def __init__(self, template: Optional[str] = None):
        super().__init__("Cannot use super outside of block", template)


class MultipleInheritance(TemplateError):
    """set_parent() called more than once in one template."""

    def __init__(self, parent: str, previous: str, template: Optional[str] = None):
        self.parent = parent
        self.previous = previous
        super().__init__(
            f"Multiple inheritance not allowed: '{parent}' after '{previous}'",
            template,
        )


class TemplateSyntaxError(TemplateError):
    """Malformed directive in a text template."""

    def __init__(self, message: str, line: int, column: int, template: Optional[str] = None):
        self.line = line
        self.column = column
        super().__init__(f"{message} at {line}:{column}", template)


class UndefinedVariable(TemplateError):
    """A ${name} placeholder refers to a name missing from the context."""

    def __init__(self, variable: str, template: Optional[str] = None):
        self.variable = variable
        super().__init__(f"Undefined variable '{variable}'", template)


class TemplateExecutionError(TemplateError):
    """A Python template body raised an unexpected exception."""

    def __init__(self, cause: BaseException, template: Optional[str] = None):
        self.cause = cause
        super().__init__(f"Template body failed: {type(cause).__name__}: {cause}", template)


class InheritanceDepthExceeded(TemplateError):
    """The inheritance chain is longer than the configured bound."""

    def __init__(self, max_depth: int, template: Optional[str] = None):
        self.max_depth = max_depth
        super().__init__(f"Inheritance chain deeper than {max_depth} templates", template)


class RenderTimeout(TemplateError):
    """The wall-clock budget of a render call was exhausted."""

    def __init__(self, budget: float, template: Optional[str] = None):
        self.budget = budget
        super().__init__(f"Render exceeded time budget of {budget:g}s", template)


__all__ = [
    "TplUserError",
    "ConfigError",
    "TemplateError",
    "TemplateNotFound",
    "DuplicateBlockName",
    "UnclosedBlock",
    "EndBlockOutsideBlock",
    "SuperOutsideBlock",
    "MultipleInheritance",
    "TemplateSyntaxError",
    "UndefinedVariable",
    "TemplateExecutionError",
    "InheritanceDepthExceeded",
    "RenderTimeout",
]
