"""
Error types for firattr expression parsing, action translation and
conflict detection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from firattr.core.ir.actions import CollectedAction


class FirattrError(Exception):
    """Base exception for all firattr errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class GrammarError(FirattrError):
    """
    Raised when an expression or action key cannot be parsed.

    Examples:
    - Empty input
    - Missing event identifier (":ok", "->todo")
    - Invalid state suffix ("create:invalid")
    - Dangling modifier ("create.")
    - Unmatched bracket in an event filter
    """

    pass


class ParamArityError(FirattrError):
    """
    Raised when an action handler receives the wrong parameters.

    Examples:
    - x-fir-dispatch with no event names
    - x-fir-toggleClass with no class names
    - x-fir-append without a template name
    """

    pass


class ActionLookupError(FirattrError):
    """
    Raised when a named action cannot be resolved from the actions map.

    Examples:
    - x-fir-runjs:doSave with no x-fir-js:doSave on the element
    - an entry that resolves to an empty value
    """

    pass


class ConflictError(FirattrError):
    """Raised when two actions collected for one element are mutually exclusive."""

    def __init__(self, message: str, first: CollectedAction, second: CollectedAction):
        self.first = first
        self.second = second
        super().__init__(message)


class ConfigError(FirattrError):
    """Raised when firattr.toml cannot be read or holds invalid values."""

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside a single attribute string.

    Attributes:
        source: The attribute key or value that failed
        column: Column number (1-indexed)
    """

    source: str
    column: int

    def format(self) -> str:
        """
        Format the source with a marker under the failing column.

        Returns:
            Two lines: the source and a caret marker
        """
        marker = " " * (self.column - 1) + "^"
        return f"  {self.source}\n  {marker}"


def make_grammar_error(message: str, source: str, pos: int) -> GrammarError:
    """
    Helper to create a GrammarError pointing at a 0-indexed position.

    Args:
        message: Error description
        source: The text being parsed
        pos: 0-indexed offset into source

    Returns:
        GrammarError with context attached
    """
    return GrammarError(message, ErrorContext(source=source, column=pos + 1))
