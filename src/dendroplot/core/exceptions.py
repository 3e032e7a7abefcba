"""
Custom exceptions with actionable guidance.

Provides specific error types for common failure scenarios,
each with helpful suggestions for resolution.
"""

from __future__ import annotations


class DendroplotError(Exception):
    """Base exception for dendroplot errors."""

    def __init__(self, message: str, suggestion: str | None = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message


class TreeParseError(DendroplotError):
    """Raised when a tree description could not be parsed."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(
            message=f"Could not parse tree description: {message}",
            suggestion=suggestion,
        )


class EmptyTreeError(TreeParseError):
    """Raised when the description contains no tree at all."""

    def __init__(self) -> None:
        super().__init__(
            "description is empty",
            suggestion="Provide a Newick string such as '(A:0.1,B:0.2);'.",
        )


class UnbalancedParenthesesError(TreeParseError):
    """Raised when '(' and ')' do not pair up."""

    def __init__(self, open_groups: int, position: int | None = None):
        if position is not None:
            detail = f"unexpected ')' at token {position}"
        else:
            detail = f"{open_groups} unclosed '(' at end of input"
        super().__init__(
            f"unbalanced parentheses ({detail})",
            suggestion=(
                "Check that every '(' has a matching ')'. Truncated files "
                "are the usual cause."
            ),
        )
        self.open_groups = open_groups
        self.position = position


class InvalidBranchLengthError(TreeParseError):
    """Raised when the token after ':' is not a number."""

    def __init__(self, token: str, position: int):
        super().__init__(
            f"branch length {token!r} at token {position} is not a number",
            suggestion="Branch lengths must be floating-point values, e.g. ':0.25'.",
        )
        self.token = token
        self.position = position


class TreeStructureError(DendroplotError):
    """Raised when a hierarchy is not a proper rooted tree."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            suggestion=(
                "Build hierarchies with parse_newick(); hand-built nodes must "
                "not share children or contain cycles."
            ),
        )


class ConfigurationError(DendroplotError):
    """Raised when configuration is invalid."""


class InvalidLayoutModeError(ConfigurationError):
    """Raised when an unknown layout mode is requested."""

    def __init__(self, mode: object):
        super().__init__(
            message=f"Unknown layout mode: {mode!r}",
            suggestion="Use 'linear' or 'radial'.",
        )
        self.mode = mode
