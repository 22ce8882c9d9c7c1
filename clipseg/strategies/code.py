"""Identifier decomposition for camelCase, snake_case, kebab-case and friends.

Hungarian-notation tokens such as ``strName`` need no rule of their own: the
lowercase prefix ends at a lowercase-to-uppercase transition, which the case
boundary rule already splits.
"""

import re

from ..models import StrategyContext
from .base import SegmentationStrategy

# camelCase boundary, or an acronym followed by a capitalized word (HTTPRequest)
CASE_BOUNDARY = re.compile(r"[a-z][A-Z]|[A-Z]{2,}[a-z]")

# Acronym before a capitalized word | capitalized or lowercase word | trailing acronym
IDENTIFIER_PART = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z0-9]+")

CALL = re.compile(r"(\w+)\(([^)]*)\)")


def split_case(token: str) -> list[str]:
    """Split an identifier at its case boundaries.

    A run of uppercase letters followed by a capitalized word gives its last
    letter to that word, so ``HTTPRequest`` becomes ``HTTP`` and ``Request``
    and ``IOStream`` becomes ``IO`` and ``Stream``.

    Args:
        token: Identifier without whitespace

    Returns:
        Identifier parts in order
    """
    return IDENTIFIER_PART.findall(token)


class IdentifierStrategy(SegmentationStrategy):
    """Splits programming identifiers into their words."""

    name = "code"

    def segment(self, text: str, context: StrategyContext) -> list[str]:
        results = []
        for token in text.split():
            results.extend(self.split_token(token))
        return results

    def split_token(self, token: str) -> list[str]:
        """Decompose a single whitespace-free token."""
        if CASE_BOUNDARY.search(token):
            return split_case(token)
        if "_" in token:
            return [part for part in token.split("_") if part]
        if "-" in token:
            return [part for part in token.split("-") if part]

        match = CALL.search(token)
        if match:
            args = [arg.strip() for arg in match.group(2).split(",")]
            return [match.group(1)] + [arg for arg in args if arg]

        if "::" in token or "." in token:
            separator = "::" if "::" in token else "."
            return [part for part in token.split(separator) if part]

        return [token]
