#!/usr/bin/env python3
"""
Tokenizer for the minish command line.

Splits one raw input line into the command name and its arguments.

Rules:
- Spaces separate tokens; runs of spaces collapse
- A double quote toggles quoting; spaces inside quotes stay in the token
- An unterminated quote is not an error, the rest of the line is one token

Quote characters are kept in the token by default. Pass ``strip_quotes=True``
to drop them instead.
"""

from typing import List


QUOTE = '"'
SEPARATOR = ' '


class Tokenizer:
    """Quote-aware line splitter."""

    def __init__(self, strip_quotes: bool = False):
        self.strip_quotes = strip_quotes

    def tokenize(self, line: str) -> List[str]:
        """
        Split a line into tokens.

        Returns an empty list for empty or all-whitespace input.
        """
        tokens = []
        current = []
        in_quotes = False

        for char in line:
            if char == QUOTE:
                in_quotes = not in_quotes
                if not self.strip_quotes:
                    current.append(char)
            elif char == SEPARATOR and not in_quotes:
                if current:
                    tokens.append(self._finish(current))
                    current = []
            else:
                current.append(char)

        if current:
            tokens.append(self._finish(current))

        # Whitespace-only tokens (e.g. a lone tab) are dropped
        return [token for token in tokens if token]

    def _finish(self, chars: List[str]) -> str:
        token = ''.join(chars)
        if self.strip_quotes:
            # Spaces that were quoted are part of the argument
            return token
        return token.strip()


def tokenize(line: str, strip_quotes: bool = False) -> List[str]:
    """Split ``line`` into tokens. See :class:`Tokenizer`."""
    return Tokenizer(strip_quotes=strip_quotes).tokenize(line)
