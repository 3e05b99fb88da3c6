"""Utility functions for contract generation."""
import re


def to_snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
    s2 = re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1)
    return s2.lower()


def to_pascal_case(name: str) -> str:
    """
    Convert a collection id to PascalCase for contract names.

    Words are split on hyphens, underscores and whitespace; each word gets an
    upper-case first letter and keeps the rest, so PascalCase input is unchanged.
    """
    words = [w for w in re.split(r'[-_\s]+', name) if w]
    return "".join(w[0].upper() + w[1:] for w in words)


def pad(indent: int) -> str:
    return " " * indent
