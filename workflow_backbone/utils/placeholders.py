"""Prompt template placeholder helpers."""

import re

# shortest {...} span; "{}" is not a placeholder
PLACEHOLDER_PATTERN = re.compile(r"\{([^}]+)\}")


def extract_prompt_variables(prompt: str) -> list[str]:
    """Return the placeholder names used in a prompt, in order of appearance.

    Repeated placeholders are reported once.
    """
    return list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(prompt)))


def find_unbound_variables(prompt: str, bound: list[str] | set[str]) -> list[str]:
    """Return the placeholders of ``prompt`` that are not in ``bound``."""
    bound = set(bound)
    return [name for name in extract_prompt_variables(prompt) if name not in bound]
