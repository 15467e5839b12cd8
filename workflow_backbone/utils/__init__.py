"""Utility functions for the workflow backbone."""

from workflow_backbone.utils.placeholders import (
    PLACEHOLDER_PATTERN,
    extract_prompt_variables,
    find_unbound_variables,
)
from workflow_backbone.utils.wire import field_name, rename_each, rename_keys

__all__ = [
    "field_name",
    "rename_each",
    "rename_keys",
    "PLACEHOLDER_PATTERN",
    "extract_prompt_variables",
    "find_unbound_variables",
]
