"""Validation error taxonomy.

Every validation failure is raised as a subclass of WorkflowValidationError
carrying a machine-readable kind and the identifiers of the offending
entity, so callers can branch on the kind instead of the message text.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Kinds of validation failure, grouped by the entity that raises them."""

    # node
    empty_name = "EmptyName"
    empty_prompt = "EmptyPrompt"
    empty_output_name = "EmptyOutputName"
    duplicate_name = "DuplicateName"
    multiple_parallel_inputs = "MultipleParallelInputs"
    # edge
    origin_not_found = "OriginNotFound"
    destination_not_found = "DestinationNotFound"
    # graph
    disconnected_node = "DisconnectedNode"
    missing_terminal = "MissingTerminal"
    # final result format
    unknown_output_reference = "UnknownOutputReference"
    duplicate_output_name = "DuplicateOutputName"
    # workflow
    unknown_document_reference = "UnknownDocumentReference"
    unbound_prompt_variable = "UnboundPromptVariable"


class WorkflowValidationError(Exception):
    """Base class for all validation failures."""

    kind: ErrorKind

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """Plain representation for presentation layers."""
        return {"kind": self.kind.value, "message": self.message, "detail": self.detail}


class EmptyNameError(WorkflowValidationError):
    kind = ErrorKind.empty_name


class EmptyPromptError(WorkflowValidationError):
    kind = ErrorKind.empty_prompt


class EmptyOutputNameError(WorkflowValidationError):
    kind = ErrorKind.empty_output_name


class DuplicateNameError(WorkflowValidationError):
    kind = ErrorKind.duplicate_name


class MultipleParallelInputsError(WorkflowValidationError):
    kind = ErrorKind.multiple_parallel_inputs


class OriginNotFoundError(WorkflowValidationError):
    kind = ErrorKind.origin_not_found


class DestinationNotFoundError(WorkflowValidationError):
    kind = ErrorKind.destination_not_found


class DisconnectedNodeError(WorkflowValidationError):
    kind = ErrorKind.disconnected_node


class MissingTerminalError(WorkflowValidationError):
    kind = ErrorKind.missing_terminal


class UnknownOutputReferenceError(WorkflowValidationError):
    kind = ErrorKind.unknown_output_reference


class DuplicateOutputNameError(WorkflowValidationError):
    kind = ErrorKind.duplicate_output_name


class UnknownDocumentReferenceError(WorkflowValidationError):
    kind = ErrorKind.unknown_document_reference


class UnboundPromptVariableError(WorkflowValidationError):
    kind = ErrorKind.unbound_prompt_variable


class BuilderStateError(Exception):
    """Raised when the fluent builders are used out of order."""
    pass
