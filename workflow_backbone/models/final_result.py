"""Final result format: how node outputs become the delivered result set.

An output is either a combination of several node outputs under a new
name, or an individual node output passed through unchanged.
"""

from collections.abc import Sequence
from typing import Any, Self

from pydantic import BaseModel

from workflow_backbone.errors import (
    DuplicateOutputNameError,
    UnknownOutputReferenceError,
)
from workflow_backbone.models.node import Node
from workflow_backbone.utils.wire import field_name, rename_keys

COMBINATION_WIRE_KEYS = {
    "nome": "output_name",
    "combinar": "combined_from",
    "manter_originais": "keep_originals",
    "template": "template",
}

LEGACY_COMBINATION_WIRE_KEYS = {
    "nome_da_saida": "output_name",
    "combinar_resultados": "combined_from",
    "manter_originais": "keep_originals",
    "template": "template",
}

LEGACY_FINAL_RESULT_WIRE_KEYS = {
    "combinacoes": "combinations",
    "saidas_individuais": "individual_outputs",
}

# the only keys an individual output entry of ``saidas`` may carry
INDIVIDUAL_OUTPUT_WIRE_KEYS = ("nome", "manter_original")


class OutputCombination(BaseModel):
    """Several node outputs merged into one named output."""

    model_config = {"extra": "forbid", "frozen": True}

    output_name: str
    combined_from: tuple[str, ...] = ()
    keep_originals: bool = False
    # how the execution engine lays out the merged text, e.g. "{a}\n\n{b}"
    template: str | None = None

    def to_wire(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "nome": self.output_name,
            "combinar": list(self.combined_from),
            "manter_originais": self.keep_originals,
        }
        if self.template is not None:
            data["template"] = self.template
        return data


class FinalResultFormat(BaseModel):
    """Output declarations of a workflow."""

    model_config = {"extra": "forbid", "frozen": True}

    combinations: tuple[OutputCombination, ...] = ()
    individual_outputs: tuple[str, ...] = ()

    @property
    def declared_names(self) -> list[str]:
        """Every output name this format delivers, combinations first."""
        return [c.output_name for c in self.combinations] + list(self.individual_outputs)

    def validate(self, nodes: Sequence[Node]) -> None:
        """Check references against the node outputs, then name uniqueness."""
        available = {node.output.name for node in nodes}

        for combination in self.combinations:
            for reference in combination.combined_from:
                if reference not in available:
                    raise UnknownOutputReferenceError(
                        f"output '{combination.output_name}': reference "
                        f"'{reference}' not found in node outputs",
                        output=combination.output_name,
                        reference=reference,
                    )

        for name in self.individual_outputs:
            if name not in available:
                raise UnknownOutputReferenceError(
                    f"output '{name}': reference not found in node outputs",
                    output=name,
                    reference=name,
                )

        seen: set[str] = set()
        duplicates: list[str] = []
        for name in self.declared_names:
            if name in seen and name not in duplicates:
                duplicates.append(name)
            seen.add(name)
        if duplicates:
            raise DuplicateOutputNameError(
                f"duplicate output names: {', '.join(duplicates)}",
                names=duplicates,
            )

    def to_wire(self) -> dict[str, Any]:
        saidas: list[dict[str, Any]] = [c.to_wire() for c in self.combinations]
        saidas.extend({"nome": name, "manter_original": True} for name in self.individual_outputs)
        return {"saidas": saidas}

    @staticmethod
    def wire_fields(data: Any) -> Any:
        """Translate a ``resultado_final`` block into constructor fields.

        Entries carrying ``combinar`` are combinations, the rest are
        individual outputs. A key an entry may not carry is kept as an extra
        field named after its position (``saidas.<i>.<key>``), so validation
        rejects it; this covers a combination that also sets
        ``manter_original``.
        """
        if not isinstance(data, dict):
            return data

        fields: dict[str, Any] = {}
        for key, value in data.items():
            if key == "saidas":
                fields.update(FinalResultFormat.saidas_fields(value))
            else:
                fields[field_name(key, {}, FinalResultFormat.model_fields)] = value
        return fields

    @staticmethod
    def saidas_fields(saidas: Any) -> dict[str, Any]:
        if not isinstance(saidas, list):
            return {"combinations": saidas}

        combinations: list[Any] = []
        individual_outputs: list[Any] = []
        extras: dict[str, Any] = {}
        for index, saida in enumerate(saidas):
            if not isinstance(saida, dict):
                individual_outputs.append(saida)
            elif "combinar" in saida:
                combinations.append(rename_keys(saida, COMBINATION_WIRE_KEYS))
            else:
                for key, value in saida.items():
                    if key not in INDIVIDUAL_OUTPUT_WIRE_KEYS:
                        extras[f"saidas.{index}.{key}"] = value
                individual_outputs.append(saida.get("nome"))
        return {
            "combinations": combinations,
            "individual_outputs": individual_outputs,
            **extras,
        }

    @staticmethod
    def legacy_wire_fields(data: Any) -> Any:
        """Translate the older ``formato_resultado_final`` block."""
        if not isinstance(data, dict):
            return data
        fields = rename_keys(data, LEGACY_FINAL_RESULT_WIRE_KEYS)
        if isinstance(fields.get("combinations"), list):
            fields["combinations"] = [
                rename_keys(item, LEGACY_COMBINATION_WIRE_KEYS)
                for item in fields["combinations"]
            ]
        return fields

    @classmethod
    def from_wire(cls, data: Any) -> Self:
        return cls.model_validate(cls.wire_fields(data))
