"""Pydantic models for the pool dataset.

The dataset is a JSON array of adapter entries:

    [
      {
        "adapter": "CurveStableSwapNG",
        "arguments": {"chain": "ethereum"},
        "pools": [
          {"parameters": {"pool": "0x..."}, "tokens": ["0x...", "USDC"]}
        ]
      }
    ]
"""

from typing import Any

from pydantic import BaseModel, Field, TypeAdapter, ValidationInfo, field_validator


class PoolRecord(BaseModel):
    """One configured pool instance under an adapter entry."""

    parameters: dict[str, Any] = Field(default_factory=dict)
    # Raw token identifiers; non-string and empty entries are dropped later
    tokens: list[Any] = Field(default_factory=list)

    @field_validator("parameters", "tokens", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return {} if info.field_name == "parameters" else []
        return value


class AdapterEntry(BaseModel):
    """An adapter with its shared arguments and its pool instances."""

    adapter: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    pools: list[PoolRecord] = Field(default_factory=list)

    @field_validator("arguments", mode="before")
    @classmethod
    def _null_arguments(cls, value: Any) -> Any:
        return {} if value is None else value


_DATASET_ADAPTER = TypeAdapter(list[AdapterEntry])


def parse_dataset(data: Any) -> list[AdapterEntry]:
    """Validate already-decoded JSON as a list of adapter entries.

    Raises:
        pydantic.ValidationError: If the structure does not match
    """
    return _DATASET_ADAPTER.validate_python(data)
