"""Base model configuration for attestation documents and rule data."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable model; inputs are read-only snapshots during evaluation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)
