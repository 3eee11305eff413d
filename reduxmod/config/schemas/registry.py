"""Registry/reducer behavior schemas."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RegistryConfig(BaseModel):
    # Opt-in validation; lenient registration is the default contract.
    strict: bool = False

    model_config = ConfigDict(extra="forbid")


class ReducerConfig(BaseModel):
    # False keeps late binding: reducers read handlers at dispatch time.
    snapshot: bool = False

    model_config = ConfigDict(extra="forbid")
