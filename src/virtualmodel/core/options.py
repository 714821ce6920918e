"""Per-call option models accepted by ``save`` and ``to_json``."""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict


class SaveOptions(BaseModel):
    """Options for ``Record.save``. Unknown options are kept and passed along."""
    model_config = ConfigDict(extra="allow")

    method: Optional[Literal["insert", "update"]] = None
    patch: bool = False


class SerializeOptions(BaseModel):
    """Options for ``to_json``.

    ``virtuals`` overrides the class-level ``output_virtuals`` flag when set,
    ``omit_new`` suppresses virtuals for records that were never saved and
    ``virtual_params`` maps a virtual name to the arguments for its getter.
    """
    model_config = ConfigDict(extra="allow")

    virtuals: Optional[bool] = None
    omit_new: bool = False
    virtual_params: Optional[Dict[str, Any]] = None
