"""Transaction record model."""

from __future__ import annotations

from typing import Any

from pydantic import Field, StrictStr

from ethparser.models._base import EthBaseModel


class Transaction(EthBaseModel):
    """An immutable ``(from, to, value)`` triple.

    Equality and hashing are structural. ``value`` keeps the node's string
    encoding (a hex quantity for real nodes) and is never interpreted.
    """

    from_: StrictStr = Field(alias="from")
    to: StrictStr
    value: StrictStr

    def to_wire(self) -> dict[str, Any]:
        """Serialize using the ``from``/``to``/``value`` wire keys."""
        return self.model_dump(by_alias=True)
