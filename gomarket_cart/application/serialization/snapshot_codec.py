"""
Cart snapshot codec

Snapshots are stored as a versioned JSON document::

    {"version": 1, "items": [{"id": ..., "title": ..., "image_url": ...,
                              "price": ..., "quantity": ...}]}

Older releases stored a bare JSON array of items; those are still accepted
when decoding. Unknown item fields are ignored so newer snapshots remain
readable.
"""

import json
import logging
from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from gomarket_cart.domain.entities.cart import Cart
from gomarket_cart.domain.entities.line_item import LineItem
from gomarket_cart.infrastructure.utilities.constants import SnapshotSettings
from gomarket_cart.infrastructure.utilities.exceptions import SnapshotDecodeError

logger = logging.getLogger(__name__)


class LineItemSchema(BaseModel):
    """Stored shape of a line item"""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    title: str
    image_url: str
    price: float = Field(ge=0, allow_inf_nan=False)
    quantity: int = Field(ge=1)


class SnapshotSchema(BaseModel):
    """Stored shape of a cart snapshot"""

    version: int
    items: List[LineItemSchema] = Field(default_factory=list)


_legacy_items_adapter = TypeAdapter(List[LineItemSchema])


class SnapshotCodec:
    """Encode carts to snapshot strings and back"""

    def __init__(self, version: int = SnapshotSettings.CURRENT_VERSION):
        self.version = version

    def encode(self, cart: Cart) -> str:
        """Serialize ``cart`` as a versioned snapshot"""
        snapshot = SnapshotSchema(
            version=self.version,
            items=[LineItemSchema(**item.to_dict()) for item in cart],
        )
        return snapshot.model_dump_json()

    def decode(self, raw: str) -> Cart:
        """
        Parse a stored snapshot into a ``Cart``

        Raises:
            SnapshotDecodeError: if ``raw`` is not a valid snapshot
        """
        try:
            payload = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise SnapshotDecodeError(f"Snapshot is not valid JSON: {e}") from e

        try:
            if isinstance(payload, list):
                logger.debug(
                    "Decoding legacy snapshot (version %d)", SnapshotSettings.LEGACY_VERSION
                )
                items = _legacy_items_adapter.validate_python(payload)
            elif isinstance(payload, dict):
                snapshot = SnapshotSchema.model_validate(payload)
                if snapshot.version != self.version:
                    raise SnapshotDecodeError(
                        f"Unsupported snapshot version: {snapshot.version}"
                    )
                items = snapshot.items
            else:
                raise SnapshotDecodeError(
                    f"Snapshot must be a JSON object or array, got {type(payload).__name__}"
                )
        except PydanticValidationError as e:
            raise SnapshotDecodeError(
                f"Snapshot does not match the line item shape: {e.error_count()} error(s)"
            ) from e

        try:
            return Cart(tuple(LineItem(**item.model_dump()) for item in items))
        except ValueError as e:
            raise SnapshotDecodeError(f"Snapshot violates cart invariants: {e}") from e
