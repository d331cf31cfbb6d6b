"""JSON-file-backed implementation of OrderLineSource.

    [{"id": 123, "products": [{"product_id": 1, "quantity": 3}]}]
"""

from __future__ import annotations

import json
from pathlib import Path

from bundlesync.domain.exceptions import UpstreamError, ValidationError
from bundlesync.domain.model.stock import SaleLine
from bundlesync.domain.repository.order_line_source import OrderLineSource


class JsonOrderLineSource(OrderLineSource):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def lines_for_order(self, order_id: int) -> list[SaleLine]:
        for raw in self._load_raw():
            if raw.get("id") == order_id:
                return self._to_lines(raw)
        raise UpstreamError(f"Failed to fetch order products: order {order_id} not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_lines(raw: dict) -> list[SaleLine]:
        try:
            return [
                SaleLine.of(item["product_id"], item.get("quantity"))
                for item in raw["products"]
            ]
        except (KeyError, TypeError, ValidationError) as exc:
            raise UpstreamError(f"Unexpected order products payload: {exc}") from exc

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise UpstreamError(f"Failed to fetch order products: {exc}") from exc
