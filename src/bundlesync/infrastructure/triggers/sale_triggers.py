"""Sale triggers: the two entry points that start a reconciliation pass.

- ``simulate_sale``: a merchant-initiated test sale of one product.
- ``order_webhook``: the storefront's "order created" notification.

Both are transport-agnostic: a web framework adapter hands in the HTTP
verb and decoded JSON body and serialises the returned status and body.
Checks run in a fixed order so that nothing external is touched until the
verb, the configuration and the input have all been accepted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog

from bundlesync.application.process_order import ProcessOrderHandler
from bundlesync.application.simulate_sale import SimulateSaleHandler
from bundlesync.domain.exceptions import (
    BundleSyncError,
    ConfigurationError,
    MethodNotSupportedError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from bundlesync.domain.repository.bundle_registry import BundleRegistry
from bundlesync.domain.repository.order_line_source import OrderLineSource
from bundlesync.domain.repository.stock_ledger import StockLedger
from bundlesync.infrastructure.config import StoreConfig

logger = structlog.get_logger(__name__)

STATUS_BY_ERROR: dict[type[BundleSyncError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    MethodNotSupportedError: 405,
    ConfigurationError: 500,
    UpstreamError: 500,
}


@dataclass(frozen=True)
class TriggerRequest:
    method: str
    body: dict[str, Any] | None = None


@dataclass(frozen=True)
class TriggerResponse:
    status: int
    body: dict[str, Any] = field(default_factory=dict)


class SaleTriggers:

    def __init__(
        self,
        config: StoreConfig,
        stock_ledger: StockLedger,
        bundle_registry: BundleRegistry,
        order_lines: OrderLineSource,
    ) -> None:
        self._config = config
        self._stock_ledger = stock_ledger
        self._bundle_registry = bundle_registry
        self._order_lines = order_lines

    # --- Entry points ---------------------------------------------------------

    def simulate_sale(self, request: TriggerRequest) -> TriggerResponse:
        try:
            _require_post(request)
            self._config.require_credentials()
            body = request.body or {}
            handler = SimulateSaleHandler(self._stock_ledger, self._bundle_registry)
            details = handler.handle(body.get("productId"), body.get("quantity"))
        except UpstreamError as exc:
            logger.error("Simulated sale failed", error=str(exc))
            return TriggerResponse(500, {"message": "Error simulating sale", "error": str(exc)})
        except BundleSyncError as exc:
            return _reject("simulate_sale", exc)

        return TriggerResponse(
            200,
            {
                "message": "Sale simulated successfully",
                "details": {"productId": details.product_id, "quantity": details.quantity},
            },
        )

    def order_webhook(self, request: TriggerRequest) -> TriggerResponse:
        try:
            _require_post(request)
            self._config.require_credentials()
            order_id = _order_id_from(request.body)
            logger.info("Order webhook received", order_id=order_id)
            handler = ProcessOrderHandler(
                self._order_lines, self._stock_ledger, self._bundle_registry
            )
            order = handler.handle(order_id)
        except (UpstreamError, NotFoundError) as exc:
            logger.error("Order webhook failed", error=str(exc))
            return TriggerResponse(500, {"message": "Internal Server Error"})
        except BundleSyncError as exc:
            return _reject("order_webhook", exc)

        return TriggerResponse(
            200,
            {
                "message": "Stock levels updated successfully",
                "details": {
                    "orderId": order.order_id,
                    "items": [
                        {"productId": item.product_id, "quantity": item.quantity}
                        for item in order.items
                    ],
                },
            },
        )


# --- Helpers -----------------------------------------------------------------


def _require_post(request: TriggerRequest) -> None:
    if request.method.upper() != "POST":
        raise MethodNotSupportedError("Method not allowed")


def _order_id_from(body: dict[str, Any] | None) -> int:
    order = (body or {}).get("data")
    if not isinstance(order, dict) or order.get("id") in (None, ""):
        raise ValidationError("Missing required information")
    raw_id = order["id"]
    if isinstance(raw_id, int) and not isinstance(raw_id, bool):
        return raw_id
    if isinstance(raw_id, str) and raw_id.isdecimal():
        return int(raw_id)
    raise ValidationError(f"Invalid order id: {raw_id!r}")


def _reject(trigger: str, exc: BundleSyncError) -> TriggerResponse:
    status = STATUS_BY_ERROR.get(type(exc), 500)
    message = "Missing store configuration" if isinstance(exc, ConfigurationError) else str(exc)
    logger.warning(
        "Sale trigger rejected request",
        trigger=trigger,
        error_kind=type(exc).__name__,
        status=status,
        detail=str(exc),
    )
    return TriggerResponse(status, {"message": message})
