# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Endpoint groups of the billing REST API.

Response bodies are passed through untouched; their shape belongs to the
server.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from billing_client.infrastructure.http.api_client import ApiClient
from billing_client.shared.errors import RequestFailed
from billing_client.shared.logging import logger

Params = Mapping[str, Any]


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


class _Endpoint:
    path = ""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def _item(self, record_id: Any, *suffix: str) -> str:
        return "/".join([self.path, _segment(record_id), *suffix])


class _Listable(_Endpoint):
    async def get_all(self, params: Params | None = None) -> Any:
        return await self._api.get(self.path, params=params)


class _Readable(_Endpoint):
    async def get_one(self, record_id: Any) -> Any:
        return await self._api.get(self._item(record_id))


class _Creatable(_Endpoint):
    async def create(self, data: Mapping[str, Any]) -> Any:
        return await self._api.post(self.path, data)


class _Updatable(_Endpoint):
    async def update(self, record_id: Any, data: Mapping[str, Any]) -> Any:
        return await self._api.put(self._item(record_id), data)


class _Deletable(_Endpoint):
    async def delete(self, record_id: Any) -> Any:
        return await self._api.delete(self._item(record_id))


class _WithStats(_Endpoint):
    async def get_stats(self) -> Any:
        return await self._api.get(f"{self.path}/stats")


class AuthApi(_Endpoint):
    path = "/auth"

    async def login(self, credentials: Mapping[str, Any]) -> Any:
        return await self._api.post(f"{self.path}/login", dict(credentials))

    async def signup(self, profile: Mapping[str, Any]) -> Any:
        return await self._api.post(f"{self.path}/signup", dict(profile))


class ShopApi(_Endpoint):
    path = "/shop"

    async def get(self) -> Any:
        return await self._api.get(self.path)

    async def update(self, data: Mapping[str, Any]) -> Any:
        return await self._api.post(self.path, data)

    async def public_name(self, default: str) -> str:
        """Shop name shown on the signup screen, served outside the API prefix."""

        url = f"{self._api.config.base_url}{self.path}/public/name"
        try:
            data = await self._api.get(url, authenticated=False)
        except RequestFailed as exc:
            logger.warning(f"shop: public name unavailable ({exc.message})")
            return default
        if isinstance(data, Mapping) and data.get("shopName"):
            return str(data["shopName"])
        return default


class ProductsApi(_Listable, _Readable, _Creatable, _Updatable, _Deletable):
    path = "/products"


class CustomersApi(_Listable, _Readable, _Creatable, _Updatable, _Deletable):
    path = "/customers"


class InvoicesApi(_Listable, _WithStats, _Readable, _Creatable):
    """Invoices are immutable once created; corrections go through sales returns."""

    path = "/invoices"

    async def update_payment(self, record_id: Any, data: Mapping[str, Any]) -> Any:
        return await self._api.put(self._item(record_id, "payment"), data)


class SuppliersApi(_Listable, _WithStats, _Readable, _Creatable, _Updatable, _Deletable):
    path = "/suppliers"

    async def get_ledger(self, record_id: Any, params: Params | None = None) -> Any:
        return await self._api.get(self._item(record_id, "ledger"), params=params)


class PurchasesApi(_Listable, _WithStats, _Readable, _Creatable):
    """Purchases are immutable once created; corrections go through purchase returns."""

    path = "/purchases"

    async def update_payment(self, record_id: Any, data: Mapping[str, Any]) -> Any:
        return await self._api.put(self._item(record_id, "payment"), data)


class PurchaseReturnsApi(_Listable, _Readable, _Creatable):
    path = "/purchase-returns"


class SalesReturnsApi(_Listable, _Readable, _Creatable):
    path = "/sales-returns"

    async def update_refund(self, record_id: Any, data: Mapping[str, Any]) -> Any:
        return await self._api.put(self._item(record_id, "refund"), data)


class ExpensesApi(_Listable, _WithStats, _Readable, _Creatable, _Updatable, _Deletable):
    path = "/expenses"


class PaymentsApi(_Listable, _WithStats, _Readable, _Creatable):
    path = "/payments"


class InventoryApi(_WithStats):
    path = "/inventory"

    async def get_batches_by_product(self, product_id: Any) -> Any:
        return await self._api.get(f"{self.path}/batches/product/{_segment(product_id)}")

    async def get_batch(self, batch_id: Any) -> Any:
        return await self._api.get(f"{self.path}/batches/{_segment(batch_id)}")

    async def update_batch(self, batch_id: Any, data: Mapping[str, Any]) -> Any:
        return await self._api.put(f"{self.path}/batches/{_segment(batch_id)}", data)

    async def get_near_expiry(self, params: Params | None = None) -> Any:
        return await self._api.get(f"{self.path}/alerts/near-expiry", params=params)

    async def get_expired(self) -> Any:
        return await self._api.get(f"{self.path}/alerts/expired")

    async def get_low_stock(self) -> Any:
        return await self._api.get(f"{self.path}/alerts/low-stock")

    async def get_valuation(self) -> Any:
        return await self._api.get(f"{self.path}/valuation")


class ReportsApi(_Endpoint):
    path = "/reports"

    async def _report(self, name: str, params: Params | None) -> Any:
        return await self._api.get(f"{self.path}/{name}", params=params)

    async def get_gstr1(self, params: Params | None = None) -> Any:
        return await self._report("gstr1", params)

    def gstr1_download_url(self, params: Params | None = None) -> str:
        """Direct link for the browser/download manager; the token rides in the query."""

        query = dict(params or {})
        query["token"] = self._api.current_token()
        return self._api.url(f"{self.path}/gstr1", query)

    async def get_gstr3b(self, params: Params | None = None) -> Any:
        return await self._report("gstr3b", params)

    async def get_tax_summary(self, params: Params | None = None) -> Any:
        return await self._report("tax-summary", params)

    async def get_hsn_summary(self, params: Params | None = None) -> Any:
        return await self._report("hsn-summary", params)

    async def get_profit_loss(self, params: Params | None = None) -> Any:
        return await self._report("profit-loss", params)

    async def get_balance_sheet(self, params: Params | None = None) -> Any:
        return await self._report("balance-sheet", params)

    async def get_eway_bill(self, invoice_id: Any, params: Params | None = None) -> Any:
        return await self._report(f"eway-bill/{_segment(invoice_id)}", params)

    async def get_eway_bill_bulk(self, params: Params | None = None) -> Any:
        return await self._report("eway-bill-bulk", params)

    async def get_ledger(self, account: str, params: Params | None = None) -> Any:
        return await self._report(f"ledger/{_segment(account)}", params)

    async def get_trial_balance(self, params: Params | None = None) -> Any:
        return await self._report("trial-balance", params)

    async def get_summary(self, params: Params | None = None) -> Any:
        return await self._report("summary", params)


class AdminApi(_Endpoint):
    path = "/admin"

    async def get_dashboard_stats(self) -> Any:
        return await self._api.get(f"{self.path}/dashboard/stats")

    async def list_organizations(self, params: Params | None = None) -> Any:
        return await self._api.get(f"{self.path}/organizations", params=params)

    async def get_organization(self, organization_id: Any) -> Any:
        return await self._api.get(f"{self.path}/organizations/{_segment(organization_id)}")

    async def create_organization(self, data: Mapping[str, Any]) -> Any:
        return await self._api.post(f"{self.path}/organizations", data)

    async def update_organization_status(self, organization_id: Any, status: str) -> Any:
        return await self._api.patch(
            f"{self.path}/organizations/{_segment(organization_id)}/status",
            {"subscriptionStatus": status},
        )

    async def create_organization_user(
        self, organization_id: Any, data: Mapping[str, Any]
    ) -> Any:
        return await self._api.post(
            f"{self.path}/organizations/{_segment(organization_id)}/users", data
        )

    async def delete_organization_user(self, user_id: Any) -> Any:
        return await self._api.delete(f"/organization/users/{_segment(user_id)}")


__all__ = [
    "AdminApi",
    "AuthApi",
    "CustomersApi",
    "ExpensesApi",
    "InventoryApi",
    "InvoicesApi",
    "PaymentsApi",
    "ProductsApi",
    "PurchaseReturnsApi",
    "PurchasesApi",
    "ReportsApi",
    "SalesReturnsApi",
    "ShopApi",
    "SuppliersApi",
]
