# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Explicit application context built once at startup."""

from __future__ import annotations

from functools import cached_property

import httpx

from billing_client.application.services import NotificationCenter, PageActions, SessionManager
from billing_client.domain.session import Navigator, Session, SessionStorage
from billing_client.infrastructure.http.api_client import ApiClient
from billing_client.infrastructure.http.resources import (
    AdminApi,
    AuthApi,
    CustomersApi,
    ExpensesApi,
    InventoryApi,
    InvoicesApi,
    PaymentsApi,
    ProductsApi,
    PurchaseReturnsApi,
    PurchasesApi,
    ReportsApi,
    SalesReturnsApi,
    ShopApi,
    SuppliersApi,
)
from billing_client.infrastructure.navigation import MemoryNavigator
from billing_client.infrastructure.scheduling import AsyncioScheduler
from billing_client.infrastructure.storage import JsonFileSessionStorage
from billing_client.shared.config import AppConfig, load_config
from billing_client.shared.logging import logger


class Container:
    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        storage: SessionStorage | None = None,
        preferences: SessionStorage | None = None,
        navigator: Navigator | None = None,
        scheduler: AsyncioScheduler | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or load_config()
        self._storage = storage
        self._preferences = preferences
        self._navigator = navigator
        self._scheduler = scheduler
        self._transport = transport

    @property
    def config(self) -> AppConfig:
        return self._config

    @cached_property
    def storage(self) -> SessionStorage:
        return self._storage or JsonFileSessionStorage(self._config.session.storage_file)

    @cached_property
    def preferences(self) -> SessionStorage:
        return self._preferences or JsonFileSessionStorage(self._config.session.preferences_file)

    @cached_property
    def navigator(self) -> Navigator:
        return self._navigator or MemoryNavigator()

    @cached_property
    def scheduler(self) -> AsyncioScheduler:
        return self._scheduler or AsyncioScheduler()

    @cached_property
    def api(self) -> ApiClient:
        return ApiClient(
            self._config.api,
            token_provider=self._current_token,
            transport=self._transport,
        )

    @cached_property
    def auth_api(self) -> AuthApi:
        return AuthApi(self.api)

    @cached_property
    def session(self) -> SessionManager:
        return SessionManager(
            auth=self.auth_api,
            storage=self.storage,
            navigator=self.navigator,
            config=self._config.session,
        )

    @cached_property
    def notifications(self) -> NotificationCenter:
        return NotificationCenter(
            scheduler=self.scheduler,
            clock=self.scheduler.time,
            config=self._config.notifications,
        )

    @cached_property
    def pages(self) -> PageActions:
        return PageActions(
            session=self.session,
            notifications=self.notifications,
            navigator=self.navigator,
            preferences=self.preferences,
        )

    # Endpoint groups

    @cached_property
    def shop(self) -> ShopApi:
        return ShopApi(self.api)

    @cached_property
    def products(self) -> ProductsApi:
        return ProductsApi(self.api)

    @cached_property
    def customers(self) -> CustomersApi:
        return CustomersApi(self.api)

    @cached_property
    def invoices(self) -> InvoicesApi:
        return InvoicesApi(self.api)

    @cached_property
    def suppliers(self) -> SuppliersApi:
        return SuppliersApi(self.api)

    @cached_property
    def purchases(self) -> PurchasesApi:
        return PurchasesApi(self.api)

    @cached_property
    def purchase_returns(self) -> PurchaseReturnsApi:
        return PurchaseReturnsApi(self.api)

    @cached_property
    def sales_returns(self) -> SalesReturnsApi:
        return SalesReturnsApi(self.api)

    @cached_property
    def expenses(self) -> ExpensesApi:
        return ExpensesApi(self.api)

    @cached_property
    def payments(self) -> PaymentsApi:
        return PaymentsApi(self.api)

    @cached_property
    def inventory(self) -> InventoryApi:
        return InventoryApi(self.api)

    @cached_property
    def reports(self) -> ReportsApi:
        return ReportsApi(self.api)

    @cached_property
    def admin(self) -> AdminApi:
        return AdminApi(self.api)

    def startup(self) -> Session:
        logger.info(f"app: starting env={self._config.app_env} api={self._config.api.root}")
        return self.session.restore()

    async def shutdown(self) -> None:
        self.notifications.clear()
        await self.api.aclose()
        logger.info("app: stopped")

    def _current_token(self) -> str | None:
        return self.session.token


__all__ = ["Container"]
