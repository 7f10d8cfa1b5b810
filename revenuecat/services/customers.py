"""Customer endpoints.

API reference: https://www.revenuecat.com/docs/api-v2#tag/Customers
"""

from __future__ import annotations

from typing import Sequence

import httpx

from revenuecat.core.collection import PagedCollection
from revenuecat.core.endpoint import Endpoint
from revenuecat.models.common import DeletedObject, ListResponse
from revenuecat.models.customers import (
    AssignOfferingRequest,
    CreateCustomerRequest,
    Customer,
    CustomerAlias,
    CustomerAttribute,
    CustomerEntitlement,
    GrantEntitlementRequest,
    RevokeGrantedEntitlementRequest,
    SetCustomerAttributesRequest,
    TransferCustomerRequest,
    TransferResponse,
)
from revenuecat.models.invoices import Invoice
from revenuecat.models.purchases import Purchase
from revenuecat.models.subscriptions import Environment, Subscription
from revenuecat.models.virtual_currencies import (
    CreateVirtualCurrencyTransactionRequest,
    UpdateVirtualCurrencyBalanceRequest,
    VirtualCurrencyBalance,
)
from revenuecat.services.base import BaseService

_CUSTOMERS = "/v2/projects/{project_id}/customers"
_CUSTOMER = _CUSTOMERS + "/{customer_id}"
_PAGING = ("limit", "starting_after")

# --- Endpoint table ---

LIST_CUSTOMERS = Endpoint(
    "list_customers", "GET", _CUSTOMERS,
    query=_PAGING + ("search",), response=Customer, paginated=True,
)
GET_CUSTOMER = Endpoint(
    "get_customer", "GET", _CUSTOMER,
    query=("expand",), response=Customer,
)
CREATE_CUSTOMER = Endpoint(
    "create_customer", "POST", _CUSTOMERS,
    body=CreateCustomerRequest, response=Customer,
)
DELETE_CUSTOMER = Endpoint(
    "delete_customer", "DELETE", _CUSTOMER,
    response=DeletedObject,
)
TRANSFER_CUSTOMER = Endpoint(
    "transfer_customer", "POST", _CUSTOMER + "/actions/transfer",
    body=TransferCustomerRequest, response=TransferResponse,
)
LIST_ALIASES = Endpoint(
    "list_customer_aliases", "GET", _CUSTOMER + "/aliases",
    query=_PAGING, response=CustomerAlias, paginated=True,
)
LIST_ATTRIBUTES = Endpoint(
    "list_customer_attributes", "GET", _CUSTOMER + "/attributes",
    query=_PAGING, response=CustomerAttribute, paginated=True,
)
SET_ATTRIBUTES = Endpoint(
    "set_customer_attributes", "POST", _CUSTOMER + "/attributes",
    body=SetCustomerAttributesRequest, response=ListResponse[CustomerAttribute],
)
LIST_ACTIVE_ENTITLEMENTS = Endpoint(
    "list_active_entitlements", "GET", _CUSTOMER + "/active_entitlements",
    query=_PAGING, response=CustomerEntitlement, paginated=True,
)
GRANT_ENTITLEMENT = Endpoint(
    "grant_entitlement", "POST", _CUSTOMER + "/actions/grant_entitlement",
    body=GrantEntitlementRequest, response=Customer,
)
REVOKE_GRANTED_ENTITLEMENT = Endpoint(
    "revoke_granted_entitlement", "POST", _CUSTOMER + "/actions/revoke_granted_entitlement",
    body=RevokeGrantedEntitlementRequest, response=Customer,
)
ASSIGN_OFFERING = Endpoint(
    "assign_offering", "POST", _CUSTOMER + "/actions/assign_offering",
    body=AssignOfferingRequest,
)
LIST_SUBSCRIPTIONS = Endpoint(
    "list_customer_subscriptions", "GET", _CUSTOMER + "/subscriptions",
    query=("environment",) + _PAGING, response=Subscription, paginated=True,
)
LIST_PURCHASES = Endpoint(
    "list_customer_purchases", "GET", _CUSTOMER + "/purchases",
    query=("environment",) + _PAGING, response=Purchase, paginated=True,
)
LIST_INVOICES = Endpoint(
    "list_customer_invoices", "GET", _CUSTOMER + "/invoices",
    query=_PAGING, response=Invoice, paginated=True,
)
GET_INVOICE_FILE = Endpoint(
    "get_invoice_file", "GET", _CUSTOMER + "/invoices/{invoice_id}/file",
    raw=True,
)
LIST_VIRTUAL_CURRENCY_BALANCES = Endpoint(
    "list_virtual_currency_balances", "GET", _CUSTOMER + "/virtual_currencies",
    query=("include_empty_balances",) + _PAGING, response=VirtualCurrencyBalance, paginated=True,
)
CREATE_VIRTUAL_CURRENCY_TRANSACTION = Endpoint(
    "create_virtual_currency_transaction", "POST", _CUSTOMER + "/virtual_currencies/transactions",
    query=("include_empty_balances",),
    body=CreateVirtualCurrencyTransactionRequest, response=ListResponse[VirtualCurrencyBalance],
)
UPDATE_VIRTUAL_CURRENCY_BALANCE = Endpoint(
    "update_virtual_currency_balance", "POST", _CUSTOMER + "/virtual_currencies/update_balance",
    query=("include_empty_balances",),
    body=UpdateVirtualCurrencyBalanceRequest, response=ListResponse[VirtualCurrencyBalance],
)

CUSTOMER_ENDPOINTS: dict[str, Endpoint] = {
    endpoint.name: endpoint
    for endpoint in (
        LIST_CUSTOMERS,
        GET_CUSTOMER,
        CREATE_CUSTOMER,
        DELETE_CUSTOMER,
        TRANSFER_CUSTOMER,
        LIST_ALIASES,
        LIST_ATTRIBUTES,
        SET_ATTRIBUTES,
        LIST_ACTIVE_ENTITLEMENTS,
        GRANT_ENTITLEMENT,
        REVOKE_GRANTED_ENTITLEMENT,
        ASSIGN_OFFERING,
        LIST_SUBSCRIPTIONS,
        LIST_PURCHASES,
        LIST_INVOICES,
        GET_INVOICE_FILE,
        LIST_VIRTUAL_CURRENCY_BALANCES,
        CREATE_VIRTUAL_CURRENCY_TRANSACTION,
        UPDATE_VIRTUAL_CURRENCY_BALANCE,
    )
}


def _ids(project_id: str, customer_id: str) -> dict[str, str]:
    return {"project_id": project_id, "customer_id": customer_id}


def _idempotency(key: str | None) -> dict[str, str] | None:
    return {"Idempotency-Key": key} if key is not None else None


class CustomerService(BaseService):
    """Customers, their aliases, attributes, entitlements, and purchase history.

    ``list*`` methods return a lazy :class:`PagedCollection`; iterate it with
    ``async for``, drain it with ``all()``, or page manually with ``page(cursor)``.
    """

    # --- Customer CRUD ---

    def list(
        self,
        project_id: str,
        *,
        limit: int | None = None,
        search: str | None = None,
    ) -> PagedCollection[Customer]:
        return self.client.paginate(
            LIST_CUSTOMERS, path_params={"project_id": project_id}, limit=limit, search=search
        )

    async def get(
        self,
        project_id: str,
        customer_id: str,
        *,
        expand: str | Sequence[str] | None = None,
    ) -> Customer:
        """Fetch one customer. ``expand`` inlines related objects, e.g. ``["attributes"]``."""
        if isinstance(expand, str):
            expand = [expand]
        return await self.client.call(
            GET_CUSTOMER,
            path_params=_ids(project_id, customer_id),
            query={"expand": list(expand) if expand else None},
        )

    async def create(self, project_id: str, request: CreateCustomerRequest) -> Customer:
        return await self.client.call(
            CREATE_CUSTOMER, path_params={"project_id": project_id}, body=request
        )

    async def delete(self, project_id: str, customer_id: str) -> DeletedObject:
        """Delete a customer permanently."""
        return await self.client.call(DELETE_CUSTOMER, path_params=_ids(project_id, customer_id))

    async def transfer(
        self, project_id: str, customer_id: str, request: TransferCustomerRequest
    ) -> TransferResponse:
        """Move this customer's purchases to ``request.target_customer_id``."""
        return await self.client.call(
            TRANSFER_CUSTOMER, path_params=_ids(project_id, customer_id), body=request
        )

    # --- Aliases & attributes ---

    def list_aliases(
        self, project_id: str, customer_id: str, *, limit: int | None = None
    ) -> PagedCollection[CustomerAlias]:
        return self.client.paginate(
            LIST_ALIASES, path_params=_ids(project_id, customer_id), limit=limit
        )

    def list_attributes(
        self, project_id: str, customer_id: str, *, limit: int | None = None
    ) -> PagedCollection[CustomerAttribute]:
        return self.client.paginate(
            LIST_ATTRIBUTES, path_params=_ids(project_id, customer_id), limit=limit
        )

    async def set_attributes(
        self, project_id: str, customer_id: str, request: SetCustomerAttributesRequest
    ) -> ListResponse[CustomerAttribute]:
        """Create or update attributes in bulk."""
        return await self.client.call(
            SET_ATTRIBUTES, path_params=_ids(project_id, customer_id), body=request
        )

    # --- Entitlements ---

    def list_active_entitlements(
        self, project_id: str, customer_id: str, *, limit: int | None = None
    ) -> PagedCollection[CustomerEntitlement]:
        return self.client.paginate(
            LIST_ACTIVE_ENTITLEMENTS, path_params=_ids(project_id, customer_id), limit=limit
        )

    async def grant_entitlement(
        self, project_id: str, customer_id: str, request: GrantEntitlementRequest
    ) -> Customer:
        """Grant an entitlement. The API creates a promotional subscription for it."""
        return await self.client.call(
            GRANT_ENTITLEMENT, path_params=_ids(project_id, customer_id), body=request
        )

    async def revoke_granted_entitlement(
        self, project_id: str, customer_id: str, request: RevokeGrantedEntitlementRequest
    ) -> Customer:
        """Revoke a granted entitlement, expiring its promotional subscription."""
        return await self.client.call(
            REVOKE_GRANTED_ENTITLEMENT, path_params=_ids(project_id, customer_id), body=request
        )

    async def assign_offering(
        self, project_id: str, customer_id: str, request: AssignOfferingRequest
    ) -> None:
        """Set the customer's offering override; ``offering_id=None`` clears it."""
        await self.client.call(
            ASSIGN_OFFERING, path_params=_ids(project_id, customer_id), body=request
        )

    # --- Subscriptions, purchases, invoices ---

    def list_subscriptions(
        self,
        project_id: str,
        customer_id: str,
        *,
        environment: Environment | None = None,
        limit: int | None = None,
    ) -> PagedCollection[Subscription]:
        return self.client.paginate(
            LIST_SUBSCRIPTIONS,
            path_params=_ids(project_id, customer_id),
            limit=limit,
            environment=environment,
        )

    def list_purchases(
        self,
        project_id: str,
        customer_id: str,
        *,
        environment: Environment | None = None,
        limit: int | None = None,
    ) -> PagedCollection[Purchase]:
        return self.client.paginate(
            LIST_PURCHASES,
            path_params=_ids(project_id, customer_id),
            limit=limit,
            environment=environment,
        )

    def list_invoices(
        self, project_id: str, customer_id: str, *, limit: int | None = None
    ) -> PagedCollection[Invoice]:
        return self.client.paginate(
            LIST_INVOICES, path_params=_ids(project_id, customer_id), limit=limit
        )

    async def get_invoice_file(
        self, project_id: str, customer_id: str, invoice_id: str
    ) -> httpx.Response:
        """Return the redirect response; the download URL is in ``Location``."""
        return await self.client.call(
            GET_INVOICE_FILE,
            path_params={**_ids(project_id, customer_id), "invoice_id": invoice_id},
        )

    # --- Virtual currencies ---

    def list_virtual_currency_balances(
        self,
        project_id: str,
        customer_id: str,
        *,
        include_empty_balances: bool | None = None,
        limit: int | None = None,
    ) -> PagedCollection[VirtualCurrencyBalance]:
        return self.client.paginate(
            LIST_VIRTUAL_CURRENCY_BALANCES,
            path_params=_ids(project_id, customer_id),
            limit=limit,
            include_empty_balances=include_empty_balances,
        )

    async def create_virtual_currency_transaction(
        self,
        project_id: str,
        customer_id: str,
        request: CreateVirtualCurrencyTransactionRequest,
        *,
        idempotency_key: str | None = None,
        include_empty_balances: bool | None = None,
    ) -> ListResponse[VirtualCurrencyBalance]:
        """Adjust balances and record a transaction. Returns the new balances."""
        return await self.client.call(
            CREATE_VIRTUAL_CURRENCY_TRANSACTION,
            path_params=_ids(project_id, customer_id),
            query={"include_empty_balances": include_empty_balances},
            body=request,
            headers=_idempotency(idempotency_key),
        )

    async def update_virtual_currency_balance(
        self,
        project_id: str,
        customer_id: str,
        request: UpdateVirtualCurrencyBalanceRequest,
        *,
        idempotency_key: str | None = None,
        include_empty_balances: bool | None = None,
    ) -> ListResponse[VirtualCurrencyBalance]:
        """Overwrite balances without recording a transaction."""
        return await self.client.call(
            UPDATE_VIRTUAL_CURRENCY_BALANCE,
            path_params=_ids(project_id, customer_id),
            query={"include_empty_balances": include_empty_balances},
            body=request,
            headers=_idempotency(idempotency_key),
        )
