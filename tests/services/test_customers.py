import json

import httpx
import pytest

from revenuecat import (
    AssignOfferingRequest,
    Conflict,
    CreateCustomerRequest,
    CreateVirtualCurrencyTransactionRequest,
    Customer,
    CustomerAttributeInput,
    CustomerService,
    DeletedObject,
    GrantEntitlementRequest,
    NotConnected,
    PagedCollection,
    RevokeGrantedEntitlementRequest,
    SetCustomerAttributesRequest,
    Subscription,
    TransferCustomerRequest,
    UpdateVirtualCurrencyBalanceRequest,
    connect,
)

BASE = "/v2/projects/proj_1/customers"
CUSTOMER = BASE + "/cust_1"


def _customer(customer_id="cust_1", **extra):
    return {"object": "customer", "id": customer_id, "project_id": "proj_1", "first_seen_at": 1, **extra}


def _list_body(items, next_page=None, url=BASE):
    return {"object": "list", "items": items, "next_page": next_page, "url": url}


def _balances(*pairs):
    return _list_body(
        [{"object": "virtual_currency_balance", "currency_code": code, "balance": n} for code, n in pairs],
        url=CUSTOMER + "/virtual_currencies",
    )


def _subscription(subscription_id):
    return {
        "object": "subscription",
        "id": subscription_id,
        "customer_id": "cust_1",
        "starts_at": 1,
        "current_period_starts_at": 1,
        "current_period_ends_at": 2,
        "gives_access": True,
        "auto_renewal_status": "will_renew",
        "status": "active",
        "environment": "production",
        "store": "app_store",
    }


def _body(request: httpx.Request):
    return json.loads(request.content)


@pytest.fixture
def customers(client):
    return CustomerService(client)


class TestCustomerCrud:
    async def test_list_iterates_all_pages(self, api, customers):
        api.add_json(
            "GET", BASE,
            _list_body([_customer("a"), _customer("b")], BASE + "?starting_after=b"),
            _list_body([_customer("c")]),
        )
        collection = customers.list("proj_1", limit=2, search="bob")
        assert isinstance(collection, PagedCollection)

        found = [customer async for customer in collection]
        assert [c.id for c in found] == ["a", "b", "c"]
        assert all(isinstance(c, Customer) for c in found)
        assert api.params(0) == httpx.QueryParams({"limit": "2", "search": "bob"})
        assert api.params(1)["starting_after"] == "b"

    async def test_get_with_expand(self, api, customers):
        api.add_json("GET", CUSTOMER, _customer(attributes=_list_body(
            [{"object": "customer.attribute", "name": "$email", "value": "a@b.c", "updated_at": 5}]
        )))
        customer = await customers.get("proj_1", "cust_1", expand=["attributes", "experiment"])

        assert customer.attributes.items[0].value == "a@b.c"
        assert api.params(0).get_list("expand") == ["attributes", "experiment"]

    async def test_get_with_single_expand_string(self, api, customers):
        api.add_json("GET", CUSTOMER, _customer())
        await customers.get("proj_1", "cust_1", expand="attributes")
        assert api.requests[0].url.query == b"expand=attributes"

    async def test_get_without_expand_sends_no_query(self, api, customers):
        api.add_json("GET", CUSTOMER, _customer())
        await customers.get("proj_1", "cust_1")
        assert api.requests[0].url.query == b""

    async def test_create_omits_unset_fields(self, api, customers):
        api.add_json("POST", BASE, _customer("new"))
        customer = await customers.create("proj_1", CreateCustomerRequest(id="new"))
        assert customer.id == "new"
        assert _body(api.requests[0]) == {"id": "new"}

    async def test_create_with_attributes(self, api, customers):
        api.add_json("POST", BASE, _customer("new"))
        request = CreateCustomerRequest(
            id="new", attributes=[CustomerAttributeInput(name="$email", value="x@y.z")]
        )
        await customers.create("proj_1", request)
        assert _body(api.requests[0]) == {
            "id": "new",
            "attributes": [{"name": "$email", "value": "x@y.z"}],
        }

    async def test_delete(self, api, customers):
        api.add_json("DELETE", CUSTOMER, {"object": "customer", "id": "cust_1", "deleted_at": 9})
        deleted = await customers.delete("proj_1", "cust_1")
        assert isinstance(deleted, DeletedObject)
        assert deleted.deleted_at == 9

    async def test_transfer(self, api, customers):
        api.add_json("POST", CUSTOMER + "/actions/transfer", {
            "object": "transfer",
            "source_customer_id": "cust_1",
            "target_customer_id": "cust_2",
            "transferred_at": 3,
        })
        result = await customers.transfer(
            "proj_1", "cust_1", TransferCustomerRequest(target_customer_id="cust_2")
        )
        assert result.target_customer_id == "cust_2"
        assert _body(api.requests[0]) == {"target_customer_id": "cust_2"}

    async def test_customer_id_is_path_encoded(self, api, customers):
        api.add_json("GET", BASE + "/$RCAnonymousID:abc", _customer("$RCAnonymousID:abc"))
        await customers.get("proj_1", "$RCAnonymousID:abc")
        assert api.requests[0].url.raw_path == b"/v2/projects/proj_1/customers/%24RCAnonymousID%3Aabc"

    async def test_conflict_surfaces_as_typed_error(self, api, customers):
        api.add_json(
            "POST", BASE,
            {"object": "error", "type": "resource_already_exists", "message": "Customer exists"},
            status=409,
        )
        with pytest.raises(Conflict, match="Customer exists"):
            await customers.create("proj_1", CreateCustomerRequest(id="dup"))


class TestAliasesAndAttributes:
    async def test_list_aliases(self, api, customers):
        api.add_json("GET", CUSTOMER + "/aliases", _list_body(
            [{"object": "customer.alias", "id": "alias_1", "created_at": 1}]
        ))
        aliases = await customers.list_aliases("proj_1", "cust_1").all()
        assert [a.id for a in aliases] == ["alias_1"]

    async def test_list_attributes(self, api, customers):
        api.add_json("GET", CUSTOMER + "/attributes", _list_body(
            [{"object": "customer.attribute", "name": "plan", "value": "pro", "updated_at": 1}]
        ))
        attributes = await customers.list_attributes("proj_1", "cust_1", limit=10).all()
        assert attributes[0].name == "plan"
        assert api.params(0)["limit"] == "10"

    async def test_set_attributes(self, api, customers):
        api.add_json("POST", CUSTOMER + "/attributes", _list_body(
            [{"object": "customer.attribute", "name": "plan", "value": "pro", "updated_at": 2}]
        ))
        result = await customers.set_attributes(
            "proj_1", "cust_1",
            SetCustomerAttributesRequest(attributes=[CustomerAttributeInput(name="plan", value="pro")]),
        )
        assert result.items[0].updated_at == 2
        assert _body(api.requests[0]) == {"attributes": [{"name": "plan", "value": "pro"}]}

    def test_set_attributes_requires_at_least_one(self):
        with pytest.raises(ValueError):
            SetCustomerAttributesRequest(attributes=[])


class TestEntitlements:
    async def test_list_active_entitlements(self, api, customers):
        api.add_json("GET", CUSTOMER + "/active_entitlements", _list_body(
            [{"object": "customer.active_entitlement", "entitlement_id": "ent_1", "expires_at": None}]
        ))
        entitlements = await customers.list_active_entitlements("proj_1", "cust_1").all()
        assert entitlements[0].entitlement_id == "ent_1"
        assert entitlements[0].expires_at is None

    async def test_grant_entitlement(self, api, customers):
        api.add_json("POST", CUSTOMER + "/actions/grant_entitlement", _customer())
        await customers.grant_entitlement(
            "proj_1", "cust_1", GrantEntitlementRequest(entitlement_id="ent_1", expires_at=100)
        )
        assert _body(api.requests[0]) == {"entitlement_id": "ent_1", "expires_at": 100}

    async def test_revoke_granted_entitlement(self, api, customers):
        api.add_json("POST", CUSTOMER + "/actions/revoke_granted_entitlement", _customer())
        customer = await customers.revoke_granted_entitlement(
            "proj_1", "cust_1", RevokeGrantedEntitlementRequest(entitlement_id="ent_1")
        )
        assert customer.id == "cust_1"
        assert _body(api.requests[0]) == {"entitlement_id": "ent_1"}

    async def test_assign_offering(self, api, customers):
        api.add("POST", CUSTOMER + "/actions/assign_offering", httpx.Response(204))
        result = await customers.assign_offering(
            "proj_1", "cust_1", AssignOfferingRequest(offering_id="ofrng_1")
        )
        assert result is None
        assert _body(api.requests[0]) == {"offering_id": "ofrng_1"}

    async def test_clearing_offering_sends_explicit_null(self, api, customers):
        api.add("POST", CUSTOMER + "/actions/assign_offering", httpx.Response(204))
        await customers.assign_offering("proj_1", "cust_1", AssignOfferingRequest(offering_id=None))
        assert _body(api.requests[0]) == {"offering_id": None}

    def test_offering_id_must_be_given(self):
        with pytest.raises(ValueError):
            AssignOfferingRequest()


class TestHistory:
    async def test_list_subscriptions_with_environment(self, api, customers):
        api.add_json("GET", CUSTOMER + "/subscriptions", _list_body(
            [_subscription("sub_1"), _subscription("sub_2")]
        ))
        subscriptions = await customers.list_subscriptions(
            "proj_1", "cust_1", environment="sandbox"
        ).all()
        assert [s.id for s in subscriptions] == ["sub_1", "sub_2"]
        assert isinstance(subscriptions[0], Subscription)
        assert api.params(0)["environment"] == "sandbox"

    async def test_list_purchases(self, api, customers):
        api.add_json("GET", CUSTOMER + "/purchases", _list_body([{
            "object": "purchase",
            "id": "purch_1",
            "customer_id": "cust_1",
            "purchased_at": 1,
            "status": "owned",
            "environment": "production",
            "store": "play_store",
        }]))
        purchases = await customers.list_purchases("proj_1", "cust_1").all()
        assert purchases[0].quantity == 1
        assert "environment" not in api.params(0)

    async def test_list_invoices(self, api, customers):
        api.add_json("GET", CUSTOMER + "/invoices", _list_body([{
            "object": "invoice",
            "id": "inv_1",
            "issued_at": 1,
            "line_items": [{"product_identifier": "monthly", "quantity": 1}],
        }]))
        invoices = await customers.list_invoices("proj_1", "cust_1").all()
        assert invoices[0].line_items[0].product_identifier == "monthly"

    async def test_get_invoice_file_returns_redirect(self, api, customers):
        api.add(
            "GET", CUSTOMER + "/invoices/inv_1/file",
            httpx.Response(302, headers={"Location": "https://files.example.com/inv_1.pdf"}),
        )
        response = await customers.get_invoice_file("proj_1", "cust_1", "inv_1")
        assert response.status_code == 302
        assert response.headers["location"] == "https://files.example.com/inv_1.pdf"
        assert len(api.requests) == 1


class TestVirtualCurrencies:
    async def test_list_balances(self, api, customers):
        api.add_json("GET", CUSTOMER + "/virtual_currencies", _balances(("GLD", 10), ("SLV", 0)))
        balances = await customers.list_virtual_currency_balances(
            "proj_1", "cust_1", include_empty_balances=True
        ).all()
        assert [(b.currency_code, b.balance) for b in balances] == [("GLD", 10), ("SLV", 0)]
        assert api.params(0)["include_empty_balances"] == "true"

    async def test_create_transaction_with_idempotency_key(self, api, customers):
        api.add_json("POST", CUSTOMER + "/virtual_currencies/transactions", _balances(("GLD", 15)))
        result = await customers.create_virtual_currency_transaction(
            "proj_1", "cust_1",
            CreateVirtualCurrencyTransactionRequest(adjustments={"GLD": 5}, reference="order_9"),
            idempotency_key="idem_1",
        )
        request = api.requests[0]
        assert result.items[0].balance == 15
        assert request.headers["Idempotency-Key"] == "idem_1"
        assert _body(request) == {"adjustments": {"GLD": 5}, "reference": "order_9"}
        assert request.url.query == b""

    async def test_create_transaction_without_idempotency_key(self, api, customers):
        api.add_json("POST", CUSTOMER + "/virtual_currencies/transactions", _balances(("GLD", 15)))
        await customers.create_virtual_currency_transaction(
            "proj_1", "cust_1", CreateVirtualCurrencyTransactionRequest(adjustments={"GLD": 5})
        )
        assert "Idempotency-Key" not in api.requests[0].headers
        assert _body(api.requests[0]) == {"adjustments": {"GLD": 5}}

    async def test_update_balance(self, api, customers):
        api.add_json("POST", CUSTOMER + "/virtual_currencies/update_balance", _balances(("GLD", 0)))
        await customers.update_virtual_currency_balance(
            "proj_1", "cust_1",
            UpdateVirtualCurrencyBalanceRequest(adjustments={"GLD": 0}),
            include_empty_balances=False,
        )
        assert api.params(0)["include_empty_balances"] == "false"

    def test_adjustments_must_not_be_empty(self):
        with pytest.raises(ValueError):
            UpdateVirtualCurrencyBalanceRequest(adjustments={})


class TestClientResolution:
    async def test_service_uses_registered_client(self, api):
        service = CustomerService()
        connect("sk_test_1", transport=api.transport)
        api.add_json("GET", CUSTOMER, _customer())
        customer = await service.get("proj_1", "cust_1")
        assert customer.id == "cust_1"

    async def test_service_with_alias(self, api):
        connect("sk_test_1", alias="secondary", transport=api.transport)
        api.add_json("GET", CUSTOMER, _customer())
        await CustomerService(alias="secondary").get("proj_1", "cust_1")
        assert api.requests[0].headers["authorization"] == "Bearer sk_test_1"

    def test_unconnected_service_raises(self):
        with pytest.raises(NotConnected):
            CustomerService().list("proj_1")
