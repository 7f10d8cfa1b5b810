"""
RevenueCat Quick Start Example

A simple example to get you started with the RevenueCat client in 5 minutes.

Features covered:
- Connecting with an API key
- Paging through customers
- Fetching and updating one customer
- Virtual currency balances
- Tracing requests

Run with: REVENUECAT_API_KEY=sk_... REVENUECAT_PROJECT_ID=proj... python example_quickstart.py
"""

import asyncio
import os

from revenuecat import (
    CreateVirtualCurrencyTransactionRequest,
    CustomerAttributeInput,
    CustomerService,
    RevenueCatError,
    SetCustomerAttributesRequest,
    add_listener,
    connect,
    disconnect,
    enable_tracing,
)


# ============================================================================
# 1. ASYNC MAIN FUNCTION
# ============================================================================


async def main():
    """Run the quickstart example."""

    project_id = os.environ["REVENUECAT_PROJECT_ID"]

    # API key is read from REVENUECAT_API_KEY
    connect()
    print("✅ Connected to RevenueCat\n")

    enable_tracing(slow_request_ms=500)
    add_listener(lambda event: print(f"   ↳ {event.method} {event.path} {event.status_code} ({event.duration_ms:.0f}ms)"))

    customers = CustomerService()

    try:
        # ====== LIST ======
        print("1️⃣  LIST - First page of customers")
        page = await customers.list(project_id, limit=5).first_page()
        for customer in page.items:
            print(f"   {customer.id} (last seen: {customer.last_seen_country})")
        if not page.items:
            print("   No customers yet")
            return

        # ====== ITERATE ======
        print("\n2️⃣  ITERATE - Walking every page")
        count = 0
        async for _ in customers.list(project_id, limit=100):
            count += 1
        print(f"   Total customers: {count}")

        # ====== GET ======
        customer_id = page.items[0].id
        print(f"\n3️⃣  GET - Fetching {customer_id} with attributes")
        customer = await customers.get(project_id, customer_id, expand=["attributes"])
        for attribute in customer.attributes.items if customer.attributes else []:
            print(f"   {attribute.name} = {attribute.value}")

        # ====== UPDATE ======
        print("\n4️⃣  UPDATE - Setting a custom attribute")
        await customers.set_attributes(
            project_id,
            customer_id,
            SetCustomerAttributesRequest(
                attributes=[CustomerAttributeInput(name="quickstart", value="yes")]
            ),
        )
        print("   Attribute saved")

        # ====== ENTITLEMENTS ======
        print("\n5️⃣  ENTITLEMENTS - Active entitlements")
        for entitlement in await customers.list_active_entitlements(project_id, customer_id).all():
            print(f"   {entitlement.entitlement_id} (expires: {entitlement.expires_at})")

        # ====== VIRTUAL CURRENCY ======
        print("\n6️⃣  VIRTUAL CURRENCY - Granting 10 coins")
        balances = await customers.create_virtual_currency_transaction(
            project_id,
            customer_id,
            CreateVirtualCurrencyTransactionRequest(adjustments={"COIN": 10}, reference="quickstart"),
            idempotency_key=f"quickstart-{customer_id}",
        )
        for balance in balances.items:
            print(f"   {balance.currency_code}: {balance.balance}")

        print("\n✅ All operations completed successfully!")

    except RevenueCatError as e:
        print(f"\n❌ Error: {e}")

    finally:
        await disconnect()
        print("\n✅ Disconnected from RevenueCat")


# ============================================================================
# 2. RUN THE EXAMPLE
# ============================================================================

if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("REVENUECAT QUICKSTART EXAMPLE")
    print("=" * 60 + "\n")

    asyncio.run(main())
