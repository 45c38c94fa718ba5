"""Unit tests for the order repository."""

from __future__ import annotations

from decimal import Decimal

from talanta_gallery.core.database.entities import Order, OrderItem


async def _order(repos, email: str, total: str, status: str = "pending", items=()) -> Order:
    order = await repos.orders.create(
        Order(customer_email=email, customer_name="Collector", total_amount=Decimal(total), status=status),
        commit=False,
    )
    await repos.orders.add_items(
        [OrderItem(order_id=order.id, artwork_id=artwork_id, price=Decimal(price)) for artwork_id, price in items]
    )
    await repos.commit()
    return order


class TestItems:
    async def test_items_joined_to_artworks(self, repos, artist, make_artwork):
        artwork = await make_artwork(artist, title="Lamu Doors", price="800.00")
        order = await _order(repos, "a@example.com", "800.00", items=[(artwork.id, "800.00"), (None, "120.00")])

        rows = await repos.orders.get_items_with_artworks(order.id)

        assert [(item.price, art.title if art else None) for item, art in rows] == [
            (Decimal("800.00"), "Lamu Doors"),
            (Decimal("120.00"), None),
        ]
        assert len(await repos.orders.get_items(order.id)) == 2

    async def test_address_round_trip(self, repos):
        order = Order(customer_email="a@example.com", customer_name="A", total_amount=Decimal("1"))
        order.set_customer_address({"city": "Mombasa"})
        order = await repos.orders.create(order)

        assert (await repos.orders.get_by_id(order.id)).get_customer_address() == {"city": "Mombasa"}

    async def test_broken_address_json(self):
        order = Order(customer_email="a@example.com", customer_name="A", total_amount=Decimal("1"))
        order.customer_address = "{not json"

        assert order.get_customer_address() == {}


class TestListings:
    async def test_status_filter(self, repos):
        await _order(repos, "a@example.com", "10.00", status="paid")
        await _order(repos, "b@example.com", "20.00")

        assert [o.customer_email for o in await repos.orders.list_orders(status="paid")] == ["a@example.com"]
        assert len(await repos.orders.list_orders()) == 2

    async def test_list_for_artist(self, repos, make_artist, make_artwork):
        kamau = await make_artist(name="Wanjiru Kamau")
        otieno = await make_artist(name="Amani Otieno")
        first = await make_artwork(kamau, title="First")
        second = await make_artwork(kamau, title="Second")
        other = await make_artwork(otieno, title="Other")
        both = await _order(repos, "both@example.com", "3.00", items=[(first.id, "1.00"), (second.id, "2.00")])
        await _order(repos, "other@example.com", "1.00", items=[(other.id, "1.00")])

        orders = await repos.orders.list_for_artist(kamau.id)

        assert [o.id for o in orders] == [both.id]


class TestRevenue:
    async def test_sums_completed_orders(self, repos):
        await _order(repos, "a@example.com", "1000.00", status="completed")
        await _order(repos, "b@example.com", "250.50", status="completed")
        await _order(repos, "c@example.com", "999.00", status="cancelled")

        assert await repos.orders.revenue() == Decimal("1250.50")
        assert await repos.orders.revenue("cancelled") == Decimal("999")

    async def test_no_orders(self, repos):
        assert await repos.orders.revenue() == Decimal("0")
