"""Tests for the JSON-file repositories, against a temp directory."""

import json
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from agrimarket.domain.exceptions import InsufficientStock, PersistenceError
from agrimarket.domain.model.order import Order, OrderItem, OrderStatus, PaymentMethod
from agrimarket.domain.model.stock_pool import StockPool
from agrimarket.domain.model.user import User, UserRole
from agrimarket.domain.model.value_objects import Money, Quantity
from agrimarket.domain.service.stock_ledger import StockLedger
from agrimarket.infrastructure.persistence.json_order_repository import JsonOrderRepository
from agrimarket.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from agrimarket.infrastructure.persistence.json_user_repository import JsonUserRepository
from tests.fakes import BUYER, FARMER, OTHER_FARMER, make_address, make_product


def _order(buyer_id=BUYER.id, farmer_id=FARMER.id) -> Order:
    item = OrderItem(
        product_id="1",
        product_name="Tomatoes",
        farmer_id=farmer_id,
        quantity=Quantity(3),
        price_per_unit=Money.of("30.00"),
        unit="kg",
        stock_pool=StockPool.INDUSTRIAL,
    )
    return Order.place(
        buyer_id, [item], make_address(), PaymentMethod.ONLINE, notes="Leave at gate"
    )


class TestJsonProductRepository:

    def test_creates_empty_file(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "data" / "products.json")
        assert repo.list_all() == []
        assert repo.next_id() == "1"

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "products.json"
        JsonProductRepository(path).save(make_product(id="1", local=4, industrial=9))

        product = JsonProductRepository(path).get_by_id("1")

        assert product.name == "Tomatoes"
        assert product.price_per_unit == Money.of("30.00")
        assert (product.local_stock, product.industrial_stock) == (4, 9)

    def test_save_replaces_existing_record(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        product = make_product(id="1")
        repo.save(product)
        product.local_stock = 2
        repo.save(product)

        assert len(repo.list_all()) == 1
        assert repo.get_by_id("1").local_stock == 2
        assert repo.next_id() == "2"

    def test_list_by_farmer(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product(id="1"))
        repo.save(make_product(id="2", farmer_id=OTHER_FARMER.id))
        assert [p.id for p in repo.list_by_farmer(OTHER_FARMER.id)] == ["2"]

    def test_corrupt_file_raises_persistence_error(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(PersistenceError, match="Cannot read"):
            JsonProductRepository(path).list_all()


class TestJsonOrderRepository:

    def test_save_assigns_sequential_ids(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        first, second = _order(), _order()
        repo.save(first)
        repo.save(second)
        assert (first.id, second.id) == (1, 2)

    def test_round_trip_keeps_snapshot(self, tmp_path):
        path = tmp_path / "orders.json"
        order = _order()
        JsonOrderRepository(path).save(order)

        loaded = JsonOrderRepository(path).get_by_id(order.id)

        assert loaded.buyer_id == BUYER.id
        assert loaded.status == OrderStatus.PENDING
        assert loaded.payment_method == PaymentMethod.ONLINE
        assert loaded.total_amount == Money.of("90.00")
        assert loaded.items[0].stock_pool == StockPool.INDUSTRIAL
        assert loaded.items[0].quantity == Quantity(3)
        assert loaded.shipping_address == make_address()
        assert loaded.notes == "Leave at gate"
        assert loaded.created_at == order.created_at

    def test_status_change_is_persisted(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.save(order)
        order.transition_to(OrderStatus.CONFIRMED)
        repo.save(order)

        assert repo.get_by_id(order.id).status == OrderStatus.CONFIRMED
        assert len(json.loads((tmp_path / "orders.json").read_text())) == 1

    def test_lists_newest_first(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        mine = [_order(), _order()]
        for order in mine:
            repo.save(order)
        repo.save(_order(buyer_id="someone-else", farmer_id=OTHER_FARMER.id))

        assert [o.id for o in repo.list_by_buyer(BUYER.id)] == [2, 1]
        assert [o.id for o in repo.list_by_farmer(FARMER.id)] == [2, 1]
        assert [o.id for o in repo.list_by_farmer(OTHER_FARMER.id)] == [3]

    def test_missing_order(self, tmp_path):
        assert JsonOrderRepository(tmp_path / "orders.json").get_by_id(7) is None


class TestJsonUserRepository:

    def test_save_and_lookup(self, tmp_path):
        repo = JsonUserRepository(tmp_path / "users.json")
        repo.save(FARMER)
        repo.save(BUYER)

        assert repo.get_by_id(FARMER.id) == FARMER
        assert repo.get_by_email("ASHA@home.in") == BUYER
        assert repo.get_by_email("nobody@home.in") is None

    def test_next_id(self, tmp_path):
        repo = JsonUserRepository(tmp_path / "users.json")
        assert repo.next_id() == "u1"
        repo.save(User(id="u7", name="Kiran", email="kiran@home.in", role=UserRole.FARMER))
        assert repo.next_id() == "u8"


class TestConcurrentStockWrites:

    def test_reserves_across_products_in_one_file_lose_no_writes(self, tmp_path):
        path = tmp_path / "products.json"
        repo = JsonProductRepository(path)
        product_ids = ["1", "2", "3", "4"]
        for pid in product_ids:
            repo.save(make_product(id=pid, name=f"Crop {pid}", local=50, industrial=0))
        ledger = StockLedger(repo)
        barrier = threading.Barrier(8)

        def buy(n):
            if n < 8:
                barrier.wait()
            try:
                ledger.reserve(product_ids[n % 4], StockPool.LOCAL, 1)
                return 1
            except InsufficientStock:
                return 0

        with ThreadPoolExecutor(max_workers=8) as pool:
            reserved = sum(pool.map(buy, range(240)))

        left = {p.id: p.local_stock for p in JsonProductRepository(path).list_all()}
        assert reserved == 200
        assert left == {pid: 0 for pid in product_ids}
        assert reserved + sum(left.values()) == 4 * 50
