"""End-to-end tests for the click CLI, against a temp data directory."""

import pytest
from click.testing import CliRunner

from agrimarket.infrastructure import bootstrap
from agrimarket.infrastructure.cli.main import cli

ADDRESS_ARGS = [
    "--street", "12 Market Road",
    "--city", "Nashik",
    "--state", "Maharashtra",
    "--pincode", "422001",
    "--phone", "9876543210",
]


@pytest.fixture()
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("AGRIMARKET_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("AGRIMARKET_NOTIFIER", "none")
    monkeypatch.setattr(bootstrap, "configure_logging", lambda settings: None)
    bootstrap.container.cache_clear()
    yield CliRunner()
    bootstrap.container.cache_clear()


@pytest.fixture()
def market(runner):
    """Farmer u1 with Tomatoes (#1), individual buyer u2, industrial buyer u3."""
    for name, email, role in [
        ("Ravi", "ravi@farm.in", "farmer"),
        ("Asha", "asha@home.in", "individual"),
        ("Agro Foods", "buy@agro.in", "industrial"),
    ]:
        result = runner.invoke(cli, ["user", "add", "--name", name, "--email", email, "--role", role])
        assert result.exit_code == 0, result.output

    result = runner.invoke(
        cli,
        ["product", "add", "--as", "u1", "--name", "Tomatoes", "--price", "30",
         "--unit", "kg", "--local", "10", "--industrial", "20"],
    )
    assert result.exit_code == 0, result.output
    return runner


def _place(runner, actor="u2", items="1:3"):
    return runner.invoke(cli, ["order", "place", "--as", actor, "--items", items, *ADDRESS_ARGS])


class TestUserAndProductCommands:

    def test_user_add_and_list(self, runner):
        result = runner.invoke(
            cli, ["user", "add", "--name", "Ravi", "--email", "ravi@farm.in", "--role", "farmer"]
        )
        assert result.exit_code == 0
        assert "User u1 'Ravi' registered as farmer" in result.output

        listed = runner.invoke(cli, ["user", "list"])
        assert "ravi@farm.in" in listed.output

    def test_duplicate_user_fails(self, market):
        result = market.invoke(
            cli, ["user", "add", "--name", "R", "--email", "ravi@farm.in", "--role", "farmer"]
        )
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_product_list(self, market):
        result = market.invoke(cli, ["product", "list"])
        assert "Tomatoes" in result.output
        assert "30.00" in result.output

    def test_buyer_cannot_add_product(self, market):
        result = market.invoke(
            cli, ["product", "add", "--as", "u2", "--name", "Okra", "--price", "5", "--unit", "kg"]
        )
        assert result.exit_code == 1
        assert "Only farmers can add products" in result.output

    def test_set_stock(self, market):
        result = market.invoke(cli, ["product", "stock", "--as", "u1", "--id", "1", "--industrial", "0"])
        assert result.exit_code == 0
        assert "local=10, industrial=0" in result.output


class TestOrderCommands:

    def test_place_order(self, market):
        result = _place(market)
        assert result.exit_code == 0, result.output
        assert "Order placed successfully" in result.output
        assert "Order #1" in result.output
        assert "Rs. 90.00" in result.output

    def test_insufficient_stock(self, market):
        result = _place(market, items="1:11")
        assert result.exit_code == 1
        assert "Insufficient local stock for Tomatoes. Available: 10" in result.output

    def test_industrial_buyer_uses_industrial_pool(self, market):
        assert _place(market, actor="u3", items="1:15").exit_code == 0
        product = bootstrap.container().product_repo.get_by_id("1")
        assert (product.local_stock, product.industrial_stock) == (10, 5)

    def test_bad_items_format(self, market):
        result = _place(market, items="tomatoes")
        assert result.exit_code == 2
        assert "Expected 'ProductId:Quantity'" in result.output

    def test_unknown_user(self, market):
        result = _place(market, actor="u99")
        assert result.exit_code == 1
        assert "Not authorized" in result.output

    def test_status_lifecycle_and_receipt(self, market):
        _place(market)
        for status in ("confirmed", "processing", "shipped", "delivered"):
            result = market.invoke(cli, ["order", "status", "--as", "u1", "--id", "1", "--to", status])
            assert result.exit_code == 0, result.output
            assert f"Order #1 is now {status}." in result.output

        rejected = market.invoke(cli, ["order", "status", "--as", "u1", "--id", "1", "--to", "cancelled"])
        assert rejected.exit_code == 1
        assert "Cannot change status from 'delivered' to 'cancelled'" in rejected.output

        receipt = market.invoke(cli, ["order", "receipt", "--as", "u2", "--id", "1"])
        assert receipt.exit_code == 0
        assert "Receipt No: 00000001" in receipt.output

    def test_show_and_listings(self, market):
        _place(market)

        shown = market.invoke(cli, ["order", "show", "--as", "u2", "--id", "1"])
        assert "Tomatoes" in shown.output

        mine = market.invoke(cli, ["order", "mine", "--as", "u2"])
        assert "pending" in mine.output

        farmer = market.invoke(cli, ["order", "farmer", "--as", "u1"])
        assert "Rs. 90.00" in farmer.output

        none = market.invoke(cli, ["order", "mine", "--as", "u3"])
        assert "No orders found." in none.output
