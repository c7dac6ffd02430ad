"""
Tests for the Marketplace facade
"""

import pytest

from marketplace import create_marketplace
from marketplace.db import FileStore
from marketplace.errors import UnauthorizedError


@pytest.mark.asyncio
async def test_create_marketplace_seeds_once(store):
    market = await create_marketplace(store)
    await create_marketplace(store)

    assert len(await market.catalog.list()) == 3


@pytest.mark.asyncio
async def test_create_marketplace_uses_default_store():
    market = await create_marketplace()
    assert len(await market.catalog.list()) == 3


@pytest.mark.asyncio
async def test_checkout_requires_login(marketplace):
    with pytest.raises(UnauthorizedError):
        await marketplace.checkout()


@pytest.mark.asyncio
async def test_full_purchase_flow(marketplace, sample_user):
    await marketplace.start()
    user = await marketplace.identity.signup(**sample_user)
    await marketplace.identity.login(sample_user["email"], sample_user["password"])

    products = await marketplace.catalog.list()
    await marketplace.cart.add(products[0].id, 2)  # 9.99
    await marketplace.cart.add(products[2].id)  # 4.50

    order = await marketplace.checkout()

    assert order.buyer_id == user.id
    assert order.total == 24.48
    assert len(order.items) == 2
    assert await marketplace.cart.list() == []

    history = await marketplace.order_history(user.id)
    assert [h["id"] for h in history] == [order.id]
    assert history[0]["items"][0]["title"] == "Pro Photo Presets Pack"


@pytest.mark.asyncio
async def test_checkout_drops_removed_products(marketplace, sample_user):
    await marketplace.start()
    await marketplace.identity.signup(**sample_user)
    await marketplace.identity.login(sample_user["email"], sample_user["password"])
    products = await marketplace.catalog.list()
    await marketplace.cart.add(products[0].id)
    await marketplace.cart.add(products[1].id)

    await marketplace.catalog.remove(products[1].id)
    summary = await marketplace.cart_summary()
    order = await marketplace.checkout()

    assert summary.missing == [products[1].id]
    assert [i.product_id for i in order.items] == [products[0].id]
    assert order.total == 9.99


@pytest.mark.asyncio
async def test_state_survives_restart_with_file_store(tmp_path, sample_user):
    path = tmp_path / "market.json"
    first = await create_marketplace(FileStore(path))
    await first.identity.signup(**sample_user)
    await first.identity.login(sample_user["email"], sample_user["password"])

    second = await create_marketplace(FileStore(path))

    assert (await second.identity.current_user()).email == sample_user["email"]
    assert len(await second.catalog.list()) == 3


def test_money():
    from marketplace.app import Marketplace

    assert Marketplace.money(9.99) == "$9.99"
    assert Marketplace.money("14") == "$14.00"
