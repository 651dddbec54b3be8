from unittest.mock import Mock

import pytest

from url_router import Router


@pytest.fixture
def funct():
    """Mock function for testing purposes."""
    return Mock(__name__="Mock")


@pytest.fixture
def router():
    """Router without logging configuration."""
    return Router(name="test", configure_logs=False)


@pytest.fixture
def shop_router(router):
    """Router serving users, contact, home and shop routes."""

    def routes(collection):
        collection.get("/users/{num}", lambda params: f"User page: {params[0]}")
        collection.get(
            "/users/{num}/posts/{num}",
            lambda params: f"User {params[0]}, post: {params[1]}",
        ).set_name("user.post")
        collection.get("contact", lambda params: "Contact page", "ctt")
        collection.get("", lambda params: "Home page").set_name("home")
        collection.get("shop", "support.Shop::index")
        collection.get("shop/products", "support.Shop::list_products")
        collection.get(
            "shop/products/{title}/{num}/([a-z]{2})",
            "support.Shop::show_product/1/0/2",
        )

    router.serve("{scheme}://domain.tld:{num}", routes)
    return router
