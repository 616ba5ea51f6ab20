#!/usr/bin/env python
import os

from sdk.pystore import StoreClient, StoreAPIError


def main():
    c = StoreClient(
        base_url=os.getenv("STORE_API_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", "secret-key-123"),
    )

    # -----------------------------
    # Browse the catalog
    # -----------------------------
    print("Listing electronics, two per page...")
    print(c.list_products(category="Electronics", limit=2))

    print("\nSearching for 'phone'...")
    print(c.search_products("phone"))

    print("\nCatalog statistics...")
    print(c.stats())

    # -----------------------------
    # Create, update, delete
    # -----------------------------
    print("\nCreating a product...")
    kettle = c.create_product("Kettle", "Electric kettle, 1.7L", 35.5, "kitchen", in_stock=True)
    print(kettle)

    print("\nMarking it out of stock and changing the price...")
    print(c.update_product(kettle["id"], price=29.99, in_stock=False))

    print("\nDeleting it...")
    print(c.delete_product(kettle["id"]))

    # -----------------------------
    # Error responses
    # -----------------------------
    print("\nCreating an invalid product...")
    try:
        c.create_product("", "no name", -1, "kitchen")
    except StoreAPIError as e:
        print(e, e.details)

    print("\nFetching the deleted product...")
    try:
        c.get_product(kettle["id"])
    except StoreAPIError as e:
        print(e)


if __name__ == "__main__":
    main()
