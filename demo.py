#!/usr/bin/env python
import os

from sdk.products_client import ProductsAPIError, ProductsClient


def main():
    c = ProductsClient(
        base_url=os.getenv("PRODUCTS_API_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", "supersecretkey123"),
    )

    # -----------------------------
    # List the seed catalog
    # -----------------------------
    print("Listing products...")
    print(c.list_products())

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    lamp = c.create_product("Desk Lamp", "LED desk lamp", 34.5, "lighting", True)
    bulb = c.create_product("Smart Bulb", "Wi-Fi bulb", 12.0, "lighting", False)
    print(lamp)
    print(bulb)

    # -----------------------------
    # Filter, search and paginate
    # -----------------------------
    print("\nLighting, page 2 of size 1...")
    print(c.list_products(category="Lighting", page=2, limit=1))

    print("\nSearching for 'widget'...")
    print(c.list_products(search="widget"))

    # -----------------------------
    # Update and delete
    # -----------------------------
    print("\nMarking the bulb as in stock...")
    print(c.update_product(bulb["id"], "Smart Bulb", "Wi-Fi bulb", 11.0, "lighting", True))

    print("\nDeleting the lamp...")
    print(c.delete_product(lamp["id"]))

    try:
        c.get_product(lamp["id"])
    except ProductsAPIError as e:
        print(f"Lamp is gone: {e}")

    # -----------------------------
    # Stats
    # -----------------------------
    print("\nStats...")
    print(c.stats())


if __name__ == "__main__":
    main()
