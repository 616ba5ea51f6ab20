import asyncio
import os

from sdk.pystore import StoreClient, StoreAPIError


async def create_one(client, n):
    try:
        product = await client.create_product_async(
            "Desk Lamp", "LED desk lamp", 25, "furniture", in_stock=True
        )
        print(f"✅ request {n} created product {product['id']}")
        return product
    except StoreAPIError as e:
        print(f"❌ request {n} failed: {e}")
    except Exception as e:
        print(f"❌ request {n} unexpected failure: {e}")


async def main():
    c = StoreClient(
        base_url=os.getenv("STORE_API_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", "secret-key-123"),
    )

    # Identical payloads sent at once must still produce distinct records
    print("\n⚡ Creating 5 identical products concurrently...")
    created = await asyncio.gather(*(create_one(c, n) for n in range(5)))
    ids = {p["id"] for p in created if p}
    print(f"\n🆔 {len(ids)} distinct ids")

    print("📊 Stats:", c.stats())

    for product_id in ids:
        c.delete_product(product_id)
    print("🧹 Cleaned up")


if __name__ == "__main__":
    asyncio.run(main())
