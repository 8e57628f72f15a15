import asyncio
import os

from sdk.pystore import StoreAPIError, StoreClient


async def create_one(client, n):
    try:
        product = await client.create_product_async(f"Gadget {n}", 10 + n, "gadgets")
        print(f"✅ created {product['name']} -> {product['id']}")
        return product
    except StoreAPIError as e:
        print(f"❌ create {n} failed: {e.status_code} {e.message}")
        return None


async def main():
    c = StoreClient(
        base_url=os.environ.get("PRODUCTS_API_URL", "http://127.0.0.1:3000"),
        api_key=os.environ.get("API_KEY", "SECRET_API_KEY"),
    )

    print("\n⚡ Creating products concurrently...")
    created = await asyncio.gather(*(create_one(c, n) for n in range(10)))
    ids = [p["id"] for p in created if p]
    print(f"\n🆔 {len(ids)} created, {len(set(ids))} distinct ids")

    print("\n📊 Final stats:", c.stats())

if __name__ == "__main__":
    asyncio.run(main())
