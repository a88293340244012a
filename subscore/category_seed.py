"""Category seed script — fills the read-only categories table.

The API never creates categories itself, so a fresh database needs this
once before the frontend can register subscriptions.

Usage:
    python -m subscore.category_seed
"""

import asyncio


async def main():
    # Ensure .env is loaded before importing settings
    from dotenv import load_dotenv
    load_dotenv()

    from sqlalchemy import select
    from subscore.constants import DEFAULT_CATEGORIES
    from subscore.db.session import async_session_factory, engine
    from subscore.models import Base
    from subscore.models.category import Category

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as db:
        result = await db.execute(select(Category.name))
        existing = set(result.scalars().all())

        missing = [name for name in DEFAULT_CATEGORIES if name not in existing]
        if not missing:
            print(f"All {len(DEFAULT_CATEGORIES)} default categories already exist")
            await engine.dispose()
            return

        db.add_all(Category(name=name) for name in missing)
        await db.commit()

        print(f"Created {len(missing)} categories: {', '.join(missing)}")
        print()
        print("Next steps:")
        print("  1. Start the API:  uvicorn subscore.app:app --reload")
        print("  2. Register a user:  POST /api/users/register")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
