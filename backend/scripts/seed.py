"""Seed script: creates a demo tenant, one user per role, and sample categories.

Idempotent: checks for existing records before inserting.
Run: python scripts/seed.py
"""
import asyncio
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from assetdesk.core.config import settings
from assetdesk.core.security import hash_password
from assetdesk.models.category import AssetCategory
from assetdesk.models.tenant import Tenant
from assetdesk.models.user import User

DEMO_USERS = [
    ("admin@demo.example", "Ada", "Admin", "ADMIN"),
    ("manager@demo.example", "Max", "Manager", "MANAGER"),
    ("user@demo.example", "Uma", None, "USER"),
]

DEMO_CATEGORIES = [
    (
        "Laptops",
        [
            {"key": "ram_gb", "label": "RAM (GB)", "type": "number", "required": True},
            {"key": "os", "label": "Operating System", "type": "select", "required": False,
             "options": ["macOS", "Windows", "Linux"]},
            {"key": "encrypted", "label": "Disk Encrypted", "type": "boolean", "required": False},
        ],
    ),
    (
        "Software Licenses",
        [
            {"key": "seats", "label": "Seats", "type": "number", "required": True},
            {"key": "renewal", "label": "Renewal Date", "type": "date", "required": False},
            {"key": "vendor", "label": "Vendor", "type": "text", "required": False},
        ],
    ),
]


# ─── Upsert helpers ───────────────────────────────────────────────────────────

async def _upsert_tenant(db: AsyncSession, name: str, slug: str) -> Tenant:
    tenant = (await db.execute(select(Tenant).where(Tenant.slug == slug))).scalars().first()
    if tenant:
        print(f"  [skip] Tenant {slug}")
        return tenant
    tenant = Tenant(name=name, slug=slug, plan="PROFESSIONAL", is_active=True)
    db.add(tenant)
    await db.flush()
    print(f"  [new]  Tenant {slug}")
    return tenant


async def _upsert_user(db: AsyncSession, tenant: Tenant, email: str, first: str,
                       last: str | None, role: str) -> User:
    result = await db.execute(select(User).where(User.email == email, User.tenant_id == tenant.id))
    user = result.scalars().first()
    if user:
        print(f"  [skip] User {email}")
        return user
    user = User(
        tenant_id=tenant.id, email=email, first_name=first, last_name=last,
        password_hash=hash_password("changeme123"),
        role=role, is_active=True,
    )
    db.add(user)
    await db.flush()
    print(f"  [new]  User {email} ({role})")
    return user


async def _upsert_category(db: AsyncSession, tenant: Tenant, name: str, field_schema: list[dict]) -> AssetCategory:
    result = await db.execute(
        select(AssetCategory).where(AssetCategory.tenant_id == tenant.id, AssetCategory.name == name)
    )
    category = result.scalars().first()
    if category:
        print(f"  [skip] Category {name}")
        return category
    category = AssetCategory(tenant_id=tenant.id, name=name, field_schema=field_schema, is_active=True)
    db.add(category)
    await db.flush()
    print(f"  [new]  Category {name} ({len(field_schema)} custom fields)")
    return category


async def main() -> None:
    engine = create_async_engine(settings.DATABASE_URL)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async with session_factory() as db:
        print("Seeding tenant...")
        tenant = await _upsert_tenant(db, "Demo Organization", "demo")

        print("Seeding users...")
        for email, first, last, role in DEMO_USERS:
            await _upsert_user(db, tenant, email, first, last, role)

        print("Seeding categories...")
        for name, field_schema in DEMO_CATEGORIES:
            await _upsert_category(db, tenant, name, field_schema)

        await db.commit()

    await engine.dispose()
    print("Done.")


if __name__ == "__main__":
    asyncio.run(main())
