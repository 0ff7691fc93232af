"""Demo catalog — five categories, two suppliers, four products.

Loaded by `tienda seed` or at startup with TIENDA_SEED_ON_STARTUP=true.
Does nothing when the catalog already has categories.
"""

import uuid

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tienda.db.models import Category, Product, Supplier

logger = structlog.get_logger()

CATEGORIES = {
    "SOBREMESA": "d69cf3db-b77d-4181-b3cd-5ca8107fb6a9",
    "PORTATILES": "6dbcbf5e-8e1c-47cc-8578-7b0a33ebc154",
    "RATONES": "9def16db-362b-44c4-9fc9-77117758b5b0",
    "PLACAS BASE": "8c5c06ba-49d6-46b6-85cc-8246c0f362bc",
    "OTROS": "bb51d00d-13fb-4b09-acc9-948185636f79",
}

SUPPLIERS = [
    ("f47a2544-5b87-49c7-8931-1b9d5cfbdf01", "Proveedor 1", 1, "Direccion 1", "SOBREMESA"),
    ("f47a2544-5b87-49c7-8931-1b9d5cfbdf02", "Proveedor 2", 2, "Direccion 2", "PLACAS BASE"),
]

# (id, name, weight, price, img, stock, category)
PRODUCTS = [
    ("d69cf3db-b77d-4181-b3cd-5ca8107fb6a0", "Producto A", 1, 100, "productA.jpg", 10, "SOBREMESA"),
    ("76549b87-23a2-4065-8a86-914207290329", "Producto B", 2, 150, "productB.jpg", 15, "PORTATILES"),
    ("3512e012-7028-405c-8397-b39886006212", "Producto C", 3, 200, "productC.jpg", 20, "RATONES"),
    ("98765432-1234-5678-90ab-cdef01234567", "Producto D", 4, 250, "productD.jpg", 25, "PLACAS BASE"),
]


async def seed_catalog(db: AsyncSession) -> bool:
    """Insert the demo catalog. Returns False if data was already present."""
    existing = (await db.execute(select(func.count()).select_from(Category))).scalar_one()
    if existing:
        logger.info("seed.skipped", categories=existing)
        return False

    for name, cid in CATEGORIES.items():
        db.add(Category(id=uuid.UUID(cid), name=name))

    for sid, name, contact, address, category in SUPPLIERS:
        db.add(
            Supplier(
                id=uuid.UUID(sid),
                name=name,
                contact=contact,
                address=address,
                category_id=uuid.UUID(CATEGORIES[category]),
            )
        )

    for pid, name, weight, price, img, stock, category in PRODUCTS:
        db.add(
            Product(
                id=uuid.UUID(pid),
                name=name,
                weight=weight,
                price=price,
                img=img,
                stock=stock,
                description=f"Descripción del producto {name[-1]}",
                category_id=uuid.UUID(CATEGORIES[category]),
            )
        )

    await db.commit()
    logger.info(
        "seed.loaded",
        categories=len(CATEGORIES),
        suppliers=len(SUPPLIERS),
        products=len(PRODUCTS),
    )
    return True
