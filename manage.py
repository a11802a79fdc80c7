#!/usr/bin/env python3
"""
AIROS management CLI.

Usage:
    python manage.py serve          Start the API server
    python manage.py init-db        Apply the database schema
    python manage.py create-admin   Create the configured admin account
    python manage.py seed           Load sample suppliers and products
"""

import argparse
import asyncio
import sys

from airos.config import configure_logging, get_logger, get_settings

logger = get_logger("manage")


SAMPLE_SUPPLIERS = [
    {
        "name": "TechCorp Solutions",
        "code": "TECH001",
        "contact_person": {"name": "John Smith", "email": "john@techcorp.com", "phone": "+1-555-0101"},
        "address": {
            "street": "123 Tech Street",
            "city": "Silicon Valley",
            "state": "CA",
            "zip_code": "94025",
            "country": "USA",
        },
        "categories": ["Electronics"],
        "credit_limit": 50000,
    },
    {
        "name": "Home Living Supply",
        "code": "HLS002",
        "contact_person": {"name": "Lisa Wilson", "email": "lisa@homeliving.com", "phone": "+1-555-0104"},
        "address": {
            "street": "321 Design Drive",
            "city": "Los Angeles",
            "state": "CA",
            "zip_code": "90001",
            "country": "USA",
        },
        "categories": ["Home & Garden"],
        "payment_terms": "net_15",
        "credit_limit": 20000,
    },
]

# supplier_code -> products
SAMPLE_PRODUCTS = {
    "TECH001": [
        {
            "name": "Laptop Pro X1",
            "description": "High-performance business laptop with 16GB RAM",
            "sku": "LAP001",
            "category": "Electronics",
            "price": 1299.99,
            "cost": 899.99,
            "stock_quantity": 25,
            "min_stock_level": 5,
            "tags": ["laptop", "business"],
        },
        {
            "name": "Wireless Mouse",
            "description": "Ergonomic wireless mouse",
            "sku": "MOU002",
            "category": "Electronics",
            "price": 49.99,
            "cost": 25.99,
            "stock_quantity": 100,
            "min_stock_level": 20,
            "tags": ["mouse", "wireless"],
        },
    ],
    "HLS002": [
        {
            "name": "Desk Lamp",
            "description": "LED desk lamp with adjustable arm",
            "sku": "LMP003",
            "category": "Home & Garden",
            "price": 39.5,
            "cost": 18.0,
            "stock_quantity": 4,
            "min_stock_level": 5,
            "tags": ["lamp"],
        },
    ],
}


async def _init_db() -> None:
    from airos.infrastructure.storage.sqlite import close_pool
    from airos.infrastructure.storage.sqlite.schema import initialize_database

    try:
        await initialize_database()
    finally:
        await close_pool()


async def _create_admin() -> None:
    from airos.application.use_cases import CreateAdminUseCase
    from airos.infrastructure.storage.sqlite import close_pool
    from airos.infrastructure.storage.sqlite.schema import initialize_database

    auth = get_settings().auth
    try:
        await initialize_database()
        user = await CreateAdminUseCase().execute(
            auth.admin_name, auth.admin_email, auth.admin_password, auth.admin_department
        )
    finally:
        await close_pool()

    if user is None:
        print(f"Admin {auth.admin_email} already exists.")
    else:
        print(f"Admin created: {user.email} (id {user.id})")


async def _seed() -> None:
    from airos.application.dto.requests import CreateProductRequest, CreateSupplierRequest
    from airos.application.use_cases import CreateProductUseCase, CreateSupplierUseCase
    from airos.infrastructure.storage.sqlite import close_pool, get_product_store
    from airos.infrastructure.storage.sqlite.schema import initialize_database

    try:
        await initialize_database()
        existing = await (await get_product_store()).count_products()
        if existing:
            print(f"Sample data skipped: {existing} products already exist.")
            return

        create_supplier = CreateSupplierUseCase()
        create_product = CreateProductUseCase()
        for data in SAMPLE_SUPPLIERS:
            supplier = await create_supplier.execute(CreateSupplierRequest.model_validate(data))
            for product in SAMPLE_PRODUCTS.get(supplier.code, []):
                await create_product.execute(
                    CreateProductRequest.model_validate({**product, "supplier_id": supplier.id})
                )
        logger.info(
            "sample_data_loaded",
            suppliers=len(SAMPLE_SUPPLIERS),
            products=sum(len(p) for p in SAMPLE_PRODUCTS.values()),
        )
        print("Sample data loaded.")
    finally:
        await close_pool()


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the API under uvicorn."""
    import uvicorn

    print(f"Starting server on {args.host}:{args.port}...")
    uvicorn.run(
        "airos.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


def cmd_init_db(args: argparse.Namespace) -> None:
    asyncio.run(_init_db())
    print(f"Database ready at {get_settings().storage.db_path}")


def cmd_create_admin(args: argparse.Namespace) -> None:
    asyncio.run(_create_admin())


def cmd_seed(args: argparse.Namespace) -> None:
    asyncio.run(_seed())


def main() -> None:
    configure_logging()
    settings = get_settings()

    parser = argparse.ArgumentParser(description="AIROS management CLI")
    sub = parser.add_subparsers(dest="command")

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default=settings.api.host, help="Bind host")
    p_serve.add_argument("--port", type=int, default=settings.api.port, help="Bind port")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # init-db
    p_init = sub.add_parser("init-db", help="Apply the database schema")
    p_init.set_defaults(func=cmd_init_db)

    # create-admin
    p_admin = sub.add_parser("create-admin", help="Create the configured admin account")
    p_admin.set_defaults(func=cmd_create_admin)

    # seed
    p_seed = sub.add_parser("seed", help="Load sample suppliers and products")
    p_seed.set_defaults(func=cmd_seed)

    args = parser.parse_args()
    if not getattr(args, "func", None):
        parser.print_help()
        sys.exit(1)
    args.func(args)


if __name__ == "__main__":
    main()
