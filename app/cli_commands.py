"""
Flask CLI commands for database management.

Commands:
- flask init-db: Create every table
- flask seed-catalog: Load the starter categories and products
"""

from decimal import Decimal

import click
from sqlalchemy.exc import SQLAlchemyError

from app.database import create_all, get_session
from app.models import Category, DiscountTier, Product

STARTER_CATEGORIES = [
    ('Electronics', 'Gadgets and devices.'),
    ('Books', 'Paperback and hardcover books.'),
    ('Apparel', 'Clothing and accessories'),
]

# (category, sku, name, description, price, discount percent, stock)
STARTER_PRODUCTS = [
    ('Electronics', 'ELEC-LP-PRO', 'Laptop Pro', 'High-performance laptop',
     '1299.99', 10, 50),
    ('Electronics', 'ELEC-MS-WL', 'Wireless Mouse', 'Ergonomic wireless mouse',
     '49.99', 0, 200),
    ('Books', 'BOOK-CS-JRN', 'The C# Players Guide', 'A wonderful introduction to programming in C#',
     '29.99', 0, 150),
    ('Books', 'BOOK-API-DSG', 'Web API Development with ASP.NET Core 8',
     'Guide to building great Web APIs using ASP.NET Core 8',
     '69.95', 0, 100),
    ('Apparel', 'APP-TS-DEV', 'C# Developer T-Shirt', '100% cotton developer t-shirt',
     '24.99', 5, 300),
]


def seed_catalog(session):
    """
    Insert the starter catalog unless products already exist.

    Returns:
        int: Number of products created (0 when the catalog was not empty)
    """
    if session.query(Product.id).first() is not None:
        return 0

    try:
        categories = {}
        for name, description in STARTER_CATEGORIES:
            category = Category(name=name, description=description)
            session.add(category)
            categories[name] = category
        session.flush()

        for category_name, sku, name, description, price, discount, stock in STARTER_PRODUCTS:
            session.add(Product(
                category_id=categories[category_name].id,
                sku=sku,
                name=name,
                description=description,
                price=Decimal(price),
                discount=DiscountTier.from_percent(discount),
                stock_quantity=stock,
            ))

        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise

    return len(STARTER_PRODUCTS)


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('init-db')
    def init_db_command():
        """Create the database tables."""
        try:
            create_all()
        except SQLAlchemyError as e:
            click.echo(click.style(f'Error creating tables: {e}', fg='red'))
            raise SystemExit(1)

        click.echo(click.style('Database tables created.', fg='green', bold=True))

    @app.cli.command('seed-catalog')
    def seed_catalog_command():
        """Load the starter categories and products."""
        session = get_session()
        try:
            created = seed_catalog(session)
        except SQLAlchemyError as e:
            click.echo(click.style(f'Error seeding catalog: {e}', fg='red'))
            raise SystemExit(1)

        if created == 0:
            click.echo(click.style('Catalog already has products, nothing to seed.', fg='yellow'))
            return

        click.echo(click.style(f'Seeded {created} products.', fg='green', bold=True))
