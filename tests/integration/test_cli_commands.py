"""
Integration tests for the Flask CLI commands.
"""

from decimal import Decimal

from app.cli_commands import STARTER_PRODUCTS, seed_catalog
from app.models import Category, DiscountTier, Product


class TestSeedCatalog:
    """Tests for the starter catalog."""

    def test_seed_empty_catalog(self, session):
        """Test the starter categories and products are created."""
        created = seed_catalog(session)

        assert created == len(STARTER_PRODUCTS) == 5
        assert session.query(Category).count() == 3

        laptop = session.query(Product).filter_by(sku='ELEC-LP-PRO').one()
        assert laptop.price == Decimal('1299.99')
        assert laptop.discount is DiscountTier.TEN_PERCENT
        assert laptop.stock_quantity == 50
        assert laptop.category.name == 'Electronics'

        tshirt = session.query(Product).filter_by(sku='APP-TS-DEV').one()
        assert tshirt.discount is DiscountTier.FIVE_PERCENT
        mouse = session.query(Product).filter_by(sku='ELEC-MS-WL').one()
        assert mouse.discount is DiscountTier.NONE

    def test_seed_is_skipped_when_products_exist(self, session, product_a):
        """Test seeding never duplicates a populated catalog."""
        assert seed_catalog(session) == 0
        assert session.query(Product).count() == 1

    def test_seed_command(self, app, session):
        """Test `flask seed-catalog` reports what it did."""
        runner = app.test_cli_runner()

        first = runner.invoke(args=['seed-catalog'])
        second = runner.invoke(args=['seed-catalog'])

        assert 'Seeded 5 products.' in first.output
        assert 'nothing to seed' in second.output

    def test_init_db_command(self, app, session):
        """Test `flask init-db` is idempotent."""
        result = app.test_cli_runner().invoke(args=['init-db'])

        assert result.exit_code == 0
        assert 'Database tables created.' in result.output
