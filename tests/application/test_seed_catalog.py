"""Integration tests for the SeedCatalog use case."""

from storefront.application.seed_catalog import SeedCatalogHandler, default_catalog
from storefront.domain.model.product import Product, Variant
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeProductRepository


class TestDefaultCatalog:

    def test_four_products_with_ids(self):
        assert [p.id for p in default_catalog()] == [1, 2, 3, 4]

    def test_every_product_has_variants(self):
        assert all(p.variants for p in default_catalog())

    def test_kurta_variants(self):
        kurta = default_catalog()[0]
        assert str(kurta.price) == "₹1,299"
        assert [(v.size, v.stock) for v in kurta.variants] == [
            ("S", 10), ("M", 15), ("L", 8), ("XL", 5),
        ]

    def test_variant_combinations_unique(self):
        for product in default_catalog():
            keys = [(v.size, v.color) for v in product.variants]
            assert len(keys) == len(set(keys))


class TestSeedCatalog:

    def test_seeds_empty_catalog(self):
        product_repo = FakeProductRepository()
        assert SeedCatalogHandler(product_repo).handle() == 4
        assert product_repo.count() == 4

    def test_second_run_is_a_no_op(self):
        product_repo = FakeProductRepository()
        handler = SeedCatalogHandler(product_repo)
        handler.handle()
        assert handler.handle() == 0
        assert product_repo.count() == 4

    def test_existing_catalog_left_alone(self):
        existing = Product(id=9, name="Scarf", price=Money.of(499),
                           variants=[Variant("Free", "Red", 1)])
        product_repo = FakeProductRepository([existing])
        assert SeedCatalogHandler(product_repo).handle() == 0
        assert [p.id for p in product_repo.list_all()] == [9]

    def test_custom_products(self):
        product_repo = FakeProductRepository()
        custom = [Product(id=1, name="Cap", price=Money.of(199))]
        assert SeedCatalogHandler(product_repo).handle(custom) == 1
        assert product_repo.get_by_id(1).name == "Cap"
