"""Tests for service wiring."""

from storefront.infrastructure import bootstrap
from storefront.infrastructure.config import Settings
from storefront.infrastructure.notification.smtp_notifier import NullNotifier, SmtpNotifier
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.sql.sql_product_repository import (
    SqlProductRepository,
)
from tests.fakes import FakeProductRepository


class TestBuildServices:

    def test_json_store_without_database_url(self, tmp_path):
        services = bootstrap.build_services(Settings(_env_file=None, data_dir=tmp_path))
        assert isinstance(services.product_repo, JsonProductRepository)
        assert (tmp_path / "products.json").exists()
        assert (tmp_path / "orders.json").exists()

    def test_sql_store_with_database_url(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'db.sqlite'}"
        services = bootstrap.build_services(Settings(_env_file=None, database_url=url))
        assert isinstance(services.product_repo, SqlProductRepository)

    def test_null_notifier_without_mail(self, tmp_path):
        services = bootstrap.build_services(Settings(_env_file=None, data_dir=tmp_path))
        assert isinstance(services.notifier, NullNotifier)

    def test_smtp_notifier_with_mail(self, tmp_path):
        settings = Settings(
            _env_file=None, data_dir=tmp_path,
            smtp_host="smtp.example.com", smtp_user="u", smtp_pass="p",
        )
        assert isinstance(bootstrap.build_services(settings).notifier, SmtpNotifier)


class TestServicesSingleton:

    def test_built_once(self, monkeypatch):
        calls = []

        def build(settings):
            calls.append(settings)
            return object()

        monkeypatch.setattr(bootstrap, "_services", None)
        monkeypatch.setattr(bootstrap, "build_services", build)
        first = bootstrap.services()
        assert bootstrap.services() is first
        assert len(calls) == 1
        bootstrap.reset()
        assert bootstrap.services() is not first


class TestSeedCatalog:

    def test_seeds_empty_store(self):
        repo = FakeProductRepository()
        assert bootstrap.seed_catalog(repo) == 4

    def test_store_failure_is_logged_not_raised(self, caplog):
        repo = FakeProductRepository()
        repo.available = False
        assert bootstrap.seed_catalog(repo) == 0
        assert "Catalog seed failed" in caplog.text
