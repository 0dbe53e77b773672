from __future__ import annotations

from dataclasses import replace

import pytest

from invoicely.core.dependencies import build_repositories
from invoicely.core.exceptions import ConfigurationError
from invoicely.repositories import InMemoryAccountRepository, SqlAccountRepository, SqlInvoiceRepository


def test_memory_backend_builds_in_memory_repositories(test_config):
    accounts, _ = build_repositories(replace(test_config, STORAGE_BACKEND="memory"))
    assert isinstance(accounts, InMemoryAccountRepository)


def test_database_backend_checks_connection_and_creates_tables(test_config):
    cfg = replace(test_config, STORAGE_BACKEND="database", DATABASE_URL="sqlite://")

    accounts, invoices = build_repositories(cfg)

    assert isinstance(accounts, SqlAccountRepository)
    assert isinstance(invoices, SqlInvoiceRepository)
    assert accounts.get("nobody@example.com") is None


def test_unreachable_database_raises_configuration_error(test_config, tmp_path):
    missing = tmp_path / "no-such-dir" / "invoicely.db"
    cfg = replace(test_config, STORAGE_BACKEND="database", DATABASE_URL=f"sqlite:///{missing}")

    with pytest.raises(ConfigurationError):
        build_repositories(cfg)
