"""Shared fixtures: a throwaway store and services wired over it."""

import itertools

import pytest

from database.db_manager import DatabaseManager
from database.transaction_store import TransactionStore
from models.transaction import Transaction, TransactionDraft
from services.data_service import DataService
from services.report_service import ReportService
from services.reminder_service import ReminderService
from services.settings_service import SettingsService
from services.transaction_service import TransactionService


@pytest.fixture
def db(tmp_path):
    """A fresh key-value store in a temporary SQLite file."""
    manager = DatabaseManager(str(tmp_path / "test.db"))
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def store(db):
    return TransactionStore(db)


@pytest.fixture
def id_factory():
    """Deterministic ids: tx1, tx2, ..."""
    counter = itertools.count(1)
    return lambda: f"tx{next(counter)}"


@pytest.fixture
def tx_service(store, id_factory):
    return TransactionService(store, id_factory=id_factory)


@pytest.fixture
def settings_service(db):
    return SettingsService(db)


@pytest.fixture
def report_service(tx_service):
    return ReportService(tx_service)


@pytest.fixture
def reminder_service(report_service, settings_service):
    return ReminderService(report_service, settings_service)


@pytest.fixture
def data_service(tx_service):
    return DataService(tx_service)


def make_draft(**overrides) -> TransactionDraft:
    """A valid single expense draft with any field overridden."""
    fields = {
        "description": "Mercado",
        "amount": 100.0,
        "type": "expense",
        "category": "food",
        "date": "2024-03-01",
    }
    fields.update(overrides)
    return TransactionDraft(**fields)


def make_tx(tx_id: str, **overrides) -> Transaction:
    """A stored-looking record with any field overridden."""
    fields = {
        "id": tx_id,
        "description": f"Conta {tx_id}",
        "amount": 50.0,
        "type": "expense",
        "category": "home",
        "date": "2024-03-10",
        "status": "pending",
        "installments": 1,
        "current_installment": 1,
    }
    fields.update(overrides)
    return Transaction(**fields)
