"""Tests for JSON backup export and import."""

import json
from datetime import date

import pytest

from conftest import make_draft, make_tx
from services.data_service import BackupFormatError, DataService

RECORD_KEYS = {
    "id", "description", "amount", "type", "category",
    "date", "status", "installments", "currentInstallment",
}


def test_export_uses_backup_key_names(tx_service, data_service) -> None:
    """Every exported record carries exactly the documented keys."""
    tx_service.add(make_draft(is_installment=True, installment_count=2))
    exported = data_service.export_json()
    if len(exported) != 2 or any(set(r) != RECORD_KEYS for r in exported):
        msg = f"Unexpected export {exported}"
        raise AssertionError(msg)
    if [r["currentInstallment"] for r in exported] != [1, 2]:
        msg = "Installment numbers should be exported in order"
        raise AssertionError(msg)


def test_backup_filename_embeds_the_date() -> None:
    """Backups are named after the day they were taken."""
    name = DataService.backup_filename(date(2024, 3, 1))
    if name != "financas_backup_2024-03-01.json":
        msg = f"Unexpected filename {name}"
        raise AssertionError(msg)


@pytest.mark.parametrize("payload", [
    '{"id": "x"}',
    '"text"',
    "42",
    "null",
    "not json at all",
    '[{"id": "a"}, 7]',
])
def test_rejected_backups_leave_collection_untouched(tx_service, data_service, payload: str) -> None:
    """Anything but an array of objects is refused without side effects."""
    tx_service.add(make_draft())
    before = [t.to_dict() for t in tx_service.get_all()]
    with pytest.raises(BackupFormatError):
        data_service.import_text(payload)
    if [t.to_dict() for t in tx_service.get_all()] != before:
        msg = "A rejected import must not change the collection"
        raise AssertionError(msg)


def test_backup_error_is_a_value_error() -> None:
    """Callers catching ValueError also see backup failures."""
    with pytest.raises(ValueError):
        DataService.parse_records({"not": "a list"})


def test_import_replaces_collection_and_fills_defaults(tx_service, data_service) -> None:
    """Legacy records without status or installments import as pending 1/1."""
    tx_service.add(make_draft())
    count = data_service.import_json([
        {"id": "old", "description": "Luz", "amount": 120.5,
         "type": "expense", "category": "home", "date": "2023-12-05"},
    ])
    if count != 1:
        msg = f"Expected 1 imported record, got {count}"
        raise AssertionError(msg)
    [tx] = tx_service.get_all()
    if (tx.id, tx.status, tx.installments, tx.current_installment) != ("old", "pending", 1, 1):
        msg = f"Unexpected imported record {tx}"
        raise AssertionError(msg)


def test_empty_array_clears_collection(tx_service, data_service) -> None:
    """An empty backup is valid and empties the collection."""
    tx_service.add(make_draft())
    if data_service.import_text("[]") != 0 or tx_service.get_all():
        msg = "Expected an empty collection"
        raise AssertionError(msg)


def test_file_round_trip(tmp_path, tx_service, data_service) -> None:
    """A file written by export can be imported back as-is."""
    tx_service.replace_all([make_tx("a", description="Açougue"), make_tx("b", status="paid")])
    path = tmp_path / DataService.backup_filename(date(2024, 3, 1))
    if data_service.export_to_file(str(path)) != 2:
        msg = "Expected two exported records"
        raise AssertionError(msg)
    if "Açougue" not in path.read_text(encoding="utf-8"):
        msg = "Non-ASCII text should be written unescaped"
        raise AssertionError(msg)

    tx_service.replace_all([])
    data_service.import_from_file(str(path))
    if [t.id for t in tx_service.get_all()] != ["a", "b"]:
        msg = f"Unexpected ids after import {[t.id for t in tx_service.get_all()]}"
        raise AssertionError(msg)
    if json.loads(path.read_text(encoding="utf-8"))[1]["status"] != "paid":
        msg = "Status should be part of the backup"
        raise AssertionError(msg)


def test_delete_after_importing_records_without_ids(tx_service, data_service) -> None:
    """Records imported without an id can still be deleted one at a time."""
    data_service.import_json([
        {"description": "Luz", "amount": 120.0, "type": "expense",
         "category": "home", "date": "2024-03-05"},
        {"description": "Água", "amount": 80.0, "type": "expense",
         "category": "home", "date": "2024-03-06"},
    ])
    ids = [t.id for t in tx_service.get_all()]
    if len(set(ids)) != 2 or "" in ids:
        msg = f"Imported records should get distinct ids, got {ids}"
        raise AssertionError(msg)
    tx_service.delete(ids[1])
    remaining = tx_service.get_all()
    if [t.description for t in remaining] != ["Luz"]:
        msg = f"Only the deleted record should be gone, left {remaining}"
        raise AssertionError(msg)


def test_duplicate_ids_in_backup_are_kept_apart(tx_service, data_service) -> None:
    """Toggling one of two records that shared an id leaves the other alone."""
    data_service.import_json([make_tx("same").to_dict(), make_tx("same").to_dict()])
    first, second = tx_service.get_all()
    tx_service.toggle_status(second.id)
    if first.status != "pending" or second.status != "paid":
        msg = f"Unexpected statuses {first.status}, {second.status}"
        raise AssertionError(msg)


@pytest.mark.parametrize("payload", [
    '[{"id": "a", "amount": NaN}]',
    '[{"id": "a", "amount": Infinity}]',
])
def test_non_finite_amounts_are_rejected(tx_service, data_service, payload: str) -> None:
    """A backup with NaN or infinite amounts is refused."""
    with pytest.raises(BackupFormatError):
        data_service.import_text(payload)
    if tx_service.get_all():
        msg = "Nothing should have been imported"
        raise AssertionError(msg)
