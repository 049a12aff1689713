"""Tests for the in-memory collection and its write-through persistence."""

import json

import pytest

from conftest import make_draft, make_tx
from database.transaction_store import TransactionStore
from services.transaction_service import TransactionService
from utils.constants import TRANSACTIONS_KEY


def test_new_records_are_prepended(tx_service) -> None:
    """The latest submission shows up first, in generated order."""
    tx_service.add(make_draft(description="Primeira"))
    tx_service.add(make_draft(description="Parcelada", is_installment=True, installment_count=3))
    ids = [t.id for t in tx_service.get_all()]
    if ids != ["tx2-1", "tx2-2", "tx2-3", "tx1"]:
        msg = f"Unexpected order {ids}"
        raise AssertionError(msg)


def test_collection_survives_restart(db, tx_service) -> None:
    """A new service over the same store loads what was written."""
    tx_service.add(make_draft(is_recurring=True))
    reloaded = TransactionService(TransactionStore(db))
    if [t.to_dict() for t in reloaded.get_all()] != [t.to_dict() for t in tx_service.get_all()]:
        msg = "Reloaded collection differs from the saved one"
        raise AssertionError(msg)


def test_store_holds_a_json_array(db, tx_service) -> None:
    """The persisted value is a JSON array using the backup key names."""
    tx_service.add(make_draft())
    data = json.loads(db.get_item(TRANSACTIONS_KEY))
    if not isinstance(data, list) or data[0]["currentInstallment"] != 1:
        msg = f"Unexpected stored payload {data}"
        raise AssertionError(msg)


def test_toggle_twice_restores_status(db, tx_service) -> None:
    """pending -> paid -> pending, persisted at every step."""
    [tx] = tx_service.add(make_draft())
    if tx_service.toggle_status(tx.id).status != "paid":
        msg = "First toggle should mark the record paid"
        raise AssertionError(msg)
    if TransactionService(TransactionStore(db)).get_by_id(tx.id).status != "paid":
        msg = "Paid status should be persisted"
        raise AssertionError(msg)
    if tx_service.toggle_status(tx.id).status != "pending":
        msg = "Second toggle should restore pending"
        raise AssertionError(msg)


def test_delete_one_installment_keeps_siblings(tx_service) -> None:
    """Removing 2/3 leaves 1/3 and 3/3 exactly as they were."""
    records = tx_service.add(make_draft(is_installment=True, installment_count=3))
    before = {t.id: t.to_dict() for t in records if t.id != "tx1-2"}
    tx_service.delete("tx1-2")
    after = {t.id: t.to_dict() for t in tx_service.get_all()}
    if after != before:
        msg = f"Siblings changed: {after} != {before}"
        raise AssertionError(msg)


def test_group_lookup_finds_siblings(tx_service) -> None:
    """Records from one submission share a base id."""
    tx_service.add(make_draft())
    tx_service.add(make_draft(is_installment=True, installment_count=4))
    group = tx_service.get_group("tx2-3")
    if sorted(t.id for t in group) != ["tx2-1", "tx2-2", "tx2-3", "tx2-4"]:
        msg = f"Unexpected group {[t.id for t in group]}"
        raise AssertionError(msg)


def test_unknown_id_raises_key_error(tx_service) -> None:
    """Toggling or deleting a missing record is an error."""
    with pytest.raises(KeyError):
        tx_service.toggle_status("missing")
    with pytest.raises(KeyError):
        tx_service.delete("missing")


def test_invalid_draft_leaves_collection_untouched(tx_service) -> None:
    """A rejected draft adds nothing."""
    tx_service.add(make_draft())
    with pytest.raises(ValueError):
        tx_service.add(make_draft(amount=-1))
    if len(tx_service.get_all()) != 1:
        msg = "Collection should still hold only the first record"
        raise AssertionError(msg)


def test_replace_all_swaps_collection(db, tx_service) -> None:
    """Wholesale replacement is persisted."""
    tx_service.add(make_draft())
    tx_service.replace_all([make_tx("a"), make_tx("b")])
    reloaded = TransactionService(TransactionStore(db))
    if [t.id for t in reloaded.get_all()] != ["a", "b"]:
        msg = f"Unexpected ids {[t.id for t in reloaded.get_all()]}"
        raise AssertionError(msg)


def test_corrupt_store_starts_empty(db) -> None:
    """Unparsable stored JSON yields an empty collection instead of a crash."""
    db.set_item(TRANSACTIONS_KEY, "{not json")
    if TransactionStore(db).load_all() != []:
        msg = "Expected an empty collection"
        raise AssertionError(msg)


def test_store_skips_non_object_entries(db) -> None:
    """Stray scalars inside the stored array are dropped."""
    db.set_item(TRANSACTIONS_KEY, json.dumps([42, make_tx("ok").to_dict()]))
    loaded = TransactionStore(db).load_all()
    if [t.id for t in loaded] != ["ok"]:
        msg = f"Unexpected records {loaded}"
        raise AssertionError(msg)


def test_set_status_validates(tx_service) -> None:
    """Only pending and paid are accepted."""
    [tx] = tx_service.add(make_draft())
    if tx_service.set_status(tx.id, "paid").status != "paid":
        msg = "Expected the record to be paid"
        raise AssertionError(msg)
    with pytest.raises(ValueError):
        tx_service.set_status(tx.id, "cancelled")


def test_non_finite_amount_is_never_stored(db, tx_service) -> None:
    """NaN and infinity are rejected before anything reaches the store."""
    for amount in (float("nan"), float("inf")):
        with pytest.raises(ValueError):
            tx_service.add(make_draft(amount=amount))
    if tx_service.get_all() or db.get_item(TRANSACTIONS_KEY) is not None:
        msg = "Nothing should have been written"
        raise AssertionError(msg)


def test_blank_and_duplicate_ids_are_rekeyed_on_load(db) -> None:
    """Stored records sharing an id get distinct ids when loaded."""
    rows = [make_tx("dup").to_dict(), make_tx("dup").to_dict(), make_tx("").to_dict()]
    db.set_item(TRANSACTIONS_KEY, json.dumps(rows))
    ids = [t.id for t in TransactionService(TransactionStore(db)).get_all()]
    if ids[0] != "dup" or len(set(ids)) != 3 or "" in ids:
        msg = f"Expected three distinct ids, got {ids}"
        raise AssertionError(msg)
