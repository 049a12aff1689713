import math
import uuid
from typing import Callable
from models.category import is_known_category
from models.transaction import Transaction, TransactionDraft
from database.transaction_store import TransactionStore
from utils.constants import TRANSACTION_TYPES, TRANSACTION_STATUSES, RECURRING_MONTHS, MAX_INSTALLMENTS
from utils.date_helpers import parse_date, add_months, format_date
from utils.logger import get_logger

logger = get_logger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def expand_draft(
    draft: TransactionDraft,
    id_factory: Callable[[], str] = _new_id,
) -> list[Transaction]:
    """Turn one form submission into the records it stands for.

    Recurring drafts become 12 monthly records of the same amount; installment
    drafts become N monthly records of amount / N numbered 1..N; anything else
    is a single record. Every record starts pending.
    """
    _validate_draft(draft)
    start = parse_date(draft.date)
    description = draft.description.strip()

    if draft.is_recurring:
        count, installments, amount = RECURRING_MONTHS, 1, draft.amount
    elif draft.is_installment and draft.installment_count > 1:
        count = draft.installment_count
        installments, amount = count, draft.amount / count
    else:
        return [Transaction(
            id=id_factory(),
            description=description,
            amount=draft.amount,
            type=draft.type,
            category=draft.category,
            date=format_date(start),
            status="pending",
            installments=1,
            current_installment=1,
        )]

    base_id = id_factory()
    records = []
    for i in range(count):
        records.append(Transaction(
            id=f"{base_id}-{i + 1}",
            description=description,
            amount=amount,
            type=draft.type,
            category=draft.category,
            date=format_date(add_months(start, i)),
            status="pending",
            installments=installments,
            current_installment=i + 1 if installments > 1 else 1,
        ))
    return records


def _validate_draft(draft: TransactionDraft):
    if not draft.description or not draft.description.strip():
        raise ValueError("Informe uma descrição.")
    if draft.type not in TRANSACTION_TYPES:
        raise ValueError(f"Tipo inválido: {draft.type}")
    if not is_known_category(draft.category):
        raise ValueError(f"Categoria inválida: {draft.category}")
    if not math.isfinite(draft.amount) or draft.amount <= 0:
        raise ValueError("O valor deve ser positivo.")
    if not parse_date(draft.date):
        raise ValueError("Data inválida. Use AAAA-MM-DD.")
    if draft.is_installment and not draft.is_recurring:
        if not 1 <= draft.installment_count <= MAX_INSTALLMENTS:
            raise ValueError(f"O número de parcelas deve estar entre 1 e {MAX_INSTALLMENTS}.")


class TransactionService:
    """Owns the in-memory collection; every change is written straight through."""

    def __init__(self, store: TransactionStore, id_factory: Callable[[], str] = _new_id):
        self._store = store
        self._id_factory = id_factory
        self._transactions: list[Transaction] = self._with_unique_ids(store.load_all())
        logger.info("Loaded %d transactions", len(self._transactions))

    def get_all(self) -> list[Transaction]:
        return list(self._transactions)

    def get_by_id(self, tx_id: str) -> Transaction | None:
        return next((t for t in self._transactions if t.id == tx_id), None)

    def get_group(self, tx_id: str) -> list[Transaction]:
        """Return every record generated by the same submission as tx_id."""
        base = _base_id(tx_id)
        return [t for t in self._transactions if _base_id(t.id) == base]

    def add(self, draft: TransactionDraft) -> list[Transaction]:
        """Expand the draft and prepend the new records (most recent first)."""
        new_records = expand_draft(draft, self._id_factory)
        self._transactions = new_records + self._transactions
        self._persist()
        logger.info(
            "Added %d record(s) for '%s' (%s)",
            len(new_records), draft.description.strip(), draft.type,
        )
        return new_records

    def toggle_status(self, tx_id: str) -> Transaction:
        tx = self._require(tx_id)
        tx.status = "pending" if tx.is_paid else "paid"
        self._persist()
        logger.debug("Transaction %s is now %s", tx_id, tx.status)
        return tx

    def set_status(self, tx_id: str, status: str) -> Transaction:
        if status not in TRANSACTION_STATUSES:
            raise ValueError(f"Status inválido: {status}")
        tx = self._require(tx_id)
        tx.status = status
        self._persist()
        return tx

    def delete(self, tx_id: str):
        """Remove a single record. Sibling installments are left alone."""
        self._require(tx_id)
        self._transactions = [t for t in self._transactions if t.id != tx_id]
        self._persist()
        logger.info("Deleted transaction %s", tx_id)

    def replace_all(self, transactions: list[Transaction]):
        """Swap the whole collection in one step (used by backup import)."""
        self._transactions = self._with_unique_ids(transactions)
        self._persist()
        logger.info("Collection replaced with %d transactions", len(self._transactions))

    def _with_unique_ids(self, transactions: list[Transaction]) -> list[Transaction]:
        """Give a fresh id to records whose id is blank or already taken."""
        seen: set[str] = set()
        result = []
        for tx in transactions:
            if not tx.id or tx.id in seen:
                old = tx.id
                tx.id = self._id_factory()
                logger.warning("Re-keyed transaction %r as %s", old, tx.id)
            seen.add(tx.id)
            result.append(tx)
        return result

    def _require(self, tx_id: str) -> Transaction:
        tx = self.get_by_id(tx_id)
        if tx is None:
            raise KeyError(tx_id)
        return tx

    def _persist(self):
        self._store.save_all(self._transactions)


def _base_id(tx_id: str) -> str:
    """Strip the '-<n>' group suffix, if any, from a generated id."""
    head, sep, tail = tx_id.rpartition("-")
    if sep and head and tail.isdigit() and len(tail) <= 3:
        return head
    return tx_id
