import json
from database.db_manager import DatabaseManager
from models.transaction import Transaction
from utils.constants import TRANSACTIONS_KEY
from utils.logger import get_logger

logger = get_logger(__name__)


class TransactionStore:
    """Reads and writes the whole collection as one JSON array under one key."""

    def __init__(self, db: DatabaseManager, key: str = TRANSACTIONS_KEY):
        self._db = db
        self._key = key

    def load_all(self) -> list[Transaction]:
        raw = self._db.get_item(self._key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Stored transactions are not valid JSON, starting empty: %s", e)
            return []
        if not isinstance(data, list):
            logger.error("Stored transactions are not a JSON array, starting empty")
            return []

        transactions = []
        for item in data:
            if not isinstance(item, dict):
                logger.warning("Skipping stored record that is not an object: %r", item)
                continue
            try:
                transactions.append(Transaction.from_dict(item))
            except (TypeError, ValueError) as e:
                logger.warning("Skipping unreadable stored record %r: %s", item.get("id"), e)
        return transactions

    def save_all(self, transactions: list[Transaction]):
        payload = json.dumps([t.to_dict() for t in transactions], ensure_ascii=False)
        self._db.set_item(self._key, payload)
        logger.debug("Persisted %d transactions", len(transactions))
