"""Export and import the transaction collection as a JSON backup file.

The backup is a bare JSON array of transaction records, the same shape the
store keeps under its transactions key.
"""
import json
from datetime import date

from models.transaction import Transaction
from services.transaction_service import TransactionService
from utils.constants import BACKUP_FILE_PREFIX
from utils.date_helpers import today, format_date
from utils.logger import get_logger

logger = get_logger(__name__)


class BackupFormatError(ValueError):
    """The backup payload could not be turned into a transaction list."""


class DataService:
    def __init__(self, tx_service: TransactionService):
        self._tx_svc = tx_service

    # ── Export ────────────────────────────────────────────────────────────────

    def export_json(self) -> list[dict]:
        """Return the collection as a list of dicts (caller writes to disk)."""
        return [t.to_dict() for t in self._tx_svc.get_all()]

    def export_to_file(self, path: str) -> int:
        data = self.export_json()
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.info("Exported %d transactions to %s", len(data), path)
        return len(data)

    @staticmethod
    def backup_filename(on: date | None = None) -> str:
        """e.g. 'financas_backup_2024-03-01.json'."""
        return f"{BACKUP_FILE_PREFIX}_{format_date(on or today())}.json"

    # ── Import ────────────────────────────────────────────────────────────────

    def import_json(self, data) -> int:
        """Replace the whole collection with an already-parsed JSON value.

        Raises BackupFormatError (collection untouched) unless data is a list
        of objects. Returns the number of records imported.
        """
        records = self.parse_records(data)
        self._tx_svc.replace_all(records)
        return len(records)

    def import_text(self, text: str) -> int:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Rejected backup: invalid JSON (%s)", e)
            raise BackupFormatError(f"Arquivo inválido: {e.msg}") from e
        return self.import_json(data)

    def import_from_file(self, path: str) -> int:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        count = self.import_text(text)
        logger.info("Imported %d transactions from %s", count, path)
        return count

    @staticmethod
    def parse_records(data) -> list[Transaction]:
        if not isinstance(data, list):
            logger.warning("Rejected backup: expected a JSON array, got %s", type(data).__name__)
            raise BackupFormatError("O arquivo de backup deve conter uma lista de transações.")
        records = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise BackupFormatError(f"Item {index + 1} do backup não é uma transação.")
            try:
                records.append(Transaction.from_dict(item))
            except (TypeError, ValueError) as e:
                raise BackupFormatError(f"Item {index + 1} do backup é ilegível: {e}") from e
        return records
