import math
from dataclasses import dataclass


@dataclass
class Transaction:
    id: str
    description: str
    amount: float
    type: str                   # 'income' | 'expense'
    category: str               # CategoryKey value
    date: str                   # 'YYYY-MM-DD'
    status: str = "pending"     # 'pending' | 'paid'
    installments: int = 1
    current_installment: int = 1

    @property
    def is_paid(self) -> bool:
        return self.status == "paid"

    @property
    def is_installment(self) -> bool:
        return self.installments > 1

    @property
    def installment_label(self) -> str:
        """e.g. '3/10' for installment records, '' otherwise."""
        if not self.is_installment:
            return ""
        return f"{self.current_installment}/{self.installments}"

    def to_dict(self) -> dict:
        """Serialize with the key names used in stored and backup JSON."""
        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount,
            "type": self.type,
            "category": self.category,
            "date": self.date,
            "status": self.status,
            "installments": self.installments,
            "currentInstallment": self.current_installment,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        """Build from stored/backup JSON.

        Records written before status and installments existed get the
        defaults (pending, 1 of 1). Raises ValueError/TypeError on values
        that cannot be coerced, including non-finite amounts. A missing id
        is left blank for the service to fill in.
        """
        amount = float(data.get("amount") or 0)
        if not math.isfinite(amount):
            raise ValueError(f"Invalid amount: {amount}")
        return cls(
            id=str(data.get("id") or ""),
            description=str(data.get("description") or ""),
            amount=amount,
            type=str(data.get("type") or "expense"),
            category=str(data.get("category") or "other"),
            date=str(data.get("date") or ""),
            status=str(data.get("status") or "pending"),
            installments=int(data.get("installments") or 1),
            current_installment=int(data.get("currentInstallment") or 1),
        )


@dataclass
class TransactionDraft:
    """What the user submits from the new-transaction form."""
    description: str
    amount: float
    type: str
    category: str
    date: str
    is_recurring: bool = False
    is_installment: bool = False
    installment_count: int = 1
