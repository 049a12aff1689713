from database.db_manager import DatabaseManager
from utils.constants import GOAL_KEY, PRIVACY_KEY, APPEARANCE_KEY, APPEARANCE_MODES
from utils.logger import get_logger

logger = get_logger(__name__)


class SettingsService:
    """Spending goal, privacy mode and appearance, each under its own key."""

    def __init__(self, db: DatabaseManager):
        self._db = db

    def get_goal(self) -> float | None:
        """Return the spending goal, or None when unset or unreadable."""
        raw = self._db.get_item(GOAL_KEY)
        if raw is None or not raw.strip():
            return None
        try:
            goal = float(raw.replace(",", "."))
        except ValueError:
            logger.warning("Ignoring unreadable spending goal %r", raw)
            return None
        return goal if goal > 0 else None

    def set_goal(self, goal: float | None):
        if goal is None or goal == 0:
            self._db.remove_item(GOAL_KEY)
            return
        if goal < 0:
            raise ValueError("A meta de gastos deve ser positiva.")
        self._db.set_item(GOAL_KEY, f"{goal:.2f}")

    def is_privacy_mode(self) -> bool:
        return (self._db.get_item(PRIVACY_KEY, "false") or "").lower() == "true"

    def set_privacy_mode(self, enabled: bool):
        self._db.set_item(PRIVACY_KEY, "true" if enabled else "false")

    def toggle_privacy_mode(self) -> bool:
        enabled = not self.is_privacy_mode()
        self.set_privacy_mode(enabled)
        return enabled

    def get_appearance_mode(self) -> str:
        mode = self._db.get_item(APPEARANCE_KEY, "system") or "system"
        return mode if mode in APPEARANCE_MODES else "system"

    def set_appearance_mode(self, mode: str):
        if mode not in APPEARANCE_MODES:
            raise ValueError(f"Aparência inválida: {mode}")
        self._db.set_item(APPEARANCE_KEY, mode)
