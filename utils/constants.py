APP_NAME = "Finanças"
APP_WIDTH = 1100
APP_HEIGHT = 720
DB_FILE = "financas.db"

# Keys in the local_storage table
TRANSACTIONS_KEY = "finance_transactions"
GOAL_KEY = "finance_goal"
PRIVACY_KEY = "finance_privacy"
APPEARANCE_KEY = "appearance_mode"

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"
DISPLAY_DATE_FORMAT = "%d/%m/%Y"

CURRENCY_SYMBOL = "R$"
PRIVACY_MASK = "••••"

TRANSACTION_TYPES = ("income", "expense")
TRANSACTION_STATUSES = ("pending", "paid")
TYPE_FILTERS = ("all", "income", "expense", "debt")

RECURRING_MONTHS = 12
MAX_INSTALLMENTS = 120
GOAL_ALERT_THRESHOLD = 0.80  # default 80%

BACKUP_FILE_PREFIX = "financas_backup"

SEVERITY_COLORS = {
    "error":   "#F44336",
    "warning": "#FF9800",
    "info":    "#2196F3",
}

TYPE_COLORS = {
    "income":  "#16a34a",
    "expense": "#e11d48",
}

APPEARANCE_MODES = ("system", "light", "dark")
