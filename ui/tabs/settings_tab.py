import os
import customtkinter as ctk
from tkinter import filedialog, messagebox

from services.data_service import BackupFormatError, DataService
from services.settings_service import SettingsService
from ui.components.confirm_dialog import ConfirmDialog
from utils.app_config import get_storage_folder, set_storage_folder
from utils.currency import parse_amount
from utils.logger import get_logger

logger = get_logger(__name__)

_APPEARANCE_LABELS = {"system": "Sistema", "light": "Claro", "dark": "Escuro"}


class SettingsTab(ctk.CTkFrame):
    """Spending goal, privacy, backup and storage preferences."""

    def __init__(
        self,
        master,
        settings_service: SettingsService,
        data_service: DataService,
        notify_refresh,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._settings_svc = settings_service
        self._data_svc = data_service
        self._notify_refresh = notify_refresh

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        scroll = ctk.CTkScrollableFrame(self, fg_color="transparent")
        scroll.grid(row=0, column=0, sticky="nsew")
        scroll.grid_columnconfigure(0, weight=1)

        self._build_goal_section(scroll)
        self._build_backup_section(scroll)
        self._build_preferences_section(scroll)
        self._build_storage_section(scroll)

    def refresh(self):
        goal = self._settings_svc.get_goal()
        self._goal_var.set(f"{goal:.2f}".replace(".", ",") if goal else "")
        self._privacy_var.set(self._settings_svc.is_privacy_mode())
        self._appearance_var.set(_APPEARANCE_LABELS[self._settings_svc.get_appearance_mode()])

    # ── Spending goal ─────────────────────────────────────────────────────────

    def _build_goal_section(self, parent):
        section = self._make_section(parent, "Meta de Gastos Mensal", row=0)
        self._goal_var = ctk.StringVar()
        ctk.CTkEntry(
            section, textvariable=self._goal_var, width=140, placeholder_text="0,00",
        ).grid(row=0, column=0, padx=(8, 4), pady=6, sticky="w")
        ctk.CTkButton(
            section, text="Salvar Meta", width=110, command=self._save_goal,
        ).grid(row=0, column=1, padx=4, sticky="w")
        self._goal_status_var = ctk.StringVar()
        ctk.CTkLabel(
            section, textvariable=self._goal_status_var,
            font=ctk.CTkFont(size=11), anchor="w",
        ).grid(row=1, column=0, columnspan=2, sticky="w", padx=8, pady=(0, 6))

        goal = self._settings_svc.get_goal()
        if goal:
            self._goal_var.set(f"{goal:.2f}".replace(".", ","))

    def _save_goal(self):
        raw = self._goal_var.get().strip()
        try:
            goal = parse_amount(raw) if raw else None
            self._settings_svc.set_goal(goal)
        except ValueError:
            self._goal_status_var.set("Valor inválido.")
            return
        self._goal_status_var.set("Meta salva." if goal else "Meta removida.")
        self._notify_refresh()

    # ── Backup ────────────────────────────────────────────────────────────────

    def _build_backup_section(self, parent):
        section = self._make_section(parent, "Backup", row=1)
        buttons = ctk.CTkFrame(section, fg_color="transparent")
        buttons.grid(row=0, column=0, sticky="w", padx=8, pady=6)

        ctk.CTkButton(
            buttons, text="Exportar JSON", width=130, command=self._export_json,
        ).pack(side="left", padx=4)
        ctk.CTkButton(
            buttons, text="Importar JSON…", width=130,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._import_json,
        ).pack(side="left", padx=4)

        self._io_status_var = ctk.StringVar()
        ctk.CTkLabel(
            section, textvariable=self._io_status_var,
            text_color="#4CAF50", font=ctk.CTkFont(size=11), anchor="w",
        ).grid(row=1, column=0, sticky="w", padx=8, pady=(0, 6))

    def _export_json(self):
        path = filedialog.asksaveasfilename(
            title="Exportar backup",
            defaultextension=".json",
            initialfile=DataService.backup_filename(),
            filetypes=[("JSON", "*.json"), ("Todos os arquivos", "*.*")],
        )
        if not path:
            return
        try:
            count = self._data_svc.export_to_file(path)
        except OSError as e:
            logger.error("Export to %s failed: %s", path, e)
            messagebox.showerror("Falha na exportação", str(e))
            return
        self._io_status_var.set(f"{count} transações exportadas para {os.path.basename(path)}")

    def _import_json(self):
        path = filedialog.askopenfilename(
            title="Importar backup",
            filetypes=[("JSON", "*.json"), ("Todos os arquivos", "*.*")],
        )
        if not path:
            return
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            "Importar Backup",
            "Todas as transações atuais serão substituídas pelas do arquivo. Continuar?",
            confirm_text="Substituir",
        )
        if not dlg.result:
            return
        try:
            count = self._data_svc.import_from_file(path)
        except (BackupFormatError, OSError, UnicodeDecodeError) as e:
            messagebox.showerror("Falha na importação", f"Não foi possível importar o arquivo:\n{e}")
            return
        self._io_status_var.set(f"{count} transações importadas.")
        self._notify_refresh()

    # ── Preferences ───────────────────────────────────────────────────────────

    def _build_preferences_section(self, parent):
        section = self._make_section(parent, "Preferências", row=2)

        self._privacy_var = ctk.BooleanVar(value=self._settings_svc.is_privacy_mode())
        ctk.CTkSwitch(
            section, text="Ocultar valores (modo privacidade)",
            variable=self._privacy_var, command=self._toggle_privacy,
        ).grid(row=0, column=0, columnspan=2, padx=8, pady=6, sticky="w")

        ctk.CTkLabel(section, text="Aparência:", anchor="e").grid(
            row=1, column=0, padx=(8, 4), pady=6, sticky="w"
        )
        self._appearance_var = ctk.StringVar(
            value=_APPEARANCE_LABELS[self._settings_svc.get_appearance_mode()]
        )
        ctk.CTkComboBox(
            section,
            values=list(_APPEARANCE_LABELS.values()),
            variable=self._appearance_var,
            width=160,
            state="readonly",
            command=self._save_appearance,
        ).grid(row=1, column=1, padx=4, pady=6, sticky="w")

    def _toggle_privacy(self):
        self._settings_svc.set_privacy_mode(self._privacy_var.get())
        self._notify_refresh()

    def _save_appearance(self, label: str):
        mode = next(k for k, v in _APPEARANCE_LABELS.items() if v == label)
        self._settings_svc.set_appearance_mode(mode)
        ctk.set_appearance_mode(mode)
        self._notify_refresh()

    # ── Storage folder ────────────────────────────────────────────────────────

    def _build_storage_section(self, parent):
        section = self._make_section(parent, "Pasta de Dados", row=3)
        ctk.CTkLabel(
            section,
            text="O arquivo financas.db fica nesta pasta.",
            text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        ).grid(row=0, column=0, columnspan=3, sticky="w", padx=8, pady=(4, 6))

        self._folder_var = ctk.StringVar(value=get_storage_folder() or "(padrão: pasta do app)")
        ctk.CTkEntry(
            section, textvariable=self._folder_var, state="readonly", width=340,
        ).grid(row=1, column=0, padx=(8, 4), pady=4, sticky="ew")
        ctk.CTkButton(
            section, text="Escolher…", width=90, command=self._browse_folder,
        ).grid(row=1, column=1, padx=4)
        ctk.CTkButton(
            section, text="Restaurar Padrão", width=130,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._reset_folder,
        ).grid(row=1, column=2, padx=(4, 8))

        self._restart_label = ctk.CTkLabel(
            section, text="", text_color="#FF9800", font=ctk.CTkFont(size=11), anchor="w",
        )
        self._restart_label.grid(row=2, column=0, columnspan=3, sticky="w", padx=8, pady=(0, 6))

    def _browse_folder(self):
        path = filedialog.askdirectory(title="Escolher pasta de dados")
        if not path:
            return
        self._set_folder(path, path)

    def _reset_folder(self):
        self._set_folder(None, "(padrão: pasta do app)")

    def _set_folder(self, folder: str | None, shown: str):
        try:
            set_storage_folder(folder)
        except OSError as e:
            messagebox.showerror("Falha ao salvar", str(e))
            return
        self._folder_var.set(shown)
        self._restart_label.configure(text="Reinicie o app para a mudança ter efeito.")

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _make_section(self, parent, title: str, row: int) -> ctk.CTkFrame:
        """Create a labelled card section and return its inner frame."""
        outer = ctk.CTkFrame(parent, corner_radius=8)
        outer.grid(row=row, column=0, sticky="ew", padx=12, pady=8)
        outer.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            outer, text=title,
            font=ctk.CTkFont(size=14, weight="bold"), anchor="w",
        ).grid(row=0, column=0, sticky="w", padx=12, pady=(10, 4))

        inner = ctk.CTkFrame(outer, fg_color="transparent")
        inner.grid(row=1, column=0, sticky="ew", padx=4, pady=(0, 8))
        inner.grid_columnconfigure(0, weight=1)
        return inner
