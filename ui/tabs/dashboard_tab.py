import customtkinter as ctk
import tkinter as tk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from services.report_service import ReportService
from services.settings_service import SettingsService
from utils.constants import TYPE_COLORS
from utils.currency import format_currency
from utils.date_helpers import current_month_str, friendly_month, prev_month, next_month, format_display_date


class DashboardTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        report_service: ReportService,
        settings_service: SettingsService,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._report_svc = report_service
        self._settings_svc = settings_service
        self._month = current_month_str()
        self._month_var = ctk.StringVar(value=friendly_month(self._month))

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_month_nav()
        self._build_summary_cards()
        self._build_bottom_section()
        self._load()

    def refresh(self):
        self._load()

    def _build_month_nav(self):
        nav = ctk.CTkFrame(self, fg_color="transparent")
        nav.grid(row=0, column=0, sticky="ew", padx=16, pady=(12, 0))
        ctk.CTkButton(nav, text="◀", width=28, command=self._prev_month).pack(side="left")
        ctk.CTkLabel(
            nav, textvariable=self._month_var,
            font=ctk.CTkFont(size=15, weight="bold"), width=150, anchor="center"
        ).pack(side="left", padx=8)
        ctk.CTkButton(nav, text="▶", width=28, command=self._next_month).pack(side="left")

    def _prev_month(self):
        self._month = prev_month(self._month)
        self._load()

    def _next_month(self):
        self._month = next_month(self._month)
        self._load()

    def _build_summary_cards(self):
        self._card_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._card_frame.grid(row=1, column=0, sticky="ew", padx=16, pady=12)
        self._card_frame.grid_columnconfigure((0, 1, 2, 3), weight=1)

    def _build_bottom_section(self):
        bottom = ctk.CTkFrame(self, fg_color="transparent")
        bottom.grid(row=2, column=0, sticky="nsew", padx=16, pady=(0, 12))
        bottom.grid_columnconfigure(0, weight=1)
        bottom.grid_columnconfigure(1, weight=1)
        bottom.grid_rowconfigure(0, weight=1)

        # Category chart
        chart = ctk.CTkFrame(bottom, fg_color=("gray90", "gray20"), corner_radius=10)
        chart.grid(row=0, column=0, sticky="nsew", padx=(0, 8))
        ctk.CTkLabel(
            chart, text="Gastos por Categoria",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._pie_fig = Figure(figsize=(3, 3), dpi=80, tight_layout=True)
        self._pie_ax = self._pie_fig.add_subplot(111)
        self._pie_mpl = FigureCanvasTkAgg(self._pie_fig, master=chart)
        self._pie_mpl.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=4)
        self._legend_frame = ctk.CTkFrame(chart, fg_color="transparent")
        self._legend_frame.pack(fill="x", padx=12, pady=(0, 10))

        right = ctk.CTkFrame(bottom, fg_color="transparent")
        right.grid(row=0, column=1, sticky="nsew", padx=(8, 0))
        right.grid_columnconfigure(0, weight=1)
        right.grid_rowconfigure(1, weight=1)

        self._goal_frame = ctk.CTkFrame(right, fg_color=("gray90", "gray20"), corner_radius=10)
        self._goal_frame.grid(row=0, column=0, sticky="ew", pady=(0, 8))

        self._overdue_frame = ctk.CTkScrollableFrame(right, label_text="Contas Atrasadas")
        self._overdue_frame.grid(row=1, column=0, sticky="nsew")

    def _load(self):
        self._month_var.set(friendly_month(self._month))
        hidden = self._settings_svc.is_privacy_mode()

        # Summary cards
        for w in self._card_frame.winfo_children():
            w.destroy()
        summary = self._report_svc.get_summary(self._month)
        debt = self._report_svc.get_installment_debt_total()
        card_data = [
            ("Saldo do Mês", summary["balance"], "#2196F3" if summary["balance"] >= 0 else "#FF9800"),
            ("Receitas",     summary["income"],  TYPE_COLORS["income"]),
            ("Despesas",     summary["expense"], TYPE_COLORS["expense"]),
            ("Parcelas a Pagar", debt,           "#8b5cf6"),
        ]
        for i, (label, value, color) in enumerate(card_data):
            self._make_card(self._card_frame, i, label, value, color, hidden)

        # Category chart + legend
        breakdown = self._report_svc.get_category_breakdown(self._month)
        self.after(50, lambda b=breakdown: self._draw_pie_chart(b, hidden))
        for w in self._legend_frame.winfo_children():
            w.destroy()
        for item in breakdown:
            row = ctk.CTkFrame(self._legend_frame, fg_color="transparent")
            row.pack(fill="x", pady=1)
            tk.Label(row, bg=item["color_hex"], width=2).pack(side="left", padx=(0, 6))
            ctk.CTkLabel(row, text=item["label"], anchor="w").pack(side="left")
            ctk.CTkLabel(
                row, text=format_currency(item["total"], hidden=hidden), anchor="e",
            ).pack(side="right")

        self._load_goal(hidden)
        self._load_overdue(hidden)

    def _load_goal(self, hidden: bool):
        for w in self._goal_frame.winfo_children():
            w.destroy()
        ctk.CTkLabel(
            self._goal_frame, text="Meta de Gastos",
            font=ctk.CTkFont(size=13, weight="bold"), anchor="w",
        ).pack(fill="x", padx=12, pady=(10, 2))

        goal = self._settings_svc.get_goal()
        if not goal:
            ctk.CTkLabel(
                self._goal_frame, text="Nenhuma meta definida. Defina em Configurações.",
                text_color="gray60", anchor="w",
            ).pack(fill="x", padx=12, pady=(0, 10))
            return

        progress = self._report_svc.get_goal_progress(goal, self._month)
        pct = min(progress.percentage, 1.0)
        bar_color = "#4CAF50" if pct < 0.8 else ("#FF9800" if pct < 1.0 else "#F44336")
        ctk.CTkLabel(
            self._goal_frame,
            text=(
                f"{format_currency(progress.spent, hidden=hidden)} de "
                f"{format_currency(progress.goal, hidden=hidden)} "
                f"({progress.percentage*100:.0f}%)"
            ),
            text_color="gray60", anchor="w",
        ).pack(fill="x", padx=12)
        bar = ctk.CTkProgressBar(self._goal_frame, progress_color=bar_color)
        bar.pack(fill="x", padx=12, pady=(4, 12))
        bar.set(pct)

    def _load_overdue(self, hidden: bool):
        for w in self._overdue_frame.winfo_children():
            w.destroy()
        overdue = self._report_svc.get_overdue()
        if not overdue:
            ctk.CTkLabel(
                self._overdue_frame, text="Nenhuma conta atrasada.",
                text_color="gray60",
            ).pack(pady=20)
            return
        for idx, tx in enumerate(overdue):
            bg = ("gray90", "gray20") if idx % 2 == 0 else ("gray86", "gray24")
            f = ctk.CTkFrame(self._overdue_frame, fg_color=bg, corner_radius=4)
            f.pack(fill="x", pady=1)
            f.grid_columnconfigure(1, weight=1)
            ctk.CTkLabel(
                f, text=format_display_date(tx.date), width=85, anchor="w",
            ).grid(row=0, column=0, padx=6, pady=3)
            label = tx.description
            if tx.installment_label:
                label += f" ({tx.installment_label})"
            ctk.CTkLabel(f, text=label, anchor="w").grid(row=0, column=1, padx=4, sticky="ew")
            ctk.CTkLabel(
                f, text=format_currency(tx.amount, hidden=hidden),
                text_color="#F44336", anchor="e", width=100,
            ).grid(row=0, column=2, padx=6)

    def _draw_pie_chart(self, breakdown: list[dict], hidden: bool):
        ax = self._pie_ax
        ax.clear()
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        self._pie_fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)

        total = sum(d["total"] for d in breakdown)
        if not breakdown or total == 0:
            ax.text(0.5, 0.5, "Sem dados de despesas", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            ax.axis("off")
            self._pie_mpl.draw_idle()
            return

        ax.pie(
            [d["total"] for d in breakdown],
            colors=[d["color_hex"] for d in breakdown],
            startangle=90,
            wedgeprops={"width": 0.35, "edgecolor": bg},
            autopct=None if hidden else "%1.0f%%",
            pctdistance=0.82,
            textprops={"fontsize": 8, "color": "white"},
        )
        ax.set_aspect("equal")
        self._pie_mpl.draw_idle()

    def _make_card(self, parent, col, label, value, color, hidden: bool):
        card = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=col, padx=6, sticky="ew")
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            card, text=label, font=ctk.CTkFont(size=12),
            text_color="gray60",
        ).grid(row=0, column=0, pady=(12, 0), padx=16)
        ctk.CTkLabel(
            card,
            text=format_currency(value, hidden=hidden),
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=color,
        ).grid(row=1, column=0, pady=(4, 12), padx=16)
