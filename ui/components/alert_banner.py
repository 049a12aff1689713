import customtkinter as ctk
from utils.constants import SEVERITY_COLORS


class AlertBanner(ctk.CTkFrame):
    """Strip across the top of the window for non-blocking notices."""

    def __init__(self, master, message: str, severity: str = "info",
                 action_text: str | None = None, action_cmd=None, **kwargs):
        color = SEVERITY_COLORS.get(severity, SEVERITY_COLORS["info"])
        super().__init__(master, fg_color=color, corner_radius=6, **kwargs)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, text_color="white",
            anchor="w", padx=10, pady=6, wraplength=900, justify="left",
        ).grid(row=0, column=0, sticky="ew")

        column = 1
        if action_text and action_cmd:
            ctk.CTkButton(
                self, text=action_text, width=70, height=24,
                fg_color="transparent", border_width=1, border_color="white",
                text_color="white", command=action_cmd,
            ).grid(row=0, column=column, padx=2)
            column += 1

        ctk.CTkButton(
            self, text="✕", width=28, height=24,
            fg_color="transparent", text_color="white",
            command=self.destroy,
        ).grid(row=0, column=column, padx=(2, 4))
