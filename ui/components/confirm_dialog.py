import customtkinter as ctk


class ConfirmDialog(ctk.CTkToplevel):
    """Modal yes/no question. Blocks until closed; answer in .result."""

    def __init__(
        self,
        master,
        title: str,
        message: str,
        confirm_text: str = "Confirmar",
        danger: bool = True,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self.title(title)
        self.result = False
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=340, justify="left", padx=20, pady=16
        ).grid(row=0, column=0, sticky="ew")

        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.grid(row=1, column=0, pady=(0, 16), padx=20, sticky="e")

        ctk.CTkButton(
            buttons, text="Cancelar", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left", padx=(0, 8))

        confirm_colors = {"fg_color": "#e11d48", "hover_color": "#be123c"} if danger else {}
        ctk.CTkButton(
            buttons, text=confirm_text, width=90,
            command=self._on_confirm, **confirm_colors,
        ).pack(side="left")

        self.bind("<Escape>", lambda _e: self.destroy())
        self.transient(master)
        self.grab_set()
        center_over(self, master)
        self.wait_window()

    def _on_confirm(self):
        self.result = True
        self.destroy()


def center_over(window, master):
    """Place a toplevel in the middle of its master."""
    window.update_idletasks()
    mx = master.winfo_x() + master.winfo_width() // 2
    my = master.winfo_y() + master.winfo_height() // 2
    w, h = window.winfo_reqwidth(), window.winfo_reqheight()
    window.geometry(f"+{mx - w//2}+{my - h//2}")
