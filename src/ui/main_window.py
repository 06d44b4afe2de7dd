#!/usr/bin/env python3
"""
Campus AutoLogin - Main UI Window

Dark-themed window for the campus network login settings.
Edits are saved automatically; buttons test the portal, log in, and find the login page.
"""

import customtkinter as ctk
import tkinter.messagebox as msgbox
import time
from typing import Callable, Dict, Optional
from pathlib import Path

from src.config import (
    APP_NAME,
    VERSION,
    UI_THEME,
    UI_COLOR_THEME,
    UI_WINDOW_SIZE,
    UI_RESIZABLE,
    MIN_WINDOW_WIDTH,
    MIN_WINDOW_HEIGHT,
    OPERATORS,
    translator,
    t,
)
from src.config.settings import (
    FIELD_WEB,
    FIELD_COUNT,
    FIELD_PASSWORD,
    FIELD_OPERATOR,
)
from src.controller import (
    AppController,
    NotificationCenter,
    Notice,
    TkScheduler,
)
from src.controller.notifications import TOAST, TONE_OK, TONE_WARN, TONE_INFO, TONE_ERROR
from src.models import SettingsRecord
from src.network import NetworkBackend
from src.utils import (
    SettingsStore,
    UILogHandler,
    autostart_manager,
    setup_logging,
    system_info,
)

TONE_COLORS = {
    TONE_OK: "#4CAF50",
    TONE_WARN: "orange",
    TONE_INFO: "#42A5F5",
    TONE_ERROR: "#EF5350",
}


def secondary_click_sequences(is_macos: bool) -> tuple:
    """Tk events for a right click; Button-2 is the middle button outside macOS"""
    if is_macos:
        return ("<Button-3>", "<Button-2>")
    return ("<Button-3>",)


def is_inside_widget(clicked_path: str, widget_path: str) -> bool:
    """True when a Tk path names the widget itself or one of its descendants"""
    return clicked_path == widget_path or clicked_path.startswith(widget_path + ".")


class SettingsFrame(ctk.CTkFrame):
    """Frame holding the five saved settings and the detect button"""

    OPERATOR_LABELS = dict(OPERATORS)
    OPERATOR_KEYS = {label: key for key, label in OPERATORS.items()}

    def __init__(
        self,
        parent,
        on_activity: Callable[[str], None],
        on_autostart_toggled: Callable[[bool], None],
        on_detect: Callable[[], None],
    ):
        super().__init__(parent)
        self._on_activity = on_activity
        self._on_autostart_toggled = on_autostart_toggled
        self._operator_key = ""

        self.content_frame = ctk.CTkFrame(self, fg_color="transparent")
        self.content_frame.pack(fill="x", padx=20, pady=15)

        # Title
        self.title_label = ctk.CTkLabel(
            self.content_frame,
            text=t("settings_title"),
            font=ctk.CTkFont(size=16, weight="bold"),
        )
        self.title_label.pack(pady=(0, 15))

        # Login page URL + detect
        self.url_label = ctk.CTkLabel(self.content_frame, text=t("login_url"))
        self.url_label.pack(anchor="w")

        self.url_frame = ctk.CTkFrame(self.content_frame, fg_color="transparent")
        self.url_frame.pack(fill="x", pady=(5, 10))
        self.url_entry = ctk.CTkEntry(
            self.url_frame, placeholder_text="e.g., http://10.1.1.1/eportal/index.jsp"
        )
        self.url_entry.pack(side="left", fill="x", expand=True)

        self.detect_btn = ctk.CTkButton(
            self.url_frame, text=t("detect"), width=100, command=on_detect
        )
        self.detect_btn.pack(side="right", padx=(10, 0))

        self.detect_hint = ctk.CTkLabel(
            self.content_frame,
            text=t("detect_tooltip"),
            text_color="gray60",
            font=ctk.CTkFont(size=11),
        )
        self.detect_hint.pack(anchor="w")

        # Account
        self.account_label = ctk.CTkLabel(self.content_frame, text=t("account"))
        self.account_label.pack(anchor="w", pady=(10, 0))
        self.account_entry = ctk.CTkEntry(self.content_frame)
        self.account_entry.pack(fill="x", pady=(5, 10))

        # Password, masked by default. Users can toggle visibility.
        self.password_label = ctk.CTkLabel(self.content_frame, text=t("password"))
        self.password_label.pack(anchor="w")

        self.password_frame = ctk.CTkFrame(self.content_frame, fg_color="transparent")
        self.password_frame.pack(fill="x", pady=(5, 10))
        self.password_entry = ctk.CTkEntry(self.password_frame, show="*")
        self.password_entry.pack(side="left", fill="x", expand=True)

        self.password_visible = False
        self.password_toggle = ctk.CTkButton(
            self.password_frame,
            text=t("show"),
            width=60,
            command=self._toggle_password_visibility,
        )
        self.password_toggle.pack(side="right", padx=(10, 0))

        # Operator
        self.operator_label = ctk.CTkLabel(self.content_frame, text=t("operator"))
        self.operator_label.pack(anchor="w")
        # The segmented button has no change event; its command runs on every click
        self.operator_select = ctk.CTkSegmentedButton(
            self.content_frame,
            values=list(self.OPERATOR_LABELS.values()),
            command=self._handle_operator_click,
        )
        self.operator_select.pack(fill="x", pady=(5, 10))

        # Autostart
        self.autostart_switch = ctk.CTkSwitch(
            self.content_frame,
            text=t("autostart"),
            command=self._handle_autostart_toggle,
        )
        self.autostart_switch.pack(anchor="w", pady=(5, 0))

        # Text edits (typing, paste, cut) all count as activity
        self._entries: Dict[str, ctk.CTkEntry] = {
            FIELD_WEB: self.url_entry,
            FIELD_COUNT: self.account_entry,
            FIELD_PASSWORD: self.password_entry,
        }
        for field_id, entry in self._entries.items():
            for sequence in ("<KeyRelease>", "<<Paste>>", "<<Cut>>"):
                entry.bind(sequence, lambda e, f=field_id: self._on_activity(f), add="+")

    def _toggle_password_visibility(self):
        self.password_visible = not self.password_visible
        if self.password_visible:
            self.password_entry.configure(show="")
            self.password_toggle.configure(text=t("hide"))
        else:
            self.password_entry.configure(show="*")
            self.password_toggle.configure(text=t("show"))

    def _handle_operator_click(self, label: str):
        self._operator_key = self.OPERATOR_KEYS.get(label, label)
        self._on_activity(FIELD_OPERATOR)

    def _handle_autostart_toggle(self):
        self._on_autostart_toggled(bool(self.autostart_switch.get()))

    @staticmethod
    def _set_entry(entry: ctk.CTkEntry, value: str):
        entry.delete(0, "end")
        if value:
            entry.insert(0, value)

    def read_settings(self) -> SettingsRecord:
        return SettingsRecord(
            webindex=self.url_entry.get(),
            countindex=self.account_entry.get(),
            passwordindex=self.password_entry.get(),
            operatorindex=self._operator_key,
            autostartindex="true" if self.autostart_switch.get() else "false",
        )

    def apply_settings(self, record: SettingsRecord):
        self._set_entry(self.url_entry, record.webindex)
        self._set_entry(self.account_entry, record.countindex)
        self._set_entry(self.password_entry, record.passwordindex)

        # Unknown operator keys are kept as-is so they survive the next save
        self._operator_key = record.operatorindex
        self.operator_select.set(self.OPERATOR_LABELS.get(record.operatorindex, ""))

        if record.autostart_enabled:
            self.autostart_switch.select()
        else:
            self.autostart_switch.deselect()

    def set_login_url(self, url: str):
        self._set_entry(self.url_entry, url)

    def set_detect_busy(self, busy: bool):
        if busy:
            self.detect_btn.configure(state="disabled", text=t("detecting_label"))
        else:
            self.detect_btn.configure(state="normal", text=t("detect"))

    def apply_language(self):
        self.title_label.configure(text=t("settings_title"))
        self.url_label.configure(text=t("login_url"))
        self.detect_hint.configure(text=t("detect_tooltip"))
        self.account_label.configure(text=t("account"))
        self.password_label.configure(text=t("password"))
        self.password_toggle.configure(text=t("hide") if self.password_visible else t("show"))
        self.operator_label.configure(text=t("operator"))
        self.autostart_switch.configure(text=t("autostart"))
        if self.detect_btn.cget("state") != "disabled":
            self.detect_btn.configure(text=t("detect"))


class ActionButtonsFrame(ctk.CTkFrame):
    """Test/login button and quit"""

    def __init__(self, parent, callbacks: dict):
        super().__init__(parent)
        self.callbacks = callbacks

        # Left click tests, right click logs in
        self.test_btn = ctk.CTkButton(
            self,
            text=t("test_login"),
            font=ctk.CTkFont(size=16, weight="bold"),
            height=50,
            command=self.callbacks.get("test_connection"),
        )
        self.test_btn.pack(fill="x", padx=20, pady=(15, 5))
        for sequence in secondary_click_sequences(system_info.is_macos()):
            self.test_btn.bind(sequence, self._handle_secondary_click)

        self.test_hint = ctk.CTkLabel(
            self,
            text=t("test_tooltip"),
            text_color="gray60",
            font=ctk.CTkFont(size=11),
        )
        self.test_hint.pack(pady=(0, 5))

        self.quit_btn = ctk.CTkButton(
            self,
            text=t("quit"),
            fg_color="transparent",
            border_width=1,
            command=self.callbacks.get("quit"),
        )
        self.quit_btn.pack(fill="x", padx=20, pady=(5, 15))

    def _handle_secondary_click(self, event):
        login = self.callbacks.get("login")
        if login:
            login()
        return "break"  # no context menu

    def apply_language(self):
        self.test_btn.configure(text=t("test_login"))
        self.test_hint.configure(text=t("test_tooltip"))
        self.quit_btn.configure(text=t("quit"))


class LogFrame(ctk.CTkFrame):
    """Frame for displaying log messages"""

    def __init__(self, parent):
        super().__init__(parent)

        self.content_frame = ctk.CTkFrame(self, fg_color="transparent")
        self.content_frame.pack(fill="both", expand=True, padx=20, pady=15)

        self.title_label = ctk.CTkLabel(
            self.content_frame,
            text=t("activity_log"),
            font=ctk.CTkFont(size=14, weight="bold"),
        )
        self.title_label.pack(pady=(0, 10))

        self.log_display = ctk.CTkTextbox(
            self.content_frame, height=120, state="disabled", corner_radius=6
        )
        self.log_display.pack(fill="x", pady=(0, 5))

    def add_log(self, message: str):
        """Add message to log"""
        timestamp = time.strftime("%H:%M:%S")
        log_entry = f"[{timestamp}] {message}\n"

        self.log_display.configure(state="normal")
        self.log_display.insert("end", log_entry)
        self.log_display.see("end")
        self.log_display.configure(state="disabled")

    def apply_language(self):
        self.title_label.configure(text=t("activity_log"))


class TkNoticeRenderer:
    """Draws toasts and detail panels for a NotificationCenter"""

    def __init__(self, root, toast_container):
        self.root = root
        self.toast_container = toast_container
        self.center: Optional[NotificationCenter] = None
        self._mounted: Dict[int, tuple] = {}
        self.root.bind_all("<Button-1>", self._handle_click, add="+")

    def mount(self, notice: Notice):
        if notice.kind == TOAST:
            widget = ctk.CTkLabel(
                self.toast_container,
                text=notice.text,
                fg_color=("gray80", "gray20"),
                corner_radius=6,
                wraplength=380,
                justify="left",
            )
            widget.pack(fill="x", pady=2, ipadx=10, ipady=6)
            if not self._toast_count():
                self.toast_container.place(relx=0.5, rely=1.0, anchor="s", y=-10)
            self.toast_container.lift()
        else:
            widget = self._build_panel(notice)
            widget.place(relx=0.5, rely=0.5, anchor="center")
            widget.lift()
        self._mounted[notice.id] = (notice, widget)

    def unmount(self, notice: Notice):
        entry = self._mounted.pop(notice.id, None)
        if entry is not None:
            entry[1].destroy()
        # An empty container would still swallow clicks
        if notice.kind == TOAST and not self._toast_count():
            self.toast_container.place_forget()

    def _toast_count(self) -> int:
        return sum(1 for notice, _ in self._mounted.values() if notice.kind == TOAST)

    def _close(self, notice: Notice):
        if self.center is not None:
            self.center.dismiss(notice)

    def _build_panel(self, notice: Notice) -> ctk.CTkFrame:
        content = notice.content
        panel = ctk.CTkFrame(self.root, corner_radius=8, border_width=1)

        ctk.CTkLabel(
            panel, text=content.title, font=ctk.CTkFont(size=15, weight="bold")
        ).pack(padx=20, pady=(15, 8))

        if content.body:
            ctk.CTkLabel(
                panel, text=content.body, justify="left", wraplength=360
            ).pack(anchor="w", padx=20)

        for tone, text in content.lines:
            ctk.CTkLabel(
                panel,
                text=text,
                text_color=TONE_COLORS.get(tone),
                justify="left",
                wraplength=360,
            ).pack(anchor="w", padx=20, pady=2)

        if content.raw is not None:
            raw_box = ctk.CTkTextbox(panel, height=140, width=360, font=ctk.CTkFont(size=11))
            raw_box.insert("end", content.raw_text)
            raw_box.configure(state="disabled")

            def toggle_raw():
                if raw_box.winfo_ismapped():
                    raw_box.pack_forget()
                else:
                    raw_box.pack(padx=20, pady=(0, 5), before=close_btn)

            ctk.CTkButton(
                panel,
                text=t("raw_data"),
                fg_color="transparent",
                border_width=1,
                height=24,
                command=toggle_raw,
            ).pack(anchor="w", padx=20, pady=(10, 5))

        close_btn = ctk.CTkButton(panel, text=t("close"), command=lambda: self._close(notice))
        close_btn.pack(pady=(10, 15))
        return panel

    def _handle_click(self, event):
        if self.center is None:
            return
        clicked = str(event.widget)
        for notice, widget in list(self._mounted.values()):
            if not notice.dismiss_on_outside_click:
                continue
            if not is_inside_widget(clicked, str(widget)):
                self.center.outside_click(notice)


class CampusAutoLoginApp:
    """Main application class"""

    def __init__(self):
        # Dark mode enforcement
        ctk.set_appearance_mode(UI_THEME)
        ctk.set_default_color_theme(UI_COLOR_THEME)

        # Main window setup
        self.root = ctk.CTk()
        self.root.title(f"{APP_NAME} v{VERSION}")
        self.root.geometry(UI_WINDOW_SIZE)
        self.root.resizable(UI_RESIZABLE, UI_RESIZABLE)
        self.root.minsize(MIN_WINDOW_WIDTH, MIN_WINDOW_HEIGHT)

        self._set_app_icon()

        self.logger = setup_logging()
        self.scheduler = TkScheduler(self.root)
        self._detect_busy = False

        self._build_header()
        self._build_main_content()
        self._build_footer()

        # Toasts stack at the bottom, above everything else; placed while any are shown
        self.toast_container = ctk.CTkFrame(self.root, fg_color="transparent")

        self.renderer = TkNoticeRenderer(self.root, self.toast_container)
        self.notifier = NotificationCenter(self.scheduler, self.renderer)
        self.renderer.center = self.notifier

        self.store = SettingsStore()
        self.controller = AppController(
            view=self,
            backend=NetworkBackend(self.store),
            store=self.store,
            autostart=autostart_manager,
            notifier=self.notifier,
            scheduler=self.scheduler,
            logger=self.logger,
        )

        self.log_handler = UILogHandler(self._post_log)
        self.logger.addHandler(self.log_handler)

        self._setup_keyboard_shortcuts()
        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    # --- View interface used by the controller ---
    def read_settings(self) -> SettingsRecord:
        return self.settings_frame.read_settings()

    def apply_settings(self, record: SettingsRecord):
        self.settings_frame.apply_settings(record)

    def set_login_url(self, url: str):
        self.settings_frame.set_login_url(url)

    def set_detect_busy(self, busy: bool):
        self._detect_busy = busy
        self.settings_frame.set_detect_busy(busy)

    # --- UI callbacks ---
    def _on_field_activity(self, field_id: str):
        self.controller.on_field_activity(field_id)

    def _on_autostart_toggled(self, checked: bool):
        self.controller.on_autostart_toggled(checked)

    def _do_test_connection(self):
        self.controller.on_test_clicked()

    def _do_login(self):
        self.controller.on_login_requested()

    def _do_detect(self):
        if self._detect_busy:
            return
        self.controller.on_detect_clicked()

    def _post_log(self, message: str):
        # Records arrive from worker threads too
        self.scheduler.post(lambda: self.log_frame.add_log(message))

    def _toggle_language(self):
        translator.toggle()
        self.root.title(f"{t('app_title')} v{VERSION}")
        self.title_label.configure(text=t("app_title"))
        self.language_btn.configure(text=t("language"))
        self.settings_frame.apply_language()
        self.buttons_frame.apply_language()
        self.log_frame.apply_language()

    def _setup_keyboard_shortcuts(self):
        """Set up keyboard shortcuts for common actions"""
        self.root.bind("<Control-t>", lambda e: self._do_test_connection())
        self.root.bind("<Control-l>", lambda e: self._do_login())
        self.root.bind("<Control-d>", lambda e: self._do_detect())
        self.root.bind("<F1>", lambda e: self._show_help())
        self.root.bind("<Control-q>", lambda e: self._quit())

    def _show_help(self):
        """Show help dialog with keyboard shortcuts"""
        msgbox.showinfo(t("help_title"), t("help_text", app=APP_NAME, version=VERSION))

    def _set_app_icon(self):
        """Try to set application icon"""
        try:
            icon_path = Path(__file__).parent.parent.parent / "assets" / "icon.ico"
            if icon_path.exists():
                self.root.iconbitmap(str(icon_path))
        except Exception:
            pass  # Icon not critical

    def _build_header(self):
        """Build application header"""
        header = ctk.CTkFrame(self.root)
        header.pack(fill="x", padx=15, pady=(15, 10))

        self.title_label = ctk.CTkLabel(
            header, text=t("app_title"), font=ctk.CTkFont(size=22, weight="bold")
        )
        self.title_label.pack(side="left", padx=15, pady=12)

        self.language_btn = ctk.CTkButton(
            header, text=t("language"), width=90, command=self._toggle_language
        )
        self.language_btn.pack(side="right", padx=10)

    def _build_main_content(self):
        """Build main content area with scrollable frame"""
        self.scrollable_frame = ctk.CTkScrollableFrame(self.root, corner_radius=0)
        self.scrollable_frame.pack(fill="both", expand=True, padx=10, pady=(0, 10))

        self.settings_frame = SettingsFrame(
            self.scrollable_frame,
            on_activity=self._on_field_activity,
            on_autostart_toggled=self._on_autostart_toggled,
            on_detect=self._do_detect,
        )
        self.settings_frame.pack(fill="x", padx=10, pady=(10, 10))

        callbacks = {
            "test_connection": self._do_test_connection,
            "login": self._do_login,
            "quit": self._quit,
        }
        self.buttons_frame = ActionButtonsFrame(self.scrollable_frame, callbacks)
        self.buttons_frame.pack(fill="x", padx=10, pady=(0, 10))

        self.log_frame = LogFrame(self.scrollable_frame)
        self.log_frame.pack(fill="x", padx=10, pady=(0, 10))

    def _build_footer(self):
        """Build application footer"""
        footer = ctk.CTkFrame(self.root)
        footer.pack(fill="x", padx=15, pady=(0, 15))

        ctk.CTkLabel(
            footer,
            text=system_info.get_system_summary(),
            text_color="gray60",
            font=ctk.CTkFont(size=10),
        ).pack(pady=8)

    def _quit(self):
        try:
            self.root.quit()
        except Exception as e:
            self.logger.error("Quit failed: %s", e)

    def run(self):
        """Start the application"""
        self.logger.info("%s v%s started", APP_NAME, VERSION)
        self.controller.start()

        self.root.mainloop()

        # Cleanup
        self.scheduler.stop()
        self.logger.removeHandler(self.log_handler)


def main():
    """Application entry point"""
    try:
        app = CampusAutoLoginApp()
        app.run()
    except KeyboardInterrupt:
        print("\nApplication closed by user")
    except Exception as e:
        msgbox.showerror("Application Error", f"Unexpected error: {e}")


if __name__ == "__main__":
    main()
