"""
Main window: pick the Steam folder, tune the completion heuristic and run
a bulk verification batch in the background.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDoubleSpinBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from bulkverify.shared.config import AppConfig
from bulkverify.shared.store import ConfigStore
from bulkverify.core.library.library_locator import LibraryFoldersNotFoundError, is_valid_install_dir
from bulkverify.core.notify.notifier import LogNotifier, Notifier, ToastNotifierWin10
from bulkverify.core.notify.sound import SoundPlayer, WinBeepSound
from bulkverify.core.notify.summary import build_summary_payload
from bulkverify.core.validation.batch_runner import BatchRunner
from bulkverify.core.validation.pipeline import build_orchestrator, collect_titles, open_ledger

from .components import Card, LabeledRow, PrimaryButton, SecondaryButton, StatusPill
from .theme import Theme

log = logging.getLogger(__name__)

POLICY_LABELS = {
    "on_trigger": "When validation is requested",
    "on_completion": "When validation finishes",
}


class MainWindow(QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Steam Bulk Verify")
        self.resize(960, 720)
        self.setMinimumSize(720, 540)

        self.theme = Theme("dark")

        self.store = ConfigStore()
        self.cfg: AppConfig = self.store.load()

        self.notifier: Notifier = ToastNotifierWin10() if sys.platform == "win32" else LogNotifier()
        self.sound: SoundPlayer = WinBeepSound()
        self.runner: Optional[BatchRunner] = None

        self._build_ui()
        self._apply_theme()
        self._load_to_ui()

        self._status_timer = QTimer(self)
        self._status_timer.timeout.connect(self._refresh_status)
        self._status_timer.start(500)

    def _apply_theme(self) -> None:
        self.setStyleSheet(self.theme.get_stylesheet())

    def _toggle_dark_mode(self, checked: bool) -> None:
        if checked != (self.theme.mode == "dark"):
            self.theme.toggle_mode()
            self._apply_theme()

    def _build_ui(self) -> None:
        root = QWidget()
        self.setCentralWidget(root)
        main_layout = QVBoxLayout(root)
        main_layout.setContentsMargins(24, 24, 24, 24)
        main_layout.setSpacing(16)

        title = QLabel("Steam Bulk Verify")
        title.setObjectName("TitleLabel")
        main_layout.addWidget(title)
        subtitle = QLabel("Verify the files of every installed game, one after another.")
        subtitle.setObjectName("SubtitleLabel")
        main_layout.addWidget(subtitle)

        self._build_status_bar(main_layout)
        self._build_install_card(main_layout)

        bottom = QHBoxLayout()
        bottom.setSpacing(16)
        self._build_settings_card(bottom)
        self._build_activity_card(bottom)
        main_layout.addLayout(bottom, 1)

    def _build_status_bar(self, parent_layout: QVBoxLayout) -> None:
        row = QHBoxLayout()
        row.setSpacing(12)

        self.status_pill = StatusPill("STOPPED")
        row.addWidget(self.status_pill)
        self.title_pill = StatusPill("No title in progress")
        row.addWidget(self.title_pill)
        self.progress_label = QLabel("")
        self.progress_label.setObjectName("HintLabel")
        row.addWidget(self.progress_label)
        row.addStretch()

        self.btn_start = PrimaryButton("Start Verification")
        self.btn_start.clicked.connect(self._start_batch)
        row.addWidget(self.btn_start)

        self.btn_stop = SecondaryButton("Stop After Current")
        self.btn_stop.setEnabled(False)
        self.btn_stop.clicked.connect(self._stop_batch)
        row.addWidget(self.btn_stop)

        parent_layout.addLayout(row)

    def _build_install_card(self, parent_layout: QVBoxLayout) -> None:
        card = Card()
        label = QLabel("Steam Installation")
        label.setObjectName("SectionLabel")
        card.layout.addWidget(label)

        row = QHBoxLayout()
        self.install_input = QLineEdit()
        self.install_input.setPlaceholderText(r"C:\Program Files (x86)\Steam")
        row.addWidget(self.install_input, 1)
        self.btn_browse = SecondaryButton("Browse…")
        self.btn_browse.clicked.connect(self._browse_install_dir)
        row.addWidget(self.btn_browse)
        card.layout.addLayout(row)

        hint = QLabel("The folder that contains steam.exe. Library folders are read from it.")
        hint.setObjectName("HintLabel")
        card.layout.addWidget(hint)
        parent_layout.addWidget(card)

    def _build_settings_card(self, parent_layout: QHBoxLayout) -> None:
        card = Card()
        label = QLabel("Settings")
        label.setObjectName("SectionLabel")
        card.layout.addWidget(label)

        self.spin_grace = QDoubleSpinBox()
        self.spin_grace.setRange(0, 300)
        self.spin_grace.setSuffix(" s")
        card.layout.addWidget(LabeledRow("Wait before monitoring:", self.spin_grace))

        self.spin_idle = QDoubleSpinBox()
        self.spin_idle.setRange(1, 600)
        self.spin_idle.setSuffix(" s")
        card.layout.addWidget(LabeledRow("Quiet period that means done:", self.spin_idle))

        self.spin_timeout = QDoubleSpinBox()
        self.spin_timeout.setRange(1, 600)
        self.spin_timeout.setSuffix(" min")
        card.layout.addWidget(LabeledRow("Give up on one title after:", self.spin_timeout))

        self.spin_poll = QSpinBox()
        self.spin_poll.setRange(250, 10000)
        self.spin_poll.setSingleStep(250)
        self.spin_poll.setSuffix(" ms")
        card.layout.addWidget(LabeledRow("Sample interval:", self.spin_poll))

        self.combo_policy = QComboBox()
        for key, text in POLICY_LABELS.items():
            self.combo_policy.addItem(text, key)
        card.layout.addWidget(LabeledRow("Remember a title:", self.combo_policy))

        self.chk_notify = QCheckBox("Show a notification when the batch ends")
        card.layout.addWidget(self.chk_notify)
        self.chk_sound = QCheckBox("Play a sound when the batch ends")
        card.layout.addWidget(self.chk_sound)
        self.chk_dark_mode = QCheckBox("Dark mode")
        self.chk_dark_mode.setChecked(True)
        self.chk_dark_mode.toggled.connect(self._toggle_dark_mode)
        card.layout.addWidget(self.chk_dark_mode)

        card.layout.addStretch()
        self.btn_save = SecondaryButton("Save Settings")
        self.btn_save.clicked.connect(self._save_config)
        card.layout.addWidget(self.btn_save)

        parent_layout.addWidget(card, 1)

    def _build_activity_card(self, parent_layout: QHBoxLayout) -> None:
        card = Card()
        label = QLabel("Activity")
        label.setObjectName("SectionLabel")
        card.layout.addWidget(label)

        self.events = QListWidget()
        card.layout.addWidget(self.events, 1)

        hint = QLabel("Titles listed in blacklist.txt next to the ledger are never verified.")
        hint.setObjectName("HintLabel")
        hint.setWordWrap(True)
        card.layout.addWidget(hint)

        parent_layout.addWidget(card, 1)

    def _load_to_ui(self) -> None:
        self.install_input.setText(self.cfg.install_dir)
        self.spin_grace.setValue(self.cfg.grace_delay_seconds)
        self.spin_idle.setValue(self.cfg.idle_threshold_seconds)
        self.spin_timeout.setValue(self.cfg.timeout_minutes)
        self.spin_poll.setValue(self.cfg.poll_interval_ms)
        self.combo_policy.setCurrentIndex(max(0, self.combo_policy.findData(self.cfg.ledger_policy)))
        self.chk_notify.setChecked(self.cfg.notify_enabled)
        self.chk_sound.setChecked(self.cfg.sound_enabled)
        self._refresh_status()

    def _read_from_ui(self) -> None:
        self.cfg.install_dir = self.install_input.text().strip()
        self.cfg.grace_delay_seconds = float(self.spin_grace.value())
        self.cfg.idle_threshold_seconds = float(self.spin_idle.value())
        self.cfg.timeout_minutes = float(self.spin_timeout.value())
        self.cfg.poll_interval_ms = int(self.spin_poll.value())
        self.cfg.ledger_policy = self.combo_policy.currentData()
        self.cfg.notify_enabled = self.chk_notify.isChecked()
        self.cfg.sound_enabled = self.chk_sound.isChecked()

    def _set_pill(self, pill: StatusPill, text: str, style: str) -> None:
        pill.setText(text)
        if pill.objectName() != style:
            pill.setObjectName(style)
            pill.setStyleSheet(self.theme.get_stylesheet())

    def _refresh_status(self) -> None:
        state = self.runner.get_state() if self.runner else None
        status = state.status if state else "STOPPED"
        running = status != "STOPPED"

        aborted = bool(state and state.last_report and state.last_report.aborted)
        if running:
            pill_style = "StatusPillActive"
        elif aborted:
            pill_style = "StatusPillDanger"
        else:
            pill_style = "StatusPill"
        self._set_pill(self.status_pill, "ABORTED" if aborted and not running else status, pill_style)

        current = state.current_title if state else None
        self._set_pill(
            self.title_pill,
            current or "No title in progress",
            "StatusPillActive" if current else "StatusPill",
        )
        self.progress_label.setText(f"{state.processed} / {state.total}" if state and state.total else "")

        self.btn_start.setEnabled(not running)
        self.btn_stop.setEnabled(status == "RUNNING")
        self.btn_browse.setEnabled(not running)

    def _append_event(self, line: str) -> None:
        self.events.insertItem(0, QListWidgetItem(line))

    def _browse_install_dir(self) -> None:
        chosen = QFileDialog.getExistingDirectory(self, "Select the Steam installation folder", self.install_input.text())
        if chosen:
            self.install_input.setText(chosen)

    def _ensure_install_dir(self) -> Optional[str]:
        """Keep asking for a folder until it holds the Steam client. None if the user gives up."""
        candidate = self.install_input.text().strip()
        while not is_valid_install_dir(candidate):
            QMessageBox.warning(
                self,
                "Steam not found",
                f"No Steam client was found in:\n{candidate or '(empty)'}\n\nPlease pick the Steam installation folder.",
            )
            chosen = QFileDialog.getExistingDirectory(self, "Select the Steam installation folder", candidate)
            if not chosen:
                return None
            candidate = chosen
        self.install_input.setText(candidate)
        return candidate

    def _start_batch(self) -> None:
        install_dir = self._ensure_install_dir()
        if install_dir is None:
            self._append_event("Start cancelled: no Steam installation selected.")
            return

        self._read_from_ui()
        self.store.save(self.cfg)

        try:
            titles = collect_titles(install_dir)
        except LibraryFoldersNotFoundError as e:
            log.error("Cannot start batch: %s", e)
            self._append_event(f"ERROR: {e}")
            return

        ledger = open_ledger(self.cfg)
        self.runner = BatchRunner(build_orchestrator(self.cfg, ledger))
        self.runner.on_event(self._on_batch_event)
        self.runner.on_error(self._on_batch_error)
        self.runner.start(titles)
        self._append_event(f"Batch started: {len(titles)} installed title(s).")
        self._refresh_status()

    def _stop_batch(self) -> None:
        if self.runner:
            self.runner.stop()
            self._append_event("Stopping after the current title…")

    def _save_config(self) -> None:
        self._read_from_ui()
        self.store.save(self.cfg)
        self._append_event("Settings saved.")

    def _on_batch_event(self, evt: dict) -> None:
        def handle() -> None:
            t = evt.get("type")
            who = evt.get("name") or evt.get("appid")
            reason = evt.get("reason") or ""

            if t == "TITLE_SKIPPED":
                self._append_event(f"Skipped {who} ({reason.lower().replace('_', ' ')})")
            elif t == "VALIDATION_TRIGGERED":
                self._append_event(f"Verifying {who}…")
            elif t == "VALIDATION_COMPLETED":
                self._append_event(f"Done: {who} ({reason})")
            elif t == "VALIDATION_TIMED_OUT":
                self._append_event(f"Timed out: {who} ({reason})")
            elif t == "CLIENT_LOST":
                self._append_event(f"ERROR: Steam stopped running while verifying {who}")
            elif t == "BATCH_FINISHED":
                report = evt.get("report")
                if report is None:
                    return
                payload = build_summary_payload(report)
                self._append_event(payload["body"].splitlines()[0])
                if self.cfg.notify_enabled:
                    self.notifier.notify(payload["title"], payload["body"])
                if self.cfg.sound_enabled:
                    self.sound.play(success=not report.aborted)
            self._refresh_status()

        QTimer.singleShot(0, handle)

    def _on_batch_error(self, msg: str) -> None:
        def handle() -> None:
            self._append_event(f"ERROR: {msg}")
            log.error("Batch error: %s", msg)
        QTimer.singleShot(0, handle)

    def closeEvent(self, event) -> None:
        if self.runner:
            self.runner.stop()
        super().closeEvent(event)
