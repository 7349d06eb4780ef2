"""
Main application window for the TOTP Token Generator.

Layout
------
┌──────────────────────────────────────────────┐
│            TOTP Token Generator              │
├──────────────────────────────────────────────┤
│  [ Enter your secret key               ]     │
│  Digits [6 ▴▾]        Period [30 s ▴▾]       │
│                                              │
│        123 456                    [Copy]     │
│                                              │
│  Code expires in 28 seconds                  │
│  ▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓░░░                   │
│  ✓ Code copied to clipboard!                 │
└──────────────────────────────────────────────┘
"""

import logging
from typing import Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from core.totp import MAX_DIGITS, MAX_PERIOD, MIN_DIGITS, MIN_PERIOD
from ui.token_panel import COPIED_MESSAGE, MESSAGE_CLEAR_DELAY_MS, TokenPanel

logger = logging.getLogger(__name__)

_REFRESH_INTERVAL_MS = 1_000
_PROGRESS_STEPS = 1_000
_LOW_REMAINING_S = 5


class MainWindow(QMainWindow):
    """Single-secret TOTP generator window."""

    def __init__(self, panel: Optional[TokenPanel] = None) -> None:
        super().__init__()
        self._panel = panel or TokenPanel()
        self._message_timer: Optional[QTimer] = None

        self._setup_ui()
        self._render()
        self._start_refresh_timer()

    # ── UI construction ───────────────────────────────────────────────

    def _setup_ui(self) -> None:
        self.setWindowTitle("TOTP Token Generator")
        self.setMinimumSize(440, 420)
        self.resize(500, 460)

        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(30, 30, 30, 30)
        root.setSpacing(10)

        title = QLabel("TOTP Token Generator")
        title.setObjectName("lbl_title")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(title)

        # Secret input
        self._secret_edit = QLineEdit()
        self._secret_edit.setPlaceholderText("Enter your secret key")
        self._secret_edit.textChanged.connect(self._on_secret_changed)
        root.addWidget(self._secret_edit)

        # Settings row; spin boxes clamp to the supported bounds
        settings_row = QHBoxLayout()
        settings_row.setSpacing(8)

        lbl_digits = QLabel("Digits")
        lbl_digits.setObjectName("lbl_form")
        settings_row.addWidget(lbl_digits)
        self._digits_spin = QSpinBox()
        self._digits_spin.setRange(MIN_DIGITS, MAX_DIGITS)
        self._digits_spin.setValue(self._panel.digits)
        self._digits_spin.valueChanged.connect(self._on_digits_changed)
        settings_row.addWidget(self._digits_spin)

        settings_row.addStretch()

        lbl_period = QLabel("Period")
        lbl_period.setObjectName("lbl_form")
        settings_row.addWidget(lbl_period)
        self._period_spin = QSpinBox()
        self._period_spin.setRange(MIN_PERIOD, MAX_PERIOD)
        self._period_spin.setSuffix(" s")
        self._period_spin.setValue(self._panel.period)
        self._period_spin.valueChanged.connect(self._on_period_changed)
        settings_row.addWidget(self._period_spin)

        root.addLayout(settings_row)
        root.addSpacing(20)

        # Code + copy button
        code_row = QHBoxLayout()
        code_row.setSpacing(10)

        self._lbl_code = QLabel("")
        self._lbl_code.setObjectName("lbl_code")
        self._lbl_code.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._lbl_code.setTextInteractionFlags(
            Qt.TextInteractionFlag.TextSelectableByMouse
        )
        code_row.addWidget(self._lbl_code, stretch=1)

        self._btn_copy = QPushButton("Copy")
        self._btn_copy.setObjectName("btn_primary")
        self._btn_copy.setToolTip("Copy code to clipboard")
        self._btn_copy.clicked.connect(self._on_copy)
        code_row.addWidget(self._btn_copy)

        root.addLayout(code_row)
        root.addSpacing(20)

        # Countdown
        self._lbl_remaining = QLabel("")
        self._lbl_remaining.setObjectName("lbl_remaining")
        root.addWidget(self._lbl_remaining)

        self._progress = QProgressBar()
        self._progress.setRange(0, _PROGRESS_STEPS)
        self._progress.setTextVisible(False)
        self._progress.setFixedHeight(6)
        root.addWidget(self._progress)

        root.addSpacing(10)

        self._lbl_message = QLabel("")
        self._lbl_message.setObjectName("lbl_message")
        self._lbl_message.setWordWrap(True)
        root.addWidget(self._lbl_message)

        root.addStretch()

    # ── Rendering ─────────────────────────────────────────────────────

    def _render(self) -> None:
        """Copy the panel state into the widgets."""
        panel = self._panel
        has_token = panel.has_token

        self._lbl_code.setText(panel.display_token)
        self._btn_copy.setVisible(has_token)

        if has_token:
            self._lbl_remaining.setText(
                f"Code expires in {panel.time_remaining} seconds"
            )
        else:
            self._lbl_remaining.setText("")
        self._progress.setValue(int(panel.progress * _PROGRESS_STEPS))

        # Turn red when ≤5 s remaining
        low = has_token and panel.time_remaining <= _LOW_REMAINING_S
        self._progress.setProperty("low", str(low).lower())
        self._progress.style().unpolish(self._progress)
        self._progress.style().polish(self._progress)

        if panel.message:
            icon = "⚠ " if panel.message_is_error else "✓ "
            self._lbl_message.setText(icon + panel.message)
            self._lbl_message.setProperty("error", str(panel.message_is_error).lower())
        else:
            self._lbl_message.setText("")
            self._lbl_message.setProperty("error", "false")
        self._lbl_message.style().unpolish(self._lbl_message)
        self._lbl_message.style().polish(self._lbl_message)

    # ── Refresh timer ─────────────────────────────────────────────────

    def _start_refresh_timer(self) -> None:
        self._refresh_timer = QTimer(self)
        self._refresh_timer.timeout.connect(self._on_tick)
        self._refresh_timer.start(_REFRESH_INTERVAL_MS)

    def _on_tick(self) -> None:
        self._panel.tick()
        self._render()

    # ── Slots ─────────────────────────────────────────────────────────

    def _on_secret_changed(self, text: str) -> None:
        self._stop_message_timer()
        self._panel.set_secret(text)
        self._render()

    def _on_digits_changed(self, value: int) -> None:
        self._panel.set_digits(value)
        self._render()

    def _on_period_changed(self, value: int) -> None:
        self._panel.set_period(value)
        self._render()

    def _on_copy(self) -> None:
        code = self._panel.copy_text()
        if code is None:
            return

        clipboard = QApplication.clipboard()
        if clipboard is None:
            self._panel.show_message("Failed to access clipboard", is_error=True)
            self._render()
            return

        clipboard.setText(code)
        logger.info("Code copied to clipboard")
        self._panel.show_message(COPIED_MESSAGE)
        self._render()

        self._stop_message_timer()
        self._message_timer = QTimer(self)
        self._message_timer.setSingleShot(True)
        self._message_timer.timeout.connect(self._clear_message)
        self._message_timer.start(MESSAGE_CLEAR_DELAY_MS)

    def _clear_message(self) -> None:
        self._panel.clear_message()
        self._render()

    def _stop_message_timer(self) -> None:
        if self._message_timer:
            self._message_timer.stop()
            self._message_timer = None

    # ── Cleanup ───────────────────────────────────────────────────────

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._refresh_timer.stop()
        self._stop_message_timer()
        super().closeEvent(event)
