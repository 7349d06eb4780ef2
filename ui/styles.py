"""
Qt stylesheet for the TOTP Token Generator window.
"""

LIGHT_STYLESHEET = """
/* ── Global ──────────────────────────────────────────────────────── */
QWidget {
    background-color: #eff1f5;
    color: #4c4f69;
    font-family: "Segoe UI", "SF Pro Display", "Ubuntu", sans-serif;
    font-size: 14px;
}

/* ── Buttons ─────────────────────────────────────────────────────── */
QPushButton {
    background-color: #dce0e8;
    color: #4c4f69;
    border: 1px solid #bcc0cc;
    border-radius: 4px;
    padding: 10px 16px;
}
QPushButton:hover { background-color: #bcc0cc; }
QPushButton#btn_primary {
    background-color: #0080e6;
    color: #ffffff;
    border: none;
    font-weight: 700;
}
QPushButton#btn_primary:hover { background-color: #1a99ff; }

/* ── Input fields ────────────────────────────────────────────────── */
QLineEdit, QSpinBox {
    background-color: #ffffff;
    color: #4c4f69;
    border: 1px solid #bcc0cc;
    border-radius: 6px;
    padding: 10px 12px;
    font-size: 16px;
}
QLineEdit:focus, QSpinBox:focus { border-color: #0080e6; }

/* ── Labels ──────────────────────────────────────────────────────── */
QLabel#lbl_title {
    font-size: 30px;
    color: #1a1a1a;
}
QLabel#lbl_code {
    font-size: 48px;
    font-weight: 700;
    color: #333333;
}
QLabel#lbl_form {
    font-size: 12px;
    font-weight: 600;
    color: #7c7f93;
}
QLabel#lbl_remaining {
    font-size: 14px;
    color: #4d4d4d;
}
QLabel#lbl_message {
    font-size: 14px;
    color: #008000;
}
QLabel#lbl_message[error="true"] {
    color: #cc0000;
}

/* ── Progress bar ────────────────────────────────────────────────── */
QProgressBar {
    background-color: #bcc0cc;
    border: none;
    border-radius: 3px;
}
QProgressBar::chunk {
    background-color: #0080e6;
    border-radius: 3px;
}
QProgressBar[low="true"]::chunk {
    background-color: #d20f39;
}

/* ── Tooltips ────────────────────────────────────────────────────── */
QToolTip {
    background-color: #ffffff;
    color: #4c4f69;
    border: 1px solid #bcc0cc;
    padding: 6px 10px;
}
"""
