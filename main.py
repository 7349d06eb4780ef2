"""
TOTP Token Generator – entry point.

Usage
-----
    python main.py

Or, if installed as a package:
    totp-generator
"""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from ui.main_window import MainWindow
from ui.styles import LIGHT_STYLESHEET
from ui.token_panel import TokenPanel

# ── Logging setup ─────────────────────────────────────────────────────────────

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("totp_generator")

# Keep anything derived from secrets out of the logs below WARNING
logging.getLogger("core").setLevel(logging.WARNING)


# ── Main ──────────────────────────────────────────────────────────────────────

def main() -> None:
    app = QApplication(sys.argv)
    app.setApplicationName("TOTP Token Generator")
    app.setApplicationVersion("1.0.0")
    app.setOrganizationName("TOTP Token Generator")
    app.setStyleSheet(LIGHT_STYLESHEET)

    window = MainWindow(TokenPanel())
    window.show()
    logger.info("Window shown")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
