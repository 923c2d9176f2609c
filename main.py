import logging
import sys
from PySide6.QtWidgets import QApplication

import config
from main_window import MainWindow
from session import CoderSession

logger = logging.getLogger(__name__)


def configure_logging(level=None):
    logging.basicConfig(
        level=getattr(logging, level or config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class AppController:
    def __init__(self, app):
        self.app = app
        self.session = CoderSession()
        self.main_window = MainWindow(self.session)

    def start(self):
        logger.info("AppController: starting with API %s (server %s)", config.API_BASE_URL, config.SERVER_URL)
        self.main_window.show()
        self.session.start()


def main():
    configure_logging()
    app = QApplication(sys.argv)
    controller = AppController(app)
    controller.start()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
