import logging
import os
import sys

from PyQt5.QtWidgets import QApplication

from OA_Libs.ViewerLib.comparison_window import ComparisonWindow
from OA_Libs.constants import DEFAULT_LOG_LEVEL, LOG_FORMAT, LOG_LEVEL_ENV_VAR


def configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main() -> None:
    configure_logging()
    app = QApplication(sys.argv)
    window = ComparisonWindow()
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
