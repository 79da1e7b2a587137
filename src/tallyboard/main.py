"""
TallyBoard 主入口
"""
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QIcon

from tallyboard.settings import APP_NAME
from tallyboard.ui.main_window import MainWindow

# 资源目录路径
RESOURCES_DIR = Path(__file__).resolve().parent / "resources"


def main() -> int:
    """应用程序主入口"""
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    # 设置应用图标
    icon_path = RESOURCES_DIR / "icon.png"
    if icon_path.exists():
        app.setWindowIcon(QIcon(str(icon_path)))

    window = MainWindow()
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
