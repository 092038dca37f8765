import sys

from services import crash_reporter


def main():
    # Install crash logging as early as possible so silent exits are captured.
    try:
        crash_reporter.install()
    except Exception:
        pass

    from PyQt5.QtWidgets import QApplication
    from controllers.app_controller import AppController

    app = QApplication(sys.argv)
    controller = AppController()
    controller.launch()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
