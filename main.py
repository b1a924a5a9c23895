import argparse
import logging
import sys
from PyQt6.QtWidgets import QApplication
from undo_history.config import HistoryConfig
from undo_history.main_window import MainWindow
from undo_history.undo_stack import UndoStack


def parse_args(argv: list[str]) -> tuple[argparse.Namespace, list[str]]:
    """Split ``argv`` into our options and the arguments left for Qt."""
    parser = argparse.ArgumentParser(description="Board Undo History")
    parser.add_argument("--debug", action="store_true", help="show and log the undo history")
    parser.add_argument("--max-length", type=int, default=HistoryConfig.max_length)
    args, qt_args = parser.parse_known_args(argv)
    try:
        args.config = HistoryConfig(max_length=args.max_length, debug_mode=args.debug)
    except ValueError as e:
        parser.error(str(e))
    return args, qt_args


def main():
    args, qt_args = parse_args(sys.argv[1:])

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    app = QApplication(sys.argv[:1] + qt_args)
    app.setApplicationName("Board Undo History")
    # one history per editing session, discarded when the window closes
    undo_stack = UndoStack(args.config)
    window = MainWindow(undo_stack)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
