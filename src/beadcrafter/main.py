"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Parses the command line (initial pattern, logging).
2. Instantiates the Data Model (ViewerSession) and the pattern library.
3. Instantiates the Main Window (View), which owns the playback controller.
4. Prevents circular import errors by being the orchestrator.
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QTranslator, QLibraryInfo

from beadcrafter.config import DEFAULT_LIBRARY_PATH
from beadcrafter.logging_config import setup_logging
from beadcrafter.model.io import PatternIO, PatternLibrary, PatternFormatError
from beadcrafter.model.patterns import get_sample_pattern, SAMPLE_PATTERN_IDS
from beadcrafter.model.schema import Pattern
from beadcrafter.model.state import ViewerSession

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="beadcrafter",
        description="Step-by-step 3D assembly viewer for bead pattern keychains.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--pattern",
        choices=sorted(SAMPLE_PATTERN_IDS),
        help="Sample pattern to open on start.",
    )
    source.add_argument("--file", help="Pattern JSON file to open on start.")
    parser.add_argument(
        "--library",
        default=DEFAULT_LIBRARY_PATH,
        help="Path to the HDF5 pattern library (default: %(default)s).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    parser.add_argument("--log-file", default=None, help="Also write the log to this file.")
    return parser


def load_initial_pattern(args: argparse.Namespace) -> Optional[Pattern]:
    """Pattern from --file or --pattern; None lets the UI pick the first sample."""
    if args.file:
        return PatternIO.import_pattern_json(args.file)
    if args.pattern:
        return get_sample_pattern(args.pattern)
    return None


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    # 2. Load the Data Model before any window exists, so bad input fails fast
    try:
        pattern = load_initial_pattern(args)
    except (PatternFormatError, OSError) as e:
        logger.error(f"Cannot open pattern: {e}")
        sys.exit(2)

    library = PatternLibrary(args.library)
    try:
        library.load()
    except PatternFormatError:
        # Keep working with the samples, the library is left untouched
        logger.warning(f"Pattern library {args.library} ignored.")
        library = None

    session = ViewerSession(pattern=pattern)

    # 3. Create the Qt Application
    app = QApplication(sys.argv[:1])
    app.setApplicationName("Korálkový přívěsek")

    # 4. Install Czech translations for Qt standard widgets (OK, Cancel, etc.)
    translator = QTranslator()
    translations_path = QLibraryInfo.path(QLibraryInfo.TranslationsPath)
    if translator.load("qtbase_cs", translations_path):
        app.installTranslator(translator)
    else:
        # Fallback: try loading from Qt6 directory
        if translator.load("qtbase_cs", translations_path + "/Qt6"):
            app.installTranslator(translator)

    # 5. Initialize the Main Window, passing the model
    # Imported here so --help works without a display
    from beadcrafter.view.main_window import MainWindow
    window = MainWindow(session, library)
    window.show()

    # 6. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
