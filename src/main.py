"""
Console entry point for the booking entries application.

Drives the home list and add form models from text commands so the
in-memory booking store can be used without a graphical front end.

Commands:
    list                                   show all bookings
    add <name...> <arrival> <departure>    add a booking (dates dd.mm.yyyy or ISO)
    delete <row>                           delete the booking shown at row (1-based)
    help                                   show commands
    quit                                   exit
"""

import argparse
import logging
import sys
from typing import Iterable, List, Optional, TextIO

from src.config.settings import Settings, ConfigurationError
from src.presentation.add_form import AddBookingForm
from src.presentation.formatting import parse_date
from src.presentation.home import HomeView
from src.store.booking_store import BookingStore
from src.utils.logger import get_logger

logger = get_logger(__name__)

HELP_TEXT = """Commands:
  list                                   show all bookings
  add <name...> <arrival> <departure>    add a booking
  delete <row>                           delete the booking at row
  help                                   show this help
  quit                                   exit"""


def _handle_add(args: List[str], store: BookingStore, settings: Settings, out: TextIO) -> None:
    if not args:
        out.write("Usage: add <name...> <arrival> <departure>\n")
        return

    # Trailing tokens that parse as dates form the range; the rest is the name
    dates = []
    tokens = list(args)
    while tokens and len(dates) < 2:
        try:
            dates.insert(0, parse_date(tokens[-1], settings.date_format))
        except ValueError:
            break
        tokens.pop()

    form = AddBookingForm(store, settings.date_format)
    form.set_name(" ".join(tokens))
    if len(dates) == 2:
        form.select_date_range(dates[0], dates[1])

    entry = form.submit()
    if entry is None:
        out.write(f"Error: {form.error_message}\n")
        return

    out.write(f"Added: {entry.name}  {form.date_range_text}\n")


def _handle_delete(args: List[str], view: HomeView, out: TextIO) -> None:
    if len(args) != 1 or not args[0].isdigit():
        out.write("Usage: delete <row>\n")
        return

    try:
        entry = view.delete_at(int(args[0]) - 1)
    except IndexError:
        out.write(f"Error: no booking at row {args[0]}\n")
        return

    out.write(f"Deleted: {entry.name}\n")


def run_console(
    lines: Iterable[str],
    out: TextIO,
    store: Optional[BookingStore] = None,
    settings: Optional[Settings] = None,
) -> int:
    """
    Run the command loop over the given input lines.

    Args:
        lines: Command lines (e.g., sys.stdin)
        out: Stream for user-facing output
        store: Booking store to operate on (a new one if omitted)
        settings: Application settings (defaults if omitted)

    Returns:
        Process exit code
    """
    if settings is None:
        settings = Settings()
    if store is None:
        store = BookingStore(replay_on_subscribe=settings.replay_on_subscribe)
    view = HomeView(store, settings.date_format)

    try:
        for line in lines:
            parts = line.strip().split()
            if not parts:
                continue

            command, args = parts[0].lower(), parts[1:]
            if command in ("quit", "exit"):
                break
            elif command == "list":
                out.write("\n".join(view.render()) + "\n")
            elif command == "add":
                _handle_add(args, store, settings, out)
            elif command == "delete":
                _handle_delete(args, view, out)
            elif command == "help":
                out.write(HELP_TEXT + "\n")
            else:
                out.write(f"Unknown command '{command}'. Type 'help' for commands.\n")
    finally:
        view.close()

    logger.info(
        "Console session finished",
        operation="run_console",
        context={"entry_count": len(store)},
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, load settings and run the console on stdin."""
    parser = argparse.ArgumentParser(description="Manage booking entries from the console.")
    parser.add_argument("--config", help="Path to a YAML settings file")
    args = parser.parse_args(argv)

    try:
        settings = Settings.load(args.config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    settings.apply_log_level()
    sys.stdout.write(HELP_TEXT + "\n")
    return run_console(sys.stdin, sys.stdout, settings=settings)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    sys.exit(main())
