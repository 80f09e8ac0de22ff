"""
Console host - drives a vending engine from typed commands.

Maps each command to one engine operation, then renders the front panel
message and the return tray, the same way a UI would after a button press.
"""

import argparse
import sys
import uuid
from collections.abc import Iterable
from typing import TextIO

from vending.config import get_settings
from vending.models.api import ReservePolicy
from vending.observability import get_logger, log_context, setup_logging
from vending.services.display import format_currency, format_return_tray
from vending.services.engine import VendingEngine
from vending.services.factory import build_engine

logger = get_logger(__name__)

HELP_TEXT = """\
commands:
  insert <amount>   insert a coin or note, in cents (e.g. insert 5000)
  buy <n>           buy product number n (as shown by list)
  return            return inserted currency to the tray
  collect           collect the return tray
  list              show products and prices
  status            show balances and stock
  help              show this text
  quit              leave"""


def render_panel(engine: VendingEngine, out: TextIO) -> None:
    """Show the display message and the return tray after an action."""
    out.write(f"[{engine.refresh_display()}]  {format_return_tray(engine.return_tray_value())}\n")


def render_products(engine: VendingEngine, out: TextIO) -> None:
    for number, product in enumerate(engine.list_products(), start=1):
        out.write(f"  {number}. {product.name:<12} {format_currency(product.cost_minor)}\n")


def render_status(engine: VendingEngine, out: TextIO) -> None:
    out.write(f"  {engine}\n")
    for level in engine.stock_levels():
        out.write(f"  {level.index + 1}. {level.name:<12} x{level.available}\n")


def _parse_int(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


def handle_command(engine: VendingEngine, line: str, out: TextIO) -> bool:
    """
    Apply one command line to the engine.

    Returns False when the session should end. Non-numeric amounts and
    product numbers are rejected here and never reach the engine.
    """
    parts = line.split()
    if not parts:
        return True

    command, args = parts[0].lower(), parts[1:]

    if command in ("quit", "exit"):
        return False

    if command == "help":
        out.write(HELP_TEXT + "\n")
        return True

    if command == "list":
        render_products(engine, out)
        return True

    if command == "status":
        render_status(engine, out)
        return True

    if command == "insert":
        amount = _parse_int(args[0]) if len(args) == 1 else None
        if amount is None or amount < 0:
            out.write("please enter a whole, non-negative amount in cents\n")
            return True
        engine.insert_currency(amount)
    elif command == "buy":
        number = _parse_int(args[0]) if len(args) == 1 else None
        if number is None:
            out.write("please enter a product number\n")
            return True
        engine.purchase(number - 1)
    elif command == "return":
        engine.return_currency()
    elif command == "collect":
        engine.collect_return()
    else:
        out.write(f"unknown command: {command} (try help)\n")
        return True

    render_panel(engine, out)
    return True


def run_session(engine: VendingEngine, lines: Iterable[str], out: TextIO) -> None:
    """Process commands until input ends or the user quits."""
    with log_context(session_id=uuid.uuid4().hex):
        logger.info("session_started", products=len(engine))
        render_products(engine, out)
        render_panel(engine, out)
        for line in lines:
            if not handle_command(engine, line, out):
                break
        logger.info("session_ended", return_tray_minor=engine.return_tray_value())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vending",
        description="Run a vending machine from the console.",
    )
    parser.add_argument(
        "--change-reserve",
        type=int,
        default=None,
        help="Override the initial change reserve, in cents",
    )
    parser.add_argument(
        "--reserve-policy",
        choices=[p.value for p in ReservePolicy],
        default=None,
        help="How purchases treat change owed beyond the reserve",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.change_reserve is not None and args.change_reserve < 0:
        parser.error("--change-reserve must be zero or greater")

    # Setup logging before anything else
    setup_logging()

    settings = get_settings()
    overrides: dict[str, object] = {}
    if args.change_reserve is not None:
        overrides["initial_change_reserve_minor"] = args.change_reserve
    if args.reserve_policy is not None:
        overrides["reserve_policy"] = ReservePolicy(args.reserve_policy)
    if overrides:
        settings = settings.model_copy(update=overrides)

    engine = build_engine(settings)
    run_session(engine, sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
