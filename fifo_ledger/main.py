"""Main module entrypoint for local runtime execution.

`api` validates startup configuration and launches the FastAPI service.
`positions` computes positions from a CSV trade ledger and writes them as CSV.
"""

import argparse
import csv
import sys
from decimal import Decimal
from typing import TextIO

import uvicorn

from fifo_ledger.bootstrap import bootstrap_create_application, bootstrap_create_position_engine
from fifo_ledger.config import config_configure_logging, config_load_settings
from fifo_ledger.domain import PositionLedgerError
from fifo_ledger.ledger import ledger_format_decimal


def main(argv: list[str] | None = None) -> None:
    """Run selected runtime command with validated startup configuration.

    Args:
        argv: Optional argument list; process arguments when omitted.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with status 1 when position computation fails.
    """

    argument_parser = argparse.ArgumentParser(description="FIFO positions ledger runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "positions"),
        help="Runtime command: `api` starts server, `positions` computes positions from a CSV ledger",
        type=str,
    )
    argument_parser.add_argument(
        "--input",
        dest="input_path",
        type=str,
        help="CSV trade ledger path for `positions`; stdin when omitted",
    )
    argument_parser.add_argument(
        "--skip-header",
        dest="skip_header",
        action="store_true",
        help="Skip the first CSV row for `positions`",
    )
    parsed_arguments = argument_parser.parse_args(argv)

    settings = config_load_settings()

    if parsed_arguments.command == "positions":
        # Logs go to stderr so stdout carries only CSV output.
        config_configure_logging(level=settings.log_level, json_output=settings.log_json, stream=sys.stderr)
        if parsed_arguments.input_path:
            with open(parsed_arguments.input_path, newline="", encoding="utf-8") as input_stream:
                rows = main_read_csv_rows(input_stream, skip_header=parsed_arguments.skip_header)
        else:
            rows = main_read_csv_rows(sys.stdin, skip_header=parsed_arguments.skip_header)

        position_engine = bootstrap_create_position_engine(settings)
        try:
            positions = position_engine.ledger_compute_positions(rows)
        except PositionLedgerError as error:
            print(f"{error.error_code}: {error}", file=sys.stderr)
            raise SystemExit(1) from error

        writer = csv.writer(sys.stdout)
        for position in positions:
            writer.writerow(
                ledger_format_decimal(cell) if isinstance(cell, Decimal) else cell for cell in position.position_to_row()
            )
        return

    config_configure_logging(level=settings.log_level, json_output=settings.log_json)
    application = bootstrap_create_application(settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_read_csv_rows(input_stream: TextIO, skip_header: bool = False) -> list[list[str]]:
    """Read raw trade rows from one CSV stream.

    Args:
        input_stream: Text stream with CSV content.
        skip_header: Drop the first row when set.

    Returns:
        list[list[str]]: Raw rows in file order.
    """

    rows = list(csv.reader(input_stream))
    if skip_header and rows:
        return rows[1:]
    return rows


if __name__ == "__main__":
    main()
