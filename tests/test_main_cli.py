"""Tests for the command-line positions entrypoint."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

import fifo_ledger.main as main_module


@pytest.fixture(autouse=True)
def _disable_logging_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "config_configure_logging", lambda **_kwargs: None)
    monkeypatch.delenv("LEDGER_QUANTITY_PRECISION_PLACES", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


def test_main_positions_writes_csv_rows(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Compute positions from a CSV ledger file and write CSV rows.

    Returns:
        None: Assertions validate CSV output.

    Raises:
        AssertionError: Raised when CLI output deviates.
    """

    ledger_path = tmp_path / "ledger.csv"
    ledger_path.write_text(
        "Broker,Account,Date,Ticker,Action,Quantity,Price,Book Cost,Currency,Asset Class\n"
        "Questrade,TFSA,2024-01-02,VFV,BUY,10,10,100,CAD,ETF\n"
        "Questrade,TFSA,2024-02-02,VFV,SPLIT,2:1,,,CAD,ETF\n"
        "Questrade,TFSA,2024-03-02,XEQT,BUY,4,25,100,CAD,ETF\n"
        "Questrade,TFSA,2024-04-02,XEQT,SELL,4,27,108,CAD,ETF\n",
        encoding="utf-8",
    )

    main_module.main(["positions", "--input", str(ledger_path), "--skip-header"])

    assert capsys.readouterr().out.splitlines() == ["Questrade,TFSA,VFV,20,5,CAD,ETF"]


def test_main_positions_exits_with_error_on_oversell(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Exit with status 1 and a coded message when the ledger oversells.

    Returns:
        None: Assertions validate exit status and stderr message.

    Raises:
        AssertionError: Raised when oversell does not fail the command.
    """

    monkeypatch.setattr(
        "sys.stdin",
        io.StringIO("IB,U1,2024-01-02,MSFT,BUY,1,300,300,USD,Stock\nIB,U1,2024-01-03,MSFT,SELL,2,310,620,USD,Stock\n"),
    )

    with pytest.raises(SystemExit) as exit_info:
        main_module.main(["positions"])

    assert exit_info.value.code == 1
    assert capsys.readouterr().err.startswith("OVERSELL:")


def test_main_read_csv_rows_skips_header_only_when_requested() -> None:
    content = "a,b\nc,d\n"

    assert main_module.main_read_csv_rows(io.StringIO(content)) == [["a", "b"], ["c", "d"]]
    assert main_module.main_read_csv_rows(io.StringIO(content), skip_header=True) == [["c", "d"]]
