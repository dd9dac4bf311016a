import logging
from pathlib import Path

from payments_engine.cli import main

TRANSACTIONS = """type, client, tx, amount
deposit, 1, 1, 1.0
deposit, 2, 2, 2.0
deposit, 1, 3, 2.0
withdrawal, 1, 4, 1.5
withdrawal, 2, 5, 3.0
"""


def write_input(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "transactions.csv"
    path.write_text(content, encoding="utf-8")
    return path


def test_cli_writes_accounts_to_stdout(tmp_path: Path, capsysbinary):
    path = write_input(tmp_path, TRANSACTIONS)

    assert main([str(path)]) == 0

    out = capsysbinary.readouterr().out.decode("utf-8")
    assert out.splitlines() == [
        "client,available,held,total,locked",
        "1,1.5000,0.0000,1.5000,false",
        "2,2.0000,0.0000,2.0000,false",
    ]


def test_cli_writes_output_file(tmp_path: Path):
    path = write_input(tmp_path, TRANSACTIONS)
    output = tmp_path / "accounts.csv"

    assert main([str(path), "--output", str(output)]) == 0

    assert output.read_text(encoding="utf-8").startswith("client,available,held,total,locked\n")


def test_cli_reports_rejected_events(tmp_path: Path, caplog):
    path = write_input(tmp_path, TRANSACTIONS)
    output = tmp_path / "accounts.csv"

    with caplog.at_level(logging.WARNING, logger="payments_engine.cli"):
        assert main([str(path), "-o", str(output), "--report-errors"]) == 0

    messages = [record.getMessage() for record in caplog.records if record.name == "payments_engine.cli"]
    assert messages == [
        "withdrawal client=2 tx=5 rejected: Withdrawal: not enough money available, available: 2.0, requested: 3.0"
    ]


def test_cli_fails_on_malformed_input(tmp_path: Path):
    path = write_input(tmp_path, "type,client,tx,amount\ndeposit,abc,1,1.0\n")
    output = tmp_path / "accounts.csv"

    assert main([str(path), "-o", str(output)]) == 1
    assert not output.exists()


def test_cli_fails_on_missing_file(tmp_path: Path):
    assert main([str(tmp_path / "nope.csv")]) == 1


def test_cli_rejects_amounts_with_too_many_fractional_digits(tmp_path: Path, capsysbinary):
    tiny = "0." + "0" * 69 + "1"
    path = write_input(tmp_path, f"type,client,tx,amount\ndeposit,1,1,{tiny}\ndispute,1,1,\ndeposit,1,2,1\n")

    assert main([str(path)]) == 1
    assert capsysbinary.readouterr().out == b""
