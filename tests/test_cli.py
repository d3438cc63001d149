from typer.testing import CliRunner

from invoice_demo.cli import app

runner = CliRunner()


def test_stages_lists_schedule():
    result = runner.invoke(app, ["stages"])
    assert result.exit_code == 0
    assert "Cross-checking" in result.output
    assert "100%" in result.output


def test_preview_prints_invoice():
    result = runner.invoke(app, ["preview", "INV-2023-002"])
    assert result.exit_code == 0
    assert "HAMBURG EXPRESS GMBH" in result.output
    assert "Express Courier Delivery" in result.output
    assert "€712.00" in result.output


def test_preview_custom_record():
    result = runner.invoke(app, ["preview", "DATA-2", "--mode", "custom", "--ids", "A,", "--seed", "3"])
    assert result.exit_code == 0
    assert "Generic AI Automated Seller".upper() in result.output


def test_preview_unknown_id():
    result = runner.invoke(app, ["preview", "INV-404"])
    assert result.exit_code == 1
    assert "No result" in result.output


def test_run_instant():
    result = runner.invoke(app, ["run", "--mode", "custom", "--ids", "X1, X2", "--speed", "0"])
    assert result.exit_code == 0, result.output
    assert "Detected 2 records for processing..." in result.output
    assert "X2" in result.output


def test_export_instant():
    result = runner.invoke(app, ["export", "--format", "pdf", "--speed", "0"])
    assert result.exit_code == 0, result.output
    assert "Saved as PDF!" in result.output


def test_export_bad_format():
    result = runner.invoke(app, ["export", "--format", "docx", "--speed", "0"])
    assert result.exit_code != 0
