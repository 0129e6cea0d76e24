from typer.testing import CliRunner

from clp.cli.main import app


runner = CliRunner()

CSV = (
    "ID,Complaint ID,Inspection Type,Inspection Date,Property Zip Code\n"
    "1,100,Complaint,2023-03-01,98101\n"
    "2,100,Desk Approval,2023-03-10,98101\n"
    "3,200,Complaint,2023-04-05,98102\n"
)

DATES = [
    "--dataset-start-date",
    "2020-01-01",
    "--export-date",
    "2023-06-30",
    "--metrics-start-date",
    "2022-01-01",
]


def test_run_writes_workbooks(tmp_path):
    source = tmp_path / "inspections.csv"
    source.write_text(CSV, encoding="utf-8")
    out = tmp_path / "out"

    result = runner.invoke(app, ["run", "--input", str(source), "--output-dir", str(out), *DATES])

    assert result.exit_code == 0, result.output
    assert len(list(out.glob("complaint-metrics-*.xlsx"))) == 1
    assert len(list(out.glob("complaint-exceptions-*.xlsx"))) == 1


def test_run_dry_run_writes_nothing(tmp_path):
    source = tmp_path / "inspections.csv"
    source.write_text(CSV, encoding="utf-8")
    out = tmp_path / "out"

    result = runner.invoke(
        app, ["run", "--input", str(source), "--output-dir", str(out), "--dry-run", *DATES]
    )

    assert result.exit_code == 0, result.output
    assert not out.exists()


def test_run_fails_on_missing_columns(tmp_path):
    source = tmp_path / "inspections.csv"
    source.write_text("ID,Complaint ID\n1,100\n", encoding="utf-8")

    result = runner.invoke(app, ["run", "--input", str(source), *DATES])

    assert result.exit_code == 1


def test_run_rejects_bad_date(tmp_path):
    result = runner.invoke(app, ["run", "--input", "x.csv", "--export-date", "30/06/2023"])
    assert result.exit_code != 0


def test_check_reports_row_count(tmp_path):
    source = tmp_path / "inspections.csv"
    source.write_text(CSV, encoding="utf-8")

    result = runner.invoke(app, ["check", "--input", str(source)])

    assert result.exit_code == 0
    assert "OK: 3 rows" in result.output


def test_check_fails_on_missing_file(tmp_path):
    result = runner.invoke(app, ["check", "--input", str(tmp_path / "missing.csv")])
    assert result.exit_code == 1


def test_run_fails_cleanly_on_invalid_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("DATASET_EXPORT_DATE", "not-a-date")

    result = runner.invoke(app, ["run", "--input", str(tmp_path / "inspections.csv")])

    assert result.exit_code == 1
    assert "Invalid settings" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_run_fails_cleanly_when_output_dir_is_a_file(tmp_path):
    source = tmp_path / "inspections.csv"
    source.write_text(CSV, encoding="utf-8")
    blocker = tmp_path / "reports"
    blocker.write_text("not a directory", encoding="utf-8")

    result = runner.invoke(
        app, ["run", "--input", str(source), "--output-dir", str(blocker / "out"), *DATES]
    )

    assert result.exit_code == 1
    assert "Pipeline failed" in result.output
