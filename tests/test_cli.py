import json

import cli


def test_convert(sample_report_file, tmp_path, capsys):
    output = tmp_path / "report.json"

    code = cli.main([str(sample_report_file), "-o", str(output), "-t", "MyTool",
                     "-e", "os=linux", "branch=main"])

    assert code == 0
    assert "Conversion completed successfully." in capsys.readouterr().out
    results = json.loads(output.read_text(encoding="utf-8"))["results"]
    assert results["tool"] == {"name": "MyTool"}
    assert results["environment"] == {"os": "linux", "branch": "main"}


def test_print_summary(sample_report_file, tmp_path, capsys):
    code = cli.main([str(sample_report_file), "-o", str(tmp_path / "r.json"), "--print-summary"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Failed Tests (1):" in out
    assert "  - Checkout: testPay" in out
    assert "  Entries: 3" in out


def test_dry_run_prints_report(sample_report_file, tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)

    code = cli.main([str(sample_report_file), "--dry-run"])

    assert code == 0
    report = json.loads(capsys.readouterr().out)
    assert len(report["results"]["tests"]) == 3
    assert not (tmp_path / "ctrf").exists()


def test_error_exits_non_zero(xml_file, tmp_path, capsys):
    source = xml_file("<other/>")

    code = cli.main([str(source), "-o", str(tmp_path / "r.json")])

    assert code == 1
    assert "Error: Invalid TestNG report format: missing testng-results" in capsys.readouterr().err
    assert not (tmp_path / "r.json").exists()
