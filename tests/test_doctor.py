import json
from pathlib import Path

from input_store.app.doctor import build_report, format_report, run_doctor
from input_store.storage import JSONStorage


def test_build_report_counts_records_per_source(tmp_path: Path) -> None:
    storage = JSONStorage(tmp_path / "data" / "db.json")
    storage.save([{"id": 1}, {"id": 2}])
    storage.default_data_path.write_text(json.dumps([{"id": 3}]), encoding="utf-8")

    report = build_report(storage)

    assert report.primary.exists is True
    assert report.primary.record_count == 2
    assert report.fallback.record_count == 1
    assert report.has_data is True


def test_build_report_flags_unreadable_primary(tmp_path: Path) -> None:
    storage = JSONStorage(tmp_path / "data" / "db.json")
    storage.dir.mkdir(parents=True)
    storage.file_path.write_text("{oops", encoding="utf-8")

    report = build_report(storage)
    text = format_report(report)

    assert report.primary.exists is True
    assert report.primary.readable is False
    assert report.fallback.exists is False
    assert "WARNING: primary file unreadable" in text
    assert "WARNING: fallback file not found." in text
    assert "WARNING: no records available" in text


def test_run_doctor_strict_exits_nonzero(tmp_path: Path) -> None:
    storage = JSONStorage(tmp_path / "data" / "db.json")

    exit_code = run_doctor(storage, strict=True)

    assert exit_code == 1


def test_run_doctor_non_strict_exits_zero(tmp_path: Path, capsys) -> None:
    storage = JSONStorage(tmp_path / "data" / "db.json")

    exit_code = run_doctor(storage)

    assert exit_code == 0
    assert f"primary_path: {storage.file_path}" in capsys.readouterr().out


def test_run_doctor_strict_ignores_seed_behind_empty_primary(tmp_path: Path) -> None:
    storage = JSONStorage(tmp_path / "data" / "db.json")
    storage.save([])
    storage.default_data_path.write_text(json.dumps([{"id": "seed"}]), encoding="utf-8")

    report = build_report(storage)
    exit_code = run_doctor(storage, strict=True)

    assert storage.load() == []
    assert report.active == report.primary
    assert report.has_data is False
    assert exit_code == 1


def test_build_report_uses_seed_when_primary_unreadable(tmp_path: Path) -> None:
    storage = JSONStorage(tmp_path / "data" / "db.json")
    storage.dir.mkdir(parents=True)
    storage.file_path.write_text("[{", encoding="utf-8")
    storage.default_data_path.write_text(json.dumps([{"id": "seed"}]), encoding="utf-8")

    report = build_report(storage)

    assert report.active == report.fallback
    assert report.has_data is True
