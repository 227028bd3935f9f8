from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..storage import JSONStorage


@dataclass(frozen=True)
class SourceReport:
    path: Path
    exists: bool
    record_count: int
    error: str | None = None

    @property
    def readable(self) -> bool:
        return self.exists and self.error is None


@dataclass(frozen=True)
class DoctorReport:
    primary: SourceReport
    fallback: SourceReport

    @property
    def active(self) -> SourceReport:
        """The source load() reads from: a readable primary always wins."""
        return self.primary if self.primary.readable else self.fallback

    @property
    def has_data(self) -> bool:
        return self.active.record_count > 0


def inspect_source(storage: JSONStorage, path: Path) -> SourceReport:
    if not storage.path_exists(path):
        return SourceReport(path=path, exists=False, record_count=0)
    try:
        inputs = storage.read_json(path)
    except (OSError, ValueError) as exc:
        return SourceReport(path=path, exists=True, record_count=0, error=str(exc))
    return SourceReport(path=path, exists=True, record_count=len(inputs))


def build_report(storage: JSONStorage) -> DoctorReport:
    return DoctorReport(
        primary=inspect_source(storage, storage.file_path),
        fallback=inspect_source(storage, storage.default_data_path),
    )


def _format_source(label: str, source: SourceReport) -> list[str]:
    lines = [
        f"{label}_path: {source.path}",
        f"{label}_present: {'yes' if source.exists else 'no'}",
        f"{label}_records: {source.record_count}",
    ]
    if not source.exists:
        lines.append(f"WARNING: {label} file not found.")
    elif source.error:
        lines.append(f"WARNING: {label} file unreadable ({source.error}).")
    return lines


def format_report(report: DoctorReport) -> str:
    lines = _format_source("primary", report.primary)
    lines.extend(_format_source("fallback", report.fallback))
    if not report.has_data:
        lines.append("WARNING: no records available; load() will return an empty list.")
    return "\n".join(lines)


def run_doctor(storage: JSONStorage, *, strict: bool = False) -> int:
    report = build_report(storage)
    print(format_report(report))

    if strict and not report.has_data:
        return 1
    return 0
