"""Export functionality for planning reports."""

import csv
import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd

from .models import PlanningReport


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, report: PlanningReport, output_path: str | Path) -> None:
        """Export planning report to file.

        Args:
            report: PlanningReport to export
            output_path: Path to output file or directory
        """
        pass


def _planning_rows(report: PlanningReport) -> list[dict]:
    return [
        {
            "date": entry.date,
            "day_id": entry.day_id,
            "start_time": entry.start_time,
            "end_time": entry.end_time,
            "room": entry.room_name,
            "session_id": entry.session_id,
            "title": entry.title,
            "session_type": entry.session_type,
            "track": entry.track,
            "status": entry.status,
            "speakers": "; ".join(entry.speakers),
        }
        for entry in report.entries
    ]


def _summary_rows(report: PlanningReport) -> list[dict]:
    stats = report.statistics
    return [
        {"metric": "conference_id", "value": report.conference_id},
        {"metric": "conference_name", "value": report.conference_name},
        {"metric": "generation_date", "value": report.generation_date},
        {"metric": "submitted_sessions", "value": stats.submitted.total},
        {"metric": "confirmed_sessions", "value": stats.confirmed.total},
        {"metric": "allocated_sessions", "value": stats.allocated.total},
        {"metric": "speakers", "value": stats.total_speakers},
        {"metric": "sessions_with_2_speakers", "value": stats.sessions_with_2_speakers},
        {"metric": "sessions_with_3_speakers", "value": stats.sessions_with_3_speakers},
        {"metric": "session_slots", "value": stats.total_session_slots},
        {"metric": "allocated_session_slots", "value": stats.allocated_session_slots},
        {"metric": "slot_ratio", "value": round(stats.slot_ratio, 4)},
    ]


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """Initialize exporter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, report: PlanningReport, output_path: str | Path) -> None:
        """Export planning report to JSON file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                report.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


class CSVExporter(BaseExporter):
    """Export to CSV format (multiple files)."""

    def export(self, report: PlanningReport, output_path: str | Path) -> None:
        """Export planning report to CSV files.

        Creates two files:
        - planning.csv: One row per allocated slot
        - summary.csv: Planning statistics

        Args:
            report: PlanningReport to export
            output_path: Path to output directory
        """
        output_dir = Path(output_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        self._write_csv(output_dir / "planning.csv", _planning_rows(report))
        self._write_csv(output_dir / "summary.csv", _summary_rows(report))

    def _write_csv(self, output_path: Path, rows: list[dict]) -> None:
        """Write rows to CSV file."""
        if not rows:
            return

        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=rows[0].keys())
            writer.writeheader()
            writer.writerows(rows)


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets)."""

    PLANNING_COLUMNS = {
        "date": "Date",
        "day_id": "Day",
        "start_time": "Start",
        "end_time": "End",
        "room": "Room",
        "session_id": "Session ID",
        "title": "Title",
        "session_type": "Type",
        "track": "Track",
        "status": "Status",
        "speakers": "Speakers",
    }

    def export(self, report: PlanningReport, output_path: str | Path) -> None:
        """Export planning report to Excel file.

        Creates workbook with sheets:
        - Planning: One row per allocated slot
        - Summary: Planning statistics

        Args:
            report: PlanningReport to export
            output_path: Path to output Excel file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            self._export_planning_sheet(report, writer)
            self._export_summary_sheet(report, writer)

    def _export_planning_sheet(self, report: PlanningReport, writer: pd.ExcelWriter) -> None:
        rows = _planning_rows(report)
        df = (
            pd.DataFrame(rows).rename(columns=self.PLANNING_COLUMNS)
            if rows
            else pd.DataFrame(columns=list(self.PLANNING_COLUMNS.values()))
        )
        df.to_excel(writer, sheet_name="Planning", index=False)

    def _export_summary_sheet(self, report: PlanningReport, writer: pd.ExcelWriter) -> None:
        rows = [
            {"Metric": row["metric"].replace("_", " ").capitalize(), "Value": row["value"]}
            for row in _summary_rows(report)
        ]
        df = pd.DataFrame(rows)
        df.to_excel(writer, sheet_name="Summary", index=False)


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'csv', 'excel')

    Returns:
        Exporter instance

    Raises:
        ValueError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "csv": CSVExporter,
        "excel": ExcelExporter,
    }

    if format_type not in exporters:
        raise ValueError(
            f"Unsupported format: {format_type}. Supported: {', '.join(exporters.keys())}"
        )

    return exporters[format_type]()
