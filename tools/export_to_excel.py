#!/usr/bin/env python3
"""
Excel Exporter
Creates a multi-tab Excel workbook from the worst-performer analysis.

Usage:
    python3 -m tools.export_to_excel path/to/analysis.json [output.xlsx]
"""

import io
import json
import sys
from datetime import datetime
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter


TITLE_FILL = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")
HEADER_FILL = PatternFill(start_color="D9D9D9", end_color="D9D9D9", fill_type="solid")
SECTION_FILL = PatternFill(start_color="EEF3F8", end_color="EEF3F8", fill_type="solid")
SCORE_FILLS = {
    "high": PatternFill(start_color="D1FAE5", end_color="D1FAE5", fill_type="solid"),
    "medium": PatternFill(start_color="FEF3C7", end_color="FEF3C7", fill_type="solid"),
    "low": PatternFill(start_color="FEE2E2", end_color="FEE2E2", fill_type="solid"),
}
FORMULA_PREFIX = "="


def autosize_columns(worksheet, max_width=80):
    """Auto-size columns to content width with a reasonable cap."""
    widths = {}
    for row in worksheet.iter_rows():
        for cell in row:
            value = cell.value
            if value is None:
                continue
            length = max(len(line) for line in str(value).splitlines() or [""])
            widths[cell.column] = max(widths.get(cell.column, 0), length)

    for col_idx, width in widths.items():
        worksheet.column_dimensions[get_column_letter(col_idx)].width = min(max(width + 2, 10), max_width)


def style_title_row(worksheet, end_column):
    """Style and merge row 1 as title."""
    worksheet.merge_cells(start_row=1, start_column=1, end_row=1, end_column=end_column)
    cell = worksheet.cell(row=1, column=1)
    cell.fill = TITLE_FILL
    cell.font = Font(bold=True, color="FFFFFF", size=13)
    cell.alignment = Alignment(horizontal="center", vertical="center")


def style_header_row(worksheet, row_idx, end_column):
    """Style a header row."""
    for col in range(1, end_column + 1):
        cell = worksheet.cell(row=row_idx, column=col)
        cell.fill = HEADER_FILL
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)


def style_section_row(worksheet, row_idx, end_column):
    """Style section rows for readability."""
    for col in range(1, end_column + 1):
        cell = worksheet.cell(row=row_idx, column=col)
        cell.fill = SECTION_FILL
        cell.font = Font(bold=True)


def _append_row(worksheet, values):
    """Append a row, keeping strings that look like formulas as plain text."""
    worksheet.append(values)
    for cell in worksheet[worksheet.max_row]:
        if isinstance(cell.value, str) and cell.value.startswith(FORMULA_PREFIX):
            cell.data_type = "s"


def _action_details(action):
    """Flatten the optional list/template fields of an action into one cell."""
    parts = []
    for key, label in (
        ("alternatives", "Alternatives"),
        ("suggestions", "Suggestions"),
        ("addThese", "Add these"),
        ("actions", "Steps"),
    ):
        values = action.get(key)
        if values:
            parts.append(f"{label}: " + " | ".join(values))
    if action.get("template"):
        parts.append("Template:\n" + action["template"])
    return "\n".join(parts)


class ExcelExporter:
    def __init__(self, analysis):
        self.analysis = analysis
        self.channel = analysis.get("channel", {})
        self.results = analysis.get("results", [])

    def create_summary_tab(self, workbook):
        ws = workbook.create_sheet("Summary")
        summary = self.analysis.get("summary", {})
        actions_by_type = summary.get("actionsByType", {})

        rows = [
            ["YOUTUBE SEO ANALYSIS - SUMMARY"],
            [""],
            ["Channel Information", ""],
            ["Channel Name", self.channel.get("title", "")],
            ["Channel ID", self.channel.get("id", "")],
            ["Generated At", self.analysis.get("generatedAt", "")],
            [""],
            ["Analysis Results", ""],
            ["Average SEO Score", f"{self.analysis.get('averageScore', 0)}/100"],
            ["Rating", self.analysis.get("averageScoreLabel", "")],
            ["Lowest SEO Score", f"{summary.get('lowestScore', 0)}/100"],
            ["Recent Videos Fetched", self.analysis.get("videosFetched", 0)],
            ["Worst Performers Analyzed", self.analysis.get("videosAnalyzed", 0)],
            ["Total Issues", summary.get("totalIssues", 0)],
            ["Total Actions", summary.get("totalActions", 0)],
            [""],
            ["Actions by Type", ""],
        ]
        for action_type in ("title", "description", "tags", "engagement"):
            rows.append([action_type.title(), actions_by_type.get(action_type, 0)])

        for row in rows:
            _append_row(ws, row)

        style_title_row(ws, 2)
        style_section_row(ws, 3, 2)
        style_section_row(ws, 8, 2)
        style_section_row(ws, 17, 2)
        ws.freeze_panes = "A4"
        autosize_columns(ws)

    def create_worst_performers_tab(self, workbook):
        ws = workbook.create_sheet("Worst Performers")
        headers = [
            "Rank",
            "Video URL",
            "Title",
            "SEO Score",
            "Rating",
            "Views",
            "Likes",
            "Comments",
            "Like Rate %",
            "Published Date",
            "Issues",
            "Strengths",
        ]
        _append_row(ws, headers)

        for rank, item in enumerate(self.results, 1):
            analysis = item.get("analysis", {})
            _append_row(ws, [
                rank,
                item.get("videoUrl", ""),
                item.get("title", ""),
                analysis.get("score", 0),
                item.get("scoreLabel", ""),
                item.get("views", 0),
                item.get("likes", 0),
                item.get("comments", 0),
                item.get("engagementRate", 0.0),
                (item.get("publishedAt") or "")[:10],
                len(analysis.get("issues", [])),
                len(analysis.get("strengths", [])),
            ])
            fill = SCORE_FILLS.get(item.get("scoreClass"))
            if fill is not None:
                ws.cell(row=rank + 1, column=4).fill = fill

        style_header_row(ws, 1, len(headers))
        ws.freeze_panes = "A2"
        autosize_columns(ws, max_width=70)

    def create_action_plan_tab(self, workbook):
        ws = workbook.create_sheet("Action Plan")
        rows = [
            ["ACTION PLAN - COPY-PASTE FIXES"],
            [""],
            ["Video URL", "Video Title", "Type", "Issue", "Current", "Recommended", "Why", "Details"],
        ]

        for item in self.results:
            for action in item.get("analysis", {}).get("specificActions", []):
                rows.append([
                    item.get("videoUrl", ""),
                    item.get("title", ""),
                    action.get("type", ""),
                    action.get("issue", ""),
                    action.get("current", ""),
                    action.get("recommended", ""),
                    action.get("why", ""),
                    _action_details(action),
                ])

        for row in rows:
            _append_row(ws, row)

        style_title_row(ws, 8)
        style_header_row(ws, 3, 8)
        for row in ws.iter_rows(min_row=4):
            for cell in row:
                cell.alignment = Alignment(vertical="top", wrap_text=True)
        ws.freeze_panes = "A4"
        autosize_columns(ws, max_width=60)

    def build_workbook(self):
        workbook = Workbook()
        default_sheet = workbook.active
        workbook.remove(default_sheet)

        self.create_summary_tab(workbook)
        self.create_worst_performers_tab(workbook)
        self.create_action_plan_tab(workbook)
        return workbook

    def export(self, output_path):
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.build_workbook().save(output_path)
        return output_path

    def export_bytes(self):
        buffer = io.BytesIO()
        self.build_workbook().save(buffer)
        return buffer.getvalue()


def main():
    if len(sys.argv) < 2 or len(sys.argv) > 3:
        print("❌ Error: Missing analysis file")
        print("\nUsage:")
        print("  python3 -m tools.export_to_excel path/to/analysis.json [output.xlsx]")
        sys.exit(1)

    analysis_file = Path(sys.argv[1])
    output_file = Path(sys.argv[2]) if len(sys.argv) == 3 else analysis_file.parent / "seo_report.xlsx"

    try:
        print("Loading analysis file...")
        with analysis_file.open("r", encoding="utf-8") as f:
            analysis = json.load(f)
    except FileNotFoundError as exc:
        print(f"❌ Error: File not found: {exc}")
        sys.exit(1)
    except json.JSONDecodeError as exc:
        print(f"❌ Error: Invalid JSON file: {exc}")
        sys.exit(1)

    print("Exporting to Excel workbook...")
    print("=" * 50)

    saved_path = ExcelExporter(analysis).export(output_file)

    print("\n" + "=" * 50)
    print("SUCCESS")
    print(f"\nExcel file saved at:\n{saved_path}")
    print(f"\nGenerated at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")


if __name__ == "__main__":
    main()
