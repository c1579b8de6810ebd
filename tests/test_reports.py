import io
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from openpyxl import load_workbook

from tools.export_to_excel import ExcelExporter
from tools.generate_pdf_report import PDFReportGenerator, badge_color
from tools.youtube_analyze_videos import SEOAnalyzer
from tools.youtube_seo_scorer import analyze_video


def _video(video_id, title, description, views, likes, comments, tags=None):
    return {
        "id": video_id,
        "snippet": {
            "title": title,
            "description": description,
            "tags": tags or [],
            "publishedAt": "2026-09-01T12:00:00Z",
            "thumbnails": {},
        },
        "statistics": {
            "viewCount": str(views),
            "likeCount": str(likes),
            "commentCount": str(comments),
        },
    }


def _analysis():
    videos = [
        _video("v1", "quick tip", "", 250, 1, 0),
        _video("v2", "Best 5 Ways to Learn Python [Full Guide]", "0:00 intro https://x.com #a #b #c " * 10,
               20000, 900, 100, tags=[f"t{i}" for i in range(10)]),
        _video("v3", "A Much Longer Title That Talks About Many Different Things At Once Ok", "x" * 200,
               1500, 10, 0, tags=["one"]),
    ]
    data = {
        "channel": {"id": "UC_TEST", "title": "Test Channel", "customUrl": "@test"},
        "videos": videos,
        "metadata": {},
    }
    return SEOAnalyzer(data).generate_analysis(), videos


class PDFReportTests(unittest.TestCase):
    def test_generates_pdf_bytes(self):
        analysis, _ = _analysis()
        generator = PDFReportGenerator(
            analysis["results"],
            user_info={"name": "Sam", "email": "sam@example.com"},
            channel=analysis["channel"],
        )
        content = generator.generate()

        self.assertTrue(content.startswith(b"%PDF"))
        self.assertGreater(len(content), 1000)

    def test_accepts_video_and_score_pairs(self):
        _, videos = _analysis()
        pairs = [(video, analyze_video(video)) for video in videos]
        generator = PDFReportGenerator(pairs, user_info={"name": "", "email": ""})

        self.assertEqual(generator.average_score(), round(sum(r.score for _, r in pairs) / len(pairs)))
        self.assertTrue(generator.generate().startswith(b"%PDF"))

    def test_empty_results_still_render(self):
        generator = PDFReportGenerator([])
        self.assertEqual(generator.average_score(), 0)
        self.assertTrue(generator.generate().startswith(b"%PDF"))

    def test_report_filename_uses_millisecond_timestamp(self):
        generated_at = datetime(2026, 10, 19, 12, 0, 0)
        generator = PDFReportGenerator([], generated_at=generated_at)
        expected = f"YouTube-SEO-Report-{int(generated_at.timestamp() * 1000)}.pdf"
        self.assertEqual(generator.report_filename(), expected)

    def test_export_writes_file(self):
        analysis, _ = _analysis()
        with tempfile.TemporaryDirectory() as temp_dir:
            output = PDFReportGenerator(analysis["results"]).export(Path(temp_dir) / "out" / "report.pdf")
            self.assertTrue(output.read_bytes().startswith(b"%PDF"))

    def test_badge_colors(self):
        self.assertEqual(badge_color(80), "green")
        self.assertEqual(badge_color(50), "orange")
        self.assertEqual(badge_color(10), "red")


class ExcelExportTests(unittest.TestCase):
    def test_workbook_tabs_and_rows(self):
        analysis, _ = _analysis()
        workbook = load_workbook(io.BytesIO(ExcelExporter(analysis).export_bytes()))

        self.assertEqual(workbook.sheetnames, ["Summary", "Worst Performers", "Action Plan"])

        performers = workbook["Worst Performers"]
        self.assertEqual(performers.max_row, 1 + len(analysis["results"]))
        self.assertEqual(performers.cell(row=2, column=2).value, analysis["results"][0]["videoUrl"])

        action_plan = workbook["Action Plan"]
        self.assertEqual(action_plan.max_row, 3 + analysis["summary"]["totalActions"])

        summary = workbook["Summary"]
        self.assertEqual(summary["B4"].value, "Test Channel")

    def test_formula_like_text_is_stored_as_text(self):
        data = {
            "channel": {"id": "UC_TEST", "title": "=HYPERLINK(\"http://evil.example\",\"x\")"},
            "videos": [_video("v1", "=1+1", "=SUM(A1:A9)", 250, 1, 0)],
            "metadata": {},
        }
        analysis = SEOAnalyzer(data, log=lambda message: None).generate_analysis()
        workbook = load_workbook(io.BytesIO(ExcelExporter(analysis).export_bytes()))

        channel_cell = workbook["Summary"]["B4"]
        self.assertEqual(channel_cell.value, "=HYPERLINK(\"http://evil.example\",\"x\")")
        self.assertEqual(channel_cell.data_type, "s")

        title_cell = workbook["Worst Performers"]["C2"]
        self.assertEqual(title_cell.value, "=1+1")
        self.assertEqual(title_cell.data_type, "s")

        action_plan = workbook["Action Plan"]
        self.assertGreater(action_plan.max_row, 3)
        for row in action_plan.iter_rows(min_row=4):
            for cell in row:
                if isinstance(cell.value, str) and cell.value.startswith("="):
                    self.assertEqual(cell.data_type, "s")
        self.assertEqual(action_plan["B4"].value, "=1+1")

    def test_export_to_path(self):
        analysis, _ = _analysis()
        with tempfile.TemporaryDirectory() as temp_dir:
            output = ExcelExporter(analysis).export(Path(temp_dir) / "nested" / "seo.xlsx")
            workbook = load_workbook(output)
            self.assertIn("Action Plan", workbook.sheetnames)


if __name__ == "__main__":
    unittest.main()
