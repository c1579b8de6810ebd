import io
import json
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import MagicMock, patch

from tools.youtube_analyze_videos import summarize_results
from tools.youtube_fetch_channel_data import InvalidIdentifierError
from web.services.analysis_runner import (
    MissingAPIKeyError,
    build_excel_report,
    build_pdf_report,
    extract_summary_metrics,
    filter_results,
    run_channel_analysis,
)

CHANNEL_ID = "UC" + "b" * 22


def _fake_youtube(published_at):
    youtube = MagicMock()
    youtube.channels.return_value.list.return_value.execute.return_value = {
        "items": [
            {
                "id": CHANNEL_ID,
                "snippet": {"title": "Runner Channel"},
                "statistics": {},
                "contentDetails": {"relatedPlaylists": {"uploads": "UU_RUNNER"}},
            }
        ]
    }
    youtube.playlistItems.return_value.list.return_value.execute.return_value = {
        "items": [
            {"snippet": {"publishedAt": published_at, "resourceId": {"videoId": "r1"}}},
            {"snippet": {"publishedAt": published_at, "resourceId": {"videoId": "r2"}}},
        ]
    }
    youtube.videos.return_value.list.return_value.execute.return_value = {
        "items": [
            {
                "id": "r1",
                "snippet": {"title": "first video", "description": "", "publishedAt": published_at},
                "statistics": {"viewCount": "100", "likeCount": "1", "commentCount": "0"},
            },
            {
                "id": "r2",
                "snippet": {"title": "Second Video", "description": "", "publishedAt": published_at},
                "statistics": {"viewCount": "5000", "likeCount": "200", "commentCount": "20"},
            },
        ]
    }
    return youtube


def _recent_timestamp():
    return (datetime.now(timezone.utc) - timedelta(days=3)).strftime("%Y-%m-%dT%H:%M:%SZ")


class AnalysisRunnerTests(unittest.TestCase):
    def test_missing_api_key(self):
        with self.assertRaises(MissingAPIKeyError):
            run_channel_analysis("@test", "")

    def test_runs_pipeline_and_logs_steps(self):
        messages = []
        analysis = run_channel_analysis(
            CHANNEL_ID,
            "test-key",
            logger=messages.append,
            youtube=_fake_youtube(_recent_timestamp()),
        )

        self.assertEqual(analysis["channel"]["id"], CHANNEL_ID)
        self.assertEqual([item["videoId"] for item in analysis["results"]], ["r1", "r2"])
        self.assertTrue(any("[Fetch Channel Data] complete" in message for message in messages))
        self.assertTrue(any("[Analyze Videos] complete" in message for message in messages))
        self.assertTrue(any("Channel ID:" in message for message in messages))

    def test_saves_artifacts_when_output_folder_given(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            run_channel_analysis(
                CHANNEL_ID,
                "test-key",
                output_folder=temp_dir,
                youtube=_fake_youtube(_recent_timestamp()),
            )
            channel_dir = Path(temp_dir) / CHANNEL_ID
            self.assertTrue((channel_dir / "raw_data.json").exists())
            analysis = json.loads((channel_dir / "analysis.json").read_text(encoding="utf-8"))
            self.assertEqual(analysis["videosAnalyzed"], 2)

    def test_errors_propagate(self):
        with self.assertRaises(InvalidIdentifierError):
            run_channel_analysis("nope", "test-key", youtube=MagicMock())

    def test_filter_results_keeps_selected_in_order(self):
        analysis = {
            "averageScore": 50,
            "results": [
                {"videoId": "a", "analysis": {"score": 20, "issues": ["x"], "specificActions": []}},
                {"videoId": "b", "analysis": {"score": 80, "issues": [], "specificActions": []}},
                {"videoId": "c", "analysis": {"score": 90, "issues": [], "specificActions": []}},
            ],
        }
        filtered = filter_results(analysis, ["c", "a"])

        self.assertEqual([item["videoId"] for item in filtered["results"]], ["a", "c"])
        self.assertEqual(filtered["averageScore"], 55)
        self.assertEqual(filtered["averageScoreLabel"], "Needs Improvement")
        self.assertEqual(len(analysis["results"]), 3)
        self.assertIs(filter_results(analysis, []), analysis)

    def test_filter_results_rebuilds_summary(self):
        analysis = run_channel_analysis(CHANNEL_ID, "test-key", youtube=_fake_youtube(_recent_timestamp()))
        kept = analysis["results"][1]

        filtered = filter_results(analysis, [kept["videoId"]])

        self.assertEqual(filtered["summary"], summarize_results([kept]))
        self.assertEqual(filtered["summary"]["totalActions"], len(kept["analysis"]["specificActions"]))
        self.assertEqual(filtered["summary"]["totalIssues"], len(kept["analysis"]["issues"]))
        self.assertEqual(filtered["summary"]["lowestScore"], kept["analysis"]["score"])
        self.assertEqual(filtered["averageScore"], kept["analysis"]["score"])
        self.assertNotEqual(analysis["summary"]["totalActions"], filtered["summary"]["totalActions"])

    def test_progress_goes_to_logger_not_stdout(self):
        messages = []
        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            run_channel_analysis(
                CHANNEL_ID,
                "test-key",
                logger=messages.append,
                youtube=_fake_youtube(_recent_timestamp()),
            )

        self.assertEqual(stdout.getvalue(), "")
        self.assertTrue(any("Channel ID:" in message for message in messages))
        self.assertTrue(any("Average SEO Score" in message for message in messages))

    def test_runs_quietly_without_logger(self):
        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            analysis = run_channel_analysis(CHANNEL_ID, "test-key", youtube=_fake_youtube(_recent_timestamp()))

        self.assertEqual(stdout.getvalue(), "")
        self.assertEqual(analysis["videosAnalyzed"], 2)

    def test_extract_summary_metrics(self):
        metrics = extract_summary_metrics(
            {
                "averageScore": 61,
                "videosAnalyzed": 10,
                "summary": {"lowestScore": 22, "totalIssues": 40, "totalActions": 35},
            }
        )
        self.assertEqual(metrics["average_score"], 61)
        self.assertEqual(metrics["lowest_score"], 22)
        self.assertEqual(metrics["total_issues"], 40)
        self.assertEqual(metrics["total_actions"], 35)
        self.assertEqual(metrics["videos_analyzed"], 10)

    def test_build_reports(self):
        analysis = run_channel_analysis(CHANNEL_ID, "test-key", youtube=_fake_youtube(_recent_timestamp()))

        pdf_name, pdf_bytes = build_pdf_report(analysis, name="Sam", email="sam@example.com")
        self.assertTrue(pdf_name.startswith("YouTube-SEO-Report-"))
        self.assertTrue(pdf_bytes.startswith(b"%PDF"))

        xlsx_name, xlsx_bytes = build_excel_report(analysis)
        self.assertEqual(xlsx_name, f"youtube-seo-{CHANNEL_ID}.xlsx")
        self.assertTrue(xlsx_bytes.startswith(b"PK"))


if __name__ == "__main__":
    unittest.main()
