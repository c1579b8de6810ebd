"""Analysis runner wrapper around the deterministic tool modules."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

from tools.export_to_excel import ExcelExporter
from tools.generate_pdf_report import PDFReportGenerator
from tools.youtube_analyze_videos import (
    WORST_VIDEOS_LIMIT,
    SEOAnalyzer,
    average_score_label,
    summarize_results,
)
from tools.youtube_fetch_channel_data import YouTubeChannelFetcher


class MissingAPIKeyError(RuntimeError):
    pass


def _emit(logger: Optional[Callable[[str], None]], message: str) -> None:
    if logger:
        logger(message)


def _run_step(logger: Optional[Callable[[str], None]], step_name: str, fn):
    _emit(logger, f"[{step_name}] starting...")
    result = fn()
    _emit(logger, f"[{step_name}] complete")
    return result


def extract_summary_metrics(analysis: Dict) -> Dict[str, int]:
    summary = analysis.get("summary", {})
    return {
        "average_score": int(analysis.get("averageScore", 0)),
        "lowest_score": int(summary.get("lowestScore", 0)),
        "total_issues": int(summary.get("totalIssues", 0)),
        "total_actions": int(summary.get("totalActions", 0)),
        "videos_analyzed": int(analysis.get("videosAnalyzed", 0)),
    }


def filter_results(analysis: Dict, video_ids: Optional[Iterable[str]]) -> Dict:
    """Restrict an analysis document to the selected videos, keeping rank order."""
    if not video_ids:
        return analysis

    selected = set(video_ids)
    results = [item for item in analysis.get("results", []) if item.get("videoId") in selected]
    summary = summarize_results(results)

    filtered = dict(analysis)
    filtered["results"] = results
    filtered["videosAnalyzed"] = len(results)
    filtered["averageScore"] = summary["averageScore"]
    filtered["averageScoreLabel"] = average_score_label(summary["averageScore"])
    filtered["summary"] = summary
    return filtered


def run_channel_analysis(
    channel_input: str,
    api_key: str,
    max_results: int = 50,
    lookback_months: int = 3,
    limit: int = WORST_VIDEOS_LIMIT,
    output_folder: Optional[str] = None,
    logger: Optional[Callable[[str], None]] = None,
    youtube=None,
) -> Dict:
    """Fetch, score and rank a channel's recent uploads.

    Fetch errors propagate unchanged; callers map them to messages or status
    codes. Progress lines go to ``logger``, never to stdout. When
    ``output_folder`` is set, raw_data.json and analysis.json are written
    under ``<output_folder>/<channel_id>``.
    """
    if not api_key:
        raise MissingAPIKeyError("YOUTUBE_API_KEY is missing")

    def log(message: str) -> None:
        _emit(logger, message)

    fetcher = YouTubeChannelFetcher(api_key, youtube=youtube, log=log)
    log(f"Running analysis for: {channel_input}")

    channel_info, videos = _run_step(
        logger,
        "Fetch Channel Data",
        lambda: fetcher.fetch_recent_videos(channel_input, max_results, lookback_months),
    )
    raw_data = {
        "channel": channel_info,
        "videos": videos,
        "metadata": {"videoCount": len(videos), "quotaUsed": fetcher.quota_used},
    }

    analyzer = SEOAnalyzer(raw_data, log=log)
    analysis = _run_step(logger, "Analyze Videos", lambda: analyzer.generate_analysis(limit))
    analysis["quotaUsed"] = fetcher.quota_used

    if output_folder:
        raw_data_path = Path(fetcher.save_data(channel_info, videos, Path(output_folder) / channel_info["id"]))
        analysis_path = raw_data_path.parent / "analysis.json"
        with analysis_path.open("w", encoding="utf-8") as analysis_file:
            json.dump(analysis, analysis_file, indent=2, ensure_ascii=False)
        log(f"Analysis saved: {analysis_path}")

    return analysis


def build_pdf_report(analysis: Dict, name: str = "", email: str = "") -> tuple:
    """Render the PDF for an analysis document. Returns (filename, bytes)."""
    generator = PDFReportGenerator(
        analysis.get("results", []),
        user_info={"name": name, "email": email},
        channel=analysis.get("channel"),
    )
    return generator.report_filename(), generator.generate()


def build_excel_report(analysis: Dict) -> tuple:
    """Render the Excel workbook for an analysis document. Returns (filename, bytes)."""
    channel_id = analysis.get("channel", {}).get("id") or "channel"
    return f"youtube-seo-{channel_id}.xlsx", ExcelExporter(analysis).export_bytes()


def run_with_config(config, channel_input: str, logger: Optional[Callable[[str], None]] = None) -> Dict:
    """Run an analysis using the Flask app's configuration values."""
    return run_channel_analysis(
        channel_input,
        config.get("YOUTUBE_API_KEY", ""),
        max_results=int(config.get("MAX_RESULTS", 50)),
        lookback_months=int(config.get("LOOKBACK_MONTHS", 3)),
        limit=int(config.get("WORST_VIDEOS_LIMIT", WORST_VIDEOS_LIMIT)),
        output_folder=config.get("OUTPUT_FOLDER") if config.get("SAVE_ARTIFACTS") else None,
        logger=logger,
    )
