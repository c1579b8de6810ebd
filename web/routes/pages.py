"""HTML page routes for the SEO analyzer."""

from __future__ import annotations

from flask import Blueprint, current_app, flash, render_template, request

from tools.youtube_fetch_channel_data import ChannelLookupError
from web.services.analysis_runner import (
    MissingAPIKeyError,
    extract_summary_metrics,
    run_with_config,
)

pages_bp = Blueprint("pages", __name__)


@pages_bp.get("/")
def index():
    return render_template("index.html", channel="", analysis=None)


@pages_bp.post("/analyze")
def analyze():
    channel = request.form.get("channel", "").strip()

    if not channel:
        flash("Please enter a YouTube channel URL, @handle, or channel ID.", "error")
        return render_template("index.html", channel=channel, analysis=None), 400

    try:
        analysis = run_with_config(current_app.config, channel, logger=current_app.logger.debug)
    except MissingAPIKeyError:
        current_app.logger.error("Analysis requested but YOUTUBE_API_KEY is not configured")
        flash("The server is missing its YouTube API key.", "error")
        return render_template("index.html", channel=channel, analysis=None), 500
    except ChannelLookupError as exc:
        current_app.logger.warning("Analysis failed for %s: %s", channel, exc)
        flash(str(exc), "error")
        return render_template("index.html", channel=channel, analysis=None)

    metrics = extract_summary_metrics(analysis)
    current_app.logger.info(
        "Analyzed %s: %s videos, average score %s, %s actions",
        channel,
        metrics["videos_analyzed"],
        metrics["average_score"],
        metrics["total_actions"],
    )
    return render_template("index.html", channel=channel, analysis=analysis)
