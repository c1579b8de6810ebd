"""JSON API routes for analysis and report downloads."""

from __future__ import annotations

import io

from flask import Blueprint, abort, current_app, jsonify, request, send_file

from tools.youtube_fetch_channel_data import (
    ChannelNotFoundError,
    InvalidIdentifierError,
    TransientFetchError,
)
from web.services.analysis_runner import (
    MissingAPIKeyError,
    build_excel_report,
    build_pdf_report,
    filter_results,
    run_with_config,
)

api_bp = Blueprint("api", __name__)

REPORT_MIMETYPES = {
    "pdf": "application/pdf",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

ERROR_STATUS = (
    (InvalidIdentifierError, 400),
    (ChannelNotFoundError, 404),
    (TransientFetchError, 502),
    (MissingAPIKeyError, 500),
)


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _json_payload() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _channel_from_payload(payload) -> str:
    channel = payload.get("channel", "")
    if not isinstance(channel, str):
        return ""
    return channel.strip()


def _run_analysis(channel: str):
    """Run the analysis, returning (analysis, None) or (None, error response)."""
    try:
        return run_with_config(current_app.config, channel, logger=current_app.logger.debug), None
    except tuple(exc_type for exc_type, _ in ERROR_STATUS) as exc:
        status = next(code for exc_type, code in ERROR_STATUS if isinstance(exc, exc_type))
        if status >= 500:
            current_app.logger.error("Analysis failed for %s: %s", channel, exc)
        else:
            current_app.logger.warning("Analysis failed for %s: %s", channel, exc)
        return None, _error(str(exc), status)


@api_bp.post("/api/analyze")
def analyze_channel():
    payload = _json_payload()
    channel = _channel_from_payload(payload)
    if not channel:
        return _error("Field 'channel' is required.", 400)

    analysis, error = _run_analysis(channel)
    if error is not None:
        return error
    return jsonify(analysis)


@api_bp.post("/api/reports/<report_format>")
def download_report(report_format: str):
    if report_format not in REPORT_MIMETYPES:
        abort(404)

    payload = _json_payload()
    channel = _channel_from_payload(payload)
    if not channel:
        return _error("Field 'channel' is required.", 400)

    video_ids = payload.get("video_ids") or []
    if not isinstance(video_ids, list):
        return _error("Field 'video_ids' must be a list.", 400)

    analysis, error = _run_analysis(channel)
    if error is not None:
        return error
    analysis = filter_results(analysis, video_ids)

    if report_format == "pdf":
        filename, content = build_pdf_report(
            analysis,
            name=str(payload.get("name", "")),
            email=str(payload.get("email", "")),
        )
    else:
        filename, content = build_excel_report(analysis)

    current_app.logger.info("Generated %s report for %s (%d bytes)", report_format, channel, len(content))
    return send_file(
        io.BytesIO(content),
        mimetype=REPORT_MIMETYPES[report_format],
        as_attachment=True,
        download_name=filename,
    )
