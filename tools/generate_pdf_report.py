#!/usr/bin/env python3
"""
PDF Report Generator
Lays out the worst-performer analysis as a downloadable PDF

Pages:
1. Title page with the "prepared for" card and executive summary
2. One card per video with score badge, metrics and top 3 actions
3. Closing page with next steps

Usage:
    python3 -m tools.generate_pdf_report path/to/analysis.json [--name NAME] [--email EMAIL] [--output report.pdf]
"""

import argparse
import io
import json
import sys
from datetime import datetime
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from tools.formatting import format_number
from tools.youtube_analyze_videos import average_score_label
from tools.youtube_seo_scorer import ScoreResult, video_statistics


BRAND_NAME = "YouTube SEO Analyzer"

COLORS = {
    'dark_gray': (31, 41, 55),
    'muted_gray': (107, 114, 128),
    'green': (16, 185, 129),
    'orange': (245, 158, 11),
    'red': (239, 68, 68),
    'blue': (37, 99, 235),
    'light_gray': (243, 244, 246),
    'border': (229, 231, 235),
    'white': (255, 255, 255),
}

TYPOGRAPHY = {
    'report_title': 20,
    'section_title': 15,
    'sub_heading': 12,
    'body': 10,
    'footer': 8,
}

MARGIN = 20 * mm
TOP = 20 * mm
BOTTOM_LIMIT = 30 * mm
ACTIONS_PER_VIDEO = 3
TITLE_MAX_CHARS = 65
CURRENT_MAX_CHARS = 280


def _rgb(name):
    r, g, b = COLORS[name]
    return r / 255, g / 255, b / 255


def _clean(text):
    return " ".join(str(text or "").split())


def format_report_number(value):
    """Zero reads as N/A; counts from 10,000 up use compact notation."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = 0
    if number == 0:
        return "N/A"
    if number < 10000:
        return f"{number:,}"
    return format_number(number)


def badge_color(score):
    if score >= 75:
        return 'green'
    if score >= 50:
        return 'orange'
    return 'red'


def _card_data(item):
    """Accept an analyzer result row or a (video, ScoreResult) pair."""
    if isinstance(item, tuple):
        video, result = item
        snippet = video.get('snippet') or {}
        views, likes, comments = video_statistics(video)
        return {
            'title': snippet.get('title', ''),
            'views': views,
            'likes': likes,
            'comments': comments,
            'analysis': result.to_dict() if isinstance(result, ScoreResult) else result,
        }
    return item


class NumberedCanvas(canvas.Canvas):
    """Defers page output so every footer can print the total page count."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total_pages = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self.draw_footer(total_pages)
            super().showPage()
        super().save()

    def draw_footer(self, total_pages):
        width, _ = self._pagesize
        footer_y = 15 * mm

        self.setStrokeColorRGB(*_rgb('border'))
        self.setLineWidth(0.3)
        self.line(MARGIN, footer_y + 5 * mm, width - MARGIN, footer_y + 5 * mm)

        self.setFont("Helvetica", TYPOGRAPHY['footer'])
        self.setFillColorRGB(*_rgb('muted_gray'))
        self.drawString(MARGIN, footer_y, f"Generated by {BRAND_NAME}")
        self.drawRightString(width - MARGIN, footer_y, f"Page {self._pageNumber} of {total_pages}")


class PDFReportGenerator:
    def __init__(self, results, user_info=None, channel=None, generated_at=None):
        """
        results: analyzer result rows, or (video, ScoreResult) pairs
        user_info: {"name": ..., "email": ...}
        """
        self.results = [_card_data(item) for item in results]
        self.user_info = user_info or {}
        self.channel = channel or {}
        self.generated_at = generated_at or datetime.now()

        self.page_width, self.page_height = A4
        self.content_width = self.page_width - 2 * MARGIN
        self.pdf = None
        self.y = TOP

    def report_filename(self):
        return f"YouTube-SEO-Report-{int(self.generated_at.timestamp() * 1000)}.pdf"

    def average_score(self):
        if not self.results:
            return 0
        total = sum(item.get('analysis', {}).get('score', 0) for item in self.results)
        return int(round(total / len(self.results)))

    # Drawing primitives. self.y is the distance from the top edge.

    def _baseline(self, offset=0):
        return self.page_height - self.y - offset

    def _new_page(self):
        self.pdf.showPage()
        self.y = TOP

    def _ensure_space(self, height):
        if self.y + height > self.page_height - BOTTOM_LIMIT:
            self._new_page()

    def _set_font(self, size, bold=False, italic=False, color='dark_gray'):
        if bold:
            font = "Helvetica-Bold"
        elif italic:
            font = "Helvetica-Oblique"
        else:
            font = "Helvetica"
        self.pdf.setFont(font, size)
        self.pdf.setFillColorRGB(*_rgb(color))
        return font

    def _wrapped(self, text, x, width, size, bold=False, color='dark_gray'):
        """Draw wrapped text at self.y, breaking pages as needed."""
        text = _clean(text)
        if not text:
            return
        font = self._set_font(size, bold=bold, color=color)
        leading = size * 0.4 * mm
        for line in simpleSplit(text, font, size, width):
            self._ensure_space(leading)
            self._set_font(size, bold=bold, color=color)
            self.y += leading
            self.pdf.drawString(x, self._baseline(), line)

    def _divider(self, width=0.5):
        self.pdf.setStrokeColorRGB(*_rgb('border'))
        self.pdf.setLineWidth(width)
        self.pdf.line(MARGIN, self._baseline(), self.page_width - MARGIN, self._baseline())

    def _score_badge(self, score, x, large=True):
        """Rounded badge whose top edge sits at self.y; returns its height."""
        width, height, size = (60 * mm, 20 * mm, 14) if large else (28 * mm, 10 * mm, 9)
        self.pdf.setFillColorRGB(*_rgb(badge_color(score)))
        self.pdf.roundRect(x, self._baseline(height), width, height, 3 * mm, stroke=0, fill=1)
        self._set_font(size, bold=True, color='white')
        self.pdf.drawCentredString(x + width / 2, self._baseline(height / 2 + size * 0.35), f"{score}")
        return height

    # Sections

    def render_title_page(self):
        self.y = TOP
        self._set_font(TYPOGRAPHY['report_title'], bold=True)
        self.y += 7 * mm
        self.pdf.drawString(MARGIN, self._baseline(), "YouTube SEO Analysis Report")

        self.y += 8 * mm
        self._set_font(TYPOGRAPHY['body'], color='muted_gray')
        self.pdf.drawString(MARGIN, self._baseline(), f"Generated on {self.generated_at:%B} {self.generated_at.day}, {self.generated_at.year}")

        if self.channel.get('title'):
            self.y += 5 * mm
            self.pdf.drawString(MARGIN, self._baseline(), f"Channel: {self.channel['title']}")

        self.y += 10 * mm
        self.pdf.setFillColorRGB(*_rgb('light_gray'))
        self.pdf.roundRect(MARGIN, self._baseline(18 * mm), self.content_width, 18 * mm, 3 * mm, stroke=0, fill=1)
        self._set_font(TYPOGRAPHY['body'], bold=True)
        self.pdf.drawString(MARGIN + 5 * mm, self._baseline(7 * mm), f"Prepared for: {self.user_info.get('name') or 'N/A'}")
        self._set_font(TYPOGRAPHY['footer'], color='muted_gray')
        self.pdf.drawString(MARGIN + 5 * mm, self._baseline(13 * mm), f"{self.user_info.get('email') or 'N/A'}")

        self.y += 28 * mm
        self._set_font(TYPOGRAPHY['section_title'], bold=True)
        self.pdf.drawString(MARGIN, self._baseline(), "Executive Summary")

        self.y += 4 * mm
        count = len(self.results)
        summary = (
            f"This report analyzes {count} video{'s' if count != 1 else ''} from your YouTube channel, "
            "providing actionable SEO recommendations to improve visibility, engagement, and search rankings."
        )
        self._wrapped(summary, MARGIN, self.content_width, TYPOGRAPHY['body'], color='muted_gray')

        self.y += 12 * mm
        average = self.average_score()
        self._score_badge(average, MARGIN, large=True)
        self._set_font(TYPOGRAPHY['sub_heading'], bold=True)
        self.pdf.drawString(MARGIN + 70 * mm, self._baseline(8 * mm), average_score_label(average))
        self._set_font(TYPOGRAPHY['footer'], color='muted_gray')
        self.pdf.drawString(MARGIN + 70 * mm, self._baseline(14 * mm), "Average SEO Score")

        self.y += 30 * mm
        self._divider()

    def render_video_card(self, index, item):
        self._ensure_space(70 * mm)

        self.pdf.setFillColorRGB(*_rgb('light_gray'))
        self.pdf.roundRect(MARGIN, self._baseline(12 * mm), self.content_width, 12 * mm, 2 * mm, stroke=0, fill=1)
        title = item.get('title') or 'Untitled Video'
        if len(title) > TITLE_MAX_CHARS:
            title = title[:TITLE_MAX_CHARS] + '...'
        self._set_font(TYPOGRAPHY['sub_heading'], bold=True)
        self.pdf.drawString(MARGIN + 3 * mm, self._baseline(8 * mm), f"{index}. {_clean(title)}")

        self.y += 17 * mm
        analysis = item.get('analysis') or {}
        self._score_badge(analysis.get('score', 0), MARGIN, large=False)
        self._set_font(TYPOGRAPHY['footer'], color='muted_gray')
        metrics = " | ".join([
            f"Views: {format_report_number(item.get('views'))}",
            f"Likes: {format_report_number(item.get('likes'))}",
            f"Comments: {format_report_number(item.get('comments'))}",
        ])
        self.pdf.drawString(MARGIN + 35 * mm, self._baseline(7 * mm), metrics)
        self.y += 15 * mm

        actions = analysis.get('specificActions') or []
        if not actions:
            self._set_font(TYPOGRAPHY['footer'], italic=True, color='muted_gray')
            self.y += 3 * mm
            self.pdf.drawString(MARGIN, self._baseline(), "No specific recommendations available.")
            self.y += 7 * mm
            return

        self._set_font(TYPOGRAPHY['sub_heading'], bold=True)
        self.pdf.drawString(MARGIN, self._baseline(), "Recommended Actions")
        self.y += 4 * mm

        for action in actions[:ACTIONS_PER_VIDEO]:
            self._ensure_space(20 * mm)
            self.pdf.setFillColorRGB(*_rgb('blue'))
            self.pdf.circle(MARGIN + 2 * mm, self._baseline(3.5 * mm), 1.2 * mm, stroke=0, fill=1)
            self._wrapped(action.get('issue') or 'Optimization needed', MARGIN + 8 * mm, self.content_width - 10 * mm,
                          TYPOGRAPHY['body'], bold=True)
            self.y += 1.5 * mm

            current = _clean(action.get('current'))
            if current:
                if len(current) > CURRENT_MAX_CHARS:
                    current = current[:CURRENT_MAX_CHARS] + '...'
                self._wrapped(f"Current: {current}", MARGIN + 12 * mm, self.content_width - 15 * mm,
                              TYPOGRAPHY['footer'], color='muted_gray')
                self.y += 1 * mm

            if action.get('recommended'):
                self._wrapped("Optimized:", MARGIN + 12 * mm, self.content_width - 15 * mm,
                              TYPOGRAPHY['footer'], bold=True, color='green')
                self._wrapped(action['recommended'], MARGIN + 12 * mm, self.content_width - 15 * mm,
                              TYPOGRAPHY['footer'], color='green')
            self.y += 3 * mm

        self.y += 5 * mm

    def render_closing_page(self):
        self._new_page()
        self.y = 60 * mm
        self._set_font(TYPOGRAPHY['report_title'], bold=True, color='blue')
        self.pdf.drawCentredString(self.page_width / 2, self._baseline(), BRAND_NAME)

        self.y += 10 * mm
        self._set_font(TYPOGRAPHY['body'], color='muted_gray')
        self.pdf.drawCentredString(self.page_width / 2, self._baseline(), "Thank you for using this report.")

        self.y += 20 * mm
        self._set_font(TYPOGRAPHY['section_title'], bold=True)
        self.pdf.drawString(MARGIN, self._baseline(), "Next Steps")
        self.y += 3 * mm

        steps = [
            "Apply the top three actions for each video, starting with the lowest score.",
            "Update titles, descriptions and tags in YouTube Studio; no re-upload is needed.",
            "Reuse the description and timestamp templates for every new upload.",
            "Re-run the analysis in two to four weeks to measure the improvement.",
        ]
        for number, step in enumerate(steps, 1):
            self.y += 2 * mm
            self._wrapped(f"{number}. {step}", MARGIN + 4 * mm, self.content_width - 4 * mm, TYPOGRAPHY['body'])

    def generate(self):
        """Return the report as PDF bytes."""
        buffer = io.BytesIO()
        self.pdf = NumberedCanvas(buffer, pagesize=A4)
        self.pdf.setTitle("YouTube SEO Analysis Report")
        self.pdf.setAuthor(BRAND_NAME)

        self.render_title_page()

        if self.results:
            self._new_page()
        for index, item in enumerate(self.results, 1):
            self.render_video_card(index, item)
            if index < len(self.results):
                self.y += 5 * mm
                self._divider()
                self.y += 10 * mm

        self.render_closing_page()
        self.pdf.showPage()
        self.pdf.save()
        return buffer.getvalue()

    def export(self, output_path):
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(self.generate())
        return output_path


def main():
    arg_parser = argparse.ArgumentParser(description="Generate the PDF report from analysis.json")
    arg_parser.add_argument("analysis_file")
    arg_parser.add_argument("--name", default="")
    arg_parser.add_argument("--email", default="")
    arg_parser.add_argument("--output", default="")
    args = arg_parser.parse_args()

    analysis_path = Path(args.analysis_file)
    try:
        with analysis_path.open("r", encoding="utf-8") as f:
            analysis = json.load(f)
    except FileNotFoundError:
        print(f"❌ Error: File not found: {analysis_path}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"❌ Error: Invalid JSON file: {e}")
        sys.exit(1)

    generator = PDFReportGenerator(
        analysis.get("results", []),
        user_info={"name": args.name, "email": args.email},
        channel=analysis.get("channel"),
    )
    output_file = Path(args.output) if args.output else analysis_path.parent / "seo_report.pdf"
    saved_path = generator.export(output_file)

    print("✅ PDF report generated")
    print(f"📁 Saved to: {saved_path}")


if __name__ == "__main__":
    main()
