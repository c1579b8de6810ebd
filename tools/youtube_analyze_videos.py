#!/usr/bin/env python3
"""
YouTube Worst Performers Analyzer
Scores every fetched video and ranks the worst performers first

For each video:
1. SEO score, issues, strengths and copy-paste actions
2. Like-based engagement rate
3. Performance score (views, engagement and SEO score combined)

Usage:
    python3 -m tools.youtube_analyze_videos path/to/raw_data.json
"""

import sys
import json
from pathlib import Path
from datetime import datetime, timezone
from collections import Counter

import numpy as np

from tools.youtube_seo_scorer import analyze_video, video_statistics


# Performance score weights: lower is worse
PERFORMANCE_WEIGHTS = {
    'views': 0.7,
    'engagement_rate': 1000,
    'seo_score': 10,
}

WORST_VIDEOS_LIMIT = 10

SCORE_BANDS = [
    (75, 'high', 'Good SEO'),
    (50, 'medium', 'Needs Work'),
    (0, 'low', 'Poor SEO'),
]

AVERAGE_SCORE_LABELS = [
    (75, 'Excellent Performance'),
    (50, 'Needs Improvement'),
    (0, 'Critical Issues Detected'),
]


def score_class(score):
    for floor, css_class, _ in SCORE_BANDS:
        if score >= floor:
            return css_class
    return 'low'


def score_label(score):
    for floor, _, label in SCORE_BANDS:
        if score >= floor:
            return label
    return 'Poor SEO'


def average_score_label(score):
    for floor, label in AVERAGE_SCORE_LABELS:
        if score >= floor:
            return label
    return 'Critical Issues Detected'


def _thumbnail_url(snippet):
    thumbnails = snippet.get('thumbnails') or {}
    for size in ('medium', 'high', 'default'):
        url = (thumbnails.get(size) or {}).get('url')
        if url:
            return url
    return ''


def summarize_results(results):
    """Summary block for a list of scored rows."""
    scores = [item['analysis']['score'] for item in results]
    average = int(round(float(np.mean(scores)))) if scores else 0

    actions_by_type = Counter(
        action['type']
        for item in results
        for action in item['analysis']['specificActions']
    )

    return {
        'averageScore': average,
        'lowestScore': min(scores) if scores else 0,
        'totalIssues': sum(len(item['analysis']['issues']) for item in results),
        'totalActions': sum(actions_by_type.values()),
        'actionsByType': dict(actions_by_type),
    }


class SEOAnalyzer:
    def __init__(self, data, log=print):
        """Initialize analyzer with fetched data; progress lines go to log"""
        self.log = log
        self.channel = data.get('channel', {})
        self.videos = data.get('videos', [])
        self.metadata = data.get('metadata', {})

    def score_video(self, video):
        """Score one video and attach the ranking metrics."""
        analysis = analyze_video(video)
        views, likes, comments = video_statistics(video)
        engagement_rate = (likes / views * 100) if views > 0 else 0.0

        performance_score = (
            views * PERFORMANCE_WEIGHTS['views']
            + engagement_rate * PERFORMANCE_WEIGHTS['engagement_rate']
            + analysis.score * PERFORMANCE_WEIGHTS['seo_score']
        )

        snippet = video.get('snippet') or {}
        video_id = video.get('id', '')

        return {
            'videoId': video_id,
            'videoUrl': f"https://youtube.com/watch?v={video_id}",
            'title': snippet.get('title', ''),
            'publishedAt': snippet.get('publishedAt', ''),
            'thumbnailUrl': _thumbnail_url(snippet),
            'views': views,
            'likes': likes,
            'comments': comments,
            'engagementRate': round(engagement_rate, 2),
            'performanceScore': round(performance_score, 2),
            'scoreClass': score_class(analysis.score),
            'scoreLabel': score_label(analysis.score),
            'analysis': analysis.to_dict(),
        }

    def rank_worst_performers(self, limit=WORST_VIDEOS_LIMIT):
        """
        Score all videos and return the lowest performance scores first.

        sorted() is stable, so ties keep the fetch order.
        """
        results = [self.score_video(video) for video in self.videos]
        results.sort(key=lambda item: item['performanceScore'])
        if limit and limit > 0:
            return results[:limit]
        return results

    def summarize(self, results):
        return summarize_results(results)

    def generate_analysis(self, limit=WORST_VIDEOS_LIMIT):
        """Build the analysis document for the worst performers."""
        self.log("🎯 Scoring videos...")
        results = self.rank_worst_performers(limit)
        summary = self.summarize(results)

        self.log(f"   Videos fetched: {len(self.videos)}")
        self.log(f"   Worst performers kept: {len(results)}")
        self.log(f"📊 Average SEO Score: {summary['averageScore']}/100")
        self.log(f"📋 Total Actions: {summary['totalActions']}")

        return {
            'channel': {
                'id': self.channel.get('id', ''),
                'title': self.channel.get('title', ''),
                'customUrl': self.channel.get('customUrl', ''),
            },
            'generatedAt': datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ'),
            'averageScore': summary['averageScore'],
            'averageScoreLabel': average_score_label(summary['averageScore']),
            'videosFetched': len(self.videos),
            'videosAnalyzed': len(results),
            'results': results,
            'summary': summary,
        }


def main():
    """Main execution function"""
    if len(sys.argv) != 2:
        print("❌ Error: Missing data file path")
        print("\nUsage:")
        print("  python3 -m tools.youtube_analyze_videos path/to/raw_data.json")
        sys.exit(1)

    data_file = sys.argv[1]
    data_path = Path(data_file)

    if not data_path.exists():
        print(f"❌ Error: File not found: {data_file}")
        sys.exit(1)

    try:
        print(f"📂 Loading data from: {data_file}")
        with open(data_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        print(f"❌ Error: Invalid JSON file: {e}")
        sys.exit(1)

    analyzer = SEOAnalyzer(data)
    analysis_results = analyzer.generate_analysis()

    output_file = data_path.parent / 'analysis.json'
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(analysis_results, f, indent=2, ensure_ascii=False)

    print(f"\n📁 Analysis saved to: {output_file}")
    print("\nNext step:")
    print(f"  python3 -m tools.generate_pdf_report {output_file}")


if __name__ == '__main__':
    main()
