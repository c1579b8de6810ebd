#!/usr/bin/env python3
"""
YouTube Video SEO Scorer
Scores one video against fixed SEO heuristics and builds copy-paste fixes

Performs 4 groups of checks, all of them on every call:
1. Title (length, power words, numbers, capitalization, brackets)
2. Description (length, timestamps, links, hashtags)
3. Tags (count)
4. Engagement (like ratio, comment ratio)

The score starts at 100 and only ever loses fixed penalties before being
clamped into [0, 100].

Usage:
    python3 -m tools.youtube_seo_scorer path/to/video.json
"""

from __future__ import annotations

import json
import re
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple


POWER_WORDS = ['best', 'top', 'ultimate', 'complete', 'guide', 'how to', 'tutorial', 'review', 'vs']
SUGGESTION_YEAR = '2026'

PENALTIES = {
    'title_too_short': 12,
    'title_too_long': 8,
    'title_no_power_word': 5,
    'title_no_number': 4,
    'title_bad_case': 5,
    'title_no_brackets': 3,
    'description_critically_short': 18,
    'description_short': 10,
    'description_no_timestamps': 8,
    'description_no_links': 6,
    'hashtags_too_few': 7,
    'hashtags_too_many': 5,
    'tags_too_few': 12,
    'tags_too_many': 5,
    'low_like_ratio': 8,
    'low_comment_ratio': 5,
}

THRESHOLDS = {
    'title_min': 30,
    'title_max': 70,
    'title_truncate': 60,
    'description_critical': 150,
    'description_min': 250,
    'hashtags_min': 3,
    'hashtags_max': 15,
    'hashtag_suggestions': 5,
    'tags_min': 8,
    'tags_max': 20,
    'tags_keep': 12,
    'tag_suggestions': 12,
    'like_ratio_low': 1.5,
    'like_ratio_excellent': 3.0,
    'comment_ratio_low': 0.1,
    'comment_min_views': 100,
}

TIMESTAMP_PATTERN = re.compile(r"\d{1,2}:\d{2}")
LINK_PATTERN = re.compile(r"https?://")
HASHTAG_PATTERN = re.compile(r"#\w+")
BRACKET_PATTERN = re.compile(r"\[.*?\]|\(.*?\)")
DIGIT_PATTERN = re.compile(r"\d")
WORD_PATTERN = re.compile(r"\w+")
TOKEN_PATTERN = re.compile(r"\S+")


class ActionType(str, Enum):
    TITLE = 'title'
    DESCRIPTION = 'description'
    TAGS = 'tags'
    ENGAGEMENT = 'engagement'


@dataclass(frozen=True)
class Action:
    type: ActionType
    issue: str
    current: str
    recommended: str
    why: str
    alternatives: Optional[Tuple[str, ...]] = None
    template: Optional[str] = None
    add_these: Optional[Tuple[str, ...]] = None
    actions: Optional[Tuple[str, ...]] = None
    suggestions: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict:
        payload = {
            'type': self.type.value,
            'issue': self.issue,
            'current': self.current,
            'recommended': self.recommended,
            'why': self.why,
        }
        optional = {
            'alternatives': self.alternatives,
            'template': self.template,
            'addThese': self.add_these,
            'actions': self.actions,
            'suggestions': self.suggestions,
        }
        for key, value in optional.items():
            if value is None:
                continue
            payload[key] = list(value) if isinstance(value, tuple) else value
        return payload


@dataclass(frozen=True)
class ScoreResult:
    score: int
    issues: Tuple[str, ...] = ()
    strengths: Tuple[str, ...] = ()
    specific_actions: Tuple[Action, ...] = ()

    def to_dict(self) -> Dict:
        return {
            'score': self.score,
            'issues': list(self.issues),
            'strengths': list(self.strengths),
            'specificActions': [action.to_dict() for action in self.specific_actions],
        }


def _to_count(value) -> int:
    """API statistics arrive as strings; anything unparsable counts as 0."""
    try:
        count = int(value)
    except (TypeError, ValueError):
        return 0
    return max(count, 0)


def _dedupe(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


def _long_words(title: str) -> List[str]:
    return [word for word in WORD_PATTERN.findall(title.lower()) if len(word) > 3]


def to_title_case(text: str) -> str:
    """Capitalize each whitespace-delimited token, lowercasing the rest of it."""
    return TOKEN_PATTERN.sub(lambda match: match.group(0).capitalize(), text)


def suggest_hashtags(title: str) -> List[str]:
    words = _long_words(title)
    candidates = []
    if words:
        candidates.append('#' + ''.join(words[:2]))
    candidates.extend(['#Tutorial', '#HowTo', f'#{SUGGESTION_YEAR}'])
    if words:
        candidates.append(f'#{words[0]}')
    return _dedupe(candidates)[:THRESHOLDS['hashtag_suggestions']]


def suggest_tags(title: str) -> List[str]:
    words = _long_words(title)
    candidates = [title] + words[:5] + ['tutorial', 'how to', 'guide', SUGGESTION_YEAR]
    if words:
        candidates.extend([f'{words[0]} tutorial', f'{words[0]} guide'])
    return _dedupe(candidate for candidate in candidates if candidate)[:THRESHOLDS['tag_suggestions']]


def video_statistics(video: Dict) -> Tuple[int, int, int]:
    """Return (views, likes, comments) with missing values as 0."""
    statistics = video.get('statistics') or {}
    return (
        _to_count(statistics.get('viewCount')),
        _to_count(statistics.get('likeCount')),
        _to_count(statistics.get('commentCount')),
    )


def description_template(title: str) -> str:
    hashtags = ' '.join(suggest_hashtags(title))
    return f"""{title or '[Video title with main keyword]'}

In this video you will learn:
- [Key point 1]
- [Key point 2]
- [Key point 3]

TIMESTAMPS
0:00 Introduction
1:30 [Main topic]
5:00 [Deep dive]
8:45 Summary and next steps

LINKS
Website: https://your-website.com
Related video: https://youtube.com/watch?v=[video-id]
Subscribe: https://youtube.com/@yourchannel?sub_confirmation=1

{hashtags}"""


TIMESTAMP_TEMPLATE = """0:00 Introduction
0:45 [What you will learn]
2:00 [Step 1]
4:30 [Step 2]
7:00 [Common mistakes]
9:15 Summary"""


class VideoSEOScorer:
    """Runs every rule against one video record in the videos.list item shape."""

    def __init__(self, video: Dict):
        snippet = video.get('snippet') or {}
        self.title = str(snippet.get('title') or '')
        self.description = str(snippet.get('description') or '')
        self.tags = [str(tag) for tag in (snippet.get('tags') or [])]
        self.views, self.likes, self.comments = video_statistics(video)

        self.penalty = 0
        self.issues: List[str] = []
        self.strengths: List[str] = []
        self.actions: List[Action] = []

    def _fail(self, rule: str, issue: str, action: Optional[Action] = None) -> None:
        self.penalty += PENALTIES[rule]
        self.issues.append(issue)
        if action is not None:
            self.actions.append(action)

    def check_title(self):
        title = self.title
        length = len(title)

        if length < THRESHOLDS['title_min']:
            lengthened = f'{title} - Complete Guide for Beginners' if title else 'Complete Guide: [Main Keyword] for Beginners'
            self._fail('title_too_short', "Title is too short. Aim for 50-60 characters to maximize visibility and CTR.", Action(
                type=ActionType.TITLE,
                issue=f'Title is too short ({length} characters)',
                current=title,
                recommended=lengthened,
                why='Titles of 50-60 characters fill the space YouTube shows in search and leave room for keywords.',
            ))
        elif length > THRESHOLDS['title_max']:
            truncated = title[:THRESHOLDS['title_truncate']].rstrip()
            self._fail('title_too_long', "Title may be truncated on mobile devices. Keep it under 60 characters for best results.", Action(
                type=ActionType.TITLE,
                issue=f'Title is too long ({length} characters)',
                current=title,
                recommended=truncated,
                why='Mobile search results cut titles after roughly 60 characters, hiding the end of your title.',
            ))
        else:
            self.strengths.append("Title length is optimal for search visibility.")

        lowered = title.lower()
        if not any(word in lowered for word in POWER_WORDS):
            alternatives = (
                f'The Ultimate Guide to {title}',
                f'{title} - Complete Tutorial',
                f'Best {title} Tips You Need to Know',
            )
            self._fail('title_no_power_word', "Consider adding power words like 'Best', 'Ultimate', 'Complete Guide' to improve CTR.", Action(
                type=ActionType.TITLE,
                issue='Title has no power words',
                current=title,
                recommended=alternatives[0],
                why='Words like "Best", "Ultimate" and "Complete" signal value and lift click-through rate.',
                alternatives=alternatives,
            ))
        else:
            self.strengths.append("Title uses engaging power words.")

        if not DIGIT_PATTERN.search(title):
            suggestions = (
                f'7 {title} Tips You Need to Know',
                f'{title} in 10 Minutes',
                f'{title} ({SUGGESTION_YEAR})',
            )
            self._fail('title_no_number', "Add a number to your title. Titles with numbers typically increase click-through rate by 20-30%.", Action(
                type=ActionType.TITLE,
                issue='Title has no numbers',
                current=title,
                recommended=suggestions[0],
                why='Numbers set a concrete expectation and stand out in a list of search results.',
                suggestions=suggestions,
            ))
        else:
            self.strengths.append("Title contains numbers, which typically increases click-through rate by 20-30%.")

        if title == title.lower() or title == title.upper():
            self._fail('title_bad_case', "Title lacks proper capitalization. Use Title Case for better readability.", Action(
                type=ActionType.TITLE,
                issue='Title is all lowercase or all uppercase',
                current=title,
                recommended=to_title_case(title),
                why='Title Case reads faster than all-lowercase and looks less spammy than all-caps.',
            ))
        else:
            self.strengths.append("Title uses readable capitalization.")

        if not BRACKET_PATTERN.search(title):
            alternatives = (
                f'{title} [{SUGGESTION_YEAR} Guide]',
                f'{title} (Step-by-Step)',
                f'{title} [Full Tutorial]',
            )
            self._fail('title_no_brackets', "Add brackets or parentheses to highlight key info in your title.", Action(
                type=ActionType.TITLE,
                issue='Title has no brackets or parentheses',
                current=title,
                recommended=alternatives[0],
                why='Bracketed extras like [2026 Guide] or (Step-by-Step) draw the eye and add context.',
                alternatives=alternatives,
            ))
        else:
            self.strengths.append("Using brackets/parentheses in title - great for highlighting key info!")

    def check_description(self):
        description = self.description
        length = len(description)

        if length < THRESHOLDS['description_critical']:
            self._fail('description_critically_short', "Description is critically short. Add at least 250-300 words with timestamps and keywords for better SEO.", Action(
                type=ActionType.DESCRIPTION,
                issue=f'Description is critically short ({length} characters)',
                current=description,
                recommended='Replace the description with the template below and fill in the placeholders.',
                why='YouTube reads the description to understand the video; the first 150 characters also show in search.',
                template=description_template(self.title),
            ))
        elif length < THRESHOLDS['description_min']:
            self._fail('description_short', "Description could be longer. Aim for 250+ words to improve search rankings.", Action(
                type=ActionType.DESCRIPTION,
                issue=f'Description is short ({length} characters)',
                current=description,
                recommended='Expand the description to at least 250 characters.',
                why='Longer descriptions give the algorithm more keywords and context to rank the video.',
                actions=(
                    'Open with two sentences that repeat the main keyword from the title',
                    'Add a bullet list of what viewers will learn',
                    'Add timestamps for each section',
                    'Link related videos or a playlist',
                    'Finish with 3-5 relevant hashtags',
                ),
            ))
        else:
            self.strengths.append("Description length is comprehensive.")

        if not TIMESTAMP_PATTERN.search(description):
            self._fail('description_no_timestamps', "Add timestamps to your description. Videos with timestamps get 15% more engagement.", Action(
                type=ActionType.DESCRIPTION,
                issue='No timestamps in description',
                current='(no timestamps)',
                recommended='Paste chapter timestamps starting at 0:00 into the description.',
                why='Timestamps create chapters, which show up in search and keep viewers watching longer.',
                template=TIMESTAMP_TEMPLATE,
            ))
        else:
            self.strengths.append("Timestamps included - helps with user experience and watch time!")

        if not LINK_PATTERN.search(description):
            self._fail('description_no_links', "No links in description. Add your social media, website, or affiliate links.", Action(
                type=ActionType.DESCRIPTION,
                issue='No links in description',
                current='(no links)',
                recommended='Add at least two links to the description.',
                why='Links send viewers to more of your content and to the places you earn from.',
                actions=(
                    'Add your website or blog link',
                    'Link 1-2 related videos or a playlist',
                    'Add your social media profiles',
                    'Include any resources or affiliate links mentioned in the video',
                ),
            ))
        else:
            self.strengths.append("Links included in description.")

        hashtag_count = len(HASHTAG_PATTERN.findall(description))
        if hashtag_count < THRESHOLDS['hashtags_min']:
            suggestions = tuple(suggest_hashtags(self.title))
            self._fail('hashtags_too_few', "Use 3-5 relevant hashtags in description for better discoverability.", Action(
                type=ActionType.DESCRIPTION,
                issue=f'Only {hashtag_count} hashtag(s) in description',
                current=f'{hashtag_count} hashtag(s)',
                recommended=' '.join(suggestions),
                why='Hashtags group the video with related content and the first three appear above the title.',
                suggestions=suggestions,
            ))
        elif hashtag_count > THRESHOLDS['hashtags_max']:
            self._fail('hashtags_too_many', "Too many hashtags can be seen as spam. Stick to 3-5 most relevant ones.", Action(
                type=ActionType.DESCRIPTION,
                issue=f'Too many hashtags ({hashtag_count})',
                current=f'{hashtag_count} hashtags',
                recommended='Keep only the 3-5 most relevant hashtags.',
                why='YouTube ignores every hashtag on videos with more than 15 of them.',
            ))
        else:
            self.strengths.append("Good hashtag usage for discoverability.")

    def check_tags(self):
        tag_count = len(self.tags)

        if tag_count < THRESHOLDS['tags_min']:
            add_these = tuple(suggest_tags(self.title))
            self._fail('tags_too_few', "Add more tags. Use 10-15 relevant tags including broad and specific keywords.", Action(
                type=ActionType.TAGS,
                issue=f'Only {tag_count} tag(s)',
                current=', '.join(self.tags) or '(no tags)',
                recommended=', '.join(add_these),
                why='Tags help YouTube understand the topic, especially for misspellings and related searches.',
                add_these=add_these,
            ))
        elif tag_count > THRESHOLDS['tags_max']:
            kept = self.tags[:THRESHOLDS['tags_keep']]
            self._fail('tags_too_many', "Too many tags can dilute relevance. Focus on 10-15 highly relevant tags.", Action(
                type=ActionType.TAGS,
                issue=f'Too many tags ({tag_count})',
                current=', '.join(self.tags),
                recommended=', '.join(kept),
                why='Keep the top 12 tags; a long tail of loosely related tags dilutes relevance.',
            ))
        else:
            self.strengths.append("Tag count is in the optimal range.")

    def check_engagement(self):
        if self.views <= 0:
            return

        like_ratio = self.likes * 100 / self.views
        comment_ratio = self.comments * 100 / self.views

        if like_ratio < THRESHOLDS['like_ratio_low']:
            self._fail('low_like_ratio', f"Low engagement rate ({like_ratio:.2f}% likes). Add clear CTAs asking viewers to like.", Action(
                type=ActionType.ENGAGEMENT,
                issue=f'Low like ratio ({like_ratio:.2f}%)',
                current=f'{like_ratio:.2f}% of viewers liked the video',
                recommended='Aim for a like ratio of 3% or higher.',
                why='Likes are an early quality signal that YouTube uses when deciding whom to recommend the video to.',
                actions=(
                    'Ask viewers to like the video within the first 30 seconds',
                    'Repeat the ask right after delivering the key result',
                    'Pin a comment asking viewers to like the video if it helped',
                    'Add an end screen with a like and subscribe reminder',
                ),
            ))
        elif like_ratio >= THRESHOLDS['like_ratio_excellent']:
            self.strengths.append(f"Excellent engagement rate! ({like_ratio:.2f}% likes) - Keep doing what you're doing!")
        else:
            self.strengths.append(f"Good engagement rate ({like_ratio:.2f}% likes).")

        if self.views > THRESHOLDS['comment_min_views'] and comment_ratio < THRESHOLDS['comment_ratio_low']:
            self._fail('low_comment_ratio', "Very few comments. Ask questions in your video to encourage discussion.", Action(
                type=ActionType.ENGAGEMENT,
                issue=f'Very few comments ({comment_ratio:.2f}% of views)',
                current=f'{self.comments} comments on {self.views} views',
                recommended='Give viewers a specific reason to comment.',
                why='Comments are weighted heavily by the recommendation algorithm and keep the video active.',
                actions=(
                    'Ask one specific question at the end of the video',
                    'Pin a comment with a question for viewers',
                    'Reply to early comments within the first hour',
                    'Invite viewers to share their own experience or results',
                ),
            ))

    def score(self) -> ScoreResult:
        self.check_title()
        self.check_description()
        self.check_tags()
        self.check_engagement()

        return ScoreResult(
            score=max(0, min(100, 100 - self.penalty)),
            issues=tuple(self.issues),
            strengths=tuple(self.strengths),
            specific_actions=tuple(self.actions),
        )


def analyze_video(video: Dict) -> ScoreResult:
    """Score one video. Deterministic and free of side effects."""
    return VideoSEOScorer(video).score()


def main():
    if len(sys.argv) != 2:
        print("❌ Error: Missing video file path")
        print("\nUsage:")
        print("  python3 -m tools.youtube_seo_scorer path/to/video.json")
        sys.exit(1)

    video_path = Path(sys.argv[1])
    if not video_path.exists():
        print(f"❌ Error: File not found: {video_path}")
        sys.exit(1)

    try:
        with open(video_path, 'r', encoding='utf-8') as f:
            video = json.load(f)
    except json.JSONDecodeError as e:
        print(f"❌ Error: Invalid JSON file: {e}")
        sys.exit(1)

    result = analyze_video(video)
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


if __name__ == '__main__':
    main()
