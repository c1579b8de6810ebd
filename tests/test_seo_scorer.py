import unittest

from tools.youtube_seo_scorer import (
    PENALTIES,
    ActionType,
    analyze_video,
    suggest_hashtags,
    suggest_tags,
    to_title_case,
    video_statistics,
)


def _video(title, description, tags, views=0, likes=0, comments=0):
    return {
        "id": "vid123",
        "snippet": {
            "title": title,
            "description": description,
            "tags": tags,
            "publishedAt": "2026-09-01T12:00:00Z",
        },
        "statistics": {
            "viewCount": str(views),
            "likeCount": str(likes),
            "commentCount": str(comments),
        },
    }


def _optimized_video():
    title = "Best 7 Python Tips for Beginners [Complete Guide]"
    description = (
        "0:00 Intro\n1:30 Setup\n4:10 Tips\n"
        "Docs: https://docs.python.org\n"
        "#python #coding #tips #beginners\n"
        + "Learn how to write cleaner Python code step by step. " * 6
    )
    tags = [f"python tag {i}" for i in range(12)]
    return _video(title, description, tags, views=10000, likes=400, comments=50)


class ScoringEngineTests(unittest.TestCase):
    def test_fully_optimized_video_scores_100(self):
        video = _optimized_video()
        self.assertTrue(30 <= len(video["snippet"]["title"]) <= 70)
        self.assertGreaterEqual(len(video["snippet"]["description"]), 250)

        result = analyze_video(video)

        self.assertEqual(result.score, 100)
        self.assertEqual(result.issues, ())
        self.assertEqual(result.specific_actions, ())
        self.assertIn("Title length is optimal for search visibility.", result.strengths)
        self.assertIn(
            "Excellent engagement rate! (4.00% likes) - Keep doing what you're doing!",
            result.strengths,
        )

    def test_short_video_loses_title_description_and_tag_penalties(self):
        video = _video("my short title here!", "a" * 50, ["one", "two"], views=0)
        self.assertEqual(len(video["snippet"]["title"]), 20)

        result = analyze_video(video)

        self.assertLessEqual(result.score, 58)
        # every title, description and tag rule fails; engagement is skipped
        self.assertEqual(result.score, 20)
        self.assertIn(
            "Title is too short. Aim for 50-60 characters to maximize visibility and CTR.",
            result.issues,
        )
        self.assertIn(
            "Description is critically short. Add at least 250-300 words with timestamps and keywords for better SEO.",
            result.issues,
        )
        self.assertIn(
            "Add more tags. Use 10-15 relevant tags including broad and specific keywords.",
            result.issues,
        )

        action_types = [action.type for action in result.specific_actions]
        self.assertIn(ActionType.TITLE, action_types)
        self.assertIn(ActionType.DESCRIPTION, action_types)
        self.assertIn(ActionType.TAGS, action_types)

    def test_zero_views_skips_engagement_rules(self):
        result = analyze_video(_video("some title", "", [], views=0, likes=5, comments=5))

        self.assertNotIn(ActionType.ENGAGEMENT, [action.type for action in result.specific_actions])
        self.assertFalse(any("engagement rate" in text.lower() for text in result.issues + result.strengths))

    def test_score_stays_in_range_when_everything_fails(self):
        result = analyze_video(_video("", "", [], views=1000, likes=0, comments=0))

        self.assertGreaterEqual(result.score, 0)
        self.assertLessEqual(result.score, 100)
        self.assertIn(ActionType.ENGAGEMENT, [action.type for action in result.specific_actions])

    def test_missing_snippet_and_statistics_are_treated_as_empty(self):
        result = analyze_video({"id": "x"})

        self.assertTrue(0 <= result.score <= 100)
        self.assertEqual(video_statistics({"id": "x"}), (0, 0, 0))

    def test_unparsable_statistics_count_as_zero(self):
        video = {"statistics": {"viewCount": "abc", "likeCount": None, "commentCount": "-4"}}
        self.assertEqual(video_statistics(video), (0, 0, 0))

    def test_long_title_recommendation_is_truncated(self):
        title = "A Very Long Title About Python " * 3
        result = analyze_video(_video(title, "", []))

        title_action = result.specific_actions[0]
        self.assertEqual(title_action.type, ActionType.TITLE)
        self.assertEqual(title_action.recommended, title[:60].rstrip())
        self.assertIn(
            "Title may be truncated on mobile devices. Keep it under 60 characters for best results.",
            result.issues,
        )

    def test_uppercase_title_flagged_with_title_case_fix(self):
        result = analyze_video(_video("BEST PYTHON TIPS FOR 2026 [GUIDE] RIGHT NOW", "", []))

        case_actions = [a for a in result.specific_actions if a.issue == "Title is all lowercase or all uppercase"]
        self.assertEqual(len(case_actions), 1)
        self.assertEqual(case_actions[0].recommended, "Best Python Tips For 2026 [guide] Right Now")

    def test_too_many_hashtags_is_penalized(self):
        description = "0:00 start https://example.com " + " ".join(f"#tag{i}" for i in range(16)) + " x" * 150
        result = analyze_video(_video("Best 7 Python Tips for Beginners [Complete Guide]", description, ["a"] * 10))

        self.assertIn(
            "Too many hashtags can be seen as spam. Stick to 3-5 most relevant ones.",
            result.issues,
        )
        self.assertEqual(result.score, 100 - PENALTIES["hashtags_too_many"])

    def test_too_many_tags_keeps_first_twelve(self):
        tags = [f"tag{i}" for i in range(25)]
        result = analyze_video(_video("some title", "", tags))

        tag_action = [a for a in result.specific_actions if a.type == ActionType.TAGS][0]
        self.assertEqual(tag_action.recommended, ", ".join(tags[:12]))

    def test_comment_rule_needs_more_than_100_views(self):
        few_views = analyze_video(_video("t", "", [], views=100, likes=10, comments=0))
        many_views = analyze_video(_video("t", "", [], views=101, likes=10, comments=0))

        self.assertNotIn(
            "Very few comments. Ask questions in your video to encourage discussion.", few_views.issues
        )
        self.assertIn(
            "Very few comments. Ask questions in your video to encourage discussion.", many_views.issues
        )

    def test_good_engagement_between_thresholds(self):
        result = analyze_video(_video("t", "", [], views=1000, likes=20, comments=5))
        self.assertIn("Good engagement rate (2.00% likes).", result.strengths)

    def test_like_ratio_boundary_at_one_and_a_half_percent(self):
        at_threshold = analyze_video(_video("t", "", [], views=1000, likes=15, comments=5))
        self.assertIn("Good engagement rate (1.50% likes).", at_threshold.strengths)
        self.assertFalse(any(issue.startswith("Low engagement rate") for issue in at_threshold.issues))

        below = analyze_video(_video("t", "", [], views=1000, likes=14, comments=5))
        self.assertIn(
            "Low engagement rate (1.40% likes). Add clear CTAs asking viewers to like.", below.issues
        )

    def test_analysis_is_deterministic(self):
        video = _video("my short title here!", "a" * 50, ["one", "two"], views=500, likes=1, comments=0)
        self.assertEqual(analyze_video(video), analyze_video(video))

    def test_to_dict_uses_camel_case_and_omits_empty_fields(self):
        result = analyze_video(_video("my short title here!", "", ["one"]))
        payload = result.to_dict()

        self.assertEqual(set(payload), {"score", "issues", "strengths", "specificActions"})
        tag_action = [a for a in payload["specificActions"] if a["type"] == "tags"][0]
        self.assertIn("addThese", tag_action)
        self.assertNotIn("template", tag_action)
        self.assertIsInstance(tag_action["addThese"], list)


class SuggestionTests(unittest.TestCase):
    def test_title_case_is_idempotent(self):
        for text in ["hello world", "HELLO WORLD", "mIxEd cAsE [tag] (x)", "", "  spaced   out  "]:
            once = to_title_case(text)
            self.assertEqual(to_title_case(once), once)

    def test_title_case_preserves_whitespace(self):
        self.assertEqual(to_title_case("how  to\tcode"), "How  To\tCode")

    def test_tag_suggestions_unique_and_capped(self):
        for title in ["tutorial guide tutorial guide", "Python Python Python", "", "How to Cook Rice Fast Today Now"]:
            tags = suggest_tags(title)
            self.assertLessEqual(len(tags), 12)
            self.assertEqual(len(tags), len(set(tags)))

    def test_tag_suggestions_start_with_title(self):
        tags = suggest_tags("Python Basics")
        self.assertEqual(tags[0], "Python Basics")
        self.assertIn("python", tags)
        self.assertIn("basics", tags)

    def test_tag_suggestions_keep_title_verbatim(self):
        tags = suggest_tags("  Python Basics ")
        self.assertEqual(tags[0], "  Python Basics ")
        self.assertIn("python", tags)

    def test_hashtag_suggestions_capped(self):
        for title in ["Python Basics Explained", "", "a b c", "2026 2026"]:
            self.assertLessEqual(len(suggest_hashtags(title)), 5)

    def test_hashtag_suggestions_from_title_words(self):
        self.assertEqual(
            suggest_hashtags("Python Basics Explained"),
            ["#pythonbasics", "#Tutorial", "#HowTo", "#2026", "#python"],
        )


if __name__ == "__main__":
    unittest.main()
