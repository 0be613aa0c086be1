import pytest

from interview_scoring.scorers.content_analyzer import (
    ResponseContentAnalyzer,
    count_sentences,
    has_quantifiable_evidence,
)

STRONG_ANSWER = (
    "In my previous role I led a team of 5 engineers building a python and react api. "
    "For example, I improved database query latency by 40%. "
    "As a result, we shipped two weeks early."
)


@pytest.fixture
def analyzer():
    return ResponseContentAnalyzer()


class TestContentProfile:
    """Per-response heuristics averaged into a profile."""

    def test_no_responses_gives_no_profile(self, analyzer):
        assert analyzer.profile(None) is None
        assert analyzer.profile([]) is None

    def test_strong_answer_profile(self, analyzer):
        profile = analyzer.profile([STRONG_ANSWER], "Software Engineer")

        assert profile.response_count == 1
        assert profile.quality_score == 8.5
        assert profile.communication_score == 7.0
        assert profile.clarity == 6.5
        assert profile.confidence == 7.5
        assert profile.skills_relevance == 9.5

    def test_role_keywords_only_count_for_known_roles(self, analyzer):
        known = analyzer.profile([STRONG_ANSWER], "Software Engineer")
        unknown = analyzer.profile([STRONG_ANSWER], "Astronaut")

        assert unknown.skills_relevance == 6.5
        assert known.skills_relevance > unknown.skills_relevance

    def test_blank_answers_score_zero(self, analyzer):
        profile = analyzer.profile(["", "   "])

        assert profile.quality_score == 0.0
        assert profile.confidence == 0.0
        assert profile.response_count == 2

    def test_hedging_lowers_confidence(self, analyzer):
        profile = analyzer.profile(["I think maybe I guess it was probably fine."])

        assert profile.confidence == 2.0

    def test_short_answer_lowers_quality(self, analyzer):
        profile = analyzer.profile(["Yes."])

        assert profile.quality_score == 3.0

    @pytest.mark.parametrize("words, quality, clarity", [
        (25, 6.0, 5.0),
        (120, 7.0, 5.0),
        (230, 6.0, 5.0),
        (260, 4.0, 4.0),
    ])
    def test_answer_length_bands(self, analyzer, words, quality, clarity):
        profile = analyzer.profile([" ".join(["detail"] * words)])

        assert profile.quality_score == quality
        assert profile.clarity == clarity

    def test_profile_is_the_mean_of_answers(self, analyzer):
        profile = analyzer.profile(["Yes.", ""])

        assert profile.quality_score == 1.5

    def test_metrics_are_clamped(self, analyzer):
        answer = " ".join(["I led the launch and I delivered 30% growth."] * 10)
        profile = analyzer.profile([answer], "Software Engineer")

        for value in (profile.quality_score, profile.communication_score, profile.skills_relevance,
                      profile.clarity, profile.confidence):
            assert 0.0 <= value <= 10.0


class TestGrammarIssues:
    """Filler, fragment and agreement detection."""

    def test_counts_fillers(self, analyzer):
        report = analyzer.grammar_issues(["Um, basically I, you know, did it.", "Uh yes."])

        assert report.filler_count == 4
        assert report.filler_rate == 2.0

    def test_counts_fragments(self, analyzer):
        report = analyzer.grammar_issues(["I built the service", "I built the service.", ""])

        assert report.fragment_count == 1
        assert report.response_count == 3

    def test_counts_agreement_errors(self, analyzer):
        report = analyzer.grammar_issues(["They was late and he don't care."])

        assert report.agreement_error_count == 2
        assert report.agreement_error_rate == 2.0

    def test_clean_answers(self, analyzer):
        report = analyzer.grammar_issues([STRONG_ANSWER])

        assert report.filler_count == 0
        assert report.fragment_count == 0
        assert report.agreement_error_count == 0

    def test_empty_input_has_zero_rates(self, analyzer):
        report = analyzer.grammar_issues(None)

        assert report.response_count == 0
        assert report.filler_rate == 0.0


@pytest.mark.parametrize("text, expected", [
    ("Grew revenue by 25%", True),
    ("Saved $1.2m per year", True),
    ("I have 6 years of experience", True),
    ("Improved it by 30 percent", True),
    ("I worked on a team", False),
])
def test_quantifiable_evidence(text, expected):
    assert has_quantifiable_evidence(text) is expected


@pytest.mark.parametrize("text, expected", [
    ("", 0),
    ("One sentence without a stop", 1),
    ("First. Second!", 2),
    ("One. Two? Three!", 3),
])
def test_count_sentences(text, expected):
    assert count_sentences(text) == expected
