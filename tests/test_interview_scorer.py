import logging

import pytest

from interview_scoring.models import InterviewSessionMetrics
from interview_scoring.scorers import InterviewScorer, InterviewScoringPolicy, analyze_interview_performance
from interview_scoring.scorers.interview_scorer import summarize_scores

STRONG_ANSWER = (
    "In my previous role I led a team of 5 engineers building a python and react api. "
    "For example, I improved database query latency by 40%. "
    "As a result, we shipped two weeks early."
)
FILLER_ANSWER = "um so basically um I think uh yes"


def _sub_scores(analysis):
    return [analysis.body_language_score, analysis.grammar_score, analysis.skills_score, analysis.confidence_score]


class TestInterviewScenarios:
    """Representative sessions."""

    def test_full_session_scores_in_good_band(self, interview_scorer, make_session):
        analysis = interview_scorer.score(make_session())

        assert analysis.body_language_score == 90
        assert analysis.grammar_score == 90
        assert analysis.skills_score == 90
        assert analysis.confidence_score == 95
        assert analysis.overall_score == 91
        assert all(score >= 60 for score in _sub_scores(analysis))
        assert analysis.feedback.startswith("Excellent Performance (91%)")
        assert "100.0% completion" in analysis.feedback
        assert "35.0s" in analysis.feedback
        assert "Software Engineer" in analysis.feedback
        assert "Completed the full interview" in analysis.strengths

    def test_zero_participation(self, interview_scorer, make_session):
        analysis = interview_scorer.score(make_session(questions_answered=0, time_spent_per_question_seconds=[]))

        assert _sub_scores(analysis) == [0, 0, 0, 0]
        assert analysis.overall_score == 0
        assert analysis.feedback.startswith("No Participation (0%)")
        assert "Skipped all questions - no visible engagement to assess" in analysis.improvements
        assert "answer each Software Engineer question" in analysis.feedback

    def test_zero_total_questions(self, interview_scorer):
        session = InterviewSessionMetrics(questions_answered=0, total_questions=0)

        analysis = interview_scorer.score(session)

        assert analysis.overall_score == 0

    def test_convenience_function_matches_scorer(self, interview_scorer, make_session):
        session = make_session(questions_answered=5, time_spent_per_question_seconds=[20.0] * 5)

        assert analyze_interview_performance(session) == interview_scorer.score(session)

    def test_summarize_scores_order(self, interview_scorer, make_session):
        analysis = interview_scorer.score(make_session())

        labels = [label for label, _ in summarize_scores(analysis)]
        assert labels == ["Body Language", "Grammar & Speech", "Role-Specific Skills", "Confidence Level"]


class TestGates:
    """Zero-engagement and device gates."""

    def test_camera_off_zeroes_body_language(self, interview_scorer, make_session):
        analysis = interview_scorer.score(make_session(camera_used=False))

        assert analysis.body_language_score == 0
        assert analysis.grammar_score == 90
        assert analysis.skills_score == 90
        assert analysis.confidence_score == 5
        assert analysis.overall_score == 46
        assert "Camera not enabled - no body language assessment possible" in analysis.improvements

    def test_microphone_off_zeroes_grammar(self, interview_scorer, make_session):
        analysis = interview_scorer.score(make_session(microphone_used=False))

        assert analysis.grammar_score == 0
        assert analysis.body_language_score == 90
        assert analysis.confidence_score == 5

    def test_no_devices(self, interview_scorer, make_session):
        analysis = interview_scorer.score(make_session(camera_used=False, microphone_used=False))

        assert analysis.body_language_score == 0
        assert analysis.grammar_score == 0
        assert analysis.confidence_score == 0
        assert analysis.skills_score == 90


class TestScoreProperties:
    """Ranges, aggregation and monotonicity."""

    @pytest.mark.parametrize("answered, timings, camera, mic", [
        (0, [], True, True),
        (1, [3.0], True, False),
        (3, [12.0, 40.0, 200.0], False, True),
        (5, [30.0] * 5, True, True),
        (7, [150.0] * 7, True, True),
        (7, [1.0] * 7, False, False),
    ])
    def test_overall_is_rounded_mean_within_range(self, interview_scorer, make_session,
                                                  answered, timings, camera, mic):
        analysis = interview_scorer.score(make_session(
            questions_answered=answered,
            time_spent_per_question_seconds=timings,
            camera_used=camera,
            microphone_used=mic,
        ))

        subs = _sub_scores(analysis)
        assert all(0 <= score <= 100 for score in subs)
        assert 0 <= analysis.overall_score <= 100
        assert analysis.overall_score == round(sum(subs) / 4)

    def test_more_answers_never_lower_scores(self, interview_scorer, make_session):
        previous = None
        for answered in range(0, 8):
            analysis = interview_scorer.score(make_session(
                questions_answered=answered,
                time_spent_per_question_seconds=[35.0] * answered,
                interview_completed=False,
            ))
            current = _sub_scores(analysis)
            if previous is not None:
                assert all(now >= before for now, before in zip(current, previous))
            previous = current

    def test_completion_is_capped_when_answered_exceeds_total(self, interview_scorer, make_session):
        session = make_session(questions_answered=9, time_spent_per_question_seconds=[35.0] * 9)

        assert session.completion_rate == 1.0
        assert interview_scorer.score(session).body_language_score == 90

    def test_answers_without_questions_warn_with_actual_rate(self, interview_scorer, make_session, caplog):
        session = make_session(questions_answered=3, total_questions=0, time_spent_per_question_seconds=[35.0] * 3)

        with caplog.at_level(logging.WARNING, logger="scorer.interview"):
            interview_scorer.score(session)

        assert session.completion_rate == 0.0
        assert "using completion rate 0%" in caplog.text
        assert "capped" not in caplog.text

    def test_completion_bonus_only_for_completed_interviews(self, interview_scorer, make_session):
        completed = interview_scorer.score(make_session())
        aborted = interview_scorer.score(make_session(interview_completed=False))

        assert completed.confidence_score - aborted.confidence_score == 5
        assert "Finish the full interview to build stamina and confidence" in aborted.improvements


class TestTiming:
    """Average time modulation and rushed answers."""

    def test_rushed_answers_are_penalized(self, interview_scorer, make_session):
        analysis = interview_scorer.score(make_session(time_spent_per_question_seconds=[2.0] * 7))

        # 80 base - 15 brief - 20 rushed
        assert analysis.body_language_score == 45
        assert analysis.confidence_score == 50
        assert "Too many rushed answers - slow down and stay engaged on camera" in analysis.improvements

    def test_verbose_answers_lose_points(self, interview_scorer, make_session):
        analysis = interview_scorer.score(make_session(time_spent_per_question_seconds=[150.0] * 7))

        assert analysis.skills_score == 75

    def test_missing_timings_count_as_zero(self, interview_scorer, make_session):
        session = make_session(questions_answered=4, time_spent_per_question_seconds=[40.0, 40.0],
                               interview_completed=False)

        assert session.average_time_per_question == 20.0
        analysis = interview_scorer.score(session)
        # 25 base (4/7 answered) - 20 rushed, no timing zone applies at 20s
        assert analysis.body_language_score == 5

    def test_negative_timings_are_treated_as_zero(self, make_session):
        session = make_session(questions_answered=2, time_spent_per_question_seconds=[-5.0, 30.0])

        assert session.effective_timings() == [0.0, 30.0]

    def test_custom_policy_changes_rushed_penalty(self, make_session):
        scorer = InterviewScorer(policy=InterviewScoringPolicy(rushed_penalty=0))
        analysis = scorer.score(make_session(time_spent_per_question_seconds=[2.0] * 7))

        assert analysis.body_language_score == 65


class TestResponseContent:
    """Adjustments from supplied answer text."""

    def test_strong_answers_raise_skills(self, interview_scorer, make_session):
        analysis = interview_scorer.score(make_session(responses=[STRONG_ANSWER] * 7))

        assert analysis.skills_score == 100
        assert "Answers reference relevant Software Engineer skills and evidence" in analysis.strengths

    def test_blank_answers_lower_every_dimension(self, interview_scorer, make_session):
        analysis = interview_scorer.score(make_session(responses=[""] * 7))

        assert analysis.body_language_score == 75
        assert analysis.grammar_score == 75
        assert analysis.skills_score == 75

    def test_filler_heavy_answers_penalize_grammar(self, interview_scorer, make_session):
        analysis = interview_scorer.score(make_session(responses=[FILLER_ANSWER] * 7))

        # 90 - 10 fillers - 5 fragments
        assert analysis.grammar_score == 75
        assert "Reduce filler words such as 'um', 'basically' and 'you know'" in analysis.improvements
        assert "Finish answers with complete sentences" in analysis.improvements

    def test_agreement_errors_penalize_grammar(self, interview_scorer, make_session):
        clean = interview_scorer.score(make_session(responses=["They were happy with the result."] * 7))
        sloppy = interview_scorer.score(make_session(responses=["They was happy with the result."] * 7))

        assert clean.grammar_score == 90
        assert sloppy.grammar_score == 80
        assert "Watch subject-verb agreement (e.g. 'they were', not 'they was')" in sloppy.improvements

    def test_no_responses_means_no_content_adjustment(self, interview_scorer, make_session):
        with_none = interview_scorer.score(make_session(responses=None))
        with_empty_list = interview_scorer.score(make_session(responses=[]))

        assert with_none == with_empty_list
        assert with_none.skills_score == 90
