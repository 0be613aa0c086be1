import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from interview_scoring.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def config_dir(tmp_path, isolated_env):
    path = tmp_path / "config"
    path.mkdir()
    return str(path)


def _invoke(runner, config_dir, *args, **kwargs):
    return runner.invoke(cli, ["--config", config_dir, *args], **kwargs)


class TestCommands:
    """CLI commands driving the scorers."""

    def test_roles_lists_builtin_roles(self, runner, config_dir):
        result = _invoke(runner, config_dir, "roles")

        assert result.exit_code == 0
        assert "DevOps" in result.output
        assert "Sales" in result.output

    def test_score_resume_json(self, runner, config_dir, tmp_path, strong_resume_text):
        resume = tmp_path / "resume_2024.pdf"
        resume.write_bytes(b"0" * 200_000)
        text = tmp_path / "resume.txt"
        text.write_text(strong_resume_text)

        result = _invoke(runner, config_dir, "score-resume", str(resume),
                         "--role", "Software Engineer", "--text", str(text), "--json")

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["atsScore"] == 88
        assert "PDF format - excellent ATS compatibility" in payload["strengths"]

    def test_score_resume_without_file(self, runner, config_dir):
        result = _invoke(runner, config_dir, "score-resume", "--json")

        assert result.exit_code == 0
        assert json.loads(result.output)["atsScore"] == 0

    def test_configured_log_level_is_applied(self, runner, config_dir):
        Path(config_dir, "scoring.yaml").write_text("logging:\n  level: INFO\n")

        result = _invoke(runner, config_dir, "score-resume")

        assert result.exit_code == 0
        assert "Operation: score_resume" in result.output

    def test_default_log_level_keeps_output_quiet(self, runner, config_dir):
        result = _invoke(runner, config_dir, "score-resume")

        assert result.exit_code == 0
        assert "Operation:" not in result.output

    def test_verbose_forces_debug_logging(self, runner, config_dir):
        result = runner.invoke(cli, ["--config", config_dir, "--verbose", "score-resume"])

        assert result.exit_code == 0
        assert "Operation: score_resume" in result.output

    def test_score_resume_table_output(self, runner, config_dir, tmp_path):
        resume = tmp_path / "resume.docx"
        resume.write_bytes(b"0" * 50_000)

        result = _invoke(runner, config_dir, "score-resume", str(resume), "--role", "Data Scientist")

        assert result.exit_code == 0
        assert "Strengths" in result.output
        assert "Improvements" in result.output

    def test_score_interview_json(self, runner, config_dir, tmp_path):
        metrics = tmp_path / "session.yaml"
        metrics.write_text(
            "questionsAnswered: 7\n"
            "totalQuestions: 7\n"
            "timeSpentPerQuestionSeconds: [35, 35, 35, 35, 35, 35, 35]\n"
            "cameraUsed: true\n"
            "microphoneUsed: true\n"
            "interviewCompleted: true\n"
            "selectedRole: Software Engineer\n"
        )

        result = _invoke(runner, config_dir, "score-interview", str(metrics), "--json")

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["overallScore"] == 91
        assert payload["confidenceScore"] == 95

    def test_score_interview_accepts_json_files(self, runner, config_dir, tmp_path):
        metrics = tmp_path / "session.json"
        metrics.write_text(json.dumps({"questions_answered": 0, "total_questions": 7}))

        result = _invoke(runner, config_dir, "score-interview", str(metrics))

        assert result.exit_code == 0
        assert "Overall" in result.output

    def test_score_interview_rejects_bad_metrics(self, runner, config_dir, tmp_path):
        metrics = tmp_path / "session.yaml"
        metrics.write_text("- not\n- a mapping\n")

        result = _invoke(runner, config_dir, "score-interview", str(metrics))

        assert result.exit_code == 1
        assert "PARSING_ERROR" in result.output

    def test_score_interview_rejects_invalid_fields(self, runner, config_dir, tmp_path):
        metrics = tmp_path / "session.yaml"
        metrics.write_text("questionsAnswered: -3\ntotalQuestions: 7\n")

        result = _invoke(runner, config_dir, "score-interview", str(metrics))

        assert result.exit_code == 1

    def test_invalid_configuration_exits(self, runner, config_dir):
        with open(f"{config_dir}/scoring.yaml", "w") as f:
            f.write("interview:\n  rushed_fraction: 2.0\n")

        result = _invoke(runner, config_dir, "roles")

        assert result.exit_code == 1
        assert "CONFIG_ERROR" in result.output


class TestPractice:
    """Interactive practice sessions."""

    def test_full_practice_session(self, runner, config_dir):
        answers = "\n".join([
            "I led a team of five engineers.",
            "skip",
            "I built a react dashboard used by 40% of customers.",
            "I improved the api response time.",
            "I delivered the database migration on time.",
        ]) + "\n"

        result = _invoke(runner, config_dir, "practice", "--role", "Software Engineer",
                         "--seed", "1", input=answers)

        assert result.exit_code == 0
        assert "Question 1/5" in result.output
        assert "Question skipped" in result.output
        assert "Overall" in result.output

    def test_quit_ends_interview_early(self, runner, config_dir):
        result = _invoke(runner, config_dir, "practice", "--role", "UX Designer", "--no-camera",
                         "--seed", "2", input="quit\n")

        assert result.exit_code == 0
        assert "Ending the interview early" in result.output
        assert "Overall" in result.output

    def test_practice_with_resume(self, runner, config_dir, tmp_path):
        resume = tmp_path / "resume.pdf"
        resume.write_bytes(b"0" * 150_000)

        result = _invoke(runner, config_dir, "practice", "--role", "Data Scientist", "--resume", str(resume),
                         "--no-mic", "--seed", "3", input="quit\n")

        assert result.exit_code == 0
        assert "ATS Score" in result.output

    def test_prompts_for_role(self, runner, config_dir):
        result = _invoke(runner, config_dir, "practice", "--seed", "4", input="business analyst\nquit\n")

        assert result.exit_code == 0
        assert "Business Analyst" in result.output
