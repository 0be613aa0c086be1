"""CLI interface for the interview scoring engine."""

import random
import sys
import time
from pathlib import Path
from typing import List, Optional

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .models.interview import InterviewAnalysis, InterviewSessionMetrics
from .models.resume import ResumeAnalysis, ResumeInput
from .scorers.interview_scorer import summarize_scores
from .services.configuration_manager import ConfigurationManager
from .services.interview_session import WizardState
from .utils.exceptions import InterviewScoringError, ParsingError
from .utils.logging import get_logger, set_correlation_id, setup_logging

console = Console()
logger = get_logger("cli")

SKIP_COMMANDS = ("skip", "s")
QUIT_COMMANDS = ("quit", "q")


def _score_style(score: int) -> str:
    if score >= 75:
        return "green"
    if score >= 40:
        return "yellow"
    return "red"


def _bullets(items: List[str]) -> str:
    return "\n".join(f"- {escape(item)}" for item in items) or "-"


def _fail(message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")
    logger.error(message)
    sys.exit(1)


def _read_text(path: Optional[str]) -> Optional[str]:
    if path is None:
        return None
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ParsingError(f"Cannot read text file: {e}", file_path=path)


def _load_metrics(path: str) -> InterviewSessionMetrics:
    """Read session metrics from a YAML or JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ParsingError(f"Cannot read metrics file: {e}", file_path=path)

    if not isinstance(data, dict):
        raise ParsingError("Metrics file must contain a mapping of session fields", file_path=path)
    try:
        return InterviewSessionMetrics.model_validate(data)
    except ValidationError as e:
        raise ParsingError(f"Invalid session metrics: {e.error_count()} error(s)",
                           file_path=path, details={"errors": e.errors(include_url=False)})


def render_resume(analysis: ResumeAnalysis) -> None:
    style = _score_style(analysis.ats_score)
    console.print(Panel(
        escape(analysis.feedback),
        title=f"ATS Score: [{style}]{analysis.ats_score}%[/{style}]",
        border_style="blue",
    ))
    console.print(Panel(_bullets(analysis.strengths), title="Strengths", border_style="green"))
    console.print(Panel(_bullets(analysis.improvements), title="Improvements", border_style="yellow"))


def render_interview(analysis: InterviewAnalysis) -> None:
    table = Table(title="Interview Performance")
    table.add_column("Dimension")
    table.add_column("Score", justify="right")
    for label, score in summarize_scores(analysis):
        style = _score_style(score)
        table.add_row(label, f"[{style}]{score}%[/{style}]")
    overall_style = _score_style(analysis.overall_score)
    table.add_row("[bold]Overall[/bold]", f"[bold {overall_style}]{analysis.overall_score}%[/bold {overall_style}]")

    console.print(table)
    console.print(Panel(escape(analysis.feedback), title="Feedback", border_style="blue"))
    console.print(Panel(_bullets(analysis.strengths), title="Strengths", border_style="green"))
    console.print(Panel(_bullets(analysis.improvements), title="Improvements", border_style="yellow"))


@click.group()
@click.version_option(version="1.0.0")
@click.option("--config", "-c", type=click.Path(file_okay=False), default="config",
              show_default=True, help="Configuration directory")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, config: str, verbose: bool):
    """Interview scoring engine - ATS resume and mock interview feedback."""
    ctx.ensure_object(dict)
    setup_logging("DEBUG" if verbose else "ERROR")

    try:
        manager = ConfigurationManager(config).initialize()
    except InterviewScoringError as e:
        _fail(f"Failed to load configuration: {e}")

    logging_config = manager.get_logging_config()
    if verbose:
        logging_config["level"] = "DEBUG"
    setup_logging(**logging_config)

    ctx.obj["config_manager"] = manager
    set_correlation_id(f"cli-{ctx.invoked_subcommand or 'main'}-{int(time.time())}")
    logger.debug("CLI initialized", extra={"environment": manager.get_environment()})


@cli.command()
@click.pass_context
def roles(ctx: click.Context):
    """List the supported job roles."""
    manager: ConfigurationManager = ctx.obj["config_manager"]
    catalog = manager.get_role_catalog()
    bank = manager.get_question_bank()

    table = Table(title="Supported Roles")
    table.add_column("Role", style="bold")
    table.add_column("Core keywords")
    table.add_column("Preferred keywords")
    table.add_column("Min size", justify="right")
    table.add_column("Questions", justify="right")
    for name in catalog.supported_roles():
        profile = catalog.get_profile(name)
        table.add_row(
            escape(name),
            ", ".join(profile.required_keywords),
            ", ".join(profile.preferred_keywords),
            f"{profile.min_expected_size_bytes // 1000} KB",
            str(len(bank.questions_for(name))),
        )
    console.print(table)


@cli.command("score-resume")
@click.argument("resume", type=click.Path(exists=True, dir_okay=False), required=False)
@click.option("--role", "-r", default="", help="Target job role")
@click.option("--text", "-t", "text_file", type=click.Path(exists=True, dir_okay=False),
              help="Plain-text file with the resume's extracted content")
@click.option("--json", "as_json", is_flag=True, help="Print the analysis as JSON")
@click.pass_context
def score_resume(ctx: click.Context, resume: Optional[str], role: str, text_file: Optional[str], as_json: bool):
    """Score a resume file's ATS compatibility for a role."""
    manager: ConfigurationManager = ctx.obj["config_manager"]
    try:
        resume_input = None
        if resume is not None:
            resume_input = ResumeInput.from_path(resume, role, extracted_text=_read_text(text_file))
        analysis = manager.create_resume_scorer().score(resume_input)
    except InterviewScoringError as e:
        _fail(f"Failed to score resume: {e}")

    if as_json:
        click.echo(analysis.to_json())
    else:
        render_resume(analysis)


@cli.command("score-interview")
@click.argument("metrics_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the analysis as JSON")
@click.pass_context
def score_interview(ctx: click.Context, metrics_file: str, as_json: bool):
    """Score interview session metrics from a YAML or JSON file."""
    manager: ConfigurationManager = ctx.obj["config_manager"]
    try:
        session = _load_metrics(metrics_file)
    except InterviewScoringError as e:
        _fail(f"Failed to score interview: {e}")

    analysis = manager.create_interview_scorer().score(session)
    if as_json:
        click.echo(analysis.to_json())
    else:
        render_interview(analysis)


@cli.command()
@click.option("--role", "-r", help="Target job role (prompted when omitted)")
@click.option("--resume", "resume_path", type=click.Path(exists=True, dir_okay=False),
              help="Resume file to score alongside the interview")
@click.option("--camera/--no-camera", default=True, help="Camera enabled during the interview")
@click.option("--mic/--no-mic", default=True, help="Microphone enabled during the interview")
@click.option("--seed", type=int, help="Seed for repeatable question selection")
@click.pass_context
def practice(ctx: click.Context, role: Optional[str], resume_path: Optional[str],
             camera: bool, mic: bool, seed: Optional[int]):
    """Run an interactive, timed mock interview in the terminal.

    Type your answer to each question. Enter 'skip' to skip a question or
    'quit' to end the interview early.
    """
    manager: ConfigurationManager = ctx.obj["config_manager"]
    catalog = manager.get_role_catalog()
    session_config = manager.get_config().session

    if not role:
        role = click.prompt("Target role", type=click.Choice(catalog.supported_roles(), case_sensitive=False))

    questions = manager.get_question_bank().select(
        role,
        personal_count=session_config.personal_questions,
        role_count=session_config.role_questions,
        rng=random.Random(seed),
    )

    try:
        state = WizardState().begin()
        resume_input = ResumeInput.from_path(resume_path, role) if resume_path else None
        state = state.upload_resume(resume_input).select_role(role)
        if camera:
            state = state.toggle_camera()
        if mic:
            state = state.toggle_microphone()
        state = state.start_interview(questions)
    except InterviewScoringError as e:
        _fail(f"Failed to start practice session: {e}")

    console.print(Panel(
        f"Role: {escape(state.selected_role)}\nQuestions: {len(state.questions)}\n"
        f"Camera: {'on' if state.camera_on else 'off'} | Microphone: {'on' if state.microphone_on else 'off'}",
        title="Mock Interview Session",
        border_style="blue",
    ))

    state = _interview_loop(state, session_config.answer_time_limit_seconds)
    state = state.finish()

    if state.resume is not None:
        render_resume(manager.create_resume_scorer().score(state.resume))
    render_interview(manager.create_interview_scorer().score(state.to_metrics()))
    state = state.show_results()
    logger.debug("Practice session finished", extra={"answered": state.questions_answered})


def _interview_loop(state: WizardState, time_limit: int) -> WizardState:
    """Ask every question, timing each answer."""
    while state.current_question is not None:
        number = state.current_index + 1
        console.print(Panel(
            escape(state.current_question),
            title=f"Question {number}/{len(state.questions)}",
            border_style="green",
        ))

        started = time.perf_counter()
        answer = click.prompt("Your answer", default="", show_default=False).strip()
        elapsed = min(time.perf_counter() - started, time_limit)

        if answer.lower() in QUIT_COMMANDS:
            console.print("[yellow]Ending the interview early.[/yellow]")
            break
        if not answer or answer.lower() in SKIP_COMMANDS:
            console.print("[yellow]Question skipped.[/yellow]")
            state = state.skip_question()
            continue

        state = state.record_answer(elapsed, answer)
        logger.debug(f"Answered question {number} in {elapsed:.1f}s")
    return state


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interview interrupted by user.[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
