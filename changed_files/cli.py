from __future__ import annotations

from pathlib import Path
import json
import typer

from changed_files.config import (
    ActionInputs,
    RunnerContext,
    load_env_file,
    load_inputs,
    load_runner_context,
)
from changed_files.errors import ChangedFilesError, FormatValidationError
from changed_files.events import resolve_changed_files
from changed_files.formatters import (
    OUTPUT_LABELS,
    build_outputs,
    categorize,
    filter_by_extensions,
    validate_format,
)
from changed_files.github import GitHubClient
from changed_files.models import EventContext
from changed_files.reporting import ActionsReporter, Reporter

app = typer.Typer(help="changed-files: list files changed by a pull request, push or manual dispatch")


@app.callback()
def main() -> None:
    """changed-files command group."""


def run_action(inputs: ActionInputs, runner: RunnerContext, reporter: Reporter) -> dict[str, str] | None:
    """Resolve, filter, categorize and publish the changed files of one event.

    Returns the output values, or None when the format is invalid and
    nothing was published.
    """
    try:
        validate_format(inputs.format)
    except FormatValidationError as exc:
        reporter.fail(str(exc))
        return None

    reporter.debug(f"payload: {', '.join(runner.payload.keys())}")

    context = EventContext(
        sha=runner.sha,
        event_name=runner.event_name,
        payload=runner.payload,
        owner=runner.owner,
        repo=runner.repo,
        client=GitHubClient(inputs.token, api_url=runner.api_url),
        server_url=runner.server_url,
        token=inputs.token,
    )
    changed_files = resolve_changed_files(context, reporter)

    files = filter_by_extensions(changed_files, inputs.extensions)
    reporter.debug(f"files: {json.dumps([f.to_dict() for f in files])}")

    changed = categorize(files, inputs.format, reporter)
    outputs = build_outputs(changed, inputs.format)

    for key, label in OUTPUT_LABELS.items():
        reporter.info(f"{label}: {outputs[key]}")
    for name, value in outputs.items():
        reporter.set_output(name, value)
    return outputs


@app.command()
def run(
    token: str | None = typer.Option(None, help="GitHub token (defaults to INPUT_TOKEN)"),
    fmt: str | None = typer.Option(
        None, "--format", help="Output format: space-delimited|csv|json (defaults to INPUT_FORMAT)"
    ),
    extensions: str | None = typer.Option(
        None, help="Space-separated extensions to keep, e.g. '.py .md' (defaults to INPUT_EXTENSIONS)"
    ),
    config: str | None = typer.Option(None, help="Optional YAML file with format/extensions defaults"),
    event_name: str | None = typer.Option(None, help="Event name (defaults to GITHUB_EVENT_NAME)"),
    sha: str | None = typer.Option(None, help="Head commit SHA (defaults to GITHUB_SHA)"),
    event_path: str | None = typer.Option(None, help="Webhook payload JSON path (defaults to GITHUB_EVENT_PATH)"),
    repository: str | None = typer.Option(None, help="owner/repo (defaults to GITHUB_REPOSITORY)"),
    server_url: str | None = typer.Option(None, help="Server URL (defaults to GITHUB_SERVER_URL)"),
    api_url: str | None = typer.Option(None, help="REST API URL (defaults to GITHUB_API_URL)"),
    verbose: bool = typer.Option(False, "--verbose", help="Print debug messages"),
) -> None:
    load_env_file(Path.cwd() / ".env")
    reporter = ActionsReporter.from_env(verbose=verbose)

    try:
        inputs = load_inputs(token=token, fmt=fmt, extensions=extensions, config_path=config)
        runner = load_runner_context(
            event_name=event_name,
            sha=sha,
            event_path=event_path,
            repository=repository,
            server_url=server_url,
            api_url=api_url,
        )
        run_action(inputs, runner, reporter)
    except ChangedFilesError as exc:
        reporter.fail(str(exc))
    except Exception as exc:
        reporter.fail(f"{type(exc).__name__}: {exc}")

    if reporter.failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
