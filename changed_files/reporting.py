from __future__ import annotations

import os
import uuid
from dataclasses import dataclass, field
from pathlib import Path

import typer


@dataclass
class Reporter:
    """Collects run-level log lines, outputs and failures in memory.

    Handlers receive a reporter instead of writing to stdout directly so a run
    can be inspected in tests without touching the process environment.
    """

    messages: list[tuple[str, str]] = field(default_factory=list)
    outputs: dict[str, str] = field(default_factory=dict)
    failures: list[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    def debug(self, message: str) -> None:
        self.messages.append(("debug", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def fail(self, message: str) -> None:
        self.messages.append(("error", message))
        self.failures.append(message)

    def set_output(self, name: str, value: str) -> None:
        self.outputs[name] = value

    def lines(self, level: str) -> list[str]:
        return [msg for lvl, msg in self.messages if lvl == level]


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


@dataclass
class ActionsReporter(Reporter):
    """Reporter that also speaks the GitHub Actions workflow command protocol."""

    verbose: bool = False
    output_path: Path | None = None
    in_actions: bool = False

    @classmethod
    def from_env(cls, verbose: bool = False) -> "ActionsReporter":
        output_file = os.getenv("GITHUB_OUTPUT")
        return cls(
            verbose=verbose or os.getenv("RUNNER_DEBUG") == "1",
            output_path=Path(output_file) if output_file else None,
            in_actions=os.getenv("GITHUB_ACTIONS") == "true",
        )

    def debug(self, message: str) -> None:
        super().debug(message)
        if self.verbose:
            typer.echo(f"::debug::{_escape_data(message)}")

    def info(self, message: str) -> None:
        super().info(message)
        typer.echo(message)

    def warning(self, message: str) -> None:
        super().warning(message)
        if self.in_actions:
            typer.echo(f"::warning::{_escape_data(message)}")
        else:
            typer.secho(f"warning: {message}", fg=typer.colors.YELLOW, err=True)

    def fail(self, message: str) -> None:
        super().fail(message)
        if self.in_actions:
            typer.echo(f"::error::{_escape_data(message)}")
        else:
            typer.secho(f"error: {message}", fg=typer.colors.RED, err=True)

    def set_output(self, name: str, value: str) -> None:
        super().set_output(name, value)
        if self.output_path is None:
            return
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            entry = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
        else:
            entry = f"{name}={value}\n"
        with self.output_path.open("a", encoding="utf-8") as fh:
            fh.write(entry)
