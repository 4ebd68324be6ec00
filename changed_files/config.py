from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import json
import os
import yaml

from changed_files.errors import ConfigurationError
from changed_files.formatters import DEFAULT_FORMAT, parse_extensions
from changed_files.github import DEFAULT_API_URL


DEFAULT_SERVER_URL = "https://github.com"


@dataclass
class ActionInputs:
    token: str = field(repr=False)
    format: str = DEFAULT_FORMAT
    extensions: list[str] = field(default_factory=lambda: [""])


@dataclass
class RunnerContext:
    event_name: str
    sha: str
    payload: dict[str, Any]
    owner: str
    repo: str
    server_url: str = DEFAULT_SERVER_URL
    api_url: str = DEFAULT_API_URL


def load_env_file(path: Path) -> None:
    """Load simple KEY=VALUE pairs from a .env file without overriding existing env."""
    if not path.exists() or not path.is_file():
        return

    for raw in path.read_text(errors="ignore").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _input(name: str) -> str:
    # the runner exposes `with:` inputs as INPUT_<NAME>
    return (os.getenv(f"INPUT_{name.upper()}") or "").strip()


def _load_config_file(path: str | None) -> dict[str, Any]:
    if not path:
        return {}
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    data = yaml.safe_load(config_path.read_text()) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {path}")
    return data


def load_inputs(
    token: str | None = None,
    fmt: str | None = None,
    extensions: str | None = None,
    config_path: str | None = None,
) -> ActionInputs:
    """Resolve inputs: explicit value, then INPUT_* env, then config file, then default."""
    file_cfg = _load_config_file(config_path)

    token = token or _input("token")
    if not token:
        raise ConfigurationError("Input required and not supplied: token")

    fmt = fmt or _input("format") or str(file_cfg.get("format") or "") or DEFAULT_FORMAT

    if extensions is not None:
        raw_ext = extensions
    else:
        raw_ext = _input("extensions")
        if not raw_ext:
            cfg_ext = file_cfg.get("extensions") or ""
            raw_ext = " ".join(str(x) for x in cfg_ext) if isinstance(cfg_ext, list) else str(cfg_ext)

    return ActionInputs(token=token, format=fmt, extensions=parse_extensions(raw_ext))


def _load_payload(event_path: str | None) -> dict[str, Any]:
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except ValueError as exc:
        raise ConfigurationError(f"Invalid event payload in {event_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Event payload in {event_path} is not a JSON object")
    return data


def load_runner_context(
    event_name: str | None = None,
    sha: str | None = None,
    event_path: str | None = None,
    repository: str | None = None,
    server_url: str | None = None,
    api_url: str | None = None,
) -> RunnerContext:
    repository = repository or os.getenv("GITHUB_REPOSITORY", "")
    owner, sep, repo = repository.partition("/")
    if not sep or not owner or not repo:
        raise ConfigurationError(
            f"Expected repository in the form 'owner/repo', got '{repository}'"
        )

    return RunnerContext(
        event_name=event_name or os.getenv("GITHUB_EVENT_NAME", ""),
        sha=sha or os.getenv("GITHUB_SHA", ""),
        payload=_load_payload(event_path or os.getenv("GITHUB_EVENT_PATH")),
        owner=owner,
        repo=repo,
        server_url=server_url or os.getenv("GITHUB_SERVER_URL") or DEFAULT_SERVER_URL,
        api_url=api_url or os.getenv("GITHUB_API_URL") or DEFAULT_API_URL,
    )
