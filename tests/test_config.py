import json
import os
from pathlib import Path

import pytest

from changed_files.config import load_env_file, load_inputs, load_runner_context
from changed_files.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "INPUT_TOKEN",
        "INPUT_FORMAT",
        "INPUT_EXTENSIONS",
        "GITHUB_EVENT_NAME",
        "GITHUB_SHA",
        "GITHUB_EVENT_PATH",
        "GITHUB_REPOSITORY",
        "GITHUB_SERVER_URL",
        "GITHUB_API_URL",
    ):
        monkeypatch.delenv(key, raising=False)


def test_token_is_required():
    with pytest.raises(ConfigurationError, match="token"):
        load_inputs()


def test_inputs_from_env(monkeypatch):
    monkeypatch.setenv("INPUT_TOKEN", "abc")
    monkeypatch.setenv("INPUT_FORMAT", "json")
    monkeypatch.setenv("INPUT_EXTENSIONS", ".py .md")

    inputs = load_inputs()
    assert inputs.token == "abc"
    assert inputs.format == "json"
    assert inputs.extensions == [".py", ".md"]


def test_inputs_defaults(monkeypatch):
    monkeypatch.setenv("INPUT_TOKEN", "abc")
    inputs = load_inputs()
    assert inputs.format == "space-delimited"
    assert inputs.extensions == [""]


def test_explicit_values_beat_env_and_config(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("INPUT_TOKEN", "abc")
    monkeypatch.setenv("INPUT_FORMAT", "json")
    cfg = tmp_path / "changed-files.yml"
    cfg.write_text("format: csv\nextensions: ['.toml']\n")

    inputs = load_inputs(fmt="space-delimited", config_path=str(cfg))
    assert inputs.format == "space-delimited"
    assert inputs.extensions == [".toml"]


def test_config_file_fills_gaps(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("INPUT_TOKEN", "abc")
    cfg = tmp_path / "changed-files.yml"
    cfg.write_text("format: csv\nextensions: .py .cfg\n")

    inputs = load_inputs(config_path=str(cfg))
    assert inputs.format == "csv"
    assert inputs.extensions == [".py", ".cfg"]


def test_explicit_empty_extensions_keep_all_files(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("INPUT_TOKEN", "abc")
    monkeypatch.setenv("INPUT_EXTENSIONS", ".py")
    cfg = tmp_path / "changed-files.yml"
    cfg.write_text("extensions: ['.toml']\n")

    inputs = load_inputs(extensions="", config_path=str(cfg))
    assert inputs.extensions == [""]


def test_missing_config_file(monkeypatch):
    monkeypatch.setenv("INPUT_TOKEN", "abc")
    with pytest.raises(ConfigurationError):
        load_inputs(config_path="does-not-exist.yml")


def test_runner_context_from_env(monkeypatch, tmp_path: Path):
    event = tmp_path / "event.json"
    event.write_text(json.dumps({"before": "aaa"}))
    monkeypatch.setenv("GITHUB_EVENT_NAME", "push")
    monkeypatch.setenv("GITHUB_SHA", "bbb")
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event))
    monkeypatch.setenv("GITHUB_REPOSITORY", "octo/hello")

    ctx = load_runner_context()
    assert ctx.event_name == "push"
    assert ctx.sha == "bbb"
    assert ctx.payload == {"before": "aaa"}
    assert (ctx.owner, ctx.repo) == ("octo", "hello")
    assert ctx.server_url == "https://github.com"
    assert ctx.api_url == "https://api.github.com"


def test_runner_context_bad_repository():
    with pytest.raises(ConfigurationError):
        load_runner_context(repository="no-slash")


def test_runner_context_bad_payload(tmp_path: Path):
    event = tmp_path / "event.json"
    event.write_text("{not json")
    with pytest.raises(ConfigurationError):
        load_runner_context(repository="octo/hello", event_path=str(event))


def test_load_env_file_does_not_override(monkeypatch, tmp_path: Path):
    environ = {"INPUT_FORMAT": "csv"}
    monkeypatch.setattr(os, "environ", environ)
    env = tmp_path / ".env"
    env.write_text("# comment\nINPUT_FORMAT=json\nINPUT_TOKEN='abc'\n")

    load_env_file(env)

    assert environ["INPUT_FORMAT"] == "csv"
    assert environ["INPUT_TOKEN"] == "abc"
