from __future__ import annotations

import re
import shutil
import subprocess

from changed_files.errors import ExecutionError, ParseError
from changed_files.models import ChangeRecord, ChangeStatus


DEFAULT_BRANCH_RE = re.compile(r"refs/heads/([^/]+)\s+HEAD$")

STATUS_MAP = {
    "A": ChangeStatus.ADDED.value,
    "M": ChangeStatus.MODIFIED.value,
    "D": ChangeStatus.REMOVED.value,
    "R": ChangeStatus.RENAMED.value,
    "?": ChangeStatus.ADDED.value,
}


def execute(args: list[str]) -> str:
    """Run git with ``args`` and return its stdout untouched."""
    executable = shutil.which("git")
    if not executable:
        raise ExecutionError("git is not installed or not available in PATH")

    # only the subcommand is named in errors; ls-remote args carry a token
    subcommand = args[0] if args else ""
    try:
        proc = subprocess.run(
            [executable, *args],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise ExecutionError(f"Unable to run git {subcommand}: {exc}") from exc

    if proc.returncode != 0:
        stderr = (proc.stderr or "").strip()
        raise ExecutionError(
            f"git {subcommand} failed with exit code {proc.returncode}. {stderr}".rstrip()
        )

    return proc.stdout or ""


def get_default_branch(repository_url: str) -> str:
    output = execute(["ls-remote", "--quiet", "--exit-code", "--symref", repository_url, "HEAD"])

    for raw in output.strip().split("\n"):
        line = raw.strip()
        if line.startswith("ref:") or line.endswith("HEAD"):
            m = DEFAULT_BRANCH_RE.search(line)
            if m:
                return m.group(1).strip()

    raise ParseError("Unexpected output when retrieving default branch")


def get_diff(base: str, head: str, *args: str) -> str:
    return execute(["diff", *args, base, head])


def get_status(*args: str) -> str:
    return execute(["status", *args])


def map_file_status(code: str) -> str:
    return STATUS_MAP.get(code, ChangeStatus.CHANGED.value)


def parse_name_status(text: str) -> list[ChangeRecord]:
    """Parse ``git diff --name-status`` / ``git status --porcelain`` lines.

    Renames carry both paths, tab separated in diff output and joined by
    ``->`` in porcelain status; the record takes the path after the rename.
    """
    out: list[ChangeRecord] = []
    for raw in text.split("\n"):
        line = raw.strip()
        if not line:
            continue
        parts = line.split()
        short_status = parts[0]
        before = parts[1] if len(parts) > 1 else ""
        if len(parts) > 3 and parts[2] == "->":
            after = parts[3]
        else:
            after = parts[2] if len(parts) > 2 else None
        out.append(ChangeRecord(name=after or before, status=map_file_status(short_status[:1])))
    return out


def get_changed_files_from_git(base: str, head: str) -> list[ChangeRecord]:
    diff = get_diff(base, head, "--name-status")
    # untracked files only show up in status
    status = get_status("--porcelain")
    return parse_name_status(diff) + parse_name_status(status)
