from __future__ import annotations

import json
import os

from changed_files.errors import FormatValidationError, UnsupportedStatusError
from changed_files.models import ChangedFiles, ChangeRecord, ChangeStatus
from changed_files.reporting import Reporter


FORMATS = ("space-delimited", "csv", "json")
DEFAULT_FORMAT = "space-delimited"

OUTPUT_LABELS = {
    "all": "All",
    "added": "Added",
    "modified": "Modified",
    "removed": "Removed",
    "renamed": "Renamed",
    "added_modified": "Added or modified",
}

SPACE_IN_FILENAME = (
    "One of your files includes a space. Consider using a different output format "
    "or removing spaces from your filenames."
)


def validate_format(fmt: str) -> str:
    if fmt not in FORMATS:
        raise FormatValidationError(
            f"Format must be one of 'space-delimited', 'csv', or 'json', got '{fmt}'."
        )
    return fmt


def parse_extensions(raw: str | None) -> list[str]:
    return [ext.strip() for ext in (raw or "").split(" ")]


def filter_by_extensions(files: list[ChangeRecord], extensions: list[str]) -> list[ChangeRecord]:
    if "" in extensions:
        return list(files)
    return [f for f in files if os.path.splitext(f.name)[1] in extensions]


def categorize(files: list[ChangeRecord], fmt: str, reporter: Reporter) -> ChangedFiles:
    """Sort files into output buckets; bad entries are reported, not raised."""
    changed = ChangedFiles()
    for f in files:
        if fmt == "space-delimited" and " " in f.name:
            reporter.fail(str(FormatValidationError(SPACE_IN_FILENAME)))

        changed.all.append(f.name)
        if f.status == ChangeStatus.ADDED:
            changed.added.append(f.name)
            changed.added_modified.append(f.name)
        elif f.status == ChangeStatus.MODIFIED:
            changed.modified.append(f.name)
            changed.added_modified.append(f.name)
        elif f.status == ChangeStatus.REMOVED:
            changed.removed.append(f.name)
        elif f.status == ChangeStatus.RENAMED:
            changed.renamed.append(f.name)
        else:
            err = UnsupportedStatusError(
                f"One of your files includes an unsupported file status '{f.status}', "
                "expected 'added', 'modified', 'removed', or 'renamed'."
            )
            reporter.fail(str(err))
    return changed


def format_list(names: list[str], fmt: str) -> str:
    if fmt == "space-delimited":
        return " ".join(names)
    if fmt == "csv":
        return ",".join(names)
    if fmt == "json":
        return json.dumps(names, separators=(",", ":"), ensure_ascii=False)
    raise FormatValidationError(f"Unknown format '{fmt}'")


def build_outputs(changed: ChangedFiles, fmt: str) -> dict[str, str]:
    out = {key: format_list(getattr(changed, key), fmt) for key in OUTPUT_LABELS}
    # backwards-compatible alias
    out["deleted"] = out["removed"]
    return out
