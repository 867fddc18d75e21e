"""
One-line reports for jobs and nodes, plus the console log printer.

report_job_status and report_node_status share the fan-out signature
``(api, item) -> Outcome``.  The job reporter absorbs its own failures into
an Unknown marker; the node reporter lets errors escape so the fan-out can
record them against that node only.
"""

from __future__ import annotations

import logging
from typing import Callable

import click

from jcli.models import Job, Node, Outcome, StatusMarker
from jcli.salt_parser import render_console

logger = logging.getLogger(__name__)

_RESULT_MARKERS = {
    "SUCCESS": StatusMarker.OK,
    "FAILURE": StatusMarker.FAILED,
}


def classify_result(result: str) -> StatusMarker:
    return _RESULT_MARKERS.get(result, StatusMarker.UNKNOWN)


def format_marker(marker: StatusMarker) -> str:
    return click.style(marker.glyph, fg=marker.color)


def format_status_line(result: str, name: str, url: str) -> str:
    return f"{format_marker(classify_result(result))} {name} ({url})"


def report_job_status(api, job: Job) -> Outcome:
    try:
        # Existence check: a missing job fails here rather than as a
        # lastBuild 404 that reads like "never built".
        api.get_job(job.name)
        result = api.get_last_build(job.name).result
    except Exception as exc:
        logger.debug("Status lookup failed for %s: %s", job.name, exc)
        result = f"UNKNOWN ({exc})"
        return Outcome(
            name=job.name,
            line=f"{format_status_line(result, job.name, job.url)}: {result}",
            error=str(exc),
        )

    return Outcome(name=job.name, line=format_status_line(result, job.name, job.url))


def report_node_status(api, node: Node) -> Outcome:
    polled = api.poll_node(node.name)
    state = "Online" if polled.online else "Offline"
    return Outcome(name=node.name, line=f"{node.name}: {state}")


def fetch_logs(
    api,
    job_name: str,
    salt: bool = False,
    echo: Callable[..., None] = click.echo,
) -> None:
    """Print the status, result code and console output of a job's last build.

    Unlike the fan-out reporters, a failure to resolve the job or its last
    build propagates to the caller.
    """
    # Existence check only; the build carries the URL printed below.
    api.get_job(job_name)
    build = api.get_last_build(job_name)
    build_url = build.url.rstrip("/")

    echo(format_status_line(build.result, job_name, build.url))
    echo(f"Jenkins result code: {build.result}")

    console = api.get_console_text(job_name, build.number)
    # Remote text is written as-is; color=True stops click from stripping
    # ANSI sequences that belong to the log.
    echo(render_console(console, salt), nl=False, color=True)
    echo(f"{build_url}/consoleText")
