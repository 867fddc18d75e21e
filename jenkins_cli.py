"""
jenkins-cli: a terminal view of a Jenkins server.

Commands:  status, logs, queue, nodes, open.
Config:    JENKINS_URL, JENKINS_USER, JENKINS_TOKEN (or JENKINS_PW), read from
           the environment or a .env file.
Logs:      All application logs go to stderr; stdout carries command output only.
"""

import json
import logging
import sys
import webbrowser
from dataclasses import dataclass
from functools import partial, update_wrapper

import click
import requests

from jcli import fanout, matcher, reporters
from jcli.config import Config
from jcli.jenkins_api import JenkinsAPI

logger = logging.getLogger("jenkins-cli")

MAX_OPEN_JOBS = 3


@dataclass
class Options:
    verbose: bool = False
    salt: bool = False


@dataclass
class Session:
    api: JenkinsAPI
    verbose: bool = False
    salt: bool = False


def describe_error(exc: Exception) -> str:
    """Convert common exceptions into readable one-line reasons."""
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        status = exc.response.status_code
        if status == 401:
            return "Authentication failed (401). Check JENKINS_USER and JENKINS_TOKEN."
        if status == 403:
            return "Access denied (403). The user lacks permission for this resource."
        if status == 404:
            return "Not found (404). Verify the job or node name."
        return f"Jenkins API error {status}: {exc.response.text[:300]}"
    return str(exc) or exc.__class__.__name__


def _fail(prefix: str, exc: Exception) -> click.ClickException:
    return click.ClickException(f"{prefix}: {describe_error(exc)}")


def open_session(options: Options) -> Session:
    """Load the config and verify the credentials.

    Runs once the subcommand's arguments have parsed, so --help and usage
    errors never need a configured, reachable server.
    """
    try:
        config = Config.from_env()
    except EnvironmentError as exc:
        raise click.ClickException(str(exc))

    logging.basicConfig(
        stream=sys.stderr,
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    api = JenkinsAPI(config)
    try:
        api.connect()
    except Exception as exc:
        raise _fail("Cannot authenticate", exc)

    return Session(api=api, verbose=options.verbose, salt=options.salt)


def pass_session(f):
    @click.pass_context
    def new_func(ctx, *args, **kwargs):
        session = open_session(ctx.find_object(Options))
        return ctx.invoke(f, session, *args, **kwargs)
    return update_wrapper(new_func, f)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose mode. Print full job output.")
@click.option("--salt", is_flag=True, help="Show only failed Salt states in job logs.")
@click.pass_context
def cli(ctx, verbose, salt):
    """Inspect jobs, builds, the queue and nodes of a Jenkins server."""
    ctx.obj = Options(verbose=verbose, salt=salt)


@cli.command()
@click.argument("regex", default=matcher.MATCH_ALL)
@pass_session
def status(session, regex):
    """Show the status of all matching jobs."""
    try:
        jobs = matcher.find_matching_jobs(session.api, regex)
    except Exception as exc:
        raise _fail("Cannot execute command", exc)

    logger.debug("%d jobs match %r", len(jobs), regex)
    fanout.fan_out(jobs, partial(reporters.report_job_status, session.api))


@cli.command()
@click.argument("job")
@pass_session
def logs(session, job):
    """Show the logs of a job."""
    try:
        reporters.fetch_logs(session.api, job, salt=session.salt)
    except Exception as exc:
        raise _fail("Cannot execute command", exc)


@cli.command()
@click.argument("regex", default=matcher.MATCH_ALL)
@pass_session
def queue(session, regex):
    """Show the build queue."""
    # regex, --verbose and --salt are accepted for symmetry with the other
    # commands but do not change the output.
    try:
        data = session.api.get_queue()
    except Exception as exc:
        raise _fail("Cannot execute command", exc)
    click.echo(json.dumps(data, indent=2))


@cli.command()
@pass_session
def nodes(session):
    """Show the status of all Jenkins nodes."""
    try:
        all_nodes = session.api.get_all_nodes()
    except Exception as exc:
        raise _fail("Cannot execute command", exc)

    fanout.fan_out(all_nodes, partial(reporters.report_node_status, session.api))


@cli.command("open")
@click.argument("regex", default=matcher.MATCH_ALL)
@pass_session
def open_jobs(session, regex):
    """Open matching jobs in the browser (at most three)."""
    try:
        jobs = matcher.find_matching_jobs(session.api, regex)
    except Exception as exc:
        raise _fail("Cannot execute command", exc)

    if len(jobs) > MAX_OPEN_JOBS:
        raise click.ClickException(
            f"{len(jobs)} jobs match your criteria; refusing to open more than "
            f"{MAX_OPEN_JOBS}. Please narrow down your search."
        )
    if not jobs:
        logger.warning("No jobs match %r", regex)

    for job in jobs:
        webbrowser.open(job.url)


def main() -> None:
    cli(prog_name="jenkins-cli")


if __name__ == "__main__":
    main()
