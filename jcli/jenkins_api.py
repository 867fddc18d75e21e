"""
Thin wrapper around the Jenkins JSON API.

Methods raise meaningful exceptions rather than returning error markers, so
callers (the reporters and the CLI) decide how to surface a failure.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import requests
import urllib3

from jcli.config import Config
from jcli.models import Build, Job, Node

logger = logging.getLogger(__name__)

_CONTROLLER_NAMES = ("master", "built-in", "built-in node")


def _job_path(job_name: str) -> str:
    """Convert a slash-separated job name into a Jenkins API path segment.

    Each segment is URL-encoded to handle spaces, '#', '%', etc.
    'my-org/my-repo/main' -> '/job/my-org/job/my-repo/job/main'
    'simple-job'          -> '/job/simple-job'
    """
    segments = [quote(seg, safe="") for seg in job_name.split("/")]
    return "/job/" + "/job/".join(segments)


def _computer_path(node_name: str) -> str:
    if node_name.lower() in _CONTROLLER_NAMES:
        return "/computer/(master)"
    return f"/computer/{quote(node_name, safe='')}"


class JenkinsAPI:
    def __init__(self, config: Config):
        self.config = config
        self.base_url = config.url
        if not config.verify_ssl:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def _get(self, path: str, **kwargs) -> requests.Response:
        """HTTP GET against the configured server with auth and timeout."""
        url = f"{self.base_url}{path}"
        try:
            response = requests.get(
                url,
                auth=self.config.auth,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
                **kwargs,
            )
            response.raise_for_status()
            return response
        except requests.HTTPError as exc:
            logger.debug("Jenkins HTTP %s for %s", exc.response.status_code, url)
            raise
        except requests.ConnectionError:
            raise ConnectionError(
                f"Cannot reach Jenkins at {self.base_url}. "
                "Verify the server is running and JENKINS_URL is correct."
            )
        except requests.Timeout:
            raise TimeoutError(
                f"Jenkins did not respond within {self.config.timeout:g} seconds ({url})."
            )

    def connect(self) -> dict:
        """Fetch the server root, which fails on bad credentials."""
        return self._get("/api/json?tree=mode,nodeName").json()

    # -----------------------------------------------------------------------
    # Jobs and builds
    # -----------------------------------------------------------------------

    def get_all_jobs(self) -> list[Job]:
        data = self._get("/api/json?tree=jobs[name,url]").json()
        return [
            Job(name=j.get("name", ""), url=j.get("url", ""))
            for j in data.get("jobs") or []
        ]

    def get_job(self, job_name: str) -> Job:
        data = self._get(f"{_job_path(job_name)}/api/json?tree=name,url").json()
        return Job(name=data.get("name", job_name), url=data.get("url", ""))

    def get_last_build(self, job_name: str) -> Build:
        """Fetch the most recent build of a job.

        A job that has never run has no lastBuild; Jenkins answers 404 and
        this raises LookupError.
        """
        path = f"{_job_path(job_name)}/lastBuild/api/json?tree=number,result,url"
        try:
            data = self._get(path).json()
        except requests.HTTPError as exc:
            if exc.response.status_code == 404:
                raise LookupError(f"Job '{job_name}' has no builds")
            raise
        return Build(
            number=data.get("number", 0),
            result=data.get("result") or "IN_PROGRESS",
            url=data.get("url", ""),
        )

    def get_console_text(self, job_name: str, build_number: int) -> str:
        """Fetch the full console log for a build."""
        path = f"{_job_path(job_name)}/{build_number}/consoleText"
        response = self._get(path, stream=True)
        response.encoding = response.encoding or "utf-8"
        try:
            return "".join(
                response.iter_content(chunk_size=8192, decode_unicode=True)
            )
        finally:
            response.close()

    # -----------------------------------------------------------------------
    # Queue and nodes
    # -----------------------------------------------------------------------

    def get_queue(self) -> dict:
        """Fetch the build queue exactly as Jenkins reports it."""
        return self._get("/queue/api/json").json()

    def get_all_nodes(self) -> list[Node]:
        """List build agents by name.  The returned nodes are not polled."""
        data = self._get("/computer/api/json?tree=computer[displayName]").json()
        return [
            Node(name=c.get("displayName", ""))
            for c in data.get("computer") or []
        ]

    def poll_node(self, node_name: str) -> Node:
        """Fetch the live state of one agent."""
        data = self._get(f"{_computer_path(node_name)}/api/json?tree=displayName,offline").json()
        return Node(
            name=data.get("displayName", node_name),
            online=not data.get("offline", True),
        )
