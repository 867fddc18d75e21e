"""Select jobs by a regular expression on their name."""

from __future__ import annotations

import logging
import re
from typing import Iterable

from jcli.models import Job

logger = logging.getLogger(__name__)

MATCH_ALL = ".*"


def match_jobs(jobs: Iterable[Job], pattern: str = MATCH_ALL) -> list[Job]:
    """Return the jobs whose name contains a match for *pattern*.

    Uses search semantics, so the pattern is not anchored.  An invalid
    pattern matches nothing.
    """
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        logger.debug("Invalid job pattern %r: %s", pattern, exc)
        return []
    return [job for job in jobs if compiled.search(job.name)]


def find_matching_jobs(api, pattern: str = MATCH_ALL) -> list[Job]:
    return match_jobs(api.get_all_jobs(), pattern)
