"""
Run a reporter concurrently over many jobs or nodes and print each result.

One thread per item; lines are printed by the calling thread in completion
order, so output order across items is not deterministic.  The call returns
only once every item has been reported.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Sequence, TypeVar

import click

from jcli.models import Outcome

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _failure_outcome(item, exc: Exception) -> Outcome:
    name = getattr(item, "name", str(item))
    return Outcome(name=name, line=f"{name}: UNKNOWN ({exc})", error=str(exc))


def fan_out(
    items: Sequence[T],
    reporter: Callable[[T], Outcome],
    echo: Callable[[str], None] = click.echo,
) -> list[Outcome]:
    if not items:
        return []

    outcomes: list[Outcome] = []
    with ThreadPoolExecutor(max_workers=len(items)) as executor:
        futures = {executor.submit(reporter, item): item for item in items}
        for future in as_completed(futures):
            item = futures[future]
            try:
                outcome = future.result()
            except Exception as exc:
                logger.warning("Report failed for %s: %s", getattr(item, "name", item), exc)
                outcome = _failure_outcome(item, exc)
            echo(outcome.line)
            outcomes.append(outcome)

    return outcomes
