"""Depth-bounded, cycle-safe _include:iterate / _revinclude:iterate expansion."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from resource_search.models import SearchEntry, SearchRequest

from .inclusion_resolver import InclusionResolver
from .options import SearchOptions

logger = logging.getLogger(__name__)


class ExpansionState(str, Enum):
    IDLE = "idle"
    EXPANDING = "expanding"
    DONE = "done"


@dataclass
class ExpansionRun:
    """Mutable state of one expansion, local to a single request."""

    frontier: list[SearchEntry]
    resolved_keys: set[str]
    expanded_keys: set[str] = field(default_factory=set)
    added: list[SearchEntry] = field(default_factory=list)
    rounds: int = 0
    state: ExpansionState = ExpansionState.IDLE


class IterativeInclusionEngine:
    """Repeatedly widens the inclusion frontier until it is exhausted or the depth bound is hit.

    Each round marks its whole frontier as expanded, so no resource is
    expanded twice and cyclic reference graphs cannot loop. The depth bound
    caps the cost on densely linked graphs.
    """

    def __init__(self, resolver: InclusionResolver, options: SearchOptions | None = None):
        self.resolver = resolver
        self.options = options or SearchOptions()

    def is_requested(self, request: SearchRequest) -> bool:
        return any(request.query_params.get(p) for p in self.options.iterative_inclusion_parameters)

    async def expand(self, entries: Sequence[SearchEntry], request: SearchRequest) -> list[SearchEntry]:
        """Resolve iterative inclusions starting from the entries already in the result.

        Returns:
            Newly included entries not present in entries, first occurrence kept
        """
        if not self.is_requested(request):
            return []

        run = ExpansionRun(
            frontier=list(entries),
            resolved_keys={entry.key for entry in entries},
        )
        await self._run(run, request)
        return run.added

    async def _run(self, run: ExpansionRun, request: SearchRequest) -> None:
        logger.info("Iterative inclusion search starts")
        run.state = ExpansionState.EXPANDING
        max_depth = self.options.max_include_iterative_depth

        while run.state is ExpansionState.EXPANDING:
            found = await self.resolver.resolve(run.frontier, request, iterative=True)
            run.expanded_keys.update(entry.key for entry in run.frontier)
            run.rounds += 1

            if not found:
                logger.info("Iteration %d found zero results. Stopping", run.rounds - 1)
                run.state = ExpansionState.DONE
                break

            for entry in found:
                # Different include/revinclude paths can reach the same resource
                if entry.key not in run.resolved_keys:
                    run.resolved_keys.add(entry.key)
                    run.added.append(entry)

            if run.rounds >= max_depth:
                logger.info("Maximum iterative inclusion depth %d reached. Stopping", max_depth)
                run.state = ExpansionState.DONE
                break

            run.frontier = _unexpanded(found, run.expanded_keys)
            logger.info("Iteration %d found %d resources", run.rounds - 1, len(found))
            if not run.frontier:
                run.state = ExpansionState.DONE


def _unexpanded(found: Sequence[SearchEntry], expanded_keys: set[str]) -> list[SearchEntry]:
    frontier: dict[str, SearchEntry] = {}
    for entry in found:
        if entry.key not in expanded_keys and entry.key not in frontier:
            frontier[entry.key] = entry
    return list(frontier.values())
