import heapq
import time
from dataclasses import dataclass, field
from enum import Enum

from .catalog import Catalog, standard_catalog
from .state import State, initial_state, iter_successors
from .types import Placement


class SearchStatus(str, Enum):
    RUNNING = "running"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


@dataclass
class SearchStats:
    iterations: int = 0
    pushed: int = 0
    dedup_hits: int = 0
    max_frontier: int = 0
    elapsed: float = 0.0


@dataclass
class SearchResult:
    status: SearchStatus
    # The solution when solved, otherwise the state with the least free space seen.
    state: State
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def solved(self) -> bool:
        return self.status is SearchStatus.SOLVED

    @property
    def placements(self) -> tuple[Placement, ...]:
        return self.state.placements


class PackingSearch:
    """Best-first search over partial packings.

    The frontier pops the state with the fewest free cells; ties go to the
    most recently pushed state. A popped state's fingerprint is recorded and
    children whose fingerprint was already recorded are dropped.

    `start` resumes from a partial packing; its depth selects the next brick
    in the catalog.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        *,
        start: State | None = None,
        require_boundary_touch: bool = False,
        progress_every: int = 10_000,
        verbose: bool = True,
    ) -> None:
        if progress_every <= 0:
            raise ValueError("progress_every must be > 0")
        self.catalog = catalog if catalog is not None else standard_catalog()
        self.require_boundary_touch = require_boundary_touch
        self.progress_every = progress_every
        self.verbose = verbose

        self.status = SearchStatus.RUNNING
        self.stats = SearchStats()
        self.seen: set[int] = set()
        self._frontier: list[tuple[int, int, State]] = []
        self._seq = 0

        if start is None:
            start = initial_state()
        self.best = start
        self.solution: State | None = None
        self._push(start)

    def __len__(self) -> int:
        return len(self._frontier)

    def _push(self, state: State) -> None:
        self._seq += 1
        heapq.heappush(self._frontier, (state.space_left, -self._seq, state))
        self.stats.pushed += 1
        if len(self._frontier) > self.stats.max_frontier:
            self.stats.max_frontier = len(self._frontier)

    def step(self) -> SearchStatus:
        """Expand one state. Returns the status after the step."""
        if self.status is not SearchStatus.RUNNING:
            return self.status
        if not self._frontier:
            self.status = SearchStatus.EXHAUSTED
            return self.status

        _, _, state = heapq.heappop(self._frontier)
        self.stats.iterations += 1
        self.seen.add(state.fingerprint())

        if state.space_left < self.best.space_left:
            self.best = state

        if self.verbose and self.stats.iterations % self.progress_every == 0:
            print(
                f"[search] iter={self.stats.iterations:,} "
                f"frontier={len(self._frontier):,} "
                f"placements={state.depth} free={state.space_left} "
                f"dedup_hits={self.stats.dedup_hits:,}",
                flush=True,
            )

        if state.is_solved:
            self.solution = state
            self.status = SearchStatus.SOLVED
            return self.status

        for child in iter_successors(
            state,
            self.catalog,
            require_boundary_touch=self.require_boundary_touch,
        ):
            if child.fingerprint() in self.seen:
                self.stats.dedup_hits += 1
                continue
            self._push(child)

        if not self._frontier:
            self.status = SearchStatus.EXHAUSTED
        return self.status

    def run(self) -> SearchResult:
        t0 = time.perf_counter()
        while self.step() is SearchStatus.RUNNING:
            pass
        self.stats.elapsed += time.perf_counter() - t0

        if self.solution is not None:
            if self.verbose:
                print("Found solution!", flush=True)
                for p in self.solution.placements:
                    print(f"  {p}", flush=True)
            return SearchResult(self.status, self.solution, self.stats)

        if self.verbose:
            print(
                f"No solution found after {self.stats.iterations:,} iterations "
                f"(best: {self.best.space_left} cells left)",
                flush=True,
            )
        return SearchResult(self.status, self.best, self.stats)


def solve(
    catalog: Catalog | None = None,
    *,
    start: State | None = None,
    require_boundary_touch: bool = False,
    progress_every: int = 10_000,
    verbose: bool = True,
) -> SearchResult:
    return PackingSearch(
        catalog,
        start=start,
        require_boundary_touch=require_boundary_touch,
        progress_every=progress_every,
        verbose=verbose,
    ).run()
