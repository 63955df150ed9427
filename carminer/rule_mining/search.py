"""
Adaptive minimum-support search.

Mining cycles are repeated with a decreasing minimum support until enough
rules are found, the lower bound has been mined, or the support count
drops below one record:

    Initializing -> Mining -> Evaluating -> (Mining | Terminated)
"""
import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from tqdm.auto import tqdm

from carminer.preprocessing.dataset import CategoricalDataset
from carminer.rule_mining.config import AprioriCarConfig
from carminer.rule_mining.items import Level
from carminer.rule_mining.lattice import build_levels, round_half_up, support_count
from carminer.rule_mining.ranking import rank_rules
from carminer.rule_mining.rules import Rule, generate_rules

logger = logging.getLogger(__name__)

EPSILON = 1e-6


def _eq(a: float, b: float) -> bool:
    return abs(a - b) < EPSILON


def _gr_or_eq(a: float, b: float) -> bool:
    return b - a < EPSILON


@dataclass(frozen=True)
class SearchState:
    min_support: float
    cycles: int = 0
    levels: Tuple[Level, ...] = ()
    rules: Tuple[Rule, ...] = ()


@dataclass(frozen=True)
class MiningResult:
    """
    Outcome of a search run.

    min_support is the threshold of the last mining cycle, i.e. the one that
    produced rules. When that cycle ran on a support snapped up to the lower
    bound, this is the lower bound itself, not the previous support minus
    delta plus delta. exhausted is set when a rule target was given and the
    search stopped short of it.
    """
    rules: Tuple[Rule, ...]
    levels: Tuple[Level, ...]
    cycles: int
    min_support: float
    min_support_count: int
    exhausted: bool
    config: AprioriCarConfig
    supports_tried: Tuple[float, ...] = field(default=())

    @property
    def level_sizes(self) -> List[int]:
        return [len(level) for level in self.levels]


def initial_min_support(config: AprioriCarConfig) -> float:
    lower, upper = config.lower_bound_min_support, config.upper_bound_min_support
    if config.num_rules is None:
        return lower
    return max(upper - config.delta, lower)


def next_min_support(min_support: float, config: AprioriCarConfig) -> float:
    """
    Lower the support by delta without jumping past the lower bound.

    Once the support sits exactly on the lower bound it is decremented
    anyway, which ends the search after that cycle.
    """
    lower = config.lower_bound_min_support
    lowered = min_support - config.delta
    if _eq(min_support, lower):
        return lowered
    if _gr_or_eq(lowered, lower):
        return max(lowered, lower)
    return lower


class AdaptiveSupportSearch:
    """
    Runs mining cycles over one dataset with one configuration.

    Every run starts from a fresh SearchState, so a search object can be
    reused and several searches can run side by side.
    """

    def __init__(self, config: AprioriCarConfig = None):
        self.config = (config or AprioriCarConfig()).validate()

    def mine_cycle(self, dataset: CategoricalDataset, state: SearchState) -> SearchState:
        """Build the lattice at state.min_support, then generate and rank rules."""
        config = self.config
        n = dataset.num_records
        min_count = support_count(state.min_support, n)
        max_count = support_count(config.upper_bound_min_support, n)

        levels = build_levels(dataset, min_count, max_count, n_jobs=config.n_jobs)
        rules = generate_rules(levels, config.min_metric, dataset.class_counts(), n)
        ranked = rank_rules(rules, config.num_rules, config.metric_type)

        logger.info("Cycle %d: min support %.4f (%d records), %d level(s), %d rule(s), kept %d",
                    state.cycles + 1, state.min_support, min_count, len(levels),
                    len(rules), len(ranked))
        return replace(state, cycles=state.cycles + 1, levels=levels, rules=tuple(ranked))

    def should_continue(self, state: SearchState, num_records: int) -> bool:
        config = self.config
        below_target = config.num_rules is None or len(state.rules) < config.num_rules
        return (below_target
                and _gr_or_eq(state.min_support, config.lower_bound_min_support)
                and round_half_up(state.min_support * num_records + 0.5) >= 1)

    def run(self, dataset: CategoricalDataset) -> MiningResult:
        config = self.config
        n = dataset.num_records
        state = SearchState(min_support=initial_min_support(config))
        supports_tried = []

        progress = tqdm(desc="Mining cycles", unit="cycle", disable=not config.verbose)
        try:
            while True:
                mined_support = state.min_support
                supports_tried.append(mined_support)
                state = self.mine_cycle(dataset, state)
                progress.update(1)

                state = replace(state, min_support=next_min_support(mined_support, config))
                if not self.should_continue(state, n):
                    break
        finally:
            progress.close()

        exhausted = config.num_rules is not None and len(state.rules) < config.num_rules
        if exhausted:
            logger.info("Search exhausted after %d cycle(s): %d of %d rules found",
                        state.cycles, len(state.rules), config.num_rules)
        else:
            logger.info("Search finished after %d cycle(s) with %d rule(s)",
                        state.cycles, len(state.rules))

        return MiningResult(
            rules=state.rules,
            levels=state.levels,
            cycles=state.cycles,
            min_support=mined_support,
            min_support_count=max(1, support_count(mined_support, n)),
            exhausted=exhausted,
            config=config,
            supports_tried=tuple(supports_tried)
        )


def mine_class_association_rules(
        dataset: CategoricalDataset,
        config: Optional[AprioriCarConfig] = None
) -> MiningResult:
    """Run the adaptive support search once."""
    return AdaptiveSupportSearch(config).run(dataset)
