"""
Level-wise construction of the frequent labeled itemset lattice.

Each cycle of the support search builds a fresh tuple of Levels:

    L1 = count(singletons), filtered by [min_support_count, max_support_count]
    Lk = filter(count(prune(join(L(k-1)))))

until a level comes out empty. Support bounds are absolute record counts
and apply to the antecedent support of a labeled itemset.
"""
import logging
import math
from collections import OrderedDict
from itertools import combinations
from typing import Dict, List, Sequence, Tuple

import numpy as np
from joblib import Parallel, cpu_count, delayed

from carminer.preprocessing.dataset import CategoricalDataset
from carminer.rule_mining.items import Item, LabeledItemSet, LabeledKey, Level

logger = logging.getLogger(__name__)


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def support_count(fraction: float, num_records: int) -> int:
    """Absolute record count for a support fraction, rounded half up."""
    return round_half_up(fraction * num_records)


def generate_singletons(dataset: CategoricalDataset) -> List[LabeledItemSet]:
    """
    One uncounted labeled itemset per (feature value, class value) pair.

    Ordered by attribute, then value code, then class code.
    """
    labels = dataset.class_labels()
    singletons = []
    for attribute, values in enumerate(dataset.feature_values):
        for value in range(len(values)):
            item = Item(attribute, value)
            for label in labels:
                singletons.append(LabeledItemSet.candidate((item,), label))
    return singletons


def _count_shard(
        features: np.ndarray,
        classes: np.ndarray,
        itemsets: Sequence[LabeledItemSet]
) -> Tuple[np.ndarray, np.ndarray]:
    supports = np.zeros(len(itemsets), dtype=np.int64)
    class_supports = np.zeros(len(itemsets), dtype=np.int64)

    # Labeled itemsets sharing an antecedent share its record mask
    masks: Dict[tuple, np.ndarray] = {}
    for idx, itemset in enumerate(itemsets):
        antecedent_key = itemset.antecedent.key
        mask = masks.get(antecedent_key)
        if mask is None:
            mask = np.ones(features.shape[0], dtype=bool)
            for item in itemset.items:
                mask &= features[:, item.attribute] == item.value
            masks[antecedent_key] = mask
        supports[idx] = np.count_nonzero(mask)
        class_supports[idx] = np.count_nonzero(mask & (classes == itemset.label.value))

    return supports, class_supports


def count_supports(
        dataset: CategoricalDataset,
        itemsets: Sequence[LabeledItemSet],
        n_jobs: int = 1
) -> List[LabeledItemSet]:
    """
    Count support and class support of every itemset in one pass over the data.

    With n_jobs other than 1 the records are split into contiguous shards
    counted in parallel; per-itemset counters are summed, so the result is
    the same as a sequential scan.
    """
    if not itemsets:
        return []

    if n_jobs == 1 or dataset.num_records < 2:
        supports, class_supports = _count_shard(dataset.features, dataset.classes, itemsets)
    else:
        n_shards = n_jobs if n_jobs > 0 else max(1, cpu_count() + 1 + n_jobs)
        n_shards = max(1, min(n_shards, dataset.num_records))
        bounds = np.array_split(np.arange(dataset.num_records), n_shards)
        partials = Parallel(n_jobs=n_jobs)(
            delayed(_count_shard)(
                dataset.features[rows[0]:rows[-1] + 1],
                dataset.classes[rows[0]:rows[-1] + 1],
                itemsets
            )
            for rows in bounds if len(rows)
        )
        supports = sum(p[0] for p in partials)
        class_supports = sum(p[1] for p in partials)

    return [
        itemset.with_counts(support, class_support)
        for itemset, support, class_support in zip(itemsets, supports, class_supports)
    ]


def filter_by_support(
        itemsets: Sequence[LabeledItemSet],
        min_support_count: int,
        max_support_count: int
) -> Tuple[LabeledItemSet, ...]:
    return tuple(
        itemset for itemset in itemsets
        if min_support_count <= itemset.support <= max_support_count
    )


def join_itemsets(level: Level) -> List[LabeledItemSet]:
    """
    Apriori join: merge same-label itemsets that share all but their last item.

    Itemsets are grouped by (label, prefix); within a group every pair whose
    last items lie on different attributes yields one candidate of size k+1.
    Candidates come out in the order of the previous level.
    """
    groups: Dict[tuple, List[LabeledItemSet]] = OrderedDict()
    for itemset in level:
        prefix = itemset.items[:-1]
        groups.setdefault((itemset.label, prefix), []).append(itemset)

    candidates = []
    for (label, prefix), members in groups.items():
        for first, second in combinations(members, 2):
            last_first, last_second = first.items[-1], second.items[-1]
            if last_first.attribute == last_second.attribute:
                continue
            candidates.append(
                LabeledItemSet.candidate(prefix + (last_first, last_second), label)
            )
    return candidates


def _subset_keys(itemset: LabeledItemSet):
    key = itemset.antecedent.key
    for drop in range(len(key)):
        yield itemset.label.value, key[:drop] + key[drop + 1:]


def prune_candidates(candidates: Sequence[LabeledItemSet], previous: Level) -> List[LabeledItemSet]:
    """Keep candidates whose every immediate sub-itemset is in the previous level."""
    index = previous.keys()
    return [
        candidate for candidate in candidates
        if all(subset in index for subset in _subset_keys(candidate))
    ]


def build_levels(
        dataset: CategoricalDataset,
        min_support_count: int,
        max_support_count: int,
        n_jobs: int = 1
) -> Tuple[Level, ...]:
    """
    Build all levels of frequent labeled itemsets for one mining cycle.

    Args:
        dataset: Encoded categorical dataset
        min_support_count: Smallest antecedent support (records) an itemset may have
        max_support_count: Largest antecedent support (records) an itemset may have
        n_jobs: Parallel shards for support counting

    Returns:
        Tuple of Levels L1, L2, ...; empty if no singleton is frequent
    """
    min_support_count = max(1, int(min_support_count))
    levels: List[Level] = []

    counted = count_supports(dataset, generate_singletons(dataset), n_jobs=n_jobs)
    current = Level(1, filter_by_support(counted, min_support_count, max_support_count))
    logger.debug("L(1): %d of %d singletons within support [%d, %d]",
                 len(current), len(counted), min_support_count, max_support_count)

    while current:
        levels.append(current)
        candidates = prune_candidates(join_itemsets(current), current)
        if not candidates:
            break
        counted = count_supports(dataset, candidates, n_jobs=n_jobs)
        current = Level(current.k + 1, filter_by_support(counted, min_support_count, max_support_count))
        logger.debug("L(%d): %d of %d candidates frequent", current.k, len(current), len(candidates))

    return tuple(levels)


def level_index(levels: Sequence[Level]) -> Dict[LabeledKey, LabeledItemSet]:
    """Map canonical key to itemset across all levels."""
    return {itemset.key: itemset for level in levels for itemset in level}
