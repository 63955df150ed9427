"""
Apriori-based class association rule miner with adaptive minimum support.

The support threshold starts just below the upper bound and is lowered by
delta each cycle until num_rules rules reach the confidence threshold or
the lower bound has been mined.
"""
import time
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from carminer.preprocessing.dataset import CategoricalDataset
from carminer.rule_mining.base import HybridMiner
from carminer.rule_mining.config import AprioriCarConfig
from carminer.rule_mining.search import AdaptiveSupportSearch, MiningResult


class AprioriCarMiner(HybridMiner):
    """
    Class association rule miner.

    Mines labeled itemsets level by level (Apriori join and prune), keeps
    one rule per itemset whose confidence reaches min_confidence, and ranks
    rules by confidence, then support.

    The last run is kept on the instance as dataset_ and result_.
    """

    def __init__(
            self,
            num_rules: Optional[int] = None,
            min_confidence: float = 0.5,
            delta: float = 0.05,
            lower_bound_min_support: float = 0.01,
            upper_bound_min_support: float = 1.0,
            class_index='last',
            remove_missing_columns: bool = False,
            output_itemsets: bool = False,
            metric_type: str = 'confidence',
            n_jobs: int = 1,
            verbose: bool = False,
            **kwargs
    ):
        """
        Initialize the miner.

        Args:
            num_rules: Number of rules to find (None: mine once at the lower bound)
            min_confidence: Minimum confidence of a rule
            delta: Amount the minimum support is lowered by each cycle
            lower_bound_min_support: Minimum support never goes below this
            upper_bound_min_support: Itemsets above this support are discarded
            class_index: Class column ('first', 'last', name or position)
            remove_missing_columns: Drop all-missing feature columns first
            output_itemsets: List every itemset per level in the text report
            metric_type: Ranking metric, must be 'confidence'
            n_jobs: Parallel shards for support counting
            verbose: Show a progress bar over mining cycles
        """
        super().__init__(min_confidence, **kwargs)
        self.search_config = AprioriCarConfig(
            num_rules=num_rules,
            min_metric=min_confidence,
            delta=delta,
            lower_bound_min_support=lower_bound_min_support,
            upper_bound_min_support=upper_bound_min_support,
            remove_missing_columns=remove_missing_columns,
            output_itemsets=output_itemsets,
            class_index=class_index,
            metric_type=metric_type,
            n_jobs=n_jobs,
            verbose=verbose
        ).validate()
        self.dataset_ = None
        self.result_ = None

    @classmethod
    def from_config(cls, config: AprioriCarConfig) -> 'AprioriCarMiner':
        return cls(
            num_rules=config.num_rules,
            min_confidence=config.min_metric,
            delta=config.delta,
            lower_bound_min_support=config.lower_bound_min_support,
            upper_bound_min_support=config.upper_bound_min_support,
            class_index=config.class_index,
            remove_missing_columns=config.remove_missing_columns,
            output_itemsets=config.output_itemsets,
            metric_type=config.metric_type,
            n_jobs=config.n_jobs,
            verbose=config.verbose
        )

    def fit(self, data: pd.DataFrame) -> MiningResult:
        """Encode the data and run the adaptive support search."""
        cfg = self.search_config
        self.dataset_ = CategoricalDataset.from_dataframe(
            data,
            class_index=cfg.class_index,
            remove_missing_columns=cfg.remove_missing_columns
        )
        self.result_ = AdaptiveSupportSearch(cfg).run(self.dataset_)
        return self.result_

    def _search_stats(self, result: MiningResult) -> Dict[str, Any]:
        return {
            'num_cycles': result.cycles,
            'min_support': result.min_support,
            'min_support_count': result.min_support_count,
            'exhausted': result.exhausted,
            'level_sizes': result.level_sizes,
            'algorithm': 'AprioriCAR'
        }

    def mine_itemsets(self, data: pd.DataFrame) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Mine frequent labeled itemsets of the final cycle.

        Args:
            data: DataFrame with categorical features and a class column

        Returns:
            Tuple of (itemsets, stats)
        """
        start_time = time.time()
        result = self.fit(data)
        dataset = self.dataset_
        n = dataset.num_records

        itemsets = []
        for level in result.levels:
            for itemset in level:
                itemsets.append({
                    'items': dataset.describe_items(itemset.items),
                    'class': dataset.label_name(itemset.label),
                    'size': itemset.size,
                    'support': itemset.support / n,
                    'class_support': itemset.class_support / n
                })

        stats = {
            'num_itemsets': len(itemsets),
            'execution_time': time.time() - start_time,
            'average_support': sum(i['support'] for i in itemsets) / len(itemsets) if itemsets else 0.0,
            'mode': 'itemsets',
            **self._search_stats(result)
        }

        return itemsets, stats

    def mine_rules(self, data: pd.DataFrame) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Mine ranked class association rules.

        Args:
            data: DataFrame with categorical features and a class column

        Returns:
            Tuple of (rules, stats), rules best first
        """
        start_time = time.time()
        result = self.fit(data)

        rules = [rule.to_dict(self.dataset_) for rule in result.rules]

        stats = {
            'num_rules': len(rules),
            'execution_time': time.time() - start_time,
            'average_support': sum(r['support'] for r in rules) / len(rules) if rules else 0.0,
            'average_confidence': sum(r['confidence'] for r in rules) / len(rules) if rules else 0.0,
            'mode': 'rules',
            **self._search_stats(result)
        }

        return rules, stats

    def __repr__(self):
        cfg = self.search_config
        return (f"AprioriCarMiner(num_rules={cfg.num_rules}, min_confidence={cfg.min_metric}, "
                f"delta={cfg.delta}, lower_bound_min_support={cfg.lower_bound_min_support}, "
                f"upper_bound_min_support={cfg.upper_bound_min_support})")
