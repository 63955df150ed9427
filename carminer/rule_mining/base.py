"""
Base interfaces for class association rule miners.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple

import pandas as pd


class FrequentItemsetMiner(ABC):
    """
    Base class for miners that report frequent itemsets.

    For class association rules every itemset carries a class label and
    two counts: how many records match its items, and how many of those
    also carry the label.
    """

    def __init__(self, **kwargs):
        self.config = kwargs

    @abstractmethod
    def mine_itemsets(self, data: pd.DataFrame) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Mine frequent labeled itemsets from data.

        Args:
            data: DataFrame with categorical features and a class column

        Returns:
            Tuple of (itemsets, stats) where:
                itemsets: List of dicts with keys 'items' (feature -> value),
                          'class', 'support' and 'class_support'
                stats: Dict with mining statistics (execution_time, num_itemsets, etc.)
        """
        pass


class ClassAssociationRuleMiner(ABC):
    """
    Base class for miners of rules whose consequent is a class label.

    Rules have the form: antecedent -> class = value
    with quality metrics (support, confidence, lift, ...).
    """

    def __init__(self, min_confidence: float = 0.5, **kwargs):
        self.min_confidence = min_confidence
        self.config = kwargs

    @abstractmethod
    def mine_rules(self, data: pd.DataFrame) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Mine class association rules from data.

        Args:
            data: DataFrame with categorical features and a class column

        Returns:
            Tuple of (rules, stats) where:
                rules: List of dicts with keys:
                    - 'antecedents': list of {'feature': ..., 'value': ...}
                    - 'consequent': {'feature': class column, 'value': class value}
                    - 'support': float
                    - 'confidence': float
                    - 'lift', 'leverage', 'conviction': float
                stats: Dict with mining statistics
        """
        pass


class HybridMiner(FrequentItemsetMiner, ClassAssociationRuleMiner):
    """Miner that reports both its labeled itemsets and the rules built from them."""

    def __init__(self, min_confidence: float = 0.5, **kwargs):
        FrequentItemsetMiner.__init__(self, **kwargs)
        ClassAssociationRuleMiner.__init__(self, min_confidence, **kwargs)

    @abstractmethod
    def mine_itemsets(self, data: pd.DataFrame) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """Mine frequent labeled itemsets."""
        pass

    @abstractmethod
    def mine_rules(self, data: pd.DataFrame) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """Mine class association rules."""
        pass
