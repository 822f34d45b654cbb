"""
Base interfaces for rule mining algorithms.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Tuple, Any, Union, Iterable
import pandas as pd

# Transactions as item lists, or a table whose rows are transactions
TransactionData = Union[pd.DataFrame, Iterable[Iterable[str]]]


class FrequentItemsetMiner(ABC):
    """
    Base class for frequent itemset mining algorithms.

    These algorithms discover frequent co-occurring items without forming
    rules (no antecedent -> consequent structure).
    """

    def __init__(self, min_support: float = 0.01, **kwargs):
        self.min_support = min_support
        self.config = kwargs

    @abstractmethod
    def mine_itemsets(self, data: TransactionData) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Mine frequent itemsets from data.

        Args:
            data: Transactions (lists of items) or a DataFrame of transactions

        Returns:
            Tuple of (itemsets, stats) where:
                itemsets: List of dicts with keys 'items' (sorted list), 'support' and 'length'
                stats: Dict with mining statistics (execution_time, num_itemsets, etc.)
        """
        pass


class AssociationRuleMiner(ABC):
    """
    Base class for association rule mining algorithms.

    These algorithms discover rules in the form: antecedents -> consequents
    with quality metrics (support, confidence, lift, etc.).
    """

    def __init__(self, min_support: float = 0.01, min_confidence: float = 0.5, **kwargs):
        self.min_support = min_support
        self.min_confidence = min_confidence
        self.config = kwargs

    @abstractmethod
    def mine_rules(self, data: TransactionData) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Mine association rules from data.

        Args:
            data: Transactions (lists of items) or a DataFrame of transactions

        Returns:
            Tuple of (rules, stats) where:
                rules: List of dicts with keys:
                    - 'antecedents': list of items (left-hand side)
                    - 'consequents': list of items (right-hand side)
                    - 'support': float
                    - 'confidence': float
                    - 'lift': float
                    - Other quality metrics
                stats: Dict with mining statistics
        """
        pass


class HybridMiner(FrequentItemsetMiner, AssociationRuleMiner):
    """
    Base class for algorithms that produce both frequent itemsets and association rules.

    The max_items parameter bounds the total number of items in an itemset,
    and therefore in a rule (antecedents plus consequents).
    """

    def __init__(
        self,
        min_support: float = 0.01,
        min_confidence: float = 0.5,
        max_items: int = None,
        **kwargs
    ):
        AssociationRuleMiner.__init__(self, min_support, min_confidence, **kwargs)
        self.max_items = max_items

    @abstractmethod
    def mine_itemsets(self, data: TransactionData) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """Mine frequent itemsets."""
        pass

    @abstractmethod
    def mine_rules(self, data: TransactionData) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """Mine association rules."""
        pass
