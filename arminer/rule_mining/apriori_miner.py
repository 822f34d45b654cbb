"""
Apriori-based rule mining on top of the in-house Apriori engine.

Supports both frequent itemset mining and association rule mining, on plain
transaction lists or on tabular data (one transaction per row).
"""
import time
from typing import Dict, List, Tuple, Any

import pandas as pd

from arminer.rule_mining.apriori import Apriori
from arminer.rule_mining.base import HybridMiner, TransactionData
from arminer.rule_mining.records import Options, RelationRecord

ITEM_SEPARATOR = '__'


def prepare_transactions(data: TransactionData) -> List[List[str]]:
    """
    Convert input to a list of transactions.

    DataFrame rows become transactions of "column__value" items, skipping
    NaN cells. Anything else is taken as an iterable of item iterables.
    """
    if isinstance(data, pd.DataFrame):
        transactions = []
        for _, row in data.iterrows():
            transaction = []
            for col in data.columns:
                value = row[col]
                if pd.notna(value):
                    transaction.append(f"{col}{ITEM_SEPARATOR}{value}")
            transactions.append(transaction)
        return transactions

    return [[str(item) for item in transaction] for transaction in data]


class AprioriMiner(HybridMiner):
    """
    Apriori rule miner.

    Can generate:
    - Frequent itemsets with their support
    - Association rules with support, confidence, lift, leverage and conviction
    """

    def __init__(
        self,
        min_support: float = 0.1,
        min_confidence: float = 0.5,
        min_lift: float = 0.0,
        max_items: int = None,
        **kwargs
    ):
        """
        Initialize Apriori miner.

        Args:
            min_support: Minimum support threshold (must be > 0)
            min_confidence: Minimum confidence threshold
            min_lift: Minimum lift threshold
            max_items: Maximum number of items in an itemset (None for unbounded)
        """
        super().__init__(min_support, min_confidence, max_items, **kwargs)
        self.min_lift = min_lift
        self.engine = None

    @property
    def options(self) -> Options:
        return Options(
            min_support=self.min_support,
            min_confidence=self.min_confidence,
            min_lift=self.min_lift,
            max_length=self.max_items or 0
        )

    def _build_engine(self, data: TransactionData) -> Apriori:
        self.engine = Apriori(prepare_transactions(data))
        return self.engine

    def mine_itemsets(self, data: TransactionData) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Mine frequent itemsets with Apriori.

        Args:
            data: Transactions or a DataFrame of transactions

        Returns:
            Tuple of (itemsets, stats)
        """
        itemsets, _, stats = self._mine(data, with_rules=False)
        return itemsets, stats['itemsets']

    def mine_rules(self, data: TransactionData) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Mine association rules with Apriori.

        Args:
            data: Transactions or a DataFrame of transactions

        Returns:
            Tuple of (rules, stats)
        """
        _, rules, stats = self._mine(data, with_itemsets=False)
        return rules, stats['rules']

    def mine_both(self, data: TransactionData) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]], Dict[str, Any]]:
        """
        Mine itemsets and rules from a single index and a single itemset search.

        Returns:
            Tuple of (itemsets, rules, stats) with stats keyed by 'itemsets' and 'rules'
        """
        return self._mine(data)

    def _mine(self, data: TransactionData, with_itemsets: bool = True, with_rules: bool = True):
        start_time = time.time()

        options = self.options
        options.check()
        engine = self._build_engine(data)

        itemsets = []
        records = []
        for record in engine.generate_support_records(options.min_support, options.max_length):
            if with_itemsets:
                itemsets.append({
                    'items': list(record.items),
                    'support': record.support,
                    'length': len(record.items)
                })
            if with_rules:
                statistics = engine.filter_ordered_statistics(
                    engine.generate_ordered_statistics(record),
                    options.min_confidence,
                    options.min_lift
                )
                if statistics:
                    records.append(RelationRecord(record, tuple(statistics)))

        rules = self.records_to_rules(records)
        execution_time = time.time() - start_time

        stats = {}
        if with_itemsets:
            stats['itemsets'] = {
                'num_itemsets': len(itemsets),
                'num_transactions': engine.transaction_count,
                'max_length_found': max((i['length'] for i in itemsets), default=0),
                'execution_time': execution_time,
                'average_support': sum(i['support'] for i in itemsets) / len(itemsets) if itemsets else 0.0,
                'algorithm': 'Apriori',
                'mode': 'itemsets'
            }
        if with_rules:
            stats['rules'] = {
                'num_rules': len(rules),
                'num_relation_records': len(records),
                'num_transactions': engine.transaction_count,
                'execution_time': execution_time,
                'average_support': sum(r['support'] for r in rules) / len(rules) if rules else 0.0,
                'average_confidence': sum(r['confidence'] for r in rules) / len(rules) if rules else 0.0,
                'average_lift': sum(r['lift'] for r in rules) / len(rules) if rules else 0.0,
                'algorithm': 'Apriori',
                'mode': 'rules'
            }

        return itemsets, rules, stats

    def records_to_rules(self, records: List[RelationRecord]) -> List[Dict[str, Any]]:
        """Flatten relation records into one dict per base -> add statistic."""
        rules = []
        for record in records:
            support = record.support
            for stat in record.ordered_statistics:
                base_support = self.engine.support(stat.base)
                add_support = self.engine.support(stat.add)

                # Conviction is unbounded for exact rules
                if stat.confidence >= 1.0:
                    conviction = float('inf')
                else:
                    conviction = (1 - add_support) / (1 - stat.confidence)

                rules.append({
                    'antecedents': list(stat.base),
                    'consequents': list(stat.add),
                    'support': support,
                    'confidence': stat.confidence,
                    'lift': stat.lift,
                    'leverage': support - base_support * add_support,
                    'conviction': conviction,
                    'length': len(record.items)
                })
        return rules

    @staticmethod
    def to_dataframe(rules: List[Dict[str, Any]]) -> pd.DataFrame:
        """One row per rule, itemsets joined as "a, b" strings."""
        columns = ['antecedents', 'consequents', 'support', 'confidence', 'lift', 'leverage', 'conviction', 'length']
        if not rules:
            return pd.DataFrame(columns=columns)
        df = pd.DataFrame(rules)
        for col in ['antecedents', 'consequents']:
            df[col] = df[col].apply(lambda items: ', '.join(items))
        return df[[c for c in columns if c in df.columns]]

    def __repr__(self):
        return (f"AprioriMiner(min_support={self.min_support}, min_confidence={self.min_confidence}, "
                f"min_lift={self.min_lift}, max_items={self.max_items})")
