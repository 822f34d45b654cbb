"""
Rule Mining Module

Apriori level-wise search for frequent itemsets and association rules:
- Combination enumeration and the transaction index (support counting)
- The Apriori engine (itemsets, rules, confidence and lift)
- A miner wrapper producing itemset/rule dicts and run statistics
"""
from .exceptions import InvalidOptionsError, InvariantViolation
from .combinations import Combinations, combinations, count_combinations
from .records import SupportRecord, OrderedStatistic, RelationRecord, Options, new_options
from .transaction_index import TransactionIndex
from .apriori import Apriori, run_apriori
from .apriori_miner import AprioriMiner, prepare_transactions

__all__ = [
    'InvalidOptionsError', 'InvariantViolation',
    'Combinations', 'combinations', 'count_combinations',
    'SupportRecord', 'OrderedStatistic', 'RelationRecord', 'Options', 'new_options',
    'TransactionIndex',
    'Apriori', 'run_apriori',
    'AprioriMiner', 'prepare_transactions'
]
