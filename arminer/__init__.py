"""arminer: Apriori frequent itemset and association rule mining."""
from arminer.rule_mining import (
    Apriori,
    AprioriMiner,
    Options,
    SupportRecord,
    OrderedStatistic,
    RelationRecord,
    InvalidOptionsError,
    InvariantViolation,
    run_apriori,
)

__version__ = '0.1.0'

__all__ = [
    'Apriori',
    'AprioriMiner',
    'Options',
    'SupportRecord',
    'OrderedStatistic',
    'RelationRecord',
    'InvalidOptionsError',
    'InvariantViolation',
    'run_apriori',
]
