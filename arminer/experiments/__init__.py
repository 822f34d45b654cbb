from .config import (
    DataConfig,
    AprioriConfig,
    RuleMiningConfig,
    FilterConfig,
    ExperimentConfig
)
from .base import (
    load_data,
    to_transactions,
    load_transactions,
    run_rule_mining,
    create_miner,
    apply_filters,
    generate_output_filename
)

__all__ = [
    'DataConfig',
    'AprioriConfig',
    'RuleMiningConfig',
    'FilterConfig',
    'ExperimentConfig',
    'load_data',
    'to_transactions',
    'load_transactions',
    'run_rule_mining',
    'create_miner',
    'apply_filters',
    'generate_output_filename'
]
