import logging
import pandas as pd
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Any, Tuple

from arminer.rule_mining.apriori_miner import AprioriMiner, prepare_transactions
from arminer.postprocessing.rule import filter_rules, filter_itemsets

from .config import DataConfig, RuleMiningConfig, FilterConfig

logger = logging.getLogger(__name__)

BASKET_SUFFIXES = ['.txt', '.basket', '.dat']
ITEMSET_METRICS = ('support', 'length')


def load_data(config: DataConfig) -> pd.DataFrame:
    """
    Read the file named by ``config.path`` into a DataFrame.

    Basket files keep one raw line per row in a 'transaction' column;
    basket data in a .csv is read the same way since rows are ragged.
    """
    path = Path(config.path)
    if config.format == 'basket' and path.suffix in BASKET_SUFFIXES + ['.csv']:
        with open(path, encoding='utf-8') as f:
            lines = [line.rstrip('\n') for line in f]
        return pd.DataFrame({'transaction': [line for line in lines if line.strip()]})
    elif path.suffix == '.csv':
        return pd.read_csv(path)
    elif path.suffix in ['.xlsx', '.xls']:
        # basket sheets have no header row
        return pd.read_excel(path, header=None if config.format == 'basket' else 0)
    elif path.suffix == '.parquet':
        return pd.read_parquet(path)
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")


def to_transactions(df: pd.DataFrame, config: DataConfig) -> List[List[str]]:
    """Turn a loaded DataFrame into transactions according to ``config.format``."""
    if config.format == 'basket':
        column = df.columns[0]
        return [
            [item.strip() for item in str(line).split(config.item_sep) if item.strip()]
            for line in df[column]
            if pd.notna(line)
        ]

    if config.format == 'long':
        missing = [c for c in (config.transaction_col, config.item_col) if c not in df.columns]
        if missing:
            raise ValueError(f"Columns not found for long format: {missing}")
        rows = df[[config.transaction_col, config.item_col]].dropna()
        grouped = rows.groupby(config.transaction_col, sort=False)[config.item_col]
        return [[str(item) for item in items] for _, items in grouped]

    # tabular: one "column__value" item per non-null cell
    return prepare_transactions(df)


def load_transactions(config: DataConfig) -> List[List[str]]:
    df = load_data(config)
    transactions = to_transactions(df, config)
    logger.info("Loaded %d transactions from %s", len(transactions), config.path)
    return transactions


def create_miner(config: RuleMiningConfig) -> AprioriMiner:
    miner_type = config.miner_type.lower()

    if miner_type == 'apriori':
        cfg = config.miner_config
        return AprioriMiner(
            min_support=cfg.min_support,
            min_confidence=cfg.min_confidence,
            min_lift=cfg.min_lift,
            max_items=cfg.max_length or None
        )

    raise ValueError(f"Unknown miner type: {miner_type}")


def apply_filters(
    data: List[Dict],
    filters: List[FilterConfig],
    mode: str = 'rules'
) -> List[Dict]:
    """Apply each filter in turn; rule-only metrics are skipped for itemsets."""
    if not filters:
        return data

    result = data
    for f in filters:
        if mode == 'rules':
            result = filter_rules(result, criterion=f.metric, threshold=f.threshold)
        elif f.metric in ITEMSET_METRICS:
            result, _ = filter_itemsets(result, criterion=f.metric, threshold=f.threshold)

    return result


def run_rule_mining(
    transactions,
    config: RuleMiningConfig
) -> Tuple[Dict[str, List[Dict]], Dict[str, Any]]:
    """
    Mine itemsets and/or rules as selected by ``config.mode``.

    Returns:
        Tuple of (results, stats), both keyed by 'itemsets' and/or 'rules'
    """
    if config.mode not in ('rules', 'itemsets', 'both'):
        raise ValueError(f"Unknown mode: {config.mode}")

    miner = create_miner(config)
    mode = config.mode

    results = {}
    stats = {}

    if mode == 'both':
        itemsets, rules, stats = miner.mine_both(transactions)
        results['itemsets'] = apply_filters(itemsets, config.filters, mode='itemsets')
        results['rules'] = apply_filters(rules, config.filters, mode='rules')
        for key in ('itemsets', 'rules'):
            stats[key]['count'] = len(results[key])
        return results, stats

    if mode == 'itemsets':
        itemsets, itemset_stats = miner.mine_itemsets(transactions)
        itemsets = apply_filters(itemsets, config.filters, mode='itemsets')
        results['itemsets'] = itemsets
        stats['itemsets'] = itemset_stats
        stats['itemsets']['count'] = len(itemsets)

    if mode == 'rules':
        rules, rule_stats = miner.mine_rules(transactions)
        rules = apply_filters(rules, config.filters, mode='rules')
        results['rules'] = rules
        stats['rules'] = rule_stats
        stats['rules']['count'] = len(rules)

    return results, stats


def generate_output_filename(
    experiment_name: str,
    miner_type: str,
    mode: str,
    dataset_name: str
) -> str:
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return f"{timestamp}_{experiment_name}_{miner_type}_{mode}_{dataset_name}"
