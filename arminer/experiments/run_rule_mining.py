"""
Rule Mining Experiment: Market Basket

Mines association rules with Apriori over a sweep of minimum support
values and writes the rules, a per-run summary and the parameters to an
Excel workbook plus a plain-text report for the last run.

Usage:
    python -m arminer.experiments.run_rule_mining --data baskets.txt --min-confidence 0.6
"""
import argparse
import logging
from pathlib import Path
from datetime import datetime

from arminer.experiments.config import DataConfig, AprioriConfig, RuleMiningConfig, FilterConfig
from arminer.experiments.base import load_transactions, run_rule_mining, generate_output_filename
from arminer.postprocessing.rule import sort_rules
from arminer.utils.excel_io import save_rule_mining_results, save_rules_text, format_rule_for_excel

logger = logging.getLogger(__name__)

# =============================================================================
# CONFIGURATION
# =============================================================================

OUTPUT_DIR = "./out/market_basket_rules"

SAMPLE_TRANSACTIONS = [
    ['beer', 'nuts', 'cheese'],
    ['beer', 'nuts', 'jam'],
    ['beer', 'butter'],
    ['nuts', 'cheese'],
    ['beer', 'nuts', 'cheese', 'jam'],
    ['butter'],
    ['beer', 'nuts', 'jam', 'butter'],
    ['jam'],
]

SUPPORT_SWEEP = [0.1, 0.25]
MIN_CONFIDENCE = 0.5
MIN_LIFT = 0.0
MAX_LENGTH = 0

# Post-mining filter thresholds
MIN_LEVERAGE = 0.01


# =============================================================================
# EXPERIMENT
# =============================================================================

def run_experiment(
    data_path: str = None,
    data_format: str = 'basket',
    item_sep: str = ',',
    transaction_col: str = 'transaction_id',
    item_col: str = 'item',
    output_dir: str = OUTPUT_DIR,
    support_sweep=None,
    min_confidence: float = MIN_CONFIDENCE,
    min_lift: float = MIN_LIFT,
    max_length: int = MAX_LENGTH
):
    support_sweep = support_sweep or SUPPORT_SWEEP

    print("=" * 70)
    print("MARKET BASKET RULE MINING EXPERIMENT")
    print("=" * 70)

    print("\n[1] Loading data...")
    if data_path:
        data_config = DataConfig(path=data_path, name=Path(data_path).stem,
                                 format=data_format, item_sep=item_sep,
                                 transaction_col=transaction_col, item_col=item_col)
        transactions = load_transactions(data_config)
    else:
        data_config = DataConfig(path=None, name='sample')
        transactions = SAMPLE_TRANSACTIONS
    print(f"  Transactions: {len(transactions)}")

    all_results = []

    for min_support in support_sweep:
        print(f"\n{'=' * 70}")
        print(f"MIN SUPPORT: {min_support}")
        print("=" * 70)

        config = RuleMiningConfig(
            miner_config=AprioriConfig(
                min_support=min_support,
                min_confidence=min_confidence,
                min_lift=min_lift,
                max_length=max_length
            ),
            mode='both',
            filters=[FilterConfig('leverage', MIN_LEVERAGE)] if MIN_LEVERAGE else []
        )

        try:
            results, stats = run_rule_mining(transactions, config)
            rules = sort_rules(results['rules'], by='lift')
            print(f"  Frequent itemsets: {len(results['itemsets'])}")
            print(f"  Rules: {len(rules)}")

            all_results.append({
                'min_support': min_support,
                'rules': rules,
                'itemsets': results['itemsets'],
                'stats': stats,
                'num_rules': len(rules)
            })

        except ValueError as e:
            logger.error("Mining failed for min_support=%s: %s", min_support, e)
            all_results.append({
                'min_support': min_support,
                'rules': [],
                'itemsets': [],
                'stats': {'error': str(e)},
                'num_rules': 0
            })

    print(f"\n{'=' * 70}")
    print("SAVING RESULTS")
    print("=" * 70)

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    all_rules = []
    for result in all_results:
        for rule in result['rules']:
            all_rules.append({'min_support_run': result['min_support'], **rule})

    summary = {}
    for result in all_results:
        prefix = f"min_support={result['min_support']}"
        summary[f"{prefix} num_rules"] = result['num_rules']
        summary[f"{prefix} num_itemsets"] = len(result['itemsets'])
        if 'error' in result['stats']:
            summary[f"{prefix} error"] = result['stats']['error']

    params = {
        'data_path': data_path or 'sample',
        'support_sweep': str(support_sweep),
        'min_confidence': min_confidence,
        'min_lift': min_lift,
        'max_length': max_length,
        'timestamp': datetime.now().isoformat()
    }

    filename = generate_output_filename('market_basket', 'apriori', 'both', data_config.name)
    excel_path = save_rule_mining_results(
        rules=all_rules,
        stats=summary,
        output_path=output_path / filename,
        itemsets=all_results[-1]['itemsets'] if all_results else None,
        parameters=params,
        metadata={'num_transactions': len(transactions)}
    )
    text_path = save_rules_text(
        [format_rule_for_excel(r) for r in all_results[-1]['rules']] if all_results else [],
        output_path / filename,
        title=f"APRIORI RULES (min_support={support_sweep[-1]})",
        metadata=params
    )

    print(f"\n{'=' * 70}")
    print("EXPERIMENT COMPLETE")
    print("=" * 70)
    for r in all_results:
        print(f"  min_support={r['min_support']}: {r['num_rules']} rules")
    print(f"\nTotal rules: {len(all_rules)}")
    print(f"Output: {excel_path}")
    print(f"Report: {text_path}")
    print("=" * 70)

    return all_results


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Mine association rules with Apriori")
    parser.add_argument('--data', dest='data_path', default=None,
                        help="Transaction file (defaults to the built-in sample)")
    parser.add_argument('--format', dest='data_format', default='basket',
                        choices=['basket', 'long', 'tabular'])
    parser.add_argument('--sep', dest='item_sep', default=',', help="Item separator for basket files")
    parser.add_argument('--transaction-col', default='transaction_id',
                        help="Transaction id column for long files")
    parser.add_argument('--item-col', default='item', help="Item column for long files")
    parser.add_argument('--output-dir', default=OUTPUT_DIR)
    parser.add_argument('--min-support', dest='support_sweep', type=float, nargs='+', default=None)
    parser.add_argument('--min-confidence', type=float, default=MIN_CONFIDENCE)
    parser.add_argument('--min-lift', type=float, default=MIN_LIFT)
    parser.add_argument('--max-length', type=int, default=MAX_LENGTH)
    parser.add_argument('-v', '--verbose', action='store_true', help="Log each search level")
    return parser.parse_args(argv)


if __name__ == '__main__':
    args = vars(parse_args())
    verbose = args.pop('verbose')
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    run_experiment(**args)
