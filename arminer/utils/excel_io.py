import logging
import math
import pandas as pd
from pathlib import Path
from datetime import datetime
from typing import Dict, List, Any, Union

logger = logging.getLogger(__name__)


def _xlsx_path(output_path: Union[str, Path]) -> Path:
    output_path = Path(output_path)
    if output_path.suffix != '.xlsx':
        output_path = output_path.with_suffix('.xlsx')
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def save_rule_mining_results(
    rules: List[Dict[str, Any]],
    stats: Dict[str, Any],
    output_path: Union[str, Path],
    itemsets: List[Dict[str, Any]] = None,
    parameters: Dict[str, Any] = None,
    metadata: Dict[str, Any] = None
) -> Path:
    """
    Save rule mining results to Excel with multiple sheets.

    Sheets:
        - Rules: All mined rules with metrics (antecedents/consequents as text)
        - Itemsets: Frequent itemsets, when given
        - Summary: Aggregate statistics and metadata
        - Parameters: Algorithm parameters used

    Args:
        rules: List of rule dictionaries
        stats: Statistics dictionary from mining
        output_path: Output file path (will add .xlsx if needed)
        itemsets: Optional list of itemset dictionaries
        parameters: Algorithm parameters used
        metadata: Additional metadata (dataset name, timestamp, etc.)
    """
    output_path = _xlsx_path(output_path)

    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        if rules:
            rules_df = pd.DataFrame([format_rule_for_excel(r) for r in rules])
            rules_df.to_excel(writer, sheet_name='Rules', index=False)

        if itemsets:
            itemsets_df = pd.DataFrame([
                {**i, 'items': _format_itemset(i.get('items'))} for i in itemsets
            ])
            itemsets_df.to_excel(writer, sheet_name='Itemsets', index=False)

        summary_data = {
            'Metric': list(stats.keys()),
            'Value': [str(v) for v in stats.values()]
        }
        if metadata:
            summary_data['Metric'].extend(list(metadata.keys()))
            summary_data['Value'].extend(str(v) for v in metadata.values())
        pd.DataFrame(summary_data).to_excel(writer, sheet_name='Summary', index=False)

        if parameters:
            params_df = pd.DataFrame({
                'Parameter': list(parameters.keys()),
                'Value': [str(v) for v in parameters.values()]
            })
            params_df.to_excel(writer, sheet_name='Parameters', index=False)

    logger.info("Results saved to: %s", output_path)
    return output_path


def format_rule_for_excel(rule: Dict[str, Any]) -> Dict[str, Any]:
    """
    Format a rule dictionary for Excel output.

    Antecedents/consequents become "a AND b" strings, parseable by
    splitting on " AND ". Infinite conviction is written as "inf", since
    Excel cells cannot hold IEEE infinities.
    """
    formatted = rule.copy()

    for key in ['antecedents', 'consequents']:
        if key in formatted:
            formatted[key] = _format_itemset(formatted[key])

    value = formatted.get('conviction')
    if isinstance(value, float) and math.isinf(value):
        formatted['conviction'] = 'inf'

    return formatted


def _format_itemset(val: Any) -> str:
    if isinstance(val, str):
        return val
    if isinstance(val, (list, tuple, set, frozenset)):
        return ' AND '.join(str(item) for item in val)
    return str(val)


def save_rules_text(
    rules: List[Dict[str, Any]],
    output_path: Union[str, Path],
    title: str = "MINED RULES",
    metadata: Dict[str, Any] = None
) -> Path:
    """
    Save rules in human-readable text format.

    Args:
        rules: List of rule dictionaries with 'antecedents', 'consequents',
               'support', 'confidence', 'lift', etc.
        output_path: Output file path (will add .txt if needed)
        title: Title for the output file header
        metadata: Optional metadata to include in header
    """
    output_path = Path(output_path)
    if output_path.suffix != '.txt':
        output_path = output_path.with_suffix('.txt')
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        f.write("=" * 80 + "\n")
        f.write(f"{title}\n")
        f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        if metadata:
            for key, val in metadata.items():
                f.write(f"{key}: {val}\n")
        f.write("=" * 80 + "\n\n")

        if not rules:
            f.write("No rules found.\n")
        else:
            for i, rule in enumerate(rules, 1):
                _write_rule(f, rule, i)

        f.write("=" * 80 + "\n")
        f.write(f"Total rules: {len(rules)}\n")
        f.write("=" * 80 + "\n")

    logger.info("Rules saved to: %s", output_path)
    return output_path


def _format_metric(value, decimals=4):
    if isinstance(value, (int, float)):
        return f"{value:.{decimals}f}"
    return str(value) if value is not None else "N/A"


def _write_rule(f, rule: Dict[str, Any], rule_num: int):
    f.write(f"Rule #{rule_num}:\n")
    f.write(f"  IF {_format_itemset(rule.get('antecedents', 'N/A'))}\n")
    f.write(f"  THEN {_format_itemset(rule.get('consequents', 'N/A'))}\n\n")
    f.write("  Metrics:\n")

    metrics = [
        ('support', 'Support'),
        ('confidence', 'Confidence'),
        ('lift', 'Lift'),
        ('leverage', 'Leverage'),
        ('conviction', 'Conviction'),
    ]

    for key, label in metrics:
        if key in rule:
            f.write(f"    {label:18s} {_format_metric(rule[key])}\n")

    f.write("\n")
