#!/usr/bin/env python3
"""
Reconciles the cost maps of two periods into one comparison result.

Every key present in either period gets a row. Keys missing from a period
count as zero for that period. Second-period amounts are scaled by the
projection multiplier before deltas are computed.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal(100)

SORT_COLUMNS = ("name", "start", "end", "delta", "deltapercent")
SORT_ORDERS = ("asc", "desc")


@dataclass(frozen=True)
class ComparisonRow:
    key: str
    first_amount: Decimal
    second_amount: Decimal
    delta: Decimal
    delta_percent: Decimal


@dataclass(frozen=True)
class Totals:
    first: Decimal = ZERO
    second: Decimal = ZERO
    delta: Decimal = ZERO
    delta_percent: Decimal = ZERO


@dataclass(frozen=True)
class ComparisonResult:
    rows: list = field(default_factory=list)
    totals: Totals = field(default_factory=Totals)


def to_cents(amount):
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def percent_change(delta, base):
    if base == 0 or delta == 0:
        return Decimal(0)
    return delta / base * HUNDRED


def merge_keys(first_costs, second_costs):
    """Union of both maps' keys, each once, sorted case-sensitively."""
    keys = dict.fromkeys(first_costs)
    for key in second_costs:
        if key not in keys:
            keys[key] = None
    return sorted(keys)


def compare_key(key, first_costs, second_costs, multiplier=Decimal(1)):
    first_amount = to_cents(first_costs.get(key, ZERO))
    second_amount = to_cents(second_costs.get(key, ZERO) * multiplier)
    delta = second_amount - first_amount
    return ComparisonRow(key, first_amount, second_amount, delta,
                         percent_change(delta, first_amount))


def sum_rows(rows):
    total_first = sum((row.first_amount for row in rows), ZERO)
    total_second = sum((row.second_amount for row in rows), ZERO)
    total_delta = sum((row.delta for row in rows), ZERO)
    return Totals(total_first, total_second, total_delta,
                  percent_change(total_delta, total_first))


_SORT_KEYS = {
    "name": lambda row: row.key.lower(),
    "start": lambda row: row.first_amount,
    "end": lambda row: row.second_amount,
    "delta": lambda row: row.delta,
    "deltapercent": lambda row: row.delta_percent,
}


def sort_rows(rows, column="name", order="asc"):
    """Sort rows by a report column. Unknown columns sort by name."""
    sort_key = _SORT_KEYS.get(column, _SORT_KEYS["name"])
    return sorted(rows, key=sort_key, reverse=(order == "desc"))


def reconcile(first_costs, second_costs, multiplier=Decimal(1), sort_column="name", sort_order="asc"):
    """
    Build the comparison result for two periods.

    Args:
        first_costs (dict): key -> Decimal amount for the first period.
        second_costs (dict): key -> Decimal amount for the second period.
        multiplier (Decimal): projection multiplier applied to second-period amounts.
        sort_column (str): one of SORT_COLUMNS.
        sort_order (str): 'asc' or 'desc'.

    Returns:
        ComparisonResult: sorted rows plus totals.
    """
    multiplier = Decimal(multiplier)
    rows = [compare_key(key, first_costs, second_costs, multiplier)
            for key in merge_keys(first_costs, second_costs)]
    totals = sum_rows(rows)
    return ComparisonResult(sort_rows(rows, sort_column, sort_order), totals)


def summarize(result):
    """Count how keys moved between the two periods."""
    rows = result.rows
    return {
        "keys": len(rows),
        "increased": len([r for r in rows if r.delta > 0]),
        "decreased": len([r for r in rows if r.delta < 0]),
        "unchanged": len([r for r in rows if r.delta == 0]),
        "new": len([r for r in rows if r.first_amount == 0 and r.second_amount != 0]),
        "removed": len([r for r in rows if r.second_amount == 0 and r.first_amount != 0]),
    }
