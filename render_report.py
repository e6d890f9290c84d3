#!/usr/bin/env python3
"""Text table and CSV rendering of a comparison result."""

from decimal import ROUND_HALF_UP, Decimal

import pandas as pd

KEY_HEADERS = {"SERVICE": "Service", "USAGE_TYPE": "UsageType"}
TOTAL_LABEL = "Total"
TENTH = Decimal("0.1")


def format_money(amount):
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_percent(value):
    return f"{Decimal(value).quantize(TENTH, rounding=ROUND_HALF_UP)}%"


def key_header(grouping):
    return KEY_HEADERS.get(grouping, grouping)


def _headers(key_label, first_label, second_label):
    return [key_label, first_label, second_label, "Delta", "Delta Percent"]


def _cells(key, first, second, delta, delta_percent, money):
    return [key, money(first), money(second), money(delta), format_percent(delta_percent)]


def _table_rows(result, money):
    rows = [_cells(r.key, r.first_amount, r.second_amount, r.delta, r.delta_percent, money)
            for r in result.rows]
    t = result.totals
    footer = _cells(TOTAL_LABEL, t.first, t.second, t.delta, t.delta_percent, money)
    return rows, footer


def render_table(result, key_label, first_label, second_label):
    """Fixed-width table: key column left-aligned, numbers right-aligned, Total footer."""
    headers = _headers(key_label, first_label, second_label)
    rows, footer = _table_rows(result, format_money)

    widths = [len(h) for h in headers]
    for row in rows + [footer]:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    def line(cells):
        parts = [f"{cells[0]:<{widths[0]}}"]
        parts += [f"{cell:>{width}}" for cell, width in zip(cells[1:], widths[1:])]
        return "  ".join(parts).rstrip()

    rule = "-" * (sum(widths) + 2 * (len(widths) - 1))
    lines = [rule, line(headers), rule]
    lines += [line(row) for row in rows]
    lines += [rule, line(footer), rule]
    return "\n".join(lines) + "\n"


def render_csv(result, key_label, first_label, second_label):
    """CSV with plain two-decimal amounts and a final Total row."""
    rows, footer = _table_rows(result, lambda amount: f"{amount:.2f}")
    df = pd.DataFrame(rows + [footer], columns=_headers(key_label, first_label, second_label))
    return df.to_csv(index=False)


def render_summary(stats):
    lines = [
        f"Keys compared: {stats['keys']}",
        f"Cost changes: {stats['increased']} increased, {stats['decreased']} decreased, "
        f"{stats['unchanged']} unchanged",
        f"New in second period: {stats['new']}",
        f"Missing from second period: {stats['removed']}",
    ]
    return "\n".join(lines) + "\n"
