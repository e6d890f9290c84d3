#!/usr/bin/env python3
"""
Compare AWS costs between two months, grouped by service (or by usage type
when digging into a single service), with a full-month projection when the
second month is the current one.
"""

import argparse
import sys
from datetime import date

from cost_errors import CostCompareError
from cost_filters import build_filter, grouping_dimension
from cost_periods import DATE_FORMAT, default_starts, parse_date, resolve_periods
from fetch_costs import create_client, get_costs
from reconcile_costs import SORT_COLUMNS, SORT_ORDERS, reconcile, summarize
from render_report import key_header, render_csv, render_summary, render_table


def build_parser(today):
    previous_month_first, this_month_first = default_starts(today)

    parser = argparse.ArgumentParser(prog="aws-cct", description="AWS Cost Comparison Tool")
    parser.add_argument("--start", default=previous_month_first.strftime(DATE_FORMAT),
                        help="First month to compare (2020-01-01)")
    parser.add_argument("--end", default=this_month_first.strftime(DATE_FORMAT),
                        help="Second month to compare (2020-02-01)")
    parser.add_argument("--cost-metric", default="NetAmortizedCost",
                        help="Cost metric to compare (NetAmortizedCost, UnblendedCost, etc.)")
    parser.add_argument("--service", default=None, help="Service to dig into, groups by usage type")
    parser.add_argument("--tag", action="append", default=[],
                        help="Tag filter as key=value, may be repeated")
    parser.add_argument("--sort", choices=SORT_COLUMNS, default="name", help="Column to sort by")
    parser.add_argument("--sort-order", choices=SORT_ORDERS, default="asc", help="Sort order")
    parser.add_argument("--output", choices=("table", "csv"), default="table", help="Output format")
    parser.add_argument("--output-file", help="Write the report to this file instead of stdout")
    parser.add_argument("--profile", default=None, help="AWS profile name")
    parser.add_argument("--region", default=None, help="Cost Explorer region (default: $AWS_REGION or us-east-1)")
    parser.add_argument("--strict", action="store_true",
                        help="Fail on API or amount parsing errors instead of reporting zero costs")
    return parser


def run(args, today):
    first_start = parse_date(args.start)
    second_start = parse_date(args.end)
    first, second = resolve_periods(first_start, second_start, today)

    grouping = grouping_dimension(args.service)
    cost_filter = build_filter(args.service, args.tag)
    client = create_client(args.profile, args.region)

    print(f"Fetching {args.cost_metric} by {grouping} for {first.start} to {first.end}", file=sys.stderr)
    first_costs = get_costs(client, first.start, first.end, args.cost_metric, grouping,
                            cost_filter, args.strict)
    print(f"Fetching {args.cost_metric} by {grouping} for {second.start} to {second.end}", file=sys.stderr)
    second_costs = get_costs(client, second.start, second.end, args.cost_metric, grouping,
                             cost_filter, args.strict)
    if second.is_projection:
        print(f"Projecting {second.start} to a full month (x{second.projection_multiplier:.4f})",
              file=sys.stderr)

    result = reconcile(first_costs, second_costs, second.projection_multiplier,
                       args.sort, args.sort_order)

    labels = (key_header(grouping), first.label, second.label)
    if args.output == "csv":
        return render_csv(result, *labels)
    return "\n" + render_table(result, *labels) + "\n" + render_summary(summarize(result))


def main(argv=None, today=None):
    today = today or date.today()
    args = build_parser(today).parse_args(argv)

    try:
        report = run(args, today)
    except CostCompareError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output_file:
        with open(args.output_file, "w", encoding="utf-8", newline="") as f:
            f.write(report)
        print(f"Results saved to: {args.output_file}", file=sys.stderr)
    else:
        sys.stdout.write(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
