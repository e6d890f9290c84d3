#!/usr/bin/env python3
"""Fetch grouped cost totals for a date range from AWS Cost Explorer."""

import os
import sys
from decimal import Decimal, InvalidOperation

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from cost_errors import FetchError, ParseError, SessionError
from cost_periods import DATE_FORMAT
from reconcile_costs import to_cents


def create_client(profile=None, region=None):
    """
    Create a Cost Explorer client, failing early if there are no credentials.

    The region is taken from the argument, then AWS_REGION, then the session
    (AWS_DEFAULT_REGION or the profile), then us-east-1.
    """
    try:
        session = boto3.Session(profile_name=profile) if profile else boto3.Session()
        if session.get_credentials() is None:
            raise SessionError("No AWS credentials found")
        region = region or os.getenv("AWS_REGION") or session.region_name or "us-east-1"
        return session.client("ce", region_name=region)
    except BotoCoreError as e:
        raise SessionError(f"Could not create AWS session: {e}") from e


def _as_text(day):
    return day if isinstance(day, str) else day.strftime(DATE_FORMAT)


def get_costs(client, start, end, metric, grouping, cost_filter=None, strict=False):
    """
    Returns the cost per grouping key for [start, end).

    Amounts are rounded to cents. Keys appearing in several monthly buckets
    are summed. API errors and unparsable amounts are reported on stderr and
    skipped unless strict is set.

    Args:
        client: boto3 Cost Explorer client.
        start, end (date | str): date range, end exclusive.
        metric (str): cost metric, e.g. NetAmortizedCost.
        grouping (str): dimension to group by (SERVICE or USAGE_TYPE).
        cost_filter: filter expression from cost_filters.build_filter, or None.
        strict (bool): raise FetchError/ParseError instead of degrading.

    Returns:
        dict: key -> Decimal amount.
    """
    kwargs = {
        "TimePeriod": {"Start": _as_text(start), "End": _as_text(end)},
        "Granularity": "MONTHLY",
        "Metrics": [metric],
        "GroupBy": [{"Type": "DIMENSION", "Key": grouping}],
    }
    if cost_filter is not None:
        kwargs["Filter"] = cost_filter.to_expression()

    costs = {}
    token = None
    while True:
        if token:
            kwargs["NextPageToken"] = token
        try:
            resp = client.get_cost_and_usage(**kwargs)
        except (ClientError, BotoCoreError) as e:
            message = f"Error fetching {metric} for {kwargs['TimePeriod']['Start']}: {e}"
            if strict:
                raise FetchError(message) from e
            print(message, file=sys.stderr)
            return {}

        for period in resp.get("ResultsByTime", []):
            for group in period.get("Groups", []):
                keys = group.get("Keys", [])
                if not keys:
                    continue
                raw_amount = group.get("Metrics", {}).get(metric, {}).get("Amount")
                try:
                    amount = Decimal(raw_amount)
                    if not amount.is_finite():
                        raise InvalidOperation(raw_amount)
                    amount = to_cents(amount)
                except (InvalidOperation, TypeError, ValueError) as e:
                    message = f"Error parsing {metric} amount {raw_amount!r} for {keys[0]}"
                    if strict:
                        raise ParseError(message) from e
                    print(message, file=sys.stderr)
                    continue
                costs[keys[0]] = costs.get(keys[0], Decimal("0.00")) + amount

        token = resp.get("NextPageToken")
        if not token:
            break
    return costs
