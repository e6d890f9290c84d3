#!/usr/bin/env python3
"""Cost Explorer filter expressions built from --service and --tag options."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DimensionEquals:
    key: str
    value: str

    def to_expression(self):
        return {"Dimensions": {"Key": self.key, "Values": [self.value]}}


@dataclass(frozen=True)
class TagEquals:
    key: str
    value: str

    def to_expression(self):
        return {"Tags": {"Key": self.key, "Values": [self.value]}}


@dataclass(frozen=True)
class And:
    expressions: tuple

    def to_expression(self):
        return {"And": [e.to_expression() for e in self.expressions]}


def parse_tag(text):
    """Split a key=value tag on the first '='. Returns None if either side is empty."""
    key, sep, value = text.partition("=")
    if not sep or not key or not value:
        return None
    return key, value


def build_filter(service=None, tags=()):
    """
    Combine tag and service predicates into a single filter expression.

    Malformed tags are skipped. Returns None when nothing is left to filter on.
    """
    predicates = []
    for tag in tags or ():
        parsed = parse_tag(tag)
        if parsed is None:
            continue
        predicates.append(TagEquals(*parsed))

    if service:
        predicates.append(DimensionEquals("SERVICE", service))

    if not predicates:
        return None
    if len(predicates) == 1:
        return predicates[0]
    return And(tuple(predicates))


def grouping_dimension(service=None):
    # Digging into one service breaks its cost down by usage type
    return "USAGE_TYPE" if service else "SERVICE"
