from cost_filters import And, DimensionEquals, TagEquals, build_filter, grouping_dimension, parse_tag


def test_parse_tag_splits_on_first_equals():
    assert parse_tag("env=prod") == ("env", "prod")
    assert parse_tag("query=a=b") == ("query", "a=b")


def test_parse_tag_skips_malformed():
    assert parse_tag("env") is None
    assert parse_tag("env=") is None
    assert parse_tag("=prod") is None


def test_no_filter():
    assert build_filter() is None
    assert build_filter(None, ["env"]) is None


def test_single_tag():
    expr = build_filter(None, ["env", "env=prod"])
    assert expr == TagEquals("env", "prod")
    assert expr.to_expression() == {"Tags": {"Key": "env", "Values": ["prod"]}}


def test_single_service():
    expr = build_filter("Amazon Simple Storage Service")
    assert expr == DimensionEquals("SERVICE", "Amazon Simple Storage Service")
    assert expr.to_expression() == {
        "Dimensions": {"Key": "SERVICE", "Values": ["Amazon Simple Storage Service"]}
    }


def test_tags_then_service_are_anded():
    expr = build_filter("AWS Lambda", ["team=data", "bogus", "env=prod"])
    assert expr == And((TagEquals("team", "data"), TagEquals("env", "prod"),
                        DimensionEquals("SERVICE", "AWS Lambda")))
    assert expr.to_expression() == {
        "And": [
            {"Tags": {"Key": "team", "Values": ["data"]}},
            {"Tags": {"Key": "env", "Values": ["prod"]}},
            {"Dimensions": {"Key": "SERVICE", "Values": ["AWS Lambda"]}},
        ]
    }


def test_grouping_dimension():
    assert grouping_dimension(None) == "SERVICE"
    assert grouping_dimension("") == "SERVICE"
    assert grouping_dimension("Amazon Elastic Compute Cloud - Compute") == "USAGE_TYPE"
