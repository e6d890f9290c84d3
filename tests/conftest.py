import boto3
import pytest
from botocore.stub import Stubber


def make_group(key, amount, metric="NetAmortizedCost"):
    return {"Keys": [key], "Metrics": {metric: {"Amount": amount, "Unit": "USD"}}}


def make_response(groups, start="2024-01-01", end="2024-02-01", token=None):
    resp = {
        "ResultsByTime": [
            {
                "TimePeriod": {"Start": start, "End": end},
                "Total": {},
                "Groups": groups,
                "Estimated": False,
            }
        ]
    }
    if token:
        resp["NextPageToken"] = token
    return resp


@pytest.fixture
def ce_client():
    client = boto3.client(
        "ce",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )
    with Stubber(client) as stubber:
        yield client, stubber
