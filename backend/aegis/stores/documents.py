import asyncio
from decimal import Decimal
from enum import auto
from typing import Any

import boto3
from boto3.dynamodb.conditions import Attr

from aegis.config import config
from aegis.utils.types import EnumAutoStr


class TableName(EnumAutoStr):
    Season = auto()
    Tournament = auto()
    Profile = auto()
    Team = auto()
    Matches = auto()
    Miscellaneous = auto()


_TABLE_KEYS: dict[TableName, str] = {
    TableName.Season: "SeasonPId",
    TableName.Tournament: "TournamentPId",
    TableName.Profile: "ProfilePId",
    TableName.Team: "TeamPId",
    TableName.Matches: "MatchPId",
    TableName.Miscellaneous: "Key",
}


def table_key(table: TableName) -> str:
    return _TABLE_KEYS[table]


def from_dynamo_value(value: Any) -> Any:
    """DynamoDB returns every number as `Decimal`, turn them back into ints and floats."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {key: from_dynamo_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [from_dynamo_value(item) for item in value]
    return value


class DocumentStore:
    """
    Thin async facade over DynamoDB tables.

    boto3 is blocking, every call is pushed to a worker thread so that each store access is
    a single suspension point for the caller.
    """

    def __init__(self, resource: Any) -> None:
        self._resource = resource

    @classmethod
    def from_config(cls) -> "DocumentStore":
        return cls(
            boto3.resource(
                "dynamodb",
                region_name=config.aws_region,
                endpoint_url=config.dynamodb_endpoint_url,
            )
        )

    def _table(self, table: TableName) -> Any:
        return self._resource.Table(table.value)

    async def get_item(self, table: TableName, key: str | int) -> dict[str, Any] | None:
        response = await asyncio.to_thread(
            self._table(table).get_item, Key={table_key(table): key}
        )
        item = response.get("Item")
        return None if item is None else from_dynamo_value(item)

    async def put_item(self, table: TableName, item: dict[str, Any], key: str | int) -> None:
        await asyncio.to_thread(self._table(table).put_item, Item={**item, table_key(table): key})

    async def scan_table(
        self,
        table: TableName,
        projected_fields: list[str],
        filter_field: str | None = None,
        filter_value: Any = None,
    ) -> list[dict[str, Any]]:
        attribute_names = {f"#p{i}": field for i, field in enumerate(projected_fields)}
        scan_kwargs: dict[str, Any] = {
            "ProjectionExpression": ", ".join(attribute_names),
            "ExpressionAttributeNames": attribute_names,
        }
        if filter_field is not None:
            scan_kwargs["FilterExpression"] = Attr(filter_field).eq(filter_value)

        items: list[dict[str, Any]] = []
        while True:
            response = await asyncio.to_thread(self._table(table).scan, **scan_kwargs)
            items.extend(from_dynamo_value(item) for item in response.get("Items", []))
            if "LastEvaluatedKey" not in response:
                return items
            scan_kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]

    async def update_item(
        self,
        table: TableName,
        key: str | int,
        update_expression: str,
        attribute_names: dict[str, str],
        attribute_values: dict[str, Any],
    ) -> None:
        await asyncio.to_thread(
            self._table(table).update_item,
            Key={table_key(table): key},
            UpdateExpression=update_expression,
            ExpressionAttributeNames=attribute_names,
            ExpressionAttributeValues=attribute_values,
        )
