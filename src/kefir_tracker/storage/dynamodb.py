"""
Module: dynamodb.py
Description: Generic storage primitives over the single DynamoDB table.

Provides async put/get/update/delete/query operations with number
conversion, proper error handling and logging. Knows nothing about
entity kinds; key shapes come from storage.keys.

Key Components:
- EntityStore: Main client class for table operations
- SortKeyCondition: begins_with / equals / between on the sort key
- Number conversion: float <-> Decimal at the boto3 boundary
- Error handling: ClientErrors are logged and re-raised, never retried

Dependencies: boto3, botocore, decimal, typing
Author: Kefir Tracker Team
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from kefir_tracker.utils.errors import ItemNotFoundError
from kefir_tracker.utils.logger import get_logger
from kefir_tracker.utils.timeutils import now_iso

logger = get_logger(__name__)

KEY_ATTRIBUTES = ("PK", "SK")


def to_dynamo(value: Any) -> Any:
    """Convert floats (including nested ones) to Decimal for boto3."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_dynamo(v) for v in value]
    return value


def from_dynamo(value: Any) -> Any:
    """Convert Decimals returned by boto3 back to int or float."""
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, dict):
        return {k: from_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_dynamo(v) for v in value]
    return value


class SortKeyCondition:
    """
    A condition on the sort key of a query.

    Attributes:
        operator: 'begins_with', 'eq' or 'between'
        values: One value, or two for 'between'
    """

    def __init__(self, operator: str, *values: str):
        if operator not in ("begins_with", "eq", "between"):
            raise ValueError(f"Unsupported sort key operator: {operator}")
        if len(values) != (2 if operator == "between" else 1):
            raise ValueError(f"Wrong number of values for operator {operator}")
        self.operator = operator
        self.values = values

    @classmethod
    def begins_with(cls, prefix: str) -> "SortKeyCondition":
        return cls("begins_with", prefix)

    # equals and between serve exact-key and key-range reads for callers
    # outside the entity accessors; the accessors only use prefixes.
    @classmethod
    def equals(cls, value: str) -> "SortKeyCondition":
        return cls("eq", value)

    @classmethod
    def between(cls, low: str, high: str) -> "SortKeyCondition":
        return cls("between", low, high)

    def build(self, attribute: str):
        key = Key(attribute)
        if self.operator == "begins_with":
            return key.begins_with(self.values[0])
        if self.operator == "eq":
            return key.eq(self.values[0])
        return key.between(self.values[0], self.values[1])

    def __repr__(self):
        return f"SortKeyCondition(operator='{self.operator}', values={self.values})"


class EntityStore:
    """
    DynamoDB client for the single-table design.

    Every write is last-writer-wins; no operation spans more than one
    item, and nothing here retries. Transient backend errors (throttling,
    timeouts) propagate to the caller as ClientError.

    Attributes:
        table_name: Name of the DynamoDB table
        gsi1_index_name: Name of the secondary index keyed on GSI1PK/GSI1SK
        dynamodb: boto3 DynamoDB resource
        table: boto3 DynamoDB table resource

    Example:
        >>> store = EntityStore(table_name="kefir-dev-table")
        >>> await store.put({"PK": "USER#u1", "SK": "USER#u1", "email": "a@b.c"})
        >>> item = await store.get("USER#u1", "USER#u1")
    """

    def __init__(
        self,
        table_name: str,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        gsi1_index_name: str = "GSI1"
    ):
        """
        Initialize the store.

        Args:
            table_name: Name of the DynamoDB table
            region_name: AWS region
            endpoint_url: Optional endpoint override (DynamoDB Local)
            gsi1_index_name: Name of the GSI1 index

        Raises:
            ValueError: If table_name is empty or invalid
        """
        if not table_name or not isinstance(table_name, str):
            raise ValueError("table_name must be a non-empty string")

        self.table_name = table_name
        self.gsi1_index_name = gsi1_index_name
        self.dynamodb = boto3.resource('dynamodb', region_name=region_name, endpoint_url=endpoint_url)
        self.table = self.dynamodb.Table(table_name)

        logger.info(
            "Entity store initialized",
            table_name=table_name,
            endpoint_url=endpoint_url
        )

    async def put(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Unconditionally upsert a full item.

        Stamps ``updatedAt`` and drops attributes whose value is None.

        Args:
            item: Item including PK and SK

        Returns:
            The item as written

        Raises:
            ClientError: If DynamoDB operation fails
            ValueError: If the item has no PK/SK
        """
        if not isinstance(item, dict) or not all(item.get(k) for k in KEY_ATTRIBUTES):
            raise ValueError("item must be a dict with non-empty PK and SK")

        record = {k: v for k, v in item.items() if v is not None}
        record['updatedAt'] = now_iso()

        try:
            self.table.put_item(Item=to_dynamo(record))

            logger.debug(
                "Item stored in DynamoDB",
                pk=record['PK'],
                sk=record['SK'],
                table_name=self.table_name
            )
            return record

        except ClientError as e:
            logger.error(
                "Failed to store item in DynamoDB",
                pk=record['PK'],
                sk=record['SK'],
                table_name=self.table_name,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

    async def get(self, pk: str, sk: str) -> Optional[Dict[str, Any]]:
        """
        Point lookup by primary key.

        Returns:
            The item, or None when absent

        Raises:
            ClientError: If DynamoDB operation fails
        """
        try:
            response = self.table.get_item(Key={'PK': pk, 'SK': sk})

        except ClientError as e:
            logger.error(
                "Failed to retrieve item from DynamoDB",
                pk=pk,
                sk=sk,
                table_name=self.table_name,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

        if 'Item' not in response:
            return None
        return from_dynamo(response['Item'])

    async def update(self, pk: str, sk: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge named fields into an existing item.

        Fields with a value are SET, fields set to None are REMOVEd, and
        ``updatedAt`` is always refreshed. Unmentioned attributes are left
        alone. The item is never created.

        Args:
            pk: Partition key
            sk: Sort key
            fields: Attribute name -> new value (None to remove)

        Returns:
            The full item after the update

        Raises:
            ItemNotFoundError: If no item exists under (pk, sk)
            ClientError: If DynamoDB operation fails
            ValueError: If fields try to change key attributes
        """
        key_fields = {"PK", "SK", "GSI1PK", "GSI1SK"} & set(fields)
        if key_fields:
            raise ValueError(f"key attributes cannot be updated: {sorted(key_fields)}")

        set_parts = []
        remove_parts = []
        names = {'#pk': 'PK', '#updatedAt': 'updatedAt'}
        values: Dict[str, Any] = {':updatedAt': now_iso()}

        for index, (name, value) in enumerate(fields.items()):
            if name == 'updatedAt':
                continue
            name_key = f"#field{index}"
            names[name_key] = name
            if value is None:
                remove_parts.append(name_key)
            else:
                value_key = f":value{index}"
                set_parts.append(f"{name_key} = {value_key}")
                values[value_key] = to_dynamo(value)

        set_parts.append('#updatedAt = :updatedAt')
        expression = "SET " + ", ".join(set_parts)
        if remove_parts:
            expression += " REMOVE " + ", ".join(remove_parts)

        try:
            response = self.table.update_item(
                Key={'PK': pk, 'SK': sk},
                UpdateExpression=expression,
                ConditionExpression='attribute_exists(#pk)',
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues='ALL_NEW'
            )

        except ClientError as e:
            if e.response['Error']['Code'] == 'ConditionalCheckFailedException':
                logger.warning(
                    "Update targeted a missing item",
                    pk=pk,
                    sk=sk,
                    table_name=self.table_name
                )
                raise ItemNotFoundError(pk, sk) from e

            logger.error(
                "Failed to update item in DynamoDB",
                pk=pk,
                sk=sk,
                table_name=self.table_name,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

        return from_dynamo(response.get('Attributes', {}))

    async def delete(self, pk: str, sk: str) -> None:
        """
        Unconditionally delete an item; deleting a missing key is not an error.

        Raises:
            ClientError: If DynamoDB operation fails
        """
        try:
            self.table.delete_item(Key={'PK': pk, 'SK': sk})

            logger.debug(
                "Item deleted from DynamoDB",
                pk=pk,
                sk=sk,
                table_name=self.table_name
            )

        except ClientError as e:
            logger.error(
                "Failed to delete item from DynamoDB",
                pk=pk,
                sk=sk,
                table_name=self.table_name,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

    async def query(
        self,
        pk: str,
        condition: Optional[SortKeyCondition] = None,
        limit: Optional[int] = None,
        ascending: bool = True,
        index_name: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Range read within one partition.

        Follows LastEvaluatedKey until ``limit`` items are collected or
        the partition is exhausted.

        Args:
            pk: Partition key value (GSI1PK value when querying GSI1)
            condition: Optional sort key condition
            limit: Maximum number of items to return
            ascending: Sort key order; False returns most recent first
            index_name: Query the secondary index instead of the table

        Returns:
            Matching items in sort key order

        Raises:
            ClientError: If DynamoDB operation fails
            ValueError: If parameters are invalid
        """
        if limit is not None and limit <= 0:
            raise ValueError("limit must be positive")

        if index_name is None:
            partition_attr, sort_attr = 'PK', 'SK'
        elif index_name == self.gsi1_index_name:
            partition_attr, sort_attr = 'GSI1PK', 'GSI1SK'
        else:
            raise ValueError(f"Unknown index: {index_name}")

        key_condition = Key(partition_attr).eq(pk)
        if condition is not None:
            key_condition = key_condition & condition.build(sort_attr)

        kwargs: Dict[str, Any] = {
            'KeyConditionExpression': key_condition,
            'ScanIndexForward': ascending,
        }
        if index_name:
            kwargs['IndexName'] = index_name

        items: List[Dict[str, Any]] = []

        try:
            while True:
                if limit is not None:
                    kwargs['Limit'] = limit - len(items)

                response = self.table.query(**kwargs)
                items.extend(response.get('Items', []))

                last_key = response.get('LastEvaluatedKey')
                if not last_key or (limit is not None and len(items) >= limit):
                    break
                kwargs['ExclusiveStartKey'] = last_key

        except ClientError as e:
            logger.error(
                "Failed to query DynamoDB",
                pk=pk,
                condition=repr(condition),
                index_name=index_name,
                table_name=self.table_name,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

        return [from_dynamo(item) for item in items]
