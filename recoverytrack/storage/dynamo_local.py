from decimal import Decimal
import json
import logging

import boto3
from botocore.exceptions import ClientError
from pydantic import ValidationError

from recoverytrack.models.session import Session
from recoverytrack.storage.base import SessionStore

logger = logging.getLogger(__name__)


def _convert_floats(obj):
    """Recursively convert floats to Decimal for DynamoDB."""
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, dict):
        return {k: _convert_floats(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_convert_floats(i) for i in obj]
    return obj


def _convert_decimals(obj):
    """Recursively convert Decimals back to float/int."""
    if isinstance(obj, Decimal):
        if obj == int(obj):
            return int(obj)
        return float(obj)
    if isinstance(obj, dict):
        return {k: _convert_decimals(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_convert_decimals(i) for i in obj]
    return obj


_KEY_ATTR = "session_key"


class DynamoLocalSessionStore(SessionStore):
    """One item per session key; put_item replaces the whole session atomically."""

    def __init__(
        self,
        endpoint_url: str = "http://localhost:8000",
        region: str = "us-east-1",
        table_name: str = "Sessions",
    ):
        self._resource = boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id="local",
            aws_secret_access_key="local",
        )
        self._table_name = table_name
        self._ensure_table()

    def _ensure_table(self):
        existing = {t.name for t in self._resource.tables.all()}
        if self._table_name in existing:
            return
        self._resource.create_table(
            TableName=self._table_name,
            KeySchema=[{"AttributeName": _KEY_ATTR, "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": _KEY_ATTR, "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )

    def _table(self):
        return self._resource.Table(self._table_name)

    def _to_item(self, key: str, session: Session) -> dict:
        data = json.loads(session.model_dump_json())
        data[_KEY_ATTR] = key
        return _convert_floats(data)

    def load(self, key: str) -> Session | None:
        try:
            resp = self._table().get_item(Key={_KEY_ATTR: key})
        except ClientError:
            return None
        item = resp.get("Item")
        if not item:
            return None
        data = _convert_decimals(item)
        data.pop(_KEY_ATTR, None)
        try:
            return Session.model_validate(data)
        except ValidationError as e:
            logger.warning("Discarding corrupt session %r: %s", key, e)
            self.delete(key)
            return None

    def save(self, key: str, session: Session) -> None:
        self._table().put_item(Item=self._to_item(key, session))

    def delete(self, key: str) -> None:
        self._table().delete_item(Key={_KEY_ATTR: key})
