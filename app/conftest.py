import copy
import re
from typing import Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

from app.db.base import ConditionalWriteError, Database, get_db
from app.main import app
from app.services.s3.client import get_s3


def conditional_check_failed(operation: str = "PutItem") -> ClientError:
    return ClientError(
        {"Error": {"Code": "ConditionalCheckFailedException", "Message": "The conditional request failed"}},
        operation,
    )


def evaluate(condition, item: dict) -> bool:
    """boto3のCondition/Keyオブジェクトをアイテムに対して評価する"""
    expression = condition.get_expression()
    operator = expression["operator"]
    values = expression["values"]
    if operator == "AND":
        return all(evaluate(v, item) for v in values)
    if operator == "OR":
        return any(evaluate(v, item) for v in values)
    if operator == "NOT":
        return not evaluate(values[0], item)
    if operator == "=":
        return item.get(values[0].name) == values[1]
    if operator == "attribute_exists":
        return values[0].name in item
    if operator == "attribute_not_exists":
        return values[0].name not in item
    if operator == "contains":
        return values[1] in (item.get(values[0].name) or "")
    raise NotImplementedError(operator)


def _operand(token: str, item: dict, names: dict, values: dict):
    token = token.strip()
    if token.startswith(":"):
        return values[token]
    return item.get(names.get(token, token))


def evaluate_string(expression: str, item: dict, names: dict, values: dict) -> bool:
    """文字列の条件式を評価する（AND区切りの `a = :b` と `NOT contains(a, :b)` のみ）"""
    for clause in expression.split(" AND "):
        clause = clause.strip()
        negate = clause.startswith("NOT ")
        if negate:
            clause = clause[4:].strip()
        contains = re.fullmatch(r"contains\((\S+),\s*(\S+)\)", clause)
        if contains:
            haystack = _operand(contains.group(1), item, names, values) or ()
            result = _operand(contains.group(2), item, names, values) in haystack
        else:
            left, right = clause.split("=")
            result = _operand(left, item, names, values) == _operand(right, item, names, values)
        if result == negate:
            return False
    return True


def apply_update(expression: str, item: dict, names: dict, values: dict) -> List[str]:
    """SET（`a = b + :c` / `a = if_not_exists(a, :z) + :c` / `a = :b`）とADDを適用し、更新した属性名を返す"""
    sections = re.split(r"\b(SET|ADD)\b", expression)
    updated: List[str] = []
    for action, body in zip(sections[1::2], sections[2::2]):
        for part in body.split(","):
            part = part.strip()
            if not part:
                continue
            if action == "SET":
                target, value = (s.strip() for s in part.split("=", 1))
                attr = names.get(target, target)
                default = re.fullmatch(r"if_not_exists\((\S+),\s*(\S+)\)\s*\+\s*(\S+)", value)
                if default:
                    base = _operand(default.group(1), item, names, values)
                    if base is None:
                        base = values[default.group(2)]
                    item[attr] = base + values[default.group(3)]
                elif "+" in value:
                    left, right = value.split("+")
                    item[attr] = _operand(left, item, names, values) + _operand(right, item, names, values)
                else:
                    item[attr] = _operand(value, item, names, values)
            else:
                target, value = part.split()
                attr = names.get(target, target)
                addend = values[value]
                if isinstance(addend, set):
                    item[attr] = set(item.get(attr) or set()) | addend
                else:
                    item[attr] = item.get(attr, 0) + addend
            updated.append(attr)
    return updated


class FakeTable:
    """DynamoDBテーブルのインメモリ実装（テストで使う操作のみ）"""

    def __init__(self, key: str):
        self.key = key
        self.items: Dict[str, dict] = {}

    def get_item(self, Key: dict, ConsistentRead: bool = False) -> dict:
        item = self.items.get(Key[self.key])
        return {"Item": copy.deepcopy(item)} if item is not None else {}

    def put_item(self, Item: dict, ConditionExpression=None) -> dict:
        existing = self.items.get(Item[self.key], {})
        if ConditionExpression is not None and not evaluate(ConditionExpression, existing):
            raise conditional_check_failed("PutItem")
        self.items[Item[self.key]] = copy.deepcopy(Item)
        return {}

    def query(self, KeyConditionExpression, IndexName: Optional[str] = None, **kwargs) -> dict:
        return {"Items": [copy.deepcopy(i) for i in self.items.values() if evaluate(KeyConditionExpression, i)]}

    def scan(self, FilterExpression=None, ProjectionExpression=None, ExpressionAttributeNames=None, **kwargs) -> dict:
        items = [
            copy.deepcopy(i) for i in self.items.values()
            if FilterExpression is None or evaluate(FilterExpression, i)
        ]
        if ProjectionExpression:
            names = ExpressionAttributeNames or {}
            attrs = [names.get(a.strip(), a.strip()) for a in ProjectionExpression.split(",")]
            items = [{a: i[a] for a in attrs if a in i} for i in items]
        return {"Items": items}

    def update_item(
        self,
        Key: dict,
        UpdateExpression: str,
        ConditionExpression=None,
        ExpressionAttributeNames=None,
        ExpressionAttributeValues=None,
        ReturnValues: str = "NONE",
        **kwargs,
    ) -> dict:
        names = ExpressionAttributeNames or {}
        values = ExpressionAttributeValues or {}
        existing = self.items.get(Key[self.key])
        if ConditionExpression is not None:
            current = existing or {}
            if isinstance(ConditionExpression, str):
                matched = evaluate_string(ConditionExpression, current, names, values)
            else:
                matched = evaluate(ConditionExpression, current)
            if not matched:
                raise conditional_check_failed("UpdateItem")

        item = existing if existing is not None else dict(Key)
        updated = apply_update(UpdateExpression, item, names, values)
        self.items[Key[self.key]] = item
        if ReturnValues == "UPDATED_NEW":
            return {"Attributes": {a: copy.deepcopy(item[a]) for a in updated}}
        return {}


class InMemoryStreakCrud:
    """StreakCrudのインメモリ実装（versionによる条件付き更新を再現）"""

    def __init__(self, db=None):
        self.records: Dict[str, dict] = {}
        self.conflicts_remaining = 0

    def _maybe_conflict(self, profile_user_id: str):
        if self.conflicts_remaining > 0:
            self.conflicts_remaining -= 1
            raise ConditionalWriteError(profile_user_id)

    def get_streak(self, profile_user_id: str) -> Optional[dict]:
        record = self.records.get(profile_user_id)
        return copy.deepcopy(record) if record else None

    def create_streak(self, profile_user_id: str, watch_user_id: str) -> dict:
        self._maybe_conflict(profile_user_id)
        if profile_user_id in self.records:
            raise ConditionalWriteError(profile_user_id)
        self.records[profile_user_id] = {
            "profileUserId": profile_user_id,
            "watchUserIds": {watch_user_id},
            "count": 1,
            "version": 1,
        }
        return copy.deepcopy(self.records[profile_user_id])

    def add_watch_user(self, profile_user_id: str, watch_user_id: str, expected_version: int) -> int:
        self._maybe_conflict(profile_user_id)
        record = self.records[profile_user_id]
        if record["version"] != expected_version or watch_user_id in record["watchUserIds"]:
            raise ConditionalWriteError(profile_user_id)
        record["watchUserIds"].add(watch_user_id)
        record["count"] += 1
        record["version"] += 1
        return record["count"]


@pytest.fixture
def fake_db() -> Database:
    return Database(
        users=FakeTable("userId"),
        profiles=FakeTable("userId"),
        media=FakeTable("fileId"),
        streaks=FakeTable("profileUserId"),
    )


@pytest.fixture
def s3_mock():
    return MagicMock(name="S3ClientMock")


@pytest.fixture
def streak_store(monkeypatch):
    store = InMemoryStreakCrud()
    monkeypatch.setattr("app.domain.streak.streak_domain.StreakCrud", lambda db: store)
    return store


@pytest.fixture
def client(fake_db, s3_mock):
    app.dependency_overrides[get_db] = lambda: fake_db
    app.dependency_overrides[get_s3] = lambda: s3_mock
    with_client = TestClient(app)
    yield with_client
    app.dependency_overrides.clear()
