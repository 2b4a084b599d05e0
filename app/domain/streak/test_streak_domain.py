import pytest
from unittest.mock import MagicMock
from app.domain.exceptions import SelfStreakError, StreakContentionError, StreakValidationError
from app.domain.streak.streak_domain import StreakDomain, StreakGrantResult, StreakStatus

@pytest.fixture
def db_mock():
    db = MagicMock(name="DatabaseMock")
    return db

@pytest.fixture
def streak_domain(db_mock, streak_store):
    return StreakDomain(db=db_mock, max_attempts=3)

def test_first_grant_creates_record(streak_domain, streak_store):
    result = streak_domain.add_streak("alice", "bob")
    assert result == StreakGrantResult(count=1, granted=True)
    assert streak_store.records["alice"]["watchUserIds"] == {"bob"}

def test_repeated_grant_is_not_granted_and_keeps_count(streak_domain, streak_store):
    streak_domain.add_streak("alice", "bob")
    result = streak_domain.add_streak("alice", "bob")
    assert result == StreakGrantResult(count=1, granted=False)
    assert streak_store.records["alice"]["count"] == 1

def test_self_grant_is_rejected_without_state_change(streak_domain, streak_store):
    with pytest.raises(SelfStreakError):
        streak_domain.add_streak("alice", "alice")
    assert streak_store.records == {}

@pytest.mark.parametrize("profile_user_id, watch_user_id", [("", "bob"), ("alice", ""), (None, "bob"), ("alice", None)])
def test_missing_ids_are_rejected(streak_domain, profile_user_id, watch_user_id):
    with pytest.raises(StreakValidationError):
        streak_domain.add_streak(profile_user_id, watch_user_id)

def test_two_distinct_watchers_count_two(streak_domain):
    streak_domain.add_streak("alice", "bob")
    result = streak_domain.add_streak("alice", "carol")
    assert result == StreakGrantResult(count=2, granted=True)
    assert streak_domain.check_streak("alice", "bob") == StreakStatus(count=2, has_granted=True)
    assert streak_domain.check_streak("alice", "carol") == StreakStatus(count=2, has_granted=True)
    assert streak_domain.get_streak_count("alice") == 2

def test_count_matches_distinct_watchers(streak_domain, streak_store):
    for watcher in ["bob", "carol", "bob", "dave", "carol"]:
        streak_domain.add_streak("alice", watcher)
    record = streak_store.records["alice"]
    assert record["count"] == len(record["watchUserIds"]) == 3

def test_check_without_record_returns_zero(streak_domain):
    assert streak_domain.check_streak("nobody", "bob") == StreakStatus(count=0, has_granted=False)
    assert streak_domain.get_streak_count("nobody") == 0

def test_check_other_watcher_is_not_granted(streak_domain):
    streak_domain.add_streak("alice", "bob")
    assert streak_domain.check_streak("alice", "carol") == StreakStatus(count=1, has_granted=False)

def test_concurrent_first_grant_is_retried_and_not_lost(streak_domain, streak_store):
    # 別のリクエストが先にレコードを作成した状態を再現
    original_create = streak_store.create_streak

    def create_after_other_writer(profile_user_id, watch_user_id):
        streak_store.create_streak = original_create
        original_create(profile_user_id, "carol")
        return original_create(profile_user_id, watch_user_id)

    streak_store.create_streak = create_after_other_writer
    result = streak_domain.add_streak("alice", "bob")
    assert result == StreakGrantResult(count=2, granted=True)
    assert streak_store.records["alice"]["watchUserIds"] == {"bob", "carol"}

def test_write_conflict_is_retried(streak_domain, streak_store):
    streak_store.conflicts_remaining = 2
    result = streak_domain.add_streak("alice", "bob")
    assert result == StreakGrantResult(count=1, granted=True)

def test_persistent_conflict_raises_contention(streak_domain, streak_store):
    streak_store.conflicts_remaining = 10
    with pytest.raises(StreakContentionError):
        streak_domain.add_streak("alice", "bob")
    assert streak_store.records == {}

def test_grants_through_dynamodb_table(fake_db):
    domain = StreakDomain(db=fake_db)
    assert domain.add_streak("alice", "bob") == StreakGrantResult(count=1, granted=True)
    assert domain.add_streak("alice", "carol") == StreakGrantResult(count=2, granted=True)
    assert domain.add_streak("alice", "bob") == StreakGrantResult(count=2, granted=False)

    item = fake_db.streaks.items["alice"]
    assert item["watchUserIds"] == {"bob", "carol"}
    assert item["count"] == 2
    assert item["version"] == 2
    assert domain.check_streak("alice", "carol") == StreakStatus(count=2, has_granted=True)
    assert domain.get_streak_count("alice") == 2
