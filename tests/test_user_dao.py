import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from user_directory.dao.base import AtomicCounter, ConcurrentMap
from user_directory.dao.user_dao import UserDAO, demo_users
from user_directory.models.user import User


def test_seeded_dao_allocates_after_highest_seed_id():
    dao = UserDAO(demo_users())

    user = dao.create("Ann Lee", "ann@example.com")

    assert user.id == 3
    assert dao.count() == 3


def test_counter_seeded_above_sparse_ids():
    now = datetime.now(timezone.utc)
    dao = UserDAO([User(id=7, name="Seven", email="s@e.co", createdAt=now)])

    assert dao.create("Eight", "e@e.co").id == 8


def test_empty_dao_starts_at_one():
    assert UserDAO().create("First", "f@x.io").id == 1


def test_instances_do_not_share_a_sequence():
    first, second = UserDAO(), UserDAO()
    first.create("One", "one@x.io")
    first.create("Two", "two@x.io")

    assert second.create("Other", "other@x.io").id == 1


def test_create_then_get_round_trip():
    dao = UserDAO()
    created = dao.create("Ann Lee", "ann@example.com")

    fetched = dao.get(created.id)

    assert fetched == created
    assert fetched.model_dump() == created.model_dump()
    assert created.createdAt.tzinfo is not None


def test_get_missing_returns_none():
    assert UserDAO().get(42) is None


def test_update_keeps_id_and_created_at():
    dao = UserDAO()
    original = dao.create("Ann Lee", "ann@example.com")

    updated = dao.update(original.id, "Ann Smith", "ann.smith@example.com")

    assert updated.id == original.id
    assert updated.createdAt == original.createdAt
    assert (updated.name, updated.email) == ("Ann Smith", "ann.smith@example.com")
    assert dao.get(original.id) == updated
    # the previous value object is not mutated
    assert original.name == "Ann Lee"


def test_update_missing_is_a_no_op():
    dao = UserDAO(demo_users())
    before = sorted(u.id for u in dao.list())

    assert dao.update(99, "Ghost", "ghost@x.io") is None
    assert sorted(u.id for u in dao.list()) == before
    assert dao.get(99) is None


def test_delete_reports_existence_and_is_idempotent():
    dao = UserDAO()
    user = dao.create("Ann Lee", "ann@example.com")

    assert dao.delete(user.id) is True
    assert dao.get(user.id) is None
    assert dao.delete(user.id) is False


def test_deleted_ids_are_not_reused():
    dao = UserDAO()
    user = dao.create("Ann Lee", "ann@example.com")
    dao.delete(user.id)

    assert dao.create("Bob Ray", "bob@example.com").id == user.id + 1


def test_user_is_frozen():
    user = UserDAO().create("Ann Lee", "ann@example.com")

    with pytest.raises(ValidationError):
        user.name = "Changed"


def test_concurrent_creates_get_distinct_increasing_ids():
    dao = UserDAO(demo_users())
    previous_max = max(u.id for u in dao.list())
    n = 400

    with ThreadPoolExecutor(max_workers=16) as pool:
        users = list(pool.map(lambda i: dao.create(f"User {i}", f"u{i}@x.io"), range(n)))

    ids = {u.id for u in users}
    assert len(ids) == n
    assert min(ids) > previous_max
    assert ids == set(range(previous_max + 1, previous_max + n + 1))
    assert dao.count() == n + 2


def test_concurrent_updates_and_reads_never_see_partial_users():
    dao = UserDAO()
    user = dao.create("Name 0", "u0@x.io")
    stop = threading.Event()
    seen: list[User] = []

    def reader():
        while not stop.is_set():
            seen.extend(dao.list())

    thread = threading.Thread(target=reader)
    thread.start()
    for i in range(1, 200):
        dao.update(user.id, f"Name {i}", f"u{i}@x.io")
    stop.set()
    thread.join()

    for snapshot in seen:
        suffix = snapshot.name.split()[-1]
        assert snapshot.email == f"u{suffix}@x.io"
        assert snapshot.createdAt == user.createdAt


# ── Storage primitives ────────────────────────────────────────────────────────

def test_atomic_counter_under_contention():
    counter = AtomicCounter()

    with ThreadPoolExecutor(max_workers=8) as pool:
        values = list(pool.map(lambda _: counter.increment(), range(1000)))

    assert sorted(values) == list(range(1, 1001))
    assert counter.value == 1000


def test_concurrent_map_basic_operations():
    table: ConcurrentMap[str, int] = ConcurrentMap(shards=4)
    table.set("a", 1)
    table.set("b", 2)

    assert table.get("a") == 1
    assert "b" in table
    assert len(table) == 2
    assert sorted(table.values()) == [1, 2]
    assert table.replace("a", lambda v: v + 10) == 11
    assert table.replace("missing", lambda v: v) is None
    assert "missing" not in table
    assert table.pop("a") == 11
    assert table.pop("a") is None
    assert len(table) == 1


def test_concurrent_map_rejects_zero_shards():
    with pytest.raises(ValueError):
        ConcurrentMap(shards=0)
