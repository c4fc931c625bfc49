"""
PostBoard Backend: In-Memory Store Tests
========================================

What we test:
    ✅ Create assigns an integer id in range and returns every field
    ✅ Create with a missing/empty field raises and leaves the store unchanged
    ✅ Lookups by unknown or non-numeric id return None
    ✅ Update merges, preserves untouched fields, unknown id changes nothing
    ✅ Delete removes exactly one record (and the legacy mode removes two)
"""

import random

import pytest

from postboard.exceptions import ValidationError
from postboard.resources import USERS
from postboard.schemas import User
from postboard.stores import InMemoryStore
from postboard.stores.memory import ID_UPPER_BOUND
from postboard.stores.seed import demo_users


class TestInMemoryCreate:
    @pytest.mark.asyncio
    async def test_create_then_get(self, user_store, sample_user):
        created = await user_store.create(sample_user)

        assert isinstance(created.id, int)
        assert 0 <= created.id < ID_UPPER_BOUND
        fetched = await user_store.get(str(created.id))
        assert fetched == created
        assert fetched.model_dump() == {"id": created.id, **sample_user}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["name", "email", "phone"])
    async def test_create_missing_field_does_not_mutate(self, user_store, sample_user, missing):
        body = dict(sample_user)
        del body[missing]

        with pytest.raises(ValidationError, match="All fields are required") as info:
            await user_store.create(body)

        assert info.value.context["fields"] == [missing]
        assert await user_store.count() == 0

    @pytest.mark.asyncio
    async def test_create_empty_string_is_missing(self, user_store, sample_user):
        with pytest.raises(ValidationError):
            await user_store.create({**sample_user, "email": ""})
        assert await user_store.count() == 0

    @pytest.mark.asyncio
    async def test_create_rejects_non_object_body(self, user_store):
        with pytest.raises(ValidationError):
            await user_store.create(None)
        with pytest.raises(ValidationError):
            await user_store.create(["A", "a@x.com", "1"])

    @pytest.mark.asyncio
    async def test_numbers_are_stored_as_strings(self, user_store):
        created = await user_store.create({"name": "A", "email": "a@x.com", "phone": 5551234})
        assert created.phone == "5551234"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("falsy", [0, 0.0, False])
    async def test_falsy_values_count_as_missing(self, user_store, sample_user, falsy):
        with pytest.raises(ValidationError) as info:
            await user_store.create({**sample_user, "phone": falsy})

        assert info.value.context["fields"] == ["phone"]
        assert await user_store.count() == 0

    @pytest.mark.asyncio
    async def test_true_is_a_present_value(self, user_store, sample_user):
        created = await user_store.create({**sample_user, "name": True})
        assert created.name == "true"

    @pytest.mark.asyncio
    async def test_extra_fields_are_ignored(self, user_store, sample_user):
        created = await user_store.create({**sample_user, "role": "admin"})
        assert "role" not in created.model_dump()

    @pytest.mark.asyncio
    async def test_ids_come_from_injected_rng(self, sample_user):
        first = InMemoryStore(USERS, rng=random.Random(7))
        second = InMemoryStore(USERS, rng=random.Random(7))

        a = await first.create(sample_user)
        b = await second.create(sample_user)

        assert a.id == b.id


class TestInMemoryLookup:
    @pytest.mark.asyncio
    async def test_list_preserves_insertion_order(self):
        store = InMemoryStore(USERS, seed=demo_users())
        ids = [user.id for user in await store.list()]
        assert ids == [10137, 96951, 60512]

    @pytest.mark.asyncio
    async def test_list_returns_a_copy(self, user_store, sample_user):
        await user_store.create(sample_user)
        records = await user_store.list()
        records.clear()
        assert await user_store.count() == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "bad_id", ["99999999", "abc", "", "1.5", "1_0137", "１０１３７", " 10137", "+10137"]
    )
    async def test_unknown_ids_are_not_found(self, bad_id):
        store = InMemoryStore(USERS, seed=demo_users())
        assert await store.get(bad_id) is None

    @pytest.mark.asyncio
    async def test_duplicate_ids_resolve_to_first(self):
        store = InMemoryStore(
            USERS,
            seed=[
                User(id=1, name="first", email="f@x.com", phone="1"),
                User(id=1, name="second", email="s@x.com", phone="2"),
            ],
        )
        found = await store.get("1")
        assert found.name == "first"


class TestInMemoryUpdate:
    @pytest.mark.asyncio
    async def test_partial_update_preserves_other_fields(self):
        store = InMemoryStore(USERS, seed=demo_users())

        updated = await store.update("96951", {"phone": "000"})

        assert updated.model_dump() == {
            "id": 96951,
            "name": "Suresh",
            "email": "suresh@gmail.com",
            "phone": "000",
        }
        assert (await store.get("96951")).phone == "000"

    @pytest.mark.asyncio
    async def test_update_with_own_values_is_invisible(self):
        store = InMemoryStore(USERS, seed=demo_users())
        before = await store.list()
        current = before[1]

        changes = USERS.parse_update(current.model_dump(exclude={"id"}))
        await store.update(str(current.id), changes)

        assert await store.list() == before

    @pytest.mark.asyncio
    async def test_update_unknown_id_leaves_store_unchanged(self):
        store = InMemoryStore(USERS, seed=demo_users())
        before = await store.list()

        assert await store.update("424242", {"name": "ghost"}) is None
        assert await store.list() == before


class TestInMemoryDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_exactly_one(self):
        store = InMemoryStore(USERS, seed=demo_users())
        before = await store.list()

        removed = await store.delete("10137")

        assert removed.id == 10137
        after = await store.list()
        assert len(after) == len(before) - 1
        assert await store.get("10137") is None
        assert after == [user for user in before if user.id != 10137]

    @pytest.mark.asyncio
    async def test_delete_unknown_id(self):
        store = InMemoryStore(USERS, seed=demo_users())
        assert await store.delete("1") is None
        assert await store.count() == 3

    @pytest.mark.asyncio
    async def test_legacy_delete_also_drops_the_next_record(self):
        store = InMemoryStore(USERS, seed=demo_users(), legacy_delete=True)

        removed = await store.delete("10137")

        assert removed.id == 10137
        assert [user.id for user in await store.list()] == [60512]

    @pytest.mark.asyncio
    async def test_legacy_delete_of_last_record_removes_one(self):
        store = InMemoryStore(USERS, seed=demo_users(), legacy_delete=True)
        await store.delete("60512")
        assert await store.count() == 2
