import pytest

from people_directory.domain.models import Person, PersonDraft
from people_directory.infrastructure.persistence.in_memory import InMemoryPersonStore
from people_directory.ports.persistence import DuplicateKeyError


def _person(person_id: str, firstname: str, lastname: str, **extra) -> Person:
    return Person(id=person_id, firstname=firstname, lastname=lastname, birthDate=0, photo="p.png", **extra)


def _draft(firstname: str, lastname: str) -> PersonDraft:
    return PersonDraft(firstname=firstname, lastname=lastname, birthDate=0, photo="p.png")


def test_rejects_duplicate_ids_in_initial_data():
    with pytest.raises(ValueError):
        InMemoryPersonStore([_person("1", "John", "Doe"), _person("1", "Jane", "Roe")])


def test_rejects_duplicate_name_pairs_in_initial_data():
    with pytest.raises(ValueError):
        InMemoryPersonStore([_person("1", "John", "Doe"), _person("2", "JOHN", "doe")])


@pytest.mark.asyncio
async def test_empty_store_lists_nothing():
    assert await InMemoryPersonStore().list_all() == []


@pytest.mark.asyncio
async def test_insert_assigns_unique_ids_and_keeps_order():
    store = InMemoryPersonStore([_person("1", "John", "Doe")])

    first = await store.insert(_draft("Jane", "Roe"))
    second = await store.insert(_draft("Max", "Moe"))

    assert first.id != second.id
    assert [p.id for p in await store.list_all()] == ["1", first.id, second.id]


@pytest.mark.asyncio
async def test_insert_enforces_name_pair_constraint():
    store = InMemoryPersonStore([_person("1", "John", "Doe")])

    with pytest.raises(DuplicateKeyError):
        await store.insert(_draft("JOHN", "doe"))
    assert len(await store.list_all()) == 1


@pytest.mark.asyncio
async def test_get_by_id_returns_none_when_absent():
    store = InMemoryPersonStore([_person("1", "John", "Doe")])

    assert (await store.get_by_id("1")).firstname == "John"
    assert await store.get_by_id("2") is None


@pytest.mark.asyncio
async def test_returned_records_are_copies():
    store = InMemoryPersonStore([_person("1", "John", "Doe", address={"city": "Paris"})])

    person = await store.get_by_id("1")
    person.firstname = "Mutated"
    person.address["city"] = "Mutated"

    stored = await store.get_by_id("1")
    assert stored.firstname == "John"
    assert stored.address == {"city": "Paris"}


@pytest.mark.asyncio
async def test_update_merges_fields_and_keeps_id():
    store = InMemoryPersonStore([_person("1", "John", "Doe", city="Paris")])

    updated = await store.update_by_id("1", {"lastname": "Smith", "id": "forged"})

    assert updated.id == "1"
    assert updated.lastname == "Smith"
    assert updated.firstname == "John"
    assert updated.city == "Paris"


@pytest.mark.asyncio
async def test_update_missing_record_returns_none():
    assert await InMemoryPersonStore().update_by_id("404", {"lastname": "X"}) is None


@pytest.mark.asyncio
async def test_update_rejects_pair_held_by_another_record():
    store = InMemoryPersonStore([_person("1", "John", "Doe"), _person("2", "Jane", "Roe")])

    with pytest.raises(DuplicateKeyError):
        await store.update_by_id("2", {"firstname": "john", "lastname": "DOE"})
    assert (await store.get_by_id("2")).firstname == "Jane"


@pytest.mark.asyncio
async def test_remove_reports_whether_a_record_existed():
    store = InMemoryPersonStore([_person("1", "John", "Doe")])

    assert await store.remove_by_id("1") is True
    assert await store.remove_by_id("1") is False
    assert await store.list_all() == []


@pytest.mark.asyncio
async def test_separate_instances_do_not_share_records():
    first = InMemoryPersonStore()
    second = InMemoryPersonStore()

    await first.insert(_draft("John", "Doe"))

    assert await second.list_all() == []
