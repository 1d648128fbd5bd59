import pytest

from kds.exceptions import ValidationError
from kds.repositories.item_repository import ItemRepository


@pytest.fixture
def repo(db):
    return ItemRepository(db)


def test_create_applies_defaults(repo):
    item = repo.create(code=None, name="Pad Thai")

    assert item.code == ""
    assert item.price == 0
    assert item.category == ""
    assert item.created_at is not None


def test_ids_are_unique_and_increasing(repo):
    ids = [repo.create("C%d" % i, "Dish %d" % i, 1.5, "mains").id for i in range(5)]

    assert ids == sorted(ids)
    assert len(set(ids)) == 5


@pytest.mark.parametrize("name", ["", None])
def test_create_requires_name(repo, name):
    with pytest.raises(ValidationError, match="name required"):
        repo.create("C1", name, 3.0, "mains")

    assert repo.get_all() == []


@pytest.mark.parametrize("price", [-1, float("nan"), float("inf"), float("-inf")])
def test_create_rejects_negative_or_non_finite_price(repo, price):
    with pytest.raises(ValidationError, match="price must be >= 0"):
        repo.create("C1", "Soup", price, "starters")

    assert repo.get_all() == []


def test_get_all_newest_first(repo):
    a = repo.create("A", "Spring rolls")
    b = repo.create("B", "Green curry")

    assert [i.id for i in repo.get_all()] == [b.id, a.id]


def test_bulk_insert_and_latest(repo):
    inserted = repo.bulk_insert([
        {"code": "S1", "name": "Satay", "price": 6.5, "category": "starters"},
        {"name": "Rice"},
        {"code": "D1", "name": "Mango sticky rice", "price": 5, "category": "desserts"},
    ])

    assert inserted == 3
    assert [i.name for i in repo.latest(2)] == ["Mango sticky rice", "Rice"]
    rice = repo.latest(2)[1]
    assert (rice.code, rice.price, rice.category) == ("", 0, "")


def test_bulk_insert_nothing(repo):
    assert repo.bulk_insert([]) == 0
    assert repo.get_all() == []


def test_long_text_fields_are_stored_as_given(repo):
    name = "Chef's special " * 40

    item = repo.create("X" * 150, name, 9, "c" * 150)

    assert (item.code, item.name, item.category) == ("X" * 150, name, "c" * 150)
