import threading

import pytest

from storefront.catalog.models import PLACEHOLDER_IMAGE
from storefront.catalog.seed import default_catalog
from storefront.catalog.store import CatalogStore
from storefront.errors import CatalogValidationError


def _fields(**overrides):
    fields = {"title": "Course", "description": "Learn things", "price": "$10.00", "image": "https://img/1.png"}
    fields.update(overrides)
    return fields


def test_create_then_get_returns_same_record(store):
    created = store.create(_fields(tags=["a", "b", "a"], rating=4.5, reviews=3, featured=True, type="course"))

    assert created.id
    assert created.created_at is not None
    fetched = store.get(created.id)
    assert fetched == created
    assert store.get(created.id).created_at == created.created_at
    assert fetched.tags == ["a", "b", "a"]


def test_create_applies_defaults(store):
    product = store.create({"title": "X", "description": "Y"})

    assert product.price == "Free"
    assert product.image == PLACEHOLDER_IMAGE
    assert product.tags == []
    assert product.rating == 5
    assert product.reviews == 0
    assert product.featured is False
    assert product.type == "software"
    assert product.category == "General"
    assert product.join_link == "#"


def test_create_uses_configured_defaults():
    store = CatalogStore(default_price="$0", placeholder_image="https://img/none.png")
    product = store.create({"title": "X", "description": "Y"})
    assert product.price == "$0"
    assert product.image == "https://img/none.png"


def test_create_accepts_camel_case_join_link(store):
    product = store.create(_fields(joinLink="https://join.example.com"))
    assert product.join_link == "https://join.example.com"
    assert product.to_public()["joinLink"] == "https://join.example.com"


@pytest.mark.parametrize(
    "fields, bad_field",
    [
        ({"description": "Y"}, "title"),
        ({"title": "X"}, "description"),
        ({"title": "   ", "description": "Y"}, "title"),
        ({"title": "X", "description": "Y", "type": "hardware"}, "type"),
        ({"title": "X", "description": "Y", "tags": "solo"}, "tags"),
        ({"title": "X", "description": "Y", "reviews": "many"}, "reviews"),
    ],
)
def test_create_rejects_malformed_fields(store, fields, bad_field):
    with pytest.raises(CatalogValidationError) as exc:
        store.create(fields)
    assert bad_field in exc.value.field_errors
    assert store.count() == 0


def test_create_rejects_non_object(store):
    with pytest.raises(CatalogValidationError):
        store.create(["title", "description"])


def test_business_rules_are_not_enforced(store):
    product = store.create(_fields(rating=-3, image="not a url"))
    assert product.rating == -3
    assert product.image == "not a url"


def test_create_ignores_client_supplied_id_and_timestamp(store):
    product = store.create(_fields(id="chosen", createdAt="2000-01-01T00:00:00Z"))
    assert product.id != "chosen"
    assert product.created_at.year != 2000


def test_ids_are_unique(store):
    ids = {store.create(_fields()).id for _ in range(20)}
    assert len(ids) == 20


def test_empty_update_is_noop(store):
    product = store.create(_fields())
    assert store.update(product.id, {}) == product
    assert store.get(product.id) == product


def test_update_overwrites_only_supplied_fields(store):
    product = store.create(_fields(tags=["x"]))

    updated = store.update(product.id, {"title": "Z", "tags": ["y", "z"]})

    assert updated.title == "Z"
    assert updated.tags == ["y", "z"]
    assert updated.description == product.description
    assert updated.price == product.price
    assert updated.id == product.id
    assert updated.created_at == product.created_at
    assert store.get(product.id) == updated


def test_update_never_touches_id_or_created_at(store):
    product = store.create(_fields())
    updated = store.update(product.id, {"id": "other", "createdAt": "2000-01-01T00:00:00Z", "created_at": "2000-01-01T00:00:00Z"})
    assert updated.id == product.id
    assert updated.created_at == product.created_at
    assert store.get("other") is None


def test_update_unknown_id_returns_none(store):
    assert store.update("missing", {"title": "Z"}) is None


def test_update_validates_before_lookup(store):
    with pytest.raises(CatalogValidationError):
        store.update("missing", {"rating": "high"})


@pytest.mark.parametrize("partial", [{"title": None}, {"title": ""}, {"featured": "sometimes"}, {"type": "book"}])
def test_update_rejects_malformed_fields(store, partial):
    product = store.create(_fields())
    with pytest.raises(CatalogValidationError):
        store.update(product.id, partial)
    assert store.get(product.id) == product


def test_last_write_wins(store):
    product = store.create(_fields())
    store.update(product.id, {"price": "$1"})
    store.update(product.id, {"price": "$2"})
    assert store.get(product.id).price == "$2"


def test_delete_removes_record(store):
    product = store.create(_fields())

    assert store.delete(product.id) is True
    assert store.get(product.id) is None
    assert store.delete(product.id) is False
    assert store.count() == 0


def test_list_all_newest_first(store):
    a = store.create(_fields(title="A"))
    b = store.create(_fields(title="B"))
    assert [p.id for p in store.list_all()] == [b.id, a.id]


def test_list_all_sorted_after_mixed_operations(store):
    created = [store.create(_fields(title=f"P{i}")) for i in range(6)]
    store.update(created[0].id, {"title": "first, edited"})
    store.delete(created[3].id)
    store.update(created[5].id, {"featured": True})
    latest = store.create(_fields(title="latest"))

    listed = store.list_all()
    stamps = [p.created_at for p in listed]
    assert stamps == sorted(stamps, reverse=True)
    assert listed[0].id == latest.id
    assert listed[-1].id == created[0].id
    assert created[3].id not in {p.id for p in listed}


def test_list_all_empty(store):
    assert store.list_all() == []


def test_returned_products_are_copies(store):
    product = store.create(_fields(tags=["keep"]))
    product.tags.append("mutated")
    product.title = "changed"

    listed = store.list_all()[0]
    listed.tags.clear()

    stored = store.get(product.id)
    assert stored.tags == ["keep"]
    assert stored.title == "Course"


def test_seeded_store():
    store = CatalogStore(seed=default_catalog())
    assert store.count() == 4
    assert store.get("ecom-empire").type == "community"

    newest = store.create(_fields(title="New"))
    assert store.list_all()[0].id == newest.id


def test_concurrent_creates_are_serialized(store):
    def worker():
        for _ in range(25):
            store.create(_fields())

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    products = store.list_all()
    assert len(products) == 100
    assert len({p.id for p in products}) == 100


@pytest.mark.parametrize("bad", [{"featured": "yes"}, {"reviews": "3"}, {"rating": "4.5"}, {"reviews": 3.5}, {"title": 7}])
def test_input_types_are_not_coerced(store, bad):
    with pytest.raises(CatalogValidationError) as exc:
        store.create(_fields(**bad))
    assert set(bad) <= set(exc.value.field_errors)

    product = store.create(_fields())
    with pytest.raises(CatalogValidationError):
        store.update(product.id, bad)
    assert store.get(product.id) == product


def test_integer_rating_is_accepted(store):
    product = store.create(_fields(rating=4))
    assert product.rating == 4.0
    assert store.update(product.id, {"rating": 3}).rating == 3.0
