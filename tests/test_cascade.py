"""Tests for catalog deletion cascades."""

from shoplist.api.dependencies import get_cascade_maintainer
from shoplist.main import app
from shoplist.models.shopping_list import ShoppingList
from shoplist.services.cascade import CascadeMaintainer
from shoplist.services.catalog import SqlCatalog
from shoplist.services.list_service import ShoppingListService


class FlakyListService(ShoppingListService):
    """List service whose re-materialization blows up for one list."""

    def __init__(self, db, failing_id):
        super().__init__(db)
        self.failing_id = failing_id

    def rematerialize(self, list_obj, manual_items=None, keep_checked=True):
        if list_obj.id == self.failing_id:
            raise RuntimeError("storage unavailable")
        super().rematerialize(list_obj, manual_items, keep_checked)


def create_list(client, headers, dish_ids, items=None):
    response = client.post(
        "/api/v1/lists",
        headers=headers,
        json={"name": "Courses", "dish_ids": dish_ids, "items": items or []},
    )
    assert response.status_code == 201
    return response.json()


def get_list(client, headers, list_id):
    response = client.get(f"/api/v1/lists/{list_id}", headers=headers)
    assert response.status_code == 200
    return response.json()


def test_ingredient_delete_purges_dishes(client, auth_headers, catalog):
    response = client.delete(f"/api/v1/ingredients/{catalog['butter']}", headers=auth_headers)
    assert response.status_code == 204

    crepes = client.get(f"/api/v1/dishes/{catalog['crepes']}").json()
    assert [ref["ingredient_id"] for ref in crepes["ingredients"]] == [
        catalog["flour"],
        catalog["eggs"],
    ]


def test_ingredient_delete_drops_only_that_line(client, auth_headers, catalog):
    data = create_list(client, auth_headers, [catalog["crepes"], catalog["cake"]])
    client.post(f"/api/v1/lists/{data['id']}/items/{catalog['eggs']}/check", headers=auth_headers)
    before = get_list(client, auth_headers, data["id"])["items"]

    response = client.delete(f"/api/v1/ingredients/{catalog['sugar']}", headers=auth_headers)
    assert response.status_code == 204

    after = get_list(client, auth_headers, data["id"])
    assert after["items"] == [item for item in before if item["ingredient_id"] != catalog["sugar"]]
    assert after["dish_ids"] == [catalog["crepes"], catalog["cake"]]


def test_ingredient_delete_does_not_resum_quantities(client, auth_headers, catalog):
    data = create_list(client, auth_headers, [catalog["crepes"], catalog["cake"]])
    client.put(
        f"/api/v1/dishes/{catalog['crepes']}",
        headers=auth_headers,
        json={"ingredients": [{"ingredient_id": catalog["flour"], "quantity": 100, "unit": "g"}]},
    )

    client.delete(f"/api/v1/ingredients/{catalog['sugar']}", headers=auth_headers)

    items = {i["ingredient_name"]: i for i in get_list(client, auth_headers, data["id"])["items"]}
    # Remaining lines keep the totals computed when the list was last materialized
    assert items["Farine"]["quantity"] == 450
    assert items["beurre"]["quantity"] is None


def test_ingredient_delete_leaves_unrelated_lists(client, auth_headers, catalog):
    unrelated = create_list(client, auth_headers, [catalog["crepes"]])

    client.delete(f"/api/v1/ingredients/{catalog['sugar']}", headers=auth_headers)

    assert get_list(client, auth_headers, unrelated["id"])["items"] == unrelated["items"]


def test_dish_delete_rematerializes_lists(client, auth_headers, catalog):
    data = create_list(client, auth_headers, [catalog["crepes"], catalog["cake"]])
    client.post(f"/api/v1/lists/{data['id']}/items/{catalog['flour']}/check", headers=auth_headers)

    response = client.delete(f"/api/v1/dishes/{catalog['cake']}", headers=auth_headers)
    assert response.status_code == 204

    after = get_list(client, auth_headers, data["id"])
    assert after["dish_ids"] == [catalog["crepes"]]
    items = {i["ingredient_name"]: i for i in after["items"]}
    assert list(items) == ["beurre", "Farine", "Œufs"]
    assert items["Farine"]["quantity"] == 250
    assert items["Farine"]["checked"] is True
    assert items["beurre"]["quantity"] == 50
    assert items["beurre"]["unit"] == "g"


def test_dish_delete_drops_manual_entries(client, auth_headers, catalog):
    manual = [{"ingredient_id": catalog["sugar"], "ingredient_name": "Sucre", "quantity": 1}]
    data = create_list(client, auth_headers, [catalog["crepes"], catalog["cake"]], manual)

    client.delete(f"/api/v1/dishes/{catalog['cake']}", headers=auth_headers)

    after = get_list(client, auth_headers, data["id"])
    assert catalog["sugar"] not in {i["ingredient_id"] for i in after["items"]}


def test_dish_cascade_is_best_effort(client, auth_headers, catalog, db):
    first = create_list(client, auth_headers, [catalog["cake"]])
    second = create_list(client, auth_headers, [catalog["crepes"], catalog["cake"]])

    db.delete(SqlCatalog(db).get_dish(catalog["cake"]))
    db.commit()

    maintainer = CascadeMaintainer(db, FlakyListService(db, first["id"]))
    report = maintainer.on_dish_deleted(catalog["cake"])

    assert report.failed == [first["id"]]
    assert report.updated == [second["id"]]
    assert not report.ok

    # The failed list is left exactly as it was
    untouched = db.get(ShoppingList, first["id"])
    assert untouched.dish_ids == [catalog["cake"]]
    assert untouched.items == first["items"]

    assert db.get(ShoppingList, second["id"]).dish_ids == [catalog["crepes"]]


def test_failed_cascade_keeps_the_deletion(client, auth_headers, catalog, db):
    data = create_list(client, auth_headers, [catalog["cake"]])
    app.dependency_overrides[get_cascade_maintainer] = lambda: CascadeMaintainer(
        db, FlakyListService(db, data["id"])
    )

    response = client.delete(f"/api/v1/dishes/{catalog['cake']}", headers=auth_headers)
    assert response.status_code == 204

    assert client.get(f"/api/v1/dishes/{catalog['cake']}").status_code == 404
    assert get_list(client, auth_headers, data["id"])["dish_ids"] == [catalog["cake"]]


def test_cascade_report_for_unused_ingredient(db):
    report = CascadeMaintainer(db).on_ingredient_deleted("never-used")

    assert report.ok
    assert report.updated == []
