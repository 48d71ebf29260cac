import pytest

from models.menu_management import MenuItem, SeasonalMenu
from services import catalog
from services.stock_overlay import SqlStockOverlay
from utils.exceptions import FormatError, NotFoundError, PermissionDeniedError


def _summer(db, **overrides):
    data = {
        "name": "Summer Special Menu",
        "start_date": "2024-06-01",
        "end_date": "2024-08-31",
        "start_time": "11:00",
        "end_time": "21:00",
    }
    data.update(overrides)
    return catalog.create_seasonal_menu(db, "hq", data)


def _item(db, name="Caesar Salad", **overrides):
    data = {"name": name, "price": 8.99, "category": "Salads"}
    data.update(overrides)
    return catalog.create_item(db, "hq", data)


def test_create_item_defaults(db):
    item = _item(db)
    assert item.base_price == 8.99
    assert item.is_available is True
    assert item.description == ""
    assert item.seasonal_menu_id is None


@pytest.mark.parametrize("role", ["branch", "customer"])
def test_only_headquarters_creates_and_deletes_items(db, role):
    item = _item(db)
    with pytest.raises(PermissionDeniedError):
        catalog.create_item(db, role, {"name": "Soup", "price": 5, "category": "Soups"})
    with pytest.raises(PermissionDeniedError):
        catalog.delete_item(db, role, item.id)


def test_branch_changes_price_but_not_base_price(db):
    item = _item(db)
    updated = catalog.update_item(db, "branch", item.id, {"price": 9.49})
    assert updated.price == 9.49
    assert updated.base_price == 8.99
    with pytest.raises(PermissionDeniedError):
        catalog.update_item(db, "branch", item.id, {"base_price": 7.0})
    assert catalog.update_item(db, "hq", item.id, {"base_price": 7.0}).base_price == 7.0


def test_customer_cannot_update(db):
    item = _item(db)
    with pytest.raises(PermissionDeniedError):
        catalog.update_item(db, "customer", item.id, {"name": "Free Salad"})


def test_update_missing_item(db):
    with pytest.raises(NotFoundError):
        catalog.update_item(db, "hq", 404, {"name": "Ghost"})


def test_list_items_filters_and_sorts(db):
    menu = _summer(db)
    _item(db, "Tiramisu", category="Desserts")
    _item(db, "Pepperoni Pizza", category="Pizza")
    _item(db, "Margherita Pizza", category="Pizza", seasonal_menu_id=menu.id)

    assert [item.name for item in catalog.list_items(db)] == ["Tiramisu", "Margherita Pizza", "Pepperoni Pizza"]
    assert [item.name for item in catalog.list_items(db, category="Pizza")] == ["Margherita Pizza", "Pepperoni Pizza"]
    assert [item.name for item in catalog.list_items(db, seasonal_menu_id=menu.id)] == ["Margherita Pizza"]


def test_assign_and_detach(db):
    menu = _summer(db)
    item = _item(db)
    assert catalog.assign_to_seasonal_menu(db, "hq", item.id, menu.id).seasonal_menu_id == menu.id
    assert [owned.id for owned in catalog.get_seasonal_menu(db, menu.id).items] == [item.id]
    assert catalog.remove_from_seasonal_menu(db, "hq", item.id).seasonal_menu_id is None


def test_assign_reports_missing_references(db):
    menu = _summer(db)
    item = _item(db)
    with pytest.raises(NotFoundError):
        catalog.assign_to_seasonal_menu(db, "hq", item.id, 999)
    with pytest.raises(NotFoundError):
        catalog.assign_to_seasonal_menu(db, "hq", 999, menu.id)
    with pytest.raises(NotFoundError):
        catalog.create_item(db, "hq", {"name": "Soup", "price": 5, "category": "Soups", "seasonal_menu_id": 999})


def test_branch_cannot_manage_seasonal_menus(db):
    with pytest.raises(PermissionDeniedError):
        catalog.create_seasonal_menu(db, "branch", {
            "name": "Branch Special", "start_date": "2024-06-01", "end_date": "2024-06-30",
            "start_time": "11:00", "end_time": "14:00",
        })


def test_malformed_seasonal_window_is_rejected(db):
    with pytest.raises(FormatError):
        _summer(db, start_time="11am")
    with pytest.raises(FormatError):
        _summer(db, end_date="2024-02-30")
    menu = _summer(db)
    with pytest.raises(FormatError):
        catalog.update_seasonal_menu(db, "hq", menu.id, {"end_time": "25:00"})


def test_seasonal_menus_keep_insertion_order(db):
    first = _summer(db, name="B first")
    second = _summer(db, name="A second")
    catalog.update_seasonal_menu(db, "hq", first.id, {"name": "Z renamed"})
    assert [menu.id for menu in catalog.list_seasonal_menus(db)] == [first.id, second.id]


def test_delete_seasonal_menu_detaches_every_item(db):
    menu = _summer(db)
    kept = _summer(db, name="Other")
    owned = [_item(db, f"Dish {n}", seasonal_menu_id=menu.id) for n in range(3)]
    other = _item(db, "Other dish", seasonal_menu_id=kept.id)

    assert catalog.delete_seasonal_menu(db, "hq", menu.id) == 3

    assert db.query(SeasonalMenu).filter(SeasonalMenu.id == menu.id).first() is None
    assert db.query(MenuItem).filter(MenuItem.seasonal_menu_id == menu.id).count() == 0
    assert all(catalog.get_item(db, item.id).seasonal_menu_id is None for item in owned)
    assert catalog.get_item(db, other.id).seasonal_menu_id == kept.id


def test_interrupted_delete_leaves_detached_items_and_can_be_retried(db, monkeypatch):
    menu = _summer(db)
    item = _item(db, seasonal_menu_id=menu.id)

    def fail(db, seasonal_menu_id):
        raise RuntimeError("storage went away")

    with monkeypatch.context() as patched:
        patched.setattr(catalog, "remove_seasonal_menu_record", fail)
        with pytest.raises(RuntimeError):
            catalog.delete_seasonal_menu(db, "hq", menu.id)

    # Intermediate state: menu still there, owns nothing
    assert catalog.get_seasonal_menu(db, menu.id) is not None
    assert catalog.get_item(db, item.id).seasonal_menu_id is None

    assert catalog.delete_seasonal_menu(db, "hq", menu.id) == 0
    with pytest.raises(NotFoundError):
        catalog.get_seasonal_menu(db, menu.id)


def test_delete_missing_seasonal_menu(db):
    with pytest.raises(NotFoundError):
        catalog.delete_seasonal_menu(db, "hq", 12)


def test_delete_item_removes_its_stock_everywhere(db):
    item = _item(db)
    overlay = SqlStockOverlay(db)
    overlay.set("branch-1", item.id, 0)
    overlay.set("branch-2", item.id, 3)

    catalog.delete_item(db, "hq", item.id)

    assert overlay.records_for_branch("branch-1") == []
    assert overlay.records_for_branch("branch-2") == []
    with pytest.raises(NotFoundError):
        catalog.get_item(db, item.id)


def test_update_checks_merged_date_order(db):
    menu = _summer(db)
    with pytest.raises(FormatError):
        catalog.update_seasonal_menu(db, "hq", menu.id, {"end_date": "2024-05-31"})
    with pytest.raises(FormatError):
        catalog.update_seasonal_menu(db, "hq", menu.id, {"end_time": None})
    updated = catalog.update_seasonal_menu(db, "hq", menu.id, {"start_date": "2024-07-01", "end_date": "2024-07-31"})
    assert (updated.start_date, updated.end_date, updated.end_time) == ("2024-07-01", "2024-07-31", "21:00")
