import pytest
from sqlalchemy.exc import IntegrityError

from backend.app.db.models.models_v1 import Supplier
from backend.services import suppliers
from backend.services.errors import ConflictError, NotFoundError


def test_create_then_get(db_session):
    s = suppliers.create(db_session, "PharmaTest", "test@pharma.sn")
    assert s.id is not None

    found = suppliers.get_by_id(db_session, s.id)
    assert found.name == "PharmaTest"
    assert found.email == "test@pharma.sn"
    assert found.categories == []


def test_get_unknown_supplier(db_session):
    with pytest.raises(NotFoundError):
        suppliers.get_by_id(db_session, 999)


def test_duplicate_name_rejected_by_storage(db_session):
    suppliers.create(db_session, "Doublon", "a@test.sn")
    with pytest.raises(IntegrityError):
        suppliers.create(db_session, "Doublon", "b@test.sn")


def test_find_by_name_and_email(db_session, make_supplier):
    make_supplier("EmailTest", "unique@email.sn")

    assert suppliers.find_by_name(db_session, "EmailTest").email == "unique@email.sn"
    assert suppliers.find_by_email(db_session, "unique@email.sn").name == "EmailTest"
    assert suppliers.find_by_name(db_session, "Absent") is None


def test_search_by_name_is_case_insensitive(db_session, make_supplier):
    make_supplier("PharmaPlus Test")
    make_supplier("MedSupply Test")

    names = [s.name for s in suppliers.search_by_name(db_session, "pHARma")]
    assert names == ["PharmaPlus Test"]


def test_search_by_name_treats_wildcards_literally(db_session, make_supplier):
    make_supplier("PharmaPlus", "plus@test.sn")
    make_supplier("Med_Supply", "med@test.sn")

    assert suppliers.search_by_name(db_session, "%") == []
    assert [s.name for s in suppliers.search_by_name(db_session, "_")] == ["Med_Supply"]
    assert [s.name for s in suppliers.search_by_name(db_session, "d_S")] == ["Med_Supply"]
    assert suppliers.search_by_name(db_session, "M_d") == []


def test_search_by_name_folds_accented_case(db_session, make_supplier):
    make_supplier("Établissements Diallo", "diallo@test.sn")
    make_supplier("Pharmacie du Port", "port@test.sn")

    assert [s.name for s in suppliers.search_by_name(db_session, "établissements")] == [
        "Établissements Diallo"
    ]
    assert [s.name for s in suppliers.search_by_name(db_session, "ÉTABLISSEMENTS")] == [
        "Établissements Diallo"
    ]


def test_update_applies_only_non_blank_fields(db_session, make_supplier):
    s = make_supplier("Avant", "avant@test.sn")

    suppliers.update(db_session, s.id, name="Après", email="   ")
    assert s.name == "Après"
    assert s.email == "avant@test.sn"

    suppliers.update(db_session, s.id, name=None, email="apres@test.sn")
    assert s.name == "Après"
    assert s.email == "apres@test.sn"


def test_update_unknown_supplier(db_session):
    with pytest.raises(NotFoundError):
        suppliers.update(db_session, 42, name="X")


def test_add_category_links_both_sides(db_session, make_supplier, make_category):
    s = make_supplier("Fournisseur")
    c = make_category("Antalgiques")

    suppliers.add_category(db_session, s.id, c.code)

    assert c in s.categories
    assert s in c.suppliers


def test_add_category_twice_is_a_conflict(db_session, make_supplier, make_category):
    s = make_supplier("Fournisseur")
    c = make_category("Antalgiques")
    suppliers.add_category(db_session, s.id, c.code)

    with pytest.raises(ConflictError):
        suppliers.add_category(db_session, s.id, c.code)

    assert s.categories == [c]
    assert c.suppliers == [s]


def test_add_category_unknown_sides(db_session, make_supplier, make_category):
    s = make_supplier("Fournisseur")
    c = make_category("Antalgiques")

    with pytest.raises(NotFoundError):
        suppliers.add_category(db_session, 999, c.code)
    with pytest.raises(NotFoundError):
        suppliers.add_category(db_session, s.id, 999)


def test_remove_category_is_idempotent(db_session, make_supplier, make_category):
    s = make_supplier("Fournisseur")
    linked = make_category("Antalgiques")
    other = make_category("Antibiotiques")
    suppliers.add_category(db_session, s.id, linked.code)

    suppliers.remove_category(db_session, s.id, other.code)
    assert s.categories == [linked]

    suppliers.remove_category(db_session, s.id, linked.code)
    assert s.categories == []
    assert linked.suppliers == []


def test_remove_category_unknown_category(db_session, make_supplier):
    s = make_supplier("Fournisseur")
    with pytest.raises(NotFoundError):
        suppliers.remove_category(db_session, s.id, 999)


def test_delete_detaches_from_categories(db_session, make_supplier, make_category):
    c = make_category("Antalgiques")
    gone = make_supplier("Partant", categories=(c,))
    stays = make_supplier("Restant", categories=(c,))

    suppliers.delete(db_session, gone.id)

    assert db_session.get(Supplier, gone.id) is None
    assert c.suppliers == [stays]
    assert suppliers.list_by_category_code(db_session, c.code) == [stays]


def test_delete_unknown_supplier(db_session):
    with pytest.raises(NotFoundError):
        suppliers.delete(db_session, 999)


def test_list_for_reorder(db_session, make_supplier, make_category, make_medication):
    low = make_category("Stock bas")
    ok = make_category("Stock ok")
    s_low = make_supplier("Concerné", categories=(low,))
    make_supplier("Pas concerné", categories=(ok,))

    # stock == niveau : inclus ici (<=)
    make_medication("Limite", low, stock=10, threshold=10)
    make_medication("Confortable", ok, stock=100, threshold=10)
    make_medication("Retiré", ok, stock=0, threshold=10, unavailable=True)

    assert suppliers.list_for_reorder(db_session, low.code) == [s_low]
    assert suppliers.list_for_reorder(db_session, ok.code) == []
