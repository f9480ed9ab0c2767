def test_create_and_get_supplier(client):
    r = client.post("/api/fournisseurs", params={"nom": "PharmaPlus", "email": "contact@pharmaplus.sn"})
    assert r.status_code == 201, r.text
    created = r.json()
    assert created["nom"] == "PharmaPlus"
    assert created["email"] == "contact@pharmaplus.sn"
    assert created["categorieLibelles"] == []

    r = client.get(f"/api/fournisseurs/{created['id']}")
    assert r.status_code == 200
    assert r.json() == created


def test_get_unknown_supplier_is_404(client):
    r = client.get("/api/fournisseurs/999")
    assert r.status_code == 404
    assert "introuvable" in r.json()["detail"]


def test_list_and_search(client, make_supplier):
    make_supplier("PharmaPlus")
    make_supplier("MedSupply")

    assert [s["nom"] for s in client.get("/api/fournisseurs").json()] == ["PharmaPlus", "MedSupply"]

    r = client.get("/api/fournisseurs/search", params={"nom": "medsup"})
    assert [s["nom"] for s in r.json()] == ["MedSupply"]


def test_update_supplier(client, make_supplier):
    s = make_supplier("Ancien", "ancien@test.sn")

    r = client.put(f"/api/fournisseurs/{s.id}", params={"nom": "Nouveau"})

    assert r.status_code == 200
    assert r.json()["nom"] == "Nouveau"
    assert r.json()["email"] == "ancien@test.sn"


def test_category_association_flow(client, make_supplier, make_category):
    s = make_supplier("Fournisseur")
    c = make_category("Antalgiques")
    url = f"/api/fournisseurs/{s.id}/categories/{c.code}"

    r = client.post(url)
    assert r.status_code == 200
    assert r.json()["categorieLibelles"] == ["Antalgiques"]

    assert client.post(url).status_code == 409

    by_category = client.get(f"/api/fournisseurs/categorie/{c.code}").json()
    assert [f["id"] for f in by_category] == [s.id]

    r = client.delete(url)
    assert r.status_code == 200
    assert r.json()["categorieLibelles"] == []

    # retrait idempotent
    assert client.delete(url).status_code == 200
    assert client.get(f"/api/fournisseurs/categorie/{c.code}").json() == []


def test_associate_unknown_category_is_404(client, make_supplier):
    s = make_supplier("Fournisseur")
    assert client.post(f"/api/fournisseurs/{s.id}/categories/999").status_code == 404


def test_delete_supplier(client, make_supplier, make_category):
    c = make_category("Antalgiques")
    code = c.code
    supplier_id = make_supplier("Partant", categories=(c,)).id

    assert client.delete(f"/api/fournisseurs/{supplier_id}").status_code == 204
    assert client.get(f"/api/fournisseurs/{supplier_id}").status_code == 404
    assert client.get(f"/api/fournisseurs/categorie/{code}").json() == []
    assert client.delete(f"/api/fournisseurs/{supplier_id}").status_code == 404
