import uuid

from helpers import add_product, add_range, setup_app


def quote_body(od=(-4, -2), oi=(-4, -2), **filters):
    return {
        "prescription": {
            "od": {"sphere": od[0], "cylinder": od[1]},
            "oi": {"sphere": oi[0], "cylinder": oi[1]},
        },
        "filters": {"frameType": "cerrado", **filters},
    }


def seed_quote_catalog(Session):
    db = Session()
    narrow = add_range(db, "42-42", (4, 2, 4, 2), "Ambos ojos hasta 4 esf / 2 cyl")
    wide = add_range(db, "44-44", (4, 4, 4, 4))
    add_product(db, narrow.id, "ORG-AR-AZUL", 54900, has_blue_filter=True)
    add_product(db, narrow.id, "ORG-AR-NORMAL", 39900)
    add_product(db, narrow.id, "POLICAR-AR", 64900, material="policarbonato")
    add_product(db, narrow.id, "SEMI", 42900, frame_type="semicerrado")
    add_product(db, narrow.id, "RETIRED", 100, available=False)
    add_product(db, wide.id, "WIDE", 49900)
    ids = (narrow.id, wide.id)
    db.close()
    return ids


def test_quote_lenses_returns_sorted_results_and_meta():
    client, Session = setup_app()
    seed_quote_catalog(Session)

    res = client.post("/api/v1/lenses/quote", json=quote_body())

    assert res.status_code == 200
    data = res.json()
    assert [p["sku"] for p in data["results"]] == ["ORG-AR-NORMAL", "ORG-AR-AZUL", "POLICAR-AR"]
    first = data["results"][0]
    assert "costPrice" not in first
    assert first["features"]["hasUVProtection"] is True
    assert first["pricing"] == {"basePrice": 19950.0, "finalPrice": 39900.0}
    assert first["frameType"] == "cerrado"
    assert first["observations"] is None
    meta = data["meta"]
    assert meta["prescriptionRangeUsed"] == {
        "code": "42-42",
        "description": "Ambos ojos hasta 4 esf / 2 cyl",
    }
    assert meta["totalResults"] == 3
    assert meta["filtersApplied"] == {"frameType": "cerrado"}
    assert meta["normalizedPrescription"]["od"] == {"sphere": -4.0, "cylinder": -2.0}


def test_quote_lenses_with_optional_filters():
    client, Session = setup_app()
    seed_quote_catalog(Session)

    res = client.post(
        "/api/v1/lenses/quote",
        json=quote_body(hasBlueFilter=True, material="organico"),
    )

    assert res.status_code == 200
    data = res.json()
    assert [p["sku"] for p in data["results"]] == ["ORG-AR-AZUL"]
    assert data["meta"]["filtersApplied"] == {
        "frameType": "cerrado",
        "material": "organico",
        "hasBlueFilter": True,
    }


def test_quote_lenses_heavier_eye_moves_to_wider_range():
    client, Session = setup_app()
    seed_quote_catalog(Session)

    res = client.post("/api/v1/lenses/quote", json=quote_body(od=(-4, -4), oi=(-3.9, -2.1)))

    assert res.status_code == 200
    data = res.json()
    assert data["meta"]["prescriptionRangeUsed"]["code"] == "44-44"
    assert [p["sku"] for p in data["results"]] == ["WIDE"]


def test_quote_lenses_no_range_is_404():
    client, Session = setup_app()
    seed_quote_catalog(Session)

    res = client.post("/api/v1/lenses/quote", json=quote_body(od=(-10, 0)))

    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "PRESCRIPTION_RANGE_NOT_FOUND"
    assert error["statusCode"] == 404
    assert error["path"] == "/api/v1/lenses/quote"
    assert error["details"]["od"] == {"sphere": -10.0, "cylinder": 0.0}


def test_quote_lenses_huge_sphere_is_404():
    client, Session = setup_app()
    seed_quote_catalog(Session)

    res = client.post("/api/v1/lenses/quote", json=quote_body(od=(1e30, 0), oi=(0, 0)))

    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "PRESCRIPTION_RANGE_NOT_FOUND"
    assert error["details"]["od"] == {"sphere": 1e30, "cylinder": 0.0}


def test_quote_lenses_missing_frame_type_is_400():
    client, _ = setup_app()
    body = quote_body()
    del body["filters"]["frameType"]

    res = client.post("/api/v1/lenses/quote", json=body)

    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any(i["field"] == "filters.frameType" for i in error["details"]["issues"])


def test_quote_lenses_rejects_wrong_types():
    client, _ = setup_app()
    body = quote_body()
    body["prescription"]["od"]["sphere"] = "mucho"
    body["filters"]["material"] = "vidrio"

    res = client.post("/api/v1/lenses/quote", json=body)

    assert res.status_code == 400
    fields = {i["field"] for i in res.json()["error"]["details"]["issues"]}
    assert {"prescription.od.sphere", "filters.material"} <= fields


def product_body(range_id, **overrides):
    body = {
        "sku": "ORG-AR-NORMAL-42-42-CERRADO",
        "name": "ORGANICO ANTIREFLEJO NORMAL",
        "material": "organico",
        "tipo": "monofocal",
        "frameType": "cerrado",
        "hasAntiReflective": True,
        "hasBlueFilter": False,
        "isPhotochromic": False,
        "hasUVProtection": True,
        "isPolarized": False,
        "isMirrored": False,
        "costPrice": 750,
        "basePrice": 2000,
        "finalPrice": 39900,
        "deliveryDays": 3,
        "observations": "Se entrega en 3 días hábiles",
        "prescriptionRangeId": range_id,
    }
    body.update(overrides)
    return body


def test_lens_product_crud_flow():
    client, Session = setup_app()
    range_id, _ = seed_quote_catalog(Session)

    created = client.post("/api/v1/lenses/products", json=product_body(range_id))
    assert created.status_code == 201
    product = created.json()
    assert "costPrice" not in product
    assert product["available"] is True
    assert product["prescriptionRangeId"] == range_id

    fetched = client.get(f"/api/v1/lenses/products/{product['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["sku"] == "ORG-AR-NORMAL-42-42-CERRADO"

    updated = client.put(
        f"/api/v1/lenses/products/{product['id']}",
        json={"finalPrice": 41900, "available": False},
    )
    assert updated.status_code == 200
    assert updated.json()["pricing"]["finalPrice"] == 41900.0
    assert updated.json()["available"] is False

    listing = client.get("/api/v1/lenses/products")
    assert listing.status_code == 200
    products = listing.json()["products"]
    assert len(products) == 7
    assert products[0]["id"] == product["id"]
    assert products[0]["prescriptionRange"]["code"] == "42-42"

    deleted = client.delete(f"/api/v1/lenses/products/{product['id']}")
    assert deleted.status_code == 204
    assert client.get(f"/api/v1/lenses/products/{product['id']}").status_code == 404


def test_create_lens_product_duplicate_sku_is_409():
    client, Session = setup_app()
    range_id, _ = seed_quote_catalog(Session)

    res = client.post("/api/v1/lenses/products", json=product_body(range_id, sku="WIDE"))

    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CONFLICT"
    assert res.json()["error"]["details"] == {"sku": "WIDE", "field": "sku"}


def test_create_lens_product_unknown_range_is_400():
    client, _ = setup_app()

    res = client.post("/api/v1/lenses/products", json=product_body(str(uuid.uuid4())))

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "BAD_REQUEST"


def test_create_lens_product_validates_prices():
    client, Session = setup_app()
    range_id, _ = seed_quote_catalog(Session)

    res = client.post(
        "/api/v1/lenses/products",
        json=product_body(range_id, finalPrice=-1, sku=""),
    )

    assert res.status_code == 400
    fields = {i["field"] for i in res.json()["error"]["details"]["issues"]}
    assert {"finalPrice", "sku"} <= fields


def test_lens_product_not_found_and_malformed_id():
    client, _ = setup_app()

    missing = client.get(f"/api/v1/lenses/products/{uuid.uuid4()}")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "NOT_FOUND"

    malformed = client.get("/api/v1/lenses/products/not-a-uuid")
    assert malformed.status_code == 400
    assert malformed.json()["error"]["details"]["issues"][0]["field"] == "id"

    assert client.delete(f"/api/v1/lenses/products/{uuid.uuid4()}").status_code == 404
