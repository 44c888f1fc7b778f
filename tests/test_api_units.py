from fastapi.testclient import TestClient

from rodchain.api.app import app


client = TestClient(app)


def test_health_reports_version():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["ok"] is True
    assert response.headers["X-Run-ID"]


def test_run_id_header_is_echoed():
    response = client.get("/health", headers={"X-Run-ID": "run-123"})
    assert response.headers["X-Run-ID"] == "run-123"


def test_convert_endpoint():
    response = client.post(
        "/v1/units/convert",
        json={"value": 2, "from_unit": "km", "to_unit": "m"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["quantity"]["value"] == 2000.0
    assert data["quantity"]["unit"] == "m"
    assert data["quantity"]["text"] == "2000.00 m"
    assert data["factor"] == {"real": 1000.0, "numerator": 1000, "denominator": 1, "exact": True}


def test_convert_across_systems_reports_exact_factor():
    response = client.post(
        "/v1/units/convert",
        json={"value": 1, "from_unit": "m^2", "to_unit": "ft^2"},
    )
    data = response.json()
    assert data["factor"]["numerator"] == 1562500
    assert data["factor"]["denominator"] == 145161
    assert abs(data["quantity"]["value"] - 10.7639104167) < 1e-9


def test_factor_endpoint():
    response = client.post("/v1/units/factor", json={"from_unit": "yd", "to_unit": "m"})
    assert response.status_code == 200
    assert response.json()["numerator"] == 1143
    assert response.json()["denominator"] == 1250


def test_add_endpoint_converts_rhs():
    response = client.post("/v1/units/add", json={"lhs": "2 m", "rhs": "3 ft"})
    assert response.status_code == 200
    data = response.json()
    assert abs(data["value"] - 2.9144) < 1e-9
    assert data["unit"] == "m"
    assert data["dimension"] == "L"


def test_add_endpoint_subtract():
    response = client.post("/v1/units/add", json={"lhs": "1 km", "rhs": "250 m", "subtract": True})
    assert abs(response.json()["value"] - 0.75) < 1e-12


def test_incompatible_dimensions_map_to_422():
    response = client.post("/v1/units/add", json={"lhs": "2 m", "rhs": "3 s"})
    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "incompatible_dimension"


def test_unknown_unit_maps_to_422():
    response = client.post("/v1/units/factor", json={"from_unit": "furlong", "to_unit": "m"})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["code"] == "unit_parse_error"
    assert "furlong" in detail["message"]


def test_catalog_endpoint_lists_units():
    response = client.get("/v1/units/catalog")
    assert response.status_code == 200
    units = {entry["symbol"]: entry for entry in response.json()["units"]}
    assert units["ft"]["system"] == "Imperial"
    assert units["kg"]["dimension"] == "M"
