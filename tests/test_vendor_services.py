from app.version import API_PREFIX
from conftest import auth_header, login_stub

SERVICES = f"{API_PREFIX}/vendor/services"

BODY = {
    "title": "Gel manicure",
    "description": "Gel polish with cuticle care",
    "averagePrice": 8000,
    "category": "Nails",
    "imageUrl": "https://res.cloudinary.com/demo/nails.jpg",
}


def create(client, headers, **overrides):
    return client.post(SERVICES, headers=headers, json=dict(BODY, **overrides))


def test_create_service(client, vendor_login):
    response = create(client, vendor_login["headers"])
    assert response.status_code == 201
    data = response.get_json()["data"]
    assert data["vendorId"] == vendor_login["id"]
    assert data["averagePrice"] == 8000.0
    assert data["isActive"] is True


def test_create_service_validation(client, vendor_login):
    assert create(client, vendor_login["headers"], averagePrice=0).status_code == 400
    missing = dict(BODY)
    missing.pop("imageUrl")
    assert client.post(SERVICES, headers=vendor_login["headers"], json=missing).status_code == 400


def test_list_newest_first(client, vendor_login):
    create(client, vendor_login["headers"], title="First")
    create(client, vendor_login["headers"], title="Second")
    titles = [s["title"] for s in client.get(SERVICES, headers=vendor_login["headers"]).get_json()["data"]]
    assert titles == ["Second", "First"]


def test_update_and_delete(client, vendor_login):
    service_id = create(client, vendor_login["headers"]).get_json()["data"]["id"]
    updated = client.patch(
        f"{SERVICES}/{service_id}",
        headers=vendor_login["headers"],
        json={"averagePrice": 9500.5, "isActive": False},
    )
    assert updated.status_code == 200
    data = updated.get_json()["data"]
    assert data["averagePrice"] == 9500.5
    assert data["isActive"] is False
    assert data["title"] == BODY["title"]

    assert client.delete(f"{SERVICES}/{service_id}", headers=vendor_login["headers"]).status_code == 200
    assert client.get(f"{SERVICES}/{service_id}", headers=vendor_login["headers"]).status_code == 404


def test_services_are_private_to_their_vendor(client, vendor_login):
    service_id = create(client, vendor_login["headers"]).get_json()["data"]["id"]
    other = auth_header(login_stub(client, "08088888888", "VENDOR")["access"])
    response = client.get(f"{SERVICES}/{service_id}", headers=other)
    assert response.status_code == 404
    assert response.get_json()["message"] == "Service not found"
    assert client.delete(f"{SERVICES}/{service_id}", headers=other).status_code == 404
    assert client.get(SERVICES, headers=other).get_json()["data"] == []
