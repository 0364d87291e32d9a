from conftest import auth_headers

API = "/api/v1"

LISTING_BODY = {
    "title": "Room near Metro",
    "description": "Walk to the station.",
    "location": {"address": "4 MG Road", "city": "Bengaluru", "state": "Karnataka", "postalCode": "560001"},
    "rentAmount": 15000,
    "numberOfFlatmates": 2,
    "genderPreference": "female",
    "amenities": {"wifi": True, "ac": True},
    "userName": "Meera",
    "userPhone": "+91 90000 11111",
    "userEmail": "meera@example.com",
    "userContactVisibility": {"showPhone": False, "showEmail": True, "showWhatsApp": True},
}


def _create(client, owner="owner", **overrides):
    body = {**LISTING_BODY, **overrides}
    response = client.post(f"{API}/listings", json=body, headers=auth_headers(owner))
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_returns_camel_case_without_direct_contact(client):
    listing = _create(client)
    assert listing["rentAmount"] == 15000
    assert listing["location"]["postalCode"] == "560001"
    assert listing["userId"] == "owner"
    assert listing["amenities"]["ac"] is True
    assert listing["amenities"]["parking"] is False
    assert listing["userContactVisibility"]["showWhatsApp"] is True
    assert "userPhone" not in listing
    assert "userEmail" not in listing


def test_create_requires_authentication(client):
    response = client.post(f"{API}/listings", json=LISTING_BODY)
    assert response.status_code == 401
    assert response.json()["code"] == "authentication_required"


def test_invalid_token_is_rejected_even_on_public_routes(client):
    listing = _create(client)
    response = client.get(
        f"{API}/listings/{listing['id']}/contact",
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == 401


def test_domain_validation_error(client):
    response = client.post(f"{API}/listings", json={**LISTING_BODY, "rentAmount": 0}, headers=auth_headers("owner"))
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


def test_query_filters(client):
    _create(client, title="cheap", rentAmount=8000, genderPreference="any", amenities={"wifi": True})
    _create(client, title="pricey", rentAmount=30000, amenities={"wifi": True, "parking": True})
    _create(client, title="mumbai", location={"city": "Mumbai"}, rentAmount=9000)

    response = client.get(f"{API}/listings", params={"city": "benga", "maxRent": 20000, "genderPreference": "male"})
    assert [l["title"] for l in response.json()] == ["cheap"]

    response = client.get(f"{API}/listings", params=[("amenity", "wifi"), ("amenity", "parking")])
    assert [l["title"] for l in response.json()] == ["pricey"]

    response = client.get(f"{API}/listings", params={"limit": 2})
    assert [l["title"] for l in response.json()] == ["mumbai", "pricey"]

    response = client.get(f"{API}/listings", params={"orderBy": "rentAmount", "descending": "false"})
    assert [l["title"] for l in response.json()] == ["cheap", "mumbai", "pricey"]


def test_bad_query_values(client):
    assert client.get(f"{API}/listings", params={"amenity": "pool"}).status_code == 422
    assert client.get(f"{API}/listings", params={"orderBy": "title"}).status_code == 422


def test_update_by_stranger_is_forbidden(client):
    listing = _create(client)
    response = client.patch(
        f"{API}/listings/{listing['id']}", json={"rentAmount": 1}, headers=auth_headers("stranger")
    )
    assert response.status_code == 403
    assert response.json()["code"] == "forbidden"


def test_update_and_availability(client):
    listing = _create(client)
    headers = auth_headers("owner")
    response = client.patch(f"{API}/listings/{listing['id']}", json={"rentAmount": 16000}, headers=headers)
    assert response.status_code == 200
    assert response.json()["rentAmount"] == 16000
    assert response.json()["title"] == LISTING_BODY["title"]

    response = client.put(f"{API}/listings/{listing['id']}/availability", json={"isAvailable": False}, headers=headers)
    assert response.json()["isAvailable"] is False
    assert client.get(f"{API}/listings", params={"isAvailable": "true"}).json() == []
    assert len(client.get(f"{API}/listings").json()) == 1


def test_missing_listing(client):
    response = client.get(f"{API}/listings/missing")
    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


def test_contact_view_omits_masked_fields(client):
    listing = _create(client)
    body = client.get(f"{API}/listings/{listing['id']}/contact").json()
    assert "phone" not in body
    assert body["email"] == "meera@example.com"
    assert body["canMessage"] is True

    owner_view = client.get(f"{API}/listings/{listing['id']}/contact", headers=auth_headers("owner")).json()
    assert owner_view["phone"] == "+91 90000 11111"
    assert owner_view["isOwner"] is True


def test_contact_handoff(client):
    listing = _create(client, userContactVisibility={"showPhone": True, "showEmail": False, "showWhatsApp": True})
    response = client.post(f"{API}/listings/{listing['id']}/contact", headers=auth_headers("viewer"))
    assert response.status_code == 200
    body = response.json()
    assert body["target"] == "919000011111"
    assert body["deepLink"].startswith("https://wa.me/919000011111?text=")

    response = client.post(
        f"{API}/listings/{listing['id']}/contact", json={"channel": "sms"}, headers=auth_headers("viewer")
    )
    assert response.json()["deepLink"].startswith("sms:+919000011111?body=")

    history = client.get(f"{API}/listings/{listing['id']}/messages", headers=auth_headers("owner")).json()
    assert len(history) == 2


def test_contact_handoff_when_messaging_disabled(client):
    listing = _create(client, userContactVisibility={"showPhone": True, "showEmail": True, "showWhatsApp": False})
    response = client.post(f"{API}/listings/{listing['id']}/contact")
    assert response.status_code == 409
    assert response.json()["code"] == "not_contactable"


def test_saved_endpoints(client):
    listing = _create(client)
    headers = auth_headers("viewer")
    assert client.put(f"{API}/saved/{listing['id']}", headers=headers).status_code == 204
    assert client.put(f"{API}/saved/{listing['id']}", headers=headers).status_code == 204
    assert client.get(f"{API}/saved/ids", headers=headers).json() == [listing["id"]]
    assert [l["id"] for l in client.get(f"{API}/saved", headers=headers).json()] == [listing["id"]]

    assert client.put(f"{API}/saved/missing", headers=headers).status_code == 404
    assert client.delete(f"{API}/saved/{listing['id']}", headers=headers).status_code == 204
    assert client.get(f"{API}/saved", headers=headers).json() == []
    assert client.get(f"{API}/saved").status_code == 401


def test_delete_twice_is_no_content(client):
    listing = _create(client)
    headers = auth_headers("owner")
    client.put(f"{API}/saved/{listing['id']}", headers=auth_headers("viewer"))

    assert client.delete(f"{API}/listings/{listing['id']}", headers=headers).status_code == 204
    assert client.delete(f"{API}/listings/{listing['id']}", headers=headers).status_code == 204
    assert client.get(f"{API}/saved", headers=auth_headers("viewer")).json() == []


def test_profile_and_resync(client):
    headers = auth_headers("owner")
    assert client.get(f"{API}/profile", headers=headers).status_code == 404

    response = client.put(
        f"{API}/profile",
        json={"name": "Meera K", "email": "mk@example.com", "phone": "+91 91111 22222"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["contactVisibility"]["showWhatsApp"] is True

    listing = _create(client)
    assert listing["userName"] == "Meera K"

    client.put(
        f"{API}/profile",
        json={"name": "Meera", "phone": "+91 93333 44444", "contactVisibility": {"showPhone": True}},
        headers=headers,
    )
    contact = client.get(f"{API}/listings/{listing['id']}/contact").json()
    assert contact["phone"] == "+91 91111 22222"

    client.post(f"{API}/listings/{listing['id']}/resync-contact", headers=headers)
    contact = client.get(f"{API}/listings/{listing['id']}/contact").json()
    assert contact["phone"] == "+91 93333 44444"
    assert contact["name"] == "Meera"


def test_audit_shows_own_events(client):
    _create(client)
    events = client.get(f"{API}/audit", headers=auth_headers("owner")).json()
    assert [e["action"] for e in events] == ["listing_create"]
    assert client.get(f"{API}/audit", headers=auth_headers("stranger")).json() == []


def test_overlong_fields_are_rejected_before_writing(client):
    headers = auth_headers("owner")
    response = client.post(f"{API}/listings", json={**LISTING_BODY, "userPhone": "9" * 31}, headers=headers)
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"
    assert client.get(f"{API}/listings/mine", headers=headers).json() == []


def test_hidden_phone_listing_can_still_be_messaged(client):
    listing = _create(client)
    assert "phone" not in client.get(f"{API}/listings/{listing['id']}/contact").json()

    response = client.post(f"{API}/listings/{listing['id']}/contact")
    assert response.status_code == 200
    assert response.json()["deepLink"].startswith("https://wa.me/919000011111?text=")
