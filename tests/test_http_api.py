from fastapi.testclient import TestClient

from people_directory.adapters.http.api import create_app
from people_directory.application.services import PersonDirectoryService
from people_directory.domain.models import Person
from people_directory.domain.time import parse_birth_date
from people_directory.infrastructure.persistence.in_memory import InMemoryPersonStore
from people_directory.ports.persistence import PersonStore


def _client(*people: Person, random_source=lambda: 0.0) -> TestClient:
    service = PersonDirectoryService(store=InMemoryPersonStore(people), random_source=random_source)
    return TestClient(create_app(service))


JOHN = Person(id="1", firstname="John", lastname="Doe", birthDate=0, photo="p.png", city="Paris")


class DownStore(PersonStore):
    async def list_all(self):
        raise ConnectionError("connection refused")


def test_list_returns_no_content_when_empty():
    r = _client().get("/people")
    assert r.status_code == 204
    assert r.content == b""


def test_list_serializes_wire_fields():
    r = _client(JOHN).get("/people")
    assert r.status_code == 200
    assert r.json() == [
        {"id": "1", "firstname": "John", "lastname": "Doe", "birthDate": 0, "photo": "p.png", "city": "Paris"}
    ]


def test_random_returns_a_person_or_no_content():
    assert _client().get("/people/random").status_code == 204
    r = _client(JOHN).get("/people/random")
    assert r.status_code == 200
    assert r.json()["id"] == "1"


def test_get_unknown_person_is_404():
    r = _client(JOHN).get("/people/2")
    assert r.status_code == 404
    assert r.json() == {"detail": "People with id '2' not found"}


def test_create_returns_201_with_assigned_id():
    client = _client()
    r = client.post("/people", json={"firstname": "Jane", "lastname": "Roe", "birthDate": "05/06/1985"})

    assert r.status_code == 201
    body = r.json()
    assert body["id"]
    assert body["birthDate"] == parse_birth_date("05/06/1985")
    assert client.get(f"/people/{body['id']}").json() == body


def test_create_duplicate_is_409():
    r = _client(JOHN).post("/people", json={"firstname": "john", "lastname": "DOE"})
    assert r.status_code == 409


def test_create_invalid_input_is_422_with_field():
    client = _client()

    r = client.post("/people", json={"firstname": "Jane", "lastname": "Roe", "birthDate": "31/13/1985"})
    assert r.status_code == 422
    assert r.json()["field"] == "birthDate"

    r = client.post("/people", json={"firstname": "Jane"})
    assert r.status_code == 422
    assert r.json()["field"] == "lastname"


def test_non_object_body_is_422_with_field():
    client = _client(JOHN)

    r = client.post("/people", json=["John", "Doe"])
    assert r.status_code == 422
    assert r.json()["field"] == "body"

    r = client.put("/people/1", json="John")
    assert r.status_code == 422
    assert r.json()["field"] == "body"


def test_path_and_operator_keys_are_422():
    client = _client(JOHN)

    r = client.put("/people/1", json={"$x": 1})
    assert r.status_code == 422
    assert r.json()["field"] == "$x"

    r = client.post("/people", json={"firstname": "Jane", "lastname": "Roe", "address.city": "Lyon"})
    assert r.status_code == 422
    assert r.json()["field"] == "address.city"


def test_update_merges_and_keeps_id():
    r = _client(JOHN).put("/people/1", json={"firstname": "Johnny", "id": "99"})
    assert r.status_code == 200
    assert r.json()["id"] == "1"
    assert r.json()["firstname"] == "Johnny"
    assert r.json()["city"] == "Paris"


def test_update_unknown_person_is_404():
    assert _client(JOHN).put("/people/2", json={"firstname": "X"}).status_code == 404


def test_delete_then_get():
    client = _client(JOHN)

    assert client.delete("/people/1").status_code == 204
    assert client.delete("/people/1").status_code == 404
    assert client.get("/people/1").status_code == 404


def test_store_outage_is_503():
    client = TestClient(create_app(PersonDirectoryService(store=DownStore())))
    r = client.get("/people")
    assert r.status_code == 503
