def _create_book(client, **overrides):
    body = {"bookName": "Dune", "category": "sci-fi", "rentPerDay": 5, "author": "Frank Herbert",
            "isbn": "9780441013593", "availableCopies": 3, "publishedDate": "1965-08-01"}
    body.update(overrides)
    resp = client.post("/books/", json=body)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["data"]


def _create_user(client, email="reader@example.com", username="reader"):
    resp = client.post("/users/", json={"username": username, "email": email})
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["data"]


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}


# -----------------------------
# Books
# -----------------------------
def test_book_crud(client):
    book = _create_book(client)
    assert book["bookName"] == "Dune"
    assert book["rentPerDay"] == 5.0
    assert book["publishedDate"] == "1965-08-01"
    assert book["addedDate"] is not None

    got = client.get(f"/books/{book['id']}").get_json()["data"]
    assert got["isbn"] == "9780441013593"

    resp = client.put(f"/books/{book['id']}", json={"rentPerDay": 7.5, "description": "desert planet"})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["rentPerDay"] == 7.5
    assert resp.get_json()["data"]["bookName"] == "Dune"

    assert client.delete(f"/books/{book['id']}").status_code == 200
    resp = client.get(f"/books/{book['id']}")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "not_found"


def test_create_book_validation(client):
    resp = client.post("/books/", json={"bookName": "X", "category": "c", "rentPerDay": -1})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["success"] is False
    assert body["error"] == "invalid_input"

    resp = client.post("/books/", json={"category": "c", "rentPerDay": 1})
    assert resp.status_code == 400


def test_update_book_requires_fields(client):
    book = _create_book(client)
    resp = client.put(f"/books/{book['id']}", json={})
    assert resp.status_code == 400


def test_search_books(client):
    _create_book(client, bookName="Dune", category="sci-fi", rentPerDay=5)
    _create_book(client, bookName="Dune Messiah", category="sci-fi", rentPerDay=8)
    _create_book(client, bookName="Emma", category="classic", rentPerDay=2)

    names = [b["bookName"] for b in client.get("/books/search?name=dune").get_json()["data"]]
    assert names == ["Dune", "Dune Messiah"]

    names = [b["bookName"] for b in client.get("/books/search?category=classic").get_json()["data"]]
    assert names == ["Emma"]

    names = [b["bookName"] for b in client.get("/books/search?minRent=4&maxRent=6").get_json()["data"]]
    assert names == ["Dune"]

    resp = client.get("/books/search?minRent=9&maxRent=1")
    assert resp.status_code == 400


def test_rent_range_requires_both_bounds(client):
    _create_book(client, rentPerDay=5)
    assert client.get("/books/rent-range?minRent=1").status_code == 400
    data = client.get("/books/rent-range?minRent=1&maxRent=5").get_json()["data"]
    assert len(data) == 1


def test_delete_book_with_open_rental_is_blocked(client):
    book = _create_book(client)
    user = _create_user(client)
    client.post("/rentals/", json={"bookId": book["id"], "userId": user["id"]})

    resp = client.delete(f"/books/{book['id']}")
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "conflict"


# -----------------------------
# Users
# -----------------------------
def test_user_email_is_normalized_and_unique(client):
    user = _create_user(client, email="  Reader@Example.COM ", username="  reader  ")
    assert user["email"] == "reader@example.com"
    assert user["username"] == "reader"

    resp = client.post("/users/", json={"username": "other", "email": "READER@example.com"})
    assert resp.status_code == 409


def test_user_address_round_trip(client):
    resp = client.post("/users/", json={
        "username": "sam",
        "email": "sam@example.com",
        "phoneNumber": "555-0100",
        "address": {"street": "1 Main St", "city": "Springfield", "state": "IL", "zip": "62701"},
    })
    user = resp.get_json()["data"]
    assert user["address"]["city"] == "Springfield"
    assert user["address"]["zip"] == "62701"
    assert client.get(f"/users/{user['id']}").get_json()["data"]["phoneNumber"] == "555-0100"
    assert len(client.get("/users/").get_json()["data"]) == 1


def test_user_rentals_empty_list(client):
    user = _create_user(client)
    resp = client.get(f"/users/{user['id']}/rentals")
    assert resp.status_code == 200
    assert resp.get_json()["data"] == []

    assert client.get("/users/999/rentals").status_code == 404


# -----------------------------
# Rentals
# -----------------------------
def test_issue_and_return_flow(client):
    book = _create_book(client, rentPerDay=5)
    user = _create_user(client)
    pair = {"bookId": book["id"], "userId": user["id"]}

    resp = client.post("/rentals/", json={**pair, "issueDate": "2024-01-01T00:00:00Z"})
    assert resp.status_code == 201
    rental = resp.get_json()["data"]
    assert rental["status"] == "issued"
    assert rental["returnDate"] is None

    resp = client.post("/rentals/", json=pair)
    assert resp.status_code == 409

    resp = client.post("/rentals/return", json={**pair, "returnDate": "2024-01-04T00:00:00Z"})
    assert resp.status_code == 200
    returned = resp.get_json()["data"]
    assert returned["totalRent"] == 15.0
    assert returned["returnDate"] == "2024-01-04T00:00:00"

    resp = client.post("/rentals/return", json={**pair, "returnDate": "2024-01-05"})
    assert resp.status_code == 404

    assert client.get(f"/rentals/{rental['id']}").get_json()["data"]["status"] == "returned"
    rows = client.get(f"/users/{user['id']}/rentals").get_json()["data"]
    assert rows[0]["bookName"] == "Dune"


def test_issue_unknown_book_or_user(client):
    user = _create_user(client)
    resp = client.post("/rentals/", json={"bookId": 77, "userId": user["id"]})
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Book not found"


def test_return_validation_errors(client):
    book = _create_book(client)
    user = _create_user(client)
    pair = {"bookId": book["id"], "userId": user["id"]}
    client.post("/rentals/", json={**pair, "issueDate": "2024-01-05"})

    resp = client.post("/rentals/return", json=pair)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_input"

    resp = client.post("/rentals/return", json={**pair, "returnDate": "yesterday"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_input"

    resp = client.post("/rentals/return", json={**pair, "returnDate": "2024-01-01"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_temporal_order"


def test_book_reports(client):
    book = _create_book(client, rentPerDay=5)
    user = _create_user(client)
    pair = {"bookId": book["id"], "userId": user["id"]}
    client.post("/rentals/", json={**pair, "issueDate": "2024-01-01"})
    client.post("/rentals/return", json={**pair, "returnDate": "2024-01-01T10:00:00"})

    issuers = client.get(f"/books/{book['id']}/issuers").get_json()["data"]
    assert issuers["totalIssuedCount"] == 1
    assert issuers["currentIssuer"] is None
    assert issuers["pastIssuers"][0]["username"] == "reader"

    by_name = client.get("/books/issuers?bookName=DUNE").get_json()["data"]
    assert by_name["bookId"] == book["id"]
    assert client.get("/books/issuers").status_code == 400

    rent = client.get(f"/books/{book['id']}/rent").get_json()["data"]
    assert rent["settledRent"] == 5.0
    assert rent["estimatedOpenRent"] == 0.0


def test_rentals_in_range(client):
    book = _create_book(client)
    u1 = _create_user(client, email="a@example.com", username="a")
    u2 = _create_user(client, email="b@example.com", username="b")
    client.post("/rentals/", json={"bookId": book["id"], "userId": u1["id"], "issueDate": "2024-01-31T18:00:00"})
    client.post("/rentals/", json={"bookId": book["id"], "userId": u2["id"], "issueDate": "2024-02-01T09:00:00"})

    rows = client.get("/rentals/?start=2024-01-01&end=2024-01-31").get_json()["data"]
    assert [r["username"] for r in rows] == ["a"]

    assert len(client.get("/rentals/").get_json()["data"]) == 2
    assert client.get("/rentals/?start=2024-02-01&end=2024-01-01").status_code == 400
    assert client.get("/rentals/?start=2024-01-01").status_code == 400


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_collection_routes_without_trailing_slash(client):
    resp = client.post("/books", json={"bookName": "Dune", "category": "sci-fi", "rentPerDay": 5})
    assert resp.status_code == 201
    book = resp.get_json()["data"]

    resp = client.post("/users", json={"username": "nora", "email": "nora@example.com"})
    assert resp.status_code == 201
    user = resp.get_json()["data"]

    assert client.get("/books").status_code == 200
    assert client.get("/users").status_code == 200

    resp = client.post("/rentals", json={"bookId": book["id"], "userId": user["id"],
                                         "issueDate": "2024-03-01T09:00:00Z"})
    assert resp.status_code == 201

    resp = client.get("/rentals?start=2024-03-01&end=2024-03-31")
    assert resp.status_code == 200
    assert [r["username"] for r in resp.get_json()["data"]] == ["nora"]
    assert client.get("/rentals").status_code == 200


def test_total_rent_by_book_name(client):
    book = _create_book(client, bookName="The Hobbit", rentPerDay=3)
    user = _create_user(client)
    pair = {"bookId": book["id"], "userId": user["id"]}
    client.post("/rentals", json={**pair, "issueDate": "2024-01-01"})
    client.post("/rentals/return", json={**pair, "returnDate": "2024-01-03"})

    data = client.get("/books/rent?bookName=the hobbit").get_json()["data"]
    assert data["bookId"] == book["id"]
    assert data["settledRent"] == 6.0
    assert data["estimatedOpenRent"] == 0.0

    assert client.get("/books/rent?bookName=hobbit").status_code == 404
    assert client.get("/books/rent").status_code == 400


def test_search_name_wildcards_are_literal(client):
    _create_book(client, bookName="100% Cotton")
    _create_book(client, bookName="100 Things")
    _create_book(client, bookName="a_b notes")
    _create_book(client, bookName="axb notes")

    names = [b["bookName"] for b in client.get("/books/search?name=100%25").get_json()["data"]]
    assert names == ["100% Cotton"]

    names = [b["bookName"] for b in client.get("/books/search?name=a_b").get_json()["data"]]
    assert names == ["a_b notes"]
