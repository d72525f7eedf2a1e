import pytest


@pytest.fixture
def marketplace(register):
    seller, seller_user = register("seller@example.com", first_name="Sam", last_name="Seller")
    buyer, buyer_user = register("buyer@example.com", first_name="Bo", last_name="Buyer")
    other_buyer, other_user = register("other@example.com", first_name="Cy", last_name="Other")
    equipment_id = seller.post(
        "/api/v1/equipment",
        json={"name": "Fairway Mower", "make": "Toro", "model": "Reelmaster", "year": 2020},
    ).get_json()["id"]
    second_equipment_id = seller.post(
        "/api/v1/equipment",
        json={"name": "Utility Cart", "make": "Club Car", "model": "Carryall 500", "year": 2019},
    ).get_json()["id"]
    listing_id = seller.post("/api/v1/marketplace", json={"equipment_id": equipment_id, "price": "9000"}).get_json()["id"]
    second_listing_id = seller.post(
        "/api/v1/marketplace", json={"equipment_id": second_equipment_id, "price": "4000"}
    ).get_json()["id"]
    return {
        "seller": (seller, seller_user),
        "buyer": (buyer, buyer_user),
        "other": (other_buyer, other_user),
        "listing_id": listing_id,
        "second_listing_id": second_listing_id,
    }


def _send(client, listing_id, content, receiver_id=None):
    payload = {"listing_id": listing_id, "content": content}
    if receiver_id is not None:
        payload["receiver_id"] = receiver_id
    return client.post("/api/v1/messages", json=payload)


def _unread(client):
    return client.get("/api/v1/messages/unread-count").get_json()["count"]


def test_receiver_defaults_to_seller(marketplace):
    buyer, buyer_user = marketplace["buyer"]
    _, seller_user = marketplace["seller"]
    response = _send(buyer, marketplace["listing_id"], "Is it still available?")
    assert response.status_code == 201
    body = response.get_json()
    assert body["receiver_id"] == seller_user["id"]
    assert body["sender_name"] == "Bo Buyer"
    assert body["is_read"] is False


def test_back_and_forth_collapses_into_one_conversation(marketplace):
    buyer, buyer_user = marketplace["buyer"]
    seller, seller_user = marketplace["seller"]
    listing_id = marketplace["listing_id"]

    _send(seller, listing_id, "Reels were just ground.", receiver_id=buyer_user["id"])
    _send(buyer, listing_id, "Great, can I see it Friday?")

    conversations = buyer.get("/api/v1/messages/conversations").get_json()
    assert len(conversations) == 1
    conversation = conversations[0]
    assert conversation["listing_id"] == listing_id
    assert conversation["other_user_id"] == seller_user["id"]
    assert conversation["other_user_name"] == "Sam Seller"
    assert conversation["last_message"]["content"] == "Great, can I see it Friday?"
    assert conversation["listing"]["equipment"]["make"] == "Toro"

    seller_view = seller.get("/api/v1/messages/conversations").get_json()
    assert len(seller_view) == 1
    assert seller_view[0]["other_user_name"] == "Bo Buyer"
    assert seller_view[0]["unread_count"] == 1


def test_same_pair_on_two_listings_gives_two_conversations(marketplace):
    buyer, _ = marketplace["buyer"]
    _send(buyer, marketplace["listing_id"], "About the mower")
    _send(buyer, marketplace["second_listing_id"], "About the cart")
    conversations = buyer.get("/api/v1/messages/conversations").get_json()
    assert [c["listing_id"] for c in conversations] == [marketplace["second_listing_id"], marketplace["listing_id"]]


def test_mark_read_is_scoped_to_one_sender_and_idempotent(marketplace):
    seller, seller_user = marketplace["seller"]
    buyer, buyer_user = marketplace["buyer"]
    other, other_user = marketplace["other"]
    listing_id = marketplace["listing_id"]

    _send(buyer, listing_id, "First question")
    _send(buyer, listing_id, "Second question")
    _send(other, listing_id, "Any service records?")
    assert _unread(seller) == 3

    response = seller.post(f"/api/v1/messages/{listing_id}/{buyer_user['id']}/read")
    assert response.get_json() == {"ok": True, "updated": 2}
    assert _unread(seller) == 1

    counts = {c["other_user_id"]: c["unread_count"] for c in seller.get("/api/v1/messages/conversations").get_json()}
    assert counts == {buyer_user["id"]: 0, other_user["id"]: 1}

    again = seller.post(f"/api/v1/messages/{listing_id}/{buyer_user['id']}/read")
    assert again.get_json()["updated"] == 0
    assert _unread(seller) == 1


def test_own_messages_do_not_count_as_unread(marketplace):
    buyer, _ = marketplace["buyer"]
    _send(buyer, marketplace["listing_id"], "Hello")
    assert _unread(buyer) == 0


def test_thread_is_oldest_first_and_private(marketplace):
    seller, seller_user = marketplace["seller"]
    buyer, buyer_user = marketplace["buyer"]
    other, _ = marketplace["other"]
    listing_id = marketplace["listing_id"]

    _send(buyer, listing_id, "one")
    _send(seller, listing_id, "two", receiver_id=buyer_user["id"])
    _send(other, listing_id, "not in this thread")

    thread = buyer.get(f"/api/v1/messages/{listing_id}/{seller_user['id']}").get_json()
    assert [msg["content"] for msg in thread] == ["one", "two"]


def test_message_validation(marketplace):
    seller, seller_user = marketplace["seller"]
    buyer, _ = marketplace["buyer"]
    other, other_user = marketplace["other"]
    listing_id = marketplace["listing_id"]

    assert _send(buyer, listing_id, "   ").get_json()["field"] == "content"
    assert _send(buyer, 9999, "hello").status_code == 404
    assert _send(seller, listing_id, "talking to myself").status_code == 400
    assert _send(buyer, listing_id, "psst", receiver_id=other_user["id"]).status_code == 403


def test_thread_limit_keeps_the_newest_messages(app, marketplace):
    app.config["MESSAGE_THREAD_LIMIT"] = 3
    _, seller_user = marketplace["seller"]
    buyer, _ = marketplace["buyer"]
    listing_id = marketplace["listing_id"]

    for index in range(5):
        _send(buyer, listing_id, f"m{index}")

    thread = buyer.get(f"/api/v1/messages/{listing_id}/{seller_user['id']}").get_json()
    assert [msg["content"] for msg in thread] == ["m2", "m3", "m4"]


def test_send_requires_a_json_object(marketplace):
    buyer, _ = marketplace["buyer"]
    response = buyer.post("/api/v1/messages", json=[marketplace["listing_id"], "hello"])
    assert response.status_code == 400
    assert response.get_json() == {"error": "A JSON object body is required."}
