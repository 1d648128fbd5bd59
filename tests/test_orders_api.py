from kds.schemas import realtime


def place(client, table_no="T1", items=None, special_requests=None):
    body = {"table_no": table_no, "items": items if items is not None else []}
    if special_requests is not None:
        body["special_requests"] = special_requests
    response = client.post("/api/orders", json=body)
    assert response.status_code == 200, response.text
    return response.json()["id"]


def test_place_order_broadcasts_full_order(client, publisher):
    response = client.post("/api/orders", json={
        "table_no": "T1",
        "items": [{"sku": "A", "qty": 2}],
        "special_requests": "no onions",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True

    [(event, payload)] = publisher.events
    assert event == realtime.ORDER_PLACED
    assert payload["id"] == body["id"]
    assert payload["table_no"] == "T1"
    assert payload["items"] == [{"sku": "A", "qty": 2}]
    assert payload["special_requests"] == "no onions"
    assert payload["status"] == "placed"
    assert payload["archived"] is False
    assert payload["created_at"]


def test_place_order_with_zero_items(client, publisher):
    order_id = place(client, "T1", [])

    [order] = client.get("/api/orders").json()
    assert order["id"] == order_id
    assert order["items"] == []
    assert order["special_requests"] == ""


def test_numeric_table_no_is_accepted(client):
    place(client, 12, [])

    assert client.get("/api/orders").json()[0]["table_no"] == "12"


def test_place_order_validation_errors_emit_nothing(client, publisher):
    for body in (
        {"items": []},
        {"table_no": "", "items": []},
        {"table_no": "T1"},
        {"table_no": "T1", "items": {"sku": "A"}},
    ):
        response = client.post("/api/orders", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "table_no and items[] required"}

    assert publisher.events == []
    assert client.get("/api/orders").json() == []


def test_malformed_json_is_a_400(client, publisher):
    response = client.post(
        "/api/orders",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()
    assert publisher.events == []


def test_list_orders_expands_items_and_filters_status(client):
    first = place(client, "T1", [{"sku": "A"}])
    second = place(client, "T2", [{"sku": "B"}, {"sku": "C"}])
    client.post(f"/api/orders/{second}/status", json={"status": "preparing"})

    orders = client.get("/api/orders").json()
    assert [o["id"] for o in orders] == [second, first]
    assert orders[0]["items"] == [{"sku": "B"}, {"sku": "C"}]

    preparing = client.get("/api/orders", params={"status": "preparing"}).json()
    assert [o["id"] for o in preparing] == [second]
    assert client.get("/api/orders", params={"status": "unknown"}).json() == []


def test_add_items_merges_items_and_requests(client, publisher):
    order_id = place(client, "T9", [{"sku": "A"}], "no onions")
    client.post(f"/api/orders/{order_id}/status", json={"status": "ready"})
    publisher.events.clear()

    response = client.post("/api/orders/T9/add-items", json={
        "items": [{"sku": "B"}],
        "special_requests": "extra spicy",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    order = body["order"]
    assert order["id"] == order_id
    assert order["items"] == [{"sku": "A"}, {"sku": "B"}]
    assert order["special_requests"] == "no onions; extra spicy"
    assert order["status"] == "placed"

    [(event, payload)] = publisher.events
    assert event == realtime.ORDER_ITEMS_ADDED
    assert payload == order


def test_add_items_targets_latest_active_order(client):
    older = place(client, "T5", [{"sku": "old"}])
    newer = place(client, "T5", [{"sku": "new"}])

    order = client.post("/api/orders/T5/add-items", json={"items": [{"sku": "x"}]}).json()["order"]

    assert order["id"] == newer
    by_id = {o["id"]: o for o in client.get("/api/orders").json()}
    assert by_id[older]["items"] == [{"sku": "old"}]
    assert by_id[newer]["items"] == [{"sku": "new"}, {"sku": "x"}]


def test_add_items_errors(client, publisher):
    response = client.post("/api/orders/T1/add-items", json={"items": [{"sku": "A"}]})
    assert response.status_code == 404
    assert response.json() == {"error": "no active order for this table"}

    place(client, "T1", [])
    publisher.events.clear()
    for body in ({"items": []}, {}, {"items": "A"}):
        response = client.post("/api/orders/T1/add-items", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "items[] required"}

    assert publisher.events == []


def test_add_items_after_bill_is_404(client):
    order_id = place(client, "T1", [{"sku": "A"}])
    client.post(f"/api/orders/{order_id}/bill")

    response = client.post("/api/orders/T1/add-items", json={"items": [{"sku": "B"}]})

    assert response.status_code == 404


def test_status_change(client, publisher):
    order_id = place(client, "T1", [])
    publisher.events.clear()

    response = client.post(f"/api/orders/{order_id}/status", json={"status": "preparing"})

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    [(event, payload)] = publisher.events
    assert event == realtime.ORDER_STATUS_CHANGED
    assert payload["id"] == order_id
    assert payload["status"] == "preparing"


def test_status_billed_keeps_order_active_while_bill_archives(client, publisher):
    via_status = place(client, "T1", [])
    via_bill = place(client, "T2", [])
    publisher.events.clear()

    client.post(f"/api/orders/{via_status}/status", json={"status": "billed"})
    client.post(f"/api/orders/{via_bill}/bill")

    (e1, status_payload), (e2, bill_payload) = publisher.events
    assert (e1, e2) == (realtime.ORDER_STATUS_CHANGED, realtime.ORDER_BILLED)
    assert status_payload["status"] == bill_payload["status"] == "billed"
    assert status_payload["archived"] is False
    assert bill_payload["archived"] is True
    assert [o["id"] for o in client.get("/api/orders").json()] == [via_status]


def test_status_archived_removes_order_from_active_list(client):
    order_id = place(client, "T1", [])

    client.post(f"/api/orders/{order_id}/status", json={"status": "archived"})

    assert client.get("/api/orders").json() == []


def test_status_errors(client, publisher):
    order_id = place(client, "T1", [])
    publisher.events.clear()

    response = client.post(f"/api/orders/{order_id}/status", json={"status": "cooking"})
    assert response.status_code == 400
    assert response.json() == {"error": "invalid status"}

    response = client.post(f"/api/orders/{order_id}/status", json={})
    assert response.status_code == 400

    response = client.post("/api/orders/999/status", json={"status": "ready"})
    assert response.status_code == 404

    response = client.post("/api/orders/abc/status", json={"status": "ready"})
    assert response.status_code == 400

    assert publisher.events == []


def test_bill(client, publisher):
    order_id = place(client, "T1", [{"sku": "A"}])
    publisher.events.clear()

    response = client.post(f"/api/orders/{order_id}/bill")

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    [(event, payload)] = publisher.events
    assert event == realtime.ORDER_BILLED
    assert payload["items"] == [{"sku": "A"}]
    assert payload["archived"] is True


def test_bill_missing_order(client, publisher):
    response = client.post("/api/orders/999/bill")

    assert response.status_code == 404
    assert "error" in response.json()
    assert publisher.events == []


def test_one_event_per_successful_call(client, publisher):
    order_id = place(client, "T1", [])
    client.post("/api/orders/T1/add-items", json={"items": [{"sku": "A"}]})
    client.post(f"/api/orders/{order_id}/status", json={"status": "ready"})
    client.post(f"/api/orders/{order_id}/status", json={"status": "bogus"})
    client.post(f"/api/orders/{order_id}/bill")

    assert publisher.names() == [
        realtime.ORDER_PLACED,
        realtime.ORDER_ITEMS_ADDED,
        realtime.ORDER_STATUS_CHANGED,
        realtime.ORDER_BILLED,
    ]
