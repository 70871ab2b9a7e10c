def _post(client, account_id, kind="ENTRADA", amount=10, description="Salario", categories=None):
    return client.post("/transactions", json={
        "account_id": account_id,
        "kind": kind,
        "amount": amount,
        "occurred_at": "2024-03-01T12:00:00",
        "description": description,
        "categories": categories or [],
    })


def test_each_posting_writes_one_audit_entry(client, make_account):
    acc = make_account(balance=100)
    tx = _post(client, acc["id"]).json()
    client.put(f"/transactions?id={tx['id']}", json={"description": "Salario ajustado"})
    client.delete(f"/transactions?id={tx['id']}")

    logs = client.get(f"/audit-logs?transaction_id={tx['id']}").json()
    assert [e["operation"] for e in logs] == ["INSERT", "UPDATE", "DELETE"]
    assert [e["description"] for e in logs] == ["Salario", "Salario ajustado", "Salario ajustado"]
    assert all(e["user_id"] == acc["user_id"] for e in logs)

    only_delete = client.get("/audit-logs?operation=DELETE").json()
    assert [e["transaction_id"] for e in only_delete] == [tx["id"]]


def test_rejected_posting_writes_no_audit_entry(client, make_account):
    acc = make_account(balance=0)
    resp = _post(client, acc["id"], kind="SAIDA", amount=1)
    assert resp.status_code == 400
    assert client.get("/audit-logs").json() == []


def test_link_category_to_existing_transaction(client, make_account, make_category, balance_of):
    acc = make_account(balance=50)
    cat = make_category("Extra")
    tx = _post(client, acc["id"]).json()

    resp = client.post("/transactions/categories", json={"transaction_id": tx["id"], "category_id": cat["id"]})

    assert resp.status_code == 200, resp.text
    assert [c["id"] for c in resp.json()["categories"]] == [cat["id"]]
    assert balance_of(acc["id"]) == 60.0
    ops = [e["operation"] for e in client.get(f"/audit-logs?transaction_id={tx['id']}").json()]
    assert ops == ["INSERT", "UPDATE"]


def test_link_category_errors(client, make_account, make_category):
    acc = make_account(balance=0)
    cat = make_category("Unica")
    tx = _post(client, acc["id"], categories=[cat["id"]]).json()

    dup = client.post("/transactions/categories", json={"transaction_id": tx["id"], "category_id": cat["id"]})
    assert dup.status_code == 400

    no_tx = client.post("/transactions/categories", json={"transaction_id": 9999, "category_id": cat["id"]})
    assert no_tx.status_code == 400

    no_cat = client.post("/transactions/categories", json={"transaction_id": tx["id"], "category_id": 9999})
    assert no_cat.status_code == 400

    missing = client.post("/transactions/categories", json={"transaction_id": tx["id"]})
    assert missing.status_code == 400
