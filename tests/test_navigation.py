def navigate(client, **body):
    return client.post("/api/navigate", json=body)


# ========== TEST NAVIGATION ==========
def test_navigate_to_page_with_breadcrumbs(client):
    database = client.post("/api/databases", json={"name": "Wiki"}).json()
    root = client.post("/api/pages", json={"title": "Root", "databaseId": database["id"]}).json()
    child = client.post("/api/pages", json={"title": "Child", "databaseId": database["id"], "parentId": root["id"]}).json()
    leaf = client.post("/api/pages", json={"title": "Leaf", "databaseId": database["id"], "parentId": child["id"]}).json()

    response = navigate(client, kind="page", id=leaf["id"])
    assert response.status_code == 200
    data = response.json()
    assert data["kind"] == "page"
    assert data["page"]["title"] == "Leaf"
    assert data["database"]["name"] == "Wiki"
    assert data["parentId"] == child["id"]
    assert [p["title"] for p in data["breadcrumbs"]] == ["Root", "Child"]

def test_navigate_to_loose_page(client):
    page = client.post("/api/pages", json={"title": "Loose"}).json()
    data = navigate(client, kind="page", id=page["id"]).json()
    assert data["database"] is None
    assert data["breadcrumbs"] == []

def test_navigate_to_database_inside_page(client):
    database = client.post("/api/databases", json={"name": "Tasks"}).json()
    epic = client.post("/api/pages", json={"title": "Epic", "databaseId": database["id"]}).json()

    data = navigate(client, kind="database", id=database["id"], parentId=epic["id"]).json()
    assert data["database"]["id"] == database["id"]
    assert data["parentId"] == epic["id"]
    assert [p["title"] for p in data["breadcrumbs"]] == ["Epic"]

    data = navigate(client, kind="database", id=database["id"]).json()
    assert data["breadcrumbs"] == []

def test_navigate_to_dashboard(client):
    dashboard = client.post("/api/dashboards", json={"name": "Home"}).json()
    data = navigate(client, kind="dashboard", id=dashboard["id"]).json()
    assert data["dashboard"]["name"] == "Home"
    assert data["page"] is None

def test_navigate_missing_target(client):
    assert navigate(client, kind="page", id="nope").status_code == 404
    assert navigate(client, kind="database", id="nope").status_code == 404
    assert navigate(client, kind="dashboard", id="nope").status_code == 404

def test_navigate_unknown_kind(client):
    assert navigate(client, kind="folder", id="x").status_code == 422
