import json


def create_dashboard(client, **body):
    response = client.post("/api/dashboards", json=body or None)
    assert response.status_code == 201
    return response.json()


# ========== TEST CRUD ==========
def test_create_dashboard_defaults(client):
    data = create_dashboard(client)
    assert data["name"] == "Untitled Dashboard"
    assert data["widgets"] == "[]"

def test_update_dashboard_partial(client):
    created = create_dashboard(client, name="Home")
    widgets = [{"i": "w1", "x": 0, "y": 0, "w": 1, "h": 2, "type": "notes"}]

    response = client.put(f"/api/dashboards/{created['id']}", json={"widgets": widgets})
    data = response.json()
    assert data["name"] == "Home"  # Non modifié
    assert json.loads(data["widgets"]) == widgets

def test_update_dashboard_not_found(client):
    response = client.put("/api/dashboards/nope", json={"name": "X"})
    assert response.status_code == 404

def test_delete_dashboard_has_no_cascade(client):
    """Supprimer un dashboard ne touche pas aux databases référencées"""
    database = client.post("/api/databases", json={"name": "Kept"}).json()
    created = create_dashboard(client, widgets=[
        {"i": "w1", "type": "database", "databaseId": database["id"], "viewMode": "table"}
    ])

    response = client.delete(f"/api/dashboards/{created['id']}")
    assert response.json() == {"success": True}
    assert client.get(f"/api/dashboards/{created['id']}").status_code == 404
    assert client.get(f"/api/databases/{database['id']}").status_code == 200


# ========== TEST WIDGETS ==========
def test_add_widgets_stack_vertically(client):
    database = client.post("/api/databases").json()
    created = create_dashboard(client)

    response = client.post(f"/api/dashboards/{created['id']}/widgets", json={"type": "notes"})
    assert response.status_code == 201
    response = client.post(
        f"/api/dashboards/{created['id']}/widgets",
        json={"type": "database", "databaseId": database["id"]}
    )
    widgets = json.loads(response.json()["widgets"])

    assert len(widgets) == 2
    notes, table = widgets
    assert (notes["x"], notes["y"], notes["w"], notes["h"]) == (0, 0, 1, 2)
    assert (table["x"], table["y"], table["w"], table["h"]) == (0, 2, 2, 2)
    assert table["databaseId"] == database["id"]
    assert table["viewMode"] == "table"
    assert notes["i"] != table["i"]

def test_add_database_widget_requires_database(client):
    created = create_dashboard(client)
    response = client.post(f"/api/dashboards/{created['id']}/widgets", json={"type": "database"})
    assert response.status_code == 400

def test_remove_widget(client):
    created = create_dashboard(client, widgets=[
        {"i": "a", "type": "notes"},
        {"i": "b", "type": "tasks"},
    ])
    response = client.delete(f"/api/dashboards/{created['id']}/widgets/a")
    assert [w["i"] for w in json.loads(response.json()["widgets"])] == ["b"]

    response = client.delete(f"/api/dashboards/{created['id']}/widgets/zzz")
    assert response.status_code == 404

def test_update_layout(client):
    """Les positions de la grille sont appliquées, les ids inconnus ignorés"""
    created = create_dashboard(client, widgets=[
        {"i": "a", "x": 0, "y": 0, "w": 1, "h": 2, "type": "notes", "title": "kept extra field"},
        {"i": "b", "x": 1, "y": 0, "w": 1, "h": 2, "type": "tasks"},
    ])
    layout = [{"i": "a", "x": 2, "y": 4, "w": 3, "h": 1}, {"i": "ghost", "x": 0, "y": 0, "w": 1, "h": 1}]

    response = client.put(f"/api/dashboards/{created['id']}/layout", json=layout)
    assert response.status_code == 200
    widgets = {w["i"]: w for w in json.loads(response.json()["widgets"])}
    assert (widgets["a"]["x"], widgets["a"]["y"], widgets["a"]["w"], widgets["a"]["h"]) == (2, 4, 3, 1)
    assert widgets["a"]["title"] == "kept extra field"
    assert (widgets["b"]["x"], widgets["b"]["y"]) == (1, 0)
    assert "ghost" not in widgets


# ========== TEST RENDER ==========
def test_render_dashboard(client):
    database = client.post("/api/databases", json={"name": "Board"}).json()
    for title, state in (("A", "Todo"), ("B", "Done"), ("C", "Weird")):
        client.post("/api/pages", json={"title": title, "databaseId": database["id"], "properties": {"status": state}})
    created = create_dashboard(client, widgets=[
        {"i": "w1", "type": "database", "databaseId": database["id"], "viewMode": "board"},
        {"i": "w2", "type": "tasks"},
        {"i": "w3", "type": "database", "databaseId": "missing", "viewMode": "table"},
    ])

    response = client.get(f"/api/dashboards/{created['id']}/render")
    assert response.status_code == 200
    board, tasks, missing = response.json()["widgets"]

    assert board["database"]["name"] == "Board"
    assert {c["status"]: [p["title"] for p in c["pages"]] for c in board["board"]} == {
        "Todo": ["A"], "In Progress": [], "Done": ["B"]
    }
    assert [p["title"] for p in tasks["pages"]] == ["A", "B", "C"]
    assert missing["database"] is None
    assert missing["pages"] == []

def test_render_dashboard_with_corrupt_widgets(client):
    """Blob de widgets illisible: rendu vide, pas d'erreur"""
    created = create_dashboard(client, widgets="{broken")
    response = client.get(f"/api/dashboards/{created['id']}/render")
    assert response.status_code == 200
    assert response.json()["widgets"] == []
