import json
from notebase.models.page import Page


def create_database(client, **body):
    return client.post("/api/databases", json=body or None).json()


# ========== TEST CREATE DATABASE ==========
def test_create_database_defaults(client):
    """Sans body: nom, icône et schéma par défaut"""
    response = client.post("/api/databases")
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Untitled Database"
    assert data["icon"] == "Database"
    assert "id" in data

    columns = json.loads(data["columns"])
    assert [c["id"] for c in columns] == ["status", "date", "priority", "assignee"]
    assert columns[0]["type"] == "select"
    assert columns[0]["options"] == ["Todo", "In Progress", "Done"]
    assert columns[3]["type"] == "text"

def test_create_database_with_name(client):
    data = create_database(client, name="Tasks", icon="Code")
    assert data["name"] == "Tasks"
    assert data["icon"] == "Code"

def test_list_databases(client):
    create_database(client, name="A")
    create_database(client, name="B")

    response = client.get("/api/databases")
    assert response.status_code == 200
    assert [d["name"] for d in response.json()] == ["A", "B"]

def test_get_database_not_found(client):
    response = client.get("/api/databases/nope")
    assert response.status_code == 404
    assert response.json()["detail"] == "Database not found"


# ========== TEST UPDATE DATABASE ==========
def test_update_database_partial(client):
    """Les champs absents gardent leur valeur"""
    created = create_database(client, name="Original", icon="Palette")

    response = client.put(f"/api/databases/{created['id']}", json={"name": "Renamed"})
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Renamed"
    assert data["icon"] == "Palette"  # Non modifiée
    assert data["columns"] == created["columns"]  # Non modifiées

def test_update_database_columns_as_list(client):
    """Une liste de colonnes est stockée en string JSON"""
    created = create_database(client)
    new_columns = [{"id": "title", "name": "Title", "type": "text", "width": 200}]

    response = client.put(f"/api/databases/{created['id']}", json={"columns": new_columns})
    assert json.loads(response.json()["columns"]) == new_columns

def test_update_database_duplicate_column_ids(client):
    """Deux colonnes avec le même id sont refusées, le schéma reste intact"""
    created = create_database(client)
    duplicated = [
        {"id": "status", "name": "Status", "type": "select"},
        {"id": "status", "name": "State", "type": "text"},
    ]

    response = client.put(f"/api/databases/{created['id']}", json={"columns": duplicated, "name": "Renamed"})
    assert response.status_code == 400
    assert "status" in response.json()["detail"]

    data = client.get(f"/api/databases/{created['id']}").json()
    assert data["columns"] == created["columns"]
    assert data["name"] == created["name"]

def test_update_database_not_found(client):
    response = client.put("/api/databases/nope", json={"name": "X"})
    assert response.status_code == 404


# ========== TEST DELETE DATABASE ==========
def test_delete_database_cascades_to_pages(client, db):
    """Plus aucune page avec databaseId == id après suppression"""
    target = create_database(client, name="Target")
    other = create_database(client, name="Other")
    for title in ("One", "Two", "Three"):
        client.post("/api/pages", json={"title": title, "databaseId": target["id"]})
    client.post("/api/pages", json={"title": "Keep me", "databaseId": other["id"]})

    response = client.delete(f"/api/databases/{target['id']}")
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert db.query(Page).filter(Page.database_id == target["id"]).count() == 0
    assert db.query(Page).filter(Page.database_id == other["id"]).count() == 1
    assert client.get(f"/api/databases/{target['id']}").status_code == 404

def test_delete_database_not_found(client):
    response = client.delete("/api/databases/nope")
    assert response.status_code == 404


# ========== TEST COLUMNS ==========
def test_add_column_slug_from_name(client):
    created = create_database(client)

    response = client.post(f"/api/databases/{created['id']}/columns", json={"name": "Due Date", "type": "date"})
    assert response.status_code == 201
    columns = json.loads(response.json()["columns"])
    assert columns[-1] == {"id": "due-date", "name": "Due Date", "type": "date", "width": 150}

def test_add_column_generated_ids_stay_unique(client):
    created = create_database(client)
    client.post(f"/api/databases/{created['id']}/columns", json={"name": "Notes"})
    response = client.post(f"/api/databases/{created['id']}/columns", json={"name": "Notes"})

    ids = [c["id"] for c in json.loads(response.json()["columns"])]
    assert ids.count("notes") == 1
    assert "notes-2" in ids

def test_add_column_duplicate_explicit_id(client):
    """Un id explicite déjà pris est refusé"""
    created = create_database(client)
    response = client.post(
        f"/api/databases/{created['id']}/columns",
        json={"id": "status", "name": "Other status", "type": "select", "options": ["A"]}
    )
    assert response.status_code == 400

def test_rename_column(client):
    created = create_database(client)
    response = client.put(f"/api/databases/{created['id']}/columns/assignee", json={"name": "Owner"})
    assert response.status_code == 200
    columns = json.loads(response.json()["columns"])
    owner = next(c for c in columns if c["id"] == "assignee")
    assert owner["name"] == "Owner"
    assert owner["type"] == "text"

def test_remove_column(client):
    created = create_database(client)
    response = client.delete(f"/api/databases/{created['id']}/columns/priority")
    assert response.status_code == 200
    ids = [c["id"] for c in json.loads(response.json()["columns"])]
    assert ids == ["status", "date", "assignee"]

def test_remove_unknown_column(client):
    created = create_database(client)
    response = client.delete(f"/api/databases/{created['id']}/columns/nope")
    assert response.status_code == 404

def test_column_edit_on_corrupt_schema(client):
    """Blob illisible: l'écriture passe, l'édition de colonnes échoue proprement"""
    created = create_database(client)
    response = client.put(f"/api/databases/{created['id']}", json={"columns": "not json"})
    assert response.status_code == 200

    response = client.post(f"/api/databases/{created['id']}/columns", json={"name": "X"})
    assert response.status_code == 422


# ========== TEST TEMPLATES ==========
def test_list_templates(client):
    created = create_database(client)
    client.post("/api/pages", json={"title": "Bug Report", "databaseId": created["id"], "isTemplate": True})
    client.post("/api/pages", json={"title": "Real bug", "databaseId": created["id"]})

    response = client.get(f"/api/databases/{created['id']}/templates")
    assert response.status_code == 200
    assert [p["title"] for p in response.json()] == ["Bug Report"]


# ========== TEST VIEW ==========
def test_database_view_board(client):
    created = create_database(client)
    db_id = created["id"]
    parent = client.post("/api/pages", json={"title": "Epic", "databaseId": db_id}).json()
    client.post("/api/pages", json={"title": "A", "databaseId": db_id, "parentId": parent["id"], "properties": {"status": "Done"}})
    client.post("/api/pages", json={"title": "B", "databaseId": db_id, "parentId": parent["id"], "properties": {"status": "Todo"}})
    client.post("/api/pages", json={"title": "Loose", "databaseId": db_id, "properties": {"status": "Todo"}})

    response = client.get(f"/api/databases/{db_id}/view", params={"mode": "board"})
    assert response.status_code == 200
    data = response.json()
    assert [p["title"] for p in data["pages"]] == ["Epic", "Loose"]
    assert [c["status"] for c in data["board"]] == ["Todo", "In Progress", "Done"]
    assert [p["title"] for p in data["board"][0]["pages"]] == ["Loose"]
    assert data["progress"][parent["id"]]["fraction"] == 0.5

    response = client.get(f"/api/databases/{db_id}/view", params={"parentId": parent["id"]})
    data = response.json()
    assert data["board"] is None
    assert [p["title"] for p in data["pages"]] == ["A", "B"]
    assert [p["title"] for p in data["breadcrumbs"]] == ["Epic"]
