import json

from dungeonsmith import create_app


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.get_json()["status"] == "ok"


def test_themes_endpoint_lists_builtins(client):
    r = client.get("/api/dungeon/themes")
    assert r.status_code == 200
    data = r.get_json()
    names = [t["name"] for t in data["themes"]]
    assert names == ["Cave", "Tomb", "Deep Tunnels", "Ruins"]
    assert data["default"] == "Cave"
    assert "possibleBossMonsters" in data["themes"][0]


def test_sizes_endpoint(client):
    data = client.get("/api/dungeon/sizes").get_json()
    assert data["sizes"]["Large"] == {"minRooms": 12, "maxRooms": 20, "gridSize": 48, "cellSize": 12}
    assert data["default"] == "Medium"


def test_generate_returns_full_payload(client):
    r = client.post("/api/dungeon/generate", json={"dungeonType": "Tomb", "size": "Small", "seed": 77})
    assert r.status_code == 200
    data = r.get_json()
    assert data["seed"] == 77
    assert (data["dungeonType"], data["size"], data["gridSize"], data["cellSize"]) == ("Tomb", "Small", 24, 20)
    assert data["svg"].startswith("<svg")
    assert data["guide"].startswith("# Tomb Dungeon Master's Guide")
    assert data["report"]["rooms_placed"] == len(data["rooms"])
    ids = {room["id"] for room in data["rooms"]}
    for room in data["rooms"]:
        for door in room["doors"]:
            assert door["connectsTo"] in ids


def test_generate_is_deterministic_per_seed(client):
    body = {"dungeonType": "Ruins", "size": "Medium", "seed": 31337}
    a = client.post("/api/dungeon/generate", json=body).get_json()
    b = client.post("/api/dungeon/generate", json=body).get_json()
    for key in ("rooms", "svg", "guide"):
        assert a[key] == b[key]


def test_generate_defaults_and_draws_seed(client):
    data = client.post("/api/dungeon/generate").get_json()
    assert data["dungeonType"] == "Cave"
    assert data["size"] == "Medium"
    assert isinstance(data["seed"], int)


def test_string_seed_is_hashed_consistently(client):
    a = client.post("/api/dungeon/generate", json={"seed": "goblin king", "size": "Small"}).get_json()
    b = client.post("/api/dungeon/generate", json={"seed": "goblin king", "size": "Small"}).get_json()
    assert a["seed"] == b["seed"]
    assert a["rooms"] == b["rooms"]
    digits = client.post("/api/dungeon/generate", json={"seed": "123", "size": "Small"}).get_json()
    assert digits["seed"] == 123


def test_style_options_shape_svg(client):
    data = client.post(
        "/api/dungeon/generate",
        json={"seed": 5, "size": "Small", "style": {"doorStyle": "none", "showGrid": False}},
    ).get_json()
    assert 'class="doors"' not in data["svg"]
    assert 'stroke-width="0.5"' not in data["svg"]


def test_unknown_size_falls_back(client):
    data = client.post("/api/dungeon/generate", json={"size": "Huge", "seed": 3}).get_json()
    assert data["size"] == "Medium"


def test_bad_requests_are_400(client):
    cases = [
        {"dungeonType": "Volcano"},
        {"seed": True},
        {"seed": [1, 2]},
        {"style": "dark"},
        {"style": {"doorStyle": "dotted"}},
        {"style": {"sparkle": True}},
        {"dungeonType": ["Cave"]},
        {"size": ["Small"]},
        {"size": {"a": 1}},
    ]
    for body in cases:
        r = client.post("/api/dungeon/generate", json=body)
        assert r.status_code == 400, body
        assert "error" in r.get_json()
    r = client.post("/api/dungeon/generate", data="[1, 2]", content_type="application/json")
    assert r.status_code == 400


def test_svg_endpoint(client):
    r = client.get("/api/dungeon/svg?dungeonType=Cave&size=Small&seed=42")
    assert r.status_code == 200
    assert r.mimetype == "image/svg+xml"
    assert r.headers["X-Dungeon-Seed"] == "42"
    again = client.get("/api/dungeon/svg?dungeonType=Cave&size=Small&seed=42")
    assert again.get_data() == r.get_data()
    assert client.get("/api/dungeon/svg?dungeonType=Nope").status_code == 400


def test_custom_themes_file(tmp_path):
    path = tmp_path / "themes.json"
    path.write_text(json.dumps({"Sewer": {"possibleRooms": ["Cistern"], "possibleTraps": ["Gas Vent"]}}))
    app = create_app({"TESTING": True, "DUNGEONSMITH_THEMES_FILE": str(path)})
    c = app.test_client()
    names = [t["name"] for t in c.get("/api/dungeon/themes").get_json()["themes"]]
    assert names[-1] == "Sewer" and "Cave" in names
    data = c.post("/api/dungeon/generate", json={"dungeonType": "Sewer", "size": "Small", "seed": 2}).get_json()
    assert {room["type"] for room in data["rooms"]} == {"Cistern"}
