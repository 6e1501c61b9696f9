from src.planner.seed import initial_checklist

DEFAULT_TEXTS = [
    "Complete 2 DSA problems",
    "Review Aptitude concepts",
    "Code for 1 hour on project",
    "Plan tomorrow's study blocks",
]


def reset(client):
    res = client.post("/api/checklist/reset")
    assert res.status_code == 200
    assert res.json() == {"message": "Checklist reset successfully"}
    return client.get("/api/checklist").json()


class TestChecklist:
    def test_starts_empty(self, client):
        res = client.get("/api/checklist")
        assert res.status_code == 200
        assert res.json() == []

    def test_reset_seeds_defaults(self, client):
        items = reset(client)
        assert [i["text"] for i in items] == DEFAULT_TEXTS
        assert all(i["completed"] is False for i in items)

    def test_reset_discards_prior_state(self, client):
        items = reset(client)
        client.patch(f"/api/checklist/{items[0]['id']}", json={"completed": True})
        client.delete(f"/api/checklist/{items[1]['id']}")

        items = reset(client)
        assert len(items) == 4
        assert all(i["completed"] is False for i in items)

    def test_update_completed(self, client):
        item = reset(client)[2]
        res = client.patch(f"/api/checklist/{item['id']}", json={"completed": True})
        assert res.status_code == 200
        assert res.json() == {**item, "completed": True}

        res = client.patch(f"/api/checklist/{item['id']}", json={"completed": False})
        assert res.json()["completed"] is False

    def test_update_requires_flag(self, client):
        item = reset(client)[0]
        res = client.patch(f"/api/checklist/{item['id']}", json={})
        assert res.status_code == 422

    def test_update_not_found(self, client):
        res = client.patch("/api/checklist/nope", json={"completed": True})
        assert res.status_code == 404
        assert res.json()["message"] == "Checklist item not found"

    def test_delete_item(self, client):
        items = reset(client)
        res = client.delete(f"/api/checklist/{items[0]['id']}")
        assert res.status_code == 200
        assert res.json() == {"message": "Checklist item deleted"}
        assert len(client.get("/api/checklist").json()) == 3

        res = client.delete(f"/api/checklist/{items[0]['id']}")
        assert res.status_code == 404

    def test_seed_returns_fresh_copies(self):
        first = initial_checklist()
        first[0]["completed"] = True
        assert initial_checklist()[0]["completed"] is False
