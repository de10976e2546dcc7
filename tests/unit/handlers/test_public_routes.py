"""
Module: test_public_routes.py
Description: Unit tests for the unauthenticated public batch view.
"""

from kefir_tracker.handlers.dependencies import get_current_user
from kefir_tracker.main import app


class TestPublicRoute:
    def test_shared_batch(self, client, sample_batch_input):
        batch = client.post(
            "/batches", json={**sample_batch_input, "isPublic": True, "publicNote": "Day two"}
        ).json()["batch"]
        app.dependency_overrides.pop(get_current_user)

        response = client.get(f"/public/b/{batch['batchId']}")

        assert response.status_code == 200
        assert response.json() == {"batch": {
            "batchId": batch["batchId"],
            "name": "Morning batch",
            "stage": "stage1_open",
            "status": "active",
            "startDate": "2024-01-15T08:00:00.000Z",
            "publicNote": "Day two",
            "createdAt": batch["createdAt"],
        }}

    def test_private_batch(self, client, sample_batch_input):
        batch = client.post("/batches", json=sample_batch_input).json()["batch"]

        response = client.get(f"/public/b/{batch['batchId']}")

        assert response.status_code == 403
        assert response.json() == {"error": "This batch is not publicly shared"}

    def test_unknown_batch(self, client):
        response = client.get("/public/b/missing")

        assert response.status_code == 404
        assert response.json() == {"error": "Batch not found"}
