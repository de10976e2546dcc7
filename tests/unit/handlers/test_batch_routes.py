"""
Module: test_batch_routes.py
Description: Unit tests for the batch and photo endpoints.

Runs the full application through TestClient with the table and bucket
mocked by moto and the caller injected via dependency overrides.
"""

from kefir_tracker.auth.identity import UserContext

BOB = UserContext(user_id="user-2", email="bob@example.com")


def create(client, body):
    response = client.post("/batches", json=body)
    assert response.status_code == 201
    return response.json()["batch"]


class TestCreateBatch:
    def test_create_batch_success(self, client, sample_batch_input, mock_metrics):
        response = client.post("/batches", json=sample_batch_input)

        assert response.status_code == 201
        batch = response.json()["batch"]
        assert batch["name"] == "Morning batch"
        assert batch["userId"] == "user-1"
        assert batch["status"] == "active"
        assert batch["photoKeys"] == []
        assert batch["targetDuration"] == 48
        assert "PK" not in batch
        assert "GSI1PK" not in batch

        mock_metrics.batch_created.assert_called_once_with('stage1_open')

    def test_validation_errors_list_every_field(self, client):
        response = client.post("/batches", json={"name": "", "stage": "stage3", "temperature": 5})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        assert {e["path"] for e in body["errors"]} == {"name", "stage", "temperature"}

    def test_malformed_json(self, client):
        response = client.post(
            "/batches",
            content="{not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"


class TestReadBatches:
    def test_list_batches(self, client, sample_batch_input):
        create(client, sample_batch_input)
        create(client, {**sample_batch_input, "name": "Second", "stage": "stage2_bottled"})

        everything = client.get("/batches").json()
        bottled = client.get("/batches", params={"stage": "stage2_bottled"}).json()

        assert everything["count"] == 2
        assert [b["name"] for b in bottled["batches"]] == ["Second"]
        assert bottled["count"] == 1

    def test_invalid_filter(self, client):
        response = client.get("/batches", params={"limit": "0"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["path"] == "limit"

    def test_get_batch(self, client, sample_batch_input):
        batch = create(client, sample_batch_input)

        response = client.get(f"/batches/{batch['batchId']}")

        assert response.status_code == 200
        fetched = response.json()["batch"]
        assert fetched["batchId"] == batch["batchId"]
        assert fetched["createdAt"] == batch["createdAt"]
        assert fetched["temperature"] == 22.5
        assert fetched["sugarType"] == "cane"

    def test_foreign_batch_is_not_found(self, client, sample_batch_input):
        batch = create(client, sample_batch_input)
        client.login_as(BOB)

        response = client.get(f"/batches/{batch['batchId']}")

        assert response.status_code == 404
        assert response.json() == {"error": "Batch not found"}

    def test_list_is_scoped_to_caller(self, client, sample_batch_input):
        create(client, sample_batch_input)
        client.login_as(BOB)

        assert client.get("/batches").json() == {"batches": [], "count": 0}


class TestUpdateBatch:
    def test_update_batch(self, client, sample_batch_input):
        batch = create(client, sample_batch_input)

        response = client.put(
            f"/batches/{batch['batchId']}",
            json={"stage": "stage2_bottled", "notes": None, "isPublic": True}
        )

        assert response.status_code == 200
        updated = response.json()["batch"]
        assert updated["stage"] == "stage2_bottled"
        assert updated["isPublic"] is True
        assert "notes" not in updated
        assert updated["name"] == "Morning batch"

    def test_required_field_cannot_be_cleared(self, client, sample_batch_input):
        batch = create(client, sample_batch_input)

        response = client.put(f"/batches/{batch['batchId']}", json={"name": None})

        assert response.status_code == 400
        assert response.json()["errors"] == [{"path": "name", "message": "cannot be null"}]

    def test_archive_batch(self, client, sample_batch_input):
        batch = create(client, sample_batch_input)

        response = client.delete(f"/batches/{batch['batchId']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Batch archived successfully"}
        assert client.get(f"/batches/{batch['batchId']}").json()["batch"]["status"] == "archived"


class TestPhotos:
    def test_upload_url_without_body(self, client, sample_batch_input):
        batch = create(client, sample_batch_input)

        response = client.post(f"/batches/{batch['batchId']}/photo/upload-url")

        assert response.status_code == 200
        body = response.json()
        assert body["uploadUrl"].startswith("https://")
        assert body["photoKey"].startswith(f"users/user-1/batches/{batch['batchId']}/")
        assert body["photoKey"].endswith(".jpg")

    def test_upload_url_uses_filename_extension(self, client, sample_batch_input):
        batch = create(client, sample_batch_input)

        response = client.post(
            f"/batches/{batch['batchId']}/photo/upload-url",
            json={"filename": "jar.png", "contentType": "image/png"}
        )

        assert response.json()["photoKey"].endswith(".png")

    def test_attach_photo_and_list_urls(self, client, sample_batch_input):
        batch = create(client, sample_batch_input)
        photo_key = client.post(f"/batches/{batch['batchId']}/photo/upload-url").json()["photoKey"]

        attached = client.post(f"/batches/{batch['batchId']}/photo", json={"photoKey": photo_key})
        urls = client.get(f"/batches/{batch['batchId']}/photos")

        assert attached.status_code == 200
        assert attached.json()["batch"]["photoKeys"] == [photo_key]
        assert len(urls.json()["photoUrls"]) == 1

    def test_attach_foreign_key_rejected(self, client, sample_batch_input):
        batch = create(client, sample_batch_input)

        response = client.post(
            f"/batches/{batch['batchId']}/photo",
            json={"photoKey": "users/user-2/batches/other/1.jpg"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Photo key does not belong to this batch"}
