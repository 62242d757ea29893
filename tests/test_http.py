import os
import sys
import unittest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from fastapi.testclient import TestClient

os.environ["USE_DB"] = "0"
os.environ["CMS_BASE_URL"] = "/admin"
os.environ["CMS_SCHEMA_PATH"] = os.path.join(ROOT, "tests", "fixtures", "schema.json")
os.environ["IMGUR_CLIENT_ID"] = "test-client"

import app.main as main


class TestHttpHost(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(main.app)

    def test_health(self) -> None:
        self.assertEqual(self.client.get("/health").json(), {"ok": True})

    def test_bootstrap(self) -> None:
        res = self.client.get("/bootstrap", params={"pathname": "/admin/posts/42", "search": "?tab=1"})
        body = res.json()
        self.assertTrue(body["ok"], body)
        self.assertEqual(body["routes"], ["posts", "42"])
        self.assertEqual(body["root_key"], "posts")
        self.assertEqual(body["params"], {"tab": "1"})
        self.assertEqual(sorted(body["entities"]), ["info", "posts"])
        self.assertEqual(body["image_service_configs"]["posts"]["headers"]["Authorization"], "Client-ID test-client")

    def test_stage_and_deploy_record(self) -> None:
        created = self.client.post("/entities/posts", json={"record": {"title": "Draft", "views": 0}}).json()
        record_id = created["record_id"]

        staged = self.client.post("/entities/posts/changes", json={"record_id": record_id, "changes": {"title": "Live"}}).json()
        self.assertTrue(staged["ok"], staged)
        self.assertEqual(self.client.get(f"/entities/posts/{record_id}").json()["record"]["title"], "Draft")

        deployed = self.client.post(f"/deploy/posts?record_id={record_id}").json()
        self.assertEqual(deployed["provider_state"], "mounted")
        self.assertEqual(self.client.get(f"/entities/posts/{record_id}").json()["record"]["title"], "Live")

        self.assertTrue(self.client.delete(f"/entities/posts/{record_id}").json()["ok"])
        self.assertEqual(self.client.get(f"/entities/posts/{record_id}").status_code, 404)

    def test_reset_discards_object_changes(self) -> None:
        self.client.post("/entities/info/changes", json={"changes": {"name": "Temp"}})
        self.assertTrue(self.client.post("/reset/info").json()["ok"])
        self.client.post("/deploy/info")
        self.assertEqual(self.client.get("/entities/info").json()["value"]["name"], "")

    def test_unknown_entity_and_record(self) -> None:
        res = self.client.get("/entities/missing")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.json()["errors"][0]["code"], "ENTITY_NOT_FOUND")
        res = self.client.get("/entities/posts/nope")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.json()["errors"][0]["code"], "RECORD_NOT_FOUND")
        self.assertEqual(self.client.post("/deploy/missing").status_code, 404)

    def test_invalid_changes(self) -> None:
        res = self.client.post("/entities/posts/changes", json={"changes": "nope"})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["errors"][0]["code"], "CHANGES_INVALID")

    def test_stage_shape_mismatch_rejected(self) -> None:
        res = self.client.post("/entities/posts/changes", json={"changes": {"title": "x"}})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["errors"][0]["code"], "RECORD_ID_REQUIRED")
        res = self.client.post("/entities/info/changes", json={"record_id": "x", "changes": {"name": "y"}})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["errors"][0]["code"], "RECORD_ID_NOT_ALLOWED")

    def test_failed_deploy_keeps_pending_change(self) -> None:
        self.client.post("/entities/posts/changes", json={"record_id": "gone", "changes": {"title": "x"}})
        res = self.client.post("/deploy/posts?record_id=gone")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(main.cms.provider.pending("posts").get("gone"), {"title": "x"})
        self.client.post("/reset/posts?record_id=gone")
        self.assertEqual(main.cms.provider.pending("posts"), {})


if __name__ == "__main__":
    unittest.main()
