import unittest

import httpx

from clouddrive.backend import LOCAL_BASE_URL, OWNER_HEADER, LocalDriveApp


class TestLocalDriveApp(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.app = LocalDriveApp()
        self.http = httpx.AsyncClient(
            transport=self.app.transport(),
            base_url=LOCAL_BASE_URL,
            headers={OWNER_HEADER: "u1"},
        )

    async def asyncTearDown(self) -> None:
        await self.http.aclose()

    async def _create_folder(self, name: str, parent_id=None) -> dict:
        resp = await self.http.post("/folders", json={"name": name, "parentId": parent_id})
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertTrue(body["success"])
        return body["data"]["folder"]

    async def test_missing_owner_header_is_401(self) -> None:
        async with httpx.AsyncClient(transport=self.app.transport(), base_url=LOCAL_BASE_URL) as anon:
            resp = await anon.get("/files")
        self.assertEqual(resp.status_code, 401)
        body = resp.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error"]["reason"], "unauthorized")

    async def test_create_and_list_folders(self) -> None:
        reports = await self._create_folder("Reports")
        await self._create_folder("2024", reports["id"])

        resp = await self.http.get("/folders", params={"parentId": reports["id"]})
        data = resp.json()["data"]
        self.assertEqual([f["name"] for f in data["folders"]], ["2024"])
        self.assertEqual(data["folders"][0]["parentId"], reports["id"])
        self.assertEqual(data["pagination"], {"page": 1, "limit": 20, "total": 1, "pages": 1})

    async def test_validation_error_envelope(self) -> None:
        resp = await self.http.post("/folders", json={"name": "a/b"})
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["message"], "Folder name contains invalid characters")
        self.assertEqual(body["error"]["reason"], "validation")

    async def test_cyclic_move_is_409_with_reason(self) -> None:
        a = await self._create_folder("A")
        b = await self._create_folder("B", a["id"])
        resp = await self.http.put(f"/folders/{a['id']}/move", json={"parentId": b["id"]})
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["error"]["reason"], "cyclicMove")

    async def test_upload_multipart_and_download(self) -> None:
        folder = await self._create_folder("Docs")
        resp = await self.http.post(
            "/files/upload",
            files={"file": ("notes.txt", b"hello world", "text/plain")},
            data={"folderId": folder["id"]},
        )
        self.assertEqual(resp.status_code, 201)
        file = resp.json()["data"]["file"]
        self.assertEqual(file["name"], "notes.txt")
        self.assertEqual(file["size"], 11)
        self.assertEqual(file["mimeType"], "text/plain")
        self.assertEqual(file["folderId"], folder["id"])

        resp = await self.http.get(f"/files/{file['id']}/download")
        data = resp.json()["data"]
        self.assertEqual(data["fileName"], "notes.txt")

        content = await self.http.get(data["downloadUrl"])
        self.assertEqual(content.status_code, 200)
        self.assertEqual(content.content, b"hello world")

    async def test_upload_must_be_multipart(self) -> None:
        resp = await self.http.post("/files/upload", json={"name": "a.txt"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"]["reason"], "validation")

    async def test_trash_restore_and_permanent_delete_routes(self) -> None:
        folder = await self._create_folder("Old")
        resp = await self.http.delete(f"/folders/{folder['id']}")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["data"]["folder"]["isDeleted"])

        trash = (await self.http.get("/folders/trash")).json()["data"]["folders"]
        self.assertEqual([f["id"] for f in trash], [folder["id"]])

        resp = await self.http.delete(f"/folders/{folder['id']}/permanent")
        self.assertEqual(resp.json()["data"], {"deleted": 1})

        resp = await self.http.put(f"/folders/{folder['id']}/restore")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["error"]["reason"], "notFound")

    async def test_permanent_delete_of_active_folder_is_conflict(self) -> None:
        folder = await self._create_folder("Live")
        resp = await self.http.delete(f"/folders/{folder['id']}/permanent")
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["error"]["reason"], "conflict")

    async def test_breadcrumb_and_stats(self) -> None:
        reports = await self._create_folder("Reports")
        y2024 = await self._create_folder("2024", reports["id"])

        crumbs = (await self.http.get(f"/folders/breadcrumb/{y2024['id']}")).json()["data"]["breadcrumb"]
        self.assertEqual(
            crumbs,
            [
                {"id": None, "name": "My Drive", "path": "/"},
                {"id": reports["id"], "name": "Reports", "path": "/Reports"},
                {"id": y2024["id"], "name": "2024", "path": "/Reports/2024"},
            ],
        )

        stats = (await self.http.get(f"/folders/{reports['id']}/stats")).json()["data"]
        self.assertEqual(stats, {"totalItems": 1, "totalFolders": 1, "totalFiles": 0, "totalSize": 0})

    async def test_unknown_route_is_404(self) -> None:
        resp = await self.http.get("/nowhere")
        self.assertEqual(resp.status_code, 404)
        body = resp.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error"]["reason"], "notFound")

    async def test_wrong_method_keeps_the_envelope(self) -> None:
        resp = await self.http.post("/files", json={})
        self.assertEqual(resp.status_code, 405)
        self.assertFalse(resp.json()["success"])

    async def test_upload_keeps_unicode_name_and_binary_content(self) -> None:
        payload = b"\x00\r\n\xff\rbinary\n"
        resp = await self.http.post(
            "/files/upload",
            files={"file": ("r\u00e9sum\u00e9 \u65e5\u672c.bin", payload, "application/octet-stream")},
        )
        self.assertEqual(resp.status_code, 201)
        file = resp.json()["data"]["file"]
        self.assertEqual(file["name"], "r\u00e9sum\u00e9 \u65e5\u672c.bin")
        self.assertEqual(file["size"], len(payload))
        self.assertIsNone(file["folderId"])

        ticket = (await self.http.get(f"/files/{file['id']}/download")).json()["data"]
        content = await self.http.get(ticket["downloadUrl"])
        self.assertEqual(content.content, payload)

    async def test_base_url_path_prefixes_every_route(self) -> None:
        app = LocalDriveApp(base_url="http://svc.local/api")
        async with httpx.AsyncClient(
            transport=app.transport(),
            base_url="http://svc.local/api",
            headers={OWNER_HEADER: "u1"},
        ) as http:
            resp = await http.post("/folders", json={"name": "Docs"})
            self.assertEqual(resp.status_code, 201)
            resp = await http.get("/folders")
            self.assertEqual([f["name"] for f in resp.json()["data"]["folders"]], ["Docs"])

            unprefixed = await http.get("http://svc.local/folders")
            self.assertEqual(unprefixed.status_code, 404)

    async def test_bad_paging_is_400(self) -> None:
        resp = await self.http.get("/files", params={"page": "zero"})
        self.assertEqual(resp.status_code, 400)


if __name__ == "__main__":
    unittest.main()
