import unittest
from datetime import datetime, timezone

from clouddrive.models import BreadcrumbEntry, File, Folder, FolderStats, ItemKind
from clouddrive.models.codec import (
    breadcrumb_to_dict,
    file_from_dict,
    file_to_dict,
    folder_from_dict,
    folder_to_dict,
    item_from_dict,
    pagination_from_dict,
    stats_from_dict,
    stats_to_dict,
)

T0 = datetime(2025, 1, 1, 9, 30, tzinfo=timezone.utc)


class TestCodec(unittest.TestCase):
    def test_folder_to_dict_uses_camel_case(self) -> None:
        folder = Folder(
            id="F1",
            name="Reports",
            owner_id="u1",
            parent_id=None,
            is_starred=True,
            created_at=T0,
            updated_at=T0,
            path="/Reports",
        )
        data = folder_to_dict(folder)
        self.assertEqual(data["parentId"], None)
        self.assertEqual(data["ownerId"], "u1")
        self.assertTrue(data["isStarred"])
        self.assertFalse(data["isDeleted"])
        self.assertIsNone(data["deletedAt"])
        self.assertEqual(data["createdAt"], "2025-01-01T09:30:00.000000Z")
        self.assertEqual(folder_from_dict(data), folder)

    def test_file_from_dict_parses_service_payload(self) -> None:
        data = {
            "id": "X1",
            "name": "a.pdf",
            "folderId": "F1",
            "ownerId": "u1",
            "size": "2048",
            "mimeType": "application/pdf",
            "isStarred": False,
            "isDeleted": True,
            "deletedAt": "2025-01-01T09:30:00Z",
            "createdAt": "2025-01-01T09:30:00Z",
        }
        f = file_from_dict(data)
        self.assertEqual(f.size, 2048)
        self.assertEqual(f.folder_id, "F1")
        self.assertTrue(f.is_deleted)
        self.assertEqual(f.deleted_at, T0)
        self.assertIsNone(f.updated_at)
        self.assertEqual(file_to_dict(f)["deletedAt"], "2025-01-01T09:30:00.000000Z")

    def test_sloppy_deletion_pair_is_normalized(self) -> None:
        f = file_from_dict({"id": "X1", "name": "a", "ownerId": "u1", "isDeleted": True})
        self.assertFalse(f.is_deleted)
        self.assertIsNone(f.deleted_at)

    def test_item_from_dict_dispatches_on_kind(self) -> None:
        self.assertIsInstance(item_from_dict(ItemKind.FOLDER, {"id": "F1"}), Folder)
        self.assertIsInstance(item_from_dict(ItemKind.FILE, {"id": "X1"}), File)

    def test_breadcrumb_and_stats(self) -> None:
        root = BreadcrumbEntry.root()
        self.assertEqual(breadcrumb_to_dict(root), {"id": None, "name": "My Drive", "path": "/"})

        stats = FolderStats(total_items=3, total_folders=1, total_files=2, total_size=10)
        self.assertEqual(stats_to_dict(stats)["totalItems"], 3)
        self.assertEqual(stats_from_dict(stats_to_dict(stats)), stats)

    def test_pagination_from_dict_missing_block_is_single_page(self) -> None:
        p = pagination_from_dict(None, item_count=4)
        self.assertEqual((p.page, p.limit, p.total, p.pages), (1, 4, 4, 1))

        p = pagination_from_dict({"page": 2, "limit": 10, "total": 25, "pages": 3}, item_count=10)
        self.assertEqual((p.page, p.limit, p.total, p.pages), (2, 10, 25, 3))


if __name__ == "__main__":
    unittest.main()
