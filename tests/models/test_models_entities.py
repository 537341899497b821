import unittest
from datetime import datetime, timezone

from clouddrive.models import (
    ROOT_NAME,
    BreadcrumbEntry,
    File,
    Folder,
    ItemKind,
    Listing,
    Page,
    Pagination,
)

T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)


class TestEntities(unittest.TestCase):
    def test_folder_kind_and_container(self) -> None:
        f = Folder(id="F1", name="Reports", owner_id="u1", parent_id="P1")
        self.assertIs(f.kind, ItemKind.FOLDER)
        self.assertEqual(f.container_id, "P1")
        self.assertFalse(f.is_deleted)
        self.assertIsNone(f.deleted_at)

    def test_file_kind_and_container(self) -> None:
        f = File(id="X1", name="a.txt", owner_id="u1")
        self.assertIs(f.kind, ItemKind.FILE)
        self.assertIsNone(f.container_id)

    def test_deleted_at_is_set_iff_deleted(self) -> None:
        with self.assertRaises(ValueError):
            Folder(id="F1", name="n", owner_id="u1", is_deleted=True)
        with self.assertRaises(ValueError):
            File(id="X1", name="n", owner_id="u1", deleted_at=T0)

        f = File(id="X1", name="n", owner_id="u1", is_deleted=True, deleted_at=T0)
        self.assertTrue(f.is_deleted)

    def test_file_size_must_not_be_negative(self) -> None:
        with self.assertRaises(ValueError):
            File(id="X1", name="n", owner_id="u1", size=-1)

    def test_root_breadcrumb(self) -> None:
        root = BreadcrumbEntry.root()
        self.assertIsNone(root.id)
        self.assertEqual(root.name, ROOT_NAME)
        self.assertEqual(root.name, "My Drive")

    def test_page_and_listing_lengths(self) -> None:
        page = Page(items=[1, 2], pagination=Pagination(page=1, limit=20, total=2, pages=1))
        self.assertEqual(len(page), 2)

        listing = Listing(
            folders=[Folder(id="F1", name="a", owner_id="u1")],
            files=[File(id="X1", name="b", owner_id="u1")],
        )
        self.assertEqual(len(listing), 2)


if __name__ == "__main__":
    unittest.main()
