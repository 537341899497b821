import unittest
from datetime import datetime, timezone

from clouddrive.errors import CyclicMoveError, NotFoundError, ValidationError
from clouddrive.models import File, Folder
from clouddrive.store import DriveIndex
from clouddrive.store.validators import (
    find_deleted_ancestor,
    validate_active_container,
    validate_move_no_cycle,
    validate_owned_file,
    validate_owned_folder,
    validate_paging,
    validate_upload_size,
)

T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _index() -> DriveIndex:
    idx = DriveIndex()
    idx.add_folder(Folder(id="A", name="A", owner_id="u1"))
    idx.add_folder(Folder(id="B", name="B", owner_id="u1", parent_id="A"))
    idx.add_folder(Folder(id="C", name="C", owner_id="u1", parent_id="B"))
    idx.add_file(File(id="X", name="x", owner_id="u1", folder_id="C"), b"x")
    return idx


class TestValidators(unittest.TestCase):
    def test_owned_lookups(self) -> None:
        idx = _index()
        self.assertEqual(validate_owned_folder(idx, "u1", "A", "Folder").id, "A")
        self.assertEqual(validate_owned_file(idx, "u1", "X", "File").id, "X")
        with self.assertRaises(NotFoundError):
            validate_owned_folder(idx, "u2", "A", "Folder")
        with self.assertRaises(NotFoundError):
            validate_owned_file(idx, "u1", "nope", "File")

    def test_find_deleted_ancestor_includes_the_folder_itself(self) -> None:
        idx = _index()
        self.assertIsNone(find_deleted_ancestor(idx, "C"))
        self.assertIsNone(find_deleted_ancestor(idx, None))

        idx.folders_by_id["B"].is_deleted = True
        idx.folders_by_id["B"].deleted_at = T0
        self.assertEqual(find_deleted_ancestor(idx, "C").id, "B")
        self.assertEqual(find_deleted_ancestor(idx, "B").id, "B")
        self.assertIsNone(find_deleted_ancestor(idx, "A"))

    def test_active_container(self) -> None:
        idx = _index()
        self.assertIsNone(validate_active_container(idx, "u1", None, "Folder"))
        self.assertEqual(validate_active_container(idx, "u1", "C", "Folder").id, "C")

        idx.folders_by_id["A"].is_deleted = True
        idx.folders_by_id["A"].deleted_at = T0
        with self.assertRaises(NotFoundError):
            validate_active_container(idx, "u1", "C", "Folder")

    def test_move_no_cycle(self) -> None:
        idx = _index()
        validate_move_no_cycle(idx, "C", "A")
        validate_move_no_cycle(idx, "A", None)
        for target in ("A", "B", "C"):
            with self.assertRaises(CyclicMoveError):
                validate_move_no_cycle(idx, "A", target)

    def test_paging_and_size(self) -> None:
        validate_paging(1, 1)
        with self.assertRaises(ValidationError):
            validate_paging(0, 10)
        with self.assertRaises(ValidationError):
            validate_paging(1, 0)

        validate_upload_size(10, 10)
        with self.assertRaises(ValidationError) as ctx:
            validate_upload_size(100 * 1024 * 1024 + 1, 100 * 1024 * 1024)
        self.assertEqual(str(ctx.exception), "File is too large. Maximum size is 100MB.")


if __name__ == "__main__":
    unittest.main()
