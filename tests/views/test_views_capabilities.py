import unittest

from clouddrive.errors import InvalidArgumentError, InvalidStateError
from clouddrive.views import DRIVE_VIEW, STARRED_VIEW, TRASH_VIEW, ViewCapabilities


class TestViewCapabilities(unittest.TestCase):
    def test_presets(self) -> None:
        self.assertTrue(DRIVE_VIEW.allows("upload"))
        self.assertTrue(DRIVE_VIEW.allows("move"))
        self.assertFalse(DRIVE_VIEW.allows("restore"))

        self.assertTrue(STARRED_VIEW.allows("star"))
        self.assertFalse(STARRED_VIEW.allows("upload"))

        self.assertEqual(TRASH_VIEW.granted(), frozenset({"restore", "permanent_delete"}))

    def test_require_refuses_ungranted_action(self) -> None:
        DRIVE_VIEW.require("copy")
        with self.assertRaises(InvalidStateError) as ctx:
            TRASH_VIEW.require("rename")
        self.assertEqual(ctx.exception.details["action"], "rename")

    def test_unknown_action_is_invalid_argument(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            ViewCapabilities().allows("teleport")

    def test_custom_capabilities(self) -> None:
        read_only = ViewCapabilities(can_download=True, can_show_info=True)
        self.assertEqual(read_only.granted(), frozenset({"download", "show_info"}))


if __name__ == "__main__":
    unittest.main()
