import unittest

import clouddrive


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(clouddrive, "DriveManager"))
        self.assertTrue(hasattr(clouddrive, "DriveApiClient"))
        self.assertTrue(hasattr(clouddrive, "DriveStore"))
        self.assertTrue(hasattr(clouddrive, "LocalDriveApp"))

        self.assertTrue(hasattr(clouddrive, "ViewController"))
        self.assertTrue(hasattr(clouddrive, "ViewState"))
        self.assertTrue(hasattr(clouddrive, "Folder"))
        self.assertTrue(hasattr(clouddrive, "BatchResult"))

        self.assertTrue(hasattr(clouddrive, "CloudDriveError"))
        self.assertTrue(hasattr(clouddrive, "CyclicMoveError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(clouddrive, "__all__"))
        self.assertIn("DriveManager", clouddrive.__all__)
        self.assertIn("CloudDriveError", clouddrive.__all__)
        for name in clouddrive.__all__:
            self.assertTrue(hasattr(clouddrive, name), name)


if __name__ == "__main__":
    unittest.main()
