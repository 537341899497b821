import unittest

from clouddrive.util.mime import DEFAULT_MIME, guess_mime_type


class TestUtilMime(unittest.TestCase):
    def test_guess_known_extensions(self) -> None:
        self.assertEqual(guess_mime_type("report.pdf"), "application/pdf")
        self.assertEqual(guess_mime_type("notes.txt"), "text/plain")
        self.assertEqual(guess_mime_type("PHOTO.PNG"), "image/png")

    def test_unknown_extension_falls_back(self) -> None:
        self.assertEqual(guess_mime_type("blob.unknownext"), DEFAULT_MIME)
        self.assertEqual(guess_mime_type("Makefile"), DEFAULT_MIME)


if __name__ == "__main__":
    unittest.main()
