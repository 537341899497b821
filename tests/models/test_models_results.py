import unittest

from clouddrive.models import BatchResult, File, ItemKind, ItemOutcome


class TestResults(unittest.TestCase):
    def test_item_outcome_defaults(self) -> None:
        o = ItemOutcome(index=0, kind=ItemKind.FILE, label="a.txt", status="success")
        self.assertIsNone(o.item)
        self.assertIsNone(o.error_type)
        self.assertIsNone(o.error_message)

    def test_batch_result_counts(self) -> None:
        ok = File(id="X1", name="a.txt", owner_id="u1")
        br = BatchResult(
            outcomes=[
                ItemOutcome(index=0, kind=ItemKind.FILE, label="a.txt", status="success", item=ok),
                ItemOutcome(
                    index=1,
                    kind=ItemKind.FILE,
                    label="b|c.txt",
                    status="failed",
                    error_type="ValidationError",
                ),
            ]
        )
        self.assertEqual(br.succeeded, 1)
        self.assertEqual(br.failed, 1)
        self.assertEqual(br.items, [ok])
        self.assertFalse(br.refreshed)
        self.assertEqual(br.summary, {})


if __name__ == "__main__":
    unittest.main()
