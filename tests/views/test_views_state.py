import unittest

from clouddrive.models import BreadcrumbEntry, File, Folder, ItemKind, Listing
from clouddrive.views import ViewMode, ViewState


def _listing() -> Listing:
    return Listing(
        folders=[Folder(id="F1", name="box", owner_id="u1")],
        files=[File(id="X1", name="a.txt", owner_id="u1"), File(id="X2", name="b.txt", owner_id="u1")],
    )


class TestViewState(unittest.TestCase):
    def test_defaults(self) -> None:
        s = ViewState()
        self.assertFalse(s.loaded)
        self.assertTrue(s.is_empty)
        self.assertEqual([c.name for c in s.breadcrumb], ["My Drive"])
        self.assertIs(s.view_mode, ViewMode.GRID)

    def test_transitions_return_new_instances(self) -> None:
        s0 = ViewState()
        s1 = s0.with_search("  report ")
        self.assertIsNot(s0, s1)
        self.assertEqual(s0.search_query, "")
        self.assertEqual(s1.search_query, "report")
        with self.assertRaises(AttributeError):
            s1.search_query = "x"  # type: ignore[misc]

    def test_with_listing_orders_folders_first(self) -> None:
        s = ViewState().start_loading().with_listing(_listing())
        self.assertTrue(s.loaded)
        self.assertFalse(s.loading)
        self.assertEqual([i.id for i in s.items], ["F1", "X1", "X2"])
        self.assertIs(s.find(ItemKind.FILE, "X2").kind, ItemKind.FILE)
        self.assertIsNone(s.find(ItemKind.FOLDER, "X2"))

    def test_selection_toggle_and_prune(self) -> None:
        s = ViewState().with_listing(_listing())
        s = s.toggle_selection(ItemKind.FILE, "X1").toggle_selection(ItemKind.FOLDER, "F1")
        self.assertEqual({i.id for i in s.selected_items}, {"X1", "F1"})

        s = s.toggle_selection(ItemKind.FILE, "X1")
        self.assertEqual([i.id for i in s.selected_items], ["F1"])

        # A re-list without F1 drops it from the selection.
        s = s.with_listing(Listing(files=[File(id="X1", name="a.txt", owner_id="u1")]))
        self.assertEqual(s.selection, frozenset())

    def test_select_all_and_clear(self) -> None:
        s = ViewState().with_listing(_listing()).select_all()
        self.assertEqual(len(s.selection), 3)
        self.assertEqual(s.clear_selection().selection, frozenset())

    def test_search_resets_selection(self) -> None:
        s = ViewState().with_listing(_listing()).select_all().with_search("a")
        self.assertEqual(s.selection, frozenset())

    def test_navigate_resets_view_local_state(self) -> None:
        folder = Folder(id="F1", name="box", owner_id="u1")
        s = (
            ViewState()
            .with_listing(_listing())
            .select_all()
            .with_search("a")
            .open_context_menu(folder, 10, 20)
            .navigate("F1")
        )
        self.assertEqual(s.folder_id, "F1")
        self.assertEqual(s.selection, frozenset())
        self.assertEqual(s.search_query, "")
        self.assertIsNone(s.context_menu)
        self.assertFalse(s.loaded)

    def test_context_menu(self) -> None:
        file = File(id="X1", name="a.txt", owner_id="u1")
        s = ViewState().open_context_menu(file, 5, 6)
        self.assertEqual((s.context_menu.kind, s.context_menu.item_id), (ItemKind.FILE, "X1"))
        self.assertIsNone(s.close_context_menu().context_menu)

        closed = ViewState()
        self.assertIs(closed.close_context_menu(), closed)

    def test_view_mode_and_error(self) -> None:
        s = ViewState().with_view_mode(ViewMode.LIST)
        self.assertIs(s.view_mode, ViewMode.LIST)
        self.assertIs(s.with_view_mode("grid").view_mode, ViewMode.GRID)  # type: ignore[arg-type]

        failed = s.start_loading().with_error("boom")
        self.assertEqual(failed.error, "boom")
        self.assertFalse(failed.loading)

    def test_with_listing_keeps_breadcrumb_unless_given(self) -> None:
        crumbs = [BreadcrumbEntry.root(), BreadcrumbEntry(id="F1", name="box", path="/box")]
        s = ViewState().with_listing(_listing(), crumbs)
        self.assertEqual([c.id for c in s.breadcrumb], [None, "F1"])
        self.assertEqual(len(s.with_listing(_listing()).breadcrumb), 2)


if __name__ == "__main__":
    unittest.main()
