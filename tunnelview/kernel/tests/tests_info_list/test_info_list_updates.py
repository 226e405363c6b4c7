"""
TunnelView InfoList -- Update and Lookup Tests

Covers:
  - replace_all clears old records, last duplicate wins
  - merge keeps records not in the update, overwrites by key
  - Scrollbar range after every structural change
  - find_input / find_any_output
  - size, contains, get
"""

from tunnelview.kernel.info_list import InfoList
from tunnelview.kernel.location import LocationKey
from tunnelview.kernel.types import PAGE_SIZE, Facing, TunnelInfo


def loc(x):
    return LocationKey(x, 64, 0, Facing.NORTH, 0)


def make_info(x, frequency=0, output=False, name="", error=False):
    return TunnelInfo(loc=loc(x), frequency=frequency, output=output, error=error, name=name)


class TestReplaceAll:
    def test_clears_previous(self):
        infos = InfoList([make_info(1), make_info(2)])
        infos.replace_all([make_info(3)])
        assert infos.size == 1
        assert loc(1) not in infos
        assert loc(3) in infos

    def test_last_duplicate_wins(self):
        infos = InfoList()
        infos.replace_all([make_info(1, name="old"), make_info(1, name="new")])
        assert infos.size == 1
        assert infos.get(loc(1)).name == "new"
        assert [i.name for i in infos.sorted] == ["new"]

    def test_empty(self):
        infos = InfoList([make_info(1)])
        infos.replace_all([])
        assert infos.size == 0
        assert infos.sorted == []
        assert infos.filtered == []

    def test_accepts_generator(self):
        infos = InfoList()
        infos.replace_all(make_info(x) for x in range(3))
        assert len(infos) == 3


class TestMerge:
    def test_keeps_untouched_records(self):
        infos = InfoList([make_info(1, name="a"), make_info(2, name="b")])
        infos.merge([make_info(3, name="c")])
        assert infos.size == 3
        assert {i.name for i in infos.sorted} == {"a", "b", "c"}

    def test_overwrites_by_key(self):
        infos = InfoList([make_info(1, frequency=1, name="a")])
        infos.merge([make_info(1, frequency=2, name="a2")])
        assert infos.size == 1
        assert infos.get(loc(1)).frequency == 2


class TestScrollbar:
    def test_range_after_replace(self, scrollbar):
        infos = InfoList(scrollbar=scrollbar, visible_entries=4)
        infos.replace_all(make_info(x) for x in range(10))
        assert scrollbar.last == (0, 6, PAGE_SIZE)

    def test_range_after_merge(self, scrollbar):
        infos = InfoList(scrollbar=scrollbar, visible_entries=4)
        infos.merge([make_info(1), make_info(2)])
        assert scrollbar.last == (0, 0, 23)
        infos.merge(make_info(x) for x in range(3, 9))
        assert scrollbar.last == (0, 4, 23)

    def test_not_called_on_select_or_refilter(self, scrollbar):
        infos = InfoList(scrollbar=scrollbar)
        infos.replace_all([make_info(1)])
        calls = len(scrollbar.calls)
        infos.select(loc(1))
        infos.refilter("x")
        assert len(scrollbar.calls) == calls

    def test_no_scrollbar_is_fine(self):
        infos = InfoList()
        infos.replace_all([make_info(1)])
        assert infos.size == 1


class TestLookups:
    def test_find_input(self):
        infos = InfoList([
            make_info(1, frequency=3, output=True, name="out"),
            make_info(2, frequency=3, output=False, name="in"),
        ])
        assert infos.find_input(3).name == "in"
        assert infos.find_any_output(3).name == "out"

    def test_find_missing(self):
        infos = InfoList([make_info(1, frequency=3, output=True)])
        assert infos.find_input(3) is None
        assert infos.find_any_output(4) is None

    def test_find_any_output_among_many(self):
        outs = [make_info(x, frequency=6, output=True) for x in range(3)]
        infos = InfoList(outs)
        assert infos.find_any_output(6) in outs

    def test_unbound_lookup(self):
        infos = InfoList([make_info(1, frequency=0)])
        assert infos.find_input(0) is not None

    def test_selected_record_unset(self):
        assert InfoList([make_info(1)]).selected_record() is None
