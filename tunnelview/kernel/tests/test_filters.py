"""
TunnelView Filters -- Query Compilation Tests

Covers:
  - Words become NAME terms
  - Tags activate their category with no terms
  - @f=<hex> collects frequency terms
  - Unknown tags are ignored
  - Each category's predicate
  - accepts() requires every active category
"""

import pytest

from tunnelview.kernel.filters import Filter, InfoFilter
from tunnelview.kernel.location import LocationKey
from tunnelview.kernel.types import Facing, TunnelInfo


def make_info(frequency=0, output=False, name="", error=False):
    return TunnelInfo(
        loc=LocationKey(0, 0, 0, Facing.UP, 0),
        frequency=frequency,
        output=output,
        error=error,
        name=name,
    )


class TestUpdateQuery:
    def test_empty(self):
        f = InfoFilter()
        f.update_query("")
        assert f.active_filters == {}
        assert f.name_terms() is None

    def test_words(self):
        f = InfoFilter()
        f.update_query("main  tunnel")
        assert f.active_filters == {Filter.NAME: ["main", "tunnel"]}
        assert f.name_terms() == ["main", "tunnel"]

    def test_tags(self):
        f = InfoFilter()
        f.update_query("@in @b")
        assert f.active_filters == {Filter.INPUT: None, Filter.BOUND: None}

    def test_frequency_terms(self):
        f = InfoFilter()
        f.update_query("@f=1a @f=ff")
        assert f.active_filters == {Filter.FREQUENCY: ["1a", "ff"]}

    def test_unknown_tag_ignored(self):
        f = InfoFilter()
        f.update_query("@nope word")
        assert f.active_filters == {Filter.NAME: ["word"]}

    def test_recompiles_from_scratch(self):
        f = InfoFilter()
        f.update_query("@out word")
        f.update_query("@in")
        assert f.active_filters == {Filter.INPUT: None}


class TestPredicates:
    @pytest.mark.parametrize("category,info,expected", [
        (Filter.INPUT, make_info(output=False), True),
        (Filter.INPUT, make_info(output=True), False),
        (Filter.OUTPUT, make_info(output=True), True),
        (Filter.OUTPUT, make_info(output=False), False),
        (Filter.BOUND, make_info(frequency=3), True),
        (Filter.BOUND, make_info(frequency=3, error=True), False),
        (Filter.BOUND, make_info(frequency=0), False),
        (Filter.UNBOUND, make_info(frequency=0), True),
        (Filter.UNBOUND, make_info(frequency=3, error=True), True),
        (Filter.UNBOUND, make_info(frequency=3), False),
    ])
    def test_tag_predicates(self, category, info, expected):
        assert category.filter(info, None) is expected

    def test_name_any_term(self):
        info = make_info(name="Main Storage")
        assert Filter.NAME.filter(info, ["storage"])
        assert Filter.NAME.filter(info, ["nope", "main"])
        assert not Filter.NAME.filter(info, ["nope"])

    def test_frequency_hex(self):
        info = make_info(frequency=0x1A2B)
        assert Filter.FREQUENCY.filter(info, ["1a2b"])
        assert not Filter.FREQUENCY.filter(info, ["ffff"])

    def test_negative_frequency_hex(self):
        assert Filter.FREQUENCY.filter(make_info(frequency=-1), ["ffff"])

    def test_matches_uses_active_terms(self):
        f = InfoFilter()
        f.update_query("storage")
        assert f.matches(make_info(name="Storage Bus"), Filter.NAME)
        assert not f.matches(make_info(name="Interface"), Filter.NAME)


class TestAccepts:
    def test_all_categories_must_accept(self):
        f = InfoFilter()
        f.update_query("@out main")
        assert f.accepts(make_info(output=True, name="main"))
        assert not f.accepts(make_info(output=False, name="main"))
        assert not f.accepts(make_info(output=True, name="other"))

    def test_nothing_active_accepts_all(self):
        f = InfoFilter()
        f.update_query("   ")
        assert f.accepts(make_info())
