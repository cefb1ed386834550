import pytest

from joblens.pipeline.window import advance, has_more, page_links, paginate, prefix_window, total_pages

RECORDS = list(range(20))


def test_pagination_of_twenty_by_nine():
    assert total_pages(len(RECORDS), 9) == 3
    assert paginate(RECORDS, 9, 1) == list(range(0, 9))
    assert paginate(RECORDS, 9, 3) == [18, 19]


@pytest.mark.parametrize("page", [0, -1, 4, 100])
def test_out_of_range_page_is_empty(page):
    assert paginate(RECORDS, 9, page) == []


def test_total_pages_of_empty_set():
    assert total_pages(0, 9) == 0


def test_invalid_page_size():
    with pytest.raises(ValueError):
        paginate(RECORDS, 0, 1)


def test_infinite_window_growth():
    visible = 9
    assert prefix_window(RECORDS, visible) == list(range(9))
    assert has_more(visible, 20)

    visible = advance(visible, 20, 9)
    assert visible == 18
    assert has_more(visible, 20)

    visible = advance(visible, 20, 9)
    assert visible == 20
    assert not has_more(visible, 20)

    # no-op once everything is visible
    assert advance(visible, 20, 9) == 20


def test_prefix_window_larger_than_set():
    assert prefix_window(RECORDS, 50) == RECORDS


class TestPageLinks:
    def test_single_page_has_no_links(self):
        assert page_links(1, 1) == []
        assert page_links(1, 0) == []

    def test_few_pages_all_listed(self):
        assert page_links(3, 7) == [1, 2, 3, 4, 5, 6, 7]

    def test_middle(self):
        assert page_links(6, 12) == [1, "...", 5, 6, 7, "...", 12]

    def test_near_start(self):
        assert page_links(2, 12) == [1, 2, 3, "...", 12]

    def test_near_end(self):
        assert page_links(11, 12) == [1, "...", 10, 11, 12]
