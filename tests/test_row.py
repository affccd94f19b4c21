"""Tests for Row cluster counting, rendering and splitting."""

import pytest
from wind.document import Row


def test_length_counts_clusters_not_code_points():
    row = Row("cafe\u0301")  # combining acute accent
    assert len(row.content) == 5
    assert row.length == 4


def test_length_counts_emoji_sequences_as_one():
    row = Row("a\U0001F44D\U0001F3FDb")  # thumbs up + skin tone
    assert row.length == 3


def test_empty_row():
    row = Row()
    assert row.content == ""
    assert row.length == 0


def test_length_recomputed_on_assignment():
    row = Row("abc")
    row.content = "abcdef"
    assert row.length == 6


def test_render_returns_clusters_in_range():
    row = Row("hello world")
    assert row.render(0, 5) == "hello"
    assert row.render(6, 11) == "world"


def test_render_clamps_end_to_length():
    row = Row("abc")
    assert row.render(1, 100) == "bc"


def test_render_start_past_end_is_empty():
    row = Row("abc")
    assert row.render(5, 10) == ""
    assert row.render(2, 1) == ""


def test_render_keeps_clusters_whole():
    row = Row("née")
    assert row.render(1, 2) == "é"


def test_split_keeps_head_and_returns_tail():
    row = Row("hello world")
    tail = row.split(5)
    assert row.content == "hello"
    assert row.length == 5
    assert tail.content == " world"
    assert tail.length == 6


def test_split_at_end_returns_empty_row():
    row = Row("abc")
    tail = row.split(3)
    assert row.content == "abc"
    assert tail.content == ""


def test_split_clamps_out_of_range_index():
    row = Row("abc")
    tail = row.split(10)
    assert row.content == "abc"
    assert tail.length == 0

    row = Row("abc")
    tail = row.split(-3)
    assert row.content == ""
    assert tail.content == "abc"


def test_split_between_clusters():
    row = Row("éa")
    tail = row.split(1)
    assert row.content == "é"
    assert tail.content == "a"


def test_insert_at_cluster_index():
    row = Row("éb")
    row.insert(1, "X")
    assert row.content == "éXb"
    assert row.length == 3


def test_delete_removes_one_cluster():
    row = Row("aéb")
    row.delete(1)
    assert row.content == "ab"
    assert row.length == 2


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_delete_out_of_range_is_ignored(index):
    row = Row("abc")
    row.delete(index)
    assert row.content == "abc"


def test_append_updates_length():
    row = Row("ab")
    row.append("cd")
    assert row.content == "abcd"
    assert row.length == 4
