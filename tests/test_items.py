import itertools

from Translator.IndentTable import IndentTable
from Translator.Items import (
    BLOCK_CLOSE, CLASS_HEADER, COMMENT, END_OF_CONSTRUCT, STATEMENT, Item, group_by_line, reassemble,
)


def test_items_sorted_by_priority_then_insertion():
    items = [
        Item(1, "b", STATEMENT),
        Item(1, "close", END_OF_CONSTRUCT),
        Item(1, "a", COMMENT),
        Item(1, "c", STATEMENT),
    ]
    assert [it.text for it in group_by_line(items)[1]] == ["a", "b", "c", "close"]


def test_unknown_lines_are_dropped():
    out = reassemble([Item(None, "x"), Item(0, "y"), Item(1, "z")], ["code"])
    assert out == ["z"]


def test_blank_lines_survive_and_code_lines_without_items_vanish():
    source = ["class A {", "", "  int x;", "   ", "}"]
    out = reassemble([Item(1, "クラス A"), Item(5, "ここまで。", BLOCK_CLOSE)], source)
    assert out == ["クラス A", "", "", "ここまで。"]


def test_items_past_the_last_line_are_flushed_in_order():
    out = reassemble([Item(4, "late", BLOCK_CLOSE), Item(3, "later"), Item(1, "first")], ["x", "y"])
    assert out == ["first", "later", "late"]


def test_reassembly_does_not_depend_on_item_order():
    items = [
        Item(1, "クラス A", CLASS_HEADER),
        Item(1, "//c", COMMENT),
        Item(2, "x", STATEMENT),
        Item(3, "ここまで。", BLOCK_CLOSE),
        Item(4, "tail", BLOCK_CLOSE),
    ]
    source = ["class A {", "  x", "}"]
    expected = "\n".join(reassemble(items, source))
    assert expected == "//c\nクラス A\nx\nここまで。\ntail"
    for permutation in itertools.permutations(items):
        assert "\n".join(reassemble(list(permutation), source)) == expected


def test_indent_table_last_write_wins():
    table = IndentTable()
    table.set(3, "　")
    table.set(3, "　　")
    assert table.get(3) == "　　"
    assert table.get(4) == ""
    assert table.get(None) == ""


def test_indent_table_ranges():
    table = IndentTable()
    table.set_range(2, 4, "　")
    table.set_range(5, 4, "x")       # empty
    table.set_range(None, 9, "y")    # unknown
    table.set(0, "z")
    assert [table.get(i) for i in range(1, 6)] == ["", "　", "　", "　", ""]
    assert len(table) == 3 and 3 in table
    table.clear()
    assert len(table) == 0
