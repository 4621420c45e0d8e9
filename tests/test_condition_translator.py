import pytest

from Translator.ExpressionTranslator import ExpressionTranslator


@pytest.fixture
def cond():
    conditions = ExpressionTranslator().conditions

    def _cond(node, **kwargs):
        return conditions.translate(node, **kwargs)
    return _cond


def test_negated_empty_check(cond, expr):
    assert cond(expr("!list.isEmpty()")) == "listが空でない"
    assert cond(expr("list.isEmpty()")) == "listが空"


def test_comparisons(cond, expr):
    assert cond(expr("x == y")) == "x = y"
    assert cond(expr("x != null")) == "x ≠ null"
    assert cond(expr("i <= n - 1")) == "i ≤ (n - 1)"
    assert cond(expr("a.length >= 3")) == "aの配列要素数 ≥ 3"


def test_connectives_and_wrapping(cond, expr):
    node = expr("a > 0 && b < 5")
    assert cond(node) == "((a > 0) かつ (b < 5))"
    assert cond(node, wrap=False) == "(a > 0) かつ (b < 5)"
    assert cond(node, wrap=True, wrap_inner=False) == "(a > 0 かつ b < 5)"
    assert cond(node, wrap=False, wrap_inner=False) == "a > 0 かつ b < 5"
    assert cond(expr("a || b")) == "((aが真) または (bが真))"


def test_negation_flips_suffixes(cond, expr):
    assert cond(expr("!flag")) == "flagでない"
    assert cond(expr("!(a && b)")) == "((aが真) かつ (bが真))でない"
    assert cond(expr("!(x > 1)")) == "x > 1でない"


def test_known_boolean_calls(cond, expr):
    assert cond(expr('name.equalsIgnoreCase("bob")')) == "nameと「bob」が等しい"
    assert cond(expr("d1.isAfter(d2)")) == "d1がd2より未来"
    assert cond(expr("d1.isBefore(d2)")) == "d1がd2より過去"
    assert cond(expr("d1.isEqual(d2)")) == "d1がd2と等しい"
    assert cond(expr("it.hasNext()")) == "itの次の要素がある"
    assert cond(expr("map.containsKey(k)")) == "mapのキーにkを含む"
    assert cond(expr("map.containsValue(v)")) == "mapの値にvを含む"
    assert cond(expr('s.contains("x")')) == "sが「x」を含む"
    assert cond(expr('file.endsWith(".txt")')) == "fileが「.txt」で終わる"
    assert cond(expr("this.items.isEmpty()")) == "自身のitemsが空"


def test_call_compared_to_true(cond, expr):
    assert cond(expr("ready() == true")) == "ready()が真"
    assert cond(expr("true == a.isReady()")) == "aのisReady()が真"
    assert cond(expr("s.isEmpty() == true")) == "sが空が真"


def test_literals_names_and_fallbacks(cond, expr):
    assert cond(expr("true")) == "真"
    assert cond(expr("false")) == "偽"
    assert cond(expr("ok")) == "okが真"
    assert cond(expr("check(x)")) == "check(x)が真"
    assert cond(expr("o instanceof Foo")) == "oがFoo型"
    assert cond(expr("a & b")) == "aがb"


def test_parenthesized_condition_is_rewrapped(cond, expr):
    assert cond(expr("(x > 1)")) == "(x > 1)"


def test_depth_guard_yields_raw_condition(expr):
    conditions = ExpressionTranslator(max_depth=3).conditions
    node = expr("a && b && c && d && e")
    assert conditions.translate(node) == "a && b && c && d && eが真"
