import pytest

from Translator.ExpressionTranslator import ExpressionTranslator, strip_generics


@pytest.fixture
def tr():
    return ExpressionTranslator()


def test_string_concatenation_flattens_into_one_literal(tr, expr):
    assert tr.translate(expr('"a=" + x + "," + (y+1)')) == "「a={x},{(y + 1)}」"
    assert tr.translate(expr('"n=" + list.size()')) == "「n={listの要素数}」"
    assert tr.translate(expr('"v" + 1.5 + this.name')) == "「v{1.5}{自身のname}」"


def test_literals(tr, expr):
    assert tr.translate(expr('"a\\tb\\n"')) == "「a{タブ}b{改行}」"
    assert tr.translate(expr("'x'")) == "「x」"
    assert tr.translate(expr("10L")) == "10"
    assert tr.translate(expr("2.5f")) == "2.5"
    assert tr.translate(expr("true")) == "真"
    assert tr.translate(expr("this")) == "自身"
    assert tr.translate(expr("-5")) == "-5"
    assert tr.translate(expr("-x")) == "-x"


def test_text_block_is_dedented(tr, parse):
    ast = parse('class T {\n  String s = """\n      one\n        two\n      """;\n}')
    value = ast.children[0].child("FieldDecl").child("Declarator").children[0]
    assert tr.translate(value) == "「one{改行}  two」"


def test_arithmetic_parenthesizer(tr, expr):
    assert tr.translate(expr("a + b * c")) == "(a + (b * c))"
    assert tr.translate(expr("a - b - c")) == "(a - b - c)"
    assert tr.translate(expr("a + b - c")) == "(a + b - c)"
    assert tr.translate(expr("a - (b - c)")) == "(a - (b - c))"
    assert tr.translate(expr("(int) (x * 2)")) == "(x * 2)"


def test_increment_and_compound_assignment(tr, expr):
    assert tr.translate(expr("i++")) == "(i + 1)"
    assert tr.translate(expr("--i")) == "(i - 1)"
    assert tr.translate(expr("x += 2")) == "(x + 2)"
    assert tr.translate(expr("this.total *= k")) == "(自身のtotal * k)"
    assert tr.translate(expr("x += y = 3")) == "(x + (y は 3))"
    assert tr.translate(expr("x -= y += 3")) == "(x - (y は y + 3))"


def test_nested_assignment_is_parenthesized(tr, expr):
    outer = expr("a = b = 5")
    assert tr.translate(outer.children[1], outer) == "(b は 5)"


def test_boolean_shapes_are_bracketed(tr, expr):
    assert tr.translate(expr("a > b")) == "<a > b>"
    assert tr.translate(expr('s.equals("x")')) == "<sと「x」が等しい>"
    assert tr.translate(expr("!done")) == "<doneでない>"


def test_unknown_call_falls_through_to_call_rendering(tr, expr):
    assert tr.translate(expr("foo.bar(1)")) == "fooのbar(1)"
    assert tr.translate(expr("this.reset()")) == "自身のreset"
    assert tr.translate(expr("super.describe(x)")) == "親のdescribe(x)"


def test_instanceof(tr, expr):
    assert tr.translate(expr("o instanceof String")) == "oがString型"
    assert tr.translate(expr("o instanceof String s")) == "(oがString型でsに代入できる)"


def test_field_access(tr, expr):
    assert tr.translate(expr("this.count")) == "自身のcount"
    assert tr.translate(expr("arr.length")) == "arrの配列要素数"
    assert tr.translate(expr("p.name")) == "pのname"


def test_object_creation(tr, expr):
    assert tr.translate(expr("new Random()")) == "乱数生成器"
    assert tr.translate(expr("new Date()")) == "現在日時"
    assert tr.translate(expr("new Date(1000L)")) == "1000ミリ秒日時"
    assert tr.translate(expr('new FileReader("a.txt")')) == "ファイル「a.txt」生成"
    assert tr.translate(expr('new JButton("OK")')) == "ボタン(「OK」)生成"
    assert tr.translate(expr("new ArrayList<String>()")) == "ArrayList生成"
    assert tr.translate(expr('new Foo(1, "a")')) == "Foo(1, 「a」)生成"


def test_random_idioms(tr, expr):
    assert tr.translate(expr("Math.random() * 10")) == "1の実数乱数 * 10"
    assert tr.translate(expr("new Random().nextInt(6) + 1")) == "6の乱数+1"


def test_depth_guard_falls_back_to_none(expr, caplog):
    shallow = ExpressionTranslator(max_depth=5)
    deep = expr(" + ".join(f"v{i}" for i in range(30)))
    assert shallow.translate(deep) is None
    assert shallow.guard.level == 0
    assert "Глубина выражения превышена" in caplog.text
    # the same translator still works afterwards
    assert shallow.translate(expr("a + b")) == "(a + b)"


def test_text_falls_back_to_source(expr):
    shallow = ExpressionTranslator(max_depth=2)
    node = expr("a * b * c * d")
    assert shallow.text(node) == "a * b * c * d"


def test_strip_generics():
    assert strip_generics("java.util.ArrayList<String>") == "ArrayList"
    assert strip_generics("Map<K, List<V>>") == "Map"
    assert strip_generics(None) == ""


def test_names_are_not_stripped_like_number_suffixes(tr, expr):
    assert tr.translate(expr("md5Digest")) == "md5Digest"
    assert tr.translate(expr("vec2d")) == "vec2d"
    assert tr.translate(expr("12L")) == "12"
