import pytest

from Translator import StatementIdioms
from Translator.ExpressionTranslator import ExpressionTranslator


@pytest.fixture
def tr():
    return ExpressionTranslator()


@pytest.mark.parametrize("source, expected", [
    ("System.currentTimeMillis()", "システム時間"),
    ("list.get(0)", "listの0番目"),
    ("map.get(k)", "mapのkのペア"),
    ("cal.get(Calendar.YEAR)", "calの年"),
    ("s.substring(1, 3)", "sの2~3文字目の文字列"),
    ("s.substring(i)", "sのi+1文字目以降の文字列"),
    ("s.charAt(0)", "sの1文字目"),
    ("s.length()", "sの長さ"),
    ('s.split(",")', "sを「,」で正規表現区切る"),
    ('s.indexOf("a")', "sで「a」が最初に出る位置"),
    ('text.replace("a", "b")', "textの「a」を「b」へ置換"),
    ('sb.append("x")', "sbに「x」追加"),
    ("Integer.parseInt(t)", "tを整数変換"),
    ("Math.max(a, b)", "aとbの最大値"),
    ("Math.min(a, b)", "aとbの最小値"),
    ("LocalDate.of(2024, 1, 2)", "2024年1月2日"),
    ("ZonedDateTime.now()", "現在日時"),
    ("zdt.getYear()", "zdtの年"),
    ("date.plusDays(3)", "dateに3日加算"),
    ("date.minusWeeks(w)", "dateにw週間減算"),
    ("Period.ofDays(5)", "5日の期間"),
    ('dt.atZone(ZoneId.of("Asia/Tokyo"))', "dtを「東京」に地域変換"),
    ('p.setName("x")', "pのNameに「x」を設定"),
    ("it.next()", "itの次の要素"),
    ("e.printStackTrace()", "エラー詳細出力"),
])
def test_expression_idioms(tr, expr, source, expected):
    assert tr.translate(expr(source)) == expected


def test_first_matching_rule_wins(tr, expr):
    # calendar fields take precedence over the generic get
    assert tr.translate(expr("c.get(Calendar.MONTH)")) == "cの月"
    assert tr.translate(expr("c.get(MONTH)")) == "cのMONTHのペア"


def test_unknown_plus_unit_falls_back(tr, expr):
    assert tr.translate(expr("a.plusFoo(1)")) == "aのplusFoo(1)"


@pytest.mark.parametrize("source, expected", [
    ('Class.forName("com.x.Driver")', "「com.x.Driver」を登録。"),
    ("frame.setVisible(true)", "frameを表示。"),
    ("frame.setSize(300, 200)", "frameのサイズを(300, 200)に設定。"),
    ("frame.setDefaultCloseOperation(JFrame.EXIT_ON_CLOSE)", "frame を 閉じるボタンで終了するように設定。"),
    ("frame.getContentPane().add(button)", "frameにbutton追加。"),
    ('map.put("a", 1)', "mapに(「a」, 1)格納。"),
    ("list.add(x)", "listにx追加。"),
    ("list.remove(x)", "listのx削除。"),
    ("cal.set(Calendar.YEAR, 2020)", "calの年を2020に設定。"),
    ("w.close()", "wを閉じる。"),
    ("Arrays.sort(a)", "aを配列ソート。"),
    ("conn.createStatement().executeUpdate(sql)", "connを使用して sql を実行。"),
    ("foo.bar(1)", "fooのbar(1)。"),
])
def test_statement_idioms(tr, expr, source, expected):
    assert StatementIdioms.translate(tr, expr(source)) == expected
