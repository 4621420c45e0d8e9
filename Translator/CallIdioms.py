"""
Method calls in expression position -> Nadeshiko phrases.

The table is ordered: the first rule whose predicate matches and whose
renderer returns a string wins. Renderers receive the expression translator
(for operands) and a ``CallView`` of the call node.
"""
import logging
from typing import Callable, List, NamedTuple, Optional, Tuple

from Translator.JavaSource import (
    call_args, call_name, call_scope, is_super, is_this, java_source, literal_body,
    literal_kind, node_type, value_string,
)

logger = logging.getLogger(__name__)


class CallView(NamedTuple):
    node: object
    name: str
    scope: Optional[object]
    scope_text: str
    args: list

    @property
    def arity(self) -> int:
        return len(self.args)

    @classmethod
    def of(cls, node) -> "CallView":
        scope = call_scope(node)
        return cls(node, call_name(node), scope, java_source(scope) if scope is not None else "", call_args(node))


_IDIOMS: List[Tuple[Callable[[CallView], bool], Callable]] = []


def idiom(predicate):
    def register(render):
        _IDIOMS.append((predicate, render))
        return render
    return register


def translate(tr, node) -> str:
    c = CallView.of(node)
    for predicate, render in _IDIOMS:
        if predicate(c):
            rendered = render(tr, c)
            if rendered is not None:
                return rendered
    return _default(tr, c)


def _default(tr, c: CallView) -> str:
    logger.debug("Нет идиомы для вызова %s, общий вид", c.name)
    prefix = ""
    if is_this(c.scope):
        prefix = "自身の"
    elif is_super(c.scope):
        prefix = "親の"
    elif c.scope is not None:
        prefix = tr.operand(c.scope) + "の"
    args = ", ".join(tr.operand(a) for a in c.args)
    if not args:
        return prefix + c.name
    return f"{prefix}{c.name}({args})"


# ---------------- lookup tables ----------------

ZONE_NAMES = {"Asia/Tokyo": "東京", "Europe/London": "ロンドン"}

DATE_TIME_PROPERTIES = {
    "getYear": "年", "getMonth": "月", "getMonthValue": "月", "getDayOfMonth": "日",
    "getHour": "時", "getMinute": "分", "getSecond": "秒", "getNano": "ナノ秒",
}

CALENDAR_FIELDS = {
    "YEAR": "年", "MONTH": "月", "DAY_OF_MONTH": "日", "DATE": "日",
    "HOUR": "時", "HOUR_OF_DAY": "24時間", "MINUTE": "分", "SECOND": "秒",
    "MILLISECOND": "ミリ秒", "DAY_OF_WEEK": "曜日", "DAY_OF_YEAR": "年間通算日",
    "WEEK_OF_YEAR": "年間通算週",
}

PERIOD_UNITS = {"ofDays": "日", "ofMonths": "ヶ月", "ofYears": "年"}

SHIFT_UNITS = {
    "Days": "日", "Weeks": "週間", "Months": "ヶ月", "Years": "年",
    "Hours": "時間", "Minutes": "分", "Seconds": "秒",
}

SCANNER_READS = {"nextLine": "文字列読み込み", "nextInt": "整数読み込み", "nextDouble": "少数読み込み"}


def calendar_field(node) -> Optional[str]:
    if node_type(node) == "Member":
        return CALENDAR_FIELDS.get(node.value)
    return None


def zone_id(node) -> str:
    # ZoneId.of("Asia/Tokyo") -> Asia/Tokyo
    if node_type(node) == "Call" and call_name(node) == "of" and java_source(call_scope(node)) == "ZoneId":
        args = call_args(node)
        if len(args) == 1 and literal_kind(args[0]) == "string":
            return literal_body(args[0])
    return java_source(node)


def zone_name(node) -> str:
    zid = zone_id(node)
    return ZONE_NAMES.get(zid, zid)


def one_based(tr, node) -> str:
    if literal_kind(node) == "integer":
        try:
            return str(int(str(node.value)) + 1)
        except ValueError:
            pass
    return tr.operand(node) + "+1"


def _scope(tr, c: CallView) -> str:
    return tr.operand(c.scope) if c.scope is not None else ""


# ---------------- clock and time ----------------

@idiom(lambda c: c.name == "currentTimeMillis" and c.arity == 0 and c.scope_text == "System")
def _system_millis(tr, c):
    return "システム時間"


@idiom(lambda c: c.name == "now" and c.arity == 0 and c.scope_text in ("ZonedDateTime", "LocalDateTime", "LocalDate"))
def _now(tr, c):
    return "現在日時"


@idiom(lambda c: c.name == "getConnection" and c.arity == 1 and c.scope_text == "DriverManager")
def _get_connection(tr, c):
    return f"{c.scope_text} から {tr.operand(c.args[0])} で接続取得"


@idiom(lambda c: c.name == "openStream" and c.arity == 0 and c.scope is not None)
def _open_stream(tr, c):
    return f"{tr.operand(c.scope)} からの通り道"


@idiom(lambda c: c.name == "getWriter" and c.arity == 0 and c.scope is not None)
def _get_writer(tr, c):
    return f"{tr.operand(c.scope)} の 書き込み設定"


@idiom(lambda c: c.name == "setContentType" and c.arity == 1 and c.scope is not None)
def _set_content_type(tr, c):
    return f"{tr.operand(c.scope)} の 形式を {tr.argument(c.args[0])}に設定"


@idiom(lambda c: c.name == "of" and c.arity == 8 and c.scope_text == "ZonedDateTime")
def _zoned_of(tr, c):
    y, m, d, h, mi, s, n = (tr.operand(a) for a in c.args[:7])
    return f"{zone_name(c.args[7])}時間{y}年{m}月{d}日{h}時{mi}分{s}秒{n}ナノ秒"


@idiom(lambda c: c.name == "of" and c.arity >= 5 and c.scope_text == "LocalDateTime")
def _local_date_time_of(tr, c):
    a = [tr.operand(x) for x in c.args]
    date = f"{a[0]}年{a[1]}月{a[2]}日"
    if len(a) == 5:
        return date + f"{a[3]}時{a[4]}分"
    return date + f"{a[3]}時{a[4]}分{a[5]}秒"


@idiom(lambda c: c.name == "of" and c.arity == 3 and c.scope_text == "LocalDate")
def _local_date_of(tr, c):
    y, m, d = (tr.operand(a) for a in c.args)
    return f"{y}年{m}月{d}日"


@idiom(lambda c: c.name == "toInstant" and c.arity == 0 and c.scope is not None)
def _to_instant(tr, c):
    return tr.operand(c.scope) + "の時間"


@idiom(lambda c: c.name == "toLocalDateTime" and c.arity == 0 and c.scope is not None)
def _to_local_date_time(tr, c):
    return tr.operand(c.scope) + "の日時"


@idiom(lambda c: c.name == "atZone" and c.arity == 1 and c.scope is not None)
def _at_zone(tr, c):
    return f"{tr.operand(c.scope)}を「{zone_name(c.args[0])}」に地域変換"


@idiom(lambda c: c.name in DATE_TIME_PROPERTIES and c.arity == 0 and c.scope is not None)
def _date_time_property(tr, c):
    return tr.operand(c.scope) + "の" + DATE_TIME_PROPERTIES[c.name]


@idiom(lambda c: c.name == "now" and c.arity == 0 and c.scope_text == "Instant")
def _instant_now(tr, c):
    return "現在日時"


@idiom(lambda c: c.name == "ofEpochMilli" and c.arity == 1 and c.scope_text == "Instant")
def _of_epoch_milli(tr, c):
    millis = value_string(c.args[0])
    return f"{millis if millis is not None else java_source(c.args[0])}のシステム時間"


@idiom(lambda c: c.name == "toEpochMilli" and c.arity == 0 and c.scope is not None)
def _to_epoch_milli(tr, c):
    return tr.operand(c.scope) + "の日時"


@idiom(lambda c: c.name == "getTime" and c.arity == 0)
def _get_time(tr, c):
    if c.scope is None:
        return "システム時間"
    return tr.operand(c.scope) + "のシステム時間"


@idiom(lambda c: c.name == "getInstance" and c.arity == 0 and c.scope_text == "Calendar")
def _calendar_instance(tr, c):
    return "カレンダー生成"


# ---------------- calendar fields / collections ----------------

@idiom(lambda c: c.name == "get" and c.arity == 1 and c.scope is not None and calendar_field(c.args[0]))
def _calendar_get(tr, c):
    return tr.operand(c.scope) + "の" + calendar_field(c.args[0])


@idiom(lambda c: c.name == "get" and c.arity == 1 and c.scope is not None)
def _get(tr, c):
    key = tr.operand(c.args[0])
    if literal_kind(c.args[0]) == "integer":
        return f"{tr.operand(c.scope)}の{key}番目"
    return f"{tr.operand(c.scope)}の{key}のペア"


# ---------------- periods and formatting ----------------

@idiom(lambda c: c.name in PERIOD_UNITS and c.arity == 1 and c.scope_text == "Period")
def _period_of(tr, c):
    return tr.operand(c.args[0]) + PERIOD_UNITS[c.name] + "の期間"


@idiom(lambda c: c.name == "between" and c.arity == 2 and c.scope_text == "Period")
def _period_between(tr, c):
    return f"{tr.operand(c.args[0])}から{tr.operand(c.args[1])}までの期間"


@idiom(lambda c: c.name == "ofPattern" and c.arity == 1 and c.scope_text == "DateTimeFormatter")
def _of_pattern(tr, c):
    return f"日時フォーマット({tr.operand(c.args[0])})作成"


@idiom(lambda c: c.name == "parse" and c.arity == 2 and c.scope_text == "LocalDate")
def _local_date_parse(tr, c):
    return f"{tr.operand(c.args[0])}を{tr.operand(c.args[1])}の形式逆変換"


@idiom(lambda c: c.name.startswith(("plus", "minus")) and c.arity == 1 and c.scope is not None)
def _plus_minus(tr, c):
    if c.name in ("plus", "minus"):
        op = "加算" if c.name == "plus" else "減算"
        return f"{tr.operand(c.scope)}に{tr.operand(c.args[0])}{op}"
    if c.name.startswith("plus"):
        op, unit = "加算", c.name[4:]
    else:
        op, unit = "減算", c.name[5:]
    if unit not in SHIFT_UNITS:
        return None
    return f"{tr.operand(c.scope)}に{tr.operand(c.args[0])}{SHIFT_UNITS[unit]}{op}"


@idiom(lambda c: c.name == "format" and c.arity == 1 and c.scope is not None)
def _format(tr, c):
    return f"{tr.operand(c.scope)}を{tr.operand(c.args[0])}の形式変換"


# ---------------- iteration ----------------

_ITERATION = {"iterator": "のイテレータ", "next": "の次の要素", "size": "の要素数", "keySet": "のキー一覧"}


@idiom(lambda c: c.name in _ITERATION and c.arity == 0 and c.scope is not None)
def _iteration(tr, c):
    return tr.operand(c.scope) + _ITERATION[c.name]


# ---------------- setters / parsing ----------------

@idiom(lambda c: c.name.startswith("set") and len(c.name) > 3 and c.name[3].isupper()
       and c.arity == 1 and c.scope is not None)
def _setter(tr, c):
    return f"{tr.operand(c.scope)}の{c.name[3:]}に{tr.operand(c.args[0])}を設定"


@idiom(lambda c: c.name == "parse" and c.arity == 1 and c.scope is not None)
def _parse(tr, c):
    return f"{tr.operand(c.args[0])}を{tr.operand(c.scope)}の形式逆変換"


# ---------------- math / numbers / input ----------------

@idiom(lambda c: c.name in ("max", "min") and c.arity == 2 and c.scope_text == "Math")
def _math_max_min(tr, c):
    which = "最大値" if c.name == "max" else "最小値"
    return f"{tr.operand(c.args[0])}と{tr.operand(c.args[1])}の{which}"


@idiom(lambda c: c.name == "parseInt" and c.arity == 1 and c.scope_text == "Integer")
def _parse_int(tr, c):
    return tr.operand(c.args[0]) + "を整数変換"


@idiom(lambda c: c.name == "random" and c.arity == 0 and c.scope_text == "Math")
def _math_random(tr, c):
    return "1の実数乱数"


@idiom(lambda c: c.name == "nextInt" and c.arity == 1 and node_type(c.scope) == "New" and "Random" in c.scope.value)
def _random_next_int(tr, c):
    return tr.operand(c.args[0]) + "の乱数"


def _reads_stdin(c: CallView) -> bool:
    scope = c.scope
    if node_type(scope) != "New" or "Scanner" not in scope.value:
        return False
    return len(scope.children) == 1 and java_source(scope.children[0]) == "System.in"


@idiom(lambda c: c.name in SCANNER_READS and c.arity == 0 and _reads_stdin(c))
def _scanner_read(tr, c):
    return SCANNER_READS[c.name]


# ---------------- strings and streams ----------------

@idiom(lambda c: c.name == "length" and c.arity == 0)
def _length(tr, c):
    return tr.operand(c.scope) + "の長さ" if c.scope is not None else "長さ"


@idiom(lambda c: c.name == "toString" and c.arity == 0)
def _to_string(tr, c):
    return tr.operand(c.scope) + "の文字列変換" if c.scope is not None else "文字列変換"


@idiom(lambda c: c.name == "printStackTrace" and c.arity == 0)
def _print_stack_trace(tr, c):
    return "エラー詳細出力"


@idiom(lambda c: c.name == "read" and c.arity == 0 and c.scope is not None)
def _read(tr, c):
    return tr.operand(c.scope) + "から1文字読込"


@idiom(lambda c: c.name == "matches" and c.arity == 1)
def _matches(tr, c):
    pattern = tr.operand(c.args[0]) if literal_kind(c.args[0]) == "string" else java_source(c.args[0])
    return f"{_scope(tr, c)}を{pattern}で正規表現マッチ"


@idiom(lambda c: c.name == "equals" and c.arity == 1)
def _equals(tr, c):
    return f"{_scope(tr, c)}が{tr.operand(c.args[0])}と等しい"


@idiom(lambda c: c.name == "append" and c.arity == 1)
def _append(tr, c):
    scope = _scope(tr, c)
    return f"{scope}{'に' if scope else ''}{tr.argument(c.args[0])}追加"


@idiom(lambda c: c.name == "replaceAll" and c.arity == 2)
def _replace_all(tr, c):
    return f"{_scope(tr, c)}の{tr.operand(c.args[0])}を{tr.operand(c.args[1])}へ正規表現置換"


@idiom(lambda c: c.name == "replace" and c.arity == 2)
def _replace(tr, c):
    return f"{_scope(tr, c)}の{tr.operand(c.args[0])}を{tr.operand(c.args[1])}へ置換"


@idiom(lambda c: c.name == "split" and c.arity == 1)
def _split(tr, c):
    arg = c.args[0]
    delimiter = f"「{literal_body(arg)}」" if literal_kind(arg) == "string" else tr.operand(arg)
    return f"{_scope(tr, c)}を{delimiter}で正規表現区切る"


@idiom(lambda c: c.name == "format" and c.arity >= 1 and c.scope_text == "String")
def _string_format(tr, c):
    rest = ", ".join(java_source(a) for a in c.args[1:])
    return f"{tr.operand(c.args[0])}を「{rest}」で形式指定"


@idiom(lambda c: c.name == "substring" and c.arity in (1, 2))
def _substring(tr, c):
    start = one_based(tr, c.args[0])
    if c.arity == 1:
        return f"{_scope(tr, c)}の{start}文字目以降の文字列"
    return f"{_scope(tr, c)}の{start}~{tr.operand(c.args[1])}文字目の文字列"


@idiom(lambda c: c.name in ("indexOf", "lastIndexOf") and c.arity == 1)
def _index_of(tr, c):
    arg = c.args[0]
    needle = f"「{literal_body(arg)}」" if literal_kind(arg) == "string" else tr.operand(arg)
    where = "最初" if c.name == "indexOf" else "最後"
    return f"{_scope(tr, c)}で{needle}が{where}に出る位置"


@idiom(lambda c: c.name == "charAt" and c.arity == 1)
def _char_at(tr, c):
    return f"{_scope(tr, c)}の{one_based(tr, c.args[0])}文字目"
