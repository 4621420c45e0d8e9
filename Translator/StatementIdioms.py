"""Method calls used as whole statements (``obj.call(...);``) -> sentences ending in '。'."""
from typing import Optional

from Translator.CallIdioms import CALENDAR_FIELDS, CallView
from Translator.JavaSource import call_name, call_scope, java_source, node_type


def _content_pane_owner(scope) -> Optional[str]:
    # frame.getContentPane().add(...) -> frame
    if node_type(scope) == "Call" and call_name(scope) == "getContentPane":
        owner = call_scope(scope)
        return java_source(owner) if owner is not None else ""
    return None


def _special(tr, c: CallView) -> Optional[str]:
    if c.name == "forName" and c.scope_text == "Class" and c.arity == 1:
        return f"{tr.argument(c.args[0])}を登録。"
    if c.name == "executeUpdate" and node_type(c.scope) == "Call":
        connection = call_scope(c.scope)
        conn = java_source(connection) if connection is not None else java_source(c.scope)
        sql = java_source(c.args[0]) if c.args else ""
        return f"{conn}を使用して {sql} を実行。"
    if c.name == "sort" and c.scope_text.endswith("Arrays") and c.arity == 1:
        return f"{tr.argument(c.args[0])}を配列ソート。"
    if c.name == "getInstance" and "Calendar" in c.scope_text:
        return "カレンダー生成。"
    if c.scope is None:
        return None
    for group in (_calendar, _collection, _gui, _io):
        rendered = group(tr, c)
        if rendered is not None:
            return rendered
    return None


def _calendar(tr, c: CallView) -> Optional[str]:
    owner = c.scope_text
    if c.name == "set" and c.arity == 6:
        y, m, d, h, mi, s = (tr.operand(a) for a in c.args)
        return f"{owner}に {y}年{m}月{d}日{h}時{mi}分{s}秒 を設定。"
    if c.name == "set" and c.arity == 2 and node_type(c.args[0]) == "Member":
        field = CALENDAR_FIELDS.get(c.args[0].value, c.args[0].value)
        return f"{owner}の{field}を{tr.operand(c.args[1])}に設定。"
    if c.name == "get" and c.arity == 1 and node_type(c.args[0]) == "Member":
        field = CALENDAR_FIELDS.get(c.args[0].value, c.args[0].value)
        return f"{owner}の{field}。"
    if c.name == "setTime" and c.arity == 1:
        return f"{owner}の日時を {tr.operand(c.args[0])} に設定。"
    return None


def _collection(tr, c: CallView) -> Optional[str]:
    owner = c.scope_text
    if c.name == "put" and c.arity == 2:
        return f"{owner}に({tr.argument(c.args[0])}, {tr.argument(c.args[1])})格納。"
    if c.name == "remove" and c.arity == 1:
        return f"{owner}の{tr.argument(c.args[0])}削除。"
    if c.name == "add" and c.arity == 1:
        frame = _content_pane_owner(c.scope)
        if frame:
            owner = frame
        return f"{owner}に{tr.argument(c.args[0])}追加。"
    return None


def _gui(tr, c: CallView) -> Optional[str]:
    owner = c.scope_text
    if c.name == "setLayout" and c.arity == 1:
        frame = _content_pane_owner(c.scope)
        layout = c.args[0]
        if frame is not None and node_type(layout) == "New":
            return f"{frame}のレイアウトを {layout.value} に設定。"
    if c.name == "setDefaultCloseOperation" and c.arity == 1:
        arg = java_source(c.args[0])
        if arg.endswith("EXIT_ON_CLOSE"):
            return f"{owner} を 閉じるボタンで終了するように設定。"
        return f"{owner}の終了操作を ({arg.replace('JLabel.', 'JFrame.')}) に設定。"
    if c.name == "setSize" and c.arity in (1, 2):
        return f"{owner}のサイズを({', '.join(tr.argument(a) for a in c.args)})に設定。"
    if c.name == "setVisible" and c.arity == 1 and java_source(c.args[0]) == "true":
        return f"{owner}を表示。"
    return None


def _io(tr, c: CallView) -> Optional[str]:
    owner = c.scope_text
    if c.name == "write" and c.arity == 1:
        return f"{owner}に{tr.text(c.args[0])}書込。"
    if c.name == "close" and c.arity == 0:
        return f"{owner}を閉じる。"
    return None


def translate(tr, node) -> str:
    c = CallView.of(node)
    rendered = tr.guard.call(lambda: None, _special, tr, c)
    if rendered is not None:
        return rendered
    return tr.call(node) + "。"
