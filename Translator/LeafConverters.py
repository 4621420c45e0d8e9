"""
Single-line constructs: comments, package/import, printing, throw,
declarations and expression statements.

Every converter reads the indentation of its own line from the IndentTable
that the block walk has already stamped, and returns Items.
"""
import logging
from typing import List, Optional

from Translator import StatementIdioms
from Translator.IndentTable import IndentTable
from Translator.Items import COMMENT, IMPORT, PACKAGE, STATEMENT, Item
from Translator.JavaSource import call_args, call_name, call_scope, java_source, node_type

logger = logging.getLogger(__name__)

# ---------------- type mapping ----------------

TYPE_NAMES = {
    "int": "整数", "Integer": "整数", "long": "整数", "Long": "整数",
    "short": "整数", "Short": "整数", "byte": "整数", "Byte": "整数",
    "double": "小数", "Double": "小数", "float": "小数", "Float": "小数",
    "boolean": "真偽値", "Boolean": "真偽値",
    "char": "文字", "Character": "文字",
    "String": "文字列",
}


def nadeshiko_type(java_type: Optional[str]) -> str:
    """'int[][]' -> '整数配列配列'; unknown types are kept as written."""
    jt = (java_type or "").strip()
    if jt.endswith("[]"):
        return nadeshiko_type(jt[:-2]) + "配列"
    return TYPE_NAMES.get(jt, jt)


def has_modifier(node, modifier: str) -> bool:
    mods = node.child("Modifiers")
    return mods is not None and modifier in (mods.value or "").split(",")


# ---------------- comments ----------------

def convert_comment(token, indent: IndentTable) -> List[Item]:
    line = token.line
    prefix = indent.get(line)
    text = token.text or ""

    if token.type == "LINE_COMMENT":
        return [Item(line, f"{prefix}//{text[2:].strip()}", COMMENT)]

    if text.startswith("/**") and len(text) > 4:
        opener, content = "/**", text[3:-2]
    else:
        opener, content = "/*", text[2:-2]

    if "\n" not in content:
        return [Item(line, f"{prefix}{opener}{content}*/", COMMENT)]

    parts = content.split("\n")
    while parts and parts[-1] == "":
        parts.pop()

    items = []
    last = len(parts) - 1
    for i, part in enumerate(parts):
        if part.strip().startswith("*"):
            part = part.replace("*", " ", 1)
        if i == last and i > 0 and not part.strip():
            continue
        if i == 0:
            items.append(Item(line, prefix + opener + part, COMMENT))
        else:
            items.append(Item(line + i, prefix + part, COMMENT))
    items.append(Item(token.end_line, prefix + "*/", COMMENT))
    return items


# ---------------- package / import ----------------

def convert_package(node, indent: IndentTable) -> Item:
    return Item(node.line, f"{indent.get(node.line)}「{node.value}」に所属。", PACKAGE)


def convert_import(node, indent: IndentTable) -> Item:
    name = node.value
    if not name.endswith(".*"):
        name = name.split(".")[-1]
    return Item(node.line, f"{indent.get(node.line)}「{name}」を取り込む。", IMPORT)


# ---------------- System.out.print / println ----------------

PRINT_SUFFIXES = {"println": "と表示。", "pritnln": "と表示。", "print": "と無改行表示。"}


def is_print_call(call) -> bool:
    if call_name(call) not in PRINT_SUFFIXES:
        return False
    scope = call_scope(call)
    if node_type(scope) != "Member" or scope.value != "out":
        return False
    owner = scope.children[0]
    return node_type(owner) == "Identifier" and owner.value == "System"


def convert_print(tr, call, indent: IndentTable) -> Optional[Item]:
    line = call.line
    prefix = indent.get(line)
    name = call_name(call)
    args = call_args(call)
    if not args:
        # print() без аргументов не компилируется, выводить нечего
        return Item(line, prefix + "改行。") if name != "print" else None
    content = tr.translate(args[0], call)
    if content is None:
        content = f"({java_source(args[0])})"
    return Item(line, prefix + content + PRINT_SUFFIXES[name])


# ---------------- throw ----------------

def convert_throw(tr, node, indent: IndentTable) -> Item:
    prefix = indent.get(node.line)
    thrown = node.children[0] if node.children else None
    if node_type(thrown) == "New" and thrown.children:
        message = tr.translate(thrown.children[0], thrown)
        if message is not None:
            return Item(node.line, f"{prefix}{message}とエラー発生。")
    return Item(node.line, prefix + "エラー発生。")


# ---------------- arrays ----------------

def array_initializer_text(init) -> str:
    elems = []
    for elem in init.children:
        if node_type(elem) == "ArrayInit":
            elems.append(array_initializer_text(elem))
        else:
            elems.append(java_source(elem))
    return "[" + ",".join(elems) + "]"


def array_text(node) -> Optional[str]:
    """{1,2,3} -> '[1,2,3]'; new int[3] -> '整数配列(長さ3)生成'."""
    if node_type(node) == "ArrayInit":
        return array_initializer_text(node)
    init = node.child("ArrayInit")
    if init is not None:
        return array_initializer_text(init)

    dims = node.child("Dims")
    sizes = [java_source(d) for d in (dims.children if dims is not None else [])]
    if not sizes:
        return None
    if len(sizes) == 1:
        shape = f"長さ{sizes[0]}"
    elif len(sizes) == 2:
        shape = f"行{sizes[0]},列{sizes[1]}"
    else:
        shape = "×".join(sizes)
    return f"{nadeshiko_type(node.value)}配列({shape})生成"


def _is_array_value(node) -> bool:
    return node_type(node) in ("NewArray", "ArrayInit")


# ---------------- declarations ----------------

def initializer_text(tr, name: str, value, parent, final: bool = False) -> Optional[str]:
    converted = tr.translate(value, parent)
    if converted is None:
        return None
    if final:
        return f"{name}は{converted}と定める。"
    return f"{name} は {converted}。"


def convert_declaration(tr, decl, indent: IndentTable, is_field: bool) -> List[Item]:
    """FieldDecl / LocalVarDecl -> one Item per declarator that has something to say."""
    final = has_modifier(decl, "FINAL")
    items = []
    for declarator in decl.children_of("Declarator"):
        line = declarator.line
        prefix = indent.get(line)
        value = declarator.children[0] if declarator.children else None

        if value is None:
            type_name = nadeshiko_type(decl.value)
            text = f"{declarator.value}とは{type_name}。" if is_field else f"{declarator.value}とは{type_name}型。"
        elif _is_array_value(value):
            array = array_text(value)
            if array is None:
                continue
            text = f"{declarator.value}は{array}。"
        else:
            text = initializer_text(tr, declarator.value, value, declarator, final)
            if text is None:
                logger.debug("Инициализатор %s не переведён (строка %s)", declarator.value, line)
                continue
        items.append(Item(line, prefix + text))
    return items


# ---------------- expression statements ----------------

def _assignment_text(tr, assign, stmt) -> Optional[str]:
    target, value = assign.children
    if assign.value == "ASSIGN":
        if _is_array_value(value):
            array = array_text(value)
            return f"{java_source(target)}は{array}。" if array is not None else None
        return initializer_text(tr, tr.assignment_target(target), value, assign)
    return initializer_text(tr, tr.assignment_target(target), assign, stmt)


def convert_expression_statement(tr, stmt, indent: IndentTable) -> Optional[Item]:
    expr = stmt.children[0]
    line = stmt.line
    prefix = indent.get(line)
    t = node_type(expr)

    if t == "Call":
        if is_print_call(expr):
            return convert_print(tr, expr, indent)
        return Item(line, prefix + StatementIdioms.translate(tr, expr), STATEMENT)

    if t == "Assign":
        text = _assignment_text(tr, expr, stmt)
    elif t in ("PrefixOp", "PostfixOp") and expr.value in ("INC", "DEC"):
        text = f"{java_source(expr.children[0])} は {tr.text(expr, stmt)}。"
    elif t == "New":
        text = tr.create_object(expr) + "。"
    else:
        converted = tr.translate(expr, stmt)
        text = converted + "。" if converted is not None else None

    if text is None:
        logger.debug("Оператор-выражение без перевода: %s (строка %s)", t, line)
        return None
    return Item(line, prefix + text)
