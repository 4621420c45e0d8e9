import math
import re
from decimal import Decimal
from typing import Optional

from JavaGrammarLexer.JavaGrammarLexer import JavaGrammarLexer

OPERATOR_TEXT = dict(JavaGrammarLexer.SYMBOL_TEXT, INSTANCEOF="instanceof")


def operator_text(op_type) -> str:
    return OPERATOR_TEXT.get(op_type, str(op_type))


def java_source(expr) -> str:
    """Prints an expression node back as Java text, the way it reads in the source."""
    if expr is None:
        return ""
    if isinstance(expr, str):
        return expr
    t = getattr(expr, "type", None)
    ch = expr.children or []
    if t in ("Literal", "Identifier"):
        return str(expr.value or "")
    if t == "Paren":
        return f"({java_source(ch[0] if ch else None)})"
    if t == "Member":
        return f"{java_source(ch[0] if ch else None)}.{expr.value}"
    if t == "Call":
        args_src = ", ".join(java_source(a) for a in ch)
        return f"{java_source(expr.value)}({args_src})"
    if t == "ArrayAccess":
        return f"{java_source(ch[0])}[{java_source(ch[1])}]"
    if t == "BinaryOp":
        return f"{java_source(ch[0])} {operator_text(expr.value)} {java_source(ch[1])}"
    if t == "Assign":
        return f"{java_source(ch[0])} {operator_text(expr.value)} {java_source(ch[1])}"
    if t == "PrefixOp":
        return f"{operator_text(expr.value)}{java_source(ch[0])}"
    if t == "PostfixOp":
        return f"{java_source(ch[0])}{operator_text(expr.value)}"
    if t == "Ternary":
        return f"{java_source(ch[0])} ? {java_source(ch[1])} : {java_source(ch[2])}"
    if t == "Cast":
        return f"({expr.value}) {java_source(ch[0])}"
    if t == "InstanceOf":
        binding = f" {ch[1].value}" if len(ch) > 1 else ""
        return f"{java_source(ch[0])} instanceof {expr.value}{binding}"
    if t == "New":
        return f"new {expr.value}({', '.join(java_source(a) for a in ch)})"
    if t == "NewArray":
        dims_node = expr.child("Dims")
        init = expr.child("ArrayInit")
        dims = "".join(f"[{java_source(d)}]" for d in dims_node.children)
        dims += "[]" * ((dims_node.value or 0) - len(dims_node.children))
        if init is not None:
            return f"new {expr.value}{dims} {java_source(init)}"
        return f"new {expr.value}{dims}"
    if t == "ArrayInit":
        return "{" + ", ".join(java_source(e) for e in ch) + "}"
    if t == "Lambda":
        body = ch[0] if ch else None
        body_src = "{ ... }" if getattr(body, "type", None) == "Block" else java_source(body)
        return f"{expr.value} -> {body_src}"
    if t == "MethodRef":
        return f"{java_source(ch[0])}::{expr.value}"
    if t == "Param":
        return (expr.value or "").split()[-1]
    if t == "LocalVarDecl":
        decls = [d for d in ch if getattr(d, "type", None) == "Declarator"]
        parts = []
        for d in decls:
            parts.append(f"{d.value} = {java_source(d.children[0])}" if d.children else d.value)
        return f"{expr.value} {', '.join(parts)}"
    if ch:
        return " ".join(p for p in (java_source(c) for c in ch) if p)
    return str(expr.value) if expr.value is not None else ""


# ---------------- node helpers ----------------

def node_type(node):
    return getattr(node, "type", None)


def unwrap(node):
    """Strips casts and parentheses: ((int) (x)) -> x."""
    while node_type(node) in ("Paren", "Cast") and node.children:
        node = node.children[0]
    return node


def is_this(node) -> bool:
    return node_type(node) == "Identifier" and node.value == "this"


def is_super(node) -> bool:
    return node_type(node) == "Identifier" and node.value == "super"


def is_name(node) -> bool:
    """A plain variable/type name (not this/super)."""
    return node_type(node) == "Identifier" and node.value not in ("this", "super")


def call_name(call) -> str:
    callee = call.value
    if node_type(callee) in ("Identifier", "Member"):
        return callee.value
    return java_source(callee)


def call_scope(call):
    callee = call.value
    if node_type(callee) == "Member" and callee.children:
        return callee.children[0]
    return None


def call_args(call) -> list:
    return list(call.children or [])


# ---------------- literals ----------------

_TOKEN_KINDS = {
    "STRING": "string", "CHAR": "char", "TEXT_BLOCK": "text_block",
    "TRUE": "boolean", "FALSE": "boolean", "NULL": "null",
}


def literal_kind(node) -> Optional[str]:
    """string / char / text_block / integer / long / double / boolean / null, or None."""
    if node_type(node) != "Literal":
        return None
    tok_type = getattr(node.token, "type", None)
    if tok_type in _TOKEN_KINDS:
        return _TOKEN_KINDS[tok_type]
    text = str(node.value or "")
    if text[-1:] in ("l", "L"):
        return "long"
    if text[:2].lower() in ("0x", "0b"):
        return "integer"
    if "." in text or any(c in text for c in "eEfFdD"):
        return "double"
    return "integer"


def literal_body(node) -> str:
    """Source text between the quotes of a string or char literal, escapes untouched."""
    text = str(node.value or "")
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return text


_ESCAPES = {"n": "{改行}", "t": "{タブ}", '"': '"', "'": "'", "\\": "\\"}


def convert_escapes(raw: str) -> str:
    out = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch == "\\" and i + 1 < len(raw) and raw[i + 1] in _ESCAPES:
            out.append(_ESCAPES[raw[i + 1]])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


# String.trim() in Java strips every char <= U+0020
_JAVA_TRIM = "".join(chr(c) for c in range(0x21))
_TRAILING_BLANKS = re.compile(r"[ 　\t]+$")


def text_block_value(node) -> str:
    text = str(node.value or "")
    content = text[3:-3] if len(text) >= 6 else ""
    content = re.sub(r"^[ \t\f]*\n", "", content, count=1)
    if not content:
        return content
    lines = content.split("\n")

    min_indent = None
    for line in lines:
        if line.strip(_JAVA_TRIM):
            indent = len(line) - len(line.lstrip(" \t　"))
            min_indent = indent if min_indent is None else min(min_indent, indent)

    last = len(lines) - 1
    while last >= 0 and not lines[last].strip(_JAVA_TRIM):
        last -= 1

    out = []
    for line in lines[:last + 1]:
        if min_indent and len(line) >= min_indent:
            line = line[min_indent:]
        out.append(_TRAILING_BLANKS.sub("", line))
    return "{改行}".join(out)


def java_double_text(value: float) -> str:
    """Double.toString(): plain notation in [1e-3, 1e7), scientific 'd.dddE±n' elsewhere."""
    if value == 0 or not math.isfinite(value) or 1e-3 <= abs(value) < 1e7:
        return repr(value)
    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(map(str, digit_tuple))
    power = len(digits) - 1 + exponent
    digits = digits.rstrip("0") or "0"
    mantissa = digits[0] + "." + (digits[1:] or "0")
    return f"{'-' if sign else ''}{mantissa}E{power}"


_FLOAT_SUFFIX = re.compile(r"([0-9]*\.?[0-9]+)[FfDd]")


def _number_value(node) -> str:
    text = str(node.value)
    kind = literal_kind(node)
    if kind == "long":
        return text[:-1]
    if kind == "double":
        try:
            return java_double_text(float(text.rstrip("fFdD").replace("_", "")))
        except ValueError:
            return _FLOAT_SUFFIX.sub(r"\1", text)
    return text


def value_string(node) -> Optional[str]:
    """Plain value of a literal-ish expression; None for operators it cannot flatten."""
    expr = unwrap(node)
    kind = literal_kind(expr)
    if kind == "string":
        return literal_body(expr)
    if kind in ("integer", "long", "double"):
        return _number_value(expr)
    if kind == "boolean":
        return "真" if expr.value == "true" else "偽"
    t = node_type(expr)
    if t == "PrefixOp":
        inner = expr.children[0] if expr.children else None
        if expr.value == "SUB" and literal_kind(inner) in ("integer", "long", "double"):
            return "-" + _number_value(inner)
        return None
    if t == "BinaryOp":
        return None
    return java_source(expr)
