import logging

from Translator.JavaSource import (
    call_args, call_name, call_scope, convert_escapes, is_name, is_this, java_source,
    literal_body, literal_kind, node_type,
)

logger = logging.getLogger(__name__)

COMPARISONS = {"EQUAL": "=", "NOTEQUAL": "≠", "LT": "<", "LE": "≤", "GT": ">", "GE": "≥"}
CONNECTIVES = {"AND": "かつ", "OR": "または"}


def _enclosed(text: str) -> bool:
    """'(a) かつ (b)' is not enclosed, '((a) かつ (b))' is."""
    if not (text.startswith("(") and text.endswith(")")):
        return False
    depth = 0
    for i, ch in enumerate(text):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0 and i < len(text) - 1:
                return False
    return True


class ConditionTranslator:
    """Boolean expressions -> Nadeshiko conditions. Never fails: unknown shapes end in 'が真'."""

    def __init__(self, expressions):
        self.expressions = expressions

    def translate(self, node, wrap: bool = True, wrap_inner: bool = True) -> str:
        guard = self.expressions.guard
        return guard.call(lambda: java_source(node) + "が真", self._convert, node, wrap, wrap_inner)

    def _sub(self, node, wrap, wrap_inner) -> str:
        with self.expressions.guard.nested():
            return self._convert(node, wrap, wrap_inner)

    # ---------- dispatcher ----------

    def _convert(self, node, wrap, wrap_inner) -> str:
        t = node_type(node)

        if t == "Paren":
            inner = self._sub(node.children[0], wrap, wrap_inner)
            if wrap and not inner.startswith("("):
                return f"({inner})"
            return inner

        if t == "BinaryOp" and node.value == "EQUAL":
            left, right = node.children
            call = None
            if node_type(left) == "Call" and literal_kind(right) == "boolean" and right.value == "true":
                call = left
            elif node_type(right) == "Call" and literal_kind(left) == "boolean" and left.value == "true":
                call = right
            if call is not None:
                inner = self._sub(call, False, False)
                return inner if inner.endswith("が真") else inner + "が真"

        if t == "Call":
            return self._call(node)

        if t == "PrefixOp" and node.value == "BANG":
            return self._negate(self._sub(node.children[0], False, True))

        if t == "BinaryOp":
            return self._binary(node, wrap, wrap_inner)

        kind = literal_kind(node)
        if kind == "boolean":
            return "真" if node.value == "true" else "偽"
        if is_name(node):
            return node.value + "が真"
        if t == "InstanceOf":
            obj = self.operand(node.children[0])
            if len(node.children) > 1:
                return f"{obj}が{node.value}型で{node.children[1].value}に代入できる"
            return f"{obj}が{node.value}型"

        logger.debug("Условие без особого вида: %s", t)
        return java_source(node) + "が真"

    # ---------- parts ----------

    def _call(self, node) -> str:
        name = call_name(node)
        scope = call_scope(node)
        args = call_args(node)
        left = self.operand(scope) if scope is not None else ""

        if name == "isEqual" and len(args) == 1 and scope is not None:
            return f"{left}が{self.operand(args[0])}と等しい"
        if name in ("equals", "equalsIgnoreCase") and len(args) == 1:
            return f"{left}と{self.operand(args[0])}が等しい"
        if name in ("isAfter", "isBefore") and len(args) == 1:
            when = "より未来" if name == "isAfter" else "より過去"
            return f"{left}が{self.operand(args[0])}{when}"
        if name == "hasNext" and not args and scope is not None:
            return left + "の次の要素がある"
        if name == "containsKey" and len(args) == 1:
            return f"{left}のキーに{self.operand(args[0])}を含む"
        if name == "containsValue" and len(args) == 1:
            return f"{left}の値に{self.operand(args[0])}を含む"
        if name == "contains" and len(args) == 1:
            return f"{left}が{self.operand(args[0])}を含む"
        if name == "endsWith" and len(args) == 1:
            return f"{left}が{self.operand(args[0])}で終わる"
        if name == "isEmpty" and not args:
            return left + "が空"
        return self.operand(node) + "が真"

    @staticmethod
    def _negate(inner: str) -> str:
        if inner.endswith("の長さが0"):
            return inner + "でない"
        if inner.endswith("が真"):
            return inner[:-2] + "でない"
        if inner.endswith("が偽"):
            return inner[:-2] + "が真"
        if " かつ " in inner or " または " in inner:
            if not _enclosed(inner):
                inner = f"({inner})"
            return inner + "でない"
        return inner + "でない"

    def _binary(self, node, wrap, wrap_inner) -> str:
        left, right = node.children
        if node.value in COMPARISONS:
            lhs = self.expressions.text(left, node)
            rhs = self.expressions.text(right, node)
            return f"{lhs} {COMPARISONS[node.value]} {rhs}"
        if node.value in CONNECTIVES:
            word = CONNECTIVES[node.value]
            lhs = self._sub(left, wrap_inner, wrap_inner)
            rhs = self._sub(right, wrap_inner, wrap_inner)
            if wrap and wrap_inner:
                return f"(({lhs}) {word} ({rhs}))"
            if wrap:
                return f"({lhs} {word} {rhs})"
            if wrap_inner:
                return f"({lhs}) {word} ({rhs})"
            return f"{lhs} {word} {rhs}"
        return f"{self.operand(left)}が{self.operand(right)}"

    # ---------- condition-flavoured operand ----------

    def operand(self, node) -> str:
        with self.expressions.guard.nested():
            return self._operand(node)

    def _operand(self, node) -> str:
        kind = literal_kind(node)
        if kind == "boolean":
            return "真" if node.value == "true" else "偽"
        if kind == "string":
            return f"「{convert_escapes(literal_body(node))}」"
        if kind == "integer":
            return str(node.value)
        if is_name(node):
            return node.value
        if is_this(node):
            return "自身"

        t = node_type(node)
        if t == "Member":
            scope = self.operand(node.children[0])
            return f"{scope}の{node.value}"
        if t == "Call":
            return self._call_operand(node)
        return java_source(node)

    def _call_operand(self, node) -> str:
        name = call_name(node)
        scope = call_scope(node)
        args = call_args(node)
        left = self.operand(scope) if scope is not None else ""

        if name in ("equals", "equalsIgnoreCase") and len(args) == 1:
            return f"{left}と{self.operand(args[0])}が等しい"
        if name == "contains" and len(args) == 1:
            return f"{left}に{self.operand(args[0])}が含まれている"
        if name == "endsWith" and len(args) == 1:
            return f"{left}が{self.operand(args[0])}で終わる"
        if name == "isEmpty" and not args:
            return left + "の長さが0"

        prefix = java_source(scope) + "の" if scope is not None else ""
        return f"{prefix}{name}({', '.join(self.operand(a) for a in args)})"
