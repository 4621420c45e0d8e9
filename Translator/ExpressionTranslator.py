import logging
import re
from contextlib import contextmanager
from typing import Callable, List, Optional

from Translator import CallIdioms
from Translator.ConditionTranslator import ConditionTranslator
from Translator.JavaSource import (
    call_args, call_name, call_scope, convert_escapes, is_name, is_this, java_source,
    literal_body, literal_kind, node_type, operator_text, text_block_value, unwrap, value_string,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100

COMPARISON_OPS = {"EQUAL", "NOTEQUAL", "LT", "LE", "GT", "GE"}
LOGICAL_OPS = {"AND", "OR"}
ARITHMETIC_OPS = {"ADD": "+", "SUB": "-", "MUL": "*", "DIV": "/", "MOD": "%"}
COMPOUND_OPS = {
    "ADD_ASSIGN": "+", "SUB_ASSIGN": "-", "MUL_ASSIGN": "*", "DIV_ASSIGN": "/", "MOD_ASSIGN": "%",
}

# классы Swing и String -> なでしこ
SWING_NAMES = {"JFrame": "フレーム", "JLabel": "ラベル", "JButton": "ボタン", "String": "文字列"}


class TranslationDepthError(RecursionError):
    """Expression nesting went past the configured limit."""


class DepthGuard:
    """One counter shared by the expression and condition translators."""

    def __init__(self, limit: int = DEFAULT_MAX_DEPTH):
        self.limit = limit
        self.level = 0

    @contextmanager
    def nested(self):
        self.level += 1
        try:
            if self.level > self.limit:
                raise TranslationDepthError(f"expression nesting deeper than {self.limit}")
            yield
        finally:
            self.level -= 1

    def call(self, fallback: Callable[[], Optional[str]], fn, *args, **kwargs):
        # only the outermost call turns the overflow into a fallback
        outermost = self.level == 0
        try:
            with self.nested():
                return fn(*args, **kwargs)
        except TranslationDepthError as exc:
            if not outermost:
                raise
            logger.warning("Глубина выражения превышена, используется исходный текст: %s", exc)
            return fallback()


def strip_generics(type_name: str) -> str:
    """'java.util.ArrayList<String>' -> 'ArrayList'."""
    return re.sub(r"<.*>", "", type_name or "").split(".")[-1].strip()


class ExpressionTranslator:
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.guard = DepthGuard(max_depth)
        self.conditions = ConditionTranslator(self)

    # ---------- public entry points ----------

    def translate(self, node, parent=None) -> Optional[str]:
        """Nadeshiko rendering of an expression, or None when it has none.

        ``parent`` is the syntactic parent of ``node``; it decides whether an
        assignment is nested and whether a +/- chain needs parentheses.
        """
        if node is None:
            return None
        return self.guard.call(lambda: None, self._translate, node, parent)

    def text(self, node, parent=None) -> str:
        converted = self.translate(node, parent)
        return converted if converted is not None else java_source(node)

    def operand(self, node) -> str:
        """Short operand form used inside call idioms."""
        return self.guard.call(lambda: java_source(node), self._operand, node)

    def argument(self, node) -> str:
        kind = literal_kind(node)
        if kind in ("string", "char"):
            return f"「{literal_body(node)}」"
        return java_source(node)

    def call(self, node) -> str:
        return self.guard.call(lambda: java_source(node), CallIdioms.translate, self, node)

    def create_object(self, node) -> str:
        return self.guard.call(lambda: java_source(node), self._create_object, node)

    # ---------- dispatcher ----------

    def _translate(self, node, parent):
        expr = unwrap(node)
        t = node_type(expr)

        if t == "Assign" and expr.value == "ASSIGN" and parent is not None and parent.type != "ExprStmt":
            target, value = expr.children
            return f"({java_source(target)} は {self.text(value, expr)})"

        if self._is_condition_shaped(expr):
            condition = self.conditions.translate(expr)
            if not condition.endswith("が真"):
                return f"<{condition}>"

        if t == "InstanceOf":
            obj = self.text(expr.children[0], expr)
            if len(expr.children) > 1:
                return f"({obj}が{expr.value}型で{expr.children[1].value}に代入できる)"
            return f"{obj}が{expr.value}型"

        if t == "Assign" and expr.value != "ASSIGN":
            return self._compound_assignment(expr)

        if t in ("PrefixOp", "PostfixOp") and expr.value in ("INC", "DEC"):
            sign = "+" if expr.value == "INC" else "-"
            return f"({java_source(expr.children[0])} {sign} 1)"

        if t == "BinaryOp":
            if expr.value == "ADD" and self._contains_string_literal(expr):
                return self._string_concatenation(expr)
            return self._binary(expr, node, parent)

        if t == "New":
            return self._create_object(expr)
        if t == "Call":
            return CallIdioms.translate(self, expr)
        if t == "Member":
            return self._field_access(expr)

        if is_this(expr):
            return "自身"
        kind = literal_kind(expr)
        if kind in ("string", "char"):
            return f"「{convert_escapes(literal_body(expr))}」"
        if kind == "text_block":
            return f"「{text_block_value(expr)}」"
        if t == "PrefixOp" and expr.value == "SUB" and literal_kind(expr.children[0]) is None:
            return "-" + self.text(expr.children[0], expr)
        return value_string(expr)

    # ---------- parts ----------

    @staticmethod
    def _is_condition_shaped(expr) -> bool:
        t = node_type(expr)
        if t == "BinaryOp":
            return expr.value in COMPARISON_OPS or expr.value in LOGICAL_OPS
        if t == "PrefixOp":
            return expr.value == "BANG"
        return t == "Call"

    @staticmethod
    def assignment_target(target) -> str:
        if node_type(target) == "Member":
            scope = target.children[0]
            if is_this(scope):
                return f"自身の{target.value}"
            return f"{java_source(scope)}の{target.value}"
        return java_source(target)

    @staticmethod
    def _compound_symbol(op_type) -> str:
        if op_type in COMPOUND_OPS:
            return COMPOUND_OPS[op_type]
        return operator_text(op_type)[:-1]

    def _compound_assignment(self, expr):
        target, value = expr.children
        op = self._compound_symbol(expr.value)
        inner = unwrap(value)
        if node_type(inner) == "Assign":
            inner_target = java_source(inner.children[0])
            inner_value = self.text(inner.children[1], inner)
            if inner.value == "ASSIGN":
                nested = f"{inner_target} は {inner_value}"
            else:
                nested = f"{inner_target} は {inner_target} {self._compound_symbol(inner.value)} {inner_value}"
            return f"({self.assignment_target(target)} {op} ({nested}))"
        return f"({self.assignment_target(target)} {op} {self.text(value, expr)})"

    @staticmethod
    def _is_math_random(node) -> bool:
        node = unwrap(node)
        if node_type(node) == "Call":
            return call_name(node) == "random" and java_source(call_scope(node)) == "Math"
        if node_type(node) == "BinaryOp":
            return ExpressionTranslator._is_math_random(node.children[0]) or \
                ExpressionTranslator._is_math_random(node.children[1])
        return False

    def _binary(self, expr, node, parent):
        left, right = expr.children
        op = ARITHMETIC_OPS.get(expr.value) or operator_text(expr.value)

        if node_type(unwrap(left)) == "Assign" or node_type(unwrap(right)) == "Assign":
            return f"({self.text(left, expr)} {op} {self.text(right, expr)})"

        if expr.value == "MUL":
            if self._is_math_random(unwrap(left)):
                return f"1の実数乱数 * {self.text(right, expr)}"
            if self._is_math_random(unwrap(right)):
                return f"{self.text(left, expr)} * 1の実数乱数"

        if expr.value == "ADD" and node_type(left) == "Call" and call_name(left) == "nextInt":
            args = call_args(left)
            if "Random" in java_source(call_scope(left)) and len(args) == 1:
                bound = value_string(right)
                if bound is not None:
                    return f"{java_source(args[0])}の乱数+{bound}"

        rendered = f"{self.text(left, expr)} {op} {self.text(right, expr)}"
        if self._chain_continues(expr, node, parent):
            return rendered
        return f"({rendered})"

    @staticmethod
    def _chain_continues(expr, node, parent) -> bool:
        # a + b + c: inner additive operands of an additive parent stay bare
        if node_type(parent) != "BinaryOp":
            return False
        if parent.value not in ("ADD", "SUB") or expr.value not in ("ADD", "SUB"):
            return False
        return parent.value == "ADD" or parent.children[0] is node

    def _field_access(self, expr):
        scope = expr.children[0]
        if expr.value == "length":
            return f"{self.text(scope, expr)}の配列要素数"
        if is_this(scope):
            return f"自身の{expr.value}"
        return f"{self.text(scope, expr)}の{expr.value}"

    # ---------- string concatenation ----------

    @staticmethod
    def _concat_parts(expr) -> List:
        """Leaves of a left-or-right nested '+' chain, in source order."""
        parts, stack = [], [expr]
        while stack:
            current = stack.pop()
            if node_type(current) == "BinaryOp" and current.value == "ADD":
                stack.append(current.children[1])
                stack.append(current.children[0])
            else:
                parts.append(current)
        return parts

    def _contains_string_literal(self, expr) -> bool:
        return any(literal_kind(p) == "string" for p in self._concat_parts(expr))

    def _string_concatenation(self, expr) -> str:
        out = []
        for part in self._concat_parts(expr):
            kind = literal_kind(part)
            if kind == "string":
                out.append(convert_escapes(literal_body(part)))
            elif kind in ("integer", "double"):
                out.append("{" + value_string(part) + "}")
            elif is_name(part):
                out.append("{" + part.value + "}")
            elif node_type(part) == "Member":
                out.append("{" + self.text(part, expr) + "}")
            elif node_type(part) == "Call":
                out.append("{" + CallIdioms.translate(self, part) + "}")
            else:
                out.append("{" + java_source(part) + "}")
        return "「" + "".join(out) + "」"

    # ---------- object creation ----------

    def _create_object(self, expr) -> str:
        class_name = strip_generics(expr.value)
        args = expr.children

        if class_name == "Date":
            if not args:
                return "現在日時"
            if len(args) == 1:
                millis = value_string(args[0])
                return f"{millis if millis is not None else java_source(unwrap(args[0]))}ミリ秒日時"
        if class_name == "FileReader" and len(args) == 1:
            return f"ファイル{self.argument(args[0])}生成"

        rendered_args = ", ".join(self.argument(a) for a in args)
        if "Random" in class_name:
            return "乱数生成器"
        if "Scanner" in class_name:
            return "入力器"
        if "Calendar" in class_name:
            return "カレンダー生成"
        if class_name == "FlowLayout" and not rendered_args:
            return "FlowLayout"

        class_name = SWING_NAMES.get(class_name, class_name)
        if not rendered_args:
            return f"{class_name}生成"
        return f"{class_name}({rendered_args})生成"

    # ---------- idiom operand ----------

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
        if node_type(node) == "Call":
            return CallIdioms.translate(self, node)
        return java_source(node)
