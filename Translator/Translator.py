import logging
import re
from typing import List, Optional, Tuple

from Translator import LeafConverters
from Translator.ExpressionTranslator import DEFAULT_MAX_DEPTH, ExpressionTranslator
from Translator.IndentTable import IndentTable
from Translator.Items import (
    ANNOTATION, BLOCK_CLOSE, CLASS_CLOSE, CLASS_HEADER, CONSTRUCTOR_HEADER, END_OF_CONSTRUCT,
    ENTRY_POINT_HEADER, IF_HEADER, METHOD_HEADER, RETURN, STATEMENT, TRAILING_CLOSE, Item, reassemble,
)
from Translator.JavaSource import java_source, node_type, unwrap

logger = logging.getLogger(__name__)

INDENT_STR = "　"

# ---------------- naming helpers ----------------

EXCEPTION_NAMES = {
    "IOException": "ファイルエラー",
    "IllegalArgumentException": "不正な引数エラー",
    "Exception": "基本エラー",
}

CLASS_MEMBERS = {"FieldDecl", "MethodDecl", "ConstructorDecl", "ClassDecl", "InterfaceDecl", "Initializer"}


def simple_type_names(type_list: Optional[str]) -> List[str]:
    """'java.util.Map<K, V>, Serializable' -> ['Map', 'Serializable']."""
    text = type_list or ""
    while True:
        stripped = re.sub(r"<[^<>]*>", "", text)
        if stripped == text:
            break
        text = stripped
    return [t.strip().split(".")[-1] for t in text.split(",") if t.strip()]


def param_names(node) -> str:
    # Param.value == "type name"
    return ", ".join(p.value.split()[-1] for p in node.children_of("Param"))


def exception_name(type_text: str) -> str:
    return " | ".join(EXCEPTION_NAMES.get(t.strip(), t.strip()) for t in type_text.split("|"))


# ---------------- translator ----------------

class Translator:
    """
    AST -> Nadeshiko, line-aligned with the Java source.

    One depth-first walk both stamps the IndentTable and emits Items: a block
    owner stamps every line of its body before the statement on that line is
    converted, so leaf converters always read a final prefix.
    """

    def __init__(self, indent_str: str = INDENT_STR, max_expression_depth: int = DEFAULT_MAX_DEPTH):
        self.indent_str = indent_str
        self.expressions = ExpressionTranslator(max_expression_depth)
        self.indents = IndentTable()
        self.items: List[Item] = []

    def convert(self, ast, comments=None) -> List[Item]:
        self.indents.clear()
        self.items = []
        self._translate_node(ast)
        # comments read the finished table; they go first on ties
        comment_items: List[Item] = []
        for token in comments or []:
            comment_items.extend(LeafConverters.convert_comment(token, self.indents))
        return comment_items + self.items

    def translate(self, ast, source_lines: List[str], comments=None) -> str:
        return "\n".join(reassemble(self.convert(ast, comments), source_lines))

    def _add(self, line: Optional[int], text: str, priority: int = STATEMENT):
        self.items.append(Item(line, text, priority))

    def _extend(self, items):
        if items is None:
            return
        if isinstance(items, Item):
            self.items.append(items)
        else:
            self.items.extend(items)

    # ---------- центральный диспетчер ----------

    def _translate_node(self, node):
        if node is None:
            return
        dispatch = {
            "CompilationUnit": self._trans_compilation_unit,
            "Package": self._trans_package,
            "Import": self._trans_import,
            "ClassDecl": self._trans_class_decl,
            "InterfaceDecl": self._trans_class_decl,
            "FieldDecl": self._trans_field_decl,
            "MethodDecl": self._trans_method_decl,
            "ConstructorDecl": self._trans_constructor_decl,
            "Initializer": self._trans_initializer,
            "Block": self._trans_block,
            "LocalVarDecl": self._trans_local_var_decl,
            "ExprStmt": self._trans_expr_stmt,
            "ExplicitCtorCall": self._trans_explicit_ctor_call,
            "IfStatement": self._trans_if_statement,
            "ForStatement": self._trans_for_statement,
            "ForEachStatement": self._trans_for_each_statement,
            "WhileStatement": self._trans_while_statement,
            "DoWhileStatement": self._trans_do_while_statement,
            "SwitchStatement": self._trans_switch_statement,
            "TryStatement": self._trans_try_statement,
            "SyncStatement": self._trans_sync_statement,
            "Return": self._trans_return,
            "Throw": self._trans_throw,
            "Break": self._trans_break,
            "Continue": self._trans_continue,
            "EnumDecl": lambda n: None,
            "AnnotationTypeDecl": lambda n: None,
            "Empty": lambda n: None,
            "Assert": lambda n: None,
        }
        fn = dispatch.get(node.type, None)
        if fn:
            fn(node)
            return
        logger.debug("Узел %s не переводится (строка %s)", node.type, node.line)

    # ---------- обход блока ----------

    def _walk_block(self, block, indent: str):
        """Stamps gap lines and statement lines of ``block`` with ``indent`` and converts each statement."""
        last = block.line
        for stmt in block.children:
            if stmt.line is not None:
                self.indents.set_range(last + 1, stmt.line - 1, indent)
                self.indents.set(stmt.line, indent)
                last = max(last, stmt.end_line)
            self._translate_node(stmt)
        self.indents.set_range(last + 1, block.end_line - 1, indent)

    def _walk_branch(self, stmt, indent: str):
        if stmt.type == "Block":
            self._walk_block(stmt, indent)
        else:
            self.indents.set(stmt.line, indent)
            self._translate_node(stmt)

    @staticmethod
    def _loop_close_line(body) -> int:
        if body.type == "Block":
            if body.children:
                return body.children[-1].end_line + 1
            return body.line + 1
        return body.end_line + 1

    # ---------- верхний уровень ----------

    def _trans_compilation_unit(self, node):
        for child in node.children:
            self._translate_node(child)

    def _trans_package(self, node):
        self._extend(LeafConverters.convert_package(node, self.indents))

    def _trans_import(self, node):
        self._extend(LeafConverters.convert_import(node, self.indents))

    # ---------- класс ----------

    def _class_header(self, node) -> str:
        name = node.value
        ext = node.child("Extends")
        impl = node.child("Implements")
        parents = ", ".join(simple_type_names(ext.value)) if ext is not None else ""
        interfaces = ", ".join(simple_type_names(impl.value)) if impl is not None else ""

        if node.type == "InterfaceDecl":
            return f"抽象クラス {name}は {parents}を継承" if parents else f"抽象クラス {name}"
        if parents and interfaces:
            return f"クラス {name}は {parents}を継承、{interfaces}を実装"
        if interfaces:
            return f"クラス {name}は {interfaces}を実装"
        if parents:
            return f"クラス {name}は {parents}を継承"
        return f"クラス {name}"

    def _trans_class_decl(self, node):
        prefix = self.indents.get(node.line)

        for annotation in node.children_of("Annotation"):
            if annotation.value.split(".")[-1] == "RestController":
                self._add(annotation.line, self.indents.get(annotation.line) + "Web応答用。", ANNOTATION)

        self._add(node.line, prefix + self._class_header(node), CLASS_HEADER)
        self.indents.set_range(node.line + 1, node.end_line - 1, prefix + self.indent_str)

        for member in node.children:
            if member.type in CLASS_MEMBERS:
                self._translate_node(member)

        self._add(node.end_line, prefix + "ここまで。", CLASS_CLOSE)

    def _trans_field_decl(self, node):
        self._extend(LeafConverters.convert_declaration(self.expressions, node, self.indents, is_field=True))

    def _trans_initializer(self, node):
        block = node.children[0]
        self._walk_block(block, self.indents.get(node.line))

    # ---------- methods / ctors ----------

    def _trans_method_decl(self, node):
        line = node.line
        outer = self.indents.get(line)
        body = node.child("Block")
        if body is not None:
            self.indents.set_range(line, body.line - 1, outer)

        params = param_names(node)
        if node.value == "main":
            self._add(line, outer + "関数　メイン関数とは", ENTRY_POINT_HEADER)
        elif params:
            self._add(line, f"{outer}関数 {node.value}({params})とは", METHOD_HEADER)
        else:
            self._add(line, f"{outer}関数 {node.value}とは", METHOD_HEADER)

        if body is None:
            # abstract / interface method
            self._add(line, outer + "ここまで。", BLOCK_CLOSE)
            return
        self._walk_block(body, outer + self.indent_str)
        self._add(body.end_line, outer + "ここまで。", BLOCK_CLOSE)

    def _trans_constructor_decl(self, node):
        line = node.line
        outer = self.indents.get(line)
        body = node.child("Block")
        self.indents.set_range(line, body.line - 1, outer)

        params = param_names(node)
        header = f"{node.value}({params})生成時" if params else f"{node.value}生成時"
        self._add(line, outer + header, CONSTRUCTOR_HEADER)

        self._walk_block(body, outer + self.indent_str)
        self._add(body.end_line, outer + "ここまで。", BLOCK_CLOSE)

    def _trans_explicit_ctor_call(self, node):
        prefix = self.indents.get(node.line)
        owner = "自身のコンストラクタ" if node.value == "this" else "親のコンストラクタ"
        args = ", ".join(self.expressions.argument(a) for a in node.children)
        self._add(node.line, f"{prefix}{owner}({args})。" if args else f"{prefix}{owner}。")

    # ---------- simple statements ----------

    def _trans_block(self, node):
        self._walk_block(node, self.indents.get(node.line))

    def _trans_local_var_decl(self, node):
        self._extend(LeafConverters.convert_declaration(self.expressions, node, self.indents, is_field=False))

    def _trans_expr_stmt(self, node):
        self._extend(LeafConverters.convert_expression_statement(self.expressions, node, self.indents))

    def _trans_throw(self, node):
        self._extend(LeafConverters.convert_throw(self.expressions, node, self.indents))

    def _trans_break(self, node):
        self._add(node.line, self.indents.get(node.line) + "抜ける。")

    def _trans_continue(self, node):
        self._add(node.line, self.indents.get(node.line) + "続ける。")

    def _trans_return(self, node):
        prefix = self.indents.get(node.line)
        if not node.children:
            self._add(node.line, prefix + "戻す。", RETURN)
            return
        value = node.children[0]
        converted = self.expressions.translate(value, node)
        if converted is None:
            converted = java_source(value)
        elif node_type(unwrap(value)) == "New" and converted.endswith("生成"):
            converted = converted[:-len("生成")]
        self._add(node.line, f"{prefix}{converted}を戻す。", RETURN)

    # ---------- if / else-if / else ----------

    @staticmethod
    def _sole_return(stmt):
        if stmt.type == "Return":
            return stmt
        if stmt.type == "Block" and len(stmt.children) == 1 and stmt.children[0].type == "Return":
            return stmt.children[0]
        return None

    def _then_branch(self, stmt, inner: str):
        ret = self._sole_return(stmt)
        if ret is None:
            self._walk_branch(stmt, inner)
            return
        if stmt.type == "Block":
            self.indents.set_range(stmt.line + 1, stmt.end_line - 1, inner)
        self.indents.set(ret.line, inner)
        if ret.children:
            value = self.expressions.conditions.operand(ret.children[0])
            self._add(ret.line, f"{inner}{value}を戻す。", RETURN)
        else:
            self._add(ret.line, inner + "戻す。", RETURN)

    def _trans_if_statement(self, node):
        prefix = self.indents.get(node.line)
        inner = prefix + self.indent_str
        conditions = self.expressions.conditions

        self._add(node.line, f"{prefix}もし、({conditions.translate(node.value)})ならば", IF_HEADER)
        self._then_branch(node.children[0], inner)

        current = node
        while len(current.children) > 1:
            else_stmt = current.children[1]
            if else_stmt.type == "IfStatement":
                cond = conditions.translate(else_stmt.value)
                self._add(else_stmt.line, f"{prefix}違えば、もし、({cond})ならば", IF_HEADER)
                self._then_branch(else_stmt.children[0], inner)
                current = else_stmt
            else:
                self._add(else_stmt.line, prefix + "違えば", IF_HEADER)
                self._walk_branch(else_stmt, inner)
                break

        self._add(node.end_line, prefix + "ここまで。", END_OF_CONSTRUCT)

    # ---------- loops ----------

    @staticmethod
    def _for_start(init) -> Tuple[str, str]:
        if not init.children:
            return "", ""
        first = init.children[0]
        if first.type == "LocalVarDecl":
            declarator = first.child("Declarator")
            value = declarator.children[0] if declarator.children else None
            return declarator.value, java_source(value) if value is not None else ""
        if node_type(first) == "Assign":
            target, value = first.children
            return java_source(target), java_source(value)
        return "", ""

    def _trans_for_statement(self, node):
        prefix = self.indents.get(node.line)
        init, cond, update, body = node.children

        var, start = self._for_start(init)
        cond_text = self.expressions.conditions.translate(cond.children[0]) if cond.children else ""
        update_text = ", ".join(self.expressions.text(u, node) for u in update.children)
        if not var and not update_text:
            # for (;;) и for (; cond;) читаются как while
            self._add(node.line, f"{prefix}({cond_text or '真'})の間")
        else:
            start_text = f"{var}を{start}から" if var else ""
            self._add(node.line, f"{prefix}{start_text}({cond_text or '真'})まで{update_text}を繰り返す")

        self._walk_branch(body, prefix + self.indent_str)
        self._add(self._loop_close_line(body), prefix + "ここまで。", BLOCK_CLOSE)

    def _trans_for_each_statement(self, node):
        prefix = self.indents.get(node.line)
        param, iterable, body = node.children

        var = param.value.split()[-1]
        collection = self.expressions.text(iterable, node)
        self._add(node.line, f"{prefix}{collection}の各要素を{var}へ取り出して繰り返す")

        self._walk_branch(body, prefix + self.indent_str)
        self._add(self._loop_close_line(body), prefix + "ここまで。", BLOCK_CLOSE)

    def _trans_while_statement(self, node):
        prefix = self.indents.get(node.line)
        condition, body = node.children

        cond_text = self.expressions.conditions.translate(condition)
        suffix = "間" if node_type(condition) == "Call" else "の間"
        self._add(node.line, f"{prefix}({cond_text}){suffix}")

        self._walk_branch(body, prefix + self.indent_str)
        self._add(self._loop_close_line(body), prefix + "ここまで。", BLOCK_CLOSE)

    def _trans_do_while_statement(self, node):
        # постусловного цикла в なでしこ нет: тело идёт на том же уровне
        body = node.children[1]
        self._walk_branch(body, self.indents.get(node.line))

    def _trans_sync_statement(self, node):
        self._walk_branch(node.children[1], self.indents.get(node.line))

    # ---------- switch ----------

    def _trans_switch_statement(self, node):
        prefix = self.indents.get(node.line)
        case_indent = prefix + self.indent_str
        stmt_indent = case_indent + self.indent_str

        self._add(node.line, f"{prefix}{java_source(node.value)}で条件分岐：")

        for entry in node.children:
            if entry.type == "DefaultLabel":
                self._add(entry.line, case_indent + "それ以外ならば：")
            else:
                for label in entry.child("Labels").children:
                    self._add(entry.line, f"{case_indent}{java_source(label)}ならば：")

            last = entry.line
            for stmt in entry.children:
                if stmt.type == "Labels":
                    continue
                self.indents.set_range(last + 1, stmt.line - 1, stmt_indent)
                self._walk_branch(stmt, stmt_indent)
                last = max(last, stmt.end_line)
            self.indents.set_range(last + 1, entry.end_line - 1, stmt_indent)

        self._add(node.end_line + 1, prefix + "ここまで。", TRAILING_CLOSE)

    # ---------- try / catch / finally ----------

    def _resources(self, resources, indent: str):
        for resource in resources.children:
            if resource.type != "LocalVarDecl":
                continue
            for declarator in resource.children_of("Declarator"):
                if not declarator.children:
                    continue
                text = LeafConverters.initializer_text(
                    self.expressions, declarator.value, declarator.children[0], declarator)
                if text is not None:
                    self._add(declarator.line, indent + text)

    def _trans_try_statement(self, node):
        prefix = self.indents.get(node.line)
        inner = prefix + self.indent_str
        try_block = node.child("Block")

        self._add(try_block.line, prefix + "エラー監視")
        resources = node.child("Resources")
        if resources is not None:
            self._resources(resources, inner)
        self._walk_block(try_block, inner)

        for catch in node.children_of("Catch"):
            types, var = catch.value.rsplit(" ", 1)
            self._add(catch.line, f"{prefix}エラー {var} が {exception_name(types)} ならば")
            self._walk_block(catch.children[0], inner)

        final = node.child("Finally")
        if final is not None:
            block = final.children[0]
            self._add(block.line, prefix + "後処理")
            self._walk_block(block, inner)

        self._add(node.end_line + 1, prefix + "ここまで。", TRAILING_CLOSE)
