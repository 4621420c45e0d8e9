from typing import List, Optional
from Token import Token


class JavaSyntaxError(SyntaxError):
    """Parse failure with the position of the offending token."""

    def __init__(self, message, token=None):
        super().__init__(message)
        self.line = getattr(token, "line", None)
        self.column = getattr(token, "column", None)
        self.lineno = self.line

    def __str__(self):
        if self.line is not None:
            return f"{self.msg} (line {self.line}, column {self.column})"
        return self.msg


class ASTNode:
    def __init__(self, type_, value=None, children=None, token=None):
        self.type = type_
        self.value = value
        self.children = children or []
        self.token = token
        if token is not None:
            self.line = getattr(token, "line", None)
            self.column = getattr(token, "column", None)
        else:
            inherited_token = None
            for ch in self.children:
                if isinstance(ch, ASTNode) and getattr(ch, "token", None) is not None:
                    inherited_token = ch.token
                    break
            if inherited_token is not None:
                self.token = inherited_token
                self.line = getattr(inherited_token, "line", None)
                self.column = getattr(inherited_token, "column", None)
            else:
                self.line = None
                self.column = None
        self.end_line = self.line

    def child(self, type_):
        for ch in self.children:
            if isinstance(ch, ASTNode) and ch.type == type_:
                return ch
        return None

    def children_of(self, *types):
        return [ch for ch in self.children if isinstance(ch, ASTNode) and ch.type in types]

    def __repr__(self, level=0):
        indent = "  " * level
        s = f"{indent}{self.type}"
        if self.value is not None:
            if isinstance(self.value, ASTNode):
                s += ":\n" + self.value.__repr__(level + 2)
            else:
                s += f": {self.value}"
        if self.line is not None:
            s += f"  [{self.line}-{self.end_line}]"
        for child in self.children:
            if isinstance(child, ASTNode):
                s += "\n" + child.__repr__(level + 1)
            else:
                s += "\n" + ("  " * (level + 1)) + repr(child)
        return s


class SimpleJavaParser:
    MODIFIERS = {"PUBLIC", "PRIVATE", "PROTECTED", "STATIC", "FINAL", "ABSTRACT",
                 "NATIVE", "SYNCHRONIZED", "TRANSIENT", "VOLATILE", "STRICTFP"}
    MEMBER_MODIFIERS = MODIFIERS | {"DEFAULT"}
    TYPE_KEYWORDS = {"INT", "FLOAT", "DOUBLE", "BOOLEAN", "CHAR", "VOID", "LONG", "SHORT", "BYTE"}
    LITERALS = {"NUMBER", "STRING", "CHAR", "TEXT_BLOCK", "TRUE", "FALSE", "NULL"}
    PRECEDENCE = {
        "MUL": 60, "DIV": 60, "MOD": 60,
        "ADD": 50, "SUB": 50,
        "LSHIFT": 45, "RSHIFT": 45, "URSHIFT": 45,
        "GT": 40, "LT": 40, "GE": 40, "LE": 40, "INSTANCEOF": 40,
        "EQUAL": 30, "NOTEQUAL": 30,
        "BITAND": 27, "CARET": 26, "BITOR": 25,
        "AND": 20, "OR": 10,
    }
    ASSIGN_OPS = {
        "ASSIGN", "ADD_ASSIGN", "SUB_ASSIGN", "MUL_ASSIGN", "DIV_ASSIGN", "MOD_ASSIGN",
        "AND_ASSIGN", "OR_ASSIGN", "XOR_ASSIGN", "LSHIFT_ASSIGN", "RSHIFT_ASSIGN", "URSHIFT_ASSIGN",
    }
    # токены, с которых может начинаться операнд после приведения типа
    CAST_FOLLOWERS = {"IDENTIFIER", "THIS", "SUPER", "NEW", "LPAREN", "BANG", "TILDE"} | LITERALS

    def __init__(self, tokens):
        self.tokens = tokens
        self.current = self.tokens.LT(1)
        self._class_names: List[str] = []
        self._no_lambda = False

    # --------------- utilities ---------------
    def advance(self):
        self.tokens.consume()
        self.current = self.tokens.LT(1)

    def match(self, expected_type: str):
        tok = self.current
        if tok.type == Token.EOF and expected_type != Token.EOF:
            raise JavaSyntaxError(f"Ожидался {expected_type}, получен EOF", tok)
        if tok.type != expected_type:
            raise JavaSyntaxError(f"Ожидался {expected_type}, получен {tok.type} '{tok.text}'", tok)
        self.advance()
        return tok

    def accept(self, expected_type: str) -> bool:
        if self.current.type == expected_type:
            self.advance()
            return True
        return False

    def peek_type(self, k=1):
        return self.tokens.LT(k).type

    def _finish(self, node: ASTNode, start_token) -> ASTNode:
        """Stamps the node with the span from start_token to the last consumed token."""
        if start_token is not None:
            node.line = start_token.line
            node.column = start_token.column
        last = self.tokens.LB()
        node.end_line = last.end_line if last is not None else node.line
        if node.end_line is None or (node.line is not None and node.end_line < node.line):
            node.end_line = node.line
        return node

    def _maybe_generic_suffix(self, base_type: str) -> str:
        """
        'List < String , Integer >' -> 'List<String, Integer>'.
        """
        if self.current.type != "LT":
            return base_type
        depth = 0
        out = [base_type]
        while self.current.type != Token.EOF:
            t = self.current
            if t.type == "LT":
                depth += 1; out.append("<")
            elif t.type == "GT":
                depth -= 1; out.append(">")
            elif t.type == "RSHIFT":
                depth -= 2; out.append(">>")
            elif t.type == "URSHIFT":
                depth -= 3; out.append(">>>")
            elif t.type == "COMMA":
                out.append(", ")
            elif t.type in ("EXTENDS", "SUPER"):
                out.append(f" {t.text} ")
            else:
                out.append(t.text)
            self.advance()
            if depth <= 0:
                break
        return "".join(out)

    def _skip_balanced(self, open_type: str, close_type: str) -> str:
        """Consumes a balanced group starting at the current open token; returns its text."""
        start = self.match(open_type)
        depth = 1
        parts = [start.text]
        while depth > 0:
            t = self.current
            if t.type == Token.EOF:
                raise JavaSyntaxError(f"Не закрыта скобка '{start.text}'", start)
            if t.type == open_type:
                depth += 1
            elif t.type == close_type:
                depth -= 1
            parts.append(t.text)
            self.advance()
        return " ".join(parts)

    # --------------- lookahead ---------------
    def _scan_balanced(self, i: int, open_type: str, close_type: str) -> Optional[int]:
        depth = 0
        while True:
            t = self.peek_type(i)
            if t == Token.EOF:
                return None
            if t == open_type:
                depth += 1
            elif t == close_type:
                depth -= 1
                if depth == 0:
                    return i + 1
            i += 1

    def _scan_type_args(self, i: int) -> Optional[int]:
        if self.peek_type(i) != "LT":
            return i
        depth = 0
        while True:
            t = self.peek_type(i)
            if t == "LT":
                depth += 1
            elif t == "GT":
                depth -= 1
            elif t == "RSHIFT":
                depth -= 2
            elif t == "URSHIFT":
                depth -= 3
            elif t not in ("IDENTIFIER", "COMMA", "QUESTION", "EXTENDS", "SUPER", "DOT",
                           "LBRACK", "RBRACK", "BITAND") and t not in self.TYPE_KEYWORDS:
                return None
            i += 1
            if depth <= 0:
                return i if depth == 0 else None

    def _scan_type(self, i: int) -> Optional[int]:
        """Index just past a type that starts at LT(i), or None when there is no type there."""
        t = self.peek_type(i)
        if t in self.TYPE_KEYWORDS:
            i += 1
        elif t == "IDENTIFIER":
            i = self._scan_type_args(i + 1)
            while i is not None and self.peek_type(i) == "DOT" and self.peek_type(i + 1) == "IDENTIFIER":
                i = self._scan_type_args(i + 2)
            if i is None:
                return None
        else:
            return None
        while self.peek_type(i) == "LBRACK" and self.peek_type(i + 1) == "RBRACK":
            i += 2
        return i

    def _scan_annotation(self, i: int) -> Optional[int]:
        # @Name(.pkg)*(args)?
        if self.peek_type(i + 1) != "IDENTIFIER":
            return None
        i += 2
        while self.peek_type(i) == "DOT" and self.peek_type(i + 1) == "IDENTIFIER":
            i += 2
        if self.peek_type(i) == "LPAREN":
            return self._scan_balanced(i, "LPAREN", "RPAREN")
        return i

    def _skip_modifiers_ahead(self, i: int, allowed) -> Optional[int]:
        while True:
            t = self.peek_type(i)
            if t in allowed:
                i += 1
            elif t == "AT" and self.peek_type(i + 1) != "INTERFACE":
                i = self._scan_annotation(i)
                if i is None:
                    return None
            else:
                return i

    def _looks_like_type_decl(self) -> bool:
        i = self._skip_modifiers_ahead(1, self.MEMBER_MODIFIERS)
        if i is None:
            return False
        t = self.peek_type(i)
        if t == "AT" and self.peek_type(i + 1) == "INTERFACE":
            return True
        return t in ("CLASS", "INTERFACE", "ENUM")

    def _looks_like_local_decl_start(self) -> bool:
        i = self._skip_modifiers_ahead(1, {"FINAL"})
        if i is None:
            return False
        j = self._scan_type(i)
        if j is None:
            return False
        return (self.peek_type(j) == "IDENTIFIER"
                and self.peek_type(j + 1) in ("ASSIGN", "SEMI", "COMMA", "COLON", "LBRACK"))

    def _looks_like_foreach(self) -> bool:
        i = self._skip_modifiers_ahead(1, {"FINAL"})
        if i is None:
            return False
        j = self._scan_type(i)
        return j is not None and self.peek_type(j) == "IDENTIFIER" and self.peek_type(j + 1) == "COLON"

    def _looks_like_cast(self) -> bool:
        # (int) x, (String) o, (List<String>) o
        j = self._scan_type(2)
        if j is None or self.peek_type(j) != "RPAREN":
            return False
        if self.peek_type(2) in self.TYPE_KEYWORDS:
            return True
        return self.peek_type(j + 1) in self.CAST_FOLLOWERS

    def _is_lambda_parens(self) -> bool:
        if self._no_lambda:
            return False
        j = self._scan_balanced(1, "LPAREN", "RPAREN")
        return j is not None and self.peek_type(j) == "ARROW"

    def _is_constructor_start(self) -> bool:
        if not self._class_names:
            return False
        return (self.current.type == "IDENTIFIER"
                and self.current.text == self._class_names[-1]
                and self.peek_type(2) == "LPAREN")

    # --------------- entry ---------------
    def parse(self):
        try:
            return self.parse_compilation_unit()
        except RecursionError:
            # спуск по вложенным скобкам упирается в стек интерпретатора
            raise JavaSyntaxError("Слишком глубокая вложенность конструкций", self.current) from None

    def parse_compilation_unit(self):
        first = self.current
        children = []
        while self.current.type != Token.EOF:
            if self.current.type == "PACKAGE":
                children.append(self.parse_package_declaration())
            elif self.current.type == "IMPORT":
                children.append(self.parse_import_declaration())
            elif self.current.type == "SEMI":
                self.advance()
            elif self._looks_like_type_decl():
                children.append(self.parse_type_declaration())
            else:
                raise JavaSyntaxError(f"Неожиданный токен '{self.current.text}' на верхнем уровне", self.current)
        node = ASTNode("CompilationUnit", children=children)
        node.line = 1
        node.column = 0
        last = self.tokens.LB()
        node.end_line = max(first.line or 1, last.end_line if last is not None else 1)
        return node

    def parse_qualified_name(self, allow_wildcard=False) -> str:
        parts = [self.match("IDENTIFIER").text]
        while self.current.type == "DOT":
            self.advance()
            if allow_wildcard and self.current.type == "MUL":
                self.advance()
                parts.append("*")
                break
            parts.append(self.match("IDENTIFIER").text)
        return ".".join(parts)

    def parse_package_declaration(self):
        start = self.match("PACKAGE")
        name = self.parse_qualified_name()
        self.match("SEMI")
        return self._finish(ASTNode("Package", name, token=start), start)

    def parse_import_declaration(self):
        start = self.match("IMPORT")
        children = []
        if self.accept("STATIC"):
            children.append(ASTNode("Modifiers", "STATIC"))
        name = self.parse_qualified_name(allow_wildcard=True)
        self.match("SEMI")
        return self._finish(ASTNode("Import", name, children, token=start), start)

    # --------------- type / class ---------------
    def parse_modifiers(self, allowed):
        modifiers, annotations = [], []
        while True:
            if self.current.type == "AT" and self.peek_type(2) != "INTERFACE":
                annotations.append(self.parse_annotation())
            elif self.current.type in allowed:
                modifiers.append(self.current.type)
                self.advance()
            else:
                return modifiers, annotations

    def parse_annotation(self):
        start = self.match("AT")
        name = self.parse_qualified_name()
        if self.current.type == "LPAREN":
            self._skip_balanced("LPAREN", "RPAREN")
        return self._finish(ASTNode("Annotation", name, token=start), start)

    def _decl_prefix(self, modifiers, annotations):
        prefix = []
        if modifiers:
            prefix.append(ASTNode("Modifiers", ",".join(modifiers)))
        return prefix + annotations

    def parse_type_declaration(self):
        start = self.current
        modifiers, annotations = self.parse_modifiers(self.MEMBER_MODIFIERS)
        if self.current.type == "CLASS":
            return self.parse_class_declaration(start, modifiers, annotations, "ClassDecl")
        if self.current.type == "INTERFACE":
            return self.parse_class_declaration(start, modifiers, annotations, "InterfaceDecl")
        if self.current.type == "ENUM":
            return self.parse_skipped_declaration(start, "EnumDecl")
        if self.current.type == "AT":
            self.advance()
            return self.parse_skipped_declaration(start, "AnnotationTypeDecl")
        raise JavaSyntaxError(f"Ожидалось объявление типа, получен {self.current.type}", self.current)

    def parse_skipped_declaration(self, start, kind):
        # enum / @interface: only the extent is kept
        self.advance()
        name_tok = self.match("IDENTIFIER")
        while self.current.type not in ("LBRACE", Token.EOF):
            self.advance()
        self._skip_balanced("LBRACE", "RBRACE")
        return self._finish(ASTNode(kind, name_tok.text, token=name_tok), start)

    def parse_type_list(self) -> List[str]:
        types = [self.parse_type()]
        while self.accept("COMMA"):
            types.append(self.parse_type())
        return types

    def parse_class_declaration(self, start, modifiers, annotations, kind):
        self.advance()  # class / interface
        class_token = self.match("IDENTIFIER")
        class_name = class_token.text
        self._maybe_generic_suffix("")

        children = self._decl_prefix(modifiers, annotations)
        if self.accept("EXTENDS"):
            children.append(ASTNode("Extends", ", ".join(self.parse_type_list())))
        if self.accept("IMPLEMENTS"):
            children.append(ASTNode("Implements", ", ".join(self.parse_type_list())))
        if self.current.type == "IDENTIFIER" and self.current.text == "permits":
            self.advance()
            self.parse_type_list()

        self._class_names.append(class_name)
        try:
            members = self.parse_class_body(class_name)
        finally:
            self._class_names.pop()

        node = ASTNode(kind, class_name, children + members, token=class_token)
        return self._finish(node, start)

    def parse_class_body(self, class_name=""):
        self.match("LBRACE")
        members = []
        while self.current.type not in ("RBRACE", Token.EOF):
            member = self.parse_member()
            if member is not None:
                members.append(member)
        if self.current.type == Token.EOF:
            raise JavaSyntaxError(f"Unclosed class body for class {class_name}: reached EOF without '}}'", self.current)
        self.match("RBRACE")
        return members

    def parse_member(self):
        if self.accept("SEMI"):
            return None
        start = self.current
        if self.current.type == "LBRACE" or (self.current.type == "STATIC" and self.peek_type(2) == "LBRACE"):
            is_static = self.accept("STATIC")
            block = self.parse_block()
            return self._finish(ASTNode("Initializer", "static" if is_static else None, [block]), start)
        if self._looks_like_type_decl():
            return self.parse_type_declaration()

        modifiers, annotations = self.parse_modifiers(self.MEMBER_MODIFIERS)
        if self.current.type == "LT":
            self._maybe_generic_suffix("")  # <T> void foo()
        if self._is_constructor_start():
            return self.parse_constructor_declaration(start, modifiers, annotations)
        member_type = self.parse_type()
        if self.current.type == "IDENTIFIER" and self.peek_type(2) == "LPAREN":
            return self.parse_method_declaration(start, modifiers, annotations, member_type)
        return self.parse_field_declaration(start, modifiers, annotations, member_type)

    def _skip_throws(self):
        if self.accept("THROWS"):
            self.parse_type_list()

    def parse_constructor_declaration(self, start, modifiers, annotations):
        name_token = self.match("IDENTIFIER")
        self.match("LPAREN")
        params = self.parse_parameter_list()
        self.match("RPAREN")
        self._skip_throws()
        body = self.parse_block()
        children = self._decl_prefix(modifiers, annotations) + params + [body]
        node = ASTNode("ConstructorDecl", name_token.text, children, token=name_token)
        return self._finish(node, start)

    def parse_method_declaration(self, start, modifiers, annotations, ret_type):
        name_token = self.match("IDENTIFIER")
        self.match("LPAREN")
        params = self.parse_parameter_list()
        self.match("RPAREN")
        while self.current.type == "LBRACK" and self.peek_type(2) == "RBRACK":
            self.advance(); self.advance()
        self._skip_throws()

        children = self._decl_prefix(modifiers, annotations) + params
        if self.current.type == "LBRACE":
            children.append(self.parse_block())
        else:
            if self.accept("DEFAULT"):  # annotation member default
                self.parse_variable_initializer()
            self.match("SEMI")
        node = ASTNode("MethodDecl", name_token.text, children, token=name_token)
        return self._finish(node, start)

    def parse_parameter_list(self):
        params = []
        if self.current.type == "RPAREN":
            return params
        while True:
            start = self.current
            self.parse_modifiers({"FINAL"})
            p_type = self.parse_type()
            if self.accept("ELLIPSIS"):
                p_type += "..."
            name_token = self.match("IDENTIFIER") if self.current.type != "THIS" else self.match("THIS")
            while self.current.type == "LBRACK" and self.peek_type(2) == "RBRACK":
                self.advance(); self.advance()
                p_type += "[]"
            params.append(self._finish(ASTNode("Param", f"{p_type} {name_token.text}", token=name_token), start))
            if not self.accept("COMMA"):
                return params

    # --------------- types ---------------
    def parse_class_type(self) -> str:
        if self.current.type in self.TYPE_KEYWORDS:
            name = self.current.text
            self.advance()
            return name
        name = self._maybe_generic_suffix(self.match("IDENTIFIER").text)
        while self.current.type == "DOT" and self.peek_type(2) == "IDENTIFIER":
            self.advance()
            name += "." + self.current.text
            self.advance()
            name = self._maybe_generic_suffix(name)
        return name

    def parse_type(self) -> str:
        if self.current.type not in self.TYPE_KEYWORDS and self.current.type != "IDENTIFIER":
            raise JavaSyntaxError(f"Ожидался тип, получен {self.current.type} '{self.current.text}'", self.current)
        type_name = self.parse_class_type()
        while self.current.type == "LBRACK" and self.peek_type(2) == "RBRACK":
            self.advance(); self.advance()
            type_name += "[]"
        return type_name

    # --------------- fields / locals ---------------
    def parse_declarators(self):
        decls = []
        while True:
            name_token = self.match("IDENTIFIER")
            while self.current.type == "LBRACK" and self.peek_type(2) == "RBRACK":
                self.advance(); self.advance()
            init = None
            if self.accept("ASSIGN"):
                init = self.parse_variable_initializer()
            decl = ASTNode("Declarator", name_token.text, [init] if init is not None else [], token=name_token)
            decls.append(self._finish(decl, name_token))
            if not self.accept("COMMA"):
                return decls

    def parse_variable_initializer(self):
        if self.current.type == "LBRACE":
            return self.parse_array_initializer()
        return self.parse_expression()

    def parse_array_initializer(self):
        start = self.match("LBRACE")
        elems = []
        while self.current.type != "RBRACE":
            elems.append(self.parse_variable_initializer())
            if not self.accept("COMMA"):
                break
        self.match("RBRACE")
        return self._finish(ASTNode("ArrayInit", None, elems, token=start), start)

    def parse_field_declaration(self, start, modifiers, annotations, field_type):
        decls = self.parse_declarators()
        self.match("SEMI")
        node = ASTNode("FieldDecl", field_type, self._decl_prefix(modifiers, annotations) + decls)
        return self._finish(node, start)

    def parse_local_variable_declaration(self, with_semi=True):
        start = self.current
        modifiers, annotations = self.parse_modifiers({"FINAL"})
        var_type = self.parse_type()
        decls = self.parse_declarators()
        if with_semi:
            self.match("SEMI")
        node = ASTNode("LocalVarDecl", var_type, self._decl_prefix(modifiers, annotations) + decls)
        return self._finish(node, start)

    # --------------- blocks / statements ---------------
    def parse_block(self):
        start = self.match("LBRACE")
        stmts = []
        while self.current.type not in ("RBRACE", Token.EOF):
            stmts.append(self.parse_statement())
        if self.current.type == Token.EOF:
            raise JavaSyntaxError("Reached EOF while parsing a block: missing '}'", start)
        self.advance()  # RBRACE
        return self._finish(ASTNode("Block", None, stmts, token=start), start)

    def parse_statement(self):
        start = self.current
        t = start.type

        if t == "LBRACE":
            return self.parse_block()
        if t == "SEMI":
            self.advance()
            return self._finish(ASTNode("Empty", token=start), start)
        if t == "IF":
            return self.parse_if_statement()
        if t == "SWITCH":
            return self.parse_switch_statement()
        if t == "FOR":
            return self.parse_for_statement()
        if t == "WHILE":
            return self.parse_while_statement()
        if t == "DO":
            return self.parse_do_while_statement()
        if t == "TRY":
            return self.parse_try_statement()
        if t in ("BREAK", "CONTINUE"):
            self.advance()
            if self.current.type == "IDENTIFIER":  # label
                self.advance()
            self.match("SEMI")
            return self._finish(ASTNode("Break" if t == "BREAK" else "Continue", token=start), start)
        if t == "RETURN":
            self.advance()
            expr = None
            if self.current.type != "SEMI":
                expr = self.parse_expression()
            self.match("SEMI")
            return self._finish(ASTNode("Return", children=[expr] if expr else [], token=start), start)
        if t == "THROW":
            self.advance()
            expr = self.parse_expression()
            self.match("SEMI")
            return self._finish(ASTNode("Throw", None, [expr], token=start), start)
        if t == "SYNCHRONIZED" and self.peek_type(2) == "LPAREN":
            self.advance()
            self.match("LPAREN")
            lock = self.parse_expression()
            self.match("RPAREN")
            body = self.parse_block()
            return self._finish(ASTNode("SyncStatement", None, [lock, body], token=start), start)
        if t == "ASSERT":
            self.advance()
            cond = self.parse_expression()
            if self.accept("COLON"):
                self.parse_expression()
            self.match("SEMI")
            return self._finish(ASTNode("Assert", None, [cond], token=start), start)
        if t in ("THIS", "SUPER") and self.peek_type(2) == "LPAREN":
            self.advance()
            args = self.parse_arguments()
            self.match("SEMI")
            return self._finish(ASTNode("ExplicitCtorCall", start.text, args, token=start), start)
        if t == "IDENTIFIER" and self.peek_type(2) == "COLON":
            # label: statement
            self.advance(); self.advance()
            return self.parse_statement()
        if self._looks_like_type_decl():
            return self.parse_type_declaration()
        if self._looks_like_local_decl_start():
            return self.parse_local_variable_declaration()

        expr = self.parse_expression()
        self.match("SEMI")
        return self._finish(ASTNode("ExprStmt", None, [expr], token=start), start)

    def parse_if_statement(self):
        start = self.match("IF")
        self.match("LPAREN")
        cond = self.parse_expression()
        self.match("RPAREN")
        children = [self.parse_statement()]
        if self.accept("ELSE"):
            children.append(self.parse_statement())
        return self._finish(ASTNode("IfStatement", cond, children, token=start), start)

    # --------------- try/catch/finally ---------------
    def parse_try_statement(self):
        start = self.match("TRY")
        children = []
        if self.current.type == "LPAREN":
            res_start = self.match("LPAREN")
            resources = []
            while self.current.type != "RPAREN":
                if self._looks_like_local_decl_start():
                    resources.append(self.parse_local_variable_declaration(with_semi=False))
                else:
                    resources.append(self.parse_expression())
                if not self.accept("SEMI"):
                    break
            self.match("RPAREN")
            children.append(self._finish(ASTNode("Resources", None, resources, token=res_start), res_start))

        children.append(self.parse_block())

        while self.current.type == "CATCH":
            catch_start = self.match("CATCH")
            self.match("LPAREN")
            self.parse_modifiers({"FINAL"})
            ex_types = [self.parse_type()]
            while self.accept("BITOR"):
                ex_types.append(self.parse_type())
            var_name = self.match("IDENTIFIER").text
            self.match("RPAREN")
            block = self.parse_block()
            catch = ASTNode("Catch", f"{' | '.join(ex_types)} {var_name}", [block], token=catch_start)
            children.append(self._finish(catch, catch_start))

        if self.current.type == "FINALLY":
            finally_start = self.match("FINALLY")
            block = self.parse_block()
            children.append(self._finish(ASTNode("Finally", None, [block], token=finally_start), finally_start))

        has_handlers = any(c.type in ("Catch", "Finally") for c in children)
        if not has_handlers and children[0].type != "Resources":
            raise JavaSyntaxError("'try' без 'catch' или 'finally'", start)
        return self._finish(ASTNode("TryStatement", None, children, token=start), start)

    # --------------- while / do-while / for ---------------
    def parse_while_statement(self):
        start = self.match("WHILE")
        self.match("LPAREN")
        condition = self.parse_expression()
        self.match("RPAREN")
        body = self.parse_statement()
        return self._finish(ASTNode("WhileStatement", None, [condition, body], token=start), start)

    def parse_do_while_statement(self):
        start = self.match("DO")
        body = self.parse_statement()
        self.match("WHILE")
        self.match("LPAREN")
        condition = self.parse_expression()
        self.match("RPAREN")
        self.match("SEMI")
        return self._finish(ASTNode("DoWhileStatement", None, [condition, body], token=start), start)

    def parse_expression_list(self, terminator: str):
        exprs = []
        if self.current.type == terminator:
            return exprs
        exprs.append(self.parse_expression())
        while self.accept("COMMA"):
            exprs.append(self.parse_expression())
        return exprs

    def parse_for_statement(self):
        start = self.match("FOR")
        self.match("LPAREN")

        if self._looks_like_foreach():
            param_start = self.current
            self.parse_modifiers({"FINAL"})
            var_type = self.parse_type()
            name_token = self.match("IDENTIFIER")
            param = self._finish(ASTNode("Param", f"{var_type} {name_token.text}", token=name_token), param_start)
            self.match("COLON")
            iterable = self.parse_expression()
            self.match("RPAREN")
            body = self.parse_statement()
            return self._finish(ASTNode("ForEachStatement", None, [param, iterable, body], token=start), start)

        init_start = self.current
        if self.current.type == "SEMI":
            init = []
        elif self._looks_like_local_decl_start():
            init = [self.parse_local_variable_declaration(with_semi=False)]
        else:
            init = self.parse_expression_list("SEMI")
        init_node = ASTNode("ForInit", None, init, token=init_start)
        self.match("SEMI")
        cond = [] if self.current.type == "SEMI" else [self.parse_expression()]
        self.match("SEMI")
        updates = self.parse_expression_list("RPAREN")
        self.match("RPAREN")
        body = self.parse_statement()
        children = [init_node, ASTNode("ForCond", None, cond), ASTNode("ForUpdate", None, updates), body]
        return self._finish(ASTNode("ForStatement", None, children, token=start), start)

    # --------------- switch ---------------
    def parse_switch_statement(self):
        start = self.match("SWITCH")
        self.match("LPAREN")
        selector = self.parse_expression()
        self.match("RPAREN")
        self.match("LBRACE")
        entries = []
        while self.current.type not in ("RBRACE", Token.EOF):
            entries.append(self.parse_switch_entry())
        self.match("RBRACE")
        return self._finish(ASTNode("SwitchStatement", selector, entries, token=start), start)

    def parse_switch_entry(self):
        start = self.current
        labels = []
        if self.accept("DEFAULT"):
            kind = "DefaultLabel"
        else:
            self.match("CASE")
            kind = "CaseLabel"
            self._no_lambda = True
            try:
                labels = self.parse_expression_list("COLON")
            finally:
                self._no_lambda = False

        stmts = []
        if self.accept("ARROW"):
            if self.current.type in ("LBRACE", "THROW"):
                stmts.append(self.parse_statement())
            else:
                expr_start = self.current
                expr = self.parse_expression()
                self.match("SEMI")
                stmts.append(self._finish(ASTNode("ExprStmt", None, [expr], token=expr_start), expr_start))
        else:
            self.match("COLON")
            while self.current.type not in ("CASE", "DEFAULT", "RBRACE", Token.EOF):
                stmts.append(self.parse_statement())
        node = ASTNode(kind, None, [ASTNode("Labels", None, labels)] + stmts, token=start)
        return self._finish(node, start)

    # --------------- expressions ---------------
    def parse_expression(self):
        start = self.current
        left = self.parse_ternary()
        if self.current.type in self.ASSIGN_OPS:
            op = self.current.type
            self.advance()
            right = self.parse_expression()
            return self._finish(ASTNode("Assign", op, [left, right]), start)
        return left

    def parse_ternary(self):
        start = self.current
        cond = self.parse_binary(0)
        if self.accept("QUESTION"):
            texpr = self.parse_expression()
            self.match("COLON")
            fexpr = self.parse_ternary()
            return self._finish(ASTNode("Ternary", None, [cond, texpr, fexpr]), start)
        return cond

    def parse_binary(self, min_prec=0):
        start = self.current
        left = self.parse_unary()
        while True:
            op_type = self.current.type
            prec = self.PRECEDENCE.get(op_type, -1)
            if prec < 0 or prec < min_prec:
                break
            self.advance()
            if op_type == "INSTANCEOF":
                self.parse_modifiers({"FINAL"})
                children = [left]
                type_name = self.parse_type()
                if self.current.type == "IDENTIFIER":
                    bind = self.current
                    self.advance()
                    children.append(ASTNode("Identifier", bind.text, token=bind))
                left = self._finish(ASTNode("InstanceOf", type_name, children), start)
                continue
            right = self.parse_binary(prec + 1)
            left = self._finish(ASTNode("BinaryOp", op_type, [left, right]), start)
        return left

    def parse_unary(self):
        start = self.current
        if start.type in ("INC", "DEC", "BANG", "ADD", "SUB", "TILDE"):
            self.advance()
            operand = self.parse_unary()
            return self._finish(ASTNode("PrefixOp", start.type, [operand], token=start), start)
        if start.type == "LPAREN":
            if self._is_lambda_parens():
                return self.parse_lambda()
            if self._looks_like_cast():
                self.advance()
                type_name = self.parse_type()
                self.match("RPAREN")
                operand = self.parse_unary()
                return self._finish(ASTNode("Cast", type_name, [operand], token=start), start)
        return self.parse_postfix(self.parse_primary(), start)

    def parse_lambda(self):
        start = self.current
        if self.current.type == "IDENTIFIER":
            params = self.current.text
            self.advance()
        else:
            params = self._skip_balanced("LPAREN", "RPAREN")
        self.match("ARROW")
        body = self.parse_block() if self.current.type == "LBRACE" else self.parse_expression()
        return self._finish(ASTNode("Lambda", params, [body], token=start), start)

    def parse_arguments(self):
        self.match("LPAREN")
        args = self.parse_expression_list("RPAREN")
        self.match("RPAREN")
        return args

    def parse_primary(self):
        tok = self.current

        if tok.type in self.LITERALS:
            self.advance()
            return self._finish(ASTNode("Literal", tok.text, token=tok), tok)

        if tok.type == "LPAREN":
            self.advance()
            inner = self.parse_expression()
            self.match("RPAREN")
            return self._finish(ASTNode("Paren", None, [inner], token=tok), tok)

        if tok.type == "NEW":
            return self.parse_creation()

        if tok.type == "IDENTIFIER" and self.peek_type(2) == "ARROW" and not self._no_lambda:
            return self.parse_lambda()

        if tok.type in ("IDENTIFIER", "THIS", "SUPER"):
            self.advance()
            return self._finish(ASTNode("Identifier", tok.text, token=tok), tok)

        if tok.type in self.TYPE_KEYWORDS:
            # int.class, int[].class
            type_name = self.parse_type()
            return self._finish(ASTNode("Identifier", type_name, token=tok), tok)

        if tok.type == "LBRACE":
            return self.parse_array_initializer()

        raise JavaSyntaxError(f"Неожиданный токен в выражении: '{tok.text}'", tok)

    def parse_postfix(self, base, start):
        while True:
            t = self.current.type
            if t == "DOT":
                self.advance()
                if self.current.type == "LT":
                    self._maybe_generic_suffix("")  # obj.<T>call()
                if self.current.type == "NEW":
                    base = self.parse_creation()  # outer.new Inner()
                    continue
                if self.current.type in ("IDENTIFIER", "CLASS", "THIS", "SUPER"):
                    member_tok = self.current
                    self.advance()
                    base = self._finish(ASTNode("Member", member_tok.text, [base], token=member_tok), start)
                    continue
                raise JavaSyntaxError(f"Ожидалось имя члена после '.', получен {self.current.type}", self.current)
            if t == "LPAREN":
                args = self.parse_arguments()
                base = self._finish(ASTNode("Call", base, args), start)
                continue
            if t == "LBRACK":
                self.advance()
                index = self.parse_expression()
                self.match("RBRACK")
                base = self._finish(ASTNode("ArrayAccess", None, [base, index]), start)
                continue
            if t in ("INC", "DEC"):
                self.advance()
                base = self._finish(ASTNode("PostfixOp", t, [base]), start)
                continue
            if t == "COLONCOLON":
                self.advance()
                name_tok = self.current
                self.advance()
                base = self._finish(ASTNode("MethodRef", name_tok.text, [base]), start)
                continue
            return base

    def parse_creation(self):
        start = self.match("NEW")
        if self.current.type == "LT":
            self._maybe_generic_suffix("")
        type_name = self.parse_class_type()

        if self.current.type == "LBRACK":
            dims = []
            total = 0
            while self.current.type == "LBRACK":
                self.advance()
                total += 1
                if self.current.type != "RBRACK":
                    dims.append(self.parse_expression())
                self.match("RBRACK")
            children = [ASTNode("Dims", total, dims)]
            if self.current.type == "LBRACE":
                children.append(self.parse_array_initializer())
            return self._finish(ASTNode("NewArray", type_name, children, token=start), start)

        args = self.parse_arguments()
        if self.current.type == "LBRACE":
            # anonymous class body: parsed for validity, not translated
            self._class_names.append("")
            try:
                self.parse_class_body()
            finally:
                self._class_names.pop()
        return self._finish(ASTNode("New", type_name, args, token=start), start)
