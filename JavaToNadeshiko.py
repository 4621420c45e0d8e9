import logging
from typing import Optional, Tuple

from Config import TranslatorConfig
from FileStream.FileStream import FileStream, InputStream
from JavaGrammarLexer.JavaGrammarLexer import JavaGrammarLexer
from SimpleJavaParser.SimpleJavaParser import ASTNode, SimpleJavaParser
from TokenStream.TokenStream import TokenStream
from Translator.Translator import Translator

logger = logging.getLogger(__name__)

TYPE_DECLARATIONS = {"ClassDecl", "InterfaceDecl", "EnumDecl", "AnnotationTypeDecl"}


def _translate_stream(input_stream: InputStream, config: TranslatorConfig) -> Tuple[str, ASTNode]:
    lexer = JavaGrammarLexer(input_stream)
    tokens = TokenStream(lexer)
    parser = SimpleJavaParser(tokens)
    ast = parser.parse()

    if not any(child.type in TYPE_DECLARATIONS for child in ast.children):
        raise ValueError("В коде не найдено объявление класса или интерфейса.")

    t = Translator(indent_str=config.indent_str, max_expression_depth=config.max_expression_depth)
    text = t.translate(ast, input_stream.lines(), tokens.comments)
    logger.debug("Переведено строк: %d, комментариев: %d", len(input_stream.lines()), len(tokens.comments))
    return text, ast


def translate_java_to_nadeshiko(java_code: str, config: Optional[TranslatorConfig] = None) -> Tuple[str, ASTNode]:
    """Java source -> (Nadeshiko text, AST). Raises JavaSyntaxError or ValueError."""
    if not java_code or not java_code.strip():
        raise ValueError("Пустой исходный код.")
    return _translate_stream(InputStream(java_code), config or TranslatorConfig())


def translate_file(path: str, config: Optional[TranslatorConfig] = None) -> Tuple[str, ASTNode]:
    config = config or TranslatorConfig()
    return _translate_stream(FileStream(path, encoding=config.encoding), config)
