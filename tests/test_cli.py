import logging

import pytest

import cli
from JavaToNadeshiko import translate_file, translate_java_to_nadeshiko

SOURCE = "class Hello {\n    void run() {\n        System.out.println(\"hi\");\n    }\n}\n"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    for name in ("J2N_INDENT", "J2N_MAX_DEPTH", "J2N_ENCODING", "J2N_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    if hasattr(root, "_java2nadeshiko_configured"):
        delattr(root, "_java2nadeshiko_configured")


@pytest.fixture
def java_file(tmp_path):
    path = tmp_path / "Hello.java"
    path.write_text(SOURCE, encoding="utf-8")
    return path


EXPECTED = "クラス Hello\n　関数 runとは\n　　「hi」と表示。\n　ここまで。\nここまで。"


def test_translate_java_to_nadeshiko_returns_text_and_ast():
    text, ast = translate_java_to_nadeshiko(SOURCE)
    assert text == EXPECTED
    assert ast.type == "CompilationUnit"


def test_empty_source_is_rejected():
    with pytest.raises(ValueError):
        translate_java_to_nadeshiko("   \n")


def test_source_without_type_declaration_is_rejected():
    with pytest.raises(ValueError, match="объявление класса"):
        translate_java_to_nadeshiko("package a.b;\n")


def test_translate_file(java_file):
    text, _ = translate_file(str(java_file))
    assert text == EXPECTED


def test_main_writes_stdout(java_file, capsys):
    assert cli.main([str(java_file)]) == 0
    assert capsys.readouterr().out == EXPECTED + "\n"


def test_main_writes_output_file(java_file, tmp_path):
    target = tmp_path / "out.nako"
    assert cli.main([str(java_file), "-o", str(target), "--indent", "space2"]) == 0
    assert target.read_text(encoding="utf-8").splitlines()[1] == "  関数 runとは"


def test_main_reports_syntax_error(tmp_path, capsys):
    broken = tmp_path / "Broken.java"
    broken.write_text("class A {\n  void f() {\n    int x = ;\n  }\n}\n", encoding="utf-8")
    assert cli.main([str(broken)]) == 1
    err = capsys.readouterr().err
    assert "синтаксическая ошибка" in err
    assert "line 3" in err


def test_main_reports_missing_file(tmp_path, capsys):
    assert cli.main([str(tmp_path / "missing.java")]) == 1
    assert "missing.java" in capsys.readouterr().err


def test_argument_mapping():
    args = cli.build_parser().parse_args(["A.java", "--max-depth", "7", "--indent", "tab", "--log-level", "DEBUG"])
    assert args.max_expression_depth == 7
    assert cli.INDENT_CHOICES[args.indent] == "\t"
    assert args.log_level == "DEBUG"


def test_unknown_indent_choice_exits():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["A.java", "--indent", "wide"])


def test_main_reports_too_deep_nesting(tmp_path, capsys):
    depth = 3000
    deep = tmp_path / "Deep.java"
    deep.write_text("class A { int v = " + "(" * depth + "1" + ")" * depth + "; }\n", encoding="utf-8")
    assert cli.main([str(deep)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "синтаксическая ошибка" in captured.err
    assert "Traceback" not in captured.err
