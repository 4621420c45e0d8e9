import streamlit as st

from Config import TranslatorConfig, configure_logging
from JavaToNadeshiko import translate_java_to_nadeshiko
from SimpleJavaParser.SimpleJavaParser import JavaSyntaxError


def _read_uploaded_bytes_as_text(uploaded_file) -> str:
    if uploaded_file is None:
        return ""
    raw = uploaded_file.read()
    for enc in ("utf-8", "cp932", "latin-1"):
        try:
            return raw.decode(enc)
        except UnicodeDecodeError:
            continue
    return raw.decode("latin-1", errors="replace")


base_config = TranslatorConfig.from_env()
configure_logging(base_config.logging)

st.set_page_config(page_title="Java → なでしこ Translator", layout="wide")

st.markdown(
    """
    <style>
    textarea {
        -webkit-text-size-adjust: 100%;
        spellcheck: false !important;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

st.title("Java → なでしこ Translator")


if "java_code" not in st.session_state:
    st.session_state.java_code = ""

if "nako_code" not in st.session_state:
    st.session_state.nako_code = ""

if "show_result" not in st.session_state:
    st.session_state.show_result = False

if "ast_repr" not in st.session_state:
    st.session_state.ast_repr = ""

if "last_error" not in st.session_state:
    st.session_state.last_error = ""


with st.sidebar:
    st.subheader("Настройки")

    indent_choice = st.selectbox(
        "Отступы",
        options=[
            "　 (全角スペース)",
            "  (2 пробела)",
            "\t (таб)",
        ],
        index=0,
    )
    if indent_choice.startswith("　"):
        indent_str = "　"
    elif indent_choice.startswith("  "):
        indent_str = "  "
    else:
        indent_str = "\t"

    show_ast = st.checkbox("Показать AST (debug)", value=False)

    st.markdown("---")
    st.caption("Загрузка/сохранение")


st.markdown("#### Загрузите .java")
uploaded_file = st.file_uploader("Файл Java", type=["java"], key="upload_java_file")

if uploaded_file is not None:
    text_from_file = _read_uploaded_bytes_as_text(uploaded_file)
    if text_from_file and text_from_file != st.session_state.java_code:
        st.session_state.java_code = text_from_file


st.markdown("#### Или вставьте Java-код вручную")
java_code_input = st.text_area(
    label="Исходный Java-код",
    key="java_code",
    height=260,
    placeholder=(
        'Пример:\n'
        'public class Hello {\n'
        '    public static void main(String[] a){\n'
        '        System.out.println("hi");\n'
        '    }\n'
        '}'
    ),
)


col_left, col_right = st.columns([1, 1])

with col_left:
    run = st.button("Translate", type="primary")

    if run:
        st.session_state.last_error = ""
        config = base_config.with_overrides(indent_str=indent_str)
        try:
            nako_code, ast = translate_java_to_nadeshiko(st.session_state.java_code, config)
            st.session_state.nako_code = nako_code
            st.session_state.show_result = True
            st.session_state.ast_repr = ast.__repr__() if show_ast and ast is not None else ""
            st.success("✅ Success!")
        except (JavaSyntaxError, ValueError) as e:
            st.session_state.last_error = str(e)
            st.session_state.show_result = False
            st.session_state.nako_code = ""
            st.session_state.ast_repr = ""

    if st.session_state.show_result and st.session_state.nako_code:
        st.subheader("なでしこ:")
        st.code(st.session_state.nako_code, language=None)

        st.download_button(
            label="Скачать translated.nako",
            data=st.session_state.nako_code,
            file_name="translated.nako",
            mime="text/plain",
            use_container_width=True,
        )

        if show_ast and st.session_state.ast_repr:
            with st.expander("AST (debug)", expanded=False):
                st.text(st.session_state.ast_repr)

    if st.session_state.last_error:
        st.error(f"❌ Ошибка перевода: {st.session_state.last_error}")

with col_right:
    with st.expander("ℹ️ Примечания", expanded=True):
        st.markdown(
            """
- Перевод построчный: каждая строка なでしこ стоит на месте своей строки Java, пустые строки сохраняются.
- Поддерживаются классы, интерфейсы, методы, конструкторы, поля, `if / for / while / switch`, `try / catch / finally`.
- `System.out.println()` становится `…と表示。`, `print()` становится `…と無改行表示。`.
- Комментарии переносятся с отступом своей строки.
- Перечисления (`enum`) и лямбды не переводятся.
            """
        )

st.caption("© FEFU Software engineering")
