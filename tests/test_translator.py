from Translator.Items import COMMENT
from Translator.Translator import exception_name, simple_type_names


def test_class_header_members_and_blank_lines(translate):
    out = translate("""
        public class Foo extends Bar implements Baz {
            private int count;

            public void run() {
                count = 1;
            }
        }
    """)
    assert out == [
        "クラス Fooは Barを継承、Bazを実装",
        "　countとは整数。",
        "",
        "　関数 runとは",
        "　　count は 1。",
        "　ここまで。",
        "ここまで。",
    ]


def test_type_name_helpers():
    assert simple_type_names("java.util.Map<K, List<V>>, Serializable") == ["Map", "Serializable"]
    assert simple_type_names(None) == []
    assert exception_name("IOException | IllegalArgumentException") == "ファイルエラー | 不正な引数エラー"
    assert exception_name("SQLException") == "SQLException"


def test_interface_and_abstract_method(translate):
    out = translate("""
        interface Shape extends Base {
            double area();
        }
    """)
    assert out == ["抽象クラス Shapeは Baseを継承", "　関数 areaとは", "　ここまで。", "ここまで。"]


def test_rest_controller_annotation(translate):
    out = translate("""
        @RestController
        public class Api {
        }
    """)
    assert out == ["Web応答用。", "クラス Api", "ここまで。"]


def test_package_and_imports(translate):
    out = translate("""
        package com.example;

        import java.util.List;
        import java.io.*;

        class A {
        }
    """)
    assert out == [
        "「com.example」に所属。",
        "",
        "「List」を取り込む。",
        "「java.io.*」を取り込む。",
        "",
        "クラス A",
        "ここまで。",
    ]


def test_if_else_if_else_chain(translate):
    out = translate("""
        class A {
            int f(int x) {
                if (x > 0) {
                    a();
                } else if (x < 0) {
                    b();
                } else {
                    c();
                }
                return x;
            }
        }
    """)
    assert out == [
        "クラス A",
        "　関数 f(x)とは",
        "　　もし、(x > 0)ならば",
        "　　　a。",
        "　　違えば、もし、(x < 0)ならば",
        "　　　b。",
        "　　違えば",
        "　　　c。",
        "　　ここまで。",
        "　　xを戻す。",
        "　ここまで。",
        "ここまで。",
    ]


def test_sole_return_branches(translate):
    out = translate("""
        class A {
            boolean ok(int v) {
                if (v > 1) return true;
                if (v < 0) {
                    return false;
                }
                return v == 1;
            }
        }
    """)
    assert out == [
        "クラス A",
        "　関数 ok(v)とは",
        "　　もし、(v > 1)ならば",
        "　　　真を戻す。",
        "　　ここまで。",
        "　　もし、(v < 0)ならば",
        "　　　偽を戻す。",
        "　　ここまで。",
        "　　<v = 1>を戻す。",
        "　ここまで。",
        "ここまで。",
    ]


def test_loops(translate):
    out = translate("""
        class A {
            void f() {
                for (int i = 0; i < n; i++) {
                    sum += i;
                }
                for (String s : names) {
                    System.out.println(s);
                }
                while (it.hasNext()) {
                    it.next();
                }
                while (k > 0) k--;
            }
        }
    """)
    assert out == [
        "クラス A",
        "　関数 fとは",
        "　　iを0から(i < n)まで(i + 1)を繰り返す",
        "　　　sum は (sum + i)。",
        "　　ここまで。",
        "　　namesの各要素をsへ取り出して繰り返す",
        "　　　sと表示。",
        "　　ここまで。",
        "　　(itの次の要素がある)間",
        "　　　itの次の要素。",
        "　　ここまで。",
        "　　(k > 0)の間",
        "　　　k は (k - 1)。",
        "　　ここまで。",
        "　ここまで。",
        "ここまで。",
    ]


def test_do_while_body_is_flattened(translate):
    out = translate("""
        class A {
            void f() {
                do {
                    i++;
                } while (i < 3);
            }
        }
    """)
    assert out == ["クラス A", "　関数 fとは", "　　i は (i + 1)。", "　ここまで。", "ここまで。"]


def test_switch(translate):
    out = translate("""
        class A {
            void f(int k) {
                switch (k) {
                    case 1:
                        x = 1;
                        break;
                    default:
                        x = 0;
                }
            }
        }
    """)
    assert out == [
        "クラス A",
        "　関数 f(k)とは",
        "　　kで条件分岐：",
        "　　　1ならば：",
        "　　　　x は 1。",
        "　　　　抜ける。",
        "　　　それ以外ならば：",
        "　　　　x は 0。",
        "　　ここまで。",
        "　ここまで。",
        "ここまで。",
    ]


def test_try_catch_finally(translate):
    out = translate("""
        class A {
            void f() {
                try {
                    run();
                } catch (IOException e) {
                    e.printStackTrace();
                } finally {
                    done();
                }
            }
        }
    """)
    assert out == [
        "クラス A",
        "　関数 fとは",
        "　　エラー監視",
        "　　　run。",
        "　　エラー e が ファイルエラー ならば",
        "　　　エラー詳細出力。",
        "　　後処理",
        "　　　done。",
        "　　ここまで。",
        "　ここまで。",
        "ここまで。",
    ]


def test_multi_catch_maps_each_type(translate):
    out = translate("""
        class A {
            void f() {
                try {
                    run();
                } catch (IOException | IllegalArgumentException e) {
                }
            }
        }
    """)
    assert "　　エラー e が ファイルエラー | 不正な引数エラー ならば" in out


def test_comments(translate):
    out = translate("""
        // header
        class A {
            /* block */
            int x; // trailing
            /**
             * Docs.
             */
            void f() {
            }
        }
    """)
    assert out == [
        "//header",
        "クラス A",
        "　/* block */",
        "　//trailing",
        "　xとは整数。",
        "　/**",
        "　       Docs.",
        "　*/",
        "　関数 fとは",
        "　ここまで。",
        "ここまで。",
    ]


def test_comment_items_come_first(items):
    result = items("class A { // c\n}")
    assert result[0].priority == COMMENT and result[0].text == "//c"


def test_constructors_and_entry_point(translate):
    out = translate("""
        public class App {
            private final int size;

            public App() {
                this(10);
            }

            public App(int size) {
                super();
                this.size = size;
            }

            public static void main(String[] args) {
                System.out.println("Hello");
                System.out.println();
                System.out.print(args.length);
            }
        }
    """)
    assert out == [
        "クラス App",
        "　sizeとは整数。",
        "",
        "　App生成時",
        "　　自身のコンストラクタ(10)。",
        "　ここまで。",
        "",
        "　App(size)生成時",
        "　　親のコンストラクタ。",
        "　　自身のsize は size。",
        "　ここまで。",
        "",
        "　関数　メイン関数とは",
        "　　「Hello」と表示。",
        "　　改行。",
        "　　argsの配列要素数と無改行表示。",
        "　ここまで。",
        "ここまで。",
    ]


def test_declarations_and_arrays(translate):
    out = translate("""
        class A {
            static final int MAX = 10;
            String name = "x";
            int[] nums = {1, 2, 3};
            void f() {
                int count;
                double[][] grid = new double[2][3];
                int[] arr = new int[n];
                arr = new int[] {4, 5};
                count++;
                new Thread();
            }
        }
    """)
    assert out == [
        "クラス A",
        "　MAXは10と定める。",
        "　name は 「x」。",
        "　numsは[1,2,3]。",
        "　関数 fとは",
        "　　countとは整数型。",
        "　　gridは小数配列(行2,列3)生成。",
        "　　arrは整数配列(長さn)生成。",
        "　　arrは[4,5]。",
        "　　count は (count + 1)。",
        "　　Thread生成。",
        "　ここまで。",
        "ここまで。",
    ]


def test_print_and_throw(translate):
    out = translate("""
        class A {
            void f(int n) {
                System.out.println("n=" + n);
                throw new IllegalArgumentException("bad");
            }
            void g(Exception e) {
                throw e;
            }
        }
    """)
    assert out == [
        "クラス A",
        "　関数 f(n)とは",
        "　　「n={n}」と表示。",
        "　　「bad」とエラー発生。",
        "　ここまで。",
        "　関数 g(e)とは",
        "　　エラー発生。",
        "　ここまで。",
        "ここまで。",
    ]


def test_statement_idioms_in_method_body(translate):
    out = translate("""
        class A {
            void f() {
                map.put("a", 1);
                frame.setVisible(true);
            }
        }
    """)
    assert out[2:4] == ["　　mapに(「a」, 1)格納。", "　　frameを表示。"]


def test_nested_class_is_translated(translate):
    out = translate("""
        class Outer {
            static class Inner {
                int v;
            }
        }
    """)
    assert out == ["クラス Outer", "　クラス Inner", "　　vとは整数。", "　ここまで。", "ここまで。"]


def test_custom_indent_unit(translate):
    out = translate("""
        class A {
            void f() {
                x = 1;
            }
        }
    """, indent_str="  ")
    assert out == ["クラス A", "  関数 fとは", "    x は 1。", "  ここまで。", "ここまで。"]


def test_every_blank_source_line_is_kept(translate):
    source = """
        class A {

            int x;


        }
    """
    out = translate(source)
    assert out == ["クラス A", "", "　xとは整数。", "", "", "ここまで。"]


def test_identifiers_with_digit_letter_runs_are_kept(translate):
    out = translate("""
        class A {
            int f() {
                int y = player1Data;
                z = arr[idx2L];
                long n = 10L;
                return item3f;
            }
        }
    """)
    assert out[2:6] == [
        "　　y は player1Data。",
        "　　z は arr[idx2L]。",
        "　　n は 10。",
        "　　item3fを戻す。",
    ]


def test_for_with_empty_parts(translate):
    out = translate("""
        class A {
            void f() {
                for (;;) {
                    run();
                }
                for (; i < n; i++) {
                }
            }
        }
    """)
    assert out[2:7] == [
        "　　(真)の間",
        "　　　run。",
        "　　ここまで。",
        "　　(i < n)まで(i + 1)を繰り返す",
        "　　ここまで。",
    ]
