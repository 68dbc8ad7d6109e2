from adapters.java_adapter import JavaAdapter
from extractors.assembler import build_unit_model
from extractors.methods import extract_methods
from extractors.selector import select_primary_declaration


def _methods(code, filename):
    unit = JavaAdapter().build_source_unit(code, filename=filename)
    return extract_methods(select_primary_declaration(unit))


def test_documented_method_round_trip():
    code = """
    public class Foo {
        /**
         * does X
         * @param y the input
         * @throws IOException on failure
         */
        public int bar(int y) throws java.io.IOException { return y; }
    }
    """
    model = build_unit_model(JavaAdapter().build_source_unit(code, filename="Foo.java"))

    assert model.name == "Foo"
    (bar,) = model.methods
    assert bar.name == "bar"
    assert bar.description == "does X"
    assert bar.return_type == "int"
    assert bar.return_description is None
    assert bar.signature == "public int bar(int y) throws java.io.IOException"
    assert [(p.name, p.type_name, p.description, p.is_required) for p in bar.parameters] == [
        ("y", "int", "the input", True),
    ]
    assert bar.exceptions == ("IOException",)
    assert bar.exception_descriptions == {"IOException": "on failure"}
    assert bar.source_code.startswith("public int bar(int y)")


def test_unset_and_empty_parameter_descriptions_differ():
    code = """
    public class Calc {
        /**
         * Adds.
         * @param a
         */
        public int add(int a, int x) { return a + x; }
    }
    """
    (add,) = _methods(code, "Calc.java")
    a, x = add.parameters

    assert a.description == ""
    assert x.description is None


def test_duplicate_throws_tags_are_preserved():
    code = """
    public class Io {
        /**
         * @throws IOException a
         * @throws IOException b
         */
        public void run() {}
    }
    """
    (run,) = _methods(code, "Io.java")

    assert run.exceptions.count("IOException") == 2
    assert run.exception_descriptions == {"IOException": "b"}


def test_declared_throws_used_without_tags():
    code = """
    public class Io {
        void close() throws java.io.IOException, IllegalStateException {}
    }
    """
    (close,) = _methods(code, "Io.java")

    assert close.description is None
    assert close.exceptions == ("java.io.IOException", "IllegalStateException")
    assert close.exception_descriptions == {}


def test_signature_modifier_order_and_generics():
    code = """
    public abstract class Base {
        @Override
        synchronized final public String toString() { return ""; }

        protected abstract void run(final String name);

        public static <T> java.util.List<T> wrap(T item, String... tags) { return null; }
    }
    """
    to_string, run, wrap = _methods(code, "Base.java")

    assert to_string.signature == "public final synchronized String toString()"
    assert to_string.annotations == {"Override": ""}
    assert run.signature == "protected abstract void run(final String name)"
    assert run.is_abstract and not run.is_public
    assert run.return_type == "void"
    assert wrap.signature == "public static <T> java.util.List<T> wrap(T item, String... tags)"
    assert wrap.type_parameters == ("T",)
    assert wrap.is_static
    assert [p.is_required for p in wrap.parameters] == [True, False]


def test_constructors_nested_types_excluded_and_overloads_kept():
    code = """
    public class Greeter {
        public Greeter() {}

        public String greet() { return "hi"; }

        public String greet(String name) { return "hi " + name; }

        static class Inner {
            void hidden() {}
        }
    }
    """
    methods = _methods(code, "Greeter.java")

    assert [m.name for m in methods] == ["greet", "greet"]
    assert [len(m.parameters) for m in methods] == [0, 1]


def test_first_return_tag_wins():
    code = """
    public class Answer {
        /**
         * @return forty-two
         * @return something else
         */
        public int get() { return 42; }
    }
    """
    (get,) = _methods(code, "Answer.java")
    assert get.return_description == "forty-two"
