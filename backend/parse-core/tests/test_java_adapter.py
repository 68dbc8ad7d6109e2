import pytest

from adapters.java_adapter import JavaAdapter
from errors import UnitParseError


ORDER_CODE = """
package com.example.shop;

import java.util.List;

/**
 * An order.
 */
@Entity
@Table(name = "orders", schema = "shop")
public class Order<T extends Item> extends BaseEntity implements java.io.Serializable, Comparable<Order<T>> {
    private List<T> items;

    public Order(List<T> items) {
        this.items = items;
    }

    @Override
    public int compareTo(Order<T> other) {
        return Integer.compare(items.size(), other.items.size());
    }

    static class Line {}
}

class Helper {}
"""


def _children(node, kind):
    return [c for c in node.children if c.kind == kind]


def test_unit_header_and_declarations():
    unit = JavaAdapter().build_source_unit(ORDER_CODE, filename="src/Order.java")

    assert unit.path == "src/Order.java"
    assert unit.namespace == "com.example.shop"
    assert unit.primary_name == "Order"
    assert unit.language == "java"
    assert [d.name for d in unit.declarations] == ["Order", "Helper"]


def test_type_declaration_node():
    order = JavaAdapter().build_source_unit(ORDER_CODE).declarations[0]

    assert order.kind == "class"
    assert order.modifiers == frozenset({"public"})
    assert order.type_parameters == ("T",)
    assert order.extends == ("BaseEntity",)
    assert order.implements == ("java.io.Serializable", "Comparable<Order<T>>")
    assert order.comment.startswith("/**")
    assert "An order." in order.comment
    assert [c.kind for c in order.children] == ["field", "constructor", "method", "class"]


def test_annotation_nodes_keep_source_text():
    order = JavaAdapter().build_source_unit(ORDER_CODE).declarations[0]
    entity, table = order.annotations

    assert entity.name == "Entity"
    assert entity.value is None and entity.pairs == ()
    assert table.name == "Table"
    assert table.pairs == (("name", '"orders"'), ("schema", '"shop"'))


def test_declaration_text_spans_annotations_and_body():
    order = JavaAdapter().build_source_unit(ORDER_CODE).declarations[0]

    assert order.text.startswith("@Entity\n@Table(name = \"orders\"")
    assert order.text.endswith("static class Line {}\n}")

    method = _children(order, "method")[0]
    assert method.text.startswith("@Override\n    public int compareTo(Order<T> other) {")
    assert method.text.endswith("other.items.size());\n    }")


def test_method_node():
    order = JavaAdapter().build_source_unit(ORDER_CODE).declarations[0]
    method = _children(order, "method")[0]

    assert method.name == "compareTo"
    assert method.type_text == "int"
    assert [a.name for a in method.annotations] == ["Override"]
    (param,) = method.children
    assert (param.kind, param.name, param.type_text, param.varargs) == ("parameter", "other", "Order<T>", False)


def test_generic_method_with_varargs_and_throws():
    code = """
    public class Util {
        public static <K, V> java.util.Map<K, V[]> group(final K key, V... values)
                throws java.io.IOException, IllegalStateException {
            return null;
        }
    }
    """
    method = JavaAdapter().build_source_unit(code).declarations[0].children[0]

    assert method.type_parameters == ("K", "V")
    assert method.type_text == "java.util.Map<K, V[]>"
    assert method.throws == ("java.io.IOException", "IllegalStateException")
    key, values = method.children
    assert key.modifiers == frozenset({"final"})
    assert values.type_text == "V" and values.varargs is True
    assert method.text.startswith("public static <K, V>")


def test_wildcard_type_arguments():
    code = """
    class Box {
        java.util.List<? extends Number> numbers;
        java.util.List<? super Integer> sink;
        java.util.List<?> any;
    }
    """
    fields = JavaAdapter().build_source_unit(code).declarations[0].children

    assert [f.type_text for f in fields] == [
        "java.util.List<? extends Number>",
        "java.util.List<? super Integer>",
        "java.util.List<?>",
    ]


def test_interface_enum_and_annotation_declarations():
    code = """
    public interface Shape extends Comparable<Shape>, java.io.Serializable {
        int SIDES = 0;
        double area();
        default String label() { return "shape"; }
    }

    enum Color {
        RED, GREEN;
        private final int code = 0;
        public int code() { return code; }
    }

    @interface Audit {
        String value() default "";
    }
    """
    shape, color, audit = JavaAdapter().build_source_unit(code).declarations

    assert shape.kind == "interface"
    assert shape.extends == ("Comparable<Shape>", "java.io.Serializable")
    sides, area, label = shape.children
    assert sides.children[0].initializer == "0"
    assert area.text == "double area();"
    assert label.modifiers == frozenset({"default"})
    assert label.text.startswith("default String label()")

    assert color.kind == "enum"
    assert [c.kind for c in color.children] == ["field", "method"]

    assert audit.kind == "annotation"
    assert audit.children == ()


def test_syntax_error_raises_unit_parse_error():
    with pytest.raises(UnitParseError) as exc:
        JavaAdapter().build_source_unit("public class {", filename="Broken.java")
    assert "Java syntax error" in str(exc.value)


def test_empty_source_has_no_declarations():
    unit = JavaAdapter().build_source_unit("package only.here;\n", filename="package-info.java")

    assert unit.namespace == "only.here"
    assert unit.declarations == ()


def test_source_texts_keep_unicode_escapes():
    code = (
        "class Escaped {\n"
        "    String s = \"\\u0041\", t = \"\\\\u0042\";\n"
        "    @Label(\"\\u00e9t\\u00e9\") int n = 1;\n"
        "}\n"
    )
    escaped = JavaAdapter().build_source_unit(code).declarations[0]
    strings, number = escaped.children

    assert [v.initializer for v in strings.children] == ['"\\u0041"', '"\\\\u0042"']
    assert number.annotations[0].value == '"\\u00e9t\\u00e9"'
    assert number.children[0].initializer == "1"
    assert escaped.text == code.rstrip("\n")
