from cir.model import MethodModel, ParameterModel, UnitModel
from summarize import (
    class_context,
    class_list_summary,
    exception_types,
    faq_context,
    getting_started_context,
    kind_counts,
    methods_summary,
    project_overview_context,
    public_types,
)


def _units():
    foo = UnitModel(
        name="Foo",
        package="com.example",
        fully_qualified_name="com.example.Foo",
        kind="CLASS",
        description="Does\n   foo things.",
        is_public=True,
        methods=(
            MethodModel(
                name="bar",
                return_type="int",
                signature="public int bar(int y, String s) throws IOException",
                parameters=(ParameterModel("y", "int"), ParameterModel("s", "String")),
                exceptions=("IOException", "IOException"),
            ),
            MethodModel(name="reset", return_type="void", signature="void reset()", exceptions=("IllegalStateException",)),
        ),
        source_code="public class Foo {}",
    )
    api = UnitModel(name="Api", package="", fully_qualified_name="Api", kind="INTERFACE")
    color = UnitModel(name="Color", package="com.example", fully_qualified_name="com.example.Color", kind="ENUM", is_public=True)
    return [foo, api, color]


def test_class_list_summary():
    assert class_list_summary(_units()) == (
        "com.example.Foo (CLASS): Does foo things.\n"
        "Api (INTERFACE)\n"
        "com.example.Color (ENUM)"
    )


def test_counts_public_types_and_exceptions():
    units = _units()

    assert kind_counts(units) == {"CLASS": 1, "INTERFACE": 1, "ENUM": 1, "RECORD": 0, "ANNOTATION": 0}
    assert public_types(units) == ["com.example.Foo", "com.example.Color"]
    assert exception_types(units) == ["IOException", "IllegalStateException"]


def test_methods_summary():
    assert methods_summary(_units()[0]) == "bar(int y, String s): int\nreset(): void"


def test_contexts():
    units = _units()

    overview = project_overview_context(units, "shop")
    assert overview["repository_name"] == "shop"
    assert overview["total_classes"] == 3
    assert (overview["class_count"], overview["interface_count"], overview["enum_count"]) == (1, 1, 1)

    page = class_context(units[1])
    assert page["class_description"] == ""
    assert page["methods_summary"] == ""

    assert getting_started_context(units, "shop")["main_classes"] == "com.example.Foo\ncom.example.Color"
    assert faq_context(units, "shop")["exception_types"] == "IOException\nIllegalStateException"
