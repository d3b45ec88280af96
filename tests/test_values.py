from bcfg.types import TypeDescriptor
from bcfg.values import (
    Scalar,
    ScalarKind,
    builtin_name,
    flatten,
    printable,
    tag_value,
    value_class_name,
)


def T(text: str) -> TypeDescriptor:
    return TypeDescriptor.parse(text)


class TestBuiltinNames:

    def test_case_insensitive_and_qualified_spellings(self):
        assert builtin_name("INT") == "int"
        assert builtin_name("Integer") == "int"
        assert builtin_name("java.lang.String") == "string"
        assert builtin_name("kotlin.collections.List") == "list"
        assert builtin_name("Character") == "char"
        assert builtin_name("java.io.File") is None


class TestTagging:

    def test_untyped_scalars(self):
        assert tag_value(True) == Scalar(ScalarKind.BOOLEAN, True)
        assert tag_value(7) == Scalar(ScalarKind.INT, 7)
        assert tag_value(2**40) == Scalar(ScalarKind.LONG, 2**40)
        assert tag_value(1.5) == Scalar(ScalarKind.DOUBLE, 1.5)
        assert tag_value("x") == Scalar(ScalarKind.STRING, "x")
        assert tag_value(None) is None

    def test_declared_primitive_drives_kind(self):
        assert tag_value(7, T("long")) == Scalar(ScalarKind.LONG, 7)
        assert tag_value(7, T("byte")) == Scalar(ScalarKind.BYTE, 7)
        assert tag_value(7, T("double")) == Scalar(ScalarKind.DOUBLE, 7.0)
        assert tag_value(1.5, T("float")) == Scalar(ScalarKind.FLOAT, 1.5)
        assert tag_value("c", T("char")) == Scalar(ScalarKind.CHAR, "c")
        assert tag_value(5, T("String")) == Scalar(ScalarKind.STRING, "5")

    def test_bool_is_never_an_integer(self):
        assert tag_value(True, T("int")) == Scalar(ScalarKind.BOOLEAN, True)

    def test_explicit_tags_are_kept(self):
        tagged = Scalar(ScalarKind.INT, 1)
        assert tag_value(tagged, T("long")) is tagged

    def test_array_elements_use_base_type(self):
        assert tag_value([1, 2], T("long[]")) == (
            Scalar(ScalarKind.LONG, 1),
            Scalar(ScalarKind.LONG, 2),
        )

    def test_list_elements_use_first_type_argument(self):
        assert tag_value(["a"], T("List<char>")) == (Scalar(ScalarKind.CHAR, "a"),)

    def test_nested_containers(self):
        value = tag_value([[1], [2, 3]], T("List<List<long>>"))
        assert value == (
            (Scalar(ScalarKind.LONG, 1),),
            (Scalar(ScalarKind.LONG, 2), Scalar(ScalarKind.LONG, 3)),
        )

    def test_sets_have_deterministic_order(self):
        assert tag_value({"b", "a", "c"}) == tag_value(["a", "b", "c"])

    def test_unknown_objects_are_other(self):
        obj = object()
        assert tag_value(obj) == Scalar(ScalarKind.OTHER, obj)


class TestFlatten:

    def test_null_is_empty(self):
        assert flatten(None) == []

    def test_scalar_is_single(self):
        s = Scalar(ScalarKind.INT, 1)
        assert flatten(s) == [s]

    def test_nested_leaves_in_order_without_nulls(self):
        value = tag_value([[1, None], [], [2]])
        assert [s.value for s in flatten(value)] == [1, 2]


def test_printable_and_class_name():
    value = tag_value([1, None, "x"])
    assert printable(value) == "[1, null, x]"
    assert value_class_name(value) == "tuple"
    assert value_class_name(Scalar(ScalarKind.LONG, 1)) == "long"
    assert value_class_name(None) == "null"
    assert printable(Scalar(ScalarKind.BOOLEAN, False)) == "false"
