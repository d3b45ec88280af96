import pytest

from bcfg.errors import TypeResolutionError
from bcfg.resolver import (
    ArrayType,
    ClassType,
    ListType,
    PrimitiveArrayType,
    PrimitiveType,
    SetType,
    StringType,
    is_const_type,
    resolve,
)
from bcfg.types import TypeDescriptor, TypeRegistry
from bcfg.values import ScalarKind


def R(text: str, registry: TypeRegistry | None = None):
    return resolve(TypeDescriptor.parse(text), registry)


class TestBuiltins:

    @pytest.mark.parametrize("name, kind", [
        ("boolean", ScalarKind.BOOLEAN),
        ("Byte", ScalarKind.BYTE),
        ("short", ScalarKind.SHORT),
        ("char", ScalarKind.CHAR),
        ("Int", ScalarKind.INT),
        ("integer", ScalarKind.INT),
        ("LONG", ScalarKind.LONG),
        ("float", ScalarKind.FLOAT),
        ("java.lang.Double", ScalarKind.DOUBLE),
    ])
    def test_primitives(self, name, kind):
        assert R(name) == PrimitiveType(kind=kind)

    def test_string_list_set(self):
        assert R("String") == StringType()
        assert R("List") == ListType()
        assert R("Set") == SetType()


class TestArrays:

    def test_primitive_array_specialization(self):
        assert R("int[]") == PrimitiveArrayType(kind=ScalarKind.INT)
        assert R("boolean[]") == PrimitiveArrayType(kind=ScalarKind.BOOLEAN)

    def test_nullable_primitive_array_is_boxed(self):
        assert R("int?[]") == ArrayType(element=PrimitiveType(nullable=True, kind=ScalarKind.INT))

    def test_string_array(self):
        assert R("String[]") == ArrayType(element=StringType())


class TestGenerics:

    def test_parameterized_containers(self):
        assert R("List<String>") == ListType(element=StringType())
        assert R("Set<long?>") == SetType(element=PrimitiveType(nullable=True, kind=ScalarKind.LONG))

    def test_recursive_arguments(self):
        assert R("List<Set<int[]>>") == ListType(
            element=SetType(element=PrimitiveArrayType(kind=ScalarKind.INT))
        )

    def test_array_of_parameterized(self):
        assert R("List<String>[]") == ArrayType(element=ListType(element=StringType()))

    def test_nullable_container(self):
        assert R("List<Int>?") == ListType(nullable=True, element=PrimitiveType(kind=ScalarKind.INT))

    def test_non_container_cannot_be_parameterized(self):
        with pytest.raises(TypeResolutionError):
            R("Int<String>")

    def test_list_takes_exactly_one_argument(self):
        with pytest.raises(TypeResolutionError):
            R("List<String, Int>")


class TestRegistry:

    def test_unknown_type_is_an_error(self):
        with pytest.raises(TypeResolutionError) as ei:
            R("java.io.File")
        assert "java.io.File" in str(ei.value)

    def test_registered_class(self):
        registry = TypeRegistry.of({"File": "java.io.File"})
        assert R("File?", registry) == ClassType(nullable=True, qualified_name="java.io.File")

    def test_registered_generic(self):
        registry = TypeRegistry().register("Pair", "kotlin.Pair", container=True)
        assert R("Pair<Int, String>", registry) == ClassType(
            qualified_name="kotlin.Pair",
            arguments=(PrimitiveType(kind=ScalarKind.INT), StringType()),
            container=True,
        )

    def test_registered_non_container_rejects_arguments(self):
        registry = TypeRegistry.of({"File": "java.io.File"})
        with pytest.raises(TypeResolutionError):
            R("File<String>", registry)


class TestConstTypes:

    @pytest.mark.parametrize("text", ["String", "boolean", "byte", "short", "int", "long", "char", "float", "double"])
    def test_eligible(self, text):
        assert is_const_type(R(text))

    @pytest.mark.parametrize("text", ["String?", "int?", "int[]", "List<String>", "String[]"])
    def test_not_eligible(self, text):
        assert not is_const_type(R(text))


def test_primitive_array_cannot_be_parameterized():
    with pytest.raises(TypeResolutionError):
        R("int<String>[]")
