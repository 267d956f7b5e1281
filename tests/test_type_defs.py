from kaori.type_defs import FunctionType, PrimitiveType, StructType


def test_primitive_names_match_the_checker_messages():
    assert PrimitiveType(PrimitiveType.NUMBER.value) is PrimitiveType.NUMBER
    assert PrimitiveType(PrimitiveType.BOOLEAN.value) is PrimitiveType.BOOLEAN
    fn = FunctionType([PrimitiveType.NUMBER], PrimitiveType.BOOLEAN)
    assert str(fn.parameters[0]) == "Number"
    assert str(fn.return_ty) == "Boolean"


def test_function_type_normalises_parameters_to_tuple():
    fn = FunctionType([PrimitiveType.NUMBER], PrimitiveType.BOOLEAN)
    assert fn.parameters == (PrimitiveType.NUMBER,)
    assert fn == FunctionType((PrimitiveType.NUMBER,), PrimitiveType.BOOLEAN)


def test_function_types_differ_by_return_type():
    a = FunctionType([], PrimitiveType.VOID)
    b = FunctionType([], PrimitiveType.NUMBER)
    assert not (a == b)
    assert a == FunctionType(iter([]), PrimitiveType.VOID)


def test_nested_function_types_compare_structurally():
    inner = FunctionType([PrimitiveType.BOOLEAN], PrimitiveType.NUMBER)
    outer = FunctionType([inner], inner)
    same = FunctionType(
        [FunctionType([PrimitiveType.BOOLEAN], PrimitiveType.NUMBER)],
        FunctionType([PrimitiveType.BOOLEAN], PrimitiveType.NUMBER),
    )
    assert outer == same
    assert hash(outer) == hash(same)


def test_types_are_hashable_and_deduplicate():
    types = {
        StructType([PrimitiveType.NUMBER]),
        StructType((PrimitiveType.NUMBER,)),
        FunctionType([PrimitiveType.NUMBER], PrimitiveType.VOID),
    }
    assert len(types) == 2


def test_struct_and_function_types_are_distinct():
    struct = StructType([PrimitiveType.NUMBER])
    fn = FunctionType([PrimitiveType.NUMBER], PrimitiveType.VOID)
    assert not (struct == fn)
    assert struct.fields == (PrimitiveType.NUMBER,)