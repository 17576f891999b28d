import pytest

from dtattr.attr import (
    Attr,
    AttrEnum,
    AttrType,
    attr_type_from_string,
    attr_type_size,
    attr_type_to_string,
    parse_number,
    spec_size,
)


@pytest.mark.parametrize("attr_type", [t for t in AttrType if t != AttrType.UNKNOWN])
def test_type_string_round_trip(attr_type):
    assert attr_type_from_string(attr_type_to_string(attr_type)) == attr_type


def test_type_labels_fixed_by_format():
    assert attr_type_to_string(AttrType.STRING) == "str"
    assert attr_type_from_string("complex") == AttrType.COMPLEX


def test_unknown_type_strings():
    assert attr_type_from_string("float") == AttrType.UNKNOWN
    assert attr_type_to_string(AttrType.UNKNOWN) == "<NULL>"
    assert attr_type_to_string(99) == "<NULL>"


@pytest.mark.parametrize(
    "pair",
    [(AttrType.UINT8, AttrType.INT8), (AttrType.UINT16, AttrType.INT16),
     (AttrType.UINT32, AttrType.INT32), (AttrType.UINT64, AttrType.INT64)],
)
def test_signed_and_unsigned_sizes_agree(pair):
    assert attr_type_size(pair[0]) == attr_type_size(pair[1])


def test_type_size_rejects_non_numeric():
    with pytest.raises(ValueError):
        attr_type_size(AttrType.STRING)


def test_spec_size_documented_example():
    assert spec_size("4124") == spec_size("4") + spec_size("124")
    assert spec_size("8") == attr_type_size(AttrType.UINT64)


def test_spec_size_rejects_letters():
    with pytest.raises(ValueError):
        spec_size("4x")


def test_parse_number_bases():
    assert parse_number("0x1f") == 0x1F
    assert parse_number("017") == 0o17
    assert parse_number("42") == 42
    assert parse_number("junk") == 0


def test_parse_number_wraps_negative():
    attr = Attr("ATTR_S", AttrType.INT8)
    attr.set_number(0, "-1")
    assert attr.values[0] == 0xFF


def test_set_number_masks_to_element_size():
    attr = Attr("ATTR_A", AttrType.UINT8, dims=(2,))
    attr.set_number(1, "0x1ff")
    assert attr.values == [0, 0xFF]


def test_default_values_are_zero():
    attr = Attr("ATTR_A", AttrType.UINT32, dims=(2, 3))
    assert attr.count == 6
    assert attr.values == [0] * 6
    assert attr.encode() == bytes(attr.count * attr.elem_size)


def test_encode_uint16_is_big_endian():
    attr = Attr("ATTR_A", AttrType.UINT16, dims=(2,), values=[0x0001, 0x1234])
    assert attr.encode() == b"\x00\x01\x12\x34"


@pytest.mark.parametrize(
    "attr_type,values",
    [
        (AttrType.UINT8, [1, 255]),
        (AttrType.UINT16, [0x1234, 0xFFFF]),
        (AttrType.INT32, [0xDEADBEEF, 7]),
        (AttrType.UINT64, [0x0123456789ABCDEF, 1]),
    ],
)
def test_numeric_round_trip(attr_type, values):
    attr = Attr("ATTR_N", attr_type, dims=(2,), values=values)
    other = Attr("ATTR_N", attr_type, dims=(2,))
    other.decode(attr.encode())
    assert other.values == values


def test_complex_round_trip_and_layout():
    attr = Attr("ATTR_C", AttrType.COMPLEX, spec="4124", dims=(2,),
                values=[(1, 2, 3, 4), (0xFFFFFFFF, 0xFF, 0xFFFF, 0)])
    blob = attr.encode()
    assert len(blob) == attr.count * spec_size("4124")
    assert blob[:4] == b"\x00\x00\x00\x01"
    other = Attr("ATTR_C", AttrType.COMPLEX, spec="4124", dims=(2,))
    other.decode(blob)
    assert other.values == attr.values


def test_complex_set_number_fields():
    attr = Attr("ATTR_C", AttrType.COMPLEX, spec="12")
    attr.set_number(0, "0x1ff 0x10")
    assert attr.values == [(0xFF, 0x10)]
    with pytest.raises(ValueError):
        attr.set_number(0, ["1"])


def test_string_set_and_round_trip():
    attr = Attr("ATTR_STR", AttrType.STRING, elem_size=4, dims=(2,))
    attr.set_string(0, "abcdef")
    attr.set_string(1, "ab")
    assert attr.values == [b"abcd", b"ab\0\0"]
    other = Attr("ATTR_STR", AttrType.STRING, elem_size=4, dims=(2,))
    other.decode(attr.encode())
    assert other.values == attr.values


def test_set_enum():
    attr = Attr("ATTR_E", AttrType.UINT8,
                enums=[AttrEnum("OFF", 0), AttrEnum("ON", 1)])
    assert attr.set_enum(0, "ON") is True
    assert attr.values == [1]
    assert attr.set_enum(0, "MAYBE") is False
    assert attr.values == [1]


def test_set_number_on_string_rejected():
    attr = Attr("ATTR_STR", AttrType.STRING, elem_size=4)
    with pytest.raises(ValueError):
        attr.set_number(0, "1")


def test_decode_wrong_length():
    attr = Attr("ATTR_A", AttrType.UINT32, dims=(2,))
    with pytest.raises(ValueError):
        attr.decode(b"\x00" * 7)


def test_copy_is_independent():
    attr = Attr("ATTR_A", AttrType.UINT16, dims=(3,), values=[1, 2, 3])
    dup = attr.copy()
    dup.set_number(0, "9")
    assert attr.values == [1, 2, 3]
    assert dup.values == [9, 2, 3]
    assert dup.dims == attr.dims and dup.name == attr.name


def test_unknown_attr_has_no_values():
    attr = Attr("ATTR_X")
    assert attr.count == 0
    assert attr.values == []