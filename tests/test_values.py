import pytest

from gcfg.values import (
    EnumParser,
    IntMode,
    ValueParseError,
    parse_bool,
    parse_int,
    scan_fully,
)

D, H, O = IntMode.DEC, IntMode.HEX, IntMode.OCT


@pytest.mark.parametrize(
    "val,res,ok",
    [("tRuE", True, True), ("False", False, True), ("t", None, False)],
)
def test_parse_bool(val, res, ok):
    if ok:
        assert parse_bool(val) is res
    else:
        with pytest.raises(ValueParseError):
            parse_bool(val)


@pytest.mark.parametrize(
    "val,mode,exp,ok",
    [
        ("0", D, 0, True),
        ("10", D, 10, True),
        ("-10", D, -10, True),
        ("x", D, 0, False),
        ("0xa", H, 0xA, True),
        ("a", H, 0xA, True),
        ("10", H, 0x10, True),
        ("-0xa", H, -0xA, True),
        ("-a", H, -0xA, True),
        ("-10", H, -0x10, True),
        ("x", H, 0, False),
        ("10", O, 0o10, True),
        ("010", O, 0o10, True),
        ("-10", O, -0o10, True),
        ("-010", O, -0o10, True),
        ("10", D | H, 10, True),
        ("010", D | H, 10, True),
        ("0x10", D | H, 0x10, True),
        ("10", D | O, 10, True),
        ("010", D | O, 0o10, True),
        ("0x10", D | O, 0, False),
        ("10", H | O, 0, False),
        ("010", H | O, 0o10, True),
        ("0x10", H | O, 0x10, True),
        ("10", D | H | O, 10, True),
        ("010", D | H | O, 0o10, True),
        ("0x10", D | H | O, 0x10, True),
    ],
)
def test_parse_int(val, mode, exp, ok):
    if ok:
        assert parse_int(val, mode, int) == exp
    else:
        with pytest.raises(ValueParseError):
            parse_int(val, mode, int)


def test_parse_int_unsupported_mode():
    with pytest.raises(ValueParseError, match="unsupported mode"):
        parse_int("10", IntMode(0), int)


def test_parse_int_ambiguous_message():
    with pytest.raises(ValueParseError, match="ambiguous"):
        parse_int("10", H | O, int)


@pytest.mark.parametrize("val,verb", [("a", "v"), ("0x", "d")])
def test_scan_fully_errors(val, verb):
    with pytest.raises(ValueParseError):
        scan_fully(val, verb, int)


def test_scan_fully_error_names_type():
    with pytest.raises(ValueParseError, match="int"):
        scan_fully("1A", "v", int)


def test_scan_fully_float_and_string():
    assert scan_fully("1.5", "v", float) == 1.5
    assert scan_fully("word", "v", str) == "word"
    with pytest.raises(ValueParseError, match="extra characters"):
        scan_fully("two words", "v", str)


def test_scan_fully_int_subclass_keeps_type():
    class Mode(int):
        pass

    result = scan_fully("0777", "v", Mode)
    assert type(result) is Mode
    assert result == 0o777


def test_int_mode_str():
    assert str(IntMode(3)) == "IntMode(Dec|Hex)"
    assert str(IntMode.DEC | IntMode.HEX) == "IntMode(Dec|Hex)"


def test_enum_parser_case_match():
    parser = EnumParser(case_match=True)
    parser.add_vals({"Red": 1})
    assert parser.parse("Red") == 1
    assert parser.type_name == "int"
    with pytest.raises(ValueParseError, match="failed to parse int `red`"):
        parser.parse("red")