from gcfg.errors import (
    ConfigSyntaxWarning,
    MissingEndQuoteError,
    MissingEscapeSequenceError,
    fatal_only,
)


def test_fatal_only_none():
    assert fatal_only(None) is None


def test_fatal_only_drops_warning():
    assert fatal_only(ConfigSyntaxWarning("section", "", "name")) is None


def test_fatal_only_keeps_fatal():
    err = ValueError("boom")
    assert fatal_only(err) is err


def test_warning_message():
    warning = ConfigSyntaxWarning("sec", "sub", "var")
    assert str(warning) == (
        'syntax warning: can\'t store data in section "sec", subsection "sub", variable "var"'
    )
    assert warning.variable == "var"


def test_warning_message_section_only():
    assert str(ConfigSyntaxWarning("sec")) == 'syntax warning: can\'t store data in section "sec"'


def test_quote_errors_messages():
    assert str(MissingEndQuoteError()) == "missing end quote"
    assert str(MissingEscapeSequenceError()) == "missing escape sequence"