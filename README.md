# gcfg

`gcfg` provides the building blocks for reading INI-style configuration text
in the syntax used by `git config`:

```ini
; Comment line
[section]
name = value        # trailing comment
switch = on

[profile "A"]
color = white
```

It has a tokenizer for that syntax, a table that turns byte offsets into
line and column positions, parsers for single values such as booleans and
integers, and the error types shared by these pieces.

## Installation

```
pip install gcfg
```

There are no runtime dependencies. For the test suite, install the `test` extra:

```
pip install "gcfg[test]"
```

## Tokenizing configuration text

`gcfg.scanner.Scanner` splits UTF-8 source into tokens of kind
`gcfg.token.Token` (`IDENT`, `STRING`, `ASSIGN`, `LBRACK`, `RBRACK`, `EOL`,
`COMMENT`, `ILLEGAL`, `EOF`). Each call to `scan()` returns a `ScanResult`
of `(pos, tok, lit)`; iterating over a scanner yields the remaining tokens
and stops before `EOF`. Comments are skipped unless the scanner is created
with `Mode.SCAN_COMMENTS`.

```python
from gcfg.position import FileSet
from gcfg.scanner import Mode, Scanner

src = b'[profile "A"]\ncolor = blue ; Comment'
fset = FileSet()
file = fset.add_file("", fset.base, len(src))
scanner = Scanner(file, src, None, Mode.SCAN_COMMENTS)
for pos, tok, lit in scanner:
    print(fset.position(pos), repr(str(tok)), repr(lit))
```

```
1:1 '[' ''
1:2 'IDENT' 'profile'
1:10 'STRING' '"A"'
1:13 ']' ''
1:14 '\n' ''
2:1 'IDENT' 'color'
2:7 '=' ''
2:9 'STRING' 'blue'
2:14 'COMMENT' '; Comment'
```

After `=`, the rest of the line is scanned as one value string: trailing
whitespace is dropped, quoted parts may contain `;` and `#`, and a backslash
at the end of a line joins it with the next line. Carriage returns are
removed from values.

The size of the `File` must equal the length of the source, otherwise the
`Scanner` raises `ValueError`.

### Syntax errors

Scanning never stops at a syntax error. Each problem (an illegal character,
an unterminated string, an unknown escape sequence, a NUL byte, bad UTF-8)
increments `scanner.error_count` and, if an error handler was given, calls it
with a `gcfg.position.Position` and a message. `gcfg.scanner.ErrorList`
collects such errors and is itself an exception:

```python
from gcfg.scanner import ErrorList, print_error
import sys

errors = ErrorList()
scanner = Scanner(file, src, errors.add)
...
errors.remove_multiples()    # sort, keep the first error on each line
exc = errors.err()           # None if empty, else a snapshot ErrorList
print_error(sys.stderr, exc) # one line per error
```

`ErrorList` also has `sort()` and `reset()`; a `ScanError` in it has `pos`
and `msg`.

## Positions

`gcfg.position.FileSet` gives every added file a range of integer position
values (`p == file.base + offset`; `NO_POS` is 0). `File` records line starts
(`add_line`, `set_lines`, `set_lines_for_content`) and alternative file/line
information (`add_line_info`), and converts between offsets and positions
(`pos`, `offset`, `line`, `position`). `FileSet.position(p)` finds the right
file and returns a `Position` whose text form is `file:line:column`,
`line:column`, `file` or `-`. Out-of-range values raise
`gcfg.position.PositionError`.

A file set can be saved and restored as plain data:

```python
import json

data = fset.write(json.dumps)
copy = FileSet()
copy.read(lambda: json.loads(data))
```

## Parsing single values

`gcfg.values` converts value strings; failures raise
`gcfg.values.ValueParseError`.

```python
from gcfg.values import EnumParser, IntMode, parse_bool, parse_int, scan_fully

parse_bool("On")                                  # True; also yes/true/1, no/false/off/0
parse_int("0x10", IntMode.DEC | IntMode.HEX)      # 16
parse_int("010", IntMode.DEC | IntMode.HEX)       # 10 (a leading zero is not octal)
parse_int("010", IntMode.DEC | IntMode.OCT)       # 8
parse_int("10", IntMode.HEX | IntMode.OCT)        # ValueParseError: needs a 0 or 0x prefix
scan_fully("12", "d", int)                        # 12; extra characters are an error

colors = EnumParser(type_name="color")
colors.add_vals({"red": 1, "green": 2})
colors.parse("RED")                               # 1; matching ignores case by default
```

## Errors and warnings

Every error type in the package derives from `gcfg.errors.GcfgError`.
`ConfigSyntaxWarning(section, subsection, variable)` stands for data that has
no place in a configuration structure; `MissingEscapeSequenceError` and
`MissingEndQuoteError` describe malformed quoted text. `fatal_only(err)`
returns `None` when `err` is `None`, a `ConfigSyntaxWarning`, or an exception
group made only of such warnings, and returns `err` otherwise.

## What this package does not do

The package does not read a whole configuration file into your own objects,
nor call back for each section and variable it finds. It offers the
tokenizer, positions, value parsers and error types on which such a reader
is built; combining them into sections and variables is left to the caller.