"""Discovery of import declarations in JavaScript and TypeScript source.

This is a small hand-written scanner, not a full parser. It walks the text
skipping strings, template literals, comments and regular expression
literals, and parses every top-level ``import`` declaration it finds.

Handled forms::

    import 'side-effect';
    import def from 'mod';
    import * as ns from 'mod';
    import {a, b as c} from 'mod';
    import def, * as ns from 'mod';
    import def, {a} from 'mod';
    import type {T} from 'mod';
    import typeof Def from 'mod';
    import data from './data.json' with {type: 'json'};

``import(...)``, ``import.meta`` and TypeScript ``import x = require(...)``
are not import declarations and are skipped.
"""
from __future__ import annotations

from sortimports.core.source import SourceText, TextSpan
from sortimports.imports.statements import Binding, BindingKind, ImportStatement

# Characters after which a "/" starts a regular expression, not a division
REGEX_PRECEDERS = set("(,=:[!&|?{};+-*%<>~^")
REGEX_KEYWORDS = {"return", "typeof", "instanceof", "in", "of", "new", "delete", "void", "throw", "case", "do", "else"}

TYPE_MODIFIERS = ("type", "typeof")
ATTRIBUTE_KEYWORDS = ("with", "assert")


class ScanError(ValueError):
    """Raised for an import declaration the scanner cannot read."""

    def __init__(self, message: str, line: int) -> None:
        super().__init__(f"line {line}: {message}")
        self.line = line


def _is_ident_start(char: str) -> bool:
    return char.isalpha() or char in "_$"


def _is_ident_char(char: str) -> bool:
    return char.isalnum() or char in "_$"


class ImportScanner:
    """Scan a source text for import declarations.

    Examples
    --------
    >>> scanner = ImportScanner("import {b, a} from 'x';\\nfoo();\\n")
    >>> [s.module_path for s in scanner.scan()]
    ['x']
    """

    def __init__(self, text: str | SourceText) -> None:
        self.source = text if isinstance(text, SourceText) else SourceText(text)
        self.text = self.source.text
        self.pos = 0
        self._comments: list[TextSpan] = []

    # -------------------------------------------------------------------------
    # Low level helpers
    # -------------------------------------------------------------------------

    def _error(self, message: str, pos: int | None = None) -> ScanError:
        return ScanError(message, self.source.line_of(self.pos if pos is None else pos))

    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.text[index] if index < len(self.text) else ""

    def _skip_line_comment(self) -> None:
        end = self.text.find("\n", self.pos)
        self.pos = len(self.text) if end == -1 else end

    def _skip_block_comment(self) -> None:
        end = self.text.find("*/", self.pos + 2)
        if end == -1:
            raise self._error("unterminated comment")
        self.pos = end + 2

    def _skip_trivia(self) -> None:
        """Skip whitespace and comments, recording comment spans."""
        while self.pos < len(self.text):
            char = self._peek()
            if char.isspace():
                self.pos += 1
            elif char == "/" and self._peek(1) == "/":
                start = self.pos
                self._skip_line_comment()
                self._comments.append(TextSpan(start, self.pos))
            elif char == "/" and self._peek(1) == "*":
                start = self.pos
                self._skip_block_comment()
                self._comments.append(TextSpan(start, self.pos))
            else:
                break

    def _read_string(self) -> str:
        quote = self._peek()
        start = self.pos
        self.pos += 1
        chars: list[str] = []
        while self.pos < len(self.text):
            char = self._peek()
            if char == "\\":
                chars.append(self._peek(1))
                self.pos += 2
                continue
            if char == quote:
                self.pos += 1
                return "".join(chars)
            if char == "\n":
                break
            chars.append(char)
            self.pos += 1
        raise self._error("unterminated string literal", start)

    def _read_word(self) -> str:
        start = self.pos
        if not _is_ident_start(self._peek()):
            return ""
        while self.pos < len(self.text) and _is_ident_char(self._peek()):
            self.pos += 1
        return self.text[start:self.pos]

    def _peek_word(self) -> str:
        saved = self.pos
        word = self._read_word()
        self.pos = saved
        return word

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            raise self._error(f"expected {char!r}")
        self.pos += 1

    def _expect_word(self, word: str) -> None:
        if self._read_word() != word:
            raise self._error(f"expected {word!r}")

    def _skip_template(self) -> None:
        start = self.pos
        self.pos += 1
        while self.pos < len(self.text):
            char = self._peek()
            if char == "\\":
                self.pos += 2
            elif char == "`":
                self.pos += 1
                return
            elif char == "$" and self._peek(1) == "{":
                self.pos += 2
                self._skip_code(until_close=True)
            else:
                self.pos += 1
        raise self._error("unterminated template literal", start)

    def _skip_regex(self) -> None:
        in_class = False
        self.pos += 1
        while self.pos < len(self.text):
            char = self._peek()
            if char == "\\":
                self.pos += 2
                continue
            if char == "\n":
                return
            self.pos += 1
            if char == "[":
                in_class = True
            elif char == "]":
                in_class = False
            elif char == "/" and not in_class:
                while _is_ident_char(self._peek()):
                    self.pos += 1
                return

    def _regex_allowed(self, last_token: str) -> bool:
        return not last_token or last_token in REGEX_PRECEDERS or last_token in REGEX_KEYWORDS

    # -------------------------------------------------------------------------
    # Code walking
    # -------------------------------------------------------------------------

    def _skip_code(self, until_close: bool = False) -> list[ImportStatement]:
        """Walk code, collecting top-level imports.

        With ``until_close`` the walk stops after the ``}`` that closes the
        current block (used for template substitutions).
        """
        found: list[ImportStatement] = []
        depth = 0
        last_token = ""
        while self.pos < len(self.text):
            char = self._peek()
            if char.isspace():
                self.pos += 1
            elif char == "/" and self._peek(1) == "/":
                self._skip_line_comment()
            elif char == "/" and self._peek(1) == "*":
                self._skip_block_comment()
            elif char == "/" and self._regex_allowed(last_token):
                self._skip_regex()
                last_token = "regex"
            elif char in "'\"":
                self._read_string()
                last_token = "string"
            elif char == "`":
                self._skip_template()
                last_token = "template"
            elif _is_ident_start(char):
                preceded_by_dot = last_token == "."
                start = self.pos
                word = self._read_word()
                if word == "import" and depth == 0 and not until_close and not preceded_by_dot:
                    statement = self._parse_import(start)
                    if statement is not None:
                        found.append(statement)
                        last_token = ";"
                        continue
                last_token = word
            elif char.isdigit():
                while _is_ident_char(self._peek()) or self._peek() == ".":
                    self.pos += 1
                last_token = "number"
            else:
                if char == "{":
                    depth += 1
                elif char == "}":
                    if depth == 0 and until_close:
                        self.pos += 1
                        return found
                    depth -= 1
                self.pos += 1
                last_token = char
        return found

    def scan(self) -> list[ImportStatement]:
        """Find all top-level import declarations.

        Returns
        -------
        list[ImportStatement]
            Statements in source order.

        Raises
        ------
        ScanError
            If an import declaration is malformed.
        """
        self.pos = 0
        return self._skip_code()

    # -------------------------------------------------------------------------
    # Declarations
    # -------------------------------------------------------------------------

    def _parse_import(self, start: int) -> ImportStatement | None:
        """Parse a declaration whose ``import`` keyword begins at ``start``.

        Returns None, leaving the position after the keyword, when this is
        not an import declaration.
        """
        after_keyword = self.pos
        self._skip_trivia()
        if self._peek() in ("(", ".", "="):
            self.pos = after_keyword
            return None

        self._comments = []
        is_type_only = self._read_type_modifier()
        bindings: list[Binding] = []

        if self._peek() in ("'", '"'):
            module_path = self._read_string()
        else:
            if self._parse_clause(bindings) is None:
                self.pos = after_keyword
                return None
            self._skip_trivia()
            self._expect_word("from")
            self._skip_trivia()
            if self._peek() not in ("'", '"'):
                raise self._error("expected module specifier")
            module_path = self._read_string()

        self._skip_attributes()
        self._take_semicolon()

        span = TextSpan(start, self.pos)
        return ImportStatement(
            span=span,
            bindings=tuple(bindings),
            module_path=module_path,
            is_type_only=is_type_only,
            raw_text=self.source.slice(span),
            start_line=self.source.start_line(span),
            end_line=self.source.end_line(span),
        )

    def _read_type_modifier(self) -> bool:
        """Consume a ``type``/``typeof`` modifier if one is present."""
        saved = self.pos
        word = self._read_word()
        if word not in TYPE_MODIFIERS:
            self.pos = saved
            return False
        self._skip_trivia()
        if self._peek() in ("{", "*"):
            return True
        following = self._peek_word()
        if following and following != "from":
            return True
        if following == "from":
            # "import type from 'x'" binds a default named "type"
            probe = self.pos
            self._read_word()
            self._skip_trivia()
            is_binding_named_type = self._peek() in ("'", '"')
            self.pos = probe
            if not is_binding_named_type:
                return True
        self.pos = saved
        return False

    def _parse_clause(self, bindings: list[Binding]) -> list[Binding] | None:
        if _is_ident_start(self._peek()):
            start = self.pos
            name = self._read_word()
            bindings.append(Binding(name, TextSpan(start, self.pos), BindingKind.DEFAULT))
            self._skip_trivia()
            if self._peek() == "=":
                # TypeScript "import x = require('x')"
                return None
            if self._peek() != ",":
                return bindings
            self.pos += 1
            self._skip_trivia()

        if self._peek() == "*":
            start = self.pos
            self.pos += 1
            self._skip_trivia()
            self._expect_word("as")
            self._skip_trivia()
            name = self._read_word()
            if not name:
                raise self._error("expected namespace name")
            bindings.append(Binding(name, TextSpan(start, self.pos), BindingKind.NAMESPACE))
        elif self._peek() == "{":
            bindings.extend(self._parse_named_bindings())
        else:
            raise self._error("expected import clause")
        return bindings

    def _parse_named_bindings(self) -> list[Binding]:
        open_brace = self.pos
        self._expect("{")
        comments_before = len(self._comments)
        specs: list[tuple[str, TextSpan]] = []
        while True:
            self._skip_trivia()
            if self._peek() == "}":
                break
            specs.append(self._parse_specifier())
            self._skip_trivia()
            if self._peek() == ",":
                self.pos += 1
            elif self._peek() != "}":
                raise self._error("expected ',' or '}'")
        close_brace = self.pos
        self.pos += 1

        comments = self._comments[comments_before:]
        bindings = []
        for index, (name, span) in enumerate(specs):
            before = specs[index - 1][1].end if index else open_brace
            after = specs[index + 1][1].start if index + 1 < len(specs) else close_brace
            has_comment = any(
                before <= c.start < span.start or span.end <= c.start < after for c in comments
            )
            bindings.append(Binding(name, span, BindingKind.NAMED, has_comment))
        return bindings

    def _parse_specifier(self) -> tuple[str, TextSpan]:
        start = self.pos
        if self._peek() in ("'", '"'):
            imported = self._read_string()
        else:
            imported = self._read_word()
            if imported == "type":
                saved = self.pos
                self._skip_trivia()
                following = self._peek_word()
                if following and following != "as":
                    imported = self._read_word()
                else:
                    self.pos = saved
        if not imported:
            raise self._error("expected import specifier")

        local = imported
        end = self.pos
        saved = self.pos
        self._skip_trivia()
        if self._peek_word() == "as":
            self._read_word()
            self._skip_trivia()
            local = self._read_word()
            if not local:
                raise self._error("expected local name after 'as'")
            end = self.pos
        else:
            self.pos = saved
        return local, TextSpan(start, end)

    def _skip_attributes(self) -> None:
        saved = self.pos
        self._skip_trivia()
        if self._peek_word() in ATTRIBUTE_KEYWORDS:
            self._read_word()
            self._skip_trivia()
            if self._peek() == "{":
                end = self.text.find("}", self.pos)
                if end == -1:
                    raise self._error("unterminated import attributes")
                self.pos = end + 1
                return
        self.pos = saved

    def _take_semicolon(self) -> None:
        index = self.pos
        while index < len(self.text) and self.text[index] in " \t":
            index += 1
        if index < len(self.text) and self.text[index] == ";":
            self.pos = index + 1


def scan_imports(text: str | SourceText) -> list[ImportStatement]:
    """Find the top-level import declarations of a JavaScript/TypeScript file."""
    return ImportScanner(text).scan()
