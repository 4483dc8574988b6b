"""Reading scene descriptions written in the libconfig text format."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator

from raytracer.geometry import RaytracerError

_AGGREGATES = ("group", "array", "list")

_KIND_TYPES: dict[type, tuple[str, ...]] = {
    int: ("int",),
    float: ("float",),
    str: ("string",),
    bool: ("bool",),
}

_LEXEME = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<comment>(?:\#|//)[^\n]*)
    |(?P<block>/\*.*?\*/)
    |(?P<string>"(?:[^"\\\n]|\\.)*")
    |(?P<float>[-+]?(?:\d+\.\d*|\.\d+)(?:[eE][-+]?\d+)?|[-+]?\d+[eE][-+]?\d+)
    |(?P<hex>0[xX][0-9A-Fa-f]+(?:LL|L)?)
    |(?P<int>[-+]?\d+(?:LL|L)?)
    |(?P<name>[A-Za-z*][-A-Za-z0-9_*]*)
    |(?P<punct>[=:;,{}\[\]()])
    """,
    re.VERBOSE | re.DOTALL,
)

_ESCAPE = re.compile(r"\\(x[0-9A-Fa-f]{2}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "f": "\f", "\\": "\\", '"': '"'}
_PATH_PART = re.compile(r"\[(\d+)\]|([^.\[\]]+)")
_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1


class ConfigError(RaytracerError):
    """A configuration could not be read, or a setting is missing.

    ``line`` is set for syntax errors and ``None`` otherwise.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message if line is None else f"{message} at line {line}")
        self.error = message
        self.line = line


@dataclass(eq=False)
class Setting:
    """One node of a configuration: a scalar, a group, an array or a list.

    ``type`` is one of ``int``, ``int64``, ``float``, ``string``, ``bool``,
    ``group``, ``array`` and ``list``.
    """

    name: str | None
    type: str
    value: object = None
    children: list[Setting] = field(default_factory=list)
    line: int | None = None
    path: str = ""

    @property
    def is_group(self) -> bool:
        return self.type == "group"

    @property
    def is_aggregate(self) -> bool:
        return self.type in _AGGREGATES

    @property
    def values(self) -> list[object]:
        """The scalar values of the children."""
        return [child.value for child in self.children]

    def _describe(self, suffix: str) -> str:
        return f"{self.path}{suffix}" if self.path else suffix.lstrip(".")

    def _member(self, name: str) -> Setting:
        if self.is_group:
            for child in self.children:
                if child.name == name:
                    return child
        raise ConfigError(f"setting not found: {self._describe('.' + name)}")

    def _element(self, index: int) -> Setting:
        if self.is_aggregate and 0 <= index < len(self.children):
            return self.children[index]
        raise ConfigError(f"setting not found: {self._describe(f'[{index}]')}")

    def exists(self, name: str) -> bool:
        """Whether this group has a member called ``name``."""
        return self.is_group and any(child.name == name for child in self.children)

    def lookup(self, path: str) -> Setting:
        """Return the setting at a dotted ``path`` such as ``a.b[0].c``."""
        setting = self
        for index, name in _PATH_PART.findall(path):
            setting = setting._element(int(index)) if index else setting._member(name)
        return setting

    def lookup_value(self, name: str, kind: type) -> object | None:
        """Return the value at ``name`` if it exists and is of ``kind``, else None.

        ``kind`` is one of ``int``, ``float``, ``str`` and ``bool``; no
        conversion between them takes place.
        """
        try:
            accepted = _KIND_TYPES[kind]
        except KeyError:
            raise TypeError(f"unsupported value kind: {kind!r}") from None
        try:
            setting = self.lookup(name)
        except ConfigError:
            return None
        return setting.value if setting.type in accepted else None

    def __len__(self) -> int:
        return len(self.children)

    def __getitem__(self, key: int | str) -> Setting:
        if isinstance(key, str):
            return self._member(key)
        if isinstance(key, int) and not isinstance(key, bool):
            return self._element(key)
        raise TypeError(f"setting key must be str or int, not {type(key).__name__}")

    def __iter__(self) -> Iterator[Setting]:
        return iter(list(self.children))


def _lex(text: str) -> Iterator[tuple[str, str, int]]:
    line = 1
    pos = 0
    while pos < len(text):
        match = _LEXEME.match(text, pos)
        if match is None:
            raise ConfigError("syntax error", line)
        kind = match.lastgroup or ""
        lexeme = match.group()
        if kind not in ("ws", "comment", "block"):
            yield kind, lexeme, line
        line += lexeme.count("\n")
        pos = match.end()
    yield "eof", "", line


def _unescape(body: str) -> str:
    def replace(match: re.Match[str]) -> str:
        code = match.group(1)
        if len(code) == 3 and code[0] == "x":
            return chr(int(code[1:], 16))
        return _SIMPLE_ESCAPES.get(code, code)

    return _ESCAPE.sub(replace, body)


def _integer(text: str, base: int) -> tuple[str, int]:
    value = int(text.rstrip("L"), base)
    wide = text.endswith("L") or not _INT32_MIN <= value <= _INT32_MAX
    return ("int64" if wide else "int"), value


class _Parser:
    def __init__(self, text: str) -> None:
        self._lexemes = list(_lex(text))
        self._pos = 0

    def _peek(self) -> tuple[str, str, int]:
        return self._lexemes[self._pos]

    def _next(self) -> tuple[str, str, int]:
        lexeme = self._lexemes[self._pos]
        if lexeme[0] != "eof":
            self._pos += 1
        return lexeme

    def _accept(self, *symbols: str) -> bool:
        kind, text, _ = self._peek()
        if kind == "punct" and text in symbols:
            self._pos += 1
            return True
        return False

    def _expect(self, symbol: str) -> None:
        if not self._accept(symbol):
            raise ConfigError("syntax error", self._peek()[2])

    def parse(self) -> Setting:
        root = Setting(None, "group", line=1)
        self._settings(root, "eof")
        return root

    def _at_close(self, closing: str) -> bool:
        kind, text, _ = self._peek()
        if closing == "eof":
            return kind == "eof"
        return kind == "punct" and text == closing

    def _settings(self, group: Setting, closing: str) -> None:
        while not self._at_close(closing):
            kind, name, line = self._next()
            if kind != "name":
                raise ConfigError("syntax error", line)
            if not self._accept("=", ":"):
                raise ConfigError("syntax error", self._peek()[2])
            if group.exists(name):
                raise ConfigError(f"duplicate setting name '{name}'", line)
            path = f"{group.path}.{name}" if group.path else name
            setting = self._value(path, line)
            setting.name = name
            group.children.append(setting)
            self._accept(";", ",")

    def _value(self, path: str, line: int) -> Setting:
        if self._accept("{"):
            group = Setting(None, "group", line=line, path=path)
            self._settings(group, "}")
            self._expect("}")
            return group
        if self._accept("["):
            return self._sequence(path, line, "array", "]")
        if self._accept("("):
            return self._sequence(path, line, "list", ")")
        return self._scalar(path)

    def _sequence(self, path: str, line: int, kind: str, closing: str) -> Setting:
        sequence = Setting(None, kind, line=line, path=path)
        while not self._at_close(closing):
            element_path = f"{path}[{len(sequence.children)}]"
            element_line = self._peek()[2]
            if kind == "array":
                element = self._scalar(element_path)
                if sequence.children and element.type != sequence.children[0].type:
                    raise ConfigError("mismatched element type in array", element_line)
            else:
                element = self._value(element_path, element_line)
            sequence.children.append(element)
            if not self._accept(","):
                break
        self._expect(closing)
        return sequence

    def _scalar(self, path: str) -> Setting:
        kind, text, line = self._next()
        if kind == "string":
            parts = [_unescape(text[1:-1])]
            while self._peek()[0] == "string":
                parts.append(_unescape(self._next()[1][1:-1]))
            return Setting(None, "string", "".join(parts), line=line, path=path)
        if kind == "float":
            return Setting(None, "float", float(text), line=line, path=path)
        if kind in ("int", "hex"):
            setting_type, value = _integer(text, 16 if kind == "hex" else 10)
            return Setting(None, setting_type, value, line=line, path=path)
        if kind == "name" and text.lower() in ("true", "false"):
            return Setting(None, "bool", text.lower() == "true", line=line, path=path)
        raise ConfigError("syntax error", line)


def loads(text: str) -> Setting:
    """Parse configuration text and return its root group."""
    return _Parser(text).parse()


def load(filename: str) -> Setting:
    """Read and parse a configuration file, returning its root group."""
    try:
        with open(filename, encoding="utf-8") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as error:
        raise ConfigError(f"could not read file {filename}") from error
    return loads(text)