from __future__ import annotations

import html
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class Grammar:
    """Ordered token rules compiled into one alternation; earlier rules win."""

    name: str
    rules: tuple[tuple[str, str], ...] = ()
    flags: int = 0
    pattern: re.Pattern[str] | None = field(init=False, repr=False, compare=False)
    _tokens: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        tokens = {f"t{idx}": token for idx, (token, _regex) in enumerate(self.rules)}
        alternation = "|".join(f"(?P<t{idx}>{regex})" for idx, (_token, regex) in enumerate(self.rules))
        object.__setattr__(self, "_tokens", tokens)
        object.__setattr__(self, "pattern", re.compile(alternation, self.flags) if self.rules else None)

    def token_for(self, group: str) -> str:
        return self._tokens[group]


def highlight(code: str, language: str) -> str:
    """Return `code` as escaped HTML with `<span class="tok-...">` token markup.

    Unknown languages fall back to plain text: the result is only escaped.
    """
    grammar = GRAMMARS.get(language, PLAIN_TEXT)
    if grammar.pattern is None:
        return _escape(code)

    out: list[str] = []
    pos = 0
    for match in grammar.pattern.finditer(code):
        start, end = match.span()
        if start == end or match.lastgroup is None:
            continue
        if start > pos:
            out.append(_escape(code[pos:start]))
        token = grammar.token_for(match.lastgroup)
        out.append(f'<span class="tok-{token}">{_escape(match.group())}</span>')
        pos = end
    out.append(_escape(code[pos:]))
    return "".join(out)


def supported_languages() -> list[str]:
    return sorted(key for key, grammar in GRAMMARS.items() if grammar is not PLAIN_TEXT)


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def _words(*words: str) -> str:
    return r"\b(?:" + "|".join(sorted(words, key=len, reverse=True)) + r")\b"


_LINE_COMMENT_SLASH = r"//[^\n]*"
_BLOCK_COMMENT = r"/\*[\s\S]*?(?:\*/|\Z)"
_HASH_COMMENT = r"(?:(?<=\s)|^)#[^\n]*"
_DQ_STRING = r'"(?:[^"\\\n]|\\.)*"?'
_SQ_STRING = r"'(?:[^'\\\n]|\\.)*'?"
_NUMBER = r"\b(?:0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oO][0-7_]+|[0-9][0-9_]*(?:\.[0-9_]+)?(?:[eE][+-]?[0-9]+)?)[a-zA-Z]*\b"
_FUNCTION_CALL = r"\b[A-Za-z_$][\w$]*(?=\s*\()"
_OPERATOR = r"[+\-*/%=&|^!<>?:~]+"
_PUNCTUATION = r"[{}\[\]();,.]"

_JS_KEYWORDS = (
    "async", "await", "break", "case", "catch", "class", "const", "continue", "debugger", "default",
    "delete", "do", "else", "export", "extends", "finally", "for", "from", "function", "if", "import",
    "in", "instanceof", "let", "new", "of", "return", "static", "super", "switch", "this", "throw",
    "try", "typeof", "var", "void", "while", "with", "yield",
)  # fmt: skip
_JS_BUILTINS = (
    "Array", "Boolean", "Date", "Error", "JSON", "Map", "Math", "Number", "Object", "Promise",
    "RegExp", "Set", "String", "Symbol", "console", "document", "window",
)  # fmt: skip
_TS_KEYWORDS = (
    "abstract", "any", "as", "boolean", "declare", "enum", "implements", "infer", "interface",
    "keyof", "namespace", "never", "number", "private", "protected", "public", "readonly",
    "string", "type", "unknown",
)  # fmt: skip
_JS_LITERALS = ("true", "false", "null", "undefined", "NaN", "Infinity")


def _javascript_rules(*extra_keywords: str) -> tuple[tuple[str, str], ...]:
    return (
        ("comment", _LINE_COMMENT_SLASH),
        ("comment", _BLOCK_COMMENT),
        ("string", r"`(?:[^`\\]|\\.)*`?"),
        ("string", _DQ_STRING),
        ("string", _SQ_STRING),
        ("boolean", _words(*_JS_LITERALS)),
        ("keyword", _words(*_JS_KEYWORDS, *extra_keywords)),
        ("builtin", _words(*_JS_BUILTINS)),
        ("number", _NUMBER),
        ("function", _FUNCTION_CALL),
        ("operator", _OPERATOR),
        ("punctuation", _PUNCTUATION),
    )


_PY_KEYWORDS = (
    "and", "as", "assert", "async", "await", "break", "class", "continue", "def", "del", "elif",
    "else", "except", "finally", "for", "from", "global", "if", "import", "in", "is", "lambda",
    "match", "case", "nonlocal", "not", "or", "pass", "raise", "return", "try", "while", "with",
    "yield",
)  # fmt: skip
_PY_BUILTINS = (
    "abs", "all", "any", "bool", "dict", "enumerate", "filter", "float", "int", "isinstance", "len",
    "list", "map", "max", "min", "open", "print", "range", "repr", "reversed", "set", "sorted", "str",
    "sum", "super", "tuple", "type", "zip", "self", "cls",
)  # fmt: skip

PYTHON = Grammar(
    name="python",
    rules=(
        ("comment", r"#[^\n]*"),
        ("string", r"\b[rRbBuUfF]{0,2}(?:\"\"\"[\s\S]*?(?:\"\"\"|\Z)|'''[\s\S]*?(?:'''|\Z))"),
        ("string", r"(?:\"\"\"[\s\S]*?(?:\"\"\"|\Z)|'''[\s\S]*?(?:'''|\Z))"),
        ("string", r"\b[rRbBuUfF]{1,2}(?=[\"'])(?:" + _DQ_STRING + "|" + _SQ_STRING + ")"),
        ("string", _DQ_STRING),
        ("string", _SQ_STRING),
        ("meta", r"^[ \t]*@[\w.]+"),
        ("boolean", _words("True", "False", "None")),
        ("keyword", _words(*_PY_KEYWORDS)),
        ("builtin", _words(*_PY_BUILTINS)),
        ("number", _NUMBER),
        ("function", _FUNCTION_CALL),
        ("operator", _OPERATOR),
        ("punctuation", _PUNCTUATION),
    ),
    flags=re.MULTILINE,
)

_C_KEYWORDS = (
    "auto", "break", "case", "char", "const", "continue", "default", "do", "double", "else", "enum",
    "extern", "float", "for", "goto", "if", "inline", "int", "long", "register", "restrict",
    "return", "short", "signed", "sizeof", "static", "struct", "switch", "typedef", "union",
    "unsigned", "void", "volatile", "while",
)  # fmt: skip
_CPP_KEYWORDS = (
    "bool", "catch", "class", "constexpr", "delete", "explicit", "friend", "namespace", "new",
    "noexcept", "nullptr", "operator", "override", "private", "protected", "public", "template",
    "this", "throw", "try", "typename", "using", "virtual",
)  # fmt: skip
_JAVA_KEYWORDS = (
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char", "class", "const",
    "continue", "default", "do", "double", "else", "enum", "extends", "final", "finally", "float",
    "for", "if", "implements", "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "record", "return", "short", "static", "super",
    "switch", "synchronized", "this", "throw", "throws", "try", "var", "void", "volatile", "while",
)  # fmt: skip
_CSHARP_KEYWORDS = (
    "abstract", "as", "async", "await", "base", "bool", "break", "case", "catch", "class", "const",
    "continue", "decimal", "default", "delegate", "do", "double", "else", "enum", "event", "explicit",
    "float", "for", "foreach", "get", "if", "in", "int", "interface", "internal", "is", "lock", "long",
    "namespace", "new", "object", "out", "override", "private", "protected", "public", "readonly",
    "ref", "return", "sealed", "set", "static", "string", "struct", "switch", "this", "throw", "try",
    "using", "var", "virtual", "void", "while",
)  # fmt: skip
_GO_KEYWORDS = (
    "break", "case", "chan", "const", "continue", "default", "defer", "else", "fallthrough", "for",
    "func", "go", "goto", "if", "import", "interface", "map", "package", "range", "return", "select",
    "struct", "switch", "type", "var",
)  # fmt: skip
_GO_BUILTINS = (
    "append", "bool", "byte", "cap", "close", "error", "float64", "int", "int64", "len", "make",
    "new", "panic", "recover", "rune", "string", "uint",
)  # fmt: skip
_RUST_KEYWORDS = (
    "as", "async", "await", "break", "const", "continue", "crate", "dyn", "else", "enum", "extern",
    "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod", "move", "mut", "pub", "ref",
    "return", "self", "Self", "static", "struct", "super", "trait", "type", "unsafe", "use", "where",
    "while",
)  # fmt: skip
_RUST_BUILTINS = (
    "Box", "Option", "Result", "Some", "None", "Ok", "Err", "String", "Vec", "bool", "char", "f32",
    "f64", "i32", "i64", "isize", "str", "u8", "u32", "u64", "usize",
)  # fmt: skip


def _c_family_rules(
    keywords: tuple[str, ...],
    *,
    builtins: tuple[str, ...] = (),
    literals: tuple[str, ...] = ("true", "false", "null"),
    preprocessor: bool = False,
) -> tuple[tuple[str, str], ...]:
    rules: list[tuple[str, str]] = [
        ("comment", _LINE_COMMENT_SLASH),
        ("comment", _BLOCK_COMMENT),
    ]
    if preprocessor:
        rules.append(("meta", r"^[ \t]*#[ \t]*\w+[^\n]*"))
    rules.extend(
        [
            ("string", _DQ_STRING),
            ("string", _SQ_STRING),
            ("boolean", _words(*literals)),
            ("keyword", _words(*keywords)),
        ],
    )
    if builtins:
        rules.append(("builtin", _words(*builtins)))
    rules.extend(
        [
            ("number", _NUMBER),
            ("function", _FUNCTION_CALL),
            ("operator", _OPERATOR),
            ("punctuation", _PUNCTUATION),
        ],
    )
    return tuple(rules)


JAVASCRIPT = Grammar(name="javascript", rules=_javascript_rules())
TYPESCRIPT = Grammar(name="typescript", rules=_javascript_rules(*_TS_KEYWORDS))
JAVA = Grammar(name="java", rules=(("meta", r"@\w+"), *_c_family_rules(_JAVA_KEYWORDS)))
C = Grammar(
    name="c",
    rules=_c_family_rules(_C_KEYWORDS, literals=("NULL", "true", "false"), preprocessor=True),
    flags=re.MULTILINE,
)
CPP = Grammar(
    name="cpp",
    rules=_c_family_rules(
        (*_C_KEYWORDS, *_CPP_KEYWORDS),
        builtins=("std", "string", "vector", "cout", "cin", "endl", "size_t"),
        literals=("true", "false", "nullptr", "NULL"),
        preprocessor=True,
    ),
    flags=re.MULTILINE,
)
CSHARP = Grammar(
    name="csharp",
    rules=(
        ("string", r'@"(?:[^"]|"")*"?'),
        ("string", r'\$"(?:[^"\\\n]|\\.)*"?'),
        *_c_family_rules(_CSHARP_KEYWORDS, builtins=("Console", "List", "Task", "var")),
    ),
)
GO = Grammar(
    name="go",
    rules=(
        ("string", r"`[^`]*`?"),
        *_c_family_rules(_GO_KEYWORDS, builtins=_GO_BUILTINS, literals=("true", "false", "nil", "iota")),
    ),
)
RUST = Grammar(
    name="rust",
    rules=(
        ("comment", _LINE_COMMENT_SLASH),
        ("comment", _BLOCK_COMMENT),
        ("string", r'\bb?r#*"[\s\S]*?(?:"#*|\Z)'),
        ("string", _DQ_STRING),
        ("string", r"'(?:[^'\\\n]|\\.)'"),
        ("meta", r"#!?\[[^\]\n]*\]?"),
        ("variable", r"'[A-Za-z_]\w*"),
        ("boolean", _words("true", "false")),
        ("keyword", _words(*_RUST_KEYWORDS)),
        ("builtin", _words(*_RUST_BUILTINS)),
        ("function", r"\b[A-Za-z_]\w*!(?!=)"),
        ("number", _NUMBER),
        ("function", _FUNCTION_CALL),
        ("operator", _OPERATOR),
        ("punctuation", _PUNCTUATION),
    ),
)

_SQL_KEYWORDS = (
    "add", "all", "alter", "and", "as", "asc", "between", "by", "case", "check", "column", "constraint",
    "create", "cross", "database", "default", "delete", "desc", "distinct", "drop", "else", "end",
    "exists", "foreign", "from", "full", "group", "having", "if", "in", "index", "inner", "insert",
    "into", "is", "join", "key", "left", "like", "limit", "not", "offset", "on", "or", "order",
    "outer", "primary", "references", "returning", "right", "select", "set", "table", "then",
    "union", "unique", "update", "values", "view", "when", "where", "with",
)  # fmt: skip
_SQL_FUNCTIONS = ("avg", "coalesce", "count", "lower", "max", "min", "now", "sum", "upper")

SQL = Grammar(
    name="sql",
    rules=(
        ("comment", r"--[^\n]*"),
        ("comment", _BLOCK_COMMENT),
        ("string", r"'(?:[^']|'')*'?"),
        ("variable", r'"(?:[^"]|"")*"?'),
        ("boolean", r"(?i:\b(?:true|false|null)\b)"),
        ("builtin", r"(?i:" + _words(*_SQL_FUNCTIONS) + r")(?=\s*\()"),
        ("keyword", r"(?i:" + _words(*_SQL_KEYWORDS) + r")"),
        ("number", _NUMBER),
        ("operator", r"[+\-*/%=<>!|]+"),
        ("punctuation", r"[();,.]"),
    ),
)

JSON = Grammar(
    name="json",
    rules=(
        ("comment", _LINE_COMMENT_SLASH),
        ("property", r'"(?:[^"\\\n]|\\.)*"(?=\s*:)'),
        ("string", _DQ_STRING),
        ("boolean", _words("true", "false", "null")),
        ("number", r"-?\b[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?\b"),
        ("punctuation", r"[{}\[\]:,]"),
    ),
)

YAML = Grammar(
    name="yaml",
    rules=(
        ("comment", _HASH_COMMENT),
        ("meta", r"^(?:---|\.\.\.)[ \t]*$"),
        ("property", r"[\w.\-]+(?=[ \t]*:(?:[ \t]|$))"),
        ("string", _DQ_STRING),
        ("string", _SQ_STRING),
        ("variable", r"[&*][\w\-]+"),
        ("boolean", _words("true", "false", "yes", "no", "null", "True", "False", "Yes", "No", "NULL")),
        ("number", r"(?<![\w.])-?[0-9]+(?:\.[0-9]+)?(?![\w.])"),
        ("punctuation", r"[:\-\[\]{},|>]"),
    ),
    flags=re.MULTILINE,
)

_SHELL_KEYWORDS = (
    "case", "do", "done", "elif", "else", "esac", "export", "fi", "for", "function", "if", "in",
    "local", "readonly", "return", "select", "then", "until", "while",
)  # fmt: skip
_SHELL_BUILTINS = (
    "apt", "awk", "brew", "cat", "cd", "chmod", "cp", "curl", "docker", "echo", "git", "grep", "ls",
    "mkdir", "mv", "node", "npm", "pip", "printf", "pwd", "python", "rm", "sed", "source", "sudo",
    "tar", "touch", "wget",
)  # fmt: skip

SHELL = Grammar(
    name="shell",
    rules=(
        ("comment", _HASH_COMMENT),
        ("meta", r"^\$(?=[ \t])"),
        ("string", r'"(?:[^"\\]|\\.)*"?'),
        ("string", r"'[^']*'?"),
        ("variable", r"\$(?:\{[^}\n]*\}?|\w+|[@#?$!*0-9])"),
        ("keyword", _words(*_SHELL_KEYWORDS)),
        ("builtin", _words(*_SHELL_BUILTINS)),
        ("parameter", r"(?<=\s)--?[\w][\w\-]*"),
        ("number", r"\b[0-9]+\b"),
        ("operator", r"&&|\|\||[|><;&=]"),
    ),
    flags=re.MULTILINE,
)

CSS = Grammar(
    name="css",
    rules=(
        ("comment", _BLOCK_COMMENT),
        ("keyword", r"@[\w\-]+"),
        ("string", _DQ_STRING),
        ("string", _SQ_STRING),
        ("property", r"(?<![\w\-])[\w\-]+(?=\s*:[^:{};]*;)"),
        ("number", r"#[0-9a-fA-F]{3,8}\b"),
        ("function", r"[\w\-]+(?=\()"),
        ("number", r"(?<![\w\-])-?[0-9]*\.?[0-9]+(?:%|[a-zA-Z]+)?"),
        ("keyword", r"!important\b"),
        ("selector", r"[.#][A-Za-z_\-][\w\-]*"),
        ("punctuation", r"[{}();:,>+~\[\]=]"),
    ),
)

MARKUP = Grammar(
    name="markup",
    rules=(
        ("comment", r"<!--[\s\S]*?(?:-->|\Z)"),
        ("meta", r"<![A-Za-z][^>]*>?"),
        ("meta", r"<\?[\s\S]*?(?:\?>|\Z)"),
        ("tag", r"</?[A-Za-z][\w:.\-]*"),
        ("attr-name", r"(?<=\s)[\w:.\-@]+(?==)"),
        ("attr-value", r'"[^"]*"|\'[^\']*\''),
        ("punctuation", r"/?>"),
        ("entity", r"&(?:#[0-9]+|#x[0-9a-fA-F]+|[A-Za-z]+);"),
    ),
)

PLAIN_TEXT = Grammar(name="text")

GRAMMARS: Mapping[str, Grammar] = MappingProxyType(
    {
        "javascript": JAVASCRIPT,
        "js": JAVASCRIPT,
        "jsx": JAVASCRIPT,
        "mjs": JAVASCRIPT,
        "cjs": JAVASCRIPT,
        "typescript": TYPESCRIPT,
        "ts": TYPESCRIPT,
        "tsx": TYPESCRIPT,
        "python": PYTHON,
        "py": PYTHON,
        "python3": PYTHON,
        "java": JAVA,
        "c": C,
        "h": C,
        "cpp": CPP,
        "c++": CPP,
        "cc": CPP,
        "cxx": CPP,
        "hpp": CPP,
        "csharp": CSHARP,
        "cs": CSHARP,
        "c#": CSHARP,
        "go": GO,
        "golang": GO,
        "rust": RUST,
        "rs": RUST,
        "sql": SQL,
        "mysql": SQL,
        "postgresql": SQL,
        "sqlite": SQL,
        "json": JSON,
        "jsonc": JSON,
        "yaml": YAML,
        "yml": YAML,
        "bash": SHELL,
        "sh": SHELL,
        "shell": SHELL,
        "zsh": SHELL,
        "console": SHELL,
        "css": CSS,
        "html": MARKUP,
        "htm": MARKUP,
        "xml": MARKUP,
        "svg": MARKUP,
        "markup": MARKUP,
        "text": PLAIN_TEXT,
        "plaintext": PLAIN_TEXT,
        "txt": PLAIN_TEXT,
    },
)
