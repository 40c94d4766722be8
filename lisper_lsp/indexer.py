from __future__ import annotations

"""
Lightweight indexer for Lisper files without evaluating code.

We scan for top-level forms and build an index for:
- definitions: (defun name (lambda (params) ...)), (defun name (params) ...),
  (def name ...), (define name ...)
- diagnostics: the first lex/parse error reported by the real reader

The definition scan is tolerant: it uses a lightweight token regex so that
partial/incomplete buffers still yield symbols while the user types.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import re

from lisper.errors import LisperLexError, LisperParseError, LisperResourceError
from lisper.reader.parser import parse

# Simple token patterns for scanning
TOKEN_REGEX = re.compile(
    r"\s+|;.*$|\(|\)|\"(?:\\.|[^\"\\])*\"?|[^\s()\";]+",
    re.MULTILINE,
)

DEFINING_FORMS = {"defun": "function", "def": "var", "define": "var"}


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int
    params: List[str] = field(default_factory=list)

    def signature(self) -> str:
        return f"({' '.join([self.name, *self.params])})"


@dataclass
class DiagnosticInfo:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    diagnostics: List[DiagnosticInfo] = field(default_factory=list)


def _iter_tokens(text: str):
    for m in TOKEN_REGEX.finditer(text):
        tok = m.group(0)
        if not tok or tok.isspace() or tok.startswith(";"):
            continue
        yield tok, m.start()


def position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def collect_diagnostics(text: str) -> List[DiagnosticInfo]:
    """Run the reader over `text`; report the first error it raises."""
    try:
        parse(text)
    except (LisperLexError, LisperParseError) as err:
        line, col = position_from_offset(text, err.offset or 0)
        return [DiagnosticInfo(message=str(err), line=line, col=col)]
    except LisperResourceError as err:
        return [DiagnosticInfo(message=str(err), line=0, col=0)]
    return []


def _read_params(tokens: List[Tuple[str, int]], j: int) -> List[str]:
    """Collect symbols of the parameter list opening at tokens[j] ('(')."""
    params: List[str] = []
    if j >= len(tokens) or tokens[j][0] != "(":
        return params
    j += 1
    while j < len(tokens) and tokens[j][0] not in ("(", ")"):
        params.append(tokens[j][0])
        j += 1
    return params


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex(diagnostics=collect_diagnostics(text))
    tokens = list(_iter_tokens(text))

    depth = 0
    i = 0
    while i < len(tokens):
        tok, start = tokens[i]
        if tok == "(":
            depth += 1
            head = tokens[i + 1][0] if i + 1 < len(tokens) else None
            if depth == 1 and head in DEFINING_FORMS and i + 2 < len(tokens):
                name, name_start = tokens[i + 2]
                if name not in ("(", ")") and not name.startswith('"'):
                    kind = DEFINING_FORMS[head]
                    params: List[str] = []
                    j = i + 3
                    if head == "defun":
                        # (defun name (lambda (params) ...)) or (defun name (params) ...)
                        if j + 1 < len(tokens) and tokens[j][0] == "(" and tokens[j + 1][0] == "lambda":
                            j += 2
                        params = _read_params(tokens, j)
                    elif j + 1 < len(tokens) and tokens[j][0] == "(" and tokens[j + 1][0] == "lambda":
                        kind = "function"
                        params = _read_params(tokens, j + 2)
                    line, col = position_from_offset(text, name_start)
                    idx.symbols[name] = SymbolDef(name=name, kind=kind, line=line, col=col, params=params)
        elif tok == ")":
            depth = max(depth - 1, 0)
        i += 1

    return idx


# Builtin signatures for quick hover/completion without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    "+": "(+ n &rest nums)",
    "-": "(- n &rest nums)",
    "*": "(* n &rest nums)",
    "/": "(/ n &rest nums)",
    "mod": "(mod n d)",
    "=": "(= &rest xs)",
    "!=": "(!= &rest xs)",
    "<": "(< &rest nums)",
    "<=": "(<= &rest nums)",
    ">": "(> &rest nums)",
    ">=": "(>= &rest nums)",
    "and": "(and b &rest bs)",
    "or": "(or b &rest bs)",
    "not": "(not b)",
    "list": "(list &rest xs)",
    "cons": "(cons x xs)",
    "car": "(car xs)",
    "cdr": "(cdr xs)",
    "null?": "(null? xs)",
    "len": "(len xs)",
    "concat": "(concat xs &rest more)",
    "print": "(print x)",
}

SPECIAL_FORM_SIGNATURES: Dict[str, str] = {
    "if": "(if cond then [else])",
    "lambda": "(lambda (params) body...)",
    "defun": "(defun name (lambda (params) body))",
    "def": "(def name value)",
    "define": "(define name value)",
    "set!": "(set! name value)",
    "quote": "(quote expr)",
    "progn": "(progn expr...)",
    "begin": "(begin expr...)",
}


def hover_text(idx: DocumentIndex, word: str) -> Optional[str]:
    if word in SPECIAL_FORM_SIGNATURES:
        return f"{SPECIAL_FORM_SIGNATURES[word]} (special form)"
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    sdef = idx.symbols.get(word)
    if sdef is None:
        return None
    if sdef.kind == "function":
        return f"{sdef.signature()} (defined at {sdef.line + 1}:{sdef.col + 1})"
    return f"{word} - {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"


def completion_candidates(idx: DocumentIndex) -> List[Tuple[str, str, str]]:
    """(label, kind, detail) for special forms, builtins and document symbols."""
    items = [(name, "keyword", sig) for name, sig in SPECIAL_FORM_SIGNATURES.items()]
    items += [(name, "function", sig) for name, sig in BUILTIN_SIGNATURES.items()]
    for name, sdef in idx.symbols.items():
        detail = sdef.signature() if sdef.kind == "function" else sdef.kind
        items.append((name, sdef.kind, detail))
    return items
