"""
Propositional formulas: abstract syntax, parser and canonical printer.
----------------------------------------------------------------------
Notation accepted by the parser (precedence high to low):

  ¬ ~            negation
  ∧ ^ &          conjunction     (left associative)
  ∨ v ||         disjunction     (left associative)
  → ->           implication     (right associative)
  ↔ <-> <=>      biconditional   (right associative)

Variables start with an uppercase Latin or Greek letter and continue with
uppercase letters, Greek letters, digits or underscores. Lowercase Latin
letters never join a name, so ``AvB`` reads as ``A ∨ B``. Names that start
with a Greek letter are schema metavariables.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple

from .config import Config
from .errors import ParseError

# =========================
# Abstract syntax
# =========================

@dataclass(frozen=True)
class Formula:
    """Base of the closed set of formula nodes; equality is structural."""
    def pretty(self) -> str: return show(self)
    def __str__(self) -> str: return show(self)

@dataclass(frozen=True)
class Var(Formula):
    name: str

@dataclass(frozen=True)
class Neg(Formula):
    inner: Formula

@dataclass(frozen=True)
class And(Formula):
    left: Formula
    right: Formula

@dataclass(frozen=True)
class Or(Formula):
    left: Formula
    right: Formula

@dataclass(frozen=True)
class Imp(Formula):
    left: Formula
    right: Formula

@dataclass(frozen=True)
class Iff(Formula):
    left: Formula
    right: Formula


BINARY = (And, Or, Imp, Iff)


def is_greek(ch: str) -> bool:
    return "Α" <= ch <= "Ω" or "α" <= ch <= "ω"

def is_metavariable(name: str) -> bool:
    return bool(name) and is_greek(name[0])

def equal(a: Formula, b: Formula) -> bool:
    """Structural equality, the only notion of sameness used by the checker."""
    return a == b

def depth(f: Formula) -> int:
    """Height of the syntax tree, computed without recursion."""
    best = 0
    stack = [(f, 1)]
    while stack:
        node, d = stack.pop()
        best = max(best, d)
        if isinstance(node, Neg):
            stack.append((node.inner, d + 1))
        elif isinstance(node, BINARY):
            stack.append((node.left, d + 1))
            stack.append((node.right, d + 1))
    return best

# =========================
# Lexer
# =========================

NOT, AND, OR, IMP, IFF, LPAREN, RPAREN, VAR, END = (
    "NOT", "AND", "OR", "IMP", "IFF", "LPAREN", "RPAREN", "VAR", "END")

# Longest spellings first so "<->" wins over "<=" and "->".
SYMBOLS: List[Tuple[str, str]] = [
    ("<->", IFF), ("<=>", IFF), ("->", IMP), ("||", OR),
    ("¬", NOT), ("~", NOT),
    ("∧", AND), ("^", AND), ("&", AND),
    ("∨", OR), ("v", OR),
    ("→", IMP), ("↔", IFF),
    ("(", LPAREN), (")", RPAREN),
]

Token = Tuple[str, str, int]  # kind, text, offset


def _ident_start(ch: str) -> bool:
    return "A" <= ch <= "Z" or is_greek(ch)

def _ident_part(ch: str) -> bool:
    return _ident_start(ch) or ch.isdigit() or ch == "_"


def tokenize(text: str) -> List[Token]:
    toks: List[Token] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if _ident_start(ch):
            j = i + 1
            while j < n and _ident_part(text[j]):
                j += 1
            toks.append((VAR, text[i:j], i))
            i = j
            continue
        for spelling, kind in SYMBOLS:
            if text.startswith(spelling, i):
                toks.append((kind, spelling, i))
                i += len(spelling)
                break
        else:
            if ch.isalnum() or ch == "_":
                raise ParseError(f"invalid identifier starting with '{ch}'", i)
            raise ParseError(f"unknown token '{ch}'", i)
    toks.append((END, "", n))
    return toks

# =========================
# Recursive-descent parser
# =========================

class FormulaParser:
    """
    Iff := Imp ('↔' Iff)?
    Imp := Or ('→' Imp)?
    Or  := And ('∨' And)*
    And := Neg ('∧' Neg)*
    Neg := '¬' Neg | Atom
    Atom := Var | '(' Iff ')'
    """

    def __init__(self, text: str):
        self.text = text
        self.toks = tokenize(text)
        self.pos = 0

    def peek(self) -> Token:
        return self.toks[self.pos]

    def advance(self) -> Token:
        tok = self.toks[self.pos]
        self.pos += 1
        return tok

    def parse(self) -> Formula:
        try:
            f = self._parse_iff()
        except RecursionError:
            raise ParseError("formula nested too deeply", self.peek()[2]) from None
        kind, text, offset = self.peek()
        if kind == RPAREN:
            raise ParseError("unbalanced ')'", offset)
        if kind != END:
            raise ParseError(f"unexpected '{text}' after complete formula", offset)
        if depth(f) > Config.MAX_FORMULA_DEPTH:
            raise ParseError("formula nested too deeply", 0)
        return f

    def _parse_iff(self) -> Formula:
        left = self._parse_imp()
        if self.peek()[0] == IFF:
            self.advance()
            return Iff(left, self._parse_iff())
        return left

    def _parse_imp(self) -> Formula:
        left = self._parse_or()
        if self.peek()[0] == IMP:
            self.advance()
            return Imp(left, self._parse_imp())
        return left

    def _parse_or(self) -> Formula:
        left = self._parse_and()
        while self.peek()[0] == OR:
            self.advance()
            left = Or(left, self._parse_and())
        return left

    def _parse_and(self) -> Formula:
        left = self._parse_neg()
        while self.peek()[0] == AND:
            self.advance()
            left = And(left, self._parse_neg())
        return left

    def _parse_neg(self) -> Formula:
        if self.peek()[0] == NOT:
            self.advance()
            return Neg(self._parse_neg())
        return self._parse_atom()

    def _parse_atom(self) -> Formula:
        kind, text, offset = self.advance()
        if kind == VAR:
            return Var(text)
        if kind == LPAREN:
            inner = self._parse_iff()
            close_kind, _, close_offset = self.peek()
            if close_kind != RPAREN:
                raise ParseError("unbalanced '(': expected ')'", close_offset)
            self.advance()
            return inner
        if kind == END:
            raise ParseError("unexpected end of formula", offset)
        if kind == RPAREN:
            raise ParseError("unbalanced ')'", offset)
        raise ParseError(f"expected a formula before '{text}'", offset)


def parse(text: str) -> Formula:
    """Parse formula text; raises ParseError with the offending offset."""
    return FormulaParser(text).parse()

# =========================
# Canonical printer
# =========================

GLYPHS = {And: "∧", Or: "∨", Imp: "->", Iff: "↔"}
PRECEDENCE = {Iff: 1, Imp: 2, Or: 3, And: 4, Neg: 5, Var: 6}
RIGHT_ASSOCIATIVE = (Imp, Iff)


def precedence(f: Formula) -> int:
    return PRECEDENCE[type(f)]

def _wrap(f: Formula, parens: bool) -> str:
    return f"({show(f)})" if parens else show(f)

def show(f: Formula) -> str:
    """Canonical infix text with only the parentheses the grammar needs."""
    if isinstance(f, Var):
        return f.name
    if isinstance(f, Neg):
        return "¬" + _wrap(f.inner, precedence(f.inner) < PRECEDENCE[Neg])
    if isinstance(f, BINARY):
        p = precedence(f)
        if isinstance(f, RIGHT_ASSOCIATIVE):
            lp, rp = precedence(f.left) <= p, precedence(f.right) < p
        else:
            lp, rp = precedence(f.left) < p, precedence(f.right) <= p
        return _wrap(f.left, lp) + GLYPHS[type(f)] + _wrap(f.right, rp)
    raise TypeError(f"not a formula: {f!r}")


ASCII_GLYPHS = [("¬", "~"), ("∧", "^"), ("∨", "v"), ("↔", "<->"), ("→", "->")]

def to_ascii(text: str) -> str:
    """Display transform applied after show(); the result still parses."""
    for glyph, ascii_form in ASCII_GLYPHS:
        text = text.replace(glyph, ascii_form)
    return text
