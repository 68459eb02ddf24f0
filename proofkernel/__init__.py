"""
Propositional proof kernel.

Parse formulas, match and instantiate Hilbert axiom schemas, check
line-referenced proofs, and answer truth-table questions. Every operation is
a pure function of its arguments.

Example:
    >>> from proofkernel import MP, Step, check_proof
    >>> check_proof([Step(3, "B", MP(1, 2))], "B", ["A", "A->B"]).ok
    True
"""

from .checker import (CheckResult, LineError, Step, check_proof, check_refutation,
                      derived_lines, find_contradiction)
from .errors import (CheckError, CodecError, GoalMismatch, KernelError, LineReferenceError,
                     MissingInstantiation, ParseError, RuleViolation, SchemaMismatch,
                     UnboundVariable)
from .formula import And, Formula, Iff, Imp, Neg, Or, Var, equal, is_metavariable, parse, show, to_ascii
from .rules import (ADJ, AX, DS, HS, IFF, MP, MT, SIMP, Direction, Justification, Side, infer,
                    infer_step)
from .schema import AXIOMS, axiom_instance, instantiate, match_schema, metavariables
from .semantics import Entailment, TruthTable, collect_vars, entails, evaluate, is_tautology, truth_table

__version__ = "0.1.0"

__all__ = [
    "Formula", "Var", "Neg", "And", "Or", "Imp", "Iff",
    "parse", "show", "to_ascii", "equal", "is_metavariable",
    "AXIOMS", "match_schema", "instantiate", "metavariables", "axiom_instance",
    "Justification", "AX", "MP", "MT", "HS", "ADJ", "SIMP", "DS", "IFF", "Side", "Direction",
    "Step", "LineError", "CheckResult", "check_proof", "check_refutation",
    "derived_lines", "find_contradiction", "infer", "infer_step",
    "collect_vars", "evaluate", "is_tautology", "entails", "truth_table",
    "Entailment", "TruthTable",
    "KernelError", "ParseError", "MissingInstantiation", "UnboundVariable", "CodecError",
    "CheckError", "SchemaMismatch", "RuleViolation", "GoalMismatch", "LineReferenceError",
]
