"""Runtime settings. Values are read from the environment once, at import."""

import os


def _env_int(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return default
    return int(raw)


class Config:
    # Explosion guards for the brute-force evaluator. These are approximations,
    # not soundness bounds: see semantics.is_tautology / semantics.entails.
    TAUTOLOGY_VAR_LIMIT = _env_int("PROOFKERNEL_TAUTOLOGY_LIMIT", 10)
    ENTAILMENT_EXACT_LIMIT = _env_int("PROOFKERNEL_ENTAILMENT_LIMIT", 12)
    ENTAILMENT_SAMPLES = _env_int("PROOFKERNEL_ENTAILMENT_SAMPLES", 4096)
    MAX_COUNTERMODELS = _env_int("PROOFKERNEL_MAX_COUNTERMODELS", 3)

    # Deepest syntax tree the parser accepts; printer, matcher and evaluator
    # all recurse over formulas.
    MAX_FORMULA_DEPTH = _env_int("PROOFKERNEL_MAX_DEPTH", 100)

    LOG_LEVEL = os.environ.get("PROOFKERNEL_LOG_LEVEL", "WARNING").upper()

    # Web front end
    DEBUG = os.environ.get("PROOFKERNEL_DEBUG", "False").lower() in ("true", "1", "yes")
    HOST = os.environ.get("PROOFKERNEL_HOST", "127.0.0.1")
    PORT = _env_int("PROOFKERNEL_PORT", 5000)
