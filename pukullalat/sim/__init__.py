"""
Determinism-friendly simulation helpers.

This package contains the *small* primitives (RNG streams, random variates,
difficulty scaling, rules, contracts) that the entities and the session build on.
Nothing in here reads the wall clock or the global `random` module.
"""
