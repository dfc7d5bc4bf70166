"""
Deterministic calculation engine.

Plain arithmetic over validated input. Each formula lives in its own module
and is reachable through the registry by its formula key.
"""
