"""Dep Inspector — dependency risk scoring for GitHub repositories.

Checks every direct npm dependency of a repo against the registry's latest
release and known advisories, and folds both into a 0–100 risk score.
"""

__version__ = "0.1.0"
