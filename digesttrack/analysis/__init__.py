"""Derivation pipeline: coverage, links, severity, exposures, correlation."""
