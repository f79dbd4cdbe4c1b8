"""Simulation core: math, state, forces, integrators and diagnostics."""
