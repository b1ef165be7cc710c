"""Slaytion: a branching-narrative engine driven by numbered choices."""
