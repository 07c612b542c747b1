"""Core reconciliation logic for dotlink.

Path resolution, manifest persistence, pattern expansion and the
reconciler that ties them together.
"""
