"""Bundled data files for dotlink."""
