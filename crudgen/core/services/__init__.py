"""
Core services — prompt composition, parsing, materialization, workspace.
"""
