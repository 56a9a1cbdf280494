"""
crudgen — turn a plain-English API description into a project tree.
"""

__version__ = "0.1.0"
