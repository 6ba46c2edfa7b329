"""LEXOR language front end and tree-walk interpreter.


File: __init__.py
Version: 0.1.0
License: MIT
"""
