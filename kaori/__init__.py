"""Lexer, parser, name resolver and bytecode virtual machine for the Kaori language."""

__version__ = "0.1.0"