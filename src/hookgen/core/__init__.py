"""
Core Package.

Contains the expansion backend:
- Declaration Scanner
- Property and Function Synthesizers
- Extension Assembler
- Macro Registry and Expansion Engine
"""
