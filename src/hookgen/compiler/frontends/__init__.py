"""
Compiler Frontends.

Frontends turn source text into the declaration model (`hookgen.compiler.model`).
"""
