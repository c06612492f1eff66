"""Repository facade: one function per (entity, verb).

Every function takes the injected ``Database`` as its first argument.
"""
