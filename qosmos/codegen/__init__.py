"""Code generation backends.

Each backend lowers a Circuit to the source text of one external quantum
programming notation.  Placements are emitted in ascending
``(column, qubit)`` order and every backend maps all gate kinds.
"""
