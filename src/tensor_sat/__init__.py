"""
Tensor SAT: Boolean Tensors over Pluggable Boolean Algebras

Foundation:
    - Cells are elements of a boolean algebra (concrete, trivial or symbolic)
    - Tensors are shape-tagged generic vectors, bit-packed for booleans
    - Constraint systems are tensor equations, solved by a SAT engine
"""

__version__ = "0.1.0"
