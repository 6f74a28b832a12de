r"""
Zero-dimensional ideals

Ideals of `\mathbb Q[x, y, z]` (degree reverse lexicographic ordering) and
of the local ring at the origin of `\mathbb Q[x, y]`, together with the
dimension of their quotients::

    sage: from gauss_manin.examples.ideals import twisted, local_node
    sage: from gauss_manin.border import border_data
    sage: [len(border_data(ex.ideal)[0]) == ex.dim for ex in [twisted, local_node]]
    [True, True]

The modular algorithms reproduce the direct computations::

    sage: from gauss_manin.modular import modular_janet_basis
    sage: from gauss_manin.janet import reduced_janet_basis
    sage: from gauss_manin.examples.ideals import cyclic3
    sage: I = cyclic3.ideal
    sage: modular_janet_basis(I).gens() == reduced_janet_basis(I).gens()
    True
"""
import collections

from sage.rings.polynomial.polynomial_ring_constructor import PolynomialRing
from sage.rings.rational_field import QQ

ZeroDimensionalIdeal = collections.namedtuple("ZeroDimensionalIdeal", ["ideal", "dim"])

R = PolynomialRing(QQ, ['x', 'y', 'z'], order='degrevlex')
x, y, z = R.gens()

twisted = ZeroDimensionalIdeal(
    ideal = R.ideal(x*y - z, y*z - x, x*z - y),
    dim = 5,
)

cyclic3 = ZeroDimensionalIdeal(
    ideal = R.ideal(x + y + z, x*y + y*z + z*x, x*y*z - 1),
    dim = 6,
)

L = PolynomialRing(QQ, ['x', 'y'], order='negdegrevlex')
u, v = L.gens()

local_node = ZeroDimensionalIdeal(
    ideal = L.ideal(u*v, u**2 + v**2 + u**3),
    dim = 4,
)
