r"""
Isolated hypersurface singularities

Each entry records a germ `f` in the local ring at the origin of
`\mathbb Q[x, y]`, its Milnor number, the smallest `\kappa` with
`f^\kappa` in the Jacobian ideal, and the fractional parts of the
eigenvalues of :func:`~gauss_manin.monodromy.monodromy_B`, sorted::

    sage: from gauss_manin.examples.singularities import e6
    sage: from gauss_manin.brieskorn import jacoblift, milnor_number
    sage: from gauss_manin.monodromy import monodromy_B
    sage: milnor_number(e6.f) == e6.mu
    True
    sage: jacoblift(e6.f).kappa == e6.kappa
    True
    sage: A = monodromy_B(e6.f)
    sage: sorted(r - r.floor() for r, m in A.charpoly().roots(QQ) for _ in range(m)) == e6.frac
    True

The singularity `T_{2,6,6}` is the smallest one here where `f` does not
belong to its Jacobian ideal::

    sage: from gauss_manin.examples.singularities import t266
    sage: jacoblift(t266.f).kappa
    2
    sage: A = monodromy_B(t266.f, opt=1)  # long time
    sage: sorted(r - r.floor() for r, m in A.charpoly().roots(QQ) for _ in range(m)) == t266.frac  # long time
    True
"""
import collections

from sage.rings.polynomial.polynomial_ring_constructor import PolynomialRing
from sage.rings.rational_field import QQ

Singularity = collections.namedtuple("Singularity", ["f", "mu", "kappa", "frac"])

R = PolynomialRing(QQ, ['x', 'y'], order='negdegrevlex')
x, y = R.gens()

a1 = Singularity(
    f = x**2 + y**2,
    mu = 1,
    kappa = 1,
    frac = [0],
)

e6_qh = Singularity(
    f = x**3 + y**4,
    mu = 6,
    kappa = 1,
    frac = [QQ(1)/12, QQ(1)/6, QQ(5)/12, QQ(7)/12, QQ(5)/6, QQ(11)/12],
)

e6 = Singularity(
    f = x**3 + y**4 + x*y**3,
    mu = 6,
    kappa = 1,
    frac = e6_qh.frac,
)

t266 = Singularity(
    f = x**2*y**2 + x**6 + y**6,
    mu = 13,
    kappa = 2,
    frac = [0]*3 + [QQ(k)/6 for k in range(1, 6) for _ in range(2)],
)
