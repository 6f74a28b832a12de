"""
Auxiliary functions
"""

#############################################################################
#  Copyright (C) 2024 The gauss_manin developers                            #
#                                                                           #
#  Distributed under the terms of the GNU General Public License (GPL)      #
#  either version 2, or (at your option) any later version                  #
#                                                                           #
#  https://www.gnu.org/licenses/                                            #
#############################################################################

import itertools

from sage.arith.all import gcd, lcm
from sage.geometry.polyhedron.constructor import Polyhedron
from sage.rings.integer_ring import ZZ
from sage.rings.polynomial.polynomial_element import Polynomial
from sage.rings.rational_field import QQ


def jet(p, n):
    """
    Returns the terms of total degree at most n of the polynomial p.

    Works for univariate and multivariate polynomials. For n < 0 the result is zero.

    EXAMPLES::

        sage: from gauss_manin.tools import jet
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: jet(1 + x + x*y + y^3, 2)
        1 + x + x*y
        sage: jet(x + y, -1)
        0
        sage: P.<t> = QQ[]
        sage: jet(1 + t + t^2 + t^3, 1)
        t + 1
    """
    P = p.parent()
    if n < 0:
        return P.zero()
    if isinstance(p, Polynomial):
        return p.truncate(n + 1)
    return P({e: c for e, c in zip(p.exponents(), p.coefficients()) if sum(e) <= n})


def order(p):
    """
    Returns the order of p, that is, the smallest total degree of its terms.

    The order of zero is +Infinity.

    EXAMPLES::

        sage: from gauss_manin.tools import order
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: order(x^2*y^2 + x^6 + y^6)
        4
        sage: order(R.zero())
        +Infinity
    """
    if p.is_zero():
        from sage.rings.infinity import infinity
        return infinity
    if isinstance(p, Polynomial):
        return p.valuation()
    return min(sum(e) for e in p.exponents())


def constant_term(p):
    """
    Returns the constant coefficient of p, whatever the term order of its ring.

    EXAMPLES::

        sage: from gauss_manin.tools import constant_term
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: constant_term(16 + 3*y)
        16
        sage: constant_term(x + y^2)
        0
        sage: P.<t> = QQ[]
        sage: constant_term(2 + t)
        2
    """
    if isinstance(p, Polynomial):
        return p.constant_coefficient()
    return p.monomial_coefficient(p.parent().one())


def invunit(u, n):
    r"""
    Returns the inverse of the series unit u up to (and including) total degree n.

    The inverse is summed as a geometric series: with `u_0` the constant term
    and `v = 1 - u/u_0`, one has `u^{-1} = u_0^{-1} \sum_k v^k`, and the
    partial sums are truncated at degree n. The summation stops as soon as
    the next power of v vanishes in degree at most n.

    A ValueError is raised if u is not a unit, i.e., has no constant term.

    EXAMPLES::

        sage: from gauss_manin.tools import invunit, jet
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: u = 2 + x + y^2
        sage: v = invunit(u, 5)
        sage: jet(u*v, 5)
        1
        sage: invunit(x + y, 3)
        Traceback (most recent call last):
        ...
        ValueError: not a unit

    The same works for series in the base variable of a connection::

        sage: P.<t> = QQ[]
        sage: invunit(1 - t, 4)
        t^4 + t^3 + t^2 + t + 1
    """
    if n < 0:
        return u.parent().zero()
    u0 = constant_term(u)
    if u0.is_zero():
        raise ValueError("not a unit")
    v = jet(1 - u/u0, n)
    s = 1 + v
    vk = v
    while not vk.is_zero():
        vk = jet(vk*v, n)
        s += vk
    return jet(s, n)/u0


def shift_down(p, k):
    r"""
    Divides the univariate polynomial p by `t^k`, checking that the division is exact.

    EXAMPLES::

        sage: from gauss_manin.tools import shift_down
        sage: P.<t> = QQ[]
        sage: shift_down(t^3 + 2*t^2, 2)
        t + 2
        sage: shift_down(t + 1, 1)
        Traceback (most recent call last):
        ...
        ArithmeticError: t + 1 is not divisible by t^1
    """
    if k <= 0:
        return p.shift(-k)
    if not p.truncate(k).is_zero():
        raise ArithmeticError("{} is not divisible by {}^{}".format(p, p.parent().gen(), k))
    return p.shift(-k)


def monomial_exponents(nvars, degree):
    """
    Iterates over the exponent tuples of total degree ``degree`` in ``nvars`` variables.

    EXAMPLES::

        sage: from gauss_manin.tools import monomial_exponents
        sage: sorted(monomial_exponents(2, 2))
        [(0, 2), (1, 1), (2, 0)]
    """
    for c in itertools.combinations_with_replacement(range(nvars), degree):
        e = [0]*nvars
        for i in c:
            e[i] += 1
        yield tuple(e)


def qhweight(f):
    r"""
    Tests whether f is quasi-homogeneous in the given coordinates.

    If so, returns a pair ``(w, d)`` of a list of positive integer weights w
    of the variables and the weighted degree d of f, with ``gcd(w) == 1``.
    Otherwise, returns None. When the support of f does not determine the
    weights, a point of the relative interior of the polytope of admissible
    normalized weights is used.

    EXAMPLES::

        sage: from gauss_manin.tools import qhweight
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: qhweight(x^3 + y^4)
        ([4, 3], 12)
        sage: qhweight(x^3 + x*y^3)
        ([3, 2], 9)
        sage: qhweight(x^2*y^2 + x^6 + y^6) is None
        True
        sage: qhweight(x*y)
        ([1, 1], 2)
        sage: qhweight(1 + x^2) is None
        True
        sage: S.<x,y,z> = PolynomialRing(QQ, order='negdegrevlex')
        sage: qhweight(x*y + z^2)
        ([1, 1, 1], 2)
    """
    exps = [list(e) for e in f.exponents()]
    if not exps:
        return None
    n = len(exps[0])
    P = Polyhedron(eqns=[[-1] + e for e in exps],
                   ieqs=[[0] + [int(i == j) for j in range(n)] for i in range(n)],
                   base_ring=QQ)
    if P.is_empty():
        return None
    w = P.representative_point()
    if any(c <= 0 for c in w):
        return None
    d = lcm([c.denominator() for c in w])
    iw = [ZZ(c*d) for c in w]
    g = gcd(iw)
    return [c // g for c in iw], ZZ(d // g)
