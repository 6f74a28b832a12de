# -*- coding: utf-8 - vim: tw=80
r"""
Border bases of zero-dimensional ideals

Let `I` be an ideal with a finite-dimensional quotient, and let `O` be the
order ideal of standard monomials with respect to the term order of the ring.
The border of `O` consists of the monomials `x_i o` (`o \in O`) outside of
`O`. The border basis of `I` contains, for each border monomial `b`, the
element `b - \sum_{o \in O} c_o o` of `I`.

For global orderings the coefficients `c_o` come from normal forms with
respect to a Gröbner basis. For local orderings they are computed by linear
algebra on truncated power series, since normal forms of series are not
polynomials in general.

EXAMPLES::

    sage: from gauss_manin.border import border_basis
    sage: R.<x,y> = QQ[]
    sage: border_basis(R.ideal(x^2 - y, y^2))
    Ideal (x^2*y, x*y^2, x^2 - y, y^2) of Multivariate Polynomial Ring in x, y over Rational Field

In the local ring at the origin, the cubic term below does not contribute::

    sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
    sage: border_basis(R.ideal(x*y, x^2 + y^2 + x^3))
    Ideal (x^2 + y^2, x*y, x*y^2, y^3) of Multivariate Polynomial Ring in x, y over Rational Field
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
import logging

from sage.matrix.constructor import matrix

from .context import dctx, switched_ordering
from .tools import monomial_exponents
from .truncation import JetList, MonomialSpace, codimension, lift_coefficients

logger = logging.getLogger(__name__)

def _divides(a, b):
    return all(i <= j for i, j in zip(a, b))

def order_ideal(lms, ring):
    r"""
    Monomials of ``ring`` not divisible by any of the monomials ``lms``.

    The result is sorted from the largest to the smallest monomial. A
    ValueError is raised if the set is infinite.

    EXAMPLES::

        sage: from gauss_manin.border import order_ideal
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: order_ideal([x^2, x*y, y^3], R)
        [1, x, y, y^2]
        sage: order_ideal([x*y], R)
        Traceback (most recent call last):
        ...
        ValueError: ideal is not zero-dimensional
    """
    n = ring.ngens()
    lead = [tuple(m.exponents()[0]) for m in lms]
    for i in range(n):
        if not any(all(e[j] == 0 for j in range(n) if j != i) for e in lead):
            raise ValueError("ideal is not zero-dimensional")
    found = set()
    todo = [(0,)*n]
    while todo:
        e = todo.pop()
        if e in found or any(_divides(l, e) for l in lead):
            continue
        found.add(e)
        for i in range(n):
            todo.append(e[:i] + (e[i] + 1,) + e[i+1:])
    return sorted((ring.monomial(*e) for e in found), reverse=True)

def corners(I):
    r"""
    Minimal generators of the leading ideal of ``I``.

    EXAMPLES::

        sage: from gauss_manin.border import corners
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: corners(R.ideal(x*y, x^2 + y^2 + x^3))
        [x^2, x*y, y^3]
    """
    G = I.groebner_basis('libsingular:std')
    lead = set(tuple(g.lm().exponents()[0]) for g in G if not g.is_zero())
    minimal = [e for e in lead if not any(l != e and _divides(l, e) for l in lead)]
    R = I.ring()
    return sorted((R.monomial(*e) for e in minimal), reverse=True)

def _cone(e):
    return itertools.product(*(range(k + 1) for k in e))

def border(O):
    r"""
    Border of the order ideal ``O``.

    The order ideal is recovered as the union of the divisor cones of its
    maximal elements, and the border is the set of monomials `x_i d` with
    `d` in one of these cones that are not in ``O``.

    EXAMPLES::

        sage: from gauss_manin.border import border
        sage: R.<x,y> = QQ[]
        sage: border([R.one(), x, y, x^2, y^2])
        [x^3, x^2*y, x*y^2, y^3, x*y]
    """
    O = list(O)
    if not O:
        raise ValueError("empty order ideal")
    R = O[0].parent()
    n = R.ngens()
    exps = set(tuple(o.exponents()[0]) for o in O)

    def up(e, i):
        return e[:i] + (e[i] + 1,) + e[i+1:]

    maximal = [e for e in exps if not any(up(e, i) in exps for i in range(n))]
    cones = set()
    for m in maximal:
        cones.update(_cone(m))
    if cones != exps:
        raise ValueError("not an order ideal")
    result = set(up(e, i) for e in cones for i in range(n)) - exps
    return sorted((R.monomial(*e) for e in result), reverse=True)

def _local_border_basis(gens, O, B, ctx):
    r"""
    Border basis elements for a local ordering.

    The truncation order `N` is raised until the multiples of ``gens`` cut
    out a space of codimension ``len(O)`` below order `N`, at most
    ``ctx.max_order_steps`` times.

    EXAMPLES::

        sage: from gauss_manin.border import _local_border_basis
        sage: from gauss_manin.context import Context
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: _local_border_basis([x, y], [R.one(), x], [y, x^2], Context(max_order_steps=2))
        Traceback (most recent call last):
        ...
        ValueError: truncation order 5 too low for the local quotient
    """
    R = O[0].parent()
    space = MonomialSpace(R)
    N = max(b.degree() for b in B) + 1
    steps = 0
    while True:
        rels = JetList(space, N)
        for g in gens:
            for d in range(N):
                rels.extend(m*g for m in (R.monomial(*e) for e in monomial_exponents(R.ngens(), d)))
        if codimension([rels], N) == len(O):
            break
        steps += 1
        if steps > ctx.max_order_steps:
            raise ValueError("truncation order {} too low for the local quotient".format(N))
        N += 1
    logger.debug("local border basis at truncation order %s", N)
    basis = JetList(space, N)
    basis.extend(O)
    targets = JetList(space, N)
    targets.extend(B)
    C = lift_coefficients(targets, basis, [rels], N)
    return [b - sum(C[i, j]*o for j, o in enumerate(O)) for i, b in enumerate(B)]

def _general_border_basis(I, O, B):
    r"""
    Border basis elements for an arbitrary term order.

    The units of the localized ring are the polynomials in the local
    variables `y` (those smaller than `1`) with a nonzero constant term. The
    `y` are then nilpotent modulo ``I``, and the quotient of the localized ring by ``I`` is
    `K[x]/(I + (y^d))` with `d` the size of ``O``. Normal forms modulo this
    global ideal are computed with degrevlex and the border monomials are
    expressed in the images of ``O`` by linear algebra.

    EXAMPLES::

        sage: from gauss_manin.border import _general_border_basis
        sage: R.<x,y> = PolynomialRing(QQ, order='degrevlex(1),negdegrevlex(1)')
        sage: _general_border_basis(R.ideal(x^2 - 1 - y, y^2 - y), [R.one(), x], [x^2, x*y, y])
        [x^2 - 1, x*y, y]
    """
    R = I.ring()
    local = [v for v in R.gens() if v < R.one()]
    d = len(O)
    with switched_ordering(R, 'degrevlex') as S:
        J = S.ideal([S(g) for g in I.gens()] + [S(v)**d for v in local])
        G = J.groebner_basis('libsingular:std')
        normal = [S(o).reduce(G) for o in O]
        targets = [S(b).reduce(G) for b in B]
        mons = sorted(set(m for p in normal + targets for m in p.monomials()))

        def coords(polys):
            return matrix(R.base_ring(), len(polys), len(mons),
                          [p.monomial_coefficient(m) for p in polys for m in mons])

        X = coords(normal)
        if X.rank() < d:
            raise ArithmeticError("order ideal does not span the local quotient")
        C = X.solve_left(coords(targets))
    return [b - sum(C[i, j]*o for j, o in enumerate(O)) for i, b in enumerate(B)]

def border_basis(I, ctx=dctx):
    r"""
    Border basis of the zero-dimensional ideal ``I`` with respect to the
    order ideal of the term order of its ring.

    The elements are listed in the order of :func:`border`. Global, local
    and mixed orderings are supported.

    EXAMPLES::

        sage: from gauss_manin.border import border_basis
        sage: R.<x,y> = QQ[]
        sage: I = R.ideal(x*y, x^2 + y^2)
        sage: list(border_basis(I).gens())
        [x*y^2, y^3, x^2 + y^2, x*y]
        sage: border_basis(border_basis(I)).gens() == border_basis(I).gens()
        True
        sage: border_basis(R.ideal(x*y))
        Traceback (most recent call last):
        ...
        ValueError: ideal is not zero-dimensional

    The border basis of a border basis is itself in the local case too::

        sage: S.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: J = S.ideal(x*y, x^2 + y^2 + x^3)
        sage: border_basis(border_basis(J)).gens() == border_basis(J).gens()
        True

    For a block ordering that is global in `x` and local in `y`, the point
    `y = 1` of the variety lies outside the local ring::

        sage: T.<x,y> = PolynomialRing(QQ, order='degrevlex(1),negdegrevlex(1)')
        sage: border_basis(T.ideal(x^2 - y, y^2 - y))
        Ideal (x^2, x*y, y) of Multivariate Polynomial Ring in x, y over Rational Field
    """
    O, B, elts = border_data(I, ctx)
    return I.ring().ideal(elts)

def border_data(I, ctx=dctx):
    r"""
    Return the order ideal, its border and the border basis of ``I`` as
    three lists.

    EXAMPLES::

        sage: from gauss_manin.border import border_data
        sage: R.<x,y> = QQ[]
        sage: border_data(R.ideal(x - 1, y))
        ([1], [x, y], [x - 1, y])
    """
    R = I.ring()
    order = R.term_order()
    G = I.groebner_basis('libsingular:std')
    O = order_ideal([g.lm() for g in G if not g.is_zero()], R)
    if not O:
        return [], [], [R.one()]
    B = border(O)
    logger.debug("order ideal of size %s, border of size %s", len(O), len(B))
    if order.is_global():
        elts = [b - b.reduce(G) for b in B]
    elif order.is_local():
        elts = _local_border_basis(I.gens(), O, B, ctx)
    else:
        elts = _general_border_basis(I, O, B)
    return O, B, elts
