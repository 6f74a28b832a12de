# -*- coding: utf-8 - vim: tw=80
r"""
Truncated power series as finite-dimensional vectors

Power series are handled through their jets: a polynomial known up to a
truncation order `N` (all terms of total degree `< N`) is identified with its
coordinate vector with respect to the monomials of degree `< N`. This module
provides the monomial basis (:class:`MonomialSpace`), a list of polynomials
kept together with their coordinate vectors (:class:`JetList`), and the
linear algebra used on top of them: codimension, complement bases, and
coefficients of vectors modulo a subspace.

EXAMPLES::

    sage: from gauss_manin.truncation import MonomialSpace, JetList, codimension, quotient_basis
    sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
    sage: S = MonomialSpace(R)
    sage: [S.monomial(i) for i in range(S.dimension(3))]
    [1, x, y, x^2, x*y, y^2]

The relations ``x^2 + y^3`` and ``y^2`` together with all their multiples
cut down the space of polynomials of degree `< 5` to a space spanned by
``1, x, y, x*y``::

    sage: rels = JetList(S, 5)
    sage: rels.extend([m*g for g in [x^2 + y^3, y^2] for m in [1, x, y, x^2, x*y, y^2]])
    sage: codimension([rels], 5)
    4
    sage: quotient_basis([rels], 5)
    [1, x, y, x*y]
"""

#############################################################################
#  Copyright (C) 2024 The gauss_manin developers                            #
#                                                                           #
#  Distributed under the terms of the GNU General Public License (GPL)      #
#  either version 2, or (at your option) any later version                  #
#                                                                           #
#  https://www.gnu.org/licenses/                                            #
#############################################################################

import logging

from sage.matrix.constructor import matrix

from .tools import jet, monomial_exponents

logger = logging.getLogger(__name__)

class MonomialSpace:
    r"""
    Ordered monomial basis of the polynomials of bounded total degree.

    Monomials are sorted by increasing degree, and monomials of the same
    degree by decreasing order with respect to the term order of the ring.
    For a local degree ordering, the first nonzero coordinate of a vector thus
    corresponds to the leading monomial of the polynomial. The basis for a
    truncation order `N` is a prefix of the basis for `N + 1`.
    """

    def __init__(self, ring):
        self.ring = ring
        self.field = ring.base_ring()
        self._nvars = ring.ngens()
        self._exponents = []
        self._index = {}
        self._start = [0]

    def extend(self, N):
        r"""
        Make sure the monomials of degree `< N` are enumerated.
        """
        R = self.ring
        for deg in range(len(self._start) - 1, N):
            mons = sorted((R.monomial(*e) for e in monomial_exponents(self._nvars, deg)),
                          reverse=True)
            for m in mons:
                e = tuple(m.exponents()[0])
                self._index[e] = len(self._exponents)
                self._exponents.append(e)
            self._start.append(len(self._exponents))

    def dimension(self, N):
        if N <= 0:
            return 0
        self.extend(N)
        return self._start[N]

    def index(self, exponent):
        self.extend(sum(exponent) + 1)
        return self._index[tuple(exponent)]

    def monomial(self, i):
        return self.ring.monomial(*self._exponents[i])

    def coordinates(self, p, lo, hi):
        r"""
        Return the coefficients of the terms of ``p`` of degree in ``[lo, hi)``
        as a sparse dictionary ``{index: coefficient}``.

        EXAMPLES::

            sage: from gauss_manin.truncation import MonomialSpace
            sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
            sage: S = MonomialSpace(R)
            sage: sorted(S.coordinates(2 + 3*y + x*y^2 + x^5, 1, 4).items())
            [(2, 3), (8, 1)]
        """
        self.extend(hi)
        index = self._index
        return {index[tuple(e)]: c for e, c in zip(p.exponents(), p.coefficients())
                if lo <= sum(e) < hi}

    def polynomial(self, coords):
        R = self.ring
        return sum((c*self.monomial(i) for i, c in coords.items()), R.zero())

class JetList:
    r"""
    List of polynomials together with their coordinate vectors below a
    truncation order.

    The polynomials and their coordinates are only modified together:
    :meth:`raise_order` adds the coordinates of the new degree range to every
    entry, optionally replacing the polynomials by longer jets of the same
    series.

    EXAMPLES::

        sage: from gauss_manin.truncation import MonomialSpace, JetList
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: L = JetList(MonomialSpace(R), 2)
        sage: L.append(1 + x + y^2)
        sage: L.vectors()
        [{0: 1, 1: 1}]
        sage: L.raise_order(3)
        sage: L.vectors()
        [{0: 1, 1: 1, 5: 1}]
        sage: L.raise_order(4, [1 + x + y^2 + x^3])
        sage: L[0]
        1 + x + y^2 + x^3
        sage: L.raise_order(5, [1 + y])
        Traceback (most recent call last):
        ...
        ArithmeticError: replacement jet does not extend 1 + x + y^2 + x^3
    """

    def __init__(self, space, order=0):
        self.space = space
        self.order = order
        self._polys = []
        self._coords = []

    def __len__(self):
        return len(self._polys)

    def __getitem__(self, i):
        return self._polys[i]

    def __iter__(self):
        return iter(self._polys)

    def __repr__(self):
        return "JetList of {} polynomials at order {}".format(len(self), self.order)

    def append(self, p):
        self._polys.append(p)
        self._coords.append(self.space.coordinates(p, 0, self.order))

    def extend(self, polys):
        for p in polys:
            self.append(p)

    def vectors(self):
        return self._coords

    def raise_order(self, N, polys=None):
        r"""
        Raise the truncation order to ``N``.

        Only the coordinates of degree ``[self.order, N)`` are computed. If
        ``polys`` is given, it replaces the stored polynomials, and each new
        polynomial must agree with the old one below the previous order.
        """
        prev = self.order
        if N < prev:
            raise ValueError("truncation order cannot decrease")
        if polys is not None:
            polys = list(polys)
            if len(polys) != len(self._polys):
                raise ValueError("expected {} polynomials".format(len(self._polys)))
            for old, new in zip(self._polys, polys):
                if not jet(new - old, prev - 1).is_zero():
                    raise ArithmeticError("replacement jet does not extend {}".format(old))
            self._polys = polys
        coordinates = self.space.coordinates
        for p, v in zip(self._polys, self._coords):
            v.update(coordinates(p, prev, N))
        self.order = N

    def matrix(self, N=None):
        r"""
        Return the sparse matrix whose rows are the coordinate vectors.
        """
        if N is None:
            N = self.order
        if N > self.order:
            raise ValueError("coordinates are only known below order {}".format(self.order))
        ncols = self.space.dimension(N)
        entries = {(i, j): c for i, v in enumerate(self._coords)
                   for j, c in v.items() if j < ncols}
        return matrix(self.space.field, len(self._coords), ncols, entries, sparse=True)

def _stack(lists, N):
    lists = list(lists)
    space = lists[0].space
    ncols = space.dimension(N)
    entries = {}
    row = 0
    for L in lists:
        for v in L.vectors():
            for j, c in v.items():
                if j < ncols:
                    entries[row, j] = c
            row += 1
    return matrix(space.field, row, ncols, entries, sparse=True)

def codimension(lists, N):
    r"""
    Codimension of the span of the given jet lists in the space of polynomials
    of degree `< N`.
    """
    mat = _stack(lists, N)
    codim = mat.ncols() - mat.rank()
    logger.debug("codimension at order %s: %s", N, codim)
    return codim

def quotient_basis(lists, N):
    r"""
    Monomials spanning a complement of the span of the given jet lists in the
    space of polynomials of degree `< N`.

    These are the monomials corresponding to the non-pivot columns of the
    reduced row echelon form.
    """
    mat = _stack(lists, N)
    space = lists[0].space
    pivots = set(mat.echelon_form().pivots())
    return [space.monomial(j) for j in range(mat.ncols()) if j not in pivots]

def _echelon(relations, N):
    E = _stack(relations, N).echelon_form()
    pivots = E.pivots()
    return E.matrix_from_rows(range(len(pivots))), pivots

def lift_coefficients(targets, basis, relations, N):
    r"""
    Express vectors modulo a subspace in terms of a complement basis.

    INPUT:

    - ``targets``, ``basis`` -- jet lists
    - ``relations`` -- list of jet lists spanning the subspace
    - ``N`` -- truncation order

    OUTPUT:

    A matrix `C` over the coefficient field, with one row per target, such
    that ``targets[i]`` equals `\sum_j C_{ij}` ``basis[j]`` modulo the span of
    the relations, all vectors being truncated below order `N`. A
    ValueError is raised if ``basis`` does not induce a basis of the quotient.

    EXAMPLES::

        sage: from gauss_manin.truncation import MonomialSpace, JetList, lift_coefficients
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: S = MonomialSpace(R)
        sage: rels = JetList(S, 3)
        sage: rels.extend([x - y, x^2, x*y, y^2])
        sage: basis = JetList(S, 3)
        sage: basis.extend([R.one(), x])
        sage: targets = JetList(S, 3)
        sage: targets.extend([3 + 2*y + x*y])
        sage: lift_coefficients(targets, basis, [rels], 3)
        [3 2]
        sage: basis = JetList(S, 3)
        sage: basis.extend([R.one(), x^2])
        sage: lift_coefficients(targets, basis, [rels], 3)
        Traceback (most recent call last):
        ...
        ValueError: basis does not complement the relations
    """
    E, pivots = _echelon(relations, N)
    ncols = E.ncols()
    free = [j for j in range(ncols) if j not in set(pivots)]
    if len(free) != len(basis):
        raise ValueError("basis does not complement the relations")

    def normal_forms(L):
        X = L.matrix(N)
        if E.nrows() > 0:
            X = X - X.matrix_from_columns(pivots)*E
        return X.matrix_from_columns(free).dense_matrix()

    B = normal_forms(basis)
    if B.rank() < B.nrows():
        raise ValueError("basis does not complement the relations")
    T = normal_forms(targets)
    if T.nrows() == 0:
        return T
    return B.solve_left(T)
