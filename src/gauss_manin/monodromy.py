# -*- coding: utf-8 - vim: tw=80
r"""
Monodromy of isolated hypersurface singularities

Given a power series `f` with an isolated critical point at the origin,
:func:`monodromy_B` computes a matrix `A` whose exponential
`\exp(-2 \pi i A)` is conjugate to the complex monodromy of `f`. The matrix
`A` is the residue of `\partial_t t` on a lattice of the Gauss-Manin system
on which the connection has a simple pole.

For quasi-homogeneous `f` the answer is given in closed form. Otherwise, the
Brieskorn lattice `H''` and its connection matrix are computed (see
:mod:`gauss_manin.brieskorn`), the lattice is saturated under `t \partial_t`,
and, unless ``opt=1``, integer differences between eigenvalues of the residue
are removed so that the Jordan structure of `A` matches that of the
monodromy.

EXAMPLES::

    sage: from gauss_manin.monodromy import monodromy_B
    sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
    sage: monodromy_B(x^3 + y^3).diagonal()
    [2/3, 1, 1, 4/3]

A singularity of type `E_6`, in coordinates where it is not
quasi-homogeneous::

    sage: A = monodromy_B(x^3 + y^4 + x*y^3)
    sage: sorted(r - r.floor() for r, m in A.charpoly().roots(QQ) for _ in range(m))
    [1/12, 1/6, 5/12, 7/12, 5/6, 11/12]

A singularity with `\kappa = 2`, whose monodromy has characteristic
polynomial `(t - 1)(t^6 - 1)^2`::

    sage: A = monodromy_B(x^2*y^2 + x^6 + y^6)  # long time
    sage: A.nrows()  # long time
    13
    sage: sorted(r - r.floor() for r, m in A.charpoly().roots(QQ) for _ in range(m))  # long time
    [0, 0, 0, 1/6, 1/6, 1/3, 1/3, 1/2, 1/2, 2/3, 2/3, 5/6, 5/6]
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

from sage.matrix.special import diagonal_matrix, identity_matrix

from .border import order_ideal
from .brieskorn import BrieskornFiltration, ConnectionBuilder, jacoblift, milnor_number
from .context import dctx
from .linear_algebra import decmide, detadj, jordan_data, lattice_basis, lattice_contains, mid
from .tools import invunit, qhweight, shift_down

logger = logging.getLogger(__name__)

def standard_monomials(f):
    r"""
    Monomial basis of the local algebra of the Jacobian ideal of ``f``.

    EXAMPLES::

        sage: from gauss_manin.monodromy import standard_monomials
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: standard_monomials(x^3 + y^4)
        [1, x, y, x*y, y^2, x*y^2]
    """
    R = f.parent()
    G = R.ideal(f.gradient()).groebner_basis('libsingular:std')
    return order_ideal([g.lm() for g in G if not g.is_zero()], R)

def qh_monodromy(f, w, d):
    r"""
    Residue matrix for a quasi-homogeneous ``f`` of weighted degree ``d`` with
    respect to the weights ``w``.

    The result is diagonal, the entry for the standard monomial `x^a` being
    `(w \cdot a + \sum_i w_i)/d`.

    EXAMPLES::

        sage: from gauss_manin.monodromy import qh_monodromy
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: qh_monodromy(x^3 + y^4, [4, 3], 12).diagonal()
        [7/12, 11/12, 5/6, 7/6, 13/12, 17/12]
    """
    K = f.parent().base_ring()
    sw = sum(w)
    entries = []
    for m in standard_monomials(f):
        a = m.exponents()[0]
        entries.append(K(sum(wi*ai for wi, ai in zip(w, a)) + sw)/d)
    return diagonal_matrix(K, entries)

def _constant_part(A):
    K = A.base_ring().base_ring()
    return A.apply_map(lambda p: p[0], K)

class _SimplePoleReducer:
    r"""
    Saturation of the Brieskorn lattice under `t \partial_t` and the matrix of
    `t \partial_t` on the saturated lattice.

    Lattices are stored scaled by `t^D`, `D = (\mu - 1)(\kappa - 1)`, as
    matrices over `K[t]` whose columns hold coordinates with respect to the
    basis `e` of `H''`; `t \partial_t` acts on coordinate vectors by
    `a \mapsto t a' + t^{1 - \kappa} M a`.
    """

    def __init__(self, filtration, connection, kappa):
        self.filtration = filtration
        self.connection = connection
        self.kappa = kappa
        mu = filtration.mu
        self.D = (mu - 1)*(kappa - 1)
        self.P = connection.base
        self.U = self.P.gen()**self.D*identity_matrix(self.P, mu)
        self.M = None

    def _tdt(self, U, M):
        t = self.P.gen()
        D, kappa = self.D, self.kappa
        dU = U.apply_map(lambda p: t*p.derivative())
        MU = (M*U).apply_map(lambda p: shift_down(p.truncate(D + kappa - 1), kappa - 1))
        return (dU + MU).apply_map(lambda p: p.truncate(D))

    def saturate(self):
        mu = self.filtration.mu
        kappa = self.kappa
        if kappa == 1:
            self.M = self.connection.matrix()
            return self.U
        U = self.U
        for r in range(mu - 1):
            self.filtration.grow(kappa - 1)
            self.M = self.connection.matrix()
            U1 = lattice_basis([U, self._tdt(U, self.M)], self.D)
            if lattice_contains(U, U1):
                logger.info("lattice stable after %s steps", r)
                break
            U = U1
        self.U = U
        return U

    def residue(self):
        r"""
        Return ``(A, prec)`` where ``A`` is the matrix of `t \partial_t` on the
        saturated lattice, exact modulo `t^{prec}`.
        """
        P = self.P
        t = P.gen()
        K = self.filtration.K
        kappa = self.kappa
        U, M = self.U, self.M
        c = min(p.valuation() for p in U.list() if not p.is_zero())
        U = U.apply_map(lambda p: shift_down(p, c))
        s = self.D - c
        X = M*U + t**kappa*U.apply_map(lambda p: p.derivative())
        d, adj = detadj(U)
        v = d.valuation()
        w = shift_down(d, v)
        Y = (invunit(w, K - 1)*adj*X).apply_map(lambda p: p.truncate(K))
        n = U.nrows()
        A = Y.apply_map(lambda p: shift_down(p, kappa - 1 + v)) - s*identity_matrix(P, n)
        prec = K - (kappa - 1) - v
        return A, prec

    def refine(self, dK):
        r"""
        Grow `K` by ``dK`` and return the residue, whose precision is then
        higher by ``dK``.
        """
        self.filtration.grow(dK)
        self.M = self.connection.matrix()
        return self.residue()

def nonqh_monodromy(f, mu, opt=0, ctx=dctx):
    r"""
    Residue matrix of a simple-pole lattice of the Gauss-Manin system of
    ``f``, computed through the Brieskorn lattice.

    This works for any isolated singularity, in particular for
    quasi-homogeneous ones::

        sage: from gauss_manin.monodromy import nonqh_monodromy, qh_monodromy
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: nonqh_monodromy(x^3 + y^3, 4).diagonal()
        [2/3, 1, 1, 4/3]

    With ``opt=1``, the residue on the saturated lattice is returned as is;
    for a quasi-homogeneous ``f`` this is the closed form of
    :func:`qh_monodromy`. With ``opt=0``, the lattice is moved further until
    no two eigenvalues differ by a nonzero integer, so the result may differ
    from the closed form by integer shifts of eigenvalues, while
    `\exp(-2 \pi i A)` is unchanged::

        sage: B = qh_monodromy(x^3 + y^6, [2, 1], 6)
        sage: nonqh_monodromy(x^3 + y^6, 10, opt=1).charpoly() == B.charpoly()
        True
        sage: A = nonqh_monodromy(x^3 + y^6, 10)
        sage: A.charpoly() == B.charpoly()
        False
        sage: sorted(r - r.floor() for r in A.charpoly().roots(QQ, multiplicities=False))
        [0, 1/6, 1/3, 1/2, 2/3, 5/6]

    In one variable, the reduced Brieskorn lattice is used::

        sage: S = PolynomialRing(QQ, 'x', 1, order='negdegrevlex'); x = S.gen()
        sage: nonqh_monodromy(x^3 + x^4, 2).charpoly()
        x^2 - x + 2/9
    """
    lift = jacoblift(f, ctx)
    kappa = lift.kappa
    filtration = BrieskornFiltration(f, mu, ctx)
    filtration.grow(1)
    filtration.set_basis(filtration.quotient_basis())
    connection = ConnectionBuilder(filtration, lift)

    reducer = _SimplePoleReducer(filtration, connection, kappa)
    reducer.saturate()
    A, prec = reducer.residue()

    def require(precision):
        nonlocal A, prec
        if prec < precision:
            logger.debug("precision %s < %s, growing K", prec, precision)
            A, prec = reducer.refine(precision - prec)

    require(1)
    if opt == 0:
        gap = mid([lam for lam, _ in jordan_data(_constant_part(A))])
        logger.info("maximal integer eigenvalue difference: %s", gap)
        require(gap + 1)
        for _ in range(gap):
            A, prec = decmide(A, prec)
    A0 = _constant_part(A)
    return A0 + identity_matrix(A0.base_ring(), A0.nrows())

def monodromy_B(f, opt=0, ctx=dctx):
    r"""
    Matrix `A` such that `\exp(-2 \pi i A)` is the monodromy of the isolated
    hypersurface singularity ``f``.

    INPUT:

    - ``f`` -- polynomial in a ring with a local term order
    - ``opt`` -- 0 (default) to obtain the Jordan structure of the monodromy,
      1 to obtain only its characteristic polynomial (faster)
    - ``ctx`` -- a :class:`~gauss_manin.context.Context`

    EXAMPLES::

        sage: from gauss_manin.monodromy import monodromy_B
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: monodromy_B(x^2 + y^2)
        [1]
        sage: monodromy_B(x + y)
        Traceback (most recent call last):
        ...
        ValueError: no singularity
        sage: monodromy_B(1 + x^2 + y^2)
        Traceback (most recent call last):
        ...
        ValueError: no singularity
        sage: monodromy_B(x^2)
        Traceback (most recent call last):
        ...
        ValueError: non-isolated singularity
        sage: monodromy_B(x^3 + y^3, opt=2)
        Traceback (most recent call last):
        ...
        ValueError: opt must be 0 or 1
        sage: S.<x,y> = QQ[]
        sage: monodromy_B(x^3 + y^3)
        Traceback (most recent call last):
        ...
        ValueError: no series ring

    Quasi-homogeneity is detected also when the support of ``f`` does not
    determine the weights. Functions of one variable are handled as well::

        sage: T.<x,y,z> = PolynomialRing(QQ, order='negdegrevlex')
        sage: monodromy_B(x*y + z^2)
        [3/2]
        sage: U = PolynomialRing(QQ, 'x', 1, order='negdegrevlex'); x = U.gen()
        sage: monodromy_B(x^3 + x^4).charpoly()
        x^2 - x + 2/9
    """
    if opt not in (0, 1):
        raise ValueError("opt must be 0 or 1")
    R = f.parent()
    if not R.term_order().is_local():
        raise ValueError("no series ring")
    mu = milnor_number(f)
    logger.info("Milnor number %s", mu)
    weights = qhweight(f)
    if weights is not None:
        w, d = weights
        logger.info("quasi-homogeneous, weights %s, degree %s", w, d)
        return qh_monodromy(f, w, d)
    logger.info("not quasi-homogeneous in these coordinates")
    return nonqh_monodromy(f, mu, opt, ctx)
