# -*- coding: utf-8 - vim: tw=80
r"""
Brieskorn lattice of an isolated hypersurface singularity

Let `f` be a power series in `x_1, \dots, x_n` with an isolated
critical point at the origin. The Brieskorn lattice

.. MATH::

    H'' = \Omega^n / df \wedge d\Omega^{n-2}

is a free module of rank `\mu` (the Milnor number) over `\mathbb C\{t\}`,
where `t` acts by multiplication by `f`, and it carries the Gauss-Manin
connection `\partial_t` defined by `\partial_t (df \wedge \eta) = d\eta`.
Identifying `n`-forms with their coefficients, one has
`H''/t^K H'' = \mathbb C\{x\}/(D + f^K \mathbb C\{x\})` where `D` is spanned
by the `\partial_i f \, \partial_j h - \partial_j f \, \partial_i h`. In one
variable, `H''` stands for the reduced lattice, with `D = \mathbb C\{f\} f'`,
which has rank `\mu` as well.

This module computes, using truncated linear algebra, a monomial basis `e` of
`H''` and the matrix of `t^\kappa \partial_t` with respect to this basis,
where `\kappa` is the smallest power of `f` contained in its Jacobian ideal.

EXAMPLES::

    sage: from gauss_manin.brieskorn import H2_basis, milnor_number
    sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
    sage: f = x^3 + y^4
    sage: milnor_number(f)
    6
    sage: H2_basis(f)
    [1, x, y, x*y, y^2, x*y^2]
"""

#############################################################################
#  Copyright (C) 2024 The gauss_manin developers                            #
#                                                                           #
#  Distributed under the terms of the GNU General Public License (GPL)      #
#  either version 2, or (at your option) any later version                  #
#                                                                           #
#  https://www.gnu.org/licenses/                                            #
#############################################################################

import collections
import logging

from sage.matrix.constructor import matrix
from sage.rings.integer_ring import ZZ
from sage.rings.polynomial.polynomial_ring_constructor import PolynomialRing

from .context import dctx, switched_ordering
from .tools import constant_term, invunit, jet, monomial_exponents, order
from .truncation import JetList, MonomialSpace, codimension, lift_coefficients, quotient_basis

logger = logging.getLogger(__name__)

KappaLift = collections.namedtuple("KappaLift", ["kappa", "xi", "u"])

def milnor_number(f):
    r"""
    Milnor number of ``f`` at the origin.

    The ring of ``f`` should carry a local ordering. A ValueError is raised
    if the origin is not a critical point of ``f`` or if the critical point is
    not isolated.

    EXAMPLES::

        sage: from gauss_manin.brieskorn import milnor_number
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: milnor_number(x^2*y^2 + x^6 + y^6)
        13
        sage: milnor_number(x + y^2)
        Traceback (most recent call last):
        ...
        ValueError: no singularity
        sage: milnor_number(1 + x^2 + y^2)
        Traceback (most recent call last):
        ...
        ValueError: no singularity
        sage: milnor_number(x^2)
        Traceback (most recent call last):
        ...
        ValueError: non-isolated singularity
    """
    R = f.parent()
    if constant_term(f) != 0:
        raise ValueError("no singularity")
    mu = R.ideal(f.gradient()).vector_space_dimension()
    if mu == 0:
        raise ValueError("no singularity")
    if mu not in ZZ:
        raise ValueError("non-isolated singularity")
    return ZZ(mu)

def jacoblift(f, ctx=dctx):
    r"""
    Find the smallest `\kappa` such that `f^\kappa` lies in the Jacobian ideal
    `J` of ``f`` (in the local ring), together with a certificate.

    OUTPUT:

    A named tuple ``(kappa, xi, u)`` where ``u`` is a unit of the local ring
    and ``xi`` a list of polynomials with
    ``u*f^kappa == sum(xi[j]*f.derivative(x[j]))``.

    The search for `\kappa` is bounded by ``ctx.max_kappa`` (by default, the
    number of variables, which is sufficient for isolated singularities).

    EXAMPLES::

        sage: from gauss_manin.brieskorn import jacoblift
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: f = x^2*y^2 + x^6 + y^6
        sage: L = jacoblift(f)
        sage: L.kappa
        2
        sage: from gauss_manin.tools import constant_term
        sage: constant_term(L.u) != 0
        True
        sage: L.u*f^2 == sum(c*f.derivative(v) for c, v in zip(L.xi, R.gens()))
        True

    Quasi-homogeneous polynomials lie in their Jacobian ideal::

        sage: jacoblift(x^3 + y^4 + x*y^3).kappa
        1

    The search stops at ``ctx.max_kappa``::

        sage: from gauss_manin.context import Context
        sage: jacoblift(f, Context(max_kappa=1))
        Traceback (most recent call last):
        ...
        ValueError: no power f^k with k <= 1 lies in the Jacobian ideal, precondition likely violated
    """
    R = f.parent()
    grad = f.gradient()
    G = R.ideal(grad).groebner_basis('libsingular:std')
    bound = ctx.kappa_bound(R)
    kappa = 1
    fk = f
    while not fk.reduce(G).is_zero():
        if kappa >= bound:
            raise ValueError("no power f^k with k <= {} lies in the Jacobian ideal, "
                             "precondition likely violated".format(bound))
        kappa += 1
        fk *= f
    logger.info("kappa = %s", kappa)

    with switched_ordering(R, 'degrevlex') as S:
        J = S.ideal([S(g) for g in grad])
        F = S(fk)
        Q = J.quotient(S.ideal(F))
        units = [q for q in Q.gens() if constant_term(q) != 0]
        if not units:
            raise ArithmeticError("no unit in the ideal quotient J : f^{}".format(kappa))
        u = min(units, key=lambda q: len(q.monomials()))
        xi = (u*F).lift(J)
        xi = [R(c) for c in xi]
        u = R(u)

    return KappaLift(kappa, xi, u)

class BrieskornFiltration:
    r"""
    Truncated approximations of `H''/t^K H''`.

    The state consists of the filtration degree `K`, the truncation order `N`
    and three jet lists:

    - ``P1``: the polynomials `f^K x^a` with `|a| < N - K \operatorname{ord}(f)`,
    - ``P2``: the generators `\partial_i f \, \partial_j h - \partial_j f \,
      \partial_i h` of `D`, for `i < j` and monomials `h` of degree `< N`
      (the `f^k f'`, `k < N`, in one variable),
    - ``Pe``: the products `f^k e_l` for `k < K`, once a basis `e` of `H''`
      has been fixed with :meth:`set_basis`.

    The truncation order is chosen large enough that the span of ``P1`` and
    ``P2`` has codimension `K \mu` below order `N`, i.e., that all of
    `H''/t^K H''` is visible.

    EXAMPLES::

        sage: from gauss_manin.brieskorn import BrieskornFiltration
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: F = BrieskornFiltration(x^2*y^2 + x^6 + y^6, 13)
        sage: F.grow(1)
        sage: F.K
        1
        sage: e = F.quotient_basis(); len(e)
        13
        sage: F.set_basis(e)
        sage: F.grow(1)
        sage: F.K, len(F.Pe)
        (2, 26)

    The truncation order is raised at most ``ctx.max_order_steps`` times::

        sage: from gauss_manin.context import Context
        sage: F = BrieskornFiltration(x^2*y^2 + x^6 + y^6, 13, Context(max_order_steps=0))
        sage: F.grow(1)
        Traceback (most recent call last):
        ...
        ValueError: truncation order 4 does not reach codimension 13, precondition likely violated
    """

    def __init__(self, f, mu, ctx=dctx):
        R = f.parent()
        self.f = f
        self.mu = mu
        self.ctx = ctx
        self.space = MonomialSpace(R)
        self.forder = order(f)
        self.grad = f.gradient()
        self.K = 0
        self.N = 0
        self.e = None
        self.P1 = JetList(self.space)
        self.P2 = JetList(self.space)
        self.Pe = JetList(self.space)
        self._fK = R.one()
        self._p1_degree = 0
        self._p2_degree = 0

    def __repr__(self):
        return "Brieskorn filtration of {} at K = {}, N = {}".format(self.f, self.K, self.N)

    def _monomials(self, degree):
        R = self.space.ring
        for e in monomial_exponents(R.ngens(), degree):
            yield R.monomial(*e)

    def _p2_generators(self, degree):
        grad = self.grad
        gens = self.space.ring.gens()
        n = len(gens)
        if n == 1:
            yield self.f**degree*grad[0]
            return
        for h in self._monomials(degree):
            dh = [h.derivative(v) for v in gens]
            for i in range(n):
                for j in range(i + 1, n):
                    g = grad[i]*dh[j] - grad[j]*dh[i]
                    if not g.is_zero():
                        yield g

    def _extend_to(self, N):
        self.P1.raise_order(N)
        top = N - self.K*self.forder
        for d in range(self._p1_degree, top):
            self.P1.extend(self._fK*m for m in self._monomials(d))
        self._p1_degree = max(self._p1_degree, top)
        self.P2.raise_order(N)
        for d in range(self._p2_degree, N):
            self.P2.extend(self._p2_generators(d))
        self._p2_degree = max(self._p2_degree, N)
        # the elements of Pe are exact, only their coordinates need extending
        self.Pe.raise_order(N)

    def grow(self, dK):
        r"""
        Increase `K` by ``dK`` and raise `N` until `H''/t^K H''` is fully
        visible below order `N`.
        """
        prevK = self.K
        self.K += dK
        self.N += dK*self.forder
        self._fK = self.f**self.K
        self.P1 = JetList(self.space, self.N)
        self._p1_degree = 0
        self._extend_to(self.N)
        if self.e is not None:
            for k in range(prevK, self.K):
                fk = self.f**k
                self.Pe.extend(fk*e for e in self.e)

        target = self.K*self.mu
        steps = 0
        while codimension([self.P1, self.P2], self.N) < target:
            steps += 1
            if steps > self.ctx.max_order_steps:
                raise ValueError("truncation order {} does not reach codimension {}, "
                                 "precondition likely violated".format(self.N, target))
            self.N += 1
            self._extend_to(self.N)
        logger.debug("K = %s, N = %s (%s relations)", self.K, self.N,
                     len(self.P1) + len(self.P2))

    def quotient_basis(self):
        r"""
        Monomials spanning a complement of `D + f^K \mathbb C\{x\}`.
        """
        return quotient_basis([self.P1, self.P2], self.N)

    def set_basis(self, e):
        e = list(e)
        if len(e) != self.mu:
            raise ValueError("expected {} basis elements, got {}".format(self.mu, len(e)))
        self.e = e
        self.Pe = JetList(self.space, self.N)
        for k in range(self.K):
            fk = self.f**k
            self.Pe.extend(fk*b for b in e)

class ConnectionBuilder:
    r"""
    Matrix of `t^\kappa \partial_t` with respect to the basis of a
    :class:`BrieskornFiltration`.

    Writing `u f^\kappa = \sum_j \xi_j \partial_j f`, one has

    .. MATH::

        t^\kappa \partial_t e = \sum_j \partial_j (u^{-1} \xi_j e)
                                - \kappa f^{\kappa - 1} e

    in `H''`. The jets of these elements are kept in a :class:`JetList` that
    follows the truncation order of the filtration.

    EXAMPLES::

        sage: from gauss_manin.brieskorn import BrieskornFiltration, ConnectionBuilder, jacoblift
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: f = x^3 + y^3
        sage: F = BrieskornFiltration(f, 4)
        sage: F.grow(1)
        sage: F.set_basis(F.quotient_basis())
        sage: F.e
        [1, x, y, x*y]
        sage: ConnectionBuilder(F, jacoblift(f)).matrix()
        [-1/3    0    0    0]
        [   0    0    0    0]
        [   0    0    0    0]
        [   0    0    0  1/3]
    """

    def __init__(self, filtration, lift):
        self.filtration = filtration
        self.lift = lift
        R = filtration.space.ring
        self.base = PolynomialRing(R.base_ring(), 't')
        self.nablae = None

    def _nabla(self, e, N, uinv):
        kappa, xi, _ = self.lift
        f = self.filtration.f
        gens = self.filtration.space.ring.gens()
        s = sum(jet(uinv*c*e, N).derivative(v) for c, v in zip(xi, gens))
        return jet(s - kappa*f**(kappa - 1)*e, N - 1)

    def update(self):
        r"""
        Bring the jets of `t^\kappa \partial_t e_i` to the current truncation
        order of the filtration.
        """
        filt = self.filtration
        N = filt.N
        if self.nablae is not None and self.nablae.order == N:
            return
        uinv = invunit(self.lift.u, N)
        polys = [self._nabla(e, N, uinv) for e in filt.e]
        if self.nablae is None:
            self.nablae = JetList(filt.space, N)
            self.nablae.extend(polys)
        else:
            self.nablae.raise_order(N, polys)

    def matrix(self):
        r"""
        Return the `\mu \times \mu` matrix `M` over `K[t]` whose `i`-th column
        holds the coordinates of `t^\kappa \partial_t e_i`, exact modulo
        `t^K`.
        """
        self.update()
        filt = self.filtration
        C = lift_coefficients(self.nablae, filt.Pe, [filt.P1, filt.P2], filt.N)
        mu, K = filt.mu, filt.K
        P = self.base
        return matrix(P, mu, mu, lambda l, i: P([C[i, k*mu + l] for k in range(K)]))

def H2_basis(f, ctx=dctx):
    r"""
    Monomial basis of the Brieskorn lattice `H''` of ``f`` over
    `\mathbb C\{t\}`.

    EXAMPLES::

        sage: from gauss_manin.brieskorn import H2_basis
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: len(H2_basis(x^2*y^2 + x^6 + y^6))
        13
        sage: len(H2_basis(x^3 + y^4 + x*y^3))
        6
        sage: S = PolynomialRing(QQ, 'x', 1, order='negdegrevlex'); x = S.gen()
        sage: H2_basis(x^3 + x^4)
        [1, x]
        sage: R.<x,y> = QQ[]
        sage: H2_basis(x^3 + y^4)
        Traceback (most recent call last):
        ...
        ValueError: no series ring
    """
    R = f.parent()
    if not R.term_order().is_local():
        raise ValueError("no series ring")
    mu = milnor_number(f)
    filt = BrieskornFiltration(f, mu, ctx)
    filt.grow(1)
    return filt.quotient_basis()
