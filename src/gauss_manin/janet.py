# -*- coding: utf-8 - vim: tw=80
r"""
Janet bases

A Janet basis is an involutive basis for the Janet division: every monomial
of the leading ideal is an involutive multiple of exactly one leading
monomial, where for a finite set `U` of monomials the variable `x_i` is
*multiplicative* for `u \in U` if

.. MATH::

    \deg_{x_i} u = \max \{ \deg_{x_i} v : v \in U,\ \deg_{x_j} v = \deg_{x_j} u
    \text{ for } j < i \}.

Janet bases are completed with the involutive algorithm of Gerdt and Blinkov
in the degree reverse lexicographic ordering. A Janet basis is a Gröbner
basis; :func:`reduced_janet_basis` turns it into the reduced one.

EXAMPLES::

    sage: from gauss_manin.janet import reduced_janet_basis
    sage: R.<x,y,z> = QQ[]
    sage: reduced_janet_basis(R.ideal(x*y - z, y*z - x, x*z - y))
    Ideal (y*z - x, x*z - y, y^2 - z^2, x*y - z, x^2 - z^2, z^3 - z) of Multivariate Polynomial Ring in x, y, z over Rational Field
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

from .context import switched_ordering

logger = logging.getLogger(__name__)

def _lead(p):
    return tuple(p.lm().exponents()[0])

def _divides(a, b):
    return all(i <= j for i, j in zip(a, b))

def multiplicative_variables(u, U):
    r"""
    Indices of the Janet-multiplicative variables of the exponent vector ``u``
    with respect to the set ``U`` of exponent vectors.

    EXAMPLES::

        sage: from gauss_manin.janet import multiplicative_variables
        sage: U = [(2, 0), (1, 1), (0, 2)]
        sage: [multiplicative_variables(u, U) for u in U]
        [[0, 1], [1], [1]]
    """
    mult = []
    for i in range(len(u)):
        same = [v for v in U if v[:i] == u[:i]]
        if u[i] == max(v[i] for v in same):
            mult.append(i)
    return mult

def _multiplicative(G):
    U = [_lead(g) for g in G]
    return {u: set(multiplicative_variables(u, U)) for u in U}

def _involutive_divides(l, e, mult):
    return all(a == b or (a < b and i in mult) for i, (a, b) in enumerate(zip(l, e)))

def involutive_normal_form(p, G, mult=None):
    r"""
    Full involutive normal form of ``p`` with respect to ``G`` for the Janet
    division.

    EXAMPLES::

        sage: from gauss_manin.janet import involutive_normal_form
        sage: R.<x,y> = QQ[]
        sage: involutive_normal_form(x*y^2 + y^3, [x^2, y^2])
        x*y^2
        sage: involutive_normal_form(x*y^2 + y^3, [x^2, x*y^2, y^2])
        0
    """
    if mult is None:
        mult = _multiplicative(G)
    R = p.parent()
    leads = [(_lead(g), g) for g in G]
    r = R.zero()
    while not p.is_zero():
        m = p.lm()
        c = p.lc()
        e = tuple(m.exponents()[0])
        for l, g in leads:
            if _involutive_divides(l, e, mult[l]):
                q = R.monomial(*[a - b for a, b in zip(e, l)])
                p -= (c/g.lc())*q*g
                break
        else:
            r += c*m
            p -= c*m
    return r

def _autoreduce(F):
    G = [f for f in F if not f.is_zero()]
    done = False
    while not done:
        done = True
        for i, g in enumerate(G):
            H = G[:i] + G[i+1:]
            if not H:
                continue
            h = involutive_normal_form(g, H)
            if h != g:
                G = H + ([h] if not h.is_zero() else [])
                done = False
                break
    return G

def janet_basis(gens, ring):
    r"""
    Janet basis of the ideal generated by ``gens`` in ``ring``, whose term
    order must be global.

    EXAMPLES::

        sage: from gauss_manin.janet import janet_basis
        sage: R.<x,y> = QQ[]
        sage: janet_basis([x^2, y^2], R)
        [y^2, x^2, x*y^2]
    """
    if not ring.term_order().is_global():
        raise ValueError("Janet bases require a global ordering")
    G = _autoreduce([ring(g) for g in gens])
    if not G:
        return []
    xs = ring.gens()
    steps = 0
    while True:
        mult = _multiplicative(G)
        prolongations = sorted((xs[i]*g for g in G for i in range(len(xs))
                                if i not in mult[_lead(g)]),
                               key=lambda q: q.lm())
        for q in prolongations:
            h = involutive_normal_form(q, G, mult)
            if not h.is_zero():
                break
        else:
            logger.debug("Janet basis of %s elements after %s steps", len(G), steps)
            return sorted(G, key=lambda g: g.lm())
        steps += 1
        G = _autoreduce(G + [h])

def _reduced_janet(gens, ring):
    G = janet_basis(gens, ring)
    leads = [_lead(g) for g in G]
    minimal = [g for g in G if not any(l != _lead(g) and _divides(l, _lead(g)) for l in leads)]
    res = []
    for g in minimal:
        lt = g.lc()*g.lm()
        tail = (g - lt).reduce(minimal)
        res.append((lt + tail)/g.lc())
    return sorted(res, key=lambda g: g.lm())

def _in_ring_ordering(G, R):
    r"""
    Ideal of ``R`` generated by the degrevlex basis ``G``, given by its
    standard basis for the ordering of ``R`` when that ordering differs.
    """
    G = [R(g) for g in G]
    if R.term_order().name() != 'degrevlex':
        G = list(R.ideal(G).groebner_basis('libsingular:std'))
    return R.ideal(G)

def reduced_janet_basis(I):
    r"""
    Reduced Gröbner basis of ``I`` obtained from its Janet basis, as an
    ideal of the ring of ``I``.

    EXAMPLES::

        sage: from gauss_manin.janet import reduced_janet_basis
        sage: R.<x,y> = QQ[]
        sage: reduced_janet_basis(R.ideal(x^2 - y, y^2))
        Ideal (y^2, x^2 - y) of Multivariate Polynomial Ring in x, y over Rational Field

    The Janet basis is always completed in the degree reverse lexicographic
    ordering. In other orderings the result is then reduced with respect to
    the ordering of the ring of ``I``::

        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: G = reduced_janet_basis(R.ideal(x^2 - y, y^2))
        sage: sorted(g.lm() for g in G.gens())
        [x^4, y]
    """
    R = I.ring()
    with switched_ordering(R, 'degrevlex') as S:
        G = _reduced_janet([S(g) for g in I.gens()], S)
    return _in_ring_ordering(G, R)
