# -*- coding: utf-8 - vim: tw=80
r"""
Modular border and Janet bases

The functions of this module compute the bases of :mod:`gauss_manin.border`
and :mod:`gauss_manin.janet` for ideals over `\mathbb Q` by computing their
images over word-size prime fields, combining them by Chinese remaindering
and recovering rational coefficients by rational reconstruction.

A prime is *unlucky* if the generators cannot be reduced modulo it, or if the
shape of its image (order ideal and border, or leading monomials) differs
from the one shared by the majority of the images. Unlucky primes are
discarded. A reconstructed candidate is accepted once it agrees with the
image modulo one more prime, and, if requested, once it passes an exact
verification over `\mathbb Q`.

EXAMPLES::

    sage: from gauss_manin.modular import modular_border_basis, modular_janet_basis
    sage: from gauss_manin.border import border_basis
    sage: from gauss_manin.janet import reduced_janet_basis
    sage: R.<x,y> = QQ[]
    sage: I = R.ideal(x^2 - y/3, y^2 + 5/7*x)
    sage: modular_border_basis(I).gens() == border_basis(I).gens()
    True
    sage: modular_janet_basis(I).gens() == reduced_janet_basis(I).gens()
    True

The images can be computed in parallel::

    sage: from gauss_manin.context import Context
    sage: ctx = Context(ncpus=2)
    sage: modular_janet_basis(I, ctx=ctx).gens() == reduced_janet_basis(I).gens()
    True
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
import itertools
import logging

from sage.arith.all import previous_prime
from sage.parallel.decorate import parallel
from sage.rings.finite_rings.finite_field_constructor import GF
from sage.rings.integer_ring import ZZ
from sage.rings.rational_field import QQ

from .border import border_basis, border_data
from .context import dctx, switched_ordering
from .janet import _in_ring_ordering, _reduced_janet, reduced_janet_basis

logger = logging.getLogger(__name__)

################################################################################
### Chinese remaindering #######################################################
################################################################################

def _word_size_primes(init, bound=2**10):
    r"""
    Iterator over the primes smaller than ``init`` and bigger than ``bound``,
    in decreasing order.

    EXAMPLES::

        sage: from gauss_manin.modular import _word_size_primes
        sage: list(_word_size_primes(2**10 + 30))
        [1051, 1049, 1039, 1033, 1031]
    """
    p = previous_prime(init)
    while p > bound:
        yield p
        p = previous_prime(p)

def _merge_homomorphic_images(v, mod, vp, p):
    r"""
    Chinese remaindering on dictionaries of integer coefficients.

    INPUT:

    - ``v`` -- dictionary of integers, the images of the unknown coefficients
      modulo ``mod`` (missing keys stand for zero)
    - ``mod`` -- integer
    - ``vp`` -- dictionary of integers, the images modulo ``p``
    - ``p`` -- integer coprime to ``mod``

    OUTPUT:

    A pair ``(w, mod*p)`` where ``w`` holds the coefficients modulo
    ``mod*p``, as integers between 0 and ``mod*p - 1``.

    EXAMPLES::

        sage: from gauss_manin.modular import _merge_homomorphic_images
        sage: w, m = _merge_homomorphic_images({0: 2}, 5, {0: 1, 1: 3}, 7)
        sage: sorted(w.items()), m
        ([(0, 22), (1, 10)], 35)
    """
    p = ZZ(p)
    mod = ZZ(mod)
    (_, mod0, p0) = p.xgcd(mod)
    mod0 = mod0*p
    p0 = p0*mod
    M = mod*p
    w = {}
    for k in sorted(set(v) | set(vp)):
        w[k] = (mod0*v.get(k, 0) + p0*vp.get(k, 0)) % M
    return w, M

def _reconstruct(v, mod):
    return {k: ZZ(c).rational_reconstruction(mod) for k, c in v.items()}

def _agrees(rat, vp, p):
    F = GF(p)
    try:
        return all(F(rat.get(k, 0)) == vp.get(k, 0) for k in set(rat) | set(vp))
    except ZeroDivisionError:
        return False

def _try_image(image, p):
    try:
        return image(p)
    except (ArithmeticError, ValueError) as exc:
        logger.debug("unlucky prime %s discarded (%s)", p, exc)
        return None

def _modular_reconstruction(image, build, verify, ctx):
    r"""
    Generic multi-prime reconstruction.

    ``image(p)`` returns a pair ``(shape, coeffs)`` where ``shape`` is a
    hashable description of the result modulo ``p`` and ``coeffs`` a
    dictionary of integers. ``build(shape, coeffs)`` turns rational
    coefficients into the result, and ``verify(shape, result)``, unless it is
    ``None``, certifies it. Returns ``(shape, result)``.

    At most ``ctx.max_unlucky_primes`` primes may be discarded::

        sage: from gauss_manin.modular import modular_border_basis
        sage: from gauss_manin.context import Context
        sage: R.<x,y> = QQ[]
        sage: I = R.ideal(x^2 - y/1051, y^2)
        sage: modular_border_basis(I, ctx=Context(max_modulus=1054, max_unlucky_primes=0))
        Traceback (most recent call last):
        ...
        ArithmeticError: too many unlucky primes (1)
        sage: modular_border_basis(I, ctx=Context(max_modulus=1054, max_unlucky_primes=1))
        Ideal (x^2*y, x*y^2, x^2 - 1/1051*y, y^2) of Multivariate Polynomial Ring in x, y over Rational Field
    """
    primes = _word_size_primes(ctx.max_modulus)

    if ctx.ncpus > 1:
        @parallel(ncpus=ctx.ncpus)
        def forked_image(p):
            return _try_image(image, p)

    def images(count):
        batch = list(itertools.islice(primes, count))
        if not batch:
            raise ArithmeticError("ran out of primes")
        if ctx.ncpus == 1 or len(batch) == 1:
            return [(p, _try_image(image, p)) for p in batch]
        return [(u[0][0], res) for (u, res) in forked_image(batch)] # parallel

    votes = collections.Counter()
    accumulated = {}
    failures = 0

    def record(p, img):
        nonlocal failures
        if img is None:
            failures += 1
            return
        shape, vp = img
        votes[shape] += 1
        if shape in accumulated:
            accumulated[shape] = _merge_homomorphic_images(*accumulated[shape], vp, p)
        else:
            accumulated[shape] = (vp, ZZ(p))

    def check_unlucky():
        best = votes.most_common(1)[0] if votes else (None, 0)
        unlucky = failures + sum(votes.values()) - best[1]
        if unlucky > ctx.max_unlucky_primes:
            raise ArithmeticError("too many unlucky primes ({})".format(unlucky))
        return best[0]

    while True:

        for p, img in images(ctx.batch_size):
            record(p, img)
        shape = check_unlucky()
        if shape is None:
            continue

        v, mod = accumulated[shape]
        logger.debug("%s primes of the majority shape, modulus of %s bits",
                     votes[shape], mod.nbits())
        try:
            rat = _reconstruct(v, mod)
        except (ArithmeticError, ValueError): # more primes needed
            continue

        # homomorphic check
        [(q, img)] = images(1)
        record(q, img)
        if img is None or img[0] != shape or not _agrees(rat, img[1], q):
            logger.debug("candidate rejected modulo %s", q)
            check_unlucky()
            continue

        result = build(shape, rat)
        if verify is not None and not verify(shape, result):
            logger.info("exact verification failed, adding primes")
            continue
        logger.info("reconstruction from %s primes", votes[shape])
        return shape, result

################################################################################
### Images #####################################################################
################################################################################

def _exponents(m):
    return tuple(m.exponents()[0])

def _coefficients(polys):
    return {(i, tuple(e)): ZZ(c) for i, q in enumerate(polys)
            for e, c in zip(q.exponents(), q.coefficients())}

def _polynomials(ring, count, coeffs):
    polys = [ring.zero()]*count
    for (i, e), c in coeffs.items():
        polys[i] += c*ring.monomial(*e)
    return polys

def _check_arguments(I, exact):
    if exact not in (0, 1):
        raise ValueError("exact must be 0 or 1")
    K = I.ring().base_ring()
    if K.characteristic() > 0:
        return False
    if K != QQ:
        raise TypeError("coefficients must be rational")
    return True

def modular_border_basis(I, exact=0, ctx=dctx):
    r"""
    Border basis of the zero-dimensional ideal ``I`` computed by a modular
    method.

    The result is the same as that of
    :func:`~gauss_manin.border.border_basis`. Ideals over prime fields are
    passed to that function directly.

    INPUT:

    - ``I`` -- ideal of a polynomial ring over `\mathbb Q` or a prime field,
      with any term order
    - ``exact`` -- 1 to check the result over `\mathbb Q` (membership of the
      elements in ``I`` and dimension of the quotient), 0 (default) to only
      rely on the check modulo an extra prime
    - ``ctx`` -- a :class:`~gauss_manin.context.Context`

    EXAMPLES::

        sage: from gauss_manin.modular import modular_border_basis
        sage: from gauss_manin.border import border_basis
        sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: J = R.ideal(x*y, x^2 + y^2 + x^3/5)
        sage: modular_border_basis(J, exact=1)
        Ideal (x^2 + y^2, x*y, x*y^2, y^3) of Multivariate Polynomial Ring in x, y over Rational Field
        sage: modular_border_basis(J, exact=1).gens() == border_basis(J).gens()
        True
        sage: T.<x,y> = PolynomialRing(QQ, order='degrevlex(1),negdegrevlex(1)')
        sage: J = T.ideal(x^2 - 1/3 - y, y^2 - y)
        sage: modular_border_basis(J).gens() == border_basis(J).gens()
        True
        sage: R.<x,y> = GF(7)[]
        sage: modular_border_basis(R.ideal(x^2 - y, y^2))
        Ideal (x^2*y, x*y^2, x^2 - y, y^2) of Multivariate Polynomial Ring in x, y over Finite Field of size 7
        sage: R.<x,y> = ZZ[]
        sage: modular_border_basis(R.ideal(x^2, y^2))
        Traceback (most recent call last):
        ...
        TypeError: coefficients must be rational
    """
    if not _check_arguments(I, exact):
        return border_basis(I, ctx)
    R = I.ring()

    def image(p):
        Rp = R.change_ring(GF(p))
        Ip = Rp.ideal([Rp(g) for g in I.gens()])
        O, B, elts = border_data(Ip, ctx)
        shape = (tuple(_exponents(o) for o in O), tuple(_exponents(b) for b in B))
        return shape, _coefficients(elts)

    def build(shape, coeffs):
        return _polynomials(R, max(len(shape[1]), 1), coeffs)

    def verify(shape, elts):
        if not all(g in I for g in elts):
            return False
        return I.vector_space_dimension() == len(shape[0])

    _, elts = _modular_reconstruction(image, build, verify if exact else None, ctx)
    return R.ideal(elts)

def _spoly(g, h):
    S = g.parent()
    l = g.lm().lcm(h.lm())
    return (S.monomial_quotient(l, g.lm())*g/g.lc()
            - S.monomial_quotient(l, h.lm())*h/h.lc())

def modular_janet_basis(I, exact=0, ctx=dctx):
    r"""
    Reduced Gröbner basis of ``I`` obtained from Janet bases of its images
    modulo primes. The images are computed in the degree reverse
    lexicographic ordering.

    The result is the same as that of
    :func:`~gauss_manin.janet.reduced_janet_basis`. With ``exact=1``, the
    result is checked over `\mathbb Q`: its elements belong to ``I``, the
    generators of ``I`` reduce to zero, and so do all S-polynomials.

    EXAMPLES::

        sage: from gauss_manin.modular import modular_janet_basis
        sage: R.<x,y,z> = QQ[]
        sage: I = R.ideal(x*y - z/2, y*z - x, x*z - 3*y)
        sage: from gauss_manin.janet import reduced_janet_basis
        sage: modular_janet_basis(I, exact=1).gens() == reduced_janet_basis(I).gens()
        True
        sage: modular_janet_basis(I, exact=2)
        Traceback (most recent call last):
        ...
        ValueError: exact must be 0 or 1

    In a local ring, the result is a standard basis for the local ordering::

        sage: S.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
        sage: G = modular_janet_basis(S.ideal(x^2 - y/3, y^2))
        sage: sorted(g.lm() for g in G.gens())
        [x^4, y]
    """
    if not _check_arguments(I, exact):
        return reduced_janet_basis(I)
    R = I.ring()

    def image(p):
        Rp = R.change_ring(GF(p))
        gens = [Rp(g) for g in I.gens()]
        with switched_ordering(Rp, 'degrevlex') as S:
            G = _reduced_janet([S(g) for g in gens], S)
        return tuple(_exponents(g.lm()) for g in G), _coefficients(G)

    def build(shape, coeffs):
        return _polynomials(R, len(shape), coeffs)

    def verify(shape, elts):
        with switched_ordering(R, 'degrevlex') as S:
            G = [S(g) for g in elts]
            gens = [S(g) for g in I.gens()]
            IS = S.ideal(gens)
            ok = (all(g in IS for g in G)
                  and all(g.reduce(G).is_zero() for g in gens)
                  and all(_spoly(g, h).reduce(G).is_zero()
                          for g, h in itertools.combinations(G, 2)))
        return ok

    _, G = _modular_reconstruction(image, build, verify if exact else None, ctx)
    return _in_ring_ordering(G, R)
