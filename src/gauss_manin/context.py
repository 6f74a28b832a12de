#  -*-
r"""
Computation contexts

A :class:`Context` gathers the tuning options of the algorithms in this
package. Most functions take an optional ``ctx`` argument and fall back to the
default context ``dctx``::

    sage: from gauss_manin.context import Context
    sage: ctx = Context(ncpus=2)
    sage: ctx.ncpus
    2
    sage: Context(ctx=ctx).ncpus
    2
    sage: Context(max_order_steps=-1)
    Traceback (most recent call last):
    ...
    ValueError: ('max_order_steps', -1)

The module also provides :func:`switched_ordering`, used whenever a
computation has to be carried out under a different monomial ordering than
the one of the caller's ring::

    sage: from gauss_manin.context import switched_ordering
    sage: R.<x,y> = PolynomialRing(QQ, order='negdegrevlex')
    sage: with switched_ordering(R, 'degrevlex') as S:
    ....:     S.term_order().is_global()
    True
    sage: R.term_order().is_local()
    True
"""

# Copyright 2024 The gauss_manin developers
#
# Distributed under the terms of the GNU General Public License (GPL) either
# version 2, or (at your option) any later version
#
# http://www.gnu.org/licenses/

import contextlib
import logging
import pprint

logger = logging.getLogger(__name__)

class Context:
    r"""
    Computation context

    Options:

    - ``max_kappa`` (int or None) -- Largest power of `f` tried when
      searching for the minimal `\kappa` with `f^\kappa` in the Jacobian
      ideal. The default ``None`` stands for the number of variables, which
      is enough for any isolated singularity by the Briançon-Skoda theorem.

    - ``max_order_steps`` (int) -- Maximal number of unit increments of the
      truncation order `N` in one refinement loop of the filtration builder.
      Exceeding it means that the singularity is most likely not isolated.

    - ``ncpus`` (int) -- Number of processes used by the modular algorithms.
      The images modulo several primes are computed in parallel when this is
      larger than one.

    - ``max_modulus`` (int) -- The modular algorithms use the primes below
      this bound, in decreasing order. It must stay below `2^{31}`, the
      largest characteristic supported by the Singular kernel.

    - ``batch_size`` (int) -- Number of primes treated between two attempts
      at rational reconstruction (at least ``ncpus``).

    - ``max_unlucky_primes`` (int) -- Number of unlucky primes the modular
      algorithms tolerate before giving up.
    """

    def __init__(self, *, ctx=None, **kwds):

        if ctx is None:
            self._set_options(**kwds)
        else:
            assert isinstance(ctx, Context)
            if kwds:
                raise ValueError("received both a Context object and keywords")
            self.__dict__.update(ctx.__dict__)

    def _set_options(self, *,
                     batch_size=1,
                     max_kappa=None,
                     max_modulus=2**29,
                     max_order_steps=256,
                     max_unlucky_primes=32,
                     ncpus=1,
                     ):

        if max_kappa is not None:
            max_kappa = int(max_kappa)
            if max_kappa < 1:
                raise ValueError("max_kappa", max_kappa)
        self.max_kappa = max_kappa

        self.max_order_steps = int(max_order_steps)
        if self.max_order_steps < 0:
            raise ValueError("max_order_steps", max_order_steps)

        self.max_unlucky_primes = int(max_unlucky_primes)
        if self.max_unlucky_primes < 0:
            raise ValueError("max_unlucky_primes", max_unlucky_primes)

        self.ncpus = int(ncpus)
        if self.ncpus < 1:
            raise ValueError("ncpus", ncpus)

        self.max_modulus = int(max_modulus)
        if not 2**10 < self.max_modulus < 2**31:
            raise ValueError("max_modulus", max_modulus)

        self.batch_size = max(int(batch_size), self.ncpus)

    def __repr__(self):
        return pprint.pformat(self.__dict__)

    def kappa_bound(self, ring):
        if self.max_kappa is None:
            return ring.ngens()
        return self.max_kappa

dctx = Context() # default context

@contextlib.contextmanager
def switched_ordering(ring, order):
    r"""
    Temporarily work in a copy of ``ring`` with the monomial ordering
    ``order``.

    The alternate ring is yielded to the body of the ``with`` statement, which
    is responsible for converting its results back (conversion between the two
    rings goes by variable names). The caller's ring is never modified, so
    leaving the block, normally or through an exception, restores the original
    setting.
    """
    target = ring.change_ring(order=order)
    logger.debug("switching ordering %s --> %s", ring.term_order(),
                 target.term_order())
    try:
        yield target
    finally:
        logger.debug("back to ordering %s", ring.term_order())
