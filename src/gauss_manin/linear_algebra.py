# -*- coding: utf-8 - vim: tw=80
r"""
Lattices over `K[t]` and eigenvalue shifts

Lattices in `K((t))^\mu` are represented by square matrices over `K[t]` whose
columns form a basis. The functions below compute determinants and adjoints,
canonical bases of lattices given by generators, containment tests, and the
elementary transformation that shifts eigenvalues of the residue of a
connection by integers.
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
from sage.matrix.special import identity_matrix
from sage.rings.integer_ring import ZZ

from .tools import shift_down

logger = logging.getLogger(__name__)

################################################################################
### Lattices ###################################################################
################################################################################

def detadj(U):
    r"""
    Determinant and adjoint matrix of the square matrix ``U``.

    The adjoint is obtained by lifting ``det(U)*I`` along ``U``.

    EXAMPLES::

        sage: from gauss_manin.linear_algebra import detadj
        sage: P.<t> = QQ[]
        sage: U = matrix(P, [[t, 1], [t^2, 1 + t]])
        sage: d, adj = detadj(U)
        sage: d
        t
        sage: U*adj == d*identity_matrix(P, 2)
        True
        sage: detadj(matrix(P, [[1, t]]))
        Traceback (most recent call last):
        ...
        ValueError: no square matrix
        sage: detadj(matrix(P, [[1, t], [t, t^2]]))
        Traceback (most recent call last):
        ...
        ValueError: determinant zero
    """
    if not U.is_square():
        raise ValueError("no square matrix")
    d = U.det()
    if d.is_zero():
        raise ValueError("determinant zero")
    P = U.base_ring()
    F = P.fraction_field()
    n = U.nrows()
    adj = U.change_ring(F).solve_right(d*identity_matrix(F, n))
    return d, adj.change_ring(P)

def lattice_basis(generators, D):
    r"""
    Hermite basis of the lattice generated by the columns of the matrices
    ``generators`` and by `t^D I`.

    Since `t^D I` belongs to the lattice, the generators are only needed
    modulo `t^D`.

    EXAMPLES::

        sage: from gauss_manin.linear_algebra import lattice_basis
        sage: P.<t> = QQ[]
        sage: from gauss_manin.linear_algebra import lattice_contains
        sage: U = lattice_basis([matrix(P, [[t], [t + t^3]])], 2)
        sage: U.det().monic()
        t^3
        sage: lattice_contains(U, matrix(P, [[t], [t]]))
        True
    """
    P = generators[0].base_ring()
    t = P.gen()
    n = generators[0].nrows()
    G = matrix(P, n, 0)
    for g in generators:
        G = G.augment(g.apply_map(lambda p: p.truncate(D)))
    G = G.augment(t**D*identity_matrix(P, n))
    H = G.transpose().echelon_form()
    rows = [r for r in H.rows() if not r.is_zero()]
    return matrix(P, rows).transpose()

def lattice_contains(U0, U):
    r"""
    Test whether the lattice spanned by the columns of ``U`` is contained in
    the lattice spanned by the columns of ``U0``.

    EXAMPLES::

        sage: from gauss_manin.linear_algebra import lattice_contains
        sage: P.<t> = QQ[]
        sage: U0 = matrix(P, [[t, 0], [0, 1]])
        sage: lattice_contains(U0, t*identity_matrix(P, 2))
        True
        sage: lattice_contains(U0, identity_matrix(P, 2))
        False
    """
    d, adj = detadj(U0)
    return all((c % d).is_zero() for c in (adj*U).list())

################################################################################
### Eigenvalue shifts ##########################################################
################################################################################

def jordan_data(A0):
    r"""
    Eigenvalues and Jordan block sizes of a square matrix over a field.

    All eigenvalues must lie in the base field.

    OUTPUT:

    A list of pairs ``(eigenvalue, block_sizes)``, sorted by eigenvalue, the
    block sizes being sorted in decreasing order.

    EXAMPLES::

        sage: from gauss_manin.linear_algebra import jordan_data
        sage: jordan_data(matrix(QQ, [[1, 1, 0], [0, 1, 0], [0, 0, 3]]))
        [(1, [2]), (3, [1])]
        sage: jordan_data(matrix(QQ, [[0, 1], [-1, 0]]))
        Traceback (most recent call last):
        ...
        ValueError: eigenvalues not in the base field
    """
    n = A0.nrows()
    K = A0.base_ring()
    roots = A0.charpoly().roots(K)
    if sum(m for _, m in roots) != n:
        raise ValueError("eigenvalues not in the base field")
    I = identity_matrix(K, n)
    data = []
    for lam, _ in sorted(roots):
        B = A0 - lam*I
        ranks = [n]
        Bk = I
        while True:
            Bk = Bk*B
            ranks.append(Bk.rank())
            if ranks[-1] == ranks[-2]:
                break
        # at_least[k] = number of blocks of size > k
        at_least = [ranks[k] - ranks[k + 1] for k in range(len(ranks) - 1)] + [0]
        sizes = []
        for k in range(len(at_least) - 1, 0, -1):
            sizes.extend([k]*(at_least[k - 1] - at_least[k]))
        data.append((lam, sizes))
    return data

def mid(eigenvalues):
    r"""
    Maximal positive integer difference between two of the given eigenvalues
    (zero if there is none).

    EXAMPLES::

        sage: from gauss_manin.linear_algebra import mid
        sage: mid([0, 1/2, 2, 5/2])
        2
        sage: mid([1/3, 2/3])
        0
    """
    gap = ZZ.zero()
    for a in eigenvalues:
        for b in eigenvalues:
            d = a - b
            if d > gap and d in ZZ:
                gap = ZZ(d)
    return gap

def decmide(A, prec):
    r"""
    Decrease the maximal integer difference between the eigenvalues of
    `A(0)` by one.

    INPUT:

    - ``A`` -- square matrix over `K[t]`, the matrix of `t \partial_t` with
      respect to some lattice basis, known modulo `t^{prec}`
    - ``prec`` -- integer, at least 2 unless the eigenvalue gap is zero

    OUTPUT:

    A pair ``(B, prec - 1)`` where ``B`` is the matrix of `t \partial_t` in a
    new basis: first a constant basis of generalized eigenspaces of `A(0)`,
    then the elements of the eigenspaces whose eigenvalue is the smallest of
    its class modulo `\mathbb Z` are multiplied by `t`, which raises these
    eigenvalues by one. If no two eigenvalues differ by a positive integer,
    the input is returned unchanged.

    EXAMPLES::

        sage: from gauss_manin.linear_algebra import decmide
        sage: P.<t> = QQ[]
        sage: A = matrix(P, [[0, t], [t, 1]])
        sage: B, prec = decmide(A, 3)
        sage: B
        [1 1]
        [0 1]
        sage: prec
        2
        sage: decmide(B, prec) == (B, prec)
        True
    """
    P = A.parent().base_ring()
    K = P.base_ring()
    t = P.gen()
    n = A.nrows()
    A0 = A.apply_map(lambda p: p[0], K)
    data = jordan_data(A0)
    eigenvalues = [lam for lam, _ in data]
    gap = mid(eigenvalues)
    if gap == 0:
        return A, prec
    if prec < 2:
        raise ValueError("precision too low to shift eigenvalues")

    cols = []
    labels = []
    I = identity_matrix(K, n)
    for lam, sizes in data:
        ker = ((A0 - lam*I)**sizes[0]).right_kernel_matrix()
        cols.extend(ker.rows())
        labels.extend([lam]*ker.nrows())
    U = matrix(K, cols).transpose()
    d, adj = detadj(U)
    A = (~d)*adj.change_ring(P)*A*U.change_ring(P)

    shifted = set()
    for lam in eigenvalues:
        cls = [mu for mu in eigenvalues if (mu - lam) in ZZ]
        if min(cls) == lam and max(cls) > lam:
            shifted.add(lam)
    logger.debug("shifting eigenvalues %s (gap %s)", sorted(shifted), gap)

    prec -= 1
    S = [labels[i] in shifted for i in range(n)]
    B = matrix(P, n, n)
    for i in range(n):
        for j in range(n):
            p = A[i, j].truncate(prec + 1)
            if S[i] and not S[j]:
                p = shift_down(p, 1)
            elif S[j] and not S[i]:
                p = t*p
            elif S[i] and i == j:
                p += 1
            B[i, j] = p.truncate(prec)
    return B, prec
