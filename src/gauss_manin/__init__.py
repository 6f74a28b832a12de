#############################################################################
#  Copyright (C) 2024 The gauss_manin developers                            #
#                                                                           #
#  Distributed under the terms of the GNU General Public License (GPL)      #
#  either version 2, or (at your option) any later version                  #
#                                                                           #
#  https://www.gnu.org/licenses/                                            #
#############################################################################

from .context import Context, dctx
from .monodromy import monodromy_B
from .brieskorn import H2_basis
from .border import border_basis
from .janet import reduced_janet_basis
from .modular import modular_border_basis, modular_janet_basis
