r"""
Examples

- :mod:`gauss_manin.examples.singularities`: isolated hypersurface
  singularities with their Milnor numbers and monodromy data
- :mod:`gauss_manin.examples.ideals`: zero-dimensional ideals
"""
