"""Provide utility functions used by the automaton tools in this
package.

"""

from . import diagnostics, testing
