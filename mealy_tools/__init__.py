r"""
mealy_tools
===========

`mealy_tools` is a small Python package for working with Mealy machines
learned from black-box testing (for instance by
[LearnLib](https://learnlib.de/)), as used in model-based testing and
conformance checking.

The package is built on top of [numpy](https://numpy.org/) and
[scipy](https://scipy.org/), and provides modules to:

- store values in a growable two-dimensional grid (`mealy_tools.grid`)

- build Mealy machines state by state and transition by transition, and
  simulate them on input sequences (`mealy_tools.automata.mealy`)

- compute shortest transition sequences between every pair of states,
  for generating test sequences

- read and write Mealy machines in the .dot format produced by LearnLib

## Example usage

```python
from mealy_tools.automata import mealy

# load a Mealy machine from a .dot file
machine = mealy.load_dot_file("learned_model.dot")

# shortest sequence of transitions from the start state to state "4"
route = machine.shortest_route(machine.start_state, "4")
[t.input for t in route]

```

"""
