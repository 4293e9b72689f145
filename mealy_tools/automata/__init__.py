r"""Work with Mealy machines.

The `automata` package provides tools meant to manipulate Mealy
machines, via the `mealy_tools.automata.mealy.Automaton` class. Below, we
manually construct a machine for a coin-operated turnstile:

```python

from mealy_tools.automata import mealy
from mealy_tools.automata.mealy import Transition

turnstile = mealy.Automaton([
    Transition("locked", "unlocked", "coin", "unlock"),
    Transition("locked", "locked", "push", "blocked"),
    Transition("unlocked", "unlocked", "coin", "refund"),
    Transition("unlocked", "locked", "push", "lock")
]).set_start_state("locked")

# outputs produced by an input sequence
[t.output for t in turnstile.path_from_input_sequence(["push", "coin", "push"])]

```
	['blocked', 'unlock', 'lock']

For more details, see the documentation for `mealy`.

This package also provides a handful of example machines. You can get a
list of them by running:

```python

from mealy_tools.automata import mealy
mealy.list_builtins()

```

The package does *not* learn machines itself. You can, however, load
the models produced by [LearnLib](https://learnlib.de/), which are
written as .dot files:

```python

from mealy_tools.automata import mealy

my_machine = mealy.load_dot_file("learned_model.dot")

# write it back out
mealy.save_dot_file(my_machine, "copy.dot")

```

Only machines whose state names are strings of digits (like the ones
LearnLib writes) can be saved this way; anything else raises
`mealy_tools.automata.dot_utils.DotOutputException`.

"""
