"""Work with Mealy machines learned by black-box testing.

A Mealy machine is a finite directed graph whose edges
("transitions") are labeled by an input symbol and an output symbol,
written `input / output`. Several transitions may connect the same
pair of states. One state is the start state; feeding the machine a
sequence of inputs walks the transitions from there.

This module provides the `Automaton` class. Its transitions are stored
in a `mealy_tools.grid.Grid`, indexed by `[from state][to state]`, and
every cell holds the list of transitions between those two states.

The main use-case is computing shortest transition sequences between
states, e.g. to reach a state before testing it:

```python
from mealy_tools.automata import mealy

coffee = mealy.load_builtin("coffee.dot")
[str(t) for t in coffee.shortest_route("0", "4")]

```
    ['water / ok', 'pod / ok', 'button / coffee']

"""

import itertools
from importlib import resources

import numpy as np
from scipy.sparse import dok_matrix
from scipy.sparse.csgraph import shortest_path

from . import dot_parse, dot_utils
from ..grid import Grid
from ..utils import diagnostics

BUILTIN_DIR = "builtin"


class AutomatonException(Exception):
    pass


class UnsupportedOperation(AutomatonException):
    """Thrown when an operation is requested on an automaton which does
    not meet its prerequisites.

    """
    pass


class Transition:
    """A single labeled edge of a Mealy machine.

    A transition is never modified by the `Automaton` it belongs to,
    so copies of an automaton share their `Transition` objects. The
    only mutable fields are the usage counters `used` and `calls`,
    which are updated by `Automaton.annotate_trace`.

    """
    def __init__(self, source, target, input=None, output=None, label=None):
        """

        Parameters
        ----------
        source : string or int
            name of the state this transition leaves. Integers are
            converted to strings.

        target : string or int
            name of the state this transition enters.

        input : string
            input symbol.

        output : string
            output symbol.

        label : string
            raw label of the transition. If `None`, it is built from
            `input` and `output` as `"input / output"` (or from the
            one of them given). If it contains a `/`, `input` and
            `output` default to the stripped text around the first `/`;
            explicitly given `input` and `output` take precedence.

        """
        self.source = str(source)
        self.target = str(target)
        self.input = None
        self.output = None

        if label is not None and "/" in label:
            symbol_in, _, symbol_out = label.partition("/")
            self.input = symbol_in.strip()
            self.output = symbol_out.strip()

        # explicit symbols win over the ones split from the label
        if input is not None:
            self.input = input
        if output is not None:
            self.output = output

        if label is None and (input is not None or output is not None):
            label = " / ".join(str(symbol) for symbol in (input, output)
                               if symbol is not None)
        self.label = label

        self.used = False
        self.calls = 0

    def key(self):
        return (self.source, self.target, self.input, self.output)

    def __str__(self):
        return str(self.label)

    def __repr__(self):
        return "Transition({!r}, {!r}, label={!r})".format(
            self.source, self.target, self.label
        )


class Automaton:
    """Automaton: a Mealy machine stored as a grid of transition lists.

    States are identified by name, and every name is given a dense
    integer index the first time it is seen. Indices are never
    reused, and states and transitions are never removed.

    """
    def __init__(self, transitions=None, states=None, report=None):
        """

        Parameters
        ----------
        transitions : iterable of Transition
            transitions to add to the automaton. Their endpoints are
            added as states if needed.

        states : iterable of strings
            states to add before adding any transition. Use this to
            control the order of state indices, or to add states with
            no transitions.

        report : callable
            function taking a single message string, called when a
            recoverable problem occurs. If `None`, issue an
            `AutomatonWarning`.

        """
        self._matrix = Grid()
        self._state_index = {}
        self._start_index = 0
        self._shortest_routes = None
        self.alphabet = set()
        self.report = diagnostics.reporter(report)

        if states is not None:
            self.add_states(states)
        if transitions is not None:
            self.add_transitions(transitions)

    def __str__(self):
        return str(self._matrix)

    def __repr__(self):
        return "Automaton(states={}, transitions={})".format(
            len(self._state_index), len(self.all_transitions())
        )

    @property
    def start_state(self):
        for name, index in self._state_index.items():
            if index == self._start_index:
                return name
        return None

    def set_start_state(self, name):
        """Make `name` the start state. Does nothing if there is no state
        with this name.

        """
        if name in self._state_index:
            self._start_index = self._state_index[name]
        return self

    def states(self):
        """Get the state names, in index order."""
        return list(self._state_index)

    def state_index(self, name):
        return self._state_index[name]

    def is_empty(self):
        return len(self._state_index) == 0

    def has_state(self, name):
        return name in self._state_index

    def ensure_state(self, name):
        """Get the index of a state, adding the state if it does not
        exist yet.

        """
        if name not in self._state_index:
            self._state_index[name] = len(self._state_index)
            self._matrix.increase(1)
        return self._state_index[name]

    def add_state(self, name):
        self.ensure_state(name)
        return self

    def add_states(self, names):
        for name in names:
            self.ensure_state(name)
        return self

    def add_transition(self, transition):
        """Add a transition (and its endpoints, if needed) to the
        automaton.

        Raises
        ------
        AutomatonException
            if the transition has neither an input symbol nor a label.

        """
        if transition.input is None and transition.label is None:
            raise AutomatonException(
                "Transition {} -> {} has no input symbol and no label".format(
                    transition.source, transition.target)
            )

        source = self.ensure_state(transition.source)
        target = self.ensure_state(transition.target)

        if transition.input is not None:
            self.alphabet.add(transition.input)
        else:
            self.alphabet.add(transition.label.split("/")[0].strip())

        if self._matrix.get(source, target) is None:
            self._matrix.set([], source, target)
        self._matrix.get(source, target).append(transition)
        return self

    def add_transitions(self, transitions):
        for t in transitions:
            self.add_transition(t)
        return self

    def transitions(self, source, target):
        """Get the list of transitions from `source` to `target`.

        Returns
        -------
        list or None
            the transitions between the two states, in the order they
            were added, or `None` if there are none (or if either
            state is unknown).

        """
        if not (self.has_state(source) and self.has_state(target)):
            return None
        cell = self._matrix.get(self._state_index[source],
                                self._state_index[target])
        if cell is None:
            return None
        return list(cell)

    def _cells_from(self, state):
        return self._matrix.row(self._state_index[state])

    def transitions_from(self, state):
        """Get all of the transitions leaving a state.

        Transitions are ordered by the index of their target state,
        then by the order they were added.

        Returns
        -------
        list or None
            the outgoing transitions, or `None` if there are none.

        """
        if not self.has_state(state):
            return None
        outgoing = [t for cell in self._cells_from(state)
                    if cell is not None for t in cell]
        if len(outgoing) == 0:
            return None
        return outgoing

    def transition(self, source, label):
        """Get the first transition leaving `source` whose raw label is
        `label`, or `None` if there is no such transition.

        """
        for t in self.transitions_from(source) or []:
            if t.label == label:
                return t
        return None

    def next_state(self, source, label):
        """Get the state reached by taking the transition `label` from
        `source`.
        """
        t = self.transition(source, label)
        return None if t is None else t.target

    def all_transitions(self):
        """Get every transition of the automaton.

        Transitions are listed one target state at a time (i.e. column
        by column in the transition grid), then by source state, then
        in the order they were added.

        """
        return [t for cell in self._matrix.flatten()
                if cell is not None for t in cell]

    def path_from_input_sequence(self, inputs, report=None):
        """Find the transitions taken when the automaton reads a sequence
        of inputs.

        Starting at the start state, each input follows the first
        outgoing transition (see `transitions_from`) with a matching
        input symbol. If there is no such transition, the input is
        skipped and the automaton stays where it is.

        Parameters
        ----------
        inputs : iterable of strings
            the input symbols to read.

        report : callable
            diagnostics function to use instead of `self.report`.

        Returns
        -------
        list of Transition
            the transitions taken. Empty if the automaton has no start
            state, in which case the problem is reported.

        """
        if report is None:
            report = self.report

        state = self.start_state
        if state is None:
            report("Start state not set!")
            return []

        path = []
        for symbol in inputs:
            for t in self.transitions_from(state) or []:
                if t.input == symbol:
                    path.append(t)
                    state = t.target
                    break
        return path

    def annotate_trace(self, inputs):
        """Follow a sequence of inputs and mark every transition taken as
        used, counting how many times each one is taken.

        """
        path = self.path_from_input_sequence(inputs)
        for t in path:
            t.used = True
            t.calls += 1
        return path

    def floyd_warshall(self):
        """Compute a shortest route between every ordered pair of states.

        The length of a route is the number of transitions in it. When
        two states are connected by several transitions, only the first
        one added is used. Among routes of the same length, the one
        found first is kept.

        The result is cached for `shortest_route`. It is not updated
        when the automaton changes; call this function again to
        refresh it.

        Returns
        -------
        Grid
            grid whose `[i][j]` cell holds a list of transitions
            leading from the state with index `i` to the state with
            index `j`, or `None` if there is no such route.

        Raises
        ------
        UnsupportedOperation
            if the transition grid is not square.

        """
        size, columns = self._matrix.shape
        if size != columns:
            raise UnsupportedOperation(
                "Square transition grid is needed for this operation,"
                " got shape {}".format(self._matrix.shape)
            )

        routes = Grid.square(size)
        for i, j in itertools.product(range(size), repeat=2):
            cell = self._matrix.get(i, j)
            if cell:
                routes.set([cell[0]], i, j)

        for k in range(size):
            for i in range(size):
                for j in range(size):
                    first = routes.get(i, k)
                    second = routes.get(k, j)
                    if first is None or second is None:
                        continue
                    current = routes.get(i, j)
                    if current is None or len(first) + len(second) < len(current):
                        routes.set(first + second, i, j)

        self._shortest_routes = routes
        return routes

    def shortest_route(self, source, target):
        """Get a shortest list of transitions leading from `source` to
        `target`.

        Uses the routes cached by the last call to `floyd_warshall`,
        computing them first if needed.

        Returns
        -------
        list of Transition or None
            the route, or `None` if `target` cannot be reached from
            `source`, either state is unknown, or either state was added
            after the routes were cached.

        """
        if self._shortest_routes is None:
            self.floyd_warshall()

        if not (self.has_state(source) and self.has_state(target)):
            return None

        i = self._state_index[source]
        j = self._state_index[target]
        rows, columns = self._shortest_routes.shape
        if i >= rows or j >= columns:
            return None

        route = self._shortest_routes.get(i, j)
        if route is None:
            return None
        return list(route)

    def adjacency_matrix(self):
        """Get a sparse matrix whose `[i, j]` entry is the number of
        transitions from state `i` to state `j`.

        """
        size = len(self._state_index)
        adjacency = dok_matrix((size, size), dtype=int)
        for i, j in itertools.product(range(size), repeat=2):
            cell = self._matrix.get(i, j)
            if cell:
                adjacency[i, j] = len(cell)
        return adjacency.tocsr()

    def hop_distances(self):
        """Get the number of transitions on a shortest route between every
        ordered pair of states.

        Returns
        -------
        ndarray
            array of floats indexed by state index. Diagonal entries
            are 0, and unreachable pairs are `inf`.

        """
        if self.is_empty():
            return np.zeros((0, 0))
        return shortest_path(self.adjacency_matrix(), directed=True,
                             unweighted=True)

    def copy(self):
        """Get a copy of this automaton.

        The copy has its own transition grid, but shares its
        `Transition` objects with this automaton. Shortest routes are
        not copied.

        """
        aut = Automaton(report=self.report)
        aut.add_states(self.states())
        for i, j in itertools.product(range(self._matrix.row_count),
                                      range(self._matrix.column_count)):
            cell = self._matrix.get(i, j)
            if cell is not None:
                aut._matrix.set(list(cell), i, j)

        aut._start_index = self._start_index
        aut.alphabet = set(self.alphabet)
        return aut

    def filter_transitions(self, predicate, copy=False):
        """Remove the transitions which do not satisfy a predicate.

        Parameters
        ----------
        predicate : callable
            function taking a `Transition` and returning a bool.

        copy : bool
            If `True`, filter a copy of the automaton. Otherwise (the
            default), modify this automaton.

        Returns
        -------
        Automaton
            the filtered automaton.

        """
        aut = self.copy() if copy else self
        for i, j in itertools.product(range(aut._matrix.row_count),
                                      range(aut._matrix.column_count)):
            cell = aut._matrix.get(i, j)
            if cell is not None:
                kept = [t for t in cell if predicate(t)]
                aut._matrix.set(kept if kept else None, i, j)
        return aut


def read_dot(lines, report=None) -> Automaton:
    """Build an automaton from the lines of a .dot file.

    Parameters
    ----------
    lines : iterable of strings
        lines of the .dot file, e.g. an open text file. The lines are
        consumed but the source is not closed.

    report : callable
        diagnostics function. If `None`, issue an `AutomatonWarning`.

    Returns
    -------
    Automaton
        the automaton described by the lines.

    Raises
    ------
    DotInputException
        if a transition line is malformed. No automaton is built.

    """
    report = diagnostics.reporter(report)
    try:
        edges, start = dot_parse.parse_lines(lines)
    except dot_parse.DotInputException as e:
        report(str(e))
        raise

    automaton = Automaton(
        [Transition(source, target, symbol_in, symbol_out)
         for source, target, symbol_in, symbol_out in edges],
        report=report
    )
    if start is not None:
        automaton.set_start_state(start)
    return automaton


def load_dot_file(filename, report=None) -> Automaton:
    """Build an automaton from a .dot file written by LearnLib (or by
    `save_dot_file`).

    """
    with open(filename, "r") as dotfile:
        return read_dot(dotfile, report)


def write_dot(automaton, writer):
    dot_utils.write_dot(automaton, writer)


def save_dot_file(automaton, filename):
    """Write an automaton to a .dot file.

    Raises
    ------
    DotOutputException
        if the automaton cannot be written in a form `load_dot_file`
        reads back. The file is not created in that case.

    """
    dot_string = dot_utils.automaton_to_dot(automaton)
    with open(filename, "w") as dotfile:
        dotfile.write(dot_string)


def load_builtin(filename):
    """Load a Mealy machine built in to the automata subpackage.

    Parameters
    ----------
    filename : string
        Name of the automaton file to load

    Returns
    -------
    Automaton
        Mealy machine read from this file

    """
    dot_string = resources.files(__package__).joinpath(
        BUILTIN_DIR).joinpath(filename).read_text(encoding="utf-8")
    return read_dot(dot_string.splitlines())


def list_builtins():
    """Return a list of all the automata included with the automata
    subpackage.

    """
    return sorted(entry.name for entry in
                  resources.files(__package__).joinpath(BUILTIN_DIR).iterdir()
                  if entry.name.endswith(".dot"))
