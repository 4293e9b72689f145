"""dot_utils.py: write Mealy machines in the .dot format read by
`dot_parse`.

Only automata that `dot_parse` can read back are written: state names
must be strings of digits, and every label must contain a `/` and no
double quote.

"""

from . import dot_parse

DEFAULT_GRAPH_NAME = "g"
START_NODE = "__start0"


class DotOutputException(Exception):
    """Thrown when an automaton cannot be written in a form that
    `dot_parse` reads back.

    """
    pass


def node_name(state):
    identifier = "s{}".format(state)
    if dot_parse.parse_state(identifier) != state:
        raise DotOutputException(
            "Cannot write state '{}': state names must be digit strings".format(
                state)
        )
    return identifier


def edge_label(transition):
    if transition.label is not None:
        label = transition.label
    else:
        label = "{} / {}".format(transition.input, transition.output)

    if "/" not in label or '"' in label:
        raise DotOutputException(
            "Cannot write label '{}': labels need a '/' and no '\"'".format(
                label)
        )
    return label

def automaton_to_dot(automaton, name=DEFAULT_GRAPH_NAME, newlines=True):
    """Get the .dot description of an automaton.

    Parameters
    ----------
    automaton : Automaton
        the automaton to describe.

    name : string
        name of the digraph.

    newlines : bool
        If `True` (the default), put every statement on its own
        line. `dot_parse` only understands the output when this is
        `True`.

    Returns
    -------
    string
        text of the .dot file.

    Raises
    ------
    DotOutputException
        if a state name or a label could not be read back.

    """
    if newlines:
        newline_char = "\n"
        tab_char = "\t"
    else:
        newline_char = ""
        tab_char = ""

    output = "digraph {} {{{}".format(name, newline_char)
    output += '{} [label="" shape="none"];{}'.format(START_NODE, newline_char)

    for state in automaton.states():
        output += '{}{} [shape="circle" label="{}"];{}'.format(
            tab_char, node_name(state), state, newline_char
        )

    for t in automaton.all_transitions():
        output += '{}{} -> {} [label="{}"];{}'.format(
            tab_char, node_name(t.source), node_name(t.target), edge_label(t),
            newline_char
        )

    if automaton.start_state is not None:
        output += "{} -> {};{}".format(
            START_NODE, node_name(automaton.start_state), newline_char
        )
    output += "}}{}".format(newline_char)
    return output


def write_dot(automaton, writer, name=DEFAULT_GRAPH_NAME):
    """Write the .dot description of an automaton to an open text
    stream. The stream is not closed.

    """
    writer.write(automaton_to_dot(automaton, name=name))
