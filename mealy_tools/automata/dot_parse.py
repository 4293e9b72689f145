"""Read Mealy machines from .dot files, in the format written by
LearnLib.

Only two kinds of lines carry information. A transition looks like

    s0 -> s1 [label="coin / ok"];

and the start state is given by an edge out of the start pseudo-node:

    __start0 -> s0;

Every other line (node declarations, braces, comments) is ignored.

"""

import re

ARROW = "->"
START_MARKER = "__start"
MAX_ERRLEN = 100

STATE_PATTERN = re.compile(r'^"?[A-Za-z](\d+)"?$')
EDGE_PATTERN = re.compile(r'^\s*(\S+)\s*->\s*([^\s\[]+)\s*\[(.*)\]\s*;?\s*$')
LABEL_PATTERN = re.compile(r'label\s*=\s*"([^"]*)"')


class DotInputException(Exception):
    pass


def is_edge_line(line):
    return ARROW in line and START_MARKER not in line


def is_start_line(line):
    return ARROW in line and START_MARKER in line


def parse_state(identifier):
    """Get the state name from a node identifier like `s12` or `"s12"`.

    Returns `None` if the identifier does not have that shape.
    """
    match = STATE_PATTERN.match(identifier.strip().rstrip(";").strip())
    if match:
        return match.group(1)
    return None


def parse_edge(line):
    """Parse a transition line.

    Parameters
    ----------
    line : string
        a line of a .dot file containing an edge statement.

    Returns
    -------
    tuple
        `(source, target, input, output)`, all strings.

    Raises
    ------
    DotInputException
        if the line is not a well-formed transition.

    """
    edge = EDGE_PATTERN.match(line)
    if not edge:
        raise DotInputException(
            'Could not extract transition from: "%s"' % line.strip()[:MAX_ERRLEN])

    source = parse_state(edge.group(1))
    target = parse_state(edge.group(2))
    if source is None or target is None:
        raise DotInputException(
            'Bad state identifier in: "%s"' % line.strip()[:MAX_ERRLEN])

    label = LABEL_PATTERN.search(edge.group(3))
    if not label or "/" not in label.group(1):
        raise DotInputException(
            'Missing "input / output" label in: "%s"' % line.strip()[:MAX_ERRLEN])

    symbol_in, _, symbol_out = label.group(1).partition("/")
    return (source, target, symbol_in.strip(), symbol_out.strip())


def parse_start(line):
    """Get the name of the start state from the start edge line."""
    token = line.split(ARROW, 1)[1].strip().rstrip(";").strip()
    state = parse_state(token)
    if state is None:
        return token.strip('"')
    return state


def parse_lines(lines):
    """Parse the lines of a .dot file.

    Returns
    -------
    tuple
        `(edges, start)`, where `edges` is a list of
        `(source, target, input, output)` tuples in file order and
        `start` is the name of the start state (or `None` if the file
        does not give one).

    """
    edges = []
    start = None
    for line in lines:
        if is_start_line(line):
            start = parse_start(line)
        elif is_edge_line(line):
            edges.append(parse_edge(line))

    return (edges, start)
