import io

import pytest

from mealy_tools.automata import mealy, dot_parse, dot_utils
from mealy_tools.automata.dot_parse import DotInputException
from mealy_tools.automata.dot_utils import DotOutputException
from mealy_tools.automata.mealy import Automaton, Transition
from mealy_tools.utils.testing import assert_automata_equivalent

LEARNLIB_DOT = """digraph g {
__start0 [label="" shape="none"];

	s0 [shape="circle" label="0"];
	s1 [shape="circle" label="1"];
	s2 [shape="circle" label="2"];
	s0 -> s1 [label="login / ok"];
	s0 -> s0 [label="logout / nok"];
	s1 -> s2 [label="upload / ok"];
	s1 -> s0 [label="logout / ok"];
	s2 -> s2 [label="upload / full"];
	s2 -> s0 [label="logout / ok"];

__start0 -> s1;
}
"""

@pytest.fixture
def dot_lines():
    return LEARNLIB_DOT.splitlines()

@pytest.fixture
def learned(dot_lines):
    return mealy.read_dot(dot_lines)

@pytest.fixture
def messages():
    return []

def test_parse_edge():
    assert dot_parse.parse_edge('\ts3 -> s12 [label="a / b"];') == (
        "3", "12", "a", "b")
    assert dot_parse.parse_edge('"s3"->"s4"[label=" x /y "]') == (
        "3", "4", "x", "y")

@pytest.mark.parametrize("line", [
    's0 -> s1 [label="a / b];',
    's0 -> s1 [label="ab"];',
    's0 -> s1;',
    'sx -> s1 [label="a / b"];',
    's0 -> s1 [color="red"];',
])
def test_parse_bad_edge(line):
    with pytest.raises(DotInputException):
        dot_parse.parse_edge(line)

def test_parse_start():
    assert dot_parse.parse_start("__start0 -> s4;") == "4"
    assert dot_parse.parse_start('__start0 -> "s7"') == "7"

def test_line_kinds():
    assert dot_parse.is_edge_line('s0 -> s1 [label="a / b"];')
    assert not dot_parse.is_edge_line("__start0 -> s0;")
    assert dot_parse.is_start_line("__start0 -> s0;")
    assert not dot_parse.is_edge_line('s0 [shape="circle" label="0"];')

def test_read_dot(learned):
    assert learned.states() == ["0", "1", "2"]
    assert learned.start_state == "1"
    assert learned.alphabet == {"login", "logout", "upload"}
    assert len(learned.all_transitions()) == 6

    t = learned.transitions("1", "2")[0]
    assert (t.input, t.output, t.label) == ("upload", "ok", "upload / ok")

def test_read_dot_from_stream():
    learned = mealy.read_dot(io.StringIO(LEARNLIB_DOT))
    assert learned.start_state == "1"

def test_start_line_first():
    lines = ["__start0 -> s1;",
             's0 -> s1 [label="a / b"];']
    assert mealy.read_dot(lines).start_state == "1"

def test_malformed_line_aborts(dot_lines, messages):
    dot_lines.insert(9, 's1 -> s2 [label="upload / ok];')
    with pytest.raises(DotInputException):
        mealy.read_dot(dot_lines, report=messages.append)
    assert len(messages) == 1

def test_round_trip(learned):
    text = dot_utils.automaton_to_dot(learned)
    reloaded = mealy.read_dot(text.splitlines())
    assert_automata_equivalent(learned, reloaded)

def test_round_trip_parallel_edges():
    aut = Automaton([
        Transition(0, 1, "a", "x"),
        Transition(0, 1, "b", "y"),
        Transition(1, 0, "a", "x"),
    ]).set_start_state("1")

    reloaded = mealy.read_dot(dot_utils.automaton_to_dot(aut).splitlines())
    assert_automata_equivalent(aut, reloaded)
    assert len(reloaded.transitions("0", "1")) == 2

def test_writer_output(learned):
    text = dot_utils.automaton_to_dot(learned)
    lines = text.splitlines()
    assert lines[0] == "digraph g {"
    assert '\ts1 [shape="circle" label="1"];' in lines
    assert '\ts0 -> s1 [label="login / ok"];' in lines
    assert lines[-2] == "__start0 -> s1;"
    assert lines[-1] == "}"

def test_writer_empty_automaton():
    text = dot_utils.automaton_to_dot(Automaton())
    assert "->" not in text

def test_write_dot(learned):
    sink = io.StringIO()
    mealy.write_dot(learned, sink)
    assert sink.getvalue() == dot_utils.automaton_to_dot(learned)

def test_save_and_load_file(learned, tmp_path):
    filename = tmp_path / "learned.dot"
    mealy.save_dot_file(learned, filename)
    assert_automata_equivalent(learned, mealy.load_dot_file(filename))

def test_builtin_round_trip(tmp_path):
    for name in mealy.list_builtins():
        aut = mealy.load_builtin(name)
        filename = tmp_path / name
        mealy.save_dot_file(aut, filename)
        assert_automata_equivalent(aut, mealy.load_dot_file(filename))

def test_writer_rejects_named_states():
    turnstile = Automaton([
        Transition("locked", "unlocked", "coin", "unlock"),
        Transition("unlocked", "locked", "push", "lock"),
    ])
    with pytest.raises(DotOutputException):
        dot_utils.automaton_to_dot(turnstile)

@pytest.mark.parametrize("label", ['a / "b"', "coin"])
def test_writer_rejects_unreadable_labels(label):
    aut = Automaton([Transition("0", "1", label=label)])
    with pytest.raises(DotOutputException):
        dot_utils.automaton_to_dot(aut)

def test_failed_save_leaves_no_file(tmp_path):
    aut = Automaton([Transition("locked", "unlocked", "coin", "unlock")])
    filename = tmp_path / "named.dot"
    with pytest.raises(DotOutputException):
        mealy.save_dot_file(aut, filename)
    assert not filename.exists()
