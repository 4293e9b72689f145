from collections import Counter

def same_none(n1, n2):
    return (n1 is None and n2 is None) or (n1 is not None and n2 is not None)

def transition_multiset(automaton):
    return Counter(t.key() for t in automaton.all_transitions())

def assert_automata_equivalent(aut1, aut2):
    assert set(aut1.states()) == set(aut2.states())
    assert same_none(aut1.start_state, aut2.start_state)
    assert aut1.start_state == aut2.start_state
    assert aut1.alphabet == aut2.alphabet

    assert transition_multiset(aut1) == transition_multiset(aut2)

def assert_route_valid(route, source, target):
    assert len(route) > 0
    assert route[0].source == source
    assert route[-1].target == target
    for t1, t2 in zip(route, route[1:]):
        assert t1.target == t2.source
