from mealy_tools.automata import mealy

# load a learned coffee machine
machine = mealy.load_builtin("coffee.dot")
start = machine.start_state

# for every state: reach it by a shortest route, then try each outgoing
# transition once
for state in machine.states():
    prefix = [] if state == start else machine.shortest_route(start, state)
    if prefix is None:
        print("state {} is unreachable".format(state))
        continue

    for t in machine.transitions_from(state) or []:
        inputs = [p.input for p in prefix] + [t.input]
        print("{}: {} -> expect {}".format(state, " ".join(inputs), t.output))
