from __future__ import annotations

import logging

from circuitry import Either, RunConfig, Trace, accum, lift, run_recorded

logging.basicConfig(level=logging.DEBUG)


def make_router():
    # Short words are counted, long words are upper-cased.
    counter = accum(0, lambda word, seen: (f"{word} (#{seen + 1})", seen + 1))
    shout = lift(str.upper)
    return shout.owise(counter)


if __name__ == "__main__":
    words = ["circuit", "arrow", "fan", "category", "left", "split"]
    tagged = [Either.from_pair((len(word) <= 5, word)) for word in words]

    trace = Trace()
    for record in run_recorded(make_router(), tagged, RunConfig(trace=trace, label="router")):
        print(f"{record.index}: {record.input!r} -> {record.output!r} ({record.duration_ms:.3f}ms)")

    print(f"{len(trace)} trace events, tree: {trace.as_tree()}")
