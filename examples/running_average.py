from __future__ import annotations

import operator

from circuitry import Circuit, accum_with_echo, lift


def total() -> Circuit[int, int]:
    return accum_with_echo(0, operator.add)


def running_mean() -> Circuit[int, int]:
    count = lift(lambda _: 1) >> total()
    return total().dup(count) >> lift(lambda pair: pair[0] // pair[1])


if __name__ == "__main__":
    readings = [1, 5, 8, 12, 100]
    for reading, mean in zip(readings, running_mean().run(readings)):
        print(f"{reading:>4} -> mean {mean}")
