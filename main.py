#!/usr/bin/env python3
from functools import reduce
from typing import List, Optional
import logging
import operator
import sys

from fraction import Fraction


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.WARNING)
    args = sys.argv[1:] if argv is None else argv
    if not args:
        args = ["1/3", "1/6"]
    fractions = []
    for text in args:
        f = Fraction.try_parse(text)
        if f is None:
            print(f"not a fraction: {text!r}", file=sys.stderr)
            return 1
        print(f)
        fractions.append(f)
    print(f"sum = {reduce(operator.add, fractions)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
