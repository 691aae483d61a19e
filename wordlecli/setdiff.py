"""
setdiff - print the records of one file whose payload does not appear in another.

Records are delimited lines; the leading fields (ids, codes) are ignored when
comparing, so `7|G|green salad` in SECOND matches `1|A|green salad` in FIRST.

usage:
  setdiff first.txt second.txt
  setdiff --delimiter , --skip-fields 1 old.csv new.csv
"""
import argparse
import sys
from typing import Iterable, Iterator, Optional, Sequence, Set, Tuple


def record_key(line: str, delimiter: str = "|", skip_fields: int = 2) -> Tuple[str, ...]:
    return tuple(line.rstrip("\r\n").split(delimiter)[skip_fields:])


def diff_records(
    first: Iterable[str],
    second: Iterable[str],
    delimiter: str = "|",
    skip_fields: int = 2,
) -> Iterator[str]:
    """
    Yields the lines of `second` whose key is not a key of any line in `first`.

    Lines come back unchanged (minus the newline), in order, duplicates included.
    """
    seen: Set[Tuple[str, ...]] = {record_key(line, delimiter, skip_fields) for line in first}
    for line in second:
        if record_key(line, delimiter, skip_fields) not in seen:
            yield line.rstrip("\r\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="setdiff",
        description="Print records of SECOND whose payload is missing from FIRST.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument('first', help="File with the known records")
    parser.add_argument('second', help="File to search for new records")
    parser.add_argument('-d', '--delimiter', default="|", help="Field delimiter")
    parser.add_argument('-k', '--skip-fields', type=int, default=2, help="Leading fields ignored when comparing")
    args = parser.parse_args(argv)

    if args.skip_fields < 0:
        parser.error("--skip-fields must not be negative")

    try:
        with open(args.first, 'r') as f_first, open(args.second, 'r') as f_second:
            for line in diff_records(f_first, f_second, args.delimiter, args.skip_fields):
                print(line)
    except FileNotFoundError as e:
        print(f"Error: File not found: '{e.filename}'", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
