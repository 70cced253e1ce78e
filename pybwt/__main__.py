#!/usr/bin/env python
# Copyright 2006--2007-01-21 Paul Sladen
# http://www.paul.sladen.org/projects/compression/
#
# You may use and distribute this code under any DFSG-compatible
# license (eg. BSD, GNU GPLv2).

import logging
import os
import sys
import typing as T

from pybwt import (
    compress_stream,
    decompress_stream,
    inverse_transform_stream,
    mtf_decode_stream,
    mtf_encode_stream,
    transform_stream,
)
from pybwt.errors import InvalidInput, PreconditionViolation
from pybwt.log import log, logger

Stream = T.Callable[[T.BinaryIO, T.BinaryIO], None]

# "-" runs the forward direction, "+" the inverse
MODES: T.Dict[str, T.Tuple[Stream, Stream]] = {
    "bwt": (transform_stream, inverse_transform_stream),
    "mtf": (mtf_encode_stream, mtf_decode_stream),
    "pipeline": (compress_stream, decompress_stream),
}


def usage(program: str) -> None:
    print("usage:", program, "<bwt|mtf|pipeline> <-|+> < input > output")
    print("\t- applies the transform (bwt), encoding (mtf) or both (pipeline),")
    print("\t+ applies the inverse. Input is read from stdin, output goes to stdout.")


def run(argv: T.List[str], inp: T.BinaryIO, out: T.BinaryIO) -> int:
    if len(argv) != 3 or argv[1] not in MODES or argv[2] not in ("-", "+"):
        usage(os.path.basename(argv[0]) if argv else "pybwt")
        return 1

    forward, inverse = MODES[argv[1]]
    stream = forward if argv[2] == "-" else inverse
    log("running", stream.__name__)
    try:
        stream(inp, out)
    except (InvalidInput, PreconditionViolation) as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 2
    out.flush()
    return 0


def _main() -> None:
    # timestamp and level on every record
    fmt = "%(asctime)s %(levelname)s: %(message)s"
    level = logging.DEBUG if os.environ.get("PYBWT_DEBUG") == "1" else logging.WARNING
    logging.basicConfig(level=level, format=fmt)
    sys.exit(run(sys.argv, sys.stdin.buffer, sys.stdout.buffer))


if __name__ == "__main__":
    _main()
