import argparse
import io
import os
import re
import stat
import sys
from collections import namedtuple

INT64_MAX = 2 ** 63 - 1
INT64_MIN = -2 ** 63

LINES = 'lines'
BYTES = 'bytes'

CHUNK_SIZE = 64 * 1024

# Matched with fullmatch; [0-9] keeps non-ASCII digits out.
NUM_RE = re.compile(r'([+-])?([0-9]+)')


class TailError(Exception):
    pass


class InvalidSpec(TailError, ValueError):
    def __init__(self, spec):
        super().__init__(spec)
        self.spec = spec


class IoError(TailError):
    def __init__(self, error):
        super().__init__(error.strerror or str(error))
        self.errno = error.errno


class FromStart:
    """Selection produced by "+0": emit everything from the first element."""

    def __repr__(self):
        return 'FROM_START'


FROM_START = FromStart()


class Count(namedtuple('Count', ['n'])):
    """Signed selection: n > 0 is a 1-based front position, n < 0 counts back from the end."""
    __slots__ = ()


def parse_spec(spec):
    if spec == '+0':
        return FROM_START

    match = NUM_RE.fullmatch(spec)
    if match is None:
        raise InvalidSpec(spec)

    sign, digits = match.groups()
    magnitude = int(digits)

    # An unsigned count is end-anchored, same as an explicit minus.
    if sign == '+':
        if magnitude > INT64_MAX:
            raise InvalidSpec(spec)
        return Count(magnitude)

    if magnitude > -INT64_MIN:
        raise InvalidSpec(spec)
    return Count(-magnitude)


def resolve_start(selection, total):
    """
    Map a selection onto a 0-based start offset within ``total`` elements.

    Returns None when nothing should be emitted. The same rules apply to
    line counts and byte counts.
    """
    if total == 0 or selection == Count(0):
        return None
    if selection is FROM_START:
        return 0

    n = selection.n
    if n > 0:
        if n > total:
            return None
        return n - 1

    return max(total + n, 0)


def _seek(source, offset, whence=os.SEEK_SET):
    try:
        return source.seek(offset, whence)
    except OSError as e:
        raise IoError(e) from e


def _read(source, size):
    try:
        return source.read(size)
    except OSError as e:
        raise IoError(e) from e


def _readline(source):
    try:
        return source.readline()
    except OSError as e:
        raise IoError(e) from e


def count_bytes(source):
    """Size of the source from its metadata, without reading its content."""
    try:
        fd = source.fileno()
    except (AttributeError, io.UnsupportedOperation):
        return _seek(source, 0, os.SEEK_END)

    try:
        st = os.fstat(fd)
    except OSError as e:
        raise IoError(e) from e

    if stat.S_ISREG(st.st_mode):
        return st.st_size
    return _seek(source, 0, os.SEEK_END)


def count_lines(source):
    # A trailing line without a terminator still counts.
    _seek(source, 0)
    lines = 0
    last = b''
    while True:
        chunk = _read(source, CHUNK_SIZE)
        if not chunk:
            break
        lines += chunk.count(b'\n')
        last = chunk

    if last and not last.endswith(b'\n'):
        lines += 1
    return lines


def count_lines_bytes(source):
    return count_lines(source), count_bytes(source)


def extract_bytes(source, selection, total_bytes, sink):
    start = resolve_start(selection, total_bytes)
    if start is None:
        return 0

    _seek(source, start)
    remaining = total_bytes - start
    written = 0
    while remaining > 0:
        chunk = _read(source, min(CHUNK_SIZE, remaining))
        if not chunk:
            break
        sink.write(chunk)
        written += len(chunk)
        remaining -= len(chunk)
    return written


def extract_lines(source, selection, total_lines, sink):
    start = resolve_start(selection, total_lines)
    if start is None:
        skip, budget = total_lines, 0
    else:
        skip, budget = start, total_lines - start

    # Emission stops at the budget computed from the counting pass, even
    # if the source has grown since.
    _seek(source, 0)
    index = emitted = 0
    while index < skip or emitted < budget:
        line = _readline(source)
        if not line:
            break
        if index >= skip:
            sink.write(line)
            emitted += 1
        index += 1
    return emitted


def extract(source, unit, selection, sink):
    """
    Write the part of ``source`` chosen by ``selection`` to ``sink``.

    Byte mode takes its total from the source's size metadata and seeks
    straight to the start offset. Line mode needs a counting pass first
    and then a second pass that skips up to the start line. Returns the
    number of bytes or lines written.
    """
    if unit == BYTES:
        return extract_bytes(source, selection, count_bytes(source), sink)
    if unit == LINES:
        return extract_lines(source, selection, count_lines(source), sink)
    raise ValueError(f"unknown unit: {unit!r}")


def open_source(filename):
    if filename == '-':
        # stdin may be a pipe; buffer it so both passes can seek.
        return io.BytesIO(sys.stdin.buffer.read())
    return open(filename, 'rb')


def build_parser():
    parser = argparse.ArgumentParser(prog='tail', description='Display the last part of a file.')
    parser.add_argument('files', metavar='FILE', nargs='+', help='Input file(s), - for standard input')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('-n', '--lines', metavar='LINES', default='10', help='Number of lines')
    group.add_argument('-c', '--bytes', metavar='BYTES', help='Number of bytes')
    parser.add_argument('-q', '--quiet', action='store_true', help='Suppress headers')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        lines = parse_spec(args.lines)
    except InvalidSpec as e:
        parser.error(f"illegal line count -- {e}")

    unit, selection = LINES, lines
    if args.bytes is not None:
        try:
            unit, selection = BYTES, parse_spec(args.bytes)
        except InvalidSpec as e:
            parser.error(f"illegal byte count -- {e}")

    out = sys.stdout.buffer
    show_headers = not args.quiet and len(args.files) > 1
    failed = False

    for i, filename in enumerate(args.files):
        try:
            source = open_source(filename)
        except OSError as e:
            print(f"{filename}: {e.strerror or e}", file=sys.stderr)
            failed = True
            continue

        with source:
            if show_headers:
                out.write(b'==> ' + os.fsencode(filename) + b' <==\n')
            try:
                extract(source, unit, selection, out)
            except IoError as e:
                out.flush()
                print(f"{filename}: {e}", file=sys.stderr)
                failed = True

        if show_headers and i < len(args.files) - 1:
            out.write(b'\n')

    out.flush()
    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
