# test_tail.py - Python CLI tests for the tail tool with progress output
import subprocess
import os
import sys

HERE = os.path.dirname(os.path.abspath(__file__))
TAIL_CMD = [sys.executable, os.path.join(HERE, "..", "..", "tail.py")]
TEST_FILE = os.path.join(HERE, "test.txt")
OTHER_FILE = os.path.join(HERE, "other.txt")
MISSING_FILE = os.path.join(HERE, "nonexistent.txt")

TEN_LINES = b"one\ntwo\nthree\nfour\nfive\nsix\nseven\neight\nnine\nten\n"
ONE_LINE = b"abcdefghijklmnopqrstuvw\n"

def run_tail(*args, stdin=None):
    return subprocess.run(
        TAIL_CMD + list(args),
        input=stdin,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE
    )

def write_file(content, path=TEST_FILE):
    with open(path, "wb") as f:
        f.write(content)

def cleanup():
    for path in (TEST_FILE, OTHER_FILE):
        if os.path.exists(path):
            os.remove(path)

def teardown_function(function):
    cleanup()

def run_test(name, func):
    print(f"=== RUN   {name}")
    try:
        func()
        print(f"--- PASS: {name}")
    except AssertionError as e:
        print(f"--- FAIL: {name}")
        print(f"    {e}")
        return False
    except Exception as e:
        print(f"--- FAIL: {name}")
        print(f"    Unexpected error: {e}")
        return False
    return True

def test_default_ten_lines():
    write_file(TEN_LINES + b"eleven\n")
    result = run_tail(TEST_FILE)
    assert result.returncode == 0, f"Expected exit code 0, got {result.returncode}"
    assert result.stdout == TEN_LINES[4:] + b"eleven\n", f"Expected last ten lines, got: {result.stdout}"

def test_last_three_lines():
    write_file(TEN_LINES)
    result = run_tail("-n", "3", TEST_FILE)
    assert result.stdout == b"eight\nnine\nten\n", f"Expected last 3 lines, got: {result.stdout}"

def test_explicit_negative_lines():
    write_file(TEN_LINES)
    result = run_tail("-n", "-3", TEST_FILE)
    assert result.stdout == b"eight\nnine\nten\n", f"Expected last 3 lines, got: {result.stdout}"

def test_lines_from_front():
    write_file(TEN_LINES)
    result = run_tail("-n", "+8", TEST_FILE)
    assert result.stdout == b"eight\nnine\nten\n", f"Expected lines 8-10, got: {result.stdout}"

def test_plus_zero_lines():
    write_file(ONE_LINE)
    result = run_tail("-n", "+0", TEST_FILE)
    assert result.stdout == ONE_LINE, f"Expected whole file, got: {result.stdout}"

def test_zero_lines():
    write_file(TEN_LINES)
    result = run_tail("-n", "0", TEST_FILE)
    assert result.returncode == 0, f"Expected exit code 0, got {result.returncode}"
    assert result.stdout == b"", f"Expected no output, got: {result.stdout}"

def test_more_lines_than_file():
    write_file(TEN_LINES)
    result = run_tail("-n", "200", TEST_FILE)
    assert result.stdout == TEN_LINES, f"Expected whole file, got: {result.stdout}"

def test_unterminated_last_line():
    write_file(b"alpha\nbeta\ngamma")
    result = run_tail("-n", "2", TEST_FILE)
    assert result.stdout == b"beta\ngamma", f"Expected 'beta\\ngamma', got: {result.stdout}"

def test_bytes_from_front():
    write_file(ONE_LINE)
    result = run_tail("-c", "+10", TEST_FILE)
    assert result.stdout == ONE_LINE[9:], f"Expected bytes from offset 9, got: {result.stdout}"
    assert len(result.stdout) == 15, f"Expected 15 bytes, got {len(result.stdout)}"

def test_last_bytes():
    write_file(TEN_LINES)
    result = run_tail("-c", "4", TEST_FILE)
    assert result.stdout == b"ten\n", f"Expected 'ten\\n', got: {result.stdout}"

def test_bytes_past_end():
    write_file(ONE_LINE)
    result = run_tail("-c", "+25", TEST_FILE)
    assert result.returncode == 0, f"Expected exit code 0, got {result.returncode}"
    assert result.stdout == b"", f"Expected no output, got: {result.stdout}"

def test_binary_bytes():
    write_file(b"\x00\xff\xfe\n\x80\x81")
    result = run_tail("-c", "3", TEST_FILE)
    assert result.stdout == b"\n\x80\x81", f"Expected raw trailing bytes, got: {result.stdout}"

def test_empty_file():
    write_file(b"")
    result = run_tail("-n", "+0", TEST_FILE)
    assert result.returncode == 0, f"Expected exit code 0, got {result.returncode}"
    assert result.stdout == b"", f"Expected no output, got: {result.stdout}"

def test_stdin():
    result = run_tail("-n", "2", "-", stdin=TEN_LINES)
    assert result.stdout == b"nine\nten\n", f"Expected last 2 lines of stdin, got: {result.stdout}"

def test_multiple_files_headers():
    write_file(TEN_LINES)
    write_file(ONE_LINE, OTHER_FILE)
    result = run_tail("-n", "1", TEST_FILE, OTHER_FILE)
    expected = (
        b"==> " + os.fsencode(TEST_FILE) + b" <==\nten\n\n"
        + b"==> " + os.fsencode(OTHER_FILE) + b" <==\n" + ONE_LINE
    )
    assert result.stdout == expected, f"Expected headers around each file, got: {result.stdout}"

def test_quiet_suppresses_headers():
    write_file(TEN_LINES)
    write_file(ONE_LINE, OTHER_FILE)
    result = run_tail("-q", "-n", "1", TEST_FILE, OTHER_FILE)
    assert result.stdout == b"ten\n" + ONE_LINE, f"Expected no headers, got: {result.stdout}"

def test_missing_file_continues():
    write_file(TEN_LINES)
    result = run_tail("-n", "1", MISSING_FILE, TEST_FILE)
    assert result.returncode == 1, f"Expected exit code 1, got {result.returncode}"
    assert b"nonexistent.txt: " in result.stderr, f"Expected file name in stderr, got: {result.stderr.decode()}"
    assert result.stdout.endswith(b"ten\n"), f"Expected output for remaining file, got: {result.stdout}"

def test_illegal_line_count():
    write_file(TEN_LINES)
    result = run_tail("-n", "3.14", TEST_FILE)
    assert result.returncode != 0, f"Expected non-zero exit code, got {result.returncode}"
    assert b"illegal line count -- 3.14" in result.stderr, f"Expected line count error, got: {result.stderr.decode()}"

def test_illegal_byte_count():
    write_file(TEN_LINES)
    result = run_tail("-c", "foo", TEST_FILE)
    assert result.returncode != 0, f"Expected non-zero exit code, got {result.returncode}"
    assert b"illegal byte count -- foo" in result.stderr, f"Expected byte count error, got: {result.stderr.decode()}"

def test_lines_and_bytes_conflict():
    write_file(TEN_LINES)
    result = run_tail("-n", "1", "-c", "1", TEST_FILE)
    assert result.returncode != 0, f"Expected non-zero exit code, got {result.returncode}"
    assert b"error" in result.stderr.lower(), f"Expected 'error' in stderr, got: {result.stderr.decode()}"

def test_missing_arguments():
    result = run_tail("-n", "3")
    assert result.returncode != 0, f"Expected non-zero exit code, got {result.returncode}"
    assert b"error" in result.stderr.lower(), f"Expected 'error' in stderr, got: {result.stderr.decode()}"

if __name__ == "__main__":
    tests = [
        ("TestDefaultTenLines", test_default_ten_lines),
        ("TestLastThreeLines", test_last_three_lines),
        ("TestExplicitNegativeLines", test_explicit_negative_lines),
        ("TestLinesFromFront", test_lines_from_front),
        ("TestPlusZeroLines", test_plus_zero_lines),
        ("TestZeroLines", test_zero_lines),
        ("TestMoreLinesThanFile", test_more_lines_than_file),
        ("TestUnterminatedLastLine", test_unterminated_last_line),
        ("TestBytesFromFront", test_bytes_from_front),
        ("TestLastBytes", test_last_bytes),
        ("TestBytesPastEnd", test_bytes_past_end),
        ("TestBinaryBytes", test_binary_bytes),
        ("TestEmptyFile", test_empty_file),
        ("TestStdin", test_stdin),
        ("TestMultipleFilesHeaders", test_multiple_files_headers),
        ("TestQuietSuppressesHeaders", test_quiet_suppresses_headers),
        ("TestMissingFileContinues", test_missing_file_continues),
        ("TestIllegalLineCount", test_illegal_line_count),
        ("TestIllegalByteCount", test_illegal_byte_count),
        ("TestLinesAndBytesConflict", test_lines_and_bytes_conflict),
        ("TestMissingArguments", test_missing_arguments),
    ]

    all_passed = True
    for name, func in tests:
        cleanup()
        if not run_test(name, func):
            all_passed = False

    cleanup()

    if not all_passed:
        print("FAIL")
        sys.exit(1)

    print("PASS")
