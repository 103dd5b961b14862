"""
pass-craft - CLI Tests

Run with: python test_cli.py   (or: pytest)

Drives passcraft.cli.main() the way a user would and checks what ends up on
stdout, stderr and disk, plus the exit code.
"""

import builtins
import io
import os
import tempfile
from contextlib import redirect_stderr, redirect_stdout

from passcraft import __version__
from passcraft.cli import main


WORKED_LINE = "name:john,email:john@gmail.com,site:john.com;method:sha512,cut:8,end:+,upper-start:5"
ALICE_LINE = "name:alice,email:alice@example.com,site:example.org;method:sha256,cut:12,end:!,upper-start:4"


def run_cli(*argv):
    """Run main() and return (exit_code, stdout, stderr)."""
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        try:
            code = main(list(argv))
        except SystemExit as e:
            code = e.code
    return code, out.getvalue(), err.getvalue()


def write_file(path, *lines):
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")


def read_lines(path):
    with open(path, encoding="utf-8") as f:
        return f.read().splitlines()


def test_sslf_worked_example():
    print("Testing --sslf...")
    code, out, err = run_cli("--sslf", WORKED_LINE)
    assert code == 0, err
    assert "Generated Password: john,B5CB304+,john.com" in out
    assert "Base text: john,john@gmail.com,john.com" in out
    assert "Truncated to 8 chars: b5cb3043" in out
    assert "Final result: john,B5CB304+,john.com" in out
    assert "Format: 8 chars, end with '+', first 5 uppercase" in out
    print("  [OK] Worked example through the CLI")


def test_text_and_hash():
    code, out, _ = run_cli(
        "--text", "name:john,email:john@gmail.com,site:john.com",
        "--hash", "method:sha512,cut:8,end:+,upper-start:5",
    )
    assert code == 0
    assert "Generated Password: john,B5CB304+,john.com" in out


def test_slkv():
    code, out, _ = run_cli(
        "--slkv", "name:john,email:john@gmail.com,site:john.com,method:sha512,cut:8,end:+,upper-start:5",
    )
    assert code == 0
    assert "Generated Password: john,B5CB304+,john.com" in out


def test_unsupported_algorithm_prints_nothing():
    print("Testing failure paths...")
    code, out, err = run_cli("--sslf", "name:a,email:b,site:c;method:whirlpool,cut:8")
    assert code == 1
    assert out == ""
    assert "UnsupportedAlgorithm: whirlpool" in err
    print("  [OK] Unsupported algorithm: no stdout, exit 1")


def test_bad_line_aborts_without_saving():
    with tempfile.TemporaryDirectory() as tmp:
        src = os.path.join(tmp, "config.txt")
        dst = os.path.join(tmp, "passwords.txt")
        write_file(src, WORKED_LINE, "name:john,email:john@gmail.com;method:sha512,cut:8,end:+,upper-start:5")

        code, out, err = run_cli("--file", src, "--save", dst)
        assert code == 1
        assert out == ""
        assert "MissingField: site" in err
        assert "line 2" in err
        assert not os.path.exists(dst)
    print("  [OK] Missing field aborts the batch, nothing saved")


def test_missing_input_file():
    code, out, err = run_cli("--file", "/nonexistent/passcraft/config.txt")
    assert code == 1
    assert out == ""
    assert "FileNotFound" in err


def test_file_save_and_reuse():
    """Results saved from one run feed the next run unchanged."""
    print("Testing --file / --save...")
    with tempfile.TemporaryDirectory() as tmp:
        src = os.path.join(tmp, "config.txt")
        dst = os.path.join(tmp, "out", "passwords.txt")
        write_file(src, "# two sites", WORKED_LINE, "", ALICE_LINE)

        code, out, _ = run_cli("--file", src, "--save", dst)
        assert code == 0
        assert out.index("john,B5CB304+,john.com") < out.index("alice,BC0249ffda5!,example.org")
        assert read_lines(dst) == [
            WORKED_LINE + " <!-- john,B5CB304+,john.com -->",
            ALICE_LINE + " <!-- alice,BC0249ffda5!,example.org -->",
        ]
        print("  [OK] Results appended in input order")

        again = os.path.join(tmp, "again.txt")
        code, out2, _ = run_cli("--file", dst, "--save", again)
        assert code == 0
        assert read_lines(again) == read_lines(dst)
        print("  [OK] Saved file re-runs to the same passwords")


def test_save_into_input_file():
    with tempfile.TemporaryDirectory() as tmp:
        src = os.path.join(tmp, "config.txt")
        write_file(src, WORKED_LINE)

        code, _, _ = run_cli("--file", src, "--save", src)
        assert code == 0
        assert read_lines(src) == [WORKED_LINE, "<!-- john,B5CB304+,john.com -->"]

        # The appended comment is not another config line
        code, out, _ = run_cli("--file", src)
        assert code == 0
        assert out.count("Generated Password:") == 1


def test_save_failure_keeps_result():
    with tempfile.TemporaryDirectory() as tmp:
        code, out, err = run_cli("--sslf", WORKED_LINE, "--save", tmp)
        assert code == 1
        assert "Generated Password: john,B5CB304+,john.com" in out
        assert "FileWriteFailure" in err


def test_empty_file():
    with tempfile.TemporaryDirectory() as tmp:
        src = os.path.join(tmp, "config.txt")
        write_file(src, "# nothing yet", "")
        code, out, err = run_cli("--file", src)
        assert code == 0
        assert out == ""
        assert "No configuration lines" in err


def test_non_utf8_file_reported():
    with tempfile.TemporaryDirectory() as tmp:
        src = os.path.join(tmp, "config.txt")
        with open(src, "wb") as f:
            f.write(b"name:\xff,email:e,site:s;method:md5\n")
        code, out, err = run_cli("--file", src)
        assert code == 1
        assert out == ""
        assert "[FAIL]" in err
        assert "MalformedLine: not valid UTF-8" in err
        assert "line 1" in err


def test_file_read_failure_reported():
    with tempfile.TemporaryDirectory() as tmp:
        src = os.path.join(tmp, "config.txt")
        write_file(src, WORKED_LINE)
        original_open = builtins.open

        def failing_open(file, *args, **kwargs):
            if file == src:
                raise PermissionError(13, "Permission denied")
            return original_open(file, *args, **kwargs)

        builtins.open = failing_open
        try:
            code, out, err = run_cli("--file", src)
        finally:
            builtins.open = original_open
        assert code == 1
        assert out == ""
        assert "FileReadFailure" in err
        assert "Permission denied" in err


def test_text_with_separator_not_saved():
    with tempfile.TemporaryDirectory() as tmp:
        dst = os.path.join(tmp, "passwords.txt")
        code, out, err = run_cli("--text", "name:a;b,email:e,site:s", "--hash", "method:md5", "--save", dst)
        assert code == 1
        assert out == ""
        assert "MalformedLine" in err
        assert not os.path.exists(dst)


def test_show_platform():
    code, out, _ = run_cli("--show-platform")
    assert code == 0
    assert "Operating System:" in out
    assert "Architecture:" in out
    assert "Display Format:" in out


def test_show_config():
    code, out, _ = run_cli("--show-config", "--sslf", WORKED_LINE)
    assert code == 0
    assert "Name: john" in out
    assert "Upper Start: 5" in out
    assert "Status: Valid" in out
    assert f"Source: {WORKED_LINE}" in out
    assert "Generated Password" not in out

    code, out, _ = run_cli("--show-config", "--sslf", "name:a,email:b,site:c;method:md5,cut:4,upper-start:5")
    assert code == 1
    assert "Status: Invalid - UpperStartExceedsCut" in out


def test_version():
    code, out, _ = run_cli("--version")
    assert code == 0
    assert out.strip() == f"pass-craft {__version__}"


def test_usage_errors():
    print("Testing usage errors...")
    code, _, err = run_cli()
    assert code == 2
    assert "required" in err

    code, _, err = run_cli("--sslf", WORKED_LINE, "--text", "name:john")
    assert code == 2
    assert "choose one input mode" in err
    print("  [OK] Missing and conflicting modes exit 2")


def run_all_tests():
    print("=" * 70)
    print("pass-craft - CLI Test Suite")
    print("=" * 70)
    print()

    tests = [
        test_sslf_worked_example,
        test_text_and_hash,
        test_slkv,
        test_unsupported_algorithm_prints_nothing,
        test_bad_line_aborts_without_saving,
        test_missing_input_file,
        test_file_save_and_reuse,
        test_save_into_input_file,
        test_save_failure_keeps_result,
        test_empty_file,
        test_show_platform,
        test_show_config,
        test_version,
        test_usage_errors,
        test_non_utf8_file_reported,
        test_file_read_failure_reported,
        test_text_with_separator_not_saved,
    ]

    failed = []

    for test in tests:
        try:
            test()
            print()
        except Exception as e:
            print(f"  [FAIL] TEST FAILED: {e}")
            failed.append((test.__name__, e))
            print()

    print("=" * 70)
    if not failed:
        print("[OK] ALL TESTS PASSED!")
    else:
        print(f"[FAIL] {len(failed)} TESTS FAILED:")
        for name, error in failed:
            print(f"  - {name}: {error}")
    print("=" * 70)

    return len(failed) == 0


if __name__ == "__main__":
    import sys
    success = run_all_tests()
    sys.exit(0 if success else 1)
