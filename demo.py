"""
pass-craft - Guided Walkthrough (single run, no user input)

Run: python demo.py

Shows what a user sees from the command line and explains what happens
under the hood. It walks through:
 - The documented example via --sslf
 - Each transform stage on its own
 - Separate --text / --hash input
 - A config file with --file and --save, then re-running the saved file
 - What a bad line looks like (nothing is printed or saved)
 - Platform information

All steps print the CLI output plus a short "behind the scenes" note.
"""

import os
import shlex
import tempfile
from textwrap import indent

from passcraft import config, digest, transform
from passcraft.cli import main


LINE = "=" * 70

WORKED_LINE = "name:john,email:john@gmail.com,site:john.com;method:sha512,cut:8,end:+,upper-start:5"


def step(title: str, command: str):
    print(f"\n{LINE}\n{title}\n$ {command}\n{LINE}")


def explain(title: str, body: str):
    print(f"\n[Behind the scenes] {title}")
    print(indent(body.strip(), "  "))


def run(title: str, *argv):
    step(title, "pass-craft " + shlex.join(argv))
    code = main(list(argv))
    print(f"(exit code {code})")
    return code


def main_demo():
    print(LINE)
    print("pass-craft - Guided Walkthrough")
    print(LINE)

    # 1) The documented example
    run("Documented example", "--sslf", WORKED_LINE)
    explain("passcraft/transform.py:generate_password", """
The identity fields are joined into the canonical base string and hashed.
The digest is cut to 8 chars, the first 5 are uppercased, then '+'
overwrites the last char, so the password stays 8 chars long.
""")

    # 2) Stage by stage
    print(f"\n{LINE}\nStage by stage (library calls)\n{LINE}")
    entry = config.parse_sslf(WORKED_LINE)
    raw = digest.compute_digest(entry.identity.base_text, entry.spec.method)
    cut = transform.truncate(raw, entry.spec.cut)
    upper = transform.uppercase_prefix(cut, entry.spec.upper_start)
    final = transform.place_end(upper, entry.spec.end)
    print(f"  base text : {entry.identity.base_text}")
    print(f"  digest    : {raw[:24]}...")
    print(f"  truncate  : {cut}")
    print(f"  uppercase : {upper}")
    print(f"  place end : {final}")
    print(f"  result    : {transform.render_result(entry.identity, final)}")

    # 3) Separate text / hash
    run("Separate identity and hash settings", "--text", "name:alice,email:alice@example.com,site:example.org",
        "--hash", "method:sha256,cut:12,end:!,upper-start:4")

    tmp = tempfile.TemporaryDirectory()
    try:
        src = os.path.join(tmp.name, "sites.txt")
        dst = os.path.join(tmp.name, "passwords.txt")
        with open(src, "w", encoding="utf-8") as f:
            f.write("# one line per site\n")
            f.write(WORKED_LINE + "\n")
            f.write("name:john,email:john@gmail.com,site:bank.example;method:sha1,cut:10,end:#,upper-start:3\n")

        # 4) File mode with save
        run("File mode with save", "--file", src, "--save", dst)
        print("\nSaved file contents:")
        with open(dst, encoding="utf-8") as f:
            print(indent(f.read().rstrip(), "  "))
        explain("passcraft/sink.py:format_saved_line", """
Each saved line is the config that produced the password, with the
result appended as an HTML comment. --file ignores the comments, so
the saved file is itself a valid input.
""")

        run("Re-running the saved file", "--file", dst)

        # 5) A bad line
        bad = os.path.join(tmp.name, "bad.txt")
        with open(bad, "w", encoding="utf-8") as f:
            f.write(WORKED_LINE + "\n")
            f.write("name:john,email:john@gmail.com;method:sha512\n")
        run("A bad line", "--file", bad, "--save", dst)
        explain("passcraft/config.py:load_file", """
Every line is parsed and validated before anything is computed, so the
missing 'site' on line 2 stops the run before line 1 is printed and
nothing is appended to the save file.
""")
    finally:
        tmp.cleanup()

    # 6) Platform
    run("Platform information", "--show-platform")

    print(f"\n{LINE}\nDone.\n{LINE}")


if __name__ == "__main__":
    main_demo()
