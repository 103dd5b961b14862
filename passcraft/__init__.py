"""
pass-craft - Deterministic Password Generator

Derives a repeatable, memorable password from who you are and where you log
in. Nothing is stored and nothing is random: the same inputs always give the
same password.

How it works:
    name,email,site -> digest (sha512, sha256, sha1, md5)
                    -> truncate -> uppercase prefix -> place end
                    -> "name,password,site"

Components:
- config.py: Input grammar, records, validation
- digest.py: Hash algorithms (via the 'cryptography' library)
- transform.py: The transform pipeline
- report.py: Console output (banner, trace, info screens)
- sink.py: Appending results to a save file
- cli.py: Command-line interface (uses built-in argparse)

Usage:
    python -m passcraft.cli --sslf "name:john,email:john@gmail.com,site:john.com;method:sha512,cut:8,end:+,upper-start:5"
    python -m passcraft.cli --file config.txt --save passwords.txt
    python -m passcraft.cli --show-platform
"""

__version__ = "0.1.0"
__author__ = "pass-craft Team"
