"""
pass-craft - Reporter

Everything the user reads goes through here. Output is plain print():
step headers, tagged status lines and a timestamped trace of each
transform. Failures go to stderr so stdout only ever holds real results.
"""

import os
import platform
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from .config import ConfigEntry, HashSpec, IdentityRecord, validate_entry
from .errors import PassCraftError
from .transform import GeneratedPassword


OK = 0
FAIL = 1
WARN = 2
INFO = 3

_TAGS = {OK: "[OK]", FAIL: "[FAIL]", WARN: "[WARN]", INFO: "[INFO]"}

WIDTH = 50


@dataclass(frozen=True)
class PlatformInfo:
    os: str
    arch: str
    family: str

    @classmethod
    def current(cls) -> "PlatformInfo":
        system = platform.system().lower() or sys.platform
        if system == "darwin":
            system = "macos"
        return cls(
            os=system,
            arch=platform.machine().lower() or "unknown",
            family="windows" if os.name == "nt" else "unix",
        )

    def display(self) -> str:
        return f"{self.os}-{self.arch}"


# =============================================================================
# Primitives
# =============================================================================

def timestamp() -> str:
    """Current UTC time as YYYY-MM-DD HH:MM:SS."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def step(title: str, width: int = WIDTH, fill: str = "=", file=None):
    """Print `title` centered in a line of `fill` characters."""
    print(title.center(width, fill), file=file)


def status(msg: str, level: int = INFO, file=None):
    print(f"{_TAGS.get(level, _TAGS[INFO])} {msg}", file=file)


# =============================================================================
# Generation Report
# =============================================================================

def banner(identity: IdentityRecord, spec: HashSpec, info: PlatformInfo):
    step("Current Configuration")
    status(f"Platform: {info.display()}", OK)
    status(f"Algorithm: {spec.method}", OK)
    status(f"User: {identity.name}", OK)
    status(f"Site: {identity.site}", OK)
    status(
        f"Format: {spec.cut} chars, end with '{spec.end}', "
        f"first {spec.upper_start} uppercase",
        OK,
    )


def trace(generated: GeneratedPassword):
    """Timestamped walk through each stage of one generation."""
    spec = generated.spec
    step("Generating Password Hash", fill="-")
    status(f"{timestamp()} - Base text: {generated.base_text}")
    status(f"{timestamp()} - Raw {spec.method} hash: {generated.raw_digest}")
    status(f"{timestamp()} - Truncated to {spec.cut} chars: {generated.truncated}")
    status(f"{timestamp()} - First {spec.upper_start} characters uppercased: {generated.uppercased}")
    if spec.end:
        status(f"{timestamp()} - Placed end '{spec.end}': {generated.final}")
    status(f"{timestamp()} - Final result: {generated.result}", OK)


def success(generated: GeneratedPassword):
    step("Password Generation Complete")
    status(f"{timestamp()} - Generated Password: {generated.result}", OK)


def report_generated(generated: GeneratedPassword, info: PlatformInfo):
    """Banner, trace and success line for one password."""
    banner(generated.identity, generated.spec, info)
    trace(generated)
    success(generated)


def failure(title: str, error: Exception):
    step(title, fill="!", file=sys.stderr)
    status(f"{timestamp()} - {error}", FAIL, file=sys.stderr)


def saved(path: str, count: int):
    step("Saving Result", fill="-")
    status(f"{timestamp()} - Saved {count} line(s) to: {path}", OK)


# =============================================================================
# Info Screens
# =============================================================================

def show_platform(info: PlatformInfo):
    step("Platform Information")
    print(f"Operating System: {info.os}")
    print(f"Architecture: {info.arch}")
    print(f"Family: {info.family}")
    print(f"Display Format: {info.display()}")


def show_config(
    entries: List[ConfigEntry],
    input_file: Optional[str] = None,
    output_file: Optional[str] = None,
) -> bool:
    """
    Dump each parsed configuration and whether it validates.

    Returns:
        True if every entry is valid
    """
    all_valid = True
    step("Password Hash Generator Configuration", 60)
    for entry in entries:
        identity, spec = entry.identity, entry.spec
        if entry.line_no is not None:
            print(f"Line {entry.line_no}:")
        print(f"Source: {entry.source}")
        print("User Information:")
        print(f"  Name: {identity.name}")
        print(f"  Email: {identity.email}")
        print(f"  Site: {identity.site}")
        print("Hash Algorithm Configuration:")
        print(f"  Method: {spec.method}")
        print(f"  Cut Length: {spec.cut}")
        print(f"  End Character: {spec.end}")
        print(f"  Upper Start: {spec.upper_start}")
        print("Configuration Validation:")
        try:
            validate_entry(entry)
            status("Status: Valid", OK)
        except PassCraftError as e:
            all_valid = False
            status(f"Status: Invalid - {e}", FAIL)
    print("File Configuration:")
    print(f"  Input File: {input_file or 'Not set'}")
    print(f"  Output File: {output_file or 'Not set'}")
    return all_valid
