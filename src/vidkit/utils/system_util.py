"""
Helpers for running external tools (ffprobe) and checking they are installed.
"""
import shutil
import subprocess
from typing import List, Tuple

from vidkit.exceptions import ProbeError


def run_cmd(cmd: List[str]) -> Tuple[int, str, str]:
    """
    Run a command and return (code, stdout, stderr).

    A missing executable is reported as exit code 127 with the OS error in
    stderr, the same code a shell would give, instead of raising.
    """
    try:
        p = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
    except FileNotFoundError as e:
        return 127, "", str(e)
    return p.returncode, p.stdout, p.stderr


def require_binary(binary: str) -> str:
    """Return the full path of `binary` on PATH or raise ProbeError."""
    found = shutil.which(binary)
    if found is None:
        raise ProbeError(f"'{binary}' not found on PATH. Install it first (e.g. brew install ffmpeg).")
    return found
