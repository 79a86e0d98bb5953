#!/usr/bin/env python
"""
Script de build pour créer un exécutable autonome (fuzzyrename GUI).

Usage:
    pip install -e ".[gui]" pyinstaller
    python build_exe.py

L'exécutable et les bibliothèques seront dans dist/fuzzyrename_gui/
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path


def main() -> int:
    root = Path(__file__).parent.resolve()
    src = root / "src"

    # --onedir : plus fiable que --onefile pour Qt6/PySide6
    cmd = [
        sys.executable,
        "-m",
        "PyInstaller",
        "--name=fuzzyrename_gui",
        "--windowed",
        "--onedir",
        "--clean",
        "--noconfirm",
        f"--paths={src}",
        str(src / "fuzzyrename_gui" / "app.py"),
        "--exclude-module=tkinter",
        "--exclude-module=matplotlib",
        "--exclude-module=scipy",
    ]

    print("Exécution:", " ".join(cmd))
    result = subprocess.run(cmd, cwd=root)
    if result.returncode == 0:
        print("\nBuild réussi. Exécutable dans: dist/fuzzyrename_gui/")
    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
