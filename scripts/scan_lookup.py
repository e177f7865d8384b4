"""Read one code from a keyboard-wedge scanner and print the matching patient."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app import create_app
from models import db
from models.patient import Patient
from scanner import LineSource, ScanSession, TextDecoder


async def read_code() -> str | None:
    async with ScanSession(LineSource(sys.stdin), TextDecoder()) as scan:
        return await scan.read()


def main() -> int:
    print("Scan a patient card (Ctrl-D to quit)...", file=sys.stderr)
    try:
        code = asyncio.run(read_code())
    except KeyboardInterrupt:
        return 130
    if code is None:
        print("No code scanned.", file=sys.stderr)
        return 1

    app = create_app()
    with app.app_context():
        patient = db.session.get(Patient, code)
        if patient is None:
            print(f"Patient not found: {code}", file=sys.stderr)
            return 2
        print(json.dumps(patient.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
