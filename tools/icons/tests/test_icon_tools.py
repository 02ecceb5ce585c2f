#!/usr/bin/env python3

from __future__ import annotations

import json
import subprocess
import sys
import tempfile
import unittest
import zipfile
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[3]
TOOLS = ROOT / "tools" / "icons"


def _run(script: str, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, str(TOOLS / script), *args],
        cwd=ROOT,
        capture_output=True,
        text=True,
        check=False,
    )


class IconToolsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.master = self.tmp / "master.png"
        Image.new("RGB", (1024, 1024), (12, 34, 56)).save(self.master)
        self.transparent = self.tmp / "transparent.png"
        Image.new("RGBA", (64, 64), (0, 0, 0, 0)).save(self.transparent)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_preview_json(self) -> None:
        result = _run("preview_icons.py", "--platforms", "iphone,ipad", "--json")
        self.assertEqual(result.returncode, 0, msg=result.stderr)
        payload = json.loads(result.stdout)
        self.assertEqual(payload["count"], 18)
        filenames = [entry["filename"] for entry in payload["entries"]]
        self.assertEqual(filenames.count("Icon-1024.png"), 1)

    def test_validate_clean_and_warning_exit_codes(self) -> None:
        ok = _run("validate_icon.py", str(self.master), "--json")
        self.assertEqual(ok.returncode, 0, msg=ok.stderr)
        self.assertTrue(json.loads(ok.stdout)["ok"])

        warn = _run("validate_icon.py", str(self.transparent), "--json")
        self.assertEqual(warn.returncode, 1)
        payload = json.loads(warn.stdout)
        self.assertTrue(payload["has_alpha"])
        self.assertEqual(len(payload["warnings"]), 2)

    def test_flatten_then_validate_has_no_alpha(self) -> None:
        out = self.tmp / "flat.png"
        result = _run("flatten_icon.py", str(self.transparent), "--out", str(out), "--color", "#222222")
        self.assertEqual(result.returncode, 0, msg=result.stderr)
        checked = _run("validate_icon.py", str(out), "--json")
        self.assertFalse(json.loads(checked.stdout)["has_alpha"])

    def test_generate_writes_zip(self) -> None:
        out = self.tmp / "icons.zip"
        result = _run(
            "generate_icons.py",
            str(self.master),
            "--out",
            str(out),
            "--platforms",
            "mac,web",
            "--dark",
            str(self.master),
            "--json",
        )
        self.assertEqual(result.returncode, 0, msg=result.stderr)
        payload = json.loads(result.stdout)
        self.assertEqual(payload["file_count"], 10 * 2 + 6)
        with zipfile.ZipFile(out) as zf:
            names = zf.namelist()
        self.assertIn("AppIcon.appiconset/Icon-512@2x-dark.png", names)
        self.assertIn("web/android-chrome-512x512.png", names)

    def test_generate_reports_unreadable_source(self) -> None:
        bogus = self.tmp / "bogus.png"
        bogus.write_bytes(b"nope")
        result = _run("generate_icons.py", str(bogus), "--out", str(self.tmp / "x.zip"), "--single-size")
        self.assertEqual(result.returncode, 1)
        self.assertIn("ERROR", result.stderr)
        self.assertFalse((self.tmp / "x.zip").exists())

    def test_batch_writes_one_folder_per_image(self) -> None:
        out = self.tmp / "batch.zip"
        result = _run("batch_icons.py", str(self.master), str(self.transparent), "--out", str(out), "--single-size")
        self.assertEqual(result.returncode, 0, msg=result.stderr)
        with zipfile.ZipFile(out) as zf:
            names = zf.namelist()
        self.assertIn("master-AppIcon/AppIcon.appiconset/Icon-1024.png", names)
        self.assertIn("transparent-AppIcon/AppIcon.appiconset/Contents.json", names)


if __name__ == "__main__":
    unittest.main()
