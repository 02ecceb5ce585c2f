#!/usr/bin/env python3

from __future__ import annotations

import itertools
import unittest

from packages.iconkit_core.icons.catalog import PLATFORMS, IconSpec
from packages.iconkit_core.icons.manifest import build_manifest, manifest_entry
from packages.iconkit_core.icons.naming import native_filename, output_filename, web_filename
from packages.iconkit_core.icons.plan import folder_names, plan_icon_set
from packages.iconkit_core.icons.summary import build_asset_summary


class IconNamingTests(unittest.TestCase):
    def test_native_filenames(self) -> None:
        self.assertEqual(native_filename(IconSpec(60, 3, "iphone")), "Icon-60@3x.png")
        self.assertEqual(native_filename(IconSpec(20, 1, "ipad")), "Icon-20~ipad.png")
        self.assertEqual(native_filename(IconSpec(83.5, 2, "ipad")), "Icon-83.5@2x~ipad.png")
        self.assertEqual(native_filename(IconSpec(1024, 1, "ios-marketing")), "Icon-1024.png")
        self.assertEqual(
            native_filename(IconSpec(27.5, 2, "watch", subtype="42mm", role="notificationCenter")),
            "Icon-27.5@2x~watch-42mm.png",
        )
        self.assertEqual(native_filename(IconSpec(1024, 1, "watch-marketing")), "Icon-1024~watch.png")
        self.assertEqual(native_filename(IconSpec(16, 2, "mac")), "Icon-16@2x.png")

    def test_appearance_suffix_comes_last(self) -> None:
        spec = IconSpec(40, 2, "watch", subtype="38mm", role="appLauncher")
        self.assertEqual(native_filename(spec, "dark"), "Icon-40@2x~watch-38mm-dark.png")
        self.assertEqual(native_filename(IconSpec(1024, 1, "universal"), "tinted"), "Icon-1024-tinted.png")

    def test_web_filenames(self) -> None:
        self.assertEqual(web_filename(IconSpec(180, 1, "web")), "apple-touch-icon.png")
        self.assertEqual(web_filename(IconSpec(192, 1, "web")), "android-chrome-192x192.png")
        self.assertEqual(web_filename(IconSpec(512, 1, "web")), "android-chrome-512x512.png")
        self.assertEqual(web_filename(IconSpec(32, 1, "web")), "favicon-32.png")

    def test_web_specs_refuse_appearances(self) -> None:
        with self.assertRaises(ValueError):
            output_filename(IconSpec(32, 1, "web"), "dark")

    def test_filenames_unique_per_folder_for_every_combination(self) -> None:
        for flags in itertools.product((False, True), repeat=len(PLATFORMS)):
            platforms = dict(zip(PLATFORMS, flags))
            plan = plan_icon_set(platforms, appearances=["dark", "tinted"])
            native = [o.filename for o in plan.native]
            web = [o.filename for o in plan.web]
            self.assertEqual(len(native), len(set(native)), msg=str(platforms))
            self.assertEqual(len(web), len(set(web)), msg=str(platforms))

    def test_manifest_entry_shape(self) -> None:
        plan = plan_icon_set({"watch": True}, appearances=["dark"])
        entry = manifest_entry(plan.native[0])
        self.assertEqual(
            entry,
            {
                "size": "24x24",
                "idiom": "watch",
                "filename": "Icon-24@2x~watch-38mm.png",
                "scale": "2x",
                "role": "notificationCenter",
                "subtype": "38mm",
            },
        )
        self.assertEqual(list(entry), ["size", "idiom", "filename", "scale", "role", "subtype"])

        dark = [o for o in plan.native if o.appearance == "dark"][0]
        self.assertEqual(manifest_entry(dark)["appearances"], [{"appearance": "luminosity", "value": "dark"}])

    def test_manifest_skips_web_outputs(self) -> None:
        plan = plan_icon_set({"mac": True, "web": True})
        manifest = build_manifest(plan.outputs, author="xcode")
        self.assertEqual(len(manifest["images"]), 10)
        self.assertEqual(manifest["info"], {"version": 1, "author": "xcode"})

    def test_folder_names(self) -> None:
        self.assertEqual(folder_names(None), ("AppIcon.appiconset", "web"))
        self.assertEqual(folder_names("Holiday"), ("Holiday.appiconset", "Holiday-web"))
        with self.assertRaises(ValueError):
            folder_names("../escape")


class AssetSummaryTests(unittest.TestCase):
    def test_single_size_with_dark(self) -> None:
        entries = build_asset_summary({}, single_size=True, appearances=["dark"])
        self.assertEqual([e.filename for e in entries], ["Icon-1024.png", "Icon-1024-dark.png"])
        self.assertEqual({(e.width, e.height) for e in entries}, {(1024, 1024)})
        self.assertEqual(entries[1].appearance, "dark")
        self.assertEqual(entries[0].platform_label, "Universal")

    def test_single_size_ignores_platforms(self) -> None:
        entries = build_asset_summary({name: True for name in PLATFORMS}, single_size=True)
        self.assertEqual([e.filename for e in entries], ["Icon-1024.png"])

    def test_single_size_still_rejects_unknown_platforms(self) -> None:
        with self.assertRaises(ValueError):
            build_asset_summary({"andriod": True}, single_size=True)

    def test_multi_size_counts(self) -> None:
        platforms = {"iphone": True, "web": True}
        entries = build_asset_summary(platforms, appearances=["dark", "tinted"])
        native = 9
        web = 6
        self.assertEqual(len(entries), native * 3 + web)

    def test_web_entries_never_carry_appearances(self) -> None:
        entries = build_asset_summary({name: True for name in PLATFORMS}, appearances=["dark", "tinted"])
        web = [e for e in entries if e.family == "web"]
        self.assertEqual(len(web), 6)
        self.assertTrue(all(e.appearance is None for e in web))
        self.assertTrue(all(e.platform_label == "Web / Favicon" for e in web))

    def test_appearance_order_is_canonical(self) -> None:
        entries = build_asset_summary({"mac": True}, appearances=["tinted", "dark"])
        looks = [e.appearance for e in entries]
        self.assertEqual(looks, [None] * 10 + ["dark"] * 10 + ["tinted"] * 10)

    def test_unknown_appearance_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            build_asset_summary({"iphone": True}, appearances=["sepia"])


if __name__ == "__main__":
    unittest.main()
