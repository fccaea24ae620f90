import math
import pathlib
import sys
import unittest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from enclosure_core import (
    BoxParams,
    EnclosureMode,
    PortGeometry,
    calculate_enclosure,
    find_preset,
    generate_panels,
    normalize_driver,
)
from enclosure_core.geometry.panels import (
    CUTOUT_RATIO,
    PANEL_SPACING_IN,
    internal_dimensions,
    nominal_driver_size_in,
)


class InternalDimensionTests(unittest.TestCase):
    def test_ratio_split_preserves_volume(self) -> None:
        width, height, depth = internal_dimensions(50.0)
        self.assertAlmostEqual(width * height * depth, 50.0 * 61.024, places=6)
        self.assertAlmostEqual(width / height, 1.5)
        self.assertAlmostEqual(depth / height, 2.0)

    def test_explicit_dimensions_win(self) -> None:
        self.assertEqual(internal_dimensions(50.0, (20.0, 14.0, 16.0)), (20.0, 14.0, 16.0))

    def test_driver_size_bands(self) -> None:
        self.assertIsNone(nominal_driver_size_in(0.0))
        self.assertEqual(nominal_driver_size_in(0.0120), 6.5)
        self.assertEqual(nominal_driver_size_in(0.0360), 10.0)
        self.assertEqual(nominal_driver_size_in(0.0510), 12.0)
        self.assertEqual(nominal_driver_size_in(0.0880), 15.0)
        self.assertEqual(nominal_driver_size_in(0.1200), 18.0)


class GeneratePanelsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.driver = normalize_driver(find_preset("Example 10").raw)

    def _panels(self, box: BoxParams):
        result = calculate_enclosure(box.mode, self.driver, box)
        return result, generate_panels(box, result)

    def test_outer_areas_match_aspect_ratio_decomposition(self) -> None:
        box = BoxParams(mode=EnclosureMode.SEALED, volume_l=50.0, wall_thickness_in=0.75)
        _, panel_set = self._panels(box)
        scale = (50.0 * 61.024 / 3.0) ** (1.0 / 3.0)
        outer_w, outer_h, outer_d = 1.5 * scale + 1.5, scale + 1.5, 2.0 * scale + 1.5
        for got, want in zip(panel_set.outer_dims_in, (outer_w, outer_h, outer_d)):
            self.assertAlmostEqual(got, want, places=9)
        expected_area = 2.0 * (outer_w * outer_h + outer_w * outer_d + outer_d * outer_h)
        self.assertAlmostEqual(panel_set.total_area_in2(), expected_area, places=6)
        self.assertAlmostEqual(panel_set.internal_volume_l(), 50.0, places=9)

        _, again = self._panels(box)
        self.assertEqual(panel_set, again)

    def test_panels_are_laid_out_in_one_row(self) -> None:
        _, panel_set = self._panels(BoxParams(mode=EnclosureMode.SEALED, volume_l=50.0))
        names = [panel.name for panel in panel_set.panels]
        self.assertEqual(names, ["Front", "Back", "Top", "Bottom", "Left", "Right"])
        for left, right in zip(panel_set.panels, panel_set.panels[1:]):
            self.assertAlmostEqual(right.origin_x, left.origin_x + left.width_in + PANEL_SPACING_IN)
            self.assertEqual(right.origin_y, 0.0)
        self.assertEqual(panel_set.panels[0].origin_x, 0.0)

    def test_explicit_dimensions_drive_panel_sizes(self) -> None:
        box = BoxParams(
            mode=EnclosureMode.SEALED,
            volume_l=50.0,
            wall_thickness_in=0.75,
            width_in=20.0,
            height_in=14.0,
            depth_in=16.0,
        )
        _, panel_set = self._panels(box)
        front = panel_set.panel("Front")
        top = panel_set.panel("Top")
        left = panel_set.panel("Left")
        self.assertEqual((front.width_in, front.height_in), (21.5, 15.5))
        self.assertEqual((top.width_in, top.height_in), (21.5, 17.5))
        self.assertEqual((left.width_in, left.height_in), (17.5, 15.5))
        with self.assertRaises(KeyError):
            panel_set.panel("Lid")

    def test_driver_cutout_centred_on_front(self) -> None:
        _, panel_set = self._panels(BoxParams(mode=EnclosureMode.SEALED, volume_l=50.0))
        front = panel_set.panel("Front")
        (driver,) = [c for c in panel_set.cutouts if c.label == "driver"]
        self.assertEqual(driver.kind, "circle")
        self.assertAlmostEqual(driver.diameter_in or 0.0, 10.0 * CUTOUT_RATIO)
        self.assertAlmostEqual(driver.center_x, front.origin_x + front.width_in / 2.0)
        self.assertAlmostEqual(driver.center_y, front.height_in / 2.0)

    def test_round_ports_get_circular_cutouts(self) -> None:
        box = BoxParams(
            mode=EnclosureMode.PORTED,
            volume_l=50.0,
            port=PortGeometry(diameter_m=0.08, count=2),
        )
        _, panel_set = self._panels(box)
        ports = [c for c in panel_set.cutouts if c.label == "port"]
        self.assertEqual(len(ports), 2)
        for port in ports:
            self.assertEqual(port.kind, "circle")
            self.assertAlmostEqual(port.diameter_in or 0.0, 8.0 / 2.54)
        self.assertLess(ports[0].center_x, ports[1].center_x)

    def test_slot_port_gets_rectangular_cutout(self) -> None:
        box = BoxParams(
            mode=EnclosureMode.PORTED,
            port=PortGeometry(slot_width_m=0.05, slot_height_m=0.30),
        )
        _, panel_set = self._panels(box)
        (slot,) = [c for c in panel_set.cutouts if c.label == "port"]
        self.assertEqual(slot.kind, "rect")
        self.assertAlmostEqual(slot.width_in or 0.0, 5.0 / 2.54)
        self.assertAlmostEqual(slot.height_in or 0.0, 30.0 / 2.54)

    def test_sealed_box_ignores_port_geometry(self) -> None:
        box = BoxParams(mode=EnclosureMode.SEALED, volume_l=50.0, port=PortGeometry(diameter_m=0.08))
        _, panel_set = self._panels(box)
        self.assertEqual([c.label for c in panel_set.cutouts], ["driver"])

    def test_summary_and_labels(self) -> None:
        box = BoxParams(mode=EnclosureMode.PORTED, volume_l=50.0, tuning_hz=32.0)
        _, panel_set = self._panels(box)
        summary = panel_set.notes[0]
        self.assertEqual(summary.text, "Vb=50.0L Fb=32.0Hz t=0.75in")
        labels = [note for note in panel_set.notes if note.layer == "LABELS"]
        self.assertEqual(len(labels), 6)
        self.assertTrue(labels[0].text.startswith("Front ("))

    def test_oversized_driver_is_noted(self) -> None:
        driver = normalize_driver(find_preset("Example 12").raw)
        box = BoxParams(mode=EnclosureMode.SEALED)
        result = calculate_enclosure("sealed", driver, box)
        panel_set = generate_panels(box, result)
        self.assertTrue(any("exceeds" in note.text for note in panel_set.notes))

    def test_no_driver_cutout_without_cone_area(self) -> None:
        driver = normalize_driver({"Fs": 30, "Qts": 0.36, "Vas": 50})
        box = BoxParams(mode=EnclosureMode.SEALED)
        panel_set = generate_panels(box, calculate_enclosure("sealed", driver, box))
        self.assertEqual(panel_set.cutouts, ())
        self.assertTrue(math.isfinite(panel_set.total_area_in2()))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
