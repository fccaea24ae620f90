import math
import pathlib
import sys
import unittest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from enclosure_core import BoxParams, DriverParams, EnclosureMode, PortGeometry, ValidationError, solve_alignment
from enclosure_core.acoustics.alignment import port_length_cm, sealed_volume


class SealedAlignmentTests(unittest.TestCase):
    def setUp(self) -> None:
        self.driver = DriverParams(fs_hz=30.0, qts=0.36, vas_l=50.0)

    def test_volume_for_butterworth_target(self) -> None:
        alignment = solve_alignment(self.driver, BoxParams(mode=EnclosureMode.SEALED))
        expected = 50.0 / ((0.707 / 0.36) ** 2 - 1.0)
        self.assertAlmostEqual(alignment.volume_l, expected, places=9)
        self.assertAlmostEqual(alignment.volume_l, 17.50, delta=0.05)
        self.assertIsNone(alignment.tuning_hz)
        self.assertIsNone(alignment.port_length_cm)

    def test_system_resonance_and_q(self) -> None:
        alignment = solve_alignment(self.driver, BoxParams(mode=EnclosureMode.SEALED))
        assert alignment.qtc is not None and alignment.system_resonance_hz is not None
        self.assertAlmostEqual(alignment.qtc, 0.707, places=6)
        self.assertAlmostEqual(alignment.system_resonance_hz, 30.0 * 0.707 / 0.36, places=6)

    def test_supplied_volume_is_kept(self) -> None:
        alignment = solve_alignment(self.driver, BoxParams(mode=EnclosureMode.SEALED, volume_l=42.0))
        self.assertEqual(alignment.volume_l, 42.0)

    def test_high_qts_has_no_sealed_solution(self) -> None:
        driver = DriverParams(fs_hz=30.0, qts=0.8, vas_l=50.0)
        with self.assertRaises(ValidationError) as ctx:
            solve_alignment(driver, BoxParams(mode=EnclosureMode.SEALED))
        self.assertEqual(ctx.exception.field, "Qts")
        with self.assertRaises(ValidationError):
            sealed_volume(50.0, 0.707)


class PortedAlignmentTests(unittest.TestCase):
    def setUp(self) -> None:
        self.driver = DriverParams(fs_hz=34.0, qts=0.42, vas_l=32.0)

    def test_qb3_volume_and_tuning(self) -> None:
        alignment = solve_alignment(self.driver, BoxParams(mode=EnclosureMode.PORTED))
        self.assertAlmostEqual(alignment.volume_l, 15.0 * 0.42**2.87 * 32.0, places=9)
        self.assertAlmostEqual(alignment.volume_l, 39.8, delta=0.05)
        assert alignment.tuning_hz is not None
        self.assertAlmostEqual(alignment.tuning_hz, 0.42 * 34.0 * 0.42**-0.9, places=9)
        self.assertAlmostEqual(alignment.tuning_hz, 31.17, delta=0.05)
        self.assertIsNone(alignment.system_resonance_hz)

    def test_explicit_values_are_never_overwritten(self) -> None:
        box = BoxParams(mode=EnclosureMode.PORTED, volume_l=55.5, tuning_hz=28.25)
        alignment = solve_alignment(self.driver, box)
        self.assertEqual(alignment.volume_l, 55.5)
        self.assertEqual(alignment.tuning_hz, 28.25)

    def test_port_length_from_area(self) -> None:
        port = PortGeometry(diameter_m=0.10)
        box = BoxParams(mode=EnclosureMode.PORTED, volume_l=50.0, tuning_hz=32.0, port=port)
        alignment = solve_alignment(self.driver, box)
        area_cm2 = math.pi * 5.0**2
        expected = 23562.5 * area_cm2 / (32.0**2 * 50.0) - 0.823 * math.sqrt(area_cm2)
        assert alignment.port_length_cm is not None
        self.assertAlmostEqual(alignment.port_length_cm, expected, places=6)
        self.assertAlmostEqual(alignment.port_length_cm, 28.85, delta=0.05)
        self.assertAlmostEqual(alignment.port_area_m2, port.area_m2())
        self.assertEqual(alignment.advisories, ())

    def test_multiple_ports_use_combined_area(self) -> None:
        single = PortGeometry(diameter_m=0.08)
        double = PortGeometry(diameter_m=0.08, count=2)
        self.assertAlmostEqual(double.area_m2(), 2 * single.area_m2())
        length = port_length_cm(double.area_m2(), 30.0, 60.0)
        box = BoxParams(mode=EnclosureMode.PORTED, volume_l=60.0, tuning_hz=30.0, port=double)
        self.assertAlmostEqual(solve_alignment(self.driver, box).port_length_cm or 0.0, length)

    def test_supplied_port_length_is_kept(self) -> None:
        box = BoxParams(
            mode=EnclosureMode.PORTED,
            volume_l=50.0,
            tuning_hz=32.0,
            port=PortGeometry(diameter_m=0.10),
            port_length_cm=40.0,
        )
        self.assertEqual(solve_alignment(self.driver, box).port_length_cm, 40.0)

    def test_negative_port_length_is_clamped_with_advisory(self) -> None:
        box = BoxParams(
            mode=EnclosureMode.PORTED,
            volume_l=100.0,
            tuning_hz=100.0,
            port=PortGeometry(diameter_m=0.10),
        )
        self.assertLess(port_length_cm(box.port_area_m2(), 100.0, 100.0), 0.0)
        alignment = solve_alignment(self.driver, box)
        self.assertEqual(alignment.port_length_cm, 0.0)
        self.assertEqual([a.code for a in alignment.advisories], ["negative-port-length"])

    def test_no_port_means_no_length(self) -> None:
        alignment = solve_alignment(self.driver, BoxParams(mode=EnclosureMode.PORTED))
        self.assertIsNone(alignment.port_length_cm)
        self.assertEqual(alignment.port_area_m2, 0.0)


class BandpassAlignmentTests(unittest.TestCase):
    def setUp(self) -> None:
        self.driver = DriverParams(fs_hz=30.0, qts=0.36, vas_l=50.0)

    def test_default_chamber_and_tuning(self) -> None:
        bp4 = solve_alignment(self.driver, BoxParams(mode=EnclosureMode.BANDPASS4))
        self.assertAlmostEqual(bp4.volume_l, 100.0)
        self.assertAlmostEqual(bp4.tuning_hz or 0.0, 36.0)
        bp6 = solve_alignment(self.driver, BoxParams(mode=EnclosureMode.BANDPASS6))
        self.assertAlmostEqual(bp6.volume_l, 150.0)
        self.assertAlmostEqual(bp6.tuning_hz or 0.0, 45.0)

    def test_chamber_ratio_override(self) -> None:
        box = BoxParams(mode=EnclosureMode.BANDPASS4, chamber_ratio=1.5)
        self.assertAlmostEqual(solve_alignment(self.driver, box).volume_l, 75.0)

    def test_port_length_applies_to_bandpass(self) -> None:
        box = BoxParams(mode=EnclosureMode.BANDPASS4, port=PortGeometry(diameter_m=0.10))
        alignment = solve_alignment(self.driver, box)
        assert alignment.port_length_cm is not None
        self.assertGreater(alignment.port_length_cm, 0.0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
