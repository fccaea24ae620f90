import pathlib
import sys
import unittest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from enclosure_core import (
    DEFAULT_SETTINGS,
    BoxParams,
    EnclosureMode,
    PortGeometry,
    calculate_enclosure,
    evaluate_warnings,
    find_preset,
    generate_curves,
    normalize_driver,
    solve_alignment,
)


class WarningEvaluationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.driver = normalize_driver(find_preset("Example 12").raw)

    def test_clean_sealed_design_has_no_warnings(self) -> None:
        result = calculate_enclosure("sealed", self.driver, BoxParams(mode=EnclosureMode.SEALED))
        self.assertEqual(result.warnings, ())
        self.assertEqual(result.warning_codes, ())

    def test_small_port_triggers_velocity_warning(self) -> None:
        box = BoxParams(mode=EnclosureMode.PORTED, port=PortGeometry(diameter_m=0.02))
        result = calculate_enclosure("ported", self.driver, box)
        self.assertGreater(result.max_port_velocity_ms(), DEFAULT_SETTINGS.port_velocity_limit_ms)
        self.assertIn("port-velocity", result.warning_codes)
        self.assertTrue(any("velocity" in warning.lower() for warning in result.warnings))

    def test_velocity_warning_is_reported_once(self) -> None:
        box = BoxParams(mode=EnclosureMode.PORTED, port=PortGeometry(diameter_m=0.02))
        result = calculate_enclosure("ported", self.driver, box)
        self.assertEqual(result.warning_codes.count("port-velocity"), 1)

    def test_velocity_limit_follows_settings(self) -> None:
        box = BoxParams(mode=EnclosureMode.PORTED, port=PortGeometry(diameter_m=0.02))
        alignment = solve_alignment(self.driver, box)
        curves = generate_curves(self.driver, box, alignment)
        relaxed = DEFAULT_SETTINGS.replace(port_velocity_limit_ms=max(curves.port_velocity_ms) + 1.0)
        codes = [w.code for w in evaluate_warnings(self.driver, box, alignment, curves, relaxed)]
        self.assertNotIn("port-velocity", codes)

    def test_thin_walls_warn(self) -> None:
        box = BoxParams(mode=EnclosureMode.SEALED, wall_thickness_in=0.5)
        result = calculate_enclosure("sealed", self.driver, box)
        self.assertIn("wall-thickness", result.warning_codes)

    def test_long_port_warns_for_ported_boxes(self) -> None:
        box = BoxParams(
            mode=EnclosureMode.PORTED,
            volume_l=20.0,
            tuning_hz=30.0,
            port=PortGeometry(diameter_m=0.10),
        )
        result = calculate_enclosure("ported", self.driver, box)
        assert result.port_length_cm is not None
        self.assertGreater(result.port_length_cm, 0.8 * result.volume_l)
        self.assertIn("port-length", result.warning_codes)

    def test_excursion_over_xmax_warns(self) -> None:
        settings = DEFAULT_SETTINGS.replace(input_power_w=1000.0)
        result = calculate_enclosure("sealed", self.driver, BoxParams(mode=EnclosureMode.SEALED), settings)
        self.assertGreater(result.max_excursion_m(), self.driver.xmax_m)
        self.assertIn("excursion", result.warning_codes)

    def test_negative_port_length_advisory_comes_first(self) -> None:
        box = BoxParams(
            mode=EnclosureMode.PORTED,
            volume_l=100.0,
            tuning_hz=100.0,
            port=PortGeometry(diameter_m=0.10),
            wall_thickness_in=0.5,
        )
        result = calculate_enclosure("ported", self.driver, box)
        self.assertEqual(result.warning_codes[0], "negative-port-length")
        self.assertIn("wall-thickness", result.warning_codes)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
