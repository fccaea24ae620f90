import pathlib
import sys
import unittest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from enclosure_core import DEFAULT_SETTINGS, DesignWarning, settings_from_env
from enclosure_core.settings import ENV_INPUT_POWER, ENV_PORT_VELOCITY_LIMIT


class EngineSettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        self.assertEqual(DEFAULT_SETTINGS.sample_count, 191)
        self.assertEqual(DEFAULT_SETTINGS.port_velocity_limit_ms, 17.0)
        self.assertEqual(DEFAULT_SETTINGS.to_dict()["sweep_stop_hz"], 200.0)

    def test_replace_returns_new_instance(self) -> None:
        updated = DEFAULT_SETTINGS.replace(input_power_w=100.0)
        self.assertEqual(updated.input_power_w, 100.0)
        self.assertEqual(DEFAULT_SETTINGS.input_power_w, 1.0)

    def test_environment_overrides(self) -> None:
        settings = settings_from_env({ENV_PORT_VELOCITY_LIMIT: "25", ENV_INPUT_POWER: " 10 "})
        self.assertEqual(settings.port_velocity_limit_ms, 25.0)
        self.assertEqual(settings.input_power_w, 10.0)

    def test_empty_environment_keeps_base(self) -> None:
        self.assertIs(settings_from_env({}), DEFAULT_SETTINGS)
        self.assertIs(settings_from_env({ENV_INPUT_POWER: ""}), DEFAULT_SETTINGS)

    def test_invalid_environment_values_rejected(self) -> None:
        with self.assertRaises(ValueError):
            settings_from_env({ENV_PORT_VELOCITY_LIMIT: "fast"})
        with self.assertRaises(ValueError):
            settings_from_env({ENV_INPUT_POWER: "-1"})


class DesignWarningTests(unittest.TestCase):
    def test_message_and_code(self) -> None:
        warning = DesignWarning("wall-thickness", "Thin walls")
        self.assertEqual(str(warning), "Thin walls")
        self.assertEqual(warning.to_dict(), {"code": "wall-thickness", "message": "Thin walls"})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
