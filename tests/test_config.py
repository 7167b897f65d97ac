"""
Tests for Configuration Loading
================================
"""

import math
from pathlib import Path

import pytest

from gesture_orbit.config import DEFAULT_CONFIG_PATH, LoggingConfig, OrbitConfig, load_config
from gesture_orbit.errors import ConfigError

REPO_CONFIG = Path(__file__).parent.parent / "config" / "config.yaml"


class TestOrbitConfig:

    def test_default_constants(self):
        config = OrbitConfig()

        assert config.smoothing_factor == 0.1
        assert config.sensitivity_pos == 4.0
        assert config.zoom_gain == 15.0
        assert config.min_zoom == 2.0
        assert config.max_zoom == 10.0
        assert config.default_radius == 5.0
        assert config.elevation_epsilon == 0.1
        assert config.anchor_index == 9

    def test_elevation_bounds(self):
        config = OrbitConfig()
        assert config.min_elevation == 0.1
        assert config.max_elevation == pytest.approx(math.pi - 0.1)

    def test_from_dict_partial(self):
        config = OrbitConfig.from_dict({"zoom_gain": 20, "max_zoom": 12})

        assert config.zoom_gain == 20.0
        assert config.max_zoom == 12.0
        assert config.smoothing_factor == 0.1

    def test_defaults_validate(self):
        assert OrbitConfig().validate() is not None

    @pytest.mark.parametrize("overrides", [
        {"smoothing_factor": 0.0},
        {"smoothing_factor": 1.0},
        {"min_zoom": 11.0},
        {"default_radius": 1.0},
        {"elevation_epsilon": 2.0},
        {"anchor_index": 21},
        {"max_hands": 1},
    ])
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ConfigError):
            OrbitConfig(**overrides).validate()


class TestLoadConfig:

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "absent.yaml") == {}

    def test_reads_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("orbit:\n  zoom_gain: 12\nlogging:\n  level: DEBUG\n")

        data = load_config(path)

        assert OrbitConfig.from_dict(data["orbit"]).zoom_gain == 12.0
        assert LoggingConfig.from_dict(data["logging"]).level == "DEBUG"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == {}

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_repository_config_matches_defaults(self):
        assert DEFAULT_CONFIG_PATH.resolve() == REPO_CONFIG.resolve()
        orbit = OrbitConfig.from_dict(load_config(REPO_CONFIG)["orbit"])
        assert orbit == OrbitConfig()


class TestAppConfig:

    def test_create_app_config(self):
        pytest.importorskip("mediapipe")
        from gesture_orbit.main import create_app_config

        app_config = create_app_config(load_config(REPO_CONFIG))

        assert app_config.camera.width == 1280
        assert app_config.mediapipe.max_num_hands == 2
        assert app_config.scheduler.target_fps == 60.0
        assert app_config.orbit == OrbitConfig()

    def test_create_app_config_rejects_bad_orbit(self):
        pytest.importorskip("mediapipe")
        from gesture_orbit.main import create_app_config

        with pytest.raises(ConfigError):
            create_app_config({"orbit": {"min_zoom": 20}})


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
