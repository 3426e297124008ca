"""Tests for AnalysisConfig validation and request-parameter parsing."""

import pytest

from analysis import AnalysisConfig


class TestAnalysisConfigValidate:
    def test_defaults_are_valid(self):
        AnalysisConfig().validate()

    @pytest.mark.parametrize("name", ["distance_yards", "moa_per_click", "target_width_in", "max_abs_clicks"])
    def test_non_positive_values_raise(self, name):
        with pytest.raises(ValueError, match=f"{name} must be positive"):
            AnalysisConfig(**{name: 0}).validate()

    def test_target_height_must_be_positive_when_set(self):
        with pytest.raises(ValueError, match="target_height_in"):
            AnalysisConfig(target_height_in=-1.0).validate()

    def test_max_shots_below_min_shots_raises(self):
        with pytest.raises(ValueError, match="must be >= min_shots"):
            AnalysisConfig(min_shots=5, max_shots=4).validate()

    def test_intensity_out_of_range_raises(self):
        with pytest.raises(ValueError, match=r"within \[0, 255\]"):
            AnalysisConfig(not_white_threshold=300).validate()

    def test_fraction_out_of_range_raises(self):
        with pytest.raises(ValueError, match=r"within \[0, 1\]"):
            AnalysisConfig(min_fill=1.5).validate()

    def test_inverted_otsu_clamp_raises(self):
        with pytest.raises(ValueError, match="otsu_clamp_min"):
            AnalysisConfig(otsu_clamp_min=200, otsu_clamp_max=100).validate()

    def test_inverted_aspect_window_raises(self):
        with pytest.raises(ValueError, match="aspect window"):
            AnalysisConfig(bbox_aspect_min=2.0, bbox_aspect_max=1.0).validate()


class TestWithOverrides:
    def test_returns_new_instance(self):
        base = AnalysisConfig()
        updated = base.with_overrides(distance_yards=200.0)
        assert updated.distance_yards == 200.0
        assert base.distance_yards == 100.0

    def test_unknown_field_raises(self):
        with pytest.raises(ValueError, match="Unknown config field"):
            AnalysisConfig().with_overrides(zoom=3)

    def test_invalid_value_raises(self):
        with pytest.raises(ValueError, match="moa_per_click"):
            AnalysisConfig().with_overrides(moa_per_click=-0.25)


class TestFromMapping:
    def test_camel_case_keys(self):
        config = AnalysisConfig.from_mapping({
            "distanceYards": "200",
            "moaPerClick": 0.1,
            "targetWidthIn": "17.5",
        })
        assert config.distance_yards == 200.0
        assert config.moa_per_click == 0.1
        assert config.target_width_in == 17.5

    def test_snake_case_keys(self):
        config = AnalysisConfig.from_mapping({"max_shots": "6"})
        assert config.max_shots == 6
        assert isinstance(config.max_shots, int)

    def test_empty_values_keep_defaults(self):
        config = AnalysisConfig.from_mapping({"distanceYards": "", "targetHeightIn": None})
        assert config == AnalysisConfig()

    def test_base_is_respected(self):
        base = AnalysisConfig(distance_yards=50.0)
        config = AnalysisConfig.from_mapping({"moaPerClick": "0.5"}, base=base)
        assert config.distance_yards == 50.0
        assert config.moa_per_click == 0.5

    def test_non_numeric_raises(self):
        with pytest.raises(ValueError, match="must be numeric"):
            AnalysisConfig.from_mapping({"distanceYards": "far"})

    def test_boolean_is_not_numeric(self):
        with pytest.raises(ValueError, match="must be numeric"):
            AnalysisConfig.from_mapping({"distanceYards": True})

    def test_fractional_int_raises(self):
        with pytest.raises(ValueError, match="whole number"):
            AnalysisConfig.from_mapping({"minShots": "2.5"})

    def test_unknown_key_raises(self):
        with pytest.raises(ValueError, match="Unknown config field: zoomLevel"):
            AnalysisConfig.from_mapping({"zoomLevel": 2})

    def test_to_dict_round_trips_through_from_mapping(self):
        config = AnalysisConfig(distance_yards=300.0, target_height_in=35.0)
        assert AnalysisConfig.from_mapping(config.to_dict()) == config
