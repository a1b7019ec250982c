"""Test config resolution and validation with Pydantic."""

import pytest
from pydantic import ValidationError

from gridfilter.schemas import ParamConfig, UserConfig, CLIConfig, InternalConfig
from gridfilter.schemas.resolve import deep_merge, resolve_config


class TestConfigResolution:
    """Test resolve_config() precedence and merging."""

    def test_resolve_config_all_defaults(self):
        """Resolving with no user/CLI overrides uses all ParamConfig defaults."""
        config = resolve_config(ParamConfig(), None, None)

        assert isinstance(config, InternalConfig)
        assert config.grid.resolution == 500.0
        assert config.grid.overlap_threshold == 1.0
        assert config.grid.cell_geometry == "clipped"
        assert config.grid.equal_area_crs == "auto"
        assert config.visualization.enabled is False
        assert config.logging.level == "INFO"

    def test_no_arguments_uses_defaults(self):
        assert resolve_config() == resolve_config(ParamConfig(), None, None)

    def test_user_config_overrides_param_config(self):
        """UserConfig values override ParamConfig defaults."""
        config = resolve_config(ParamConfig(), UserConfig(RESOLUTION=200), None)
        assert config.grid.resolution == 200.0

    def test_precedence_param_user_cli(self):
        """Full precedence: CLI > User > Param."""
        user = UserConfig(RESOLUTION=200, PROP=0.5, PLOT_GRID=True)
        cli = CLIConfig(resolution=100)
        config = resolve_config(ParamConfig(), user, cli)

        # CLI won on resolution
        assert config.grid.resolution == 100.0
        # User value preserved where CLI is silent
        assert config.grid.overlap_threshold == 0.5
        assert config.visualization.enabled is True

    def test_cli_plot_overrides_user(self):
        user = UserConfig(PLOT_GRID=True)
        config = resolve_config(ParamConfig(), user, CLIConfig(plot=False))
        assert config.visualization.enabled is False

    def test_empty_dicts_use_all_param_defaults(self):
        config = resolve_config({}, {}, {})
        assert config == resolve_config(ParamConfig(), None, None)

    def test_dict_inputs_are_validated(self):
        config = resolve_config(
            {"grid": {"resolution": 50}},
            {"PROP": 0.25},
            {"log_level": "DEBUG"},
        )
        assert config.grid.resolution == 50.0
        assert config.grid.overlap_threshold == 0.25
        assert config.logging.level == "DEBUG"

    def test_cli_overrides_do_not_mutate_user(self):
        user = UserConfig.model_validate({"RESOLUTION": 200})
        internal = resolve_config(ParamConfig(), user, CLIConfig(resolution=100))

        assert internal.grid.resolution == 100.0
        assert user.resolution == 200.0


class TestThresholdClamping:
    """Out-of-range thresholds are coerced at resolution time."""

    @pytest.mark.parametrize(
        "requested, effective",
        [(-1, 0.01), (0, 0.01), (0.005, 0.01), (0.01, 0.01), (0.5, 0.5), (1, 1.0), (2, 1.0)],
    )
    def test_user_threshold_clamped(self, requested, effective):
        config = resolve_config(ParamConfig(), UserConfig(PROP=requested), None)
        assert config.grid.overlap_threshold == effective

    def test_cli_threshold_clamped(self):
        config = resolve_config(None, None, CLIConfig(overlap_threshold=5))
        assert config.grid.overlap_threshold == 1.0

    def test_nan_threshold_rejected(self):
        with pytest.raises(ValueError, match="NaN"):
            resolve_config(None, UserConfig(PROP=float("nan")), None)

    @pytest.mark.parametrize("threshold", [float("nan"), float("inf")])
    def test_cli_threshold_must_be_finite(self, threshold):
        with pytest.raises(ValidationError):
            CLIConfig(overlap_threshold=threshold)


class TestValidation:
    """Invalid values fail at config time, not mid-build."""

    @pytest.mark.parametrize("resolution", [0, -5])
    def test_param_resolution_must_be_positive(self, resolution):
        with pytest.raises(ValidationError):
            ParamConfig(grid={"resolution": resolution})

    @pytest.mark.parametrize("resolution", [0, -5, float("nan"), float("inf")])
    def test_cli_resolution_must_be_positive_and_finite(self, resolution):
        with pytest.raises(ValidationError):
            CLIConfig(resolution=resolution)

    def test_user_resolution_checked_at_resolution_time(self):
        with pytest.raises(ValidationError):
            resolve_config(None, UserConfig(RESOLUTION=0), None)

    def test_unknown_cell_geometry_rejected(self):
        with pytest.raises(ValidationError):
            UserConfig(CELL_GEOMETRY="hexagon")

    def test_param_config_forbids_unknown_keys(self):
        with pytest.raises(ValidationError):
            ParamConfig(grid={"resolution": 100, "cell_shape": "square"})

    def test_internal_config_is_frozen(self):
        config = resolve_config()
        with pytest.raises(ValidationError):
            config.grid = None

    def test_internal_threshold_bounds_enforced(self):
        data = resolve_config().model_dump()
        data["grid"]["overlap_threshold"] = 0.0
        with pytest.raises(ValidationError):
            InternalConfig.model_validate(data)


class TestDeepMerge:

    def test_nested_values_merged(self):
        base = {"a": 1, "b": {"c": 2, "d": 3}}
        override = {"b": {"d": 4, "e": 5}, "f": 6}
        assert deep_merge(base, override) == {"a": 1, "b": {"c": 2, "d": 4, "e": 5}, "f": 6}

    def test_later_overrides_win(self):
        assert deep_merge({"a": 1}, {"a": 2}, {"a": 3}) == {"a": 3}

    def test_base_not_mutated(self):
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}
