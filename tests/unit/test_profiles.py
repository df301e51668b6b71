from unittest.mock import MagicMock

import pytest

from linelist.grammar.compiler import CANONICAL_PATTERNS, compile_profile
from linelist.grammar.exceptions import NoEnabledComponentsError
from linelist.grammar.models import ComponentSpec, FormatProfile
from linelist.profiles.codec import profile_from_dict, profile_to_dict, submission_config
from linelist.profiles.exceptions import (
    NoProfileSelectedError,
    ProfileDecodeError,
    UnknownPresetError,
)
from linelist.profiles.presets import CUSTOM_PROFILE_NAME, PRESETS
from linelist.profiles.resolver import resolve_profile
from linelist.profiles.session import ProfileSession


def _custom(area_enabled: bool) -> FormatProfile:
    return FormatProfile(
        components=(
            ComponentSpec(id="line_size", enabled=True, order=1, pattern=r"\d+"),
            ComponentSpec(id="area", enabled=area_enabled, order=2, pattern=r"\d{2,3}"),
            ComponentSpec(id="sequence_no", enabled=True, order=3, pattern=r"\d{3,5}"),
        ),
        separator="-",
    )


class TestPresets:
    @pytest.mark.parametrize("name", sorted(PRESETS))
    def test_preset_matches_its_own_example(self, name: str) -> None:
        preset = PRESETS[name]
        matcher = compile_profile(preset.build_profile())
        assert matcher.matches(preset.example)

    def test_onshore_template(self) -> None:
        matcher = compile_profile(PRESETS["onshore"].build_profile())
        assert matcher.template == "SIZE-FLUID-SEQUENCE-PIPECLASS"

    def test_general_template(self) -> None:
        matcher = compile_profile(PRESETS["general"].build_profile())
        assert matcher.template == "SIZE-AREA-FLUID-SEQUENCE-PIPECLASS"

    def test_offshore_template(self) -> None:
        matcher = compile_profile(PRESETS["offshore"].build_profile())
        assert matcher.template == "AREA-FLUID-SIZE-PIPECLASS-SEQUENCE"

    def test_unused_components_are_present_but_disabled(self) -> None:
        profile = PRESETS["onshore"].build_profile()
        assert {c.id for c in profile.components} == set(CANONICAL_PATTERNS)
        assert profile.component("area").enabled is False
        assert profile.component("insulation").enabled is False


class TestResolveProfile:
    def test_none_raises(self) -> None:
        with pytest.raises(NoProfileSelectedError):
            resolve_profile(None)

    def test_unknown_preset_raises(self) -> None:
        with pytest.raises(UnknownPresetError, match="Choose from"):
            resolve_profile("subsea")

    def test_preset_name_is_case_insensitive(self) -> None:
        resolved = resolve_profile("General")
        assert resolved.name == "general"
        assert resolved.is_preset

    def test_onshore_excludes_area(self) -> None:
        assert resolve_profile("onshore").include_area is False

    def test_offshore_includes_area(self) -> None:
        assert resolve_profile("offshore").include_area is True

    def test_custom_derives_include_area_from_area_component(self) -> None:
        with_area = resolve_profile(_custom(area_enabled=True))
        without_area = resolve_profile(_custom(area_enabled=False))
        assert with_area.name == CUSTOM_PROFILE_NAME
        assert not with_area.is_preset
        assert with_area.include_area is True
        assert without_area.include_area is False


class TestProfileCodec:
    def test_round_trip_keeps_disabled_components(self) -> None:
        profile = _custom(area_enabled=False)
        assert profile_from_dict(profile_to_dict(profile)) == profile

    def test_uses_persisted_key_names(self) -> None:
        data = profile_to_dict(_custom(area_enabled=True))
        assert data["allowVariableSeparators"] is True
        assert set(data["components"][0]) == {"id", "name", "enabled", "order", "pattern", "example"}

    def test_decodes_original_config_shape(self) -> None:
        profile = profile_from_dict(
            {
                "components": [
                    {"id": "line_size", "name": "Line Size", "enabled": True, "order": 1,
                     "pattern": "\\d{1,2}", "example": "36"},
                    {"id": "fluid_code", "name": "Fluid Code", "enabled": True, "order": 2,
                     "pattern": "[A-Z]{1,3}", "example": "SWR"},
                ],
                "separator": "-",
                "allowVariableSeparators": False,
            }
        )
        assert profile.allow_variable_separators is False
        assert [c.id for c in profile.enabled_components] == ["line_size", "fluid_code"]

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"components": "nope"},
            {"components": [42]},
            {"components": [{"id": ""}]},
            {"components": [{"id": "area", "order": 0}]},
            {"components": [{"id": "area", "order": True}]},
            {"components": [{"id": "area", "pattern": 5}]},
            {"components": [], "separator": 1},
            {"components": [], "allowVariableSeparators": "yes"},
        ],
    )
    def test_rejects_corrupted_input(self, data: object) -> None:
        with pytest.raises(ProfileDecodeError):
            profile_from_dict(data)

    def test_submission_config_sends_enabled_components_with_canonical_patterns(self) -> None:
        config = submission_config(_custom(area_enabled=False))
        assert [c["id"] for c in config["components"]] == ["line_size", "sequence_no"]
        assert config["components"][0]["pattern"] == CANONICAL_PATTERNS["line_size"]
        assert config["separator"] == "-"


class TestProfileSession:
    def test_current_without_selection_raises(self) -> None:
        session = ProfileSession(MagicMock(), scope="s")
        assert not session.has_selection
        with pytest.raises(NoProfileSelectedError):
            session.current()

    def test_select_preset(self) -> None:
        session = ProfileSession(MagicMock(), scope="s")
        resolved = session.select_preset("onshore")
        assert session.current() is resolved

    def test_snapshot_survives_later_selection(self) -> None:
        session = ProfileSession(MagicMock(), scope="s")
        session.select_preset("onshore")
        snapshot = session.current()
        session.use_custom(_custom(area_enabled=True))
        assert snapshot.name == "onshore"
        assert session.current().name == CUSTOM_PROFILE_NAME

    def test_load_forces_canonical_patterns(self) -> None:
        store = MagicMock()
        store.load.return_value = _custom(area_enabled=True)
        session = ProfileSession(store, scope="s")

        resolved = session.load()

        store.load.assert_called_once_with("s")
        assert resolved is not None
        assert resolved.profile.component("line_size").pattern == CANONICAL_PATTERNS["line_size"]
        assert resolved.include_area is True

    def test_load_returns_none_when_nothing_saved(self) -> None:
        store = MagicMock()
        store.load.return_value = None
        session = ProfileSession(store, scope="s")
        assert session.load() is None
        assert not session.has_selection

    def test_load_ignores_corrupted_record(self) -> None:
        store = MagicMock()
        store.load.side_effect = ProfileDecodeError("bad json")
        session = ProfileSession(store, scope="s")
        assert session.load() is None
        assert not session.has_selection

    def test_save_persists_active_profile(self) -> None:
        store = MagicMock()
        session = ProfileSession(store, scope="s")
        profile = _custom(area_enabled=False)
        session.use_custom(profile)

        session.save()

        store.save.assert_called_once_with("s", profile)

    def test_save_rejects_profile_that_does_not_compile(self) -> None:
        store = MagicMock()
        session = ProfileSession(store, scope="s")
        session.use_custom(
            FormatProfile(components=(ComponentSpec(id="area", enabled=False, order=1, pattern="x"),))
        )
        with pytest.raises(NoEnabledComponentsError):
            session.save()
        store.save.assert_not_called()
