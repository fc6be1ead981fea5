import pytest

from vxn.domain import Layer
from vxn.params import (
    GLOBAL_COUNT,
    GLOBAL_PARAMS,
    PATCH_COUNT,
    PATCH_PARAMS,
    TOTAL_PARAMS,
    AssignMode,
    BoolKind,
    CrossModType,
    EnumKind,
    EnvSel,
    ExpTaper,
    FloatKind,
    GlobalParam,
    GlobalRef,
    IntKind,
    LfoSel,
    LinearTaper,
    ParamDesc,
    PatchParam,
    PatchRef,
    desc_for_clap_id,
    global_clap_id,
    module_for_clap_id,
    param_ref,
    patch_clap_id,
)


def test_tables_len_match_counts():
    assert len(PATCH_PARAMS) == len(PatchParam) == PATCH_COUNT
    assert len(GLOBAL_PARAMS) == len(GlobalParam) == GLOBAL_COUNT
    for i, desc in enumerate(PATCH_PARAMS):
        assert PatchParam.from_index(i).desc() is desc
    for i, desc in enumerate(GLOBAL_PARAMS):
        assert GlobalParam.from_index(i).desc() is desc
    assert len(list(PatchParam.all())) == PATCH_COUNT
    assert len(list(GlobalParam.all())) == GLOBAL_COUNT


def test_from_index_roundtrips():
    for p in PatchParam.all():
        assert PatchParam.from_index(p.value) == p
    assert PatchParam.from_index(len(PatchParam)) is None
    for g in GlobalParam.all():
        assert GlobalParam.from_index(g.value) == g
    assert GlobalParam.from_index(len(GlobalParam)) is None


def test_clap_id_layout_is_contiguous_and_invertible():
    expected = 0
    for layer in Layer:
        for p in PatchParam.all():
            cid = patch_clap_id(layer, p)
            assert cid == expected, f"{layer} {p} misindexed"
            assert param_ref(cid) == PatchRef(layer, p)
            expected += 1
    for g in GlobalParam.all():
        cid = global_clap_id(g)
        assert cid == expected
        assert param_ref(cid) == GlobalRef(g)
        expected += 1
    assert expected == TOTAL_PARAMS
    assert param_ref(TOTAL_PARAMS) is None


def test_last_global_id():
    assert global_clap_id(GlobalParam.LFO2_SYNC) == 148
    assert TOTAL_PARAMS == 149


def test_param_ref_negative_is_none():
    assert param_ref(-1) is None


def test_names_resolve_back_to_params():
    for p in PatchParam.all():
        assert PatchParam.from_name(p.desc().name) == p
    for g in GlobalParam.all():
        assert GlobalParam.from_name(g.desc().name) == g
    assert PatchParam.from_name("osc1_pw") == PatchParam.OSC1_PULSE_WIDTH
    assert GlobalParam.from_name("delay_pingpong") == GlobalParam.DELAY_PING_PONG
    assert PatchParam.from_name("nope") is None
    assert GlobalParam.from_name("cutoff") is None


def test_desc_for_clap_id():
    upper = desc_for_clap_id(patch_clap_id(Layer.UPPER, PatchParam.CUTOFF))
    lower = desc_for_clap_id(patch_clap_id(Layer.LOWER, PatchParam.CUTOFF))
    assert upper.name == "cutoff"
    assert lower.name == "cutoff"
    assert desc_for_clap_id(global_clap_id(GlobalParam.MASTER_VOLUME)).label == "Volume"
    assert desc_for_clap_id(TOTAL_PARAMS) is None


def test_module_for_clap_id():
    assert module_for_clap_id(0) == "Upper"
    assert module_for_clap_id(PATCH_COUNT) == "Lower"
    assert module_for_clap_id(2 * PATCH_COUNT) == "Global"
    assert module_for_clap_id(TOTAL_PARAMS) == ""


@pytest.mark.parametrize(
    "enum_cls,index,expected",
    [
        (AssignMode, 1, AssignMode.UNISON),
        (AssignMode, 3, AssignMode.TWIN),
        (AssignMode, 9, AssignMode.POLY),
        (LfoSel, 2, LfoSel.LFO2),
        (LfoSel, 5, LfoSel.OFF),
        (EnvSel, 1, EnvSel.ENV1),
        (EnvSel, 7, EnvSel.OFF),
        (CrossModType, 2, CrossModType.PM),
        (CrossModType, 3, CrossModType.OFF),
    ],
)
def test_value_enum_from_index(enum_cls, index, expected):
    assert enum_cls.from_index(index) == expected


def test_enum_display_rounds_and_clamps():
    wave = PatchParam.OSC1_WAVE.desc()
    assert wave.display(2.0) == "Saw"
    assert wave.display(2.5) == "Pulse"
    assert wave.display(1.4) == "Triangle"
    mode = PatchParam.FILTER_MODE.desc()
    assert mode.display(10.0) == "Notch"
    assert mode.display(-3.0) == "LP"


def test_bool_int_float_display():
    assert PatchParam.LEGATO.desc().display(0.5) == "On"
    assert PatchParam.LEGATO.desc().display(0.49) == "Off"
    assert PatchParam.OSC1_COARSE.desc().display(3.0) == "3 st"
    assert PatchParam.OSC1_OCTAVE.desc().display(-1.5) == "-2 oct"
    assert PatchParam.CUTOFF.desc().display(8000.0) == "8000.00 Hz"
    assert PatchParam.RESONANCE.desc().display(0.5) == "0.500"


def test_variant_index_case_insensitive():
    cross = PatchParam.CROSS_MOD_TYPE.desc()
    assert cross.variant_index("fm") == 2
    assert cross.variant_index("SYNC") == 1
    assert cross.variant_index("pm") is None
    assert PatchParam.CUTOFF.desc().variant_index("fm") is None


def test_enum_range_from_variants():
    desc = GlobalParam.OVERSAMPLE.desc()
    assert desc.min == 0.0
    assert desc.max == 3.0
    assert isinstance(desc.kind, EnumKind)
    assert desc.kind.variants[0] == "O/S OFF"


def test_linear_normalize_roundtrip_and_clamp():
    fine = PatchParam.OSC1_FINE.desc()
    assert fine.to_normalized(0.0) == pytest.approx(0.5)
    assert fine.to_normalized(100.0) == 1.0
    assert fine.to_normalized(-100.0) == 0.0
    assert fine.from_normalized(0.25) == pytest.approx(-25.0)
    assert fine.from_normalized(2.0) == pytest.approx(50.0)
    assert fine.clamp(80.0) == 50.0
    assert fine.clamp(-80.0) == -50.0
    for v in (-50.0, -12.5, 0.0, 33.0, 50.0):
        assert fine.from_normalized(fine.to_normalized(v)) == pytest.approx(v)


def test_degenerate_range_normalizes_to_zero():
    desc = ParamDesc("x", "X", 1.0, 1.0, 1.0, FloatKind("", LinearTaper()))
    assert desc.to_normalized(5.0) == 0.0


def test_taper_selection():
    assert PatchParam.CUTOFF.desc().taper() == ExpTaper(1000.0)
    assert PatchParam.RESONANCE.desc().taper() == LinearTaper()
    assert PatchParam.LEGATO.desc().taper() == LinearTaper()
    assert isinstance(PatchParam.LEGATO.desc().kind, BoolKind)
    assert isinstance(PatchParam.OSC1_COARSE.desc().kind, IntKind)


def test_exp_fader_pins_midpoint_and_top():
    cutoff = PatchParam.CUTOFF.desc()
    assert cutoff.from_fader(0.5) == pytest.approx(1000.0, rel=1e-6)
    assert cutoff.from_fader(1.0) == pytest.approx(18000.0, rel=1e-6)
    assert cutoff.from_fader(0.0) == pytest.approx(0.0, abs=1e-9)
    assert cutoff.to_fader(1000.0) == pytest.approx(0.5, rel=1e-6)
    assert cutoff.to_fader(1e9) == 1.0


@pytest.mark.parametrize(
    "param", [PatchParam.CUTOFF, PatchParam.LFO_RATE, PatchParam.PORTAMENTO_TIME]
)
def test_exp_fader_roundtrip(param):
    desc = param.desc()
    for n in (0.1, 0.3, 0.5, 0.8, 1.0):
        assert desc.to_fader(desc.from_fader(n)) == pytest.approx(n, rel=1e-6)


def test_linear_fader_matches_normalized():
    res = PatchParam.RESONANCE.desc()
    assert res.to_fader(0.3) == pytest.approx(res.to_normalized(0.3))
    assert res.from_fader(0.7) == pytest.approx(0.7)


def test_defaults_pinned():
    assert PatchParam.OSC2_OCTAVE.desc().default == -1.0
    assert PatchParam.FILTER_SLOPE.desc().display(PatchParam.FILTER_SLOPE.desc().default) == "24"
    assert GlobalParam.CHORUS_ON.desc().display(GlobalParam.CHORUS_ON.desc().default) == "On"