"""
Tests for the P17 and PT19 genotype error models.

Expected values are the closed-form coefficients evaluated by hand at
e = 0.1 (sequencing error) and d = 0.2 (allelic dropout).
"""

import numpy as np
import pytest

from seqerr.core.error_models import OPT_PARAM_ADO_RATE, OPT_PARAM_SEQ_ERROR
from seqerr.core.errors import InvalidArgument
from seqerr.models.genotype import (
    GenotypeErrorModel,
    P17GenotypeErrorModel,
    PT19GenotypeErrorModel,
)
from seqerr.states.genotypes import GENOTYPE_NAMES

E, D = 0.1, 0.2

AA, CC, GG, TT, AC, AG, AT, CG, CT, GT = range(10)

MODELS = [P17GenotypeErrorModel, PT19GenotypeErrorModel]


def mask(state: int) -> int:
    return 1 << state


def test_p17_homozygous_observation():
    model = P17GenotypeErrorModel(params=[E, D])

    clv = model.compute_state_probs(mask(AA))

    assert clv[AA] == pytest.approx(0.91)
    # heterozygous truths one allele away
    for k in (AC, AG, AT):
        assert clv[k] == pytest.approx(0.5 * D + E / 6 - E * D / 3)
        assert clv[k] == pytest.approx(0.11)
    # two alleles away, homozygous or heterozygous
    for k in (CC, GG, TT, CG, CT, GT):
        assert clv[k] == pytest.approx(E * D / 6)


def test_p17_heterozygous_observation():
    model = P17GenotypeErrorModel(params=[E, D])

    clv = model.compute_state_probs(mask(AC))

    assert clv[AC] == pytest.approx(1 - E - D + E * D)
    assert clv[AC] == pytest.approx(0.72)
    for k in (AA, CC):
        assert clv[k] == pytest.approx((1 - D) * E / 3)
    for k in (AG, AT, CG, CT):
        assert clv[k] == pytest.approx((1 - D) * E / 6)
    for k in (GG, TT, GT):
        assert clv[k] == 0.0


def test_pt19_homozygous_observation():
    model = PT19GenotypeErrorModel(params=[E, D])

    clv = model.compute_state_probs(mask(GG))

    assert clv[GG] == pytest.approx(0.91)
    for k in (AG, CG, GT):
        assert clv[k] == pytest.approx(0.5 * D + E / 6 - 3 / 8 * E * D)
        assert clv[k] == pytest.approx(0.1091667, abs=1e-7)
    for k in (AA, CC, TT, AC, AT, CT):
        assert clv[k] == pytest.approx(E * D / 12)


def test_pt19_heterozygous_observation():
    model = PT19GenotypeErrorModel(params=[E, D])

    clv = model.compute_state_probs(mask(CT))

    assert clv[CT] == pytest.approx((1 - D) * (1 - E) + E * D / 12)
    for k in (CC, TT):
        assert clv[k] == pytest.approx(E * D / 12 + (1 - D) * E / 3)
        assert clv[k] == pytest.approx(0.0283333, abs=1e-7)
    for k in (AC, CG, AT, GT):
        assert clv[k] == pytest.approx(E / 6 - E * D / 8)
    for k in (AA, GG, AG):
        assert clv[k] == 0.0


def test_variants_differ_for_same_parameters():
    p17 = P17GenotypeErrorModel(params=[E, D])
    pt19 = PT19GenotypeErrorModel(params=[E, D])

    assert p17.name == "P17"
    assert pt19.name == "PT19"
    assert not np.allclose(p17.compute_state_probs(mask(AG)), pt19.compute_state_probs(mask(AG)))


@pytest.mark.parametrize("model_cls", MODELS)
def test_undefined_state_is_all_ones(model_cls):
    model = model_cls(params=[E, D])

    clv = model.compute_state_probs(model.undefined_state)

    assert model.undefined_state == 1023
    np.testing.assert_array_equal(clv, np.ones(10))


@pytest.mark.parametrize("model_cls", MODELS)
def test_outputs_are_not_normalized(model_cls):
    model = model_cls(params=[E, D])

    totals = [model.compute_state_probs(mask(s)).sum() for s in range(10)]

    assert not np.allclose(totals, 1.0)


@pytest.mark.parametrize("model_cls", MODELS)
def test_zero_dropout_leaves_error_terms_only(model_cls):
    model = model_cls(params=[E, 0.0])

    clv = model.compute_state_probs(mask(AA))

    assert clv[AA] == pytest.approx(1 - E)
    assert clv[CC] == 0.0
    assert clv[AC] == pytest.approx(E / 6)


@pytest.mark.parametrize("model_cls", MODELS)
def test_parameter_metadata(model_cls):
    model = model_cls()

    assert model.states == 10
    assert model.param_ids() == [OPT_PARAM_SEQ_ERROR, OPT_PARAM_ADO_RATE]
    assert model.param_names() == ["SEQ_ERROR", "ADO_RATE"]
    assert model.params() == [0.01, 0.05]
    assert model.param_bounds() == [(1e-9, 0.5), (1e-9, 0.7)]


@pytest.mark.parametrize("model_cls", MODELS)
def test_single_value_update_keeps_dropout(model_cls):
    model = model_cls(params=[E, 0.33])

    model.set_params([0.02])

    assert model.params() == [0.02, 0.33]
    assert model.seq_error_rate == 0.02
    assert model.dropout_rate == 0.33


@pytest.mark.parametrize("model_cls", MODELS)
def test_empty_update_is_rejected(model_cls):
    model = model_cls(params=[E, D])

    with pytest.raises(InvalidArgument):
        model.set_params([])
    assert model.params() == [E, D]


@pytest.mark.parametrize("model_cls", MODELS)
def test_params_round_trip_keeps_outputs_identical(model_cls):
    model = model_cls(params=[0.0123456789, 0.3456789])
    masks = [mask(s) for s in range(10)] + [1023]
    before = model.compute_tip_clv(masks)

    model.set_params(model.params())

    np.testing.assert_array_equal(model.compute_tip_clv(masks), before)


@pytest.mark.parametrize("model_cls", MODELS)
@pytest.mark.parametrize("states", [4, 16])
def test_genotype_models_need_ten_states(model_cls, states):
    with pytest.raises(InvalidArgument):
        model_cls(states)


@pytest.mark.parametrize("model_cls", MODELS)
def test_partial_mask_uses_lowest_genotype(model_cls):
    model = model_cls(params=[E, D])

    partial = mask(AC) | mask(GT)

    np.testing.assert_array_equal(
        model.compute_state_probs(partial), model.compute_state_probs(mask(AC))
    )


@pytest.mark.parametrize("model_cls", MODELS)
def test_strict_ambiguity_rejects_partial_masks(model_cls):
    model = model_cls(params=[E, D], strict_ambiguity=True)

    with pytest.raises(InvalidArgument):
        model.compute_state_probs(mask(AC) | mask(GT))
    # single genotypes and the undefined state are still accepted
    assert model.compute_state_probs(mask(TT))[TT] == pytest.approx(0.91)
    np.testing.assert_array_equal(model.compute_state_probs(1023), np.ones(10))


def test_genotype_base_is_abstract():
    with pytest.raises(TypeError):
        GenotypeErrorModel()


def test_repr_names_parameters():
    model = P17GenotypeErrorModel(params=[E, D])

    assert repr(model) == "P17GenotypeErrorModel(states=10, SEQ_ERROR=0.1, ADO_RATE=0.2)"
    assert len(GENOTYPE_NAMES) == model.states
