"""
Tests for the tax engine.

Tests cover:
- Worked examples against the 2025 table
- Income tax, USC, PRSI and credit building blocks
- Breakdown invariants (clamp, composition, monotonicity)
- Scenario validation
"""

import dataclasses

import numpy as np
import pytest

from tax_calculator import (
    MAX_INCOME, MaritalStatus, TaxScenario, TaxBreakdown, InvalidInputError,
    RateTable, USCBracket, calculate_tax, calc_income_tax, calc_usc,
    calc_usc_vectorised, calc_prsi, calc_tax_credits, standard_rate_band,
    marginal_tax_rate,
)


class TestWorkedExamples:
    """Concrete 2025 figures."""

    def test_single_30k(self, rates, single_30k):
        b = calculate_tax(single_30k, rates)

        assert b.income_tax == 6000.00
        assert b.prsi == 1260.00
        assert b.tax_credits == 4000.00
        assert b.usc == pytest.approx(446.00, abs=0.005)
        assert b.gross_tax == pytest.approx(7706.00, abs=0.005)
        assert b.net_tax == pytest.approx(3706.00, abs=0.005)
        assert b.net_income == pytest.approx(26294.00, abs=0.005)
        assert b.effective_tax_rate_pct == 12.35
        assert b.marginal_tax_rate_pct == 27.2

    def test_single_60k(self, rates, single_60k):
        b = calculate_tax(single_60k, rates)

        assert b.income_tax == 15200.00  # 44,000 @ 20% + 16,000 @ 40%
        assert b.marginal_tax_rate_pct == 47.2

    def test_married_one_income(self, rates, married_one_income):
        b = calculate_tax(married_one_income, rates)

        assert b.income_tax == 13400.00
        assert b.tax_credits == 6000.00

    def test_married_two_incomes(self, rates):
        scenario = TaxScenario(60_000, MaritalStatus.MARRIED, spouse_income=25_000)
        b = calculate_tax(scenario, rates)

        assert standard_rate_band(MaritalStatus.MARRIED, 25_000, rates) == 78_000
        assert b.income_tax == 12000.00  # all at the standard rate

    def test_single_50k_usc(self, rates):
        b = calculate_tax(TaxScenario(50_000), rates)

        expected = 12_012 * 0.005 + 15_370 * 0.02 + 22_618 * 0.03
        assert b.usc == pytest.approx(round(expected, 2), abs=0.005)

    def test_zero_income(self, rates):
        b = calculate_tax(TaxScenario(0), rates)

        assert b.income_tax == 0
        assert b.usc == 0
        assert b.prsi == 0
        assert b.gross_tax == 0
        assert b.net_tax == 0
        assert b.net_income == 0
        assert b.effective_tax_rate_pct == 0
        # Credits are still reported; no USC on the next euro at zero
        assert b.tax_credits == 4000
        assert b.marginal_tax_rate_pct == 24.2

    def test_single_with_children_gets_carer_credit(self, rates):
        b = calculate_tax(TaxScenario(40_000, has_children=True), rates)
        assert b.tax_credits == 2000 + 2000 + 1900

    def test_single_parent_band(self, rates):
        scenario = TaxScenario(50_000, MaritalStatus.SINGLE_PARENT, has_children=True)
        b = calculate_tax(scenario, rates)

        assert b.income_tax == pytest.approx(48_000 * 0.20 + 2_000 * 0.40)
        assert b.tax_credits == 5900

    def test_high_income(self, rates):
        b = calculate_tax(TaxScenario(500_000), rates)

        assert b.net_tax > 100_000
        assert b.net_income < 500_000
        assert b.effective_tax_rate_pct > 30
        assert b.marginal_tax_rate_pct == 52.2  # 40% + 8% + 4.2%

    def test_low_income_credits_clamp_to_zero(self, rates):
        b = calculate_tax(TaxScenario(10_000), rates)

        assert b.gross_tax < b.tax_credits
        assert b.net_tax == 0
        assert b.net_income == 10_000

    def test_accepts_request_mapping(self, rates):
        b = calculate_tax({'annual_income': '30000', 'marital_status': 'single'}, rates)
        assert b.income_tax == 6000.00

    def test_defaults_to_current_table(self, single_30k):
        assert calculate_tax(single_30k).tax_year == 2025

    def test_other_year(self, single_30k):
        from tax_calculator import RATES_2024
        b = calculate_tax(single_30k, RATES_2024)

        assert b.tax_year == 2024
        assert b.prsi == 1200.00
        assert b.tax_credits == 3750.00

    def test_breakdown_is_frozen(self, rates, single_30k):
        b = calculate_tax(single_30k, rates)
        with pytest.raises(dataclasses.FrozenInstanceError):
            b.net_tax = 0


class TestBreakdownInvariants:

    @pytest.mark.parametrize("income", [0, 5_000, 12_012, 17_000, 44_000,
                                        70_044, 120_000, 10_000_000])
    @pytest.mark.parametrize("status,children,spouse", [
        (MaritalStatus.SINGLE, False, None),
        (MaritalStatus.SINGLE_PARENT, True, None),
        (MaritalStatus.MARRIED, False, 0),
        (MaritalStatus.MARRIED, False, 20_000),
    ])
    def test_composition_and_clamp(self, rates, income, status, children, spouse):
        b = calculate_tax(TaxScenario(income, status, children, spouse), rates)

        assert b.net_tax >= 0
        assert b.gross_tax == pytest.approx(b.income_tax + b.usc + b.prsi, abs=0.015)
        assert b.net_tax == pytest.approx(max(0, b.gross_tax - b.tax_credits), abs=0.015)
        assert b.net_income == pytest.approx(b.annual_income - b.net_tax, abs=0.015)

    def test_income_tax_monotonic_with_kink_at_band(self, rates):
        band = rates.band_thresholds['single']
        incomes = np.arange(0, 100_001, 500)
        taxes = [calc_income_tax(i, band, rates) for i in incomes]

        assert all(b >= a for a, b in zip(taxes, taxes[1:]))

        below = calc_income_tax(band, band, rates) - calc_income_tax(band - 1, band, rates)
        above = calc_income_tax(band + 1, band, rates) - calc_income_tax(band, band, rates)
        assert below == pytest.approx(rates.standard_rate)
        assert above == pytest.approx(rates.higher_rate)

    def test_threshold_is_all_standard_rate(self, rates):
        b = calculate_tax(TaxScenario(44_000), rates)
        assert b.income_tax == pytest.approx(8_800.00)

    def test_effective_rate_uses_unrounded_tax(self, rates):
        b = calculate_tax(TaxScenario(33_333), rates)
        assert b.effective_tax_rate_pct == pytest.approx(b.net_tax / 33_333 * 100, abs=0.01)


class TestStandardRateBand:

    def test_single(self, rates):
        assert standard_rate_band(MaritalStatus.SINGLE, None, rates) == 44_000

    def test_single_parent(self, rates):
        assert standard_rate_band(MaritalStatus.SINGLE_PARENT, None, rates) == 48_000

    @pytest.mark.parametrize("spouse", [None, 0, -5])
    def test_married_one_income(self, rates, spouse):
        assert standard_rate_band(MaritalStatus.MARRIED, spouse, rates) == 53_000

    @pytest.mark.parametrize("spouse", [1, 10_000, 34_999, 35_000, 35_001, 90_000])
    def test_married_two_incomes(self, rates, spouse):
        expected = 53_000 + min(35_000, spouse)
        assert standard_rate_band(MaritalStatus.MARRIED, spouse, rates) == expected

    def test_accepts_string_status(self, rates):
        assert standard_rate_band('single_parent', None, rates) == 48_000

    def test_unknown_status_is_rejected(self, rates):
        with pytest.raises(InvalidInputError) as exc:
            standard_rate_band('widowed', None, rates)
        assert exc.value.field == 'marital_status'


class TestUSC:

    @pytest.mark.parametrize("income", [0, 1, 12_011, 12_012, 12_013, 27_382,
                                        27_383, 50_000, 70_044, 70_045, 250_000])
    def test_piecewise_matches_closed_form(self, rates, income):
        closed = calc_usc_vectorised([income], rates.usc_brackets)[0]
        assert calc_usc(income, rates.usc_brackets) == pytest.approx(closed)

    def test_vectorised_over_array(self, rates):
        incomes = np.array([0, 12_012, 27_382, 70_044, 100_000])
        usc = calc_usc_vectorised(incomes, rates.usc_brackets)

        assert usc.shape == incomes.shape
        assert usc[1] == pytest.approx(60.06)
        assert usc[2] == pytest.approx(60.06 + 307.40)
        assert usc[3] == pytest.approx(60.06 + 307.40 + 1279.86)
        assert usc[4] == pytest.approx(60.06 + 307.40 + 1279.86 + 29_956 * 0.08)

    def test_zero_income(self, rates):
        assert calc_usc(0, rates.usc_brackets) == 0

    def test_single_open_bracket(self):
        assert calc_usc(1_000, (USCBracket(None, 0.1),)) == pytest.approx(100)


class TestPRSIAndCredits:

    def test_prsi_has_no_cap(self, rates):
        assert calc_prsi(1_000_000, rates) == pytest.approx(42_000)

    def test_prsi_has_no_exemption(self, rates):
        assert calc_prsi(100, rates) == pytest.approx(4.2)

    def test_married_ignores_children(self, rates):
        assert calc_tax_credits(MaritalStatus.MARRIED, True, rates) == 6000

    def test_single(self, rates):
        assert calc_tax_credits(MaritalStatus.SINGLE, False, rates) == 4000


class TestMarginalRate:

    def test_standard_band(self, rates):
        assert marginal_tax_rate(30_000, 44_000, rates) == 27.2

    def test_at_threshold_is_higher_rate(self, rates):
        assert marginal_tax_rate(44_000, 44_000, rates) == 47.2

    def test_usc_boundary_stays_in_lower_bracket(self, rates):
        assert marginal_tax_rate(12_012, 44_000, rates) == 24.7   # 20 + 0.5 + 4.2
        assert marginal_tax_rate(12_013, 44_000, rates) == 26.2   # 20 + 2 + 4.2
        assert marginal_tax_rate(70_044, 44_000, rates) == 47.2
        assert marginal_tax_rate(70_045, 44_000, rates) == 52.2

    def test_zero_income_has_no_usc_component(self, rates):
        assert marginal_tax_rate(0, 44_000, rates) == 24.2


class TestScenarioValidation:

    def test_string_status_is_coerced(self):
        assert TaxScenario(1, 'married', spouse_income=0).marital_status is MaritalStatus.MARRIED

    def test_unknown_status(self):
        with pytest.raises(InvalidInputError) as exc:
            TaxScenario(30_000, 'divorced')
        assert exc.value.field == 'marital_status'

    @pytest.mark.parametrize("income", [-1, MAX_INCOME + 1, float('nan'),
                                        float('inf'), 'abc', None, True])
    def test_bad_income(self, income):
        with pytest.raises(InvalidInputError) as exc:
            TaxScenario(income)
        assert exc.value.field == 'annual_income'

    def test_income_at_cap_is_allowed(self):
        assert TaxScenario(MAX_INCOME).annual_income == MAX_INCOME

    def test_married_requires_spouse_income(self):
        with pytest.raises(InvalidInputError, match="Spouse income is required"):
            TaxScenario(60_000, MaritalStatus.MARRIED)

    def test_negative_spouse_income(self):
        with pytest.raises(InvalidInputError) as exc:
            TaxScenario(60_000, MaritalStatus.MARRIED, spouse_income=-1)
        assert exc.value.field == 'spouse_income'

    def test_single_parent_requires_children(self):
        with pytest.raises(InvalidInputError) as exc:
            TaxScenario(30_000, MaritalStatus.SINGLE_PARENT)
        assert exc.value.field == 'has_children'

    def test_spouse_income_dropped_when_not_married(self):
        assert TaxScenario(30_000, spouse_income=20_000).spouse_income is None

    def test_label_length(self):
        with pytest.raises(InvalidInputError):
            TaxScenario(30_000, label='x' * 51)

    def test_from_dict(self):
        s = TaxScenario.from_dict({
            'annual_income': 45000,
            'marital_status': 'married',
            'spouse_income': '12000',
            'label': 'Us',
        })
        assert s.annual_income == 45_000.0
        assert s.spouse_income == 12_000.0
        assert s.has_children is False
        assert s.label == 'Us'

    def test_from_dict_empty_spouse_income_is_missing(self):
        with pytest.raises(InvalidInputError, match="Spouse income is required"):
            TaxScenario.from_dict({'annual_income': 1, 'marital_status': 'married',
                                   'spouse_income': ''})

    @pytest.mark.parametrize("payload,field", [
        ({'marital_status': 'single'}, 'annual_income'),
        ({'annual_income': 1}, 'marital_status'),
        ({'annual_income': 'lots', 'marital_status': 'single'}, 'annual_income'),
    ])
    def test_from_dict_errors(self, payload, field):
        with pytest.raises(InvalidInputError) as exc:
            TaxScenario.from_dict(payload)
        assert exc.value.field == field

    @pytest.mark.parametrize("flag", ['false', '0', 'no', 'off', 'False', 0, False, None, ''])
    def test_from_dict_false_flags(self, rates, flag):
        s = TaxScenario.from_dict({'annual_income': 40_000, 'marital_status': 'single',
                                   'has_children': flag})

        assert s.has_children is False
        assert calculate_tax(s, rates).tax_credits == 4000

    @pytest.mark.parametrize("flag", ['true', '1', 'yes', 'on', 'TRUE', 1, True])
    def test_from_dict_true_flags(self, rates, flag):
        s = TaxScenario.from_dict({'annual_income': 40_000, 'marital_status': 'single',
                                   'has_children': flag})

        assert s.has_children is True
        assert calculate_tax(s, rates).tax_credits == 5900

    @pytest.mark.parametrize("flag", ['maybe', 2, 1.5, [1]])
    def test_from_dict_bad_flag(self, flag):
        with pytest.raises(InvalidInputError, match="Has children must be true or false") as exc:
            TaxScenario.from_dict({'annual_income': 1, 'marital_status': 'single',
                                   'has_children': flag})
        assert exc.value.field == 'has_children'

    def test_from_dict_single_parent_false_string(self):
        with pytest.raises(InvalidInputError) as exc:
            TaxScenario.from_dict({'annual_income': 1, 'marital_status': 'single_parent',
                                   'has_children': 'false'})
        assert exc.value.field == 'has_children'

    @pytest.mark.parametrize("label", [5, ['a'], 1.0])
    def test_non_text_label(self, label):
        with pytest.raises(InvalidInputError) as exc:
            TaxScenario.from_dict({'annual_income': 1, 'marital_status': 'single',
                                   'label': label})
        assert exc.value.field == 'label'

    def test_invalid_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            TaxScenario(-1)


class TestSerialisation:

    def test_to_dict_shape(self, rates, single_30k):
        d = calculate_tax(single_30k, rates).to_dict()

        assert d['annual_income'] == 30_000
        assert d['marital_status'] == 'single'
        assert d['has_children'] is False
        assert d['spouse_income'] is None
        assert set(d['breakdown']) == {'income_tax', 'usc', 'prsi', 'gross_tax',
                                       'tax_credits', 'net_tax'}
        assert d['marginal_tax_rate'] == 27.2
        assert d['tax_year'] == 2025

    def test_custom_table_flows_through(self, rate_table_kwargs):
        table = RateTable(**rate_table_kwargs)
        b = calculate_tax(TaxScenario(60_000), table)

        assert isinstance(b, TaxBreakdown)
        assert b.income_tax == pytest.approx(40_000 * 0.20 + 20_000 * 0.40)
        assert b.usc == pytest.approx(10_000 * 0.01 + 40_000 * 0.05 + 10_000 * 0.10)
        assert b.prsi == pytest.approx(3_000)
        assert b.tax_year == 2099
