#!/usr/bin/env python3
"""
Irish Income Tax Calculator
===========================
Personal income tax, USC and PRSI for a single PAYE earner.

Based on:
- Revenue income tax rates and bands (2024, 2025)
- USC standard rates and thresholds (2024, 2025)
- PRSI Class A1 employee rate

Components:
  1. RateTable: one year's rates, bands and credits (immutable)
  2. Engine: annual breakdown for one scenario
  3. Marginal analysis: band-based rate vs. tax on the next €1,000
  4. Monthly projection of an annual breakdown
  5. Scenario comparison (up to five scenarios)

Run directly for worked examples:
    python tax_calculator.py
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


# ============================================================
# ERRORS
# ============================================================

class TaxCalculatorError(ValueError):
    """Base class for calculator errors."""


class InvalidInputError(TaxCalculatorError):
    """A scenario failed validation. `field` names the offending input."""

    def __init__(self, field, message):
        super().__init__(message)
        self.field = field


class AmbiguousConfigurationError(TaxCalculatorError):
    """A rate table is malformed or missing."""


# ============================================================
# RATE TABLES
# ============================================================

BAND_KEYS = (
    'single',
    'single_parent',
    'married_one_income',
    'married_two_incomes_base',
    'married_two_incomes_max_increase',
)

CREDIT_KEYS = (
    'single_person',
    'married_person',
    'employee_paye',
    'single_parent_child_carer',
)


@dataclass(frozen=True)
class USCBracket:
    """One USC band. `upper_limit` is None for the balance band."""
    upper_limit: Optional[float]
    rate: float


@dataclass(frozen=True)
class RateTable:
    """
    Income tax, USC, PRSI and credit parameters for one tax year.

    Validated on construction; band and credit mappings are stored as
    read-only views so a table can be shared freely between callers.
    """
    year: int
    standard_rate: float
    higher_rate: float
    band_thresholds: Mapping[str, float]
    usc_brackets: Tuple[USCBracket, ...]
    flat_insurance_rate: float
    credits: Mapping[str, float]

    def __post_init__(self):
        brackets = tuple(self.usc_brackets)
        if not brackets:
            raise AmbiguousConfigurationError(
                f"{self.year}: USC table has no brackets")
        if brackets[-1].upper_limit is not None:
            raise AmbiguousConfigurationError(
                f"{self.year}: last USC bracket must have no upper limit")

        limits = [b.upper_limit for b in brackets[:-1]]
        if any(limit is None for limit in limits):
            raise AmbiguousConfigurationError(
                f"{self.year}: only the last USC bracket may have no upper limit")
        if limits and limits[0] <= 0:
            raise AmbiguousConfigurationError(
                f"{self.year}: USC bracket limits must be positive")
        if any(upper <= lower for lower, upper in zip(limits, limits[1:])):
            raise AmbiguousConfigurationError(
                f"{self.year}: USC bracket limits must be strictly ascending: {limits}")

        missing = [k for k in BAND_KEYS if k not in self.band_thresholds]
        if missing:
            raise AmbiguousConfigurationError(
                f"{self.year}: missing band thresholds: {missing}")
        missing = [k for k in CREDIT_KEYS if k not in self.credits]
        if missing:
            raise AmbiguousConfigurationError(
                f"{self.year}: missing tax credits: {missing}")

        rates = [self.standard_rate, self.higher_rate, self.flat_insurance_rate]
        rates += [b.rate for b in brackets]
        if any(r < 0 for r in rates):
            raise AmbiguousConfigurationError(f"{self.year}: rates cannot be negative")

        object.__setattr__(self, 'usc_brackets', brackets)
        object.__setattr__(self, 'band_thresholds',
                           MappingProxyType(dict(self.band_thresholds)))
        object.__setattr__(self, 'credits', MappingProxyType(dict(self.credits)))

    def as_dict(self):
        """Nested reference view of the table (rates, bands, USC, PRSI, credits)."""
        return {
            'income_tax': {
                'rates': {
                    'standard_rate': self.standard_rate,
                    'higher_rate': self.higher_rate,
                },
                'bands': dict(self.band_thresholds),
            },
            'usc': {
                'bands': [{'limit': b.upper_limit, 'rate': b.rate}
                          for b in self.usc_brackets],
            },
            'prsi': {'rate': self.flat_insurance_rate},
            'tax_credits': dict(self.credits),
            'year': self.year,
        }


# 2024 parameters
RATES_2024 = RateTable(
    year=2024,
    standard_rate=0.20,
    higher_rate=0.40,
    band_thresholds={
        'single': 42_000,
        'single_parent': 46_000,
        'married_one_income': 51_000,
        'married_two_incomes_base': 51_000,
        'married_two_incomes_max_increase': 33_000,
    },
    usc_brackets=(
        USCBracket(12_012, 0.005),
        USCBracket(25_760, 0.02),
        USCBracket(70_044, 0.04),
        USCBracket(None, 0.08),
    ),
    flat_insurance_rate=0.04,
    credits={
        'single_person': 1_875,
        'married_person': 3_750,
        'employee_paye': 1_875,
        'single_parent_child_carer': 1_750,
    },
)

# 2025 parameters (current)
RATES_2025 = RateTable(
    year=2025,
    standard_rate=0.20,
    higher_rate=0.40,
    band_thresholds={
        'single': 44_000,
        'single_parent': 48_000,
        'married_one_income': 53_000,
        'married_two_incomes_base': 53_000,
        'married_two_incomes_max_increase': 35_000,
    },
    usc_brackets=(
        USCBracket(12_012, 0.005),      # first €12,012
        USCBracket(27_382, 0.02),       # next €15,370
        USCBracket(70_044, 0.03),       # next €42,662
        USCBracket(None, 0.08),         # balance
    ),
    flat_insurance_rate=0.042,          # Class A1
    credits={
        'single_person': 2_000,
        'married_person': 4_000,
        'employee_paye': 2_000,
        'single_parent_child_carer': 1_900,
    },
)

RATE_TABLES = {table.year: table for table in (RATES_2024, RATES_2025)}
CURRENT_TAX_YEAR = 2025


def get_rate_table(year=None):
    """Return the rate table for `year` (current year by default)."""
    if year is None:
        year = CURRENT_TAX_YEAR
    try:
        return RATE_TABLES[year]
    except KeyError:
        raise AmbiguousConfigurationError(
            f"No rate table for tax year {year}. Options: {sorted(RATE_TABLES)}") from None


def rate_table_from_dict(data):
    """
    Build a RateTable from the structure produced by RateTable.as_dict().

    Raises AmbiguousConfigurationError if keys are missing or values are
    not numeric.
    """
    try:
        income_tax = data['income_tax']
        brackets = tuple(
            USCBracket(None if b['limit'] is None else float(b['limit']), float(b['rate']))
            for b in data['usc']['bands']
        )
        params = dict(
            year=int(data['year']),
            standard_rate=float(income_tax['rates']['standard_rate']),
            higher_rate=float(income_tax['rates']['higher_rate']),
            band_thresholds={k: float(v) for k, v in income_tax['bands'].items()},
            usc_brackets=brackets,
            flat_insurance_rate=float(data['prsi']['rate']),
            credits={k: float(v) for k, v in data['tax_credits'].items()},
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise AmbiguousConfigurationError(f"Malformed rate table: {e!r}") from e

    table = RateTable(**params)
    logger.info(f"Loaded rate table for tax year {table.year}")
    return table


# ============================================================
# SCENARIOS
# ============================================================

MAX_INCOME = 10_000_000
MAX_LABEL_LENGTH = 50


class MaritalStatus(str, Enum):
    SINGLE = 'single'
    MARRIED = 'married'
    SINGLE_PARENT = 'single_parent'


def _marital_status(value):
    try:
        return MaritalStatus(value)
    except ValueError:
        options = ', '.join(s.value for s in MaritalStatus)
        raise InvalidInputError(
            'marital_status',
            f"Marital status must be one of: {options} (got {value!r}).") from None


def _check_amount(field, description, value):
    """Validate a euro amount in [0, MAX_INCOME] and return it as float."""
    if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
        raise InvalidInputError(field, f"{description} must be a valid number.")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidInputError(field, f"{description} must be a valid number.")
    if value < 0:
        raise InvalidInputError(field, f"{description} cannot be negative.")
    if value > MAX_INCOME:
        raise InvalidInputError(field, f"{description} cannot exceed €{MAX_INCOME:,}.")
    return value


def _to_number(field, description, value):
    if isinstance(value, bool):
        raise InvalidInputError(field, f"{description} must be a valid number.")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(field, f"{description} must be a valid number.") from None


_TRUE_VALUES = ('1', 'true', 'on', 'yes')
_FALSE_VALUES = ('0', 'false', 'off', 'no', '')


def _to_bool(field, description, value):
    """Parse a request-style flag: bools, 1/0 and true/false, on/off, yes/no."""
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
    raise InvalidInputError(field, f"{description} must be true or false.")


@dataclass(frozen=True)
class TaxScenario:
    """
    One set of personal circumstances to calculate tax for.

    Validated on construction: income in [0, MAX_INCOME], a known marital
    status, spouse income when married and children when a single parent.
    """
    annual_income: float
    marital_status: MaritalStatus = MaritalStatus.SINGLE
    has_children: bool = False
    spouse_income: Optional[float] = None
    label: Optional[str] = None

    def __post_init__(self):
        status = _marital_status(self.marital_status)
        income = _check_amount('annual_income', 'Annual income', self.annual_income)

        spouse_income = self.spouse_income
        if status is MaritalStatus.MARRIED:
            if spouse_income is None:
                raise InvalidInputError(
                    'spouse_income',
                    'Spouse income is required when marital status is married.')
            spouse_income = _check_amount('spouse_income', 'Spouse income', spouse_income)
        elif spouse_income is not None:
            logger.debug(f"Ignoring spouse income for {status.value} scenario")
            spouse_income = None

        if status is MaritalStatus.SINGLE_PARENT and not self.has_children:
            raise InvalidInputError(
                'has_children', 'Single parent status requires having children.')

        if self.label is not None and not isinstance(self.label, str):
            raise InvalidInputError('label', 'Label must be text.')
        if self.label is not None and len(self.label) > MAX_LABEL_LENGTH:
            raise InvalidInputError(
                'label', f"Label cannot exceed {MAX_LABEL_LENGTH} characters.")

        object.__setattr__(self, 'marital_status', status)
        object.__setattr__(self, 'annual_income', income)
        object.__setattr__(self, 'has_children', bool(self.has_children))
        object.__setattr__(self, 'spouse_income', spouse_income)

    @classmethod
    def from_dict(cls, payload):
        """Build a scenario from a request-style mapping."""
        if payload.get('annual_income') is None:
            raise InvalidInputError('annual_income', 'Annual income is required.')
        if payload.get('marital_status') is None:
            raise InvalidInputError('marital_status', 'Marital status is required.')

        spouse_income = payload.get('spouse_income')
        if spouse_income == '':
            spouse_income = None
        if spouse_income is not None:
            spouse_income = _to_number('spouse_income', 'Spouse income', spouse_income)

        return cls(
            annual_income=_to_number('annual_income', 'Annual income',
                                     payload['annual_income']),
            marital_status=payload['marital_status'],
            has_children=_to_bool('has_children', 'Has children',
                                  payload.get('has_children')),
            spouse_income=spouse_income,
            label=payload.get('label'),
        )


def _as_scenario(scenario):
    if isinstance(scenario, TaxScenario):
        return scenario
    return TaxScenario.from_dict(scenario)


# ============================================================
# TAX ENGINE
# ============================================================

MONETARY_FIELDS = ('income_tax', 'usc', 'prsi', 'gross_tax', 'tax_credits', 'net_tax')


@dataclass(frozen=True)
class TaxBreakdown:
    """Annual tax breakdown. Monetary fields are rounded to cents."""
    annual_income: float
    marital_status: MaritalStatus
    has_children: bool
    spouse_income: Optional[float]
    income_tax: float
    usc: float
    prsi: float
    gross_tax: float
    tax_credits: float
    net_tax: float
    net_income: float
    effective_tax_rate_pct: float
    marginal_tax_rate_pct: float
    tax_year: int

    def to_dict(self):
        return {
            'annual_income': self.annual_income,
            'marital_status': self.marital_status.value,
            'has_children': self.has_children,
            'spouse_income': self.spouse_income,
            'breakdown': {name: getattr(self, name) for name in MONETARY_FIELDS},
            'net_income': self.net_income,
            'effective_tax_rate': self.effective_tax_rate_pct,
            'marginal_tax_rate': self.marginal_tax_rate_pct,
            'tax_year': self.tax_year,
        }


def standard_rate_band(marital_status, spouse_income, rates):
    """
    Standard rate band for a marital status.

    Two-income married couples get the base band plus the lower of the
    spouse's income and the maximum increase.
    """
    bands = rates.band_thresholds
    status = _marital_status(marital_status)

    if status is MaritalStatus.SINGLE:
        return bands['single']
    if status is MaritalStatus.SINGLE_PARENT:
        return bands['single_parent']
    if spouse_income is None or spouse_income <= 0:
        return bands['married_one_income']
    increase = min(bands['married_two_incomes_max_increase'], spouse_income)
    return bands['married_two_incomes_base'] + increase


def calc_income_tax(income, band, rates):
    """Income tax: standard rate up to `band`, higher rate on the balance."""
    standard_amount = min(income, band)
    higher_amount = max(0.0, income - band)
    return standard_amount * rates.standard_rate + higher_amount * rates.higher_rate


def calc_usc(income, brackets):
    """USC by walking the brackets in order."""
    usc = 0.0
    previous_limit = 0.0

    for bracket in brackets:
        if bracket.upper_limit is None:
            # Balance band
            if income > previous_limit:
                usc += (income - previous_limit) * bracket.rate
            break

        taxable = max(0.0, min(income, bracket.upper_limit) - previous_limit)
        usc += taxable * bracket.rate
        previous_limit = bracket.upper_limit
        if income <= bracket.upper_limit:
            break

    return usc


def calc_usc_vectorised(incomes, brackets):
    """
    Vectorised USC for an array of incomes.

    Closed-form sum of each bracket's clipped slice; agrees with calc_usc.
    """
    incomes = np.asarray(incomes, dtype=float)
    usc = np.zeros_like(incomes)
    lower = 0.0

    for bracket in brackets:
        upper = np.inf if bracket.upper_limit is None else bracket.upper_limit
        usc += np.clip(incomes - lower, 0, upper - lower) * bracket.rate
        lower = upper

    return usc


def calc_prsi(income, rates):
    """PRSI on all income, no ceiling and no exemption."""
    return income * rates.flat_insurance_rate


def calc_tax_credits(marital_status, has_children, rates):
    credits = rates.credits
    if _marital_status(marital_status) is MaritalStatus.MARRIED:
        total = credits['married_person']
    else:
        total = credits['single_person']
        if has_children:
            total += credits['single_parent_child_carer']
    return total + credits['employee_paye']


def _usc_marginal_rate(income, brackets):
    # Income exactly on a limit belongs to the lower bracket
    previous_limit = 0.0
    for bracket in brackets:
        if bracket.upper_limit is None:
            return bracket.rate if income > previous_limit else 0.0
        if previous_limit < income <= bracket.upper_limit:
            return bracket.rate
        previous_limit = bracket.upper_limit
    return 0.0


def marginal_tax_rate(income, band, rates):
    """Combined income tax + USC + PRSI rate on the next euro, in percent."""
    it_rate = rates.higher_rate if income >= band else rates.standard_rate
    usc_rate = _usc_marginal_rate(income, rates.usc_brackets)
    return round((it_rate + usc_rate + rates.flat_insurance_rate) * 100, 2)


def _evaluate(scenario, rates, income):
    band = standard_rate_band(scenario.marital_status, scenario.spouse_income, rates)

    income_tax = calc_income_tax(income, band, rates)
    usc = calc_usc(income, rates.usc_brackets)
    prsi = calc_prsi(income, rates)
    tax_credits = calc_tax_credits(scenario.marital_status, scenario.has_children, rates)

    gross_tax = income_tax + usc + prsi
    net_tax = max(0.0, gross_tax - tax_credits)
    net_income = income - net_tax
    effective = round(net_tax / income * 100, 2) if income > 0 else 0.0

    return TaxBreakdown(
        annual_income=income,
        marital_status=scenario.marital_status,
        has_children=scenario.has_children,
        spouse_income=scenario.spouse_income,
        income_tax=round(income_tax, 2),
        usc=round(usc, 2),
        prsi=round(prsi, 2),
        gross_tax=round(gross_tax, 2),
        tax_credits=round(float(tax_credits), 2),
        net_tax=round(net_tax, 2),
        net_income=round(net_income, 2),
        effective_tax_rate_pct=effective,
        marginal_tax_rate_pct=marginal_tax_rate(income, band, rates),
        tax_year=rates.year,
    )


def calculate_tax(scenario, rates=None):
    """
    Calculate the annual tax breakdown for one scenario.

    scenario: TaxScenario, or a mapping accepted by TaxScenario.from_dict
    rates: RateTable (defaults to the current year's table)

    Returns: TaxBreakdown
    """
    scenario = _as_scenario(scenario)
    if rates is None:
        rates = get_rate_table()

    breakdown = _evaluate(scenario, rates, scenario.annual_income)
    logger.debug(
        f"{rates.year} {scenario.marital_status.value} €{scenario.annual_income:,.2f}: "
        f"net tax €{breakdown.net_tax:,.2f}")
    return breakdown


# ============================================================
# MARGINAL RATE ANALYSIS
# ============================================================

MARGINAL_STEP = 1000


@dataclass(frozen=True)
class MarginalRateAnalysis:
    annual_income: float
    marginal_tax_rate_pct: float
    effective_marginal_rate_pct: float
    tax_on_next_1000: float
    net_from_next_1000: float


def compute_effective_marginal(scenario, rates=None):
    """
    Band-based marginal rate alongside the tax actually paid on the next €1,000.

    The two differ when the extra €1,000 crosses a band or USC boundary.
    """
    scenario = _as_scenario(scenario)
    if rates is None:
        rates = get_rate_table()

    base = _evaluate(scenario, rates, scenario.annual_income)
    # Not re-validated: an income at MAX_INCOME can still be stepped up
    bumped = _evaluate(scenario, rates, scenario.annual_income + MARGINAL_STEP)

    tax_on_next = round(bumped.net_tax - base.net_tax, 2)
    return MarginalRateAnalysis(
        annual_income=scenario.annual_income,
        marginal_tax_rate_pct=base.marginal_tax_rate_pct,
        effective_marginal_rate_pct=round(tax_on_next / MARGINAL_STEP * 100, 2),
        tax_on_next_1000=tax_on_next,
        net_from_next_1000=round(MARGINAL_STEP - tax_on_next, 2),
    )


# ============================================================
# MONTHLY PROJECTION
# ============================================================

@dataclass(frozen=True)
class MonthlyBreakdown:
    monthly_gross_income: float
    monthly_net_income: float
    income_tax: float
    usc: float
    prsi: float
    gross_tax: float
    tax_credits: float
    net_tax: float

    def to_dict(self):
        return {
            'monthly_gross_income': self.monthly_gross_income,
            'monthly_breakdown': {name: getattr(self, name) for name in MONETARY_FIELDS},
            'monthly_net_income': self.monthly_net_income,
        }


def calculate_monthly_breakdown(breakdown):
    """Divide an annual breakdown by 12. No monthly re-calculation."""
    monthly = {name: round(getattr(breakdown, name) / 12, 2) for name in MONETARY_FIELDS}
    return MonthlyBreakdown(
        monthly_gross_income=round(breakdown.annual_income / 12, 2),
        monthly_net_income=round(breakdown.net_income / 12, 2),
        **monthly,
    )


# ============================================================
# SCENARIO COMPARISON
# ============================================================

MAX_SCENARIOS = 5


@dataclass(frozen=True)
class ScenarioResult:
    scenario_id: int
    label: str
    breakdown: TaxBreakdown


@dataclass(frozen=True)
class Extremum:
    label: str
    value: float


@dataclass(frozen=True)
class ComparisonResult:
    results: Tuple[ScenarioResult, ...]
    highest_income: Extremum
    highest_net_income: Extremum
    lowest_effective_rate: Extremum
    highest_effective_rate: Extremum

    def summary(self):
        return {
            name: {'label': ext.label, 'value': ext.value}
            for name, ext in (
                ('highest_income', self.highest_income),
                ('highest_net_income', self.highest_net_income),
                ('lowest_effective_rate', self.lowest_effective_rate),
                ('highest_effective_rate', self.highest_effective_rate),
            )
        }


def generate_comparison_summary(results):
    """
    Reduce scenario results to their extremes.

    Ties go to the earliest result: max() and min() keep the first
    element among equals. Returns None for an empty list.
    """
    results = tuple(results)
    if not results:
        return None

    def extremum(pick, attr):
        best = pick(results, key=lambda r: getattr(r.breakdown, attr))
        return Extremum(best.label, getattr(best.breakdown, attr))

    return ComparisonResult(
        results=results,
        highest_income=extremum(max, 'annual_income'),
        highest_net_income=extremum(max, 'net_income'),
        lowest_effective_rate=extremum(min, 'effective_tax_rate_pct'),
        highest_effective_rate=extremum(max, 'effective_tax_rate_pct'),
    )


def compare_scenarios(scenarios, rates=None, max_workers=None):
    """
    Calculate up to five scenarios and summarise them.

    scenarios: list of TaxScenario or request-style mappings
    Unlabelled scenarios are named "Scenario 1", "Scenario 2", ...

    Returns: ComparisonResult, or None for an empty list
    """
    scenarios = [_as_scenario(s) for s in scenarios]
    if len(scenarios) > MAX_SCENARIOS:
        raise InvalidInputError(
            'scenarios', f"At most {MAX_SCENARIOS} scenarios can be compared.")
    if not scenarios:
        return None
    if rates is None:
        rates = get_rate_table()

    # map() yields in input order regardless of completion order
    with ThreadPoolExecutor(max_workers=max_workers or len(scenarios)) as executor:
        breakdowns = list(executor.map(lambda s: calculate_tax(s, rates), scenarios))

    results = [
        ScenarioResult(
            scenario_id=i + 1,
            label=s.label or f"Scenario {i + 1}",
            breakdown=b,
        )
        for i, (s, b) in enumerate(zip(scenarios, breakdowns))
    ]
    return generate_comparison_summary(results)


# ============================================================
# CALCULATOR INTERFACE
# ============================================================

class TaxCalculator:
    """
    All calculations bound to one rate table.

    Swap tax years by constructing with another table:
        TaxCalculator(get_rate_table(2024))
    """

    def __init__(self, rates=None):
        self.rates = rates if rates is not None else get_rate_table()

    def calculate_tax(self, scenario):
        return calculate_tax(scenario, self.rates)

    def calculate_monthly_breakdown(self, breakdown):
        return calculate_monthly_breakdown(breakdown)

    def marginal_rate(self, scenario):
        return compute_effective_marginal(scenario, self.rates)

    def compare_scenarios(self, scenarios, max_workers=None):
        return compare_scenarios(scenarios, self.rates, max_workers)

    def generate_comparison_summary(self, results):
        return generate_comparison_summary(results)

    def tax_rates_and_bands(self):
        return self.rates.as_dict()


# ============================================================
# TABLES & REPORTING
# ============================================================

_COMPONENT_LABELS = [
    ('Income Tax', 'income_tax'),
    ('USC', 'usc'),
    ('PRSI', 'prsi'),
    ('Gross Tax', 'gross_tax'),
    ('Tax Credits', 'tax_credits'),
    ('Net Tax', 'net_tax'),
]


def breakdown_frame(breakdown, monthly=None):
    """Components of a breakdown as a DataFrame (Annual, and Monthly if given)."""
    rows = [{'Item': 'Gross Income', 'Annual': breakdown.annual_income}]
    rows += [{'Item': label, 'Annual': getattr(breakdown, key)}
             for label, key in _COMPONENT_LABELS]
    rows.append({'Item': 'Net Income', 'Annual': breakdown.net_income})

    df = pd.DataFrame(rows)
    if monthly is not None:
        df['Monthly'] = ([monthly.monthly_gross_income]
                         + [getattr(monthly, key) for _, key in _COMPONENT_LABELS]
                         + [monthly.monthly_net_income])
    return df


def comparison_frame(result):
    """One row per compared scenario."""
    rows = []
    for r in result.results:
        b = r.breakdown
        rows.append({
            'Scenario': r.label,
            'Status': b.marital_status.value,
            'Income': b.annual_income,
            'Net Tax': b.net_tax,
            'Net Income': b.net_income,
            'Effective Rate (%)': b.effective_tax_rate_pct,
            'Marginal Rate (%)': b.marginal_tax_rate_pct,
        })
    return pd.DataFrame(rows)


def income_sweep(marital_status, incomes=None, has_children=False,
                 spouse_income=None, rates=None):
    """
    Net tax, effective and marginal rates across a grid of incomes.

    Default grid: €10,000 to €200,000 in €5,000 steps.
    """
    if incomes is None:
        incomes = np.arange(10_000, 200_001, 5_000)
    if rates is None:
        rates = get_rate_table()

    status = _marital_status(marital_status)
    if status is MaritalStatus.MARRIED and spouse_income is None:
        spouse_income = 0.0

    base = TaxScenario(0.0, status, has_children, spouse_income)
    rows = []
    for income in np.asarray(incomes, dtype=float):
        b = calculate_tax(replace(base, annual_income=float(income)), rates)
        rows.append({
            'income': b.annual_income,
            'income_tax': b.income_tax,
            'usc': b.usc,
            'prsi': b.prsi,
            'net_tax': b.net_tax,
            'net_income': b.net_income,
            'effective_rate': b.effective_tax_rate_pct,
            'marginal_rate': b.marginal_tax_rate_pct,
        })
    return pd.DataFrame(rows)


def print_breakdown(breakdown, monthly=None):
    """Pretty-print a breakdown as a payslip."""
    if monthly is None:
        monthly = calculate_monthly_breakdown(breakdown)

    print()
    print("=" * 72)
    print(f"  {'ITEM':<42} {'ANNUAL':>12} {'MONTHLY':>12}")
    print("=" * 72)
    df = breakdown_frame(breakdown, monthly)
    for row in df.itertuples(index=False):
        print(f"  {row.Item:<42} €{row.Annual:>11,.2f} €{row.Monthly:>11,.2f}")
    print("-" * 72)
    print(f"  {'Effective rate':<42} {breakdown.effective_tax_rate_pct:>11.2f}%")
    print(f"  {'Marginal rate':<42} {breakdown.marginal_tax_rate_pct:>11.2f}%")
    print("=" * 72)


# ============================================================
# MAIN
# ============================================================

if __name__ == '__main__':
    rates = get_rate_table()

    # ----------------------------------------------------------
    # EXAMPLE 1: Single PAYE earners
    # ----------------------------------------------------------
    for income in (30_000, 60_000):
        print(f"\n  EXAMPLE: Single, €{income:,} ({rates.year})")
        print_breakdown(calculate_tax(TaxScenario(income, MaritalStatus.SINGLE), rates))

    # ----------------------------------------------------------
    # EXAMPLE 2: Married, one vs two incomes
    # ----------------------------------------------------------
    for spouse in (0, 25_000):
        print(f"\n  EXAMPLE: Married, €60,000, spouse earns €{spouse:,}")
        print_breakdown(calculate_tax(
            TaxScenario(60_000, MaritalStatus.MARRIED, spouse_income=spouse), rates))

    # ----------------------------------------------------------
    # EXAMPLE 3: Marginal rate around the standard rate band
    # ----------------------------------------------------------
    print("\n" + "=" * 72)
    print("  MARGINAL RATES: Single")
    print("=" * 72)
    print(f"  {'Income':<15} {'Band rate':>12} {'Next €1,000':>14} {'Tax on it':>12}")
    print("-" * 72)
    for income in (20_000, 43_500, 44_000, 69_500, 100_000):
        m = compute_effective_marginal(TaxScenario(income), rates)
        print(f"  €{income:<14,} {m.marginal_tax_rate_pct:>11.2f}% "
              f"{m.effective_marginal_rate_pct:>13.2f}% €{m.tax_on_next_1000:>10,.2f}")

    # ----------------------------------------------------------
    # EXAMPLE 4: Scenario comparison
    # ----------------------------------------------------------
    comparison = compare_scenarios([
        TaxScenario(30_000, label='Single €30k'),
        TaxScenario(60_000, label='Single €60k'),
        TaxScenario(60_000, MaritalStatus.MARRIED, spouse_income=0, label='Married €60k'),
        TaxScenario(45_000, MaritalStatus.SINGLE_PARENT, has_children=True,
                    label='Single parent €45k'),
    ], rates)
    print()
    print(comparison_frame(comparison).to_string(index=False))
    print()
    for name, ext in comparison.summary().items():
        print(f"  {name:<25} {ext['label']:<20} {ext['value']:>12,.2f}")
    print()
