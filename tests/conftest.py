"""
Pytest fixtures for tax calculator tests.
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tax_calculator import (
    RATES_2025, MaritalStatus, TaxScenario, TaxCalculator, USCBracket,
)


# =============================================================================
# RATE TABLE FIXTURES
# =============================================================================

@pytest.fixture
def rates():
    """2025 rate table."""
    return RATES_2025


@pytest.fixture
def rate_table_kwargs():
    """Constructor arguments for a valid table, for building variants."""
    return dict(
        year=2099,
        standard_rate=0.20,
        higher_rate=0.40,
        band_thresholds={
            'single': 40_000,
            'single_parent': 44_000,
            'married_one_income': 49_000,
            'married_two_incomes_base': 49_000,
            'married_two_incomes_max_increase': 31_000,
        },
        usc_brackets=(
            USCBracket(10_000, 0.01),
            USCBracket(50_000, 0.05),
            USCBracket(None, 0.10),
        ),
        flat_insurance_rate=0.05,
        credits={
            'single_person': 1_000,
            'married_person': 2_000,
            'employee_paye': 1_000,
            'single_parent_child_carer': 500,
        },
    )


# =============================================================================
# SCENARIO FIXTURES
# =============================================================================

@pytest.fixture
def single_30k():
    return TaxScenario(30_000, MaritalStatus.SINGLE)


@pytest.fixture
def single_60k():
    return TaxScenario(60_000, MaritalStatus.SINGLE)


@pytest.fixture
def married_one_income():
    return TaxScenario(60_000, MaritalStatus.MARRIED, spouse_income=0)


@pytest.fixture
def calculator(rates):
    return TaxCalculator(rates)
