"""Statutory deductions (withholding tax, SSS, PhilHealth, Pag-IBIG)."""

from functools import lru_cache

from nightpay.core.constants import SEMI_MONTHLY_PERIODS_PER_YEAR
from nightpay.core.models import CompensationConfig


def annual_withholding_tax(config: CompensationConfig) -> float:
    """Tax rate on the part of the annual salary above the exempt threshold."""
    annual_salary = config.monthly_salary * 12
    return max(annual_salary - config.withholding_tax_threshold, 0.0) * config.withholding_tax_rate


def social_insurance_contribution(config: CompensationConfig) -> float:
    """Monthly SSS contribution."""
    return config.monthly_salary * config.social_insurance_rate


def health_insurance_contribution(config: CompensationConfig) -> float:
    """Monthly PhilHealth contribution, floored and capped."""
    raw = config.monthly_salary * config.health_insurance_rate
    return min(max(raw, config.health_insurance_floor), config.health_insurance_cap)


def housing_fund_contribution(config: CompensationConfig) -> float:
    """Monthly Pag-IBIG contribution, capped."""
    return min(config.monthly_salary * config.housing_fund_rate, config.housing_fund_cap)


@lru_cache(maxsize=8)
def deduction_breakdown(config: CompensationConfig) -> dict[str, float]:
    """
    Itemized deductions for one semi-monthly period.

    The withholding tax is the annual figure spread over 24 semi-monthly
    periods, while the contributions are monthly amounts halved.

    Returns:
        Dict with monthly contributions, per-period shares and the period total
    """
    tax_share = annual_withholding_tax(config) / SEMI_MONTHLY_PERIODS_PER_YEAR
    sss = social_insurance_contribution(config)
    philhealth = health_insurance_contribution(config)
    pagibig = housing_fund_contribution(config)

    return {
        "annual_withholding_tax": annual_withholding_tax(config),
        "monthly_sss": sss,
        "monthly_philhealth": philhealth,
        "monthly_pagibig": pagibig,
        "withholding_tax": tax_share,
        "sss": sss / 2,
        "philhealth": philhealth / 2,
        "pagibig": pagibig / 2,
        "total": tax_share + (sss + philhealth + pagibig) / 2,
    }


def semi_monthly_deductions(config: CompensationConfig) -> float:
    """Total statutory deductions subtracted from every period."""
    return deduction_breakdown(config)["total"]
