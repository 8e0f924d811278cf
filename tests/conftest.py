"""Shared draft documents for the pipeline tests."""

from __future__ import annotations

import pytest

INTRO = (
    "Eco bags have moved from niche accessory to everyday essential. "
    "Shoppers want something sturdy, washable and kind to the planet, and "
    "retailers want packaging that reflects their values. This guide explains "
    "what eco bags are, why they matter, which materials hold up best, and how "
    "to pick one that fits the way you actually shop every week of the year."
)

FULL_DOCUMENT = f"""\
Primary Keyword: eco bags
Secondary Keywords: reusable bags, tote bags
H1: Best Eco Bags for Everyday Shopping
Featured Image: featured.jpg
Meta Description: A short guide to choosing eco bags.

## Introduction
{INTRO}

## What Is
Eco bags are reusable carriers made from natural or recycled fibres.
[image: what-is-diagram]

## Benefits
- **Durable**: They last for hundreds of trips.
- Less waste - Fewer plastic bags end up in landfills.

## Types
- Cotton totes: Soft and washable.
- Jute bags: Sturdy and biodegradable.

## How It Works
1. Pick a bag: Choose the right size.
2. Carry it: Keep it in your car.

## Use Cases
- Groceries: Weekly shopping runs.

## Brand Promotion
Brand Name: GreenCarry
- Made from organic cotton
CTA: Shop the collection today.

## FAQs
Q: Are eco bags washable?
A: Most cotton and jute bags can be hand washed.

## Conclusion
Eco bags are a simple switch with lasting impact.
CTA: Start with one bag this week.
"""


def minimal_document(keyword: str = "eco bags") -> str:
    intro = " ".join(INTRO.split()[:50])
    return (
        f"Primary Keyword: {keyword}\n"
        "H1: Best Eco Bags\n"
        "Featured Image: hero.jpg\n"
        "\n"
        "## Introduction\n"
        f"{intro}\n"
    )


@pytest.fixture
def full_document() -> str:
    return FULL_DOCUMENT


@pytest.fixture
def minimal() -> str:
    return minimal_document()


@pytest.fixture
def make_minimal():
    return minimal_document


@pytest.fixture
def intro() -> str:
    return INTRO
