# -*- coding: utf-8 -*-
"""
seed

Sample catalogue data for local development.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from decimal import Decimal

from tortoise.transactions import in_transaction

from .models import Bank, Brand, Card, CardType, Category, CategoryType

logger = logging.getLogger(__name__)

CATEGORIES = (
    {
        "name": "Supermarkets",
        "description": "Discounts at supermarkets and grocery stores",
        "type": CategoryType.shopping,
        "icon": "🛒",
        "color": "#4CAF50",
    },
    {
        "name": "Fuel",
        "description": "Discounts at petrol and service stations",
        "type": CategoryType.transport,
        "icon": "⛽",
        "color": "#FF9800",
    },
    {
        "name": "Entertainment",
        "description": "Discounts at cinemas, restaurants and venues",
        "type": CategoryType.entertainment,
        "icon": "🎬",
        "color": "#9C27B0",
    },
    {
        "name": "Travel",
        "description": "Discounts on hotels, flights and trips",
        "type": CategoryType.travel,
        "icon": "✈️",
        "color": "#2196F3",
    },
    {
        "name": "Technology",
        "description": "Discounts on electronics and gadgets",
        "type": CategoryType.technology,
        "icon": "💻",
        "color": "#607D8B",
    },
)

BANKS = (
    {
        "name": "Banco Santander",
        "code": "SAN",
        "country": "Spain",
        "email": "contacto@santander.es",
        "phone": "+34 900 100 000",
        "website": "https://www.santander.es",
        "logo": "https://example.com/santander-logo.png",
        "is_active": True,
    },
    {
        "name": "BBVA",
        "code": "BBVA",
        "country": "Spain",
        "email": "info@bbva.com",
        "phone": "+34 900 225 225",
        "website": "https://www.bbva.es",
        "logo": "https://example.com/bbva-logo.png",
        "is_active": True,
    },
    {
        "name": "CaixaBank",
        "code": "CAIXA",
        "country": "Spain",
        "email": "atencion@caixabank.es",
        "phone": "+34 900 224 466",
        "website": "https://www.caixabank.es",
        "logo": "https://example.com/caixabank-logo.png",
        "is_active": True,
    },
    {
        "name": "Bankia",
        "code": "BANKIA",
        "country": "Spain",
        "email": "info@bankia.es",
        "phone": "+34 900 224 466",
        "website": "https://www.bankia.es",
        "logo": "https://example.com/bankia-logo.png",
        "is_active": False,
    },
)

BRANDS = (
    {"name": "Visa", "website": "https://www.visa.com"},
    {"name": "Mastercard", "website": "https://www.mastercard.com"},
)

CARDS = (
    {
        "name": "Santander 123",
        "card_number": "1234567890123456",
        "credit_limit": Decimal("5000"),
        "annual_fee": Decimal("0"),
        "interest_rate": 18.5,
        "rewards": "2% at supermarkets, 1% everywhere else",
        "benefits": ["Travel insurance", "Purchase protection"],
        "is_active": True,
    },
    {
        "name": "BBVA Blue",
        "card_number": "2345678901234567",
        "credit_limit": Decimal("8000"),
        "annual_fee": Decimal("50"),
        "interest_rate": 16.9,
        "rewards": "3% on fuel, 1% everywhere else",
        "benefits": ["Car insurance", "Roadside assistance"],
        "is_active": True,
    },
    {
        "name": "CaixaBank Rewards",
        "card_number": "3456789012345678",
        "credit_limit": Decimal("12000"),
        "annual_fee": Decimal("100"),
        "interest_rate": 15.5,
        "rewards": "4% on entertainment, 2% at restaurants",
        "benefits": ["VIP tickets", "Priority bookings"],
        "is_active": True,
    },
    {
        "name": "Bankia Travel",
        "card_number": "4567890123456789",
        "credit_limit": Decimal("15000"),
        "annual_fee": Decimal("150"),
        "interest_rate": 14.9,
        "rewards": "5% on travel, 3% at hotels",
        "benefits": ["Premium travel insurance", "Lounge access"],
        "is_active": False,
    },
)


async def seed_catalog(*, clear: bool = True) -> dict[str, int]:
    """Insert the sample catalogue and return the number of rows per collection.

    With ``clear`` the existing banks, brands, cards and categories are removed
    first.
    """
    async with in_transaction():
        if clear:
            await Card.all().delete()
            await Bank.all().delete()
            await Brand.all().delete()
            await Category.all().delete()
            logger.info("Cleared existing catalogue data")

        categories = [await Category.create(**data) for data in CATEGORIES]
        banks = [await Bank.create(**data) for data in BANKS]
        brands = [await Brand.create(**data) for data in BRANDS]
        cards = [
            await Card.create(
                **data,
                bank=banks[index],
                brand=brands[index % len(brands)],
                category=categories[index],
                type=CardType.credit,
            )
            for index, data in enumerate(CARDS)
        ]
    logger.info(
        "Seeded %s categories, %s banks, %s brands, %s cards",
        len(categories), len(banks), len(brands), len(cards),
    )
    return {
        "categories": len(categories),
        "banks": len(banks),
        "brands": len(brands),
        "cards": len(cards),
    }


__all__ = ["seed_catalog"]


# The End
