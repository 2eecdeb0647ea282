"""
Starter content for a fresh database.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from . import models
from .services.settings import get_settings

logger = logging.getLogger(__name__)

STARTER_CONTENT: dict[type[models.Model], list[dict[str, Any]]] = {
    models.Hero: [
        {
            "key": "solar-rooftop",
            "num": "01",
            "rail_title": "Rooftop Solar",
            "subtitle": "Clean power for every home",
            "title_lines": ["Power your home", "with the sun"],
            "body": "Grid-tied rooftop systems designed and installed end to end.",
            "img": "/images/hero-rooftop.jpg",
            "icon": "<svg></svg>",
            "order": 0,
        },
        {
            "key": "solar-commercial",
            "num": "02",
            "rail_title": "Commercial Solar",
            "subtitle": "Lower operating costs",
            "title_lines": ["Solar at scale", "for your business"],
            "body": "Megawatt-class installations with remote monitoring.",
            "img": "/images/hero-commercial.jpg",
            "icon": "<svg></svg>",
            "order": 1,
        },
    ],
    models.EnergySolution: [
        {
            "title": "Residential Solar",
            "description": "Rooftop systems sized to your consumption.",
            "order": 0,
            "is_featured": True,
        },
        {
            "title": "Battery Storage",
            "description": "Keep the lights on after sunset.",
            "order": 1,
            "is_featured": True,
        },
    ],
    models.Product: [
        {
            "title": "Mono PERC Panel 540W",
            "new_price": 189.0,
            "old_price": 219.0,
            "status": ["Sale"],
            "image": "/images/products/panel-540.jpg",
            "category": "solar-panels",
            "description": "High efficiency monocrystalline module.",
            "stock": 120,
            "is_featured": True,
        },
        {
            "title": "Hybrid Inverter 5kW",
            "new_price": 899.0,
            "image": "/images/products/inverter-5kw.jpg",
            "category": "inverters",
            "description": "Hybrid inverter with battery support.",
            "stock": 15,
            "is_featured": True,
        },
    ],
    models.Faq: [
        {
            "question": "How long do solar panels last?",
            "answer": "Most panels carry a 25 year performance warranty.",
            "order": 0,
        },
        {
            "question": "Do I need batteries?",
            "answer": "Grid-tied systems work without them; storage adds backup.",
            "order": 1,
        },
    ],
    models.CoreValue: [
        {"title": "Integrity", "description": "We do what we say.", "order": 0},
        {"title": "Sustainability", "description": "Every watt counts.", "order": 1},
    ],
    models.Menu: [
        {"name": "Main Menu", "location": "header"},
        {"name": "Footer Menu", "location": "footer"},
    ],
    models.AboutHero: [{}],
    models.BrandVision: [{}],
    models.WorkEnvironment: [{}],
    models.JoinTeamCta: [{}],
}


async def seed_content(db: AsyncSession) -> dict[str, int]:
    """
    Insert the starter records of every empty table.

    Tables that already hold rows are left alone, so the seed can be rerun.
    Returns the number of rows created per table.
    """
    created: dict[str, int] = {}
    for model, rows in STARTER_CONTENT.items():
        if await model.objects.count(db):
            logger.info("Skipping %s, table not empty", model.__tablename__)
            continue
        for row in rows:
            await model.objects.create(db, **row)
        created[model.__tablename__] = len(rows)
        logger.info("Seeded %d %s", len(rows), model.__tablename__)

    await get_settings(db)
    return created
