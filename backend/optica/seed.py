"""Load the canonical prescription range ladder and a sample lens catalog.

Usage:
  python -m optica.seed

Rows are upserted by ``code`` (ranges) and ``sku`` (products), so running it
twice leaves a single copy of everything.
"""

import logging

from sqlalchemy.orm import Session

from .core.config import load_settings
from .core.observability import setup_logging
from .database import Database
from .models import LensProduct, PrescriptionRange

logger = logging.getLogger(__name__)

# (code, description, min-eye sphere, min-eye cylinder, max-eye sphere, max-eye cylinder)
PRESCRIPTION_RANGES = [
    ("42-42", "Ambos ojos hasta 4 esf / 2 cyl", 4.0, 2.0, 4.0, 2.0),
    ("42-44", "Un ojo hasta 4/2, otro ojo hasta 4/4 (orden independiente)", 4.0, 2.0, 4.0, 4.0),
    ("ODI-44", "Ambos ojos hasta 4 esf / 4 cyl", 4.0, 4.0, 4.0, 4.0),
    ("44-46", "Un ojo hasta 4/4, otro ojo hasta 4/6 (orden independiente)", 4.0, 4.0, 4.0, 6.0),
    ("ODI-46", "Ambos ojos hasta 4/6", 4.0, 6.0, 4.0, 6.0),
    ("44-66", "Un ojo hasta 4/4, otro ojo hasta 6/6 (orden independiente)", 4.0, 4.0, 6.0, 6.0),
    ("ODI-62", "Ambos ojos hasta 6/2", 6.0, 2.0, 6.0, 2.0),
    ("62-42", "Un ojo hasta 6/2, otro ojo hasta 4/2 (orden independiente)", 4.0, 2.0, 6.0, 2.0),
    ("ODI-66", "Ambos ojos hasta 6/6", 6.0, 6.0, 6.0, 6.0),
]

_NO_FEATURES = {
    "has_anti_reflective": False,
    "has_blue_filter": False,
    "is_photochromic": False,
    "has_uv_protection": True,
    "is_polarized": False,
    "is_mirrored": False,
}


def _product(range_code: str, sku: str, name: str, material: str, tipo: str,
             frame_type: str, prices: tuple, delivery_days: int, observations: str,
             **features) -> dict:
    cost_price, base_price, final_price = prices
    return {
        "range_code": range_code,
        "sku": sku,
        "name": name,
        "material": material,
        "tipo": tipo,
        "frame_type": frame_type,
        **_NO_FEATURES,
        **features,
        "cost_price": cost_price,
        "base_price": base_price,
        "final_price": final_price,
        "delivery_days": delivery_days,
        "observations": observations,
        "available": True,
    }


SAMPLE_PRODUCTS = [
    _product("42-42", "ORG-AR-NORMAL-42-42-CERRADO", "ORGANICO ANTIREFLEJO NORMAL",
             "organico", "monofocal", "cerrado", (750, 2000, 39900), 3,
             "Se entrega en 3 días hábiles", has_anti_reflective=True),
    _product("42-42", "ORG-AR-AZUL-42-42-CERRADO", "ORGANICO ANTIREFLEJO AZUL",
             "organico", "monofocal", "cerrado", (1700, 3500, 54900), 3,
             "Se entrega en 3 días hábiles", has_anti_reflective=True, has_blue_filter=True),
    _product("42-42", "ORG-FOTOCROM-GRIS-42-42-CERRADO",
             "ORGANICO FOTOCROMÁTICO GRIS CON UV Y FILTRO AZUL",
             "organico", "monofocal", "cerrado", (4500, 7500, 84900), 3,
             "Se entrega en 3 días hábiles. Fotocromático categoría 3",
             has_blue_filter=True, is_photochromic=True),
    _product("42-42", "POLICAR-AR-AZUL-42-42-CERRADO", "POLICARBONATO ANTIREFLEJO AZUL",
             "policarbonato", "monofocal", "cerrado", (2200, 4500, 64900), 3,
             "Material ultra resistente. Se entrega en 3 días hábiles",
             has_anti_reflective=True, has_blue_filter=True),
    _product("42-42", "ORG-AR-NORMAL-42-42-SEMICERRADO", "ORGANICO ANTIREFLEJO NORMAL",
             "organico", "monofocal", "semicerrado", (850, 2200, 42900), 4,
             "Para marcos semicerrados. Se entrega en 4 días hábiles",
             has_anti_reflective=True),
    _product("ODI-44", "ORG-AR-NORMAL-ODI-44-CERRADO", "ORGANICO ANTIREFLEJO NORMAL",
             "organico", "monofocal", "cerrado", (1200, 2800, 49900), 5,
             "Para recetas más complejas. Se entrega en 5 días hábiles",
             has_anti_reflective=True),
    _product("ODI-44", "ORG-AR-AZUL-ODI-44-CERRADO", "ORGANICO ANTIREFLEJO AZUL",
             "organico", "monofocal", "cerrado", (2000, 4200, 64900), 5,
             "Para recetas más complejas. Se entrega en 5 días hábiles",
             has_anti_reflective=True, has_blue_filter=True),
    _product("ODI-44", "ADELGAZ-AR-AZUL-ODI-44-CERRADO", "ADELGAZADO ANTIREFLEJO AZUL",
             "adelgazado", "monofocal", "cerrado", (3500, 6000, 89900), 7,
             "Cristal adelgazado, más estético. Se entrega en 7 días hábiles",
             has_anti_reflective=True, has_blue_filter=True),
    _product("42-42", "ORG-BIFOCAL-AR-42-42-CERRADO", "ORGANICO BIFOCAL ANTIREFLEJO",
             "organico", "bifocal", "cerrado", (1500, 3500, 59900), 5,
             "Bifocal con línea visible. Se entrega en 5 días hábiles",
             has_anti_reflective=True),
    _product("42-42", "ORG-MULTIFOCAL-AR-AZUL-42-42-CERRADO",
             "ORGANICO MULTIFOCAL ANTIREFLEJO AZUL",
             "organico", "multifocal", "cerrado", (5500, 9500, 129900), 7,
             "Progresivo de última generación. Se entrega en 7 días hábiles",
             has_anti_reflective=True, has_blue_filter=True),
]


def seed_prescription_ranges(db: Session) -> dict[str, PrescriptionRange]:
    """Upsert the range ladder and return the rows keyed by code."""
    existing = {r.code: r for r in db.query(PrescriptionRange).all()}
    for code, description, min_sph, min_cyl, max_sph, max_cyl in PRESCRIPTION_RANGES:
        row = existing.get(code)
        if row is None:
            row = PrescriptionRange(code=code)
            db.add(row)
            existing[code] = row
        row.description = description
        row.min_eye_max_sphere = min_sph
        row.min_eye_max_cylinder = min_cyl
        row.max_eye_max_sphere = max_sph
        row.max_eye_max_cylinder = max_cyl
    db.flush()
    return existing


def seed_lens_products(db: Session, ranges: dict[str, PrescriptionRange]) -> int:
    existing = {p.sku: p for p in db.query(LensProduct).all()}
    for sample in SAMPLE_PRODUCTS:
        values = dict(sample)
        values["prescription_range_id"] = ranges[values.pop("range_code")].id
        row = existing.get(values["sku"])
        if row is None:
            db.add(LensProduct(**values))
        else:
            for field, value in values.items():
                setattr(row, field, value)
    return len(SAMPLE_PRODUCTS)


def seed_database(database: Database) -> None:
    """Create tables if needed and upsert every canonical row in one transaction."""
    database.create_all()
    with database.session() as db:
        try:
            ranges = seed_prescription_ranges(db)
            products = seed_lens_products(db, ranges)
            db.commit()
        except Exception:
            db.rollback()
            raise
    logger.info(
        "Seed completed: %s prescription ranges, %s lens products",
        len(PRESCRIPTION_RANGES),
        products,
    )


def main() -> None:
    settings = load_settings()
    setup_logging(settings)
    database = Database(settings.SQLALCHEMY_DATABASE_URL)
    try:
        seed_database(database)
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
