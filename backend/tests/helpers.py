from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from optica.main import app
from optica.database import Base, create_db_engine
from optica.api.dependencies import get_db
from optica.models import LensProduct, PrescriptionRange, User  # noqa: F401


def setup_app():
    """Point the app at a fresh in-memory database and return (client, Session)."""
    engine = create_db_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def override_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_db
    return TestClient(app), Session


def add_range(db, code, bounds, description=None):
    min_sph, min_cyl, max_sph, max_cyl = bounds
    row = PrescriptionRange(
        code=code,
        description=description or f"Rango {code}",
        min_eye_max_sphere=min_sph,
        min_eye_max_cylinder=min_cyl,
        max_eye_max_sphere=max_sph,
        max_eye_max_cylinder=max_cyl,
    )
    db.add(row)
    db.commit()
    return row


def add_product(db, prescription_range_id, sku, final_price, **overrides):
    values = {
        "sku": sku,
        "name": f"Lente {sku}",
        "material": "organico",
        "tipo": "monofocal",
        "frame_type": "cerrado",
        "has_anti_reflective": True,
        "has_blue_filter": False,
        "is_photochromic": False,
        "has_uv_protection": True,
        "is_polarized": False,
        "is_mirrored": False,
        "cost_price": final_price / 10,
        "base_price": final_price / 2,
        "final_price": final_price,
        "delivery_days": 3,
        "observations": None,
        "available": True,
        "prescription_range_id": prescription_range_id,
    }
    values.update(overrides)
    row = LensProduct(**values)
    db.add(row)
    db.commit()
    return row
