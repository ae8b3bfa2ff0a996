from sqlalchemy.orm import sessionmaker

from optica.database import Base, create_db_engine
from optica.domain import FrameType, LensMaterial
from optica.models import LensProduct
from helpers import add_product, add_range


def test_enum_columns_accept_loose_spelling():
    engine = create_db_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    db = sessionmaker(bind=engine, expire_on_commit=False)()
    r = add_range(db, "42-42", (4, 2, 4, 2))
    product = add_product(db, r.id, "LOOSE", 100, frame_type="Al Aire", material="MINERAL")
    db.expire_all()

    stored = db.get(LensProduct, product.id)

    assert stored.frame_type is FrameType.AL_AIRE
    assert stored.material is LensMaterial.MINERAL
    raw = db.connection().exec_driver_sql(
        "SELECT frame_type, material FROM lens_products"
    ).one()
    assert tuple(raw) == ("al_aire", "mineral")
    db.close()
